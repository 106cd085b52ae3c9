from django.conf import settings
from django.db import models
from decimal import Decimal
import uuid

from apps.branches.branches import Branch, DEFAULT_BRANCH

SECONDS_PER_HOUR = Decimal(3600)


class DTRStatus(models.TextChoices):
    CLOCKED_IN = 'clocked_in', 'Clocked in'
    CLOCKED_OUT = 'clocked_out', 'Clocked out'


def hours_between(start, end) -> Decimal:
    """Hours between two datetimes, rounded to 2 decimals."""
    seconds = Decimal(str((end - start).total_seconds()))
    return (seconds / SECONDS_PER_HOUR).quantize(Decimal('0.01'))


class DTRRecord(models.Model):
    """One shift of a crew member: a clock-in and (once finished) a clock-out."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='dtr_records',
    )
    branch = models.CharField(max_length=20, choices=Branch.choices, default=DEFAULT_BRANCH)
    clock_in_time = models.DateTimeField()
    clock_out_time = models.DateTimeField(null=True, blank=True)
    date = models.DateField(help_text="Local date of the clock-in")
    status = models.CharField(max_length=20, choices=DTRStatus.choices, default=DTRStatus.CLOCKED_IN)
    notes = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'dtr_records'
        ordering = ['-clock_in_time']
        indexes = [
            models.Index(fields=['user', 'date'], name='dtr_user_date_idx'),
            models.Index(fields=['user', 'branch', 'status'], name='dtr_user_status_idx'),
            models.Index(fields=['branch', 'clock_in_time'], name='dtr_branch_clock_in_idx'),
        ]

    def __str__(self):
        return f"{self.user} {self.date} ({self.status})"

    @property
    def is_clocked_in(self) -> bool:
        return self.status == DTRStatus.CLOCKED_IN and self.clock_out_time is None

    @property
    def work_duration(self):
        """Worked hours, or None while still clocked in."""
        if self.clock_out_time is None:
            return None
        return hours_between(self.clock_in_time, self.clock_out_time)
