from django.conf import settings
from django.db import models
import uuid

from apps.branches.branches import Branch, DEFAULT_BRANCH


class DailyReportValidation(models.Model):
    """Marks a day's sales report at a branch as checked by a super admin."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    date = models.DateField()
    branch = models.CharField(max_length=20, choices=Branch.choices, default=DEFAULT_BRANCH)
    is_validated = models.BooleanField(default=False)
    validated_at = models.DateTimeField(null=True, blank=True)
    validated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='validated_reports',
    )
    validated_by_name = models.CharField(max_length=100, blank=True, default='')
    validated_by_email = models.CharField(max_length=255, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'daily_report_validations'
        ordering = ['-date']
        unique_together = [['date', 'branch']]

    def __str__(self):
        state = 'validated' if self.is_validated else 'pending'
        return f"{self.date} {self.branch} ({state})"
