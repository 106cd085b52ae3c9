from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal
import uuid

from apps.branches.branches import Branch, DEFAULT_BRANCH


class WithdrawalType(models.TextChoices):
    WITHDRAWAL = 'withdrawal', 'Withdrawal'
    PURCHASE = 'purchase', 'Purchase'


class ChargedTo(models.TextChoices):
    JOHN = 'john', 'John'
    ELWIN = 'elwin', 'Elwin'
    ALL = 'all', 'All (split 50/50)'


class ExpensePaymentMethod(models.TextChoices):
    CASH = 'cash', 'Cash'
    GCASH = 'gcash', 'GCash'


class Withdrawal(models.Model):
    """Cash taken out of the till or spent on a purchase, charged to an owner."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    type = models.CharField(max_length=20, choices=WithdrawalType.choices)
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    description = models.CharField(max_length=500)
    charged_to = models.CharField(max_length=10, choices=ChargedTo.choices, default=ChargedTo.JOHN)
    payment_method = models.CharField(
        max_length=10,
        choices=ExpensePaymentMethod.choices,
        null=True,
        blank=True,
    )
    branch = models.CharField(max_length=20, choices=Branch.choices, default=DEFAULT_BRANCH)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='withdrawals',
    )
    created_by_name = models.CharField(max_length=100, blank=True, default='')
    created_by_email = models.CharField(max_length=255, blank=True, default='')
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'withdrawals'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['branch', 'created_at'], name='withdrawals_branch_idx'),
            models.Index(fields=['type', 'created_at'], name='withdrawals_type_idx'),
        ]

    def __str__(self):
        return f"{self.get_type_display()} ₱{self.amount} ({self.charged_to})"
