import logging
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from apps.branches.branches import resolve_branch
from .exceptions import SummaryMismatchError
from .models import DailyReportValidation

logger = logging.getLogger(__name__)


def get_validation(*, date, branch=None) -> DailyReportValidation:
    """Return the validation record for a day, unsaved when the day was never validated."""
    branch = resolve_branch(branch)
    return (
        DailyReportValidation.objects.filter(date=date, branch=branch).first()
        or DailyReportValidation(date=date, branch=branch)
    )


def items_total(items) -> Decimal:
    return sum((item['price'] * item['quantity'] for item in items), Decimal('0.00'))


@transaction.atomic
def validate_daily_summary(*, user, date, items, cash_amount: Decimal, gcash_amount: Decimal,
                           branch=None) -> DailyReportValidation:
    """
    Accept a day's counted takings and mark the report as validated.

    Raises:
        SummaryMismatchError: If cash + GCash differs from the items total
    """
    expected = items_total(items)
    received = cash_amount + gcash_amount
    if received != expected:
        raise SummaryMismatchError(
            f'Cash (₱{cash_amount}) + GCash (₱{gcash_amount}) = ₱{received} '
            f'does not match the items total of ₱{expected}'
        )

    validation, _ = DailyReportValidation.objects.select_for_update().update_or_create(
        date=date,
        branch=resolve_branch(branch),
        defaults={
            'is_validated': True,
            'validated_at': timezone.now(),
            'validated_by': user,
            'validated_by_name': user.get_display_name(),
            'validated_by_email': user.email,
        },
    )
    logger.info("Daily report %s at %s validated by %s", date, validation.branch, user.email)
    return validation
