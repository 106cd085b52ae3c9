"""
Withdrawal and purchase services.

Records charged to ``all`` are shared by both owners: john carries half
rounded down to the centavo and elwin the rest, so per-owner totals always
add up to the overall total.
"""

import logging
from datetime import timedelta
from decimal import Decimal, ROUND_DOWN
from uuid import UUID

from django.db import transaction
from django.db.models import Case, DecimalField, F, Q, Sum, Value, When
from django.db.models.functions import Coalesce
from django.utils import timezone

from .exceptions import FutureDateError, WithdrawalNotFoundError
from .models import ChargedTo, Withdrawal, WithdrawalType

logger = logging.getLogger(__name__)

MAX_FUTURE = timedelta(days=1)
ZERO = Decimal('0.00')
CENT = Decimal('0.01')
MONEY = DecimalField(max_digits=12, decimal_places=2)


def filter_withdrawals(*, type=None, charged_to=None, search=None, branch=None,
                       date_from=None, date_to=None, queryset=None):
    """
    Filter withdrawals.

    A ``charged_to`` of john or elwin also matches records charged to all,
    since each owner carries half of those.
    """
    queryset = Withdrawal.objects.all() if queryset is None else queryset

    if type:
        queryset = queryset.filter(type=type)
    if charged_to == ChargedTo.ALL:
        queryset = queryset.filter(charged_to=ChargedTo.ALL)
    elif charged_to:
        queryset = queryset.filter(charged_to__in=[charged_to, ChargedTo.ALL])
    if search:
        queryset = queryset.filter(
            Q(description__icontains=search) | Q(created_by_name__icontains=search)
        )
    if branch:
        queryset = queryset.filter(branch=branch)
    if date_from:
        queryset = queryset.filter(created_at__date__gte=date_from)
    if date_to:
        queryset = queryset.filter(created_at__date__lte=date_to)
    return queryset


def split_share(amount) -> Decimal:
    """John's half of a shared record; the odd centavo stays with elwin."""
    return (amount / 2).quantize(CENT, rounding=ROUND_DOWN)


def _sum(expression):
    return Coalesce(Sum(expression, output_field=MONEY), Value(ZERO), output_field=MONEY)


def withdrawal_totals(queryset=None) -> dict:
    """
    Totals by type and per owner for a queryset of withdrawals.

    Returns:
        dict with total, total_withdrawals, total_purchases, john, elwin, count
    """
    queryset = Withdrawal.objects.all() if queryset is None else queryset

    totals = queryset.aggregate(
        total=_sum('amount'),
        total_withdrawals=_sum(Case(
            When(type=WithdrawalType.WITHDRAWAL, then=F('amount')),
            default=Value(ZERO),
            output_field=MONEY,
        )),
        total_purchases=_sum(Case(
            When(type=WithdrawalType.PURCHASE, then=F('amount')),
            default=Value(ZERO),
            output_field=MONEY,
        )),
        john=_sum(Case(
            When(charged_to=ChargedTo.JOHN, then=F('amount')),
            default=Value(ZERO),
            output_field=MONEY,
        )),
    )
    totals = {key: Decimal(value).quantize(CENT) for key, value in totals.items()}
    shared = queryset.filter(charged_to=ChargedTo.ALL).values_list('amount', flat=True)
    totals['john'] += sum((split_share(amount) for amount in shared), ZERO)
    totals['elwin'] = totals['total'] - totals['john']
    totals['count'] = queryset.count()
    return totals


@transaction.atomic
def create_withdrawal(*, created_by, created_at=None, **fields) -> Withdrawal:
    """
    Record a withdrawal or purchase.

    Raises:
        FutureDateError: If ``created_at`` is more than one day in the future
    """
    now = timezone.now()
    if created_at is not None and created_at > now + MAX_FUTURE:
        raise FutureDateError('Cannot create withdrawals for dates more than 1 day in the future')

    withdrawal = Withdrawal.objects.create(
        created_by=created_by,
        created_by_name=created_by.get_display_name() if created_by else '',
        created_by_email=created_by.email if created_by else '',
        created_at=created_at or now,
        **fields
    )
    logger.info(
        "Recorded %s of ₱%s charged to %s at %s",
        withdrawal.type, withdrawal.amount, withdrawal.charged_to, withdrawal.branch,
    )
    return withdrawal


@transaction.atomic
def update_withdrawal(*, withdrawal_id: UUID, **fields) -> Withdrawal:
    try:
        withdrawal = Withdrawal.objects.select_for_update().get(id=withdrawal_id)
    except Withdrawal.DoesNotExist:
        raise WithdrawalNotFoundError('Withdrawal not found')

    created_at = fields.get('created_at')
    if created_at is not None and created_at > timezone.now() + MAX_FUTURE:
        raise FutureDateError('Cannot move withdrawals more than 1 day into the future')

    for attr, value in fields.items():
        setattr(withdrawal, attr, value)
    withdrawal.save()
    return withdrawal


@transaction.atomic
def delete_withdrawal(*, withdrawal_id: UUID) -> None:
    deleted, _ = Withdrawal.objects.filter(id=withdrawal_id).delete()
    if not deleted:
        raise WithdrawalNotFoundError('Withdrawal not found')
    logger.info("Deleted withdrawal %s", withdrawal_id)
