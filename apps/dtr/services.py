"""
Daily time record (DTR) services.

A crew member is either clocked out (no open record at the branch) or
clocked in (exactly one open record). Clock-in and clock-out lock the
member's open records.
"""

import logging
import math
from calendar import monthrange
from datetime import date
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from apps.branches.branches import resolve_branch
from .exceptions import AlreadyClockedInError, NotClockedInError
from .models import DTRRecord, DTRStatus

logger = logging.getLogger(__name__)

NOTES_SEPARATOR = ' | '


def _open_records(user, branch):
    return DTRRecord.objects.filter(user=user, branch=branch, status=DTRStatus.CLOCKED_IN)


def get_status(*, user, branch=None) -> dict:
    """Return ``{'is_clocked_in', 'active_record'}`` for the user at a branch."""
    active = _open_records(user, resolve_branch(branch)).order_by('-clock_in_time').first()
    return {'is_clocked_in': active is not None, 'active_record': active}


@transaction.atomic
def clock_in(*, user, branch=None, notes: str = '') -> DTRRecord:
    """
    Open a shift.

    Raises:
        AlreadyClockedInError: If the user already has an open record at the branch
    """
    branch = resolve_branch(branch)
    if _open_records(user, branch).select_for_update().first() is not None:
        raise AlreadyClockedInError('Already clocked in. Please clock out first.')

    now = timezone.now()
    record = DTRRecord.objects.create(
        user=user,
        branch=branch,
        clock_in_time=now,
        date=timezone.localdate(now),
        notes=notes.strip(),
    )
    logger.info("%s clocked in at %s", user.email, branch)
    return record


@transaction.atomic
def clock_out(*, user, branch=None, notes: str = '') -> DTRRecord:
    """
    Close the open shift and stamp the clock-out time.

    Raises:
        NotClockedInError: If the user has no open record at the branch
    """
    branch = resolve_branch(branch)
    record = _open_records(user, branch).select_for_update().order_by('-clock_in_time').first()
    if record is None:
        raise NotClockedInError('No active clock-in found. Please clock in first.')

    record.clock_out_time = timezone.now()
    record.status = DTRStatus.CLOCKED_OUT
    notes = notes.strip()
    if notes:
        record.notes = f"{record.notes}{NOTES_SEPARATOR}{notes}" if record.notes else notes
    record.save()

    logger.info("%s clocked out at %s after %s h", user.email, branch, record.work_duration)
    return record


def filter_records(*, user=None, branch=None, date_from=None, date_to=None):
    queryset = DTRRecord.objects.select_related('user')
    if user is not None:
        queryset = queryset.filter(user=user)
    if branch:
        queryset = queryset.filter(branch=branch)
    if date_from:
        queryset = queryset.filter(date__gte=date_from)
    if date_to:
        queryset = queryset.filter(date__lte=date_to)
    return queryset.order_by('-clock_in_time')


def total_hours(records) -> Decimal:
    return sum(
        (record.work_duration for record in records if record.work_duration is not None),
        Decimal('0.00'),
    )


def paginate(queryset, *, page: int = 1, limit: int = 50):
    """Slice a queryset and return ``(records, pagination)``."""
    total = queryset.count()
    start = (page - 1) * limit
    records = list(queryset[start:start + limit])
    return records, {
        'total': total,
        'page': page,
        'limit': limit,
        'pages': math.ceil(total / limit) if total else 0,
    }


def monthly_summary(*, user, year: int, month: int) -> dict:
    """
    Records of one calendar month for a user.

    Returns:
        dict with records, total_days (finished shifts), total_hours, year, month
    """
    last_day = monthrange(year, month)[1]
    records = list(filter_records(
        user=user,
        date_from=date(year, month, 1),
        date_to=date(year, month, last_day),
    ))
    return {
        'records': records,
        'total_days': sum(1 for record in records if record.status == DTRStatus.CLOCKED_OUT),
        'total_hours': total_hours(records),
        'year': year,
        'month': month,
    }


def user_stats(records) -> list:
    """Per-user finished days and hours for an admin listing."""
    stats = {}
    for record in records:
        entry = stats.setdefault(record.user_id, {
            'user': record.user,
            'total_days': 0,
            'total_hours': Decimal('0.00'),
        })
        if record.status == DTRStatus.CLOCKED_OUT:
            entry['total_days'] += 1
            entry['total_hours'] += record.work_duration
    return list(stats.values())
