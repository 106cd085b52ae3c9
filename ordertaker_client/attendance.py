"""Crew clock-in/clock-out state as seen by the client."""

import logging
from collections import OrderedDict
from decimal import Decimal

from .exceptions import IllegalTransitionError

logger = logging.getLogger(__name__)


class AttendanceTracker:
    """
    Mirror of the user's clock state at one branch.

    Local state changes only after the server accepted the action.
    """

    def __init__(self, api, branch):
        self.api = api
        self.branch = branch
        self.is_clocked_in = False
        self.active_record = None

    def refresh(self):
        self.is_clocked_in, self.active_record = self.api.dtr_status(branch=self.branch)
        return self.is_clocked_in

    def clock_in(self, notes=''):
        if self.is_clocked_in:
            raise IllegalTransitionError('Already clocked in. Please clock out first.')

        record = self.api.clock_in(branch=self.branch, notes=notes)
        self.is_clocked_in, self.active_record = True, record
        logger.info('Clocked in at %s (record %s)', self.branch, record.id)
        return record

    def clock_out(self, notes=''):
        if not self.is_clocked_in:
            raise IllegalTransitionError('No active clock-in found. Please clock in first.')

        record = self.api.clock_out(branch=self.branch, notes=notes)
        self.is_clocked_in, self.active_record = False, None
        logger.info('Clocked out at %s after %s h', self.branch, record.work_duration)
        return record


def summarize_by_month(records):
    """
    Bucket records by the (year, month) of their date.

    Returns:
        OrderedDict keyed by (year, month), newest first, of
        {'records', 'days', 'total_hours'}; open shifts add no hours.
    """
    buckets = {}
    for record in records:
        year, month = int(record.date[:4]), int(record.date[5:7])
        buckets.setdefault((year, month), []).append(record)

    summary = OrderedDict()
    for key in sorted(buckets, reverse=True):
        month_records = buckets[key]
        summary[key] = {
            'records': month_records,
            'days': len({record.date for record in month_records}),
            'total_hours': sum(
                (record.work_duration for record in month_records if record.work_duration is not None),
                Decimal('0.00'),
            ),
        }
    return summary
