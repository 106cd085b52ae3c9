"""
Totals for the withdrawals/purchases screen.

Both functions are pure: they read ``Expense`` records and never modify
them. A record charged to ``all`` is shared by the two payers: john gets
half rounded down to the centavo and elwin the rest, the same rule the
server totals use, so ``john + elwin == total`` always holds.
"""

from decimal import Decimal, ROUND_DOWN

CENT = Decimal('0.01')
PAYERS = ('john', 'elwin')
SHARED = 'all'


def _half(amount):
    return (amount / 2).quantize(CENT, rounding=ROUND_DOWN)


def compute_expense_totals(records):
    """
    Fold expense records into screen totals.

    Returns:
        dict with total, total_withdrawals, total_purchases, john, elwin, count
    """
    totals = {
        'total': Decimal('0.00'),
        'total_withdrawals': Decimal('0.00'),
        'total_purchases': Decimal('0.00'),
        'john': Decimal('0.00'),
        'elwin': Decimal('0.00'),
        'count': 0,
    }

    for record in records:
        amount = record.amount
        totals['total'] += amount
        totals['count'] += 1

        if record.type == 'purchase':
            totals['total_purchases'] += amount
        else:
            totals['total_withdrawals'] += amount

        if record.charged_to == SHARED:
            john_share = _half(amount)
            totals['john'] += john_share
            totals['elwin'] += amount - john_share
        elif record.charged_to in PAYERS:
            totals[record.charged_to] += amount

    return totals


def filter_expenses(records, type=None, charged_to=None, search=None):
    """Filter like the screen does; a payer filter also keeps shared records."""
    result = []
    needle = search.strip().lower() if search else ''

    for record in records:
        if type and record.type != type:
            continue
        if charged_to:
            if charged_to == SHARED and record.charged_to != SHARED:
                continue
            if charged_to != SHARED and record.charged_to not in (charged_to, SHARED):
                continue
        if needle and needle not in record.description.lower() and needle not in record.created_by_name.lower():
            continue
        result.append(record)

    return result
