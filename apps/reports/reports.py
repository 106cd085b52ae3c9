"""
Sales reports.

Read-only aggregations over paid orders, withdrawals and purchases that
power the admin panel's daily, monthly and per-owner reports.

Classes:
    SalesReports: Static methods for each report.

Sales are dated by the day the order was placed (local time), including
items appended to it later. Only collected money counts: main items of
paid orders and items of paid appended orders.

Example:
    Today's takings at a branch::

        from apps.reports.reports import SalesReports

        report = SalesReports.daily_sales(date.today(), branch='baan')
        print(f"Cash ₱{report['cash']}, GCash ₱{report['gcash']}, net ₱{report['net']}")
"""

from calendar import monthrange
from datetime import date as date_cls
from decimal import Decimal

from django.db.models import DecimalField, F, Q, Sum
from django.db.models.functions import Coalesce, TruncDate

from apps.menu.models import Owner
from apps.menu.services import owners_by_item_name
from apps.orders.models import AppendedOrder, Order, PaymentMethod
from apps.orders.services import LINE_TOTAL, paid_items
from apps.withdrawals.models import Withdrawal
from apps.withdrawals.services import filter_withdrawals, split_share, withdrawal_totals

ZERO = Decimal('0.00')
CENT = Decimal('0.01')
MONEY = DecimalField(max_digits=12, decimal_places=2)


def _money(value) -> Decimal:
    return Decimal(value or 0).quantize(CENT)


def _items_total(prefix, condition=None):
    return Coalesce(
        Sum(F(f'{prefix}price') * F(f'{prefix}quantity'), filter=condition, output_field=MONEY),
        ZERO,
        output_field=MONEY,
    )


def _split_evenly(amount: Decimal):
    """Split an amount between two owners; the second takes the odd centavo."""
    first = split_share(amount)
    return first, amount - first


class SalesReports:
    """
    Report queries for the admin panel.

    Methods:
        daily_sales: Payment-method breakdown and net for one day.
        owner_stats: Sales and expenses attributed to each owner.
        monthly_sales: Per-day gross, expenses and net for a month.

    Note:
        All methods return plain dictionaries, with ``branch=None``
        meaning every branch.
    """

    @staticmethod
    def _payables(date_from, date_to, branch=None):
        """Paid orders and paid appended orders placed in the range, with their amount."""
        orders = Order.objects.filter(
            is_paid=True,
            created_at__date__gte=date_from,
            created_at__date__lte=date_to,
        ).annotate(amount=_items_total('items__', Q(items__appended_order__isnull=True)))

        appended = AppendedOrder.objects.filter(
            is_paid=True,
            order__created_at__date__gte=date_from,
            order__created_at__date__lte=date_to,
        ).annotate(amount=_items_total('items__'))

        if branch:
            orders = orders.filter(branch=branch)
            appended = appended.filter(order__branch=branch)

        fields = ('payment_method', 'cash_amount', 'gcash_amount', 'amount')
        return list(orders.values(*fields)) + list(appended.values(*fields))

    @staticmethod
    def _expenses(date_from, date_to, branch=None):
        return withdrawal_totals(filter_withdrawals(branch=branch, date_from=date_from, date_to=date_to))

    @staticmethod
    def daily_sales(day, branch=None):
        """
        Takings of one day split by payment method.

        Split payments contribute their cash part to ``cash`` and their
        GCash part to ``gcash``. Payments recorded without a method are
        counted as cash.

        Returns:
            dict: date, branch, cash, gcash, gross_sales, paid_count,
            withdrawals, purchases, total_expenses, net
        """
        cash = gcash = ZERO
        payables = SalesReports._payables(day, day, branch)

        for payable in payables:
            amount = _money(payable['amount'])
            method = payable['payment_method']
            if method == PaymentMethod.SPLIT:
                cash += _money(payable['cash_amount'])
                gcash += _money(payable['gcash_amount'])
            elif method == PaymentMethod.GCASH:
                gcash += amount
            else:
                cash += amount

        expenses = SalesReports._expenses(day, day, branch)
        gross = cash + gcash

        return {
            'date': day,
            'branch': branch,
            'cash': cash,
            'gcash': gcash,
            'gross_sales': gross,
            'paid_count': len(payables),
            'withdrawals': expenses['total_withdrawals'],
            'purchases': expenses['total_purchases'],
            'total_expenses': expenses['total'],
            'net': gross - expenses['total'],
        }

    @staticmethod
    def owner_stats(date_from, date_to, branch=None):
        """
        Sales and expenses attributed to each owner over a date range.

        An item's sales go to the owner of the menu item with the same
        name; items no longer on the menu are split 50/50. Expenses
        charged to ``all`` are split 50/50 as well.

        Returns:
            dict: period_start, period_end, branch, owners (list of
            owner/sales/expenses/net), total_sales, total_expenses, net
        """
        items = paid_items().filter(
            order__created_at__date__gte=date_from,
            order__created_at__date__lte=date_to,
        )
        if branch:
            items = items.filter(order__branch=branch)

        owners = owners_by_item_name()
        sales = {Owner.JOHN: ZERO, Owner.ELWIN: ZERO}

        for row in items.values('name').annotate(total=Sum(LINE_TOTAL)):
            total = _money(row['total'])
            owner = owners.get(row['name'])
            if owner in sales:
                sales[owner] += total
            else:
                john_share, elwin_share = _split_evenly(total)
                sales[Owner.JOHN] += john_share
                sales[Owner.ELWIN] += elwin_share

        expenses = SalesReports._expenses(date_from, date_to, branch)
        owner_rows = [
            {
                'owner': owner.value,
                'sales': sales[owner],
                'expenses': expenses[owner.value],
                'net': sales[owner] - expenses[owner.value],
            }
            for owner in (Owner.JOHN, Owner.ELWIN)
        ]
        total_sales = sales[Owner.JOHN] + sales[Owner.ELWIN]

        return {
            'period_start': date_from,
            'period_end': date_to,
            'branch': branch,
            'owners': owner_rows,
            'total_sales': total_sales,
            'total_expenses': expenses['total'],
            'net': total_sales - expenses['total'],
        }

    @staticmethod
    def monthly_sales(year, month, branch=None):
        """
        Per-day gross sales, expenses and net for a calendar month.

        Returns:
            dict: year, month, branch, days (one entry per calendar day),
            total_gross, total_expenses, net
        """
        first = date_cls(year, month, 1)
        last = date_cls(year, month, monthrange(year, month)[1])

        items = paid_items().filter(
            order__created_at__date__gte=first,
            order__created_at__date__lte=last,
        )
        expenses = Withdrawal.objects.filter(created_at__date__gte=first, created_at__date__lte=last)
        if branch:
            items = items.filter(order__branch=branch)
            expenses = expenses.filter(branch=branch)

        gross_by_day = {
            row['day']: _money(row['total'])
            for row in items.annotate(day=TruncDate('order__created_at'))
                            .values('day')
                            .annotate(total=Sum(LINE_TOTAL))
        }
        expenses_by_day = {
            row['day']: _money(row['total'])
            for row in expenses.annotate(day=TruncDate('created_at'))
                               .values('day')
                               .annotate(total=Sum('amount'))
        }

        days = []
        for day_number in range(1, last.day + 1):
            day = date_cls(year, month, day_number)
            gross = gross_by_day.get(day, ZERO)
            spent = expenses_by_day.get(day, ZERO)
            days.append({'date': day, 'gross': gross, 'expenses': spent, 'net': gross - spent})

        total_gross = sum((d['gross'] for d in days), ZERO)
        total_expenses = sum((d['expenses'] for d in days), ZERO)

        return {
            'year': year,
            'month': month,
            'branch': branch,
            'days': days,
            'total_gross': total_gross,
            'total_expenses': total_expenses,
            'net': total_gross - total_expenses,
        }
