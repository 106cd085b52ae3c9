"""
Order services.

All mutations lock the order row, bump ``Order.version`` and publish a
realtime event after commit (see ``realtime``).
"""

import logging
from decimal import Decimal
from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import DecimalField, ExpressionWrapper, F, Q, Sum
from django.utils import timezone

from apps.branches.branches import resolve_branch
from . import realtime
from .exceptions import (
    AppendedOrderNotFoundError,
    DuplicateOrderError,
    ItemNotFoundError,
    OrderNotFoundError,
    PaymentValidationError,
)
from .models import (
    AppendedOrder,
    ItemStatus,
    Order,
    OrderItem,
    OrderNote,
    OrderStats,
    PaymentMethod,
)

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')

LINE_TOTAL = ExpressionWrapper(
    F('price') * F('quantity'),
    output_field=DecimalField(max_digits=12, decimal_places=2),
)

# Timestamp stamped the first time an item reaches each status
STATUS_TIMESTAMPS = {
    ItemStatus.PREPARING: 'preparing_at',
    ItemStatus.READY: 'ready_at',
    ItemStatus.SERVED: 'served_at',
}


def _with_relations(queryset):
    return queryset.prefetch_related('items', 'appended_orders__items', 'notes')


def get_order(*, order_id: UUID) -> Order:
    try:
        return _with_relations(Order.objects.all()).get(id=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError("Order not found")


def _lock_order(order_id):
    try:
        return Order.objects.select_for_update().get(id=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError("Order not found")


def _touch(order, *fields):
    """Bump the version and save; returns the freshly loaded order."""
    order.version += 1
    order.save(update_fields=['version', 'updated_at', *fields])
    realtime.order_saved(order)
    return get_order(order_id=order.id)


def _create_items(order, items, appended_order=None, start=0):
    OrderItem.objects.bulk_create([
        OrderItem(
            order=order,
            appended_order=appended_order,
            item_id=item['id'],
            name=item['name'],
            price=item['price'],
            quantity=item.get('quantity', 1),
            status=item.get('status', ItemStatus.PENDING),
            item_type=item.get('item_type', order.order_type),
            note=item.get('note', ''),
            position=start + index,
        )
        for index, item in enumerate(items)
    ])


def list_orders(*, is_paid=None, status=None, customer_name=None, branch=None,
                date=None, limit=None, sort_by='created_at', sort_order='desc'):
    """Return orders matching the filters, newest first by default."""
    queryset = Order.objects.all()

    if is_paid is not None:
        queryset = queryset.filter(is_paid=is_paid)
    if customer_name:
        queryset = queryset.filter(customer_name__icontains=customer_name)
    if status:
        queryset = queryset.filter(items__status=status).distinct()
    if branch:
        queryset = queryset.filter(branch=branch)
    if date:
        queryset = queryset.filter(created_at__date=date)

    prefix = '' if sort_order == 'asc' else '-'
    queryset = _with_relations(queryset.order_by(f'{prefix}{sort_by}'))

    if limit:
        queryset = queryset[:limit]
    return queryset


def _next_order_number():
    last = Order.objects.select_for_update().order_by('-order_number').first()
    return (last.order_number + 1) if last else 1


@transaction.atomic
def create_order(*, customer_name: str, items: list, order_type: str = 'dine-in',
                 branch: str = None, is_paid: bool = False, created_at=None,
                 id: UUID = None, order_taker_name: str = '', order_taker_email: str = '') -> Order:
    """
    Create an order with its items and the next order number.

    Raises:
        DuplicateOrderError: If an order with the client-supplied id exists
    """
    if id is not None and Order.objects.filter(id=id).exists():
        raise DuplicateOrderError("Order with this ID already exists")

    fields = dict(
        order_number=_next_order_number(),
        customer_name=customer_name.strip(),
        order_type=order_type,
        branch=resolve_branch(branch),
        is_paid=is_paid,
        created_at=created_at or timezone.now(),
        order_taker_name=order_taker_name or '',
        order_taker_email=order_taker_email or '',
    )
    if id is not None:
        fields['id'] = id

    try:
        order = Order.objects.create(**fields)
    except IntegrityError:
        raise DuplicateOrderError("Order number already taken, please retry")

    _create_items(order, items)

    logger.info("Created order #%s for %s at %s", order.order_number, order.customer_name, order.branch)
    realtime.order_saved(order, created=True)
    return get_order(order_id=order.id)


@transaction.atomic
def update_order(*, order_id: UUID, **changes) -> Order:
    """Edit customer name, order type, paid flag or replace the main items."""
    order = _lock_order(order_id)

    items = changes.pop('items', None)
    if items is not None:
        order.items.filter(appended_order__isnull=True).delete()
        _create_items(order, items)

    if 'customer_name' in changes:
        changes['customer_name'] = changes['customer_name'].strip()
    if changes.get('is_paid') is False:
        order.clear_payment()
        changes.update(payment_method=None, cash_amount=None, gcash_amount=None, amount_received=None)

    for attr, value in changes.items():
        setattr(order, attr, value)

    logger.info("Updated order #%s (%s)", order.order_number, ', '.join(sorted(changes)) or 'items')
    return _touch(order, *changes.keys())


@transaction.atomic
def delete_order(*, order_id: UUID) -> None:
    order = _lock_order(order_id)
    number = order.order_number
    order.delete()

    logger.info("Deleted order #%s", number)
    realtime.order_deleted(order_id)


@transaction.atomic
def append_items(*, order_id: UUID, items: list) -> Order:
    """Add a new appended order holding ``items``."""
    order = _lock_order(order_id)

    appended = AppendedOrder.objects.create(order=order)
    _create_items(order, items, appended_order=appended)

    logger.info("Appended %d item(s) to order #%s", len(items), order.order_number)
    return _touch(order)


def _find_item(order, item_id, appended_id=None):
    items = OrderItem.objects.select_for_update().filter(order=order, item_id=item_id)
    if appended_id is not None:
        if not order.appended_orders.filter(id=appended_id).exists():
            raise AppendedOrderNotFoundError("Appended order not found")
        items = items.filter(appended_order_id=appended_id)
    else:
        # Main items first, then appended orders in creation order
        items = items.order_by(
            F('appended_order__created_at').asc(nulls_first=True),
            'position',
        )

    item = items.first()
    if item is None:
        raise ItemNotFoundError("Item not found in order")
    return item


def record_completed_order(*, branch: str, wait_time_ms: int) -> OrderStats:
    """Add one completed order's wait time to the branch statistics."""
    stats, _ = OrderStats.objects.select_for_update().get_or_create(branch=branch)
    stats.total_wait_time_ms = F('total_wait_time_ms') + max(wait_time_ms, 0)
    stats.completed_orders_count = F('completed_orders_count') + 1
    stats.save(update_fields=['total_wait_time_ms', 'completed_orders_count', 'updated_at'])
    stats.refresh_from_db()
    return stats


@transaction.atomic
def update_item_status(*, order_id: UUID, item_id: str, status: str,
                       appended_id: UUID = None, **crew_fields) -> Order:
    """
    Move one item to ``status``.

    The matching timestamp is set the first time the status is reached.
    When every item on the order is served, ``all_items_served_at`` is set
    once and the wait time is recorded in the branch statistics.
    """
    order = _lock_order(order_id)
    item = _find_item(order, item_id, appended_id)
    now = timezone.now()

    item.status = status
    for attr, value in crew_fields.items():
        setattr(item, attr, value)

    stamp = STATUS_TIMESTAMPS.get(status)
    if stamp and getattr(item, stamp) is None:
        setattr(item, stamp, now)
    item.save()

    changed = []
    all_served = not order.items.exclude(status=ItemStatus.SERVED).exists()
    if all_served and order.all_items_served_at is None:
        order.all_items_served_at = now
        changed.append('all_items_served_at')
        wait_ms = int((now - order.created_at).total_seconds() * 1000)
        record_completed_order(branch=order.branch, wait_time_ms=wait_ms)
        logger.info("Order #%s fully served after %d ms", order.order_number, wait_ms)

    return _touch(order, *changed)


def _apply_payment(target, amount_due, *, is_paid=None, payment_method=None,
                   cash_amount=None, gcash_amount=None, amount_received=None):
    """
    Set or toggle payment on an order or appended order.

    Split payments must add up to the amount due exactly; the amount
    received defaults to the amount due and may not be less.
    """
    target.is_paid = (not target.is_paid) if is_paid is None else is_paid

    if not target.is_paid:
        target.clear_payment()
        return

    amount_due = amount_due.quantize(CENT)

    if payment_method == PaymentMethod.SPLIT:
        if cash_amount is None or gcash_amount is None:
            raise PaymentValidationError("Split payment requires both cash and GCash amounts")
        if (cash_amount + gcash_amount).quantize(CENT) != amount_due:
            raise PaymentValidationError(
                f"Cash + GCash must equal the amount due (₱{amount_due})"
            )
    elif payment_method == PaymentMethod.CASH:
        cash_amount, gcash_amount = amount_due, Decimal('0.00')
    elif payment_method == PaymentMethod.GCASH:
        cash_amount, gcash_amount = Decimal('0.00'), amount_due

    if amount_received is None:
        amount_received = amount_due
    elif amount_received < amount_due:
        raise PaymentValidationError(
            f"Amount received cannot be less than the amount due (₱{amount_due})"
        )

    if payment_method:
        target.payment_method = payment_method
        target.cash_amount = cash_amount
        target.gcash_amount = gcash_amount
    target.amount_received = amount_received


PAYMENT_FIELDS = ['is_paid', 'payment_method', 'cash_amount', 'gcash_amount', 'amount_received']


@transaction.atomic
def set_order_payment(*, order_id: UUID, **payment) -> Order:
    order = _lock_order(order_id)
    _apply_payment(order, order.subtotal, **payment)

    logger.info(
        "Order #%s marked %s (%s)",
        order.order_number,
        'paid' if order.is_paid else 'unpaid',
        order.payment_method or '-',
    )
    return _touch(order, *PAYMENT_FIELDS)


@transaction.atomic
def set_appended_payment(*, order_id: UUID, appended_id: UUID, **payment) -> Order:
    order = _lock_order(order_id)
    try:
        appended = order.appended_orders.select_for_update().get(id=appended_id)
    except AppendedOrder.DoesNotExist:
        raise AppendedOrderNotFoundError("Appended order not found")

    _apply_payment(appended, appended.subtotal, **payment)
    appended.save(update_fields=PAYMENT_FIELDS)

    logger.info("Appended order %s on #%s marked %s", appended.id, order.order_number,
                'paid' if appended.is_paid else 'unpaid')
    return _touch(order)


@transaction.atomic
def delete_appended_order(*, order_id: UUID, appended_id: UUID) -> Order:
    order = _lock_order(order_id)
    deleted, _ = order.appended_orders.filter(id=appended_id).delete()
    if not deleted:
        raise AppendedOrderNotFoundError("Appended order not found")

    return _touch(order)


@transaction.atomic
def add_note(*, order_id: UUID, content: str, created_by: str = '', created_by_email: str = '') -> Order:
    order = _lock_order(order_id)
    OrderNote.objects.create(
        order=order,
        content=content,
        created_by=created_by,
        created_by_email=created_by_email,
    )
    return _touch(order)


def paid_items(queryset=None):
    """Items whose payment has been collected (main items of paid orders, items of paid appended orders)."""
    queryset = OrderItem.objects.all() if queryset is None else queryset
    return queryset.filter(
        Q(appended_order__isnull=True, order__is_paid=True) |
        Q(appended_order__is_paid=True)
    )


def order_summary(*, branch: str = None) -> dict:
    orders = Order.objects.all()
    items = OrderItem.objects.all()
    if branch:
        orders = orders.filter(branch=branch)
        items = items.filter(order__branch=branch)

    total = orders.count()
    paid = orders.filter(is_paid=True).count()
    today = orders.filter(created_at__date=timezone.localdate()).count()
    revenue = paid_items(items).aggregate(total=Sum(LINE_TOTAL))['total'] or Decimal('0.00')

    stats = OrderStats.objects.filter(branch=resolve_branch(branch)).first()

    return {
        'total_orders': total,
        'paid_orders': paid,
        'unpaid_orders': total - paid,
        'today_orders': today,
        'total_revenue': revenue,
        'average_wait_time_ms': stats.average_wait_time_ms if stats else 0,
    }


def get_stats(*, branch: str = None) -> OrderStats:
    stats, _ = OrderStats.objects.get_or_create(branch=resolve_branch(branch))
    return stats
