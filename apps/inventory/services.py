import logging
from uuid import UUID

from django.db import transaction
from django.db.models import Count, F, Q

from apps.branches.branches import resolve_branch
from .exceptions import DuplicateInventoryItemError, InventoryItemNotFoundError
from .models import InventoryItem, StockStatus

logger = logging.getLogger(__name__)

STOCK_STATUS_FILTERS = {
    StockStatus.OUT: Q(quantity=0),
    StockStatus.LOW: Q(quantity__gt=0, quantity__lte=F('low_stock_threshold')),
    StockStatus.GOOD: Q(quantity__gt=F('low_stock_threshold')),
}


def filter_items(*, category=None, stock_status=None, branch=None):
    queryset = InventoryItem.objects.all()
    if branch:
        queryset = queryset.filter(branch=branch)
    if category:
        queryset = queryset.filter(category=category)
    if stock_status:
        queryset = queryset.filter(STOCK_STATUS_FILTERS[stock_status])
    return queryset


def inventory_stats(*, branch=None) -> dict:
    """
    Stock counts for a branch (or every branch).

    Returns:
        dict with total_items, in_stock, low_stock, out_of_stock
    """
    return filter_items(branch=branch).aggregate(
        total_items=Count('id'),
        in_stock=Count('id', filter=Q(quantity__gt=0)),
        low_stock=Count('id', filter=STOCK_STATUS_FILTERS[StockStatus.LOW]),
        out_of_stock=Count('id', filter=STOCK_STATUS_FILTERS[StockStatus.OUT]),
    )


def get_item(*, item_id: UUID) -> InventoryItem:
    try:
        return InventoryItem.objects.get(id=item_id)
    except InventoryItem.DoesNotExist:
        raise InventoryItemNotFoundError('Inventory item not found')


def _check_unique_name(name, branch, exclude_id=None):
    queryset = InventoryItem.objects.filter(branch=branch, name__iexact=name.strip())
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateInventoryItemError('An item with this name already exists')


def _stamp(item, user):
    if user is not None:
        item.last_updated_by = user.get_display_name()
        item.last_updated_by_email = user.email


@transaction.atomic
def create_item(*, user=None, name: str, branch=None, **fields) -> InventoryItem:
    """
    Create an inventory item.

    Raises:
        DuplicateInventoryItemError: If the branch already stocks an item with this name
    """
    branch = resolve_branch(branch)
    _check_unique_name(name, branch)

    item = InventoryItem(name=name, branch=branch, **fields)
    _stamp(item, user)
    item.save()
    logger.info("Created inventory item %s at %s", item.name, branch)
    return item


@transaction.atomic
def update_item(*, item_id: UUID, user=None, **fields) -> InventoryItem:
    try:
        item = InventoryItem.objects.select_for_update().get(id=item_id)
    except InventoryItem.DoesNotExist:
        raise InventoryItemNotFoundError('Inventory item not found')

    name = fields.get('name')
    if name is not None and name.strip() != item.name:
        _check_unique_name(name, fields.get('branch', item.branch), exclude_id=item.id)

    for attr, value in fields.items():
        setattr(item, attr, value)
    _stamp(item, user)
    item.save()
    return item


@transaction.atomic
def adjust_quantity(*, item_id: UUID, user=None, delta: int = None, new_quantity: int = None) -> InventoryItem:
    """
    Add ``delta`` to the stock, or set it to ``new_quantity``.

    The quantity is clamped at zero.
    """
    try:
        item = InventoryItem.objects.select_for_update().get(id=item_id)
    except InventoryItem.DoesNotExist:
        raise InventoryItemNotFoundError('Inventory item not found')

    previous = item.quantity
    if new_quantity is not None:
        item.quantity = max(0, new_quantity)
    else:
        item.quantity = max(0, item.quantity + (delta or 0))
    _stamp(item, user)
    item.save()

    logger.info("Inventory %s: %s -> %s %s", item.name, previous, item.quantity, item.unit)
    return item


@transaction.atomic
def delete_item(*, item_id: UUID) -> None:
    deleted, _ = InventoryItem.objects.filter(id=item_id).delete()
    if not deleted:
        raise InventoryItemNotFoundError('Inventory item not found')
