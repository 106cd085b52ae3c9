"""
Reconciliation of local state with server results.

Every function here takes the current local state plus what the server
said and returns the new state; inputs are never modified.
"""

import logging
from dataclasses import dataclass

from .models import Order

logger = logging.getLogger(__name__)

ORDER_CREATED = 'order:created'
ORDER_UPDATED = 'order:updated'
ORDER_DELETED = 'order:deleted'


@dataclass(frozen=True)
class ReorderOutcome:
    """
    Result of a batched reorder request.

    ``photos`` is the server's list: the response on success, a fresh
    fetch on failure.
    """

    succeeded: bool
    photos: tuple = ()


def reconcile_reorder(optimistic, outcome):
    """Keep the optimistic order when the server accepted it, otherwise fall back to the canonical list."""
    if outcome.succeeded:
        return list(optimistic)
    return sorted(outcome.photos, key=lambda photo: photo.display_order)


def _is_newer(incoming, cached):
    return cached is None or incoming.version > cached.version


def reconcile_order_event(orders, event, data, branch=None):
    """
    Apply one realtime event to a cached order list.

    Events for another branch and events older than the cached copy are
    ignored. Deletions carry no branch, so they only remove orders that
    are in the list already.
    """
    if event == ORDER_DELETED:
        order_id = str(data.get('id'))
        return [order for order in orders if order.id != order_id]

    if event not in (ORDER_CREATED, ORDER_UPDATED):
        return list(orders)

    return upsert_order(orders, Order.from_wire(data), branch=branch, event=event)


def upsert_order(orders, incoming, branch=None, event=ORDER_UPDATED):
    """Insert or replace one order unless it belongs to another branch or is older than the cached copy."""
    if branch and incoming.branch != branch:
        return list(orders)

    cached = next((order for order in orders if order.id == incoming.id), None)
    if not _is_newer(incoming, cached):
        logger.debug('Ignoring %s for order %s: version %s <= %s', event, incoming.id, incoming.version, cached.version)
        return list(orders)

    if cached is None:
        return [incoming] + list(orders)
    return [incoming if order.id == incoming.id else order for order in orders]


def merge_fetched_orders(cached, fetched, deleted=(), pushed=()):
    """
    Merge a fetch result into the cache.

    The fetch decides which orders exist; for each one the copy with the
    higher version wins, so a slow fetch cannot undo a newer push.
    ``deleted`` and ``pushed`` are the ids the realtime feed removed or
    delivered while the fetch was in flight: deleted ids stay gone and
    pushed orders the fetch does not know yet are kept in front.
    """
    deleted = set(deleted)
    by_id = {order.id: order for order in cached}
    merged = []
    for order in fetched:
        if order.id in deleted:
            continue
        current = by_id.get(order.id)
        merged.append(current if current is not None and current.version > order.version else order)

    fetched_ids = {order.id for order in fetched}
    kept = [
        order for order in cached
        if order.id in pushed and order.id not in fetched_ids and order.id not in deleted
    ]
    return kept + merged
