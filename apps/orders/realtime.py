"""
Order event broadcasting.

Every committed order mutation is pushed to the ``ORDER_EVENTS_GROUP``
channel-layer group as ``{"event": name, "data": payload}``. Publishing
runs after the transaction commits and never raises into the request.
"""

import json
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.conf import settings
from django.db import transaction
from rest_framework.renderers import JSONRenderer

logger = logging.getLogger(__name__)

ORDER_CREATED = 'order:created'
ORDER_UPDATED = 'order:updated'
ORDER_DELETED = 'order:deleted'

# Consumer handler name for group messages
MESSAGE_TYPE = 'order.event'


def to_wire(data):
    """Render serializer output into plain JSON types (Decimal -> float, UUID -> str)."""
    return json.loads(JSONRenderer().render(data))


def publish(event, data):
    """Send one event to every connected client. Failures are logged only."""
    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.warning('No channel layer configured; dropping %s', event)
        return

    try:
        async_to_sync(channel_layer.group_send)(
            settings.ORDER_EVENTS_GROUP,
            {'type': MESSAGE_TYPE, 'event': event, 'data': data},
        )
    except Exception:
        logger.exception('Failed to publish %s', event)
        return

    logger.debug('Published %s', event)


def _serialized_order(order_id):
    from .serializers import OrderSerializer
    from .services import get_order

    return to_wire(OrderSerializer(get_order(order_id=order_id)).data)


def order_saved(order, created=False):
    """Publish the order's current state once the transaction commits."""
    event = ORDER_CREATED if created else ORDER_UPDATED
    order_id = order.id

    def _send():
        try:
            payload = _serialized_order(order_id)
        except Exception:
            logger.exception('Could not serialize order %s for %s', order_id, event)
            return
        publish(event, payload)

    transaction.on_commit(_send)


def order_deleted(order_id):
    """Deletion events carry only the id."""
    transaction.on_commit(lambda: publish(ORDER_DELETED, {'id': str(order_id)}))
