import logging

from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.conf import settings

logger = logging.getLogger(__name__)


class OrderEventsConsumer(AsyncJsonWebsocketConsumer):
    """
    Pushes order lifecycle events to connected clients.

    Outgoing messages: ``{"event": "order:created" | "order:updated" |
    "order:deleted", "data": ...}``. Clients may send ``{"type": "ping"}``
    and receive ``{"event": "pong"}``.
    """

    async def connect(self):
        self.group_name = settings.ORDER_EVENTS_GROUP
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        logger.info('Realtime client connected: %s', self.channel_name)

    async def disconnect(self, code):
        await self.channel_layer.group_discard(self.group_name, self.channel_name)
        logger.info('Realtime client disconnected: %s (code %s)', self.channel_name, code)

    async def receive_json(self, content, **kwargs):
        if isinstance(content, dict) and content.get('type') == 'ping':
            await self.send_json({'event': 'pong'})

    async def order_event(self, message):
        await self.send_json({'event': message['event'], 'data': message['data']})
