"""
Realtime order feed.

One ``RealtimeChannel`` per session holds the WebSocket connection.
Messages are ``{"event": name, "data": payload}``. Connection problems are
logged and reflected in ``is_connected``; they never reach the views.
"""

import asyncio
import json
import logging
import threading
from collections import defaultdict

import websockets

from .reconcile import ORDER_CREATED, ORDER_DELETED, ORDER_UPDATED

logger = logging.getLogger(__name__)


class RealtimeChannel:

    def __init__(self, url, reconnect_attempts=5, reconnect_delay=1.0, connect=None):
        self.url = url
        self.reconnect_attempts = reconnect_attempts
        self.reconnect_delay = reconnect_delay
        self.is_connected = False
        self._connect = connect or websockets.connect
        self._handlers = defaultdict(list)
        self._closing = False
        self._socket = None
        self._loop = None
        self._thread = None

    @classmethod
    def from_config(cls, config):
        return cls(config.socket_url, config.reconnect_attempts, config.reconnect_delay)

    def subscribe(self, event, handler):
        """Register ``handler(data)`` for ``event``; returns a callable that unsubscribes it."""
        self._handlers[event].append(handler)
        return lambda: self.unsubscribe(event, handler)

    def unsubscribe(self, event, handler):
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def dispatch(self, raw):
        try:
            message = json.loads(raw)
        except ValueError:
            logger.warning('Discarding non-JSON realtime message: %.80r', raw)
            return

        if not isinstance(message, dict) or 'event' not in message:
            return

        event = message['event']
        for handler in list(self._handlers.get(event, ())):
            try:
                handler(message.get('data') or {})
            except Exception:
                logger.exception('Realtime handler for %s failed', event)

    async def run(self):
        """Receive messages until closed or until the reconnect attempts are used up."""
        failures = 0
        while not self._closing:
            try:
                async with self._connect(self.url) as socket:
                    self._socket = socket
                    self.is_connected = True
                    failures = 0
                    logger.info('Realtime connected to %s', self.url)
                    async for raw in socket:
                        self.dispatch(raw)
            except (OSError, asyncio.TimeoutError, websockets.exceptions.WebSocketException) as e:
                logger.warning('Realtime connection error: %s', e)
            finally:
                self._socket = None
                self.is_connected = False

            if self._closing:
                break
            failures += 1
            if failures > self.reconnect_attempts:
                logger.error('Realtime gave up after %d reconnect attempts', self.reconnect_attempts)
                break
            await asyncio.sleep(self.reconnect_delay)

    def start(self):
        """Run the channel on a background thread with its own event loop."""
        if self._thread is not None and self._thread.is_alive():
            return

        def _run():
            self._loop = asyncio.new_event_loop()
            try:
                self._loop.run_until_complete(self.run())
            finally:
                self._loop.close()
                self._loop = None

        self._closing = False
        self._thread = threading.Thread(target=_run, name='realtime-channel', daemon=True)
        self._thread.start()

    def close(self, timeout=None):
        self._closing = True
        loop, socket = self._loop, self._socket
        if loop is not None and socket is not None:
            asyncio.run_coroutine_threadsafe(socket.close(), loop)
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        self._handlers.clear()


class OrderEventRouter:
    """
    Subscribes order handlers for the currently selected branch.

    Created/updated events for another branch are dropped before reaching
    the handler. Deletions carry only an id and are always delivered.
    """

    def __init__(self, channel, branch_provider):
        self.channel = channel
        self.branch_provider = branch_provider
        self._unsubscribers = []

    def _for_branch(self, handler):
        def _filtered(data):
            branch = self.branch_provider()
            if branch and data.get('branch') and data['branch'] != branch:
                return
            handler(data)
        return _filtered

    def on_order(self, handler):
        """Route all three order events to ``handler(event, data)``."""
        for event in (ORDER_CREATED, ORDER_UPDATED):
            self._unsubscribers.append(
                self.channel.subscribe(event, self._for_branch(lambda data, event=event: handler(event, data)))
            )
        self._unsubscribers.append(
            self.channel.subscribe(ORDER_DELETED, lambda data: handler(ORDER_DELETED, data))
        )

    def detach(self):
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
