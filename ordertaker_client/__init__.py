"""
Python client for the order-taking backend.

Wires an authenticated session, the REST facade and the realtime order
feed into view controllers::

    from ordertaker_client import AppSession, ClientConfig

    session = AppSession.login(ClientConfig.from_env(), 'taker@example.com', 'secret')
    orders = session.order_list()
    session.start_realtime()
    orders.attach()
    orders.poll()  # from the UI loop, to apply queued realtime events
"""

from .config import ClientConfig
from .session import AppSession, AuthSession, BranchSelection

__all__ = ['AppSession', 'AuthSession', 'BranchSelection', 'ClientConfig']
