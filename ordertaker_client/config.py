from decouple import config
from urllib.parse import urlsplit, urlunsplit

DEFAULT_API_URL = 'http://localhost:8000/api'
ORDERS_SOCKET_PATH = '/ws/orders/'


def derive_socket_url(api_url: str) -> str:
    """
    Build the realtime URL from the API URL.

    ``https://shop.example/api`` becomes ``wss://shop.example/ws/orders/``.
    """
    parts = urlsplit(api_url)
    scheme = 'wss' if parts.scheme == 'https' else 'ws'
    return urlunsplit((scheme, parts.netloc, ORDERS_SOCKET_PATH, '', ''))


class ClientConfig:
    """Endpoints and tuning knobs for one client installation."""

    def __init__(self, api_url=DEFAULT_API_URL, socket_url=None, timeout=10.0,
                 reconnect_attempts=5, reconnect_delay=1.0, store_path=None):
        self.api_url = api_url.rstrip('/')
        self.socket_url = socket_url or derive_socket_url(self.api_url)
        self.timeout = timeout
        self.reconnect_attempts = reconnect_attempts
        self.reconnect_delay = reconnect_delay
        self.store_path = store_path

    @classmethod
    def from_env(cls):
        """Read ``API_URL`` and ``SOCKET_URL`` (plus optional tuning) from the environment or ``.env``."""
        return cls(
            api_url=config('API_URL', default=DEFAULT_API_URL),
            socket_url=config('SOCKET_URL', default='') or None,
            timeout=config('API_TIMEOUT', default=10.0, cast=float),
            reconnect_attempts=config('SOCKET_RECONNECT_ATTEMPTS', default=5, cast=int),
            reconnect_delay=config('SOCKET_RECONNECT_DELAY', default=1.0, cast=float),
            store_path=config('CLIENT_STORE_PATH', default='') or None,
        )

    def __repr__(self):
        return f"ClientConfig(api_url={self.api_url!r}, socket_url={self.socket_url!r})"
