"""
Session objects handed to every view.

``AppSession`` owns one authenticated API client, the selected branch,
the local store and the realtime channel. Creating it is the start of a
UI session and ``close()`` is the end; nothing here is global.
"""

import logging

from .api import ApiClient
from .exceptions import AccessDeniedError, ServerError, NetworkError
from .models import User
from .realtime import RealtimeChannel
from .storage import LocalStore

logger = logging.getLogger(__name__)

BRANCH_IDS = ('pangabugan', 'baan')
DEFAULT_BRANCH = 'pangabugan'

USER_KEY = 'user'
TOKENS_KEY = 'tokens'
BRANCH_KEY = 'selected_branch'


def _token_saver(store):
    """Keep the stored tokens in step with the API client."""
    def _save(access_token, refresh_token):
        if access_token is None:
            store.remove(TOKENS_KEY)
        else:
            store.set(TOKENS_KEY, {'access': access_token, 'refresh': refresh_token})
    return _save


class AuthSession:
    """The logged-in identity and what it may do."""

    def __init__(self, user=None):
        self.user = user

    @property
    def is_authenticated(self):
        return self.user is not None

    def require(self, allowed, action='open this view'):
        """
        Raises:
            AccessDeniedError: If nobody is logged in or ``allowed(user)`` is false
        """
        if self.user is None or not allowed(self.user):
            raise AccessDeniedError(f'You are not allowed to {action}')

    def require_admin(self):
        self.require(lambda user: user.is_admin, 'manage this resource')

    def require_crew(self):
        self.require(lambda user: user.is_crew, 'use the time clock')

    def require_order_taker(self):
        self.require(lambda user: user.is_admin or user.is_order_taker, 'take orders')


class BranchSelection:
    """
    Which branch the session works on.

    Starts from the user's preferred branch, then the stored choice, then
    the default branch. Every change is written back to the store.
    """

    def __init__(self, store, user=None, default=DEFAULT_BRANCH):
        self.store = store
        self.user = user
        self._listeners = []
        self._current = self._initial(default)

    def _allowed(self, branch_id):
        if branch_id not in BRANCH_IDS:
            return False
        return self.user is None or self.user.can_access_branch(branch_id)

    def _initial(self, default):
        candidates = [
            self.user.preferred_branch if self.user else None,
            self.store.get(BRANCH_KEY),
            default,
        ]
        if self.user and self.user.branch_access:
            candidates.append(self.user.branch_access[0])

        for branch_id in candidates:
            if branch_id and self._allowed(branch_id):
                return branch_id
        return default

    @property
    def current(self):
        return self._current

    def available(self):
        return [branch_id for branch_id in BRANCH_IDS if self._allowed(branch_id)]

    def select(self, branch_id):
        if not self._allowed(branch_id):
            raise AccessDeniedError(f'No access to branch {branch_id!r}')
        if branch_id == self._current:
            return
        self._current = branch_id
        self.store.set(BRANCH_KEY, branch_id)
        logger.info('Selected branch %s', branch_id)
        for listener in list(self._listeners):
            listener(branch_id)

    def on_change(self, listener):
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)


class AppSession:

    def __init__(self, config, api, auth, branch, store, channel=None):
        self.config = config
        self.api = api
        self.auth = auth
        self.branch = branch
        self.store = store
        self.channel = channel or RealtimeChannel.from_config(config)

    @classmethod
    def login(cls, config, email, password, http=None, channel=None):
        """Authenticate and build a session; the realtime channel is not started yet."""
        store = LocalStore(config.store_path)
        api = ApiClient(config, http=http, on_tokens_changed=_token_saver(store))
        user = api.login(email, password)
        store.set(USER_KEY, user.to_wire())
        logger.info('Logged in as %s (%s)', user.email, user.role)
        return cls(config, api, AuthSession(user), BranchSelection(store, user), store, channel)

    @classmethod
    def restore(cls, config, store=None, http=None, channel=None):
        """Rebuild a session from the stored user and tokens, or return None when either is missing."""
        store = store or LocalStore(config.store_path)
        data, tokens = store.get(USER_KEY), store.get(TOKENS_KEY)
        if not data or not tokens:
            return None
        user = User.from_wire(data)
        api = ApiClient(
            config,
            http=http,
            access_token=tokens.get('access'),
            refresh_token=tokens.get('refresh'),
            on_tokens_changed=_token_saver(store),
        )
        return cls(config, api, AuthSession(user), BranchSelection(store, user), store, channel)

    def start_realtime(self):
        self.channel.start()

    # View factories

    def order_list(self):
        from .views import OrderListView
        return OrderListView(self)

    def photo_admin(self):
        from .views import PhotoAdminView
        return PhotoAdminView(self)

    def attendance(self):
        from .views import AttendanceView
        return AttendanceView(self)

    def expenses(self):
        from .views import ExpensesView
        return ExpensesView(self)

    def close(self):
        """End the session: stop realtime, log out on the server and forget the user."""
        self.channel.close(timeout=self.config.reconnect_delay)
        try:
            if self.api.refresh_token:
                self.api.logout()
        except (NetworkError, ServerError) as e:
            logger.warning('Logout request failed: %s', e)
        finally:
            self.store.remove(USER_KEY)
            self.store.remove(TOKENS_KEY)
            self.auth.user = None
