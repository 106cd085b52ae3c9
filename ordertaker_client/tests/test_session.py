import pytest
from unittest import mock
from ordertaker_client.exceptions import AccessDeniedError, NetworkError
from ordertaker_client.models import User
from ordertaker_client.session import AppSession, AuthSession, BranchSelection
from ordertaker_client.storage import LocalStore


class TestBranchSelection:

    def test_preferred_branch_wins(self, taker_user):
        store = LocalStore()
        store.set('selected_branch', 'baan')

        assert BranchSelection(store, taker_user).current == 'pangabugan'

    def test_stored_branch_next(self, admin_user):
        store = LocalStore()
        store.set('selected_branch', 'baan')

        assert BranchSelection(store, admin_user).current == 'baan'

    def test_default_branch(self):
        assert BranchSelection(LocalStore()).current == 'pangabugan'

    def test_stored_branch_without_access_skipped(self):
        user = User(id='u1', email='c@example.com', role='crew', branch_access=('baan',))
        store = LocalStore()
        store.set('selected_branch', 'pangabugan')

        assert BranchSelection(store, user).current == 'baan'

    def test_select_persists_and_notifies(self, admin_user, tmp_path):
        path = tmp_path / 'session.json'
        selection = BranchSelection(LocalStore(str(path)), admin_user)
        listener = mock.Mock()
        selection.on_change(listener)

        selection.select('baan')

        listener.assert_called_once_with('baan')
        assert LocalStore(str(path)).get('selected_branch') == 'baan'

    def test_select_without_access(self, taker_user):
        selection = BranchSelection(LocalStore(), taker_user)

        with pytest.raises(AccessDeniedError):
            selection.select('baan')
        assert selection.current == 'pangabugan'


class TestLocalStore:

    def test_unreadable_file_degrades_to_memory(self, tmp_path):
        store = LocalStore(str(tmp_path))

        store.set('selected_branch', 'baan')

        assert store.degraded is True
        assert store.get('selected_branch') == 'baan'

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / 'session.json'
        path.write_text('{not json')

        store = LocalStore(str(path))

        assert store.degraded is True
        assert store.get('user') is None


class TestAuthSession:

    def test_require_admin(self, taker_user, admin_user):
        with pytest.raises(AccessDeniedError):
            AuthSession(taker_user).require_admin()
        AuthSession(admin_user).require_admin()

    def test_anonymous(self):
        with pytest.raises(AccessDeniedError):
            AuthSession().require_crew()


class TestAppSession:

    def test_login_and_close(self, client_config, tmp_path):
        client_config.store_path = str(tmp_path / 'session.json')
        http = mock.Mock()
        response = mock.Mock(status_code=200, ok=True, content=b'{}')
        response.json.return_value = {
            'user': {'id': 'u1', 'email': 'taker@example.com', 'role': 'order_taker', 'preferred_branch': 'baan'},
            'tokens': {'refresh': 'r', 'access': 'a'},
        }
        http.request.return_value = response
        channel = mock.Mock()

        session = AppSession.login(client_config, 'taker@example.com', 'secret', http=http, channel=channel)

        assert session.branch.current == 'baan'
        assert AppSession.restore(client_config, http=http, channel=channel).auth.user.email == 'taker@example.com'

        http.request.side_effect = NetworkError('offline')
        session.close()

        channel.close.assert_called_once()
        assert session.auth.is_authenticated is False
        assert AppSession.restore(client_config, http=http, channel=channel) is None

    def test_restore_carries_tokens(self, client_config, tmp_path):
        client_config.store_path = str(tmp_path / 'session.json')
        http = mock.Mock()
        response = mock.Mock(status_code=200, ok=True, content=b'{}')
        response.json.return_value = {
            'user': {'id': 'u1', 'email': 'taker@example.com', 'role': 'order_taker'},
            'tokens': {'refresh': 'r', 'access': 'a'},
        }
        http.request.return_value = response

        AppSession.login(client_config, 'taker@example.com', 'secret', http=http, channel=mock.Mock())
        restored = AppSession.restore(client_config, http=http, channel=mock.Mock())

        assert restored.api.access_token == 'a'
        assert restored.api.refresh_token == 'r'

    def test_refreshed_token_is_stored(self, client_config, tmp_path):
        client_config.store_path = str(tmp_path / 'session.json')
        store = LocalStore(client_config.store_path)
        store.set('user', {'id': 'u1', 'email': 'taker@example.com', 'role': 'order_taker'})
        store.set('tokens', {'access': 'old', 'refresh': 'r'})
        expired = mock.Mock(status_code=401, ok=False, content=b'{}')
        expired.json.return_value = {'error': 'Token expired'}
        refreshed = mock.Mock(status_code=200, ok=True, content=b'{}')
        refreshed.json.return_value = {'access': 'new'}
        me = mock.Mock(status_code=200, ok=True, content=b'{}')
        me.json.return_value = {'id': 'u1', 'email': 'taker@example.com', 'role': 'order_taker'}
        http = mock.Mock()
        http.request.side_effect = [expired, refreshed, me]

        session = AppSession.restore(client_config, store=store, http=http, channel=mock.Mock())
        session.api.me()

        assert LocalStore(client_config.store_path).get('tokens') == {'access': 'new', 'refresh': 'r'}

    def test_restore_without_tokens(self, client_config, tmp_path):
        client_config.store_path = str(tmp_path / 'session.json')
        LocalStore(client_config.store_path).set('user', {'id': 'u1', 'email': 'taker@example.com', 'role': 'order_taker'})

        assert AppSession.restore(client_config, http=mock.Mock(), channel=mock.Mock()) is None
