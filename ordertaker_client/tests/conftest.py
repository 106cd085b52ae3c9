import pytest
from decimal import Decimal
from unittest import mock
from ordertaker_client.config import ClientConfig
from ordertaker_client.models import Expense, Photo, User
from ordertaker_client.session import AppSession, AuthSession, BranchSelection
from ordertaker_client.storage import LocalStore


@pytest.fixture
def client_config():
    return ClientConfig(api_url='http://shop.test/api', reconnect_delay=0)


@pytest.fixture
def make_expense():
    def _make(amount, charged_to='john', type='withdrawal', description='Cash out', **extra):
        return Expense(
            id=extra.pop('id', f'{type}-{amount}-{charged_to}'),
            type=type,
            amount=Decimal(str(amount)),
            description=description,
            charged_to=charged_to,
            **extra,
        )
    return _make


@pytest.fixture
def make_photo():
    def _make(number, is_active=True, display_order=None):
        return Photo(
            id=f'photo-{number}',
            image=f'/uploads/photo-{number}.jpg',
            display_order=display_order or number,
            is_active=is_active,
        )
    return _make


@pytest.fixture
def order_payload():
    def _make(order_id='order-1', branch='pangabugan', version=1, customer_name='Ana', **extra):
        payload = {
            'id': order_id,
            'order_number': 1,
            'customer_name': customer_name,
            'branch': branch,
            'order_type': 'dine-in',
            'items': [{'id': 'latte', 'name': 'Latte', 'price': 120.0, 'quantity': 2, 'status': 'pending'}],
            'appended_orders': [],
            'is_paid': False,
            'payment_method': None,
            'total_amount': 240.0,
            'order_status': 'pending',
            'version': version,
            'created_at': '2024-05-01T09:00:00+08:00',
        }
        payload.update(extra)
        return payload
    return _make


@pytest.fixture
def admin_user():
    return User(id='u-admin', email='admin@example.com', name='Admin', role='super_admin')


@pytest.fixture
def taker_user():
    return User(id='u-taker', email='taker@example.com', name='Taker', role='order_taker_crew',
                branch_access=('pangabugan',), preferred_branch='pangabugan')


@pytest.fixture
def make_session(client_config):
    """AppSession over a mocked facade and channel."""
    def _make(user, branch=None):
        store = LocalStore()
        if branch:
            store.set('selected_branch', branch)
        api = mock.Mock()
        channel = mock.Mock()
        channel.subscribe.side_effect = lambda event, handler: mock.Mock()
        return AppSession(client_config, api, AuthSession(user), BranchSelection(store, user), store, channel)
    return _make
