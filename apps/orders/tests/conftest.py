import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.orders import services


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def order_taker(db):
    return User.objects.create_user(
        email='taker@example.com',
        password='TestPass123!',
        name='Olive Taker',
        role=UserRole.ORDER_TAKER,
    )


@pytest.fixture
def baan_only_user(db):
    return User.objects.create_user(
        email='baan@example.com',
        password='TestPass123!',
        name='Baan Crew',
        role=UserRole.ORDER_TAKER_CREW,
        branch_access=['baan'],
    )


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def taker_client(order_taker):
    """Return API client authenticated as order taker."""
    return _client_for(order_taker)


@pytest.fixture
def baan_client(baan_only_user):
    return _client_for(baan_only_user)


@pytest.fixture
def order_items():
    return [
        {'id': 'latte-1', 'name': 'Cafe Latte', 'price': Decimal('120.00'), 'quantity': 2},
        {'id': 'croissant-1', 'name': 'Croissant', 'price': Decimal('85.00'), 'quantity': 1},
    ]


@pytest.fixture
def order(db, order_items):
    """An unpaid pangabugan order worth 325.00."""
    return services.create_order(
        customer_name='Maria',
        items=order_items,
        branch='pangabugan',
        order_taker_name='Olive Taker',
    )


@pytest.fixture
def baan_order(db):
    return services.create_order(
        customer_name='Jose',
        items=[{'id': 'americano-1', 'name': 'Americano', 'price': Decimal('90.00')}],
        branch='baan',
    )


@pytest.fixture
def order_with_appended(order):
    """``order`` plus one appended order worth 90.00."""
    return services.append_items(
        order_id=order.id,
        items=[{'id': 'americano-9', 'name': 'Americano', 'price': Decimal('90.00'), 'quantity': 1}],
    )
