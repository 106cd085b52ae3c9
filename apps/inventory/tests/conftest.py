import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.inventory.models import InventoryItem


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def crew_user(db):
    return User.objects.create_user(
        email='barista@example.com',
        password='TestPass123!',
        name='Bea Barista',
        role=UserRole.CREW,
    )


@pytest.fixture
def crew_client(crew_user):
    client = APIClient()
    refresh = RefreshToken.for_user(crew_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def beans(db):
    return InventoryItem.objects.create(
        name='Arabica Beans', quantity=25, unit='kg', category='Coffee Beans',
    )


@pytest.fixture
def milk(db):
    return InventoryItem.objects.create(
        name='Fresh Milk', quantity=4, unit='liters', category='Milk & Dairy',
    )


@pytest.fixture
def cups(db):
    return InventoryItem.objects.create(
        name='Paper Cups', quantity=0, unit='boxes', category='Packaging', branch='baan',
    )
