import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.menu.models import Category, MenuItem


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_client(db):
    """Return an API client authenticated as super admin."""
    admin = User.objects.create_user(
        email='admin@example.com',
        password='AdminPass123!',
        role=UserRole.SUPER_ADMIN,
    )
    client = APIClient()
    refresh = RefreshToken.for_user(admin)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def crew_client(db):
    """Return an API client authenticated as crew."""
    crew = User.objects.create_user(
        email='crew@example.com',
        password='TestPass123!',
        role=UserRole.CREW,
    )
    client = APIClient()
    refresh = RefreshToken.for_user(crew)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def coffee_category(db):
    return Category.objects.create(id='coffee', name='Coffee')


@pytest.fixture
def pastry_category(db):
    return Category.objects.create(id='pastries', name='Pastries')


@pytest.fixture
def latte(coffee_category):
    return MenuItem.objects.create(
        name='Cafe Latte',
        price=Decimal('120.00'),
        category=coffee_category,
        is_best_seller=True,
        is_public=True,
        owner='john',
    )


@pytest.fixture
def croissant(pastry_category):
    return MenuItem.objects.create(
        name='Croissant',
        price=Decimal('85.00'),
        category=pastry_category,
        owner='elwin',
    )
