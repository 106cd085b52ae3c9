import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.customer_photos.models import CustomerPhoto


@pytest.fixture
def api_client():
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
def full_gallery(db):
    """Six active photos plus one inactive photo."""
    photos = [
        CustomerPhoto.objects.create(image=f'/uploads/photo-{n}.jpg', is_active=True, display_order=n)
        for n in range(1, 7)
    ]
    photos.append(CustomerPhoto.objects.create(image='/uploads/photo-7.jpg', display_order=7))
    return photos
