import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.withdrawals.models import Withdrawal


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(
        email='cashier@example.com',
        password='TestPass123!',
        name='Cora Cashier',
        role=UserRole.ORDER_TAKER,
    )


@pytest.fixture
def staff_client(staff_user):
    client = APIClient()
    refresh = RefreshToken.for_user(staff_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def expenses(staff_user):
    """₱100 withdrawal for john, ₱50 purchase split between owners, ₱30 elwin purchase at baan."""
    yesterday = timezone.now() - timedelta(days=1)
    return [
        Withdrawal.objects.create(
            type='withdrawal', amount=Decimal('100.00'), description='Change fund',
            charged_to='john', payment_method='cash', created_by=staff_user,
        ),
        Withdrawal.objects.create(
            type='purchase', amount=Decimal('50.00'), description='Milk',
            charged_to='all', created_by=staff_user,
        ),
        Withdrawal.objects.create(
            type='purchase', amount=Decimal('30.00'), description='Cups',
            charged_to='elwin', branch='baan', created_at=yesterday,
        ),
    ]
