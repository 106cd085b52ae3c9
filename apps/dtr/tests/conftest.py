import pytest
from datetime import datetime, timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.dtr.models import DTRRecord, DTRStatus


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def crew_user(db):
    return User.objects.create_user(
        email='crew@example.com',
        password='TestPass123!',
        name='Carlo Crew',
        role=UserRole.CREW,
    )


@pytest.fixture
def crew_client(crew_user):
    return _client_for(crew_user)


@pytest.fixture
def taker_client(db):
    """Order takers without crew duties cannot use time tracking."""
    taker = User.objects.create_user(
        email='taker@example.com',
        password='TestPass123!',
        role=UserRole.ORDER_TAKER,
    )
    return _client_for(taker)


@pytest.fixture
def admin_client(db):
    admin = User.objects.create_user(
        email='admin@example.com',
        password='AdminPass123!',
        role=UserRole.SUPER_ADMIN,
    )
    return _client_for(admin)


@pytest.fixture
def finished_shifts(crew_user):
    """Two finished shifts in May 2024 (8h and 4.5h) and one in June."""
    tz = timezone.get_current_timezone()

    def shift(day, start_hour, hours):
        start = timezone.make_aware(datetime(2024, day[0], day[1], start_hour), tz)
        return DTRRecord.objects.create(
            user=crew_user,
            clock_in_time=start,
            clock_out_time=start + timedelta(hours=hours),
            date=start.date(),
            status=DTRStatus.CLOCKED_OUT,
        )

    return [
        shift((5, 2), 8, 8),
        shift((5, 3), 9, 4.5),
        shift((6, 1), 8, 6),
    ]
