import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status
from apps.dtr.models import DTRRecord


@pytest.mark.django_db
class TestClockInOut:
    """Tests for the clock-in / clock-out cycle."""

    def test_status_initially_clocked_out(self, crew_client):
        response = crew_client.get(reverse('dtr:status'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'is_clocked_in': False, 'active_record': None}

    def test_full_cycle(self, crew_client):
        response = crew_client.post(reverse('dtr:clock-in'), {'notes': 'Opening'}, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['record']['status'] == 'clocked_in'
        assert response.data['record']['work_duration'] is None

        response = crew_client.get(reverse('dtr:status'))
        assert response.data['is_clocked_in'] is True

        response = crew_client.post(reverse('dtr:clock-out'), {'notes': 'Closed register'}, format='json')
        assert response.status_code == status.HTTP_200_OK
        record = response.data['record']
        assert record['status'] == 'clocked_out'
        assert record['notes'] == 'Opening | Closed register'
        assert record['work_duration'] is not None

    def test_double_clock_in_rejected(self, crew_client):
        crew_client.post(reverse('dtr:clock-in'), format='json')
        response = crew_client.post(reverse('dtr:clock-in'), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'Already clocked in' in response.data['error']
        assert DTRRecord.objects.count() == 1

    def test_clock_out_without_clock_in_rejected(self, crew_client):
        response = crew_client.post(reverse('dtr:clock-out'), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'No active clock-in' in response.data['error']

    def test_branches_are_independent(self, crew_client, crew_user):
        crew_client.post(reverse('dtr:clock-in'), {'branch': 'pangabugan'}, format='json')

        response = crew_client.get(reverse('dtr:status'), {'branch': 'baan'})
        assert response.data['is_clocked_in'] is False

    def test_non_crew_forbidden(self, taker_client):
        response = taker_client.post(reverse('dtr:clock-in'), format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['detail'] == 'Only crew members can use time tracking.'


@pytest.mark.django_db
class TestRecords:

    def test_records_with_total_hours(self, crew_client, finished_shifts):
        response = crew_client.get(reverse('dtr:records'), {
            'start_date': '2024-05-01',
            'end_date': '2024-05-31',
        })

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['records']) == 2
        assert response.data['summary']['total_hours'] == Decimal('12.50')
        assert response.data['pagination'] == {'total': 2, 'page': 1, 'limit': 50, 'pages': 1}

    def test_pagination(self, crew_client, finished_shifts):
        response = crew_client.get(reverse('dtr:records'), {'limit': 2, 'page': 2})

        assert len(response.data['records']) == 1
        assert response.data['pagination']['pages'] == 2

    def test_monthly_summary(self, crew_client, finished_shifts):
        response = crew_client.get(reverse('dtr:monthly-summary', kwargs={'year': 2024, 'month': 5}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_days'] == 2
        assert response.data['total_hours'] == Decimal('12.50')
        assert response.data['records'][0]['work_duration'] == Decimal('4.50')

    def test_invalid_month(self, crew_client):
        response = crew_client.get(reverse('dtr:monthly-summary', kwargs={'year': 2024, 'month': 13}))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_admin_listing_with_user_stats(self, admin_client, finished_shifts, crew_user):
        response = admin_client.get(reverse('dtr:all-records'), {'branch': 'pangabugan'})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['records']) == 3
        stats = response.data['user_stats']
        assert len(stats) == 1
        assert stats[0]['user']['email'] == crew_user.email
        assert stats[0]['total_days'] == 3
        assert stats[0]['total_hours'] == Decimal('18.50')

    def test_admin_listing_forbidden_for_crew(self, crew_client):
        response = crew_client.get(reverse('dtr:all-records'))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_can_read_other_user(self, admin_client, finished_shifts, crew_user):
        response = admin_client.get(reverse('dtr:records'), {'user_id': str(crew_user.id)})
        assert response.data['pagination']['total'] == 3
