import pytest
from datetime import timedelta
from decimal import Decimal
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from apps.withdrawals import services
from apps.withdrawals.models import Withdrawal


@pytest.mark.django_db
class TestWithdrawalTotals:
    """Tests for the per-owner aggregate."""

    def test_split_between_owners(self, expenses):
        totals = services.withdrawal_totals(Withdrawal.objects.filter(branch='pangabugan'))

        assert totals['john'] == Decimal('125.00')
        assert totals['elwin'] == Decimal('25.00')
        assert totals['total'] == Decimal('150.00')
        assert totals['total_withdrawals'] == Decimal('100.00')
        assert totals['total_purchases'] == Decimal('50.00')
        assert totals['count'] == 2

    def test_owner_shares_add_up(self, expenses):
        Withdrawal.objects.create(type='purchase', amount=Decimal('0.05'), description='Odd', charged_to='all')
        totals = services.withdrawal_totals()

        assert totals['john'] + totals['elwin'] == totals['total']

    def test_odd_centavo_goes_to_elwin(self, db):
        for _ in range(3):
            Withdrawal.objects.create(type='purchase', amount=Decimal('0.01'), description='Odd', charged_to='all')
        Withdrawal.objects.create(type='purchase', amount=Decimal('0.15'), description='Odd', charged_to='all')

        totals = services.withdrawal_totals()

        assert totals['john'] == Decimal('0.07')
        assert totals['elwin'] == Decimal('0.11')

    def test_empty(self, db):
        totals = services.withdrawal_totals()
        assert totals['total'] == Decimal('0.00')
        assert totals['count'] == 0

    def test_totals_endpoint(self, staff_client, expenses):
        response = staff_client.get(reverse('withdrawals:withdrawal-totals'), {'type': 'purchase'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == Decimal('80.00')
        assert response.data['elwin'] == Decimal('55.00')


@pytest.mark.django_db
class TestWithdrawalList:
    """Tests for GET /api/withdrawals/"""

    def test_requires_auth(self, api_client):
        response = api_client.get(reverse('withdrawals:withdrawal-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_payer_filter_keeps_shared(self, staff_client, expenses):
        response = staff_client.get(reverse('withdrawals:withdrawal-list'), {'charged_to': 'john'})

        assert sorted(w['description'] for w in response.data) == ['Change fund', 'Milk']

    def test_all_filter_is_exact(self, staff_client, expenses):
        response = staff_client.get(reverse('withdrawals:withdrawal-list'), {'charged_to': 'all'})
        assert [w['description'] for w in response.data] == ['Milk']

    def test_search_and_branch(self, staff_client, expenses):
        url = reverse('withdrawals:withdrawal-list')

        response = staff_client.get(url, {'search': 'cup'})
        assert [w['description'] for w in response.data] == ['Cups']

        response = staff_client.get(url, {'branch': 'baan'})
        assert [w['description'] for w in response.data] == ['Cups']

    def test_sort_by_amount(self, staff_client, expenses):
        response = staff_client.get(reverse('withdrawals:withdrawal-list'), {
            'sort_by': 'amount',
            'sort_order': 'asc',
            'limit': 2,
        })
        assert [w['description'] for w in response.data] == ['Cups', 'Milk']

    def test_invalid_date_range(self, staff_client):
        response = staff_client.get(reverse('withdrawals:withdrawal-list'), {
            'start_date': '2024-05-02',
            'end_date': '2024-05-01',
        })
        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestWithdrawalCreate:
    """Tests for POST /api/withdrawals/"""

    def test_create(self, staff_client, staff_user):
        response = staff_client.post(reverse('withdrawals:withdrawal-list'), {
            'type': 'purchase',
            'amount': '45.50',
            'description': '  Sugar ',
            'payment_method': 'gcash',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['description'] == 'Sugar'
        assert response.data['charged_to'] == 'john'
        assert response.data['branch'] == 'pangabugan'
        assert response.data['created_by_email'] == staff_user.email

    def test_rejects_zero_amount(self, staff_client):
        response = staff_client.post(reverse('withdrawals:withdrawal-list'), {
            'type': 'withdrawal',
            'amount': '0.00',
            'description': 'Nothing',
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_rejects_blank_description(self, staff_client):
        response = staff_client.post(reverse('withdrawals:withdrawal-list'), {
            'type': 'withdrawal',
            'amount': '10.00',
            'description': '   ',
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_rejects_far_future_date(self, staff_client):
        response = staff_client.post(reverse('withdrawals:withdrawal-list'), {
            'type': 'withdrawal',
            'amount': '10.00',
            'description': 'Later',
            'created_at': (timezone.now() + timedelta(days=3)).isoformat(),
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'future' in response.data['error']
        assert not Withdrawal.objects.exists()


@pytest.mark.django_db
class TestWithdrawalDetail:

    def test_update_and_delete(self, staff_client, expenses):
        url = reverse('withdrawals:withdrawal-detail', kwargs={'pk': expenses[0].id})

        response = staff_client.patch(url, {'charged_to': 'elwin'}, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['charged_to'] == 'elwin'

        response = staff_client.delete(url)
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Withdrawal.objects.filter(id=expenses[0].id).exists()

    def test_delete_missing(self, staff_client, db):
        url = reverse('withdrawals:withdrawal-detail', kwargs={'pk': '00000000-0000-0000-0000-000000000000'})
        assert staff_client.delete(url).status_code == status.HTTP_404_NOT_FOUND
