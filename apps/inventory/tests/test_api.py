import pytest
from django.urls import reverse
from rest_framework import status
from apps.inventory.models import InventoryItem


def detail_url(item):
    return reverse('inventory:inventory-item-detail', kwargs={'pk': item.id})


@pytest.mark.django_db
class TestStockStatus:

    def test_status_thresholds(self, beans, milk, cups):
        assert beans.stock_status == 'good'
        assert milk.stock_status == 'low'
        assert cups.stock_status == 'out'

    def test_at_threshold_is_low(self, beans):
        beans.quantity = beans.low_stock_threshold
        assert beans.stock_status == 'low'


@pytest.mark.django_db
class TestInventoryList:
    """Tests for GET /api/inventory/"""

    def test_requires_auth(self, api_client):
        response = api_client.get(reverse('inventory:inventory-item-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_filter_by_stock_status(self, crew_client, beans, milk, cups):
        url = reverse('inventory:inventory-item-list')

        response = crew_client.get(url, {'stock_status': 'low'})
        assert [i['name'] for i in response.data] == ['Fresh Milk']

        response = crew_client.get(url, {'stock_status': 'out'})
        assert [i['name'] for i in response.data] == ['Paper Cups']

    def test_filter_by_category_and_branch(self, crew_client, beans, milk, cups):
        url = reverse('inventory:inventory-item-list')

        response = crew_client.get(url, {'category': 'Coffee Beans'})
        assert [i['name'] for i in response.data] == ['Arabica Beans']

        response = crew_client.get(url, {'branch': 'baan'})
        assert [i['stock_status'] for i in response.data] == ['out']

    def test_stats(self, crew_client, beans, milk, cups):
        response = crew_client.get(reverse('inventory:inventory-item-stats'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'total_items': 3, 'in_stock': 2, 'low_stock': 1, 'out_of_stock': 1}

    def test_stats_for_branch(self, crew_client, beans, milk, cups):
        response = crew_client.get(reverse('inventory:inventory-item-stats'), {'branch': 'pangabugan'})
        assert response.data['total_items'] == 2
        assert response.data['out_of_stock'] == 0


@pytest.mark.django_db
class TestInventoryCreate:
    """Tests for POST /api/inventory/"""

    def test_create(self, crew_client, crew_user):
        response = crew_client.post(reverse('inventory:inventory-item-list'), {
            'name': ' Vanilla Syrup ',
            'unit': 'bottles',
            'category': 'Syrups & Flavors',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Vanilla Syrup'
        assert response.data['quantity'] == 0
        assert response.data['low_stock_threshold'] == 10
        assert response.data['branch'] == 'pangabugan'
        assert response.data['last_updated_by_email'] == crew_user.email

    def test_duplicate_name_in_branch(self, crew_client, beans):
        response = crew_client.post(reverse('inventory:inventory-item-list'), {
            'name': 'arabica beans',
            'unit': 'kg',
            'category': 'Coffee Beans',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'An item with this name already exists'

    def test_same_name_other_branch(self, crew_client, beans):
        response = crew_client.post(reverse('inventory:inventory-item-list'), {
            'name': 'Arabica Beans',
            'unit': 'kg',
            'category': 'Coffee Beans',
            'branch': 'baan',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED

    def test_invalid_unit(self, crew_client):
        response = crew_client.post(reverse('inventory:inventory-item-list'), {
            'name': 'Ice',
            'unit': 'tons',
            'category': 'Other',
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestInventoryUpdate:

    def test_update(self, crew_client, milk, crew_user):
        response = crew_client.put(detail_url(milk), {'low_stock_threshold': 2}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['stock_status'] == 'good'
        assert response.data['last_updated_by'] == crew_user.get_display_name()

    def test_rename_to_existing(self, crew_client, beans, milk):
        response = crew_client.patch(detail_url(milk), {'name': 'Arabica Beans'}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_adjust_quantity(self, crew_client, milk):
        url = reverse('inventory:inventory-item-quantity', kwargs={'pk': milk.id})

        response = crew_client.patch(url, {'delta': 6}, format='json')
        assert response.data['quantity'] == 10

        response = crew_client.patch(url, {'delta': -25}, format='json')
        assert response.data['quantity'] == 0
        assert response.data['stock_status'] == 'out'

    def test_adjust_requires_value(self, crew_client, milk):
        url = reverse('inventory:inventory-item-quantity', kwargs={'pk': milk.id})
        response = crew_client.patch(url, {}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete(self, crew_client, milk):
        response = crew_client.delete(detail_url(milk))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not InventoryItem.objects.filter(id=milk.id).exists()

    def test_missing_item(self, crew_client, db):
        url = reverse('inventory:inventory-item-detail', kwargs={'pk': '00000000-0000-0000-0000-000000000000'})
        assert crew_client.get(url).status_code == status.HTTP_404_NOT_FOUND
