import pytest
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from apps.branches.branches import (
    DEFAULT_BRANCH,
    get_branch,
    is_valid_branch_id,
    resolve_branch,
)


class TestBranchHelpers:

    def test_default_branch_is_pangabugan(self):
        assert DEFAULT_BRANCH == 'pangabugan'

    def test_is_valid_branch_id(self):
        assert is_valid_branch_id('baan')
        assert not is_valid_branch_id('downtown')
        assert not is_valid_branch_id(None)

    def test_get_branch(self):
        assert get_branch('baan') == {'id': 'baan', 'name': 'Baan Branch'}
        assert get_branch('nope') is None

    def test_resolve_branch_falls_back_to_default(self):
        assert resolve_branch(None) == 'pangabugan'
        assert resolve_branch('') == 'pangabugan'
        assert resolve_branch('baan') == 'baan'


@pytest.mark.django_db
class TestBranchEndpoints:
    """Tests for /api/branches/"""

    def test_list_branches(self):
        response = APIClient().get(reverse('branches:branch-list'))

        assert response.status_code == status.HTTP_200_OK
        ids = [b['id'] for b in response.data['branches']]
        assert ids == ['pangabugan', 'baan']
        assert response.data['default'] == 'pangabugan'

    def test_branch_detail(self):
        url = reverse('branches:branch-detail', kwargs={'branch_id': 'baan'})
        response = APIClient().get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Baan Branch'

    def test_branch_detail_unknown(self):
        url = reverse('branches:branch-detail', kwargs={'branch_id': 'mars'})
        response = APIClient().get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data
