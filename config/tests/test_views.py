import pytest
from unittest import mock
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient


@pytest.mark.django_db
class TestProjectViews:

    def test_health_check(self):
        response = APIClient().get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['status'] == 'ok'

    def test_api_root_lists_endpoints(self):
        response = APIClient().get(reverse('home'))

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['endpoints']['orders'] == '/api/orders/'

    def test_request_is_logged(self):
        with mock.patch('config.middleware.logger') as logger:
            APIClient().get(reverse('health-check'))

        args = logger.info.call_args[0]
        assert args[1:4] == ('GET', '/api/health/', 200)
