import pytest
import requests
from decimal import Decimal
from unittest import mock
from ordertaker_client.api import (
    ApiClient,
    RequestSequencer,
    check_daily_summary,
    check_image,
    check_split_payment,
)
from ordertaker_client.exceptions import NetworkError, ServerError, ValidationError


def fake_response(status_code=200, payload=None):
    response = mock.Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = 'Error'
    response.content = b'' if payload is None else b'{}'
    response.json.return_value = payload
    return response


@pytest.fixture
def http():
    return mock.Mock()


@pytest.fixture
def api(client_config, http):
    return ApiClient(client_config, http=http, access_token='access-1', refresh_token='refresh-1')


class TestTransport:

    def test_bearer_header_and_url(self, api, http):
        http.request.return_value = fake_response(200, [])

        api.list_orders(branch='baan')

        args, kwargs = http.request.call_args
        assert args == ('GET', 'http://shop.test/api/orders/')
        assert kwargs['params'] == {'branch': 'baan'}
        assert kwargs['headers'] == {'Authorization': 'Bearer access-1'}
        assert kwargs['timeout'] == 10.0

    def test_network_error(self, api, http):
        http.request.side_effect = requests.ConnectionError('refused')

        with pytest.raises(NetworkError):
            api.me()

    def test_server_error_message(self, api, http):
        http.request.return_value = fake_response(404, {'error': 'Order not found'})

        with pytest.raises(ServerError) as exc_info:
            api.get_order('missing')

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == 'Order not found'

    def test_field_errors_become_message(self, api, http):
        http.request.return_value = fake_response(400, {'customer_name': ['This field may not be blank.']})

        with pytest.raises(ServerError) as exc_info:
            api.update_order('o1', customer_name=' ')

        assert exc_info.value.message == 'customer_name: This field may not be blank.'

    def test_refreshes_once_on_401(self, api, http):
        http.request.side_effect = [
            fake_response(401, {'detail': 'Token expired'}),
            fake_response(200, {'access': 'access-2'}),
            fake_response(200, {'id': 'u1', 'email': 'a@example.com', 'role': 'crew'}),
        ]

        user = api.me()

        assert user.email == 'a@example.com'
        assert api.access_token == 'access-2'
        assert api.refresh_token == 'refresh-1'
        assert http.request.call_args_list[1][0] == ('POST', 'http://shop.test/api/auth/token/refresh/')
        assert http.request.call_args[1]['headers'] == {'Authorization': 'Bearer access-2'}

    def test_rejected_refresh_raises_401(self, api, http):
        http.request.side_effect = [
            fake_response(401, {'detail': 'Token expired'}),
            fake_response(401, {'detail': 'Token is invalid'}),
        ]

        with pytest.raises(ServerError) as exc_info:
            api.me()
        assert exc_info.value.status_code == 401

    def test_decimals_sent_as_strings(self, api, http):
        http.request.return_value = fake_response(201, {
            'id': 'w1', 'type': 'purchase', 'amount': 12.5, 'description': 'Ice', 'charged_to': 'all',
        })

        expense = api.create_expense('purchase', Decimal('12.50'), 'Ice', 'all')

        sent = http.request.call_args[1]['json']
        assert sent['amount'] == '12.50'
        assert 'payment_method' not in sent
        assert expense.amount == Decimal('12.50')


class TestLogin:

    def test_stores_tokens(self, client_config, http):
        http.request.return_value = fake_response(200, {
            'message': 'Login successful',
            'user': {'id': 'u1', 'email': 'taker@example.com', 'role': 'order_taker'},
            'tokens': {'refresh': 'r', 'access': 'a'},
        })
        api = ApiClient(client_config, http=http)

        user = api.login('taker@example.com', 'secret')

        assert user.is_order_taker
        assert (api.access_token, api.refresh_token) == ('a', 'r')
        assert http.request.call_args[1]['headers'] == {}


class TestLocalChecks:

    def test_split_mismatch_rejected(self):
        with pytest.raises(ValidationError):
            check_split_payment(Decimal('240'), 100, 100)

    def test_split_negative_rejected(self):
        with pytest.raises(ValidationError):
            check_split_payment(Decimal('240'), 300, -60)

    def test_split_ok(self):
        check_split_payment(Decimal('240'), '140', '100')

    def test_split_payment_not_sent_when_mismatched(self, api, http):
        with pytest.raises(ValidationError):
            api.set_payment('o1', amount_due=Decimal('240'), payment_method='split', cash_amount=100, gcash_amount=50)
        http.request.assert_not_called()

    def test_daily_summary(self):
        items = [{'name': 'Latte', 'price': '100', 'quantity': 3}, {'name': 'Mocha', 'price': '200', 'quantity': 1}]

        with pytest.raises(ValidationError):
            check_daily_summary(items, 300, 150)
        check_daily_summary(items, 300, 200)

    def test_create_order_requires_items(self, api, http):
        with pytest.raises(ValidationError):
            api.create_order('Ana', [])
        http.request.assert_not_called()

    def test_image_type(self):
        with pytest.raises(ValidationError):
            check_image('notes.pdf', 100)

    def test_image_size(self):
        with pytest.raises(ValidationError):
            check_image('big.png', 5 * 1024 * 1024 + 1)

    def test_image_ok(self):
        assert check_image('photo.webp', 1024) == 'image/webp'


class TestRequestSequencer:

    def test_only_newest_applied(self):
        sequencer = RequestSequencer()
        applied = []

        first = sequencer.issue('orders')
        second = sequencer.issue('orders')

        assert sequencer.apply('orders', second, lambda: applied.append('second'))
        assert not sequencer.apply('orders', first, lambda: applied.append('first'))
        assert applied == ['second']

    def test_keys_independent(self):
        sequencer = RequestSequencer()
        orders = sequencer.issue('orders')
        sequencer.issue('photos')

        assert sequencer.is_current('orders', orders)
