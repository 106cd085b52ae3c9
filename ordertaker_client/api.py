"""
REST facade over the backend.

Each method sends one request and converts the JSON answer into view
models. Errors are raised as ``NetworkError`` (the request did not
complete), ``ServerError`` (non-2xx) or ``ValidationError`` (checked
before sending).
"""

import logging
import os
from decimal import Decimal

import requests

from .exceptions import NetworkError, ServerError, ValidationError
from .models import DTRRecord, Expense, Order, Photo, User, to_decimal

logger = logging.getLogger(__name__)

UPLOAD_MAX_BYTES = 5 * 1024 * 1024
UPLOAD_TYPES_BY_EXTENSION = {
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.gif': 'image/gif',
    '.webp': 'image/webp',
}


def _jsonable(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items() if item is not None}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def _error_message(payload, fallback):
    """Pick a readable message from a DRF error body."""
    if isinstance(payload, dict):
        for key in ('error', 'detail', 'message'):
            if payload.get(key):
                return str(payload[key])
        for field_name, errors in payload.items():
            if isinstance(errors, list) and errors:
                return f"{field_name}: {errors[0]}"
    if isinstance(payload, list) and payload:
        return str(payload[0])
    return fallback


def check_split_payment(amount_due, cash_amount, gcash_amount):
    """
    Raises:
        ValidationError: If either part is negative or the parts do not add up to the amount due
    """
    cash, gcash, due = to_decimal(cash_amount), to_decimal(gcash_amount), to_decimal(amount_due)
    if cash < 0 or gcash < 0:
        raise ValidationError('Cash and GCash amounts cannot be negative')
    if cash + gcash != due:
        raise ValidationError(f'Cash (₱{cash}) + GCash (₱{gcash}) must equal the amount due (₱{due})')


def check_daily_summary(items, cash_amount, gcash_amount):
    """
    Raises:
        ValidationError: If cash + GCash differs from the total of price x quantity
    """
    expected = sum((to_decimal(item['price']) * int(item['quantity']) for item in items), Decimal('0.00'))
    received = to_decimal(cash_amount) + to_decimal(gcash_amount)
    if received != expected:
        raise ValidationError(
            f'Cash (₱{to_decimal(cash_amount)}) + GCash (₱{to_decimal(gcash_amount)}) = ₱{received} '
            f'does not match the items total of ₱{expected}'
        )


def check_image(filename, size, content_type=None):
    content_type = content_type or UPLOAD_TYPES_BY_EXTENSION.get(os.path.splitext(filename)[1].lower())
    if content_type not in UPLOAD_TYPES_BY_EXTENSION.values():
        raise ValidationError('Only JPEG, PNG, GIF and WebP images are allowed')
    if size > UPLOAD_MAX_BYTES:
        raise ValidationError('Image must be 5 MB or smaller')
    return content_type


class RequestSequencer:
    """
    Tag superseding requests so only the newest result is applied.

    Usage::

        ticket = sequencer.issue('orders')
        result = api.list_orders(branch=branch)
        sequencer.apply('orders', ticket, lambda: self._set_orders(result))
    """

    def __init__(self):
        self._latest = {}

    def issue(self, key='default') -> int:
        self._latest[key] = self._latest.get(key, 0) + 1
        return self._latest[key]

    def is_current(self, key, ticket) -> bool:
        return self._latest.get(key) == ticket

    def apply(self, key, ticket, callback) -> bool:
        """Run ``callback`` only if ``ticket`` is still the newest for ``key``."""
        if not self.is_current(key, ticket):
            logger.debug('Dropping stale %s result (ticket %s)', key, ticket)
            return False
        callback()
        return True


class ApiClient:

    def __init__(self, config, http=None, access_token=None, refresh_token=None, on_tokens_changed=None):
        self.config = config
        self.http = http or requests.Session()
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.on_tokens_changed = on_tokens_changed

    def _set_tokens(self, access_token, refresh_token):
        self.access_token, self.refresh_token = access_token, refresh_token
        if self.on_tokens_changed is not None:
            self.on_tokens_changed(access_token, refresh_token)

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def _url(self, path):
        return f"{self.config.api_url}/{path.lstrip('/')}"

    def _send(self, method, path, params=None, json=None, files=None, auth=True):
        headers = {}
        if auth and self.access_token:
            headers['Authorization'] = f'Bearer {self.access_token}'
        try:
            return self.http.request(
                method,
                self._url(path),
                params=params,
                json=_jsonable(json) if json is not None else None,
                files=files,
                headers=headers,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.warning('%s %s failed: %s', method, path, e)
            raise NetworkError(f'Could not reach the server: {e}') from e

    def request(self, method, path, params=None, json=None, files=None, auth=True):
        """Send a request and return the decoded JSON body (None for 204)."""
        response = self._send(method, path, params=params, json=json, files=files, auth=auth)

        if response.status_code == 401 and auth and self.refresh_token:
            if self._refresh_access_token():
                response = self._send(method, path, params=params, json=json, files=files, auth=auth)

        if response.status_code == 204 or not response.content:
            payload = None
        else:
            try:
                payload = response.json()
            except ValueError:
                payload = {'error': response.text}

        if not response.ok:
            message = _error_message(payload, response.reason or 'Request failed')
            logger.info('%s %s -> %s %s', method, path, response.status_code, message)
            raise ServerError(response.status_code, message, payload if isinstance(payload, dict) else None)
        return payload

    def _refresh_access_token(self) -> bool:
        response = self._send('POST', 'auth/token/refresh/', json={'refresh': self.refresh_token}, auth=False)
        if not response.ok:
            logger.info('Token refresh rejected (%s)', response.status_code)
            return False
        data = response.json()
        self._set_tokens(data['access'], data.get('refresh', self.refresh_token))
        return True

    # -------------------------------------------------------------------------
    # Auth and branches
    # -------------------------------------------------------------------------

    def login(self, email, password):
        data = self.request('POST', 'auth/login/', json={'email': email, 'password': password}, auth=False)
        self._set_tokens(data['tokens']['access'], data['tokens']['refresh'])
        return User.from_wire(data['user'])

    def logout(self):
        try:
            self.request('POST', 'auth/logout/', json={'refresh': self.refresh_token})
        finally:
            self._set_tokens(None, None)

    def me(self):
        return User.from_wire(self.request('GET', 'auth/me/'))

    def branches(self):
        return self.request('GET', 'branches/')

    # -------------------------------------------------------------------------
    # Orders
    # -------------------------------------------------------------------------

    def list_orders(self, **filters):
        return [Order.from_wire(o) for o in self.request('GET', 'orders/', params=filters or None)]

    def get_order(self, order_id):
        return Order.from_wire(self.request('GET', f'orders/{order_id}/'))

    def create_order(self, customer_name, items, order_type='dine-in', branch=None):
        if not customer_name or not customer_name.strip():
            raise ValidationError('Customer name is required')
        if not items:
            raise ValidationError('Add at least one item')
        data = self.request('POST', 'orders/', json={
            'customer_name': customer_name,
            'items': items,
            'order_type': order_type,
            'branch': branch,
        })
        return Order.from_wire(data)

    def update_order(self, order_id, **fields):
        return Order.from_wire(self.request('PATCH', f'orders/{order_id}/', json=fields))

    def delete_order(self, order_id):
        self.request('DELETE', f'orders/{order_id}/')

    def append_items(self, order_id, items):
        if not items:
            raise ValidationError('Add at least one item')
        return Order.from_wire(self.request('POST', f'orders/{order_id}/append/', json={'items': items}))

    def update_item_status(self, order_id, item_id, status, appended_id=None, **crew):
        path = (
            f'orders/{order_id}/appended/{appended_id}/items/{item_id}/status/'
            if appended_id else f'orders/{order_id}/items/{item_id}/status/'
        )
        return Order.from_wire(self.request('PATCH', path, json={'status': status, **crew}))

    def set_payment(self, order_id, appended_id=None, amount_due=None, **payment):
        """Set the payment of an order or appended order; split amounts are checked first when ``amount_due`` is known."""
        if payment.get('payment_method') == 'split' and amount_due is not None:
            check_split_payment(amount_due, payment.get('cash_amount'), payment.get('gcash_amount'))
        path = f'orders/{order_id}/appended/{appended_id}/payment/' if appended_id else f'orders/{order_id}/payment/'
        return Order.from_wire(self.request('PATCH', path, json=payment))

    def add_note(self, order_id, content):
        return Order.from_wire(self.request('POST', f'orders/{order_id}/notes/', json={'content': content}))

    # -------------------------------------------------------------------------
    # Withdrawals and purchases
    # -------------------------------------------------------------------------

    def list_expenses(self, **filters):
        return [Expense.from_wire(e) for e in self.request('GET', 'withdrawals/', params=filters or None)]

    def expense_totals(self, **filters):
        data = self.request('GET', 'withdrawals/totals/', params=filters or None)
        return {key: (value if key == 'count' else to_decimal(value)) for key, value in data.items()}

    def create_expense(self, type, amount, description, charged_to='john', payment_method=None, branch=None):
        if to_decimal(amount) < Decimal('0.01'):
            raise ValidationError('Amount must be at least ₱0.01')
        if not description or not description.strip():
            raise ValidationError('Description is required')
        return Expense.from_wire(self.request('POST', 'withdrawals/', json={
            'type': type,
            'amount': to_decimal(amount),
            'description': description,
            'charged_to': charged_to,
            'payment_method': payment_method,
            'branch': branch,
        }))

    def delete_expense(self, expense_id):
        self.request('DELETE', f'withdrawals/{expense_id}/')

    # -------------------------------------------------------------------------
    # Customer photos
    # -------------------------------------------------------------------------

    def list_photos(self):
        return [Photo.from_wire(p) for p in self.request('GET', 'customer-photos/')]

    def create_photo(self, image, alt_text=None, is_active=False):
        return Photo.from_wire(self.request('POST', 'customer-photos/', json={
            'image': image,
            'alt_text': alt_text,
            'is_active': is_active,
        }))

    def update_photo(self, photo_id, **fields):
        return Photo.from_wire(self.request('PATCH', f'customer-photos/{photo_id}/', json=fields))

    def reorder_photos(self, photos):
        """Send the display order of every photo; returns the server's ordered list."""
        data = self.request('PUT', 'customer-photos/reorder/', json={
            'photos': [{'id': p.id, 'display_order': p.display_order} for p in photos],
        })
        return [Photo.from_wire(p) for p in data]

    def delete_photo(self, photo_id):
        self.request('DELETE', f'customer-photos/{photo_id}/')

    # -------------------------------------------------------------------------
    # Attendance
    # -------------------------------------------------------------------------

    def dtr_status(self, branch=None):
        data = self.request('GET', 'dtr/status/', params={'branch': branch} if branch else None)
        record = data.get('active_record')
        return data['is_clocked_in'], DTRRecord.from_wire(record) if record else None

    def clock_in(self, branch=None, notes=''):
        data = self.request('POST', 'dtr/clock-in/', json={'branch': branch, 'notes': notes})
        return DTRRecord.from_wire(data['record'])

    def clock_out(self, branch=None, notes=''):
        data = self.request('POST', 'dtr/clock-out/', json={'branch': branch, 'notes': notes})
        return DTRRecord.from_wire(data['record'])

    def dtr_records(self, **filters):
        data = self.request('GET', 'dtr/records/', params=filters or None)
        return [DTRRecord.from_wire(r) for r in data['records']], data['pagination']

    # -------------------------------------------------------------------------
    # Inventory, uploads, reports
    # -------------------------------------------------------------------------

    def list_inventory(self, **filters):
        return self.request('GET', 'inventory/', params=filters or None)

    def adjust_inventory(self, item_id, delta):
        return self.request('PATCH', f'inventory/{item_id}/quantity/', json={'delta': delta})

    def upload_image(self, path):
        """Upload a local image file and return its stored reference (``/uploads/...``)."""
        filename = os.path.basename(path)
        content_type = check_image(filename, os.path.getsize(path))
        with open(path, 'rb') as fh:
            data = self.request('POST', 'upload/', files={'image': (filename, fh, content_type)})
        return data['path']

    def daily_sales(self, date=None, branch=None):
        params = {key: value for key, value in (('date', date), ('branch', branch)) if value}
        return self.request('GET', 'reports/daily/', params=params or None)

    def validate_daily_summary(self, date, items, cash_amount, gcash_amount, branch=None):
        check_daily_summary(items, cash_amount, gcash_amount)
        return self.request('POST', 'reports/daily-summary/validate/', json={
            'date': date,
            'branch': branch,
            'items': items,
            'cash_amount': to_decimal(cash_amount),
            'gcash_amount': to_decimal(gcash_amount),
        })
