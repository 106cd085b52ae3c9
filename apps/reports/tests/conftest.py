import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.menu.models import Category, MenuItem
from apps.orders import services as order_services
from apps.withdrawals.models import Withdrawal


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email='admin@example.com',
        password='AdminPass123!',
        name='Ada Admin',
        role=UserRole.SUPER_ADMIN,
    )


@pytest.fixture
def admin_client(admin_user):
    return _client_for(admin_user)


@pytest.fixture
def taker_client(db):
    taker = User.objects.create_user(
        email='taker@example.com',
        password='TestPass123!',
        role=UserRole.ORDER_TAKER,
    )
    return _client_for(taker)


@pytest.fixture
def menu(db):
    """Latte and mocha belong to john, croissant to elwin. Americano is not on the menu."""
    coffee = Category.objects.create(id='coffee', name='Coffee')
    pastries = Category.objects.create(id='pastries', name='Pastries')
    MenuItem.objects.create(name='Cafe Latte', price=Decimal('120.00'), category=coffee, owner='john')
    MenuItem.objects.create(name='Mocha', price=Decimal('135.00'), category=coffee, owner='john')
    MenuItem.objects.create(name='Croissant', price=Decimal('85.00'), category=pastries, owner='elwin')


@pytest.fixture
def todays_sales(menu):
    """
    Pangabugan today: ₱325 paid in cash, ₱135 split 35 cash / 100 GCash with a
    ₱90 appended order paid by GCash, and an unpaid ₱50 order.
    Baan today: ₱90 paid by GCash.
    """
    cash_order = order_services.create_order(customer_name='Maria', branch='pangabugan', items=[
        {'id': 'l1', 'name': 'Cafe Latte', 'price': Decimal('120.00'), 'quantity': 2},
        {'id': 'c1', 'name': 'Croissant', 'price': Decimal('85.00'), 'quantity': 1},
    ])
    order_services.set_order_payment(order_id=cash_order.id, is_paid=True, payment_method='cash')

    split_order = order_services.create_order(customer_name='Ana', branch='pangabugan', items=[
        {'id': 'm1', 'name': 'Mocha', 'price': Decimal('135.00'), 'quantity': 1},
    ])
    order_services.set_order_payment(
        order_id=split_order.id,
        is_paid=True,
        payment_method='split',
        cash_amount=Decimal('35.00'),
        gcash_amount=Decimal('100.00'),
    )
    split_order = order_services.append_items(order_id=split_order.id, items=[
        {'id': 'a1', 'name': 'Americano', 'price': Decimal('90.00'), 'quantity': 1},
    ])
    order_services.set_appended_payment(
        order_id=split_order.id,
        appended_id=split_order.appended_orders.get().id,
        is_paid=True,
        payment_method='gcash',
    )

    order_services.create_order(customer_name='Unpaid', branch='pangabugan', items=[
        {'id': 'l2', 'name': 'Cafe Latte', 'price': Decimal('50.00'), 'quantity': 1},
    ])

    baan_order = order_services.create_order(customer_name='Jose', branch='baan', items=[
        {'id': 'a2', 'name': 'Americano', 'price': Decimal('90.00'), 'quantity': 1},
    ])
    order_services.set_order_payment(order_id=baan_order.id, is_paid=True, payment_method='gcash')


@pytest.fixture
def todays_expenses(db):
    Withdrawal.objects.create(type='withdrawal', amount=Decimal('100.00'), description='Change fund', charged_to='john')
    Withdrawal.objects.create(type='purchase', amount=Decimal('50.00'), description='Milk', charged_to='all')
