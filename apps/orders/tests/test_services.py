import pytest
from datetime import timedelta
from decimal import Decimal
from unittest import mock
from django.utils import timezone

from apps.orders import services
from apps.orders.exceptions import (
    AppendedOrderNotFoundError,
    DuplicateOrderError,
    ItemNotFoundError,
    PaymentValidationError,
)
from apps.orders.models import Order, OrderStats, OrderStatus


@pytest.mark.django_db
class TestCreateOrder:

    def test_order_numbers_increment(self, order_items):
        first = services.create_order(customer_name='A', items=order_items)
        second = services.create_order(customer_name='B', items=order_items)

        assert first.order_number == 1
        assert second.order_number == 2

    def test_defaults_and_derived_fields(self, order):
        assert order.branch == 'pangabugan'
        assert order.version == 1
        assert order.total_amount == Decimal('325.00')
        assert order.total_items == 3
        assert order.order_status == OrderStatus.PENDING
        assert not order.is_fully_paid()

    def test_blank_branch_uses_default(self, order_items):
        created = services.create_order(customer_name='C', items=order_items, branch=None)
        assert created.branch == 'pangabugan'

    def test_duplicate_client_id(self, order, order_items):
        with pytest.raises(DuplicateOrderError):
            services.create_order(customer_name='Again', items=order_items, id=order.id)


@pytest.mark.django_db
class TestUpdateOrder:

    def test_update_bumps_version(self, order):
        updated = services.update_order(order_id=order.id, customer_name='  Maria Clara ')

        assert updated.customer_name == 'Maria Clara'
        assert updated.version == order.version + 1

    def test_replace_items_keeps_appended(self, order_with_appended):
        updated = services.update_order(
            order_id=order_with_appended.id,
            items=[{'id': 'tea-1', 'name': 'Tea', 'price': Decimal('70.00'), 'quantity': 1}],
        )

        assert [i.name for i in updated.main_items] == ['Tea']
        assert updated.total_amount == Decimal('160.00')

    def test_mark_unpaid_clears_payment(self, order):
        services.set_order_payment(order_id=order.id, is_paid=True, payment_method='cash')
        updated = services.update_order(order_id=order.id, is_paid=False)

        assert updated.payment_method is None
        assert updated.amount_received is None


@pytest.mark.django_db
class TestItemStatus:

    def test_timestamps_set_once(self, order):
        services.update_item_status(order_id=order.id, item_id='latte-1', status='preparing')
        first = order.items.get(item_id='latte-1').preparing_at

        services.update_item_status(order_id=order.id, item_id='latte-1', status='ready')
        services.update_item_status(order_id=order.id, item_id='latte-1', status='preparing')
        item = order.items.get(item_id='latte-1')

        assert item.preparing_at == first
        assert item.ready_at is not None
        assert item.served_at is None

    def test_in_progress_status(self, order):
        updated = services.update_item_status(order_id=order.id, item_id='latte-1', status='ready')
        assert updated.order_status == OrderStatus.IN_PROGRESS

    def test_all_served_stamps_and_records_wait_time(self, order):
        Order.objects.filter(id=order.id).update(created_at=timezone.now() - timedelta(minutes=5))

        services.update_item_status(order_id=order.id, item_id='latte-1', status='served')
        updated = services.update_item_status(order_id=order.id, item_id='croissant-1', status='served')

        assert updated.all_items_served_at is not None
        assert updated.order_status == OrderStatus.COMPLETED
        stats = OrderStats.objects.get(branch='pangabugan')
        assert stats.completed_orders_count == 1
        assert stats.total_wait_time_ms >= 5 * 60 * 1000

    def test_served_stamp_not_repeated(self, order):
        for item_id in ('latte-1', 'croissant-1'):
            services.update_item_status(order_id=order.id, item_id=item_id, status='served')
        stamped = Order.objects.get(id=order.id).all_items_served_at

        services.update_item_status(order_id=order.id, item_id='latte-1', status='served')

        assert Order.objects.get(id=order.id).all_items_served_at == stamped
        assert OrderStats.objects.get(branch='pangabugan').completed_orders_count == 1

    def test_appended_item_found_by_id(self, order_with_appended):
        updated = services.update_item_status(
            order_id=order_with_appended.id, item_id='americano-9', status='preparing'
        )
        appended_item = updated.appended_orders.all()[0].items.all()[0]
        assert appended_item.status == 'preparing'

    def test_unserved_appended_blocks_completion(self, order_with_appended):
        for item_id in ('latte-1', 'croissant-1'):
            services.update_item_status(order_id=order_with_appended.id, item_id=item_id, status='served')

        assert Order.objects.get(id=order_with_appended.id).all_items_served_at is None

    def test_unknown_item(self, order):
        with pytest.raises(ItemNotFoundError):
            services.update_item_status(order_id=order.id, item_id='ghost', status='ready')

    def test_unknown_appended(self, order):
        with pytest.raises(AppendedOrderNotFoundError):
            services.update_item_status(
                order_id=order.id,
                item_id='latte-1',
                status='ready',
                appended_id='00000000-0000-0000-0000-000000000000',
            )


@pytest.mark.django_db
class TestPayment:

    def test_toggle_when_is_paid_omitted(self, order):
        paid = services.set_order_payment(order_id=order.id, payment_method='gcash')
        assert paid.is_paid
        assert paid.gcash_amount == Decimal('325.00')

        unpaid = services.set_order_payment(order_id=order.id)
        assert not unpaid.is_paid
        assert unpaid.payment_method is None

    def test_split_must_match_amount_due(self, order):
        with pytest.raises(PaymentValidationError):
            services.set_order_payment(
                order_id=order.id,
                is_paid=True,
                payment_method='split',
                cash_amount=Decimal('200.00'),
                gcash_amount=Decimal('100.00'),
            )
        assert not Order.objects.get(id=order.id).is_paid

    def test_split_accepted(self, order):
        paid = services.set_order_payment(
            order_id=order.id,
            is_paid=True,
            payment_method='split',
            cash_amount=Decimal('225.00'),
            gcash_amount=Decimal('100.00'),
        )

        assert paid.is_paid
        assert paid.cash_amount == Decimal('225.00')
        assert paid.amount_received == Decimal('325.00')

    def test_amount_received_below_due(self, order):
        with pytest.raises(PaymentValidationError):
            services.set_order_payment(
                order_id=order.id,
                is_paid=True,
                payment_method='cash',
                amount_received=Decimal('300.00'),
            )

    def test_change_due(self, order):
        paid = services.set_order_payment(
            order_id=order.id,
            is_paid=True,
            payment_method='cash',
            amount_received=Decimal('500.00'),
        )
        assert paid.change_due == Decimal('175.00')

    def test_appended_payment_is_separate(self, order_with_appended):
        appended = order_with_appended.appended_orders.all()[0]
        updated = services.set_appended_payment(
            order_id=order_with_appended.id,
            appended_id=appended.id,
            is_paid=True,
            payment_method='cash',
        )

        assert not updated.is_paid
        assert updated.total_paid_amount == Decimal('90.00')
        assert updated.pending_amount == Decimal('325.00')

        updated = services.set_order_payment(order_id=updated.id, is_paid=True, payment_method='cash')
        assert updated.is_fully_paid()


@pytest.mark.django_db
class TestSummary:

    def test_revenue_counts_only_collected_payments(self, order_with_appended, baan_order):
        services.set_order_payment(order_id=order_with_appended.id, is_paid=True, payment_method='cash')

        summary = services.order_summary(branch='pangabugan')

        assert summary['total_orders'] == 1
        assert summary['paid_orders'] == 1
        assert summary['total_revenue'] == Decimal('325.00')
        assert summary['today_orders'] == 1

    def test_all_branches(self, order, baan_order):
        summary = services.order_summary()
        assert summary['total_orders'] == 2
        assert summary['unpaid_orders'] == 2


@pytest.mark.django_db
class TestRealtimeEmission:

    def test_create_publishes_after_commit(self, order_items, django_capture_on_commit_callbacks):
        with mock.patch('apps.orders.realtime.publish') as publish:
            with django_capture_on_commit_callbacks(execute=True):
                created = services.create_order(customer_name='Ana', items=order_items, branch='baan')

        event, payload = publish.call_args.args
        assert event == 'order:created'
        assert payload['id'] == str(created.id)
        assert payload['branch'] == 'baan'
        assert payload['version'] == 1
        assert payload['total_amount'] == 325.0

    def test_nothing_published_before_commit(self, order, django_capture_on_commit_callbacks):
        with mock.patch('apps.orders.realtime.publish') as publish:
            with django_capture_on_commit_callbacks(execute=False) as callbacks:
                services.update_order(order_id=order.id, customer_name='Later')

        publish.assert_not_called()
        assert len(callbacks) == 1

    def test_update_payload_carries_new_version(self, order, django_capture_on_commit_callbacks):
        with mock.patch('apps.orders.realtime.publish') as publish:
            with django_capture_on_commit_callbacks(execute=True):
                services.update_item_status(order_id=order.id, item_id='latte-1', status='ready')

        event, payload = publish.call_args.args
        assert event == 'order:updated'
        assert payload['version'] == 2

    def test_delete_publishes_id_only(self, order, django_capture_on_commit_callbacks):
        with mock.patch('apps.orders.realtime.publish') as publish:
            with django_capture_on_commit_callbacks(execute=True):
                services.delete_order(order_id=order.id)

        publish.assert_called_once_with('order:deleted', {'id': str(order.id)})

    def test_publish_failure_is_swallowed(self, order, django_capture_on_commit_callbacks):
        layer = mock.Mock()
        layer.group_send = mock.AsyncMock(side_effect=ConnectionError('redis down'))
        with mock.patch('apps.orders.realtime.get_channel_layer', return_value=layer):
            with django_capture_on_commit_callbacks(execute=True):
                updated = services.update_order(order_id=order.id, customer_name='Still saved')

        assert updated.customer_name == 'Still saved'
