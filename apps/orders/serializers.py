from decimal import Decimal
from rest_framework import serializers

from apps.branches.serializers import BranchField
from .models import (
    AppendedOrder,
    ItemStatus,
    Order,
    OrderItem,
    OrderNote,
    OrderStats,
    OrderType,
    PaymentMethod,
)


MONEY = dict(max_digits=10, decimal_places=2)


# =============================================================================
# Input Serializers
# =============================================================================

class OrderItemInputSerializer(serializers.Serializer):
    """One item as submitted by the order taker."""

    id = serializers.CharField(max_length=100)
    name = serializers.CharField(max_length=100)
    price = serializers.DecimalField(min_value=Decimal('0.00'), **MONEY)
    quantity = serializers.IntegerField(min_value=1, default=1)
    status = serializers.ChoiceField(choices=ItemStatus.choices, default=ItemStatus.PENDING)
    item_type = serializers.ChoiceField(choices=OrderType.choices, default=OrderType.DINE_IN)
    note = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Item name is required')
        return value


def _validate_customer_name(value):
    value = value.strip()
    if not value:
        raise serializers.ValidationError('Customer name is required')
    return value


class OrderCreateSerializer(serializers.Serializer):
    id = serializers.UUIDField(required=False)
    customer_name = serializers.CharField(max_length=100)
    items = OrderItemInputSerializer(many=True, allow_empty=False)
    order_type = serializers.ChoiceField(choices=OrderType.choices, default=OrderType.DINE_IN)
    branch = BranchField(required=False)
    is_paid = serializers.BooleanField(default=False)
    created_at = serializers.DateTimeField(required=False)
    order_taker_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    order_taker_email = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def validate_customer_name(self, value):
        return _validate_customer_name(value)


class OrderUpdateSerializer(serializers.Serializer):
    """Fields an order may be edited with; anything else is rejected."""

    ALLOWED_FIELDS = ('customer_name', 'items', 'is_paid', 'order_type')

    customer_name = serializers.CharField(max_length=100, required=False)
    items = OrderItemInputSerializer(many=True, allow_empty=False, required=False)
    is_paid = serializers.BooleanField(required=False)
    order_type = serializers.ChoiceField(choices=OrderType.choices, required=False)

    def validate_customer_name(self, value):
        return _validate_customer_name(value)

    def validate(self, attrs):
        unknown = set(self.initial_data) - set(self.ALLOWED_FIELDS)
        if unknown:
            raise serializers.ValidationError(
                'Invalid updates. Allowed fields: ' + ', '.join(self.ALLOWED_FIELDS)
            )
        return attrs


class AppendItemsSerializer(serializers.Serializer):
    items = OrderItemInputSerializer(many=True, allow_empty=False)


class ItemStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ItemStatus.choices)
    prepared_by = serializers.CharField(max_length=100, required=False, allow_blank=True)
    prepared_by_email = serializers.CharField(max_length=255, required=False, allow_blank=True)
    served_by = serializers.CharField(max_length=100, required=False, allow_blank=True)
    served_by_email = serializers.CharField(max_length=255, required=False, allow_blank=True)


class PaymentInputSerializer(serializers.Serializer):
    """
    Payment update for an order or appended order.

    ``is_paid`` omitted toggles the current state.
    """

    is_paid = serializers.BooleanField(required=False, allow_null=True, default=None)
    payment_method = serializers.ChoiceField(
        choices=PaymentMethod.choices, required=False, allow_null=True
    )
    cash_amount = serializers.DecimalField(min_value=Decimal('0.00'), required=False, allow_null=True, **MONEY)
    gcash_amount = serializers.DecimalField(min_value=Decimal('0.00'), required=False, allow_null=True, **MONEY)
    amount_received = serializers.DecimalField(min_value=Decimal('0.00'), required=False, allow_null=True, **MONEY)


class NoteCreateSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=500)

    def validate_content(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Note content is required')
        return value


class OrderFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for order listing.

    Query Parameters:
        is_paid (bool): Payment status
        status (str): Orders having at least one item in this status
        customer_name (str): Case-insensitive partial match
        branch (str): Branch id
        date (date): Orders created on this day
        limit (int): Maximum number of orders
        sort_by (str): created_at, customer_name or order_number
        sort_order (str): asc or desc
    """

    is_paid = serializers.BooleanField(required=False, allow_null=True, default=None)
    status = serializers.ChoiceField(choices=ItemStatus.choices, required=False)
    customer_name = serializers.CharField(required=False)
    branch = BranchField(required=False)
    date = serializers.DateField(required=False)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=1000)
    sort_by = serializers.ChoiceField(
        choices=['created_at', 'customer_name', 'order_number'],
        default='created_at',
    )
    sort_order = serializers.ChoiceField(choices=['asc', 'desc'], default='desc')


# =============================================================================
# Output Serializers
# =============================================================================

class OrderItemSerializer(serializers.ModelSerializer):
    id = serializers.CharField(source='item_id')

    class Meta:
        model = OrderItem
        fields = [
            'id',
            'name',
            'price',
            'quantity',
            'status',
            'item_type',
            'note',
            'preparing_at',
            'ready_at',
            'served_at',
            'prepared_by',
            'prepared_by_email',
            'served_by',
            'served_by_email',
        ]


class AppendedOrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    subtotal = serializers.DecimalField(read_only=True, **MONEY)

    class Meta:
        model = AppendedOrder
        fields = [
            'id',
            'items',
            'subtotal',
            'created_at',
            'is_paid',
            'payment_method',
            'cash_amount',
            'gcash_amount',
            'amount_received',
        ]


class OrderNoteSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderNote
        fields = ['id', 'content', 'created_by', 'created_by_email', 'created_at']


class OrderSerializer(serializers.ModelSerializer):
    """Full order as sent over REST and the realtime channel."""

    items = OrderItemSerializer(source='main_items', many=True, read_only=True)
    appended_orders = AppendedOrderSerializer(many=True, read_only=True)
    notes = OrderNoteSerializer(many=True, read_only=True)
    subtotal = serializers.DecimalField(read_only=True, **MONEY)
    total_amount = serializers.DecimalField(read_only=True, **MONEY)
    total_paid_amount = serializers.DecimalField(read_only=True, **MONEY)
    pending_amount = serializers.DecimalField(read_only=True, **MONEY)
    total_items = serializers.IntegerField(read_only=True)
    order_status = serializers.CharField(read_only=True)
    is_fully_paid = serializers.BooleanField(read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'order_number',
            'customer_name',
            'order_type',
            'branch',
            'items',
            'appended_orders',
            'notes',
            'is_paid',
            'payment_method',
            'cash_amount',
            'gcash_amount',
            'amount_received',
            'subtotal',
            'total_amount',
            'total_paid_amount',
            'pending_amount',
            'total_items',
            'order_status',
            'is_fully_paid',
            'order_taker_name',
            'order_taker_email',
            'all_items_served_at',
            'version',
            'created_at',
            'updated_at',
        ]


class OrderSummarySerializer(serializers.Serializer):
    total_orders = serializers.IntegerField()
    paid_orders = serializers.IntegerField()
    unpaid_orders = serializers.IntegerField()
    today_orders = serializers.IntegerField()
    total_revenue = serializers.DecimalField(**MONEY)
    average_wait_time_ms = serializers.IntegerField()


class OrderStatsSerializer(serializers.ModelSerializer):
    average_wait_time_ms = serializers.IntegerField(read_only=True)

    class Meta:
        model = OrderStats
        fields = [
            'branch',
            'average_wait_time_ms',
            'completed_orders_count',
            'total_wait_time_ms',
            'updated_at',
        ]
