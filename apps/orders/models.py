from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal
import uuid

from apps.branches.branches import Branch, DEFAULT_BRANCH


class OrderType(models.TextChoices):
    DINE_IN = 'dine-in', 'Dine-in'
    TAKE_OUT = 'take-out', 'Take-out'


class ItemStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PREPARING = 'preparing', 'Preparing'
    READY = 'ready', 'Ready'
    SERVED = 'served', 'Served'


class PaymentMethod(models.TextChoices):
    CASH = 'cash', 'Cash'
    GCASH = 'gcash', 'GCash'
    SPLIT = 'split', 'Split (cash + GCash)'


class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    IN_PROGRESS = 'in_progress', 'In progress'
    COMPLETED = 'completed', 'Completed'


def _money_field(**kwargs):
    return models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))],
        **kwargs
    )


class Payable(models.Model):
    """Payment fields shared by an order and its appended orders."""

    is_paid = models.BooleanField(default=False)
    payment_method = models.CharField(
        max_length=10,
        choices=PaymentMethod.choices,
        null=True,
        blank=True,
    )
    cash_amount = _money_field()
    gcash_amount = _money_field()
    amount_received = _money_field()

    class Meta:
        abstract = True

    def clear_payment(self):
        self.payment_method = None
        self.cash_amount = None
        self.gcash_amount = None
        self.amount_received = None

    @property
    def change_due(self):
        if not self.is_paid or self.amount_received is None:
            return Decimal('0.00')
        return max(self.amount_received - self.subtotal, Decimal('0.00'))


def _subtotal(items):
    return sum((item.line_total for item in items), Decimal('0.00'))


class Order(Payable):
    """
    Customer order with its main items, appended orders and notes.

    ``version`` increases on every mutation so clients can discard stale
    copies of the same order.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_number = models.PositiveIntegerField(unique=True)
    customer_name = models.CharField(max_length=100)
    order_type = models.CharField(
        max_length=10,
        choices=OrderType.choices,
        default=OrderType.DINE_IN,
    )
    branch = models.CharField(
        max_length=20,
        choices=Branch.choices,
        default=DEFAULT_BRANCH,
        db_index=True,
    )
    order_taker_name = models.CharField(max_length=100, blank=True, default='')
    order_taker_email = models.CharField(max_length=255, blank=True, default='')
    all_items_served_at = models.DateTimeField(null=True, blank=True)
    version = models.PositiveIntegerField(default=1)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['branch', 'created_at'], name='orders_branch_created_idx'),
            models.Index(fields=['is_paid'], name='orders_is_paid_idx'),
        ]

    def __str__(self):
        return f"#{self.order_number} {self.customer_name}"

    @property
    def main_items(self):
        return [item for item in self.items.all() if item.appended_order_id is None]

    @property
    def all_items(self):
        return list(self.items.all())

    @property
    def subtotal(self):
        """Amount due for the main items only."""
        return _subtotal(self.main_items)

    @property
    def total_amount(self):
        return _subtotal(self.all_items)

    @property
    def total_items(self):
        return sum(item.quantity for item in self.all_items)

    @property
    def order_status(self):
        statuses = [item.status for item in self.all_items]
        if statuses and all(s == ItemStatus.SERVED for s in statuses):
            return OrderStatus.COMPLETED
        if any(s in (ItemStatus.PREPARING, ItemStatus.READY) for s in statuses):
            return OrderStatus.IN_PROGRESS
        return OrderStatus.PENDING

    @property
    def total_paid_amount(self):
        paid = self.subtotal if self.is_paid else Decimal('0.00')
        for appended in self.appended_orders.all():
            if appended.is_paid:
                paid += appended.subtotal
        return paid

    @property
    def pending_amount(self):
        return self.total_amount - self.total_paid_amount

    def is_fully_paid(self):
        return self.is_paid and all(a.is_paid for a in self.appended_orders.all())

    def is_fully_served(self):
        items = self.all_items
        return bool(items) and all(item.status == ItemStatus.SERVED for item in items)


class AppendedOrder(Payable):
    """Items added to an existing order, paid separately."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='appended_orders')
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'appended_orders'
        ordering = ['created_at']

    def __str__(self):
        return f"Appended to #{self.order.order_number}"

    @property
    def subtotal(self):
        return _subtotal(self.items.all())


class OrderItem(models.Model):
    """
    A line on an order.

    Main items have no ``appended_order``; appended items point at one.
    ``item_id`` is the client-supplied id used by the kitchen display.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    appended_order = models.ForeignKey(
        AppendedOrder,
        on_delete=models.CASCADE,
        related_name='items',
        null=True,
        blank=True,
    )
    item_id = models.CharField(max_length=100)
    name = models.CharField(max_length=100)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    status = models.CharField(max_length=10, choices=ItemStatus.choices, default=ItemStatus.PENDING)
    item_type = models.CharField(max_length=10, choices=OrderType.choices, default=OrderType.DINE_IN)
    note = models.CharField(max_length=500, blank=True, default='')
    position = models.PositiveIntegerField(default=0)

    preparing_at = models.DateTimeField(null=True, blank=True)
    ready_at = models.DateTimeField(null=True, blank=True)
    served_at = models.DateTimeField(null=True, blank=True)
    prepared_by = models.CharField(max_length=100, blank=True, default='')
    prepared_by_email = models.CharField(max_length=255, blank=True, default='')
    served_by = models.CharField(max_length=100, blank=True, default='')
    served_by_email = models.CharField(max_length=255, blank=True, default='')

    class Meta:
        db_table = 'order_items'
        ordering = ['position']
        indexes = [
            models.Index(fields=['order', 'item_id'], name='order_items_lookup_idx'),
            models.Index(fields=['status'], name='order_items_status_idx'),
        ]

    def __str__(self):
        return f"{self.quantity}x {self.name}"

    @property
    def line_total(self):
        return self.price * self.quantity


class OrderNote(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='notes')
    content = models.CharField(max_length=500)
    created_by = models.CharField(max_length=100, blank=True, default='')
    created_by_email = models.CharField(max_length=255, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'order_notes'
        ordering = ['created_at']


class OrderStats(models.Model):
    """Running wait-time statistics per branch."""

    branch = models.CharField(max_length=20, choices=Branch.choices, unique=True)
    total_wait_time_ms = models.BigIntegerField(default=0)
    completed_orders_count = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'order_stats'
        verbose_name_plural = 'order stats'

    def __str__(self):
        return f"Stats for {self.branch}"

    @property
    def average_wait_time_ms(self):
        if not self.completed_orders_count:
            return 0
        return round(self.total_wait_time_ms / self.completed_orders_count)
