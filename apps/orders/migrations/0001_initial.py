# Generated manually for the initial orders schema

import uuid
from decimal import Decimal
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


BRANCH_CHOICES = [('pangabugan', 'Pangabugan Branch'), ('baan', 'Baan Branch')]
ORDER_TYPE_CHOICES = [('dine-in', 'Dine-in'), ('take-out', 'Take-out')]
PAYMENT_METHOD_CHOICES = [('cash', 'Cash'), ('gcash', 'GCash'), ('split', 'Split (cash + GCash)')]


def money():
    return models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('is_paid', models.BooleanField(default=False)),
                ('payment_method', models.CharField(blank=True, choices=PAYMENT_METHOD_CHOICES, max_length=10, null=True)),
                ('cash_amount', money()),
                ('gcash_amount', money()),
                ('amount_received', money()),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('order_number', models.PositiveIntegerField(unique=True)),
                ('customer_name', models.CharField(max_length=100)),
                ('order_type', models.CharField(choices=ORDER_TYPE_CHOICES, default='dine-in', max_length=10)),
                ('branch', models.CharField(choices=BRANCH_CHOICES, db_index=True, default='pangabugan', max_length=20)),
                ('order_taker_name', models.CharField(blank=True, default='', max_length=100)),
                ('order_taker_email', models.CharField(blank=True, default='', max_length=255)),
                ('all_items_served_at', models.DateTimeField(blank=True, null=True)),
                ('version', models.PositiveIntegerField(default=1)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'orders',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['branch', 'created_at'], name='orders_branch_created_idx'), models.Index(fields=['is_paid'], name='orders_is_paid_idx')],
            },
        ),
        migrations.CreateModel(
            name='AppendedOrder',
            fields=[
                ('is_paid', models.BooleanField(default=False)),
                ('payment_method', models.CharField(blank=True, choices=PAYMENT_METHOD_CHOICES, max_length=10, null=True)),
                ('cash_amount', money()),
                ('gcash_amount', money()),
                ('amount_received', money()),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='appended_orders', to='orders.order')),
            ],
            options={
                'db_table': 'appended_orders',
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('item_id', models.CharField(max_length=100)),
                ('name', models.CharField(max_length=100)),
                ('price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('quantity', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('preparing', 'Preparing'), ('ready', 'Ready'), ('served', 'Served')], default='pending', max_length=10)),
                ('item_type', models.CharField(choices=ORDER_TYPE_CHOICES, default='dine-in', max_length=10)),
                ('note', models.CharField(blank=True, default='', max_length=500)),
                ('position', models.PositiveIntegerField(default=0)),
                ('preparing_at', models.DateTimeField(blank=True, null=True)),
                ('ready_at', models.DateTimeField(blank=True, null=True)),
                ('served_at', models.DateTimeField(blank=True, null=True)),
                ('prepared_by', models.CharField(blank=True, default='', max_length=100)),
                ('prepared_by_email', models.CharField(blank=True, default='', max_length=255)),
                ('served_by', models.CharField(blank=True, default='', max_length=100)),
                ('served_by_email', models.CharField(blank=True, default='', max_length=255)),
                ('appended_order', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='items', to='orders.appendedorder')),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='orders.order')),
            ],
            options={
                'db_table': 'order_items',
                'ordering': ['position'],
                'indexes': [models.Index(fields=['order', 'item_id'], name='order_items_lookup_idx'), models.Index(fields=['status'], name='order_items_status_idx')],
            },
        ),
        migrations.CreateModel(
            name='OrderNote',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('content', models.CharField(max_length=500)),
                ('created_by', models.CharField(blank=True, default='', max_length=100)),
                ('created_by_email', models.CharField(blank=True, default='', max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='notes', to='orders.order')),
            ],
            options={
                'db_table': 'order_notes',
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='OrderStats',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('branch', models.CharField(choices=BRANCH_CHOICES, max_length=20, unique=True)),
                ('total_wait_time_ms', models.BigIntegerField(default=0)),
                ('completed_orders_count', models.PositiveIntegerField(default=0)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'order_stats',
                'verbose_name_plural': 'order stats',
            },
        ),
    ]
