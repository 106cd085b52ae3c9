# Generated manually for the initial menu schema

import uuid
from decimal import Decimal
import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.CharField(max_length=50, primary_key=True, serialize=False, validators=[django.core.validators.RegexValidator(message='Category ID can only contain lowercase letters, numbers, and hyphens', regex='^[a-z0-9-]+$')])),
                ('name', models.CharField(max_length=50)),
                ('image', models.CharField(blank=True, default='', max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'categories',
                'ordering': ['name'],
                'verbose_name_plural': 'categories',
            },
        ),
        migrations.CreateModel(
            name='MenuItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('image', models.CharField(blank=True, default='', max_length=500)),
                ('online_image', models.CharField(blank=True, default='', max_length=500)),
                ('is_best_seller', models.BooleanField(default=False)),
                ('is_public', models.BooleanField(default=False)),
                ('owner', models.CharField(choices=[('john', 'John'), ('elwin', 'Elwin')], default='john', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='menu_items', to='menu.category')),
            ],
            options={
                'db_table': 'menu_items',
                'ordering': ['category_id', 'name'],
                'indexes': [models.Index(fields=['category'], name='menu_items_category_idx'), models.Index(fields=['is_best_seller'], name='menu_items_best_seller_idx'), models.Index(fields=['is_public'], name='menu_items_public_idx')],
            },
        ),
    ]
