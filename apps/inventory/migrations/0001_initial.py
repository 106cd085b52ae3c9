# Generated manually for the initial inventory schema

import uuid
import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='InventoryItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('quantity', models.PositiveIntegerField(default=0)),
                ('unit', models.CharField(choices=[('pcs', 'Pieces'), ('kg', 'Kilograms'), ('g', 'Grams'), ('liters', 'Liters'), ('ml', 'Milliliters'), ('boxes', 'Boxes'), ('bags', 'Bags'), ('bottles', 'Bottles'), ('cans', 'Cans')], default='pcs', max_length=10)),
                ('category', models.CharField(choices=[('Coffee Beans', 'Coffee Beans'), ('Milk & Dairy', 'Milk & Dairy'), ('Syrups & Flavors', 'Syrups & Flavors'), ('Pastries & Bread', 'Pastries & Bread'), ('Food Ingredients', 'Food Ingredients'), ('Packaging', 'Packaging'), ('Supplies', 'Supplies'), ('Other', 'Other')], max_length=30)),
                ('low_stock_threshold', models.PositiveIntegerField(default=10, validators=[django.core.validators.MinValueValidator(0)])),
                ('notes', models.CharField(blank=True, default='', max_length=500)),
                ('image', models.CharField(blank=True, default='', max_length=500)),
                ('branch', models.CharField(choices=[('pangabugan', 'Pangabugan Branch'), ('baan', 'Baan Branch')], default='pangabugan', max_length=20)),
                ('last_updated_by', models.CharField(blank=True, default='', max_length=100)),
                ('last_updated_by_email', models.CharField(blank=True, default='', max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'inventory_items',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['category'], name='inventory_category_idx')],
                'constraints': [models.UniqueConstraint(fields=('branch', 'name'), name='inventory_unique_name_per_branch')],
            },
        ),
    ]
