# Generated manually for the initial withdrawals schema

import uuid
from decimal import Decimal
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Withdrawal',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('withdrawal', 'Withdrawal'), ('purchase', 'Purchase')], max_length=20)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('description', models.CharField(max_length=500)),
                ('charged_to', models.CharField(choices=[('john', 'John'), ('elwin', 'Elwin'), ('all', 'All (split 50/50)')], default='john', max_length=10)),
                ('payment_method', models.CharField(blank=True, choices=[('cash', 'Cash'), ('gcash', 'GCash')], max_length=10, null=True)),
                ('branch', models.CharField(choices=[('pangabugan', 'Pangabugan Branch'), ('baan', 'Baan Branch')], default='pangabugan', max_length=20)),
                ('created_by_name', models.CharField(blank=True, default='', max_length=100)),
                ('created_by_email', models.CharField(blank=True, default='', max_length=255)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='withdrawals', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'withdrawals',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['branch', 'created_at'], name='withdrawals_branch_idx'), models.Index(fields=['type', 'created_at'], name='withdrawals_type_idx')],
            },
        ),
    ]
