# Generated manually for the initial customer photos schema

import uuid
import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='CustomerPhoto',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('image', models.CharField(max_length=500)),
                ('alt_text', models.CharField(default='Customer photo', max_length=200)),
                ('is_active', models.BooleanField(default=False)),
                ('display_order', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'customer_photos',
                'ordering': ['display_order', 'created_at'],
                'indexes': [models.Index(fields=['is_active', 'display_order'], name='customer_photos_active_idx')],
            },
        ),
    ]
