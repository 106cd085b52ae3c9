# Generated manually for the initial DTR schema

import uuid
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='DTRRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('branch', models.CharField(choices=[('pangabugan', 'Pangabugan Branch'), ('baan', 'Baan Branch')], default='pangabugan', max_length=20)),
                ('clock_in_time', models.DateTimeField()),
                ('clock_out_time', models.DateTimeField(blank=True, null=True)),
                ('date', models.DateField(help_text='Local date of the clock-in')),
                ('status', models.CharField(choices=[('clocked_in', 'Clocked in'), ('clocked_out', 'Clocked out')], default='clocked_in', max_length=20)),
                ('notes', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='dtr_records', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'dtr_records',
                'ordering': ['-clock_in_time'],
                'indexes': [
                    models.Index(fields=['user', 'date'], name='dtr_user_date_idx'),
                    models.Index(fields=['user', 'branch', 'status'], name='dtr_user_status_idx'),
                    models.Index(fields=['branch', 'clock_in_time'], name='dtr_branch_clock_in_idx'),
                ],
            },
        ),
    ]
