"""
Management command to create the default staff accounts.

Usage:
    python manage.py seed_users
    python manage.py seed_users --password secret123

Existing accounts (matched by email) are left untouched.
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User, UserRole


DEFAULT_USERS = [
    ('admin@ordertaker.com', 'Super Admin', UserRole.SUPER_ADMIN),
    ('ordertaker@ordertaker.com', 'Order Taker', UserRole.ORDER_TAKER),
    ('crew@ordertaker.com', 'Crew Member', UserRole.CREW),
    ('ordertakercrew@ordertaker.com', 'Order Taker Crew', UserRole.ORDER_TAKER_CREW),
]


class Command(BaseCommand):
    help = 'Create the default staff accounts (one per role)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--password',
            default='password123',
            help='Password for newly created accounts',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        created = 0
        for email, name, role in DEFAULT_USERS:
            if User.objects.filter(email=email).exists():
                self.stdout.write(f'  {email} already exists, skipping')
                continue

            if role == UserRole.SUPER_ADMIN:
                User.objects.create_superuser(email=email, password=options['password'], name=name)
            else:
                User.objects.create_user(email=email, password=options['password'], name=name, role=role)
            created += 1
            self.stdout.write(f'  {email} ({role})')

        self.stdout.write(self.style.SUCCESS(f'Created {created} user(s).'))
