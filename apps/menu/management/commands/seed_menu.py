"""
Management command to seed categories and menu items.

Usage:
    python manage.py seed_menu
    python manage.py seed_menu --file menu.csv
    python manage.py seed_menu --file menu.csv --clear

CSV columns: name, price, category, owner, image, best_seller.
``category`` may be a category id or name; unknown categories are created.
Without --file a small default menu is created.
"""

import csv
from decimal import Decimal, InvalidOperation

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils.text import slugify

from apps.menu.models import Category, MenuItem, Owner


DEFAULT_MENU = [
    # name, price, category, owner, best seller
    ('Americano', '90', 'Coffee', 'john', True),
    ('Cafe Latte', '120', 'Coffee', 'john', True),
    ('Spanish Latte', '130', 'Coffee', 'john', False),
    ('Matcha Latte', '140', 'Non-Coffee', 'elwin', False),
    ('Chocolate', '110', 'Non-Coffee', 'elwin', False),
    ('Clubhouse Sandwich', '160', 'Food', 'elwin', False),
]

TRUTHY = {'yes', 'true', '1', 'y'}


class Command(BaseCommand):
    help = 'Seed menu categories and items (from a CSV file or a default set)'

    def add_arguments(self, parser):
        parser.add_argument('--file', help='CSV file with menu items')
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete existing menu items and categories first',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing menu...')
            MenuItem.objects.all().delete()
            Category.objects.all().delete()

        rows = self.read_rows(options['file']) if options['file'] else self.default_rows()

        created = updated = 0
        for row in rows:
            category = self.get_or_create_category(row['category'])
            _, was_created = MenuItem.objects.update_or_create(
                name=row['name'],
                defaults={
                    'price': row['price'],
                    'category': category,
                    'owner': row['owner'],
                    'image': row.get('image', ''),
                    'is_best_seller': row['best_seller'],
                },
            )
            if was_created:
                created += 1
            else:
                updated += 1

        self.stdout.write(self.style.SUCCESS(
            f'Menu seeded: {created} created, {updated} updated.'
        ))

    def default_rows(self):
        return [
            {
                'name': name,
                'price': Decimal(price),
                'category': category,
                'owner': owner,
                'best_seller': best_seller,
            }
            for name, price, category, owner, best_seller in DEFAULT_MENU
        ]

    def read_rows(self, path):
        rows = []
        try:
            with open(path, newline='', encoding='utf-8') as fh:
                for line_no, raw in enumerate(csv.DictReader(fh), start=2):
                    rows.append(self.parse_row(raw, line_no))
        except OSError as e:
            raise CommandError(f'Cannot read {path}: {e}')
        return rows

    def parse_row(self, raw, line_no):
        row = {(k or '').strip().lower(): (v or '').strip() for k, v in raw.items()}
        if not row.get('name') or not row.get('category'):
            raise CommandError(f'Line {line_no}: name and category are required')

        try:
            price = Decimal(row.get('price', ''))
        except InvalidOperation:
            raise CommandError(f'Line {line_no}: invalid price {row.get("price")!r}')
        if price < 0:
            raise CommandError(f'Line {line_no}: price cannot be negative')

        owner = (row.get('owner') or Owner.JOHN).lower()
        if owner not in Owner.values:
            raise CommandError(f'Line {line_no}: owner must be "john" or "elwin"')

        return {
            'name': row['name'],
            'price': price,
            'category': row['category'],
            'owner': owner,
            'image': row.get('image', ''),
            'best_seller': row.get('best_seller', '').lower() in TRUTHY,
        }

    def get_or_create_category(self, value):
        category = (
            Category.objects.filter(id=value.lower()).first()
            or Category.objects.filter(name__iexact=value).first()
        )
        if category is None:
            category = Category.objects.create(id=slugify(value), name=value)
            self.stdout.write(f'  Created category {category.id}')
        return category
