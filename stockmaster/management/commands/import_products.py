"""
Management command to import products from a CSV file.

Columns: name, sku, category_id, unit, reorder_level, description,
is_active. Rows are matched by SKU: existing products are updated,
new ones created.

Usage:
    python manage.py import_products products.csv
"""

from django.core.management.base import BaseCommand, CommandError

from stockmaster.services.catalog import Catalog


class Command(BaseCommand):
    """Import products command."""

    help = 'Create or update products from a CSV file'

    def add_arguments(self, parser):
        parser.add_argument('path', help='CSV file (UTF-8, header row required)')

    def handle(self, *args, **options):
        try:
            with open(options['path'], newline='', encoding='utf-8-sig') as f:
                result = Catalog.import_products_csv(f)
        except OSError as exc:
            raise CommandError(f"Cannot read {options['path']}: {exc}") from exc

        for error in result.errors:
            self.stderr.write(f"Row {error['row']}: {error['error']}")

        self.stdout.write(self.style.SUCCESS(
            f'{result.created} created, {result.updated} updated, '
            f'{len(result.errors)} error(s)'
        ))
