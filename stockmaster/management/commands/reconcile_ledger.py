"""
Management command to compare balances with their ledger.

Every balance must equal the sum of its ledger changes. This reports
the keys where it does not and, with --fix, resets them to the ledger sum.

Usage:
    python manage.py reconcile_ledger
    python manage.py reconcile_ledger --fix
    python manage.py reconcile_ledger --warehouse MAIN
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from stockmaster.models import Balance


class Command(BaseCommand):
    """Reconcile balances against the ledger."""

    help = 'Detect (and optionally repair) balances that drifted from the ledger'

    def add_arguments(self, parser):
        parser.add_argument(
            '--fix',
            action='store_true',
            help='Rewrite drifted balances to the ledger sum',
        )
        parser.add_argument(
            '--warehouse',
            help='Only check balances of the warehouse with this code',
        )

    def handle(self, *args, **options):
        balances = Balance.objects.select_related('product', 'warehouse')
        if options['warehouse']:
            balances = balances.filter(warehouse__code=options['warehouse'])

        drifted = 0
        for balance in balances:
            expected = balance.ledger_total()
            if expected == balance.quantity:
                continue

            drifted += 1
            self.stdout.write(
                f'{balance.product.sku} @ {balance.warehouse.code}: '
                f'balance {balance.quantity}, ledger {expected}'
            )
            if options['fix']:
                with transaction.atomic():
                    locked = Balance.objects.select_for_update().get(pk=balance.pk)
                    locked.recalculate()

        if not drifted:
            self.stdout.write(self.style.SUCCESS('All balances match the ledger'))
        elif options['fix']:
            self.stdout.write(self.style.SUCCESS(f'{drifted} balance(s) fixed'))
        else:
            self.stdout.write(self.style.WARNING(f'{drifted} balance(s) drifted'))
