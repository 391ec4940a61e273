"""
Tests for management commands.
"""

from datetime import timedelta
from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.utils import timezone

from stockmaster import stock
from stockmaster.models import Balance, OneTimePassword, Product


pytestmark = pytest.mark.django_db


def run(*args):
    out, err = StringIO(), StringIO()
    call_command(*args, stdout=out, stderr=err)
    return out.getvalue(), err.getvalue()


class TestReconcileLedger:

    def test_clean(self, product, main, receive):
        receive(product, main, 10)

        out, _ = run('reconcile_ledger')

        assert 'All balances match the ledger' in out

    def test_reports_drift(self, product, main, receive):
        receive(product, main, 10)
        Balance.objects.update(quantity=Decimal('7'))

        out, _ = run('reconcile_ledger')

        assert '1 balance(s) drifted' in out
        assert 'WID-001 @ MAIN' in out
        assert stock.balance(product, main) == Decimal('7')

    def test_fix(self, product, main, receive):
        receive(product, main, 10)
        Balance.objects.update(quantity=Decimal('7'))

        out, _ = run('reconcile_ledger', '--fix')

        assert '1 balance(s) fixed' in out
        assert stock.balance(product, main) == Decimal('10')

    def test_warehouse_filter(self, product, main, overflow, receive):
        receive(product, main, 10)
        receive(product, overflow, 10)
        Balance.objects.filter(warehouse=main).update(quantity=Decimal('1'))

        out, _ = run('reconcile_ledger', '--warehouse', 'WH-2')

        assert 'All balances match the ledger' in out


class TestPurgeExpiredOtps:

    @pytest.fixture
    def codes(self, db):
        now = timezone.now()
        OneTimePassword.objects.create(email='a@example.com', code_hash='x', expires_at=now + timedelta(minutes=5))
        OneTimePassword.objects.create(email='b@example.com', code_hash='x', expires_at=now - timedelta(minutes=5))
        OneTimePassword.objects.create(
            email='c@example.com', code_hash='x', expires_at=now + timedelta(minutes=5), is_used=True,
        )

    def test_dry_run(self, codes):
        out, _ = run('purge_expired_otps', '--dry-run')

        assert '2 one-time password(s) would be deleted' in out
        assert OneTimePassword.objects.count() == 3

    def test_purge(self, codes):
        out, _ = run('purge_expired_otps')

        assert '2 one-time password(s) deleted' in out
        assert list(OneTimePassword.objects.values_list('email', flat=True)) == ['a@example.com']


class TestImportProducts:

    def test_imports_file(self, tmp_path):
        path = tmp_path / 'products.csv'
        path.write_text('name,sku,unit\nTape,TP-1,pcs\n,NO-NAME,pcs\n', encoding='utf-8')

        out, err = run('import_products', str(path))

        assert '1 created, 0 updated, 1 error(s)' in out
        assert 'Row 3' in err
        assert Product.objects.filter(sku='TP-1').exists()

    def test_missing_file(self, tmp_path):
        with pytest.raises(CommandError):
            call_command('import_products', str(tmp_path / 'missing.csv'))
