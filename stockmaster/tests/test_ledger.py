"""
Tests for balances, the movement entry point and the ledger.
"""

from decimal import Decimal

import pytest

from stockmaster import stock, StockError
from stockmaster.models import Balance, EntryType, LedgerEntry
from stockmaster.services.balances import BalanceStore
from stockmaster.services.movements import apply_movement


pytestmark = pytest.mark.django_db


class TestBalanceStore:
    """Tests for BalanceStore and stock.balance()."""

    def test_untouched_key_is_zero(self, product, main):
        assert stock.balance(product, main) == Decimal('0')
        assert not Balance.objects.exists()

    def test_balance_accepts_primary_keys(self, product, main, receive):
        receive(product, main, 7)

        assert stock.balance(product.pk, main.pk) == Decimal('7')

    def test_apply_delta_creates_row_on_first_touch(self, product, main):
        old, new = BalanceStore.apply_delta(product, main, Decimal('4'))

        assert (old, new) == (Decimal('0'), Decimal('4'))
        assert Balance.objects.get(product=product, warehouse=main).quantity == Decimal('4')

    def test_apply_delta_floor(self, product, main):
        """floor=True clamps at zero, floor=False applies the raw delta."""
        assert BalanceStore.apply_delta(product, main, Decimal('-3'), floor=True) == (0, 0)
        assert BalanceStore.apply_delta(product, main, Decimal('-3')) == (0, Decimal('-3'))

    def test_apply_delta_rejects_balance_beyond_column_limit(self, product, main):
        BalanceStore.apply_delta(product, main, Decimal('-999999999.999'))

        with pytest.raises(StockError) as exc:
            BalanceStore.apply_delta(product, main, Decimal('-1'))

        assert exc.value.code == 'INVALID_QUANTITY'
        assert stock.balance(product, main) == Decimal('-999999999.999')

    def test_list_balances_filters(self, product, untracked_product, main, overflow, receive):
        receive(product, main, 10)
        receive(product, overflow, 3)
        receive(untracked_product, main, 1)

        assert len(stock.list_balances()) == 3
        assert {b.warehouse for b in stock.list_balances(product=product)} == {main, overflow}
        assert [b.product for b in stock.list_balances(warehouse=overflow)] == [product]

    def test_list_balances_low_only(self, product, main, overflow, receive):
        receive(product, main, 10)
        receive(product, overflow, 3)

        low = stock.list_balances(low_only=True)

        assert [b.warehouse for b in low] == [overflow]
        assert low[0].is_low


class TestApplyMovement:
    """Tests for apply_movement()."""

    def test_records_entry_with_quantity_after(self, product, main):
        entry = apply_movement(product, main, Decimal('10'), EntryType.RECEIPT, reference_number='RCV-1')

        assert entry.quantity_change == Decimal('10')
        assert entry.quantity_after == Decimal('10')
        assert entry.reference_number == 'RCV-1'
        assert stock.balance(product, main) == Decimal('10')

    def test_rejects_zero_delta(self, product, main):
        with pytest.raises(StockError) as exc:
            apply_movement(product, main, Decimal('0'), EntryType.ADJUSTMENT)

        assert exc.value.code == 'INVALID_QUANTITY'

    def test_rejects_wrong_sign(self, product, main):
        with pytest.raises(StockError) as exc:
            apply_movement(product, main, Decimal('-1'), EntryType.RECEIPT)
        assert exc.value.code == 'INVALID_QUANTITY'

        with pytest.raises(StockError) as exc:
            apply_movement(product, main, Decimal('1'), EntryType.DELIVERY)
        assert exc.value.code == 'INVALID_QUANTITY'

        assert not LedgerEntry.objects.exists()

    def test_outbound_never_goes_negative(self, product, main):
        """Outbound movements clamp at zero and record the change applied."""
        apply_movement(product, main, Decimal('3'), EntryType.RECEIPT)

        entry = apply_movement(product, main, Decimal('-5'), EntryType.DELIVERY)

        assert entry.quantity_change == Decimal('-3')
        assert entry.quantity_after == Decimal('0')
        assert stock.balance(product, main) == Decimal('0')

    def test_records_acting_user(self, product, main, user):
        entry = apply_movement(product, main, Decimal('1'), EntryType.RECEIPT, user=user)

        assert entry.user == user


class TestLedgerImmutability:
    """Ledger entries cannot be changed or removed."""

    def test_update_raises(self, product, main, receive):
        receive(product, main, 10)
        entry = LedgerEntry.objects.get()
        entry.quantity_change = Decimal('99')

        with pytest.raises(ValueError):
            entry.save()

    def test_delete_raises(self, product, main, receive):
        receive(product, main, 10)
        entry = LedgerEntry.objects.get()

        with pytest.raises(ValueError):
            entry.delete()

        assert LedgerEntry.objects.count() == 1


class TestLedgerConsistency:
    """Balance equals the sum of its ledger changes after any mix of operations."""

    def _assert_consistent(self, product, warehouse):
        entries = list(LedgerEntry.objects.for_key(product, warehouse))
        running = Decimal('0')
        for entry in entries:
            running += entry.quantity_change
            assert entry.quantity_after == running
        assert stock.balance(product, warehouse) == running

    def test_mixed_operations(self, product, main, overflow, receive):
        receive(product, main, 20)

        order = stock.create_delivery(product, main, 5)
        stock.pack_delivery(order.pk)
        stock.deliver(order.pk)

        stock.transfer(product, main, overflow, 4)
        stock.adjust(product, main, -2, reason='damaged')
        stock.adjust(product, overflow, -10, reason='lost')  # clamped at zero

        assert stock.balance(product, main) == Decimal('9')
        assert stock.balance(product, overflow) == Decimal('0')
        self._assert_consistent(product, main)
        self._assert_consistent(product, overflow)

    def test_one_entry_per_mutation(self, product, main, overflow, receive):
        receive(product, main, 10)
        stock.transfer(product, main, overflow, 4)
        stock.adjust(product, overflow, 1, reason='count')

        types = list(LedgerEntry.objects.values_list('entry_type', flat=True))

        assert types == [
            EntryType.RECEIPT,
            EntryType.TRANSFER_OUT,
            EntryType.TRANSFER_IN,
            EntryType.ADJUSTMENT,
        ]


class TestLedgerRecent:
    """Tests for stock.ledger()."""

    def test_newest_first(self, product, main, receive):
        numbers = [receive(product, main, n).receipt_number for n in (1, 2, 3)]

        entries = stock.ledger()

        assert [e.reference_number for e in entries] == list(reversed(numbers))

    def test_limit(self, product, main, receive):
        for n in range(4):
            receive(product, main, n + 1)

        assert len(stock.ledger(limit=2)) == 2

    def test_negative_limit(self, product, main, receive):
        receive(product, main, 1)

        with pytest.raises(StockError) as exc:
            stock.ledger(limit=-1)

        assert exc.value.code == 'VALIDATION_ERROR'
        assert 'limit' in exc.value.data['errors']

    def test_default_limit_from_settings(self, product, main, receive, settings):
        settings.STOCKMASTER = {'LEDGER_RECENT_LIMIT': 3}
        for n in range(5):
            receive(product, main, n + 1)

        assert len(stock.ledger()) == 3

    def test_filters(self, product, main, overflow, receive):
        receive(product, main, 10)
        stock.transfer(product, main, overflow, 4)

        assert len(stock.ledger(warehouse=overflow)) == 1
        assert len(stock.ledger(entry_type=EntryType.TRANSFER_OUT)) == 1
        assert len(stock.ledger(product=product, warehouse=main)) == 2


class TestRecalculate:
    """Tests for Balance.recalculate()."""

    def test_repairs_drift(self, product, main, receive):
        receive(product, main, 10)
        Balance.objects.filter(product=product, warehouse=main).update(quantity=Decimal('99'))
        balance = Balance.objects.get(product=product, warehouse=main)

        assert balance.recalculate() == Decimal('10')

        balance.refresh_from_db()
        assert balance.quantity == Decimal('10')

    def test_no_drift_is_noop(self, product, main, receive):
        receive(product, main, 10)
        balance = Balance.objects.get(product=product, warehouse=main)

        assert balance.recalculate() == Decimal('10')
