"""
Balance store — current quantity per (product, warehouse).

Reads use no locking. Writes must run inside transaction.atomic() and go
through services.movements.apply_movement() so that every change gets
its ledger entry.
"""

from decimal import Decimal

from django.db import transaction

from stockmaster.exceptions import StockError
from stockmaster.models.balance import Balance
from stockmaster.services.lookups import MAX_QUANTITY

ZERO = Decimal('0')


class BalanceStore:
    """Read and mutate balances."""

    @classmethod
    def get_balance(cls, product, warehouse) -> Decimal:
        """Current quantity (0 if the key was never touched)."""
        quantity = Balance.objects.filter(
            product=product,
            warehouse=warehouse,
        ).values_list('quantity', flat=True).first()
        return quantity if quantity is not None else ZERO

    @classmethod
    def lock(cls, product, warehouse) -> Balance:
        """
        Lock the balance row, creating it at zero on first touch.

        Concurrency:
            - Caller must hold a transaction.atomic() block
            - get_or_create absorbs the insert race on the unique key
            - select_for_update() serializes writers on the key
        """
        Balance.objects.get_or_create(product=product, warehouse=warehouse)
        return Balance.objects.select_for_update().get(
            product=product,
            warehouse=warehouse,
        )

    @classmethod
    def lock_many(cls, product, warehouses) -> dict:
        """
        Lock several balances of one product in ascending warehouse id order.

        Returns:
            {warehouse_id: Balance}
        """
        locked = {}
        for warehouse in sorted(warehouses, key=lambda w: w.pk):
            locked[warehouse.pk] = cls.lock(product, warehouse)
        return locked

    @classmethod
    def apply_delta(cls, product, warehouse, delta: Decimal,
                    floor: bool = False) -> tuple[Decimal, Decimal]:
        """
        Read current, add delta, clamp at zero when floor=True, persist.

        Returns:
            (old_quantity, new_quantity)

        Raises:
            StockError('INVALID_QUANTITY'): Resulting balance beyond MAX_QUANTITY
        """
        with transaction.atomic():
            balance = cls.lock(product, warehouse)
            old = balance.quantity
            new = old + delta
            if floor and new < ZERO:
                new = ZERO
            if abs(new) > MAX_QUANTITY:
                raise StockError(
                    'INVALID_QUANTITY',
                    f'Balance cannot exceed {MAX_QUANTITY}',
                    current=old,
                    requested=delta,
                )

            balance.quantity = new
            balance.save(update_fields=['quantity', 'updated_at'])
            return old, new
