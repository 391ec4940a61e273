"""
Stock queries — read-only operations.

All methods are classmethods on Stock and use no locking.
"""

from decimal import Decimal

from django.db.models import Sum
from django.db.models.functions import Coalesce

from stockmaster.models.balance import Balance
from stockmaster.services.balances import BalanceStore
from stockmaster.services.ledger import StockLedger
from stockmaster.services.lookups import resolve_product, resolve_warehouse


class StockQueries:
    """Read-only stock query methods."""

    @classmethod
    def balance(cls, product, warehouse) -> Decimal:
        """
        Current quantity of a product at a warehouse.

        Args:
            product: Product or pk
            warehouse: Warehouse or pk

        Returns:
            Decimal (0 if the pair never had a movement)
        """
        product = resolve_product(product, require_active=False)
        warehouse = resolve_warehouse(warehouse, require_active=False)
        return BalanceStore.get_balance(product, warehouse)

    @classmethod
    def total_on_hand(cls, product) -> Decimal:
        """Quantity of a product across all warehouses."""
        return Balance.objects.for_product(product).aggregate(
            t=Coalesce(Sum('quantity'), Decimal('0'))
        )['t']

    @classmethod
    def list_balances(cls, product=None, warehouse=None, low_only: bool = False):
        """
        Balance rows with product and warehouse loaded.

        Args:
            product, warehouse: Optional filters (instance or pk)
            low_only: Only balances at or below their reorder level
        """
        qs = Balance.objects.low() if low_only else Balance.objects.all()
        qs = qs.select_related('product', 'product__category', 'warehouse')
        if product is not None:
            qs = qs.filter(product=resolve_product(product, require_active=False))
        if warehouse is not None:
            qs = qs.filter(warehouse=resolve_warehouse(warehouse, require_active=False))
        return list(qs)

    @classmethod
    def ledger(cls, limit: int | None = None, product=None, warehouse=None,
               entry_type=None):
        """Ledger entries, newest first. See StockLedger.recent()."""
        if product is not None:
            product = resolve_product(product, require_active=False)
        if warehouse is not None:
            warehouse = resolve_warehouse(warehouse, require_active=False)
        return StockLedger.recent(
            limit=limit,
            product=product,
            warehouse=warehouse,
            entry_type=entry_type,
        )
