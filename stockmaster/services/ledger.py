"""
Stock ledger — append-only history of balance changes.
"""

from decimal import Decimal

from django.db.models import Sum
from django.db.models.functions import Coalesce

from stockmaster.conf import stockmaster_settings
from stockmaster.exceptions import StockError
from stockmaster.models.ledger import LedgerEntry


class StockLedger:
    """Append and read ledger entries."""

    @classmethod
    def append(cls, product, warehouse, entry_type, quantity_change,
               quantity_after, reference_number='', user=None) -> LedgerEntry:
        """Record one change. Entries are never edited afterwards."""
        return LedgerEntry.objects.create(
            product=product,
            warehouse=warehouse,
            entry_type=entry_type,
            quantity_change=quantity_change,
            quantity_after=quantity_after,
            reference_number=reference_number or '',
            user=user,
        )

    @classmethod
    def recent(cls, limit: int | None = None, product=None, warehouse=None,
               entry_type=None):
        """
        Newest entries first.

        Args:
            limit: Max entries (default LEDGER_RECENT_LIMIT)
            product, warehouse, entry_type: Optional filters

        Raises:
            StockError('VALIDATION_ERROR'): Negative limit
        """
        if limit is None:
            limit = stockmaster_settings.LEDGER_RECENT_LIMIT
        if limit < 0:
            raise StockError('VALIDATION_ERROR', errors={'limit': ['Must be zero or more.']})

        qs = LedgerEntry.objects.select_related('product', 'warehouse', 'user')
        if product is not None:
            qs = qs.filter(product=product)
        if warehouse is not None:
            qs = qs.filter(warehouse=warehouse)
        if entry_type:
            qs = qs.filter(entry_type=entry_type)
        return list(qs.recent()[:limit])

    @classmethod
    def total(cls, product, warehouse) -> Decimal:
        """Sum of all changes for a key."""
        return LedgerEntry.objects.for_key(product, warehouse).aggregate(
            t=Coalesce(Sum('quantity_change'), Decimal('0'))
        )['t']
