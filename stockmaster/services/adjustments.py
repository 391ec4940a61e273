"""
Stock adjustments — manual signed corrections (damage, counts, shrinkage).

Whether an adjustment may take a balance below zero is set by
STOCKMASTER['ADJUSTMENT_FLOOR_AT_ZERO'] (default True: clamp at zero).
"""

import logging

from django.db import transaction

from stockmaster.conf import stockmaster_settings
from stockmaster.exceptions import StockError
from stockmaster.models.adjustment import StockAdjustment
from stockmaster.models.enums import EntryType
from stockmaster.services.lookups import (
    create_numbered,
    operation_number,
    resolve_product,
    resolve_warehouse,
    to_quantity,
)
from stockmaster.services.movements import apply_movement

logger = logging.getLogger('stockmaster')


class StockAdjustments:
    """Adjustment methods."""

    @classmethod
    def adjust(cls, product, warehouse, quantity_change, reason, notes='',
               adjustment_number=None, user=None) -> StockAdjustment:
        """
        Apply a signed correction to a balance.

        Args:
            quantity_change: Non-zero signed delta
            reason: Required free text

        Returns:
            StockAdjustment with the requested change and the change
            actually applied (they differ when the floor clamped)

        Raises:
            StockError('REASON_REQUIRED'): Blank reason
            StockError('INVALID_QUANTITY'): Zero or non-numeric change
        """
        if not reason or not str(reason).strip():
            raise StockError('REASON_REQUIRED')

        product = resolve_product(product)
        warehouse = resolve_warehouse(warehouse)
        change = to_quantity(quantity_change, positive=False)
        number = operation_number(StockAdjustment, 'adjustment_number', 'ADJ', adjustment_number)

        with transaction.atomic():
            entry = apply_movement(
                product,
                warehouse,
                change,
                EntryType.ADJUSTMENT,
                reference_number=number,
                user=user,
                floor=stockmaster_settings.ADJUSTMENT_FLOOR_AT_ZERO,
            )
            adjustment = create_numbered(
                StockAdjustment, 'adjustment_number', 'ADJ', number,
                product=product,
                warehouse=warehouse,
                quantity_change=change,
                applied_change=entry.quantity_change,
                reason=str(reason).strip(),
                notes=notes or '',
                created_by=user if user is not None and user.is_authenticated else None,
            )

        logger.info(
            "stock.adjustment",
            extra={
                "adjustment": number,
                "product": product.sku,
                "warehouse": warehouse.code,
                "requested": str(change),
                "applied": str(entry.quantity_change),
                "reason": adjustment.reason,
            },
        )
        return adjustment

    @classmethod
    def list_adjustments(cls, product=None, warehouse=None):
        qs = StockAdjustment.objects.select_related('product', 'warehouse', 'created_by')
        if product is not None:
            qs = qs.filter(product=product)
        if warehouse is not None:
            qs = qs.filter(warehouse=warehouse)
        return list(qs)
