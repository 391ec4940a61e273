"""
Stock receipts — two-phase goods intake.

create_receipt() records a pending receipt without touching stock.
complete_receipt() applies it, once.
"""

import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction
from django.utils import timezone

from stockmaster.exceptions import StockError
from stockmaster.models.enums import EntryType, ReceiptStatus
from stockmaster.models.receipt import StockReceipt
from stockmaster.services.lookups import (
    create_numbered,
    get_or_404,
    resolve_product,
    resolve_warehouse,
    to_quantity,
)
from stockmaster.services.movements import apply_movement

logger = logging.getLogger('stockmaster')

MAX_UNIT_COST = Decimal('9999999999.99')


def _unit_cost(value) -> Decimal:
    try:
        cost = Decimal(str(value if value not in (None, '') else 0)).quantize(Decimal('0.01'))
    except (InvalidOperation, TypeError, ValueError):
        raise StockError('VALIDATION_ERROR', errors={'unit_cost': ['Enter a number.']}) from None
    if not cost.is_finite() or cost < 0:
        raise StockError('VALIDATION_ERROR', errors={'unit_cost': ['Must be zero or more.']})
    if cost > MAX_UNIT_COST:
        raise StockError('VALIDATION_ERROR', errors={'unit_cost': [f'Must be at most {MAX_UNIT_COST}.']})
    return cost


def _actor(user):
    return user if user is not None and user.is_authenticated else None


class StockReceipts:
    """Receipt methods."""

    @classmethod
    def create_receipt(cls, product, warehouse, quantity, unit_cost=0,
                       supplier_name='', notes='', receipt_number=None,
                       user=None) -> StockReceipt:
        """
        Register incoming goods as pending.

        Raises:
            StockError('INVALID_PRODUCT' | 'INVALID_WAREHOUSE' | 'NOT_FOUND')
            StockError('INVALID_QUANTITY'): quantity <= 0
            StockError('DUPLICATE_NUMBER'): receipt_number already used
        """
        product = resolve_product(product)
        warehouse = resolve_warehouse(warehouse)
        quantity = to_quantity(quantity)

        receipt = create_numbered(
            StockReceipt, 'receipt_number', 'RCV', receipt_number,
            product=product,
            warehouse=warehouse,
            quantity=quantity,
            unit_cost=_unit_cost(unit_cost),
            supplier_name=supplier_name or '',
            notes=notes or '',
            created_by=_actor(user),
        )
        logger.info(
            "stock.receipt.created",
            extra={
                "receipt": receipt.receipt_number,
                "product": product.sku,
                "warehouse": warehouse.code,
                "qty": str(quantity),
            },
        )
        return receipt

    @classmethod
    def complete_receipt(cls, receipt_id, user=None) -> StockReceipt:
        """
        Apply a pending receipt to stock.

        Raises:
            StockError('NOT_FOUND'): Unknown receipt
            StockError('INVALID_STATUS'): Receipt is not pending

        Concurrency:
            - Receipt row locked with select_for_update(), so two
              concurrent completions apply the quantity only once
        """
        with transaction.atomic():
            receipt = get_or_404(StockReceipt, receipt_id)
            receipt = (
                StockReceipt.objects
                .select_for_update()
                .select_related('product', 'warehouse')
                .get(pk=receipt.pk)
            )

            if receipt.status != ReceiptStatus.PENDING:
                raise StockError(
                    'INVALID_STATUS',
                    'Receipt already completed',
                    current_status=receipt.status,
                )

            apply_movement(
                receipt.product,
                receipt.warehouse,
                receipt.quantity,
                EntryType.RECEIPT,
                reference_number=receipt.receipt_number,
                user=user,
            )

            receipt.status = ReceiptStatus.COMPLETED
            receipt.completed_at = timezone.now()
            receipt.save(update_fields=['status', 'completed_at'])

        logger.info("stock.receipt.completed", extra={"receipt": receipt.receipt_number})
        return receipt

    @classmethod
    def list_receipts(cls, status=None):
        qs = StockReceipt.objects.select_related('product', 'warehouse', 'created_by')
        if status:
            qs = qs.filter(status=status)
        return list(qs)
