"""
Stock transfers — move quantity between two warehouses.
"""

import logging

from django.db import transaction
from django.utils import timezone

from stockmaster.exceptions import StockError
from stockmaster.models.enums import EntryType, TransferStatus
from stockmaster.models.transfer import StockTransfer
from stockmaster.services.balances import BalanceStore
from stockmaster.services.lookups import (
    create_numbered,
    operation_number,
    resolve_product,
    resolve_warehouse,
    to_quantity,
)
from stockmaster.services.movements import apply_movement

logger = logging.getLogger('stockmaster')


class StockTransfers:
    """Transfer methods."""

    @classmethod
    def transfer(cls, product, from_warehouse, to_warehouse, quantity,
                 notes='', transfer_number=None, user=None) -> StockTransfer:
        """
        Move quantity from one warehouse to another.

        Both legs (transfer_out at source, transfer_in at destination)
        commit together or not at all. The source is floored at zero when it
        holds less than quantity; the destination is credited the full
        quantity either way.

        Raises:
            StockError('INVALID_PRODUCT' | 'INVALID_WAREHOUSE' | 'NOT_FOUND')
            StockError('INVALID_QUANTITY'): quantity <= 0
            StockError('SAME_WAREHOUSE'): Source equals destination
            StockError('DUPLICATE_NUMBER'): transfer_number already used

        Concurrency:
            - Both balance rows locked in ascending warehouse id order
        """
        product = resolve_product(product)
        source = resolve_warehouse(from_warehouse)
        destination = resolve_warehouse(to_warehouse)
        quantity = to_quantity(quantity)

        if source.pk == destination.pk:
            raise StockError('SAME_WAREHOUSE', warehouse_id=source.pk)

        number = operation_number(StockTransfer, 'transfer_number', 'TRF', transfer_number)

        with transaction.atomic():
            BalanceStore.lock_many(product, [source, destination])

            out_entry = apply_movement(
                product, source, -quantity, EntryType.TRANSFER_OUT,
                reference_number=number, user=user,
            )
            apply_movement(
                product, destination, quantity, EntryType.TRANSFER_IN,
                reference_number=number, user=user,
            )

            record = create_numbered(
                StockTransfer, 'transfer_number', 'TRF', number,
                product=product,
                from_warehouse=source,
                to_warehouse=destination,
                quantity=quantity,
                notes=notes or '',
                status=TransferStatus.COMPLETED,
                created_by=user if user is not None and user.is_authenticated else None,
                completed_at=timezone.now(),
            )

        logger.info(
            "stock.transfer",
            extra={
                "transfer": number,
                "product": product.sku,
                "from": source.code,
                "to": destination.code,
                "qty": str(quantity),
                "shipped": str(-out_entry.quantity_change),
            },
        )
        return record

    @classmethod
    def list_transfers(cls, product=None):
        qs = StockTransfer.objects.select_related(
            'product', 'from_warehouse', 'to_warehouse', 'created_by',
        )
        if product is not None:
            qs = qs.filter(product=product)
        return list(qs)
