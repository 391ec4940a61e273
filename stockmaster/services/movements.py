"""
Stock movements — the single write path for balances.

Every handler (receipt, delivery, transfer, adjustment) changes stock by
calling apply_movement(), which updates the balance, appends the ledger
entry and evaluates the low-stock alert in one transaction.
"""

import logging
from decimal import Decimal

from django.db import transaction

from stockmaster.exceptions import StockError
from stockmaster.models.enums import EntryType
from stockmaster.models.ledger import LedgerEntry
from stockmaster.services.alerts import StockAlerts
from stockmaster.services.balances import BalanceStore
from stockmaster.services.ledger import StockLedger

logger = logging.getLogger('stockmaster')

INBOUND = {EntryType.RECEIPT, EntryType.TRANSFER_IN}
OUTBOUND = {EntryType.DELIVERY, EntryType.TRANSFER_OUT}

# Outbound movements never take a balance below zero
FLOORED = OUTBOUND


def apply_movement(product, warehouse, delta: Decimal, entry_type,
                   reference_number='', user=None,
                   floor: bool | None = None) -> LedgerEntry:
    """
    Change a balance and record it.

    Args:
        product, warehouse: Balance key
        delta: Signed change (positive for inbound types, negative for
            outbound ones, any non-zero value for adjustments)
        entry_type: EntryType value
        reference_number: Operation number of the causing document
        user: Acting user (optional)
        floor: Clamp the resulting balance at zero. Defaults to True for
            deliveries and transfers out, False otherwise.

    Returns:
        The ledger entry. Its quantity_change is the change actually
        applied (new - old), so balances always equal the ledger sum.

    Raises:
        StockError('INVALID_QUANTITY'): delta has the wrong sign or is zero

    Concurrency:
        - Runs under transaction.atomic()
        - Balance row locked with select_for_update() until commit
    """
    if delta == 0:
        raise StockError('INVALID_QUANTITY', requested=delta)
    if entry_type in INBOUND and delta < 0:
        raise StockError('INVALID_QUANTITY', requested=delta)
    if entry_type in OUTBOUND and delta > 0:
        raise StockError('INVALID_QUANTITY', requested=delta)

    if floor is None:
        floor = entry_type in FLOORED

    with transaction.atomic():
        old, new = BalanceStore.apply_delta(product, warehouse, delta, floor=floor)

        entry = StockLedger.append(
            product=product,
            warehouse=warehouse,
            entry_type=entry_type,
            quantity_change=new - old,
            quantity_after=new,
            reference_number=reference_number,
            user=user if user is not None and user.is_authenticated else None,
        )

        StockAlerts.evaluate(product, warehouse, new)

    logger.info(
        "stock.movement",
        extra={
            "type": str(entry_type),
            "product": product.sku,
            "warehouse": warehouse.code,
            "delta": str(delta),
            "applied": str(new - old),
            "qty_after": str(new),
            "reference": reference_number,
        },
    )
    if new - old != delta:
        logger.warning(
            "stock.movement.clamped",
            extra={
                "product": product.sku,
                "warehouse": warehouse.code,
                "requested": str(delta),
                "applied": str(new - old),
            },
        )
    return entry
