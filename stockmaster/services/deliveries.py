"""
Stock deliveries — three-step outbound workflow.

Lifecycle:
    create_delivery()  → Picked     (availability checked, stock untouched)
    pack_delivery()    → Packed     (only from Picked)
    deliver()          → Delivered  (only from Packed, stock decremented)

A delivery can be deleted while Picked or Packed. Delivered orders are
permanent.
"""

import logging

from django.db import transaction
from django.utils import timezone

from stockmaster.exceptions import StockError
from stockmaster.models.delivery import DeliveryOrder
from stockmaster.models.enums import DeliveryStatus, EntryType
from stockmaster.services.balances import BalanceStore
from stockmaster.services.lookups import (
    create_numbered,
    get_or_404,
    resolve_product,
    resolve_warehouse,
    to_quantity,
)
from stockmaster.services.movements import apply_movement

logger = logging.getLogger('stockmaster')


def _lock(delivery_id) -> DeliveryOrder:
    delivery = get_or_404(DeliveryOrder, delivery_id)
    return (
        DeliveryOrder.objects
        .select_for_update()
        .select_related('product', 'warehouse')
        .get(pk=delivery.pk)
    )


def _require_status(delivery, expected, message):
    if delivery.status != expected:
        raise StockError(
            'INVALID_STATUS',
            message,
            current_status=delivery.status,
            expected_status=str(expected),
        )


class StockDeliveries:
    """Delivery workflow methods."""

    @classmethod
    def create_delivery(cls, product, warehouse, quantity, notes='',
                        delivery_number=None, user=None) -> DeliveryOrder:
        """
        Open a delivery order in Picked state.

        The availability check is advisory: stock is not reserved and is
        checked again on deliver().

        Raises:
            StockError('INVALID_PRODUCT' | 'INVALID_WAREHOUSE' | 'NOT_FOUND')
            StockError('INVALID_QUANTITY'): quantity <= 0
            StockError('INSUFFICIENT_QUANTITY'): Balance below quantity
            StockError('DUPLICATE_NUMBER'): delivery_number already used
        """
        product = resolve_product(product)
        warehouse = resolve_warehouse(warehouse)
        quantity = to_quantity(quantity)

        available = BalanceStore.get_balance(product, warehouse)
        if available < quantity:
            raise StockError('INSUFFICIENT_QUANTITY', available=available, requested=quantity)

        delivery = create_numbered(
            DeliveryOrder, 'delivery_number', 'DEL', delivery_number,
            product=product,
            warehouse=warehouse,
            quantity=quantity,
            notes=notes or '',
            status=DeliveryStatus.PICKED,
            picked_at=timezone.now(),
            created_by=user if user is not None and user.is_authenticated else None,
        )
        logger.info(
            "stock.delivery.picked",
            extra={
                "delivery": delivery.delivery_number,
                "product": product.sku,
                "warehouse": warehouse.code,
                "qty": str(quantity),
            },
        )
        return delivery

    @classmethod
    def pack_delivery(cls, delivery_id) -> DeliveryOrder:
        """
        Picked → Packed.

        Raises:
            StockError('NOT_FOUND'): Unknown delivery
            StockError('INVALID_STATUS'): Not in Picked state
        """
        with transaction.atomic():
            delivery = _lock(delivery_id)
            _require_status(delivery, DeliveryStatus.PICKED, 'Delivery must be in Picked state to pack')

            delivery.status = DeliveryStatus.PACKED
            delivery.packed_at = timezone.now()
            delivery.save(update_fields=['status', 'packed_at', 'updated_at'])

        logger.info("stock.delivery.packed", extra={"delivery": delivery.delivery_number})
        return delivery

    @classmethod
    def deliver(cls, delivery_id, user=None) -> DeliveryOrder:
        """
        Packed → Delivered, decrementing stock.

        Raises:
            StockError('NOT_FOUND'): Unknown delivery
            StockError('INVALID_STATUS'): Not in Packed state
            StockError('INSUFFICIENT_QUANTITY'): Balance dropped below the
                order quantity since it was picked

        Concurrency:
            - Delivery row and balance row locked for the whole transition
            - Availability verified after the balance lock
        """
        with transaction.atomic():
            delivery = _lock(delivery_id)
            _require_status(delivery, DeliveryStatus.PACKED, 'Delivery must be in Packed state to deliver')

            balance = BalanceStore.lock(delivery.product, delivery.warehouse)
            if balance.quantity < delivery.quantity:
                raise StockError(
                    'INSUFFICIENT_QUANTITY',
                    available=balance.quantity,
                    requested=delivery.quantity,
                )

            apply_movement(
                delivery.product,
                delivery.warehouse,
                -delivery.quantity,
                EntryType.DELIVERY,
                reference_number=delivery.delivery_number,
                user=user,
            )

            delivery.status = DeliveryStatus.DELIVERED
            delivery.delivered_at = timezone.now()
            delivery.save(update_fields=['status', 'delivered_at', 'updated_at'])

        logger.info("stock.delivery.delivered", extra={"delivery": delivery.delivery_number})
        return delivery

    @classmethod
    def delete_delivery(cls, delivery_id) -> None:
        """
        Remove an open delivery. No stock effect.

        Raises:
            StockError('NOT_FOUND'): Unknown delivery
            StockError('INVALID_STATUS'): Already delivered
        """
        with transaction.atomic():
            delivery = _lock(delivery_id)
            if delivery.is_delivered:
                raise StockError(
                    'INVALID_STATUS',
                    'Cannot delete a delivered order',
                    current_status=delivery.status,
                )
            number = delivery.delivery_number
            delivery.delete()

        logger.info("stock.delivery.deleted", extra={"delivery": number})

    @classmethod
    def list_deliveries(cls, status=None):
        qs = DeliveryOrder.objects.select_related('product', 'warehouse', 'created_by')
        if status:
            qs = qs.filter(status=status)
        return list(qs)
