"""
Stock alerts — raise and acknowledge low-stock alerts.

Usage:
    from stockmaster.services.alerts import StockAlerts

    # Called by apply_movement() after every balance change
    StockAlerts.evaluate(product, warehouse, new_quantity)

    StockAlerts.list_alerts(acknowledged=False)
    StockAlerts.acknowledge_alert(alert_id, user)
"""

import logging
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from stockmaster.exceptions import StockError
from stockmaster.models.alert import LowStockAlert
from stockmaster.services.lookups import get_or_404

logger = logging.getLogger('stockmaster')


class StockAlerts:
    """Low-stock alert methods."""

    @classmethod
    def evaluate(cls, product, warehouse, quantity: Decimal) -> LowStockAlert | None:
        """
        Raise an alert if quantity is at or below the product reorder level.

        Products with reorder_level 0 never alert. While an unacknowledged
        alert exists for the pair, no new one is raised.

        Returns:
            The new alert, or None
        """
        reorder_level = product.reorder_level
        if not reorder_level or reorder_level <= 0:
            return None
        if quantity > reorder_level:
            return None

        if LowStockAlert.objects.for_key(product, warehouse).open().exists():
            return None

        alert = LowStockAlert.objects.create(
            product=product,
            warehouse=warehouse,
            current_quantity=quantity,
            reorder_level=reorder_level,
            message=(
                f"{product.name} at {warehouse.name} is low: "
                f"{quantity} {product.unit} left (reorder level {reorder_level})"
            ),
        )
        logger.warning(
            "stock.alert.triggered",
            extra={
                "alert_id": alert.pk,
                "product": product.sku,
                "warehouse": warehouse.code,
                "qty": str(quantity),
                "reorder_level": str(reorder_level),
            },
        )
        return alert

    @classmethod
    def acknowledge_alert(cls, alert_id, user=None) -> LowStockAlert:
        """
        Mark an alert as acknowledged.

        Raises:
            StockError('NOT_FOUND'): Unknown alert
            StockError('ALREADY_ACKNOWLEDGED'): Alert was acknowledged before
        """
        with transaction.atomic():
            alert = get_or_404(LowStockAlert, alert_id)
            alert = LowStockAlert.objects.select_for_update().get(pk=alert.pk)

            if alert.is_acknowledged:
                raise StockError('ALREADY_ACKNOWLEDGED', alert_id=alert.pk)

            alert.is_acknowledged = True
            alert.acknowledged_by = user if user is not None and user.is_authenticated else None
            alert.acknowledged_at = timezone.now()
            alert.save(update_fields=['is_acknowledged', 'acknowledged_by', 'acknowledged_at'])

        logger.info("stock.alert.acknowledged", extra={"alert_id": alert.pk})
        return alert

    @classmethod
    def list_alerts(cls, acknowledged: bool | None = None, product=None, warehouse=None):
        """Alerts newest first, optionally filtered."""
        qs = LowStockAlert.objects.select_related('product', 'warehouse')
        if acknowledged is not None:
            qs = qs.filter(is_acknowledged=acknowledged)
        if product is not None:
            qs = qs.filter(product=product)
        if warehouse is not None:
            qs = qs.filter(warehouse=warehouse)
        return list(qs)
