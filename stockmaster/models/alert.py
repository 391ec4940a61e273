"""
LowStockAlert model — raised when a balance falls to its reorder level.

Usage:
    # Raised automatically by every stock movement
    from stockmaster.services.alerts import StockAlerts

    StockAlerts.list_alerts(acknowledged=False)
    StockAlerts.acknowledge_alert(alert.pk, user=user)
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class LowStockAlertQuerySet(models.QuerySet):

    def open(self):
        """Not yet acknowledged."""
        return self.filter(is_acknowledged=False)

    def for_key(self, product, warehouse):
        return self.filter(product=product, warehouse=warehouse)


class LowStockAlert(models.Model):
    """
    Low-stock notice for one (product, warehouse) pair.

    At most one unacknowledged alert exists per pair: while one is open,
    further qualifying movements do not raise another. Acknowledging an
    alert re-arms the pair. Alerts never affect balances or the ledger.
    """

    product = models.ForeignKey(
        'stockmaster.Product',
        on_delete=models.CASCADE,
        related_name='low_stock_alerts',
        verbose_name=_('Product'),
    )
    warehouse = models.ForeignKey(
        'stockmaster.Warehouse',
        on_delete=models.CASCADE,
        related_name='low_stock_alerts',
        verbose_name=_('Warehouse'),
    )

    # Snapshot at trigger time
    current_quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Quantity at trigger'),
    )
    reorder_level = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Reorder level'),
    )
    message = models.CharField(max_length=255, blank=True, default='', verbose_name=_('Message'))

    # Acknowledgment
    is_acknowledged = models.BooleanField(
        default=False,
        db_index=True,
        verbose_name=_('Acknowledged'),
    )
    acknowledged_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Acknowledged by'),
    )
    acknowledged_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_('Acknowledged at'),
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_('Created at'))

    objects = LowStockAlertQuerySet.as_manager()

    class Meta:
        verbose_name = _('Low stock alert')
        verbose_name_plural = _('Low stock alerts')
        ordering = ['-created_at', '-pk']
        indexes = [
            models.Index(fields=['product', 'warehouse', 'is_acknowledged'], name='stockmaster_product_c2d5a8_idx'),
        ]

    def __str__(self) -> str:
        return f"Alert: {self.product} @ {self.warehouse} = {self.current_quantity} ≤ {self.reorder_level}"
