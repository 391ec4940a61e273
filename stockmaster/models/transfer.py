"""
StockTransfer model — Stock moved between two warehouses.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from stockmaster.models.enums import TransferStatus


class StockTransfer(models.Model):
    """
    Physical stock movement between warehouses. Not a sale or a loss.

    Both legs (transfer_out at the source, transfer_in at the destination)
    are applied in the same transaction as the row insert.
    """

    transfer_number = models.CharField(
        max_length=50,
        unique=True,
        verbose_name=_('Transfer number'),
    )
    product = models.ForeignKey(
        'stockmaster.Product',
        on_delete=models.PROTECT,
        related_name='transfers',
        verbose_name=_('Product'),
    )
    from_warehouse = models.ForeignKey(
        'stockmaster.Warehouse',
        on_delete=models.PROTECT,
        related_name='transfers_out',
        verbose_name=_('From'),
    )
    to_warehouse = models.ForeignKey(
        'stockmaster.Warehouse',
        on_delete=models.PROTECT,
        related_name='transfers_in',
        verbose_name=_('To'),
    )
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Quantity'),
    )
    notes = models.TextField(blank=True, default='', verbose_name=_('Notes'))
    status = models.CharField(
        max_length=20,
        choices=TransferStatus.choices,
        default=TransferStatus.COMPLETED,
        verbose_name=_('Status'),
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    completed_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Completed at'))

    class Meta:
        verbose_name = _('Stock transfer')
        verbose_name_plural = _('Stock transfers')
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(from_warehouse=models.F('to_warehouse')),
                name='stock_transfer_warehouses_differ',
            ),
        ]

    def __str__(self) -> str:
        return (
            f"{self.transfer_number}: {self.quantity}x {self.product} "
            f"{self.from_warehouse} → {self.to_warehouse}"
        )
