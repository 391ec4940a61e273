"""
StockReceipt model — Incoming goods, credited on completion.
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from stockmaster.models.enums import ReceiptStatus


class StockReceipt(models.Model):
    """
    Goods received from a supplier.

    LIFECYCLE:

        create_receipt()              complete_receipt()
        ───────────────►  PENDING  ─────────────────────►  COMPLETED

    Stock is credited only by the PENDING → COMPLETED transition, which
    runs under a row lock so a receipt can never be credited twice.
    """

    receipt_number = models.CharField(
        max_length=50,
        unique=True,
        verbose_name=_('Receipt number'),
    )
    product = models.ForeignKey(
        'stockmaster.Product',
        on_delete=models.PROTECT,
        related_name='receipts',
        verbose_name=_('Product'),
    )
    warehouse = models.ForeignKey(
        'stockmaster.Warehouse',
        on_delete=models.PROTECT,
        related_name='receipts',
        verbose_name=_('Warehouse'),
    )
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        validators=[MinValueValidator(Decimal('0.001'))],
        verbose_name=_('Quantity'),
    )
    unit_cost = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0'))],
        verbose_name=_('Unit cost'),
    )
    supplier_name = models.CharField(
        max_length=200,
        blank=True,
        default='',
        verbose_name=_('Supplier'),
    )
    notes = models.TextField(blank=True, default='', verbose_name=_('Notes'))
    status = models.CharField(
        max_length=20,
        choices=ReceiptStatus.choices,
        default=ReceiptStatus.PENDING,
        db_index=True,
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
        verbose_name = _('Stock receipt')
        verbose_name_plural = _('Stock receipts')
        ordering = ['-created_at']

    @property
    def is_pending(self) -> bool:
        return self.status == ReceiptStatus.PENDING

    def __str__(self) -> str:
        return f"{self.receipt_number}: {self.quantity}x {self.product} ({self.status})"
