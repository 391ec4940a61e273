"""
DeliveryOrder model — Outgoing goods, three-stage workflow.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from stockmaster.models.enums import DeliveryStatus


class DeliveryOrder(models.Model):
    """
    Delivery order for a product out of one warehouse.

    LIFECYCLE:

    ┌──────────────────────────────────────────────────────────┐
    │                                                          │
    │   ┌────────┐   pack()    ┌────────┐   deliver()          │
    │   │ PICKED │ ──────────► │ PACKED │ ──────────► DELIVERED │
    │   └────────┘             └────────┘                      │
    │        │                      │                          │
    │        │ delete()             │ delete()                 │
    │        ▼                      ▼                          │
    │   (removed, no stock effect)                             │
    │                                                          │
    └──────────────────────────────────────────────────────────┘

    Stock is not reserved while PICKED or PACKED: availability is
    checked at creation (advisory) and again, under the balance lock,
    on deliver(). Only deliver() touches the balance and the ledger.
    """

    delivery_number = models.CharField(
        max_length=50,
        unique=True,
        verbose_name=_('Delivery number'),
    )
    product = models.ForeignKey(
        'stockmaster.Product',
        on_delete=models.PROTECT,
        related_name='deliveries',
        verbose_name=_('Product'),
    )
    warehouse = models.ForeignKey(
        'stockmaster.Warehouse',
        on_delete=models.PROTECT,
        related_name='deliveries',
        verbose_name=_('Warehouse'),
    )
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Quantity'),
    )
    status = models.CharField(
        max_length=20,
        choices=DeliveryStatus.choices,
        default=DeliveryStatus.PICKED,
        db_index=True,
        verbose_name=_('Status'),
    )
    notes = models.TextField(blank=True, default='', verbose_name=_('Notes'))

    picked_at = models.DateTimeField(default=timezone.now, verbose_name=_('Picked at'))
    packed_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Packed at'))
    delivered_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Delivered at'))

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Delivery order')
        verbose_name_plural = _('Delivery orders')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['product', 'warehouse', 'status'], name='stockmaster_product_b7e91d_idx'),
        ]

    @property
    def is_delivered(self) -> bool:
        return self.status == DeliveryStatus.DELIVERED

    @property
    def is_open(self) -> bool:
        """Still deletable (not yet delivered)?"""
        return self.status != DeliveryStatus.DELIVERED

    def __str__(self) -> str:
        return f"{self.delivery_number}: {self.quantity}x {self.product} [{self.status}]"
