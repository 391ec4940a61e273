"""
StockAdjustment model — Manual correction of a balance.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class StockAdjustment(models.Model):
    """
    Signed correction (count differences, damage, loss).

    quantity_change is what was requested. applied_change is what the
    balance actually moved by, which differs only when the adjustment
    floor policy clamps a negative result at zero.
    """

    adjustment_number = models.CharField(
        max_length=50,
        unique=True,
        verbose_name=_('Adjustment number'),
    )
    product = models.ForeignKey(
        'stockmaster.Product',
        on_delete=models.PROTECT,
        related_name='adjustments',
        verbose_name=_('Product'),
    )
    warehouse = models.ForeignKey(
        'stockmaster.Warehouse',
        on_delete=models.PROTECT,
        related_name='adjustments',
        verbose_name=_('Warehouse'),
    )
    quantity_change = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Requested change'),
    )
    applied_change = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Applied change'),
    )
    reason = models.CharField(
        max_length=255,
        verbose_name=_('Reason'),
        help_text=_('Required. E.g. "damaged", "cycle count"'),
    )
    notes = models.TextField(blank=True, default='', verbose_name=_('Notes'))
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Stock adjustment')
        verbose_name_plural = _('Stock adjustments')
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(quantity_change=0),
                name='stock_adjustment_change_non_zero',
            ),
        ]

    @property
    def was_clamped(self) -> bool:
        return self.applied_change != self.quantity_change

    def __str__(self) -> str:
        signal = '+' if self.quantity_change > 0 else ''
        return f"{self.adjustment_number}: {signal}{self.quantity_change} | {self.reason}"
