"""
Balance model — On-hand quantity of a product at a warehouse.
"""

import logging
from decimal import Decimal

from django.db import models
from django.db.models import Sum
from django.db.models.functions import Coalesce
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger('stockmaster')


class BalanceManager(models.Manager):
    """Manager with helper methods for Balance queries."""

    def for_product(self, product):
        return self.filter(product=product)

    def at_warehouse(self, warehouse):
        return self.filter(warehouse=warehouse)

    def low(self):
        """Balances at or below their product's reorder level (level > 0)."""
        return self.filter(
            product__reorder_level__gt=0,
            quantity__lte=models.F('product__reorder_level'),
        )


class Balance(models.Model):
    """
    Quantity of a product at a warehouse.

    Key: (product, warehouse) — unique.

    Rules:
    - Created on first touch with quantity 0
    - Only changed through services.movements.apply_movement(),
      which locks the row and appends the matching LedgerEntry
      in the same transaction
    - quantity always equals the sum of the key's ledger deltas;
      use recalculate() for audit/correction
    """

    product = models.ForeignKey(
        'stockmaster.Product',
        on_delete=models.PROTECT,
        related_name='balances',
        verbose_name=_('Product'),
    )
    warehouse = models.ForeignKey(
        'stockmaster.Warehouse',
        on_delete=models.PROTECT,
        related_name='balances',
        verbose_name=_('Warehouse'),
    )
    quantity = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('0'),
        verbose_name=_('Quantity'),
    )
    updated_at = models.DateTimeField(auto_now=True)

    objects = BalanceManager()

    class Meta:
        verbose_name = _('Balance')
        verbose_name_plural = _('Balances')
        ordering = ['product__name', 'warehouse__name']
        constraints = [
            models.UniqueConstraint(
                fields=['product', 'warehouse'],
                name='unique_balance_product_warehouse',
            )
        ]

    # ══════════════════════════════════════════════════════════════
    # PROPERTIES
    # ══════════════════════════════════════════════════════════════

    @property
    def is_low(self) -> bool:
        """At or below reorder level (and a reorder level is configured)?"""
        level = self.product.reorder_level
        return level > 0 and self.quantity <= level

    # ══════════════════════════════════════════════════════════════
    # METHODS
    # ══════════════════════════════════════════════════════════════

    def ledger_total(self) -> Decimal:
        """Sum of all ledger deltas for this key."""
        from stockmaster.models.ledger import LedgerEntry

        return LedgerEntry.objects.filter(
            product_id=self.product_id,
            warehouse_id=self.warehouse_id,
        ).aggregate(
            t=Coalesce(Sum('quantity_change'), Decimal('0'))
        )['t']

    def recalculate(self) -> Decimal:
        """
        Recalculate quantity from the ledger.

        Use for:
        - Integrity audit
        - Correction after detected inconsistency

        Returns:
            New calculated quantity
        """
        total = self.ledger_total()

        if total != self.quantity:
            old = self.quantity
            self.quantity = total
            self.save(update_fields=['quantity', 'updated_at'])

            logger.warning(
                "stock.balance.recalculated",
                extra={
                    "balance_id": self.pk,
                    "old": str(old),
                    "new": str(total),
                    "diff": str(total - old),
                },
            )

        return total

    def __str__(self) -> str:
        return f"{self.product} @ {self.warehouse}: {self.quantity}"
