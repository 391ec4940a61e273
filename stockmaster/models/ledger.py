"""
LedgerEntry model — Immutable ledger of balance changes.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from stockmaster.models.enums import EntryType


class LedgerEntryQuerySet(models.QuerySet):

    def for_key(self, product, warehouse):
        return self.filter(product=product, warehouse=warehouse)

    def recent(self):
        return self.order_by('-created_at', '-pk')


class LedgerEntry(models.Model):
    """
    Immutable record of one balance change.

    Rules:
    - NEVER update() or delete()
    - Corrections are new entries (adjustments)
    - quantity_after is the Balance quantity right after the change,
      as returned by the balance store (never a re-read)
    """

    product = models.ForeignKey(
        'stockmaster.Product',
        on_delete=models.PROTECT,
        related_name='ledger_entries',
        verbose_name=_('Product'),
    )
    warehouse = models.ForeignKey(
        'stockmaster.Warehouse',
        on_delete=models.PROTECT,
        related_name='ledger_entries',
        verbose_name=_('Warehouse'),
    )
    entry_type = models.CharField(
        max_length=20,
        choices=EntryType.choices,
        verbose_name=_('Type'),
    )
    quantity_change = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Change'),
        help_text=_('Positive = in, negative = out'),
    )
    quantity_after = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        verbose_name=_('Quantity after'),
    )
    reference_number = models.CharField(
        max_length=50,
        blank=True,
        default='',
        db_index=True,
        verbose_name=_('Reference'),
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('User'),
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Created at'))

    objects = LedgerEntryQuerySet.as_manager()

    class Meta:
        verbose_name = _('Ledger entry')
        verbose_name_plural = _('Ledger entries')
        ordering = ['created_at', 'pk']
        indexes = [
            models.Index(fields=['product', 'warehouse'], name='stockmaster_product_4a1c2e_idx'),
            models.Index(fields=['entry_type'], name='stockmaster_entry_t_8d3f0b_idx'),
        ]

    def save(self, *args, **kwargs):
        """Insert only."""
        if self.pk:
            raise ValueError(
                "Ledger entries are immutable. "
                "Record an adjustment to correct a balance."
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """Prevent deletion — entries are immutable."""
        raise ValueError(
            "Ledger entries are immutable. "
            "Record an adjustment to correct a balance."
        )

    def __str__(self) -> str:
        signal = '+' if self.quantity_change > 0 else ''
        return f"{signal}{self.quantity_change} → {self.quantity_after} | {self.entry_type}"
