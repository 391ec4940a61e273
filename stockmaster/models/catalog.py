"""
Catalog models — Category and Product.
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from stockmaster.models.enums import Unit


class Category(models.Model):
    """Product grouping, used for filtering and reporting only."""

    name = models.CharField(
        max_length=100,
        unique=True,
        verbose_name=_('Name'),
    )
    description = models.TextField(
        blank=True,
        default='',
        verbose_name=_('Description'),
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Category')
        verbose_name_plural = _('Categories')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class ProductQuerySet(models.QuerySet):

    def active(self):
        return self.filter(is_active=True)


class Product(models.Model):
    """
    Stockable product.

    reorder_level is the low-stock threshold: once a balance falls to or
    below it (and it is > 0) a LowStockAlert is raised for that warehouse.
    Ledger rows reference products with PROTECT, so a product with
    history can be deactivated but not deleted.
    """

    name = models.CharField(
        max_length=200,
        verbose_name=_('Name'),
    )
    sku = models.CharField(
        max_length=64,
        unique=True,
        verbose_name=_('SKU'),
    )
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products',
        verbose_name=_('Category'),
    )
    unit = models.CharField(
        max_length=10,
        choices=Unit.choices,
        default=Unit.PIECES,
        verbose_name=_('Unit'),
    )
    reorder_level = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0'))],
        verbose_name=_('Reorder level'),
        help_text=_('Alert when stock falls to or below this value. 0 = no alert.'),
    )
    description = models.TextField(
        blank=True,
        default='',
        verbose_name=_('Description'),
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name=_('Active'),
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Created by'),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        verbose_name = _('Product')
        verbose_name_plural = _('Products')
        ordering = ['name']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(reorder_level__gte=0),
                name='product_reorder_level_non_negative',
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.sku})"
