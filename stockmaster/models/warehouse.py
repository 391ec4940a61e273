"""
Warehouse model — Where stock exists.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class WarehouseQuerySet(models.QuerySet):

    def active(self):
        return self.filter(is_active=True)


class Warehouse(models.Model):
    """
    Physical location holding stock.

    Warehouses are stable entities, created during setup and
    deactivated rather than deleted once they have history.

    Examples:
        Warehouse.objects.create(code='MAIN', name='Main Warehouse', location='Pune')
        Warehouse.objects.create(code='WH-2', name='Overflow')
    """

    code = models.CharField(
        unique=True,
        max_length=50,
        verbose_name=_('Code'),
        help_text=_('Unique short identifier (e.g. MAIN, WH-2)'),
    )
    name = models.CharField(
        max_length=100,
        verbose_name=_('Name'),
    )
    location = models.CharField(
        max_length=255,
        blank=True,
        default='',
        verbose_name=_('Location'),
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name=_('Active'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = WarehouseQuerySet.as_manager()

    class Meta:
        verbose_name = _('Warehouse')
        verbose_name_plural = _('Warehouses')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name
