"""
Enums for Stockmaster models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Unit(models.TextChoices):
    """Unit of measure for a product."""
    PIECES = 'pcs', _('Pieces')
    KILOGRAM = 'kg', _('Kilogram')
    LITRE = 'ltr', _('Litre')
    BOX = 'box', _('Box')
    CARTON = 'carton', _('Carton')
    DOZEN = 'dozen', _('Dozen')
    METER = 'meter', _('Meter')


class EntryType(models.TextChoices):
    """
    Kind of balance mutation recorded in the ledger.

    RECEIPT and TRANSFER_IN only add stock.
    DELIVERY and TRANSFER_OUT only remove stock (floor-clamped at zero).
    ADJUSTMENT carries a signed delta.
    """
    RECEIPT = 'receipt', _('Receipt')
    DELIVERY = 'delivery', _('Delivery')
    TRANSFER_IN = 'transfer_in', _('Transfer in')
    TRANSFER_OUT = 'transfer_out', _('Transfer out')
    ADJUSTMENT = 'adjustment', _('Adjustment')


class ReceiptStatus(models.TextChoices):
    """Receipt lifecycle status."""
    PENDING = 'pending', _('Pending')        # Recorded, stock not yet credited
    COMPLETED = 'completed', _('Completed')  # Stock credited exactly once


class DeliveryStatus(models.TextChoices):
    """Delivery order lifecycle status."""
    PICKED = 'Picked', _('Picked')           # Created, stock untouched
    PACKED = 'Packed', _('Packed')           # Ready to ship, stock untouched
    DELIVERED = 'Delivered', _('Delivered')  # Stock decremented


class TransferStatus(models.TextChoices):
    """Transfer status (transfers complete synchronously)."""
    COMPLETED = 'completed', _('Completed')


class OTPPurpose(models.TextChoices):
    """What a one-time password can be redeemed for."""
    PASSWORD_RESET = 'password_reset', _('Password reset')
    EMAIL_VERIFICATION = 'email_verification', _('Email verification')
