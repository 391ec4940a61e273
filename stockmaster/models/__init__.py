"""
Stockmaster Models.

Core models for inventory tracking:
- Category, Product: What is stocked
- Warehouse: Where stock exists
- Balance: Quantity per (product, warehouse)
- LedgerEntry: Immutable ledger of changes
- StockReceipt, DeliveryOrder, StockTransfer, StockAdjustment: Operations
- LowStockAlert: Raised when a balance reaches its reorder level
- OneTimePassword: Password reset codes
"""

from stockmaster.models.adjustment import StockAdjustment
from stockmaster.models.alert import LowStockAlert
from stockmaster.models.balance import Balance
from stockmaster.models.catalog import Category, Product
from stockmaster.models.delivery import DeliveryOrder
from stockmaster.models.enums import (
    DeliveryStatus,
    EntryType,
    OTPPurpose,
    ReceiptStatus,
    TransferStatus,
    Unit,
)
from stockmaster.models.ledger import LedgerEntry
from stockmaster.models.otp import OneTimePassword
from stockmaster.models.receipt import StockReceipt
from stockmaster.models.transfer import StockTransfer
from stockmaster.models.warehouse import Warehouse

__all__ = [
    'Unit',
    'EntryType',
    'ReceiptStatus',
    'DeliveryStatus',
    'TransferStatus',
    'OTPPurpose',
    'Category',
    'Product',
    'Warehouse',
    'Balance',
    'LedgerEntry',
    'StockReceipt',
    'DeliveryOrder',
    'StockTransfer',
    'StockAdjustment',
    'LowStockAlert',
    'OneTimePassword',
]
