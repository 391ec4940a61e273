"""
Django Stockmaster — multi-warehouse inventory tracking.

Usage:
    from stockmaster import stock, StockError

    stock.complete_receipt(stock.create_receipt(product, main, 100).pk)
    stock.transfer(product, main, overflow, 20)
    stock.balance(product, overflow)  # 20
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'stock':
        from stockmaster.service import Stock
        return Stock
    elif name == 'StockError':
        from stockmaster.exceptions import StockError
        return StockError
    elif name == 'AuthError':
        from stockmaster.exceptions import AuthError
        return AuthError
    elif name == 'Catalog':
        from stockmaster.services.catalog import Catalog
        return Catalog
    elif name == 'Accounts':
        from stockmaster.services.auth import Accounts
        return Accounts
    elif name in ('Product', 'Category', 'Warehouse', 'Balance', 'LedgerEntry',
                  'StockReceipt', 'DeliveryOrder', 'StockTransfer',
                  'StockAdjustment', 'LowStockAlert', 'EntryType', 'DeliveryStatus'):
        from stockmaster import models
        return getattr(models, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'stock',
    'StockError',
    'AuthError',
    'Catalog',
    'Accounts',
    'Product',
    'Category',
    'Warehouse',
    'Balance',
    'LedgerEntry',
    'StockReceipt',
    'DeliveryOrder',
    'StockTransfer',
    'StockAdjustment',
    'LowStockAlert',
    'EntryType',
    'DeliveryStatus',
]

__version__ = '0.1.0'
