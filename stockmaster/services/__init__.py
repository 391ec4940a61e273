"""
Stock services — modular organization of stock operations.

    from stockmaster.services import StockQueries, StockReceipts, StockDeliveries
"""

from stockmaster.services.adjustments import StockAdjustments
from stockmaster.services.alerts import StockAlerts
from stockmaster.services.auth import Accounts
from stockmaster.services.balances import BalanceStore
from stockmaster.services.catalog import Catalog
from stockmaster.services.deliveries import StockDeliveries
from stockmaster.services.ledger import StockLedger
from stockmaster.services.movements import apply_movement
from stockmaster.services.queries import StockQueries
from stockmaster.services.receipts import StockReceipts
from stockmaster.services.transfers import StockTransfers

__all__ = [
    'Accounts',
    'BalanceStore',
    'Catalog',
    'StockAdjustments',
    'StockAlerts',
    'StockDeliveries',
    'StockLedger',
    'StockQueries',
    'StockReceipts',
    'StockTransfers',
    'apply_movement',
]
