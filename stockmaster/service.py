"""
Stock Service — The single public interface for all stock operations.

Usage:
    from stockmaster import stock, StockError

    receipt = stock.create_receipt(product, main, 100, supplier_name='ACME')
    stock.complete_receipt(receipt.pk)
    stock.balance(product, main)  # Decimal('100.000')

    order = stock.create_delivery(product, main, 30)
    stock.pack_delivery(order.pk)
    stock.deliver(order.pk)

    stock.transfer(product, main, overflow, 20)
    stock.adjust(product, overflow, -2, reason='damaged')
"""

from stockmaster.services.adjustments import StockAdjustments
from stockmaster.services.alerts import StockAlerts
from stockmaster.services.deliveries import StockDeliveries
from stockmaster.services.queries import StockQueries
from stockmaster.services.receipts import StockReceipts
from stockmaster.services.transfers import StockTransfers


class Stock(
    StockQueries,
    StockReceipts,
    StockDeliveries,
    StockTransfers,
    StockAdjustments,
    StockAlerts,
):
    """
    Single interface for all stock operations.

    Parameter convention: (product, warehouse, quantity, ...)
    Products and warehouses may be passed as instances or primary keys.

    IMPORTANT: Every state-changing method runs in one atomic transaction
    that covers the balance change, its ledger entry and the low-stock
    check. See each method's docstring for locking details.
    """
