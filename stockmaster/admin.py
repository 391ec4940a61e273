"""
Stockmaster Admin.

- Category, Product, Warehouse: editable
- Balance, LedgerEntry: read-only (stock only changes via the Stock service)
- Receipts, deliveries, transfers, adjustments: read-only history, with
  workflow actions for receipts and deliveries
- LowStockAlert: read-only with "acknowledge" action
"""

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from stockmaster.exceptions import StockError
from stockmaster.models import (
    Balance,
    Category,
    DeliveryOrder,
    DeliveryStatus,
    LedgerEntry,
    LowStockAlert,
    Product,
    ReceiptStatus,
    StockAdjustment,
    StockReceipt,
    StockTransfer,
    Warehouse,
)

logger = logging.getLogger('stockmaster')


class ReadOnlyAdmin(admin.ModelAdmin):
    """No add, change or delete from the admin."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


def _run_action(modeladmin, request, queryset, operation, event):
    done = 0
    for obj in queryset:
        try:
            operation(obj)
            done += 1
        except StockError as exc:
            logger.warning(event, extra={"id": obj.pk, "code": exc.code})
            modeladmin.message_user(request, f"{obj}: {exc.message}", level='warning')
    return done


# =========================================================================
# CATALOG
# =========================================================================

@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'description', 'created_at']
    search_fields = ['name']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Products are deactivated, not deleted, once they have history."""

    list_display = ['sku', 'name', 'category', 'unit', 'reorder_level', 'is_active']
    list_filter = ['is_active', 'unit', 'category']
    search_fields = ['sku', 'name']
    readonly_fields = ['created_by', 'created_at', 'updated_at']


@admin.register(Warehouse)
class WarehouseAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'location', 'is_active']
    list_filter = ['is_active']
    search_fields = ['code', 'name']
    readonly_fields = ['created_at', 'updated_at']


# =========================================================================
# BALANCES & LEDGER (read-only)
# =========================================================================

@admin.register(Balance)
class BalanceAdmin(ReadOnlyAdmin):
    list_display = ['product', 'warehouse', 'quantity', 'is_low_display', 'updated_at']
    list_filter = ['warehouse']
    search_fields = ['product__sku', 'product__name']

    @admin.display(description=_('Low?'), boolean=True)
    def is_low_display(self, obj):
        return obj.is_low


@admin.register(LedgerEntry)
class LedgerEntryAdmin(ReadOnlyAdmin):
    """Immutable audit trail."""

    list_display = ['created_at', 'product', 'warehouse', 'entry_type',
                    'quantity_change', 'quantity_after', 'reference_number', 'user']
    list_filter = ['entry_type', 'warehouse']
    search_fields = ['reference_number', 'product__sku']
    date_hierarchy = 'created_at'


# =========================================================================
# OPERATIONS
# =========================================================================

@admin.register(StockReceipt)
class StockReceiptAdmin(ReadOnlyAdmin):
    list_display = ['receipt_number', 'product', 'warehouse', 'quantity',
                    'supplier_name', 'status', 'created_at', 'completed_at']
    list_filter = ['status', 'warehouse']
    search_fields = ['receipt_number', 'supplier_name', 'product__sku']
    actions = ['complete_receipts']

    @admin.action(description=_('Complete selected receipts'))
    def complete_receipts(self, request, queryset):
        from stockmaster import stock

        done = _run_action(
            self, request, queryset.filter(status=ReceiptStatus.PENDING),
            lambda receipt: stock.complete_receipt(receipt.pk, user=request.user),
            "admin.complete_receipt.failed",
        )
        self.message_user(request, _('{count} receipt(s) completed.').format(count=done))


@admin.register(DeliveryOrder)
class DeliveryOrderAdmin(ReadOnlyAdmin):
    list_display = ['delivery_number', 'product', 'warehouse', 'quantity',
                    'status', 'picked_at', 'packed_at', 'delivered_at']
    list_filter = ['status', 'warehouse']
    search_fields = ['delivery_number', 'product__sku']
    actions = ['pack_deliveries', 'deliver_deliveries']

    @admin.action(description=_('Pack selected deliveries'))
    def pack_deliveries(self, request, queryset):
        from stockmaster import stock

        done = _run_action(
            self, request, queryset.filter(status=DeliveryStatus.PICKED),
            lambda delivery: stock.pack_delivery(delivery.pk),
            "admin.pack_delivery.failed",
        )
        self.message_user(request, _('{count} delivery(ies) packed.').format(count=done))

    @admin.action(description=_('Deliver selected deliveries'))
    def deliver_deliveries(self, request, queryset):
        from stockmaster import stock

        done = _run_action(
            self, request, queryset.filter(status=DeliveryStatus.PACKED),
            lambda delivery: stock.deliver(delivery.pk, user=request.user),
            "admin.deliver.failed",
        )
        self.message_user(request, _('{count} delivery(ies) delivered.').format(count=done))


@admin.register(StockTransfer)
class StockTransferAdmin(ReadOnlyAdmin):
    list_display = ['transfer_number', 'product', 'from_warehouse', 'to_warehouse',
                    'quantity', 'created_at']
    list_filter = ['from_warehouse', 'to_warehouse']
    search_fields = ['transfer_number', 'product__sku']


@admin.register(StockAdjustment)
class StockAdjustmentAdmin(ReadOnlyAdmin):
    list_display = ['adjustment_number', 'product', 'warehouse', 'quantity_change',
                    'applied_change', 'reason', 'created_at']
    list_filter = ['warehouse']
    search_fields = ['adjustment_number', 'reason', 'product__sku']


# =========================================================================
# ALERTS
# =========================================================================

@admin.register(LowStockAlert)
class LowStockAlertAdmin(ReadOnlyAdmin):
    list_display = ['product', 'warehouse', 'current_quantity', 'reorder_level',
                    'is_acknowledged', 'acknowledged_by', 'created_at']
    list_filter = ['is_acknowledged', 'warehouse']
    search_fields = ['product__sku', 'product__name']
    actions = ['acknowledge_alerts']

    @admin.action(description=_('Acknowledge selected alerts'))
    def acknowledge_alerts(self, request, queryset):
        from stockmaster import stock

        done = _run_action(
            self, request, queryset.filter(is_acknowledged=False),
            lambda alert: stock.acknowledge_alert(alert.pk, user=request.user),
            "admin.acknowledge_alert.failed",
        )
        self.message_user(request, _('{count} alert(s) acknowledged.').format(count=done))
