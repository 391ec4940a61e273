"""
Model → dict mapping for API responses.

Decimals and datetimes are left as is; DjangoJSONEncoder (used by
JsonResponse) renders them as strings.
"""


def _product_ref(product) -> dict:
    return {
        'id': product.pk,
        'name': product.name,
        'sku': product.sku,
        'unit': product.unit,
    }


def _warehouse_ref(warehouse) -> dict:
    return {
        'id': warehouse.pk,
        'name': warehouse.name,
        'code': warehouse.code,
    }


def user_to_dict(user) -> dict:
    return {
        'id': user.pk,
        'email': user.email,
        'full_name': user.first_name,
        'is_active': user.is_active,
    }


def category_to_dict(category) -> dict:
    return {
        'id': category.pk,
        'name': category.name,
        'description': category.description,
        'created_at': category.created_at,
    }


def product_to_dict(product) -> dict:
    category = product.category
    return {
        'id': product.pk,
        'name': product.name,
        'sku': product.sku,
        'category_id': category.pk if category else None,
        'categories': {'name': category.name} if category else None,
        'unit': product.unit,
        'reorder_level': product.reorder_level,
        'description': product.description,
        'is_active': product.is_active,
        'created_at': product.created_at,
        'updated_at': product.updated_at,
    }


def warehouse_to_dict(warehouse) -> dict:
    return {
        'id': warehouse.pk,
        'name': warehouse.name,
        'code': warehouse.code,
        'location': warehouse.location,
        'is_active': warehouse.is_active,
        'created_at': warehouse.created_at,
        'updated_at': warehouse.updated_at,
    }


def balance_to_dict(balance) -> dict:
    return {
        'id': balance.pk,
        'product': _product_ref(balance.product),
        'warehouse': _warehouse_ref(balance.warehouse),
        'quantity': balance.quantity,
        'reorder_level': balance.product.reorder_level,
        'is_low': balance.is_low,
        'updated_at': balance.updated_at,
    }


def ledger_entry_to_dict(entry) -> dict:
    return {
        'id': entry.pk,
        'product': _product_ref(entry.product),
        'warehouse': _warehouse_ref(entry.warehouse),
        'type': entry.entry_type,
        'quantity_change': entry.quantity_change,
        'quantity_after': entry.quantity_after,
        'reference_number': entry.reference_number,
        'user_id': entry.user_id,
        'created_at': entry.created_at,
    }


def receipt_to_dict(receipt) -> dict:
    return {
        'id': receipt.pk,
        'receipt_number': receipt.receipt_number,
        'product': _product_ref(receipt.product),
        'warehouse': _warehouse_ref(receipt.warehouse),
        'quantity': receipt.quantity,
        'unit_cost': receipt.unit_cost,
        'supplier_name': receipt.supplier_name,
        'notes': receipt.notes,
        'status': receipt.status,
        'created_by': receipt.created_by_id,
        'created_at': receipt.created_at,
        'completed_at': receipt.completed_at,
    }


def delivery_to_dict(delivery) -> dict:
    return {
        'id': delivery.pk,
        'delivery_number': delivery.delivery_number,
        'product': _product_ref(delivery.product),
        'warehouse': _warehouse_ref(delivery.warehouse),
        'quantity': delivery.quantity,
        'status': delivery.status,
        'notes': delivery.notes,
        'picked_at': delivery.picked_at,
        'packed_at': delivery.packed_at,
        'delivered_at': delivery.delivered_at,
        'created_by': delivery.created_by_id,
        'created_at': delivery.created_at,
    }


def transfer_to_dict(transfer) -> dict:
    return {
        'id': transfer.pk,
        'transfer_number': transfer.transfer_number,
        'product': _product_ref(transfer.product),
        'from_warehouse': _warehouse_ref(transfer.from_warehouse),
        'to_warehouse': _warehouse_ref(transfer.to_warehouse),
        'quantity': transfer.quantity,
        'notes': transfer.notes,
        'status': transfer.status,
        'created_by': transfer.created_by_id,
        'created_at': transfer.created_at,
        'completed_at': transfer.completed_at,
    }


def adjustment_to_dict(adjustment) -> dict:
    return {
        'id': adjustment.pk,
        'adjustment_number': adjustment.adjustment_number,
        'product': _product_ref(adjustment.product),
        'warehouse': _warehouse_ref(adjustment.warehouse),
        'quantity_change': adjustment.quantity_change,
        'applied_change': adjustment.applied_change,
        'reason': adjustment.reason,
        'notes': adjustment.notes,
        'created_by': adjustment.created_by_id,
        'created_at': adjustment.created_at,
    }


def alert_to_dict(alert) -> dict:
    return {
        'id': alert.pk,
        'product': _product_ref(alert.product),
        'warehouse': _warehouse_ref(alert.warehouse),
        'current_quantity': alert.current_quantity,
        'reorder_level': alert.reorder_level,
        'message': alert.message,
        'is_acknowledged': alert.is_acknowledged,
        'acknowledged_by': alert.acknowledged_by_id,
        'acknowledged_at': alert.acknowledged_at,
        'created_at': alert.created_at,
    }
