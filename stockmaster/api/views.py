"""
JSON API views.

Every view is wrapped by api_view(): errors raised by the services come
back as {"error": {"code", "message", "data"}} with a matching status.
"""

import io

from django.http import JsonResponse

from stockmaster.api import serializers
from stockmaster.api.decorators import api_view
from stockmaster.conf import stockmaster_settings
from stockmaster.exceptions import StockError
from stockmaster.service import Stock
from stockmaster.services.auth import Accounts
from stockmaster.services.catalog import Catalog


def _list(items, serializer) -> JsonResponse:
    return JsonResponse([serializer(item) for item in items], safe=False)


def _int_param(request, name, default=None):
    value = request.GET.get(name)
    if value in (None, ''):
        return default
    try:
        return int(value)
    except ValueError:
        raise StockError('VALIDATION_ERROR', errors={name: ['Enter a whole number.']}) from None


def _bool_param(request, name):
    value = request.GET.get(name)
    if value in (None, ''):
        return None
    return value.lower() in ('1', 'true', 'yes')


# ══════════════════════════════════════════════════════════════
# HEALTH / AUTH
# ══════════════════════════════════════════════════════════════

@api_view(['GET'], auth=False)
def health(request):
    return JsonResponse({'ok': True})


@api_view(['POST'], auth=False)
def signup(request):
    data = request.json
    user, token = Accounts.signup(data.get('email'), data.get('password'), data.get('full_name', ''))
    return JsonResponse({'token': token, 'user': serializers.user_to_dict(user)}, status=201)


@api_view(['POST'], auth=False)
def signin(request):
    data = request.json
    user, token = Accounts.signin(data.get('email'), data.get('password'))
    return JsonResponse({'token': token, 'user': serializers.user_to_dict(user)})


@api_view(['GET'])
def me(request):
    return JsonResponse({'user': serializers.user_to_dict(request.user)})


@api_view(['POST'], auth=False)
def forgot_password(request):
    code = Accounts.request_password_reset(request.json.get('email'))
    body = {'message': 'If the email exists, an OTP has been sent'}
    if code and stockmaster_settings.EXPOSE_DEV_OTP:
        body['otp'] = code
    return JsonResponse(body)


@api_view(['POST'], auth=False)
def verify_otp(request):
    data = request.json
    reset_token = Accounts.verify_otp(data.get('email'), data.get('otp'))
    return JsonResponse({'message': 'OTP verified', 'reset_token': reset_token})


@api_view(['POST'], auth=False)
def reset_password(request):
    data = request.json
    Accounts.reset_password(data.get('reset_token'), data.get('new_password'))
    return JsonResponse({'message': 'Password reset successfully'})


# ══════════════════════════════════════════════════════════════
# CATALOG
# ══════════════════════════════════════════════════════════════

@api_view(['GET', 'POST'])
def categories(request):
    if request.method == 'POST':
        category = Catalog.create_category(request.json)
        return JsonResponse(serializers.category_to_dict(category), status=201)
    return _list(Catalog.list_categories(), serializers.category_to_dict)


@api_view(['GET', 'POST'])
def products(request):
    if request.method == 'POST':
        product = Catalog.create_product(request.json, user=request.user)
        return JsonResponse(serializers.product_to_dict(product), status=201)
    active_only = _bool_param(request, 'active') is True
    return _list(Catalog.list_products(active_only=active_only), serializers.product_to_dict)


@api_view(['PUT', 'DELETE'])
def product_detail(request, pk):
    if request.method == 'DELETE':
        Catalog.delete_product(pk)
        return JsonResponse({'ok': True})
    product = Catalog.update_product(pk, request.json)
    return JsonResponse(serializers.product_to_dict(product))


@api_view(['POST'])
def products_upload_csv(request):
    upload = request.FILES.get('file')
    if upload is None:
        raise StockError('VALIDATION_ERROR', 'No file uploaded')
    try:
        text = upload.read().decode('utf-8-sig')
    except UnicodeDecodeError:
        raise StockError('VALIDATION_ERROR', 'CSV file must be UTF-8 encoded') from None

    result = Catalog.import_products_csv(io.StringIO(text), user=request.user)
    return JsonResponse({
        'message': 'CSV processed',
        'created': result.created,
        'updated': result.updated,
        'errors': len(result.errors),
        'error_details': result.errors,
    })


@api_view(['GET', 'POST'])
def warehouses(request):
    if request.method == 'POST':
        warehouse = Catalog.create_warehouse(request.json)
        return JsonResponse(serializers.warehouse_to_dict(warehouse), status=201)
    active_only = _bool_param(request, 'active') is True
    return _list(Catalog.list_warehouses(active_only=active_only), serializers.warehouse_to_dict)


@api_view(['PUT'])
def warehouse_detail(request, pk):
    warehouse = Catalog.update_warehouse(pk, request.json)
    return JsonResponse(serializers.warehouse_to_dict(warehouse))


# ══════════════════════════════════════════════════════════════
# STOCK
# ══════════════════════════════════════════════════════════════

@api_view(['GET'])
def stock_summary(request):
    balances = Stock.list_balances(
        product=request.GET.get('product_id') or None,
        warehouse=request.GET.get('warehouse_id') or None,
        low_only=_bool_param(request, 'low') is True,
    )
    return _list(balances, serializers.balance_to_dict)


@api_view(['GET'])
def stock_ledger(request):
    entries = Stock.ledger(
        limit=_int_param(request, 'limit'),
        product=request.GET.get('product_id') or None,
        warehouse=request.GET.get('warehouse_id') or None,
        entry_type=request.GET.get('type') or None,
    )
    return _list(entries, serializers.ledger_entry_to_dict)


@api_view(['GET', 'POST'])
def stock_receipts(request):
    if request.method == 'POST':
        data = request.json
        receipt = Stock.create_receipt(
            data.get('product_id'),
            data.get('warehouse_id'),
            data.get('quantity'),
            unit_cost=data.get('unit_cost', 0),
            supplier_name=data.get('supplier_name', ''),
            notes=data.get('notes', ''),
            receipt_number=data.get('receipt_number'),
            user=request.user,
        )
        return JsonResponse(serializers.receipt_to_dict(receipt), status=201)
    return _list(Stock.list_receipts(status=request.GET.get('status')), serializers.receipt_to_dict)


@api_view(['POST'])
def complete_receipt(request, pk):
    receipt = Stock.complete_receipt(pk, user=request.user)
    return JsonResponse(serializers.receipt_to_dict(receipt))


@api_view(['GET'])
def deliveries(request):
    return _list(Stock.list_deliveries(status=request.GET.get('status')), serializers.delivery_to_dict)


@api_view(['POST'])
def create_delivery(request):
    data = request.json
    delivery = Stock.create_delivery(
        data.get('product_id'),
        data.get('warehouse_id'),
        data.get('quantity'),
        notes=data.get('notes', ''),
        delivery_number=data.get('delivery_number'),
        user=request.user,
    )
    return JsonResponse(serializers.delivery_to_dict(delivery), status=201)


@api_view(['POST'])
def pack_delivery(request, pk):
    delivery = Stock.pack_delivery(pk)
    return JsonResponse(serializers.delivery_to_dict(delivery))


@api_view(['POST'])
def deliver(request, pk):
    delivery = Stock.deliver(pk, user=request.user)
    return JsonResponse(serializers.delivery_to_dict(delivery))


@api_view(['DELETE'])
def delivery_detail(request, pk):
    Stock.delete_delivery(pk)
    return JsonResponse({'ok': True})


@api_view(['GET', 'POST'])
def stock_transfers(request):
    if request.method == 'POST':
        data = request.json
        transfer = Stock.transfer(
            data.get('product_id'),
            data.get('from_warehouse_id'),
            data.get('to_warehouse_id'),
            data.get('quantity'),
            notes=data.get('notes', ''),
            transfer_number=data.get('transfer_number'),
            user=request.user,
        )
        return JsonResponse(serializers.transfer_to_dict(transfer), status=201)
    return _list(Stock.list_transfers(), serializers.transfer_to_dict)


@api_view(['GET', 'POST'])
def stock_adjustments(request):
    if request.method == 'POST':
        data = request.json
        adjustment = Stock.adjust(
            data.get('product_id'),
            data.get('warehouse_id'),
            data.get('quantity_change'),
            data.get('reason'),
            notes=data.get('notes', ''),
            adjustment_number=data.get('adjustment_number'),
            user=request.user,
        )
        return JsonResponse(serializers.adjustment_to_dict(adjustment), status=201)
    return _list(Stock.list_adjustments(), serializers.adjustment_to_dict)


@api_view(['GET'])
def low_stock_alerts(request):
    alerts = Stock.list_alerts(acknowledged=_bool_param(request, 'acknowledged'))
    return _list(alerts, serializers.alert_to_dict)


@api_view(['POST'])
def acknowledge_alert(request, pk):
    alert = Stock.acknowledge_alert(pk, user=request.user)
    return JsonResponse(serializers.alert_to_dict(alert))
