"""
Tests for the JSON HTTP API.
"""

from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import Client

from stockmaster import stock
from stockmaster.models import LowStockAlert, Product


pytestmark = pytest.mark.django_db

JSON = 'application/json'


def post(client, url, data=None):
    return client.post(url, data=data or {}, content_type=JSON)


class TestAuthEndpoints:

    def test_health_is_public(self, client):
        response = client.get('/api/health')

        assert response.status_code == 200
        assert response.json() == {'ok': True}

    def test_protected_without_token(self, client):
        response = client.get('/api/products')

        assert response.status_code == 401
        assert response.json()['error']['code'] == 'INVALID_TOKEN'

    def test_protected_with_bad_token(self, db):
        response = Client(HTTP_AUTHORIZATION='Bearer nope').get('/api/products')

        assert response.status_code == 401

    def test_signup_then_me(self, client):
        response = post(client, '/api/auth/signup', {
            'email': 'Owner@Example.com', 'password': 'secret123', 'full_name': 'Owner',
        })

        assert response.status_code == 201
        body = response.json()
        assert body['user']['email'] == 'owner@example.com'

        me = Client(HTTP_AUTHORIZATION=f"Bearer {body['token']}").get('/api/auth/me')
        assert me.status_code == 200
        assert me.json()['user']['full_name'] == 'Owner'

    @pytest.mark.parametrize('payload,code', [
        ({'email': 5, 'password': 'secret123'}, 'INVALID_EMAIL'),
        ({'email': 'n@example.com', 'password': 123456}, 'WEAK_PASSWORD'),
        ({'email': ['n@example.com'], 'password': 'secret123'}, 'INVALID_EMAIL'),
    ])
    def test_signup_non_string_fields(self, client, db, payload, code):
        response = post(client, '/api/auth/signup', payload)

        assert response.status_code == 400
        assert response.json()['error']['code'] == code

    def test_signin_non_string_password(self, client, user):
        response = post(client, '/api/auth/signin', {'email': user.email, 'password': 123456})

        assert response.status_code == 401

    def test_signup_duplicate(self, client, user):
        response = post(client, '/api/auth/signup', {'email': user.email, 'password': 'secret123'})

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'USER_EXISTS'

    def test_signin(self, client, user):
        response = post(client, '/api/auth/signin', {'email': user.email, 'password': 'secret123'})

        assert response.status_code == 200
        assert response.json()['token']

    def test_signin_wrong_password(self, client, user):
        response = post(client, '/api/auth/signin', {'email': user.email, 'password': 'nope-nope'})

        assert response.status_code == 401
        assert response.json()['error']['code'] == 'INVALID_CREDENTIALS'

    def test_signin_inactive(self, client, user):
        user.is_active = False
        user.save()

        response = post(client, '/api/auth/signin', {'email': user.email, 'password': 'secret123'})

        assert response.status_code == 403

    def test_password_reset_flow(self, client, user, settings, mailoutbox):
        settings.STOCKMASTER = {'EXPOSE_DEV_OTP': True}

        forgot = post(client, '/api/auth/forgot-password', {'email': user.email})
        otp = forgot.json()['otp']
        assert len(mailoutbox) == 1

        verified = post(client, '/api/auth/verify-otp', {'email': user.email, 'otp': otp})
        assert verified.status_code == 200

        reset = post(client, '/api/auth/reset-password', {
            'reset_token': verified.json()['reset_token'],
            'new_password': 'brand-new',
        })
        assert reset.status_code == 200
        user.refresh_from_db()
        assert user.check_password('brand-new')

    def test_forgot_password_hides_otp_by_default(self, client, user):
        response = post(client, '/api/auth/forgot-password', {'email': user.email})

        assert response.status_code == 200
        assert 'otp' not in response.json()

    def test_forgot_password_unknown_email(self, client, db, mailoutbox):
        response = post(client, '/api/auth/forgot-password', {'email': 'ghost@example.com'})

        assert response.status_code == 200
        assert mailoutbox == []

    def test_verify_bad_otp(self, client, user):
        response = post(client, '/api/auth/verify-otp', {'email': user.email, 'otp': '123456'})

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'INVALID_OTP'


class TestCatalogEndpoints:

    def test_categories(self, api):
        created = post(api, '/api/categories', {'name': 'Paint'})
        listed = api.get('/api/categories')

        assert created.status_code == 201
        assert [c['name'] for c in listed.json()] == ['Paint']

    def test_product_crud(self, api, category):
        created = post(api, '/api/products', {
            'name': 'Brush', 'sku': 'BR-1', 'category_id': category.pk, 'reorder_level': 2,
        })
        assert created.status_code == 201
        product_id = created.json()['id']
        assert created.json()['categories'] == {'name': category.name}

        updated = api.put(f'/api/products/{product_id}', data={'name': 'Wide Brush'}, content_type=JSON)
        assert updated.json()['name'] == 'Wide Brush'

        assert [p['sku'] for p in api.get('/api/products').json()] == ['BR-1']

        deleted = api.delete(f'/api/products/{product_id}')
        assert deleted.json() == {'ok': True}
        assert not Product.objects.exists()

    def test_product_validation_error(self, api):
        response = post(api, '/api/products', {'sku': 'NO-NAME'})

        assert response.status_code == 400
        error = response.json()['error']
        assert error['code'] == 'VALIDATION_ERROR'
        assert 'name' in error['data']['errors']

    def test_delete_product_with_history(self, api, product, main, receive):
        receive(product, main, 1)

        response = api.delete(f'/api/products/{product.pk}')

        assert response.status_code == 409

    def test_update_unknown_product(self, api):
        response = api.put('/api/products/999', data={'name': 'x'}, content_type=JSON)

        assert response.status_code == 404

    def test_upload_csv(self, api):
        upload = SimpleUploadedFile(
            'products.csv',
            b'name,sku,unit,reorder_level\nGlue,GL-1,pcs,4\n,BAD,pcs,1\n',
            content_type='text/csv',
        )

        response = api.post('/api/products/upload-csv', {'file': upload})

        body = response.json()
        assert response.status_code == 200
        assert (body['created'], body['updated'], body['errors']) == (1, 0, 1)
        assert body['error_details'][0]['row'] == 3

    def test_upload_csv_without_file(self, api):
        response = api.post('/api/products/upload-csv')

        assert response.status_code == 400

    def test_warehouses(self, api):
        created = post(api, '/api/warehouses', {'name': 'East', 'code': 'E-1'})
        warehouse_id = created.json()['id']

        updated = api.put(f'/api/warehouses/{warehouse_id}', data={'location': 'Thane'}, content_type=JSON)

        assert created.status_code == 201
        assert updated.json()['location'] == 'Thane'
        assert len(api.get('/api/warehouses').json()) == 1


class TestStockEndpoints:

    def test_receipt_flow(self, api, product, main):
        created = post(api, '/api/stock_receipts', {
            'product_id': product.pk, 'warehouse_id': main.pk, 'quantity': 10, 'supplier_name': 'ACME',
        })
        assert created.status_code == 201
        assert created.json()['status'] == 'pending'

        receipt_id = created.json()['id']
        completed = post(api, f'/api/stock_receipts/{receipt_id}/complete')
        assert completed.json()['status'] == 'completed'

        again = post(api, f'/api/stock_receipts/{receipt_id}/complete')
        assert again.status_code == 400
        assert again.json()['error']['code'] == 'INVALID_STATUS'

        summary = api.get('/api/stock').json()
        assert Decimal(summary[0]['quantity']) == Decimal('10')
        assert len(api.get('/api/stock_receipts').json()) == 1

    def test_receipt_unknown_product(self, api, main):
        response = post(api, '/api/stock_receipts', {'product_id': 999, 'warehouse_id': main.pk, 'quantity': 1})

        assert response.status_code == 404

    def test_receipt_bad_quantity(self, api, product, main):
        response = post(api, '/api/stock_receipts', {'product_id': product.pk, 'warehouse_id': main.pk, 'quantity': -2})

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'INVALID_QUANTITY'

    def test_receipt_quantity_too_large(self, api, product, main):
        response = post(api, '/api/stock_receipts', {'product_id': product.pk, 'warehouse_id': main.pk, 'quantity': '1e12'})

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'INVALID_QUANTITY'
        listed = api.get('/api/stock_receipts')
        assert listed.status_code == 200
        assert listed.json() == []

    def test_delivery_flow(self, api, product, main, receive):
        receive(product, main, 10)

        created = post(api, '/api/stock_deliveries', {'product_id': product.pk, 'warehouse_id': main.pk, 'quantity': 8})
        assert created.json()['status'] == 'Picked'
        delivery_id = created.json()['id']

        early = post(api, f'/api/deliveries/{delivery_id}/deliver')
        assert early.status_code == 400

        assert post(api, f'/api/deliveries/{delivery_id}/pack').json()['status'] == 'Packed'
        assert post(api, f'/api/deliveries/{delivery_id}/deliver').json()['status'] == 'Delivered'

        assert api.delete(f'/api/deliveries/{delivery_id}').status_code == 400
        assert stock.balance(product, main) == Decimal('2')
        assert [d['status'] for d in api.get('/api/deliveries').json()] == ['Delivered']

    def test_delivery_insufficient(self, api, product, main):
        response = post(api, '/api/stock_deliveries', {'product_id': product.pk, 'warehouse_id': main.pk, 'quantity': 1})

        assert response.status_code == 409
        assert response.json()['error']['data'] == {'available': '0', 'requested': '1.000'}

    def test_delete_open_delivery(self, api, product, main, receive):
        receive(product, main, 10)
        delivery = stock.create_delivery(product, main, 1)

        response = api.delete(f'/api/deliveries/{delivery.pk}')

        assert response.json() == {'ok': True}

    def test_transfer(self, api, product, main, overflow, receive):
        receive(product, main, 10)

        response = post(api, '/api/stock_transfers', {
            'product_id': product.pk,
            'from_warehouse_id': main.pk,
            'to_warehouse_id': overflow.pk,
            'quantity': 4,
        })

        assert response.status_code == 201
        assert response.json()['from_warehouse']['code'] == 'MAIN'
        assert stock.balance(product, overflow) == Decimal('4')
        assert len(api.get('/api/stock_transfers').json()) == 1

    def test_transfer_same_warehouse(self, api, product, main):
        response = post(api, '/api/stock_transfers', {
            'product_id': product.pk, 'from_warehouse_id': main.pk, 'to_warehouse_id': main.pk, 'quantity': 1,
        })

        assert response.json()['error']['code'] == 'SAME_WAREHOUSE'

    def test_adjustment(self, api, product, main, receive):
        receive(product, main, 5)

        response = post(api, '/api/stock_adjustments', {
            'product_id': product.pk, 'warehouse_id': main.pk, 'quantity_change': -3, 'reason': 'damaged',
        })

        assert response.status_code == 201
        assert Decimal(response.json()['applied_change']) == Decimal('-3')
        assert len(api.get('/api/stock_adjustments').json()) == 1

    def test_adjustment_without_reason(self, api, product, main):
        response = post(api, '/api/stock_adjustments', {
            'product_id': product.pk, 'warehouse_id': main.pk, 'quantity_change': -3,
        })

        assert response.json()['error']['code'] == 'REASON_REQUIRED'

    def test_ledger(self, api, product, main, overflow, receive):
        receive(product, main, 10)
        stock.transfer(product, main, overflow, 4)

        entries = api.get('/api/stock_ledger').json()
        assert [e['type'] for e in entries] == ['transfer_in', 'transfer_out', 'receipt']

        limited = api.get('/api/stock_ledger', {'limit': 1}).json()
        assert len(limited) == 1

        filtered = api.get('/api/stock_ledger', {'warehouse_id': overflow.pk}).json()
        assert [e['type'] for e in filtered] == ['transfer_in']

    def test_ledger_bad_limit(self, api):
        assert api.get('/api/stock_ledger', {'limit': 'many'}).status_code == 400

    def test_ledger_negative_limit(self, api, product, main, receive):
        receive(product, main, 1)

        response = api.get('/api/stock_ledger', {'limit': -1})

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'VALIDATION_ERROR'

    def test_alerts(self, api, product, main, receive, user):
        receive(product, main, 3)
        alert = LowStockAlert.objects.get()

        listed = api.get('/api/low_stock_alerts', {'acknowledged': 'false'}).json()
        assert [a['id'] for a in listed] == [alert.pk]

        acknowledged = post(api, f'/api/low_stock_alerts/{alert.pk}/acknowledge')
        assert acknowledged.json()['is_acknowledged'] is True
        assert acknowledged.json()['acknowledged_by'] == user.pk

        again = post(api, f'/api/low_stock_alerts/{alert.pk}/acknowledge')
        assert again.status_code == 409

    def test_low_stock_summary(self, api, product, main, overflow, receive):
        receive(product, main, 10)
        receive(product, overflow, 2)

        low = api.get('/api/stock', {'low': 'true'}).json()

        assert [b['warehouse']['code'] for b in low] == ['WH-2']
        assert low[0]['is_low'] is True


class TestRequestHandling:

    def test_method_not_allowed(self, api):
        assert api.delete('/api/categories').status_code == 405

    def test_invalid_json(self, api):
        response = api.post('/api/categories', data='{not json', content_type=JSON)

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'VALIDATION_ERROR'

    def test_json_must_be_object(self, api):
        response = api.post('/api/categories', data='[1, 2]', content_type=JSON)

        assert response.status_code == 400
