"""
API routes. Include under a prefix of your choice:

    path('api/', include('stockmaster.api.urls')),
"""

from django.urls import path

from stockmaster.api import views

app_name = 'stockmaster_api'

urlpatterns = [
    path('health', views.health, name='health'),

    # Auth
    path('auth/signup', views.signup, name='signup'),
    path('auth/signin', views.signin, name='signin'),
    path('auth/me', views.me, name='me'),
    path('auth/forgot-password', views.forgot_password, name='forgot-password'),
    path('auth/verify-otp', views.verify_otp, name='verify-otp'),
    path('auth/reset-password', views.reset_password, name='reset-password'),

    # Catalog
    path('categories', views.categories, name='categories'),
    path('products', views.products, name='products'),
    path('products/upload-csv', views.products_upload_csv, name='products-upload-csv'),
    path('products/<int:pk>', views.product_detail, name='product-detail'),
    path('warehouses', views.warehouses, name='warehouses'),
    path('warehouses/<int:pk>', views.warehouse_detail, name='warehouse-detail'),

    # Stock
    path('stock', views.stock_summary, name='stock'),
    path('stock_ledger', views.stock_ledger, name='stock-ledger'),
    path('stock_receipts', views.stock_receipts, name='stock-receipts'),
    path('stock_receipts/<int:pk>/complete', views.complete_receipt, name='complete-receipt'),
    path('deliveries', views.deliveries, name='deliveries'),
    path('stock_deliveries', views.create_delivery, name='create-delivery'),
    path('deliveries/<int:pk>', views.delivery_detail, name='delivery-detail'),
    path('deliveries/<int:pk>/pack', views.pack_delivery, name='pack-delivery'),
    path('deliveries/<int:pk>/deliver', views.deliver, name='deliver'),
    path('stock_transfers', views.stock_transfers, name='stock-transfers'),
    path('stock_adjustments', views.stock_adjustments, name='stock-adjustments'),
    path('low_stock_alerts', views.low_stock_alerts, name='low-stock-alerts'),
    path('low_stock_alerts/<int:pk>/acknowledge', views.acknowledge_alert, name='acknowledge-alert'),
]
