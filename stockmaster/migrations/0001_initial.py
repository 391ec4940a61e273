"""
Initial migration for Stockmaster models.
"""

from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

UNIT_CHOICES = [
    ('pcs', 'Pieces'), ('kg', 'Kilogram'), ('ltr', 'Litre'), ('box', 'Box'),
    ('carton', 'Carton'), ('dozen', 'Dozen'), ('meter', 'Meter'),
]
ENTRY_TYPE_CHOICES = [
    ('receipt', 'Receipt'), ('delivery', 'Delivery'), ('transfer_in', 'Transfer in'),
    ('transfer_out', 'Transfer out'), ('adjustment', 'Adjustment'),
]


def quantity_field(verbose_name, **kwargs):
    return models.DecimalField(decimal_places=3, max_digits=12, verbose_name=verbose_name, **kwargs)


def user_field(verbose_name=None):
    kwargs = {'verbose_name': verbose_name} if verbose_name else {}
    return models.ForeignKey(
        blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
        related_name='+', to=settings.AUTH_USER_MODEL, **kwargs,
    )


class Migration(migrations.Migration):
    """Create catalog, balance, ledger, operation, alert and OTP tables."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True, verbose_name='Name')),
                ('description', models.TextField(blank=True, default='', verbose_name='Description')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Category',
                'verbose_name_plural': 'Categories',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Warehouse',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(help_text='Unique short identifier (e.g. MAIN, WH-2)', max_length=50, unique=True, verbose_name='Code')),
                ('name', models.CharField(max_length=100, verbose_name='Name')),
                ('location', models.CharField(blank=True, default='', max_length=255, verbose_name='Location')),
                ('is_active', models.BooleanField(default=True, verbose_name='Active')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Warehouse',
                'verbose_name_plural': 'Warehouses',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('sku', models.CharField(max_length=64, unique=True, verbose_name='SKU')),
                ('unit', models.CharField(choices=UNIT_CHOICES, default='pcs', max_length=10, verbose_name='Unit')),
                ('reorder_level', quantity_field(
                    'Reorder level',
                    default=Decimal('0'),
                    help_text='Alert when stock falls to or below this value. 0 = no alert.',
                    validators=[django.core.validators.MinValueValidator(Decimal('0'))],
                )),
                ('description', models.TextField(blank=True, default='', verbose_name='Description')),
                ('is_active', models.BooleanField(default=True, verbose_name='Active')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='products', to='stockmaster.category', verbose_name='Category')),
                ('created_by', user_field('Created by')),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'ordering': ['name'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('reorder_level__gte', 0)), name='product_reorder_level_non_negative'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Balance',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', quantity_field('Quantity', default=Decimal('0'))),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='balances', to='stockmaster.product', verbose_name='Product')),
                ('warehouse', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='balances', to='stockmaster.warehouse', verbose_name='Warehouse')),
            ],
            options={
                'verbose_name': 'Balance',
                'verbose_name_plural': 'Balances',
                'ordering': ['product__name', 'warehouse__name'],
                'constraints': [
                    models.UniqueConstraint(fields=('product', 'warehouse'), name='unique_balance_product_warehouse'),
                ],
            },
        ),
        migrations.CreateModel(
            name='LedgerEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('entry_type', models.CharField(choices=ENTRY_TYPE_CHOICES, max_length=20, verbose_name='Type')),
                ('quantity_change', quantity_field('Change', help_text='Positive = in, negative = out')),
                ('quantity_after', quantity_field('Quantity after')),
                ('reference_number', models.CharField(blank=True, db_index=True, default='', max_length=50, verbose_name='Reference')),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Created at')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='ledger_entries', to='stockmaster.product', verbose_name='Product')),
                ('warehouse', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='ledger_entries', to='stockmaster.warehouse', verbose_name='Warehouse')),
                ('user', user_field('User')),
            ],
            options={
                'verbose_name': 'Ledger entry',
                'verbose_name_plural': 'Ledger entries',
                'ordering': ['created_at', 'pk'],
                'indexes': [
                    models.Index(fields=['product', 'warehouse'], name='stockmaster_product_4a1c2e_idx'),
                    models.Index(fields=['entry_type'], name='stockmaster_entry_t_8d3f0b_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StockReceipt',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('receipt_number', models.CharField(max_length=50, unique=True, verbose_name='Receipt number')),
                ('quantity', quantity_field('Quantity', validators=[django.core.validators.MinValueValidator(Decimal('0.001'))])),
                ('unit_cost', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0'))], verbose_name='Unit cost')),
                ('supplier_name', models.CharField(blank=True, default='', max_length=200, verbose_name='Supplier')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Notes')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('completed', 'Completed')], db_index=True, default='pending', max_length=20, verbose_name='Status')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True, verbose_name='Completed at')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='receipts', to='stockmaster.product', verbose_name='Product')),
                ('warehouse', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='receipts', to='stockmaster.warehouse', verbose_name='Warehouse')),
                ('created_by', user_field()),
            ],
            options={
                'verbose_name': 'Stock receipt',
                'verbose_name_plural': 'Stock receipts',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='DeliveryOrder',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('delivery_number', models.CharField(max_length=50, unique=True, verbose_name='Delivery number')),
                ('quantity', quantity_field('Quantity')),
                ('status', models.CharField(choices=[('Picked', 'Picked'), ('Packed', 'Packed'), ('Delivered', 'Delivered')], db_index=True, default='Picked', max_length=20, verbose_name='Status')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Notes')),
                ('picked_at', models.DateTimeField(default=django.utils.timezone.now, verbose_name='Picked at')),
                ('packed_at', models.DateTimeField(blank=True, null=True, verbose_name='Packed at')),
                ('delivered_at', models.DateTimeField(blank=True, null=True, verbose_name='Delivered at')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='deliveries', to='stockmaster.product', verbose_name='Product')),
                ('warehouse', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='deliveries', to='stockmaster.warehouse', verbose_name='Warehouse')),
                ('created_by', user_field()),
            ],
            options={
                'verbose_name': 'Delivery order',
                'verbose_name_plural': 'Delivery orders',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['product', 'warehouse', 'status'], name='stockmaster_product_b7e91d_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StockTransfer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('transfer_number', models.CharField(max_length=50, unique=True, verbose_name='Transfer number')),
                ('quantity', quantity_field('Quantity')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Notes')),
                ('status', models.CharField(choices=[('completed', 'Completed')], default='completed', max_length=20, verbose_name='Status')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True, verbose_name='Completed at')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='transfers', to='stockmaster.product', verbose_name='Product')),
                ('from_warehouse', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='transfers_out', to='stockmaster.warehouse', verbose_name='From')),
                ('to_warehouse', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='transfers_in', to='stockmaster.warehouse', verbose_name='To')),
                ('created_by', user_field()),
            ],
            options={
                'verbose_name': 'Stock transfer',
                'verbose_name_plural': 'Stock transfers',
                'ordering': ['-created_at'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('from_warehouse', models.F('to_warehouse')), _negated=True), name='stock_transfer_warehouses_differ'),
                ],
            },
        ),
        migrations.CreateModel(
            name='StockAdjustment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('adjustment_number', models.CharField(max_length=50, unique=True, verbose_name='Adjustment number')),
                ('quantity_change', quantity_field('Requested change')),
                ('applied_change', quantity_field('Applied change')),
                ('reason', models.CharField(help_text='Required. E.g. "damaged", "cycle count"', max_length=255, verbose_name='Reason')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Notes')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='adjustments', to='stockmaster.product', verbose_name='Product')),
                ('warehouse', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='adjustments', to='stockmaster.warehouse', verbose_name='Warehouse')),
                ('created_by', user_field()),
            ],
            options={
                'verbose_name': 'Stock adjustment',
                'verbose_name_plural': 'Stock adjustments',
                'ordering': ['-created_at'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('quantity_change', 0), _negated=True), name='stock_adjustment_change_non_zero'),
                ],
            },
        ),
        migrations.CreateModel(
            name='LowStockAlert',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('current_quantity', quantity_field('Quantity at trigger')),
                ('reorder_level', quantity_field('Reorder level')),
                ('message', models.CharField(blank=True, default='', max_length=255, verbose_name='Message')),
                ('is_acknowledged', models.BooleanField(db_index=True, default=False, verbose_name='Acknowledged')),
                ('acknowledged_at', models.DateTimeField(blank=True, null=True, verbose_name='Acknowledged at')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Created at')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='low_stock_alerts', to='stockmaster.product', verbose_name='Product')),
                ('warehouse', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='low_stock_alerts', to='stockmaster.warehouse', verbose_name='Warehouse')),
                ('acknowledged_by', user_field('Acknowledged by')),
            ],
            options={
                'verbose_name': 'Low stock alert',
                'verbose_name_plural': 'Low stock alerts',
                'ordering': ['-created_at', '-pk'],
                'indexes': [
                    models.Index(fields=['product', 'warehouse', 'is_acknowledged'], name='stockmaster_product_c2d5a8_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='OneTimePassword',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('email', models.EmailField(db_index=True, max_length=254, verbose_name='Email')),
                ('code_hash', models.CharField(max_length=128, verbose_name='Code hash')),
                ('purpose', models.CharField(choices=[('password_reset', 'Password reset'), ('email_verification', 'Email verification')], default='password_reset', max_length=30, verbose_name='Purpose')),
                ('expires_at', models.DateTimeField(db_index=True, verbose_name='Expires at')),
                ('is_used', models.BooleanField(default=False, verbose_name='Used')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'One-time password',
                'verbose_name_plural': 'One-time passwords',
            },
        ),
    ]
