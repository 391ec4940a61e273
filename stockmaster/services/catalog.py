"""
Catalog — categories, products and warehouses.

Writes validate through Model.full_clean(); Django ValidationError is
reported as StockError('VALIDATION_ERROR', errors={field: [messages]}).

CSV import:
    from stockmaster.services.catalog import Catalog

    with open('products.csv', newline='', encoding='utf-8') as f:
        result = Catalog.import_products_csv(f)
    result.created, result.updated, result.errors
"""

import csv
import logging
from dataclasses import dataclass, field

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import ProtectedError

from stockmaster.exceptions import StockError
from stockmaster.models.catalog import Category, Product
from stockmaster.models.enums import Unit
from stockmaster.models.warehouse import Warehouse
from stockmaster.services.lookups import get_or_404

logger = logging.getLogger('stockmaster')

CATEGORY_FIELDS = ('name', 'description')
PRODUCT_FIELDS = ('name', 'sku', 'unit', 'reorder_level', 'description', 'is_active')
WAREHOUSE_FIELDS = ('name', 'code', 'location', 'is_active')

NULL_IDS = (None, '', 'null', 'undefined')


def _validated_save(instance):
    try:
        instance.full_clean()
    except ValidationError as e:
        raise StockError('VALIDATION_ERROR', errors=e.message_dict) from None
    instance.save()
    return instance


def _assign(instance, data: dict, fields) -> None:
    for name in fields:
        if name in data:
            value = data[name]
            if isinstance(value, str):
                value = value.strip()
            setattr(instance, name, value)


def _category_from(value) -> Category | None:
    if value in NULL_IDS:
        return None
    if isinstance(value, Category):
        return value
    try:
        return Category.objects.get(pk=int(value))
    except (TypeError, ValueError, Category.DoesNotExist):
        raise StockError(
            'VALIDATION_ERROR',
            errors={'category_id': ['Unknown category.']},
        ) from None


def _actor(user):
    return user if user is not None and user.is_authenticated else None


@dataclass
class ImportResult:
    """Outcome of a CSV product import."""
    created: int = 0
    updated: int = 0
    errors: list[dict] = field(default_factory=list)


class Catalog:
    """Catalog CRUD."""

    # ══════════════════════════════════════════════════════════════
    # CATEGORIES
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def list_categories(cls):
        return list(Category.objects.all())

    @classmethod
    def create_category(cls, data: dict) -> Category:
        category = Category()
        _assign(category, data, CATEGORY_FIELDS)
        return _validated_save(category)

    # ══════════════════════════════════════════════════════════════
    # PRODUCTS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def list_products(cls, active_only: bool = False):
        qs = Product.objects.active() if active_only else Product.objects.all()
        return list(qs.select_related('category'))

    @classmethod
    def create_product(cls, data: dict, user=None) -> Product:
        """
        Create a product.

        Args:
            data: name, sku, category_id, unit, reorder_level,
                description, is_active

        Raises:
            StockError('VALIDATION_ERROR'): Missing/invalid fields or SKU taken
        """
        product = Product(created_by=_actor(user))
        _assign(product, data, PRODUCT_FIELDS)
        product.category = _category_from(data.get('category_id'))
        _validated_save(product)
        logger.info("catalog.product.created", extra={"product": product.sku})
        return product

    @classmethod
    def update_product(cls, product_id, data: dict) -> Product:
        """Partial update; absent keys keep their value."""
        product = get_or_404(Product, product_id)
        _assign(product, data, PRODUCT_FIELDS)
        if 'category_id' in data:
            product.category = _category_from(data['category_id'])
        _validated_save(product)
        logger.info("catalog.product.updated", extra={"product": product.sku})
        return product

    @classmethod
    def delete_product(cls, product_id) -> None:
        """
        Delete a product without stock history.

        Raises:
            StockError('NOT_FOUND'): Unknown product
            StockError('IN_USE'): Product has balances, ledger entries or
                operations; deactivate it instead
        """
        product = get_or_404(Product, product_id)
        sku = product.sku
        try:
            with transaction.atomic():
                product.delete()
        except ProtectedError:
            raise StockError('IN_USE', product_id=product.pk) from None
        logger.info("catalog.product.deleted", extra={"product": sku})

    @classmethod
    def import_products_csv(cls, stream, user=None) -> ImportResult:
        """
        Upsert products from CSV, keyed by SKU.

        Columns: name, sku (required), category_id, unit, reorder_level,
        description, is_active. Each row is saved on its own; bad rows are
        reported with their line number (header is line 1) and skipped.

        Args:
            stream: Text file-like object
        """
        result = ImportResult()
        reader = csv.DictReader(stream)

        for line, row in enumerate(reader, start=2):
            row = {k.strip(): (v or '').strip() for k, v in row.items() if k}
            sku = row.get('sku', '')

            if not row.get('name') or not sku:
                result.errors.append({'row': line, 'error': 'Missing required fields: name or sku'})
                continue

            try:
                reorder_level = int(row['reorder_level']) if row.get('reorder_level') else 0
            except ValueError:
                reorder_level = 0

            data = {
                'name': row['name'],
                'sku': sku,
                'unit': row.get('unit') or Unit.PIECES,
                'reorder_level': reorder_level,
                'description': row.get('description', ''),
                'is_active': row.get('is_active', '').lower() != 'false',
            }

            try:
                category = _category_from(row.get('category_id'))
            except StockError:
                category = None

            existing = Product.objects.filter(sku=sku).first()
            product = existing or Product(created_by=_actor(user))
            _assign(product, data, PRODUCT_FIELDS)
            product.category = category

            try:
                with transaction.atomic():
                    _validated_save(product)
            except StockError as e:
                result.errors.append({'row': line, 'sku': sku, 'error': e.message, 'details': e.data})
                continue

            if existing:
                result.updated += 1
            else:
                result.created += 1

        logger.info(
            "catalog.products.imported",
            extra={
                "created": result.created,
                "updated": result.updated,
                "errors": len(result.errors),
            },
        )
        return result

    # ══════════════════════════════════════════════════════════════
    # WAREHOUSES
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def list_warehouses(cls, active_only: bool = False):
        qs = Warehouse.objects.active() if active_only else Warehouse.objects.all()
        return list(qs)

    @classmethod
    def create_warehouse(cls, data: dict) -> Warehouse:
        warehouse = Warehouse()
        _assign(warehouse, data, WAREHOUSE_FIELDS)
        _validated_save(warehouse)
        logger.info("catalog.warehouse.created", extra={"warehouse": warehouse.code})
        return warehouse

    @classmethod
    def update_warehouse(cls, warehouse_id, data: dict) -> Warehouse:
        warehouse = get_or_404(Warehouse, warehouse_id)
        _assign(warehouse, data, WAREHOUSE_FIELDS)
        _validated_save(warehouse)
        logger.info("catalog.warehouse.updated", extra={"warehouse": warehouse.code})
        return warehouse
