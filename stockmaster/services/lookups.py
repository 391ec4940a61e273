"""
Input normalization shared by the stock services.

Services accept either model instances or primary keys (as they arrive
from the API) and quantities as Decimal, int or numeric strings.
"""

import secrets
from decimal import Decimal, InvalidOperation

from django.db import IntegrityError, transaction
from django.utils import timezone

from stockmaster.conf import stockmaster_settings
from stockmaster.exceptions import StockError
from stockmaster.models.catalog import Product
from stockmaster.models.warehouse import Warehouse

QUANTITY_STEP = Decimal('0.001')

# Largest value a quantity column (max_digits=12, decimal_places=3) holds
MAX_QUANTITY = Decimal('999999999.999')


def to_quantity(value, *, positive: bool = True) -> Decimal:
    """
    Parse a quantity.

    Raises:
        StockError('INVALID_QUANTITY'): If not numeric, not finite,
            zero, beyond MAX_QUANTITY, or negative when positive=True
    """
    try:
        quantity = Decimal(str(value)).quantize(QUANTITY_STEP)
    except (InvalidOperation, TypeError, ValueError):
        raise StockError('INVALID_QUANTITY', requested=value) from None

    if not quantity.is_finite() or quantity == 0:
        raise StockError('INVALID_QUANTITY', requested=value)
    if abs(quantity) > MAX_QUANTITY:
        raise StockError(
            'INVALID_QUANTITY',
            f'Quantity cannot exceed {MAX_QUANTITY}',
            requested=value,
        )
    if positive and quantity < 0:
        raise StockError('INVALID_QUANTITY', requested=value)
    return quantity


def _resolve(model, value, code: str, require_active: bool):
    if isinstance(value, model):
        obj = value
    else:
        if value in (None, ''):
            raise StockError(code, id=value)
        try:
            pk = int(value)
        except (TypeError, ValueError):
            raise StockError(code, id=value) from None
        try:
            obj = model.objects.get(pk=pk)
        except model.DoesNotExist:
            raise StockError(
                'NOT_FOUND',
                f"{model._meta.verbose_name} not found".capitalize(),
                id=pk,
            ) from None

    if require_active and not obj.is_active:
        raise StockError(code, id=obj.pk)
    return obj


def resolve_product(value, require_active: bool = True) -> Product:
    """Product instance or pk → Product."""
    return _resolve(Product, value, 'INVALID_PRODUCT', require_active)


def resolve_warehouse(value, require_active: bool = True) -> Warehouse:
    """Warehouse instance or pk → Warehouse."""
    return _resolve(Warehouse, value, 'INVALID_WAREHOUSE', require_active)


def get_or_404(model, pk, **filters):
    """Fetch by pk or raise StockError('NOT_FOUND')."""
    try:
        return model.objects.get(pk=int(pk), **filters)
    except (TypeError, ValueError, model.DoesNotExist):
        raise StockError(
            'NOT_FOUND',
            f"{model._meta.verbose_name} not found".capitalize(),
            id=pk,
        ) from None


def operation_number(model, field: str, prefix: str, number: str | None = None) -> str:
    """
    Pick the operation number for a new record.

    A caller-supplied number is used as is when free. Otherwise a
    PREFIX-YYYYMM-NNNNN number is generated.

    Raises:
        StockError('DUPLICATE_NUMBER'): Supplied number taken, or no free
            number found within NUMBER_ATTEMPTS tries
    """
    if number:
        if model.objects.filter(**{field: number}).exists():
            raise StockError('DUPLICATE_NUMBER', number=number)
        return number

    year_month = timezone.now().strftime('%Y%m')
    for _ in range(stockmaster_settings.NUMBER_ATTEMPTS):
        candidate = f"{prefix}-{year_month}-{secrets.randbelow(100000):05d}"
        if not model.objects.filter(**{field: candidate}).exists():
            return candidate
    raise StockError('DUPLICATE_NUMBER', prefix=prefix)


def create_numbered(model, field: str, prefix: str, number: str | None = None, **fields):
    """
    Insert a record under its operation number.

    A generated number taken by another request between the check and the
    insert is replaced by a fresh one. A caller-supplied number is never
    replaced.

    Raises:
        StockError('DUPLICATE_NUMBER'): Supplied number taken, or no free
            number found within NUMBER_ATTEMPTS tries

    Concurrency:
        - The unique constraint on field decides; the insert runs in its
          own savepoint so a lost race leaves the caller's transaction usable
    """
    for _ in range(stockmaster_settings.NUMBER_ATTEMPTS):
        candidate = operation_number(model, field, prefix, number)
        try:
            with transaction.atomic():
                return model.objects.create(**{field: candidate}, **fields)
        except IntegrityError:
            if not model.objects.filter(**{field: candidate}).exists():
                raise
            if number:
                raise StockError('DUPLICATE_NUMBER', number=number) from None
    raise StockError('DUPLICATE_NUMBER', prefix=prefix)
