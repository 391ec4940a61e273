"""
Exceptions for Stockmaster.

All errors carry a structured code for programmatic handling.
StockError covers catalog and stock operations, AuthError covers
signup/signin and the password reset flow.
"""

from decimal import Decimal
from typing import Any


class BaseError(Exception):
    """
    Base structured error.

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.data!r})"

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }


class StockError(BaseError):
    """
    Structured exception for stock operations.

    Usage:
        try:
            stock.create_delivery(product, warehouse, 10)
        except StockError as e:
            if e.code == 'INSUFFICIENT_QUANTITY':
                print(f"Only {e.available} available")
    """

    _default_messages = {
        'INSUFFICIENT_QUANTITY': 'Insufficient stock',
        'INVALID_QUANTITY': 'Quantity must be greater than zero',
        'INVALID_STATUS': 'Invalid status for this operation',
        'REASON_REQUIRED': 'A reason is required',
        'NOT_FOUND': 'Record not found',
        'INVALID_PRODUCT': 'Invalid or inactive product',
        'INVALID_WAREHOUSE': 'Invalid or inactive warehouse',
        'SAME_WAREHOUSE': 'Source and destination warehouses must differ',
        'DUPLICATE_NUMBER': 'Operation number already exists',
        'ALREADY_ACKNOWLEDGED': 'Alert already acknowledged',
        'VALIDATION_ERROR': 'Invalid data',
        'IN_USE': 'Record has stock history and cannot be deleted',
    }

    @property
    def available(self) -> Decimal:
        """Shortcut for data['available']."""
        return self.data.get('available', Decimal('0'))

    @property
    def requested(self) -> Decimal:
        """Shortcut for data['requested']."""
        return self.data.get('requested', Decimal('0'))


class AuthError(BaseError):
    """Structured exception for authentication and password reset."""

    _default_messages = {
        'USER_EXISTS': 'User already exists with this email',
        'INVALID_CREDENTIALS': 'Invalid email or password',
        'ACCOUNT_INACTIVE': 'Account is inactive',
        'INVALID_TOKEN': 'Invalid or expired token',
        'INVALID_OTP': 'Invalid or expired OTP',
        'WEAK_PASSWORD': 'Password is too short',
        'EMAIL_REQUIRED': 'Email is required',
        'INVALID_EMAIL': 'Enter a valid email address',
    }
