"""
Stockmaster configuration.

Usage in settings.py:
    STOCKMASTER = {
        "ADJUSTMENT_FLOOR_AT_ZERO": True,
        "LEDGER_RECENT_LIMIT": 50,
        "OTP_TTL_MINUTES": 10,
        "EXPOSE_DEV_OTP": False,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class StockmasterSettings:
    """Stockmaster configuration settings."""

    # Clamp negative adjustments at zero (False = apply raw delta)
    ADJUSTMENT_FLOOR_AT_ZERO: bool = True

    # Default page size for the recent ledger listing
    LEDGER_RECENT_LIMIT: int = 50

    # Attempts to find a free operation number before giving up
    NUMBER_ATTEMPTS: int = 10

    # Password reset OTP
    OTP_LENGTH: int = 6
    OTP_TTL_MINUTES: int = 10
    OTP_EMAIL_FROM: str | None = None

    # Return the OTP in the API response (development only)
    EXPOSE_DEV_OTP: bool = False

    # Signed token lifetimes, in seconds
    AUTH_TOKEN_MAX_AGE: int = 7 * 24 * 60 * 60
    RESET_TOKEN_MAX_AGE: int = 15 * 60

    MIN_PASSWORD_LENGTH: int = 6


def get_stockmaster_settings() -> StockmasterSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "STOCKMASTER", {})
    return StockmasterSettings(**{
        k: v for k, v in user_settings.items()
        if k in StockmasterSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_stockmaster_settings(), name)


stockmaster_settings = _LazySettings()
