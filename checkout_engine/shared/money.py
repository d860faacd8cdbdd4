"""Lenient numeric coercion and currency formatting for checkout amounts."""

import math
from typing import Annotated, Any

from loguru import logger
from pydantic import BeforeValidator

CURRENCY_SYMBOLS: dict[str, str] = {
    "BDT": "৳",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
}


def _to_number(value: Any) -> float | None:
    """Return ``value`` as a finite float, or ``None`` if it is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    # Decimal from numeric columns and other real number types convert too
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def coerce_amount(value: Any) -> float:
    """Coerce a fee/price/weight to a float; missing or invalid input becomes ``0.0``.

    ``None`` is treated as "not configured" and is not logged. Anything else
    that is not numeric (``NaN``, ``"abc"``, a bool) is logged as a warning
    so a broken configuration can be told apart from an explicit zero.
    """
    if value is None:
        return 0.0
    number = _to_number(value)
    if number is None:
        logger.warning(f"Invalid amount {value!r} coerced to 0")
        return 0.0
    return number


def coerce_optional_amount(value: Any) -> float | None:
    """Like :func:`coerce_amount` but keeps "not set" as ``None``."""
    if value is None or value == "":
        return None
    number = _to_number(value)
    if number is None:
        logger.warning(f"Invalid amount {value!r} treated as not set")
        return None
    return number


Money = Annotated[float, BeforeValidator(coerce_amount)]
OptionalMoney = Annotated[float | None, BeforeValidator(coerce_optional_amount)]


def currency_symbol(currency_code: str) -> str:
    return CURRENCY_SYMBOLS.get(currency_code.upper(), f"{currency_code.upper()} ")


def format_money(amount: float, currency_code: str = "BDT", precision: int = 2) -> str:
    """Format ``amount`` as e.g. ``৳60.00`` using an explicit currency and precision."""
    return f"{currency_symbol(currency_code)}{amount:.{precision}f}"
