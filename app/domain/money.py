# app/domain/money.py
"""
Decimal helpers for currency figures.

All amounts are ``Decimal`` and rounded with ROUND_HALF_UP to paise.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from app.domain.errors import ValidationError

ZERO = Decimal("0.00")
PAISE = Decimal("0.01")


def round2(value: Decimal) -> Decimal:
    """Round to 2 places, half away from zero (standard currency rounding)."""
    return value.quantize(PAISE, rounding=ROUND_HALF_UP)


def parse_decimal(value, field: str) -> Decimal | None:
    """
    Parse a raw numeric field as entered.

    ``None`` and blank strings mean "not provided" and return None.
    Anything else must be numeric, otherwise ValidationError.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be numeric, got {value!r}", field=field)
    if isinstance(value, Decimal):
        parsed = value
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return None
        try:
            parsed = Decimal(text)
        except (InvalidOperation, ValueError):
            raise ValidationError(f"{field} must be numeric, got {value!r}", field=field)
    if not parsed.is_finite():
        raise ValidationError(f"{field} must be a finite number, got {value!r}", field=field)
    return parsed
