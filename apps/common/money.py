from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .errors import ValidationError

CENT = Decimal("0.01")
# Largest amount an IntegerField column holds
MAX_CENTS = 2**31 - 1


def to_cents(value, *, field: str = "price") -> int:
    """Parse a currency amount ("12.5", 12.5, Decimal) into integer cents."""
    if isinstance(value, bool) or value is None or value == "":
        raise ValidationError(f"Invalid {field}")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid {field}")
    if not amount.is_finite():
        raise ValidationError(f"Invalid {field}")
    try:
        return int((amount.quantize(CENT, rounding=ROUND_HALF_UP) * 100).to_integral_value())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid {field}")


def from_cents(cents: int | None) -> Decimal:
    return (Decimal(int(cents or 0)) / 100).quantize(CENT)


def cents_str(cents: int | None) -> str:
    return f"{from_cents(cents):.2f}"


def cents_float(cents: int | None) -> float:
    return round(int(cents or 0) / 100.0, 2)


def fmt_usd(cents: int | None) -> str:
    return f"${from_cents(cents):,.2f}"
