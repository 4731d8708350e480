"""Lenient numeric coercion for request payloads."""
from decimal import Decimal, InvalidOperation, ROUND_FLOOR


def to_decimal(value, default=Decimal('0')):
    """Coerce numbers and numeric strings; anything else (or non-finite) -> default."""
    if isinstance(value, bool) or value is None:
        return default
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return default
    if not number.is_finite():
        return default
    return number


def to_money(value, default=0):
    """Whole, non-negative currency amount (fractions floored)."""
    number = to_decimal(value, Decimal(default))
    return max(0, int(number.to_integral_value(rounding=ROUND_FLOOR)))
