"""Quantity normalization and order totals."""

from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import Iterable, Tuple

from django.conf import settings

from apps.catalog.models import Unit
from apps.common.numbers import to_decimal

ZERO = Decimal('0')


def normalize_qty(raw, unit: str) -> Decimal:
    """
    Quantity for a line of the given unit.

    PCS truncates to a whole number; KG rounds half-up to
    ``POS['KG_QTY_DECIMALS']`` places. Never negative.
    """
    qty = to_decimal(raw)
    if unit == Unit.KG:
        step = Decimal(1).scaleb(-settings.POS['KG_QTY_DECIMALS'])
        qty = qty.quantize(step, rounding=ROUND_HALF_UP)
    else:
        qty = qty.quantize(Decimal('1'), rounding=ROUND_DOWN)
    return max(qty, ZERO)


def line_amount(qty, price) -> int:
    """``round_half_up(qty * price)`` in whole currency units."""
    return int((Decimal(qty) * price).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def compute_totals(
    lines: Iterable[Tuple[Decimal, int]],
    *,
    discount: int,
    delivery_fee: int,
    fee_in_total: bool,
) -> Tuple[int, int]:
    """
    Return ``(subtotal, total)`` for ``(qty, price)`` pairs.

    ``total = max(0, subtotal - discount [+ delivery_fee])``; the fee only
    counts when ``fee_in_total`` is set (seller orders).
    """
    subtotal = sum(line_amount(qty, price) for qty, price in lines)
    total = subtotal - discount
    if fee_in_total:
        total += delivery_fee
    return subtotal, max(0, total)
