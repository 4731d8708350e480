"""Stock bookkeeping driven by delivery status."""

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, Tuple
from uuid import UUID

from django.db.models import F

from apps.catalog.models import Item, StockMode

logger = logging.getLogger(__name__)

StockMap = Dict[UUID, Decimal]


def stock_effect(lines: Iterable[Tuple[UUID, Decimal]], delivered: bool) -> StockMap:
    """Per-item quantity an order accounts for: its lines when delivered, nothing otherwise."""
    effect = defaultdict(Decimal)
    if delivered:
        for item_id, qty in lines:
            effect[item_id] += Decimal(qty)
    return dict(effect)


def stock_delta(before: StockMap, after: StockMap) -> StockMap:
    """``after - before`` per item, zero entries dropped."""
    delta = {}
    for item_id in set(before) | set(after):
        change = after.get(item_id, Decimal('0')) - before.get(item_id, Decimal('0'))
        if change:
            delta[item_id] = change
    return delta


def apply_stock_delta(delta: StockMap, *, direction: int) -> None:
    """
    Move TRACK stock by ``direction * delta``.

    Customer orders use ``direction=-1`` (delivery consumes stock); seller
    orders use ``+1`` (delivery receives stock). RESELL items are untouched.
    Must run inside the caller's transaction.
    """
    for item_id, qty in delta.items():
        change = qty * direction
        updated = (
            Item.objects
            .filter(id=item_id, stock_mode=StockMode.TRACK)
            .update(stock=F('stock') + change)
        )
        if updated:
            logger.info('Stock %s%s for item %s', '+' if change > 0 else '', change, item_id)
