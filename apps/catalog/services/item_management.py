"""Item CRUD operations service."""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.common.numbers import to_decimal, to_money
from ..models import Item, Unit, StockMode
from .category_management import upsert_category
from .exceptions import InvalidItemError, ItemInUseError, ItemNotFoundError

logger = logging.getLogger(__name__)


def _resolve_category(category_id, category_name):
    """
    Category by id, else upserted by name.

    Returns ``(touched, category_id)``; ``touched`` is False when neither
    argument was supplied.
    """
    if isinstance(category_name, str):
        name = category_name.strip()
        if name:
            return True, upsert_category(name=name).id
        return True, None
    if category_id is not None:
        return True, category_id or None
    return False, None


@transaction.atomic
def create_item(
    *,
    name: str,
    price: Any = 0,
    cost_price: Any = 0,
    unit: str = Unit.PCS,
    stock_mode: str = StockMode.TRACK,
    stock: Any = 0,
    category_id: Optional[UUID] = None,
    category_name: Optional[str] = None,
) -> Item:
    """
    Create a catalog item.

    Money is floored and clamped at zero. Unit/stock-mode invariants are
    applied by ``Item.save()``.

    Raises:
        InvalidItemError: If name is blank
    """
    name = (name or '').strip()
    if not name:
        raise InvalidItemError('Name required')

    _, resolved_category = _resolve_category(category_id, category_name)

    item = Item.objects.create(
        name=name,
        price=to_money(price),
        cost_price=to_money(cost_price),
        unit=Unit.KG if unit == Unit.KG else Unit.PCS,
        stock_mode=StockMode.RESELL if stock_mode == StockMode.RESELL else StockMode.TRACK,
        stock=max(to_decimal(stock), 0),
        category_id=resolved_category,
    )
    logger.info('Item created: %s (%s/%s)', item.name, item.unit, item.stock_mode)
    return item


@transaction.atomic
def update_item(*, item_id: UUID, data: Dict[str, Any]) -> Item:
    """
    Partially update an item.

    Args:
        item_id: Item UUID
        data: Any of name, price, cost_price, unit, stock_mode, stock,
            category_id, category_name

    Raises:
        ItemNotFoundError: If item doesn't exist
        InvalidItemError: If name is set to blank
    """
    try:
        item = Item.objects.select_for_update().get(id=item_id)
    except Item.DoesNotExist:
        raise ItemNotFoundError(f"Item {item_id} not found")

    if 'name' in data:
        name = (data['name'] or '').strip()
        if not name:
            raise InvalidItemError('Name required')
        item.name = name
    if 'price' in data:
        item.price = to_money(data['price'])
    if 'cost_price' in data:
        item.cost_price = to_money(data['cost_price'])
    if data.get('unit') in Unit.values:
        item.unit = data['unit']
    if data.get('stock_mode') in StockMode.values:
        item.stock_mode = data['stock_mode']
    if 'stock' in data and data['stock'] is not None:
        item.stock = max(to_decimal(data['stock']), 0)

    if 'category_id' in data or 'category_name' in data:
        _, category = _resolve_category(data.get('category_id'), data.get('category_name'))
        item.category_id = category

    item.save()
    return item


@transaction.atomic
def delete_item(*, item_id: UUID) -> None:
    """
    Delete an item that no order references.

    Raises:
        ItemNotFoundError: If item doesn't exist
        ItemInUseError: If any order or seller-order line references it
    """
    try:
        item = Item.objects.get(id=item_id)
    except Item.DoesNotExist:
        raise ItemNotFoundError(f"Item {item_id} not found")

    order_items_count = item.order_lines.count()
    seller_order_items_count = item.seller_order_lines.count()

    if order_items_count or seller_order_items_count:
        raise ItemInUseError(
            'Cannot delete item that is referenced in orders. '
            'Please remove the item from all orders first.',
            order_items_count=order_items_count,
            seller_order_items_count=seller_order_items_count,
        )

    item.delete()
    logger.info('Item deleted: %s', item_id)


def search_items(*, q: Optional[str] = None, category: Optional[str] = None) -> QuerySet:
    """Items filtered by category id (``ALL`` = any) and free-text search."""
    queryset = Item.objects.select_related('category').order_by('name')

    if category and category != 'ALL':
        queryset = queryset.filter(category_id=category)

    q = (q or '').strip()
    if q:
        queryset = queryset.filter(
            Q(name__icontains=q) | Q(category__name__icontains=q)
        )

    return queryset
