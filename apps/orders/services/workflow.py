"""
Lifecycle shared by customer orders and seller orders.

Both kinds keep line price snapshots, normalize quantities per unit and
reconcile stock from the delivery status. They differ in the counterparty
model, the direction stock moves on delivery and whether the delivery fee
counts towards the total; ``OrderKind`` captures those differences.

Every write locks the order row and runs in one transaction. Stock is
reconciled as ``effect(after) - effect(before)``, so status toggles and line
edits on a delivered order are applied exactly once.

Stock direction per kind:

- customer orders take TRACK stock out when delivered;
- seller orders put TRACK stock back in when delivered (restocking from a
  supplier). Restocking is a deliberate addition on top of plain purchase
  bookkeeping.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, Optional, Type
from uuid import UUID

from django.db import models, transaction
from django.db.models import Count, Prefetch, Q, QuerySet
from django.utils import timezone

from apps.catalog.models import Item
from apps.common.numbers import to_decimal, to_money
from apps.contacts.models import Customer, Seller
from apps.contacts.services import upsert_party
from ..models import (
    DeliveryStatus,
    Order,
    OrderItem,
    PaymentStatus,
    SellerOrder,
    SellerOrderItem,
)
from .exceptions import EmptyOrderError, InvalidOrderItemError, OrderNotFoundError
from .pricing import compute_totals, normalize_qty
from .stock import apply_stock_delta, stock_delta, stock_effect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderKind:
    label: str
    order_model: Type[models.Model]
    line_model: Type[models.Model]
    party_model: Type[models.Model]
    party_field: str
    # -1: delivery consumes stock, +1: delivery receives stock
    stock_direction: int
    fee_in_total: bool


CUSTOMER_ORDER = OrderKind(
    label='Order',
    order_model=Order,
    line_model=OrderItem,
    party_model=Customer,
    party_field='customer',
    stock_direction=-1,
    fee_in_total=False,
)

SELLER_ORDER = OrderKind(
    label='Seller order',
    order_model=SellerOrder,
    line_model=SellerOrderItem,
    party_model=Seller,
    party_field='seller',
    stock_direction=1,
    fee_in_total=True,
)


@dataclass
class Line:
    qty: Decimal
    price: int


# =============================================================================
# Status helpers
# =============================================================================

def resolve_payment_status(value: Any = None, paid: Optional[bool] = None,
                           current: Optional[str] = None) -> str:
    """
    Payment status from a case-insensitive string, else the legacy ``paid``
    flag, else ``current``. Unknown strings fall back to ``unpaid``.
    """
    if value not in (None, ''):
        key = str(value).strip().lower()
        return key if key in PaymentStatus.values else PaymentStatus.UNPAID
    if paid is not None:
        return PaymentStatus.PAID if paid else PaymentStatus.UNPAID
    return current or PaymentStatus.UNPAID


def resolve_delivery_status(value: Any = None, delivered: Optional[bool] = None,
                            current: Optional[str] = None) -> str:
    """Same rules as ``resolve_payment_status``; unknown strings become ``pending``."""
    if value not in (None, ''):
        key = str(value).strip().lower()
        return key if key in DeliveryStatus.values else DeliveryStatus.PENDING
    if delivered is not None:
        return DeliveryStatus.DELIVERED if delivered else DeliveryStatus.PENDING
    return current or DeliveryStatus.PENDING


def _stamp(previous, was_active, is_active, now):
    """Set on entering a state, kept while it holds, cleared on leaving."""
    if not is_active:
        return None
    if was_active and previous:
        return previous
    return now


# =============================================================================
# Line helpers
# =============================================================================

def _stored_lines(order) -> Dict[UUID, Dict[str, Any]]:
    """Existing rows grouped by item; duplicate rows sum their qty."""
    grouped = {}
    for row in order.items.order_by('pk'):
        entry = grouped.get(row.item_id)
        if entry is None:
            grouped[row.item_id] = {'qty': row.qty, 'price': row.price, 'rows': [row]}
        else:
            entry['qty'] += row.qty
            entry['rows'].append(row)
    return grouped


def _item_uuid(value) -> UUID:
    try:
        return value if isinstance(value, UUID) else UUID(str(value))
    except (TypeError, ValueError):
        raise InvalidOrderItemError()


def _resolve_lines(raw_lines: Iterable[Dict[str, Any]],
                   stored: Dict[UUID, Dict[str, Any]]) -> Dict[UUID, Line]:
    """
    Turn requested ``{item_id, qty}`` lines into normalized lines.

    Duplicate items are merged. Items already on the order keep their price
    snapshot; new ones take the current catalog price. Lines whose quantity
    normalizes to zero are dropped.

    Raises:
        InvalidOrderItemError: If an item id is unknown
        EmptyOrderError: If no line is left
    """
    requested = {}
    for raw in raw_lines or []:
        item_id = _item_uuid(raw.get('item_id'))
        requested[item_id] = requested.get(item_id, Decimal('0')) + to_decimal(raw.get('qty'))

    catalog = Item.objects.in_bulk(list(requested))
    lines = {}
    for item_id, raw_qty in requested.items():
        item = catalog.get(item_id)
        if item is None:
            raise InvalidOrderItemError()

        qty = normalize_qty(raw_qty, item.unit)
        if qty <= 0:
            continue

        previous = stored.get(item_id)
        lines[item_id] = Line(qty=qty, price=previous['price'] if previous else item.price)

    if not lines:
        raise EmptyOrderError()
    return lines


def _sync_lines(kind: OrderKind, order, stored, lines: Dict[UUID, Line]) -> None:
    """Make the order's rows match ``lines``, one row per item."""
    stale_ids = []
    for item_id, entry in stored.items():
        keep, *extras = entry['rows']
        line = lines.get(item_id)
        if line is None:
            stale_ids.extend(row.pk for row in entry['rows'])
            continue
        stale_ids.extend(row.pk for row in extras)
        if keep.qty != line.qty:
            keep.qty = line.qty
            keep.save(update_fields=['qty'])

    if stale_ids:
        kind.line_model.objects.filter(pk__in=stale_ids).delete()

    kind.line_model.objects.bulk_create([
        kind.line_model(order=order, item_id=item_id, qty=line.qty, price=line.price)
        for item_id, line in lines.items()
        if item_id not in stored
    ])


def _lock(kind: OrderKind, order_id):
    try:
        return kind.order_model.objects.select_for_update().get(id=order_id)
    except kind.order_model.DoesNotExist:
        raise OrderNotFoundError(f'{kind.label} not found')


# =============================================================================
# Operations
# =============================================================================

def get_order(kind: OrderKind, order_id):
    """Order with its party and lines loaded."""
    queryset = (
        kind.order_model.objects
        .select_related(kind.party_field)
        .prefetch_related(Prefetch('items', queryset=kind.line_model.objects.select_related('item')))
    )
    try:
        return queryset.get(id=order_id)
    except kind.order_model.DoesNotExist:
        raise OrderNotFoundError(f'{kind.label} not found')


@transaction.atomic
def create(kind: OrderKind, *, party: Optional[Dict[str, Any]] = None, items=None,
           discount: Any = 0, delivery_fee: Any = 0, payment_type: Optional[str] = None,
           delivery_note: Optional[str] = None, payment_status: Any = None,
           delivery_status: Any = None, paid: Optional[bool] = None,
           delivered: Optional[bool] = None):
    """
    Create an order with price snapshots from the current catalog.

    An order created as delivered moves stock immediately.

    Raises:
        EmptyOrderError: If no line has a positive quantity
        InvalidOrderItemError: If a line references an unknown item
    """
    if not items:
        raise EmptyOrderError()

    lines = _resolve_lines(items, {})
    discount = to_money(discount)
    delivery_fee = to_money(delivery_fee)
    subtotal, total = compute_totals(
        ((line.qty, line.price) for line in lines.values()),
        discount=discount,
        delivery_fee=delivery_fee,
        fee_in_total=kind.fee_in_total,
    )

    now = timezone.now()
    pay = resolve_payment_status(payment_status, paid)
    ship = resolve_delivery_status(delivery_status, delivered)

    order = kind.order_model.objects.create(
        payment_status=pay,
        delivery_status=ship,
        paid_at=now if pay == PaymentStatus.PAID else None,
        delivered_at=now if ship == DeliveryStatus.DELIVERED else None,
        payment_type=payment_type or None,
        delivery_note=delivery_note or None,
        subtotal=subtotal,
        discount=discount,
        delivery_fee=delivery_fee,
        total=total,
        **{kind.party_field: upsert_party(kind.party_model, party)},
    )
    kind.line_model.objects.bulk_create([
        kind.line_model(order=order, item_id=item_id, qty=line.qty, price=line.price)
        for item_id, line in lines.items()
    ])

    after = stock_effect(((item_id, line.qty) for item_id, line in lines.items()), order.is_delivered)
    apply_stock_delta(stock_delta({}, after), direction=kind.stock_direction)

    logger.info(
        '%s created: %s (%d line(s), total %s, %s/%s)',
        kind.label, order.id, len(lines), total, pay, ship,
    )
    return order


@transaction.atomic
def update(kind: OrderKind, order_id, patch: Dict[str, Any]):
    """
    Apply a partial update and reconcile stock.

    ``patch`` may hold ``items`` (replaces the lines), the party under
    ``kind.party_field``, ``discount``, ``delivery_fee``, ``payment_type``,
    ``delivery_note``, ``payment_status``/``paid`` and
    ``delivery_status``/``delivered``. Absent keys keep the stored values.

    Raises:
        OrderNotFoundError: If the order doesn't exist
        EmptyOrderError: If the new line list is empty
        InvalidOrderItemError: If a line references an unknown item
    """
    order = _lock(kind, order_id)
    stored = _stored_lines(order)
    before = stock_effect(((item_id, entry['qty']) for item_id, entry in stored.items()), order.is_delivered)

    if patch.get('items') is not None:
        lines = _resolve_lines(patch['items'], stored)
        _sync_lines(kind, order, stored, lines)
        priced = [(line.qty, line.price) for line in lines.values()]
        quantities = {item_id: line.qty for item_id, line in lines.items()}
    else:
        priced = [(row.qty, row.price) for entry in stored.values() for row in entry['rows']]
        quantities = {item_id: entry['qty'] for item_id, entry in stored.items()}

    was_paid, was_delivered = order.is_paid, order.is_delivered
    order.payment_status = resolve_payment_status(
        patch.get('payment_status'), patch.get('paid'), order.payment_status
    )
    order.delivery_status = resolve_delivery_status(
        patch.get('delivery_status'), patch.get('delivered'), order.delivery_status
    )
    now = timezone.now()
    order.paid_at = _stamp(order.paid_at, was_paid, order.is_paid, now)
    order.delivered_at = _stamp(order.delivered_at, was_delivered, order.is_delivered, now)

    party = upsert_party(kind.party_model, patch.get(kind.party_field))
    if party is not None:
        setattr(order, kind.party_field, party)

    if patch.get('discount') is not None:
        order.discount = to_money(patch['discount'])
    if patch.get('delivery_fee') is not None:
        order.delivery_fee = to_money(patch['delivery_fee'])
    if 'payment_type' in patch:
        order.payment_type = patch['payment_type'] or None
    if 'delivery_note' in patch:
        order.delivery_note = patch['delivery_note'] or None

    order.subtotal, order.total = compute_totals(
        priced,
        discount=order.discount,
        delivery_fee=order.delivery_fee,
        fee_in_total=kind.fee_in_total,
    )

    after = stock_effect(quantities.items(), order.is_delivered)
    apply_stock_delta(stock_delta(before, after), direction=kind.stock_direction)

    order.save()
    logger.info(
        '%s updated: %s (total %s, %s/%s)',
        kind.label, order.id, order.total, order.payment_status, order.delivery_status,
    )
    return order


def mark(kind: OrderKind, order_id, *, payment_status=None, delivery_status=None,
         paid=None, delivered=None):
    """Status-only update through the same reconciliation as ``update``."""
    return update(kind, order_id, {
        'payment_status': payment_status,
        'delivery_status': delivery_status,
        'paid': paid,
        'delivered': delivered,
    })


@transaction.atomic
def delete(kind: OrderKind, order_id) -> None:
    """
    Delete an order and its lines, undoing its stock effect if delivered.

    Raises:
        OrderNotFoundError: If the order doesn't exist
    """
    order = _lock(kind, order_id)
    stored = _stored_lines(order)
    before = stock_effect(((item_id, entry['qty']) for item_id, entry in stored.items()), order.is_delivered)
    apply_stock_delta(stock_delta(before, {}), direction=kind.stock_direction)

    order.delete()
    logger.info('%s deleted: %s', kind.label, order_id)


def search_filter(kind: OrderKind, search: Optional[str]) -> Q:
    """Match the party's name, WhatsApp or address, or the delivery note. Blank matches all."""
    search = (search or '').strip()
    if not search:
        return Q()
    party = kind.party_field
    return (
        Q(**{f'{party}__name__icontains': search}) |
        Q(**{f'{party}__whatsapp__icontains': search}) |
        Q(**{f'{party}__address__icontains': search}) |
        Q(delivery_note__icontains=search)
    )


def search(kind: OrderKind, *, search: Optional[str] = None, include_items: bool = True) -> QuerySet:
    """
    Orders newest first, optionally matching the party's name, WhatsApp or
    address, or the delivery note.

    Without items, each order is annotated with ``items_count``.
    """
    queryset = (
        kind.order_model.objects
        .select_related(kind.party_field)
        .filter(search_filter(kind, search))
        .order_by('-created_at')
    )

    if include_items:
        return queryset.prefetch_related(
            Prefetch('items', queryset=kind.line_model.objects.select_related('item'))
        )
    return queryset.annotate(items_count=Count('items'))
