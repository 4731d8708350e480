"""Customer order operations service."""

from typing import Any, Dict, Optional
from uuid import UUID

from django.db.models import QuerySet

from ..models import Order
from . import workflow
from .workflow import CUSTOMER_ORDER


def get_order(*, order_id: UUID) -> Order:
    """
    Raises:
        OrderNotFoundError: If order doesn't exist
    """
    return workflow.get_order(CUSTOMER_ORDER, order_id)


def create_order(*, customer: Optional[Dict[str, Any]] = None, **fields) -> Order:
    """
    Create a customer order.

    Args:
        customer: ``{id}`` or any of ``{name, whatsapp, address}``; a known
            WhatsApp number connects to that customer
        **fields: items, discount, delivery_fee, payment_type, delivery_note,
            payment_status, delivery_status, paid, delivered

    The delivery fee is stored but not added to the total.
    """
    return workflow.create(CUSTOMER_ORDER, party=customer, **fields)


def update_order(*, order_id: UUID, patch: Dict[str, Any]) -> Order:
    return workflow.update(CUSTOMER_ORDER, order_id, patch)


def mark_order(*, order_id: UUID, payment_status=None, delivery_status=None,
               paid=None, delivered=None) -> Order:
    return workflow.mark(
        CUSTOMER_ORDER,
        order_id,
        payment_status=payment_status,
        delivery_status=delivery_status,
        paid=paid,
        delivered=delivered,
    )


def delete_order(*, order_id: UUID) -> None:
    workflow.delete(CUSTOMER_ORDER, order_id)


def search_orders(*, search: Optional[str] = None) -> QuerySet:
    return workflow.search(CUSTOMER_ORDER, search=search)
