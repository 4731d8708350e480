"""
Seller (purchase) order operations service.

Same lifecycle as customer orders with two differences: delivery adds the
line quantities to TRACK stock, and the delivery fee is part of the total.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from django.db.models import QuerySet

from ..models import SellerOrder
from . import workflow
from .workflow import SELLER_ORDER


def get_seller_order(*, order_id: UUID) -> SellerOrder:
    return workflow.get_order(SELLER_ORDER, order_id)


def create_seller_order(*, seller: Optional[Dict[str, Any]] = None, **fields) -> SellerOrder:
    return workflow.create(SELLER_ORDER, party=seller, **fields)


def update_seller_order(*, order_id: UUID, patch: Dict[str, Any]) -> SellerOrder:
    return workflow.update(SELLER_ORDER, order_id, patch)


def mark_seller_order(*, order_id: UUID, payment_status=None, delivery_status=None,
                      paid=None, delivered=None) -> SellerOrder:
    return workflow.mark(
        SELLER_ORDER,
        order_id,
        payment_status=payment_status,
        delivery_status=delivery_status,
        paid=paid,
        delivered=delivered,
    )


def delete_seller_order(*, order_id: UUID) -> None:
    workflow.delete(SELLER_ORDER, order_id)


def search_seller_orders(*, search: Optional[str] = None, include_items: bool = True) -> QuerySet:
    return workflow.search(SELLER_ORDER, search=search, include_items=include_items)
