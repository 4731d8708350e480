"""Seller CRUD operations service."""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet

from ..models import Seller
from .exceptions import (
    ContactInUseError,
    DuplicateWhatsAppError,
    InvalidContactError,
    SellerNotFoundError,
)
from .phone import normalize_whatsapp

logger = logging.getLogger(__name__)


def get_seller(*, seller_id: UUID) -> Seller:
    try:
        return Seller.objects.get(id=seller_id)
    except Seller.DoesNotExist:
        raise SellerNotFoundError('Seller not found')


def _ensure_whatsapp_free(whatsapp, exclude_id=None):
    queryset = Seller.objects.filter(whatsapp=whatsapp)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateWhatsAppError('Seller with this WhatsApp number already exists')


@transaction.atomic
def create_seller(
    *,
    name: Optional[str],
    whatsapp: Optional[str] = None,
    address: Optional[str] = None,
) -> Seller:
    """
    Raises:
        InvalidContactError: If name is blank
        DuplicateWhatsAppError: If another seller has the number
    """
    name = (name or '').strip()
    if not name:
        raise InvalidContactError('Name is required')

    whatsapp = normalize_whatsapp(whatsapp)
    if whatsapp:
        _ensure_whatsapp_free(whatsapp)

    seller = Seller.objects.create(
        name=name,
        address=(address or '').strip() or None,
        whatsapp=whatsapp,
    )
    logger.info('Seller created: %s', seller.name)
    return seller


@transaction.atomic
def update_seller(*, seller_id: UUID, data: Dict[str, Any]) -> Seller:
    """
    Patch a seller. A key that is present but empty clears address/WhatsApp.

    Raises:
        SellerNotFoundError: If seller doesn't exist
        InvalidContactError: If name is set to blank
        DuplicateWhatsAppError: If another seller has the number
    """
    try:
        seller = Seller.objects.select_for_update().get(id=seller_id)
    except Seller.DoesNotExist:
        raise SellerNotFoundError('Seller not found')

    if 'name' in data:
        name = (data['name'] or '').strip()
        if not name:
            raise InvalidContactError('Name is required')
        seller.name = name
    if 'address' in data:
        seller.address = (data['address'] or '').strip() or None
    if 'whatsapp' in data:
        whatsapp = normalize_whatsapp(data['whatsapp'])
        if whatsapp and whatsapp != seller.whatsapp:
            _ensure_whatsapp_free(whatsapp, exclude_id=seller.id)
        seller.whatsapp = whatsapp

    seller.save()
    return seller


@transaction.atomic
def delete_seller(*, seller_id: UUID) -> None:
    """
    Raises:
        SellerNotFoundError: If seller doesn't exist
        ContactInUseError: If the seller has seller orders
    """
    seller = get_seller(seller_id=seller_id)

    count = seller.seller_orders.count()
    if count:
        raise ContactInUseError(
            f'Cannot delete seller. This seller has {count} order(s). '
            'Please delete the orders first.'
        )

    seller.delete()
    logger.info('Seller deleted: %s', seller_id)


def search_sellers(*, q: Optional[str] = None) -> QuerySet:
    """Sellers newest first, optionally matching name, WhatsApp or address."""
    queryset = Seller.objects.order_by('-created_at')

    q = (q or '').strip()
    if q:
        queryset = queryset.filter(
            Q(name__icontains=q) |
            Q(whatsapp__icontains=q) |
            Q(address__icontains=q)
        )

    return queryset
