"""Customer CRUD operations service."""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet

from ..models import Customer
from .exceptions import (
    ContactInUseError,
    CustomerNotFoundError,
    DuplicateWhatsAppError,
    InvalidContactError,
)
from .phone import normalize_whatsapp

logger = logging.getLogger(__name__)


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ''


def get_customer(*, customer_id: UUID) -> Customer:
    try:
        return Customer.objects.get(id=customer_id)
    except Customer.DoesNotExist:
        raise CustomerNotFoundError(f"Customer {customer_id} not found")


@transaction.atomic
def create_customer(
    *,
    name: Optional[str] = None,
    whatsapp: Optional[str] = None,
    address: Optional[str] = None,
) -> Customer:
    """
    Create a customer, or refresh the one that already has this WhatsApp number.

    Raises:
        InvalidContactError: If neither name nor WhatsApp is given
    """
    name = _clean(name)
    address = _clean(address) or None
    whatsapp = normalize_whatsapp(whatsapp)

    if not name and not whatsapp:
        raise InvalidContactError('Name or WhatsApp is required')

    if whatsapp:
        customer = Customer.objects.select_for_update().filter(whatsapp=whatsapp).first()
        if customer is not None:
            if name:
                customer.name = name
            if address:
                customer.address = address
            customer.save()
            return customer
        return Customer.objects.create(name=name or whatsapp, address=address, whatsapp=whatsapp)

    return Customer.objects.create(name=name, address=address, whatsapp=None)


@transaction.atomic
def update_customer(*, customer_id: UUID, data: Dict[str, Any]) -> Customer:
    """
    Patch name, address and/or WhatsApp; only string values count.

    Raises:
        CustomerNotFoundError: If customer doesn't exist
        InvalidContactError: If no usable field was supplied
        DuplicateWhatsAppError: If the number belongs to another customer
    """
    fields = {key: data[key] for key in ('name', 'address', 'whatsapp')
              if isinstance(data.get(key), str)}
    if not fields:
        raise InvalidContactError('No valid fields to update')

    try:
        customer = Customer.objects.select_for_update().get(id=customer_id)
    except Customer.DoesNotExist:
        raise CustomerNotFoundError(f"Customer {customer_id} not found")

    if 'name' in fields:
        customer.name = fields['name'].strip()
    if 'address' in fields:
        customer.address = fields['address'].strip() or None
    if 'whatsapp' in fields:
        whatsapp = normalize_whatsapp(fields['whatsapp'])
        if whatsapp and Customer.objects.filter(whatsapp=whatsapp).exclude(id=customer.id).exists():
            raise DuplicateWhatsAppError('Customer with this WhatsApp number already exists')
        customer.whatsapp = whatsapp

    customer.save()
    return customer


@transaction.atomic
def delete_customer(*, customer_id: UUID) -> None:
    """
    Raises:
        CustomerNotFoundError: If customer doesn't exist
        ContactInUseError: If any order references the customer
    """
    customer = get_customer(customer_id=customer_id)

    used = customer.orders.count()
    if used:
        raise ContactInUseError(
            f"Cannot delete: used in {used} order{'s' if used > 1 else ''}."
        )

    customer.delete()
    logger.info('Customer deleted: %s', customer_id)


def search_customers(*, q: Optional[str] = None) -> QuerySet:
    """Customers ordered by name, optionally matching name, address or WhatsApp."""
    queryset = Customer.objects.order_by('name', 'created_at')

    q = (q or '').strip()
    if q:
        queryset = queryset.filter(
            Q(name__icontains=q) |
            Q(address__icontains=q) |
            Q(whatsapp__contains=q)
        )

    return queryset


def find_customer_by_whatsapp(*, whatsapp: Optional[str]) -> Optional[Customer]:
    """Exact lookup by normalized WhatsApp number."""
    normalized = normalize_whatsapp(whatsapp)
    if not normalized:
        return None
    return Customer.objects.filter(whatsapp=normalized).first()
