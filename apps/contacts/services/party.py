"""Resolve the customer/seller attached to an order."""

from typing import Any, Dict, Optional

from ..models import Customer, Seller
from .exceptions import CustomerNotFoundError, SellerNotFoundError
from .phone import normalize_whatsapp

_NOT_FOUND = {
    Customer: CustomerNotFoundError,
    Seller: SellerNotFoundError,
}


def upsert_party(model, party: Optional[Dict[str, Any]]):
    """
    Find or create the order's counterparty.

    ``party`` may carry ``id`` (connect to an existing record) or any of
    ``name``, ``whatsapp`` and ``address``. A known WhatsApp number connects to
    that record and refreshes its name/address; otherwise a new record is
    created. Returns None when nothing identifying was given.

    Must run inside the caller's transaction.
    """
    if not party:
        return None

    party_id = party.get('id')
    if party_id:
        try:
            return model.objects.get(id=party_id)
        except model.DoesNotExist:
            raise _NOT_FOUND[model](f"{model.__name__} {party_id} not found")

    name = (party.get('name') or '').strip()
    address = (party.get('address') or '').strip() or None
    whatsapp = normalize_whatsapp(party.get('whatsapp'))

    if not (name or address or whatsapp):
        return None

    if whatsapp:
        existing = model.objects.select_for_update().filter(whatsapp=whatsapp).first()
        if existing is not None:
            existing.name = name or existing.name
            existing.address = address or existing.address
            existing.save()
            return existing

    return model.objects.create(name=name, address=address, whatsapp=whatsapp)
