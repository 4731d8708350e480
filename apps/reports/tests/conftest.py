import pytest
from datetime import datetime
from decimal import Decimal
from django.conf import settings
from django.utils import timezone
from rest_framework.test import APIClient

from apps.accounts.services import issue_admin_token, set_admin_pin
from apps.catalog.models import Item, Unit, StockMode
from apps.contacts.models import Customer, Seller


@pytest.fixture
def api_client():
    """Return a client without the admin cookie."""
    return APIClient()


@pytest.fixture
def authenticated_client(api_client, db):
    """Return a client carrying a valid admin session cookie."""
    admin = set_admin_pin(pin='1234')
    api_client.cookies[settings.ADMIN_SESSION_COOKIE] = issue_admin_token(admin)
    return api_client


@pytest.fixture
def apple(db):
    return Item.objects.create(
        name='Apple Fuji',
        price=7000,
        cost_price=5000,
        unit=Unit.PCS,
        stock_mode=StockMode.TRACK,
        stock=Decimal('50'),
    )


@pytest.fixture
def grapes(db):
    return Item.objects.create(name='Grapes', price=45000, cost_price=38000, unit=Unit.KG)


@pytest.fixture
def customer(db):
    return Customer.objects.create(name='Budi', whatsapp='6281234567890', address='Bandung')


@pytest.fixture
def seller(db):
    return Seller.objects.create(name='Kebun Segar', whatsapp='6285700001111', address='Lembang')


def local_dt(year, month, day, hour=12):
    return timezone.make_aware(datetime(year, month, day, hour))


def backdate(order, when):
    """Move an order's ``created_at``; it is set automatically on insert."""
    type(order).objects.filter(id=order.id).update(created_at=when)
    order.refresh_from_db()
    return order
