import pytest
from decimal import Decimal
from django.conf import settings
from rest_framework.test import APIClient

from apps.accounts.services import issue_admin_token, set_admin_pin
from apps.catalog.models import Category, Item, Unit, StockMode


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
def category(db):
    return Category.objects.create(name='Citrus')


@pytest.fixture
def other_category(db):
    return Category.objects.create(name='Berries')


@pytest.fixture
def tracked_item(db, category):
    """PCS item with tracked stock."""
    return Item.objects.create(
        name='Orange',
        price=5000,
        cost_price=3500,
        unit=Unit.PCS,
        stock_mode=StockMode.TRACK,
        stock=Decimal('20'),
        category=category,
    )


@pytest.fixture
def kg_item(db, other_category):
    """Item sold by weight (always RESELL)."""
    return Item.objects.create(
        name='Strawberry',
        price=60000,
        cost_price=45000,
        unit=Unit.KG,
        stock_mode=StockMode.RESELL,
        category=other_category,
    )
