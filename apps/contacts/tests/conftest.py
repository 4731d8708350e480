import pytest
from django.conf import settings
from rest_framework.test import APIClient

from apps.accounts.services import issue_admin_token, set_admin_pin
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
def customer(db):
    return Customer.objects.create(
        name='Budi Santoso',
        whatsapp='6281234567890',
        address='Jl. Merdeka 1, Bandung',
    )


@pytest.fixture
def walk_in_customer(db):
    """Customer without a WhatsApp number."""
    return Customer.objects.create(name='Siti', address='Pasar Baru')


@pytest.fixture
def seller(db):
    return Seller.objects.create(
        name='Pak Joko Farm',
        whatsapp='6285711112222',
        address='Lembang',
    )
