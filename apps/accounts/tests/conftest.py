import pytest
from django.conf import settings
from rest_framework.test import APIClient

from apps.accounts.services import issue_admin_token, set_admin_pin


@pytest.fixture
def api_client():
    """Return a client without the admin cookie."""
    return APIClient()


@pytest.fixture
def admin_account(db):
    """Create the admin with PIN 1234."""
    return set_admin_pin(pin='1234')


@pytest.fixture
def authenticated_client(api_client, admin_account):
    """Return a client carrying a valid admin session cookie."""
    api_client.cookies[settings.ADMIN_SESSION_COOKIE] = issue_admin_token(admin_account)
    return api_client
