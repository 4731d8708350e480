"""Admin PIN authentication and the signed session token."""

import logging
from datetime import timedelta
from typing import Any, Dict

from django.conf import settings
from django.db import transaction
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

from ..models import Admin
from .exceptions import InvalidCredentialsError, InvalidPinError, InvalidTokenError

logger = logging.getLogger(__name__)

ADMIN_ROLE = 'admin'
MIN_PIN_LENGTH = 4


def authenticate_admin(*, pin: str) -> Admin:
    """
    Find the admin whose PIN matches.

    Raises:
        InvalidCredentialsError: If no admin matches
    """
    pin = (pin or '').strip()
    if pin:
        for admin in Admin.objects.all():
            if admin.check_pin(pin):
                logger.info('Admin login: %s', admin.name)
                return admin

    logger.warning('Admin login failed')
    raise InvalidCredentialsError('Invalid credentials')


def session_lifetime() -> timedelta:
    return timedelta(hours=settings.ADMIN_SESSION_HOURS)


def issue_admin_token(admin: Admin) -> str:
    """Signed access token carrying ``role=admin`` for the session cookie."""
    token = AccessToken()
    token.set_exp(lifetime=session_lifetime())
    token['role'] = ADMIN_ROLE
    token['admin_id'] = str(admin.id)
    token['name'] = admin.name
    return str(token)


def verify_admin_token(raw: str) -> Dict[str, Any]:
    """
    Validate a session token and return its claims.

    Raises:
        InvalidTokenError: If the token is missing, invalid, expired or not an admin token
    """
    if not raw:
        raise InvalidTokenError('Unauthorized')
    try:
        token = AccessToken(raw)
    except TokenError:
        raise InvalidTokenError('Unauthorized')

    if token.get('role') != ADMIN_ROLE:
        raise InvalidTokenError('Unauthorized')

    return dict(token.payload)


@transaction.atomic
def set_admin_pin(*, pin: str, name: str = 'admin') -> Admin:
    """
    Create the named admin or rotate its PIN.

    Raises:
        InvalidPinError: If the PIN is too short or not numeric
    """
    pin = (pin or '').strip()
    if len(pin) < MIN_PIN_LENGTH or not pin.isdigit():
        raise InvalidPinError(f'PIN must be at least {MIN_PIN_LENGTH} digits')

    admin = Admin.objects.select_for_update().filter(name=name).first()
    if admin is None:
        admin = Admin(name=name)
    admin.set_pin(pin)
    admin.save()
    logger.info('Admin PIN set for %s', name)
    return admin
