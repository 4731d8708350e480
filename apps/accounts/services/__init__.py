"""Services for admin authentication."""

from .exceptions import (
    AccountsServiceError,
    InvalidCredentialsError,
    InvalidTokenError,
    InvalidPinError,
)
from .admin_session import (
    authenticate_admin,
    issue_admin_token,
    verify_admin_token,
    set_admin_pin,
    session_lifetime,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidCredentialsError',
    'InvalidTokenError',
    'InvalidPinError',
    # Session
    'authenticate_admin',
    'issue_admin_token',
    'verify_admin_token',
    'set_admin_pin',
    'session_lifetime',
]
