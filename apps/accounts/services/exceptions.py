"""Domain-specific exceptions for accounts services."""
from rest_framework import status

from apps.common.exceptions import ServiceError


class AccountsServiceError(ServiceError):
    """Base exception for accounts services."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when the PIN does not match any admin."""
    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidTokenError(AccountsServiceError):
    """Raised when the session token is missing, expired or tampered with."""
    status_code = status.HTTP_401_UNAUTHORIZED


class InvalidPinError(AccountsServiceError):
    """Raised when a new PIN is not acceptable."""
    pass
