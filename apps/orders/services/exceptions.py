"""Domain-specific exceptions for order services."""
from rest_framework import status

from apps.common.exceptions import ServiceError


class OrderServiceError(ServiceError):
    """Base exception for order services."""
    pass


class OrderNotFoundError(OrderServiceError):
    """Order not found."""
    status_code = status.HTTP_404_NOT_FOUND


class EmptyOrderError(OrderServiceError):
    """Raised when an order would end up without lines."""

    def __init__(self, message='No items.', **extra):
        super().__init__(message, **extra)


class InvalidOrderItemError(OrderServiceError):
    """Raised when a line references an unknown item."""

    def __init__(self, message='Invalid item', **extra):
        super().__init__(message, **extra)
