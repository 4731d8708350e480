"""Domain-specific exceptions for catalog services."""
from rest_framework import status

from apps.common.exceptions import ServiceError


class CatalogServiceError(ServiceError):
    """Base exception for catalog services."""
    pass


class ItemNotFoundError(CatalogServiceError):
    """Item not found."""
    status_code = status.HTTP_404_NOT_FOUND


class CategoryNotFoundError(CatalogServiceError):
    """Category not found."""
    status_code = status.HTTP_404_NOT_FOUND


class InvalidItemError(CatalogServiceError):
    """Item data is invalid."""
    pass


class ItemInUseError(CatalogServiceError):
    """Raised when deleting an item that order lines still reference."""
    pass


class InvalidCategoryError(CatalogServiceError):
    """Category data is invalid."""
    pass
