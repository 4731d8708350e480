"""Services for catalog business logic."""

from .exceptions import (
    CatalogServiceError,
    ItemNotFoundError,
    CategoryNotFoundError,
    InvalidItemError,
    InvalidCategoryError,
    ItemInUseError,
)
from .category_management import (
    upsert_category,
    delete_category,
)
from .item_management import (
    create_item,
    update_item,
    delete_item,
    search_items,
)

__all__ = [
    # Exceptions
    'CatalogServiceError',
    'ItemNotFoundError',
    'CategoryNotFoundError',
    'InvalidItemError',
    'InvalidCategoryError',
    'ItemInUseError',
    # Categories
    'upsert_category',
    'delete_category',
    # Items
    'create_item',
    'update_item',
    'delete_item',
    'search_items',
]
