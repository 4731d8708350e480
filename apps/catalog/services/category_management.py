"""Category operations service."""

import logging
from uuid import UUID

from django.db import transaction

from ..models import Category, Item
from .exceptions import CategoryNotFoundError, InvalidCategoryError

logger = logging.getLogger(__name__)


def upsert_category(*, name: str) -> Category:
    """Idempotent create-by-name."""
    clean = (name or '').strip()
    if not clean:
        raise InvalidCategoryError('Name required')
    category, _ = Category.objects.get_or_create(name=clean)
    return category


@transaction.atomic
def delete_category(*, category_id: UUID) -> int:
    """
    Detach all items from a category, then delete it.

    Returns:
        Number of items that were detached
    """
    try:
        category = Category.objects.get(id=category_id)
    except Category.DoesNotExist:
        raise CategoryNotFoundError(f"Category {category_id} not found")

    cleared = Item.objects.filter(category=category).update(category=None)
    category.delete()
    logger.info('Category %s deleted, %d item(s) detached', category.name, cleared)
    return cleared
