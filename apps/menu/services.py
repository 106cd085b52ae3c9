"""Menu and category services."""

import logging

from django.db import transaction

from .exceptions import CategoryInUseError, CategoryNotFoundError, DuplicateCategoryError
from .models import Category, MenuItem

logger = logging.getLogger(__name__)


@transaction.atomic
def create_category(*, id: str, name: str, image: str = '') -> Category:
    category_id = id.strip().lower()
    if Category.objects.filter(id=category_id).exists():
        raise DuplicateCategoryError(f"Category with id '{category_id}' already exists")

    category = Category.objects.create(id=category_id, name=name, image=image)
    logger.info("Created category %s", category.id)
    return category


@transaction.atomic
def delete_category(*, category_id: str) -> None:
    """
    Delete a category.

    Raises:
        CategoryNotFoundError: If the category does not exist
        CategoryInUseError: If menu items still use it
    """
    try:
        category = Category.objects.select_for_update().get(id=category_id)
    except Category.DoesNotExist:
        raise CategoryNotFoundError("Category not found")

    in_use = category.menu_items.count()
    if in_use:
        raise CategoryInUseError(
            f"Cannot delete category: {in_use} menu item(s) are using it"
        )

    category.delete()
    logger.info("Deleted category %s", category_id)


def filter_menu_items(*, category=None, is_public=None, is_best_seller=None):
    """Return menu items matching the given optional filters."""
    queryset = MenuItem.objects.select_related('category')
    if category:
        queryset = queryset.filter(category_id=category)
    if is_public is not None:
        queryset = queryset.filter(is_public=is_public)
    if is_best_seller is not None:
        queryset = queryset.filter(is_best_seller=is_best_seller)
    return queryset


def owners_by_item_name():
    """Map menu item name to owner, for attributing sales."""
    return dict(MenuItem.objects.values_list('name', 'owner'))
