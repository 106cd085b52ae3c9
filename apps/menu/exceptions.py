"""Domain exceptions for the menu app."""


class MenuServiceError(Exception):
    """Base exception for menu service errors."""
    pass


class DuplicateCategoryError(MenuServiceError):
    """Raised when a category with the same id already exists."""
    pass


class CategoryInUseError(MenuServiceError):
    """Raised when deleting a category that menu items still reference."""
    pass


class CategoryNotFoundError(MenuServiceError):
    pass
