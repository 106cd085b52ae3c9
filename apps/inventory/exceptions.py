"""Domain exceptions for the inventory app."""


class InventoryServiceError(Exception):
    """Base exception for inventory service errors."""
    pass


class InventoryItemNotFoundError(InventoryServiceError):
    pass


class DuplicateInventoryItemError(InventoryServiceError):
    pass
