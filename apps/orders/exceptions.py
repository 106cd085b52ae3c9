"""Domain exceptions for the orders app."""


class OrderServiceError(Exception):
    """Base exception for order service errors."""
    pass


class OrderNotFoundError(OrderServiceError):
    pass


class AppendedOrderNotFoundError(OrderServiceError):
    pass


class ItemNotFoundError(OrderServiceError):
    """Raised when an item id is not on the order (main or appended)."""
    pass


class DuplicateOrderError(OrderServiceError):
    """Raised when a client-supplied order id already exists."""
    pass


class PaymentValidationError(OrderServiceError):
    """Raised when payment amounts do not match the amount due."""
    pass
