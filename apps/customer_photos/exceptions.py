"""Domain exceptions for the customer photos app."""


class CustomerPhotoServiceError(Exception):
    """Base exception for customer photo service errors."""
    code = 'customer_photo_error'


class PhotoNotFoundError(CustomerPhotoServiceError):
    code = 'not_found'


class PhotoLimitReachedError(CustomerPhotoServiceError):
    """Raised when activating a photo would exceed the active photo limit."""
    code = 'photo_limit_reached'
