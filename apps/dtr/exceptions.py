"""Domain exceptions for the DTR app."""


class DTRServiceError(Exception):
    """Base exception for DTR service errors."""
    pass


class AlreadyClockedInError(DTRServiceError):
    pass


class NotClockedInError(DTRServiceError):
    pass
