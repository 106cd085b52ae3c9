"""Error taxonomy of the client library."""


class ClientError(Exception):
    """Base exception for client errors."""
    pass


class ValidationError(ClientError):
    """Checked locally; the request was never sent."""
    pass


class PhotoLimitError(ValidationError):
    pass


class IllegalTransitionError(ValidationError):
    """Attendance action not allowed in the current clock state."""
    pass


class NetworkError(ClientError):
    """The request did not complete (connection refused, timeout, ...)."""
    pass


class ServerError(ClientError):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str, payload=None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}

    def __str__(self):
        return f"{self.status_code}: {self.message}"


class StorageError(ClientError):
    """Local persistence failed."""
    pass


class AccessDeniedError(ClientError):
    """The logged-in role may not open this view or perform this action."""
    pass
