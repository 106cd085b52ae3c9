"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    pass


class PasswordConfirmationError(AccountsServiceError):
    """Raised when the current password does not match."""
    pass


class DuplicateEmailError(AccountsServiceError):
    """Raised when an account with the email already exists."""
    pass


class SelfModificationError(AccountsServiceError):
    """Raised when an admin tries to demote, deactivate or delete themselves."""
    pass
