"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
    PasswordConfirmationError,
    DuplicateEmailError,
    SelfModificationError,
)
from .user_authentication import authenticate_user
from .account_management import (
    change_password,
    create_staff_user,
    update_staff_user,
    delete_staff_user,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'UserNotFoundError',
    'PasswordConfirmationError',
    'DuplicateEmailError',
    'SelfModificationError',
    # Services
    'authenticate_user',
    'change_password',
    'create_staff_user',
    'update_staff_user',
    'delete_staff_user',
]
