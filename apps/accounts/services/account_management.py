"""Account management service."""

import logging
from uuid import UUID

from django.db import transaction
from django.contrib.auth import get_user_model

from .exceptions import (
    DuplicateEmailError,
    PasswordConfirmationError,
    SelfModificationError,
    UserNotFoundError,
)

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def change_password(*, user_id: UUID, current_password: str, new_password: str) -> None:
    """
    Change a user's password after checking the current one.

    Raises:
        PasswordConfirmationError: If current password is incorrect
    """
    user = (
        User.objects
        .select_for_update()
        .get(id=user_id)
    )

    if not user.check_password(current_password):
        raise PasswordConfirmationError("Current password is incorrect")

    user.set_password(new_password)
    user.save(update_fields=['password'])
    logger.info("Password changed for %s", user.email)


@transaction.atomic
def create_staff_user(*, email: str, password: str, **fields) -> User:
    """Create a staff account. Email is stored lower-cased."""
    email = email.strip().lower()
    if User.objects.filter(email=email).exists():
        raise DuplicateEmailError("User with this email already exists")

    user = User.objects.create_user(email=email, password=password, **fields)
    logger.info("Created user %s with role %s", user.email, user.role)
    return user


@transaction.atomic
def update_staff_user(*, user_id: UUID, acting_user, **fields) -> User:
    """
    Update role, branch access, preferred branch, name or active flag.

    An admin may not remove their own admin role or deactivate themselves.
    """
    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

    if user.pk == acting_user.pk:
        if fields.get('is_active') is False:
            raise SelfModificationError("You cannot deactivate your own account")
        if 'role' in fields and fields['role'] != user.role:
            raise SelfModificationError("You cannot change your own role")

    password = fields.pop('password', None)
    for attr, value in fields.items():
        setattr(user, attr, value)
    if password:
        user.set_password(password)
    user.save()

    logger.info("Updated user %s (%s)", user.email, ', '.join(sorted(fields)) or 'password')
    return user


@transaction.atomic
def delete_staff_user(*, user_id: UUID, acting_user) -> None:
    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

    if user.pk == acting_user.pk:
        raise SelfModificationError("You cannot delete your own account")

    email = user.email
    user.delete()
    logger.info("Deleted user %s", email)
