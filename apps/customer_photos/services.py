"""
Customer photo services.

At most ``MAX_ACTIVE_PHOTOS`` photos are active at once. The check runs
inside the write transaction after every photo row has been locked, so
concurrent activations are counted one after another.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import Max

from apps.uploads.services import delete_image_quietly
from .exceptions import PhotoLimitReachedError, PhotoNotFoundError
from .models import CustomerPhoto, MAX_ACTIVE_PHOTOS

logger = logging.getLogger(__name__)


def _lock_gallery() -> list:
    """Lock every photo row, active or not, and return the locked ids."""
    return list(CustomerPhoto.objects.select_for_update().order_by('id').values_list('id', flat=True))


def _ensure_capacity(exclude_id=None) -> None:
    _lock_gallery()
    # count only once the gallery is locked
    active = CustomerPhoto.objects.filter(is_active=True)
    if exclude_id is not None:
        active = active.exclude(id=exclude_id)
    if active.count() >= MAX_ACTIVE_PHOTOS:
        raise PhotoLimitReachedError(
            f'Maximum of {MAX_ACTIVE_PHOTOS} photos can be active at a time. '
            'Please deactivate another photo first.'
        )


def _next_display_order() -> int:
    current = CustomerPhoto.objects.aggregate(highest=Max('display_order'))['highest']
    return (current or 0) + 1


def list_photos(*, active_only=False):
    queryset = CustomerPhoto.objects.all()
    if active_only:
        queryset = queryset.filter(is_active=True)[:MAX_ACTIVE_PHOTOS]
    return queryset


def get_photo(*, photo_id: UUID) -> CustomerPhoto:
    try:
        return CustomerPhoto.objects.get(id=photo_id)
    except CustomerPhoto.DoesNotExist:
        raise PhotoNotFoundError('Customer photo not found')


@transaction.atomic
def create_photo(*, image: str, alt_text=None, is_active=False, display_order=None) -> CustomerPhoto:
    """
    Add a photo.

    Raises:
        PhotoLimitReachedError: If ``is_active`` and the active set is full
    """
    if is_active:
        _ensure_capacity()

    photo = CustomerPhoto(
        image=image,
        is_active=is_active,
        display_order=display_order or _next_display_order(),
    )
    if alt_text:
        photo.alt_text = alt_text
    photo.save()

    logger.info("Added customer photo %s (active=%s)", photo.id, photo.is_active)
    return photo


@transaction.atomic
def update_photo(*, photo_id: UUID, **fields) -> CustomerPhoto:
    try:
        photo = CustomerPhoto.objects.select_for_update().get(id=photo_id)
    except CustomerPhoto.DoesNotExist:
        raise PhotoNotFoundError('Customer photo not found')

    if fields.get('is_active') and not photo.is_active:
        _ensure_capacity(exclude_id=photo.id)

    previous_image = photo.image
    for attr, value in fields.items():
        setattr(photo, attr, value)
    photo.save()

    if photo.image != previous_image:
        transaction.on_commit(lambda: delete_image_quietly(previous_image))
    return photo


@transaction.atomic
def reorder_photos(*, orders: list) -> list:
    """
    Apply a batch of ``{'id', 'display_order'}`` updates all-or-nothing.

    Returns:
        The full photo list in its new display order
    """
    ids = [entry['id'] for entry in orders]
    photos = {photo.id: photo for photo in CustomerPhoto.objects.select_for_update().filter(id__in=ids)}

    missing = [str(photo_id) for photo_id in ids if photo_id not in photos]
    if missing:
        raise PhotoNotFoundError(f"Customer photo not found: {', '.join(missing)}")

    for entry in orders:
        photos[entry['id']].display_order = entry['display_order']
    CustomerPhoto.objects.bulk_update(photos.values(), ['display_order'])

    logger.info("Reordered %d customer photos", len(photos))
    return list(CustomerPhoto.objects.all())


@transaction.atomic
def delete_photo(*, photo_id: UUID) -> None:
    try:
        photo = CustomerPhoto.objects.get(id=photo_id)
    except CustomerPhoto.DoesNotExist:
        raise PhotoNotFoundError('Customer photo not found')

    image = photo.image
    photo.delete()
    transaction.on_commit(lambda: delete_image_quietly(image))
