"""Local rules of the customer photo admin screen."""

from dataclasses import replace

from .exceptions import PhotoLimitError

MAX_ACTIVE_PHOTOS = 6

__all__ = ['MAX_ACTIVE_PHOTOS', 'PhotoLimitError', 'ensure_can_activate', 'move_photo', 'renumber']


def renumber(photos):
    """Return the photos with ``display_order`` set to 1..N in list order."""
    return [
        photo if photo.display_order == position else replace(photo, display_order=position)
        for position, photo in enumerate(photos, start=1)
    ]


def move_photo(photos, from_index, to_index):
    """
    Move the photo at ``from_index`` to ``to_index``.

    The input list is left untouched; the result is a new, renumbered list.

    Raises:
        IndexError: If either index is outside the list
    """
    count = len(photos)
    if not (0 <= from_index < count and 0 <= to_index < count):
        raise IndexError(f'Cannot move photo {from_index} -> {to_index} in a list of {count}')

    reordered = list(photos)
    reordered.insert(to_index, reordered.pop(from_index))
    return renumber(reordered)


def ensure_can_activate(photos, editing_id=None):
    """
    Raises:
        PhotoLimitError: If ``MAX_ACTIVE_PHOTOS`` photos other than ``editing_id`` are already active
    """
    active = sum(1 for photo in photos if photo.is_active and photo.id != editing_id)
    if active >= MAX_ACTIVE_PHOTOS:
        raise PhotoLimitError(
            f'Maximum of {MAX_ACTIVE_PHOTOS} photos can be active at a time. '
            'Please deactivate another photo first.'
        )
