"""
Image upload storage.

Files are written through ``default_storage`` into MEDIA_ROOT and served
under MEDIA_URL. Stored names are unique; the original filename only
contributes its extension.
"""

import logging
import os
import uuid

from django.conf import settings
from django.core.files.storage import default_storage
from django.utils import timezone

from .exceptions import FileTooLargeError, InvalidFileTypeError, UploadNotFoundError

logger = logging.getLogger(__name__)

EXTENSIONS = {
    'image/jpeg': '.jpg',
    'image/png': '.png',
    'image/gif': '.gif',
    'image/webp': '.webp',
}


def validate_image(uploaded_file) -> None:
    """
    Check content type and size against the configured limits.

    Raises:
        InvalidFileTypeError: If the content type is not an allowed image type
        FileTooLargeError: If the file exceeds UPLOAD_MAX_BYTES
    """
    if uploaded_file.content_type not in settings.UPLOAD_ALLOWED_TYPES:
        raise InvalidFileTypeError(
            'Invalid file type. Only JPEG, PNG, GIF, and WebP images are allowed.'
        )
    if uploaded_file.size > settings.UPLOAD_MAX_BYTES:
        limit_mb = settings.UPLOAD_MAX_BYTES // (1024 * 1024)
        raise FileTooLargeError(f'File too large. Maximum size is {limit_mb}MB.')


def _unique_name(uploaded_file) -> str:
    _, ext = os.path.splitext(uploaded_file.name or '')
    ext = ext.lower() or EXTENSIONS.get(uploaded_file.content_type, '')
    stamp = timezone.now().strftime('%Y%m%d%H%M%S')
    return f'image-{stamp}-{uuid.uuid4().hex[:12]}{ext}'


def save_image(uploaded_file) -> dict:
    """Validate and store an uploaded image. Returns its public description."""
    validate_image(uploaded_file)

    filename = default_storage.save(_unique_name(uploaded_file), uploaded_file)
    logger.info('Stored upload %s (%d bytes)', filename, uploaded_file.size)

    return {
        'filename': filename,
        'path': f'{settings.MEDIA_URL}{filename}',
        'size': uploaded_file.size,
        'mimetype': uploaded_file.content_type,
    }


def delete_image(filename: str) -> None:
    """
    Delete a stored image by filename.

    Raises:
        UploadNotFoundError: If the file does not exist or the name is not a plain filename
    """
    if os.path.basename(filename) != filename or not default_storage.exists(filename):
        raise UploadNotFoundError('File not found')

    default_storage.delete(filename)
    logger.info('Deleted upload %s', filename)


def delete_image_quietly(reference: str) -> None:
    """
    Best-effort removal of an image that a deleted record pointed to.

    Only local upload references are touched; failures are logged.
    """
    if not reference or not reference.startswith(settings.MEDIA_URL):
        return
    filename = reference[len(settings.MEDIA_URL):]
    try:
        delete_image(filename)
    except UploadNotFoundError:
        logger.warning('Upload %s already gone', filename)
    except OSError:
        logger.exception('Failed to delete upload %s', filename)
