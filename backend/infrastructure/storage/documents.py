"""
Document Storage.

Saves uploaded PDF documents through Django's default storage and
describes them as entries for the JSON `docs` lists.
"""

import logging
import os
import posixpath
import uuid

from django.conf import settings
from django.core.files.storage import default_storage
from django.utils import timezone

from domain.shared.exceptions import ValidationException

logger = logging.getLogger(__name__)


PDF_CONTENT_TYPE = 'application/pdf'

ASSEMBLY_DIR = 'uploads/assemblies'
TEMPLATE_DIR = 'uploads/templates'
PROJECT_DIR = 'uploads/projects'
TEMP_DIR = 'uploads/temp'


def validate_pdf(upload):
    """Reject missing, non-PDF and oversized uploads."""
    if upload is None:
        raise ValidationException('No file uploaded', field='file')

    content_type = getattr(upload, 'content_type', '') or ''
    if content_type != PDF_CONTENT_TYPE or not upload.name.lower().endswith('.pdf'):
        logger.warning(f"Rejected upload {upload.name!r} ({content_type})")
        raise ValidationException('Only PDF files are allowed', field='file', value=upload.name)

    max_size = settings.QUICKBOM['UPLOAD_MAX_SIZE']
    if upload.size > max_size:
        logger.warning(f"Rejected upload {upload.name!r}: {upload.size} bytes")
        raise ValidationException(
            f'File size must not exceed {max_size // (1024 * 1024)}MB',
            field='file',
            value=upload.size,
        )


def save_pdf(upload, directory: str, filename: str = None) -> str:
    """
    Validate and store a PDF. Returns the storage name.

    The stored name is prefixed with a timestamp so repeated uploads of the
    same file do not overwrite each other.
    """
    validate_pdf(upload)
    if filename is None:
        base = os.path.basename(upload.name).replace(' ', '_')
        filename = f"{int(timezone.now().timestamp() * 1000)}-{base}"
    name = default_storage.save(f"{directory}/{filename}", upload)
    logger.info(f"Stored document {name}")
    return name


def save_temp_pdf(upload) -> str:
    return save_pdf(upload, TEMP_DIR, filename=f"{uuid.uuid4()}.pdf")


def document_entry(upload, name: str) -> dict:
    """Entry appended to a `docs` list."""
    return {
        'name': upload.name,
        'url': default_storage.url(name),
        'size': upload.size,
        'type': upload.content_type,
        'uploaded_at': timezone.now().isoformat(),
    }


def storage_name_from_url(url: str) -> str:
    media_url = settings.MEDIA_URL
    if url and url.startswith(media_url):
        return url[len(media_url):]
    return (url or '').lstrip('/')


def delete_document(url: str, directory: str) -> bool:
    """
    Remove a stored file by its public URL. Missing files are ignored.

    Only names inside `directory` are deleted; anything else is refused and
    logged.
    """
    name = storage_name_from_url(url)
    if not name:
        return False
    prefix = directory.rstrip('/') + '/'
    if posixpath.normpath(name) != name or not name.startswith(prefix):
        logger.warning(f"Refused to delete {name!r} outside {prefix}")
        return False
    if default_storage.exists(name):
        default_storage.delete(name)
        logger.info(f"Deleted document {name}")
        return True
    return False
