import logging

from django.db import IntegrityError
from django.db.models.deletion import ProtectedError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from domain.shared.exceptions import DomainException

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    """
    Map domain and database errors to HTTP responses.

    Anything else goes to the default DRF handler.
    """
    if isinstance(exc, DomainException):
        return Response(
            {
                'error': exc.message,
                'code': exc.code,
                'details': exc.details,
            },
            status=exc.status_code,
        )

    if isinstance(exc, ProtectedError):
        protected = [str(o) for o in list(exc.protected_objects)[:5]]
        return Response(
            {
                'error': 'Cannot delete this record: it is referenced by other records.',
                'code': 'PROTECTED_ERROR',
                'details': {'protected_objects_sample': protected},
            },
            status=status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, IntegrityError):
        logger.warning(f"Integrity error: {exc}")
        return Response(
            {
                'error': 'Data integrity violation (duplicate or related records).',
                'code': 'INTEGRITY_ERROR',
            },
            status=status.HTTP_409_CONFLICT,
        )

    return exception_handler(exc, context)
