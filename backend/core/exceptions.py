"""
API error handling

Every error leaving the API is a JSON object with an ``error`` message;
field-level validation failures add a ``details`` mapping.
"""
import logging
import re

from django.db.models import ProtectedError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ResourceInUse(Exception):
    """Raised when a record cannot be removed because other records point at it"""

    def __init__(self, message, status_code=status.HTTP_409_CONFLICT):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def api_exception_handler(exc, context):
    view = context.get('view')
    view_name = getattr(view, '__name__', view.__class__.__name__ if view else 'unknown')

    if isinstance(exc, ProtectedError):
        names = sorted({str(obj) for obj in exc.protected_objects})
        return Response(
            {'error': 'Record is still referenced by other records', 'details': names},
            status=status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, ResourceInUse):
        return Response({'error': exc.message}, status=exc.status_code)

    if isinstance(exc, Http404):
        message = str(exc) or 'Not found'
        match = re.match(r'No (.+) matches the given query', message)
        if match:
            message = f"{match.group(1)} not found"
        return Response({'error': message}, status=status.HTTP_404_NOT_FOUND)

    response = exception_handler(exc, context)

    if response is None:
        logger.error(f"Unhandled error in {view_name}: {exc}", exc_info=True)
        return Response(
            {'error': 'Internal server error', 'details': str(exc)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, ValidationError):
        details = response.data
        if isinstance(details, list) and details:
            message = str(details[0])
        else:
            message = 'Validation failed'
        response.data = {'error': message, 'details': details}
    elif isinstance(response.data, dict) and 'detail' in response.data:
        response.data = {'error': str(response.data['detail'])}

    return response
