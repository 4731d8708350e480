"""
Shared error plumbing for the POS API.

Every app defines its own exception hierarchy under ``ServiceError`` (see
``apps/<app>/services/exceptions.py``). Each class carries the HTTP status a
view should answer with, so handlers stay thin:

    try:
        order = update_order(order_id=pk, patch=data)
    except OrderServiceError as e:
        return error_response(e)

Anything DRF raises itself (validation, parse errors, 404s from
``get_object_or_404``) is reshaped by ``api_exception_handler`` into the same
``{"error": "..."}`` body.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for all POS service errors."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message=None, **extra):
        super().__init__(message or self.__doc__)
        self.extra = extra


def error_response(exc):
    """Build the ``{"error": ...}`` response for a ServiceError."""
    body = {'error': str(exc)}
    body.update(getattr(exc, 'extra', {}) or {})
    return Response(body, status=exc.status_code)


def _first_message(detail):
    if isinstance(detail, dict):
        for key, value in detail.items():
            message = _first_message(value)
            if key == 'non_field_errors':
                return message
            return f'{key}: {message}'
        return 'Invalid input'
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else 'Invalid input'
    return str(detail)


def api_exception_handler(exc, context):
    """DRF exception handler answering ``{"error": message}`` bodies."""
    if isinstance(exc, ServiceError):
        return error_response(exc)

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(
            'Unhandled error in %s', view.__class__.__name__ if view else 'view'
        )
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    if isinstance(exc, ValidationError):
        response.data = {
            'error': _first_message(response.data),
            'fields': response.data,
        }
    elif isinstance(response.data, dict) and 'detail' in response.data:
        response.data = {'error': str(response.data['detail'])}

    if response.status_code >= 500:
        logger.error('API error %s: %s', response.status_code, response.data)
    else:
        logger.warning('API error %s: %s', response.status_code, response.data)

    return response
