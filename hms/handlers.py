"""
DRF exception handler.

Configured as ``REST_FRAMEWORK['EXCEPTION_HANDLER']``.  Turns every failure
into ``{"error": "<message>"}`` with the matching status code.  Kept out of
``hms.exceptions`` because ``rest_framework.views`` loads the authentication
classes, which import the exception taxonomy.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = 'internal server error'


def _first_message(data) -> str:
    """Flatten DRF error payloads into a single human readable line.

    Serializer errors arrive as ``{"field": ["msg", ...]}``; they are
    reported as ``"field: msg"``.  ``non_field_errors`` drop the prefix.
    """
    if isinstance(data, dict):
        if 'detail' in data:
            return _first_message(data['detail'])
        for field, value in data.items():
            message = _first_message(value)
            if field in ('non_field_errors', 'detail'):
                return message
            return f"{field}: {message}"
        return 'invalid input'
    if isinstance(data, (list, tuple)):
        return _first_message(data[0]) if data else 'invalid input'
    return str(data)


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        request = context.get('request')
        logger.exception(
            "unhandled error on %s %s",
            getattr(request, 'method', '-'), getattr(request, 'path', '-'),
        )
        return Response({'error': INTERNAL_ERROR_MESSAGE}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    resp.data = {'error': _first_message(resp.data)}
    return resp
