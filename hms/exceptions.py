"""
Error taxonomy for the hospital API.

Services raise the exceptions defined here and views let them propagate;
``hms.handlers.api_exception_handler`` renders them as
``{"error": "<message>"}`` with the matching status code.
"""
from rest_framework import exceptions, status


class NotFound(exceptions.NotFound):
    default_detail = 'resource not found'
    default_code = 'not_found'


class InvalidInput(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'invalid input'
    default_code = 'invalid_input'


class InvalidSchedule(InvalidInput):
    default_detail = 'appointment date must be in the future'
    default_code = 'invalid_schedule'


class InvalidTransition(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'operation not allowed in the current state'
    default_code = 'invalid_transition'


class InvalidState(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'operation not allowed in the current state'
    default_code = 'invalid_state'


class NotEditable(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'consultation is not editable'
    default_code = 'not_editable'


class Conflict(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'resource already exists'
    default_code = 'conflict'


class Unauthorized(exceptions.AuthenticationFailed):
    default_detail = 'unauthorized'
    default_code = 'unauthorized'


class InvalidToken(Unauthorized):
    default_detail = 'invalid token'
    default_code = 'invalid_token'


class ExpiredToken(Unauthorized):
    default_detail = 'token expired'
    default_code = 'expired_token'


class Forbidden(exceptions.PermissionDenied):
    default_detail = 'forbidden'
    default_code = 'forbidden'
