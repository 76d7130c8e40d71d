"""
Core — Exception Handling

Custom exceptions and DRF exception handler for consistent API
error envelopes.

@file core/exceptions.py
"""

import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.db.models import ProtectedError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger('stockledger')


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class BusinessRuleViolation(APIException):
    """Raised when input breaks a business rule at the service layer."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Business rule violation.'
    default_code = 'BUSINESS_RULE_VIOLATION'


class DuplicateResourceError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'DUPLICATE_RESOURCE'


class ResourceNotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Resource not found.'
    default_code = 'RESOURCE_NOT_FOUND'


class AccessDeniedError(APIException):
    """
    The acting user's role may not write to the requested ledger date.
    Visibility is universal, so this is always a write-permission failure.
    """
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You are not allowed to modify entries for this date.'
    default_code = 'ACCESS_DENIED'


class LedgerBusyError(APIException):
    """Per-product write lock was not acquired in time. Safe to retry."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'The ledger is busy for this product. Retry shortly.'
    default_code = 'LEDGER_BUSY'


# ---------------------------------------------------------------------------
# Standard exception handler
# ---------------------------------------------------------------------------

LEDGER_RETRY_AFTER_SECONDS = 1


def _envelope(errors, code):
    return {'success': False, 'errors': errors, 'code': code}


def standard_exception_handler(exc, context):
    """
    Wraps every error response in the standard envelope:
      { "success": false, "errors": {...}, "code": "ERROR_CODE" }

    A product still referenced by ledger rows surfaces as 409, and a busy
    ledger lock carries a Retry-After header.
    """
    if isinstance(exc, Http404):
        exc = ResourceNotFoundError()
    elif isinstance(exc, ProtectedError):
        exc = DuplicateResourceError(
            detail='Resource is referenced by ledger transactions; deactivate it instead.',
        )
    elif isinstance(exc, PermissionDenied):
        exc = APIException(detail='Permission denied.', code='PERMISSION_DENIED')
        exc.status_code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, ValidationError):
        errors = exc.message_dict if hasattr(exc, 'message_dict') else {'detail': exc.messages}
        return Response(_envelope(errors, 'VALIDATION_ERROR'), status=status.HTTP_400_BAD_REQUEST)

    response = exception_handler(exc, context)

    if response is None:
        logger.exception('Unhandled exception in view: %s', exc)
        return Response(
            _envelope({'detail': ['Internal server error.']}, 'INTERNAL_ERROR'),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code = getattr(exc, 'default_code', 'ERROR')
    if isinstance(response.data, dict):
        errors = response.data
        code = errors.pop('code', code)
    elif isinstance(response.data, list):
        errors = {'detail': response.data}
    else:
        errors = {'detail': [str(response.data)]}

    response.data = _envelope(errors, code)
    if isinstance(exc, LedgerBusyError):
        response['Retry-After'] = str(LEDGER_RETRY_AFTER_SECONDS)
    return response
