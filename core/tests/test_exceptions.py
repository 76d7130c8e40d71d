"""
Tests — standard_exception_handler error envelope.

@file core/tests/test_exceptions.py
"""

import pytest
from django.db.models import ProtectedError
from django.http import Http404
from rest_framework import status

from core.exceptions import (
    AccessDeniedError,
    BusinessRuleViolation,
    LedgerBusyError,
    standard_exception_handler,
)


@pytest.mark.parametrize('exc,http_status,code', [
    (BusinessRuleViolation('bad qty'), status.HTTP_400_BAD_REQUEST, 'BUSINESS_RULE_VIOLATION'),
    (AccessDeniedError(), status.HTTP_403_FORBIDDEN, 'ACCESS_DENIED'),
    (Http404(), status.HTTP_404_NOT_FOUND, 'RESOURCE_NOT_FOUND'),
    (ProtectedError('in use', set()), status.HTTP_409_CONFLICT, 'DUPLICATE_RESOURCE'),
])
def test_envelope(exc, http_status, code):
    response = standard_exception_handler(exc, {})
    assert response.status_code == http_status
    assert response.data['success'] is False
    assert response.data['code'] == code
    assert 'detail' in response.data['errors']


def test_busy_ledger_sets_retry_after():
    response = standard_exception_handler(LedgerBusyError(), {})
    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
    assert response['Retry-After'] == '1'


def test_unhandled_exception_is_500():
    response = standard_exception_handler(RuntimeError('boom'), {})
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.data['code'] == 'INTERNAL_ERROR'
