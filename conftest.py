"""
StockLedger — Root conftest for pytest

Shared fixtures available to all test modules.

@file conftest.py
"""

import pytest
from rest_framework.test import APIClient

from tests.factories import AdminUserFactory, UserFactory, ViewerFactory


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Editor with default password TestPass2026!"""
    return UserFactory()


@pytest.fixture
def editor(user):
    return user


@pytest.fixture
def viewer(db):
    return ViewerFactory()


@pytest.fixture
def admin_user(db):
    """Ledger administrator (also a Django superuser)."""
    return AdminUserFactory()


@pytest.fixture
def authenticated_client(api_client, user):
    """API client authenticated as an editor."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def editor_client(authenticated_client):
    return authenticated_client


@pytest.fixture
def viewer_client(viewer):
    client = APIClient()
    client.force_authenticate(user=viewer)
    return client


@pytest.fixture
def admin_client(admin_user):
    """API client authenticated as an administrator."""
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client
