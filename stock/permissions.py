"""
Stock — Permissions

HTTP-boundary gates. Catalog writes are admin-only; ledger writes are
gated per date by the service layer (stock/access.py), not here.

@file stock/permissions.py
"""

from rest_framework.permissions import SAFE_METHODS, BasePermission


class CanManageProducts(BasePermission):
    """Read is open to authenticated users; catalog writes require admin."""

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if request.method in SAFE_METHODS:
            return True
        return getattr(user, 'is_admin', False)


class IsLedgerAdmin(BasePermission):
    """Admin role only: date-range queries and the audit trail."""

    message = 'Administrator role required.'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return getattr(user, 'is_admin', False)
