"""
Core — Shared Constants

Audit action names and pagination limits used across apps.

@file core/constants.py
"""

AUDIT_ACTION_CREATE = 'CREATE'
AUDIT_ACTION_UPDATE = 'UPDATE'
AUDIT_ACTION_DELETE = 'DELETE'
AUDIT_ACTION_SOFT_DELETE = 'SOFT_DELETE'
AUDIT_ACTION_RESTORE = 'RESTORE'

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 500
AUDIT_PAGE_SIZE = 100
