"""
Core — Pagination

Standard paginator with configurable page_size and hard max cap, plus
the larger-page variant used by the audit trail.

@file core/pagination.py
"""

from rest_framework.pagination import PageNumberPagination

from core.constants import AUDIT_PAGE_SIZE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class StandardPagination(PageNumberPagination):
    page_size = DEFAULT_PAGE_SIZE
    page_size_query_param = 'page_size'
    max_page_size = MAX_PAGE_SIZE


class AuditTrailPagination(StandardPagination):
    page_size = AUDIT_PAGE_SIZE
