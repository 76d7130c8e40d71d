"""
Core — Celery Tasks

Audit event sink. Catalog and ledger writes enqueue one event per
mutation; the worker persists it as an AuditLog row.

@file core/tasks.py
"""

import logging

from celery import shared_task
from django.utils.dateparse import parse_datetime

logger = logging.getLogger('stockledger')


@shared_task(name='core.record_audit_event', ignore_result=True)
def record_audit_event(payload):
    """Persist one audit event produced by AuditService.emit."""
    from .services import AuditService

    entry = AuditService.log(
        actor_id=payload.get('actor_id'),
        action=payload['action'],
        model_name=payload['model_name'],
        object_id=payload['object_id'],
        old_values=payload.get('old_values'),
        new_values=payload.get('new_values'),
        timestamp=parse_datetime(payload['timestamp']) if payload.get('timestamp') else None,
    )
    logger.debug('Audit %s %s:%s recorded as %s', entry.action, entry.model_name, entry.object_id, entry.pk)
    return str(entry.pk)
