"""
Core — Audit Service

Provides methods for writing audit log entries from any app, either
synchronously (log) or as a best-effort event dispatched after commit
(emit).

@file core/services.py
"""

import logging
from decimal import Decimal
from typing import Any

from django.db import transaction
from django.forms.models import model_to_dict
from django.utils import timezone

from core.models import AuditLog

logger = logging.getLogger('stockledger')


class AuditService:
    """Centralised audit logging for every write operation."""

    @staticmethod
    def log(
        *,
        actor=None,
        actor_id=None,
        action: str,
        model_name: str,
        object_id: str,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
        timestamp=None,
    ) -> AuditLog:
        if actor is not None:
            actor_id = actor.pk
        return AuditLog.objects.create(
            actor_id=actor_id,
            action=action,
            model_name=model_name,
            object_id=str(object_id),
            old_values=old_values,
            new_values=new_values,
            timestamp=timestamp or timezone.now(),
        )

    @staticmethod
    def emit(
        *,
        actor,
        action: str,
        model_name: str,
        object_id: str,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
    ) -> None:
        """
        Fire-and-forget audit event. Dispatched to the Celery worker once
        the surrounding transaction commits; rolled-back writes emit
        nothing. A dispatch failure is logged and never reaches the caller.
        """
        payload = {
            'actor_id': str(actor.pk) if actor is not None else None,
            'action': action,
            'model_name': model_name,
            'object_id': str(object_id),
            'old_values': old_values,
            'new_values': new_values,
            'timestamp': timezone.now().isoformat(),
        }

        def _dispatch():
            from core.tasks import record_audit_event

            try:
                record_audit_event.delay(payload)
            except Exception:
                logger.exception(
                    'Audit dispatch failed for %s %s:%s',
                    action, model_name, object_id,
                )

        transaction.on_commit(_dispatch)

    @staticmethod
    def snapshot(instance, fields=None) -> dict[str, Any]:
        """
        Serialise a model instance to a plain dict suitable for JSON
        storage. Dates are ISO-formatted; UUIDs stringified.
        """
        data = model_to_dict(instance, fields=fields)
        if fields is None or 'id' in fields:
            data['id'] = instance.pk
        cleaned: dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                cleaned[key] = None
            elif isinstance(value, Decimal):
                cleaned[key] = str(value)
            elif hasattr(value, 'isoformat'):
                cleaned[key] = value.isoformat()
            elif hasattr(value, 'hex'):
                cleaned[key] = str(value)
            elif hasattr(value, 'pk'):
                cleaned[key] = str(value.pk)
            else:
                cleaned[key] = value
        return cleaned
