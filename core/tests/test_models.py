"""
Tests — Core models, AuditService and the audit event task.

@file core/tests/test_models.py
"""

import uuid
from datetime import date
from unittest import mock

import pytest

from core.models import AuditLog
from core.services import AuditService
from core.tasks import record_audit_event
from tests.factories import AuditLogFactory, ProductFactory, StockTransactionFactory, UserFactory


@pytest.mark.django_db
class TestAuditLog:

    def test_str_contains_action_and_model(self):
        entry = AuditLogFactory(model_name='StockTransaction')
        assert 'CREATE' in str(entry)
        assert 'StockTransaction' in str(entry)

    def test_default_ordering_newest_first(self):
        first = AuditLogFactory()
        second = AuditLogFactory()
        assert list(AuditLog.objects.all())[0] == second
        assert first in AuditLog.objects.all()


@pytest.mark.django_db
class TestAuditServiceLog:

    def test_log_with_actor(self):
        actor = UserFactory()
        entry = AuditService.log(
            actor=actor,
            action=AuditLog.ActionChoices.UPDATE,
            model_name='Product',
            object_id=uuid.uuid4(),
            old_values={'name': 'A'},
            new_values={'name': 'B'},
        )
        assert entry.actor == actor
        assert entry.old_values == {'name': 'A'}
        assert isinstance(entry.object_id, str)

    def test_log_without_actor(self):
        entry = AuditService.log(
            action=AuditLog.ActionChoices.DELETE,
            model_name='StockTransaction',
            object_id='abc',
        )
        assert entry.actor is None


@pytest.mark.django_db
class TestAuditServiceEmit:

    def test_emit_writes_after_commit(self, django_capture_on_commit_callbacks):
        actor = UserFactory()
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            AuditService.emit(
                actor=actor,
                action=AuditLog.ActionChoices.CREATE,
                model_name='Product',
                object_id='p-1',
                new_values={'name': 'Bolt'},
            )
            assert not AuditLog.objects.filter(object_id='p-1').exists()
        assert len(callbacks) == 1
        entry = AuditLog.objects.get(object_id='p-1')
        assert entry.actor == actor
        assert entry.new_values == {'name': 'Bolt'}

    def test_emit_swallows_dispatch_failure(self, django_capture_on_commit_callbacks):
        with mock.patch('core.tasks.record_audit_event') as task:
            task.delay.side_effect = RuntimeError('broker down')
            with django_capture_on_commit_callbacks(execute=True):
                AuditService.emit(
                    actor=None,
                    action=AuditLog.ActionChoices.CREATE,
                    model_name='Product',
                    object_id='p-2',
                )
        task.delay.assert_called_once()
        assert not AuditLog.objects.filter(object_id='p-2').exists()

    def test_emit_without_commit_writes_nothing(self, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            AuditService.emit(
                actor=None,
                action=AuditLog.ActionChoices.CREATE,
                model_name='Product',
                object_id='p-3',
            )
        assert len(callbacks) == 1
        assert not AuditLog.objects.filter(object_id='p-3').exists()


@pytest.mark.django_db
class TestSnapshot:

    def test_snapshot_is_json_safe(self):
        product = ProductFactory(name='Bolt', code='B-1')
        data = AuditService.snapshot(product)
        assert data['id'] == str(product.pk)
        assert data['name'] == 'Bolt'
        assert data['code'] == 'B-1'

    def test_snapshot_stringifies_dates(self):
        tx = StockTransactionFactory(date=date(2026, 1, 15))
        data = AuditService.snapshot(tx)
        assert data['date'] == '2026-01-15'
        assert data['product'] == str(tx.product_id)


@pytest.mark.django_db
class TestRecordAuditEventTask:

    def test_task_persists_payload(self):
        actor = UserFactory()
        pk = record_audit_event({
            'actor_id': str(actor.pk),
            'action': 'DELETE',
            'model_name': 'StockTransaction',
            'object_id': 'tx-9',
            'old_values': {'qty_in': 3},
            'new_values': None,
            'timestamp': '2026-03-01T08:00:00+00:00',
        })
        entry = AuditLog.objects.get(pk=pk)
        assert entry.actor == actor
        assert entry.old_values == {'qty_in': 3}
        assert entry.timestamp.year == 2026
