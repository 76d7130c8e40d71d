"""
StockLedger — Celery application

Workers pick up tasks declared with @shared_task in every installed app
(core.record_audit_event). Broker and serializer settings come from the
CELERY_* names in Django settings.

@file config/celery.py
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

app = Celery('stockledger')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
