"""
Stock — Per-product Write Lock

Serialises ledger writes for one product so the read-modify-write cycle
never interleaves with another writer on the same product. Writers on
different products never wait on each other.

PostgreSQL: transaction-scoped advisory lock, polled with
pg_try_advisory_xact_lock until the deadline. Released on commit or
rollback.

Other backends (SQLite in tests and local development): an in-process
lock per product, held around the atomic block.

Waiting longer than STOCK_LOCK_TIMEOUT_SECONDS raises LedgerBusyError
before anything is written.

@file stock/locks.py
"""

import hashlib
import logging
import threading
import time
import uuid
import weakref
from contextlib import contextmanager

from django.conf import settings
from django.db import connection, transaction

from core.exceptions import LedgerBusyError

logger = logging.getLogger('stockledger')

# Entries live only while some writer holds a reference to the lock.
_local_locks = weakref.WeakValueDictionary()
_registry_guard = threading.Lock()


def lock_key(product_id) -> str:
    """
    Canonical key for a product id: the hyphenated lowercase UUID, whatever
    spelling the caller used (UUID instance, hex, upper-case string).
    """
    try:
        return str(uuid.UUID(str(product_id)))
    except ValueError:
        return str(product_id)


def _advisory_lock_key(product_id) -> int:
    """Stable bigint key for PostgreSQL advisory lock (same product = same key)."""
    raw = f'stock.product:{lock_key(product_id)}'.encode()
    h = hashlib.sha256(raw).digest()[:8]
    return int.from_bytes(h, 'big') % (2**63)


def local_lock_for(product_id) -> threading.Lock:
    key = lock_key(product_id)
    with _registry_guard:
        lock = _local_locks.get(key)
        if lock is None:
            lock = _local_locks[key] = threading.Lock()
        return lock


def _lock_timeout() -> float:
    return float(getattr(settings, 'STOCK_LOCK_TIMEOUT_SECONDS', 3))


def _busy(product_id, timeout):
    logger.warning('Ledger lock timeout after %.2fs for product %s', timeout, product_id)
    return LedgerBusyError(
        detail='Another change to this product is in progress. Retry in a moment.',
    )


def _acquire_advisory(product_id, timeout: float) -> None:
    key = _advisory_lock_key(product_id)
    poll = float(getattr(settings, 'STOCK_LOCK_POLL_SECONDS', 0.05))
    deadline = time.monotonic() + timeout
    with connection.cursor() as cursor:
        while True:
            cursor.execute('SELECT pg_try_advisory_xact_lock(%s)', [key])
            if cursor.fetchone()[0]:
                return
            if time.monotonic() >= deadline:
                raise _busy(product_id, timeout)
            time.sleep(poll)


@contextmanager
def product_write_lock(product_id):
    """
    Open an atomic block that holds the exclusive write scope for
    ``product_id``. Everything inside commits or rolls back as one unit.
    """
    timeout = _lock_timeout()

    if connection.vendor == 'postgresql':
        with transaction.atomic():
            _acquire_advisory(product_id, timeout)
            yield
        return

    lock = local_lock_for(product_id)
    if not lock.acquire(timeout=timeout):
        raise _busy(product_id, timeout)
    try:
        with transaction.atomic():
            yield
    finally:
        lock.release()
