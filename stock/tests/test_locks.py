"""
Tests — per-product write lock keys and the in-process lock registry.

@file stock/tests/test_locks.py
"""

import gc
import uuid

from stock import locks


PRODUCT_ID = uuid.UUID('6f1c2b0a-93d4-4e5f-8a71-0c2d3e4f5a6b')


class TestLockKey:

    def test_spellings_share_one_key(self):
        spellings = [PRODUCT_ID, str(PRODUCT_ID), str(PRODUCT_ID).upper(), PRODUCT_ID.hex]
        assert {locks.lock_key(s) for s in spellings} == {str(PRODUCT_ID)}

    def test_spellings_share_one_advisory_key(self):
        assert locks._advisory_lock_key(PRODUCT_ID.hex) == locks._advisory_lock_key(PRODUCT_ID)

    def test_non_uuid_passes_through(self):
        assert locks.lock_key('not-a-uuid') == 'not-a-uuid'

    def test_spellings_share_one_local_lock(self):
        assert locks.local_lock_for(PRODUCT_ID) is locks.local_lock_for(PRODUCT_ID.hex)

    def test_products_get_distinct_locks(self):
        assert locks.local_lock_for(uuid.uuid4()) is not locks.local_lock_for(uuid.uuid4())


class TestLockRegistry:

    def test_unreferenced_locks_are_dropped(self):
        product_id = uuid.uuid4()
        lock = locks.local_lock_for(product_id)
        assert str(product_id) in locks._local_locks
        del lock
        gc.collect()
        assert str(product_id) not in locks._local_locks

    def test_held_lock_is_reused(self):
        product_id = uuid.uuid4()
        lock = locks.local_lock_for(product_id)
        lock.acquire()
        try:
            assert locks.local_lock_for(str(product_id).upper()) is lock
        finally:
            lock.release()
