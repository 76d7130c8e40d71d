"""
Tests — Stock computation engine. Pure functions, no database.

@file stock/tests/test_engine.py
"""

import random
import uuid
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from stock.engine import (
    StockStatus,
    compute_running_entries,
    compute_snapshot,
    derive_status,
    in_ledger_order,
)


BASE_TIME = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)


def _product(maintaining=10, critical=5, **kwargs):
    return SimpleNamespace(
        id=kwargs.get('id', uuid.uuid4()),
        name=kwargs.get('name', 'Widget'),
        code=kwargs.get('code'),
        maintaining_qty=maintaining,
        critical_qty=critical,
        is_active=kwargs.get('is_active', True),
    )


def _tx(day, qty_in=0, qty_out=0, seq=0):
    return SimpleNamespace(
        id=uuid.uuid4(),
        date=date(2026, 3, day),
        created_at=BASE_TIME + timedelta(seconds=seq),
        qty_in=qty_in,
        qty_out=qty_out,
    )


class TestDeriveStatus:

    @pytest.mark.parametrize('stock,expected', [
        (20, StockStatus.OK),
        (11, StockStatus.OK),
        (10, StockStatus.WARNING),
        (6, StockStatus.WARNING),
        (5, StockStatus.CRITICAL),
        (0, StockStatus.CRITICAL),
        (-3, StockStatus.CRITICAL),
    ])
    def test_boundaries(self, stock, expected):
        assert derive_status(stock, 10, 5) == expected

    def test_status_is_monotonic_in_stock(self):
        rank = {StockStatus.CRITICAL: 0, StockStatus.WARNING: 1, StockStatus.OK: 2}
        statuses = [rank[derive_status(s, 10, 5)] for s in range(-5, 30)]
        assert statuses == sorted(statuses)

    def test_inverted_thresholds_never_warn_between_them(self):
        # critical above maintaining: the critical check wins
        assert derive_status(8, 10, 25) == StockStatus.CRITICAL
        assert derive_status(26, 10, 25) == StockStatus.OK


class TestComputeSnapshot:

    def test_empty_ledger(self):
        snap = compute_snapshot(_product(), [])
        assert snap.total_in == 0
        assert snap.total_out == 0
        assert snap.current_stock == 0
        assert snap.status == StockStatus.CRITICAL

    def test_totals(self):
        txs = [_tx(1, qty_in=20), _tx(2, qty_out=12, seq=1), _tx(3, qty_out=5, seq=2)]
        snap = compute_snapshot(_product(), txs)
        assert (snap.total_in, snap.total_out, snap.current_stock) == (20, 17, 3)
        assert snap.status == StockStatus.CRITICAL

    def test_negative_stock_is_reported(self):
        snap = compute_snapshot(_product(), [_tx(1, qty_out=4)])
        assert snap.current_stock == -4
        assert snap.status == StockStatus.CRITICAL

    def test_copies_product_identity(self):
        product = _product(name='Bolt', code='B-1', is_active=False)
        snap = compute_snapshot(product, [])
        assert snap.product_id == product.id
        assert snap.product_name == 'Bolt'
        assert snap.code == 'B-1'
        assert snap.is_active is False

    def test_idempotent(self):
        product = _product()
        txs = [_tx(1, qty_in=7), _tx(2, qty_out=3, seq=1)]
        assert compute_snapshot(product, txs) == compute_snapshot(product, txs)


class TestComputeRunningEntries:

    def test_scenario_widget(self):
        txs = [_tx(1, qty_in=20), _tx(2, qty_out=12, seq=1), _tx(3, qty_out=5, seq=2)]
        entries = compute_running_entries(_product(), txs)
        assert [e.running_total for e in entries] == [20, 8, 3]
        assert [e.status for e in entries] == [
            StockStatus.OK, StockStatus.WARNING, StockStatus.CRITICAL,
        ]

    def test_removing_an_entry_recomputes_later_totals(self):
        day1, day2, day3 = _tx(1, qty_in=20), _tx(2, qty_out=12, seq=1), _tx(3, qty_out=5, seq=2)
        assert compute_running_entries(_product(), [day1, day2, day3])[-1].running_total == 3
        entries = compute_running_entries(_product(), [day1, day3])
        assert entries[-1].running_total == 15

    def test_input_order_does_not_matter(self):
        txs = [_tx(d, qty_in=random.randint(0, 9), qty_out=random.randint(0, 9), seq=d) for d in range(1, 20)]
        shuffled = txs[:]
        random.shuffle(shuffled)
        product = _product()
        assert compute_running_entries(product, txs) == compute_running_entries(product, shuffled)

    def test_last_running_total_matches_snapshot(self):
        txs = [_tx(d, qty_in=d, qty_out=d // 2, seq=d) for d in range(1, 15)]
        product = _product()
        entries = compute_running_entries(product, txs)
        snap = compute_snapshot(product, txs)
        assert entries[-1].running_total == snap.current_stock
        assert entries[-1].status == snap.status

    def test_same_day_ordered_by_created_at(self):
        later = _tx(1, qty_out=5, seq=10)
        earlier = _tx(1, qty_in=5, seq=1)
        entries = compute_running_entries(_product(), [later, earlier])
        assert [e.transaction for e in entries] == [earlier, later]
        assert [e.running_total for e in entries] == [5, 0]

    def test_thresholds_apply_retroactively(self):
        txs = [_tx(1, qty_in=20), _tx(2, qty_out=12, seq=1)]
        before = compute_running_entries(_product(10, 5), txs)
        after = compute_running_entries(_product(10, 25), txs)
        assert before[-1].status == StockStatus.WARNING
        assert after[-1].status == StockStatus.CRITICAL
        assert [e.running_total for e in before] == [e.running_total for e in after]


class TestLedgerOrder:

    def test_id_breaks_ties(self):
        a = _tx(1, qty_in=1)
        b = _tx(1, qty_in=1)
        ordered = in_ledger_order([a, b])
        assert ordered == sorted([a, b], key=lambda t: str(t.id))
