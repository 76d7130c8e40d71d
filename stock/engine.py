"""
Stock — Computation Engine

Pure functions deriving balances and statuses from a product and its
ledger. Nothing here touches the database or caches results: the same
inputs always produce the same outputs, so a snapshot can be recomputed
after any edit or delete.

Thresholds are read from the product passed in, i.e. the *current*
configuration. Changing a threshold re-labels historical rows.

@file stock/engine.py
"""

from dataclasses import dataclass
from typing import Any, Iterable

from django.db.models import TextChoices
from django.utils.translation import gettext_lazy as _


class StockStatus(TextChoices):
    OK = 'ok', _('OK')
    WARNING = 'warning', _('Warning')
    CRITICAL = 'critical', _('Critical')


@dataclass(frozen=True)
class StockSnapshot:
    product_id: Any
    product_name: str
    code: str | None
    maintaining_qty: int
    critical_qty: int
    is_active: bool
    total_in: int
    total_out: int
    current_stock: int
    status: str


@dataclass(frozen=True)
class RunningEntry:
    transaction: Any
    running_total: int
    status: str


def derive_status(stock: int, maintaining_qty: int, critical_qty: int) -> str:
    """
    Classify a balance. The critical check wins, so a product configured
    with critical_qty > maintaining_qty never reports ``warning`` for a
    stock between the two.
    """
    if stock <= critical_qty:
        return StockStatus.CRITICAL
    if stock <= maintaining_qty:
        return StockStatus.WARNING
    return StockStatus.OK


def ledger_key(transaction) -> tuple:
    return (transaction.date, transaction.created_at, str(transaction.id))


def in_ledger_order(transactions: Iterable) -> list:
    return sorted(transactions, key=ledger_key)


def compute_snapshot(product, transactions: Iterable) -> StockSnapshot:
    total_in = 0
    total_out = 0
    for tx in in_ledger_order(transactions):
        total_in += tx.qty_in
        total_out += tx.qty_out
    current = total_in - total_out
    return StockSnapshot(
        product_id=product.id,
        product_name=product.name,
        code=product.code,
        maintaining_qty=product.maintaining_qty,
        critical_qty=product.critical_qty,
        is_active=product.is_active,
        total_in=total_in,
        total_out=total_out,
        current_stock=current,
        status=derive_status(current, product.maintaining_qty, product.critical_qty),
    )


def compute_running_entries(product, transactions: Iterable) -> list[RunningEntry]:
    """Balance and status immediately after each transaction, in ledger order."""
    entries = []
    balance = 0
    for tx in in_ledger_order(transactions):
        balance += tx.qty_in - tx.qty_out
        entries.append(RunningEntry(
            transaction=tx,
            running_total=balance,
            status=derive_status(balance, product.maintaining_qty, product.critical_qty),
        ))
    return entries
