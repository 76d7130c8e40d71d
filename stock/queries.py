"""
Stock — Query Façade

Read side of the ledger: joins catalog + ledger rows and hands them to
the computation engine. Reads take no locks and only see committed
rows. Running totals are always computed over the product's full
history, so grouping by date is a presentation partition only.

@file stock/queries.py
"""

from collections import defaultdict

from django.db.models import Q

from core.models import AuditLog

from .access import current_date, group_by_date
from .engine import compute_running_entries, compute_snapshot, ledger_key
from .locks import lock_key
from .models import LEDGER_ORDERING, Product, StockTransaction
from .services import LedgerService, get_product

LEDGER_MODEL_NAMES = ('Product', 'StockTransaction')


def _with_relations(qs):
    return qs.select_related('product', 'created_by', 'updated_by')


def _running_entries_for(targets) -> list:
    """
    Running entries for the given transactions, each balance computed
    against everything before it in its product's ledger.
    """
    targets = list(targets)
    if not targets:
        return []
    wanted = {tx.pk for tx in targets}
    last_date = max(tx.date for tx in targets)
    history = _with_relations(
        StockTransaction.objects.filter(
            product_id__in={tx.product_id for tx in targets},
            date__lte=last_date,
        )
    ).order_by(*LEDGER_ORDERING)

    by_product = defaultdict(list)
    for tx in history:
        by_product[tx.product_id].append(tx)

    entries = []
    for txs in by_product.values():
        entries.extend(
            entry for entry in compute_running_entries(txs[0].product, txs)
            if entry.transaction.pk in wanted
        )
    entries.sort(key=lambda entry: ledger_key(entry.transaction))
    return entries


class StockQueryService:
    """Stock overview, date / product / range listings, audit trail."""

    @staticmethod
    def get_stock_overview(*, search: str | None = None) -> list:
        """
        One snapshot per product that is active or has ledger history,
        ordered by name. ``search`` matches name or code, case-insensitive.
        """
        products = (
            Product.objects
            .filter(Q(is_active=True) | Q(transactions__isnull=False))
            .distinct()
            .order_by('name', 'id')
        )
        if search:
            search = search.strip()
            products = products.filter(Q(name__icontains=search) | Q(code__icontains=search))
        products = list(products)

        history = defaultdict(list)
        for tx in StockTransaction.objects.filter(product__in=products).order_by(*LEDGER_ORDERING):
            history[tx.product_id].append(tx)

        return [compute_snapshot(product, history[product.pk]) for product in products]

    @staticmethod
    def get_transactions_for_date(on_date) -> list:
        return _running_entries_for(LedgerService.list_by_date(on_date))

    @staticmethod
    def get_transactions_for_range(start, end) -> list:
        return _running_entries_for(
            StockTransaction.objects.filter(date__gte=start, date__lte=end),
        )

    @staticmethod
    def get_transactions_for_product(product_id, *, newest_first: bool = False) -> list:
        product = get_product(product_id)
        entries = compute_running_entries(product, LedgerService.list_by_product(product.pk))
        if newest_first:
            entries.reverse()
        return entries

    @staticmethod
    def get_date_groups(*, role: str, now=None, limit: int | None = None) -> list:
        """Date buckets (today first when present) with the caller's access flags."""
        dates = LedgerService.list_dates_with_transactions(now=now, limit=limit)
        entries = _running_entries_for(
            _with_relations(StockTransaction.objects.filter(date__in=dates)),
        )
        return group_by_date(entries, role, current_date(now), dates=dates)

    @staticmethod
    def audit_trail(*, object_id=None, product_id=None):
        """
        Catalog and ledger audit entries, newest first. ``product_id``
        narrows to one product: its own events plus those of every
        transaction that referenced it, deleted ones included.
        """
        qs = AuditLog.objects.filter(model_name__in=LEDGER_MODEL_NAMES).select_related('actor')
        if object_id:
            qs = qs.filter(object_id=str(object_id))
        if product_id:
            key = lock_key(product_id)
            qs = qs.filter(
                Q(model_name='Product', object_id=key)
                | Q(model_name='StockTransaction', new_values__product=key)
                | Q(model_name='StockTransaction', old_values__product=key)
            )
        return qs.order_by('-timestamp')
