"""
Stock — Models

Product catalog and the per-product IN/OUT ledger. Stock is never stored
as a balance; it is derived from the ordered ledger on every read
(see stock/engine.py). Ledger order is (date, created_at, id).

@file stock/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel

LEDGER_ORDERING = ('date', 'created_at', 'id')

# Upper bound of PositiveIntegerField on every supported backend.
MAX_QUANTITY = 2147483647


class Product(BaseModel):
    """
    Catalog entry with the two stock thresholds used for status.

    Products are deactivated, never deleted, once referenced by the
    ledger (transactions PROTECT their product).
    """

    name = models.CharField(_('name'), max_length=255, db_index=True)
    code = models.CharField(
        _('code'), max_length=100, unique=True, null=True, blank=True,
        help_text=_('Optional external / QC code. Unique when present.'),
    )
    maintaining_qty = models.PositiveIntegerField(
        _('maintaining quantity'), default=0,
        help_text=_('Stock at or below this level is flagged as warning.'),
    )
    critical_qty = models.PositiveIntegerField(
        _('critical quantity'), default=0,
        help_text=_('Stock at or below this level is flagged as critical.'),
    )
    is_active = models.BooleanField(_('active'), default=True, db_index=True)

    class Meta:
        verbose_name = _('product')
        verbose_name_plural = _('products')
        ordering = ['name']

    def __str__(self):
        return f'{self.name} ({self.code})' if self.code else self.name


class StockTransaction(BaseModel):
    """
    One dated IN/OUT movement against a single product.

    ``product`` and ``date`` are fixed at creation. Quantities, reference
    and remarks may be edited, and the row may be hard-deleted, only
    through LedgerService and only inside the access window.
    """

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name='transactions',
        verbose_name=_('product'),
    )
    date = models.DateField(_('date'), db_index=True)
    qty_in = models.PositiveIntegerField(_('quantity in'), default=0)
    qty_out = models.PositiveIntegerField(_('quantity out'), default=0)
    reference_no = models.CharField(
        _('reference no.'), max_length=255, blank=True,
        help_text=_('PO number, job order, delivery receipt…'),
    )
    remarks = models.TextField(_('remarks'), blank=True)

    class Meta:
        verbose_name = _('stock transaction')
        verbose_name_plural = _('stock transactions')
        ordering = list(LEDGER_ORDERING)
        indexes = [
            models.Index(fields=['product', 'date', 'created_at'], name='stock_tx_ledger_idx'),
            models.Index(fields=['date', 'created_at'], name='stock_tx_date_idx'),
        ]

    def __str__(self):
        return f'{self.date} {self.product_id} +{self.qty_in}/-{self.qty_out}'

    @property
    def net_qty(self) -> int:
        return self.qty_in - self.qty_out
