"""
Tests — Product and StockTransaction models.

@file stock/tests/test_models.py
"""

import pytest
from django.db import IntegrityError
from django.db.models import ProtectedError

from stock.models import StockTransaction
from tests.factories import ProductFactory, StockTransactionFactory


pytestmark = pytest.mark.django_db


class TestProduct:

    def test_str_with_code(self):
        assert str(ProductFactory(name='Bolt', code='B-1')) == 'Bolt (B-1)'

    def test_str_without_code(self):
        assert str(ProductFactory(name='Bolt', code=None)) == 'Bolt'

    def test_code_unique(self):
        ProductFactory(code='DUP')
        with pytest.raises(IntegrityError):
            ProductFactory(code='DUP')

    def test_product_with_history_cannot_be_deleted(self):
        tx = StockTransactionFactory()
        with pytest.raises(ProtectedError):
            tx.product.delete()


class TestStockTransaction:

    def test_net_qty(self):
        assert StockTransactionFactory(qty_in=3, qty_out=8).net_qty == -5

    def test_default_ordering_is_ledger_order(self):
        product = ProductFactory()
        later = StockTransactionFactory(product=product, date='2026-05-02')
        earlier = StockTransactionFactory(product=product, date='2026-05-01')
        assert list(StockTransaction.objects.filter(product=product)) == [earlier, later]
