"""
StockLedger — Test Factories

Factory Boy factories for generating test data. Used across all test
modules.

@file tests/factories.py
"""

import uuid

import factory
from django.utils import timezone

from core.models import AuditLog
from stock.models import Product, StockTransaction
from users.models import User


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class UserFactory(factory.django.DjangoModelFactory):
    """Editor by default: the role that exercises the date window."""

    class Meta:
        model = User
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f'user{n:04d}')
    full_name = factory.Faker('name')
    email = factory.LazyAttribute(lambda o: f'{o.username}@stock.test')
    role = User.Role.EDITOR
    is_active = True

    @factory.post_generation
    def password(self, create, extracted, **kwargs):
        password = extracted or 'TestPass2026!'
        self.set_password(password)
        if create:
            self.save(update_fields=['password'])


class AdminUserFactory(UserFactory):
    role = User.Role.ADMIN
    is_staff = True
    is_superuser = True


class ViewerFactory(UserFactory):
    role = User.Role.VIEWER


# ---------------------------------------------------------------------------
# Stock
# ---------------------------------------------------------------------------

class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f'Product-{n}')
    code = factory.Sequence(lambda n: f'QC-{n:05d}')
    maintaining_qty = 10
    critical_qty = 5
    is_active = True


class StockTransactionFactory(factory.django.DjangoModelFactory):
    """Writes straight to the table; bypasses the access window and lock."""

    class Meta:
        model = StockTransaction

    product = factory.SubFactory(ProductFactory)
    date = factory.LazyFunction(timezone.localdate)
    qty_in = 10
    qty_out = 0
    reference_no = factory.Sequence(lambda n: f'DR-{n:05d}')


# ---------------------------------------------------------------------------
# Audit
# ---------------------------------------------------------------------------

class AuditLogFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = AuditLog

    actor = factory.SubFactory(UserFactory)
    action = AuditLog.ActionChoices.CREATE
    model_name = 'Product'
    object_id = factory.LazyFunction(lambda: str(uuid.uuid4()))
