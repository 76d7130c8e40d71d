"""
Stock — Service Layer

Catalog and ledger writes. Every ledger mutation is checked against the
access window, runs under the per-product write lock inside one
database transaction, and emits an audit event after commit. Balances
are never written: readers recompute them through StockQueryService.

@file stock/services.py
"""

import logging

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction

from core.constants import (
    AUDIT_ACTION_CREATE,
    AUDIT_ACTION_DELETE,
    AUDIT_ACTION_RESTORE,
    AUDIT_ACTION_SOFT_DELETE,
    AUDIT_ACTION_UPDATE,
)
from core.exceptions import BusinessRuleViolation, DuplicateResourceError, ResourceNotFoundError
from core.services import AuditService

from .access import current_date, ensure_can_write
from .locks import product_write_lock
from .models import LEDGER_ORDERING, MAX_QUANTITY, Product, StockTransaction

logger = logging.getLogger('stockledger')

PRODUCT_FIELDS = {'name', 'code', 'maintaining_qty', 'critical_qty'}
TRANSACTION_MUTABLE_FIELDS = {'qty_in', 'qty_out', 'reference_no', 'remarks'}


def _validate_quantity(field: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise BusinessRuleViolation(detail=f'{field} must be an integer.')
    if value < 0:
        raise BusinessRuleViolation(detail=f'{field} must be non-negative.')
    if value > MAX_QUANTITY:
        raise BusinessRuleViolation(detail=f'{field} must not exceed {MAX_QUANTITY}.')
    return value


def get_product(product_id, *, for_update: bool = False) -> Product:
    qs = Product.objects.select_for_update() if for_update else Product.objects.all()
    try:
        return qs.get(pk=product_id)
    except (Product.DoesNotExist, DjangoValidationError, ValueError):
        raise ResourceNotFoundError(detail='Product not found.')


def get_transaction(transaction_id, *, for_update: bool = False) -> StockTransaction:
    qs = StockTransaction.objects.select_for_update() if for_update else StockTransaction.objects.all()
    try:
        return qs.get(pk=transaction_id)
    except (StockTransaction.DoesNotExist, DjangoValidationError, ValueError):
        raise ResourceNotFoundError(detail='Transaction not found.')


class ProductService:
    """Product catalog: identity, thresholds, active lifecycle."""

    @staticmethod
    def _clean(fields: dict) -> dict:
        unknown = set(fields) - PRODUCT_FIELDS
        if unknown:
            raise BusinessRuleViolation(
                detail=f'Unknown product field(s): {", ".join(sorted(unknown))}.',
            )
        cleaned = dict(fields)
        if 'name' in cleaned:
            name = (cleaned['name'] or '').strip()
            if not name:
                raise BusinessRuleViolation(detail='Product name is required.')
            cleaned['name'] = name
        if 'code' in cleaned:
            cleaned['code'] = (cleaned['code'] or '').strip() or None
        for field in ('maintaining_qty', 'critical_qty'):
            if field in cleaned:
                _validate_quantity(field, cleaned[field])
        return cleaned

    @staticmethod
    def _check_thresholds(product: Product) -> None:
        if not getattr(settings, 'STOCK_ENFORCE_THRESHOLD_ORDER', False):
            return
        if product.critical_qty > product.maintaining_qty:
            raise BusinessRuleViolation(
                detail='critical_qty must not exceed maintaining_qty.',
            )

    @staticmethod
    def _check_code_free(code, exclude_pk=None) -> None:
        if code is None:
            return
        qs = Product.objects.filter(code=code)
        if exclude_pk is not None:
            qs = qs.exclude(pk=exclude_pk)
        if qs.exists():
            raise DuplicateResourceError(detail=f'Product code "{code}" is already in use.')

    @staticmethod
    def _save(product: Product) -> None:
        try:
            with transaction.atomic():
                product.save()
        except IntegrityError:
            raise DuplicateResourceError(detail=f'Product code "{product.code}" is already in use.')

    @classmethod
    @transaction.atomic
    def create_product(
        cls,
        *,
        name: str,
        code: str | None = None,
        maintaining_qty: int = 0,
        critical_qty: int = 0,
        actor=None,
    ) -> Product:
        fields = cls._clean({
            'name': name,
            'code': code,
            'maintaining_qty': maintaining_qty,
            'critical_qty': critical_qty,
        })
        cls._check_code_free(fields['code'])

        product = Product(**fields, created_by=actor, updated_by=actor)
        cls._check_thresholds(product)
        cls._save(product)

        AuditService.emit(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='Product',
            object_id=str(product.pk),
            new_values=AuditService.snapshot(product),
        )
        logger.info('Product %s "%s" created by %s', product.pk, product.name, actor)
        return product

    @classmethod
    @transaction.atomic
    def update_product(cls, *, product_id, actor=None, **fields) -> Product:
        """
        Partial update of name / code / thresholds. ``is_active`` is
        accepted too and routed to deactivate / reactivate.
        """
        is_active = fields.pop('is_active', None)
        cleaned = cls._clean(fields)

        product = get_product(product_id, for_update=True)
        old_snapshot = AuditService.snapshot(product)

        if 'code' in cleaned:
            cls._check_code_free(cleaned['code'], exclude_pk=product.pk)
        for field, value in cleaned.items():
            setattr(product, field, value)
        cls._check_thresholds(product)

        new_snapshot = AuditService.snapshot(product)
        if new_snapshot != old_snapshot:
            product.updated_by = actor
            cls._save(product)
            AuditService.emit(
                actor=actor,
                action=AUDIT_ACTION_UPDATE,
                model_name='Product',
                object_id=str(product.pk),
                old_values=old_snapshot,
                new_values=new_snapshot,
            )
            logger.info('Product %s updated by %s: %s', product.pk, actor, sorted(cleaned))

        if is_active is not None:
            product = cls._set_active(product, bool(is_active), actor)
        return product

    @classmethod
    @transaction.atomic
    def deactivate_product(cls, *, product_id, actor=None) -> Product:
        """Hide from new-transaction pickers. History stays queryable. Idempotent."""
        return cls._set_active(get_product(product_id, for_update=True), False, actor)

    @classmethod
    @transaction.atomic
    def reactivate_product(cls, *, product_id, actor=None) -> Product:
        return cls._set_active(get_product(product_id, for_update=True), True, actor)

    @staticmethod
    def _set_active(product: Product, active: bool, actor) -> Product:
        if product.is_active == active:
            return product
        product.is_active = active
        product.updated_by = actor
        product.save(update_fields=['is_active', 'updated_by', 'updated_at'])

        AuditService.emit(
            actor=actor,
            action=AUDIT_ACTION_RESTORE if active else AUDIT_ACTION_SOFT_DELETE,
            model_name='Product',
            object_id=str(product.pk),
            old_values={'is_active': not active},
            new_values={'is_active': active},
        )
        logger.info(
            'Product %s %s by %s',
            product.pk, 'reactivated' if active else 'deactivated', actor,
        )
        return product

    @staticmethod
    def list_products(*, active_only: bool = False):
        qs = Product.objects.order_by('name', 'id')
        if active_only:
            qs = qs.filter(is_active=True)
        return qs


class LedgerService:
    """Dated IN/OUT movements. Source of truth for every balance."""

    @staticmethod
    def _validate_quantities(qty_in, qty_out) -> None:
        _validate_quantity('qty_in', qty_in)
        _validate_quantity('qty_out', qty_out)
        if qty_in == 0 and qty_out == 0:
            raise BusinessRuleViolation(
                detail='A transaction needs a positive qty_in or qty_out.',
            )

    @classmethod
    def record_transaction(
        cls,
        *,
        product_id,
        actor,
        qty_in: int = 0,
        qty_out: int = 0,
        date=None,
        reference_no: str | None = '',
        remarks: str | None = '',
        now=None,
    ) -> StockTransaction:
        """Append a movement. ``date`` defaults to today as seen from ``now``."""
        cls._validate_quantities(qty_in, qty_out)
        tx_date = date or current_date(now)
        ensure_can_write(actor, tx_date, now)

        with product_write_lock(product_id):
            product = get_product(product_id)
            if not product.is_active:
                raise BusinessRuleViolation(
                    detail='Inactive products cannot receive new transactions.',
                )
            tx = StockTransaction.objects.create(
                product=product,
                date=tx_date,
                qty_in=qty_in,
                qty_out=qty_out,
                reference_no=(reference_no or '').strip(),
                remarks=(remarks or '').strip(),
                created_by=actor,
                updated_by=actor,
            )
            AuditService.emit(
                actor=actor,
                action=AUDIT_ACTION_CREATE,
                model_name='StockTransaction',
                object_id=str(tx.pk),
                new_values=AuditService.snapshot(tx),
            )

        logger.info(
            'StockTransaction %s recorded: product=%s date=%s in=%s out=%s by %s',
            tx.pk, product.pk, tx_date, qty_in, qty_out, actor,
        )
        return tx

    @classmethod
    def update_transaction(cls, *, transaction_id, actor, now=None, **fields) -> StockTransaction:
        """
        Edit quantities / reference / remarks. The access window is
        evaluated on the transaction's own date, not on the day of the edit.
        """
        immutable = set(fields) - TRANSACTION_MUTABLE_FIELDS
        if immutable:
            raise BusinessRuleViolation(
                detail=f'Cannot modify transaction field(s): {", ".join(sorted(immutable))}.',
            )

        existing = get_transaction(transaction_id)
        ensure_can_write(actor, existing.date, now)

        with product_write_lock(existing.product_id):
            tx = get_transaction(transaction_id, for_update=True)
            old_snapshot = AuditService.snapshot(tx)

            for field in ('reference_no', 'remarks'):
                if field in fields:
                    fields[field] = (fields[field] or '').strip()
            for field, value in fields.items():
                setattr(tx, field, value)
            cls._validate_quantities(tx.qty_in, tx.qty_out)

            tx.updated_by = actor
            tx.save()
            AuditService.emit(
                actor=actor,
                action=AUDIT_ACTION_UPDATE,
                model_name='StockTransaction',
                object_id=str(tx.pk),
                old_values=old_snapshot,
                new_values=AuditService.snapshot(tx),
            )

        logger.info('StockTransaction %s updated by %s: %s', tx.pk, actor, sorted(fields))
        return tx

    @staticmethod
    def delete_transaction(*, transaction_id, actor, now=None) -> None:
        """
        Hard delete. Every later running total of the product changes;
        the DELETE audit entry keeps the removed values.
        """
        existing = get_transaction(transaction_id)
        ensure_can_write(actor, existing.date, now)

        with product_write_lock(existing.product_id):
            tx = get_transaction(transaction_id, for_update=True)
            old_snapshot = AuditService.snapshot(tx)
            tx.delete()
            AuditService.emit(
                actor=actor,
                action=AUDIT_ACTION_DELETE,
                model_name='StockTransaction',
                object_id=str(transaction_id),
                old_values=old_snapshot,
            )

        logger.info(
            'StockTransaction %s deleted by %s (product=%s date=%s)',
            transaction_id, actor, existing.product_id, existing.date,
        )

    @staticmethod
    def list_by_product(product_id) -> list[StockTransaction]:
        product = get_product(product_id)
        return list(
            StockTransaction.objects
            .filter(product=product)
            .select_related('product', 'created_by', 'updated_by')
            .order_by(*LEDGER_ORDERING)
        )

    @staticmethod
    def list_by_date(on_date) -> list[StockTransaction]:
        return list(
            StockTransaction.objects
            .filter(date=on_date)
            .select_related('product', 'created_by', 'updated_by')
            .order_by(*LEDGER_ORDERING)
        )

    @staticmethod
    def list_dates_with_transactions(*, now=None, limit: int | None = None) -> list:
        """Distinct ledger dates, newest first. Today is always present."""
        qs = (
            StockTransaction.objects
            .order_by('-date')
            .values_list('date', flat=True)
            .distinct()
        )
        if limit is not None:
            qs = qs[:limit]
        dates = set(qs)
        dates.add(current_date(now))
        return sorted(dates, reverse=True)
