"""
Stock — Serializers

Write serializers validate request shape only; business rules
(duplicates, access window, inactive products) live in the services.
Read serializers render products, ledger rows, derived snapshots and
running entries.

@file stock/serializers.py
"""

from rest_framework import serializers

from core.models import AuditLog
from users.serializers import UserSummarySerializer

from .engine import StockStatus
from .models import MAX_QUANTITY, Product, StockTransaction


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------

class ProductReadSerializer(serializers.ModelSerializer):
    created_by = UserSummarySerializer(read_only=True)
    updated_by = UserSummarySerializer(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'code',
            'maintaining_qty', 'critical_qty', 'is_active',
            'created_by', 'updated_by', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, allow_blank=True)
    code = serializers.CharField(
        max_length=100, required=False, allow_blank=True, allow_null=True,
    )
    maintaining_qty = serializers.IntegerField(min_value=0, max_value=MAX_QUANTITY, default=0)
    critical_qty = serializers.IntegerField(min_value=0, max_value=MAX_QUANTITY, default=0)


class ProductUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    code = serializers.CharField(
        max_length=100, required=False, allow_blank=True, allow_null=True,
    )
    maintaining_qty = serializers.IntegerField(min_value=0, max_value=MAX_QUANTITY, required=False)
    critical_qty = serializers.IntegerField(min_value=0, max_value=MAX_QUANTITY, required=False)
    is_active = serializers.BooleanField(required=False)


# ---------------------------------------------------------------------------
# Ledger rows
# ---------------------------------------------------------------------------

class TransactionReadSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)
    product_code = serializers.CharField(source='product.code', read_only=True, allow_null=True)
    created_by = UserSummarySerializer(read_only=True)
    updated_by = UserSummarySerializer(read_only=True)

    class Meta:
        model = StockTransaction
        fields = [
            'id', 'product', 'product_name', 'product_code',
            'date', 'qty_in', 'qty_out', 'reference_no', 'remarks',
            'created_by', 'updated_by', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class TransactionWriteSerializer(serializers.Serializer):
    product = serializers.UUIDField()
    date = serializers.DateField(required=False)
    qty_in = serializers.IntegerField(min_value=0, max_value=MAX_QUANTITY, default=0)
    qty_out = serializers.IntegerField(min_value=0, max_value=MAX_QUANTITY, default=0)
    reference_no = serializers.CharField(
        max_length=255, required=False, allow_blank=True, allow_null=True,
    )
    remarks = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class TransactionUpdateSerializer(serializers.Serializer):
    FIXED_FIELDS = ('product', 'date')

    qty_in = serializers.IntegerField(min_value=0, max_value=MAX_QUANTITY, required=False)
    qty_out = serializers.IntegerField(min_value=0, max_value=MAX_QUANTITY, required=False)
    reference_no = serializers.CharField(
        max_length=255, required=False, allow_blank=True, allow_null=True,
    )
    remarks = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate(self, attrs):
        fixed = [f for f in self.FIXED_FIELDS if f in self.initial_data]
        if fixed:
            raise serializers.ValidationError({
                f: 'This field cannot be changed after creation.' for f in fixed
            })
        if not attrs:
            raise serializers.ValidationError('Nothing to update.')
        return attrs


class TransactionQuerySerializer(serializers.Serializer):
    """Query string of GET /transactions/."""

    date = serializers.DateField(required=False)
    product = serializers.UUIDField(required=False)
    start = serializers.DateField(required=False)
    end = serializers.DateField(required=False)
    order = serializers.ChoiceField(choices=['asc', 'desc'], default='asc')

    def validate(self, attrs):
        start, end = attrs.get('start'), attrs.get('end')
        if (start is None) != (end is None):
            raise serializers.ValidationError('Both "from" and "to" are required for a range.')
        if start and end and start > end:
            raise serializers.ValidationError('"from" must not be after "to".')
        return attrs


# ---------------------------------------------------------------------------
# Derived views
# ---------------------------------------------------------------------------

class RunningEntrySerializer(serializers.Serializer):
    running_total = serializers.IntegerField(read_only=True)
    status = serializers.ChoiceField(choices=StockStatus.choices, read_only=True)

    def to_representation(self, instance):
        data = TransactionReadSerializer(instance.transaction, context=self.context).data
        data.update(super().to_representation(instance))
        return data


class StockSnapshotSerializer(serializers.Serializer):
    product_id = serializers.UUIDField(read_only=True)
    product_name = serializers.CharField(read_only=True)
    code = serializers.CharField(read_only=True, allow_null=True)
    maintaining_qty = serializers.IntegerField(read_only=True)
    critical_qty = serializers.IntegerField(read_only=True)
    is_active = serializers.BooleanField(read_only=True)
    total_in = serializers.IntegerField(read_only=True)
    total_out = serializers.IntegerField(read_only=True)
    current_stock = serializers.IntegerField(read_only=True)
    status = serializers.ChoiceField(choices=StockStatus.choices, read_only=True)


class DateGroupSerializer(serializers.Serializer):
    date = serializers.DateField(read_only=True)
    is_today = serializers.BooleanField(read_only=True)
    can_write = serializers.BooleanField(read_only=True)
    can_toggle = serializers.BooleanField(read_only=True)
    entries = RunningEntrySerializer(many=True, read_only=True)


class AuditLogSerializer(serializers.ModelSerializer):
    actor = UserSummarySerializer(read_only=True)
    action_display = serializers.CharField(source='get_action_display', read_only=True)

    class Meta:
        model = AuditLog
        fields = [
            'id', 'action', 'action_display', 'model_name', 'object_id',
            'actor', 'old_values', 'new_values', 'timestamp',
        ]
        read_only_fields = fields
