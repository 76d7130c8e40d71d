"""
Stock — Django Admin Configuration

Catalog management and a read-only ledger browser. Ledger rows are
changed through the API only, so the access window and per-product
lock always apply.

@file stock/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Product, StockTransaction


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'code', 'maintaining_qty', 'critical_qty', 'is_active', 'updated_at')
    list_filter = ('is_active',)
    search_fields = ('name', 'code')
    readonly_fields = ('id', 'created_by', 'updated_by', 'created_at', 'updated_at')
    ordering = ('name',)

    fieldsets = (
        (_('Product'), {
            'fields': ('id', 'name', 'code', 'is_active'),
        }),
        (_('Thresholds'), {
            'fields': ('maintaining_qty', 'critical_qty'),
        }),
        (_('Audit'), {
            'fields': ('created_by', 'updated_by', 'created_at', 'updated_at'),
        }),
    )

    def has_delete_permission(self, request, obj=None):
        return False  # deactivate instead


@admin.register(StockTransaction)
class StockTransactionAdmin(admin.ModelAdmin):
    list_display = (
        'date', 'product', 'qty_in', 'qty_out', 'reference_no',
        'created_by', 'created_at',
    )
    list_filter = ('date',)
    search_fields = ('product__name', 'product__code', 'reference_no', 'remarks')
    readonly_fields = (
        'id', 'product', 'date', 'qty_in', 'qty_out', 'reference_no', 'remarks',
        'created_by', 'updated_by', 'created_at', 'updated_at',
    )
    list_select_related = ('product', 'created_by')
    show_full_result_count = False
    list_per_page = 50
    date_hierarchy = 'date'
    ordering = ('-date', '-created_at')

    fieldsets = (
        (_('Movement'), {
            'fields': ('id', 'product', 'date', 'qty_in', 'qty_out'),
        }),
        (_('Reference'), {
            'fields': ('reference_no', 'remarks'),
        }),
        (_('Audit'), {
            'fields': ('created_by', 'updated_by', 'created_at', 'updated_at'),
        }),
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
