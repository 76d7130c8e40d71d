"""
Stock — URL Configuration

@file stock/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import (
    AuditTrailView,
    LedgerDateGroupsView,
    LedgerDatesView,
    ProductViewSet,
    StockOverviewView,
    TransactionViewSet,
)

app_name = 'stock'

router = DefaultRouter()
router.register('products', ProductViewSet, basename='product')
router.register('transactions', TransactionViewSet, basename='transaction')

urlpatterns = [
    path('overview/', StockOverviewView.as_view(), name='overview'),
    path('dates/', LedgerDatesView.as_view(), name='dates'),
    path('dates/groups/', LedgerDateGroupsView.as_view(), name='date-groups'),
    path('audit/', AuditTrailView.as_view(), name='audit'),
    path('', include(router.urls)),
]
