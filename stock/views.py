"""
Stock — Views

DRF endpoints for the product catalog, the ledger, the derived stock
overview, date groups and the inventory audit trail. Views only parse
and render; every rule is enforced in stock/services.py.

@file stock/views.py
"""

from django.conf import settings
from rest_framework import generics, status, viewsets
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.pagination import AuditTrailPagination

from .access import current_date
from .permissions import CanManageProducts, IsLedgerAdmin
from .queries import StockQueryService
from .serializers import (
    AuditLogSerializer,
    DateGroupSerializer,
    ProductReadSerializer,
    ProductUpdateSerializer,
    ProductWriteSerializer,
    RunningEntrySerializer,
    StockSnapshotSerializer,
    TransactionQuerySerializer,
    TransactionReadSerializer,
    TransactionUpdateSerializer,
    TransactionWriteSerializer,
)
from .services import LedgerService, ProductService, get_transaction


def _dates_limit(user) -> int:
    if getattr(user, 'is_admin', False):
        return settings.STOCK_DATES_LIMIT_ADMIN
    return settings.STOCK_DATES_LIMIT_DEFAULT


class ProductViewSet(viewsets.ModelViewSet):
    """
    Product catalog.

    List/retrieve open to any authenticated user; non-admins only ever
    see active products. Create/update/deactivate restricted to admin.
    DELETE deactivates; PATCH {"is_active": true} reactivates.
    """

    permission_classes = [IsAuthenticated, CanManageProducts]
    serializer_class = ProductReadSerializer
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']
    filterset_fields = ['is_active']
    search_fields = ['name', 'code']
    ordering_fields = ['name', 'code', 'created_at']
    ordering = ['name']

    def get_queryset(self):
        active_only = (
            not self.request.user.is_admin
            or self.request.query_params.get('active') in ('1', 'true', 'True')
        )
        return ProductService.list_products(active_only=active_only).select_related(
            'created_by', 'updated_by',
        )

    def create(self, request, *args, **kwargs):
        ser = ProductWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        product = ProductService.create_product(actor=request.user, **ser.validated_data)
        return Response(
            {'success': True, 'data': ProductReadSerializer(product).data},
            status=status.HTTP_201_CREATED,
        )

    def partial_update(self, request, pk=None, *args, **kwargs):
        ser = ProductUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        product = ProductService.update_product(
            product_id=pk, actor=request.user, **ser.validated_data,
        )
        return Response({'success': True, 'data': ProductReadSerializer(product).data})

    def destroy(self, request, pk=None, *args, **kwargs):
        product = ProductService.deactivate_product(product_id=pk, actor=request.user)
        return Response({'success': True, 'data': ProductReadSerializer(product).data})


class TransactionViewSet(viewsets.ViewSet):
    """
    Ledger rows.

    GET ?date=YYYY-MM-DD           entries of one day (default: today)
    GET ?product=<id>[&order=desc] full history of one product
    GET ?from=…&to=…               date range (admin only)

    Every listed row carries its running_total and status computed over
    the product's full history.
    """

    permission_classes = [IsAuthenticated]

    def list(self, request):
        params = {
            'date': request.query_params.get('date'),
            'product': request.query_params.get('product'),
            'start': request.query_params.get('from'),
            'end': request.query_params.get('to'),
            'order': request.query_params.get('order'),
        }
        query = TransactionQuerySerializer(data={k: v for k, v in params.items() if v})
        query.is_valid(raise_exception=True)
        data = query.validated_data

        if 'product' in data:
            entries = StockQueryService.get_transactions_for_product(
                data['product'], newest_first=data['order'] == 'desc',
            )
        elif 'start' in data:
            if not request.user.is_admin:
                raise PermissionDenied('Only administrators can query date ranges.')
            entries = StockQueryService.get_transactions_for_range(data['start'], data['end'])
        else:
            entries = StockQueryService.get_transactions_for_date(
                data.get('date') or current_date(),
            )

        return Response({
            'success': True,
            'data': RunningEntrySerializer(entries, many=True).data,
        })

    def retrieve(self, request, pk=None):
        tx = get_transaction(pk)
        return Response({'success': True, 'data': TransactionReadSerializer(tx).data})

    def create(self, request):
        ser = TransactionWriteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        fields = dict(ser.validated_data)
        tx = LedgerService.record_transaction(
            product_id=fields.pop('product'), actor=request.user, **fields,
        )
        return Response(
            {'success': True, 'data': TransactionReadSerializer(tx).data},
            status=status.HTTP_201_CREATED,
        )

    def partial_update(self, request, pk=None):
        ser = TransactionUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        tx = LedgerService.update_transaction(
            transaction_id=pk, actor=request.user, **ser.validated_data,
        )
        return Response({'success': True, 'data': TransactionReadSerializer(tx).data})

    def destroy(self, request, pk=None):
        LedgerService.delete_transaction(transaction_id=pk, actor=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class StockOverviewView(APIView):
    """GET /stock/overview/?search= — current stock and status per product."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        snapshots = StockQueryService.get_stock_overview(
            search=request.query_params.get('search'),
        )
        return Response({
            'success': True,
            'data': StockSnapshotSerializer(snapshots, many=True).data,
        })


class LedgerDatesView(APIView):
    """GET /stock/dates/ — dates with entries, newest first, today included."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        dates = LedgerService.list_dates_with_transactions(limit=_dates_limit(request.user))
        return Response({
            'success': True,
            'data': [day.isoformat() for day in dates],
        })


class LedgerDateGroupsView(APIView):
    """GET /stock/dates/groups/ — entries bucketed per date with access flags."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        groups = StockQueryService.get_date_groups(
            role=request.user.role, limit=_dates_limit(request.user),
        )
        return Response({
            'success': True,
            'data': DateGroupSerializer(groups, many=True).data,
        })


class AuditTrailView(generics.ListAPIView):
    """GET /stock/audit/?object_id=&product= — inventory audit trail (admin only)."""

    permission_classes = [IsAuthenticated, IsLedgerAdmin]
    serializer_class = AuditLogSerializer
    pagination_class = AuditTrailPagination
    filter_backends = []

    def get_queryset(self):
        return StockQueryService.audit_trail(
            object_id=self.request.query_params.get('object_id'),
            product_id=self.request.query_params.get('product'),
        )
