from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import CanAccessRequestedBranch
from . import services
from .exceptions import (
    AppendedOrderNotFoundError,
    DuplicateOrderError,
    ItemNotFoundError,
    OrderNotFoundError,
    OrderServiceError,
    PaymentValidationError,
)
from .serializers import (
    AppendItemsSerializer,
    ItemStatusUpdateSerializer,
    NoteCreateSerializer,
    OrderCreateSerializer,
    OrderFilterSerializer,
    OrderSerializer,
    OrderStatsSerializer,
    OrderSummarySerializer,
    OrderUpdateSerializer,
    PaymentInputSerializer,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


UUID_PATTERN = r'[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'


ERROR_STATUS = {
    OrderNotFoundError: status.HTTP_404_NOT_FOUND,
    AppendedOrderNotFoundError: status.HTTP_404_NOT_FOUND,
    ItemNotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateOrderError: status.HTTP_409_CONFLICT,
    PaymentValidationError: status.HTTP_400_BAD_REQUEST,
}


def error_response(exc: OrderServiceError):
    return Response(
        {'error': str(exc)},
        status=ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    )


class OrderViewSet(viewsets.ViewSet):
    """
    Orders, their items, appended orders, payments and notes.

    list: filter by payment, item status, customer, branch, day
    create: new order (auto-numbered)
    retrieve / update / destroy: one order
    """

    permission_classes = [IsAuthenticated, CanAccessRequestedBranch]
    lookup_value_regex = UUID_PATTERN

    def _run(self, func, success_status=status.HTTP_200_OK, **kwargs):
        try:
            order = func(**kwargs)
        except OrderServiceError as e:
            return error_response(e)
        return Response(OrderSerializer(order).data, status=success_status)

    @extend_schema(parameters=[OrderFilterSerializer], responses={200: OrderSerializer(many=True)}, tags=['orders'])
    def list(self, request):
        filter_serializer = OrderFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        orders = services.list_orders(**filter_serializer.validated_data)
        return Response(OrderSerializer(orders, many=True).data)

    @extend_schema(
        request=OrderCreateSerializer,
        responses={201: OrderSerializer, 400: ErrorResponseSerializer, 409: ErrorResponseSerializer},
        tags=['orders'],
    )
    def create(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        data.setdefault('order_taker_name', request.user.get_display_name())
        data.setdefault('order_taker_email', request.user.email)

        return self._run(services.create_order, status.HTTP_201_CREATED, **data)

    @extend_schema(responses={200: OrderSerializer, 404: ErrorResponseSerializer}, tags=['orders'])
    def retrieve(self, request, pk=None):
        return self._run(services.get_order, order_id=pk)

    @extend_schema(
        request=OrderUpdateSerializer,
        responses={200: OrderSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=['orders'],
    )
    def update(self, request, pk=None):
        serializer = OrderUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return self._run(services.update_order, order_id=pk, **serializer.validated_data)

    partial_update = update

    @extend_schema(responses={204: None, 404: ErrorResponseSerializer}, tags=['orders'])
    def destroy(self, request, pk=None):
        try:
            services.delete_order(order_id=pk)
        except OrderServiceError as e:
            return error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=AppendItemsSerializer, responses={201: OrderSerializer}, tags=['orders'])
    @action(detail=True, methods=['post'])
    def append(self, request, pk=None):
        """Add items to an existing order as a new appended order."""
        serializer = AppendItemsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return self._run(
            services.append_items,
            status.HTTP_201_CREATED,
            order_id=pk,
            items=serializer.validated_data['items'],
        )

    @extend_schema(request=ItemStatusUpdateSerializer, responses={200: OrderSerializer}, tags=['orders'])
    @action(detail=True, methods=['put', 'patch'], url_path=r'items/(?P<item_id>[^/]+)/status')
    def item_status(self, request, pk=None, item_id=None):
        """Update the status of an item (main items first, then appended)."""
        serializer = ItemStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return self._run(
            services.update_item_status,
            order_id=pk,
            item_id=item_id,
            **serializer.validated_data,
        )

    @extend_schema(request=ItemStatusUpdateSerializer, responses={200: OrderSerializer}, tags=['orders'])
    @action(
        detail=True,
        methods=['put', 'patch'],
        url_path=rf'appended/(?P<appended_id>{UUID_PATTERN})/items/(?P<item_id>[^/]+)/status',
    )
    def appended_item_status(self, request, pk=None, appended_id=None, item_id=None):
        serializer = ItemStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return self._run(
            services.update_item_status,
            order_id=pk,
            item_id=item_id,
            appended_id=appended_id,
            **serializer.validated_data,
        )

    @extend_schema(request=PaymentInputSerializer, responses={200: OrderSerializer}, tags=['orders'])
    @action(detail=True, methods=['put', 'patch'])
    def payment(self, request, pk=None):
        """Set or toggle payment of the main order."""
        serializer = PaymentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return self._run(services.set_order_payment, order_id=pk, **serializer.validated_data)

    @extend_schema(request=PaymentInputSerializer, responses={200: OrderSerializer}, tags=['orders'])
    @action(detail=True, methods=['put', 'patch'], url_path=rf'appended/(?P<appended_id>{UUID_PATTERN})/payment')
    def appended_payment(self, request, pk=None, appended_id=None):
        serializer = PaymentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return self._run(
            services.set_appended_payment,
            order_id=pk,
            appended_id=appended_id,
            **serializer.validated_data,
        )

    @extend_schema(responses={200: OrderSerializer}, tags=['orders'])
    @action(detail=True, methods=['delete'], url_path=rf'appended/(?P<appended_id>{UUID_PATTERN})')
    def delete_appended(self, request, pk=None, appended_id=None):
        return self._run(services.delete_appended_order, order_id=pk, appended_id=appended_id)

    @extend_schema(request=NoteCreateSerializer, responses={201: OrderSerializer}, tags=['orders'])
    @action(detail=True, methods=['post'])
    def notes(self, request, pk=None):
        serializer = NoteCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return self._run(
            services.add_note,
            status.HTTP_201_CREATED,
            order_id=pk,
            content=serializer.validated_data['content'],
            created_by=request.user.get_display_name(),
            created_by_email=request.user.email,
        )

    @extend_schema(responses={200: OrderSummarySerializer}, tags=['orders'])
    @action(detail=False, methods=['get'])
    def summary(self, request):
        """Order counts, revenue and average wait time."""
        summary = services.order_summary(branch=request.query_params.get('branch'))
        return Response(OrderSummarySerializer(summary).data)

    @extend_schema(responses={200: OrderStatsSerializer}, tags=['orders'])
    @action(detail=False, methods=['get'])
    def stats(self, request):
        """Wait-time statistics for a branch."""
        stats = services.get_stats(branch=request.query_params.get('branch'))
        return Response(OrderStatsSerializer(stats).data)
