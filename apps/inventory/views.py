from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import CanAccessRequestedBranch
from apps.orders.views import UUID_PATTERN
from . import services
from .exceptions import DuplicateInventoryItemError, InventoryItemNotFoundError, InventoryServiceError
from .serializers import (
    InventoryFilterSerializer,
    InventoryItemCreateSerializer,
    InventoryItemSerializer,
    InventoryItemUpdateSerializer,
    InventoryStatsSerializer,
    QuantityAdjustSerializer,
)

ERROR_STATUS = {
    InventoryItemNotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateInventoryItemError: status.HTTP_400_BAD_REQUEST,
}


class InventoryViewSet(viewsets.ViewSet):
    """
    Inventory items per branch.

    list: filter by category, stock_status, branch
    stats: counts of in-stock, low and out-of-stock items
    quantity: adjust stock by a delta
    """

    permission_classes = [IsAuthenticated, CanAccessRequestedBranch]
    lookup_value_regex = UUID_PATTERN

    def _run(self, func, success_status=status.HTTP_200_OK, **kwargs):
        try:
            item = func(**kwargs)
        except InventoryServiceError as e:
            return Response(
                {'error': str(e)},
                status=ERROR_STATUS.get(type(e), status.HTTP_400_BAD_REQUEST)
            )
        return Response(InventoryItemSerializer(item).data, status=success_status)

    @extend_schema(parameters=[InventoryFilterSerializer], responses={200: InventoryItemSerializer(many=True)}, tags=['inventory'])
    def list(self, request):
        filter_serializer = InventoryFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        items = services.filter_items(**filter_serializer.validated_data)
        return Response(InventoryItemSerializer(items, many=True).data)

    @extend_schema(responses={200: InventoryStatsSerializer}, tags=['inventory'])
    @action(detail=False, methods=['get'])
    def stats(self, request):
        filter_serializer = InventoryFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        stats = services.inventory_stats(branch=filter_serializer.validated_data.get('branch'))
        return Response(InventoryStatsSerializer(stats).data)

    @extend_schema(responses={200: InventoryItemSerializer}, tags=['inventory'])
    def retrieve(self, request, pk=None):
        return self._run(services.get_item, item_id=pk)

    @extend_schema(request=InventoryItemCreateSerializer, responses={201: InventoryItemSerializer}, tags=['inventory'])
    def create(self, request):
        serializer = InventoryItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return self._run(
            services.create_item,
            status.HTTP_201_CREATED,
            user=request.user,
            **serializer.validated_data,
        )

    @extend_schema(request=InventoryItemUpdateSerializer, responses={200: InventoryItemSerializer}, tags=['inventory'])
    def update(self, request, pk=None):
        serializer = InventoryItemUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        return self._run(services.update_item, item_id=pk, user=request.user, **serializer.validated_data)

    partial_update = update

    @extend_schema(request=QuantityAdjustSerializer, responses={200: InventoryItemSerializer}, tags=['inventory'])
    @action(detail=True, methods=['patch'])
    def quantity(self, request, pk=None):
        """Add to or subtract from the stock; never goes below zero."""
        serializer = QuantityAdjustSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return self._run(services.adjust_quantity, item_id=pk, user=request.user, **serializer.validated_data)

    @extend_schema(responses={204: None}, tags=['inventory'])
    def destroy(self, request, pk=None):
        try:
            services.delete_item(item_id=pk)
        except InventoryItemNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
