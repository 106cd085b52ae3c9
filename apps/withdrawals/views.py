from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import CanAccessRequestedBranch
from apps.orders.views import UUID_PATTERN
from . import services
from .exceptions import FutureDateError, WithdrawalNotFoundError
from .models import Withdrawal
from .serializers import (
    WithdrawalCreateSerializer,
    WithdrawalFilterSerializer,
    WithdrawalSerializer,
    WithdrawalTotalsSerializer,
    WithdrawalUpdateSerializer,
)


class WithdrawalViewSet(viewsets.ViewSet):
    """
    Cash withdrawals and purchases.

    list: filter by type, payer, search text, branch, date range
    totals: aggregate totals for the same filters
    """

    permission_classes = [IsAuthenticated, CanAccessRequestedBranch]
    lookup_value_regex = UUID_PATTERN

    def _filtered(self, request):
        filter_serializer = WithdrawalFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        queryset = services.filter_withdrawals(
            type=params.get('type'),
            charged_to=params.get('charged_to'),
            search=params.get('search'),
            branch=params.get('branch'),
            date_from=params.get('start_date'),
            date_to=params.get('end_date'),
        )
        return queryset, params

    @extend_schema(parameters=[WithdrawalFilterSerializer], responses={200: WithdrawalSerializer(many=True)}, tags=['withdrawals'])
    def list(self, request):
        queryset, params = self._filtered(request)

        prefix = '-' if params['sort_order'] == 'desc' else ''
        queryset = queryset.order_by(f"{prefix}{params['sort_by']}")
        if params.get('limit'):
            queryset = queryset[:params['limit']]

        return Response(WithdrawalSerializer(queryset, many=True).data)

    @extend_schema(parameters=[WithdrawalFilterSerializer], responses={200: WithdrawalTotalsSerializer}, tags=['withdrawals'])
    @action(detail=False, methods=['get'])
    def totals(self, request):
        """Totals by type and per owner; records charged to all count half for each."""
        queryset, _ = self._filtered(request)
        return Response(WithdrawalTotalsSerializer(services.withdrawal_totals(queryset)).data)

    @extend_schema(request=WithdrawalCreateSerializer, responses={201: WithdrawalSerializer}, tags=['withdrawals'])
    def create(self, request):
        serializer = WithdrawalCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            withdrawal = services.create_withdrawal(created_by=request.user, **serializer.validated_data)
        except FutureDateError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(WithdrawalSerializer(withdrawal).data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: WithdrawalSerializer}, tags=['withdrawals'])
    def retrieve(self, request, pk=None):
        try:
            withdrawal = Withdrawal.objects.get(id=pk)
        except Withdrawal.DoesNotExist:
            return Response({'error': 'Withdrawal not found'}, status=status.HTTP_404_NOT_FOUND)
        return Response(WithdrawalSerializer(withdrawal).data)

    @extend_schema(request=WithdrawalUpdateSerializer, responses={200: WithdrawalSerializer}, tags=['withdrawals'])
    def partial_update(self, request, pk=None):
        serializer = WithdrawalUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            withdrawal = services.update_withdrawal(withdrawal_id=pk, **serializer.validated_data)
        except WithdrawalNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except FutureDateError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(WithdrawalSerializer(withdrawal).data)

    update = partial_update

    @extend_schema(responses={204: None}, tags=['withdrawals'])
    def destroy(self, request, pk=None):
        try:
            services.delete_withdrawal(withdrawal_id=pk)
        except WithdrawalNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
