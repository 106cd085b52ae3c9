from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.models import User
from apps.accounts.permissions import CanAccessRequestedBranch, IsCrew, IsSuperAdmin
from apps.branches.branches import resolve_branch
from . import services
from .exceptions import DTRServiceError
from .serializers import (
    AllRecordsResponseSerializer,
    ClockSerializer,
    DTRRecordSerializer,
    DTRStatusSerializer,
    MonthlySummarySerializer,
    RecordsQuerySerializer,
    RecordsResponseSerializer,
)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class ClockResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    record = DTRRecordSerializer()


def _target_user(request, user_id):
    """The requesting user, or ``user_id`` when a super admin asks for someone else."""
    if user_id is None or user_id == request.user.id or not request.user.is_admin:
        return request.user
    return User.objects.filter(id=user_id).first()


@extend_schema(responses={200: DTRStatusSerializer}, tags=['dtr'])
@api_view(['GET'])
@permission_classes([IsCrew, CanAccessRequestedBranch])
def dtr_status(request):
    """Whether the current user is clocked in at the branch."""
    serializer = ClockSerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)

    result = services.get_status(user=request.user, branch=serializer.validated_data.get('branch'))
    return Response(DTRStatusSerializer(result).data)


def _clock(request, func, success_message, success_status=status.HTTP_200_OK):
    serializer = ClockSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        record = func(user=request.user, **serializer.validated_data)
    except DTRServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': success_message,
        'record': DTRRecordSerializer(record).data,
    }, status=success_status)


@extend_schema(request=ClockSerializer, responses={201: ClockResponseSerializer, 400: ErrorResponseSerializer}, tags=['dtr'])
@api_view(['POST'])
@permission_classes([IsCrew, CanAccessRequestedBranch])
def clock_in(request):
    return _clock(request, services.clock_in, 'Clocked in successfully', status.HTTP_201_CREATED)


@extend_schema(request=ClockSerializer, responses={200: ClockResponseSerializer, 400: ErrorResponseSerializer}, tags=['dtr'])
@api_view(['POST'])
@permission_classes([IsCrew, CanAccessRequestedBranch])
def clock_out(request):
    return _clock(request, services.clock_out, 'Clocked out successfully')


@extend_schema(parameters=[RecordsQuerySerializer], responses={200: RecordsResponseSerializer}, tags=['dtr'])
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def records(request):
    """Paginated records of the current user (or any user, for super admins)."""
    query = RecordsQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    params = query.validated_data

    user = _target_user(request, params.get('user_id'))
    if user is None:
        return Response({'error': 'User not found'}, status=status.HTTP_404_NOT_FOUND)

    queryset = services.filter_records(
        user=user,
        branch=params.get('branch'),
        date_from=params.get('start_date'),
        date_to=params.get('end_date'),
    )
    page, pagination = services.paginate(queryset, page=params['page'], limit=params['limit'])

    return Response(RecordsResponseSerializer({
        'records': page,
        'pagination': pagination,
        'summary': {
            'total_records': pagination['total'],
            'total_hours': services.total_hours(page),
        },
    }).data)


@extend_schema(responses={200: MonthlySummarySerializer}, tags=['dtr'])
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def monthly_summary(request, year, month):
    if not 1 <= month <= 12:
        return Response({'error': 'Month must be between 1 and 12'}, status=status.HTTP_400_BAD_REQUEST)

    query = RecordsQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    user = _target_user(request, query.validated_data.get('user_id'))
    if user is None:
        return Response({'error': 'User not found'}, status=status.HTTP_404_NOT_FOUND)

    summary = services.monthly_summary(user=user, year=year, month=month)
    return Response(MonthlySummarySerializer(summary).data)


@extend_schema(parameters=[RecordsQuerySerializer], responses={200: AllRecordsResponseSerializer}, tags=['dtr'])
@api_view(['GET'])
@permission_classes([IsSuperAdmin])
def all_records(request):
    """All crew records at a branch with per-user totals."""
    query = RecordsQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    params = query.validated_data

    queryset = services.filter_records(
        branch=resolve_branch(params.get('branch')),
        date_from=params.get('start_date'),
        date_to=params.get('end_date'),
    )
    page, pagination = services.paginate(queryset, page=params['page'], limit=params['limit'])

    return Response(AllRecordsResponseSerializer({
        'records': page,
        'pagination': pagination,
        'user_stats': services.user_stats(page),
    }).data)
