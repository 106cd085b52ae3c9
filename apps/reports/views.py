from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import CanAccessRequestedBranch, IsSuperAdmin
from .exceptions import SummaryMismatchError
from .reports import SalesReports
from .serializers import (
    # Input serializers
    DailySummarySubmitSerializer,
    DayQuerySerializer,
    MonthQuerySerializer,
    PeriodQuerySerializer,
    # Response serializers
    DailyReportValidationSerializer,
    DailySalesSerializer,
    ErrorSerializer,
    MonthlySalesSerializer,
    OwnerStatsSerializer,
)
from .services import get_validation, validate_daily_summary


@extend_schema(
    parameters=[DayQuerySerializer],
    responses={200: DailySalesSerializer},
    description="Takings of one day by payment method, with the day's expenses and net.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, CanAccessRequestedBranch])
def daily_sales(request):
    query_serializer = DayQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = SalesReports.daily_sales(params['date'], branch=params.get('branch'))
    return Response(DailySalesSerializer(data).data)


@extend_schema(
    parameters=[PeriodQuerySerializer],
    responses={200: OwnerStatsSerializer},
    description="Sales and expenses attributed to each owner over a date range.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsSuperAdmin])
def owner_stats(request):
    query_serializer = PeriodQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = SalesReports.owner_stats(params['start_date'], params['end_date'], branch=params.get('branch'))
    return Response(OwnerStatsSerializer(data).data)


@extend_schema(
    parameters=[MonthQuerySerializer],
    responses={200: MonthlySalesSerializer},
    description="Per-day gross sales, expenses and net for a month.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsSuperAdmin])
def monthly_sales(request):
    query_serializer = MonthQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = SalesReports.monthly_sales(params['year'], params['month'], branch=params.get('branch'))
    return Response(MonthlySalesSerializer(data).data)


@extend_schema(
    parameters=[DayQuerySerializer],
    responses={200: DailyReportValidationSerializer},
    description="Whether a day's report has been validated.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, CanAccessRequestedBranch])
def daily_summary_status(request):
    query_serializer = DayQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    validation = get_validation(date=params['date'], branch=params.get('branch'))
    return Response(DailyReportValidationSerializer(validation).data)


@extend_schema(
    request=DailySummarySubmitSerializer,
    responses={200: DailyReportValidationSerializer, 400: ErrorSerializer},
    description="Submit the counted takings of a day; cash + GCash must equal the items total.",
    tags=['reports'],
)
@api_view(['POST'])
@permission_classes([IsSuperAdmin])
def validate_daily_summary_view(request):
    serializer = DailySummarySubmitSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        validation = validate_daily_summary(user=request.user, **serializer.validated_data)
    except SummaryMismatchError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(DailyReportValidationSerializer(validation).data)
