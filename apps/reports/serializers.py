"""
Serializers for the reports app.

Input serializers validate query parameters and the daily summary
submission; response serializers document and format each report.
"""

from django.utils import timezone
from rest_framework import serializers

from apps.branches.serializers import BranchField
from .models import DailyReportValidation


# =============================================================================
# Input Serializers
# =============================================================================

class DayQuerySerializer(serializers.Serializer):
    """
    Query Parameters:
        date (date): Report day, defaults to today
        branch (str): Branch id, omitted for every branch
    """

    date = serializers.DateField(required=False)
    branch = BranchField(required=False)

    def validate(self, attrs):
        attrs.setdefault('date', timezone.localdate())
        return attrs


class PeriodQuerySerializer(serializers.Serializer):
    """
    Query Parameters:
        start_date (date): Start of the range
        end_date (date): End of the range, defaults to start_date
        branch (str): Branch id
    """

    start_date = serializers.DateField()
    end_date = serializers.DateField(required=False)
    branch = BranchField(required=False)

    def validate(self, attrs):
        attrs.setdefault('end_date', attrs['start_date'])
        if attrs['start_date'] > attrs['end_date']:
            raise serializers.ValidationError('start_date must be before end_date.')
        return attrs


class MonthQuerySerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    month = serializers.IntegerField(min_value=1, max_value=12)
    branch = BranchField(required=False)


class SummaryItemSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    quantity = serializers.IntegerField(min_value=1)


class DailySummarySubmitSerializer(serializers.Serializer):
    """Counted takings of a day: the sold items plus the cash and GCash collected."""

    date = serializers.DateField()
    branch = BranchField(required=False)
    items = SummaryItemSerializer(many=True, allow_empty=False)
    cash_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    gcash_amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)


# =============================================================================
# Response Serializers
# =============================================================================

MONEY = {'max_digits': 12, 'decimal_places': 2}


class DailySalesSerializer(serializers.Serializer):
    date = serializers.DateField()
    branch = serializers.CharField(allow_null=True)
    cash = serializers.DecimalField(**MONEY)
    gcash = serializers.DecimalField(**MONEY)
    gross_sales = serializers.DecimalField(**MONEY)
    paid_count = serializers.IntegerField()
    withdrawals = serializers.DecimalField(**MONEY)
    purchases = serializers.DecimalField(**MONEY)
    total_expenses = serializers.DecimalField(**MONEY)
    net = serializers.DecimalField(**MONEY)


class OwnerRowSerializer(serializers.Serializer):
    owner = serializers.CharField()
    sales = serializers.DecimalField(**MONEY)
    expenses = serializers.DecimalField(**MONEY)
    net = serializers.DecimalField(**MONEY)


class OwnerStatsSerializer(serializers.Serializer):
    period_start = serializers.DateField()
    period_end = serializers.DateField()
    branch = serializers.CharField(allow_null=True)
    owners = OwnerRowSerializer(many=True)
    total_sales = serializers.DecimalField(**MONEY)
    total_expenses = serializers.DecimalField(**MONEY)
    net = serializers.DecimalField(**MONEY)


class DayRowSerializer(serializers.Serializer):
    date = serializers.DateField()
    gross = serializers.DecimalField(**MONEY)
    expenses = serializers.DecimalField(**MONEY)
    net = serializers.DecimalField(**MONEY)


class MonthlySalesSerializer(serializers.Serializer):
    year = serializers.IntegerField()
    month = serializers.IntegerField()
    branch = serializers.CharField(allow_null=True)
    days = DayRowSerializer(many=True)
    total_gross = serializers.DecimalField(**MONEY)
    total_expenses = serializers.DecimalField(**MONEY)
    net = serializers.DecimalField(**MONEY)


class DailyReportValidationSerializer(serializers.ModelSerializer):
    class Meta:
        model = DailyReportValidation
        fields = ['date', 'branch', 'is_validated', 'validated_at', 'validated_by_name', 'validated_by_email']
        read_only_fields = fields


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
