from rest_framework import serializers

from apps.accounts.models import User
from apps.branches.serializers import BranchField
from .models import DTRRecord


class DTRUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'role']
        read_only_fields = fields


class DTRRecordSerializer(serializers.ModelSerializer):
    user = DTRUserSerializer(read_only=True)
    work_duration = serializers.DecimalField(max_digits=8, decimal_places=2, read_only=True, allow_null=True)

    class Meta:
        model = DTRRecord
        fields = [
            'id', 'user', 'branch', 'clock_in_time', 'clock_out_time', 'date',
            'status', 'notes', 'work_duration', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class ClockSerializer(serializers.Serializer):
    branch = BranchField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True, default='', max_length=500)


class DTRStatusSerializer(serializers.Serializer):
    is_clocked_in = serializers.BooleanField()
    active_record = DTRRecordSerializer(allow_null=True)


class RecordsQuerySerializer(serializers.Serializer):
    """
    Query parameters for record listings.

    ``user_id`` is honoured for super admins only.
    """

    user_id = serializers.UUIDField(required=False)
    branch = BranchField(required=False)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=500, default=50)


class PaginationSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    page = serializers.IntegerField()
    limit = serializers.IntegerField()
    pages = serializers.IntegerField()


class RecordsSummarySerializer(serializers.Serializer):
    total_records = serializers.IntegerField()
    total_hours = serializers.DecimalField(max_digits=10, decimal_places=2)


class RecordsResponseSerializer(serializers.Serializer):
    records = DTRRecordSerializer(many=True)
    pagination = PaginationSerializer()
    summary = RecordsSummarySerializer()


class MonthlySummarySerializer(serializers.Serializer):
    records = DTRRecordSerializer(many=True)
    total_days = serializers.IntegerField()
    total_hours = serializers.DecimalField(max_digits=10, decimal_places=2)
    year = serializers.IntegerField()
    month = serializers.IntegerField()


class UserStatsSerializer(serializers.Serializer):
    user = DTRUserSerializer()
    total_days = serializers.IntegerField()
    total_hours = serializers.DecimalField(max_digits=10, decimal_places=2)


class AllRecordsResponseSerializer(serializers.Serializer):
    records = DTRRecordSerializer(many=True)
    pagination = PaginationSerializer()
    user_stats = UserStatsSerializer(many=True)
