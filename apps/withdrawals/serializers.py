from rest_framework import serializers

from apps.branches.serializers import BranchField
from .models import ChargedTo, ExpensePaymentMethod, Withdrawal, WithdrawalType


class WithdrawalSerializer(serializers.ModelSerializer):
    """Read serializer for withdrawals and purchases."""

    class Meta:
        model = Withdrawal
        fields = [
            'id', 'type', 'amount', 'description', 'charged_to', 'payment_method',
            'branch', 'created_by_name', 'created_by_email', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class WithdrawalCreateSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=WithdrawalType.choices)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0.01)
    description = serializers.CharField(max_length=500)
    charged_to = serializers.ChoiceField(choices=ChargedTo.choices, default=ChargedTo.JOHN)
    payment_method = serializers.ChoiceField(
        choices=ExpensePaymentMethod.choices,
        required=False,
        allow_null=True,
    )
    branch = BranchField(required=False)
    created_at = serializers.DateTimeField(required=False)

    def validate_description(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Description is required.')
        return value


class WithdrawalUpdateSerializer(WithdrawalCreateSerializer):
    charged_to = serializers.ChoiceField(choices=ChargedTo.choices, required=False)


class WithdrawalFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for withdrawal listing.

    Query Parameters:
        type (str): withdrawal or purchase
        charged_to (str): john, elwin or all
        search (str): Matches description or creator name
        branch (str): Branch id
        start_date / end_date (date): Inclusive date range
        limit (int): Maximum number of records
        sort_by (str): created_at or amount
        sort_order (str): asc or desc
    """

    type = serializers.ChoiceField(choices=WithdrawalType.choices, required=False)
    charged_to = serializers.ChoiceField(choices=ChargedTo.choices, required=False)
    search = serializers.CharField(required=False)
    branch = BranchField(required=False)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=1000)
    sort_by = serializers.ChoiceField(choices=['created_at', 'amount'], default='created_at')
    sort_order = serializers.ChoiceField(choices=['asc', 'desc'], default='desc')

    def validate(self, attrs):
        start, end = attrs.get('start_date'), attrs.get('end_date')
        if start and end and start > end:
            raise serializers.ValidationError('start_date must be before end_date.')
        return attrs


class WithdrawalTotalsSerializer(serializers.Serializer):
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_withdrawals = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_purchases = serializers.DecimalField(max_digits=12, decimal_places=2)
    john = serializers.DecimalField(max_digits=12, decimal_places=2)
    elwin = serializers.DecimalField(max_digits=12, decimal_places=2)
    count = serializers.IntegerField()
