from rest_framework import serializers

from apps.branches.serializers import BranchField
from .models import InventoryCategory, InventoryItem, StockStatus, Unit


class InventoryItemSerializer(serializers.ModelSerializer):
    stock_status = serializers.CharField(read_only=True)

    class Meta:
        model = InventoryItem
        fields = [
            'id', 'name', 'quantity', 'unit', 'category', 'low_stock_threshold',
            'notes', 'image', 'branch', 'stock_status',
            'last_updated_by', 'last_updated_by_email', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class InventoryItemCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    quantity = serializers.IntegerField(min_value=0, default=0)
    unit = serializers.ChoiceField(choices=Unit.choices)
    category = serializers.ChoiceField(choices=InventoryCategory.choices)
    low_stock_threshold = serializers.IntegerField(min_value=0, default=10)
    notes = serializers.CharField(max_length=500, required=False, allow_blank=True)
    image = serializers.CharField(max_length=500, required=False, allow_blank=True)
    branch = BranchField(required=False)

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Item name is required.')
        return value


class InventoryItemUpdateSerializer(InventoryItemCreateSerializer):
    unit = serializers.ChoiceField(choices=Unit.choices, required=False)
    category = serializers.ChoiceField(choices=InventoryCategory.choices, required=False)


class QuantityAdjustSerializer(serializers.Serializer):
    """Either a signed ``delta`` or an absolute ``new_quantity``."""

    delta = serializers.IntegerField(required=False)
    new_quantity = serializers.IntegerField(required=False, min_value=0)

    def validate(self, attrs):
        if 'delta' not in attrs and 'new_quantity' not in attrs:
            raise serializers.ValidationError('Provide delta or new_quantity.')
        return attrs


class InventoryFilterSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=InventoryCategory.choices, required=False)
    stock_status = serializers.ChoiceField(choices=StockStatus.choices, required=False)
    branch = BranchField(required=False)


class InventoryStatsSerializer(serializers.Serializer):
    total_items = serializers.IntegerField()
    in_stock = serializers.IntegerField()
    low_stock = serializers.IntegerField()
    out_of_stock = serializers.IntegerField()
