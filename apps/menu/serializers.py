from decimal import Decimal
from rest_framework import serializers

from .models import Category, MenuItem, Owner, category_id_validator


class CategorySerializer(serializers.ModelSerializer):
    menu_item_count = serializers.SerializerMethodField()

    class Meta:
        model = Category
        fields = ['id', 'name', 'image', 'menu_item_count', 'created_at', 'updated_at']
        read_only_fields = ['created_at', 'updated_at']

    def get_menu_item_count(self, obj) -> int:
        return obj.menu_items.count()


class CategoryCreateSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=50)
    name = serializers.CharField(max_length=50)
    image = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')

    def validate_id(self, value):
        value = value.strip().lower()
        category_id_validator(value)
        return value


class CategoryUpdateSerializer(serializers.Serializer):
    """Categories keep their id; only name and image change."""

    name = serializers.CharField(max_length=50, required=False)
    image = serializers.CharField(max_length=500, required=False, allow_blank=True)


class MenuItemSerializer(serializers.ModelSerializer):
    price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.00'),
    )
    category = serializers.PrimaryKeyRelatedField(queryset=Category.objects.all())
    category_name = serializers.CharField(source='category.name', read_only=True)
    owner = serializers.ChoiceField(choices=Owner.choices, default=Owner.JOHN)

    class Meta:
        model = MenuItem
        fields = [
            'id',
            'name',
            'price',
            'category',
            'category_name',
            'image',
            'online_image',
            'is_best_seller',
            'is_public',
            'owner',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Menu item name is required')
        return value


class MenuItemFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for menu item filtering.

    Query Parameters:
        category (str): Category id
        is_public (bool): Only items visible to online customers
        is_best_seller (bool): Only best sellers
    """

    category = serializers.CharField(required=False)
    is_public = serializers.BooleanField(required=False, allow_null=True, default=None)
    is_best_seller = serializers.BooleanField(required=False, allow_null=True, default=None)
