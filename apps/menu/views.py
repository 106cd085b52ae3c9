from rest_framework import viewsets, status
from rest_framework.response import Response

from apps.accounts.permissions import IsSuperAdminOrReadOnly
from .exceptions import CategoryInUseError, CategoryNotFoundError, DuplicateCategoryError
from .models import Category, MenuItem
from .serializers import (
    CategorySerializer,
    CategoryCreateSerializer,
    CategoryUpdateSerializer,
    MenuItemSerializer,
    MenuItemFilterSerializer,
)
from .services import create_category, delete_category, filter_menu_items


class CategoryViewSet(viewsets.ModelViewSet):
    """
    ViewSet for menu categories.

    Anyone can read; only super admins can create, update or delete.
    """

    queryset = Category.objects.prefetch_related('menu_items')
    serializer_class = CategorySerializer
    permission_classes = [IsSuperAdminOrReadOnly]
    lookup_value_regex = '[a-z0-9-]+'

    def create(self, request, *args, **kwargs):
        serializer = CategoryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            category = create_category(**serializer.validated_data)
        except DuplicateCategoryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(CategorySerializer(category).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        category = self.get_object()
        serializer = CategoryUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        for attr, value in serializer.validated_data.items():
            setattr(category, attr, value)
        category.save()

        return Response(CategorySerializer(category).data)

    def destroy(self, request, *args, **kwargs):
        try:
            delete_category(category_id=kwargs['pk'])
        except CategoryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except CategoryInUseError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(status=status.HTTP_204_NO_CONTENT)


class MenuItemViewSet(viewsets.ModelViewSet):
    """
    ViewSet for menu items.

    list: filter by category, is_public, is_best_seller
    create/update/destroy: super admin only
    """

    queryset = MenuItem.objects.select_related('category')
    serializer_class = MenuItemSerializer
    permission_classes = [IsSuperAdminOrReadOnly]

    def get_queryset(self):
        if self.action != 'list':
            return super().get_queryset()

        filter_serializer = MenuItemFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return filter_menu_items(**filter_serializer.validated_data)
