from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsSuperAdminOrReadOnly
from apps.orders.views import UUID_PATTERN
from . import services
from .exceptions import CustomerPhotoServiceError, PhotoNotFoundError
from .serializers import (
    CustomerPhotoCreateSerializer,
    CustomerPhotoSerializer,
    CustomerPhotoUpdateSerializer,
    ReorderSerializer,
)


def error_response(exc: CustomerPhotoServiceError):
    code = status.HTTP_404_NOT_FOUND if isinstance(exc, PhotoNotFoundError) else status.HTTP_400_BAD_REQUEST
    return Response({'error': str(exc), 'code': exc.code}, status=code)


class CustomerPhotoViewSet(viewsets.ViewSet):
    """
    Hero-section customer photos.

    Anyone can read; only super admins can add, edit, reorder or delete.
    """

    permission_classes = [IsSuperAdminOrReadOnly]
    lookup_value_regex = UUID_PATTERN

    @extend_schema(responses={200: CustomerPhotoSerializer(many=True)}, tags=['customer-photos'])
    def list(self, request):
        return Response(CustomerPhotoSerializer(services.list_photos(), many=True).data)

    @extend_schema(responses={200: CustomerPhotoSerializer(many=True)}, tags=['customer-photos'])
    @action(detail=False, methods=['get'])
    def active(self, request):
        """The photos currently shown, in display order."""
        return Response(CustomerPhotoSerializer(services.list_photos(active_only=True), many=True).data)

    @extend_schema(responses={200: CustomerPhotoSerializer}, tags=['customer-photos'])
    def retrieve(self, request, pk=None):
        try:
            photo = services.get_photo(photo_id=pk)
        except CustomerPhotoServiceError as e:
            return error_response(e)
        return Response(CustomerPhotoSerializer(photo).data)

    @extend_schema(request=CustomerPhotoCreateSerializer, responses={201: CustomerPhotoSerializer}, tags=['customer-photos'])
    def create(self, request):
        serializer = CustomerPhotoCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            photo = services.create_photo(**serializer.validated_data)
        except CustomerPhotoServiceError as e:
            return error_response(e)
        return Response(CustomerPhotoSerializer(photo).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=CustomerPhotoUpdateSerializer, responses={200: CustomerPhotoSerializer}, tags=['customer-photos'])
    def update(self, request, pk=None):
        serializer = CustomerPhotoUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            photo = services.update_photo(photo_id=pk, **serializer.validated_data)
        except CustomerPhotoServiceError as e:
            return error_response(e)
        return Response(CustomerPhotoSerializer(photo).data)

    partial_update = update

    @extend_schema(request=ReorderSerializer, responses={200: CustomerPhotoSerializer(many=True)}, tags=['customer-photos'])
    @action(detail=False, methods=['put'])
    def reorder(self, request):
        """Set the display order of several photos at once; returns the full ordered list."""
        serializer = ReorderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            photos = services.reorder_photos(orders=serializer.validated_data['photos'])
        except CustomerPhotoServiceError as e:
            return error_response(e)
        return Response(CustomerPhotoSerializer(photos, many=True).data)

    @extend_schema(responses={204: None}, tags=['customer-photos'])
    def destroy(self, request, pk=None):
        try:
            services.delete_photo(photo_id=pk)
        except CustomerPhotoServiceError as e:
            return error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)
