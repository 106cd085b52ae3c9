from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .exceptions import FileTooLargeError, InvalidFileTypeError, UploadNotFoundError
from .serializers import ImageUploadSerializer, UploadResponseSerializer
from .services import save_image, delete_image


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


@extend_schema(
    request={'multipart/form-data': ImageUploadSerializer},
    responses={201: UploadResponseSerializer, 400: ErrorResponseSerializer},
    description="Upload one image (JPEG, PNG, GIF or WebP, max 5MB).",
    tags=['upload'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def upload_image(request):
    serializer = ImageUploadSerializer(data=request.data)
    if not serializer.is_valid():
        return Response({'error': 'No file uploaded'}, status=status.HTTP_400_BAD_REQUEST)

    try:
        result = save_image(serializer.validated_data['image'])
    except (InvalidFileTypeError, FileTooLargeError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(result, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={204: None, 404: ErrorResponseSerializer},
    description="Delete a previously uploaded image.",
    tags=['upload'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def delete_uploaded_image(request, filename):
    try:
        delete_image(filename)
    except UploadNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(status=status.HTTP_204_NO_CONTENT)
