from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.exceptions import TokenError
from drf_spectacular.utils import extend_schema

from .models import User
from .permissions import IsSuperAdmin
from .serializers import (
    UserLoginSerializer,
    UserSerializer,
    ChangePasswordSerializer,
    UserCreateSerializer,
    UserUpdateSerializer,
)
from .services import (
    authenticate_user,
    change_password as change_password_service,
    create_staff_user,
    update_staff_user,
    delete_staff_user,
    InvalidCredentialsError,
    InactiveAccountError,
    PasswordConfirmationError,
    DuplicateEmailError,
    SelfModificationError,
    UserNotFoundError,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


class LogoutRequestSerializer(serializers.Serializer):
    refresh = serializers.CharField(help_text="Refresh token to validate", required=False)


@extend_schema(
    responses={403: ErrorResponseSerializer},
    description="Public registration is disabled; accounts are created by a super admin.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    return Response({
        'error': 'Public registration is disabled. Please contact an administrator to create an account.'
    }, status=status.HTTP_403_FORBIDDEN)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    refresh = RefreshToken.for_user(user)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        }
    })


@extend_schema(
    request=LogoutRequestSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Logout. Tokens are stateless; the client discards them.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout(request):
    refresh_token = request.data.get('refresh')
    if refresh_token:
        try:
            RefreshToken(refresh_token)
        except TokenError:
            return Response({
                'error': 'Invalid token'
            }, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': 'Logout successful'
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=ChangePasswordSerializer,
    responses={
        200: MessageResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Change the current user's password.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_password(request):
    serializer = ChangePasswordSerializer(data=request.data, context={'request': request})
    serializer.is_valid(raise_exception=True)

    try:
        change_password_service(
            user_id=request.user.id,
            current_password=serializer.validated_data['current_password'],
            new_password=serializer.validated_data['new_password'],
        )
    except PasswordConfirmationError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'message': 'Password changed successfully'})


# =============================================================================
# User management (super admin)
# =============================================================================

@extend_schema(
    methods=['GET'],
    responses={200: UserSerializer(many=True)},
    description="List all staff accounts.",
    tags=['users'],
)
@extend_schema(
    methods=['POST'],
    request=UserCreateSerializer,
    responses={201: UserSerializer, 400: ErrorResponseSerializer},
    description="Create a staff account.",
    tags=['users'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsSuperAdmin])
def user_list(request):
    if request.method == 'GET':
        users = User.objects.all()
        role = request.query_params.get('role')
        if role:
            users = users.filter(role=role)
        return Response(UserSerializer(users, many=True).data)

    serializer = UserCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = create_staff_user(**serializer.validated_data)
    except DuplicateEmailError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


@extend_schema(
    methods=['GET'],
    responses={200: UserSerializer},
    tags=['users'],
)
@extend_schema(
    methods=['PATCH'],
    request=UserUpdateSerializer,
    responses={200: UserSerializer, 400: ErrorResponseSerializer},
    tags=['users'],
)
@extend_schema(
    methods=['DELETE'],
    responses={204: None, 400: ErrorResponseSerializer},
    tags=['users'],
)
@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsSuperAdmin])
def user_detail(request, pk):
    """Retrieve, update or delete one staff account."""
    try:
        if request.method == 'GET':
            return Response(UserSerializer(User.objects.get(pk=pk)).data)

        if request.method == 'PATCH':
            serializer = UserUpdateSerializer(data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            user = update_staff_user(
                user_id=pk,
                acting_user=request.user,
                **serializer.validated_data,
            )
            return Response(UserSerializer(user).data)

        delete_staff_user(user_id=pk, acting_user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    except (User.DoesNotExist, UserNotFoundError):
        return Response({'error': 'User not found'}, status=status.HTTP_404_NOT_FOUND)
    except SelfModificationError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
