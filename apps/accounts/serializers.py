from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password

from apps.branches.branches import Branch, VALID_BRANCH_IDS
from .models import User, UserRole


def _validate_branch_access(value):
    invalid = [b for b in value if b not in VALID_BRANCH_IDS]
    if invalid:
        raise serializers.ValidationError(f"Invalid branch ids: {', '.join(invalid)}")
    # Keep order, drop duplicates
    return list(dict.fromkeys(value))


class UserSerializer(serializers.ModelSerializer):
    """User profile as returned by login and ``me``."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'name',
            'role',
            'branch_access',
            'preferred_branch',
            'is_active',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )
    new_password = serializers.CharField(
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    new_password_confirm = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['new_password'] != attrs['new_password_confirm']:
            raise serializers.ValidationError({
                'new_password_confirm': 'Passwords do not match'
            })
        if attrs['new_password'] == attrs['current_password']:
            raise serializers.ValidationError({
                'new_password': 'New password must be different from current password'
            })
        return attrs


class UserCreateSerializer(serializers.Serializer):
    """Input for super admin creating a staff account."""

    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=UserRole.choices, default=UserRole.CREW)
    branch_access = serializers.ListField(
        child=serializers.CharField(), required=False, default=list
    )
    preferred_branch = serializers.ChoiceField(
        choices=Branch.choices, required=False, allow_null=True
    )

    def validate_branch_access(self, value):
        return _validate_branch_access(value)


class UserUpdateSerializer(serializers.Serializer):
    """Partial update of a staff account by a super admin."""

    name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=UserRole.choices, required=False)
    branch_access = serializers.ListField(
        child=serializers.CharField(), required=False
    )
    preferred_branch = serializers.ChoiceField(
        choices=Branch.choices, required=False, allow_null=True
    )
    is_active = serializers.BooleanField(required=False)
    password = serializers.CharField(
        write_only=True,
        required=False,
        validators=[validate_password],
        style={'input_type': 'password'}
    )

    def validate_branch_access(self, value):
        return _validate_branch_access(value)
