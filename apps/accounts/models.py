from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid

from apps.branches.branches import Branch, VALID_BRANCH_IDS


class UserRole(models.TextChoices):
    SUPER_ADMIN = 'super_admin', 'Super Admin'
    ORDER_TAKER = 'order_taker', 'Order Taker'
    CREW = 'crew', 'Crew'
    ORDER_TAKER_CREW = 'order_taker_crew', 'Order Taker + Crew'


ORDER_TAKER_ROLES = (UserRole.ORDER_TAKER, UserRole.ORDER_TAKER_CREW)
CREW_ROLES = (UserRole.CREW, UserRole.ORDER_TAKER_CREW)


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', UserRole.SUPER_ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Shop staff account, logging in with email."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    name = models.CharField(max_length=100, blank=True)
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.CREW,
    )

    # Empty list means every branch
    branch_access = models.JSONField(default=list, blank=True)
    preferred_branch = models.CharField(
        max_length=20,
        choices=Branch.choices,
        null=True,
        blank=True,
    )

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['email'], name='users_email_idx'),
            models.Index(fields=['role'], name='users_role_idx'),
        ]

    def __str__(self):
        return self.email

    def get_display_name(self):
        """Return name or email prefix."""
        return self.name or self.email.split('@')[0]

    @property
    def is_admin(self):
        return self.role == UserRole.SUPER_ADMIN

    @property
    def is_order_taker(self):
        return self.role in ORDER_TAKER_ROLES

    @property
    def is_crew(self):
        return self.role in CREW_ROLES

    def can_access_branch(self, branch_id):
        if branch_id not in VALID_BRANCH_IDS:
            return False
        if self.is_admin or not self.branch_access:
            return True
        return branch_id in self.branch_access
