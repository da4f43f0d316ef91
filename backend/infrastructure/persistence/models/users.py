"""
User Models.

Custom user model for authentication and role-based authorization.
"""

from django.db import models
from django.contrib.auth.models import AbstractUser, UserManager as DjangoUserManager
from django.contrib.auth.validators import UnicodeUsernameValidator

import uuid


class UserRoleChoices(models.TextChoices):
    """Job roles. ADMIN and SUPER_ADMIN may do everything."""

    SUPER_ADMIN = 'SUPER_ADMIN', 'Super admin'
    ADMIN = 'ADMIN', 'Admin'
    PROJECT_MANAGER = 'PROJECT_MANAGER', 'Project manager'
    SITE_MANAGER = 'SITE_MANAGER', 'Site manager'
    FOREMAN = 'FOREMAN', 'Foreman'
    ENGINEER = 'ENGINEER', 'Engineer'
    WORKER = 'WORKER', 'Worker'
    CLIENT = 'CLIENT', 'Client'
    ACCOUNTANT = 'ACCOUNTANT', 'Accountant'
    ESTIMATOR = 'ESTIMATOR', 'Estimator'


class UserStatusChoices(models.TextChoices):
    ACTIVE = 'ACTIVE', 'Active'
    INACTIVE = 'INACTIVE', 'Inactive'
    SUSPENDED = 'SUSPENDED', 'Suspended'
    PENDING_VERIFICATION = 'PENDING_VERIFICATION', 'Pending verification'


ADMIN_ROLES = (UserRoleChoices.SUPER_ADMIN, UserRoleChoices.ADMIN)

CATALOG_EDITOR_ROLES = ADMIN_ROLES + (
    UserRoleChoices.PROJECT_MANAGER,
    UserRoleChoices.ESTIMATOR,
)


class UserManager(DjangoUserManager):
    """Manager that creates users by email; username falls back to the email."""

    def create_user(self, username=None, email=None, password=None, **extra_fields):
        email = self.normalize_email(email)
        return super().create_user(username or email, email, password, **extra_fields)

    def create_superuser(self, username=None, email=None, password=None, **extra_fields):
        email = self.normalize_email(email)
        extra_fields.setdefault('role', UserRoleChoices.SUPER_ADMIN)
        return super().create_superuser(username or email, email, password, **extra_fields)


class User(AbstractUser):
    """
    Custom User model.

    Extends Django's AbstractUser with employment data, a job role
    and an account status. Login is by email.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    username_validator = UnicodeUsernameValidator()

    username = models.CharField(
        max_length=150,
        unique=True,
        validators=[username_validator],
        verbose_name="Username"
    )
    email = models.EmailField(
        unique=True,
        verbose_name="Email"
    )
    name = models.CharField(
        max_length=200,
        blank=True,
        verbose_name="Full name"
    )

    # Contact info
    phone = models.CharField(
        max_length=20,
        blank=True,
        verbose_name="Phone"
    )

    # Work info
    employee_id = models.CharField(
        max_length=50,
        unique=True,
        null=True,
        blank=True,
        verbose_name="Employee ID"
    )
    position = models.CharField(
        max_length=200,
        blank=True,
        verbose_name="Position"
    )
    department = models.CharField(
        max_length=200,
        blank=True,
        verbose_name="Department"
    )
    hire_date = models.DateField(
        null=True,
        blank=True,
        verbose_name="Hire date"
    )
    salary = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name="Salary"
    )

    role = models.CharField(
        max_length=30,
        choices=UserRoleChoices.choices,
        default=UserRoleChoices.WORKER,
        db_index=True,
        verbose_name="Role"
    )
    status = models.CharField(
        max_length=30,
        choices=UserStatusChoices.choices,
        default=UserStatusChoices.ACTIVE,
        db_index=True,
        verbose_name="Status"
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name="Updated at"
    )

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['name', 'email']

    def __str__(self):
        return self.get_full_name() or self.email

    def get_full_name(self):
        return self.name or super().get_full_name()

    def get_short_name(self):
        return self.name.split(' ')[0] if self.name else self.email

    @property
    def is_admin(self) -> bool:
        return self.is_superuser or self.role in ADMIN_ROLES

    @property
    def can_edit_catalog(self) -> bool:
        return self.is_superuser or self.role in CATALOG_EDITOR_ROLES
