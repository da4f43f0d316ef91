"""
User Serializers.

Serializers for authentication and user management.
"""

from rest_framework import serializers
from django.contrib.auth import get_user_model

from infrastructure.persistence.models import UserRoleChoices
from .base import BaseModelSerializer

User = get_user_model()

MIN_PASSWORD_LENGTH = 6


class UserListSerializer(BaseModelSerializer):
    """List serializer for users."""

    full_name = serializers.CharField(source='get_full_name', read_only=True)
    project_count = serializers.SerializerMethodField()
    task_count = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id', 'username', 'email', 'name', 'full_name',
            'phone', 'employee_id', 'department', 'position',
            'role', 'status', 'last_login',
            'project_count', 'task_count',
        ]

    def get_project_count(self, obj):
        count = getattr(obj, 'project_count', None)
        return count if count is not None else obj.project_created.count()

    def get_task_count(self, obj):
        count = getattr(obj, 'task_count', None)
        return count if count is not None else obj.assigned_tasks.count()


class UserSerializer(BaseModelSerializer):
    """
    Create/update serializer for user management.

    Password is required on create and optional on update.
    """

    password = serializers.CharField(
        write_only=True,
        required=False,
        min_length=MIN_PASSWORD_LENGTH,
        style={'input_type': 'password'}
    )
    username = serializers.CharField(required=False, max_length=150)
    employee_id = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=50)

    class Meta:
        model = User
        fields = [
            'id', 'username', 'email', 'password', 'name',
            'phone', 'employee_id', 'department', 'position',
            'hire_date', 'salary',
            'role', 'status', 'is_active',
            'last_login', 'date_joined', 'updated_at',
        ]
        read_only_fields = ['id', 'last_login', 'date_joined', 'updated_at']
        extra_kwargs = {
            'email': {'validators': []},
        }

    def validate_email(self, value):
        value = value.lower()
        qs = User.objects.filter(email__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError('A user with this email already exists.')
        return value

    def validate_employee_id(self, value):
        if not value:
            return None
        qs = User.objects.filter(employee_id=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError('A user with this employee ID already exists.')
        return value

    def validate_username(self, value):
        qs = User.objects.filter(username=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError('A user with this username already exists.')
        return value

    def validate(self, attrs):
        if self.instance is None and not attrs.get('password'):
            raise serializers.ValidationError({'password': 'This field is required.'})
        return attrs

    def create(self, validated_data):
        password = validated_data.pop('password')
        return User.objects.create_user(password=password, **validated_data)

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        instance = super().update(instance, validated_data)
        if password:
            instance.set_password(password)
            instance.save(update_fields=['password'])
        return instance


class RegisterSerializer(serializers.Serializer):
    """Self-registration. Duplicate emails are rejected by the view with 409."""

    email = serializers.EmailField()
    password = serializers.CharField(
        min_length=MIN_PASSWORD_LENGTH,
        style={'input_type': 'password'}
    )
    name = serializers.CharField(required=False, allow_blank=True, max_length=200)
    role = serializers.ChoiceField(
        choices=UserRoleChoices.choices,
        required=False,
        default=UserRoleChoices.WORKER
    )


class ChangePasswordSerializer(serializers.Serializer):
    """Serializer for password change."""

    old_password = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )
    new_password = serializers.CharField(
        required=True,
        min_length=MIN_PASSWORD_LENGTH,
        style={'input_type': 'password'}
    )
    new_password_confirm = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )

    def validate_old_password(self, value):
        user = self.context['request'].user
        if not user.check_password(value):
            raise serializers.ValidationError('Current password is incorrect.')
        return value

    def validate(self, attrs):
        if attrs['new_password'] != attrs['new_password_confirm']:
            raise serializers.ValidationError({
                'new_password_confirm': 'Passwords do not match.'
            })
        return attrs


class LoginSerializer(serializers.Serializer):
    """Serializer for login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )


class UserProfileSerializer(BaseModelSerializer):
    """Serializer for user profile (self)."""

    full_name = serializers.CharField(source='get_full_name', read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'username', 'email', 'name', 'full_name',
            'phone', 'employee_id', 'position', 'department',
            'role', 'status',
            'is_active', 'is_staff', 'is_superuser',
            'date_joined', 'last_login',
        ]
        read_only_fields = fields


class ProfileUpdateSerializer(BaseModelSerializer):
    class Meta:
        model = User
        fields = ['name', 'phone', 'position', 'department']
