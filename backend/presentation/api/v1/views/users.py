"""
User Views.

API views for authentication and user management.
"""

import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from django.conf import settings
from django.contrib.auth import authenticate, get_user_model
from django.db.models import Count
from django.utils import timezone

from infrastructure.persistence.models import UserStatusChoices
from presentation.api.permissions import IsAdminRole
from ..serializers.users import (
    UserListSerializer,
    UserSerializer,
    UserProfileSerializer,
    ProfileUpdateSerializer,
    ChangePasswordSerializer,
    LoginSerializer,
    RegisterSerializer,
)
from .base import BaseModelViewSet

User = get_user_model()

logger = logging.getLogger(__name__)


class AuthViewSet(viewsets.GenericViewSet):
    """
    ViewSet for authentication.

    Endpoints:
    - POST /auth/login/ - login, get JWT tokens and the auth cookie
    - POST /auth/register/ - create an account
    - POST /auth/logout/ - logout (blacklist refresh token, drop cookie)
    - POST /auth/refresh/ - refresh access token
    - GET /auth/me/ - get current user profile
    - PUT /auth/update-profile/ - update own profile
    - POST /auth/change-password/ - change password
    """

    permission_classes = [AllowAny]

    @action(detail=False, methods=['post'], permission_classes=[AllowAny])
    def login(self, request):
        """Login and get JWT tokens."""
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        user = authenticate(
            request=request,
            email=serializer.validated_data['email'].lower(),
            password=serializer.validated_data['password'],
        )
        if user is None or user.status != UserStatusChoices.ACTIVE:
            logger.warning(f"Failed login for {serializer.validated_data['email']} from {self._get_client_ip(request)}")
            return Response(
                {'error': 'Invalid credentials'},
                status=status.HTTP_401_UNAUTHORIZED
            )

        refresh = RefreshToken.for_user(user)
        access = str(refresh.access_token)

        user.last_login = timezone.now()
        user.save(update_fields=['last_login'])

        response = Response({
            'message': 'Login successful',
            'user': {
                'id': str(user.id),
                'email': user.email,
                'name': user.name,
                'role': user.role,
            },
            'token': access,
            'refresh': str(refresh),
        })
        response.set_cookie(
            settings.AUTH_COOKIE_NAME,
            access,
            max_age=settings.AUTH_COOKIE_MAX_AGE,
            httponly=True,
            secure=settings.AUTH_COOKIE_SECURE,
            samesite='Lax',
        )
        return response

    @action(detail=False, methods=['post'], permission_classes=[AllowAny])
    def register(self, request):
        """Create an account."""
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        email = data['email'].lower()
        if User.objects.filter(email__iexact=email).exists():
            return Response(
                {'error': 'User with this email already exists'},
                status=status.HTTP_409_CONFLICT
            )

        user = User.objects.create_user(
            email=email,
            password=data['password'],
            name=data.get('name', ''),
            role=data['role'],
        )
        logger.info(f"Registered user {user.email} ({user.role})")

        return Response(
            {
                'message': 'User created successfully',
                'user': UserProfileSerializer(user).data,
            },
            status=status.HTTP_201_CREATED
        )

    @action(detail=False, methods=['post'], permission_classes=[AllowAny])
    def refresh(self, request):
        """Refresh access token."""
        serializer = TokenRefreshSerializer(data=request.data)

        try:
            serializer.is_valid(raise_exception=True)
        except (TokenError, InvalidToken) as e:
            return Response(
                {"code": "token_not_valid", "detail": str(e)},
                status=status.HTTP_401_UNAUTHORIZED
            )

        return Response(serializer.validated_data, status=status.HTTP_200_OK)

    @action(detail=False, methods=['post'], permission_classes=[IsAuthenticated])
    def logout(self, request):
        """Logout, blacklist refresh token and delete the auth cookie."""
        refresh_token = request.data.get('refresh')
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError as e:
                return Response(
                    {'error': str(e)},
                    status=status.HTTP_400_BAD_REQUEST
                )

        response = Response({'message': 'Logout successful'})
        response.delete_cookie(settings.AUTH_COOKIE_NAME)
        return response

    @action(detail=False, methods=['get'], permission_classes=[IsAuthenticated])
    def me(self, request):
        """Get current user profile."""
        serializer = UserProfileSerializer(request.user)
        return Response(serializer.data)

    @action(detail=False, methods=['put'], permission_classes=[IsAuthenticated], url_path='update-profile')
    def update_profile(self, request):
        """Update current user profile."""
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)

        if serializer.is_valid():
            serializer.save()
            return Response(UserProfileSerializer(request.user).data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    @action(detail=False, methods=['post'], permission_classes=[IsAuthenticated], url_path='change-password')
    def change_password(self, request):
        """Change current user password."""
        serializer = ChangePasswordSerializer(
            data=request.data,
            context={'request': request}
        )

        if serializer.is_valid():
            request.user.set_password(serializer.validated_data['new_password'])
            request.user.save()
            return Response({'message': 'Password changed successfully'})
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    def _get_client_ip(self, request):
        """Get client IP address from request."""
        x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
        if x_forwarded_for:
            ip = x_forwarded_for.split(',')[0]
        else:
            ip = request.META.get('REMOTE_ADDR')
        return ip


class UserViewSet(BaseModelViewSet):
    """
    ViewSet for user management (admins only).

    Endpoints:
    - GET /users/ - list users with project and task counts
    - POST /users/ - create user
    - GET /users/{id}/ - get user details
    - PUT/PATCH /users/{id}/ - update user, password optional
    - DELETE /users/{id}/ - delete user without projects or tasks
    """

    queryset = User.objects.annotate(
        project_count=Count('project_created', distinct=True),
        task_count=Count('assigned_tasks', distinct=True),
    )
    permission_classes = [IsAdminRole]

    serializer_classes = {
        'list': UserListSerializer,
        'default': UserSerializer,
    }

    search_fields = ['name', 'email', 'employee_id']
    filterset_fields = ['role', 'status', 'department']
    ordering_fields = ['name', 'email', 'date_joined', 'last_login']
    ordering = ['name', 'email']

    def perform_create(self, serializer):
        """User has no created_by/updated_by."""
        serializer.save()

    def perform_update(self, serializer):
        serializer.save()

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        project_count = user.project_created.count()
        task_count = user.assigned_tasks.count()

        if project_count or task_count:
            return Response(
                {
                    'error': (
                        f'Cannot delete user: user has created {project_count} project(s) '
                        f'and is assigned to {task_count} task(s)'
                    ),
                    'project_count': project_count,
                    'task_count': task_count,
                },
                status=status.HTTP_400_BAD_REQUEST
            )

        user.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
