"""
Role-based permissions.
"""

from rest_framework.permissions import BasePermission, SAFE_METHODS

from infrastructure.persistence.models import ADMIN_ROLES, CATALOG_EDITOR_ROLES


class RolePermission(BasePermission):
    """
    Authenticated access limited by user role.

    Admins pass everything. Otherwise `read_roles` applies to safe methods
    and `write_roles` to the rest; None means any authenticated user.
    """

    read_roles = None
    write_roles = None

    message = 'You do not have permission to perform this action.'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_admin:
            return True

        roles = self.read_roles if request.method in SAFE_METHODS else self.write_roles
        return roles is None or user.role in roles


class IsCatalogEditorOrReadOnly(RolePermission):
    """Catalogue data: everyone reads, editors write."""

    write_roles = CATALOG_EDITOR_ROLES


class IsAdminRole(RolePermission):
    read_roles = ADMIN_ROLES
    write_roles = ADMIN_ROLES
