"""
Serializers Package.

All API serializers for the QuickBom system.
"""

from .base import BaseModelSerializer, UserMinimalSerializer

from .users import (
    UserListSerializer,
    UserSerializer,
    RegisterSerializer,
    ChangePasswordSerializer,
    LoginSerializer,
    UserProfileSerializer,
    ProfileUpdateSerializer,
)

from .clients import ClientSerializer

from .catalog import (
    MaterialSerializer,
    MaterialMinimalSerializer,
    AssemblyCategorySerializer,
    AssemblyMinimalSerializer,
    AssemblyMaterialSerializer,
    AssemblySerializer,
)

from .bom import (
    AssemblyGroupSerializer,
    TemplateAssemblyGroupSerializer,
    GroupItemSerializer,
    SelectionSerializer,
    TemplateSelectionSerializer,
    TemplateAssemblySerializer,
    TemplateSerializer,
)

from .project import ProjectSerializer

from .timeline import (
    ProjectTimelineSerializer,
    MilestoneSerializer,
    TimelineTaskSerializer,
)


__all__ = [
    # Base
    'BaseModelSerializer',
    'UserMinimalSerializer',
    # Users
    'UserListSerializer',
    'UserSerializer',
    'RegisterSerializer',
    'ChangePasswordSerializer',
    'LoginSerializer',
    'UserProfileSerializer',
    'ProfileUpdateSerializer',
    # Clients
    'ClientSerializer',
    # Catalog
    'MaterialSerializer',
    'MaterialMinimalSerializer',
    'AssemblyCategorySerializer',
    'AssemblyMinimalSerializer',
    'AssemblyMaterialSerializer',
    'AssemblySerializer',
    # BOM
    'AssemblyGroupSerializer',
    'TemplateAssemblyGroupSerializer',
    'GroupItemSerializer',
    'SelectionSerializer',
    'TemplateSelectionSerializer',
    'TemplateAssemblySerializer',
    'TemplateSerializer',
    # Projects
    'ProjectSerializer',
    'ProjectTimelineSerializer',
    'MilestoneSerializer',
    'TimelineTaskSerializer',
]
