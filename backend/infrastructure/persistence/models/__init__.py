"""
Persistence Models Package.

All Django ORM models for the QuickBom system.
"""

# Base mixins
from .base import (
    TimeStampedMixin,
    AuditMixin,
    BaseModel,
    BaseModelWithHistory,
)

# User models
from .users import (
    User,
    UserRoleChoices,
    UserStatusChoices,
    ADMIN_ROLES,
    CATALOG_EDITOR_ROLES,
)

# Client models
from .clients import (
    Client,
    ClientTypeChoices,
    ClientCategoryChoices,
    ClientStatusChoices,
)

# Catalog models
from .catalog import (
    Material,
    AssemblyCategory,
    Assembly,
    AssemblyMaterial,
    AssemblyModuleChoices,
)

# BOM models
from .bom import (
    GroupTypeChoices,
    AssemblyGroup,
    AssemblyGroupItem,
    Template,
    TemplateAssembly,
    TemplateAssemblyGroup,
    TemplateAssemblyGroupItem,
)

# Project models
from .project import (
    Project,
    ProjectTimeline,
    Milestone,
    TimelineTask,
    ProjectStatusChoices,
    ProjectTypeChoices,
    PriorityChoices,
    TimelineStatusChoices,
    MilestoneStatusChoices,
    TaskStatusChoices,
    TaskTypeChoices,
)


__all__ = [
    # Base
    'TimeStampedMixin',
    'AuditMixin',
    'BaseModel',
    'BaseModelWithHistory',
    # Users
    'User',
    'UserRoleChoices',
    'UserStatusChoices',
    'ADMIN_ROLES',
    'CATALOG_EDITOR_ROLES',
    # Clients
    'Client',
    'ClientTypeChoices',
    'ClientCategoryChoices',
    'ClientStatusChoices',
    # Catalog
    'Material',
    'AssemblyCategory',
    'Assembly',
    'AssemblyMaterial',
    'AssemblyModuleChoices',
    # BOM
    'GroupTypeChoices',
    'AssemblyGroup',
    'AssemblyGroupItem',
    'Template',
    'TemplateAssembly',
    'TemplateAssemblyGroup',
    'TemplateAssemblyGroupItem',
    # Project
    'Project',
    'ProjectTimeline',
    'Milestone',
    'TimelineTask',
    'ProjectStatusChoices',
    'ProjectTypeChoices',
    'PriorityChoices',
    'TimelineStatusChoices',
    'MilestoneStatusChoices',
    'TaskStatusChoices',
    'TaskTypeChoices',
]
