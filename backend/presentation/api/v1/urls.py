"""
API v1 URL Configuration.

All API endpoints for version 1.
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views.users import AuthViewSet, UserViewSet
from .views.clients import ClientViewSet
from .views.catalog import (
    AssemblyCategoryViewSet,
    AssemblyViewSet,
    MaterialViewSet,
)
from .views.bom import (
    AssemblyGroupViewSet,
    TemplateGroupViewSet,
    TemplateViewSet,
)
from .views.project import ProjectViewSet
from .views.timeline import TimelineViewSet
from .views.upload import UploadViewSet
from .views.whatsapp import WhatsAppViewSet
from .views.dashboard import DashboardViewSet

# Create router
router = DefaultRouter()

# Auth & Users
router.register(r'auth', AuthViewSet, basename='auth')
router.register(r'users', UserViewSet, basename='users')

# Clients
router.register(r'clients', ClientViewSet, basename='clients')

# Catalog
router.register(r'materials', MaterialViewSet, basename='materials')
router.register(r'assembly-categories', AssemblyCategoryViewSet, basename='assembly-categories')
router.register(r'assemblies', AssemblyViewSet, basename='assemblies')

# BOM
router.register(r'assembly-groups', AssemblyGroupViewSet, basename='assembly-groups')
router.register(r'template-groups', TemplateGroupViewSet, basename='template-groups')
router.register(r'templates', TemplateViewSet, basename='templates')

# Projects
router.register(r'projects', ProjectViewSet, basename='projects')
router.register(r'timelines', TimelineViewSet, basename='timelines')

# Files & notifications
router.register(r'upload', UploadViewSet, basename='upload')
router.register(r'whatsapp', WhatsAppViewSet, basename='whatsapp')

# Dashboard
router.register(r'dashboard', DashboardViewSet, basename='dashboard')

app_name = 'api_v1'

urlpatterns = [
    path('', include(router.urls)),
]
