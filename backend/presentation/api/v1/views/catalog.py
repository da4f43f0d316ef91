"""
Catalog Views.

Materials, assembly categories and assemblies.
"""

import logging

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response
from django.db import transaction
from django.db.models import Prefetch
from django.utils import timezone

from application.services.pricing import assemblies_with_materials
from domain.shared.exceptions import EntityInUseException
from infrastructure.export.excel import build_workbook, workbook_response
from infrastructure.persistence.models import Assembly, AssemblyCategory, Material
from infrastructure.storage.documents import ASSEMBLY_DIR
from presentation.api.permissions import IsCatalogEditorOrReadOnly
from ..serializers.catalog import (
    AssemblyCategorySerializer,
    AssemblySerializer,
    MaterialSerializer,
)
from .base import BaseModelViewSet, DocumentUploadMixin, HistoryViewMixin

logger = logging.getLogger(__name__)


class MaterialViewSet(HistoryViewMixin, BaseModelViewSet):
    """
    ViewSet for materials.

    Endpoints:
    - GET /materials/ - list (?search= on name, part number, manufacturer)
    - POST /materials/ - create
    - GET/PUT/PATCH/DELETE /materials/{id}/
    - GET /materials/{id}/history/ - change history
    - GET /materials/export/ - all materials as .xlsx
    """

    queryset = Material.objects.select_related('created_by', 'updated_by')
    serializer_class = MaterialSerializer
    permission_classes = [IsCatalogEditorOrReadOnly]

    search_fields = ['name', 'part_number', 'manufacturer']
    filterset_fields = ['unit', 'manufacturer']
    ordering_fields = ['name', 'price', 'created_at']
    ordering = ['name']

    def destroy(self, request, *args, **kwargs):
        material = self.get_object()
        usage = material.assembly_lines.values('assembly').distinct().count()
        if usage:
            raise EntityInUseException(
                'Material',
                f'This material is used in {usage} assembly(ies) and cannot be deleted',
                usage_count=usage,
            )
        material.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def export(self, request):
        """Export materials to Excel."""
        materials = self.filter_queryset(self.get_queryset())
        wb = build_workbook([(
            'Materials',
            ['Name', 'Part Number', 'Manufacturer', 'Unit', 'Price', 'Created At'],
            (
                [m.name, m.part_number, m.manufacturer, m.unit, m.price,
                 timezone.localtime(m.created_at).strftime('%Y-%m-%d %H:%M')]
                for m in materials
            ),
        )])
        filename = f"materials-{timezone.localdate().isoformat()}.xlsx"
        logger.info(f"Exported {materials.count()} materials")
        return workbook_response(wb, filename)


class AssemblyCategoryViewSet(BaseModelViewSet):
    """
    ViewSet for assembly categories.

    Endpoints:
    - GET /assembly-categories/ - list with assemblies and counts
    - POST /assembly-categories/ - create
    - GET/PUT/PATCH/DELETE /assembly-categories/{id}/
    """

    queryset = AssemblyCategory.objects.prefetch_related(
        Prefetch('assemblies', queryset=Assembly.objects.order_by('name'))
    )
    serializer_class = AssemblyCategorySerializer
    permission_classes = [IsCatalogEditorOrReadOnly]

    search_fields = ['name', 'description']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def destroy(self, request, *args, **kwargs):
        category = self.get_object()
        count = category.assemblies.count()
        if count:
            raise EntityInUseException(
                'Category',
                f'Cannot delete category with {count} existing assembly(ies)',
                usage_count=count,
            )
        category.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class AssemblyViewSet(DocumentUploadMixin, BaseModelViewSet):
    """
    ViewSet for assemblies.

    Endpoints:
    - GET /assemblies/ - list (?category=, ?module=, ?search=)
    - POST /assemblies/ - create with material lines
    - GET/PUT/PATCH/DELETE /assemblies/{id}/
    - POST/DELETE /assemblies/{id}/upload/ - PDF documents
    """

    queryset = assemblies_with_materials().select_related('created_by', 'updated_by')
    serializer_class = AssemblySerializer
    permission_classes = [IsCatalogEditorOrReadOnly]
    upload_directory = ASSEMBLY_DIR

    search_fields = ['name', 'description']
    filterset_fields = ['category', 'module']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def destroy(self, request, *args, **kwargs):
        assembly = self.get_object()
        usage = assembly.template_lines.values('template').distinct().count()
        if usage:
            raise EntityInUseException(
                'Assembly',
                f'This assembly is used in {usage} template(s) and cannot be deleted',
                usage_count=usage,
            )
        with transaction.atomic():
            assembly.materials.all().delete()
            assembly.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
