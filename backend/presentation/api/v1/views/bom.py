"""
BOM Views.

Assembly groups, templates, template groups and selection checks.
"""

import logging

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django.db import transaction
from django.utils import timezone

from application.services.pricing import bill_of_quantities, templates_with_assemblies
from application.services.selection import (
    assembly_groups_with_items,
    is_uuid,
    template_groups_with_items,
    validate_selection,
    validate_template_selection,
)
from domain.shared.exceptions import EntityInUseException
from infrastructure.export.excel import build_workbook, workbook_response
from infrastructure.storage.documents import TEMPLATE_DIR
from presentation.api.permissions import IsCatalogEditorOrReadOnly
from ..serializers.bom import (
    AssemblyGroupSerializer,
    GroupItemQuantitySerializer,
    GroupItemSerializer,
    SelectionSerializer,
    TemplateAssemblyGroupSerializer,
    TemplateSelectionSerializer,
    TemplateSerializer,
)
from .base import BaseModelViewSet, DocumentUploadMixin

logger = logging.getLogger(__name__)


def boq_workbook(boq: dict):
    """Two sheets: per-assembly lines and aggregated materials."""
    return build_workbook([
        (
            'Assemblies',
            ['Assembly', 'Quantity', 'Unit Cost', 'Total'],
            [[a['name'], a['quantity'], a['unit_cost'], a['total']] for a in boq['assemblies']],
        ),
        (
            'Materials',
            ['Material', 'Part Number', 'Unit', 'Unit Price', 'Quantity', 'Total'],
            [
                [m['name'], m['part_number'], m['unit'], m['unit_price'], m['quantity'], m['total']]
                for m in boq['materials']
            ] + [['TOTAL', '', '', '', '', boq['total_price']]],
        ),
    ])


def boq_filename(name: str) -> str:
    slug = ''.join(c if c.isalnum() else '-' for c in name).strip('-').lower()
    return f"boq-{slug or 'template'}-{timezone.localdate().isoformat()}.xlsx"


class GroupViewSetMixin:
    """Item quantity edits and delete summary shared by group viewsets."""

    def get_permissions(self):
        if self.action == 'validate_selection':
            return [IsAuthenticated()]
        return super().get_permissions()

    def destroy(self, request, *args, **kwargs):
        group = self.get_object()
        with transaction.atomic():
            items_removed = group.items.count()
            group.delete()
        return Response({
            'message': 'Assembly group deleted successfully',
            'items_removed': items_removed,
        })

    @action(detail=True, methods=['patch'], url_path=r'items/(?P<assembly_id>[^/.]+)')
    def update_item(self, request, pk=None, assembly_id=None):
        """Change the quantity of one item."""
        group = self.get_object()
        serializer = GroupItemQuantitySerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': 'Quantity must be at least 1', 'details': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )

        item = None
        if is_uuid(assembly_id):
            item = group.items.filter(assembly_id=assembly_id).select_related('assembly').first()
        if item is None:
            return Response(
                {'error': 'Item not found in group'},
                status=status.HTTP_404_NOT_FOUND
            )

        item.quantity = serializer.validated_data['quantity']
        item.save(update_fields=['quantity'])
        return Response(GroupItemSerializer(item).data)


class AssemblyGroupViewSet(GroupViewSetMixin, BaseModelViewSet):
    """
    ViewSet for assembly groups.

    Endpoints:
    - GET /assembly-groups/ - list (?category_id=)
    - POST /assembly-groups/ - create with items
    - GET/PUT/DELETE /assembly-groups/{id}/
    - PATCH /assembly-groups/{id}/items/{assembly_id}/ - item quantity
    - POST /assembly-groups/validate-selection/ - check a selection
    """

    serializer_class = AssemblyGroupSerializer
    permission_classes = [IsCatalogEditorOrReadOnly]

    search_fields = ['name', 'description']
    filterset_fields = ['group_type', 'category']
    ordering = ['category__name', 'sort_order']

    def get_queryset(self):
        queryset = assembly_groups_with_items()
        category_id = self.request.query_params.get('category_id')
        if category_id:
            queryset = queryset.filter(category_id=category_id) if is_uuid(category_id) else queryset.none()
        return queryset

    @action(detail=False, methods=['post'], url_path='validate-selection')
    def validate_selection(self, request):
        """Check the groups named in a selection and price it."""
        serializer = SelectionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = validate_selection(serializer.validated_data['selections'])
        return Response(result.to_dict())


class TemplateGroupViewSet(GroupViewSetMixin, BaseModelViewSet):
    """
    ViewSet for per-template assembly groups.

    Endpoints:
    - GET /template-groups/ - list (?template_id=)
    - POST /template-groups/ - create
    - GET/PUT/DELETE /template-groups/{id}/
    - PATCH /template-groups/{id}/items/{assembly_id}/
    """

    serializer_class = TemplateAssemblyGroupSerializer
    permission_classes = [IsCatalogEditorOrReadOnly]

    search_fields = ['name', 'description']
    filterset_fields = ['group_type', 'category', 'template']
    ordering = ['category__name', 'sort_order']

    def get_queryset(self):
        queryset = template_groups_with_items()
        template_id = self.request.query_params.get('template_id')
        if template_id:
            queryset = queryset.filter(template_id=template_id) if is_uuid(template_id) else queryset.none()
        return queryset


class TemplateViewSet(DocumentUploadMixin, BaseModelViewSet):
    """
    ViewSet for templates.

    Endpoints:
    - GET /templates/ - list with assemblies and total price
    - POST /templates/ - create with assembly lines
    - GET/PUT/PATCH/DELETE /templates/{id}/
    - GET /templates/{id}/boq/ - bill of quantities
    - GET /templates/{id}/boq/export/ - bill of quantities as .xlsx
    - POST/DELETE /templates/{id}/upload/ - PDF documents
    - POST /templates/validate-selection/ - check all groups of a template
    """

    queryset = templates_with_assemblies().select_related('created_by', 'updated_by')
    serializer_class = TemplateSerializer
    permission_classes = [IsCatalogEditorOrReadOnly]
    upload_directory = TEMPLATE_DIR

    search_fields = ['name', 'description']
    ordering_fields = ['name', 'created_at']
    ordering = ['-created_at']

    def get_permissions(self):
        if self.action == 'validate_selection':
            return [IsAuthenticated()]
        return super().get_permissions()

    def destroy(self, request, *args, **kwargs):
        template = self.get_object()
        usage = template.projects.count()
        if usage:
            raise EntityInUseException(
                'Template',
                f'This template is used by {usage} project(s) and cannot be deleted',
                usage_count=usage,
            )
        template.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def boq(self, request, pk=None):
        """Bill of quantities."""
        return Response(bill_of_quantities(self.get_object()))

    @action(detail=True, methods=['get'], url_path='boq/export')
    def boq_export(self, request, pk=None):
        template = self.get_object()
        boq = bill_of_quantities(template)
        logger.info(f"Exported BOQ of template {template.name}")
        return workbook_response(boq_workbook(boq), boq_filename(template.name))

    @action(detail=False, methods=['post'], url_path='validate-selection')
    def validate_selection(self, request):
        """Check every group of a template against a selection."""
        serializer = TemplateSelectionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = validate_template_selection(
            serializer.validated_data['template_id'],
            serializer.validated_data['selections'],
        )
        return Response(result.to_dict())
