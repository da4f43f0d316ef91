"""
Project Views.

API views for projects, their documents and their timeline.
"""

import logging
from decimal import Decimal

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from django.core.files.storage import default_storage
from django.db import transaction

from application.services.notifications import (
    queue_project_notification,
    queue_timeline_notification,
)
from application.services.pricing import (
    bill_of_quantities,
    recalculate_project_total,
    template_price_by_id,
    templates_with_assemblies,
)
from domain.shared.exceptions import EntityNotFoundException, InvalidOperationException
from infrastructure.export.excel import workbook_response
from infrastructure.persistence.models import Project, ProjectStatusChoices
from infrastructure.storage.documents import PROJECT_DIR, delete_document, save_pdf
from ..serializers.project import (
    PROJECT_DOC_FIELDS,
    ProjectDocumentDeleteSerializer,
    ProjectDocumentUploadSerializer,
    ProjectSerializer,
)
from ..serializers.timeline import ProjectTimelineSerializer
from .base import BaseModelViewSet, HistoryViewMixin
from .bom import boq_filename, boq_workbook
from .timeline import timeline_queryset

logger = logging.getLogger(__name__)


class ProjectViewSet(HistoryViewMixin, BaseModelViewSet):
    """
    ViewSet for projects.

    Endpoints:
    - GET /projects/ - list (?include=timeline embeds the timeline)
    - POST /projects/ - create; total_price is the template roll-up
    - GET/PUT/PATCH/DELETE /projects/{id}/
    - POST /projects/{id}/recalculate/ - recompute total_price
    - GET /projects/{id}/boq/ - template bill of quantities
    - GET /projects/{id}/boq/export/ - the same as .xlsx
    - GET/POST/PUT/DELETE /projects/{id}/timeline/
    - POST/DELETE /projects/upload/ - schematic and quality check PDFs
    - GET /projects/{id}/history/
    """

    queryset = Project.objects.select_related(
        'client', 'from_template', 'created_by', 'updated_by'
    )
    serializer_class = ProjectSerializer

    search_fields = ['name', 'location']
    filterset_fields = ['status', 'priority', 'client', 'project_type']
    ordering_fields = ['name', 'created_at', 'start_date', 'end_date', 'total_price']
    ordering = ['-created_at']

    def get_serializer_context(self):
        context = super().get_serializer_context()
        include = self.request.query_params.get('include', '') if self.request else ''
        context['include_timeline'] = 'timeline' in include.split(',')
        return context

    def perform_create(self, serializer):
        template = serializer.validated_data.get('from_template')
        total = template_price_by_id(template.pk) if template else Decimal('0.00')

        with transaction.atomic():
            project = serializer.save(
                created_by=self.request.user,
                updated_by=self.request.user,
                total_price=total
            )
            queue_project_notification(project, 'created')
        logger.info(f"Project {project.name} created with total {total}")

    def perform_update(self, serializer):
        old_status = serializer.instance.status

        with transaction.atomic():
            project = serializer.save(updated_by=self.request.user)
            recalculate_project_total(project)
            if project.status != old_status and project.status == ProjectStatusChoices.COMPLETED:
                queue_project_notification(project, 'completed')

    @action(detail=True, methods=['post'])
    def recalculate(self, request, pk=None):
        """Recompute total_price after material price changes."""
        project = self.get_object()
        old_total = project.total_price
        new_total = recalculate_project_total(project)
        return Response({
            'message': 'Project price recalculated',
            'old_total': old_total,
            'total_price': new_total,
        })

    def _project_template(self, project):
        if not project.from_template_id:
            raise InvalidOperationException('Project was not created from a template')
        return templates_with_assemblies().get(pk=project.from_template_id)

    @action(detail=True, methods=['get'])
    def boq(self, request, pk=None):
        project = self.get_object()
        boq = bill_of_quantities(self._project_template(project))
        return Response({'project_id': str(project.id), 'project_name': project.name, **boq})

    @action(detail=True, methods=['get'], url_path='boq/export')
    def boq_export(self, request, pk=None):
        project = self.get_object()
        boq = bill_of_quantities(self._project_template(project))
        logger.info(f"Exported BOQ of project {project.name}")
        return workbook_response(boq_workbook(boq), boq_filename(project.name))

    # -------------------------------------------------------------------------
    # Timeline
    # -------------------------------------------------------------------------

    @action(detail=True, methods=['get', 'post', 'put', 'delete'])
    def timeline(self, request, pk=None):
        """Read, create, update or delete the project's timeline."""
        project = self.get_object()
        timeline = timeline_queryset().filter(project=project).first()

        if request.method == 'GET':
            if timeline is None:
                return Response({
                    'exists': False,
                    'message': 'No timeline found for this project',
                })
            return Response({
                'exists': True,
                'timeline': ProjectTimelineSerializer(timeline).data,
            })

        if request.method == 'POST':
            if timeline is not None:
                return Response(
                    {'error': 'Timeline already exists for this project'},
                    status=status.HTTP_409_CONFLICT
                )
            if not request.data.get('start_date'):
                return Response(
                    {'error': 'Start date is required'},
                    status=status.HTTP_400_BAD_REQUEST
                )
            serializer = ProjectTimelineSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            with transaction.atomic():
                timeline = serializer.save(
                    project=project,
                    created_by=request.user,
                    updated_by=request.user
                )
                queue_timeline_notification(project, 'timeline_created')
            logger.info(f"Timeline created for project {project.name}")
            return Response(
                {
                    'message': 'Timeline created successfully',
                    'timeline': ProjectTimelineSerializer(timeline_queryset().get(pk=timeline.pk)).data,
                },
                status=status.HTTP_201_CREATED
            )

        if timeline is None:
            raise EntityNotFoundException('Timeline', message='Timeline not found')

        if request.method == 'PUT':
            serializer = ProjectTimelineSerializer(timeline, data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            serializer.save(updated_by=request.user)
            return Response({
                'message': 'Timeline updated successfully',
                'timeline': ProjectTimelineSerializer(timeline_queryset().get(pk=timeline.pk)).data,
            })

        timeline.delete()
        return Response({'message': 'Timeline deleted successfully'})

    # -------------------------------------------------------------------------
    # Documents
    # -------------------------------------------------------------------------

    def _document_project(self, project_id):
        project = Project.objects.filter(pk=project_id).first()
        if project is None:
            raise EntityNotFoundException('Project', project_id, message='Project not found')
        return project

    @action(
        detail=False,
        methods=['post', 'delete'],
        url_path='upload',
        parser_classes=[MultiPartParser, FormParser, JSONParser],
    )
    def upload_document(self, request):
        """Attach or clear the schematic / quality check PDF of a project."""
        if request.method == 'DELETE':
            serializer = ProjectDocumentDeleteSerializer(data=request.query_params)
            serializer.is_valid(raise_exception=True)
            project = self._document_project(serializer.validated_data['project_id'])
            field = PROJECT_DOC_FIELDS[serializer.validated_data['doc_type']]

            old_url = getattr(project, field)
            with transaction.atomic():
                setattr(project, field, '')
                project.save(update_fields=[field, 'updated_at'])
            if old_url:
                delete_document(old_url, PROJECT_DIR)
            return Response({
                'message': 'Document deleted successfully',
                'project': ProjectSerializer(project, context=self.get_serializer_context()).data,
            })

        serializer = ProjectDocumentUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = self._document_project(serializer.validated_data['project_id'])
        field = PROJECT_DOC_FIELDS[serializer.validated_data['doc_type']]

        upload = request.FILES.get('file')
        name = save_pdf(upload, PROJECT_DIR)
        url = default_storage.url(name)

        old_url = getattr(project, field)
        with transaction.atomic():
            setattr(project, field, url)
            project.save(update_fields=[field, 'updated_at'])
        if old_url:
            delete_document(old_url, PROJECT_DIR)

        return Response(
            {
                'message': 'Document uploaded successfully',
                'url': url,
                'project': ProjectSerializer(project, context=self.get_serializer_context()).data,
            },
            status=status.HTTP_201_CREATED
        )
