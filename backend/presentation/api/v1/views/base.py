"""
Base Views.

Audit stamping, change history and PDF document mixins shared by the
QuickBom viewsets.
"""

from rest_framework import viewsets, status, filters
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend
from django.db import transaction

from infrastructure.storage.documents import delete_document, document_entry, save_pdf


class AuditViewMixin:
    """
    Mixin that adds audit fields on create/update.
    """

    def perform_create(self, serializer):
        """Set created_by and updated_by on create."""
        serializer.save(
            created_by=self.request.user,
            updated_by=self.request.user
        )

    def perform_update(self, serializer):
        """Set updated_by on update."""
        serializer.save(updated_by=self.request.user)


class HistoryViewMixin:
    """
    GET /{id}/history/ - newest first, with the fields each change touched.
    """

    history_limit = 50

    @action(detail=True, methods=['get'])
    def history(self, request, pk=None):
        obj = self.get_object()

        records = list(obj.history.select_related('history_user')[:self.history_limit])
        data = []
        for record in records:
            previous = record.prev_record
            changes = []
            if previous is not None:
                changes = [
                    {'field': change.field, 'old': change.old, 'new': change.new}
                    for change in record.diff_against(previous).changes
                ]
            data.append({
                'id': record.history_id,
                'date': record.history_date,
                'user': str(record.history_user) if record.history_user else None,
                'type': record.history_type,
                'reason': record.history_change_reason,
                'changes': changes,
            })

        return Response(data)


class DocumentUploadMixin:
    """
    PDF documents attached to an object's `docs` list.

    - POST /{id}/upload/ - multipart `file`, appends an entry
    - DELETE /{id}/upload/?file_url= - removes the entry and the file
    """

    upload_directory = 'uploads'

    @action(
        detail=True,
        methods=['post', 'delete'],
        parser_classes=[MultiPartParser, FormParser],
    )
    def upload(self, request, pk=None):
        obj = self.get_object()

        if request.method == 'DELETE':
            file_url = request.query_params.get('file_url')
            if not file_url:
                return Response(
                    {'error': 'file_url is required'},
                    status=status.HTTP_400_BAD_REQUEST
                )
            docs = [d for d in (obj.docs or []) if d.get('url') != file_url]
            if len(docs) == len(obj.docs or []):
                return Response(
                    {'error': 'Document not found'},
                    status=status.HTTP_404_NOT_FOUND
                )
            with transaction.atomic():
                obj.docs = docs
                obj.save(update_fields=['docs', 'updated_at'])
            delete_document(file_url, self.upload_directory)
            return Response({'message': 'Document deleted successfully', 'docs': obj.docs})

        upload = request.FILES.get('file')
        name = save_pdf(upload, self.upload_directory)
        entry = document_entry(upload, name)

        with transaction.atomic():
            obj.docs = list(obj.docs or []) + [entry]
            obj.save(update_fields=['docs', 'updated_at'])

        return Response(
            {'message': 'Document uploaded successfully', 'document': entry, 'docs': obj.docs},
            status=status.HTTP_201_CREATED
        )


class BaseModelViewSet(
    AuditViewMixin,
    viewsets.ModelViewSet
):
    """
    Base viewset with common functionality.
    """
    permission_classes = [IsAuthenticated]

    filter_backends = [
        DjangoFilterBackend,
        filters.SearchFilter,
        filters.OrderingFilter,
    ]

    def get_serializer_class(self):
        # Subclasses may map actions to serializers: {"list": ..., "default": ...}
        serializer_classes = getattr(self, 'serializer_classes', {})
        return serializer_classes.get(
            self.action,
            serializer_classes.get('default', super().get_serializer_class())
        )
