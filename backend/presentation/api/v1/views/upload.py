"""
Upload Views.

Standalone PDF upload into temporary storage.
"""

from rest_framework import viewsets
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django.core.files.storage import default_storage

from infrastructure.storage.documents import save_temp_pdf


class UploadViewSet(viewsets.ViewSet):
    """
    POST /upload/ - multipart `file`, stored as uploads/temp/<uuid>.pdf
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    def create(self, request):
        upload = request.FILES.get('file')
        name = save_temp_pdf(upload)
        return Response({
            'success': True,
            'file': {
                'url': default_storage.url(name),
                'name': upload.name,
                'size': upload.size,
                'type': upload.content_type,
            },
        })
