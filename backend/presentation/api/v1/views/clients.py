"""
Client Views.
"""

import django_filters
from rest_framework import status
from rest_framework.response import Response

from infrastructure.persistence.models import Client
from ..serializers.clients import ClientSerializer
from .base import BaseModelViewSet


class ClientFilter(django_filters.FilterSet):
    type = django_filters.CharFilter(field_name='client_type')

    class Meta:
        model = Client
        fields = ['type', 'client_type', 'status', 'category', 'city']


class ClientViewSet(BaseModelViewSet):
    """
    ViewSet for clients.

    Endpoints:
    - GET /clients/ - list (?type=, ?status=, ?category=, ?search=)
    - POST /clients/ - create
    - GET/PUT/PATCH/DELETE /clients/{id}/
    """

    queryset = Client.objects.select_related('created_by', 'updated_by')
    serializer_class = ClientSerializer

    filterset_class = ClientFilter
    search_fields = ['company_name', 'contact_person', 'contact_email', 'city']
    ordering_fields = ['created_at', 'company_name', 'contact_person', 'city']
    ordering = ['-created_at']

    def destroy(self, request, *args, **kwargs):
        client = self.get_object()
        project_count = client.projects.count()
        if project_count:
            return Response(
                {
                    'error': f'Cannot delete client with {project_count} existing project(s)',
                    'project_count': project_count,
                },
                status=status.HTTP_400_BAD_REQUEST
            )
        client.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
