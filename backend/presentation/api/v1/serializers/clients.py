"""
Client Serializers.
"""

from decimal import Decimal

from rest_framework import serializers
from django.db.models import Count, Q, Sum

from infrastructure.persistence.models import Client, ProjectStatusChoices
from .base import BaseModelSerializer, AuditFieldsMixin


ACTIVE_STATUSES = [ProjectStatusChoices.IN_PROGRESS, ProjectStatusChoices.APPROVED]
CLOSED_STATUSES = [ProjectStatusChoices.COMPLETED, ProjectStatusChoices.CANCELLED]


def client_project_stats(client) -> dict:
    stats = client.projects.aggregate(
        total_projects=Count('id'),
        active_projects=Count('id', filter=Q(status__in=ACTIVE_STATUSES)),
        completed_projects=Count('id', filter=Q(status=ProjectStatusChoices.COMPLETED)),
        total_contract_value=Sum('total_price'),
        outstanding_balance=Sum('total_price', filter=~Q(status__in=CLOSED_STATUSES)),
    )
    stats['total_contract_value'] = stats['total_contract_value'] or Decimal('0')
    stats['outstanding_balance'] = stats['outstanding_balance'] or Decimal('0')
    return stats


class ClientSerializer(AuditFieldsMixin, BaseModelSerializer):
    """Client with project statistics."""

    contact_email = serializers.EmailField()

    class Meta:
        model = Client
        fields = [
            'id', 'client_type', 'category', 'status',
            'company_name', 'company_type', 'business_license', 'tax_id',
            'contact_person', 'contact_title', 'contact_email',
            'contact_phone', 'contact_phone2',
            'address', 'city', 'province', 'postal_code', 'country',
            'industry', 'company_size', 'annual_revenue', 'credit_limit',
            'payment_terms', 'website', 'special_notes',
            'created_at', 'updated_at', 'created_by', 'updated_by',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_contact_email(self, value):
        qs = Client.objects.filter(contact_email__iexact=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError('A client with this email already exists.')
        return value

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data.update(client_project_stats(instance))
        return data
