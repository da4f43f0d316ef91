"""
Project Serializers.

Serializers for projects and their documents.
"""

from rest_framework import serializers

from infrastructure.persistence.models import Client, Project, ProjectTimeline, Template
from .base import BaseModelSerializer, AuditFieldsMixin
from .bom import ExistingObjectField
from .timeline import ProjectTimelineSerializer

PROJECT_DOC_FIELDS = {
    'schematic': 'schematic_docs',
    'qualityCheck': 'quality_check_docs',
}


class ProjectSerializer(AuditFieldsMixin, BaseModelSerializer):
    """
    Project with client and template names.

    total_price is read-only; views set it from the template roll-up.
    Pass `include_timeline` in the context to embed the timeline.
    """

    name = serializers.CharField(
        max_length=255,
        error_messages={
            'required': 'Project name is required',
            'blank': 'Project name is required',
        }
    )
    client = serializers.PrimaryKeyRelatedField(
        queryset=Client.objects.all(),
        required=False,
        allow_null=True,
        error_messages={'does_not_exist': 'Selected client does not exist'}
    )
    client_name = serializers.CharField(source='client.company_name', read_only=True, default=None)
    from_template = ExistingObjectField(
        'Template',
        queryset=Template.objects.all(),
        required=False,
        allow_null=True
    )
    template_name = serializers.CharField(source='from_template.name', read_only=True, default=None)
    assigned_users = serializers.ListField(
        child=serializers.UUIDField(),
        required=False
    )

    class Meta:
        model = Project
        fields = [
            'id', 'name', 'description', 'client', 'client_name',
            'project_type', 'location', 'area', 'budget',
            'start_date', 'end_date', 'actual_start', 'actual_end',
            'status', 'progress', 'priority',
            'schematic_docs', 'quality_check_docs',
            'from_template', 'template_name', 'total_price', 'assigned_users',
            'created_at', 'updated_at', 'created_by', 'updated_by',
        ]
        read_only_fields = [
            'id', 'schematic_docs', 'quality_check_docs', 'total_price',
            'created_at', 'updated_at',
        ]

    def validate_assigned_users(self, value):
        return list(dict.fromkeys(str(v) for v in value))

    def validate(self, attrs):
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': 'End date must not be before start date.'})
        return attrs

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if self.context.get('include_timeline'):
            timeline = ProjectTimeline.objects.filter(project=instance).prefetch_related(
                'milestones', 'tasks__assigned_users', 'tasks__milestone'
            ).first()
            data['timeline'] = ProjectTimelineSerializer(timeline).data if timeline else None
        return data


class ProjectDocumentUploadSerializer(serializers.Serializer):
    project_id = serializers.UUIDField()
    doc_type = serializers.ChoiceField(choices=list(PROJECT_DOC_FIELDS))


class ProjectDocumentDeleteSerializer(serializers.Serializer):
    project_id = serializers.UUIDField()
    doc_type = serializers.ChoiceField(choices=list(PROJECT_DOC_FIELDS))
