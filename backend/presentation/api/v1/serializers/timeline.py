"""
Timeline Serializers.

Project timelines, milestones and tasks.
"""

from datetime import date

from rest_framework import serializers
from django.contrib.auth import get_user_model

from domain.project.scheduling import (
    DEFAULT_WORKING_DAYS,
    count_working_days,
    planned_end,
    timeline_duration,
)
from infrastructure.persistence.models import Milestone, ProjectTimeline, TimelineTask
from .base import BaseModelSerializer, UserMinimalSerializer

User = get_user_model()


class MilestoneSerializer(BaseModelSerializer):
    """Milestone on a timeline. The timeline comes from the URL."""

    depends_on = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        default=list
    )
    task_count = serializers.SerializerMethodField()

    class Meta:
        model = Milestone
        fields = [
            'id', 'timeline', 'name', 'description', 'due_date',
            'depends_on', 'status', 'progress', 'task_count',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'timeline', 'created_at', 'updated_at']

    def validate_depends_on(self, value):
        return [str(v) for v in value]

    def get_task_count(self, obj):
        return obj.tasks.count()


class TimelineTaskSerializer(BaseModelSerializer):
    """
    Task on a timeline.

    planned_end defaults to planned_start + duration days. Milestone and
    dependency must be on the same timeline.
    """

    milestone = serializers.PrimaryKeyRelatedField(
        queryset=Milestone.objects.all(),
        required=False,
        allow_null=True
    )
    depends_on = serializers.PrimaryKeyRelatedField(
        queryset=TimelineTask.objects.all(),
        required=False,
        allow_null=True
    )
    assigned_users = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(),
        many=True,
        required=False
    )
    assigned_users_detail = UserMinimalSerializer(source='assigned_users', many=True, read_only=True)
    milestone_name = serializers.CharField(source='milestone.name', read_only=True, default=None)
    resources = serializers.JSONField(required=False)

    class Meta:
        model = TimelineTask
        fields = [
            'id', 'timeline', 'milestone', 'milestone_name', 'depends_on',
            'name', 'description', 'task_type',
            'planned_start', 'planned_end', 'actual_start', 'actual_end', 'duration',
            'progress', 'status', 'priority',
            'assigned_users', 'assigned_users_detail', 'resources',
            'estimated_cost', 'actual_cost',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'timeline', 'created_at', 'updated_at']
        extra_kwargs = {
            'planned_end': {'required': False},
        }

    def _timeline(self):
        if self.instance is not None:
            return self.instance.timeline
        return self.context['timeline']

    def validate_milestone(self, value):
        if value is not None and value.timeline_id != self._timeline().id:
            raise serializers.ValidationError('Milestone belongs to another timeline.')
        return value

    def validate_depends_on(self, value):
        if value is None:
            return value
        if value.timeline_id != self._timeline().id:
            raise serializers.ValidationError('Dependency belongs to another timeline.')
        if self.instance is not None and value.pk == self.instance.pk:
            raise serializers.ValidationError('A task cannot depend on itself.')
        return value

    def validate(self, attrs):
        planned_start = attrs.get('planned_start', getattr(self.instance, 'planned_start', None))
        duration = attrs.get('duration', getattr(self.instance, 'duration', None))
        if not attrs.get('planned_end') and planned_start is not None and duration is not None:
            if self.instance is None or 'planned_start' in attrs or 'duration' in attrs:
                attrs['planned_end'] = planned_end(planned_start, duration)
        end = attrs.get('planned_end', getattr(self.instance, 'planned_end', None))
        if planned_start and end and end < planned_start:
            raise serializers.ValidationError({'planned_end': 'Planned end must not be before planned start.'})
        return attrs


class ProjectTimelineSerializer(BaseModelSerializer):
    """Timeline with nested milestones and tasks. duration is derived from the dates."""

    working_days = serializers.JSONField(required=False)
    holidays = serializers.JSONField(required=False)
    milestones = MilestoneSerializer(many=True, read_only=True)
    tasks = TimelineTaskSerializer(many=True, read_only=True)
    project_name = serializers.CharField(source='project.name', read_only=True)
    working_day_count = serializers.SerializerMethodField()

    class Meta:
        model = ProjectTimeline
        fields = [
            'id', 'project', 'project_name', 'start_date', 'end_date', 'duration',
            'working_days', 'holidays', 'working_day_count', 'progress', 'status',
            'milestones', 'tasks',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'project', 'duration', 'progress', 'created_at', 'updated_at']

    def validate_working_days(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError('Expected an object keyed by weekday.')
        unknown = set(value) - set(DEFAULT_WORKING_DAYS)
        if unknown:
            raise serializers.ValidationError(f'Unknown weekdays: {", ".join(sorted(unknown))}')
        return {**DEFAULT_WORKING_DAYS, **{k: bool(v) for k, v in value.items()}}

    def validate_holidays(self, value):
        if not isinstance(value, list):
            raise serializers.ValidationError('Expected a list of dates.')
        try:
            return [date.fromisoformat(str(day)[:10]).isoformat() for day in value]
        except ValueError:
            raise serializers.ValidationError('Holidays must be ISO dates (YYYY-MM-DD).')

    def get_working_day_count(self, obj):
        """Working days between start and end, skipping holidays."""
        if not obj.start_date or not obj.end_date:
            return None
        return count_working_days(obj.start_date, obj.end_date, obj.working_days, obj.holidays)

    def validate(self, attrs):
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': 'End date must not be before start date.'})
        attrs['duration'] = timeline_duration(start, end)
        return attrs
