"""
Timeline Views.

Project timelines with nested milestones and tasks.
"""

import logging

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django.db import transaction

from application.services.notifications import queue_timeline_notification
from application.services.selection import is_uuid
from application.services.timeline import refresh_progress
from domain.shared.exceptions import EntityNotFoundException
from infrastructure.persistence.models import (
    MilestoneStatusChoices,
    ProjectTimeline,
    TaskStatusChoices,
)
from ..serializers.timeline import (
    MilestoneSerializer,
    ProjectTimelineSerializer,
    TimelineTaskSerializer,
)
from .base import AuditViewMixin

logger = logging.getLogger(__name__)


def timeline_queryset():
    return ProjectTimeline.objects.select_related('project').prefetch_related(
        'milestones', 'tasks__assigned_users', 'tasks__milestone'
    )


def _child_or_404(queryset, child_id, entity_type):
    child = queryset.filter(pk=child_id).first() if is_uuid(child_id) else None
    if child is None:
        raise EntityNotFoundException(entity_type, child_id, message=f'{entity_type} not found')
    return child


class TimelineViewSet(
    AuditViewMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for timelines by id. Timelines are created through
    /projects/{id}/timeline/.

    Endpoints:
    - GET /timelines/
    - GET/PUT/PATCH/DELETE /timelines/{id}/
    - GET/POST /timelines/{id}/milestones/
    - GET/PUT/PATCH/DELETE /timelines/{id}/milestones/{milestone_id}/
    - GET/POST /timelines/{id}/tasks/
    - GET/PUT/PATCH/DELETE /timelines/{id}/tasks/{task_id}/
    """

    queryset = timeline_queryset()
    serializer_class = ProjectTimelineSerializer
    permission_classes = [IsAuthenticated]

    # -------------------------------------------------------------------------
    # Milestones
    # -------------------------------------------------------------------------

    def _milestone_saved(self, timeline, milestone, old_status=None):
        if milestone.status == MilestoneStatusChoices.COMPLETED and old_status != milestone.status:
            queue_timeline_notification(
                timeline.project, 'milestone_completed', details=f'Milestone: {milestone.name}'
            )

    @action(detail=True, methods=['get', 'post'])
    def milestones(self, request, pk=None):
        timeline = self.get_object()

        if request.method == 'GET':
            milestones = timeline.milestones.order_by('due_date')
            return Response(MilestoneSerializer(milestones, many=True).data)

        serializer = MilestoneSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            milestone = serializer.save(
                timeline=timeline,
                created_by=request.user,
                updated_by=request.user
            )
            self._milestone_saved(timeline, milestone)
        return Response(
            {'message': 'Milestone created successfully', 'milestone': MilestoneSerializer(milestone).data},
            status=status.HTTP_201_CREATED
        )

    @action(
        detail=True,
        methods=['get', 'put', 'patch', 'delete'],
        url_path=r'milestones/(?P<milestone_id>[^/.]+)'
    )
    def milestone_detail(self, request, pk=None, milestone_id=None):
        timeline = self.get_object()
        milestone = _child_or_404(timeline.milestones.all(), milestone_id, 'Milestone')

        if request.method == 'GET':
            return Response({'milestone': MilestoneSerializer(milestone).data})

        if request.method == 'DELETE':
            milestone.delete()
            return Response({'message': 'Milestone deleted successfully'})

        old_status = milestone.status
        serializer = MilestoneSerializer(
            milestone,
            data=request.data,
            partial=request.method == 'PATCH'
        )
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            milestone = serializer.save(updated_by=request.user)
            self._milestone_saved(timeline, milestone, old_status)
        return Response({
            'message': 'Milestone updated successfully',
            'milestone': MilestoneSerializer(milestone).data,
        })

    # -------------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------------

    def _task_saved(self, timeline, task, old_status=None):
        refresh_progress(timeline)
        if task.status == TaskStatusChoices.COMPLETED and old_status != task.status:
            queue_timeline_notification(
                timeline.project, 'task_completed', details=f'Task: {task.name}'
            )

    @action(detail=True, methods=['get', 'post'])
    def tasks(self, request, pk=None):
        timeline = self.get_object()

        if request.method == 'GET':
            tasks = timeline.tasks.select_related('milestone').prefetch_related(
                'assigned_users'
            ).order_by('planned_start')
            return Response(TimelineTaskSerializer(tasks, many=True).data)

        serializer = TimelineTaskSerializer(data=request.data, context={'timeline': timeline})
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            task = serializer.save(
                timeline=timeline,
                created_by=request.user,
                updated_by=request.user
            )
            self._task_saved(timeline, task)
        logger.debug(f"Task {task.name} added to timeline {timeline.id}")
        return Response(
            {'message': 'Task created successfully', 'task': TimelineTaskSerializer(task).data},
            status=status.HTTP_201_CREATED
        )

    @action(
        detail=True,
        methods=['get', 'put', 'patch', 'delete'],
        url_path=r'tasks/(?P<task_id>[^/.]+)'
    )
    def task_detail(self, request, pk=None, task_id=None):
        timeline = self.get_object()
        task = _child_or_404(timeline.tasks.all(), task_id, 'Task')

        if request.method == 'GET':
            return Response({'task': TimelineTaskSerializer(task).data})

        if request.method == 'DELETE':
            with transaction.atomic():
                task.delete()
                refresh_progress(timeline)
            return Response({'message': 'Task deleted successfully'})

        old_status = task.status
        serializer = TimelineTaskSerializer(
            task,
            data=request.data,
            partial=request.method == 'PATCH',
            context={'timeline': timeline}
        )
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            task = serializer.save(updated_by=request.user)
            self._task_saved(timeline, task, old_status)
        return Response({
            'message': 'Task updated successfully',
            'task': TimelineTaskSerializer(task).data,
        })
