"""
Project Tasks.

Celery tasks for project-related operations.
"""

from celery import shared_task
import logging

logger = logging.getLogger(__name__)


@shared_task
def refresh_timeline_progress():
    """Recompute progress of all open timelines from their tasks."""
    from application.services.timeline import refresh_progress
    from infrastructure.persistence.models import ProjectTimeline, TimelineStatusChoices

    timelines = ProjectTimeline.objects.exclude(
        status__in=[TimelineStatusChoices.COMPLETED, TimelineStatusChoices.CANCELLED]
    )
    count = 0
    for timeline in timelines:
        refresh_progress(timeline)
        count += 1

    logger.info(f"Refreshed progress of {count} timelines")
    return {'timelines': count}
