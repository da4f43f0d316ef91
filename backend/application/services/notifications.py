"""
Notification Service.

Queues WhatsApp notifications after the surrounding transaction commits.
"""

import logging

from django.db import transaction

logger = logging.getLogger(__name__)


def project_recipients(project):
    return [str(user_id) for user_id in (project.assigned_users or [])]


def queue_project_notification(project, notification_type: str, details: str = None) -> bool:
    """Queue a project notification for the assigned users. False when nobody is assigned."""
    from application.tasks.notification_tasks import send_project_notification_task

    recipients = project_recipients(project)
    if not recipients:
        return False

    project_name = project.name
    transaction.on_commit(lambda: send_project_notification_task.delay(
        recipients, project_name, notification_type, details
    ))
    logger.debug(f"Queued '{notification_type}' notification for project {project_name}")
    return True


def queue_timeline_notification(project, event_type: str, details: str = None) -> bool:
    from application.tasks.notification_tasks import send_timeline_notification_task

    recipients = project_recipients(project)
    if not recipients:
        return False

    project_name = project.name
    transaction.on_commit(lambda: send_timeline_notification_task.delay(
        recipients, project_name, event_type, details
    ))
    logger.debug(f"Queued '{event_type}' timeline event for project {project_name}")
    return True
