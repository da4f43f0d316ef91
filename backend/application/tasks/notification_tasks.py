"""
Notification Tasks.

Celery tasks for sending WhatsApp notifications.
"""

from celery import shared_task
from django.utils import timezone
import logging

from domain.shared.value_objects import ProjectStatus
from infrastructure.notifications.whatsapp import WhatsAppService

logger = logging.getLogger(__name__)


def resolve_phone_numbers(user_ids: list) -> list:
    """
    Phone numbers of the given users, formatted for the gateway.

    Users without a phone or with an invalid number are skipped.
    """
    from infrastructure.persistence.models import User

    service = WhatsAppService()
    phones = []
    for phone in User.objects.filter(id__in=user_ids).exclude(phone='').values_list('phone', flat=True):
        if service.validate_phone_number(phone):
            phones.append(service.format_phone_number(phone))
        else:
            logger.warning(f"Skipping invalid phone number {phone!r}")
    return phones


@shared_task(bind=True, max_retries=3)
def send_whatsapp_message(self, phone_numbers: list, message: str, source: str = None):
    """
    Send a WhatsApp message, retrying on failure.

    Args:
        phone_numbers: Recipient numbers
        message: Message text
        source: Source tag for the gateway
    """
    result = WhatsAppService().send_multi_message(phone_numbers, message, source)
    if not result.success:
        logger.warning(f"WhatsApp send failed: {result.error}")
        if self.request.retries < self.max_retries:
            raise self.retry(countdown=60)
    return result.to_dict()


@shared_task
def send_project_notification_task(
    user_ids: list,
    project_name: str,
    notification_type: str,
    details: str = None
):
    """Send a project notification to the given users."""
    phones = resolve_phone_numbers(user_ids)
    if not phones:
        logger.info(f"No valid phone numbers for project '{project_name}' notification")
        return {'success': False, 'error': 'No valid phone numbers'}

    result = WhatsAppService().send_project_notification(
        phones, project_name, notification_type, details
    )
    return result.to_dict()


@shared_task
def send_timeline_notification_task(
    user_ids: list,
    project_name: str,
    event_type: str,
    details: str = None
):
    """Send a timeline event notification to the given users."""
    phones = resolve_phone_numbers(user_ids)
    if not phones:
        logger.info(f"No valid phone numbers for project '{project_name}' timeline event")
        return {'success': False, 'error': 'No valid phone numbers'}

    result = WhatsAppService().send_timeline_notification(
        phones, project_name, event_type, details
    )
    return result.to_dict()


@shared_task
def notify_overdue_projects():
    """
    Flag and notify overdue projects.

    A project is overdue once its end_date has passed and it is neither
    completed nor cancelled. Running projects become DELAYED.
    """
    from infrastructure.persistence.models import Project, ProjectStatusChoices

    today = timezone.localdate()

    overdue = Project.objects.filter(
        end_date__lt=today
    ).exclude(
        status__in=[s.value for s in ProjectStatus if s.is_terminal]
    )

    delayed = 0
    sent = 0
    for project in overdue:
        if project.status == ProjectStatusChoices.IN_PROGRESS:
            project.status = ProjectStatusChoices.DELAYED
            project.save(update_fields=['status', 'updated_at'])
            delayed += 1

        user_ids = [str(u) for u in (project.assigned_users or [])]
        if user_ids:
            send_project_notification_task.delay(user_ids, project.name, 'overdue')
            sent += 1

    logger.info(f"Overdue sweep: {overdue.count()} overdue, {delayed} marked delayed, {sent} notified")
    return {'delayed': delayed, 'notifications_sent': sent}
