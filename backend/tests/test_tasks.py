"""
Tests for Celery tasks
"""
from datetime import timedelta
from decimal import Decimal
from unittest.mock import MagicMock, patch

from celery.exceptions import Retry
from django.test import TestCase
from django.utils import timezone

from application.tasks.notification_tasks import (
    notify_overdue_projects,
    resolve_phone_numbers,
    send_project_notification_task,
    send_timeline_notification_task,
    send_whatsapp_message,
)
from application.tasks.project_tasks import refresh_timeline_progress
from infrastructure.persistence.models import ProjectStatusChoices, TimelineStatusChoices
from tests.factories import TestDataFactory


def gateway_response(ok=True):
    response = MagicMock()
    response.ok = ok
    response.status_code = 200 if ok else 500
    response.json.return_value = {}
    return response


class PhoneResolutionTests(TestCase):
    """Test turning user ids into gateway phone numbers"""

    def test_resolve_phone_numbers(self):
        """Test invalid and empty phones are skipped"""
        valid = TestDataFactory.create_user(phone='0812-3456-7890')
        invalid = TestDataFactory.create_user(phone='12345')
        empty = TestDataFactory.create_user()

        phones = resolve_phone_numbers([str(valid.id), str(invalid.id), str(empty.id)])

        self.assertEqual(phones, ['6281234567890'])


@patch('infrastructure.notifications.whatsapp.requests.post')
class NotificationTaskTests(TestCase):
    """Test the notification tasks"""

    def setUp(self):
        self.user = TestDataFactory.create_user(phone='081234567890')

    def test_project_notification_without_phones(self, mock_post):
        """Test nothing is sent when no user has a phone"""
        user = TestDataFactory.create_user()

        result = send_project_notification_task([str(user.id)], 'Tower', 'created')

        self.assertEqual(result, {'success': False, 'error': 'No valid phone numbers'})
        mock_post.assert_not_called()

    def test_project_notification(self, mock_post):
        """Test project notifications reach the gateway"""
        mock_post.return_value = gateway_response()

        result = send_project_notification_task([str(self.user.id)], 'Tower', 'created')

        self.assertTrue(result['success'])
        payload = mock_post.call_args.kwargs['json']
        self.assertEqual(payload['phone_num'], ['6281234567890'])
        self.assertEqual(payload['source'], 'QuickBom-Project')

    def test_timeline_notification(self, mock_post):
        """Test timeline notifications reach the gateway"""
        mock_post.return_value = gateway_response()

        result = send_timeline_notification_task(
            [str(self.user.id)], 'Tower', 'milestone_completed', 'Milestone: Roof'
        )

        self.assertTrue(result['success'])
        self.assertIn('Milestone: Roof', mock_post.call_args.kwargs['json']['message'])

    def test_send_whatsapp_message(self, mock_post):
        """Test the plain send task"""
        mock_post.return_value = gateway_response()

        result = send_whatsapp_message(['6281234567890'], 'Hello')

        self.assertTrue(result['success'])

    def test_send_whatsapp_message_retries(self, mock_post):
        """Test failed sends are retried"""
        mock_post.return_value = gateway_response(ok=False)

        with self.assertRaises(Retry):
            send_whatsapp_message(['6281234567890'], 'Hello')


class OverdueProjectTests(TestCase):
    """Test the overdue sweep"""

    def setUp(self):
        self.user = TestDataFactory.create_user(phone='081234567890')
        self.yesterday = timezone.localdate() - timedelta(days=1)

    def test_running_project_becomes_delayed(self):
        """Test overdue running projects are marked delayed and notified"""
        project = TestDataFactory.create_project(
            name='Late Job',
            status=ProjectStatusChoices.IN_PROGRESS,
            end_date=self.yesterday,
            assigned_users=[str(self.user.id)],
        )

        with patch.object(send_project_notification_task, 'delay') as mock_delay:
            result = notify_overdue_projects()

        project.refresh_from_db()
        self.assertEqual(project.status, ProjectStatusChoices.DELAYED)
        self.assertEqual(result, {'delayed': 1, 'notifications_sent': 1})
        mock_delay.assert_called_once_with([str(self.user.id)], 'Late Job', 'overdue')

    def test_planning_project_keeps_status(self):
        """Test overdue projects that never started are notified only"""
        project = TestDataFactory.create_project(end_date=self.yesterday)

        with patch.object(send_project_notification_task, 'delay') as mock_delay:
            result = notify_overdue_projects()

        project.refresh_from_db()
        self.assertEqual(project.status, ProjectStatusChoices.PLANNING)
        self.assertEqual(result, {'delayed': 0, 'notifications_sent': 0})
        mock_delay.assert_not_called()

    def test_finished_and_future_projects_skipped(self):
        """Test completed, cancelled and not yet due projects are ignored"""
        TestDataFactory.create_project(
            status=ProjectStatusChoices.COMPLETED,
            end_date=self.yesterday,
            assigned_users=[str(self.user.id)],
        )
        TestDataFactory.create_project(
            status=ProjectStatusChoices.CANCELLED,
            end_date=self.yesterday,
            assigned_users=[str(self.user.id)],
        )
        TestDataFactory.create_project(
            status=ProjectStatusChoices.IN_PROGRESS,
            end_date=timezone.localdate(),
            assigned_users=[str(self.user.id)],
        )

        with patch.object(send_project_notification_task, 'delay') as mock_delay:
            result = notify_overdue_projects()

        self.assertEqual(result, {'delayed': 0, 'notifications_sent': 0})
        mock_delay.assert_not_called()


class TimelineProgressTaskTests(TestCase):
    """Test the nightly progress refresh"""

    def test_refresh_open_timelines(self):
        """Test open timelines are refreshed and closed ones skipped"""
        open_timeline = TestDataFactory.create_timeline(TestDataFactory.create_project())
        TestDataFactory.create_task(open_timeline, progress=Decimal('40'))
        TestDataFactory.create_task(open_timeline, progress=Decimal('80'))
        closed = TestDataFactory.create_timeline(TestDataFactory.create_project())
        closed.status = TimelineStatusChoices.COMPLETED
        closed.save()

        result = refresh_timeline_progress()

        open_timeline.refresh_from_db()
        self.assertEqual(result, {'timelines': 1})
        self.assertEqual(open_timeline.progress, Decimal('60.00'))
