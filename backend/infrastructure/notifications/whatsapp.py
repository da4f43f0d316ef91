"""
WhatsApp Gateway Client.

Thin wrapper around the IoTech multi-recipient WhatsApp HTTP API with
message templates for project and timeline events.
"""

import logging
import re
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


DEFAULT_API_URL = 'https://authserver-backend.iotech.my.id/send-multi-whatsapp'

PHONE_PATTERN = re.compile(r'^(\+62|62|0)[8-9][0-9]{7,11}$')

FOOTER = 'QuickBom Project Management'

PROJECT_NOTIFICATION_TYPES = ('created', 'updated', 'completed', 'overdue', 'milestone', 'task')
TIMELINE_EVENT_TYPES = ('timeline_created', 'task_completed', 'milestone_completed', 'delay_warning')

# Limits for sends made inside a request
MAX_BULK_DELAY = 10.0
MAX_BULK_BATCH_SIZE = 50
MAX_RECIPIENTS = 200


@dataclass
class WhatsAppResult:
    """Outcome of a send."""

    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    data: Any = None

    def to_dict(self) -> Dict[str, Any]:
        result = {'success': self.success}
        if self.message is not None:
            result['message'] = self.message
        if self.error is not None:
            result['error'] = self.error
        if self.data is not None:
            result['data'] = self.data
        return result


@dataclass
class WhatsAppService:
    """
    Client for the WhatsApp gateway.

    Defaults come from settings.QUICKBOM; pass explicit values in tests.
    """

    api_url: str = field(default_factory=lambda: settings.QUICKBOM.get('WHATSAPP_API_URL', DEFAULT_API_URL))
    timeout: int = field(default_factory=lambda: settings.QUICKBOM.get('WHATSAPP_TIMEOUT', 15))
    default_source: str = field(default_factory=lambda: settings.QUICKBOM.get('WHATSAPP_DEFAULT_SOURCE', 'QuickBom'))

    # =========================================================================
    # SENDING
    # =========================================================================

    def send_message(self, phone_number: str, message: str, source: Optional[str] = None) -> WhatsAppResult:
        return self.send_multi_message([phone_number], message, source)

    def send_multi_message(
        self,
        phone_numbers: List[str],
        message: str,
        source: Optional[str] = None
    ) -> WhatsAppResult:
        """POST one message to several recipients."""
        phone_numbers = [p for p in (phone_numbers or []) if p]
        if not phone_numbers:
            return WhatsAppResult(success=False, error='At least one phone number is required')
        if not message or not message.strip():
            return WhatsAppResult(success=False, error='Message content is required')

        payload = {
            'phone_num': phone_numbers,
            'message': message.strip(),
            'source': source or self.default_source,
        }

        try:
            response = requests.post(self.api_url, json=payload, timeout=self.timeout)
            try:
                body = response.json()
            except ValueError:
                body = {}

            if not response.ok:
                error = body.get('message') if isinstance(body, dict) else None
                logger.warning(
                    f"WhatsApp gateway rejected message to {len(phone_numbers)} recipient(s): "
                    f"HTTP {response.status_code}"
                )
                return WhatsAppResult(success=False, error=error or 'Failed to send WhatsApp message')

            logger.info(f"Sent WhatsApp message to {len(phone_numbers)} recipient(s), source={payload['source']}")
            return WhatsAppResult(success=True, message='WhatsApp message sent successfully', data=body)

        except requests.RequestException as e:
            logger.error(f"WhatsApp gateway request failed: {e}")
            return WhatsAppResult(success=False, error=str(e) or 'Unknown error occurred')

    def send_project_notification(
        self,
        phone_numbers: List[str],
        project_name: str,
        notification_type: str,
        details: Optional[str] = None
    ) -> WhatsAppResult:
        if notification_type not in PROJECT_NOTIFICATION_TYPES:
            return WhatsAppResult(success=False, error=f'Unknown notification type: {notification_type}')
        message = self.project_message(project_name, notification_type, details)
        return self.send_multi_message(phone_numbers, message, 'QuickBom-Project')

    def send_timeline_notification(
        self,
        phone_numbers: List[str],
        project_name: str,
        event_type: str,
        details: Optional[str] = None
    ) -> WhatsAppResult:
        if event_type not in TIMELINE_EVENT_TYPES:
            return WhatsAppResult(success=False, error=f'Unknown event type: {event_type}')
        message = self.timeline_message(project_name, event_type, details)
        return self.send_multi_message(phone_numbers, message, 'QuickBom-Timeline')

    def send_bulk_messages(
        self,
        phone_numbers: List[str],
        message: str,
        source: Optional[str] = None,
        batch_size: int = 10,
        delay: float = 1.0
    ) -> WhatsAppResult:
        """
        Send in batches of `batch_size`, sleeping `delay` seconds between batches.

        The delay is clamped to 0..MAX_BULK_DELAY and the batch size to
        1..MAX_BULK_BATCH_SIZE.
        """
        batch_size = min(max(int(batch_size or 10), 1), MAX_BULK_BATCH_SIZE)
        delay = min(max(float(delay or 0), 0.0), MAX_BULK_DELAY)
        batches = [
            phone_numbers[i:i + batch_size]
            for i in range(0, len(phone_numbers), batch_size)
        ]

        results = []
        for index, batch in enumerate(batches):
            results.append(self.send_multi_message(batch, message, source).to_dict())
            if delay and index < len(batches) - 1:
                time.sleep(delay)

        successful = sum(1 for r in results if r['success'])
        failed = len(results) - successful
        all_ok = failed == 0

        return WhatsAppResult(
            success=all_ok,
            message=(
                f'Successfully sent {len(phone_numbers)} messages' if all_ok
                else 'Some messages failed. Check individual results.'
            ),
            data={
                'total': len(phone_numbers),
                'successful': successful,
                'failed': failed,
                'results': results,
            },
        )

    # =========================================================================
    # TEMPLATES
    # =========================================================================

    @staticmethod
    def project_message(project_name: str, notification_type: str, details: Optional[str] = None) -> str:
        details_line = f"\nDetails: {details}" if details else ''
        templates = {
            'created': (
                f"🎉 *Project Created*\n\nProject: {project_name}\n"
                f"Status: New project has been created\n\n{FOOTER}"
            ),
            'updated': (
                f"📝 *Project Updated*\n\nProject: {project_name}\n"
                f"Status: Project has been updated\n"
                f"{details_line}\n\n{FOOTER}"
            ),
            'completed': (
                f"✅ *Project Completed*\n\nProject: {project_name}\n"
                f"Status: Project has been completed successfully!\n\n"
                f"🎊 Congratulations!\n\n{FOOTER}"
            ),
            'overdue': (
                f"⚠️ *Project Overdue Alert*\n\nProject: {project_name}\n"
                f"Status: Project is running behind schedule\n\n"
                f"Please review and take necessary actions.\n\n{FOOTER}"
            ),
            'milestone': (
                f"🏆 *Milestone Achieved*\n\nProject: {project_name}\n"
                f"Status: Milestone completed!\n{details_line}\n\n{FOOTER}"
            ),
            'task': (
                f"📋 *Task Update*\n\nProject: {project_name}\n"
                f"Status: Task status changed\n{details_line}\n\n{FOOTER}"
            ),
        }
        return templates[notification_type]

    @staticmethod
    def timeline_message(project_name: str, event_type: str, details: Optional[str] = None) -> str:
        details_line = f"\nDetails: {details}" if details else ''
        templates = {
            'timeline_created': (
                f"📅 *Timeline Created*\n\nProject: {project_name}\n"
                f"Status: Project timeline has been established\n\n"
                f"You can now track project progress.\n\n{FOOTER}"
            ),
            'task_completed': (
                f"✅ *Task Completed*\n\nProject: {project_name}\n"
                f"Status: Task has been completed\n{details_line}\n\n{FOOTER}"
            ),
            'milestone_completed': (
                f"🏆 *Milestone Completed*\n\nProject: {project_name}\n"
                f"Status: Important milestone achieved!\n{details_line}\n\n"
                f"🎉 Great progress!\n\n{FOOTER}"
            ),
            'delay_warning': (
                f"⚠️ *Schedule Delay Warning*\n\nProject: {project_name}\n"
                f"Status: Potential delay detected\n{details_line}\n\n"
                f"Please review the timeline.\n\n{FOOTER}"
            ),
        }
        return templates[event_type]

    # =========================================================================
    # PHONE NUMBERS
    # =========================================================================

    @staticmethod
    def validate_phone_number(phone_number: str) -> bool:
        """Indonesian mobile number: +62/62/0 prefix, then 8 or 9, then 7-11 digits."""
        if not phone_number:
            return False
        return bool(PHONE_PATTERN.match(re.sub(r'\s', '', phone_number)))

    @staticmethod
    def format_phone_number(phone_number: str) -> str:
        """Normalise to the 62XXXXXXXXX form the gateway expects."""
        cleaned = re.sub(r'\D', '', phone_number or '')
        if cleaned.startswith('0'):
            return '62' + cleaned[1:]
        if cleaned.startswith(('8', '9')):
            return '62' + cleaned
        if not cleaned.startswith('62'):
            return '62' + cleaned
        return cleaned
