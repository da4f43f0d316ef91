"""
WhatsApp Views.

Direct access to the WhatsApp gateway: single, multi-recipient, project,
timeline and bulk messages, plus phone number validation.
"""

import logging
import math

from django.conf import settings
from django.utils import timezone
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from infrastructure.notifications.whatsapp import (
    MAX_RECIPIENTS,
    PROJECT_NOTIFICATION_TYPES,
    TIMELINE_EVENT_TYPES,
    WhatsAppService,
)

logger = logging.getLogger(__name__)


USAGE = {
    'success': True,
    'message': 'WhatsApp API endpoint',
    'endpoints': {
        'POST /whatsapp/': 'Send WhatsApp messages',
        'GET /whatsapp/?action=test': 'Test service availability',
        'GET /whatsapp/?action=validate&phone=6281234567890': 'Validate phone number',
    },
    'examples': {
        'single_message': {
            'phone_number': '6281234567890',
            'message': 'Hello from QuickBom!',
        },
        'multiple_messages': {
            'phone_numbers': ['6281234567890', '6289876543210'],
            'message': 'Message from QuickBom!',
        },
        'project_notification': {
            'type': 'project',
            'phone_numbers': ['6281234567890'],
            'project_name': 'New Construction Project',
            'notification_type': 'created',
            'details': 'Project budget: IDR 500,000,000',
        },
        'timeline_notification': {
            'type': 'timeline',
            'phone_numbers': ['6281234567890'],
            'project_name': 'New Construction Project',
            'event_type': 'task_completed',
        },
        'bulk_messaging': {
            'type': 'bulk',
            'phone_numbers': ['6281234567890', '6289876543210', '6285556667777'],
            'message': 'Important announcement from QuickBom!',
            'batch_size': 10,
            'delay': 1.0,
        },
    },
}

DISPATCH_TYPES = ('project', 'timeline', 'bulk')


class WhatsAppViewSet(viewsets.ViewSet):
    """
    Endpoints:
    - GET /whatsapp/ - usage, ?action=test, ?action=validate&phone=
    - POST /whatsapp/ - send; the body shape picks the kind of message
    """

    permission_classes = [IsAuthenticated]

    def get_service(self):
        return WhatsAppService()

    def _result_response(self, result):
        return Response(
            result.to_dict(),
            status=status.HTTP_200_OK if result.success else status.HTTP_502_BAD_GATEWAY
        )

    def _error(self, message):
        return Response(
            {'success': False, 'error': message},
            status=status.HTTP_400_BAD_REQUEST
        )

    def list(self, request):
        action = request.query_params.get('action')
        phone = request.query_params.get('phone')

        if action == 'validate' and phone:
            is_valid = WhatsAppService.validate_phone_number(phone)
            return Response({
                'success': True,
                'phone_number': phone,
                'is_valid': is_valid,
                'formatted': WhatsAppService.format_phone_number(phone),
                'message': 'Phone number is valid' if is_valid else 'Phone number format is invalid',
            })

        if action == 'test':
            return Response({
                'success': True,
                'message': 'WhatsApp service is available',
                'service': 'IoTech WhatsApp API',
                'endpoint': self.get_service().api_url,
                'timestamp': timezone.now(),
            })

        return Response(USAGE)

    def create(self, request):
        data = request.data
        service = self.get_service()
        source = data.get('source') or settings.QUICKBOM['WHATSAPP_API_SOURCE']

        message = (data.get('message') or '').strip()
        phone_number = data.get('phone_number')
        phone_numbers = data.get('phone_numbers') or []
        request_type = data.get('type')
        project_name = data.get('project_name')
        details = data.get('details')

        if not isinstance(phone_numbers, list):
            return self._error('phone_numbers must be a list')
        if len(phone_numbers) > MAX_RECIPIENTS:
            return self._error(f'At most {MAX_RECIPIENTS} recipients per request')

        if phone_number and message:
            return self._result_response(service.send_message(phone_number, message, source))

        if phone_numbers and message and request_type not in DISPATCH_TYPES:
            return self._result_response(service.send_multi_message(phone_numbers, message, source))

        if request_type == 'project' and phone_numbers and project_name and data.get('notification_type'):
            notification_type = data['notification_type']
            if notification_type not in PROJECT_NOTIFICATION_TYPES:
                return self._error(f'Unknown notification type: {notification_type}')
            return self._result_response(service.send_project_notification(
                phone_numbers, project_name, notification_type, details
            ))

        if request_type == 'timeline' and phone_numbers and project_name and data.get('event_type'):
            event_type = data['event_type']
            if event_type not in TIMELINE_EVENT_TYPES:
                return self._error(f'Unknown event type: {event_type}')
            return self._result_response(service.send_timeline_notification(
                phone_numbers, project_name, event_type, details
            ))

        if request_type == 'bulk' and phone_numbers and message:
            try:
                batch_size = int(data.get('batch_size') or 10)
                delay = float(data.get('delay', 1.0))
            except (TypeError, ValueError):
                return self._error('batch_size and delay must be numbers')
            if not math.isfinite(delay):
                return self._error('batch_size and delay must be numbers')
            logger.info(f"Bulk WhatsApp send to {len(phone_numbers)} recipient(s) by {request.user}")
            return self._result_response(service.send_bulk_messages(
                phone_numbers, message, source, batch_size=batch_size, delay=delay
            ))

        return self._error('Invalid request parameters')
