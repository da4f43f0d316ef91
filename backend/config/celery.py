"""
Celery configuration for QuickBom project.
"""

import os

from celery import Celery

# Set the default Django settings module
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

app = Celery('quickbom')

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Task modules live outside Django apps, so list them explicitly.
app.conf.imports = (
    'application.tasks.notification_tasks',
    'application.tasks.project_tasks',
)

# Configure task routes
app.conf.task_routes = {
    'application.tasks.notification_tasks.*': {'queue': 'notifications'},
    'application.tasks.project_tasks.*': {'queue': 'projects'},
}

# Configure task schedules (periodic tasks)
app.conf.beat_schedule = {
    'notify-overdue-projects': {
        'task': 'application.tasks.notification_tasks.notify_overdue_projects',
        'schedule': 3600.0 * 6,  # Every 6 hours
    },
    'refresh-timeline-progress': {
        'task': 'application.tasks.project_tasks.refresh_timeline_progress',
        'schedule': 86400.0,  # Every 24 hours
    },
}

