"""
Development settings for QuickBom project.

Runs without Redis: local memory cache, and Celery tasks execute inline
unless CELERY_EAGER is switched off.
"""

from .base import *

DEBUG = True

ALLOWED_HOSTS = ['*']

# =============================================================================
# INSTALLED APPS / MIDDLEWARE - Development
# =============================================================================
INSTALLED_APPS += [
    'debug_toolbar',
    'django_extensions',
]

MIDDLEWARE = ['debug_toolbar.middleware.DebugToolbarMiddleware'] + MIDDLEWARE

INTERNAL_IPS = ['127.0.0.1', 'localhost']

# API responses are JSON; the toolbar only renders on admin and schema pages
DEBUG_TOOLBAR_CONFIG = {
    'SHOW_TOOLBAR_CALLBACK': lambda request: DEBUG and not request.path.startswith('/api/v1/'),
    'DISABLE_PANELS': {
        'debug_toolbar.panels.profiling.ProfilingPanel',
    },
}

# =============================================================================
# CORS - frontend dev server
# =============================================================================
CORS_ALLOW_ALL_ORIGINS = True

# =============================================================================
# CACHE (No Redis required)
# =============================================================================
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'quickbom-dev-cache',
    }
}

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []
REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'] = {}

# =============================================================================
# CELERY - Development
# =============================================================================
# Notifications and the overdue sweep run in-process so WhatsApp sends can be
# traced from the runserver console.
CELERY_TASK_ALWAYS_EAGER = config('CELERY_EAGER', default=True, cast=bool)
CELERY_TASK_EAGER_PROPAGATES = True
if CELERY_TASK_ALWAYS_EAGER:
    CELERY_BROKER_URL = 'memory://'
    CELERY_RESULT_BACKEND = 'cache+memory://'

# =============================================================================
# QUICKBOM - Development
# =============================================================================
QUICKBOM['WHATSAPP_DEFAULT_SOURCE'] = 'QuickBom-Dev'

# =============================================================================
# LOGGING - Development
# =============================================================================
LOGGING['root']['level'] = 'DEBUG'
LOGGING['loggers']['quickbom']['level'] = 'DEBUG'
