"""
Test settings for QuickBom project.

SQLite database, eager Celery and a throwaway media root.
"""

import tempfile

from .base import *

DEBUG = False

ALLOWED_HOSTS = ['*']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'quickbom-test-cache',
    }
}

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []
REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'] = {}

MEDIA_ROOT = tempfile.mkdtemp(prefix='quickbom-test-media-')

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = False
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

LOGGING['handlers']['file'] = {'class': 'logging.NullHandler'}
LOGGING['root']['level'] = 'WARNING'
for _logger in LOGGING['loggers'].values():
    _logger['level'] = 'WARNING'
