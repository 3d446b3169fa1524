"""Test settings for the villa reservations project.

File-backed SQLite so threaded tests share one database, a locmem email
outbox and eager Celery. The suite runs without external services.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'test.sqlite3',  # noqa: F405
        'OPTIONS': {'transaction_mode': 'IMMEDIATE', 'timeout': 20},
        'TEST': {'NAME': BASE_DIR / 'test_db.sqlite3'},  # noqa: F405
    }
}

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

OWNER_EMAIL = 'owner@villa.test'

RESERVATIONS = {
    **RESERVATIONS,  # noqa: F405
    'FREEZE_HOURS': 24,
    'MAX_GUESTS': 2,
    'ADD_ON_SURCHARGE': 0,
    'CALENDAR_GATEWAY': 'apps.reservations.calendar.LoggingCalendarGateway',
}

LOGGING['loggers']['apps']['level'] = 'WARNING'  # noqa: F405
LOGGING['loggers']['shared']['level'] = 'WARNING'  # noqa: F405
