# config/settings/test.py

import tempfile

from .base import *

# === TESTES ===

DEBUG = False

SECRET_KEY = 'kanban-sync-test-key'

ALLOWED_HOSTS = ['testserver', 'localhost', '127.0.0.1']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
        'TEST': {
            'NAME': BASE_DIR / 'test_db.sqlite3',
        },
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'kanban-test-cache',
    }
}

CHANNEL_LAYERS = {
    'default': {
        'BACKEND': 'channels.layers.InMemoryChannelLayer'
    }
}

# Hash rápido para acelerar os testes
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

MEDIA_ROOT = Path(tempfile.mkdtemp(prefix='kanban-media-'))

KANBAN_AUTH_TIMEOUT = 2.0

# Logging apenas no console e sem ruído
LOGGING['handlers'] = {
    'console': {
        'level': 'WARNING',
        'class': 'logging.StreamHandler',
        'formatter': 'simple',
    },
}
LOGGING['root'] = {'handlers': ['console'], 'level': 'WARNING'}
LOGGING['loggers'] = {
    'apps': {'handlers': ['console'], 'level': 'WARNING', 'propagate': False},
}
