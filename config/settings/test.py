"""
Test settings: SQLite and in-memory image storage.
"""
from .base import *

DEBUG = False

SECRET_KEY = 'django-insecure-test-key-for-unit-tests-only'

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

IMAGE_STORAGE_BACKEND = 'memory'

AWS_STORAGE_BUCKET_NAME = 'test-bucket'
AWS_ACCESS_KEY_ID = 'test-key'
AWS_SECRET_ACCESS_KEY = 'test-secret'

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']
