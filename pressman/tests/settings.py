"""
Django settings for Pressman tests.

Includes all apps needed to run the full Pressman test suite.
"""

SECRET_KEY = "test-secret-key-for-pressman-tests"

DEBUG = True

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "simple_history",
    "rest_framework",
    "pressman",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

ROOT_URLCONF = "pressman.tests.test_api_urls"

USE_TZ = True
TIME_ZONE = "America/Sao_Paulo"

REST_FRAMEWORK = {
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
}

# Orders go to the ORM; toasts and notifications are buffered for assertions
PRESSMAN = {
    "STORE_BACKEND": "pressman.adapters.django_store.DjangoStore",
    "SINK": "pressman.adapters.sink.BufferedSink",
}
