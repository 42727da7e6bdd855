"""
Django settings for Pointsman tests.

Includes all apps needed to run the full Pointsman test suite.
"""

SECRET_KEY = "test-secret-key-for-pointsman-tests"

DEBUG = True

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.admin",
    "django.contrib.sessions",
    "django.contrib.messages",
    "pointsman",
    "pointsman.contrib.quests",
    "pointsman.contrib.rewards",
    "pointsman.contrib.inbox",
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "pointsman-tests",
    }
}

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

USE_TZ = True
TIME_ZONE = "Europe/Moscow"

POINTSMAN = {
    "NOTIFICATION_BACKEND": "pointsman.adapters.inbox.InboxNotificationBackend",
}
