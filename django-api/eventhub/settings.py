"""Django settings for the EventHub API.

Every value can be overridden from the environment. ``MONGODB_URI`` has no
default: the process refuses to start without it.
"""

import os
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ImproperlyConfigured(f"{name} must be an integer, got {raw!r}") from None


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-only-not-secret")
DEBUG = os.environ.get("DJANGO_DEBUG", "false").lower() in ("1", "true", "yes")
ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "events.apps.EventsConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "eventhub.urls"
WSGI_APPLICATION = "eventhub.wsgi.application"

# Events and bookings live in MongoDB; Django's own ORM is unused.
DATABASES: dict = {}

USE_TZ = True
TIME_ZONE = "UTC"

# --- MongoDB ---

MONGODB_URI = os.environ.get("MONGODB_URI")
if not MONGODB_URI:
    raise ImproperlyConfigured(
        "Please define the MONGODB_URI environment variable"
    )

MONGODB_DB_NAME = os.environ.get("MONGODB_DB_NAME", "eventhub")

MONGODB_OPTIONS = {
    "maxPoolSize": _env_int("MONGODB_MAX_POOL_SIZE", 10),
    "minPoolSize": _env_int("MONGODB_MIN_POOL_SIZE", 5),
    "socketTimeoutMS": _env_int("MONGODB_SOCKET_TIMEOUT_MS", 45000),
    "serverSelectionTimeoutMS": _env_int("MONGODB_SERVER_SELECTION_TIMEOUT_MS", 10000),
}

# --- Cloudinary ---

# Left empty, the SDK falls back to CLOUDINARY_URL.
CLOUDINARY = {
    "cloud_name": os.environ.get("CLOUDINARY_CLOUD_NAME"),
    "api_key": os.environ.get("CLOUDINARY_API_KEY"),
    "api_secret": os.environ.get("CLOUDINARY_API_SECRET"),
}

# --- Django REST Framework ---

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.FormParser",
        "rest_framework.parsers.MultiPartParser",
    ],
    "EXCEPTION_HANDLER": "events.handlers.exceptions.api_exception_handler",
}

# --- Logging ---

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "events": {
            "handlers": ["console"],
            "level": os.environ.get("LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
