"""Django settings for the athlete network social service.

All deployment-specific values are read from environment variables so the
same image can run locally, in staging and in production.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-local-development-key")

DEBUG = _env_bool("DJANGO_DEBUG", default=False)

ALLOWED_HOSTS = [
    host.strip()
    for host in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    "rest_framework",
    "social",
]

MIDDLEWARE = [
    "social.middleware.request_id.RequestIDMiddleware",
    "social.middleware.process_time.ProcessTimeMiddleware",
    "social.middleware.security_headers.SecurityHeadersMiddleware",
    "social.middleware.rate_limit.RateLimitMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "social.middleware.security_context.SecurityContextMiddleware",
]

ROOT_URLCONF = "athlete_network.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "athlete_network.wsgi.application"

# Database (schema is owned by the platform database, not this service)
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("POSTGRES_DB", "athlete_network"),
        "USER": os.getenv("POSTGRES_USER", "postgres"),
        "PASSWORD": os.getenv("POSTGRES_PASSWORD", ""),
        "HOST": os.getenv("POSTGRES_HOST", "localhost"),
        "PORT": os.getenv("POSTGRES_PORT", "5432"),
        "OPTIONS": {
            "options": f"-c search_path={os.getenv('POSTGRES_SCHEMA', 'public')}",
        },
        "CONN_MAX_AGE": int(os.getenv("POSTGRES_CONN_MAX_AGE", "60")),
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": os.getenv("REDIS_URL", "redis://localhost:6379/0"),
        "KEY_PREFIX": "athlete-network",
    }
}

AUTH_PASSWORD_VALIDATORS: list[dict[str, str]] = []

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "social.auth.bearer.BearerTokenAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "EXCEPTION_HANDLER": "social.exceptions.handlers.custom_exception_handler",
    "UNAUTHENTICATED_USER": None,
}

# Authentication: Supabase-style access tokens
JWT_SECRET = os.getenv("JWT_SECRET", "")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "authenticated")
JWT_ALGORITHMS = ["HS256"]
AUTH_INTROSPECTION_ENABLED = _env_bool("AUTH_INTROSPECTION_ENABLED", default=False)
AUTH_SERVICE_URL = os.getenv("AUTH_SERVICE_URL", "http://localhost:54321")
AUTH_USER_URL = f"{AUTH_SERVICE_URL.rstrip('/')}/auth/v1/user"
AUTH_SERVICE_API_KEY = os.getenv("AUTH_SERVICE_API_KEY", "")
AUTH_TOKEN_CACHE_PREFIX = "auth_token:"
AUTH_TOKEN_CACHE_TTL = int(os.getenv("AUTH_TOKEN_CACHE_TTL", "60"))
AUTH_REQUEST_TIMEOUT = float(os.getenv("AUTH_REQUEST_TIMEOUT", "5"))

# Rate limiting
RATE_LIMIT_REQUESTS = int(os.getenv("RATE_LIMIT_REQUESTS", "100"))
RATE_LIMIT_WINDOW = int(os.getenv("RATE_LIMIT_WINDOW", "60"))

# Notification feed paging
NOTIFICATION_PAGE_SIZE = int(os.getenv("NOTIFICATION_PAGE_SIZE", "20"))
NOTIFICATION_MAX_PAGE_SIZE = int(os.getenv("NOTIFICATION_MAX_PAGE_SIZE", "100"))

TEST_MODE = False
