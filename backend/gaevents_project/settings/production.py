"""Production settings."""

from __future__ import annotations

import os

from .base import *  # noqa: F401,F403

DEBUG = False

# Security hardening defaults; values should be overridden via environment variables.
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_SSL_REDIRECT = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_HSTS_SECONDS = int(os.getenv("DJANGO_SECURE_HSTS_SECONDS", 3600))
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

CORS_ALLOW_ALL_ORIGINS = False

if not SECRET_KEY or SECRET_KEY == "development-secret-key":  # noqa: F405
    raise RuntimeError("DJANGO_SECRET_KEY must be set in production environment")

if not ALLOWED_HOSTS:  # noqa: F405
    raise RuntimeError("DJANGO_ALLOWED_HOSTS must be configured for production")

if GOOGLE_ANALYTICS_ENABLED and not GOOGLE_ANALYTICS_TRACKING_ID:  # noqa: F405
    raise RuntimeError("GOOGLE_ANALYTICS_TRACKING_ID must be set when analytics is enabled")

if GOOGLE_ANALYTICS_ENABLED and not REDIS_URL:  # noqa: F405
    raise RuntimeError("REDIS_URL must be set so analytics hits reach run_analytics_worker")
