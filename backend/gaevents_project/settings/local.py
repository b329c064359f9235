"""Local development settings."""

import os

from .base import *  # noqa: F401,F403

DEBUG = True
ALLOWED_HOSTS += ["127.0.0.1", "localhost", "testserver"]  # noqa: F405

# Allow all origins locally for convenience; tighten in production.
CORS_ALLOW_ALL_ORIGINS = True

# Hits go to the validation endpoint unless explicitly switched off.
GOOGLE_ANALYTICS_DEBUG = os.getenv("GOOGLE_ANALYTICS_DEBUG", "true").lower() == "true"
