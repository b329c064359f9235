"""ASGI config for the Google Analytics event bridge."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "gaevents_project.settings.production")

application = get_asgi_application()
