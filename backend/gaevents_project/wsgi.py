"""WSGI config for the Google Analytics event bridge."""

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "gaevents_project.settings.production")

application = get_wsgi_application()
