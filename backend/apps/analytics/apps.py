"""App configuration for the Google Analytics integration."""

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class AnalyticsAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.analytics"
    label = "analytics"
    verbose_name = "Google Analytics"

    def ready(self) -> None:  # pragma: no cover - executed at app startup
        from apps.core.events import application_event

        from .handlers import on_application_event

        application_event.connect(
            on_application_event,
            dispatch_uid="apps.analytics.handlers.on_application_event",
        )
        logger.debug("Analytics event receiver connected")
