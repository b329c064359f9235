"""Immutable Google Analytics settings resolved from Django settings."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver

from apps.core.services import DEFAULT_QUEUE

MEASUREMENT_HOST = "www.google-analytics.com"
MEASUREMENT_SSL_HOST = "ssl.google-analytics.com"


@dataclass(frozen=True)
class AnalyticsSettings:
    tracking_id: str | None = None
    enabled: bool = True
    use_ssl: bool = True
    anonymize_ip: bool = True
    send_user_id: bool = False
    queue_name: str | None = None
    client_id_session_key: str = "google_analytics_client_id"
    http_uri: str = "/gaid"
    default_category: str = "App"
    debug: bool = False
    timeout: float = 5.0

    @property
    def endpoint(self) -> str:
        scheme, host = ("https", MEASUREMENT_SSL_HOST) if self.use_ssl else ("http", MEASUREMENT_HOST)
        path = "/debug/collect" if self.debug else "/collect"
        return f"{scheme}://{host}{path}"

    @property
    def effective_queue_name(self) -> str:
        return self.queue_name or DEFAULT_QUEUE


@lru_cache(maxsize=1)
def get_analytics_settings() -> AnalyticsSettings:
    """Read the GOOGLE_ANALYTICS_* settings once per process."""

    return AnalyticsSettings(
        tracking_id=getattr(settings, "GOOGLE_ANALYTICS_TRACKING_ID", None) or None,
        enabled=bool(getattr(settings, "GOOGLE_ANALYTICS_ENABLED", True)),
        use_ssl=bool(getattr(settings, "GOOGLE_ANALYTICS_USE_SSL", True)),
        anonymize_ip=bool(getattr(settings, "GOOGLE_ANALYTICS_ANONYMIZE_IP", True)),
        send_user_id=bool(getattr(settings, "GOOGLE_ANALYTICS_SEND_USER_ID", False)),
        queue_name=getattr(settings, "GOOGLE_ANALYTICS_QUEUE_NAME", None) or None,
        client_id_session_key=getattr(
            settings, "GOOGLE_ANALYTICS_CLIENT_ID_SESSION_KEY", "google_analytics_client_id"
        ),
        http_uri=getattr(settings, "GOOGLE_ANALYTICS_HTTP_URI", "/gaid"),
        default_category=getattr(settings, "GOOGLE_ANALYTICS_DEFAULT_CATEGORY", "App"),
        debug=bool(getattr(settings, "GOOGLE_ANALYTICS_DEBUG", False)),
        timeout=float(getattr(settings, "GOOGLE_ANALYTICS_TIMEOUT", 5.0)),
    )


@receiver(setting_changed)
def _reset_analytics_settings(sender, setting: str, **kwargs) -> None:
    if setting.startswith("GOOGLE_ANALYTICS_"):
        get_analytics_settings.cache_clear()


__all__ = [
    "AnalyticsSettings",
    "get_analytics_settings",
]
