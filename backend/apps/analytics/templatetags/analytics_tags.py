"""Template tags for handing the browser's client id to the server."""

from __future__ import annotations

from django import template
from django.middleware.csrf import get_token
from django.urls import reverse

from apps.analytics.config import get_analytics_settings

register = template.Library()


@register.inclusion_tag("analytics/client_id_script.html", takes_context=True)
def analytics_client_id_script(context) -> dict:
    """Render the snippet that POSTs the analytics.js client id once per change.

    Usage::

        {% load analytics_tags %}
        {% analytics_client_id_script %}
    """

    config = get_analytics_settings()
    request = context.get("request")
    if not config.enabled or request is None:
        return {"enabled": False}

    session = getattr(request, "session", None)
    stored = session.get(config.client_id_session_key) if session is not None else None
    return {
        "enabled": True,
        "endpoint": reverse("analytics:client-id"),
        "csrf_token": get_token(request),
        "stored_client_id": stored or "",
    }
