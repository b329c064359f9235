"""Forward broadcastable application events to Google Analytics."""

from __future__ import annotations

import logging
from typing import Any, Optional

from apps.core.middleware import get_current_request
from apps.core.services import BaseJobQueue, Job

from .client_id import resolve_client_id
from .config import AnalyticsSettings, get_analytics_settings
from .contracts import should_broadcast
from .dispatcher import dispatch
from .services import build_analytics_call

logger = logging.getLogger(__name__)


def broadcast(
    event: Any,
    *,
    request=None,
    client_id: Optional[str] = None,
    config: Optional[AnalyticsSettings] = None,
    queue: Optional[BaseJobQueue] = None,
) -> Optional[Job]:
    """Turn ``event`` into a queued hit.

    Never raises: analytics is a side effect of the event, so a failing
    customisation hook only drops this one hit.
    """

    if not should_broadcast(event):
        return None

    config = config or get_analytics_settings()
    if not config.enabled:
        return None

    event_name = type(event).__name__
    try:
        resolved = resolve_client_id(request, config, explicit=client_id)
        call = build_analytics_call(event, resolved, config, request=request)
    except Exception:
        logger.exception("Could not build analytics hit for %s; skipping", event_name)
        return None

    if not call.client_id:
        logger.debug("Sending %s without a client id", event_name)

    try:
        return dispatch(call, config, queue=queue)
    except Exception:
        logger.exception("Could not queue analytics hit for %s", event_name)
        return None


def on_application_event(sender, event=None, request=None, client_id=None, **kwargs) -> Optional[Job]:
    if event is None:
        return None
    if request is None:
        request = get_current_request()
    return broadcast(event, request=request, client_id=client_id)


__all__ = ["broadcast", "on_application_event"]
