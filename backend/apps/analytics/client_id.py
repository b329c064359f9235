"""Resolve the Google Analytics client id attached to server-side hits."""

from __future__ import annotations

import logging
import uuid
from typing import Any, MutableMapping, Optional

from .config import AnalyticsSettings

logger = logging.getLogger(__name__)


def resolve_client_id(
    request,
    config: AnalyticsSettings,
    *,
    explicit: Optional[str] = None,
    generate: bool = True,
) -> Optional[str]:
    """Return the client id for a hit.

    ``explicit`` always wins; callers running outside a visitor request
    (webhooks, queued jobs) must pass the id they stored themselves. With a
    session, the id stored under ``config.client_id_session_key`` is used;
    if none is stored yet and ``generate`` is set, a fresh UUID is stored so
    later hits from the same visitor group together. Without a session the
    hit goes out anonymous (``None``).
    """

    if explicit:
        return explicit

    session = getattr(request, "session", None) if request is not None else None
    if session is None:
        return None

    client_id = session.get(config.client_id_session_key)
    if client_id:
        return client_id

    if not generate:
        return None

    client_id = str(uuid.uuid4())
    session[config.client_id_session_key] = client_id
    logger.debug("Generated analytics client id for session")
    return client_id


def store_client_id(session: MutableMapping[str, Any], client_id: str, key: str) -> bool:
    """Persist ``client_id`` under ``key``; returns False when already stored."""

    if session.get(key) == client_id:
        return False
    session[key] = client_id
    return True


__all__ = ["resolve_client_id", "store_client_id"]
