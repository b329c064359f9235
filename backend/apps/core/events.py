"""Application event bus.

Domain code raises plain event objects through :func:`emit`; integrations
subscribe to :data:`application_event` like any other Django signal::

    from apps.core.events import emit

    emit(OrderWasCreated(order))

Receivers get ``event`` plus optional ``request`` and ``client_id`` keyword
arguments. ``client_id`` lets callers outside an HTTP request (webhooks,
queued jobs) hand over an analytics client id they persisted earlier.
"""

from __future__ import annotations

import logging
from typing import Any

from django.dispatch import Signal

logger = logging.getLogger(__name__)

application_event = Signal()


def emit(event: Any, *, request=None, client_id: str | None = None) -> list[tuple[Any, Any]]:
    """Send ``event`` to every receiver; receiver errors are logged, never raised."""

    responses = application_event.send_robust(
        sender=type(event),
        event=event,
        request=request,
        client_id=client_id,
    )
    for receiver, response in responses:
        if isinstance(response, Exception):
            logger.error(
                "Receiver %r failed for %s: %s",
                receiver,
                type(event).__name__,
                response,
                exc_info=(type(response), response, response.__traceback__),
            )
    return responses


__all__ = ["application_event", "emit"]
