"""Opt-in contract for events that should reach Google Analytics.

An event class inherits :class:`BroadcastToAnalytics` to be sent as an
event hit. Two optional methods customise the hit:

``with_analytics(call)``
    Receives the :class:`~apps.analytics.services.AnalyticsCall` after the
    defaults are filled in and may change any field (label, value, or the
    client id for flows that run outside the visitor's request).

``broadcast_analytics_action_as()``
    Returns the event action to use instead of the class name.
"""

from __future__ import annotations

from typing import Any, Callable, Optional


class BroadcastToAnalytics:
    """Marker base class; carries no behaviour."""


def should_broadcast(event: Any) -> bool:
    return isinstance(event, BroadcastToAnalytics)


def default_event_action(event: Any) -> str:
    """``shop.events.OrderWasCreated`` -> ``OrderWasCreated``."""

    return type(event).__name__


def event_action_for(event: Any) -> str:
    custom = _hook(event, "broadcast_analytics_action_as")
    if custom is not None:
        return custom()
    return default_event_action(event)


def customisation_hook(event: Any) -> Optional[Callable[[Any], None]]:
    return _hook(event, "with_analytics")


def _hook(event: Any, name: str) -> Optional[Callable[..., Any]]:
    method = getattr(event, name, None)
    return method if callable(method) else None


__all__ = [
    "BroadcastToAnalytics",
    "customisation_hook",
    "default_event_action",
    "event_action_for",
    "should_broadcast",
]
