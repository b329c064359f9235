"""Forward application events to Google Analytics."""

from .contracts import BroadcastToAnalytics

__all__ = ["BroadcastToAnalytics"]
