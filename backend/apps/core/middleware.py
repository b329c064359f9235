"""Request-scoped context shared with code that has no request argument."""

from __future__ import annotations

from contextvars import ContextVar
from typing import Optional

from django.http import HttpRequest

_current_request: ContextVar[Optional[HttpRequest]] = ContextVar("current_request", default=None)


def get_current_request() -> Optional[HttpRequest]:
    """Return the request being handled, or None outside the request cycle."""

    return _current_request.get()


class CurrentRequestMiddleware:
    def __init__(self, get_response) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest):
        token = _current_request.set(request)
        try:
            return self.get_response(request)
        finally:
            _current_request.reset(token)


__all__ = ["CurrentRequestMiddleware", "get_current_request"]
