"""Build and deliver Google Analytics measurement protocol event hits."""

from __future__ import annotations

import logging
from decimal import Decimal
from dataclasses import asdict, dataclass, fields
from typing import Any, Optional

import httpx

from .config import AnalyticsSettings
from .contracts import customisation_hook, event_action_for

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "1"


class AnalyticsDeliveryError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class AnalyticsCall:
    """One outbound event hit."""

    event_action: str
    event_category: Optional[str] = None
    event_label: Optional[str] = None
    event_value: Optional[float] = None
    client_id: Optional[str] = None
    user_id: Optional[str] = None
    ip_override: Optional[str] = None
    user_agent: Optional[str] = None
    anonymize_ip: bool = False
    hit_type: str = "event"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalyticsCall":
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_params(self, tracking_id: str) -> dict[str, str]:
        """Render measurement protocol parameters, leaving out unset fields."""

        params: dict[str, str] = {"v": PROTOCOL_VERSION, "tid": tracking_id, "t": self.hit_type}
        optional = {
            "cid": self.client_id,
            "uid": self.user_id,
            "ec": self.event_category,
            "ea": self.event_action,
            "el": self.event_label,
            "ev": _render_value(self.event_value),
            "uip": self.ip_override,
            "ua": self.user_agent,
        }
        for key, value in optional.items():
            if value is None or value == "":
                continue
            params[key] = str(value)
        if self.anonymize_ip:
            params["aip"] = "1"
        return params


def _render_value(value: Optional[float]) -> Optional[int]:
    # The protocol only accepts whole numbers for ev.
    if value is None or value == "":
        return None
    return int(round(float(value)))


def _coerce_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def _authenticated_user_id(request) -> Optional[str]:
    user = getattr(request, "user", None)
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    return str(user.pk)


def build_analytics_call(
    event: Any,
    client_id: Optional[str],
    config: AnalyticsSettings,
    *,
    request=None,
) -> AnalyticsCall:
    """Assemble the hit for ``event``; the event's own hook runs last.

    Exceptions raised by the event's ``with_analytics`` hook propagate.
    """

    call = AnalyticsCall(
        event_action=event_action_for(event),
        event_category=config.default_category,
        client_id=client_id,
        anonymize_ip=config.anonymize_ip,
    )

    if request is not None:
        call.ip_override = request.META.get("REMOTE_ADDR") or None
        call.user_agent = request.META.get("HTTP_USER_AGENT") or None
        if config.send_user_id:
            call.user_id = _authenticated_user_id(request)

    hook = customisation_hook(event)
    if hook is not None:
        hook(call)

    # The hook may blank the category; fall back without touching other fields.
    if not call.event_category:
        call.event_category = config.default_category
    call.event_value = _coerce_value(call.event_value)
    return call


class MeasurementProtocolClient:
    """Thin httpx wrapper posting hits to the collect endpoint."""

    def __init__(self, *, tracking_id: str, endpoint: str, timeout: float = 5.0) -> None:
        if not tracking_id:
            raise ValueError("Google Analytics tracking id is required")
        self._tracking_id = tracking_id
        self._endpoint = endpoint
        self._timeout = timeout

    @classmethod
    def from_settings(cls, config: AnalyticsSettings) -> "MeasurementProtocolClient":
        return cls(
            tracking_id=config.tracking_id or "",
            endpoint=config.endpoint,
            timeout=config.timeout,
        )

    def send(self, call: AnalyticsCall) -> httpx.Response:
        params = call.to_params(self._tracking_id)
        headers = {"User-Agent": call.user_agent} if call.user_agent else None
        try:
            response = httpx.post(
                self._endpoint,
                data=params,
                headers=headers,
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            raise AnalyticsDeliveryError(f"Analytics request failed: {exc}") from exc

        if response.status_code >= 300:
            raise AnalyticsDeliveryError(
                f"Analytics endpoint returned {response.status_code}",
                status_code=response.status_code,
            )

        logger.debug("Sent analytics hit %s to %s", call.event_action, self._endpoint)
        return response


__all__ = [
    "AnalyticsCall",
    "AnalyticsDeliveryError",
    "MeasurementProtocolClient",
    "build_analytics_call",
]
