"""Sample application events used across the analytics tests."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from apps.analytics.contracts import BroadcastToAnalytics


@dataclass
class OrderWasCreated(BroadcastToAnalytics):
    order_id: int = 1


@dataclass
class OrderWasShipped(BroadcastToAnalytics):
    order_id: int = 1

    def broadcast_analytics_action_as(self) -> str:
        return "Order Shipped"


@dataclass
class PaymentWasCaptured(BroadcastToAnalytics):
    amount: float = 12.34
    customer_client_id: str | None = None

    def with_analytics(self, call) -> None:
        call.event_category = "Payments"
        call.event_label = "card"
        call.event_value = self.amount
        if self.customer_client_id:
            call.client_id = self.customer_client_id


@dataclass
class ValueOnlyEvent(BroadcastToAnalytics):
    def with_analytics(self, call) -> None:
        call.event_value = 12.34


@dataclass
class BrokenHookEvent(BroadcastToAnalytics):
    def with_analytics(self, call) -> None:
        raise RuntimeError("misconfigured analytics hook")


@dataclass
class UserLoggedIn:
    user_id: int = 1


@dataclass
class PricedOrder(BroadcastToAnalytics):
    total: Decimal = Decimal("12.34")

    def with_analytics(self, call) -> None:
        call.event_value = self.total
