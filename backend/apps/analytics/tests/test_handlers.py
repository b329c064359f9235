"""End-to-end tests from emitted application events to queued hits."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from django.http import HttpResponse
from django.test import RequestFactory

from apps.analytics.config import AnalyticsSettings
from apps.analytics.handlers import broadcast
from apps.analytics.tests.events import (
    BrokenHookEvent,
    OrderWasCreated,
    OrderWasShipped,
    PaymentWasCaptured,
    PricedOrder,
    UserLoggedIn,
    ValueOnlyEvent,
)
from apps.core.events import emit
from apps.core.middleware import CurrentRequestMiddleware
from apps.core.services import InMemoryJobQueue, RedisJobQueue


def _request_with_session(session):
    request = RequestFactory().post("/orders/")
    request.session = session
    request.user = SimpleNamespace(is_authenticated=False, pk=None)
    return request


def test_broadcastable_event_queues_exactly_one_hit(job_queue):
    emit(OrderWasCreated())

    jobs = job_queue.jobs("analytics")
    assert len(jobs) == 1
    assert jobs[0].payload["event_action"] == "OrderWasCreated"


def test_custom_action_reaches_queued_hit(job_queue):
    emit(OrderWasShipped())
    assert job_queue.jobs("analytics")[0].payload["event_action"] == "Order Shipped"


def test_non_broadcastable_event_is_ignored(job_queue):
    emit(UserLoggedIn())
    assert job_queue.pending("analytics") == 0
    assert broadcast(UserLoggedIn()) is None


@pytest.mark.parametrize(
    "event",
    [OrderWasCreated(), OrderWasShipped(), PaymentWasCaptured(), UserLoggedIn()],
)
def test_disabled_analytics_queues_nothing(job_queue, settings, event):
    settings.GOOGLE_ANALYTICS_ENABLED = False
    emit(event)
    assert job_queue.pending("analytics") == 0
    assert job_queue.pending("default") == 0


def test_session_client_id_is_attached(job_queue):
    request = _request_with_session({"google_analytics_client_id": "111.222"})
    emit(OrderWasCreated(), request=request)
    assert job_queue.jobs("analytics")[0].payload["client_id"] == "111.222"


def test_explicit_client_id_for_out_of_band_flows(job_queue):
    emit(OrderWasCreated(), client_id="persisted-on-order")
    assert job_queue.jobs("analytics")[0].payload["client_id"] == "persisted-on-order"


def test_without_request_hit_is_anonymous(job_queue):
    emit(OrderWasCreated())
    assert job_queue.jobs("analytics")[0].payload["client_id"] is None


def test_hook_value_is_carried_exactly(job_queue):
    emit(ValueOnlyEvent())
    payload = job_queue.jobs("analytics")[0].payload
    assert payload["event_value"] == 12.34
    assert payload["event_category"] == "App"


def test_anonymize_ip_applies_to_every_event(job_queue, settings):
    settings.GOOGLE_ANALYTICS_ANONYMIZE_IP = True
    for event in (OrderWasCreated(), OrderWasShipped(), PaymentWasCaptured(), ValueOnlyEvent()):
        emit(event)
    jobs = job_queue.jobs("analytics")
    assert len(jobs) == 4
    assert all(job.payload["anonymize_ip"] is True for job in jobs)


def test_failing_hook_drops_only_that_hit(job_queue):
    with patch("apps.analytics.handlers.logger") as mock_logger:
        responses = emit(BrokenHookEvent())
        emit(OrderWasCreated())

    assert all(not isinstance(response, Exception) for _, response in responses)
    jobs = job_queue.jobs("analytics")
    assert [job.payload["event_action"] for job in jobs] == ["OrderWasCreated"]
    mock_logger.exception.assert_called_once()
    assert "BrokenHookEvent" in mock_logger.exception.call_args.args


def test_broadcast_accepts_explicit_settings_and_queue(job_queue):
    other_queue = InMemoryJobQueue()
    config = AnalyticsSettings(tracking_id="UA-9-9", queue_name="custom")
    job = broadcast(OrderWasCreated(), config=config, queue=other_queue)

    assert job is not None
    assert other_queue.pending("custom") == 1
    assert job_queue.pending("analytics") == 0


def test_decimal_hook_value_survives_redis_queue():
    client = MagicMock()
    job = broadcast(PricedOrder(), queue=RedisJobQueue(client))

    assert job is not None
    key, raw = client.rpush.call_args.args
    assert key == "jobs:analytics"
    assert json.loads(raw)["payload"]["event_value"] == 12.34


def test_receiver_reads_session_client_id_of_current_request(job_queue):
    def view(request):
        emit(OrderWasCreated())
        return HttpResponse("created")

    request = _request_with_session({"google_analytics_client_id": "555.666"})
    request.META["HTTP_USER_AGENT"] = "checkout-browser"
    response = CurrentRequestMiddleware(view)(request)

    assert response.status_code == 200
    payload = job_queue.jobs("analytics")[0].payload
    assert payload["client_id"] == "555.666"
    assert payload["user_agent"] == "checkout-browser"
