"""Tests for queueing and sending analytics hits."""

from __future__ import annotations

from unittest.mock import patch

import httpx

from apps.analytics.config import AnalyticsSettings, get_analytics_settings
from apps.analytics.dispatcher import SEND_HIT_TASK, dispatch
from apps.analytics.services import AnalyticsCall
from apps.analytics.tests.events import OrderWasCreated
from apps.core.events import emit
from apps.core.services import build_job_queue, drain, set_job_queue


def _ok(*args, **kwargs):
    return httpx.Response(200, request=httpx.Request("POST", args[0]))


def test_disabled_settings_create_no_job(job_queue):
    config = AnalyticsSettings(tracking_id="UA-1-1", enabled=False)
    assert dispatch(AnalyticsCall(event_action="A"), config, queue=job_queue) is None
    assert job_queue.pending("default") == 0


def test_missing_tracking_id_creates_no_job(job_queue):
    config = AnalyticsSettings(tracking_id=None)
    assert dispatch(AnalyticsCall(event_action="A"), config, queue=job_queue) is None
    assert job_queue.pending("default") == 0


def test_job_goes_to_configured_queue(job_queue):
    config = AnalyticsSettings(tracking_id="UA-1-1", queue_name="analytics")
    job = dispatch(AnalyticsCall(event_action="A", client_id="cid"), config, queue=job_queue)

    assert job is not None
    assert job.name == SEND_HIT_TASK
    assert job.queue == "analytics"
    assert job.payload["client_id"] == "cid"
    assert job_queue.pending("analytics") == 1


def test_unset_queue_name_uses_default_queue(job_queue):
    config = AnalyticsSettings(tracking_id="UA-1-1", queue_name=None)
    dispatch(AnalyticsCall(event_action="A"), config)
    assert job_queue.pending("default") == 1


def test_queued_job_sends_hit(job_queue):
    dispatch(AnalyticsCall(event_action="OrderWasCreated"), get_analytics_settings())

    with patch("apps.analytics.services.httpx.post", side_effect=_ok) as mock_post:
        assert drain(job_queue, "analytics") == 1

    args, kwargs = mock_post.call_args
    assert args[0] == "https://ssl.google-analytics.com/collect"
    assert kwargs["data"]["tid"] == "UA-12345-1"
    assert kwargs["data"]["ea"] == "OrderWasCreated"


def test_job_discards_hit_when_disabled_before_run(job_queue, settings):
    dispatch(AnalyticsCall(event_action="A"), get_analytics_settings())
    settings.GOOGLE_ANALYTICS_ENABLED = False

    with patch("apps.analytics.services.httpx.post") as mock_post:
        assert drain(job_queue, "analytics") == 1
    mock_post.assert_not_called()


def test_transport_failures_are_retried_then_recorded(job_queue):
    dispatch(AnalyticsCall(event_action="A"), get_analytics_settings())

    with patch(
        "apps.analytics.services.httpx.post",
        side_effect=httpx.ConnectError("network down"),
    ) as mock_post:
        assert drain(job_queue, "analytics", max_attempts=2) == 0

    assert mock_post.call_count == 2
    assert len(job_queue.failed) == 1
    assert "network down" in job_queue.failed[0].error


def test_hits_are_delivered_without_redis(settings):
    settings.REDIS_URL = None
    queue = build_job_queue()
    set_job_queue(queue)
    try:
        with patch("apps.analytics.services.httpx.post", side_effect=_ok) as mock_post:
            for order_id in range(3):
                emit(OrderWasCreated(order_id=order_id))
    finally:
        set_job_queue(None)

    assert mock_post.call_count == 3
    assert queue.pending("analytics") == 0
