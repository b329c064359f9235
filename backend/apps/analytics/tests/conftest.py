"""Shared fixtures for analytics tests."""

from __future__ import annotations

import pytest

from apps.analytics.config import get_analytics_settings
from apps.core.services import InMemoryJobQueue, set_job_queue


@pytest.fixture(autouse=True)
def analytics_settings(settings):
    settings.GOOGLE_ANALYTICS_TRACKING_ID = "UA-12345-1"
    settings.GOOGLE_ANALYTICS_ENABLED = True
    settings.GOOGLE_ANALYTICS_USE_SSL = True
    settings.GOOGLE_ANALYTICS_ANONYMIZE_IP = False
    settings.GOOGLE_ANALYTICS_SEND_USER_ID = False
    settings.GOOGLE_ANALYTICS_QUEUE_NAME = "analytics"
    settings.GOOGLE_ANALYTICS_DEBUG = False
    get_analytics_settings.cache_clear()
    yield settings
    get_analytics_settings.cache_clear()


@pytest.fixture()
def job_queue():
    queue = InMemoryJobQueue()
    set_job_queue(queue)
    yield queue
    set_job_queue(None)
