"""Queue analytics hits and send them from a background job."""

from __future__ import annotations

import logging
from typing import Any, Optional

from apps.core.services import BaseJobQueue, Job, get_job_queue, register_task

from .config import AnalyticsSettings, get_analytics_settings
from .services import AnalyticsCall, MeasurementProtocolClient

logger = logging.getLogger(__name__)

SEND_HIT_TASK = "analytics.send_hit"


def dispatch(
    call: AnalyticsCall,
    config: AnalyticsSettings,
    *,
    queue: Optional[BaseJobQueue] = None,
) -> Optional[Job]:
    """Enqueue ``call`` for delivery. Returns the job, or None when skipped."""

    if not config.enabled:
        logger.debug("Analytics disabled; skipping %s", call.event_action)
        return None

    if not config.tracking_id:
        logger.warning("GOOGLE_ANALYTICS_TRACKING_ID is not set; dropping %s", call.event_action)
        return None

    queue = queue or get_job_queue()
    job = queue.enqueue(
        Job(
            name=SEND_HIT_TASK,
            payload=call.to_dict(),
            queue=config.effective_queue_name,
        )
    )
    logger.info("Queued analytics hit %s as job %s on %s", call.event_action, job.id, job.queue)
    return job


@register_task(SEND_HIT_TASK)
def send_hit(payload: dict[str, Any]) -> None:
    config = get_analytics_settings()
    if not config.enabled or not config.tracking_id:
        logger.info("Analytics disabled since job was queued; discarding hit")
        return

    call = AnalyticsCall.from_dict(payload)
    MeasurementProtocolClient.from_settings(config).send(call)


__all__ = ["SEND_HIT_TASK", "dispatch", "send_hit"]
