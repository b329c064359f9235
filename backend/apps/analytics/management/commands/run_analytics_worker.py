"""Management command that delivers queued analytics hits."""

from __future__ import annotations

import logging
import time

from django.conf import settings
from django.core.management.base import BaseCommand

from apps.analytics.config import get_analytics_settings
from apps.core.services import drain, get_job_queue, process_job

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Process queued analytics hits (runs until interrupted unless --once is given)"

    def add_arguments(self, parser):  # type: ignore[override]
        parser.add_argument(
            "--queue",
            dest="queue",
            default=None,
            help="Queue to consume (defaults to GOOGLE_ANALYTICS_QUEUE_NAME or 'default')",
        )
        parser.add_argument(
            "--once",
            dest="once",
            action="store_true",
            help="Process what is pending and exit",
        )
        parser.add_argument(
            "--timeout",
            dest="timeout",
            type=int,
            default=5,
            help="Seconds to block waiting for a job on queues that support it",
        )

    def handle(self, *args, **options):  # type: ignore[override]
        queue_name: str = options["queue"] or get_analytics_settings().effective_queue_name
        max_attempts = int(getattr(settings, "JOB_QUEUE_MAX_ATTEMPTS", 3))
        queue = get_job_queue()

        if options["once"]:
            processed = drain(queue, queue_name, max_attempts=max_attempts)
            self.stdout.write(self.style.SUCCESS(f"Processed {processed} job(s) from {queue_name}"))
            return

        self.stdout.write(f"Consuming analytics jobs from {queue_name}")
        try:
            self._loop(queue, queue_name, max_attempts, options["timeout"])
        except KeyboardInterrupt:
            logger.info("Analytics worker interrupted")

    def _loop(self, queue, queue_name: str, max_attempts: int, timeout: int) -> None:
        while True:
            job = queue.dequeue(queue_name, timeout=timeout)
            if job is None:
                if not queue.blocking_dequeue:
                    time.sleep(1)
                continue
            process_job(queue, job, max_attempts=max_attempts)
