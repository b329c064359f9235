"""Background job queue with Redis support."""

from __future__ import annotations

import json
import logging
import time
import uuid
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import asdict, dataclass, field
from decimal import Decimal
from typing import Any, Callable, Optional

from django.conf import settings

logger = logging.getLogger(__name__)

try:
    import redis
except ImportError:  # pragma: no cover - optional dependency
    redis = None


DEFAULT_QUEUE = "default"
QUEUE_KEY_PREFIX = "jobs:"

TaskFn = Callable[[dict[str, Any]], None]

_tasks: dict[str, TaskFn] = {}


class UnknownTaskError(LookupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"No task registered under {name!r}")
        self.name = name


def register_task(name: str) -> Callable[[TaskFn], TaskFn]:
    """Register ``fn`` as the handler for jobs named ``name``."""

    def decorator(fn: TaskFn) -> TaskFn:
        _tasks[name] = fn
        return fn

    return decorator


def get_task(name: str) -> TaskFn:
    try:
        return _tasks[name]
    except KeyError:
        raise UnknownTaskError(name) from None


@dataclass
class Job:
    name: str
    payload: dict[str, Any]
    queue: str = DEFAULT_QUEUE
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    attempts: int = 0
    enqueued_at: float = field(default_factory=time.time)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Job":
        return cls(**data)


class BaseJobQueue(ABC):
    # True when dequeue(timeout=...) waits on the backend instead of returning at once.
    blocking_dequeue = False

    @abstractmethod
    def enqueue(self, job: Job) -> Job: ...

    @abstractmethod
    def dequeue(self, queue: str, timeout: int = 0) -> Optional[Job]: ...

    @abstractmethod
    def fail(self, job: Job, error: str) -> None: ...

    @abstractmethod
    def pending(self, queue: str) -> int: ...


class InMemoryJobQueue(BaseJobQueue):
    """A naive in-memory queue suitable for tests and local dev.

    With ``eager=True`` every job runs in-process as soon as it is enqueued,
    since no separate worker can see this queue.
    """

    def __init__(self, *, eager: bool = False) -> None:
        self.eager = eager
        self._queues: dict[str, deque[Job]] = {}
        self.failed: list[Job] = []

    def enqueue(self, job: Job) -> Job:
        if self.eager:
            process_job(self, job)
            return job
        self._queues.setdefault(job.queue, deque()).append(job)
        return job

    def dequeue(self, queue: str, timeout: int = 0) -> Optional[Job]:
        entries = self._queues.get(queue)
        if not entries:
            return None
        return entries.popleft()

    def fail(self, job: Job, error: str) -> None:
        job.error = error
        self.failed.append(job)

    def pending(self, queue: str) -> int:
        entries = self._queues.get(queue)
        return len(entries) if entries is not None else 0

    def jobs(self, queue: str) -> list[Job]:
        return list(self._queues.get(queue, ()))


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class RedisJobQueue(BaseJobQueue):
    """FIFO queue backed by Redis lists; failed jobs land in ``<queue>:failed``."""

    blocking_dequeue = True

    def __init__(self, client: "redis.Redis") -> None:
        self.client = client

    def _key(self, queue: str) -> str:
        return f"{QUEUE_KEY_PREFIX}{queue}"

    def enqueue(self, job: Job) -> Job:
        self.client.rpush(self._key(job.queue), json.dumps(job.to_dict(), default=_json_default))
        return job

    def dequeue(self, queue: str, timeout: int = 0) -> Optional[Job]:
        if timeout:
            item = self.client.blpop([self._key(queue)], timeout=timeout)
            raw = item[1] if item else None
        else:
            raw = self.client.lpop(self._key(queue))
        if not raw:
            return None
        return Job.from_dict(json.loads(raw))

    def fail(self, job: Job, error: str) -> None:
        job.error = error
        self.client.rpush(
            f"{self._key(job.queue)}:failed", json.dumps(job.to_dict(), default=_json_default)
        )

    def pending(self, queue: str) -> int:
        return int(self.client.llen(self._key(queue)))


def process_job(queue: BaseJobQueue, job: Job, *, max_attempts: int | None = None) -> bool:
    """Run one job. Returns True on success; failures are retried then recorded."""

    if max_attempts is None:
        max_attempts = int(getattr(settings, "JOB_QUEUE_MAX_ATTEMPTS", 3))

    try:
        task = get_task(job.name)
    except UnknownTaskError as exc:
        logger.error("Dropping job %s: %s", job.id, exc)
        queue.fail(job, str(exc))
        return False

    try:
        task(job.payload)
    except Exception as exc:
        job.attempts += 1
        if job.attempts < max_attempts:
            logger.warning(
                "Job %s (%s) failed on attempt %s/%s: %s; requeueing",
                job.id,
                job.name,
                job.attempts,
                max_attempts,
                exc,
            )
            queue.enqueue(job)
        else:
            logger.exception("Job %s (%s) failed permanently", job.id, job.name)
            queue.fail(job, str(exc))
        return False

    logger.debug("Job %s (%s) completed", job.id, job.name)
    return True


def drain(queue: BaseJobQueue, name: str = DEFAULT_QUEUE, *, max_attempts: int | None = None) -> int:
    """Process every pending job on ``name``; returns how many ran successfully."""

    succeeded = 0
    while True:
        job = queue.dequeue(name)
        if job is None:
            return succeeded
        if process_job(queue, job, max_attempts=max_attempts):
            succeeded += 1


_job_queue_singleton: Optional[BaseJobQueue] = None


def build_job_queue() -> BaseJobQueue:
    redis_url = getattr(settings, "REDIS_URL", None)
    if redis_url and redis is not None:
        try:
            client = redis.Redis.from_url(redis_url, decode_responses=True)
            client.ping()
            logger.info("Using Redis job queue at %s", redis_url)
            return RedisJobQueue(client)
        except Exception as exc:
            logger.warning("Could not initialize Redis job queue: %s", exc)

    logger.warning("Using in-memory job queue; jobs run inline in the emitting process")
    return InMemoryJobQueue(eager=True)


def get_job_queue() -> BaseJobQueue:
    global _job_queue_singleton
    if _job_queue_singleton is None:
        _job_queue_singleton = build_job_queue()
    return _job_queue_singleton


def set_job_queue(queue: Optional[BaseJobQueue]) -> None:
    """Swap the shared queue (tests, custom backends)."""

    global _job_queue_singleton
    _job_queue_singleton = queue


__all__ = [
    "DEFAULT_QUEUE",
    "BaseJobQueue",
    "InMemoryJobQueue",
    "Job",
    "RedisJobQueue",
    "UnknownTaskError",
    "build_job_queue",
    "drain",
    "get_job_queue",
    "get_task",
    "process_job",
    "register_task",
    "set_job_queue",
]
