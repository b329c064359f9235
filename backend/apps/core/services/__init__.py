"""Service layer helpers for the core app."""

from .job_queue import (
    DEFAULT_QUEUE,
    BaseJobQueue,
    InMemoryJobQueue,
    Job,
    RedisJobQueue,
    UnknownTaskError,
    build_job_queue,
    drain,
    get_job_queue,
    get_task,
    process_job,
    register_task,
    set_job_queue,
)

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
