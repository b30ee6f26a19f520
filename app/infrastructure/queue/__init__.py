"""
Durable job queue: job definitions, backends and workers.
"""

from .jobs import (
    QueueName,
    JobName,
    JobOptions,
    BackoffPolicy,
    idempotency_key,
    default_job_options,
    ProposalEmailPayload,
    VerificationEmailPayload,
    ProposalNotificationPayload,
    VerificationNotificationPayload,
)
from .backend import JobQueue, JobStatus, QueuedJob, InMemoryJobQueue, SQLAlchemyJobQueue
from .worker import JobProcessor, QueueWorker

__all__ = [
    "QueueName",
    "JobName",
    "JobOptions",
    "BackoffPolicy",
    "idempotency_key",
    "default_job_options",
    "ProposalEmailPayload",
    "VerificationEmailPayload",
    "ProposalNotificationPayload",
    "VerificationNotificationPayload",
    "JobQueue",
    "JobStatus",
    "QueuedJob",
    "InMemoryJobQueue",
    "SQLAlchemyJobQueue",
    "JobProcessor",
    "QueueWorker",
]
