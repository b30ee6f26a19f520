"""
Job processors and worker wiring for the email and notification queues.
"""

from .recipients import RecipientResolver
from .email_processor import EmailProcessor
from .notification_processor import NotificationProcessor
from .runner import (
    SessionScopedProcessor,
    WorkerPool,
    build_email_processor,
    build_job_queue,
    build_notification_processor,
)

__all__ = [
    "RecipientResolver",
    "EmailProcessor",
    "NotificationProcessor",
    "SessionScopedProcessor",
    "WorkerPool",
    "build_email_processor",
    "build_job_queue",
    "build_notification_processor",
]
