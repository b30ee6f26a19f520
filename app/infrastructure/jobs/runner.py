"""
Wiring for the job pipeline: queue backend selection, processors and workers.
"""

import asyncio
import logging
from datetime import timedelta
from typing import Callable, List, Optional

from sqlalchemy.orm import Session, sessionmaker

from app.config import settings
from app.infrastructure.db.database import SessionLocal
from app.infrastructure.email.email_service import EmailLogService, EmailService
from app.infrastructure.queue.backend import InMemoryJobQueue, JobQueue, QueuedJob, SQLAlchemyJobQueue
from app.infrastructure.queue.jobs import QueueName
from app.infrastructure.queue.worker import JobProcessor, QueueWorker
from app.infrastructure.repositories import (
    SQLAlchemyEmailLogRepository,
    SQLAlchemyEventRepository,
    SQLAlchemyNotificationRepository,
    SQLAlchemyOrganizerRepository,
    SQLAlchemyProposalRepository,
    SQLAlchemySponsorshipRepository,
    SQLAlchemyUserRepository,
)
from .email_processor import EmailProcessor
from .notification_processor import NotificationProcessor
from .recipients import RecipientResolver


logger = logging.getLogger(__name__)


def build_job_queue(backend: Optional[str] = None, session_factory: Optional[sessionmaker] = None) -> JobQueue:
    """Queue backend named by `queue_backend`."""
    backend = backend or settings.queue_backend
    stall_timeout = timedelta(seconds=settings.job_stall_timeout_seconds)
    if backend == "memory":
        return InMemoryJobQueue(stall_timeout=stall_timeout)
    return SQLAlchemyJobQueue(session_factory or SessionLocal, stall_timeout=stall_timeout)


def build_recipient_resolver(session: Session) -> RecipientResolver:
    return RecipientResolver(
        proposal_repository=SQLAlchemyProposalRepository(session),
        sponsorship_repository=SQLAlchemySponsorshipRepository(session),
        event_repository=SQLAlchemyEventRepository(session),
        organizer_repository=SQLAlchemyOrganizerRepository(session),
        user_repository=SQLAlchemyUserRepository(session),
    )


def build_email_processor(session: Session) -> EmailProcessor:
    email_service = EmailService(EmailLogService(SQLAlchemyEmailLogRepository(session)))
    return EmailProcessor(email_service, build_recipient_resolver(session))


def build_notification_processor(session: Session) -> NotificationProcessor:
    return NotificationProcessor(SQLAlchemyNotificationRepository(session), build_recipient_resolver(session))


class SessionScopedProcessor(JobProcessor):
    """Runs each job with a processor bound to a fresh database session."""

    def __init__(self, session_factory: Callable[[], Session], build: Callable[[Session], JobProcessor]):
        self.session_factory = session_factory
        self.build = build

    async def process(self, job: QueuedJob) -> None:
        session = self.session_factory()
        try:
            await self.build(session).process(job)
        finally:
            session.close()


class WorkerPool:
    """The email and notification workers, run as background tasks."""

    def __init__(
        self,
        queue: JobQueue,
        session_factory: Callable[[], Session] = SessionLocal,
        poll_interval: Optional[float] = None
    ):
        poll_interval = poll_interval or settings.worker_poll_interval_seconds
        self.workers: List[QueueWorker] = [
            QueueWorker(
                queue,
                QueueName.EMAIL.value,
                SessionScopedProcessor(session_factory, build_email_processor),
                poll_interval=poll_interval,
                job_timeout=settings.job_timeout_seconds,
            ),
            QueueWorker(
                queue,
                QueueName.NOTIFICATIONS.value,
                SessionScopedProcessor(session_factory, build_notification_processor),
                poll_interval=poll_interval,
                job_timeout=settings.job_timeout_seconds,
            ),
        ]
        self._tasks: List[asyncio.Task] = []

    def start(self) -> None:
        if self._tasks:
            return
        self._tasks = [asyncio.create_task(worker.run()) for worker in self.workers]
        logger.info(f"Started {len(self._tasks)} queue workers")

    async def run(self) -> None:
        """Run until every worker has been stopped."""
        self.start()
        await asyncio.gather(*self._tasks)

    async def stop(self) -> None:
        for worker in self.workers:
            worker.stop()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        logger.info("Queue workers stopped")

    async def drain(self) -> int:
        """Process every due job once on each queue."""
        handled = 0
        for worker in self.workers:
            handled += await worker.drain()
        return handled
