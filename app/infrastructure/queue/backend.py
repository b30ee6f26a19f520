"""
Durable job queue backends.

Job ids are idempotency keys: enqueuing an id that the queue still holds
(waiting, active, or retained after completion or failure) is a no-op.

Reserving a job stamps a lease (`reserved_at`). An active job whose lease
is older than the stall timeout belonged to a worker that died; the next
`reserve` on that queue counts it as a failed attempt.
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from app.domain.models.base import ensure_utc, utc_now
from app.infrastructure.db.models import QueueJobModel
from .jobs import BackoffPolicy, JobOptions


logger = logging.getLogger(__name__)

DEFAULT_STALL_TIMEOUT = timedelta(minutes=5)
STALLED_JOB_ERROR = "Job stalled: worker lease expired"


class JobStatus(str, Enum):
    WAITING = "waiting"
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class QueuedJob:
    id: str
    queue_name: str
    name: str
    data: Dict[str, Any]
    options: JobOptions = field(default_factory=JobOptions)
    status: JobStatus = JobStatus.WAITING
    attempts_made: int = 0
    available_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    reserved_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    last_error: Optional[str] = None


class JobQueue(ABC):
    """Queue contract shared by the producer, the workers and the admin API."""

    @abstractmethod
    async def enqueue(
        self,
        queue_name: str,
        name: str,
        data: Dict[str, Any],
        job_id: str,
        options: Optional[JobOptions] = None
    ) -> bool:
        """Add a job. Returns False when a job with this id already exists."""
        pass

    @abstractmethod
    async def reserve(self, queue_name: str) -> Optional[QueuedJob]:
        """Claim the next available job, or None if nothing is due."""
        pass

    @abstractmethod
    async def complete(self, job: QueuedJob) -> None:
        pass

    @abstractmethod
    async def fail(self, job: QueuedJob, error: str) -> QueuedJob:
        """Record a failed attempt; schedules a retry or moves the job to the failed set."""
        pass

    @abstractmethod
    async def get_job(self, job_id: str) -> Optional[QueuedJob]:
        pass

    @abstractmethod
    async def list_jobs(self, queue_name: str, status: JobStatus, limit: int = 50) -> List[QueuedJob]:
        """Most recent first."""
        pass

    @abstractmethod
    async def counts(self, queue_name: str) -> Dict[str, int]:
        pass


def _next_failure_state(job: QueuedJob, error: str, now: datetime) -> QueuedJob:
    attempts_made = job.attempts_made + 1
    if attempts_made < job.options.attempts:
        delay_ms = job.options.backoff.delay_for(attempts_made)
        return replace(
            job,
            status=JobStatus.WAITING,
            attempts_made=attempts_made,
            available_at=now + timedelta(milliseconds=delay_ms),
            reserved_at=None,
            last_error=error,
        )
    return replace(
        job,
        status=JobStatus.FAILED,
        attempts_made=attempts_made,
        reserved_at=None,
        finished_at=now,
        last_error=error,
    )


def _log_stalled(job: QueuedJob, updated: QueuedJob) -> None:
    logger.warning(
        f"Job {job.name} (ID: {job.id}) stalled after {updated.attempts_made} attempt(s), "
        f"now {updated.status.value}"
    )


class InMemoryJobQueue(JobQueue):
    """Process-local queue for development and tests."""

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        stall_timeout: timedelta = DEFAULT_STALL_TIMEOUT
    ):
        self._lock = threading.RLock()
        self._jobs: Dict[str, QueuedJob] = {}
        self._clock = clock
        self.stall_timeout = stall_timeout

    async def enqueue(self, queue_name, name, data, job_id, options=None) -> bool:
        with self._lock:
            if job_id in self._jobs:
                logger.info(f"Job {job_id} already queued, skipping duplicate")
                return False
            now = self._clock()
            self._jobs[job_id] = QueuedJob(
                id=job_id,
                queue_name=queue_name,
                name=name,
                data=dict(data),
                options=options or JobOptions(),
                available_at=now,
                created_at=now,
            )
            logger.info(f"Enqueued job {name} on {queue_name} (ID: {job_id})")
            return True

    async def reserve(self, queue_name: str) -> Optional[QueuedJob]:
        with self._lock:
            now = self._clock()
            self._recover_stalled(queue_name, now)
            due = [
                job for job in self._jobs.values()
                if job.queue_name == queue_name
                and job.status == JobStatus.WAITING
                and job.available_at <= now
            ]
            if not due:
                return None
            job = min(due, key=lambda j: (j.available_at, j.created_at))
            job.status = JobStatus.ACTIVE
            job.reserved_at = now
            return replace(job)

    def _recover_stalled(self, queue_name: str, now: datetime) -> None:
        cutoff = now - self.stall_timeout
        stalled = [
            job for job in self._jobs.values()
            if job.queue_name == queue_name
            and job.status == JobStatus.ACTIVE
            and job.reserved_at is not None
            and job.reserved_at <= cutoff
        ]
        for job in stalled:
            updated = _next_failure_state(job, STALLED_JOB_ERROR, now)
            self._jobs[job.id] = updated
            _log_stalled(job, updated)
            if updated.status == JobStatus.FAILED:
                self._trim(queue_name, JobStatus.FAILED, job.options.remove_on_fail)

    async def complete(self, job: QueuedJob) -> None:
        with self._lock:
            stored = self._jobs.get(job.id)
            if stored is None:
                return
            stored.status = JobStatus.COMPLETED
            stored.reserved_at = None
            stored.finished_at = self._clock()
            self._trim(job.queue_name, JobStatus.COMPLETED, job.options.remove_on_complete)

    async def fail(self, job: QueuedJob, error: str) -> QueuedJob:
        with self._lock:
            updated = _next_failure_state(job, error, self._clock())
            self._jobs[job.id] = updated
            if updated.status == JobStatus.FAILED:
                self._trim(job.queue_name, JobStatus.FAILED, job.options.remove_on_fail)
            return replace(updated)

    def _trim(self, queue_name: str, status: JobStatus, keep: int) -> None:
        finished = sorted(
            (j for j in self._jobs.values() if j.queue_name == queue_name and j.status == status),
            key=lambda j: j.finished_at,
            reverse=True,
        )
        for job in finished[keep:]:
            del self._jobs[job.id]

    async def get_job(self, job_id: str) -> Optional[QueuedJob]:
        with self._lock:
            job = self._jobs.get(job_id)
            return replace(job) if job else None

    async def list_jobs(self, queue_name: str, status: JobStatus, limit: int = 50) -> List[QueuedJob]:
        with self._lock:
            jobs = [
                replace(j) for j in self._jobs.values()
                if j.queue_name == queue_name and j.status == status
            ]
        jobs.sort(key=lambda j: j.finished_at or j.created_at, reverse=True)
        return jobs[:limit]

    async def counts(self, queue_name: str) -> Dict[str, int]:
        with self._lock:
            result = {status.value: 0 for status in JobStatus}
            for job in self._jobs.values():
                if job.queue_name == queue_name:
                    result[job.status.value] += 1
            return result


class SQLAlchemyJobQueue(JobQueue):
    """
    Database-backed queue (outbox table keyed by the idempotency key).

    Workers in separate processes claim jobs with a conditional UPDATE,
    so a job is only ever handed to one worker at a time.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        clock: Callable[[], datetime] = utc_now,
        stall_timeout: timedelta = DEFAULT_STALL_TIMEOUT
    ):
        self.session_factory = session_factory
        self._clock = clock
        self.stall_timeout = stall_timeout

    def _to_job(self, model: QueueJobModel) -> QueuedJob:
        return QueuedJob(
            id=model.job_id,
            queue_name=model.queue_name,
            name=model.name,
            data=model.payload or {},
            options=JobOptions(
                attempts=model.max_attempts,
                backoff=BackoffPolicy(model.backoff_type, model.backoff_delay_ms),
                remove_on_complete=model.remove_on_complete,
                remove_on_fail=model.remove_on_fail,
            ),
            status=JobStatus(model.status),
            attempts_made=model.attempts_made,
            available_at=ensure_utc(model.available_at),
            created_at=ensure_utc(model.created_at),
            reserved_at=ensure_utc(model.reserved_at),
            finished_at=ensure_utc(model.finished_at),
            last_error=model.last_error,
        )

    async def enqueue(self, queue_name, name, data, job_id, options=None) -> bool:
        options = options or JobOptions()
        now = self._clock()
        with self.session_factory() as session:
            if session.get(QueueJobModel, job_id) is not None:
                logger.info(f"Job {job_id} already queued, skipping duplicate")
                return False
            session.add(QueueJobModel(
                job_id=job_id,
                queue_name=queue_name,
                name=name,
                payload=data,
                status=JobStatus.WAITING.value,
                attempts_made=0,
                max_attempts=options.attempts,
                backoff_type=options.backoff.type,
                backoff_delay_ms=options.backoff.delay_ms,
                remove_on_complete=options.remove_on_complete,
                remove_on_fail=options.remove_on_fail,
                available_at=now,
                created_at=now,
            ))
            try:
                session.commit()
            except IntegrityError:
                # Lost a race with another producer for the same key
                session.rollback()
                logger.info(f"Job {job_id} already queued, skipping duplicate")
                return False
        logger.info(f"Enqueued job {name} on {queue_name} (ID: {job_id})")
        return True

    async def reserve(self, queue_name: str) -> Optional[QueuedJob]:
        now = self._clock()
        with self.session_factory() as session:
            self._recover_stalled(session, queue_name, now)
            candidates = session.execute(
                select(QueueJobModel.job_id)
                .where(
                    QueueJobModel.queue_name == queue_name,
                    QueueJobModel.status == JobStatus.WAITING.value,
                    QueueJobModel.available_at <= now,
                )
                .order_by(QueueJobModel.available_at, QueueJobModel.created_at)
                .limit(10)
            ).scalars().all()

            for job_id in candidates:
                claimed = session.execute(
                    update(QueueJobModel)
                    .where(
                        QueueJobModel.job_id == job_id,
                        QueueJobModel.status == JobStatus.WAITING.value,
                    )
                    .values(status=JobStatus.ACTIVE.value, reserved_at=now)
                )
                if claimed.rowcount == 1:
                    session.commit()
                    return self._to_job(session.get(QueueJobModel, job_id))
            session.rollback()
        return None

    def _recover_stalled(self, session: Session, queue_name: str, now: datetime) -> None:
        cutoff = now - self.stall_timeout
        stalled = session.execute(
            select(QueueJobModel)
            .where(
                QueueJobModel.queue_name == queue_name,
                QueueJobModel.status == JobStatus.ACTIVE.value,
                QueueJobModel.reserved_at <= cutoff,
            )
        ).scalars().all()
        if not stalled:
            return

        trim_failed = None
        for model in stalled:
            job = self._to_job(model)
            updated = _next_failure_state(job, STALLED_JOB_ERROR, now)
            # Another worker may recover the same job; only one update wins
            recovered = session.execute(
                update(QueueJobModel)
                .where(
                    QueueJobModel.job_id == job.id,
                    QueueJobModel.status == JobStatus.ACTIVE.value,
                    QueueJobModel.reserved_at == model.reserved_at,
                )
                .values(
                    status=updated.status.value,
                    attempts_made=updated.attempts_made,
                    available_at=updated.available_at,
                    reserved_at=None,
                    finished_at=updated.finished_at,
                    last_error=updated.last_error,
                )
                .execution_options(synchronize_session=False)
            )
            if recovered.rowcount == 1:
                _log_stalled(job, updated)
                if updated.status == JobStatus.FAILED:
                    trim_failed = job.options.remove_on_fail
        if trim_failed is not None:
            self._trim(session, queue_name, JobStatus.FAILED, trim_failed)
        session.commit()

    async def complete(self, job: QueuedJob) -> None:
        with self.session_factory() as session:
            model = session.get(QueueJobModel, job.id)
            if model is None:
                return
            model.status = JobStatus.COMPLETED.value
            model.reserved_at = None
            model.finished_at = self._clock()
            session.flush()
            self._trim(session, job.queue_name, JobStatus.COMPLETED, job.options.remove_on_complete)
            session.commit()

    async def fail(self, job: QueuedJob, error: str) -> QueuedJob:
        updated = _next_failure_state(job, error, self._clock())
        with self.session_factory() as session:
            model = session.get(QueueJobModel, job.id)
            if model is None:
                return updated
            model.status = updated.status.value
            model.attempts_made = updated.attempts_made
            model.last_error = error
            model.reserved_at = None
            if updated.status == JobStatus.WAITING:
                model.available_at = updated.available_at
            else:
                model.finished_at = updated.finished_at
            session.flush()
            if updated.status == JobStatus.FAILED:
                self._trim(session, job.queue_name, JobStatus.FAILED, job.options.remove_on_fail)
            session.commit()
        return updated

    def _trim(self, session: Session, queue_name: str, status: JobStatus, keep: int) -> None:
        stale = session.execute(
            select(QueueJobModel.job_id)
            .where(QueueJobModel.queue_name == queue_name, QueueJobModel.status == status.value)
            .order_by(QueueJobModel.finished_at.desc())
            .offset(keep)
        ).scalars().all()
        if stale:
            session.execute(delete(QueueJobModel).where(QueueJobModel.job_id.in_(stale)))

    async def get_job(self, job_id: str) -> Optional[QueuedJob]:
        with self.session_factory() as session:
            model = session.get(QueueJobModel, job_id)
            return self._to_job(model) if model else None

    async def list_jobs(self, queue_name: str, status: JobStatus, limit: int = 50) -> List[QueuedJob]:
        with self.session_factory() as session:
            models = session.execute(
                select(QueueJobModel)
                .where(QueueJobModel.queue_name == queue_name, QueueJobModel.status == status.value)
                .order_by(QueueJobModel.finished_at.desc(), QueueJobModel.created_at.desc())
                .limit(limit)
            ).scalars().all()
            return [self._to_job(m) for m in models]

    async def counts(self, queue_name: str) -> Dict[str, int]:
        result = {status.value: 0 for status in JobStatus}
        with self.session_factory() as session:
            rows = session.execute(
                select(QueueJobModel.status, func.count(QueueJobModel.job_id))
                .where(QueueJobModel.queue_name == queue_name)
                .group_by(QueueJobModel.status)
            ).all()
        for status, count in rows:
            result[status] = count
        return result
