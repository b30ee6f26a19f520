"""
Queue worker: pulls jobs from one queue and hands them to a processor.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

from .backend import JobQueue, JobStatus, QueuedJob


logger = logging.getLogger(__name__)


class JobProcessor(ABC):
    """Consumes one job. Raising makes the queue retry it."""

    @abstractmethod
    async def process(self, job: QueuedJob) -> None:
        pass


class QueueWorker:
    """Polls a queue and runs each due job to completion or failure."""

    def __init__(
        self,
        queue: JobQueue,
        queue_name: str,
        processor: JobProcessor,
        poll_interval: float = 1.0,
        job_timeout: Optional[float] = None
    ):
        self.queue = queue
        self.queue_name = queue_name
        self.processor = processor
        self.poll_interval = poll_interval
        self.job_timeout = job_timeout
        self._stopping = asyncio.Event()

    async def run_once(self) -> Optional[QueuedJob]:
        """Process a single due job. Returns the job handled, or None if the queue was idle."""
        job = await self.queue.reserve(self.queue_name)
        if job is None:
            return None

        try:
            if self.job_timeout:
                await asyncio.wait_for(self.processor.process(job), timeout=self.job_timeout)
            else:
                await self.processor.process(job)
        except Exception as e:
            updated = await self.queue.fail(job, str(e) or type(e).__name__)
            if updated.status == JobStatus.FAILED:
                logger.error(
                    f"Job {job.name} (ID: {job.id}) failed permanently after "
                    f"{updated.attempts_made} attempt(s): {str(e)}"
                )
            else:
                logger.warning(
                    f"Job {job.name} (ID: {job.id}) failed attempt {updated.attempts_made}/"
                    f"{job.options.attempts}, retrying at {updated.available_at.isoformat()}: {str(e)}"
                )
            return updated

        await self.queue.complete(job)
        logger.info(f"Job {job.name} (ID: {job.id}) completed")
        return job

    async def drain(self, max_jobs: int = 1000) -> int:
        """Process due jobs until the queue is idle. Returns how many were handled."""
        handled = 0
        while handled < max_jobs:
            job = await self.run_once()
            if job is None:
                break
            handled += 1
        return handled

    async def run(self) -> None:
        logger.info(f"Worker for queue '{self.queue_name}' started")
        self._stopping.clear()
        while not self._stopping.is_set():
            try:
                job = await self.run_once()
            except Exception as e:
                # Backend unavailable; keep polling
                logger.error(f"Worker for queue '{self.queue_name}' could not poll: {str(e)}")
                job = None
            if job is None:
                try:
                    await asyncio.wait_for(self._stopping.wait(), timeout=self.poll_interval)
                except asyncio.TimeoutError:
                    pass
        logger.info(f"Worker for queue '{self.queue_name}' stopped")

    def stop(self) -> None:
        self._stopping.set()
