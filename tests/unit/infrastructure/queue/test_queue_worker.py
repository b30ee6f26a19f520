"""
Unit tests for QueueWorker.
"""

import asyncio
import pytest
from unittest.mock import AsyncMock

from app.infrastructure.queue.backend import InMemoryJobQueue, JobStatus
from app.infrastructure.queue.jobs import JobOptions, QueueName
from app.infrastructure.queue.worker import JobProcessor, QueueWorker


EMAIL = QueueName.EMAIL.value


class TestQueueWorker:
    """Test cases for QueueWorker."""

    @pytest.fixture
    def queue(self, clock):
        return InMemoryJobQueue(clock=clock)

    @pytest.mark.asyncio
    async def test_successful_job_completes(self, queue):
        processor = AsyncMock(spec=JobProcessor)
        worker = QueueWorker(queue, EMAIL, processor)
        await queue.enqueue(EMAIL, "email.company.verified", {"entity_id": "c-1"}, "job-1")

        handled = await worker.run_once()

        assert handled.id == "job-1"
        processor.process.assert_awaited_once()
        assert processor.process.await_args.args[0].data == {"entity_id": "c-1"}
        assert (await queue.get_job("job-1")).status == JobStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_idle_queue(self, queue):
        worker = QueueWorker(queue, EMAIL, AsyncMock(spec=JobProcessor))

        assert await worker.run_once() is None
        assert await worker.drain() == 0

    @pytest.mark.asyncio
    async def test_failing_job_is_retried_then_failed(self, queue, clock):
        processor = AsyncMock(spec=JobProcessor)
        processor.process.side_effect = RuntimeError("smtp down")
        worker = QueueWorker(queue, EMAIL, processor)
        await queue.enqueue(EMAIL, "email.company.verified", {}, "job-1", JobOptions(attempts=3))

        first = await worker.run_once()
        assert first.status == JobStatus.WAITING
        assert first.last_error == "smtp down"

        clock.advance(seconds=1)
        await worker.run_once()
        clock.advance(seconds=2)
        last = await worker.run_once()

        assert last.status == JobStatus.FAILED
        assert processor.process.await_count == 3
        assert await worker.run_once() is None

    @pytest.mark.asyncio
    async def test_job_timeout_counts_as_failure(self, queue):
        async def slow(job):
            await asyncio.sleep(1)

        processor = AsyncMock(spec=JobProcessor)
        processor.process.side_effect = slow
        worker = QueueWorker(queue, EMAIL, processor, job_timeout=0.01)
        await queue.enqueue(EMAIL, "email.company.verified", {}, "job-1")

        updated = await worker.run_once()

        assert updated.status == JobStatus.WAITING
        assert updated.last_error == "TimeoutError"

    @pytest.mark.asyncio
    async def test_job_of_a_killed_worker_is_picked_up_again(self, queue, clock):
        dying = AsyncMock(spec=JobProcessor)
        dying.process.side_effect = SystemExit(1)
        await queue.enqueue(EMAIL, "email.company.verified", {}, "job-1")

        with pytest.raises(SystemExit):
            await QueueWorker(queue, EMAIL, dying).run_once()
        assert (await queue.get_job("job-1")).status == JobStatus.ACTIVE

        healthy = AsyncMock(spec=JobProcessor)
        worker = QueueWorker(queue, EMAIL, healthy)
        clock.advance(minutes=5, seconds=1)
        assert await worker.run_once() is None
        clock.advance(seconds=1)

        handled = await worker.run_once()

        assert handled.id == "job-1"
        healthy.process.assert_awaited_once()
        stored = await queue.get_job("job-1")
        assert stored.status == JobStatus.COMPLETED
        assert stored.attempts_made == 1

    @pytest.mark.asyncio
    async def test_drain_processes_every_due_job(self, queue, clock):
        processor = AsyncMock(spec=JobProcessor)
        worker = QueueWorker(queue, EMAIL, processor)
        for i in range(3):
            clock.advance(milliseconds=1)
            await queue.enqueue(EMAIL, "email.company.verified", {}, f"job-{i}")

        assert await worker.drain() == 3
        assert (await queue.counts(EMAIL))["completed"] == 3

    @pytest.mark.asyncio
    async def test_run_stops_when_asked(self, queue):
        worker = QueueWorker(queue, EMAIL, AsyncMock(spec=JobProcessor), poll_interval=0.01)

        task = asyncio.create_task(worker.run())
        await asyncio.sleep(0.05)
        worker.stop()

        await asyncio.wait_for(task, timeout=1)
        assert task.done()
