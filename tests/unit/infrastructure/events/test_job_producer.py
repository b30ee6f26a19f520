"""
Unit tests for the job producers and event system wiring.
"""

import pytest
from unittest.mock import AsyncMock

from app.domain.events.base import EventDispatcher
from app.domain.events.proposal_events import ProposalCreated, ProposalStatusChanged
from app.domain.events.verification_events import CompanyVerified, EventRejected
from app.infrastructure.events.event_setup import initialize_event_system
from app.infrastructure.events.job_producer import ProposalJobProducer, VerificationJobProducer
from app.infrastructure.queue.backend import InMemoryJobQueue, JobQueue, JobStatus
from app.infrastructure.queue.jobs import JobOptions, QueueName


def company_verified(**kwargs) -> CompanyVerified:
    kwargs.setdefault("entity_id", "company-1")
    return CompanyVerified(
        tenant_id="tenant-1",
        reviewer_id="manager-1",
        reviewer_role="MANAGER",
        reviewer_notes="All documents in order",
        **kwargs
    )


def status_changed(previous: str, new: str) -> ProposalStatusChanged:
    return ProposalStatusChanged(
        proposal_id="proposal-1",
        tenant_id="tenant-1",
        actor_id="organizer-1",
        actor_role="ORGANIZER",
        previous_status=previous,
        new_status=new,
    )


def proposal_created(status: str) -> ProposalCreated:
    return ProposalCreated(
        proposal_id="proposal-1",
        tenant_id="tenant-1",
        actor_id="sponsor-1",
        actor_role="SPONSOR",
        new_status=status,
        sponsorship_id="sponsorship-1",
        proposed_amount=2500.0,
    )


class TestVerificationJobProducer:
    """Test cases for VerificationJobProducer."""

    def setup_method(self):
        self.queue = InMemoryJobQueue()
        self.producer = VerificationJobProducer(self.queue)

    @pytest.mark.asyncio
    async def test_enqueues_email_and_notification_jobs(self):
        event = company_verified()

        await self.producer.handle(event)

        email_job = await self.queue.get_job("email.company.verified:company-1")
        notify_job = await self.queue.get_job("notify.company.verified:company-1")
        assert email_job.queue_name == QueueName.EMAIL.value
        assert notify_job.queue_name == QueueName.NOTIFICATIONS.value
        data = dict(email_job.data)
        assert data.pop("timestamp")
        assert data == {
            "tenant_id": "tenant-1",
            "entity_type": "Company",
            "entity_id": "company-1",
            "reviewer_id": "manager-1",
            "reviewer_role": "MANAGER",
            "decision": "VERIFIED",
            "reviewer_notes": "All documents in order",
        }
        assert notify_job.data["decision"] == "VERIFIED"
        assert "reviewer_notes" not in notify_job.data

    @pytest.mark.asyncio
    async def test_jobs_use_retry_policy(self):
        await self.producer.handle(company_verified())

        job = await self.queue.get_job("email.company.verified:company-1")
        assert job.options.attempts == 3
        assert job.options.backoff.type == "exponential"
        assert job.options.backoff.delay_ms == 1000

    @pytest.mark.asyncio
    async def test_duplicate_event_collapses_onto_existing_jobs(self):
        """A re-emitted decision enqueues nothing new."""
        await self.producer.handle(company_verified())
        await self.producer.handle(company_verified())

        assert (await self.queue.counts(QueueName.EMAIL.value))["waiting"] == 1
        assert (await self.queue.counts(QueueName.NOTIFICATIONS.value))["waiting"] == 1

    @pytest.mark.asyncio
    async def test_event_rejection_jobs(self):
        await self.producer.handle(EventRejected(
            entity_id="event-1", tenant_id="tenant-1", reviewer_id="admin-1", reviewer_role="ADMIN"
        ))

        assert await self.queue.get_job("email.event.rejected:event-1") is not None
        assert await self.queue.get_job("notify.event.rejected:event-1") is not None

    def test_handles_only_verification_events(self):
        assert self.producer.can_handle(company_verified())
        assert not self.producer.can_handle(status_changed("DRAFT", "SUBMITTED"))


class TestProposalJobProducer:
    """Test cases for ProposalJobProducer."""

    def setup_method(self):
        self.queue = InMemoryJobQueue()
        self.producer = ProposalJobProducer(self.queue, JobOptions())

    async def job_ids(self):
        ids = []
        for queue_name in (QueueName.EMAIL.value, QueueName.NOTIFICATIONS.value):
            ids += [job.id for job in await self.queue.list_jobs(queue_name, JobStatus.WAITING)]
        return sorted(ids)

    @pytest.mark.asyncio
    async def test_submitted_creation_enqueues_submission_jobs(self):
        await self.producer.handle(proposal_created("SUBMITTED"))

        assert await self.job_ids() == [
            "email.proposal.submitted:proposal-1",
            "notify.proposal.submitted:proposal-1",
        ]
        job = await self.queue.get_job("email.proposal.submitted:proposal-1")
        assert job.data["proposed_amount"] == 2500.0
        assert job.data["sponsorship_id"] == "sponsorship-1"

    @pytest.mark.asyncio
    async def test_draft_creation_enqueues_nothing(self):
        await self.producer.handle(proposal_created("DRAFT"))

        assert await self.job_ids() == []

    @pytest.mark.asyncio
    async def test_later_submission_collapses_onto_creation_jobs(self):
        await self.producer.handle(proposal_created("SUBMITTED"))
        await self.producer.handle(status_changed("DRAFT", "SUBMITTED"))

        assert len(await self.job_ids()) == 2

    @pytest.mark.asyncio
    async def test_decisions_enqueue_their_jobs(self):
        await self.producer.handle(status_changed("UNDER_REVIEW", "APPROVED"))

        job = await self.queue.get_job("email.proposal.approved:proposal-1")
        assert job.data["previous_status"] == "UNDER_REVIEW"
        assert job.data["new_status"] == "APPROVED"
        assert await self.queue.get_job("notify.proposal.approved:proposal-1") is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("new_status", ["UNDER_REVIEW", "WITHDRAWN", "NOT_A_STATUS"])
    async def test_other_statuses_enqueue_nothing(self, new_status):
        await self.producer.handle(status_changed("SUBMITTED", new_status))

        assert await self.job_ids() == []


class TestEventSetup:
    """Test cases for wiring producers to the dispatcher."""

    def test_registers_producers(self):
        dispatcher = EventDispatcher()

        initialize_event_system(InMemoryJobQueue(), dispatcher)

        handlers = dispatcher.get_registered_handlers()
        assert handlers["CompanyVerified"] == ["VerificationJobProducer"]
        assert handlers["EventRejected"] == ["VerificationJobProducer"]
        assert handlers["ProposalStatusChanged"] == ["ProposalJobProducer"]

    @pytest.mark.asyncio
    async def test_enqueue_failure_does_not_reach_publisher(self):
        queue = AsyncMock(spec=JobQueue)
        queue.enqueue.side_effect = ConnectionError("database unavailable")
        dispatcher = initialize_event_system(queue, EventDispatcher())

        await dispatcher.publish(company_verified())

        queue.enqueue.assert_called()

    @pytest.mark.asyncio
    async def test_published_event_reaches_queue(self):
        queue = InMemoryJobQueue()
        dispatcher = initialize_event_system(queue, EventDispatcher())

        await dispatcher.publish(company_verified())
        await dispatcher.publish(company_verified())

        assert (await queue.counts(QueueName.EMAIL.value))["waiting"] == 1
