"""
Unit tests for the notifications queue processor.
"""

import pytest
from unittest.mock import Mock
from pydantic import ValidationError as PydanticValidationError

from app.domain.models import NotificationSeverity, UserRole
from app.domain.repositories import NotificationRepository
from app.infrastructure.jobs.notification_processor import NotificationProcessor
from app.infrastructure.jobs.recipients import RecipientResolver
from app.infrastructure.queue.backend import QueuedJob
from app.infrastructure.queue.jobs import (
    JobName,
    ProposalNotificationPayload,
    QueueName,
    VerificationNotificationPayload,
)
from conftest import BASE_TIME, TENANT_ID


def notification_job(name: JobName, payload) -> QueuedJob:
    return QueuedJob(
        id=f"{name.value}:test",
        queue_name=QueueName.NOTIFICATIONS.value,
        name=name.value,
        data=payload.model_dump(mode="json"),
    )


def verification_payload(entity_type: str, entity_id: str, decision: str) -> VerificationNotificationPayload:
    return VerificationNotificationPayload(
        tenant_id=TENANT_ID,
        timestamp=BASE_TIME,
        entity_type=entity_type,
        entity_id=entity_id,
        decision=decision,
    )


class TestNotificationProcessor:
    """Test cases for NotificationProcessor."""

    @pytest.fixture(autouse=True)
    def setup(self, store):
        self.store = store
        self.resolver = RecipientResolver(
            proposal_repository=store.proposals,
            sponsorship_repository=store.sponsorships,
            event_repository=store.events,
            organizer_repository=store.organizers,
            user_repository=store.users,
        )
        self.processor = NotificationProcessor(store.notifications, self.resolver)

    def created(self):
        return sorted(self.store.notifications.items.values(), key=lambda n: n.user_id)

    @pytest.mark.asyncio
    async def test_proposal_notification_goes_to_actor(self):
        payload = ProposalNotificationPayload(
            tenant_id=TENANT_ID,
            timestamp=BASE_TIME,
            proposal_id="proposal-1",
            actor_id="organizer-1",
            new_status="APPROVED",
            previous_status="UNDER_REVIEW",
        )

        await self.processor.process(notification_job(JobName.NOTIFY_PROPOSAL_APPROVED, payload))

        [notification] = self.created()
        assert notification.user_id == "organizer-1"
        assert notification.title == "Proposal Approved"
        assert notification.severity == NotificationSeverity.SUCCESS
        assert notification.message == "Proposal proposal-1 status changed to APPROVED."
        assert notification.link == "/dashboard/proposals/proposal-1"
        assert notification.entity_type == "Proposal"
        assert notification.read is False

    @pytest.mark.asyncio
    async def test_company_decision_is_broadcast(self):
        company = self.store.add_company()
        jane = self.store.add_user("jane@acme.com", UserRole.USER, company_id=company.id)
        joe = self.store.add_user("joe@acme.com", UserRole.SPONSOR, company_id=company.id)
        self.store.add_user("gone@acme.com", UserRole.USER, company_id=company.id, is_active=False)

        await self.processor.process(notification_job(
            JobName.NOTIFY_COMPANY_VERIFIED, verification_payload("Company", company.id, "VERIFIED")
        ))

        created = self.created()
        assert sorted(n.user_id for n in created) == sorted([jane.id, joe.id])
        assert {n.title for n in created} == {"Company Verified"}
        assert {n.message for n in created} == {"Your company has been verified and is now active."}
        assert {n.link for n in created} == {f"/dashboard/companies/{company.id}"}

    @pytest.mark.asyncio
    async def test_event_rejection_reaches_organizer_users(self):
        organizer = self.store.add_organizer()
        event = self.store.add_event(organizer)
        org_user = self.store.add_user("org@techevents.com", UserRole.ORGANIZER, organizer_id=organizer.id)

        await self.processor.process(notification_job(
            JobName.NOTIFY_EVENT_REJECTED, verification_payload("Event", event.id, "REJECTED")
        ))

        [notification] = self.created()
        assert notification.user_id == org_user.id
        assert notification.severity == NotificationSeverity.ERROR
        assert notification.message == "Your event has been rejected. Please review and resubmit."

    @pytest.mark.asyncio
    async def test_no_recipients_is_not_an_error(self):
        company = self.store.add_company()

        await self.processor.process(notification_job(
            JobName.NOTIFY_COMPANY_REJECTED, verification_payload("Company", company.id, "REJECTED")
        ))

        assert self.created() == []

    @pytest.mark.asyncio
    async def test_unknown_job_name_is_skipped(self):
        await self.processor.process(
            QueuedJob(id="x", queue_name="notifications", name="notify.invoice.paid", data={})
        )

        assert self.created() == []

    @pytest.mark.asyncio
    async def test_store_failure_is_raised_for_retry(self):
        repository = Mock(spec=NotificationRepository)
        repository.create.side_effect = RuntimeError("database is locked")
        processor = NotificationProcessor(repository, self.resolver)
        payload = ProposalNotificationPayload(
            tenant_id=TENANT_ID, timestamp=BASE_TIME, proposal_id="p-1", actor_id="u-1", new_status="SUBMITTED"
        )

        with pytest.raises(RuntimeError, match="database is locked"):
            await processor.process(notification_job(JobName.NOTIFY_PROPOSAL_SUBMITTED, payload))

    @pytest.mark.asyncio
    async def test_malformed_payload_is_raised_for_retry(self):
        with pytest.raises(PydanticValidationError):
            await self.processor.process(
                QueuedJob(id="x", queue_name="notifications", name="notify.company.verified", data={})
            )
