"""
Event handlers that turn domain events into queue jobs.

Producers never process jobs. Each job id is derived from the job name and
the entity id, so a re-emitted event collapses onto the job already queued.
"""

import asyncio
import logging
from typing import Dict, Optional, Tuple

from app.domain.events.base import EventHandler, DomainEvent
from app.domain.events.proposal_events import ProposalCreated, ProposalStatusChanged
from app.domain.events.verification_events import VerificationDecided
from app.domain.models.proposal import ProposalStatus
from app.infrastructure.queue.backend import JobQueue
from app.infrastructure.queue.jobs import (
    JobName,
    JobOptions,
    JobPayload,
    ProposalEmailPayload,
    ProposalNotificationPayload,
    VerificationEmailPayload,
    VerificationNotificationPayload,
    default_job_options,
    idempotency_key,
)


logger = logging.getLogger(__name__)


# (email job, notification job) per verification outcome
VERIFICATION_JOBS: Dict[Tuple[str, str], Tuple[JobName, JobName]] = {
    ("Company", "VERIFIED"): (JobName.EMAIL_COMPANY_VERIFIED, JobName.NOTIFY_COMPANY_VERIFIED),
    ("Company", "REJECTED"): (JobName.EMAIL_COMPANY_REJECTED, JobName.NOTIFY_COMPANY_REJECTED),
    ("Event", "VERIFIED"): (JobName.EMAIL_EVENT_VERIFIED, JobName.NOTIFY_EVENT_VERIFIED),
    ("Event", "REJECTED"): (JobName.EMAIL_EVENT_REJECTED, JobName.NOTIFY_EVENT_REJECTED),
}

# (email job, notification job) per proposal status that triggers delivery
PROPOSAL_STATUS_JOBS: Dict[ProposalStatus, Tuple[JobName, JobName]] = {
    ProposalStatus.SUBMITTED: (JobName.EMAIL_PROPOSAL_SUBMITTED, JobName.NOTIFY_PROPOSAL_SUBMITTED),
    ProposalStatus.APPROVED: (JobName.EMAIL_PROPOSAL_APPROVED, JobName.NOTIFY_PROPOSAL_APPROVED),
    ProposalStatus.REJECTED: (JobName.EMAIL_PROPOSAL_REJECTED, JobName.NOTIFY_PROPOSAL_REJECTED),
}


class JobProducer(EventHandler):
    """Shared enqueue logic for the producers."""

    def __init__(self, queue: JobQueue, options: Optional[JobOptions] = None):
        self.queue = queue
        self.options = options or default_job_options()

    async def _enqueue_pair(
        self,
        entity_id: str,
        email_job: JobName,
        email_payload: JobPayload,
        notify_job: JobName,
        notify_payload: JobPayload
    ) -> None:
        await asyncio.gather(
            self.queue.enqueue(
                email_job.queue.value,
                email_job.value,
                email_payload.model_dump(mode="json"),
                job_id=idempotency_key(email_job, entity_id),
                options=self.options,
            ),
            self.queue.enqueue(
                notify_job.queue.value,
                notify_job.value,
                notify_payload.model_dump(mode="json"),
                job_id=idempotency_key(notify_job, entity_id),
                options=self.options,
            ),
        )


class VerificationJobProducer(JobProducer):
    """Enqueues email and notification jobs for company and event reviews."""

    def can_handle(self, event: DomainEvent) -> bool:
        return isinstance(event, VerificationDecided)

    async def handle(self, event: DomainEvent) -> None:
        if not self.can_handle(event):
            return

        jobs = VERIFICATION_JOBS.get((event.entity_type, event.decision))
        if jobs is None:
            logger.warning(f"No jobs configured for {event.entity_type} {event.decision}")
            return
        email_job, notify_job = jobs

        email_payload = VerificationEmailPayload(
            tenant_id=event.tenant_id,
            timestamp=event.timestamp,
            entity_type=event.entity_type,
            entity_id=event.entity_id,
            reviewer_id=event.reviewer_id,
            reviewer_role=event.reviewer_role,
            decision=event.decision,
            reviewer_notes=event.reviewer_notes,
        )
        notify_payload = VerificationNotificationPayload(
            tenant_id=event.tenant_id,
            timestamp=event.timestamp,
            entity_type=event.entity_type,
            entity_id=event.entity_id,
            decision=event.decision,
        )

        await self._enqueue_pair(event.entity_id, email_job, email_payload, notify_job, notify_payload)
        logger.info(f"Enqueued {event.entity_type.lower()} {event.decision.lower()} jobs for {event.entity_id}")


class ProposalJobProducer(JobProducer):
    """Enqueues email and notification jobs for proposal submissions and decisions."""

    def can_handle(self, event: DomainEvent) -> bool:
        return isinstance(event, (ProposalCreated, ProposalStatusChanged))

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, ProposalCreated):
            await self._on_created(event)
        elif isinstance(event, ProposalStatusChanged):
            await self._on_status_changed(event)

    async def _on_created(self, event: ProposalCreated) -> None:
        if event.new_status == ProposalStatus.DRAFT.value:
            logger.debug(f"Proposal {event.proposal_id} created as draft, nothing to deliver")
            return

        email_job, notify_job = PROPOSAL_STATUS_JOBS[ProposalStatus.SUBMITTED]
        email_payload = ProposalEmailPayload(
            tenant_id=event.tenant_id,
            timestamp=event.timestamp,
            proposal_id=event.proposal_id,
            actor_id=event.actor_id,
            actor_role=event.actor_role,
            new_status=event.new_status,
            sponsorship_id=event.sponsorship_id,
            proposed_amount=event.proposed_amount,
        )
        notify_payload = ProposalNotificationPayload(
            tenant_id=event.tenant_id,
            timestamp=event.timestamp,
            proposal_id=event.proposal_id,
            actor_id=event.actor_id,
            new_status=event.new_status,
        )

        await self._enqueue_pair(event.proposal_id, email_job, email_payload, notify_job, notify_payload)
        logger.info(f"Enqueued proposal-created jobs for proposal {event.proposal_id}")

    async def _on_status_changed(self, event: ProposalStatusChanged) -> None:
        try:
            jobs = PROPOSAL_STATUS_JOBS.get(ProposalStatus(event.new_status))
        except ValueError:
            jobs = None
        if jobs is None:
            return
        email_job, notify_job = jobs

        email_payload = ProposalEmailPayload(
            tenant_id=event.tenant_id,
            timestamp=event.timestamp,
            proposal_id=event.proposal_id,
            actor_id=event.actor_id,
            actor_role=event.actor_role,
            new_status=event.new_status,
            previous_status=event.previous_status,
        )
        notify_payload = ProposalNotificationPayload(
            tenant_id=event.tenant_id,
            timestamp=event.timestamp,
            proposal_id=event.proposal_id,
            actor_id=event.actor_id,
            new_status=event.new_status,
            previous_status=event.previous_status,
        )

        await self._enqueue_pair(event.proposal_id, email_job, email_payload, notify_job, notify_payload)
        logger.info(f"Enqueued status-change jobs [{email_job.value}] for proposal {event.proposal_id}")
