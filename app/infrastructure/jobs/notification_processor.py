"""
Processor for the notifications queue.
Creates in-app notification records for the users concerned by a job.
"""

import logging
from dataclasses import dataclass
from typing import Dict

from app.domain.models.notification import Notification, NotificationSeverity
from app.domain.repositories.log_repositories import NotificationRepository
from app.infrastructure.queue.backend import QueuedJob
from app.infrastructure.queue.jobs import JobName, ProposalNotificationPayload, VerificationNotificationPayload
from app.infrastructure.queue.worker import JobProcessor
from .recipients import RecipientResolver


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationTemplate:
    title: str
    severity: NotificationSeverity


PROPOSAL_NOTIFICATIONS: Dict[JobName, NotificationTemplate] = {
    JobName.NOTIFY_PROPOSAL_SUBMITTED: NotificationTemplate("New Proposal Submitted", NotificationSeverity.INFO),
    JobName.NOTIFY_PROPOSAL_APPROVED: NotificationTemplate("Proposal Approved", NotificationSeverity.SUCCESS),
    JobName.NOTIFY_PROPOSAL_REJECTED: NotificationTemplate("Proposal Rejected", NotificationSeverity.WARNING),
}

VERIFICATION_JOBS = frozenset({
    JobName.NOTIFY_COMPANY_VERIFIED,
    JobName.NOTIFY_COMPANY_REJECTED,
    JobName.NOTIFY_EVENT_VERIFIED,
    JobName.NOTIFY_EVENT_REJECTED,
})


class NotificationProcessor(JobProcessor):
    """Processes jobs from the `notifications` queue."""

    def __init__(self, notification_repository: NotificationRepository, recipients: RecipientResolver):
        self.notification_repository = notification_repository
        self.recipients = recipients

    async def process(self, job: QueuedJob) -> None:
        logger.info(f"Processing notification job [{job.name}] id={job.id}")

        job_name = JobName.parse(job.name)
        try:
            if job_name in PROPOSAL_NOTIFICATIONS:
                await self._handle_proposal_notification(job_name, job.data)
            elif job_name in VERIFICATION_JOBS:
                await self._handle_verification_notification(job.data)
            else:
                logger.warning(f"Unknown notification job name: {job.name}")
        except Exception as e:
            logger.error(f"Failed to process notification job [{job.name}] id={job.id}: {str(e)}")
            raise

    async def _handle_proposal_notification(self, job_name: JobName, data: dict) -> None:
        """One notification for the user who acted on the proposal."""
        payload = ProposalNotificationPayload.model_validate(data)
        template = PROPOSAL_NOTIFICATIONS[job_name]

        self.notification_repository.create(Notification(
            tenant_id=payload.tenant_id,
            user_id=payload.actor_id,
            title=template.title,
            message=f"Proposal {payload.proposal_id} status changed to {payload.new_status}.",
            severity=template.severity,
            link=f"/dashboard/proposals/{payload.proposal_id}",
            entity_type="Proposal",
            entity_id=payload.proposal_id,
        ))

        logger.info(f"Proposal notification persisted: {job_name.value} for user {payload.actor_id}")

    async def _handle_verification_notification(self, data: dict) -> None:
        """Broadcast the review outcome to every user linked to the company or event."""
        payload = VerificationNotificationPayload.model_validate(data)
        verified = payload.decision == "VERIFIED"
        entity_label = payload.entity_type.lower()

        if payload.entity_type == "Company":
            user_ids = self.recipients.company_user_ids(payload.tenant_id, payload.entity_id)
            link_prefix = "companies"
        else:
            user_ids = self.recipients.event_organizer_user_ids(payload.tenant_id, payload.entity_id)
            link_prefix = "events"

        if not user_ids:
            logger.warning(
                f"No recipients found for {payload.entity_type} {payload.entity_id}, skipping notification"
            )
            return

        title = f"{payload.entity_type} {'Verified' if verified else 'Rejected'}"
        message = (
            f"Your {entity_label} has been verified and is now active."
            if verified
            else f"Your {entity_label} has been rejected. Please review and resubmit."
        )
        severity = NotificationSeverity.SUCCESS if verified else NotificationSeverity.ERROR

        for user_id in user_ids:
            self.notification_repository.create(Notification(
                tenant_id=payload.tenant_id,
                user_id=user_id,
                title=title,
                message=message,
                severity=severity,
                link=f"/dashboard/{link_prefix}/{payload.entity_id}",
                entity_type=payload.entity_type,
                entity_id=payload.entity_id,
            ))

        logger.info(
            f"Verification notification persisted for {len(user_ids)} users "
            f"(Entity: {payload.entity_type} {payload.entity_id})"
        )
