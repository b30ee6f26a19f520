"""
Processor for the email queue.

Each job name maps to one handler. Handlers resolve recipients, render the
message and hand one delivery per recipient to the email service, which
records every attempt in the email log.
"""

import logging
from typing import Awaitable, Callable, Dict, List, Optional

from app.infrastructure.email.email_service import EmailDelivery, EmailDeliveryError, EmailService
from app.infrastructure.email.template_loader import EmailTemplateLoader
from app.infrastructure.queue.backend import QueuedJob
from app.infrastructure.queue.jobs import JobName, ProposalEmailPayload, VerificationEmailPayload
from app.infrastructure.queue.worker import JobProcessor
from .recipients import RecipientResolver


logger = logging.getLogger(__name__)


def short_ref(entity_id: str) -> str:
    return f"#{entity_id[:8]}"


class EmailProcessor(JobProcessor):
    """Processes jobs from the `email` queue."""

    def __init__(
        self,
        email_service: EmailService,
        recipients: RecipientResolver,
        template_loader: Optional[EmailTemplateLoader] = None
    ):
        self.email_service = email_service
        self.recipients = recipients
        self.template_loader = template_loader or EmailTemplateLoader()
        self._handlers: Dict[JobName, Callable[[JobName, dict], Awaitable[None]]] = {
            JobName.EMAIL_PROPOSAL_SUBMITTED: self._handle_proposal_submitted,
            JobName.EMAIL_PROPOSAL_APPROVED: self._handle_proposal_decision,
            JobName.EMAIL_PROPOSAL_REJECTED: self._handle_proposal_decision,
            JobName.EMAIL_COMPANY_VERIFIED: self._handle_verification,
            JobName.EMAIL_COMPANY_REJECTED: self._handle_verification,
            JobName.EMAIL_EVENT_VERIFIED: self._handle_verification,
            JobName.EMAIL_EVENT_REJECTED: self._handle_verification,
        }

    async def process(self, job: QueuedJob) -> None:
        logger.info(f"Processing email job [{job.name}] id={job.id}")

        job_name = JobName.parse(job.name)
        handler = self._handlers.get(job_name) if job_name else None
        if handler is None:
            logger.warning(f"Unknown email job name: {job.name}")
            return

        await handler(job_name, job.data)

    async def _handle_proposal_submitted(self, job_name: JobName, data: dict) -> None:
        """Proposal submitted → notify the organizer of the event."""
        payload = ProposalEmailPayload.model_validate(data)
        recipients = self.recipients.organizer_emails_for_proposal(payload.tenant_id, payload.proposal_id)
        if not recipients:
            logger.warning(f"No organizer email found for proposal {payload.proposal_id}, skipping")
            return

        subject = f"New Proposal Submitted — {short_ref(payload.proposal_id)}"
        context = {"subject": subject, **payload.model_dump()}
        html, text = await self.template_loader.render_pair("proposal_submitted", context)
        await self._send_all(recipients, subject, html, text, payload.tenant_id, job_name,
                             "Proposal", payload.proposal_id)

    async def _handle_proposal_decision(self, job_name: JobName, data: dict) -> None:
        """Proposal approved or rejected → notify the sponsor company's users."""
        payload = ProposalEmailPayload.model_validate(data)
        recipients = self.recipients.sponsor_emails_for_proposal(payload.tenant_id, payload.proposal_id)
        if not recipients:
            logger.warning(f"No sponsor email found for proposal {payload.proposal_id}, skipping")
            return

        approved = job_name == JobName.EMAIL_PROPOSAL_APPROVED
        subject = f"Proposal {'Approved' if approved else 'Rejected'} — {short_ref(payload.proposal_id)}"
        context = {"subject": subject, "approved": approved, **payload.model_dump()}
        html, text = await self.template_loader.render_pair("proposal_decision", context)
        await self._send_all(recipients, subject, html, text, payload.tenant_id, job_name,
                             "Proposal", payload.proposal_id)

    async def _handle_verification(self, job_name: JobName, data: dict) -> None:
        """Company or event reviewed → notify its users or its organizer."""
        payload = VerificationEmailPayload.model_validate(data)
        if payload.entity_type == "Company":
            recipients = self.recipients.company_user_emails(payload.tenant_id, payload.entity_id)
            missing = "user emails"
        else:
            recipients = self.recipients.organizer_emails_for_event(payload.tenant_id, payload.entity_id)
            missing = "organizer email"
        if not recipients:
            logger.warning(
                f"No {missing} found for {payload.entity_type.lower()} {payload.entity_id}, skipping"
            )
            return

        approved = payload.decision == "VERIFIED"
        outcome = "verified" if approved else "rejected"
        subject = f"{payload.entity_type} {'Verified ✅' if approved else 'Rejected ❌'}"
        context = {
            "subject": subject,
            "outcome": outcome,
            "entity_label": payload.entity_type.lower(),
            **payload.model_dump(),
        }
        html, text = await self.template_loader.render_pair("verification_decision", context)
        await self._send_all(recipients, subject, html, text, payload.tenant_id, job_name,
                             payload.entity_type, payload.entity_id)

    async def _send_all(
        self,
        recipients: List[str],
        subject: str,
        html: str,
        text: str,
        tenant_id: str,
        job_name: JobName,
        entity_type: str,
        entity_id: str
    ) -> None:
        """Attempt every recipient, then fail the job if any delivery failed."""
        failed = []
        for to in recipients:
            try:
                await self.email_service.send(EmailDelivery(
                    to=to,
                    subject=subject,
                    html=html,
                    text=text,
                    tenant_id=tenant_id,
                    job_name=job_name.value,
                    entity_type=entity_type,
                    entity_id=entity_id,
                ))
            except EmailDeliveryError:
                failed.append(to)

        if failed:
            raise EmailDeliveryError(
                f"Email sending failed for {len(failed)} of {len(recipients)} recipient(s)"
            )
