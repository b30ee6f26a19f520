"""
Job names, payloads and enqueue options for the email and notification queues.
"""

from typing import Optional, Literal
from datetime import datetime
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict

from app.config import settings


class QueueName(str, Enum):
    EMAIL = "email"
    NOTIFICATIONS = "notifications"


class JobName(str, Enum):
    """Closed set of job names understood by the processors."""
    EMAIL_PROPOSAL_SUBMITTED = "email.proposal.submitted"
    EMAIL_PROPOSAL_APPROVED = "email.proposal.approved"
    EMAIL_PROPOSAL_REJECTED = "email.proposal.rejected"
    EMAIL_COMPANY_VERIFIED = "email.company.verified"
    EMAIL_COMPANY_REJECTED = "email.company.rejected"
    EMAIL_EVENT_VERIFIED = "email.event.verified"
    EMAIL_EVENT_REJECTED = "email.event.rejected"

    NOTIFY_PROPOSAL_SUBMITTED = "notify.proposal.submitted"
    NOTIFY_PROPOSAL_APPROVED = "notify.proposal.approved"
    NOTIFY_PROPOSAL_REJECTED = "notify.proposal.rejected"
    NOTIFY_COMPANY_VERIFIED = "notify.company.verified"
    NOTIFY_COMPANY_REJECTED = "notify.company.rejected"
    NOTIFY_EVENT_VERIFIED = "notify.event.verified"
    NOTIFY_EVENT_REJECTED = "notify.event.rejected"

    @classmethod
    def parse(cls, value: str) -> Optional["JobName"]:
        """Return the member for a job name, or None for names this version does not know."""
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def queue(self) -> QueueName:
        return QueueName.EMAIL if self.value.startswith("email.") else QueueName.NOTIFICATIONS


def idempotency_key(job_name: str, entity_id: str) -> str:
    """Deterministic job id: the same logical job always maps to the same key."""
    name = job_name.value if isinstance(job_name, Enum) else job_name
    return f"{name}:{entity_id}"


@dataclass(frozen=True)
class BackoffPolicy:
    type: Literal["exponential", "fixed"] = "exponential"
    delay_ms: int = 1000

    def delay_for(self, attempts_made: int) -> int:
        """Delay before the next try, given how many attempts already failed."""
        if self.type == "fixed":
            return self.delay_ms
        return self.delay_ms * (2 ** max(attempts_made - 1, 0))


@dataclass(frozen=True)
class JobOptions:
    attempts: int = 3
    backoff: BackoffPolicy = field(default_factory=BackoffPolicy)
    remove_on_complete: int = 100
    remove_on_fail: int = 200


def default_job_options() -> JobOptions:
    return JobOptions(
        attempts=settings.job_attempts,
        backoff=BackoffPolicy("exponential", settings.job_backoff_delay_ms),
        remove_on_complete=settings.job_keep_completed,
        remove_on_fail=settings.job_keep_failed,
    )


class JobPayload(BaseModel):
    """Base for queue payloads. Payloads are serialized to JSON in the queue."""

    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    tenant_id: str
    timestamp: datetime


class ProposalEmailPayload(JobPayload):
    proposal_id: str
    actor_id: str
    actor_role: str
    new_status: str
    previous_status: Optional[str] = None
    sponsorship_id: Optional[str] = None
    proposed_amount: Optional[float] = None


class VerificationEmailPayload(JobPayload):
    entity_type: Literal["Company", "Event"]
    entity_id: str
    reviewer_id: str
    reviewer_role: str
    decision: Literal["VERIFIED", "REJECTED"]
    reviewer_notes: Optional[str] = None


class ProposalNotificationPayload(JobPayload):
    proposal_id: str
    actor_id: str
    new_status: str
    previous_status: Optional[str] = None


class VerificationNotificationPayload(JobPayload):
    entity_type: Literal["Company", "Event"]
    entity_id: str
    decision: Literal["VERIFIED", "REJECTED"]
