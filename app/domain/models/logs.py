"""
Append-only log records: audit trail and email delivery outcomes.
"""

from typing import Optional, Dict, Any
from dataclasses import dataclass, field
from enum import Enum

from .base import BaseEntity


class AuditAction(str, Enum):
    """Closed set of audited actions."""
    COMPANY_VERIFIED = "company.verified"
    COMPANY_REJECTED = "company.rejected"
    EVENT_VERIFIED = "event.verified"
    EVENT_REJECTED = "event.rejected"
    PROPOSAL_CREATED = "proposal.created"
    PROPOSAL_SUBMITTED = "proposal.submitted"
    PROPOSAL_APPROVED = "proposal.approved"
    PROPOSAL_REJECTED = "proposal.rejected"
    PROPOSAL_STATUS_CHANGED = "proposal.status_changed"
    PROPOSAL_UPDATED = "proposal.updated"

    @classmethod
    def parse(cls, value: str) -> Optional["AuditAction"]:
        """Return the member for a stored action string, or None if unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


class EmailStatus(str, Enum):
    SENT = "SENT"
    FAILED = "FAILED"


@dataclass(kw_only=True)
class AuditLogEntry(BaseEntity):
    """One state-changing action. Never updated or deleted."""

    actor_id: str
    actor_role: str
    action: str
    entity_type: str
    entity_id: str
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(kw_only=True)
class EmailLogEntry(BaseEntity):
    """Outcome of one delivery attempt."""

    recipient: str
    subject: str
    status: EmailStatus
    job_name: Optional[str] = None
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def is_sent(self) -> bool:
        return self.status == EmailStatus.SENT
