"""
Read-side lifecycle projection types.
Nothing here is persisted; entries are rebuilt on every request.
"""

import math
from typing import Optional
from datetime import datetime
from dataclasses import dataclass
from enum import Enum


class TimelineType(str, Enum):
    COMPANY_CREATED = "COMPANY_CREATED"
    COMPANY_VERIFIED = "COMPANY_VERIFIED"
    COMPANY_REJECTED = "COMPANY_REJECTED"
    EVENT_CREATED = "EVENT_CREATED"
    EVENT_VERIFIED = "EVENT_VERIFIED"
    EVENT_REJECTED = "EVENT_REJECTED"
    SPONSORSHIP_CREATED = "SPONSORSHIP_CREATED"
    PROPOSAL_SUBMITTED = "PROPOSAL_SUBMITTED"
    PROPOSAL_APPROVED = "PROPOSAL_APPROVED"
    PROPOSAL_REJECTED = "PROPOSAL_REJECTED"
    PROPOSAL_STATUS_CHANGED = "PROPOSAL_STATUS_CHANGED"
    EMAIL_SENT = "EMAIL_SENT"
    EMAIL_FAILED = "EMAIL_FAILED"
    NOTIFICATION_CREATED = "NOTIFICATION_CREATED"
    AUDIT_LOG = "AUDIT_LOG"


@dataclass(frozen=True)
class TimelineEntry:
    type: TimelineType
    entity_type: str
    entity_id: str
    description: str
    timestamp: datetime
    actor_id: Optional[str] = None
    actor_role: Optional[str] = None
    status: Optional[str] = None
    recipient: Optional[str] = None
    subject: Optional[str] = None

    @property
    def dedup_key(self) -> tuple:
        """Entries with the same type and entity within one second are the same fact."""
        return (self.type, self.entity_id, math.floor(self.timestamp.timestamp()))


@dataclass(frozen=True)
class LifecycleProgress:
    total_steps: int
    completed_steps: int

    @property
    def percentage(self) -> int:
        if self.total_steps <= 0:
            return 0
        # Halves round up
        return math.floor(self.completed_steps / self.total_steps * 100 + 0.5)


@dataclass(frozen=True)
class LifecycleStats:
    total_proposals: int = 0
    approved_proposals: int = 0
    rejected_proposals: int = 0
    total_sponsorships: int = 0
    sent_emails: int = 0
    failed_emails: int = 0
