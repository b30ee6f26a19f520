"""
Domain events raised when a manager reviews a company or an event.
"""

from typing import Dict, Any, ClassVar, Optional
from dataclasses import dataclass

from .base import DomainEvent


@dataclass(kw_only=True)
class VerificationDecided(DomainEvent):
    """Common shape of every verification decision."""

    entity_type: ClassVar[str] = ""
    decision: ClassVar[str] = ""

    entity_id: str
    tenant_id: str
    reviewer_id: str
    reviewer_role: str
    reviewer_notes: Optional[str] = None

    @property
    def timestamp(self):
        return self.occurred_at

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "tenant_id": self.tenant_id,
            "reviewer_id": self.reviewer_id,
            "reviewer_role": self.reviewer_role,
            "decision": self.decision,
            "reviewer_notes": self.reviewer_notes,
        }


@dataclass(kw_only=True)
class CompanyVerified(VerificationDecided):
    """Event fired when a manager verifies a company."""

    entity_type: ClassVar[str] = "Company"
    decision: ClassVar[str] = "VERIFIED"


@dataclass(kw_only=True)
class CompanyRejected(VerificationDecided):
    """Event fired when a manager rejects a company."""

    entity_type: ClassVar[str] = "Company"
    decision: ClassVar[str] = "REJECTED"


@dataclass(kw_only=True)
class EventVerified(VerificationDecided):
    """Event fired when a manager verifies an event."""

    entity_type: ClassVar[str] = "Event"
    decision: ClassVar[str] = "VERIFIED"


@dataclass(kw_only=True)
class EventRejected(VerificationDecided):
    """Event fired when a manager rejects an event."""

    entity_type: ClassVar[str] = "Event"
    decision: ClassVar[str] = "REJECTED"
