"""
Organizer and Event domain models.
"""

from typing import Optional
from datetime import datetime
from dataclasses import dataclass
from enum import Enum

from .base import AggregateRoot, BaseEntity, BusinessRuleViolation, ValidationError
from .company import VerificationStatus
from app.domain.events.verification_events import EventVerified, EventRejected


class EventStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


@dataclass(kw_only=True)
class Organizer(BaseEntity):
    """An organization that runs events."""

    name: str
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    website: Optional[str] = None
    is_active: bool = True


@dataclass(kw_only=True)
class Event(AggregateRoot):
    """
    Event aggregate root.
    Follows the same review flow as companies.
    """

    organizer_id: str
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    venue: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: EventStatus = EventStatus.DRAFT
    verification_status: VerificationStatus = VerificationStatus.PENDING

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValidationError("Event title is required", "title")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValidationError("End date cannot be before start date", "end_date")

    def verify(self, reviewer_id: str, reviewer_role: str, notes: Optional[str] = None) -> None:
        self._decide(VerificationStatus.VERIFIED, reviewer_id, reviewer_role, notes)

    def reject(self, reviewer_id: str, reviewer_role: str, notes: Optional[str] = None) -> None:
        self._decide(VerificationStatus.REJECTED, reviewer_id, reviewer_role, notes)

    def _decide(
        self,
        decision: VerificationStatus,
        reviewer_id: str,
        reviewer_role: str,
        notes: Optional[str]
    ) -> None:
        if self.verification_status != VerificationStatus.PENDING:
            raise BusinessRuleViolation(
                f"Event is already {self.verification_status.value.lower()}"
            )

        self.verification_status = decision
        self.mark_as_updated()

        event_class = EventVerified if decision == VerificationStatus.VERIFIED else EventRejected
        self.add_event(event_class(
            entity_id=self.id,
            tenant_id=self.tenant_id,
            reviewer_id=reviewer_id,
            reviewer_role=reviewer_role,
            reviewer_notes=notes,
        ))
