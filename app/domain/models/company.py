"""
Company domain model.
A company sponsors events once a manager has verified it.
"""

from typing import Optional
from dataclasses import dataclass
from enum import Enum

from .base import AggregateRoot, BusinessRuleViolation, ValidationError
from app.domain.events.verification_events import CompanyVerified, CompanyRejected


class CompanyType(str, Enum):
    SPONSOR = "SPONSOR"
    ORGANIZER = "ORGANIZER"


class VerificationStatus(str, Enum):
    """Review state shared by companies and events."""
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"

    @property
    def is_decided(self) -> bool:
        return self in (VerificationStatus.VERIFIED, VerificationStatus.REJECTED)


@dataclass(kw_only=True)
class Company(AggregateRoot):
    """
    Company aggregate root.
    Verification decisions are recorded as domain events and published
    once the change has been saved.
    """

    name: str
    slug: Optional[str] = None
    type: CompanyType = CompanyType.SPONSOR
    website: Optional[str] = None
    description: Optional[str] = None
    logo_url: Optional[str] = None
    verification_status: VerificationStatus = VerificationStatus.PENDING

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValidationError("Company name is required", "name")
        if len(self.name) > 255:
            raise ValidationError("Company name too long (max 255 characters)", "name")

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
                f"Company is already {self.verification_status.value.lower()}"
            )

        self.verification_status = decision
        self.mark_as_updated()

        event_class = CompanyVerified if decision == VerificationStatus.VERIFIED else CompanyRejected
        self.add_event(event_class(
            entity_id=self.id,
            tenant_id=self.tenant_id,
            reviewer_id=reviewer_id,
            reviewer_role=reviewer_role,
            reviewer_notes=notes,
        ))
