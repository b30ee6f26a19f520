"""
Sponsorship and Proposal domain models.
A sponsorship links a company to an event; proposals negotiate its terms.
"""

from typing import Optional, Dict, FrozenSet
from datetime import datetime
from dataclasses import dataclass
from enum import Enum

from .base import AggregateRoot, BaseEntity, BusinessRuleViolation, ValidationError, utc_now
from app.domain.events.proposal_events import ProposalCreated, ProposalStatusChanged


class SponsorshipStatus(str, Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class ProposalStatus(str, Enum):
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"

    @property
    def is_decision(self) -> bool:
        """APPROVED and REJECTED close the review."""
        return self in (ProposalStatus.APPROVED, ProposalStatus.REJECTED)


ALLOWED_TRANSITIONS: Dict[ProposalStatus, FrozenSet[ProposalStatus]] = {
    ProposalStatus.DRAFT: frozenset({ProposalStatus.SUBMITTED, ProposalStatus.WITHDRAWN}),
    ProposalStatus.SUBMITTED: frozenset({ProposalStatus.UNDER_REVIEW, ProposalStatus.WITHDRAWN}),
    ProposalStatus.UNDER_REVIEW: frozenset({
        ProposalStatus.APPROVED,
        ProposalStatus.REJECTED,
        ProposalStatus.WITHDRAWN,
    }),
    ProposalStatus.APPROVED: frozenset(),
    ProposalStatus.REJECTED: frozenset(),
    ProposalStatus.WITHDRAWN: frozenset(),
}


@dataclass(kw_only=True)
class Sponsorship(BaseEntity):
    """Relationship between a sponsor company and an event."""

    company_id: str
    event_id: str
    status: SponsorshipStatus = SponsorshipStatus.PENDING
    tier: Optional[str] = None
    notes: Optional[str] = None

    # Read-side denormalisations filled by the repository
    company_name: Optional[str] = None
    event_title: Optional[str] = None


@dataclass(kw_only=True)
class Proposal(AggregateRoot):
    """
    Proposal aggregate root.
    Status changes go through `transition_to` so the transition table and
    review timestamps are always enforced.
    """

    sponsorship_id: str
    status: ProposalStatus = ProposalStatus.DRAFT
    proposed_tier: Optional[str] = None
    proposed_amount: Optional[float] = None
    message: Optional[str] = None
    notes: Optional[str] = None
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None

    def __post_init__(self):
        if self.proposed_amount is not None and self.proposed_amount < 0:
            raise ValidationError("Proposed amount cannot be negative", "proposed_amount")

    @classmethod
    def create(
        cls,
        tenant_id: str,
        sponsorship_id: str,
        actor_id: str,
        actor_role: str,
        status: ProposalStatus = ProposalStatus.DRAFT,
        proposed_tier: Optional[str] = None,
        proposed_amount: Optional[float] = None,
        message: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> "Proposal":
        if status not in (ProposalStatus.DRAFT, ProposalStatus.SUBMITTED):
            raise ValidationError("A new proposal must be DRAFT or SUBMITTED", "status")

        proposal = cls(
            tenant_id=tenant_id,
            sponsorship_id=sponsorship_id,
            status=status,
            proposed_tier=proposed_tier,
            proposed_amount=proposed_amount,
            message=message,
            notes=notes,
        )
        if status == ProposalStatus.SUBMITTED:
            proposal.submitted_at = proposal.created_at

        proposal.add_event(ProposalCreated(
            proposal_id=proposal.id,
            tenant_id=tenant_id,
            actor_id=actor_id,
            actor_role=actor_role,
            new_status=status.value,
            sponsorship_id=sponsorship_id,
            proposed_amount=proposed_amount,
        ))
        return proposal

    def can_transition_to(self, new_status: ProposalStatus) -> bool:
        return new_status == self.status or new_status in ALLOWED_TRANSITIONS[self.status]

    def transition_to(self, new_status: ProposalStatus, actor_id: str, actor_role: str) -> bool:
        """
        Move the proposal to `new_status`.

        Returns False for a same-status call, which changes nothing.
        Raises BusinessRuleViolation for transitions outside the table.
        """
        if new_status == self.status:
            return False

        if not self.can_transition_to(new_status):
            raise BusinessRuleViolation(
                f"Cannot transition proposal from {self.status.value} to {new_status.value}"
            )

        previous = self.status
        now = utc_now()
        self.status = new_status
        if new_status == ProposalStatus.SUBMITTED and self.submitted_at is None:
            self.submitted_at = now
        if new_status.is_decision:
            self.reviewed_at = now
        self.mark_as_updated()

        self.add_event(ProposalStatusChanged(
            proposal_id=self.id,
            tenant_id=self.tenant_id,
            actor_id=actor_id,
            actor_role=actor_role,
            previous_status=previous.value,
            new_status=new_status.value,
        ))
        return True
