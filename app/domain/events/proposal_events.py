"""
Domain events related to sponsorship proposals.
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass

from .base import DomainEvent


@dataclass(kw_only=True)
class ProposalCreated(DomainEvent):
    """Event fired when a sponsor creates a proposal."""

    proposal_id: str
    tenant_id: str
    actor_id: str
    actor_role: str
    new_status: str
    sponsorship_id: str
    proposed_amount: Optional[float] = None

    @property
    def entity_id(self) -> str:
        return self.proposal_id

    @property
    def timestamp(self):
        return self.occurred_at

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "proposal_id": self.proposal_id,
            "tenant_id": self.tenant_id,
            "actor_id": self.actor_id,
            "actor_role": self.actor_role,
            "new_status": self.new_status,
            "sponsorship_id": self.sponsorship_id,
            "proposed_amount": self.proposed_amount,
        }


@dataclass(kw_only=True)
class ProposalStatusChanged(DomainEvent):
    """Event fired when a proposal moves to a different status."""

    proposal_id: str
    tenant_id: str
    actor_id: str
    actor_role: str
    previous_status: str
    new_status: str

    @property
    def entity_id(self) -> str:
        return self.proposal_id

    @property
    def timestamp(self):
        return self.occurred_at

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "proposal_id": self.proposal_id,
            "tenant_id": self.tenant_id,
            "actor_id": self.actor_id,
            "actor_role": self.actor_role,
            "previous_status": self.previous_status,
            "new_status": self.new_status,
        }
