"""
Proposal DTOs for the application layer.
"""

from typing import Optional
from datetime import datetime
from pydantic import Field, validator

from .base_dto import ListRequestDTO, RequestDTO, ResponseDTO
from app.domain.models.proposal import Proposal, ProposalStatus


class CreateProposalRequestDTO(RequestDTO):
    sponsorship_id: str = Field(description="Sponsorship the proposal belongs to")
    status: ProposalStatus = Field(default=ProposalStatus.DRAFT, description="DRAFT or SUBMITTED")
    proposed_tier: Optional[str] = Field(default=None, max_length=100)
    proposed_amount: Optional[float] = Field(default=None, ge=0)
    message: Optional[str] = Field(default=None, max_length=5000)
    notes: Optional[str] = Field(default=None, max_length=2000)

    @validator("status")
    def validate_initial_status(cls, v):
        if v not in (ProposalStatus.DRAFT, ProposalStatus.SUBMITTED, "DRAFT", "SUBMITTED"):
            raise ValueError("A new proposal must be DRAFT or SUBMITTED")
        return v


class UpdateProposalStatusRequestDTO(RequestDTO):
    proposal_id: Optional[str] = Field(default=None, description="Filled from the path")
    status: ProposalStatus = Field(description="Target status")


class ProposalResponseDTO(ResponseDTO):
    sponsorship_id: str
    status: str
    proposed_tier: Optional[str] = None
    proposed_amount: Optional[float] = None
    message: Optional[str] = None
    notes: Optional[str] = None
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, proposal: Proposal) -> "ProposalResponseDTO":
        return cls(
            id=proposal.id,
            sponsorship_id=proposal.sponsorship_id,
            status=proposal.status.value,
            proposed_tier=proposal.proposed_tier,
            proposed_amount=proposal.proposed_amount,
            message=proposal.message,
            notes=proposal.notes,
            submitted_at=proposal.submitted_at,
            reviewed_at=proposal.reviewed_at,
            created_at=proposal.created_at,
            updated_at=proposal.updated_at,
        )


class ListProposalsRequestDTO(ListRequestDTO):
    sponsorship_id: str = Field(description="Sponsorship whose proposals are listed")
