"""
Verification DTOs.
Requests and responses for manager review of companies and events.
"""

from typing import Optional
from pydantic import Field

from .base_dto import RequestDTO, ResponseDTO
from app.domain.models.company import VerificationStatus


class VerifyEntityRequestDTO(RequestDTO):
    """A manager's decision on a pending company or event."""

    entity_id: Optional[str] = Field(default=None, description="Filled from the path")
    decision: VerificationStatus = Field(description="VERIFIED or REJECTED")
    notes: Optional[str] = Field(default=None, max_length=2000, description="Reviewer notes")


class VerificationResponseDTO(ResponseDTO):
    entity_type: str
    verification_status: str
    promoted_users: int = Field(default=0, description="USER accounts upgraded to SPONSOR")
