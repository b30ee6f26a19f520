"""
Verification router.
Managers and admins approve or reject pending companies and events.
"""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.application.dto.verification_dto import VerifyEntityRequestDTO, VerificationResponseDTO
from app.application.use_cases import VerifyCompanyUseCase, VerifyEventUseCase
from app.domain.models.company import VerificationStatus
from app.infrastructure.auth import CurrentUser, get_current_user
from app.infrastructure.web.dependencies import get_verify_company_use_case, get_verify_event_use_case
from app.infrastructure.web.middleware.error_handler import raise_for_result


router = APIRouter()


class VerifyRequest(BaseModel):
    """Request body for a review decision."""
    decision: VerificationStatus
    notes: Optional[str] = Field(default=None, max_length=2000)


@router.post("/companies/{company_id}/verify", response_model=VerificationResponseDTO)
async def verify_company(
    company_id: str,
    body: VerifyRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_case: Annotated[VerifyCompanyUseCase, Depends(get_verify_company_use_case)]
):
    """
    Verify or reject a pending company.

    - **decision**: VERIFIED or REJECTED
    - **notes**: Optional reviewer notes, included in the notification email
    """
    use_case.set_current_user(user.user_id, user.tenant_id, user.role)
    request = VerifyEntityRequestDTO(entity_id=company_id, decision=body.decision, notes=body.notes)
    return raise_for_result(await use_case.execute(request))


@router.post("/events/{event_id}/verify", response_model=VerificationResponseDTO)
async def verify_event(
    event_id: str,
    body: VerifyRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_case: Annotated[VerifyEventUseCase, Depends(get_verify_event_use_case)]
):
    """Verify or reject a pending event."""
    use_case.set_current_user(user.user_id, user.tenant_id, user.role)
    request = VerifyEntityRequestDTO(entity_id=event_id, decision=body.decision, notes=body.notes)
    return raise_for_result(await use_case.execute(request))
