"""
Proposals router.
Create proposals and move them through the review workflow.
"""

from typing import Annotated
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from app.application.dto.proposal_dto import (
    CreateProposalRequestDTO,
    ListProposalsRequestDTO,
    ProposalResponseDTO,
    UpdateProposalStatusRequestDTO,
)
from app.application.use_cases import CreateProposalUseCase, ListProposalsUseCase, TransitionProposalUseCase
from app.domain.models.proposal import ProposalStatus
from app.infrastructure.auth import CurrentUser, get_current_user
from app.infrastructure.web.dependencies import (
    get_create_proposal_use_case,
    get_list_proposals_use_case,
    get_transition_proposal_use_case,
)
from app.infrastructure.web.middleware.error_handler import raise_for_result


router = APIRouter()


class UpdateStatusRequest(BaseModel):
    status: ProposalStatus


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ProposalResponseDTO)
async def create_proposal(
    request: CreateProposalRequestDTO,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_case: Annotated[CreateProposalUseCase, Depends(get_create_proposal_use_case)]
):
    """
    Create a proposal for a sponsorship.

    - **sponsorship_id**: Sponsorship the proposal belongs to (required)
    - **status**: DRAFT (default) or SUBMITTED
    - **proposed_tier** / **proposed_amount**: Offered terms
    """
    use_case.set_current_user(user.user_id, user.tenant_id, user.role)
    return raise_for_result(await use_case.execute(request))


@router.get("", response_model=dict)
async def list_proposals(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_case: Annotated[ListProposalsUseCase, Depends(get_list_proposals_use_case)],
    sponsorship_id: str = Query(..., description="Sponsorship whose proposals are listed"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100)
):
    use_case.set_current_user(user.user_id, user.tenant_id, user.role)
    request = ListProposalsRequestDTO(sponsorship_id=sponsorship_id, page=page, page_size=page_size)
    return raise_for_result(await use_case.execute(request)).model_dump()


@router.patch("/{proposal_id}/status", response_model=ProposalResponseDTO)
async def update_proposal_status(
    proposal_id: str,
    body: UpdateStatusRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_case: Annotated[TransitionProposalUseCase, Depends(get_transition_proposal_use_case)]
):
    """
    Move a proposal to a new status.

    Requesting the current status is accepted and changes nothing.
    """
    use_case.set_current_user(user.user_id, user.tenant_id, user.role)
    request = UpdateProposalStatusRequestDTO(proposal_id=proposal_id, status=body.status)
    return raise_for_result(await use_case.execute(request))
