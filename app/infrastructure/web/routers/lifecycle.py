"""
Lifecycle router.
Timeline, progress and stats for a company or an event.
Mounted under both /manager and /admin.
"""

from typing import Annotated
from fastapi import APIRouter, Depends

from app.application.dto.lifecycle_dto import CompanyLifecycleResponseDTO, EventLifecycleResponseDTO
from app.application.use_cases import GetCompanyLifecycleUseCase, GetEventLifecycleUseCase
from app.infrastructure.auth import CurrentUser, get_current_user
from app.infrastructure.web.dependencies import get_company_lifecycle_use_case, get_event_lifecycle_use_case
from app.infrastructure.web.middleware.error_handler import raise_for_result


router = APIRouter()


@router.get("/companies/{company_id}/lifecycle", response_model=CompanyLifecycleResponseDTO)
async def get_company_lifecycle(
    company_id: str,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_case: Annotated[GetCompanyLifecycleUseCase, Depends(get_company_lifecycle_use_case)]
):
    """
    Full history of a company: creation, review, sponsorships, proposals,
    emails and notifications, merged in time order.
    """
    use_case.set_current_user(user.user_id, user.tenant_id, user.role)
    return raise_for_result(await use_case.execute(company_id))


@router.get("/events/{event_id}/lifecycle", response_model=EventLifecycleResponseDTO)
async def get_event_lifecycle(
    event_id: str,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_case: Annotated[GetEventLifecycleUseCase, Depends(get_event_lifecycle_use_case)]
):
    """Full history of an event, with the proposals made for it."""
    use_case.set_current_user(user.user_id, user.tenant_id, user.role)
    return raise_for_result(await use_case.execute(event_id))
