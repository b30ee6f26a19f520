"""
Email log router.
Delivery history for managers.
"""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Query

from app.application.dto.email_log_dto import ListEmailLogsRequestDTO
from app.application.use_cases import ListEmailLogsUseCase
from app.domain.models.logs import EmailStatus
from app.infrastructure.auth import CurrentUser, get_current_user
from app.infrastructure.web.dependencies import get_list_email_logs_use_case
from app.infrastructure.web.middleware.error_handler import raise_for_result


router = APIRouter()


@router.get("", response_model=dict)
async def list_email_logs(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_case: Annotated[ListEmailLogsUseCase, Depends(get_list_email_logs_use_case)],
    status: Optional[EmailStatus] = Query(None, description="SENT or FAILED"),
    job_name: Optional[str] = Query(None, description="Filter by job name"),
    search: Optional[str] = Query(None, description="Search recipient or subject"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100)
):
    """
    List email delivery attempts, newest first.

    - **status**: SENT or FAILED
    - **job_name**: e.g. email.proposal.approved
    - **search**: Substring of the recipient or the subject
    """
    use_case.set_current_user(user.user_id, user.tenant_id, user.role)
    request = ListEmailLogsRequestDTO(
        status=status, job_name=job_name, search=search, page=page, page_size=page_size
    )
    return raise_for_result(await use_case.execute(request)).model_dump()
