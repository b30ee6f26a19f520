"""
Notifications router.
In-app notifications of the current user.
"""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Query

from app.application.dto.notification_dto import (
    ListNotificationsRequestDTO,
    MarkAllReadResponseDTO,
    NotificationResponseDTO,
    UnreadCountResponseDTO,
)
from app.application.use_cases import (
    GetUnreadCountUseCase,
    ListNotificationsUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
)
from app.infrastructure.auth import CurrentUser, get_current_user
from app.infrastructure.web.dependencies import (
    get_list_notifications_use_case,
    get_mark_all_read_use_case,
    get_mark_read_use_case,
    get_unread_count_use_case,
)
from app.infrastructure.web.middleware.error_handler import raise_for_result


router = APIRouter()


@router.get("", response_model=dict)
async def list_notifications(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_case: Annotated[ListNotificationsUseCase, Depends(get_list_notifications_use_case)],
    read: Optional[bool] = Query(None, description="Filter by read state"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100)
):
    """List the current user's notifications, newest first."""
    use_case.set_current_user(user.user_id, user.tenant_id, user.role)
    request = ListNotificationsRequestDTO(read=read, page=page, page_size=page_size)
    return raise_for_result(await use_case.execute(request)).model_dump()


@router.get("/unread-count", response_model=UnreadCountResponseDTO)
async def get_unread_count(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_case: Annotated[GetUnreadCountUseCase, Depends(get_unread_count_use_case)]
):
    use_case.set_current_user(user.user_id, user.tenant_id, user.role)
    return raise_for_result(await use_case.execute(None))


@router.patch("/read-all", response_model=MarkAllReadResponseDTO)
async def mark_all_read(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_case: Annotated[MarkAllNotificationsReadUseCase, Depends(get_mark_all_read_use_case)]
):
    use_case.set_current_user(user.user_id, user.tenant_id, user.role)
    return raise_for_result(await use_case.execute(None))


@router.patch("/{notification_id}/read", response_model=NotificationResponseDTO)
async def mark_read(
    notification_id: str,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    use_case: Annotated[MarkNotificationReadUseCase, Depends(get_mark_read_use_case)]
):
    use_case.set_current_user(user.user_id, user.tenant_id, user.role)
    return raise_for_result(await use_case.execute(notification_id))
