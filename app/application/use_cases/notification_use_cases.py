"""
Notification use cases.
Every operation is scoped to the current user's own notifications.
"""

from typing import Optional

from app.application.use_cases.base_use_case import (
    CommandUseCase, QueryUseCase, PaginatedQueryUseCase, AuthorizedUseCase
)
from app.application.dto.base_dto import ListResponseDTO
from app.application.dto.notification_dto import (
    ListNotificationsRequestDTO,
    MarkAllReadResponseDTO,
    NotificationResponseDTO,
    UnreadCountResponseDTO,
)
from app.domain.events.base import EventDispatcher
from app.domain.models.base import EntityNotFoundError
from app.domain.repositories import NotificationRepository
from app.infrastructure.cache.list_cache import ListCache


class ListNotificationsUseCase(
    AuthorizedUseCase,
    PaginatedQueryUseCase[ListNotificationsRequestDTO, ListResponseDTO[NotificationResponseDTO]]
):
    def __init__(self, notification_repository: NotificationRepository):
        self.notification_repository = notification_repository

    async def _validate_request(self, request: ListNotificationsRequestDTO) -> None:
        self._require_user()
        await super()._validate_request(request)

    async def _execute_business_logic(
        self, request: ListNotificationsRequestDTO
    ) -> ListResponseDTO[NotificationResponseDTO]:
        notifications, total = self.notification_repository.find_for_user(
            self.current_tenant_id,
            self.current_user_id,
            read=request.read,
            offset=request.offset,
            limit=request.limit,
        )
        return ListResponseDTO[NotificationResponseDTO].create(
            [NotificationResponseDTO.from_domain(n) for n in notifications],
            total,
            request.page,
            request.page_size,
        )


class GetUnreadCountUseCase(AuthorizedUseCase, QueryUseCase[None, UnreadCountResponseDTO]):
    def __init__(self, notification_repository: NotificationRepository):
        self.notification_repository = notification_repository

    async def _validate_request(self, request: None) -> None:
        self._require_user()

    async def _execute_business_logic(self, request: None) -> UnreadCountResponseDTO:
        count = self.notification_repository.count_unread(self.current_tenant_id, self.current_user_id)
        return UnreadCountResponseDTO(count=count)


class MarkNotificationReadUseCase(AuthorizedUseCase, CommandUseCase[str, NotificationResponseDTO]):
    """Mark one notification read. Other users' notifications are reported as missing."""

    def __init__(
        self,
        notification_repository: NotificationRepository,
        dispatcher: Optional[EventDispatcher] = None,
        cache: Optional[ListCache] = None
    ):
        super().__init__(dispatcher, cache)
        self.notification_repository = notification_repository

    async def _validate_request(self, request: str) -> None:
        self._require_user()

    async def _execute_command_logic(self, notification_id: str) -> NotificationResponseDTO:
        notification = self.notification_repository.find_by_id(self.current_tenant_id, notification_id)
        if not notification or notification.user_id != self.current_user_id:
            raise EntityNotFoundError("Notification", notification_id)

        if notification.mark_read():
            notification = self.notification_repository.save(notification)
        return NotificationResponseDTO.from_domain(notification)


class MarkAllNotificationsReadUseCase(AuthorizedUseCase, CommandUseCase[None, MarkAllReadResponseDTO]):
    def __init__(
        self,
        notification_repository: NotificationRepository,
        dispatcher: Optional[EventDispatcher] = None,
        cache: Optional[ListCache] = None
    ):
        super().__init__(dispatcher, cache)
        self.notification_repository = notification_repository

    async def _validate_request(self, request: None) -> None:
        self._require_user()

    async def _execute_command_logic(self, request: None) -> MarkAllReadResponseDTO:
        updated = self.notification_repository.mark_all_read(self.current_tenant_id, self.current_user_id)
        return MarkAllReadResponseDTO(updated=updated)
