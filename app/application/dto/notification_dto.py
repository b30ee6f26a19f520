"""
Notification DTOs for the application layer.
"""

from typing import Optional
from pydantic import Field

from .base_dto import ListRequestDTO, ResponseDTO, BaseDTO
from app.domain.models.notification import Notification


class ListNotificationsRequestDTO(ListRequestDTO):
    read: Optional[bool] = Field(default=None, description="Filter by read state")


class NotificationResponseDTO(ResponseDTO):
    title: str
    message: str
    severity: str
    read: bool
    link: Optional[str] = None
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None

    @classmethod
    def from_domain(cls, notification: Notification) -> "NotificationResponseDTO":
        return cls(
            id=notification.id,
            title=notification.title,
            message=notification.message,
            severity=notification.severity.value,
            read=notification.read,
            link=notification.link,
            entity_type=notification.entity_type,
            entity_id=notification.entity_id,
            created_at=notification.created_at,
            updated_at=notification.updated_at,
        )


class UnreadCountResponseDTO(BaseDTO):
    count: int


class MarkAllReadResponseDTO(BaseDTO):
    updated: int
