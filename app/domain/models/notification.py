"""
In-app notification model.
"""

from typing import Optional
from dataclasses import dataclass
from enum import Enum

from .base import BaseEntity, ValidationError


class NotificationSeverity(str, Enum):
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass(kw_only=True)
class Notification(BaseEntity):
    """A message addressed to exactly one user. Only `read` changes after creation."""

    user_id: str
    title: str
    message: str
    severity: NotificationSeverity = NotificationSeverity.INFO
    read: bool = False
    link: Optional[str] = None
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None

    def __post_init__(self):
        if not self.user_id:
            raise ValidationError("Notification needs a recipient", "user_id")
        if not self.title:
            raise ValidationError("Notification title is required", "title")

    def mark_read(self) -> bool:
        if self.read:
            return False
        self.read = True
        self.mark_as_updated()
        return True
