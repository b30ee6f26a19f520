"""
Audit log, email log and notification store interfaces.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from app.domain.models.logs import AuditLogEntry, EmailLogEntry, EmailStatus
from app.domain.models.notification import Notification


EntityRef = Tuple[str, str]


class AuditLogRepository(ABC):
    """Append-only audit trail."""

    @abstractmethod
    def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        pass

    @abstractmethod
    def find_by_entities(self, tenant_id: str, entities: Sequence[EntityRef]) -> List[AuditLogEntry]:
        """Entries matching any (entity_type, entity_id) pair, oldest first."""
        pass


class EmailLogRepository(ABC):
    """Append-only delivery log."""

    @abstractmethod
    def append(self, entry: EmailLogEntry) -> EmailLogEntry:
        pass

    @abstractmethod
    def find_by_entity_ids(self, tenant_id: str, entity_ids: Sequence[str]) -> List[EmailLogEntry]:
        """Entries correlated to any of the ids, oldest first."""
        pass

    @abstractmethod
    def search(
        self,
        tenant_id: str,
        status: Optional[EmailStatus] = None,
        job_name: Optional[str] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 20
    ) -> Tuple[List[EmailLogEntry], int]:
        """Newest first; returns the page and the total count."""
        pass


class NotificationRepository(ABC):
    """Per-user in-app notifications."""

    @abstractmethod
    def create(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    def find_by_id(self, tenant_id: str, notification_id: str) -> Optional[Notification]:
        pass

    @abstractmethod
    def find_by_entity(self, tenant_id: str, entity_type: str, entity_id: str) -> List[Notification]:
        pass

    @abstractmethod
    def find_for_user(
        self,
        tenant_id: str,
        user_id: str,
        read: Optional[bool] = None,
        offset: int = 0,
        limit: int = 20
    ) -> Tuple[List[Notification], int]:
        """Newest first; returns the page and the total count."""
        pass

    @abstractmethod
    def count_unread(self, tenant_id: str, user_id: str) -> int:
        pass

    @abstractmethod
    def save(self, notification: Notification) -> Notification:
        pass

    @abstractmethod
    def mark_all_read(self, tenant_id: str, user_id: str) -> int:
        """Returns how many notifications changed."""
        pass
