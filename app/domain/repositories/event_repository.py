"""
Event and organizer repository interfaces.
"""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.models.event import Event, Organizer


class EventRepository(ABC):
    """Repository interface for the Event aggregate."""

    @abstractmethod
    def find_by_id(self, tenant_id: str, event_id: str) -> Optional[Event]:
        pass

    @abstractmethod
    def save(self, event: Event) -> Event:
        pass


class OrganizerRepository(ABC):
    """Read access to organizers."""

    @abstractmethod
    def find_by_id(self, tenant_id: str, organizer_id: str) -> Optional[Organizer]:
        pass
