"""
Event and organizer repository implementations using SQLAlchemy.
"""

from typing import Optional
from sqlalchemy.orm import Session

from app.domain.models.event import Event, Organizer
from app.domain.repositories.event_repository import (
    EventRepository as EventRepositoryInterface,
    OrganizerRepository as OrganizerRepositoryInterface,
)
from app.infrastructure.db.models import EventModel, OrganizerModel
from app.infrastructure.mappers.event_mapper import EventMapper, OrganizerMapper


class SQLAlchemyEventRepository(EventRepositoryInterface):
    """SQLAlchemy implementation of event repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = EventMapper()

    def find_by_id(self, tenant_id: str, event_id: str) -> Optional[Event]:
        model = self.session.query(EventModel).filter_by(
            id=event_id,
            tenant_id=tenant_id
        ).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def save(self, event: Event) -> Event:
        model = self.session.get(EventModel, event.id)
        if model is None:
            self.session.add(self.mapper.domain_to_model(event))
        else:
            self.mapper.update_model(model, event)
        self.session.commit()
        return event


class SQLAlchemyOrganizerRepository(OrganizerRepositoryInterface):

    def __init__(self, session: Session):
        self.session = session
        self.mapper = OrganizerMapper()

    def find_by_id(self, tenant_id: str, organizer_id: str) -> Optional[Organizer]:
        model = self.session.query(OrganizerModel).filter_by(
            id=organizer_id,
            tenant_id=tenant_id
        ).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)
