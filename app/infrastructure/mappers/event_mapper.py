"""
Event and organizer mappers.
"""

from app.domain.models.base import ensure_utc
from app.domain.models.company import VerificationStatus
from app.domain.models.event import Event, EventStatus, Organizer
from app.infrastructure.db.models import EventModel, OrganizerModel


class EventMapper:
    """Maps between Event domain entity and EventModel database model."""

    def domain_to_model(self, event: Event) -> EventModel:
        return EventModel(
            id=event.id,
            tenant_id=event.tenant_id,
            organizer_id=event.organizer_id,
            title=event.title,
            description=event.description,
            location=event.location,
            venue=event.venue,
            start_date=event.start_date,
            end_date=event.end_date,
            status=event.status,
            verification_status=event.verification_status,
            created_at=event.created_at,
            updated_at=event.updated_at,
        )

    def update_model(self, model: EventModel, event: Event) -> None:
        model.title = event.title
        model.description = event.description
        model.location = event.location
        model.venue = event.venue
        model.start_date = event.start_date
        model.end_date = event.end_date
        model.status = event.status
        model.verification_status = event.verification_status
        model.updated_at = event.updated_at

    def model_to_domain(self, model: EventModel) -> Event:
        return Event(
            id=model.id,
            tenant_id=model.tenant_id,
            organizer_id=model.organizer_id,
            title=model.title,
            description=model.description,
            location=model.location,
            venue=model.venue,
            start_date=ensure_utc(model.start_date),
            end_date=ensure_utc(model.end_date),
            status=EventStatus(model.status),
            verification_status=VerificationStatus(model.verification_status),
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


class OrganizerMapper:

    def domain_to_model(self, organizer: Organizer) -> OrganizerModel:
        return OrganizerModel(
            id=organizer.id,
            tenant_id=organizer.tenant_id,
            name=organizer.name,
            contact_email=organizer.contact_email,
            contact_phone=organizer.contact_phone,
            website=organizer.website,
            is_active=organizer.is_active,
            created_at=organizer.created_at,
            updated_at=organizer.updated_at,
        )

    def model_to_domain(self, model: OrganizerModel) -> Organizer:
        return Organizer(
            id=model.id,
            tenant_id=model.tenant_id,
            name=model.name,
            contact_email=model.contact_email,
            contact_phone=model.contact_phone,
            website=model.website,
            is_active=model.is_active,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )
