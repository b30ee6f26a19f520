"""
Shared fixtures: in-memory repositories and a SQLite session.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence, Tuple

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.domain.models import (
    AuditLogEntry,
    Company,
    EmailLogEntry,
    EmailStatus,
    Event,
    Notification,
    Organizer,
    Proposal,
    Sponsorship,
    User,
    UserRole,
)
from app.domain.repositories import (
    AuditLogRepository,
    CompanyRepository,
    EmailLogRepository,
    EventRepository,
    NotificationRepository,
    OrganizerRepository,
    ProposalRepository,
    SponsorshipRepository,
    UserRepository,
)
from app.infrastructure.db.database import create_tables


TENANT_ID = "tenant-1"
BASE_TIME = datetime(2024, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


def at(seconds: float) -> datetime:
    """A point in time relative to BASE_TIME."""
    return BASE_TIME + timedelta(seconds=seconds)


class InMemoryCompanyRepository(CompanyRepository):
    def __init__(self):
        self.items: Dict[str, Company] = {}

    def find_by_id(self, tenant_id, company_id):
        company = self.items.get(company_id)
        return company if company and company.tenant_id == tenant_id else None

    def save(self, company):
        self.items[company.id] = company
        return company


class InMemoryEventRepository(EventRepository):
    def __init__(self):
        self.items: Dict[str, Event] = {}

    def find_by_id(self, tenant_id, event_id):
        event = self.items.get(event_id)
        return event if event and event.tenant_id == tenant_id else None

    def save(self, event):
        self.items[event.id] = event
        return event


class InMemoryOrganizerRepository(OrganizerRepository):
    def __init__(self):
        self.items: Dict[str, Organizer] = {}

    def add(self, organizer: Organizer) -> Organizer:
        self.items[organizer.id] = organizer
        return organizer

    def find_by_id(self, tenant_id, organizer_id):
        organizer = self.items.get(organizer_id)
        return organizer if organizer and organizer.tenant_id == tenant_id else None


class InMemorySponsorshipRepository(SponsorshipRepository):
    def __init__(self):
        self.items: Dict[str, Sponsorship] = {}

    def add(self, sponsorship: Sponsorship) -> Sponsorship:
        self.items[sponsorship.id] = sponsorship
        return sponsorship

    def _matching(self, tenant_id, **criteria) -> List[Sponsorship]:
        found = [
            s for s in self.items.values()
            if s.tenant_id == tenant_id and all(getattr(s, k) == v for k, v in criteria.items())
        ]
        return sorted(found, key=lambda s: s.created_at)

    def find_by_id(self, tenant_id, sponsorship_id):
        found = self._matching(tenant_id, id=sponsorship_id)
        return found[0] if found else None

    def find_by_company(self, tenant_id, company_id):
        return self._matching(tenant_id, company_id=company_id)

    def find_by_event(self, tenant_id, event_id):
        return self._matching(tenant_id, event_id=event_id)


class InMemoryProposalRepository(ProposalRepository):
    def __init__(self):
        self.items: Dict[str, Proposal] = {}
        self.save_calls = 0

    def find_by_id(self, tenant_id, proposal_id):
        proposal = self.items.get(proposal_id)
        return proposal if proposal and proposal.tenant_id == tenant_id else None

    def find_by_sponsorships(self, tenant_id, sponsorship_ids):
        found = [
            p for p in self.items.values()
            if p.tenant_id == tenant_id and p.sponsorship_id in set(sponsorship_ids)
        ]
        return sorted(found, key=lambda p: p.created_at)

    def save(self, proposal):
        self.save_calls += 1
        self.items[proposal.id] = proposal
        return proposal


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self.items: Dict[str, User] = {}

    def _matching(self, tenant_id, role, active_only, **criteria) -> List[User]:
        found = [
            u for u in self.items.values()
            if u.tenant_id == tenant_id
            and all(getattr(u, k) == v for k, v in criteria.items())
            and (role is None or u.role == role)
            and (u.is_active or not active_only)
        ]
        return sorted(found, key=lambda u: u.created_at)

    def find_by_company(self, tenant_id, company_id, role=None, active_only=True):
        return self._matching(tenant_id, role, active_only, company_id=company_id)

    def find_by_organizer(self, tenant_id, organizer_id, role=None, active_only=True):
        return self._matching(tenant_id, role, active_only, organizer_id=organizer_id)

    def save(self, user):
        self.items[user.id] = user
        return user


class InMemoryAuditLogRepository(AuditLogRepository):
    def __init__(self):
        self.entries: List[AuditLogEntry] = []

    def append(self, entry):
        self.entries.append(entry)
        return entry

    def find_by_entities(self, tenant_id, entities: Sequence[Tuple[str, str]]):
        wanted = set(entities)
        found = [
            e for e in self.entries
            if e.tenant_id == tenant_id and (e.entity_type, e.entity_id) in wanted
        ]
        return sorted(found, key=lambda e: e.created_at)


class InMemoryEmailLogRepository(EmailLogRepository):
    def __init__(self):
        self.entries: List[EmailLogEntry] = []

    def append(self, entry):
        self.entries.append(entry)
        return entry

    def find_by_entity_ids(self, tenant_id, entity_ids):
        wanted = set(entity_ids)
        found = [e for e in self.entries if e.tenant_id == tenant_id and e.entity_id in wanted]
        return sorted(found, key=lambda e: e.created_at)

    def search(self, tenant_id, status=None, job_name=None, search=None, offset=0, limit=20):
        found = [
            e for e in self.entries
            if e.tenant_id == tenant_id
            and (status is None or e.status == status)
            and (not job_name or e.job_name == job_name)
            and (not search or search.lower() in e.recipient.lower() or search.lower() in e.subject.lower())
        ]
        found.sort(key=lambda e: e.created_at, reverse=True)
        return found[offset:offset + limit], len(found)


class InMemoryNotificationRepository(NotificationRepository):
    def __init__(self):
        self.items: Dict[str, Notification] = {}

    def create(self, notification):
        self.items[notification.id] = notification
        return notification

    def find_by_id(self, tenant_id, notification_id):
        notification = self.items.get(notification_id)
        return notification if notification and notification.tenant_id == tenant_id else None

    def find_by_entity(self, tenant_id, entity_type, entity_id):
        found = [
            n for n in self.items.values()
            if n.tenant_id == tenant_id and n.entity_type == entity_type and n.entity_id == entity_id
        ]
        return sorted(found, key=lambda n: n.created_at)

    def _for_user(self, tenant_id, user_id) -> List[Notification]:
        return [n for n in self.items.values() if n.tenant_id == tenant_id and n.user_id == user_id]

    def find_for_user(self, tenant_id, user_id, read=None, offset=0, limit=20):
        found = [n for n in self._for_user(tenant_id, user_id) if read is None or n.read == read]
        found.sort(key=lambda n: n.created_at, reverse=True)
        return found[offset:offset + limit], len(found)

    def count_unread(self, tenant_id, user_id):
        return sum(1 for n in self._for_user(tenant_id, user_id) if not n.read)

    def save(self, notification):
        self.items[notification.id] = notification
        return notification

    def mark_all_read(self, tenant_id, user_id):
        changed = 0
        for notification in self._for_user(tenant_id, user_id):
            if notification.mark_read():
                changed += 1
        return changed


class InMemoryStore:
    """Every repository over one shared set of records."""

    def __init__(self):
        self.companies = InMemoryCompanyRepository()
        self.events = InMemoryEventRepository()
        self.organizers = InMemoryOrganizerRepository()
        self.sponsorships = InMemorySponsorshipRepository()
        self.proposals = InMemoryProposalRepository()
        self.users = InMemoryUserRepository()
        self.audit_logs = InMemoryAuditLogRepository()
        self.email_logs = InMemoryEmailLogRepository()
        self.notifications = InMemoryNotificationRepository()

    def add_company(self, name: str = "Acme Corp", **kwargs) -> Company:
        kwargs.setdefault("tenant_id", TENANT_ID)
        kwargs.setdefault("created_at", BASE_TIME)
        return self.companies.save(Company(name=name, **kwargs))

    def add_organizer(self, name: str = "Tech Events Inc", **kwargs) -> Organizer:
        kwargs.setdefault("tenant_id", TENANT_ID)
        return self.organizers.add(Organizer(name=name, **kwargs))

    def add_event(self, organizer: Organizer, title: str = "PyCon", **kwargs) -> Event:
        kwargs.setdefault("tenant_id", TENANT_ID)
        kwargs.setdefault("created_at", BASE_TIME)
        return self.events.save(Event(organizer_id=organizer.id, title=title, **kwargs))

    def add_sponsorship(self, company: Company, event: Event, **kwargs) -> Sponsorship:
        kwargs.setdefault("tenant_id", TENANT_ID)
        kwargs.setdefault("created_at", at(60))
        return self.sponsorships.add(Sponsorship(
            company_id=company.id,
            event_id=event.id,
            company_name=company.name,
            event_title=event.title,
            **kwargs,
        ))

    def add_proposal(self, sponsorship: Sponsorship, **kwargs) -> Proposal:
        kwargs.setdefault("tenant_id", TENANT_ID)
        kwargs.setdefault("created_at", at(120))
        return self.proposals.save(Proposal(sponsorship_id=sponsorship.id, **kwargs))

    def add_user(self, email: str, role: UserRole = UserRole.USER, **kwargs) -> User:
        kwargs.setdefault("tenant_id", TENANT_ID)
        return self.users.save(User(email=email, role=role, **kwargs))

    def add_email_log(self, status: EmailStatus, entity_id: str, created_at: datetime,
                      **kwargs) -> EmailLogEntry:
        kwargs.setdefault("tenant_id", TENANT_ID)
        kwargs.setdefault("recipient", "someone@example.com")
        kwargs.setdefault("subject", "Proposal Approved")
        return self.email_logs.append(EmailLogEntry(
            status=status, entity_id=entity_id, created_at=created_at, **kwargs
        ))


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def tenant_id() -> str:
    return TENANT_ID


@pytest.fixture
def db_engine():
    """Private in-memory SQLite database shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


class FakeClock:
    """Controllable clock for queue and cache tests."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or BASE_TIME

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> None:
        self.now = self.now + timedelta(**delta)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
