"""
SQLAlchemy models for the database.
Maps domain entities to database tables.
"""

import uuid

from sqlalchemy import (
    Column, Integer, String, DateTime, Text, Boolean,
    Numeric, ForeignKey, JSON, Enum as SQLEnum,
    Index, UniqueConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.domain.models.user import UserRole
from app.domain.models.company import CompanyType, VerificationStatus
from app.domain.models.event import EventStatus
from app.domain.models.proposal import SponsorshipStatus, ProposalStatus
from app.domain.models.logs import EmailStatus
from app.domain.models.notification import NotificationSeverity
from app.infrastructure.db.database import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps."""
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class UserModel(Base, TimestampMixin):
    """Platform user accounts."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    tenant_id = Column(String(36), nullable=False, index=True)
    email = Column(String(255), nullable=False)
    name = Column(String(255))
    role = Column(SQLEnum(UserRole, native_enum=False), nullable=False, default=UserRole.USER)
    is_active = Column(Boolean, default=True, nullable=False)
    company_id = Column(String(36), ForeignKey("companies.id", ondelete="SET NULL"))
    organizer_id = Column(String(36), ForeignKey("organizers.id", ondelete="SET NULL"))

    company = relationship("CompanyModel", back_populates="users")
    organizer = relationship("OrganizerModel", back_populates="users")

    __table_args__ = (
        UniqueConstraint("tenant_id", "email", name="uq_user_tenant_email"),
        Index("idx_user_company_role", "company_id", "role", "is_active"),
        Index("idx_user_organizer_role", "organizer_id", "role", "is_active"),
    )


class CompanyModel(Base, TimestampMixin):
    """Sponsor companies."""
    __tablename__ = "companies"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    tenant_id = Column(String(36), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255))
    type = Column(SQLEnum(CompanyType, native_enum=False), nullable=False, default=CompanyType.SPONSOR)
    website = Column(String(500))
    description = Column(Text)
    logo_url = Column(String(500))
    verification_status = Column(
        SQLEnum(VerificationStatus, native_enum=False),
        nullable=False,
        default=VerificationStatus.PENDING
    )

    users = relationship("UserModel", back_populates="company")
    sponsorships = relationship("SponsorshipModel", back_populates="company")

    __table_args__ = (
        UniqueConstraint("tenant_id", "slug", name="uq_company_tenant_slug"),
        Index("idx_company_verification", "tenant_id", "verification_status"),
    )


class OrganizerModel(Base, TimestampMixin):
    """Event organizers."""
    __tablename__ = "organizers"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    tenant_id = Column(String(36), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    contact_email = Column(String(255))
    contact_phone = Column(String(50))
    website = Column(String(500))
    is_active = Column(Boolean, default=True, nullable=False)

    users = relationship("UserModel", back_populates="organizer")
    events = relationship("EventModel", back_populates="organizer")


class EventModel(Base, TimestampMixin):
    """Events looking for sponsors."""
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    tenant_id = Column(String(36), nullable=False, index=True)
    organizer_id = Column(String(36), ForeignKey("organizers.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    location = Column(String(255))
    venue = Column(String(255))
    start_date = Column(DateTime(timezone=True))
    end_date = Column(DateTime(timezone=True))
    status = Column(SQLEnum(EventStatus, native_enum=False), nullable=False, default=EventStatus.DRAFT)
    verification_status = Column(
        SQLEnum(VerificationStatus, native_enum=False),
        nullable=False,
        default=VerificationStatus.PENDING
    )

    organizer = relationship("OrganizerModel", back_populates="events")
    sponsorships = relationship("SponsorshipModel", back_populates="event")

    __table_args__ = (
        Index("idx_event_verification", "tenant_id", "verification_status"),
    )


class SponsorshipModel(Base, TimestampMixin):
    """Company sponsoring an event."""
    __tablename__ = "sponsorships"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    tenant_id = Column(String(36), nullable=False, index=True)
    company_id = Column(String(36), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False)
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False)
    status = Column(SQLEnum(SponsorshipStatus, native_enum=False), nullable=False, default=SponsorshipStatus.PENDING)
    tier = Column(String(100))
    notes = Column(Text)

    company = relationship("CompanyModel", back_populates="sponsorships")
    event = relationship("EventModel", back_populates="sponsorships")
    proposals = relationship("ProposalModel", back_populates="sponsorship")

    __table_args__ = (
        UniqueConstraint("company_id", "event_id", name="uq_sponsorship_company_event"),
    )


class ProposalModel(Base, TimestampMixin):
    """Sponsorship proposals."""
    __tablename__ = "proposals"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    tenant_id = Column(String(36), nullable=False, index=True)
    sponsorship_id = Column(String(36), ForeignKey("sponsorships.id", ondelete="CASCADE"), nullable=False)
    status = Column(SQLEnum(ProposalStatus, native_enum=False), nullable=False, default=ProposalStatus.DRAFT)
    proposed_tier = Column(String(100))
    proposed_amount = Column(Numeric(12, 2))
    message = Column(Text)
    notes = Column(Text)
    submitted_at = Column(DateTime(timezone=True))
    reviewed_at = Column(DateTime(timezone=True))

    sponsorship = relationship("SponsorshipModel", back_populates="proposals")

    __table_args__ = (
        Index("idx_proposal_sponsorship_status", "sponsorship_id", "status"),
    )


class AuditLogModel(Base):
    """Append-only audit trail."""
    __tablename__ = "audit_logs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    tenant_id = Column(String(36), nullable=False)
    actor_id = Column(String(36), nullable=False)
    actor_role = Column(String(50), nullable=False)
    action = Column(String(100), nullable=False)
    entity_type = Column(String(50), nullable=False)
    entity_id = Column(String(36), nullable=False)
    # "metadata" is reserved on declarative classes
    metadata_ = Column("metadata", JSON)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("idx_audit_entity", "tenant_id", "entity_type", "entity_id"),
        Index("idx_audit_created", "tenant_id", "created_at"),
    )


class EmailLogModel(Base):
    """Delivery attempts."""
    __tablename__ = "email_logs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    tenant_id = Column(String(36), nullable=False)
    recipient = Column(String(255), nullable=False)
    subject = Column(String(500), nullable=False)
    job_name = Column(String(100))
    entity_type = Column(String(50))
    entity_id = Column(String(36))
    status = Column(SQLEnum(EmailStatus, native_enum=False), nullable=False)
    error_message = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("idx_email_log_entity", "tenant_id", "entity_id"),
        Index("idx_email_log_status", "tenant_id", "status"),
    )


class NotificationModel(Base, TimestampMixin):
    """In-app notifications."""
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    tenant_id = Column(String(36), nullable=False)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    severity = Column(SQLEnum(NotificationSeverity, native_enum=False), nullable=False, default=NotificationSeverity.INFO)
    read = Column(Boolean, default=False, nullable=False)
    link = Column(String(500))
    entity_type = Column(String(50))
    entity_id = Column(String(36))

    __table_args__ = (
        Index("idx_notification_user_read", "tenant_id", "user_id", "read"),
        Index("idx_notification_entity", "tenant_id", "entity_type", "entity_id"),
    )


class QueueJobModel(Base):
    """Durable queue jobs. The primary key is the job's idempotency key."""
    __tablename__ = "queue_jobs"

    job_id = Column(String(255), primary_key=True)
    queue_name = Column(String(50), nullable=False)
    name = Column(String(100), nullable=False)
    payload = Column(JSON, nullable=False)
    status = Column(String(20), nullable=False)
    attempts_made = Column(Integer, nullable=False, default=0)
    max_attempts = Column(Integer, nullable=False, default=3)
    backoff_type = Column(String(20), nullable=False, default="exponential")
    backoff_delay_ms = Column(Integer, nullable=False, default=1000)
    remove_on_complete = Column(Integer, nullable=False, default=100)
    remove_on_fail = Column(Integer, nullable=False, default=200)
    available_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    reserved_at = Column(DateTime(timezone=True))
    finished_at = Column(DateTime(timezone=True))
    last_error = Column(Text)

    __table_args__ = (
        Index("idx_queue_jobs_due", "queue_name", "status", "available_at"),
    )
