"""
Domain models for the sponsorship platform.
This module exports all domain entities and enumerations.
"""

# Base classes
from .base import (
    BaseEntity,
    AggregateRoot,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    PermissionDeniedError,
    utc_now,
    ensure_utc,
)

from .user import User, UserRole, REVIEWER_ROLES
from .company import Company, CompanyType, VerificationStatus
from .event import Event, EventStatus, Organizer
from .proposal import (
    Sponsorship,
    SponsorshipStatus,
    Proposal,
    ProposalStatus,
    ALLOWED_TRANSITIONS,
)
from .logs import AuditAction, AuditLogEntry, EmailLogEntry, EmailStatus
from .notification import Notification, NotificationSeverity
from .lifecycle import TimelineType, TimelineEntry, LifecycleProgress, LifecycleStats

__all__ = [
    # Base classes
    "BaseEntity",
    "AggregateRoot",
    "DomainException",
    "ValidationError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "PermissionDeniedError",
    "utc_now",
    "ensure_utc",

    # Accounts and organizations
    "User",
    "UserRole",
    "REVIEWER_ROLES",
    "Company",
    "CompanyType",
    "VerificationStatus",
    "Event",
    "EventStatus",
    "Organizer",

    # Sponsorship flow
    "Sponsorship",
    "SponsorshipStatus",
    "Proposal",
    "ProposalStatus",
    "ALLOWED_TRANSITIONS",

    # Logs and notifications
    "AuditAction",
    "AuditLogEntry",
    "EmailLogEntry",
    "EmailStatus",
    "Notification",
    "NotificationSeverity",

    # Lifecycle projection
    "TimelineType",
    "TimelineEntry",
    "LifecycleProgress",
    "LifecycleStats",
]
