"""
Repository interfaces for the domain layer.
Implementations live in app.infrastructure.repositories.
"""

from .company_repository import CompanyRepository
from .event_repository import EventRepository, OrganizerRepository
from .proposal_repository import ProposalRepository, SponsorshipRepository
from .user_repository import UserRepository
from .log_repositories import (
    AuditLogRepository,
    EmailLogRepository,
    NotificationRepository,
    EntityRef,
)

__all__ = [
    "CompanyRepository",
    "EventRepository",
    "OrganizerRepository",
    "ProposalRepository",
    "SponsorshipRepository",
    "UserRepository",
    "AuditLogRepository",
    "EmailLogRepository",
    "NotificationRepository",
    "EntityRef",
]
