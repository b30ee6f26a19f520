"""
Infrastructure repositories module.
Contains SQLAlchemy implementations of domain repositories.
"""

from .company_repository import SQLAlchemyCompanyRepository
from .event_repository import SQLAlchemyEventRepository, SQLAlchemyOrganizerRepository
from .proposal_repository import SQLAlchemyProposalRepository, SQLAlchemySponsorshipRepository
from .user_repository import SQLAlchemyUserRepository
from .log_repositories import (
    SQLAlchemyAuditLogRepository,
    SQLAlchemyEmailLogRepository,
    SQLAlchemyNotificationRepository,
)

__all__ = [
    "SQLAlchemyCompanyRepository",
    "SQLAlchemyEventRepository",
    "SQLAlchemyOrganizerRepository",
    "SQLAlchemyProposalRepository",
    "SQLAlchemySponsorshipRepository",
    "SQLAlchemyUserRepository",
    "SQLAlchemyAuditLogRepository",
    "SQLAlchemyEmailLogRepository",
    "SQLAlchemyNotificationRepository",
]
