"""
Infrastructure mappers module.
Contains mappers for converting between domain entities and database models.
"""

from .user_mapper import UserMapper
from .company_mapper import CompanyMapper
from .event_mapper import EventMapper, OrganizerMapper
from .proposal_mapper import SponsorshipMapper, ProposalMapper
from .log_mapper import AuditLogMapper, EmailLogMapper, NotificationMapper

__all__ = [
    "UserMapper",
    "CompanyMapper",
    "EventMapper",
    "OrganizerMapper",
    "SponsorshipMapper",
    "ProposalMapper",
    "AuditLogMapper",
    "EmailLogMapper",
    "NotificationMapper",
]
