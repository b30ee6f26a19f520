"""
Domain events for the application.
Events are published after a state change is persisted and drive the async job pipeline.
"""

from .base import DomainEvent, EventHandler, EventDispatcher, get_event_dispatcher
from .verification_events import (
    VerificationDecided,
    CompanyVerified,
    CompanyRejected,
    EventVerified,
    EventRejected,
)
from .proposal_events import ProposalCreated, ProposalStatusChanged

__all__ = [
    "DomainEvent",
    "EventHandler",
    "EventDispatcher",
    "get_event_dispatcher",
    "VerificationDecided",
    "CompanyVerified",
    "CompanyRejected",
    "EventVerified",
    "EventRejected",
    "ProposalCreated",
    "ProposalStatusChanged",
]
