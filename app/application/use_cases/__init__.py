"""
Application layer use cases.
Business logic for the sponsorship platform.
"""

from .base_use_case import (
    UseCaseResult,
    BaseUseCase,
    QueryUseCase,
    PaginatedQueryUseCase,
    CommandUseCase,
    AuthorizedUseCase,
)
from .lifecycle_use_cases import GetCompanyLifecycleUseCase, GetEventLifecycleUseCase
from .verification_use_cases import VerifyEntityUseCase, VerifyCompanyUseCase, VerifyEventUseCase
from .proposal_use_cases import CreateProposalUseCase, TransitionProposalUseCase, ListProposalsUseCase
from .notification_use_cases import (
    ListNotificationsUseCase,
    GetUnreadCountUseCase,
    MarkNotificationReadUseCase,
    MarkAllNotificationsReadUseCase,
)
from .email_log_use_cases import ListEmailLogsUseCase

__all__ = [
    # Base Use Cases
    "UseCaseResult",
    "BaseUseCase",
    "QueryUseCase",
    "PaginatedQueryUseCase",
    "CommandUseCase",
    "AuthorizedUseCase",

    # Lifecycle
    "GetCompanyLifecycleUseCase",
    "GetEventLifecycleUseCase",

    # Verification
    "VerifyEntityUseCase",
    "VerifyCompanyUseCase",
    "VerifyEventUseCase",

    # Proposals
    "CreateProposalUseCase",
    "TransitionProposalUseCase",
    "ListProposalsUseCase",

    # Notifications
    "ListNotificationsUseCase",
    "GetUnreadCountUseCase",
    "MarkNotificationReadUseCase",
    "MarkAllNotificationsReadUseCase",

    # Email logs
    "ListEmailLogsUseCase",
]
