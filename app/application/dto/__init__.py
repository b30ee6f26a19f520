"""
Application layer DTOs.
Data Transfer Objects for the sponsorship platform.
"""

from .base_dto import BaseDTO, RequestDTO, ResponseDTO, ListRequestDTO, ListResponseDTO, ErrorResponseDTO
from .lifecycle_dto import (
    TimelineEntryDTO,
    LifecycleProgressDTO,
    LifecycleStatsDTO,
    CompanySummaryDTO,
    EventSummaryDTO,
    LifecycleProposalDTO,
    CompanyLifecycleResponseDTO,
    EventLifecycleResponseDTO,
)
from .verification_dto import VerifyEntityRequestDTO, VerificationResponseDTO
from .proposal_dto import (
    CreateProposalRequestDTO,
    UpdateProposalStatusRequestDTO,
    ListProposalsRequestDTO,
    ProposalResponseDTO,
)
from .notification_dto import (
    ListNotificationsRequestDTO,
    NotificationResponseDTO,
    UnreadCountResponseDTO,
    MarkAllReadResponseDTO,
)
from .email_log_dto import ListEmailLogsRequestDTO, EmailLogResponseDTO

__all__ = [
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "ListRequestDTO",
    "ListResponseDTO",
    "ErrorResponseDTO",
    "TimelineEntryDTO",
    "LifecycleProgressDTO",
    "LifecycleStatsDTO",
    "CompanySummaryDTO",
    "EventSummaryDTO",
    "LifecycleProposalDTO",
    "CompanyLifecycleResponseDTO",
    "EventLifecycleResponseDTO",
    "VerifyEntityRequestDTO",
    "VerificationResponseDTO",
    "CreateProposalRequestDTO",
    "UpdateProposalStatusRequestDTO",
    "ListProposalsRequestDTO",
    "ProposalResponseDTO",
    "ListNotificationsRequestDTO",
    "NotificationResponseDTO",
    "UnreadCountResponseDTO",
    "MarkAllReadResponseDTO",
    "ListEmailLogsRequestDTO",
    "EmailLogResponseDTO",
]
