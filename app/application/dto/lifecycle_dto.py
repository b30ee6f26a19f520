"""
Lifecycle view DTOs.
Response shapes for the company and event lifecycle endpoints.
"""

from typing import List, Optional
from datetime import datetime
from pydantic import Field

from .base_dto import BaseDTO, ResponseDTO
from app.domain.models.lifecycle import LifecycleProgress, LifecycleStats, TimelineEntry


class TimelineEntryDTO(BaseDTO):
    """One merged timeline entry."""

    type: str
    entity_type: str
    entity_id: str
    actor_id: Optional[str] = None
    actor_role: Optional[str] = None
    status: Optional[str] = None
    recipient: Optional[str] = None
    subject: Optional[str] = None
    description: str
    timestamp: datetime

    @classmethod
    def from_entry(cls, entry: TimelineEntry) -> "TimelineEntryDTO":
        return cls(
            type=entry.type.value,
            entity_type=entry.entity_type,
            entity_id=entry.entity_id,
            actor_id=entry.actor_id,
            actor_role=entry.actor_role,
            status=entry.status,
            recipient=entry.recipient,
            subject=entry.subject,
            description=entry.description,
            timestamp=entry.timestamp,
        )


class LifecycleProgressDTO(BaseDTO):
    total_steps: int = Field(ge=0)
    completed_steps: int = Field(ge=0)
    percentage: int = Field(ge=0, le=100)

    @classmethod
    def from_progress(cls, progress: LifecycleProgress) -> "LifecycleProgressDTO":
        return cls(
            total_steps=progress.total_steps,
            completed_steps=progress.completed_steps,
            percentage=progress.percentage,
        )


class LifecycleStatsDTO(BaseDTO):
    total_proposals: int = 0
    approved_proposals: int = 0
    rejected_proposals: int = 0
    total_sponsorships: int = 0
    sent_emails: int = 0
    failed_emails: int = 0

    @classmethod
    def from_stats(cls, stats: LifecycleStats) -> "LifecycleStatsDTO":
        return cls(
            total_proposals=stats.total_proposals,
            approved_proposals=stats.approved_proposals,
            rejected_proposals=stats.rejected_proposals,
            total_sponsorships=stats.total_sponsorships,
            sent_emails=stats.sent_emails,
            failed_emails=stats.failed_emails,
        )


class OwnerDTO(BaseDTO):
    id: str
    email: str


class CompanySummaryDTO(ResponseDTO):
    name: str
    slug: Optional[str] = None
    type: str
    description: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    verification_status: str
    owner: Optional[OwnerDTO] = None


class OrganizerSummaryDTO(BaseDTO):
    id: str
    name: str
    contact_email: Optional[str] = None


class EventSummaryDTO(ResponseDTO):
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: str
    verification_status: str
    organizer: Optional[OrganizerSummaryDTO] = None


class LifecycleProposalDTO(ResponseDTO):
    """A proposal under one of the entity's sponsorships."""

    sponsorship_id: str
    status: str
    proposed_tier: Optional[str] = None
    proposed_amount: Optional[float] = None
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    company_id: Optional[str] = None
    company_name: Optional[str] = None
    event_id: Optional[str] = None
    event_title: Optional[str] = None


class CompanyLifecycleResponseDTO(BaseDTO):
    company: CompanySummaryDTO
    stats: LifecycleStatsDTO
    progress: LifecycleProgressDTO
    timeline: List[TimelineEntryDTO] = Field(default_factory=list)


class EventLifecycleResponseDTO(BaseDTO):
    event: EventSummaryDTO
    stats: LifecycleStatsDTO
    proposals: List[LifecycleProposalDTO] = Field(default_factory=list)
    progress: LifecycleProgressDTO
    timeline: List[TimelineEntryDTO] = Field(default_factory=list)
