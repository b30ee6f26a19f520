"""
Lifecycle use cases.

Rebuild the full history of a company or an event from the stored records:
the entity itself, its sponsorships and proposals, the audit trail, the
email log and (for companies) the notifications raised about it.
Nothing is cached; every call reflects the current store contents.
"""

from typing import Dict, List, Optional

from app.application.use_cases.base_use_case import QueryUseCase, AuthorizedUseCase
from app.application.dto.lifecycle_dto import (
    CompanyLifecycleResponseDTO,
    CompanySummaryDTO,
    EventLifecycleResponseDTO,
    EventSummaryDTO,
    LifecycleProgressDTO,
    LifecycleProposalDTO,
    LifecycleStatsDTO,
    OrganizerSummaryDTO,
    OwnerDTO,
    TimelineEntryDTO,
)
from app.domain.models.base import EntityNotFoundError
from app.domain.models.company import Company
from app.domain.models.event import Event, Organizer
from app.domain.models.lifecycle import TimelineType
from app.domain.models.proposal import Proposal, Sponsorship
from app.domain.models.user import REVIEWER_ROLES
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
from app.domain.services.timeline_service import TimelineBuilder, calculate_progress, calculate_stats


def _sponsorship_index(sponsorships: List[Sponsorship]) -> Dict[str, Sponsorship]:
    return {sponsorship.id: sponsorship for sponsorship in sponsorships}


class GetCompanyLifecycleUseCase(AuthorizedUseCase, QueryUseCase[str, CompanyLifecycleResponseDTO]):
    """Lifecycle view of one company, for managers and admins."""

    def __init__(
        self,
        company_repository: CompanyRepository,
        sponsorship_repository: SponsorshipRepository,
        proposal_repository: ProposalRepository,
        user_repository: UserRepository,
        audit_log_repository: AuditLogRepository,
        email_log_repository: EmailLogRepository,
        notification_repository: NotificationRepository
    ):
        self.company_repository = company_repository
        self.sponsorship_repository = sponsorship_repository
        self.proposal_repository = proposal_repository
        self.user_repository = user_repository
        self.audit_log_repository = audit_log_repository
        self.email_log_repository = email_log_repository
        self.notification_repository = notification_repository

    async def _validate_request(self, request: str) -> None:
        self._require_role(*REVIEWER_ROLES)

    async def _execute_business_logic(self, company_id: str) -> CompanyLifecycleResponseDTO:
        tenant_id = self.current_tenant_id

        company = self.company_repository.find_by_id(tenant_id, company_id)
        if not company:
            raise EntityNotFoundError("Company", company_id)

        sponsorships = self.sponsorship_repository.find_by_company(tenant_id, company_id)
        proposals = self.proposal_repository.find_by_sponsorships(
            tenant_id, [sponsorship.id for sponsorship in sponsorships]
        )
        proposal_ids = [proposal.id for proposal in proposals]

        audit_logs = self.audit_log_repository.find_by_entities(
            tenant_id,
            [("Company", company_id)] + [("Proposal", proposal_id) for proposal_id in proposal_ids]
        )
        email_logs = self.email_log_repository.find_by_entity_ids(tenant_id, [company_id] + proposal_ids)
        notifications = self.notification_repository.find_by_entity(tenant_id, "Company", company_id)

        builder = TimelineBuilder()
        builder.add_created(
            TimelineType.COMPANY_CREATED, "Company", company.id, company.created_at,
            f'Company "{company.name}" was created'
        )
        builder.add_audit_logs(audit_logs)
        for sponsorship in sponsorships:
            tier = f" ({sponsorship.tier})" if sponsorship.tier else ""
            builder.add_sponsorship(
                sponsorship,
                f'Sponsorship created for event "{sponsorship.event_title or sponsorship.event_id}"{tier}'
            )
        by_id = _sponsorship_index(sponsorships)
        for proposal in proposals:
            sponsorship = by_id.get(proposal.sponsorship_id)
            builder.add_proposal_milestones(proposal, sponsorship.event_title if sponsorship else None)
        builder.add_email_logs(email_logs)
        builder.add_notifications(notifications)

        progress = calculate_progress(
            company.verification_status, proposals, email_logs, sponsorship_count=len(sponsorships)
        )
        stats = calculate_stats(sponsorships, proposals, email_logs)

        return CompanyLifecycleResponseDTO(
            company=self._company_to_dto(company),
            stats=LifecycleStatsDTO.from_stats(stats),
            progress=LifecycleProgressDTO.from_progress(progress),
            timeline=[TimelineEntryDTO.from_entry(entry) for entry in builder.build()],
        )

    def _company_to_dto(self, company: Company) -> CompanySummaryDTO:
        users = self.user_repository.find_by_company(company.tenant_id, company.id, active_only=False)
        owner = OwnerDTO(id=users[0].id, email=users[0].email) if users else None
        return CompanySummaryDTO(
            id=company.id,
            name=company.name,
            slug=company.slug,
            type=company.type.value,
            description=company.description,
            website=company.website,
            logo_url=company.logo_url,
            verification_status=company.verification_status.value,
            owner=owner,
            created_at=company.created_at,
            updated_at=company.updated_at,
        )


class GetEventLifecycleUseCase(AuthorizedUseCase, QueryUseCase[str, EventLifecycleResponseDTO]):
    """Lifecycle view of one event, with its proposals listed."""

    def __init__(
        self,
        event_repository: EventRepository,
        organizer_repository: OrganizerRepository,
        sponsorship_repository: SponsorshipRepository,
        proposal_repository: ProposalRepository,
        audit_log_repository: AuditLogRepository,
        email_log_repository: EmailLogRepository
    ):
        self.event_repository = event_repository
        self.organizer_repository = organizer_repository
        self.sponsorship_repository = sponsorship_repository
        self.proposal_repository = proposal_repository
        self.audit_log_repository = audit_log_repository
        self.email_log_repository = email_log_repository

    async def _validate_request(self, request: str) -> None:
        self._require_role(*REVIEWER_ROLES)

    async def _execute_business_logic(self, event_id: str) -> EventLifecycleResponseDTO:
        tenant_id = self.current_tenant_id

        event = self.event_repository.find_by_id(tenant_id, event_id)
        if not event:
            raise EntityNotFoundError("Event", event_id)

        organizer = self.organizer_repository.find_by_id(tenant_id, event.organizer_id)
        sponsorships = self.sponsorship_repository.find_by_event(tenant_id, event_id)
        proposals = self.proposal_repository.find_by_sponsorships(
            tenant_id, [sponsorship.id for sponsorship in sponsorships]
        )
        proposal_ids = [proposal.id for proposal in proposals]

        audit_logs = self.audit_log_repository.find_by_entities(
            tenant_id,
            [("Event", event_id)] + [("Proposal", proposal_id) for proposal_id in proposal_ids]
        )
        email_logs = self.email_log_repository.find_by_entity_ids(tenant_id, [event_id] + proposal_ids)

        by_id = _sponsorship_index(sponsorships)

        builder = TimelineBuilder()
        builder.add_created(
            TimelineType.EVENT_CREATED, "Event", event.id, event.created_at,
            f'Event "{event.title}" was created'
        )
        builder.add_audit_logs(audit_logs)
        for sponsorship in sponsorships:
            builder.add_sponsorship(
                sponsorship,
                f"Sponsorship with {sponsorship.company_name or sponsorship.company_id}"
            )
        for proposal in proposals:
            sponsorship = by_id.get(proposal.sponsorship_id)
            builder.add_proposal_milestones(proposal, sponsorship.company_name if sponsorship else None)
        builder.add_email_logs(email_logs)

        # Sponsorship steps belong to the company view only
        progress = calculate_progress(event.verification_status, proposals, email_logs)
        stats = calculate_stats(sponsorships, proposals, email_logs)

        return EventLifecycleResponseDTO(
            event=self._event_to_dto(event, organizer),
            stats=LifecycleStatsDTO.from_stats(stats),
            proposals=[self._proposal_to_dto(proposal, by_id.get(proposal.sponsorship_id)) for proposal in proposals],
            progress=LifecycleProgressDTO.from_progress(progress),
            timeline=[TimelineEntryDTO.from_entry(entry) for entry in builder.build()],
        )

    def _event_to_dto(self, event: Event, organizer: Optional[Organizer]) -> EventSummaryDTO:
        return EventSummaryDTO(
            id=event.id,
            title=event.title,
            description=event.description,
            location=event.location,
            start_date=event.start_date,
            end_date=event.end_date,
            status=event.status.value,
            verification_status=event.verification_status.value,
            organizer=OrganizerSummaryDTO(
                id=organizer.id,
                name=organizer.name,
                contact_email=organizer.contact_email,
            ) if organizer else None,
            created_at=event.created_at,
            updated_at=event.updated_at,
        )

    def _proposal_to_dto(self, proposal: Proposal, sponsorship: Optional[Sponsorship]) -> LifecycleProposalDTO:
        return LifecycleProposalDTO(
            id=proposal.id,
            sponsorship_id=proposal.sponsorship_id,
            status=proposal.status.value,
            proposed_tier=proposal.proposed_tier,
            proposed_amount=proposal.proposed_amount,
            submitted_at=proposal.submitted_at,
            reviewed_at=proposal.reviewed_at,
            company_id=sponsorship.company_id if sponsorship else None,
            company_name=sponsorship.company_name if sponsorship else None,
            event_id=sponsorship.event_id if sponsorship else None,
            event_title=sponsorship.event_title if sponsorship else None,
            created_at=proposal.created_at,
            updated_at=proposal.updated_at,
        )
