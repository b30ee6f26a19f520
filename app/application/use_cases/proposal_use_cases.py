"""
Proposal use cases for the application layer.
"""

import logging
from typing import List, Optional

from app.application.use_cases.base_use_case import (
    CommandUseCase, PaginatedQueryUseCase, AuthorizedUseCase
)
from app.application.dto.base_dto import ListResponseDTO
from app.application.dto.proposal_dto import (
    CreateProposalRequestDTO,
    ListProposalsRequestDTO,
    ProposalResponseDTO,
    UpdateProposalStatusRequestDTO,
)
from app.domain.events.base import EventDispatcher
from app.domain.models.base import EntityNotFoundError, PermissionDeniedError, ValidationError
from app.domain.models.logs import AuditAction
from app.domain.models.proposal import Proposal, ProposalStatus
from app.domain.models.user import REVIEWER_ROLES, UserRole
from app.domain.repositories import ProposalRepository, SponsorshipRepository
from app.domain.services.audit_service import AuditLogService
from app.infrastructure.cache.list_cache import ListCache, get_list_cache


logger = logging.getLogger(__name__)

PROPOSALS_LIST = "proposals:list"

# Statuses only the event side (organizers and reviewers) may set
REVIEW_STATUSES = frozenset({ProposalStatus.UNDER_REVIEW, ProposalStatus.APPROVED, ProposalStatus.REJECTED})
REVIEW_ROLES = REVIEWER_ROLES | {UserRole.ORGANIZER}

STATUS_ACTIONS = {
    ProposalStatus.SUBMITTED: AuditAction.PROPOSAL_SUBMITTED,
    ProposalStatus.APPROVED: AuditAction.PROPOSAL_APPROVED,
    ProposalStatus.REJECTED: AuditAction.PROPOSAL_REJECTED,
}


class CreateProposalUseCase(AuthorizedUseCase, CommandUseCase[CreateProposalRequestDTO, ProposalResponseDTO]):
    """Create a proposal under an existing sponsorship, as a draft or already submitted."""

    invalidates = (PROPOSALS_LIST,)

    def __init__(
        self,
        proposal_repository: ProposalRepository,
        sponsorship_repository: SponsorshipRepository,
        audit_service: AuditLogService,
        dispatcher: Optional[EventDispatcher] = None,
        cache: Optional[ListCache] = None
    ):
        super().__init__(dispatcher, cache)
        self.proposal_repository = proposal_repository
        self.sponsorship_repository = sponsorship_repository
        self.audit_service = audit_service

    async def _validate_request(self, request: CreateProposalRequestDTO) -> None:
        self._require_user()

    async def _execute_command_logic(self, request: CreateProposalRequestDTO) -> ProposalResponseDTO:
        sponsorship = self.sponsorship_repository.find_by_id(self.current_tenant_id, request.sponsorship_id)
        if not sponsorship:
            raise EntityNotFoundError("Sponsorship", request.sponsorship_id)

        status = ProposalStatus(request.status)
        proposal = Proposal.create(
            tenant_id=self.current_tenant_id,
            sponsorship_id=sponsorship.id,
            actor_id=self.current_user_id,
            actor_role=self.current_user_role,
            status=status,
            proposed_tier=request.proposed_tier,
            proposed_amount=request.proposed_amount,
            message=request.message,
            notes=request.notes,
        )
        saved = self.proposal_repository.save(proposal)

        self._audit(saved.id, AuditAction.PROPOSAL_CREATED, {
            "status": status.value,
            "sponsorship_id": sponsorship.id,
            "proposed_amount": request.proposed_amount,
        })
        if status == ProposalStatus.SUBMITTED:
            self._audit(saved.id, AuditAction.PROPOSAL_SUBMITTED, {"new_status": status.value})

        self._collect_events(proposal)
        logger.info(f"Proposal {saved.id} created as {status.value}")
        return ProposalResponseDTO.from_domain(saved)

    def _audit(self, proposal_id: str, action: AuditAction, metadata: dict) -> None:
        self.audit_service.log(
            tenant_id=self.current_tenant_id,
            actor_id=self.current_user_id,
            actor_role=self.current_user_role,
            action=action,
            entity_type="Proposal",
            entity_id=proposal_id,
            metadata=metadata,
        )


class TransitionProposalUseCase(AuthorizedUseCase, CommandUseCase[UpdateProposalStatusRequestDTO, ProposalResponseDTO]):
    """
    Move a proposal through its workflow.

    A request for the status the proposal already has changes nothing and
    is neither audited nor published.
    """

    invalidates = (PROPOSALS_LIST,)

    def __init__(
        self,
        proposal_repository: ProposalRepository,
        audit_service: AuditLogService,
        dispatcher: Optional[EventDispatcher] = None,
        cache: Optional[ListCache] = None
    ):
        super().__init__(dispatcher, cache)
        self.proposal_repository = proposal_repository
        self.audit_service = audit_service

    async def _validate_request(self, request: UpdateProposalStatusRequestDTO) -> None:
        self._require_user()
        if not request.proposal_id:
            raise ValidationError("Proposal id is required", "proposal_id")
        if ProposalStatus(request.status) in REVIEW_STATUSES and self.current_user_role not in {
            role.value for role in REVIEW_ROLES
        }:
            raise PermissionDeniedError("Only organizers and reviewers can review proposals")

    async def _execute_command_logic(self, request: UpdateProposalStatusRequestDTO) -> ProposalResponseDTO:
        proposal = self.proposal_repository.find_by_id(self.current_tenant_id, request.proposal_id)
        if not proposal:
            raise EntityNotFoundError("Proposal", request.proposal_id)

        previous = proposal.status
        new_status = ProposalStatus(request.status)
        if not proposal.transition_to(new_status, self.current_user_id, self.current_user_role):
            return ProposalResponseDTO.from_domain(proposal)

        saved = self.proposal_repository.save(proposal)

        self._audit(saved.id, AuditAction.PROPOSAL_STATUS_CHANGED, {
            "previous_status": previous.value,
            "new_status": new_status.value,
        })
        action = STATUS_ACTIONS.get(new_status)
        if action:
            self._audit(saved.id, action, {"previous_status": previous.value, "new_status": new_status.value})

        self._collect_events(proposal)
        logger.info(f"Proposal {saved.id} moved from {previous.value} to {new_status.value}")
        return ProposalResponseDTO.from_domain(saved)

    def _audit(self, proposal_id: str, action: AuditAction, metadata: dict) -> None:
        self.audit_service.log(
            tenant_id=self.current_tenant_id,
            actor_id=self.current_user_id,
            actor_role=self.current_user_role,
            action=action,
            entity_type="Proposal",
            entity_id=proposal_id,
            metadata=metadata,
        )


class ListProposalsUseCase(
    AuthorizedUseCase,
    PaginatedQueryUseCase[ListProposalsRequestDTO, ListResponseDTO[ProposalResponseDTO]]
):
    """Proposals of one sponsorship, served from the list cache when fresh."""

    def __init__(
        self,
        proposal_repository: ProposalRepository,
        sponsorship_repository: SponsorshipRepository,
        cache: Optional[ListCache] = None
    ):
        self.proposal_repository = proposal_repository
        self.sponsorship_repository = sponsorship_repository
        self.cache = cache or get_list_cache()

    async def _validate_request(self, request: ListProposalsRequestDTO) -> None:
        self._require_user()
        await super()._validate_request(request)

    async def _execute_business_logic(self, request: ListProposalsRequestDTO) -> ListResponseDTO[ProposalResponseDTO]:
        key = f"{PROPOSALS_LIST}:{self.current_tenant_id}:{request.sponsorship_id}"
        items: Optional[List[ProposalResponseDTO]] = self.cache.get(key)

        if items is None:
            if not self.sponsorship_repository.find_by_id(self.current_tenant_id, request.sponsorship_id):
                raise EntityNotFoundError("Sponsorship", request.sponsorship_id)
            proposals = self.proposal_repository.find_by_sponsorships(
                self.current_tenant_id, [request.sponsorship_id]
            )
            items = [ProposalResponseDTO.from_domain(proposal) for proposal in proposals]
            self.cache.set(key, items)

        page = items[request.offset:request.offset + request.limit]
        return ListResponseDTO[ProposalResponseDTO].create(page, len(items), request.page, request.page_size)
