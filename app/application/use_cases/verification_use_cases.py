"""
Verification use cases.
Managers and admins approve or reject pending companies and events.
"""

import logging
from typing import Optional, Union

from app.application.use_cases.base_use_case import CommandUseCase, AuthorizedUseCase
from app.application.dto.verification_dto import VerifyEntityRequestDTO, VerificationResponseDTO
from app.domain.events.base import EventDispatcher
from app.domain.models.base import EntityNotFoundError, ValidationError
from app.domain.models.company import Company, VerificationStatus
from app.domain.models.event import Event
from app.domain.models.logs import AuditAction
from app.domain.models.user import REVIEWER_ROLES, UserRole
from app.domain.repositories import CompanyRepository, EventRepository, UserRepository
from app.domain.services.audit_service import AuditLogService
from app.infrastructure.cache.list_cache import ListCache


logger = logging.getLogger(__name__)


class VerifyEntityUseCase(AuthorizedUseCase, CommandUseCase[VerifyEntityRequestDTO, VerificationResponseDTO]):
    """Shared review flow: decide, save, audit, then publish the decision."""

    entity_type: str = ""
    verified_action: AuditAction
    rejected_action: AuditAction

    async def _validate_request(self, request: VerifyEntityRequestDTO) -> None:
        self._require_role(*REVIEWER_ROLES)
        if not request.entity_id:
            raise ValidationError(f"{self.entity_type} id is required", "entity_id")
        if VerificationStatus(request.decision) == VerificationStatus.PENDING:
            raise ValidationError("Decision must be VERIFIED or REJECTED", "decision")

    def _apply_decision(self, entity: Union[Company, Event], request: VerifyEntityRequestDTO) -> VerificationStatus:
        decision = VerificationStatus(request.decision)
        if decision == VerificationStatus.VERIFIED:
            entity.verify(self.current_user_id, self.current_user_role, request.notes)
        else:
            entity.reject(self.current_user_id, self.current_user_role, request.notes)
        return decision

    def _audit(self, entity_id: str, decision: VerificationStatus, notes: Optional[str]) -> None:
        action = self.verified_action if decision == VerificationStatus.VERIFIED else self.rejected_action
        self.audit_service.log(
            tenant_id=self.current_tenant_id,
            actor_id=self.current_user_id,
            actor_role=self.current_user_role,
            action=action,
            entity_type=self.entity_type,
            entity_id=entity_id,
            metadata={"status": decision.value, "reviewer_notes": notes},
        )


class VerifyCompanyUseCase(VerifyEntityUseCase):
    """Verify or reject a company. Verification upgrades its plain users to sponsors."""

    entity_type = "Company"
    verified_action = AuditAction.COMPANY_VERIFIED
    rejected_action = AuditAction.COMPANY_REJECTED
    invalidates = ("companies:list",)

    def __init__(
        self,
        company_repository: CompanyRepository,
        user_repository: UserRepository,
        audit_service: AuditLogService,
        dispatcher: Optional[EventDispatcher] = None,
        cache: Optional[ListCache] = None
    ):
        super().__init__(dispatcher, cache)
        self.company_repository = company_repository
        self.user_repository = user_repository
        self.audit_service = audit_service

    async def _execute_command_logic(self, request: VerifyEntityRequestDTO) -> VerificationResponseDTO:
        company = self.company_repository.find_by_id(self.current_tenant_id, request.entity_id)
        if not company:
            raise EntityNotFoundError("Company", request.entity_id)

        decision = self._apply_decision(company, request)
        saved = self.company_repository.save(company)

        promoted = 0
        if decision == VerificationStatus.VERIFIED:
            promoted = self._promote_users(saved)

        self._audit(saved.id, decision, request.notes)
        self._collect_events(company)

        return VerificationResponseDTO(
            id=saved.id,
            entity_type=self.entity_type,
            verification_status=saved.verification_status.value,
            promoted_users=promoted,
            created_at=saved.created_at,
            updated_at=saved.updated_at,
        )

    def _promote_users(self, company: Company) -> int:
        promoted = 0
        for user in self.user_repository.find_by_company(company.tenant_id, company.id, role=UserRole.USER):
            if user.promote_to_sponsor():
                self.user_repository.save(user)
                promoted += 1
        if promoted:
            logger.info(f"Promoted {promoted} users of company {company.id} to SPONSOR")
        return promoted


class VerifyEventUseCase(VerifyEntityUseCase):
    """Verify or reject an event."""

    entity_type = "Event"
    verified_action = AuditAction.EVENT_VERIFIED
    rejected_action = AuditAction.EVENT_REJECTED
    invalidates = ("events:list",)

    def __init__(
        self,
        event_repository: EventRepository,
        audit_service: AuditLogService,
        dispatcher: Optional[EventDispatcher] = None,
        cache: Optional[ListCache] = None
    ):
        super().__init__(dispatcher, cache)
        self.event_repository = event_repository
        self.audit_service = audit_service

    async def _execute_command_logic(self, request: VerifyEntityRequestDTO) -> VerificationResponseDTO:
        event = self.event_repository.find_by_id(self.current_tenant_id, request.entity_id)
        if not event:
            raise EntityNotFoundError("Event", request.entity_id)

        decision = self._apply_decision(event, request)
        saved = self.event_repository.save(event)

        self._audit(saved.id, decision, request.notes)
        self._collect_events(event)

        return VerificationResponseDTO(
            id=saved.id,
            entity_type=self.entity_type,
            verification_status=saved.verification_status.value,
            created_at=saved.created_at,
            updated_at=saved.updated_at,
        )
