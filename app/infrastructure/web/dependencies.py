"""
FastAPI dependency providers.
Each use case is built per request on the request's database session.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.application.use_cases import (
    CreateProposalUseCase,
    GetCompanyLifecycleUseCase,
    GetEventLifecycleUseCase,
    GetUnreadCountUseCase,
    ListEmailLogsUseCase,
    ListNotificationsUseCase,
    ListProposalsUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
    TransitionProposalUseCase,
    VerifyCompanyUseCase,
    VerifyEventUseCase,
)
from app.domain.events.base import EventDispatcher, get_event_dispatcher
from app.domain.services.audit_service import AuditLogService
from app.infrastructure.cache.list_cache import ListCache, get_list_cache
from app.infrastructure.db.database import get_db
from app.infrastructure.queue.backend import JobQueue
from app.infrastructure.repositories import (
    SQLAlchemyAuditLogRepository,
    SQLAlchemyCompanyRepository,
    SQLAlchemyEmailLogRepository,
    SQLAlchemyEventRepository,
    SQLAlchemyNotificationRepository,
    SQLAlchemyOrganizerRepository,
    SQLAlchemyProposalRepository,
    SQLAlchemySponsorshipRepository,
    SQLAlchemyUserRepository,
)


DbSession = Annotated[Session, Depends(get_db)]


def get_dispatcher() -> EventDispatcher:
    return get_event_dispatcher()


def get_cache() -> ListCache:
    return get_list_cache()


def get_job_queue(request: Request) -> JobQueue:
    """The queue created at startup."""
    return request.app.state.job_queue


def get_audit_service(session: DbSession) -> AuditLogService:
    return AuditLogService(SQLAlchemyAuditLogRepository(session))


Dispatcher = Annotated[EventDispatcher, Depends(get_dispatcher)]
Cache = Annotated[ListCache, Depends(get_cache)]
Audit = Annotated[AuditLogService, Depends(get_audit_service)]


def get_company_lifecycle_use_case(session: DbSession) -> GetCompanyLifecycleUseCase:
    return GetCompanyLifecycleUseCase(
        company_repository=SQLAlchemyCompanyRepository(session),
        sponsorship_repository=SQLAlchemySponsorshipRepository(session),
        proposal_repository=SQLAlchemyProposalRepository(session),
        user_repository=SQLAlchemyUserRepository(session),
        audit_log_repository=SQLAlchemyAuditLogRepository(session),
        email_log_repository=SQLAlchemyEmailLogRepository(session),
        notification_repository=SQLAlchemyNotificationRepository(session),
    )


def get_event_lifecycle_use_case(session: DbSession) -> GetEventLifecycleUseCase:
    return GetEventLifecycleUseCase(
        event_repository=SQLAlchemyEventRepository(session),
        organizer_repository=SQLAlchemyOrganizerRepository(session),
        sponsorship_repository=SQLAlchemySponsorshipRepository(session),
        proposal_repository=SQLAlchemyProposalRepository(session),
        audit_log_repository=SQLAlchemyAuditLogRepository(session),
        email_log_repository=SQLAlchemyEmailLogRepository(session),
    )


def get_verify_company_use_case(
    session: DbSession, audit: Audit, dispatcher: Dispatcher, cache: Cache
) -> VerifyCompanyUseCase:
    return VerifyCompanyUseCase(
        SQLAlchemyCompanyRepository(session), SQLAlchemyUserRepository(session), audit, dispatcher, cache
    )


def get_verify_event_use_case(
    session: DbSession, audit: Audit, dispatcher: Dispatcher, cache: Cache
) -> VerifyEventUseCase:
    return VerifyEventUseCase(SQLAlchemyEventRepository(session), audit, dispatcher, cache)


def get_create_proposal_use_case(
    session: DbSession, audit: Audit, dispatcher: Dispatcher, cache: Cache
) -> CreateProposalUseCase:
    return CreateProposalUseCase(
        SQLAlchemyProposalRepository(session), SQLAlchemySponsorshipRepository(session), audit, dispatcher, cache
    )


def get_transition_proposal_use_case(
    session: DbSession, audit: Audit, dispatcher: Dispatcher, cache: Cache
) -> TransitionProposalUseCase:
    return TransitionProposalUseCase(SQLAlchemyProposalRepository(session), audit, dispatcher, cache)


def get_list_proposals_use_case(session: DbSession, cache: Cache) -> ListProposalsUseCase:
    return ListProposalsUseCase(
        SQLAlchemyProposalRepository(session), SQLAlchemySponsorshipRepository(session), cache
    )


def get_list_notifications_use_case(session: DbSession) -> ListNotificationsUseCase:
    return ListNotificationsUseCase(SQLAlchemyNotificationRepository(session))


def get_unread_count_use_case(session: DbSession) -> GetUnreadCountUseCase:
    return GetUnreadCountUseCase(SQLAlchemyNotificationRepository(session))


def get_mark_read_use_case(session: DbSession, dispatcher: Dispatcher, cache: Cache) -> MarkNotificationReadUseCase:
    return MarkNotificationReadUseCase(SQLAlchemyNotificationRepository(session), dispatcher, cache)


def get_mark_all_read_use_case(
    session: DbSession, dispatcher: Dispatcher, cache: Cache
) -> MarkAllNotificationsReadUseCase:
    return MarkAllNotificationsReadUseCase(SQLAlchemyNotificationRepository(session), dispatcher, cache)


def get_list_email_logs_use_case(session: DbSession) -> ListEmailLogsUseCase:
    return ListEmailLogsUseCase(SQLAlchemyEmailLogRepository(session))
