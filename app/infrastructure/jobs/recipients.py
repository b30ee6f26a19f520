"""
Read-only recipient lookups for the job processors.
"""

import logging
from typing import Iterable, List, Optional

from app.domain.models.event import Organizer
from app.domain.models.user import User, UserRole
from app.domain.repositories.event_repository import EventRepository, OrganizerRepository
from app.domain.repositories.proposal_repository import ProposalRepository, SponsorshipRepository
from app.domain.repositories.user_repository import UserRepository


logger = logging.getLogger(__name__)


def dedupe(values: Iterable[Optional[str]]) -> List[str]:
    """Drop blanks and repeats, keeping first-seen order."""
    seen = set()
    result = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result


class RecipientResolver:
    """Walks domain relationships to find who should hear about a job."""

    def __init__(
        self,
        proposal_repository: ProposalRepository,
        sponsorship_repository: SponsorshipRepository,
        event_repository: EventRepository,
        organizer_repository: OrganizerRepository,
        user_repository: UserRepository
    ):
        self.proposal_repository = proposal_repository
        self.sponsorship_repository = sponsorship_repository
        self.event_repository = event_repository
        self.organizer_repository = organizer_repository
        self.user_repository = user_repository

    def _organizer_emails(self, tenant_id: str, organizer: Optional[Organizer]) -> List[str]:
        """Active ORGANIZER users, falling back to the organizer's contact email."""
        if organizer is None:
            return []
        users = self.user_repository.find_by_organizer(tenant_id, organizer.id, role=UserRole.ORGANIZER)
        emails = dedupe(user.email for user in users)
        if emails:
            return emails
        if organizer.contact_email:
            return [organizer.contact_email]
        return []

    def _sponsorship_for_proposal(self, tenant_id: str, proposal_id: str):
        proposal = self.proposal_repository.find_by_id(tenant_id, proposal_id)
        if proposal is None:
            logger.warning(f"Proposal {proposal_id} not found in tenant {tenant_id}")
            return None
        return self.sponsorship_repository.find_by_id(tenant_id, proposal.sponsorship_id)

    def organizer_emails_for_proposal(self, tenant_id: str, proposal_id: str) -> List[str]:
        """Proposal → Sponsorship → Event → Organizer → users."""
        sponsorship = self._sponsorship_for_proposal(tenant_id, proposal_id)
        if sponsorship is None:
            return []
        event = self.event_repository.find_by_id(tenant_id, sponsorship.event_id)
        if event is None:
            return []
        organizer = self.organizer_repository.find_by_id(tenant_id, event.organizer_id)
        return self._organizer_emails(tenant_id, organizer)

    def sponsor_emails_for_proposal(self, tenant_id: str, proposal_id: str) -> List[str]:
        """Proposal → Sponsorship → Company → active SPONSOR users."""
        sponsorship = self._sponsorship_for_proposal(tenant_id, proposal_id)
        if sponsorship is None:
            return []
        users = self.user_repository.find_by_company(tenant_id, sponsorship.company_id, role=UserRole.SPONSOR)
        return dedupe(user.email for user in users)

    def company_user_emails(self, tenant_id: str, company_id: str) -> List[str]:
        users = self.user_repository.find_by_company(tenant_id, company_id)
        return dedupe(user.email for user in users)

    def organizer_emails_for_event(self, tenant_id: str, event_id: str) -> List[str]:
        event = self.event_repository.find_by_id(tenant_id, event_id)
        if event is None:
            return []
        organizer = self.organizer_repository.find_by_id(tenant_id, event.organizer_id)
        return self._organizer_emails(tenant_id, organizer)

    def company_user_ids(self, tenant_id: str, company_id: str) -> List[str]:
        users = self.user_repository.find_by_company(tenant_id, company_id)
        return dedupe(user.id for user in users)

    def event_organizer_user_ids(self, tenant_id: str, event_id: str) -> List[str]:
        event = self.event_repository.find_by_id(tenant_id, event_id)
        if event is None:
            return []
        users: List[User] = self.user_repository.find_by_organizer(
            tenant_id, event.organizer_id, active_only=False
        )
        return dedupe(user.id for user in users)
