"""
Sponsorship and proposal repository interfaces.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from app.domain.models.proposal import Proposal, Sponsorship


class SponsorshipRepository(ABC):
    """Read access to sponsorships, oldest first."""

    @abstractmethod
    def find_by_id(self, tenant_id: str, sponsorship_id: str) -> Optional[Sponsorship]:
        pass

    @abstractmethod
    def find_by_company(self, tenant_id: str, company_id: str) -> List[Sponsorship]:
        pass

    @abstractmethod
    def find_by_event(self, tenant_id: str, event_id: str) -> List[Sponsorship]:
        pass


class ProposalRepository(ABC):
    """Repository interface for the Proposal aggregate."""

    @abstractmethod
    def find_by_id(self, tenant_id: str, proposal_id: str) -> Optional[Proposal]:
        pass

    @abstractmethod
    def find_by_sponsorships(self, tenant_id: str, sponsorship_ids: Sequence[str]) -> List[Proposal]:
        """All proposals under the given sponsorships, oldest first."""
        pass

    @abstractmethod
    def save(self, proposal: Proposal) -> Proposal:
        pass
