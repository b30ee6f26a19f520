"""
Company repository interface.
Defines the contract for company persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.models.company import Company


class CompanyRepository(ABC):
    """Repository interface for the Company aggregate. Every lookup is tenant-scoped."""

    @abstractmethod
    def find_by_id(self, tenant_id: str, company_id: str) -> Optional[Company]:
        """Return the company or None when it does not exist in the tenant."""
        pass

    @abstractmethod
    def save(self, company: Company) -> Company:
        pass
