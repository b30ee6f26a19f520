"""
User repository interface.
Used by the verification flow and by recipient resolution in job processors.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from app.domain.models.user import User, UserRole


class UserRepository(ABC):

    @abstractmethod
    def find_by_company(
        self,
        tenant_id: str,
        company_id: str,
        role: Optional[UserRole] = None,
        active_only: bool = True
    ) -> List[User]:
        """Users linked to a company, oldest first."""
        pass

    @abstractmethod
    def find_by_organizer(
        self,
        tenant_id: str,
        organizer_id: str,
        role: Optional[UserRole] = None,
        active_only: bool = True
    ) -> List[User]:
        pass

    @abstractmethod
    def save(self, user: User) -> User:
        pass
