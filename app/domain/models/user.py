"""
User domain model.
Users belong to a tenant and optionally to a sponsor company or an organizer.
"""

from typing import Optional
from dataclasses import dataclass
from enum import Enum

from .base import BaseEntity, ValidationError


class UserRole(str, Enum):
    """Platform roles."""
    USER = "USER"
    SPONSOR = "SPONSOR"
    ORGANIZER = "ORGANIZER"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


REVIEWER_ROLES = frozenset({UserRole.MANAGER, UserRole.ADMIN, UserRole.SUPER_ADMIN})


@dataclass(kw_only=True)
class User(BaseEntity):
    """Platform user account."""

    email: str
    name: Optional[str] = None
    role: UserRole = UserRole.USER
    is_active: bool = True
    company_id: Optional[str] = None
    organizer_id: Optional[str] = None

    def __post_init__(self):
        if not self.email or "@" not in self.email:
            raise ValidationError("A valid email is required", "email")

    @property
    def can_review(self) -> bool:
        """Managers and admins review companies and events."""
        return self.role in REVIEWER_ROLES

    def promote_to_sponsor(self) -> bool:
        """Upgrade a plain user of a verified company. Returns True if changed."""
        if self.role != UserRole.USER:
            return False
        self.role = UserRole.SPONSOR
        self.mark_as_updated()
        return True
