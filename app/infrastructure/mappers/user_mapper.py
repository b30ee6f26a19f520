"""
User mapper for converting between domain entities and database models.
"""

from app.domain.models.base import ensure_utc
from app.domain.models.user import User, UserRole
from app.infrastructure.db.models import UserModel


class UserMapper:
    """Maps between User domain entity and UserModel database model."""

    def domain_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            tenant_id=user.tenant_id,
            email=user.email,
            name=user.name,
            role=user.role,
            is_active=user.is_active,
            company_id=user.company_id,
            organizer_id=user.organizer_id,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def update_model(self, model: UserModel, user: User) -> None:
        model.email = user.email
        model.name = user.name
        model.role = user.role
        model.is_active = user.is_active
        model.company_id = user.company_id
        model.organizer_id = user.organizer_id
        model.updated_at = user.updated_at

    def model_to_domain(self, model: UserModel) -> User:
        return User(
            id=model.id,
            tenant_id=model.tenant_id,
            email=model.email,
            name=model.name,
            role=UserRole(model.role),
            is_active=model.is_active,
            company_id=model.company_id,
            organizer_id=model.organizer_id,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )
