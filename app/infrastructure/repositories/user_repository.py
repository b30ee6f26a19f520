"""
User repository implementation using SQLAlchemy.
"""

from typing import List, Optional
from sqlalchemy.orm import Session

from app.domain.models.user import User, UserRole
from app.domain.repositories.user_repository import UserRepository as UserRepositoryInterface
from app.infrastructure.db.models import UserModel
from app.infrastructure.mappers.user_mapper import UserMapper


class SQLAlchemyUserRepository(UserRepositoryInterface):
    """SQLAlchemy implementation of user repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = UserMapper()

    def _find(self, tenant_id: str, role: Optional[UserRole], active_only: bool, *criteria) -> List[User]:
        query = self.session.query(UserModel).filter(UserModel.tenant_id == tenant_id, *criteria)
        if role is not None:
            query = query.filter(UserModel.role == role)
        if active_only:
            query = query.filter(UserModel.is_active.is_(True))
        models = query.order_by(UserModel.created_at.asc()).all()
        return [self.mapper.model_to_domain(m) for m in models]

    def find_by_company(self, tenant_id, company_id, role=None, active_only=True) -> List[User]:
        return self._find(tenant_id, role, active_only, UserModel.company_id == company_id)

    def find_by_organizer(self, tenant_id, organizer_id, role=None, active_only=True) -> List[User]:
        return self._find(tenant_id, role, active_only, UserModel.organizer_id == organizer_id)

    def save(self, user: User) -> User:
        model = self.session.get(UserModel, user.id)
        if model is None:
            self.session.add(self.mapper.domain_to_model(user))
        else:
            self.mapper.update_model(model, user)
        self.session.commit()
        return user
