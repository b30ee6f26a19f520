"""
Company repository implementation using SQLAlchemy.
"""

from typing import Optional
from sqlalchemy.orm import Session

from app.domain.models.company import Company
from app.domain.repositories.company_repository import CompanyRepository as CompanyRepositoryInterface
from app.infrastructure.db.models import CompanyModel
from app.infrastructure.mappers.company_mapper import CompanyMapper


class SQLAlchemyCompanyRepository(CompanyRepositoryInterface):
    """SQLAlchemy implementation of company repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = CompanyMapper()

    def find_by_id(self, tenant_id: str, company_id: str) -> Optional[Company]:
        model = self.session.query(CompanyModel).filter_by(
            id=company_id,
            tenant_id=tenant_id
        ).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def save(self, company: Company) -> Company:
        model = self.session.get(CompanyModel, company.id)
        if model is None:
            self.session.add(self.mapper.domain_to_model(company))
        else:
            self.mapper.update_model(model, company)
        self.session.commit()
        return company
