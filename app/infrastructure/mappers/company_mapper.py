"""
Company mapper for converting between domain entities and database models.
"""

from app.domain.models.base import ensure_utc
from app.domain.models.company import Company, CompanyType, VerificationStatus
from app.infrastructure.db.models import CompanyModel


class CompanyMapper:
    """Maps between Company domain entity and CompanyModel database model."""

    def domain_to_model(self, company: Company) -> CompanyModel:
        return CompanyModel(
            id=company.id,
            tenant_id=company.tenant_id,
            name=company.name,
            slug=company.slug,
            type=company.type,
            website=company.website,
            description=company.description,
            logo_url=company.logo_url,
            verification_status=company.verification_status,
            created_at=company.created_at,
            updated_at=company.updated_at,
        )

    def update_model(self, model: CompanyModel, company: Company) -> None:
        model.name = company.name
        model.slug = company.slug
        model.type = company.type
        model.website = company.website
        model.description = company.description
        model.logo_url = company.logo_url
        model.verification_status = company.verification_status
        model.updated_at = company.updated_at

    def model_to_domain(self, model: CompanyModel) -> Company:
        return Company(
            id=model.id,
            tenant_id=model.tenant_id,
            name=model.name,
            slug=model.slug,
            type=CompanyType(model.type),
            website=model.website,
            description=model.description,
            logo_url=model.logo_url,
            verification_status=VerificationStatus(model.verification_status),
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )
