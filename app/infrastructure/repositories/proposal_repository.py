"""
Sponsorship and proposal repository implementations using SQLAlchemy.
"""

from typing import List, Optional, Sequence
from sqlalchemy.orm import Session, joinedload

from app.domain.models.proposal import Proposal, Sponsorship
from app.domain.repositories.proposal_repository import (
    ProposalRepository as ProposalRepositoryInterface,
    SponsorshipRepository as SponsorshipRepositoryInterface,
)
from app.infrastructure.db.models import ProposalModel, SponsorshipModel
from app.infrastructure.mappers.proposal_mapper import ProposalMapper, SponsorshipMapper


class SQLAlchemySponsorshipRepository(SponsorshipRepositoryInterface):
    """SQLAlchemy implementation of sponsorship repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = SponsorshipMapper()

    def _query(self, tenant_id: str):
        return self.session.query(SponsorshipModel).options(
            joinedload(SponsorshipModel.company),
            joinedload(SponsorshipModel.event),
        ).filter(SponsorshipModel.tenant_id == tenant_id)

    def find_by_id(self, tenant_id: str, sponsorship_id: str) -> Optional[Sponsorship]:
        model = self._query(tenant_id).filter(SponsorshipModel.id == sponsorship_id).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def find_by_company(self, tenant_id: str, company_id: str) -> List[Sponsorship]:
        models = (
            self._query(tenant_id)
            .filter(SponsorshipModel.company_id == company_id)
            .order_by(SponsorshipModel.created_at.asc())
            .all()
        )
        return [self.mapper.model_to_domain(m) for m in models]

    def find_by_event(self, tenant_id: str, event_id: str) -> List[Sponsorship]:
        models = (
            self._query(tenant_id)
            .filter(SponsorshipModel.event_id == event_id)
            .order_by(SponsorshipModel.created_at.asc())
            .all()
        )
        return [self.mapper.model_to_domain(m) for m in models]


class SQLAlchemyProposalRepository(ProposalRepositoryInterface):
    """SQLAlchemy implementation of proposal repository."""

    def __init__(self, session: Session):
        self.session = session
        self.mapper = ProposalMapper()

    def find_by_id(self, tenant_id: str, proposal_id: str) -> Optional[Proposal]:
        model = self.session.query(ProposalModel).filter_by(
            id=proposal_id,
            tenant_id=tenant_id
        ).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def find_by_sponsorships(self, tenant_id: str, sponsorship_ids: Sequence[str]) -> List[Proposal]:
        if not sponsorship_ids:
            return []
        models = (
            self.session.query(ProposalModel)
            .filter(
                ProposalModel.tenant_id == tenant_id,
                ProposalModel.sponsorship_id.in_(list(sponsorship_ids)),
            )
            .order_by(ProposalModel.created_at.asc())
            .all()
        )
        return [self.mapper.model_to_domain(m) for m in models]

    def save(self, proposal: Proposal) -> Proposal:
        model = self.session.get(ProposalModel, proposal.id)
        if model is None:
            self.session.add(self.mapper.domain_to_model(proposal))
        else:
            self.mapper.update_model(model, proposal)
        self.session.commit()
        return proposal
