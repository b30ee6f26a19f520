"""
Sponsorship and proposal mappers.
"""

from app.domain.models.base import ensure_utc
from app.domain.models.proposal import Proposal, ProposalStatus, Sponsorship, SponsorshipStatus
from app.infrastructure.db.models import ProposalModel, SponsorshipModel


class SponsorshipMapper:

    def domain_to_model(self, sponsorship: Sponsorship) -> SponsorshipModel:
        return SponsorshipModel(
            id=sponsorship.id,
            tenant_id=sponsorship.tenant_id,
            company_id=sponsorship.company_id,
            event_id=sponsorship.event_id,
            status=sponsorship.status,
            tier=sponsorship.tier,
            notes=sponsorship.notes,
            created_at=sponsorship.created_at,
            updated_at=sponsorship.updated_at,
        )

    def model_to_domain(self, model: SponsorshipModel) -> Sponsorship:
        return Sponsorship(
            id=model.id,
            tenant_id=model.tenant_id,
            company_id=model.company_id,
            event_id=model.event_id,
            status=SponsorshipStatus(model.status),
            tier=model.tier,
            notes=model.notes,
            company_name=model.company.name if model.company else None,
            event_title=model.event.title if model.event else None,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


class ProposalMapper:
    """Maps between Proposal domain entity and ProposalModel database model."""

    def domain_to_model(self, proposal: Proposal) -> ProposalModel:
        return ProposalModel(
            id=proposal.id,
            tenant_id=proposal.tenant_id,
            sponsorship_id=proposal.sponsorship_id,
            status=proposal.status,
            proposed_tier=proposal.proposed_tier,
            proposed_amount=proposal.proposed_amount,
            message=proposal.message,
            notes=proposal.notes,
            submitted_at=proposal.submitted_at,
            reviewed_at=proposal.reviewed_at,
            created_at=proposal.created_at,
            updated_at=proposal.updated_at,
        )

    def update_model(self, model: ProposalModel, proposal: Proposal) -> None:
        model.status = proposal.status
        model.proposed_tier = proposal.proposed_tier
        model.proposed_amount = proposal.proposed_amount
        model.message = proposal.message
        model.notes = proposal.notes
        model.submitted_at = proposal.submitted_at
        model.reviewed_at = proposal.reviewed_at
        model.updated_at = proposal.updated_at

    def model_to_domain(self, model: ProposalModel) -> Proposal:
        return Proposal(
            id=model.id,
            tenant_id=model.tenant_id,
            sponsorship_id=model.sponsorship_id,
            status=ProposalStatus(model.status),
            proposed_tier=model.proposed_tier,
            proposed_amount=float(model.proposed_amount) if model.proposed_amount is not None else None,
            message=model.message,
            notes=model.notes,
            submitted_at=ensure_utc(model.submitted_at),
            reviewed_at=ensure_utc(model.reviewed_at),
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )
