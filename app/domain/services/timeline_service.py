"""
Timeline and progress calculation for lifecycle views.

Entries are collected from audit logs, email logs, notifications and the
domain records themselves, then deduplicated and sorted. Progress is a
step count over the same records.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from app.domain.models.base import ensure_utc
from app.domain.models.company import VerificationStatus
from app.domain.models.lifecycle import (
    LifecycleProgress,
    LifecycleStats,
    TimelineEntry,
    TimelineType,
)
from app.domain.models.logs import AuditAction, AuditLogEntry, EmailLogEntry
from app.domain.models.notification import Notification
from app.domain.models.proposal import Proposal, ProposalStatus, Sponsorship


# Every AuditAction must appear here; None means the action has no timeline entry.
AUDIT_ACTION_TIMELINE: Dict[AuditAction, Optional[TimelineType]] = {
    AuditAction.COMPANY_VERIFIED: TimelineType.COMPANY_VERIFIED,
    AuditAction.COMPANY_REJECTED: TimelineType.COMPANY_REJECTED,
    AuditAction.EVENT_VERIFIED: TimelineType.EVENT_VERIFIED,
    AuditAction.EVENT_REJECTED: TimelineType.EVENT_REJECTED,
    AuditAction.PROPOSAL_CREATED: TimelineType.PROPOSAL_SUBMITTED,
    AuditAction.PROPOSAL_SUBMITTED: TimelineType.PROPOSAL_SUBMITTED,
    AuditAction.PROPOSAL_APPROVED: TimelineType.PROPOSAL_APPROVED,
    AuditAction.PROPOSAL_REJECTED: TimelineType.PROPOSAL_REJECTED,
    AuditAction.PROPOSAL_STATUS_CHANGED: TimelineType.PROPOSAL_STATUS_CHANGED,
    AuditAction.PROPOSAL_UPDATED: None,
}


def short_id(entity_id: str) -> str:
    return f"#{entity_id[:8]}"


def map_audit_action(action: str) -> Optional[TimelineType]:
    """Timeline type for a stored action string; unknown or unmapped actions give None."""
    parsed = AuditAction.parse(action)
    if parsed is None:
        return None
    return AUDIT_ACTION_TIMELINE[parsed]


def audit_status(log: AuditLogEntry) -> Optional[str]:
    """The status an audit entry moved to, if it recorded one."""
    metadata = log.metadata or {}
    return metadata.get("new_status") or metadata.get("status")


def describe_audit_entry(timeline_type: TimelineType, log: AuditLogEntry) -> str:
    ref = f"{short_id(log.entity_id)}…"
    status = audit_status(log)
    notes = (log.metadata or {}).get("reviewer_notes")

    descriptions = {
        TimelineType.COMPANY_VERIFIED: "Company verified",
        TimelineType.COMPANY_REJECTED: "Company rejected",
        TimelineType.EVENT_VERIFIED: "Event verified",
        TimelineType.EVENT_REJECTED: "Event rejected",
        TimelineType.PROPOSAL_SUBMITTED: f"Proposal {ref} submitted",
        TimelineType.PROPOSAL_APPROVED: f"Proposal {ref} approved",
        TimelineType.PROPOSAL_REJECTED: f"Proposal {ref} rejected",
        TimelineType.PROPOSAL_STATUS_CHANGED: (
            f"Proposal {ref} status changed to {status}" if status
            else f"Proposal {ref} status changed"
        ),
    }
    description = descriptions.get(timeline_type, f"{log.action} on {log.entity_type}")
    if notes:
        description = f"{description}: {notes}"
    return description


def deduplicate(entries: Iterable[TimelineEntry]) -> List[TimelineEntry]:
    """Keep the first entry for each (type, entity id, second) key, preserving order."""
    seen: Set[Tuple] = set()
    result = []
    for entry in entries:
        key = entry.dedup_key
        if key in seen:
            continue
        seen.add(key)
        result.append(entry)
    return result


def sort_chronologically(entries: Iterable[TimelineEntry]) -> List[TimelineEntry]:
    # sorted() is stable, so equal timestamps keep insertion order
    return sorted(entries, key=lambda entry: entry.timestamp)


class TimelineBuilder:
    """Collects candidate entries in construction order."""

    def __init__(self):
        self._entries: List[TimelineEntry] = []
        self._seen_types: Set[Tuple[TimelineType, str]] = set()

    def add(self, entry: TimelineEntry) -> None:
        self._entries.append(entry)
        self._seen_types.add((entry.type, entry.entity_id))

    def has(self, timeline_type: TimelineType, entity_id: str) -> bool:
        return (timeline_type, entity_id) in self._seen_types

    def add_created(self, timeline_type: TimelineType, entity_type: str, entity_id: str,
                    created_at, description: str) -> None:
        self.add(TimelineEntry(
            type=timeline_type,
            entity_type=entity_type,
            entity_id=entity_id,
            description=description,
            timestamp=ensure_utc(created_at),
        ))

    def add_audit_logs(self, logs: Sequence[AuditLogEntry]) -> None:
        """Map audit rows through the action table. Unmapped actions are dropped."""
        for log in logs:
            timeline_type = map_audit_action(log.action)
            if timeline_type is None:
                continue
            self.add(TimelineEntry(
                type=timeline_type,
                entity_type=log.entity_type,
                entity_id=log.entity_id,
                actor_id=log.actor_id,
                actor_role=log.actor_role,
                status=audit_status(log),
                description=describe_audit_entry(timeline_type, log),
                timestamp=ensure_utc(log.created_at),
            ))

    def add_sponsorship(self, sponsorship: Sponsorship, description: str) -> None:
        self.add(TimelineEntry(
            type=TimelineType.SPONSORSHIP_CREATED,
            entity_type="Sponsorship",
            entity_id=sponsorship.id,
            status=sponsorship.status.value,
            description=description,
            timestamp=ensure_utc(sponsorship.created_at),
        ))

    def add_proposal_milestones(self, proposal: Proposal, context: Optional[str] = None) -> None:
        """
        Derive submission and decision entries from the proposal record.

        Only added when no entry of that type exists for the proposal yet,
        so milestones already present from the audit trail are not counted twice.
        """
        ref = f"{short_id(proposal.id)}…"
        suffix = f" for {context}" if context else ""

        if proposal.submitted_at and not self.has(TimelineType.PROPOSAL_SUBMITTED, proposal.id):
            self.add(TimelineEntry(
                type=TimelineType.PROPOSAL_SUBMITTED,
                entity_type="Proposal",
                entity_id=proposal.id,
                status=ProposalStatus.SUBMITTED.value,
                description=f"Proposal {ref} submitted{suffix}",
                timestamp=ensure_utc(proposal.submitted_at),
            ))

        if proposal.reviewed_at and proposal.status.is_decision:
            decision_type = (
                TimelineType.PROPOSAL_APPROVED
                if proposal.status == ProposalStatus.APPROVED
                else TimelineType.PROPOSAL_REJECTED
            )
            if not self.has(decision_type, proposal.id):
                self.add(TimelineEntry(
                    type=decision_type,
                    entity_type="Proposal",
                    entity_id=proposal.id,
                    status=proposal.status.value,
                    description=f"Proposal {ref} {proposal.status.value.lower()}{suffix}",
                    timestamp=ensure_utc(proposal.reviewed_at),
                ))

    def add_email_logs(self, logs: Sequence[EmailLogEntry]) -> None:
        for log in logs:
            if log.is_sent:
                timeline_type = TimelineType.EMAIL_SENT
                description = f"Email sent to {log.recipient}: {log.subject}"
            else:
                timeline_type = TimelineType.EMAIL_FAILED
                description = f"Email to {log.recipient} failed: {log.error_message or 'unknown error'}"
            self.add(TimelineEntry(
                type=timeline_type,
                entity_type=log.entity_type or "Email",
                entity_id=log.entity_id or log.id,
                status=log.status.value,
                recipient=log.recipient,
                subject=log.subject,
                description=description,
                timestamp=ensure_utc(log.created_at),
            ))

    def add_notifications(self, notifications: Sequence[Notification]) -> None:
        for notification in notifications:
            self.add(TimelineEntry(
                type=TimelineType.NOTIFICATION_CREATED,
                entity_type="Notification",
                entity_id=notification.id,
                status=notification.severity.value,
                description=f"Notification: {notification.title}",
                timestamp=ensure_utc(notification.created_at),
            ))

    def build(self) -> List[TimelineEntry]:
        return sort_chronologically(deduplicate(self._entries))


def calculate_progress(
    verification_status: VerificationStatus,
    proposals: Sequence[Proposal],
    email_logs: Sequence[EmailLogEntry],
    sponsorship_count: int = 0,
) -> LifecycleProgress:
    """
    Count lifecycle steps.

    Creation is always complete. The review step completes on any decision.
    Each sponsorship passed in is a completed step. Each proposal adds a
    submission step and a decision step. Each email adds a step that only
    completes when the email was sent.
    """
    total = 1
    completed = 1

    total += 1
    if verification_status.is_decided:
        completed += 1

    total += sponsorship_count
    completed += sponsorship_count

    for proposal in proposals:
        total += 2
        if proposal.submitted_at is not None:
            completed += 1
        if proposal.status.is_decision:
            completed += 1

    for log in email_logs:
        total += 1
        if log.is_sent:
            completed += 1

    return LifecycleProgress(total_steps=total, completed_steps=completed)


def calculate_stats(
    sponsorships: Sequence[Sponsorship],
    proposals: Sequence[Proposal],
    email_logs: Sequence[EmailLogEntry],
) -> LifecycleStats:
    sent = sum(1 for log in email_logs if log.is_sent)
    return LifecycleStats(
        total_proposals=len(proposals),
        approved_proposals=sum(1 for p in proposals if p.status == ProposalStatus.APPROVED),
        rejected_proposals=sum(1 for p in proposals if p.status == ProposalStatus.REJECTED),
        total_sponsorships=len(sponsorships),
        sent_emails=sent,
        failed_emails=len(email_logs) - sent,
    )
