"""
Mappers for the audit log, email log and notification stores.
"""

from app.domain.models.base import ensure_utc
from app.domain.models.logs import AuditLogEntry, EmailLogEntry, EmailStatus
from app.domain.models.notification import Notification, NotificationSeverity
from app.infrastructure.db.models import AuditLogModel, EmailLogModel, NotificationModel


class AuditLogMapper:

    def domain_to_model(self, entry: AuditLogEntry) -> AuditLogModel:
        return AuditLogModel(
            id=entry.id,
            tenant_id=entry.tenant_id,
            actor_id=entry.actor_id,
            actor_role=entry.actor_role,
            action=entry.action,
            entity_type=entry.entity_type,
            entity_id=entry.entity_id,
            metadata_=entry.metadata,
            created_at=entry.created_at,
        )

    def model_to_domain(self, model: AuditLogModel) -> AuditLogEntry:
        created_at = ensure_utc(model.created_at)
        return AuditLogEntry(
            id=model.id,
            tenant_id=model.tenant_id,
            actor_id=model.actor_id,
            actor_role=model.actor_role,
            action=model.action,
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            metadata=model.metadata_ or {},
            created_at=created_at,
            updated_at=created_at,
        )


class EmailLogMapper:

    def domain_to_model(self, entry: EmailLogEntry) -> EmailLogModel:
        return EmailLogModel(
            id=entry.id,
            tenant_id=entry.tenant_id,
            recipient=entry.recipient,
            subject=entry.subject,
            job_name=entry.job_name,
            entity_type=entry.entity_type,
            entity_id=entry.entity_id,
            status=entry.status,
            error_message=entry.error_message,
            created_at=entry.created_at,
        )

    def model_to_domain(self, model: EmailLogModel) -> EmailLogEntry:
        created_at = ensure_utc(model.created_at)
        return EmailLogEntry(
            id=model.id,
            tenant_id=model.tenant_id,
            recipient=model.recipient,
            subject=model.subject,
            job_name=model.job_name,
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            status=EmailStatus(model.status),
            error_message=model.error_message,
            created_at=created_at,
            updated_at=created_at,
        )


class NotificationMapper:

    def domain_to_model(self, notification: Notification) -> NotificationModel:
        return NotificationModel(
            id=notification.id,
            tenant_id=notification.tenant_id,
            user_id=notification.user_id,
            title=notification.title,
            message=notification.message,
            severity=notification.severity,
            read=notification.read,
            link=notification.link,
            entity_type=notification.entity_type,
            entity_id=notification.entity_id,
            created_at=notification.created_at,
            updated_at=notification.updated_at,
        )

    def model_to_domain(self, model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            tenant_id=model.tenant_id,
            user_id=model.user_id,
            title=model.title,
            message=model.message,
            severity=NotificationSeverity(model.severity),
            read=model.read,
            link=model.link,
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )
