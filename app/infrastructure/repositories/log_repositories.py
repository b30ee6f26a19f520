"""
Audit log, email log and notification repositories using SQLAlchemy.
"""

from typing import List, Optional, Sequence, Tuple
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from app.domain.models.logs import AuditLogEntry, EmailLogEntry, EmailStatus
from app.domain.models.notification import Notification
from app.domain.repositories.log_repositories import (
    AuditLogRepository as AuditLogRepositoryInterface,
    EmailLogRepository as EmailLogRepositoryInterface,
    NotificationRepository as NotificationRepositoryInterface,
    EntityRef,
)
from app.infrastructure.db.models import AuditLogModel, EmailLogModel, NotificationModel
from app.infrastructure.mappers.log_mapper import AuditLogMapper, EmailLogMapper, NotificationMapper


class SQLAlchemyAuditLogRepository(AuditLogRepositoryInterface):

    def __init__(self, session: Session):
        self.session = session
        self.mapper = AuditLogMapper()

    def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        self.session.add(self.mapper.domain_to_model(entry))
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return entry

    def find_by_entities(self, tenant_id: str, entities: Sequence[EntityRef]) -> List[AuditLogEntry]:
        if not entities:
            return []
        matches = [
            and_(AuditLogModel.entity_type == entity_type, AuditLogModel.entity_id == entity_id)
            for entity_type, entity_id in entities
        ]
        models = (
            self.session.query(AuditLogModel)
            .filter(AuditLogModel.tenant_id == tenant_id, or_(*matches))
            .order_by(AuditLogModel.created_at.asc())
            .all()
        )
        return [self.mapper.model_to_domain(m) for m in models]


class SQLAlchemyEmailLogRepository(EmailLogRepositoryInterface):

    def __init__(self, session: Session):
        self.session = session
        self.mapper = EmailLogMapper()

    def append(self, entry: EmailLogEntry) -> EmailLogEntry:
        self.session.add(self.mapper.domain_to_model(entry))
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return entry

    def find_by_entity_ids(self, tenant_id: str, entity_ids: Sequence[str]) -> List[EmailLogEntry]:
        if not entity_ids:
            return []
        models = (
            self.session.query(EmailLogModel)
            .filter(
                EmailLogModel.tenant_id == tenant_id,
                EmailLogModel.entity_id.in_(list(entity_ids)),
            )
            .order_by(EmailLogModel.created_at.asc())
            .all()
        )
        return [self.mapper.model_to_domain(m) for m in models]

    def search(
        self,
        tenant_id: str,
        status: Optional[EmailStatus] = None,
        job_name: Optional[str] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 20
    ) -> Tuple[List[EmailLogEntry], int]:
        query = self.session.query(EmailLogModel).filter(EmailLogModel.tenant_id == tenant_id)
        if status is not None:
            query = query.filter(EmailLogModel.status == status)
        if job_name:
            query = query.filter(EmailLogModel.job_name == job_name)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                EmailLogModel.recipient.ilike(pattern),
                EmailLogModel.subject.ilike(pattern),
            ))
        total = query.count()
        models = query.order_by(EmailLogModel.created_at.desc()).offset(offset).limit(limit).all()
        return [self.mapper.model_to_domain(m) for m in models], total


class SQLAlchemyNotificationRepository(NotificationRepositoryInterface):

    def __init__(self, session: Session):
        self.session = session
        self.mapper = NotificationMapper()

    def create(self, notification: Notification) -> Notification:
        self.session.add(self.mapper.domain_to_model(notification))
        self.session.commit()
        return notification

    def find_by_id(self, tenant_id: str, notification_id: str) -> Optional[Notification]:
        model = self.session.query(NotificationModel).filter_by(
            id=notification_id,
            tenant_id=tenant_id
        ).first()
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    def find_by_entity(self, tenant_id: str, entity_type: str, entity_id: str) -> List[Notification]:
        models = (
            self.session.query(NotificationModel)
            .filter_by(tenant_id=tenant_id, entity_type=entity_type, entity_id=entity_id)
            .order_by(NotificationModel.created_at.asc())
            .all()
        )
        return [self.mapper.model_to_domain(m) for m in models]

    def find_for_user(
        self,
        tenant_id: str,
        user_id: str,
        read: Optional[bool] = None,
        offset: int = 0,
        limit: int = 20
    ) -> Tuple[List[Notification], int]:
        query = self.session.query(NotificationModel).filter_by(tenant_id=tenant_id, user_id=user_id)
        if read is not None:
            query = query.filter(NotificationModel.read.is_(read))
        total = query.count()
        models = query.order_by(NotificationModel.created_at.desc()).offset(offset).limit(limit).all()
        return [self.mapper.model_to_domain(m) for m in models], total

    def count_unread(self, tenant_id: str, user_id: str) -> int:
        return self.session.query(NotificationModel).filter_by(
            tenant_id=tenant_id,
            user_id=user_id,
            read=False
        ).count()

    def save(self, notification: Notification) -> Notification:
        model = self.session.get(NotificationModel, notification.id)
        if model is None:
            return self.create(notification)
        model.read = notification.read
        model.updated_at = notification.updated_at
        self.session.commit()
        return notification

    def mark_all_read(self, tenant_id: str, user_id: str) -> int:
        changed = self.session.query(NotificationModel).filter_by(
            tenant_id=tenant_id,
            user_id=user_id,
            read=False
        ).update({NotificationModel.read: True}, synchronize_session=False)
        self.session.commit()
        return changed
