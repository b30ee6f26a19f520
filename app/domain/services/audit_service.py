"""
Audit trail writer.
Audit failures are logged and never reach the business operation.
"""

import logging
from typing import Any, Dict, Optional

from app.domain.models.logs import AuditAction, AuditLogEntry
from app.domain.repositories.log_repositories import AuditLogRepository


logger = logging.getLogger(__name__)


class AuditLogService:
    """Append-only audit logging that never raises."""

    def __init__(self, repository: AuditLogRepository):
        self.repository = repository

    def log(
        self,
        tenant_id: str,
        actor_id: str,
        actor_role: str,
        action: AuditAction,
        entity_type: str,
        entity_id: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Optional[AuditLogEntry]:
        try:
            entry = AuditLogEntry(
                tenant_id=tenant_id,
                actor_id=actor_id,
                actor_role=actor_role,
                action=action.value,
                entity_type=entity_type,
                entity_id=entity_id,
                metadata=metadata or {},
            )
            return self.repository.append(entry)
        except Exception as e:
            logger.error(
                f"Failed to write audit log {action.value} for {entity_type} {entity_id}: {str(e)}"
            )
            return None
