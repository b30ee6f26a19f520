"""
Email log DTOs for the application layer.
"""

from typing import Optional
from pydantic import Field

from .base_dto import ListRequestDTO, ResponseDTO
from app.domain.models.logs import EmailLogEntry, EmailStatus


class ListEmailLogsRequestDTO(ListRequestDTO):
    status: Optional[EmailStatus] = Field(default=None, description="SENT or FAILED")
    job_name: Optional[str] = Field(default=None, max_length=100)
    search: Optional[str] = Field(default=None, max_length=255, description="Matches recipient or subject")


class EmailLogResponseDTO(ResponseDTO):
    recipient: str
    subject: str
    status: str
    job_name: Optional[str] = None
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def from_domain(cls, entry: EmailLogEntry) -> "EmailLogResponseDTO":
        return cls(
            id=entry.id,
            recipient=entry.recipient,
            subject=entry.subject,
            status=entry.status.value,
            job_name=entry.job_name,
            entity_type=entry.entity_type,
            entity_id=entry.entity_id,
            error_message=entry.error_message,
            created_at=entry.created_at,
        )
