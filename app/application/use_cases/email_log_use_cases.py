"""
Email log use cases.
"""

from app.application.use_cases.base_use_case import PaginatedQueryUseCase, AuthorizedUseCase
from app.application.dto.base_dto import ListResponseDTO
from app.application.dto.email_log_dto import EmailLogResponseDTO, ListEmailLogsRequestDTO
from app.domain.models.logs import EmailStatus
from app.domain.models.user import REVIEWER_ROLES
from app.domain.repositories import EmailLogRepository


class ListEmailLogsUseCase(
    AuthorizedUseCase,
    PaginatedQueryUseCase[ListEmailLogsRequestDTO, ListResponseDTO[EmailLogResponseDTO]]
):
    """Delivery history for the tenant, newest first."""

    def __init__(self, email_log_repository: EmailLogRepository):
        self.email_log_repository = email_log_repository

    async def _validate_request(self, request: ListEmailLogsRequestDTO) -> None:
        self._require_role(*REVIEWER_ROLES)
        await super()._validate_request(request)

    async def _execute_business_logic(self, request: ListEmailLogsRequestDTO) -> ListResponseDTO[EmailLogResponseDTO]:
        logs, total = self.email_log_repository.search(
            self.current_tenant_id,
            status=EmailStatus(request.status) if request.status else None,
            job_name=request.job_name,
            search=request.search,
            offset=request.offset,
            limit=request.limit,
        )
        return ListResponseDTO[EmailLogResponseDTO].create(
            [EmailLogResponseDTO.from_domain(log) for log in logs],
            total,
            request.page,
            request.page_size,
        )
