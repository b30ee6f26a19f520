"""
Base use case classes for the application layer.
Provides common patterns and structure for use case implementations.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, TypeVar, Generic, List, Sequence
from dataclasses import dataclass

from app.domain.events.base import DomainEvent, EventDispatcher, get_event_dispatcher
from app.domain.models.base import (
    DomainException, ValidationError, PermissionDeniedError, AggregateRoot, utc_now
)
from app.domain.models.user import UserRole
from app.infrastructure.cache.list_cache import ListCache, get_list_cache


logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')


@dataclass
class UseCaseResult(Generic[T]):
    """Result wrapper for use case operations."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success_result(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> "UseCaseResult[T]":
        """Create a successful result."""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def error_result(
        cls,
        error: str,
        error_code: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> "UseCaseResult[T]":
        """Create an error result."""
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            metadata=metadata
        )

    @classmethod
    def from_exception(cls, exc: Exception) -> "UseCaseResult[T]":
        """Create error result from exception."""
        if isinstance(exc, DomainException):
            return cls.error_result(exc.message, exc.code)
        logger.exception(f"Unexpected error in use case: {str(exc)}")
        return cls.error_result(str(exc), "UNKNOWN_ERROR")


class BaseUseCase(ABC, Generic[T, R]):
    """
    Base class for all use cases.
    Provides common structure and error handling.
    """

    async def execute(self, request: T) -> UseCaseResult[R]:
        """
        Execute the use case with proper error handling and logging.
        """
        started = utc_now()

        try:
            await self._validate_request(request)
            result = await self._execute_business_logic(request)

            finished = utc_now()
            return UseCaseResult.success_result(
                result,
                metadata={
                    "execution_time_seconds": (finished - started).total_seconds(),
                    "executed_at": finished.isoformat()
                }
            )

        except Exception as exc:
            finished = utc_now()
            error_result = UseCaseResult.from_exception(exc)
            error_result.metadata = {
                "execution_time_seconds": (finished - started).total_seconds(),
                "failed_at": finished.isoformat(),
                "exception_type": type(exc).__name__
            }
            return error_result

    async def _validate_request(self, request: T) -> None:
        """
        Validate the request. Override in subclasses if needed.
        """
        pass

    @abstractmethod
    async def _execute_business_logic(self, request: T) -> R:
        """
        Execute the core business logic. Must be implemented by subclasses.
        """
        pass


class QueryUseCase(BaseUseCase[T, R]):
    """
    Base class for query use cases (read operations).
    """
    pass


class PaginatedQueryUseCase(QueryUseCase[T, R]):
    """
    Base class for paginated query use cases.
    """

    max_page_size: int = 100

    async def _validate_request(self, request: T) -> None:
        """Validate paginated request."""
        await super()._validate_request(request)

        if hasattr(request, 'page_size'):
            if request.page_size > self.max_page_size:
                raise ValidationError(f"Page size cannot exceed {self.max_page_size}", "page_size")
            if request.page_size < 1:
                raise ValidationError("Page size must be positive", "page_size")


class CommandUseCase(BaseUseCase[T, R]):
    """
    Base class for command use cases (write operations).

    Subclasses persist and audit inside `_execute_command_logic` and collect
    domain events with `_collect_events`. Events are published only after
    that returns, then the list caches named in `invalidates` are dropped.
    """

    invalidates: Sequence[str] = ()

    def __init__(self, dispatcher: Optional[EventDispatcher] = None, cache: Optional[ListCache] = None):
        self.dispatcher = dispatcher or get_event_dispatcher()
        self.cache = cache or get_list_cache()
        self.events: List[DomainEvent] = []

    async def _execute_business_logic(self, request: T) -> R:
        self.events = []
        result = await self._execute_command_logic(request)
        await self._publish_events()
        self._invalidate_caches()
        return result

    @abstractmethod
    async def _execute_command_logic(self, request: T) -> R:
        """Execute the command logic. Must be implemented by subclasses."""
        pass

    def _collect_events(self, aggregate: AggregateRoot) -> None:
        self.events.extend(aggregate.pull_events())

    async def _publish_events(self) -> None:
        """Publish collected domain events."""
        for event in self.events:
            await self.dispatcher.publish(event)
        self.events.clear()

    def _invalidate_caches(self) -> None:
        for prefix in self.invalidates:
            self.cache.invalidate(f"{prefix}:*")


class AuthorizedUseCase:
    """
    Mixin for use cases that act on behalf of the current user.
    """

    current_user_id: Optional[str] = None
    current_tenant_id: Optional[str] = None
    current_user_role: Optional[str] = None

    def set_current_user(self, user_id: str, tenant_id: str, role: str) -> "AuthorizedUseCase":
        """Set the current user context."""
        self.current_user_id = user_id
        self.current_tenant_id = tenant_id
        self.current_user_role = role
        return self

    def _require_user(self) -> None:
        if not self.current_user_id or not self.current_tenant_id:
            raise PermissionDeniedError("User authentication required")

    def _require_role(self, *roles: UserRole) -> None:
        """Check if user has one of the required roles."""
        self._require_user()
        allowed = {role.value for role in roles}
        if self.current_user_role not in allowed:
            raise PermissionDeniedError(f"Role {self.current_user_role} may not perform this action")
