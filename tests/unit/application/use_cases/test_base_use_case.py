"""
Unit tests for the base use case patterns.
"""

import pytest
from dataclasses import dataclass
from unittest.mock import AsyncMock, Mock

from app.application.use_cases.base_use_case import (
    AuthorizedUseCase,
    CommandUseCase,
    PaginatedQueryUseCase,
    QueryUseCase,
    UseCaseResult,
)
from app.application.dto.base_dto import ListRequestDTO
from app.domain.events.base import DomainEvent, EventDispatcher
from app.domain.models.base import AggregateRoot, BusinessRuleViolation
from app.domain.models.user import UserRole
from app.infrastructure.cache.list_cache import ListCache


class TestUseCaseResult:
    """Test cases for UseCaseResult."""

    def test_success_result(self):
        result = UseCaseResult.success_result({"id": 1, "name": "test"})

        assert result.success is True
        assert result.data == {"id": 1, "name": "test"}
        assert result.error is None
        assert result.error_code is None

    def test_error_result(self):
        result = UseCaseResult.error_result("Something went wrong", "TEST_ERROR")

        assert result.success is False
        assert result.data is None
        assert result.error == "Something went wrong"
        assert result.error_code == "TEST_ERROR"

    def test_from_domain_exception_keeps_code(self):
        result = UseCaseResult.from_exception(BusinessRuleViolation("Already decided"))

        assert result.error == "Already decided"
        assert result.error_code == "BUSINESS_RULE_VIOLATION"

    def test_from_unexpected_exception(self):
        result = UseCaseResult.from_exception(RuntimeError("boom"))

        assert result.error == "boom"
        assert result.error_code == "UNKNOWN_ERROR"


@dataclass(kw_only=True)
class Thing(AggregateRoot):
    pass


@dataclass(kw_only=True)
class ThingRecorded(DomainEvent):
    thing_id: str

    def _get_event_data(self):
        return {"thing_id": self.thing_id}


class EchoQuery(QueryUseCase[str, str]):
    async def _execute_business_logic(self, request: str) -> str:
        if request == "fail":
            raise BusinessRuleViolation("Cannot echo that")
        return request.upper()


class PagedQuery(PaginatedQueryUseCase[ListRequestDTO, int]):
    async def _execute_business_logic(self, request: ListRequestDTO) -> int:
        return request.offset


class RecordThing(AuthorizedUseCase, CommandUseCase[str, str]):
    invalidates = ("things:list",)

    async def _validate_request(self, request: str) -> None:
        self._require_role(UserRole.MANAGER)

    async def _execute_command_logic(self, request: str) -> str:
        thing = Thing(tenant_id=self.current_tenant_id)
        thing.add_event(ThingRecorded(thing_id=thing.id))
        self._collect_events(thing)
        return thing.id


class TestBaseUseCase:
    """Test cases for query and command execution."""

    @pytest.mark.asyncio
    async def test_query_success_has_timing_metadata(self):
        result = await EchoQuery().execute("hello")

        assert result.success
        assert result.data == "HELLO"
        assert "execution_time_seconds" in result.metadata

    @pytest.mark.asyncio
    async def test_query_failure_is_wrapped(self):
        result = await EchoQuery().execute("fail")

        assert not result.success
        assert result.error_code == "BUSINESS_RULE_VIOLATION"
        assert result.metadata["exception_type"] == "BusinessRuleViolation"

    @pytest.mark.asyncio
    async def test_paginated_query_limits_page_size(self):
        request = ListRequestDTO(page=2, page_size=10)

        assert (await PagedQuery().execute(request)).data == 10

        request = ListRequestDTO.model_construct(page=1, page_size=500)
        result = await PagedQuery().execute(request)
        assert result.error_code == "VALIDATION_ERROR"


class TestCommandUseCase:
    """Test cases for event publication and cache invalidation."""

    def setup_method(self):
        self.dispatcher = Mock(spec=EventDispatcher)
        self.dispatcher.publish = AsyncMock()
        self.cache = ListCache()
        self.use_case = RecordThing(self.dispatcher, self.cache)

    @pytest.mark.asyncio
    async def test_events_published_and_caches_dropped(self):
        self.cache.set("things:list:tenant-1:1", ["stale"])
        self.cache.set("others:list:tenant-1:1", ["kept"])
        self.use_case.set_current_user("user-1", "tenant-1", "MANAGER")

        result = await self.use_case.execute("go")

        assert result.success
        self.dispatcher.publish.assert_awaited_once()
        assert self.cache.get("things:list:tenant-1:1") is None
        assert self.cache.get("others:list:tenant-1:1") == ["kept"]

    @pytest.mark.asyncio
    async def test_anonymous_caller_is_forbidden(self):
        result = await self.use_case.execute("go")

        assert result.error_code == "FORBIDDEN"
        self.dispatcher.publish.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wrong_role_is_forbidden(self):
        self.use_case.set_current_user("user-1", "tenant-1", "SPONSOR")

        result = await self.use_case.execute("go")

        assert result.error_code == "FORBIDDEN"
        assert "SPONSOR" in result.error
