"""
Unit tests for notification and email log use cases.
"""

import pytest

from app.application.dto.email_log_dto import ListEmailLogsRequestDTO
from app.application.dto.notification_dto import ListNotificationsRequestDTO
from app.application.use_cases.email_log_use_cases import ListEmailLogsUseCase
from app.application.use_cases.notification_use_cases import (
    GetUnreadCountUseCase,
    ListNotificationsUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
)
from app.domain.events.base import EventDispatcher
from app.domain.models import EmailStatus, Notification, NotificationSeverity
from app.infrastructure.cache.list_cache import ListCache
from conftest import TENANT_ID, at


USER_ID = "user-1"


class TestNotificationUseCases:
    """Test cases for the notification inbox."""

    @pytest.fixture(autouse=True)
    def setup(self, store):
        self.store = store
        self.mine = [
            store.notifications.create(Notification(
                tenant_id=TENANT_ID, user_id=USER_ID, title=f"N{i}", message="m",
                severity=NotificationSeverity.SUCCESS, created_at=at(i),
            ))
            for i in range(3)
        ]
        self.theirs = store.notifications.create(Notification(
            tenant_id=TENANT_ID, user_id="user-2", title="Other", message="m",
        ))

    def as_user(self, use_case):
        return use_case.set_current_user(USER_ID, TENANT_ID, "SPONSOR")

    @pytest.mark.asyncio
    async def test_list_own_notifications(self):
        use_case = self.as_user(ListNotificationsUseCase(self.store.notifications))

        result = await use_case.execute(ListNotificationsRequestDTO(page_size=2))

        assert result.data.total == 3
        assert [n.title for n in result.data.items] == ["N2", "N1"]
        assert result.data.items[0].severity == "SUCCESS"
        assert result.data.has_next

    @pytest.mark.asyncio
    async def test_unread_count(self):
        use_case = self.as_user(GetUnreadCountUseCase(self.store.notifications))

        assert (await use_case.execute(None)).data.count == 3

    @pytest.mark.asyncio
    async def test_mark_one_read(self):
        use_case = self.as_user(
            MarkNotificationReadUseCase(self.store.notifications, EventDispatcher(), ListCache())
        )

        result = await use_case.execute(self.mine[0].id)

        assert result.data.read is True
        assert self.store.notifications.count_unread(TENANT_ID, USER_ID) == 2

    @pytest.mark.asyncio
    async def test_cannot_mark_someone_elses(self):
        use_case = self.as_user(
            MarkNotificationReadUseCase(self.store.notifications, EventDispatcher(), ListCache())
        )

        result = await use_case.execute(self.theirs.id)

        assert result.error_code == "ENTITY_NOT_FOUND"
        assert self.store.notifications.items[self.theirs.id].read is False

    @pytest.mark.asyncio
    async def test_mark_all_read(self):
        use_case = self.as_user(
            MarkAllNotificationsReadUseCase(self.store.notifications, EventDispatcher(), ListCache())
        )

        result = await use_case.execute(None)

        assert result.data.updated == 3
        assert self.store.notifications.count_unread(TENANT_ID, "user-2") == 1

    @pytest.mark.asyncio
    async def test_anonymous_caller(self):
        result = await ListNotificationsUseCase(self.store.notifications).execute(ListNotificationsRequestDTO())

        assert result.error_code == "FORBIDDEN"


class TestListEmailLogsUseCase:
    """Test cases for ListEmailLogsUseCase."""

    @pytest.mark.asyncio
    async def test_filter_by_status(self, store):
        store.add_email_log(EmailStatus.SENT, "c-1", at(0), recipient="jane@acme.com")
        store.add_email_log(EmailStatus.FAILED, "c-1", at(1), recipient="joe@acme.com", error_message="bounced")
        use_case = ListEmailLogsUseCase(store.email_logs).set_current_user("manager-1", TENANT_ID, "MANAGER")

        result = await use_case.execute(ListEmailLogsRequestDTO(status="FAILED"))

        assert result.data.total == 1
        assert result.data.items[0].recipient == "joe@acme.com"
        assert result.data.items[0].error_message == "bounced"

    @pytest.mark.asyncio
    async def test_reviewers_only(self, store):
        use_case = ListEmailLogsUseCase(store.email_logs).set_current_user("sponsor-1", TENANT_ID, "SPONSOR")

        result = await use_case.execute(ListEmailLogsRequestDTO())

        assert result.error_code == "FORBIDDEN"
