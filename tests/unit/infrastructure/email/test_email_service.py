"""
Unit tests for EmailService, EmailLogService and EmailTemplateLoader.
"""

import pytest
from unittest.mock import Mock

from app.domain.models import EmailStatus
from app.domain.repositories import EmailLogRepository
from app.infrastructure.email.email_service import (
    EmailDelivery,
    EmailDeliveryError,
    EmailLogService,
    EmailService,
)
from app.infrastructure.email.template_loader import EmailTemplateLoader
from conftest import TENANT_ID


def delivery(**kwargs) -> EmailDelivery:
    defaults = dict(
        to="jane@acme.com",
        subject="Company Verified ✅",
        html="<p>Your company has been verified.</p>",
        text="Your company has been verified.",
        tenant_id=TENANT_ID,
        job_name="email.company.verified",
        entity_type="Company",
        entity_id="company-1",
    )
    defaults.update(kwargs)
    return EmailDelivery(**defaults)


class TestEmailService:
    """Test cases for EmailService."""

    @pytest.fixture(autouse=True)
    def setup(self, store):
        self.store = store
        self.log_service = EmailLogService(store.email_logs)

    @pytest.mark.asyncio
    async def test_log_transport_records_sent(self):
        service = EmailService(self.log_service, transport="log")

        await service.send(delivery())

        [sent] = service.get_sent_emails()
        assert sent["to"] == "jane@acme.com"
        assert sent["job_name"] == "email.company.verified"
        assert sent["message_id"]

        [entry] = self.store.email_logs.entries
        assert entry.status == EmailStatus.SENT
        assert entry.recipient == "jane@acme.com"
        assert entry.subject == "Company Verified ✅"
        assert entry.entity_id == "company-1"
        assert entry.error_message is None

    @pytest.mark.asyncio
    async def test_smtp_failure_records_failed_and_raises(self):
        service = EmailService(self.log_service, transport="smtp")
        service.smtp_host = None

        with pytest.raises(EmailDeliveryError) as exc_info:
            await service.send(delivery())

        assert exc_info.value.cause == "SMTP host is not configured"
        [entry] = self.store.email_logs.entries
        assert entry.status == EmailStatus.FAILED
        assert entry.error_message == "SMTP host is not configured"

    @pytest.mark.asyncio
    async def test_log_write_failure_does_not_mask_send(self):
        repository = Mock(spec=EmailLogRepository)
        repository.append.side_effect = RuntimeError("database is locked")
        service = EmailService(EmailLogService(repository), transport="log")

        await service.send(delivery())

        assert len(service.get_sent_emails()) == 1
        repository.append.assert_called_once()

    @pytest.mark.asyncio
    async def test_without_log_service(self):
        service = EmailService(transport="log")

        await service.send(delivery())
        assert len(service.get_sent_emails()) == 1

        service.clear_sent_emails()
        assert service.get_sent_emails() == []

    def test_mime_message_carries_both_bodies(self):
        service = EmailService(transport="smtp")

        message = service._create_mime_message(delivery())

        assert message["To"] == "jane@acme.com"
        assert message["Message-ID"]
        assert [part.get_content_type() for part in message.get_payload()] == ["text/plain", "text/html"]


class TestEmailTemplateLoader:
    """Test cases for EmailTemplateLoader."""

    def setup_method(self):
        self.loader = EmailTemplateLoader()

    @pytest.mark.asyncio
    async def test_text_body_is_not_html_escaped(self):
        context = {
            "subject": "Company Rejected ❌",
            "entity_label": "company",
            "entity_id": "company-1",
            "outcome": "rejected",
            "reviewer_notes": "Tax ID & address don't match",
        }

        html, text = await self.loader.render_pair("verification_decision", context)

        assert "Tax ID & address don't match" in text
        assert "Tax ID &amp; address" in html

    @pytest.mark.asyncio
    async def test_missing_template_falls_back(self):
        rendered = await self.loader.render_template("no_such_template.html", {"subject": "Hello"})

        assert "<h2>Hello</h2>" in rendered

    @pytest.mark.asyncio
    async def test_missing_text_variant_uses_subject(self, tmp_path):
        (tmp_path / "only_html.html").write_text("<p>{{ subject }}</p>")
        loader = EmailTemplateLoader(templates_dir=tmp_path)

        html, text = await loader.render_pair("only_html", {"subject": "Hi there"})

        assert html == "<p>Hi there</p>"
        assert text == "Hi there"

    def test_template_listing(self):
        assert self.loader.template_exists("proposal_submitted.html")
        assert not self.loader.template_exists("invoice.html")
        assert "verification_decision.html" in self.loader.list_templates()

    def test_filters(self):
        currency = self.loader.env.filters["currency"]
        short_id = self.loader.env.filters["short_id"]

        assert currency(1500) == "$1,500.00 USD"
        assert currency("n/a") == "n/a"
        assert short_id("0123456789abcdef") == "#01234567"
