"""
Email delivery over SMTP.

Every send attempt, successful or not, leaves exactly one row in the email
log. Writing that row never masks the outcome of the send itself.
"""

import asyncio
import smtplib
import logging
from typing import List, Dict, Any, Optional
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import make_msgid
from dataclasses import dataclass

from app.config import settings
from app.domain.models.base import utc_now
from app.domain.models.logs import EmailLogEntry, EmailStatus
from app.domain.repositories.log_repositories import EmailLogRepository


logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when the transport rejects a message."""

    def __init__(self, message: str = "Email sending failed", cause: Optional[str] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


@dataclass
class EmailDelivery:
    """One message to one recipient, with tracking metadata for the email log."""
    to: str
    subject: str
    html: str
    tenant_id: str
    job_name: str
    text: Optional[str] = None
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None


class EmailLogService:
    """Writes email log rows. Failures are logged and swallowed."""

    def __init__(self, repository: EmailLogRepository):
        self.repository = repository

    def log(
        self,
        delivery: EmailDelivery,
        status: EmailStatus,
        error_message: Optional[str] = None
    ) -> Optional[EmailLogEntry]:
        try:
            entry = EmailLogEntry(
                tenant_id=delivery.tenant_id,
                recipient=delivery.to,
                subject=delivery.subject,
                status=status,
                job_name=delivery.job_name,
                entity_type=delivery.entity_type,
                entity_id=delivery.entity_id,
                error_message=error_message,
            )
            return self.repository.append(entry)
        except Exception as e:
            logger.error(f"Failed to write email log for {delivery.to}: {str(e)}")
            return None


class EmailService:
    """Service for sending transactional emails."""

    def __init__(self, email_log_service: Optional[EmailLogService] = None, transport: Optional[str] = None):
        """Initialize email service with SMTP configuration."""
        self.smtp_host = settings.smtp_host
        self.smtp_port = settings.smtp_port
        self.smtp_secure = settings.smtp_secure
        self.smtp_user = settings.smtp_user
        self.smtp_password = settings.smtp_password
        self.from_name = settings.email_from_name
        self.from_address = settings.email_from_address
        self.transport = transport or settings.email_transport
        self.email_log_service = email_log_service
        self.sent_emails: List[Dict[str, Any]] = []  # For tracking with the log transport

    async def send(self, delivery: EmailDelivery) -> None:
        """
        Send one message and record the attempt in the email log.

        Raises:
            EmailDeliveryError: when the transport fails; the failure is logged first.
        """
        try:
            if self.transport == "log":
                message_id = self._log_email(delivery)
            else:
                mime_message = self._create_mime_message(delivery)
                message_id = mime_message["Message-ID"]
                await asyncio.to_thread(self._send_via_smtp, mime_message, delivery.to)
        except Exception as e:
            error_message = str(e)
            logger.error(f"Failed to send email to {delivery.to}: {error_message}")
            self._record(delivery, EmailStatus.FAILED, error_message)
            raise EmailDeliveryError(cause=error_message) from e

        logger.info(f'Email sent to {delivery.to} | Subject: "{delivery.subject}" | messageId: {message_id}')
        self._record(delivery, EmailStatus.SENT)

    def _record(self, delivery: EmailDelivery, status: EmailStatus, error_message: Optional[str] = None) -> None:
        if self.email_log_service is not None:
            self.email_log_service.log(delivery, status, error_message)

    def _create_mime_message(self, delivery: EmailDelivery) -> MIMEMultipart:
        """Create MIME message from email data."""

        mime_msg = MIMEMultipart("alternative")

        mime_msg["Subject"] = delivery.subject
        mime_msg["From"] = f"{self.from_name} <{self.from_address}>"
        mime_msg["To"] = delivery.to
        mime_msg["Message-ID"] = make_msgid(domain=self.from_address.split("@")[-1])

        if delivery.text:
            mime_msg.attach(MIMEText(delivery.text, "plain", "utf-8"))
        mime_msg.attach(MIMEText(delivery.html, "html", "utf-8"))

        return mime_msg

    def _send_via_smtp(self, mime_message: MIMEMultipart, recipient: str) -> None:
        """Send email via SMTP server. Runs in a worker thread."""
        if not self.smtp_host:
            raise EmailDeliveryError("SMTP host is not configured")

        smtp_class = smtplib.SMTP_SSL if self.smtp_secure else smtplib.SMTP
        with smtp_class(self.smtp_host, self.smtp_port, timeout=30) as server:
            if not self.smtp_secure:
                server.starttls()
            if self.smtp_user and self.smtp_password:
                server.login(self.smtp_user, self.smtp_password)
            server.send_message(mime_message, to_addrs=[recipient])

    def _log_email(self, delivery: EmailDelivery) -> str:
        """Record the email instead of sending it (development and tests)."""
        message_id = make_msgid(domain="localhost")
        self.sent_emails.append({
            "timestamp": utc_now().isoformat(),
            "message_id": message_id,
            "to": delivery.to,
            "subject": delivery.subject,
            "job_name": delivery.job_name,
            "html_preview": delivery.html[:200] + "..." if len(delivery.html) > 200 else delivery.html,
        })
        logger.info(f"Email logged (log transport): {delivery.subject} to {delivery.to}")
        return message_id

    def get_sent_emails(self) -> List[Dict[str, Any]]:
        """Get list of sent emails (log transport)."""
        return self.sent_emails.copy()

    def clear_sent_emails(self) -> None:
        """Clear sent emails log."""
        self.sent_emails.clear()
