"""
Email infrastructure.
Handles email templates, SMTP delivery and the email log.
"""

from .email_service import EmailDelivery, EmailDeliveryError, EmailLogService, EmailService
from .template_loader import EmailTemplateLoader

__all__ = [
    "EmailDelivery",
    "EmailDeliveryError",
    "EmailLogService",
    "EmailService",
    "EmailTemplateLoader",
]
