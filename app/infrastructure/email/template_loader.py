"""
Email template loader and renderer.
Handles Jinja2 templates for proposal and verification emails.
"""

import logging
from typing import Dict, Any, List, Optional, Tuple
from pathlib import Path
from datetime import datetime

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from app.config import settings

logger = logging.getLogger(__name__)


class EmailTemplateLoader:
    """Loads and renders email templates using Jinja2."""

    def __init__(self, templates_dir: Optional[Path] = None):
        """Initialize template loader with email templates directory."""
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"

        # Plain-text bodies must not be HTML-escaped
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html"])
        )

        self._register_filters()

    def _register_filters(self):
        """Register custom Jinja2 filters for email templates."""

        def format_currency(value, currency="USD"):
            """Format currency value."""
            try:
                return f"${float(value):,.2f} {currency}"
            except (TypeError, ValueError):
                return str(value)

        def format_date(value, format="%Y-%m-%d"):
            """Format date value."""
            try:
                if isinstance(value, str):
                    date_obj = datetime.fromisoformat(value.replace("Z", "+00:00"))
                elif isinstance(value, datetime):
                    date_obj = value
                else:
                    return str(value)
                return date_obj.strftime(format)
            except ValueError:
                return str(value)

        def short_id(value):
            return f"#{str(value)[:8]}"

        def capitalize_words(value):
            """Capitalize each word."""
            return str(value).title()

        self.env.filters.update({
            "currency": format_currency,
            "date": format_date,
            "short_id": short_id,
            "capitalize_words": capitalize_words,
        })

    async def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render email template with context.

        Args:
            template_name: Name of template file (e.g., 'proposal_submitted.html')
            context: Template context variables

        Returns:
            Rendered template content
        """
        try:
            enhanced_context = {
                "current_year": datetime.now().year,
                "app_name": settings.email_from_name,
                "dashboard_url": f"{settings.frontend_base_url}/dashboard",
                **context,
            }

            template = self.env.get_template(template_name)
            rendered = template.render(**enhanced_context)

            logger.debug(f"Successfully rendered template: {template_name}")
            return rendered

        except Exception as e:
            logger.error(f"Failed to render template {template_name}: {str(e)}")
            return self._get_fallback_template(template_name, context)

    async def render_pair(self, template_name: str, context: Dict[str, Any]) -> Tuple[str, str]:
        """Render the HTML body and, when a .txt variant exists, the text body."""
        html_content = await self.render_template(f"{template_name}.html", context)
        if self.template_exists(f"{template_name}.txt"):
            text_content = await self.render_template(f"{template_name}.txt", context)
        else:
            text_content = context.get("subject", "")
        return html_content, text_content

    def _get_fallback_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Get fallback template when main template fails."""

        subject = context.get("subject", "Notification")

        if template_name.endswith(".txt"):
            return f"{subject}\n\nLog in to your dashboard for details."

        return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <meta charset="UTF-8">
            <title>{subject}</title>
        </head>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
                <h2>{subject}</h2>
                <p>Log in to your dashboard for details.</p>
                <p>{settings.email_from_name}</p>
            </div>
        </body>
        </html>
        """

    def template_exists(self, template_name: str) -> bool:
        """Check if template file exists."""
        try:
            self.env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False

    def list_templates(self) -> List[str]:
        """List all available email templates."""
        return sorted(path.name for path in self.templates_dir.glob("*.html"))
