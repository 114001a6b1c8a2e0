"""
Email digest of unowned expansions.

The digest is rendered from a Jinja2 HTML template and sent over SMTP, with a
plain text alternative for clients that do not display HTML.
"""

import logging
import smtplib
import ssl
from email.message import EmailMessage
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from ..config import BGG_SITE_URL, EMAIL_SUBJECT, EMAIL_TEMPLATE, TEMPLATES_DIR, Settings
from ..error_handling import InvalidArgument, NotificationFailed
from ..models import ReconciliationResult
from .base import Notifier

logger = logging.getLogger(__name__)


class EmailNotifier(Notifier):
    """
    Sends the list of unowned expansions by email.
    """

    def __init__(self, host: str, recipient: str, port: int = 465, secure: bool = True,
                 username: Optional[str] = None, password: Optional[str] = None,
                 tls_ciphers: Optional[str] = None, sender: Optional[str] = None,
                 templates_dir: Path = TEMPLATES_DIR, timeout: float = 30):
        """
        Initialize the email notifier.

        Args:
            host: SMTP server hostname
            recipient: Address the digest is sent to
            port: SMTP server port
            secure: Use implicit TLS (port 465); otherwise STARTTLS is attempted
            username: SMTP login, also the default sender
            password: SMTP password
            tls_ciphers: OpenSSL cipher string for the TLS connection
            sender: From address (defaults to username, then recipient)
            templates_dir: Directory holding the HTML template
            timeout: SMTP connection timeout in seconds
        """
        if not host:
            raise InvalidArgument("SMTP host is required to send email")
        if not recipient:
            raise InvalidArgument("No email recipient configured (set EMAIL_TO or SMTP_USERNAME)")

        self.host = host
        self.port = port
        self.secure = secure
        self.username = username
        self.password = password
        self.tls_ciphers = tls_ciphers
        self.recipient = recipient
        self.sender = sender or username or recipient
        self.timeout = timeout
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailNotifier":
        return cls(
            host=settings.smtp_host,
            recipient=settings.email_recipient,
            port=settings.smtp_port,
            secure=settings.smtp_secure,
            username=settings.smtp_username,
            password=settings.smtp_password,
            tls_ciphers=settings.smtp_tls_ciphers,
        )

    def render_html(self, result: ReconciliationResult) -> str:
        """Render the HTML digest for a reconciliation result."""
        template = self.env.get_template(EMAIL_TEMPLATE)
        return template.render(
            games=result.games,
            expansions_count=result.unowned_count,
            site_url=BGG_SITE_URL,
        )

    def render_text(self, result: ReconciliationResult) -> str:
        """Plain text fallback of the digest."""
        lines = [f"{result.unowned_count} new board game expansion(s) available", ""]
        for entry in result.games:
            lines.append(f"{entry.game.name}")
            for expansion in entry.expansions:
                lines.append(f"  - {expansion.name} ({BGG_SITE_URL}/boardgameexpansion/{expansion.id})")
            lines.append("")
        return "\n".join(lines)

    def build_message(self, result: ReconciliationResult) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = self.recipient
        msg["Subject"] = EMAIL_SUBJECT
        msg.set_content(self.render_text(result), charset="utf-8")
        msg.add_alternative(self.render_html(result), subtype="html", charset="utf-8")
        return msg

    def _ssl_context(self) -> ssl.SSLContext:
        context = ssl.create_default_context()
        if self.tls_ciphers:
            context.set_ciphers(self.tls_ciphers)
        return context

    def notify(self, result: ReconciliationResult) -> None:
        try:
            msg = self.build_message(result)
        except TemplateError as e:
            raise NotificationFailed(f"Could not render email template: {e}") from e

        try:
            context = self._ssl_context()
            if self.secure:
                connection = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout, context=context)
            else:
                connection = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
            with connection as smtp:
                if not self.secure:
                    smtp.ehlo()
                    if smtp.has_extn("starttls"):
                        smtp.starttls(context=context)
                        smtp.ehlo()
                    elif self.username and self.password:
                        raise NotificationFailed(
                            f"{self.host}:{self.port} does not offer STARTTLS; "
                            f"refusing to send credentials in plain text"
                        )
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                refused = smtp.send_message(msg)
        except (smtplib.SMTPException, ssl.SSLError, OSError) as e:
            raise NotificationFailed(f"Could not send email via {self.host}:{self.port}: {e}") from e

        if refused:
            raise NotificationFailed(f"SMTP server refused recipients: {refused}")

        logger.info(f"Sent expansion digest ({result.unowned_count} expansions) to {self.recipient}")
