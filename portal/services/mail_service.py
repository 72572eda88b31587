"""Best-effort SMTP notifications for applications and contact messages."""

from __future__ import annotations

import smtplib
from dataclasses import dataclass
from datetime import datetime
from email.message import EmailMessage
from typing import Any, Dict, Mapping, Optional

from flask import current_app, render_template

IMPLICIT_TLS_PORT = 465


@dataclass(frozen=True)
class SmtpSettings:
    host: str
    port: int
    user: str
    password: str
    recipient: str
    timeout: int


def smtp_settings_from_config(config: Mapping[str, Any]) -> Optional[SmtpSettings]:
    """Return SMTP settings, or ``None`` unless host, user and password are all set."""
    host = config.get("SMTP_HOST")
    user = config.get("SMTP_USER")
    password = config.get("SMTP_PASS")
    if not (host and user and password):
        return None

    return SmtpSettings(
        host=host,
        port=int(config.get("SMTP_PORT") or 587),
        user=user,
        password=password,
        recipient=config.get("ADMIN_EMAIL") or user,
        timeout=int(config.get("SMTP_TIMEOUT") or 10),
    )


def _open_connection(settings: SmtpSettings) -> smtplib.SMTP:
    if settings.port == IMPLICIT_TLS_PORT:
        return smtplib.SMTP_SSL(settings.host, settings.port, timeout=settings.timeout)

    connection = smtplib.SMTP(settings.host, settings.port, timeout=settings.timeout)
    try:
        connection.ehlo()
        if connection.has_extn("starttls"):
            connection.starttls()
            connection.ehlo()
    except (smtplib.SMTPException, OSError):
        connection.close()
        raise
    return connection


def send_notification(subject: str, html_body: str, text_body: str) -> bool:
    """Send a message to the admin mailbox.

    Returns ``False`` when SMTP is not configured or delivery fails; failures
    are logged and never raised.
    """
    settings = smtp_settings_from_config(current_app.config)
    if settings is None:
        current_app.logger.info("Email not configured; notification logged instead:\n%s", text_body)
        return False

    message = EmailMessage()
    message["Subject"] = subject
    message["From"] = settings.user
    message["To"] = settings.recipient
    message.set_content(text_body)
    message.add_alternative(html_body, subtype="html")

    try:
        with _open_connection(settings) as connection:
            connection.login(settings.user, settings.password)
            connection.send_message(message)
    except (smtplib.SMTPException, OSError):
        current_app.logger.exception("Email sending failed for %r", subject)
        return False

    current_app.logger.info("Email sent: %s", subject)
    return True


def _render(template: str, context: Dict[str, Any]) -> Dict[str, str]:
    return {
        "html": render_template(f"emails/{template}.html", **context),
        "text": render_template(f"emails/{template}.txt", **context),
    }


def send_application_notification(application: Dict[str, Any]) -> bool:
    organization = current_app.config.get("ORGANIZATION_NAME", "")
    bodies = _render(
        "application",
        {"application": application, "submitted_on": datetime.now(), "organization": organization},
    )
    return send_notification(
        f"New Internship Application - {organization}", bodies["html"], bodies["text"]
    )


def send_contact_notification(contact: Dict[str, Any]) -> bool:
    organization = current_app.config.get("ORGANIZATION_NAME", "")
    bodies = _render(
        "contact",
        {"contact": contact, "sent_on": datetime.now(), "organization": organization},
    )
    return send_notification(
        f"New Contact Form Message - {organization}", bodies["html"], bodies["text"]
    )
