from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

from ..auth.config import DEFAULT_AUTH_CONFIG
from .config import DEFAULT_MAIL_CONFIG, MailConfig
from .templates import verification_email, welcome_email

logger = logging.getLogger(__name__)


def send_email(
    to: str,
    subject: str,
    html: str,
    config: MailConfig = DEFAULT_MAIL_CONFIG,
) -> bool:
    """Deliver one HTML message. Returns ``False`` on any failure."""
    if not config.enabled:
        logger.warning("Email not configured; skipping message to %s", to)
        return False

    message = EmailMessage()
    message["From"] = formataddr((config.sender_name, config.username))
    message["To"] = to
    message["Subject"] = subject
    message.set_content("Abra este email em um cliente compatível com HTML.")
    message.add_alternative(html, subtype="html")

    try:
        with smtplib.SMTP(config.smtp_host, config.smtp_port, timeout=config.timeout) as smtp:
            smtp.starttls()
            smtp.login(config.username, config.password)
            smtp.send_message(message)
    except (smtplib.SMTPException, OSError):
        logger.warning("Failed to send email to %s", to, exc_info=True)
        return False

    logger.info("Email sent to %s: %s", to, subject)
    return True


def send_verification_email(
    email: str,
    name: str,
    code: str,
    config: MailConfig = DEFAULT_MAIL_CONFIG,
) -> bool:
    subject, html = verification_email(name, code, DEFAULT_AUTH_CONFIG.verification_code_ttl_minutes)
    return send_email(email, subject, html, config)


def send_welcome_email(email: str, name: str, config: MailConfig = DEFAULT_MAIL_CONFIG) -> bool:
    subject, html = welcome_email(name, config.app_url)
    return send_email(email, subject, html, config)
