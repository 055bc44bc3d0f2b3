"""SMTP delivery of reminder emails."""

import logging
import smtplib
from email.message import EmailMessage

from preptrac.config import get_settings

logger = logging.getLogger(__name__)

SMTP_TIMEOUT_SECONDS = 10


def send_email(subject: str, body: str, to_email: str) -> tuple[bool, str]:
    """Send a plain-text email.

    Returns (sent, error). Delivery failures are logged and reported, not
    raised.
    """
    settings = get_settings()
    if not settings.email_enabled:
        return False, "SMTP not configured"

    msg = EmailMessage()
    msg["Subject"] = subject
    msg["From"] = settings.smtp_from
    msg["To"] = to_email
    msg.set_content(body)

    try:
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=SMTP_TIMEOUT_SECONDS) as smtp:
            if settings.smtp_use_tls:
                smtp.starttls()
            if settings.smtp_user:
                smtp.login(settings.smtp_user, settings.smtp_password or "")
            smtp.send_message(msg)
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send email to {to_email}: {e}")
        return False, str(e)[:400]

    logger.info(f"Sent email '{subject}' to {to_email}")
    return True, ""
