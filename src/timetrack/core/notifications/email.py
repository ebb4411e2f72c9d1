"""Transactional email sent through the Resend API.

Two messages exist: the password reset link and the setup link for users
added to an account. Without ``RESEND_API_KEY`` messages are only logged.
"""

import html
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass

import resend

from src.timetrack.core.config import get_settings
from src.timetrack.core.logging import get_logger

logger = get_logger(__name__)

# Resend's client is blocking; sends run here so a slow API cannot stall a request
_email_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="email_sender")

_LAYOUT = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: sans-serif; line-height: 1.6; color: #333; max-width: 600px;">
{paragraphs}
<p style="margin: 32px 0;"><a href="{url}" style="background-color: #2563eb; color: white; \
padding: 12px 24px; text-decoration: none; border-radius: 6px;">{action}</a></p>
<p style="color: #666; font-size: 14px;">Or open this link: <a href="{url}">{url}</a></p>
<p>Regards,<br>{signature}</p>
</body>
</html>"""


@dataclass
class EmailMessage:
    to: str
    subject: str
    email_type: str
    greeting_name: str
    lines: list[str]
    action: str
    url: str

    def text(self) -> str:
        return f"Dear {self.greeting_name}, " + " ".join(self.lines) + f" {self.url}"

    def html(self, signature: str) -> str:
        paragraphs = [f"<p>Dear {html.escape(self.greeting_name)},</p>"]
        paragraphs += [f"<p>{html.escape(line)}</p>" for line in self.lines]
        return _LAYOUT.format(
            paragraphs="\n".join(paragraphs),
            url=html.escape(self.url, quote=True),
            action=html.escape(self.action),
            signature=html.escape(signature),
        )


def _recipient(to: str) -> str:
    """Redirect all mail to the test inbox when test mode is on."""
    settings = get_settings()
    if settings.email_test_mode and settings.email_test_to:
        logger.warning("Email test mode, redirecting", original_to=to)
        return settings.email_test_to
    return to


def deliver(message: EmailMessage) -> bool:
    """Send ``message``; False when Resend fails or does not answer in time."""
    settings = get_settings()

    if not settings.resend_api_key:
        logger.warning(
            "RESEND_API_KEY not set - email not sent",
            to=message.to,
            email_type=message.email_type,
        )
        return True

    resend.api_key = settings.resend_api_key
    params: resend.Emails.SendParams = {
        "from": f"{settings.email_from_name} <{settings.email_from}>",
        "to": [_recipient(message.to)],
        "subject": message.subject,
        "html": message.html(settings.email_signature_name),
        "text": message.text(),
    }

    future = _email_executor.submit(resend.Emails.send, params)
    try:
        future.result(timeout=settings.email_send_timeout_seconds)
    except FuturesTimeoutError:
        logger.error(
            "Email send timed out",
            to=message.to,
            email_type=message.email_type,
            timeout=settings.email_send_timeout_seconds,
        )
        return False
    except Exception as e:
        logger.error(
            "Failed to send email", to=message.to, email_type=message.email_type, error=str(e)
        )
        return False

    logger.info("Email sent", to=message.to, email_type=message.email_type)
    return True


def send_forgot_password_email(to: str, name: str, reset_url: str) -> bool:
    return deliver(
        EmailMessage(
            to=to,
            subject="Reset Your Password",
            email_type="forgot_password",
            greeting_name=name,
            lines=[
                "We received a request to reset your password.",
                "If you did not ask for this, ignore this email.",
                "To choose a new password go to",
            ],
            action="Reset your password",
            url=reset_url,
        )
    )


def send_new_user_email(to: str, name: str, company: str, setup_url: str) -> bool:
    return deliver(
        EmailMessage(
            to=to,
            subject=f"You've been added to {company}",
            email_type="new_user",
            greeting_name=name,
            lines=[f"You have been added to {company}.", "To choose your password go to"],
            action="Set up your account",
            url=setup_url,
        )
    )
