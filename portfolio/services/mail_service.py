import asyncio
import html
import logging
import smtplib
from email.message import EmailMessage

from portfolio.core.config import Settings, get_settings
from portfolio.schemas.contact import ContactRequest

logger = logging.getLogger(__name__)


class MailDeliveryError(Exception):
    pass


def build_contact_message(contact: ContactRequest, mailbox: str) -> EmailMessage:
    """Contact submissions are sent from and to the site owner's mailbox."""
    msg = EmailMessage()
    msg["From"] = mailbox
    msg["To"] = mailbox
    msg["Reply-To"] = str(contact.email)
    msg["Subject"] = f"New Contact Form Submission from {contact.name}"
    msg.set_content(f"Name: {contact.name}\nEmail: {contact.email}\nMessage: {contact.message}\n")
    msg.add_alternative(
        f"<p><strong>Name:</strong> {html.escape(contact.name)}</p>\n"
        f"<p><strong>Email:</strong> {html.escape(str(contact.email))}</p>\n"
        f"<p><strong>Message:</strong> {html.escape(contact.message)}</p>\n",
        subtype="html",
    )
    return msg


class MailService:
    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def _send_blocking(self, msg: EmailMessage) -> None:
        s = self.settings
        with smtplib.SMTP_SSL(s.smtp_host, s.smtp_port, timeout=30) as smtp:
            smtp.login(s.email_user, s.email_pass)
            smtp.send_message(msg)

    async def send_contact(self, contact: ContactRequest) -> None:
        if not (self.settings.email_user and self.settings.email_pass):
            raise MailDeliveryError("EMAIL_USER / EMAIL_PASS are not configured")
        msg = build_contact_message(contact, self.settings.email_user)
        try:
            await asyncio.to_thread(self._send_blocking, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Contact mail failed: {type(e).__name__}: {e}")
            raise MailDeliveryError(str(e)) from e
        logger.info("Contact mail sent for sender=%s", contact.email)


def get_mailer() -> MailService:
    return MailService()
