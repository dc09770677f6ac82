"""
Mail Service for Kindred
========================
Sends notification emails over SMTP (aiosmtplib).

Every message has a plain-text and an HTML part. The site itself appears as
sender and reply-to address through `SiteUser`.
"""

import re
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr, make_msgid
from html import escape
from typing import Protocol

import aiosmtplib

from kindred.core.config import settings
from kindred.core.i18n import I18N
from kindred.core.logging_config import logger

# One @, no spaces, a dot in the domain
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class MailContact(Protocol):
    """Anything that can send or receive mail"""
    email: str
    real_name: str
    user_name: str


@dataclass
class SiteUser:
    """The site, as a mail party"""
    email: str = ""
    real_name: str = ""
    user_name: str = ""

    def __post_init__(self):
        self.email = self.email or settings.EMAIL_FROM
        self.real_name = self.real_name or settings.EMAIL_FROM_NAME


def password_request_text(user: MailContact, url: str) -> str:
    """Plain-text body of the password reset mail"""
    return "\n".join([
        I18N.translate("Hello %s…", user.real_name or user.user_name),
        "",
        I18N.translate("A new password has been requested for your user name."),
        "",
        I18N.translate("To change your password, click the link below."),
        "",
        url,
        "",
        I18N.translate("This link is valid for one hour."),
        I18N.translate("If you did not request a new password, you can ignore this message."),
        "",
        settings.APP_NAME,
    ])


def password_request_html(user: MailContact, url: str) -> str:
    """HTML body of the password reset mail"""
    link = escape(url, quote=True)
    return f"""<!DOCTYPE html>
<html lang="{I18N.language()}" dir="{I18N.direction()}">
<body>
    <p>{escape(I18N.translate("Hello %s…", user.real_name or user.user_name))}</p>
    <p>{escape(I18N.translate("A new password has been requested for your user name."))}</p>
    <p>{escape(I18N.translate("To change your password, click the link below."))}</p>
    <p><a href="{link}">{link}</a></p>
    <p>{escape(I18N.translate("This link is valid for one hour."))}
       {escape(I18N.translate("If you did not request a new password, you can ignore this message."))}</p>
    <p>{escape(settings.APP_NAME)}</p>
</body>
</html>
"""


class MailService:
    """Async SMTP mail service"""

    def __init__(self):
        self.smtp_host = settings.SMTP_HOST
        self.smtp_port = settings.SMTP_PORT
        self.smtp_user = settings.SMTP_USER
        self.smtp_password = settings.SMTP_PASSWORD
        self.start_tls = settings.SMTP_START_TLS

    @property
    def is_configured(self) -> bool:
        return bool(self.smtp_host)

    @staticmethod
    def is_valid_email(address: str) -> bool:
        return bool(address) and EMAIL_PATTERN.match(address) is not None

    @staticmethod
    def _address(contact: MailContact) -> str:
        return formataddr((contact.real_name or contact.user_name, contact.email))

    def build_message(
        self,
        sender: MailContact,
        recipient: MailContact,
        reply_to: MailContact,
        subject: str,
        text: str,
        html: str,
    ) -> EmailMessage:
        """multipart/alternative message with text first, HTML second"""
        message = EmailMessage()
        message["From"] = self._address(sender)
        message["To"] = self._address(recipient)
        message["Reply-To"] = self._address(reply_to)
        message["Subject"] = subject
        message["Message-ID"] = make_msgid()
        message.set_content(text)
        message.add_alternative(html, subtype="html")
        return message

    async def send(
        self,
        sender: MailContact,
        recipient: MailContact,
        reply_to: MailContact,
        subject: str,
        text: str,
        html: str,
    ) -> bool:
        """
        Send a message.

        Returns True if the SMTP server accepted it, False otherwise.
        """
        if not self.is_configured:
            logger.warning("[Mail] SMTP is not configured, message not sent")
            return False

        if not self.is_valid_email(recipient.email):
            logger.warning(f"[Mail] Invalid recipient address: {recipient.email!r}")
            return False

        message = self.build_message(sender, recipient, reply_to, subject, text, html)

        try:
            await aiosmtplib.send(
                message,
                hostname=self.smtp_host,
                port=self.smtp_port,
                username=self.smtp_user or None,
                password=self.smtp_password or None,
                start_tls=self.start_tls,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error(f"[Mail] Failed to send mail to {recipient.email}: {e}")
            return False

        logger.info(f"[Mail] Sent mail to {recipient.email}: {subject}")
        return True


mail_service = MailService()


def get_mail_service() -> MailService:
    """Dependency provider, overridden in tests"""
    return mail_service
