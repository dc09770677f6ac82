"""
Unit Tests for the SMTP mail service
"""
import pytest
import aiosmtplib
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

from kindred.core.config import settings
from kindred.services.mail_service import (
    MailService,
    SiteUser,
    password_request_html,
    password_request_text,
)

RESET_URL = "http://kindred.test/api/v1/password-reset/abc123"


def make_recipient(email="mary@example.com", real_name="Mary Smith", user_name="mary"):
    """A member of the site, as seen by the mail bodies"""
    return SimpleNamespace(email=email, real_name=real_name, user_name=user_name)


class TestSiteUser:

    def test_defaults_from_settings(self):
        site = SiteUser()

        assert site.email == settings.EMAIL_FROM
        assert site.real_name == settings.EMAIL_FROM_NAME


class TestPasswordRequestBodies:

    def test_text_body(self):
        text = password_request_text(make_recipient(), RESET_URL)

        assert "Mary Smith" in text
        assert RESET_URL in text
        assert "This link is valid for one hour." in text

    def test_text_body_uses_user_name_without_real_name(self):
        text = password_request_text(make_recipient(real_name=""), RESET_URL)

        assert "Hello mary" in text

    def test_html_body_escapes(self):
        html = password_request_html(make_recipient(real_name="Tom & Jerry"), RESET_URL)

        assert "Tom &amp; Jerry" in html
        assert f'<a href="{RESET_URL}">' in html
        assert 'dir="ltr"' in html


class TestBuildMessage:

    def test_headers_and_parts(self):
        service = MailService()
        message = service.build_message(
            SiteUser(), make_recipient(), SiteUser(), "Request a new password", "plain text", "<p>html</p>"
        )

        assert message["To"] == "Mary Smith <mary@example.com>"
        assert settings.EMAIL_FROM in message["From"]
        assert settings.EMAIL_FROM in message["Reply-To"]
        assert message["Subject"] == "Request a new password"
        assert message["Message-ID"]
        assert message.get_content_type() == "multipart/alternative"

        parts = list(message.iter_parts())
        assert [part.get_content_type() for part in parts] == ["text/plain", "text/html"]
        assert parts[0].get_content().strip() == "plain text"


class TestSend:

    @pytest.fixture
    def service(self):
        service = MailService()
        service.smtp_host = "smtp.example.com"
        service.smtp_port = 2525
        service.smtp_user = ""
        service.smtp_password = ""
        service.start_tls = False
        return service

    @pytest.mark.asyncio
    async def test_send_success(self, service):
        with patch("kindred.services.mail_service.aiosmtplib.send", new_callable=AsyncMock) as send:
            sent = await service.send(SiteUser(), make_recipient(), SiteUser(), "Subject", "text", "<p>html</p>")

        assert sent is True
        send.assert_awaited_once()
        kwargs = send.await_args.kwargs
        assert kwargs["hostname"] == "smtp.example.com"
        assert kwargs["port"] == 2525
        assert kwargs["username"] is None
        assert kwargs["password"] is None
        assert kwargs["start_tls"] is False

    @pytest.mark.asyncio
    async def test_send_smtp_failure(self, service):
        error = aiosmtplib.SMTPException("mailbox unavailable")
        with patch("kindred.services.mail_service.aiosmtplib.send", new_callable=AsyncMock, side_effect=error):
            sent = await service.send(SiteUser(), make_recipient(), SiteUser(), "Subject", "text", "html")

        assert sent is False

    @pytest.mark.asyncio
    async def test_send_connection_failure(self, service):
        with patch(
            "kindred.services.mail_service.aiosmtplib.send",
            new_callable=AsyncMock,
            side_effect=ConnectionRefusedError(),
        ):
            sent = await service.send(SiteUser(), make_recipient(), SiteUser(), "Subject", "text", "html")

        assert sent is False

    @pytest.mark.asyncio
    async def test_invalid_recipient_not_sent(self, service):
        with patch("kindred.services.mail_service.aiosmtplib.send", new_callable=AsyncMock) as send:
            sent = await service.send(
                SiteUser(), make_recipient(email="not-an-address"), SiteUser(), "Subject", "text", "html"
            )

        assert sent is False
        send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unconfigured_not_sent(self, service):
        service.smtp_host = ""

        with patch("kindred.services.mail_service.aiosmtplib.send", new_callable=AsyncMock) as send:
            sent = await service.send(SiteUser(), make_recipient(), SiteUser(), "Subject", "text", "html")

        assert sent is False
        send.assert_not_awaited()


class TestEmailValidation:

    @pytest.mark.parametrize("address, valid", [
        ("mary@example.com", True),
        ("m.smith+family@mail.example.org", True),
        ("", False),
        ("mary", False),
        ("mary@example", False),
        ("mary smith@example.com", False),
    ])
    def test_is_valid_email(self, address, valid):
        assert MailService.is_valid_email(address) is valid
