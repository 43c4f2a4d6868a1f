import smtplib
from unittest.mock import MagicMock, patch

from services.email_service import EmailService


def make_service(settings):
    settings.SMTP_USERNAME = "noreply@example.com"
    settings.SMTP_PASSWORD = "app-password"
    return EmailService(settings)


class TestEmailService:

    @patch("services.email_service.smtplib.SMTP")
    def test_temporary_password_is_sent(self, mock_smtp, settings):
        server = MagicMock()
        mock_smtp.return_value.__enter__.return_value = server
        service = make_service(settings)

        assert service.send_temporary_password("user@example.com", "tester", "a1b2c3d4") is True

        server.starttls.assert_called_once()
        server.login.assert_called_once_with("noreply@example.com", "app-password")
        message = server.send_message.call_args[0][0]
        assert message["To"] == "user@example.com"
        assert message["Subject"] == settings.TEMP_PASSWORD_SUBJECT
        text_part = message.get_payload(0).get_payload(decode=True).decode("utf-8")
        assert "a1b2c3d4" in text_part

    @patch("services.email_service.smtplib.SMTP")
    def test_smtp_failure_returns_false(self, mock_smtp, settings):
        server = MagicMock()
        server.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad credentials")
        mock_smtp.return_value.__enter__.return_value = server
        service = make_service(settings)

        assert service.send_email("user@example.com", "제목", "<p>본문</p>") is False
        server.send_message.assert_not_called()

    @patch("services.email_service.smtplib.SMTP", side_effect=OSError("connection refused"))
    def test_connection_failure_returns_false(self, mock_smtp, settings):
        service = make_service(settings)

        assert service.send_email("user@example.com", "제목", "<p>본문</p>") is False

    @patch("services.email_service.smtplib.SMTP")
    def test_username_is_escaped_in_html(self, mock_smtp, settings):
        server = MagicMock()
        mock_smtp.return_value.__enter__.return_value = server
        service = make_service(settings)

        service.send_temporary_password("user@example.com", "<script>alert(1)</script>", "a1b2c3d4")

        message = server.send_message.call_args[0][0]
        html_part = message.get_payload(1).get_payload(decode=True).decode("utf-8")
        assert "<script>" not in html_part
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html_part
