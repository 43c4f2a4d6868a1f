import html
import smtplib
import ssl
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional
import logging

from fastapi import Request

from config import Settings

logger = logging.getLogger(__name__)


class EmailService:
    """이메일 발송 서비스 클래스"""

    def __init__(self, settings: Settings):
        self.smtp_server = settings.SMTP_SERVER
        self.smtp_port = settings.SMTP_PORT
        self.smtp_username = settings.SMTP_USERNAME
        self.smtp_password = settings.SMTP_PASSWORD
        self.from_email = settings.FROM_EMAIL if settings.FROM_EMAIL else settings.SMTP_USERNAME
        self.from_name = settings.FROM_NAME
        self.temp_password_subject = settings.TEMP_PASSWORD_SUBJECT

    def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None
    ) -> bool:
        """
        이메일 발송

        Args:
            to_email: 수신자 이메일
            subject: 이메일 제목
            html_content: HTML 내용
            text_content: 텍스트 내용 (선택사항)

        Returns:
            bool: 발송 성공 여부
        """
        try:
            message = MIMEMultipart("alternative")
            message["Subject"] = subject
            message["From"] = f"{self.from_name} <{self.from_email}>"
            message["To"] = to_email

            # 텍스트를 먼저 붙여야 HTML을 지원하는 클라이언트가 HTML을 선택함
            if text_content:
                message.attach(MIMEText(text_content, "plain", "utf-8"))
            message.attach(MIMEText(html_content, "html", "utf-8"))

            context = ssl.create_default_context()
            with smtplib.SMTP(self.smtp_server, self.smtp_port) as server:
                server.starttls(context=context)
                server.login(self.smtp_username, self.smtp_password)
                server.send_message(message)

            logger.info(f"이메일 발송 성공: {to_email} - {subject}")
            return True

        except (smtplib.SMTPException, ssl.SSLError, OSError) as e:
            logger.error(f"이메일 발송 실패: {to_email} - {subject} - {str(e)}")
            return False

    def send_temporary_password(self, to_email: str, username: str, temp_password: str) -> bool:
        """임시 비밀번호 안내 메일 발송"""
        return self.send_email(
            to_email=to_email,
            subject=self.temp_password_subject,
            html_content=self._create_temp_password_template(username, temp_password),
            text_content=(
                f"{username}님의 임시 비밀번호는 {temp_password} 입니다.\n"
                "로그인 후에 비밀번호를 반드시 변경해 주십시오."
            )
        )

    def _create_temp_password_template(self, username: str, temp_password: str) -> str:
        # 사용자가 입력한 이름이 HTML로 해석되지 않도록 이스케이프
        username = html.escape(username)
        return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <meta charset="UTF-8">
            <title>sinabro 임시 비밀번호 발급</title>
            <style>
                body {{ font-family: 'Malgun Gothic', Arial, sans-serif; color: #000; max-width: 750px; margin: 0 auto; }}
                .title {{ font-size: 28px; font-weight: bold; padding-bottom: 15px; border-bottom: 4px solid #000; }}
                .notice {{ font-size: 14px; color: #666; line-height: 22px; margin: 20px 0 0 0; }}
                .section {{ font-size: 18px; font-weight: bold; background: #eee; padding: 11px 12px 11px 20px; margin-top: 40px; }}
                table {{ width: 100%; border: 1px solid #eee; border-collapse: collapse; }}
                th {{ width: 80px; font-size: 14px; text-align: left; padding: 16px 20px 15px 20px; border-bottom: 1px solid #eee; }}
                td {{ font-size: 14px; color: #999; padding: 16px 0 15px 0; border-bottom: 1px solid #eee; }}
                .footer {{ font-size: 14px; color: #999; margin: 35px 0 60px; }}
            </style>
        </head>
        <body>
            <div class="title">임시 비밀번호 발급</div>
            <div class="notice">{username}님, 로그인 후에 비밀번호를 반드시 변경해 주십시오.</div>
            <div class="section">회원정보</div>
            <table>
                <tr>
                    <th>비밀번호</th>
                    <td>{temp_password}</td>
                </tr>
            </table>
            <div class="footer">COPYRIGHTS (C)SINABRO ALL RIGHTS RESERVED.</div>
        </body>
        </html>
        """


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service
