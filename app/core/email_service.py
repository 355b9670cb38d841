import smtplib
import ssl
import time
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional, List, Dict, Union
from contextlib import contextmanager

from app.config import settings
from app.core.logging_config import get_logger

logger = get_logger(__name__)


class EmailService:
    """SMTP mailer for account emails. Every message goes out from the configured sender."""

    def __init__(self):
        self.smtp_server = settings.SMTP_SERVER
        self.smtp_port = settings.SMTP_PORT
        self.smtp_username = settings.SMTP_USERNAME
        self.smtp_password = settings.SMTP_PASSWORD
        self.smtp_use_tls = settings.SMTP_USE_TLS
        self.smtp_use_ssl = settings.SMTP_USE_SSL
        self.app_name = settings.APP_NAME
        self.email_enabled = settings.EMAIL_ENABLED
        self.retry_attempts = max(settings.EMAIL_RETRY_ATTEMPTS, 1)
        self.retry_delay = settings.EMAIL_RETRY_DELAY

        self.sender_email = settings.SENDER_EMAIL
        self.sender_name = settings.SENDER_NAME
        self.support_email = settings.SUPPORT_EMAIL

        self.is_configured = self._validate_config()

    def _validate_config(self) -> bool:
        """Validate SMTP configuration"""
        if not self.email_enabled:
            logger.info("Email service is disabled by configuration")
            return False

        if not all([self.smtp_server, self.smtp_port, self.smtp_username,
                   self.smtp_password, self.sender_email]):
            logger.warning("SMTP configuration incomplete. Email notifications will be disabled.")
            return False

        logger.info(f"Email service configured with {self.smtp_server}:{self.smtp_port} using sender: {self.sender_email}")
        return True

    @contextmanager
    def _create_smtp_connection(self):
        server = None
        try:
            if self.smtp_use_ssl:
                # Implicit TLS, usually port 465
                context = ssl.create_default_context()
                server = smtplib.SMTP_SSL(self.smtp_server, self.smtp_port, context=context)
            else:
                server = smtplib.SMTP(self.smtp_server, self.smtp_port)
                if self.smtp_use_tls:
                    server.starttls()

            server.login(self.smtp_username, self.smtp_password)
            yield server

        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"SMTP authentication failed: {str(e)}")
            raise
        except smtplib.SMTPException as e:
            logger.error(f"SMTP error: {str(e)}")
            raise
        finally:
            if server:
                try:
                    server.quit()
                except smtplib.SMTPException:
                    logger.debug("SMTP connection already closed")

    def _create_message(
        self,
        to_emails: List[str],
        subject: str,
        html_content: Optional[str] = None,
        text_content: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> MIMEMultipart:
        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = f"{self.sender_name} <{self.sender_email}>"
        msg['To'] = ', '.join(to_emails)
        if reply_to:
            msg['Reply-To'] = reply_to

        if text_content:
            msg.attach(MIMEText(text_content, 'plain', 'utf-8'))
        if html_content:
            msg.attach(MIMEText(html_content, 'html', 'utf-8'))
        return msg

    def send_email(
        self,
        to_emails: Union[str, List[str]],
        subject: str,
        html_content: Optional[str] = None,
        text_content: Optional[str] = None,
        reply_to: Optional[str] = None,
    ) -> bool:
        """
        Send an HTML and/or plain text email, retrying EMAIL_RETRY_ATTEMPTS times.

        Returns:
            bool: True if email sent successfully, False otherwise
        """
        if not self.is_configured:
            logger.error("Email service not configured. Cannot send email.")
            return False

        if isinstance(to_emails, str):
            to_emails = [to_emails]

        if not to_emails or not subject:
            logger.error("to_emails and subject are required")
            return False

        if not html_content and not text_content:
            logger.error("Either html_content or text_content is required")
            return False

        msg = self._create_message(
            to_emails=to_emails,
            subject=subject,
            html_content=html_content,
            text_content=text_content,
            reply_to=reply_to or self.sender_email,
        )

        for attempt in range(self.retry_attempts):
            try:
                with self._create_smtp_connection() as server:
                    server.send_message(msg, to_addrs=to_emails)
                logger.info(f"Email sent successfully to {', '.join(to_emails)} - Subject: {subject}")
                return True

            except (smtplib.SMTPException, OSError) as e:
                logger.warning(f"Email send attempt {attempt + 1}/{self.retry_attempts} failed: {str(e)}")
                if attempt < self.retry_attempts - 1:
                    time.sleep(self.retry_delay)

        logger.error(f"Failed to send email to {', '.join(to_emails)} after {self.retry_attempts} attempts")
        return False

    def _layout(self, title: str, color: str, body: str) -> str:
        return f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
            <div style="background-color: {color}; color: white; padding: 20px; text-align: center; border-radius: 8px 8px 0 0;">
                <h1>{title}</h1>
            </div>
            <div style="background-color: #f9f9f9; padding: 30px; border-radius: 0 0 8px 8px;">
                {body}
                <p>Best regards,<br>The {self.app_name} Team</p>
            </div>
            <div style="text-align: center; color: #666; font-size: 12px; margin-top: 30px;">
                <p>Need help? Contact us at <a href="mailto:{self.support_email}">{self.support_email}</a></p>
            </div>
        </div>
        """

    def send_welcome_email(self, user_email: str, user_name: str, login_credentials: Dict[str, str]) -> bool:
        """Send the login credentials of an account created on the member's behalf"""
        body = f"""
                <h2>Hello {user_name},</h2>
                <p>An account has been created for you on {self.app_name}.</p>
                <div style="background-color: #e8f5e8; padding: 15px; border-radius: 5px; margin: 20px 0;">
                    <h3>Your Login Credentials:</h3>
                    <p><strong>Email:</strong> {login_credentials.get('username', user_email)}</p>
                    <p><strong>Temporary password:</strong> {login_credentials.get('password', '')}</p>
                    <p style="color: #d32f2f; font-size: 14px;"><strong>Important:</strong> Please change your password after first login.</p>
                </div>
                <p><strong>Login URL:</strong> <a href="{settings.FRONTEND_URL}">{settings.FRONTEND_URL}</a></p>
        """
        return self.send_email(
            to_emails=user_email,
            subject=f"Welcome to {self.app_name}",
            html_content=self._layout(f"Welcome to {self.app_name}!", "#4CAF50", body),
        )

    def send_password_reset_email(self, user_email: str, reset_token: str, user_name: str) -> bool:
        reset_url = f"{settings.FRONTEND_URL}/reset-password?token={reset_token}"
        body = f"""
                <h2>Hello {user_name},</h2>
                <p>We received a request to reset your password for your {self.app_name} account.</p>
                <p><a href="{reset_url}" style="display: inline-block; padding: 12px 24px; background-color: #f44336; color: white; text-decoration: none; border-radius: 5px;">Reset Password</a></p>
                <p><strong>This link will expire in {settings.RESET_TOKEN_EXPIRE_DAYS} days.</strong></p>
                <p>If the button doesn't work, copy this link into your browser:</p>
                <p style="word-break: break-all; background-color: #f5f5f5; padding: 10px; border-radius: 3px;">{reset_url}</p>
                <p>If you didn't request this password reset, please ignore this email.</p>
        """
        return self.send_email(
            to_emails=user_email,
            subject=f"Password Reset Request - {self.app_name}",
            html_content=self._layout("Password Reset Request", "#f44336", body),
        )


# Singleton instance
email_service = EmailService()

def get_email_service() -> EmailService:
    """Get the email service instance"""
    return email_service
