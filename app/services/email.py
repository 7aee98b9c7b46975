import logging
from typing import Dict, List, Optional
from urllib.parse import quote

import resend

from app.core.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    def __init__(self):
        self.api_key = settings.RESEND_API_KEY
        self.from_email = settings.EMAIL_FROM
        self.from_name = settings.EMAIL_FROM_NAME

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        cc: Optional[List[str]] = None,
        reply_to: Optional[str] = None,
    ) -> Dict:
        """Send an email using Resend."""
        resend.api_key = self.api_key
        params = {
            "from": f"{self.from_name} <{self.from_email}>",
            "to": [to_email],
            "subject": subject,
            "html": html_content,
        }

        if cc:
            params["cc"] = cc
        if reply_to:
            params["reply_to"] = reply_to

        return resend.Emails.send(params)

    def send_verification_email(self, to_email: str, name: str) -> Optional[Dict]:
        """Send the welcome / verify-your-address email to a new user.

        Dispatch is fire-and-forget: failures are logged and never reach the
        request that created the user.
        """
        if not self.is_configured:
            logger.warning(f"RESEND_API_KEY not set, skipping verification email to {to_email}")
            return None

        subject = "Verify Your Email Address"
        html_content = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
            <h2>Welcome!</h2>
            <p>Hi {name},</p>
            <p>Thanks for signing up! Please verify your email address to activate your account.</p>
            <p><a href="{settings.FRONTEND_URL}/verify-email?email={quote(to_email)}">Verify my email</a></p>
            <p>If you didn't sign up, you can safely ignore this email.</p>
        </div>
        """
        try:
            return self.send_email(to_email, subject, html_content)
        except Exception as e:
            logger.error(f"Failed to send verification email to {to_email}: {e}")
            return None
