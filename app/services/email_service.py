"""Email service for transactional emails (Resend).

To send to any recipient, verify a domain at resend.com/domains and set
EMAIL_FROM to an address at that domain.
"""

import logging
from urllib.parse import urlencode

from app.config import settings

logger = logging.getLogger(__name__)


def _should_skip_email(to_email: str) -> bool:
    """Skip sending in test env or to test domains (Resend sandbox restricts recipients)."""
    if settings.ENVIRONMENT == "test":
        return True
    test_domains = ("@test.com", "@test.example.com", "@resend.dev")
    return any(to_email.lower().endswith(d) for d in test_domains)


def send_password_reset(to_email: str, reset_token: str) -> bool:
    """
    Send a password reset link to an admin.
    Returns True if sent (or deliberately skipped in the test env or for test
    addresses), False if not configured or the provider call failed.
    """
    if _should_skip_email(to_email):
        logger.info("Email skipped (test env or test domain): password reset to %s", to_email)
        return True
    if not settings.RESEND_API_KEY:
        logger.warning("Email not sent (RESEND_API_KEY not set): password reset to %s", to_email)
        return False

    reset_url = f"{settings.FRONTEND_RESET_URL.rstrip('/')}?{urlencode({'token': reset_token})}"
    expires_minutes = settings.PASSWORD_RESET_EXPIRE_MINUTES

    html = f"""
<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>Reset your password</title></head>
<body style="font-family: sans-serif; line-height: 1.6; color: #1f2937; max-width: 560px; margin: 0 auto; padding: 20px;">
  <h2 style="color: #2d3748;">Reset your {settings.INSTITUTE_NAME} admin password</h2>
  <p>We received a request to reset the password for this admin account.</p>
  <p style="margin: 24px 0;">
    <a href="{reset_url}" style="background: #ffb43c; color: #1f2937; padding: 12px 24px; text-decoration: none; border-radius: 6px; display: inline-block;">Reset password</a>
  </p>
  <p style="color: #6b7280; font-size: 14px;">This link expires in {expires_minutes} minutes. If you did not ask for a reset, ignore this email.</p>
  <hr style="border: none; border-top: 1px solid #e2e8f0; margin: 24px 0;">
  <p style="color: #94a3b8; font-size: 12px;">{settings.INSTITUTE_NAME}, {settings.INSTITUTE_CITY}</p>
</body>
</html>
"""

    try:
        import resend

        resend.api_key = settings.RESEND_API_KEY
        resend.Emails.send(
            {
                "from": settings.EMAIL_FROM,
                "to": [to_email],
                "subject": f"Reset your {settings.INSTITUTE_NAME} password",
                "html": html,
            }
        )
        logger.info("Password reset email sent to %s", to_email)
        return True
    except Exception as e:
        logger.exception("Failed to send password reset email to %s: %s", to_email, e)
        return False
