"""
Email Service using Resend
Templates are written in MJML and compiled to HTML before sending
"""

import logging
from typing import Optional, Union

import resend
from mjml import mjml_to_html

from .config import ADMIN_NOTIFICATION_EMAIL, EMAIL_FROM_ADDRESS, RESEND_API_KEY
from .email_templates import turf_approval_template

logger = logging.getLogger(__name__)

resend.api_key = RESEND_API_KEY


class EmailSendError(Exception):
    pass


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    try:
        result = mjml_to_html(mjml_content)
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise EmailSendError(f"Failed to compile MJML template: {str(e)}") from e

    # Newer releases return an object exposing .html/.errors, older ones a dict
    if isinstance(result, dict):
        errors, html = result.get("errors"), result.get("html", "")
    else:
        errors, html = getattr(result, "errors", None), getattr(result, "html", str(result))
    if errors:
        logger.warning(f"MJML compilation warnings: {errors}")
    return html


async def send_email(
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    from_address: Optional[str] = None,
) -> dict:
    """
    Send an email through Resend

    Args:
        to: Recipient email(s)
        subject: Email subject line
        mjml_content: MJML template content (will be compiled to HTML)
        from_address: Optional custom from address

    Returns:
        Send response dict
    """
    if not RESEND_API_KEY:
        logger.error("❌ No email service configured - RESEND_API_KEY missing")
        raise EmailSendError("Email service not configured")

    html_content = compile_mjml_to_html(mjml_content)
    recipients = [to] if isinstance(to, str) else to

    try:
        logger.info(f"📧 Sending email via Resend to: {recipients}")
        response = resend.Emails.send(
            {
                "from": from_address or EMAIL_FROM_ADDRESS,
                "to": recipients,
                "subject": subject,
                "html": html_content,
            }
        )
        logger.info(f"✅ Email sent successfully via Resend: {response}")
        return response
    except Exception as e:
        logger.error(f"❌ Email send error to {recipients}: {e}")
        raise EmailSendError(f"Failed to send email: {str(e)}") from e


async def send_turf_approval_email(turf: dict, owner: dict) -> dict:
    """Notify the admin that a new turf is waiting for business verification"""
    return await send_email(
        to=ADMIN_NOTIFICATION_EMAIL,
        subject=f"🏟️ New Turf Registration: {turf.get('name')} - Business Verification Required",
        mjml_content=turf_approval_template(turf, owner),
    )
