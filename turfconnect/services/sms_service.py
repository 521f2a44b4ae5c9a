"""
Twilio SMS Service
Delivers phone verification codes
"""

import logging
from typing import Optional

import httpx

from ..config import PHONE_CODE_TTL_MINUTES, TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_FROM_NUMBER

logger = logging.getLogger(__name__)


def sms_configured() -> bool:
    return bool(TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN and TWILIO_FROM_NUMBER)


async def send_sms(to_phone: str, message_body: str) -> tuple[bool, Optional[str]]:
    """
    Send SMS via Twilio

    Returns:
        Tuple of (success: bool, error_message: Optional[str])
    """
    if not to_phone:
        return False, "No phone number provided"

    if not sms_configured():
        logger.debug("Twilio not configured - SMS not sent")
        return False, "SMS not configured"

    url = f"https://api.twilio.com/2010-04-01/Accounts/{TWILIO_ACCOUNT_SID}/Messages.json"
    try:
        async with httpx.AsyncClient(timeout=15.0) as client:
            response = await client.post(
                url,
                auth=(TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN),
                data={"From": TWILIO_FROM_NUMBER, "To": to_phone, "Body": message_body},
            )
    except httpx.HTTPError as e:
        logger.error(f"❌ Twilio request failed: {e}")
        return False, str(e)

    if response.status_code in (200, 201):
        logger.info(f"✅ SMS sent to {to_phone}: {response.json().get('sid')}")
        return True, None

    error_message = response.json().get("message", "Unknown error") if response.content else "Unknown error"
    logger.error(f"❌ Twilio API error ({response.status_code}): {error_message}")
    return False, error_message


async def send_verification_code(to_phone: str, code: str) -> tuple[bool, Optional[str]]:
    """Text a phone verification code; without Twilio the code is only logged"""
    if not sms_configured():
        logger.debug(f"📱 Demo mode - verification code for {to_phone}: {code}")
        return True, None
    return await send_sms(to_phone, f"Your TurfConnect verification code is {code}. It expires in {PHONE_CODE_TTL_MINUTES} minutes.")
