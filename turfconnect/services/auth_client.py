"""
Supabase Auth (GoTrue) client
Account creation, password sign-in and email OTP over the platform REST API
"""

import logging
from typing import Any, Optional

import httpx

from ..config import FRONTEND_URL, SUPABASE_ANON_KEY, SUPABASE_URL

logger = logging.getLogger(__name__)

# Platform error substrings rewritten into friendlier copy
FRIENDLY_AUTH_MESSAGES = {
    "Invalid login credentials": "Invalid email or password. Please check your credentials.",
    "Email not confirmed": "Please verify your email address before signing in.",
    "User already registered": "An account with this email already exists. Please sign in instead.",
}


class AuthAPIError(Exception):
    """Error response from the auth platform"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def friendly_auth_message(message: str) -> str:
    """Best-effort rewrite of known platform errors, passthrough otherwise"""
    for needle, friendly in FRIENDLY_AUTH_MESSAGES.items():
        if needle in message:
            return friendly
    return message


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    return (
        body.get("msg")
        or body.get("error_description")
        or body.get("message")
        or body.get("error")
        or f"HTTP {response.status_code}"
    )


class SupabaseAuthClient:
    """Thin async wrapper over the auth REST endpoints"""

    def __init__(
        self,
        base_url: str = SUPABASE_URL,
        api_key: str = SUPABASE_ANON_KEY,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    def _headers(self, access_token: Optional[str] = None) -> dict:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {access_token or self.api_key}",
            "Content-Type": "application/json",
        }

    async def _post(
        self,
        path: str,
        payload: Optional[dict] = None,
        params: Optional[dict] = None,
        access_token: Optional[str] = None,
    ) -> dict[str, Any]:
        url = f"{self.base_url}/auth/v1/{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    url, json=payload or {}, params=params, headers=self._headers(access_token)
                )
        except httpx.HTTPError as e:
            logger.error(f"❌ Auth platform unreachable ({path}): {e}")
            raise AuthAPIError("Authentication service is unavailable. Please try again.") from e

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning(f"⚠️ Auth platform rejected {path}: HTTP {response.status_code} - {message}")
            raise AuthAPIError(message, response.status_code)

        if not response.content:
            return {}
        return response.json()

    async def sign_up(
        self,
        email: str,
        password: str,
        full_name: str,
        role: str = "customer",
        phone_number: Optional[str] = None,
    ) -> dict:
        """Create an account; the platform emails a confirmation code"""
        logger.info(f"📝 Signing up {email} as {role}")
        metadata = {"full_name": full_name, "role": role}
        if phone_number:
            metadata["phone_number"] = phone_number
        return await self._post(
            "signup",
            {"email": email, "password": password, "data": metadata},
            params={"redirect_to": f"{FRONTEND_URL}/"},
        )

    async def sign_in_with_password(self, email: str, password: str) -> dict:
        """Exchange credentials for a session (access_token, refresh_token, user)"""
        return await self._post(
            "token", {"email": email, "password": password}, params={"grant_type": "password"}
        )

    async def send_email_otp(self, email: str, create_user: bool = False) -> dict:
        return await self._post("otp", {"email": email, "create_user": create_user})

    async def resend_signup_otp(self, email: str) -> dict:
        return await self._post("resend", {"type": "signup", "email": email})

    async def verify_email_otp(self, email: str, token: str, otp_type: str = "email") -> dict:
        """Verify a 6-digit email code; signup confirmation uses otp_type="signup" """
        return await self._post("verify", {"type": otp_type, "email": email, "token": token})

    async def sign_out(self, access_token: str) -> None:
        await self._post("logout", access_token=access_token)


def get_auth_client() -> SupabaseAuthClient:
    """Dependency injection for the auth platform client"""
    return SupabaseAuthClient()
