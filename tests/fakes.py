"""Shared fakes and utilities for unit and API tests."""

from __future__ import annotations

import fnmatch
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from turfconnect.services.auth_client import AuthAPIError


def next_date_for(day_of_week: int) -> date:
    """Next future date whose weekday matches day_of_week (0=Sunday)"""
    current = date.today() + timedelta(days=1)
    while (current.weekday() + 1) % 7 != day_of_week:
        current += timedelta(days=1)
    return current


class FakePipeline:
    """Queues INCR/TTL calls like a redis-py pipeline."""

    def __init__(self, redis: "FakeRedis") -> None:
        self.redis = redis
        self.ops: List[tuple] = []

    def incr(self, key: str) -> "FakePipeline":
        self.ops.append(("incr", key))
        return self

    def ttl(self, key: str) -> "FakePipeline":
        self.ops.append(("ttl", key))
        return self

    def execute(self) -> List[Any]:
        results = [getattr(self.redis, name)(key) for name, key in self.ops]
        self.ops = []
        return results


class FakeRedis:
    """In-memory stand-in for the handful of redis commands the app uses."""

    def __init__(self) -> None:
        self.store: Dict[str, Any] = {}
        self.ttls: Dict[str, int] = {}

    def get(self, key: str) -> Optional[str]:
        return self.store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> bool:
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    def delete(self, *keys: str) -> int:
        deleted = 0
        for key in keys:
            if key in self.store:
                del self.store[key]
                self.ttls.pop(key, None)
                deleted += 1
        return deleted

    def keys(self, pattern: str) -> List[str]:
        return [key for key in self.store if fnmatch.fnmatch(key, pattern)]

    def incr(self, key: str) -> int:
        self.store[key] = int(self.store.get(key, 0)) + 1
        return self.store[key]

    def ttl(self, key: str) -> int:
        return self.ttls.get(key, -1)

    def expire(self, key: str, seconds: int) -> bool:
        self.ttls[key] = seconds
        return True

    def pipeline(self) -> FakePipeline:
        return FakePipeline(self)

    def ping(self) -> bool:
        return True


class FakeAuthGateway:
    """Records calls made to the auth platform and answers with canned data."""

    def __init__(
        self,
        user_id: str = "user-1",
        sign_up_error: Optional[str] = None,
        sign_in_error: Optional[str] = None,
        otp_error: Optional[str] = None,
    ) -> None:
        self.user_id = user_id
        self.sign_up_error = sign_up_error
        self.sign_in_error = sign_in_error
        self.otp_error = otp_error
        self.sign_up_calls: List[dict] = []
        self.sign_in_calls: List[dict] = []
        self.otp_calls: List[tuple] = []
        self.signed_out: List[str] = []

    async def sign_up(
        self,
        email: str,
        password: str,
        full_name: str,
        role: str = "customer",
        phone_number: Optional[str] = None,
    ) -> dict:
        self.sign_up_calls.append(
            {
                "email": email,
                "password": password,
                "full_name": full_name,
                "role": role,
                "phone_number": phone_number,
            }
        )
        if self.sign_up_error:
            raise AuthAPIError(self.sign_up_error, 400)
        return {"id": self.user_id, "email": email, "user_metadata": {"role": role}}

    async def sign_in_with_password(self, email: str, password: str) -> dict:
        self.sign_in_calls.append({"email": email, "password": password})
        if self.sign_in_error:
            raise AuthAPIError(self.sign_in_error, 400)
        return {
            "access_token": "access-token",
            "refresh_token": "refresh-token",
            "token_type": "bearer",
            "expires_in": 3600,
            "user": {"id": self.user_id, "email": email},
        }

    async def send_email_otp(self, email: str, create_user: bool = False) -> dict:
        self.otp_calls.append(("send", email))
        if self.otp_error:
            raise AuthAPIError(self.otp_error, 429)
        return {}

    async def resend_signup_otp(self, email: str) -> dict:
        self.otp_calls.append(("resend", email))
        if self.otp_error:
            raise AuthAPIError(self.otp_error, 429)
        return {}

    async def verify_email_otp(self, email: str, token: str, otp_type: str = "email") -> dict:
        self.otp_calls.append(("verify", email, token, otp_type))
        if self.otp_error:
            raise AuthAPIError(self.otp_error, 400)
        return {
            "access_token": "access-token",
            "refresh_token": "refresh-token",
            "user": {"id": self.user_id, "email": email},
        }

    async def sign_out(self, access_token: str) -> None:
        self.signed_out.append(access_token)


class StubProfileReader:
    """ProfileReader returning fixed answers, optionally raising."""

    def __init__(self, role=None, phone_verified=None, player_profile=None, error: Exception = None):
        self.role = role
        self.phone_verified = phone_verified
        self.player_profile = player_profile
        self.error = error

    def fetch_role(self, user_id):
        return self.role

    def fetch_phone_verified(self, user_id):
        if self.error:
            raise self.error
        return self.phone_verified

    def fetch_player_profile(self, user_id):
        if self.error:
            raise self.error
        return self.player_profile
