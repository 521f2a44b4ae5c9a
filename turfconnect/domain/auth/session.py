"""
Authenticated session context and post-login routing

AuthContext replaces a process-wide "current user" with an explicit object that
handlers receive; SessionManager keeps it in step with auth events.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError

from ...navigation import Route

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
TOKEN_REFRESHED = "TOKEN_REFRESHED"
INITIAL_SESSION = "INITIAL_SESSION"

DEFAULT_ROLE = "customer"


class ProfileReader(Protocol):
    def fetch_role(self, user_id: str) -> Optional[str]: ...

    def fetch_phone_verified(self, user_id: str) -> Optional[bool]: ...

    def fetch_player_profile(self, user_id: str): ...


@dataclass
class AuthContext:
    user: Optional[dict] = None
    session: Optional[dict] = None
    role: Optional[str] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.user.get("id") if self.user else None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


def resolve_post_login_redirect(context: AuthContext, reader: ProfileReader) -> Optional[Route]:
    """
    Decide where a freshly authenticated user goes.

    Owners go to their dashboard. Everyone else must have a verified phone, then
    a player profile with age and location. A failed lookup is logged and no
    redirect is produced, leaving the user where they are.
    """
    if not context.is_authenticated:
        return None

    if context.role == "turf_owner":
        return Route.OWNER_DASHBOARD

    user_id = context.user_id
    try:
        phone_verified = reader.fetch_phone_verified(user_id)
        if not phone_verified:
            return Route.PHONE_VERIFICATION

        profile = reader.fetch_player_profile(user_id)
    except SQLAlchemyError as e:
        logger.error(f"❌ Error checking profile for user {user_id}: {e}")
        return None

    if profile is not None and profile.age and profile.location:
        return Route.FIND_PLAYERS
    return Route.PLAYER_PROFILE_SETUP


class SessionManager:
    """Tracks the current AuthContext across auth state changes"""

    def __init__(self, reader: ProfileReader, context: Optional[AuthContext] = None):
        self.reader = reader
        self.context = context or AuthContext()

    def load_role(self, user_id: str) -> str:
        try:
            role = self.reader.fetch_role(user_id)
        except SQLAlchemyError as e:
            logger.error(f"❌ Error fetching role for user {user_id}: {e}")
            return DEFAULT_ROLE
        return role or DEFAULT_ROLE

    def handle_auth_event(self, event: str, session: Optional[dict]) -> Optional[Route]:
        """Apply an auth event; returns the redirect for a live session, if any"""
        if event == SIGNED_OUT or not session:
            self.context = AuthContext()
            return None

        user = session.get("user") or {}
        self.context = AuthContext(user=user, session=session, role=self.load_role(user.get("id")))
        logger.info(f"🔐 Session {event.lower()} for user {self.context.user_id} ({self.context.role})")
        return resolve_post_login_redirect(self.context, self.reader)
