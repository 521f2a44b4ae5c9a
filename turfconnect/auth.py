import logging

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from jose import jwt as jose_jwt
from sqlalchemy.orm import Session

from .config import ADMIN_EMAILS, SUPABASE_JWT_AUDIENCE, SUPABASE_JWT_SECRET
from .database import get_db
from .models import Profile

logger = logging.getLogger(__name__)

security = HTTPBearer()

ALGORITHM = "HS256"

# Roles a user may pick for themselves at sign-up; admin is granted only server-side
SELF_ASSIGNABLE_ROLES = {"customer", "turf_owner"}


def verify_access_token(token: str) -> dict:
    """
    Verify an access token issued by the auth platform.
    Signature, expiry and audience are checked with the project's JWT secret.
    """
    if not SUPABASE_JWT_SECRET:
        logger.error("❌ SUPABASE_JWT_SECRET not configured")
        raise HTTPException(status_code=500, detail="Authentication not configured")

    try:
        payload = jose_jwt.decode(
            token, SUPABASE_JWT_SECRET, algorithms=[ALGORITHM], audience=SUPABASE_JWT_AUDIENCE
        )
    except ExpiredSignatureError as e:
        raise HTTPException(
            status_code=401,
            detail="Token has expired. Please refresh your session.",
            headers={"X-Token-Expired": "true"},
        ) from e
    except JWTError as e:
        logger.warning(f"⚠️ Token verification failed: {e}")
        raise HTTPException(status_code=401, detail="Token verification failed") from e

    if not payload.get("sub"):
        logger.error(f"❌ Token missing user ID claim. Available claims: {list(payload.keys())}")
        raise HTTPException(status_code=401, detail="Invalid token claims")

    return payload


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> Profile:
    """Get current user's profile from the access token, creating it on first sight"""

    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    token = credentials.credentials
    if len(token.split(".")) != 3:
        logger.warning(f"⚠️ Malformed token received, length: {len(token)}")
        raise HTTPException(status_code=401, detail="Invalid token format. Expected a valid JWT token.")

    claims = verify_access_token(token)
    user_id = claims["sub"]

    profile = db.query(Profile).filter(Profile.id == user_id).first()
    if not profile:
        metadata = claims.get("user_metadata") or {}
        role = metadata.get("role")
        if role not in SELF_ASSIGNABLE_ROLES:
            if role:
                logger.warning(f"⚠️ Ignoring role '{role}' from sign-up metadata for user {user_id}")
            role = "customer"
        profile = Profile(
            id=user_id,
            email=claims.get("email"),
            full_name=metadata.get("full_name"),
            phone_number=metadata.get("phone_number"),
            role=role,
        )
        db.add(profile)
        db.commit()
        db.refresh(profile)
        logger.info(f"✅ Created profile for new user {user_id} ({profile.role})")

    return profile


def get_access_token(credentials: HTTPAuthorizationCredentials = Depends(security)) -> str:
    return credentials.credentials


def is_admin(profile: Profile) -> bool:
    return profile.role == "admin" or (profile.email or "").lower() in ADMIN_EMAILS


async def require_admin(current_user: Profile = Depends(get_current_user)) -> Profile:
    if not is_admin(current_user):
        logger.warning(f"⚠️ Non-admin user {current_user.id} attempted admin access")
        raise HTTPException(status_code=403, detail="Admin access required")
    return current_user
