import time

import pytest
from jose import jwt

from turfconnect.auth import get_current_user
from turfconnect.config import SUPABASE_JWT_AUDIENCE, SUPABASE_JWT_SECRET
from turfconnect.main import app
from turfconnect.models import Profile


def make_token(user_id, email, **metadata):
    claims = {
        "sub": user_id,
        "email": email,
        "aud": SUPABASE_JWT_AUDIENCE,
        "exp": int(time.time()) + 3600,
        "user_metadata": metadata,
    }
    return jwt.encode(claims, SUPABASE_JWT_SECRET, algorithm="HS256")


@pytest.fixture
def real_auth(client):
    """Client that verifies bearer tokens instead of using a fixed user"""
    app.dependency_overrides.pop(get_current_user, None)
    return client


def test_admin_role_in_sign_up_metadata_is_ignored(real_auth, db):
    token = make_token("user-9", "someone@example.com", role="admin", full_name="Some One")

    response = real_auth.get("/admin/stats", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403
    assert db.get(Profile, "user-9").role == "customer"


def test_owner_role_in_sign_up_metadata_is_kept(real_auth, db):
    token = make_token("user-8", "owner@example.com", role="turf_owner", phone_number="9876543210")

    response = real_auth.get("/auth/session", headers={"Authorization": f"Bearer {token}"})

    assert response.json()["role"] == "turf_owner"
    profile = db.get(Profile, "user-8")
    assert (profile.role, profile.phone_number) == ("turf_owner", "9876543210")


def test_admin_row_still_grants_access(real_auth, admin_user):
    token = make_token("admin-1", "admin@example.com", role="customer")

    response = real_auth.get("/admin/stats", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200


def test_bad_signature_is_rejected(real_auth):
    token = jwt.encode(
        {"sub": "user-7", "aud": SUPABASE_JWT_AUDIENCE, "exp": int(time.time()) + 3600},
        "some-other-secret",
        algorithm="HS256",
    )

    response = real_auth.get("/admin/stats", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
