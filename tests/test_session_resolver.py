from types import SimpleNamespace

import pytest
from sqlalchemy.exc import OperationalError

from turfconnect.domain.auth.session import (
    SIGNED_IN,
    SIGNED_OUT,
    AuthContext,
    SessionManager,
    resolve_post_login_redirect,
)
from turfconnect.navigation import Route

from tests.fakes import StubProfileReader

USER = {"id": "user-1", "email": "jane@example.com"}


@pytest.mark.parametrize(
    "role, phone_verified, profile, expected",
    [
        ("customer", False, None, Route.PHONE_VERIFICATION),
        ("customer", None, None, Route.PHONE_VERIFICATION),
        ("customer", True, None, Route.PLAYER_PROFILE_SETUP),
        ("customer", True, SimpleNamespace(age=None, location="Indiranagar"), Route.PLAYER_PROFILE_SETUP),
        ("customer", True, SimpleNamespace(age=24, location="Indiranagar"), Route.FIND_PLAYERS),
        ("turf_owner", False, None, Route.OWNER_DASHBOARD),
    ],
)
def test_post_login_redirect_matrix(role, phone_verified, profile, expected):
    reader = StubProfileReader(phone_verified=phone_verified, player_profile=profile)
    context = AuthContext(user=USER, session={}, role=role)

    assert resolve_post_login_redirect(context, reader) == expected


def test_lookup_failure_produces_no_redirect():
    reader = StubProfileReader(error=OperationalError("SELECT", {}, Exception("db down")))
    context = AuthContext(user=USER, session={}, role="customer")

    assert resolve_post_login_redirect(context, reader) is None


def test_unauthenticated_context_has_no_redirect():
    assert resolve_post_login_redirect(AuthContext(), StubProfileReader()) is None


def test_session_manager_defaults_role_to_customer():
    manager = SessionManager(StubProfileReader(role=None, phone_verified=False))

    redirect = manager.handle_auth_event(SIGNED_IN, {"access_token": "t", "user": USER})

    assert manager.context.role == "customer"
    assert manager.context.user_id == "user-1"
    assert redirect == Route.PHONE_VERIFICATION


def test_sign_out_clears_context():
    manager = SessionManager(StubProfileReader(role="turf_owner"))
    manager.handle_auth_event(SIGNED_IN, {"access_token": "t", "user": USER})

    assert manager.handle_auth_event(SIGNED_OUT, None) is None
    assert manager.context.is_authenticated is False
