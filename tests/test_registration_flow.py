import pytest

from turfconnect.domain.auth.flow import (
    AuthStep,
    Credentials,
    InvalidTransition,
    RegistrationFlow,
    SignupRole,
)
from turfconnect.navigation import Route

from tests.fakes import FakeAuthGateway


def signup_credentials(**overrides):
    values = {
        "email": "jane@example.com",
        "password": "secret123",
        "full_name": "Jane Doe",
        "phone_number": "9876543210",
    }
    values.update(overrides)
    return Credentials(**values)


async def test_invalid_signup_stays_on_auth_without_backend_call():
    flow = RegistrationFlow(id="f1", is_sign_up=True)
    gateway = FakeAuthGateway()

    outcome = await flow.submit(signup_credentials(phone_number="123"), gateway)

    assert flow.step == AuthStep.AUTH
    assert [(n.title, n.variant) for n in outcome.notices] == [("Invalid Phone Number", "destructive")]
    assert gateway.sign_up_calls == []


async def test_valid_signup_without_role_moves_to_role_selection():
    flow = RegistrationFlow(id="f1", is_sign_up=True)
    gateway = FakeAuthGateway()

    outcome = await flow.submit(signup_credentials(), gateway)

    assert outcome.step == AuthStep.ROLE
    assert flow.draft is not None
    assert gateway.sign_up_calls == []


async def test_owner_signup_never_creates_account_before_owner_details():
    flow = RegistrationFlow(id="f1", is_sign_up=True)
    gateway = FakeAuthGateway()

    await flow.submit(signup_credentials(), gateway)
    flow.select_role(SignupRole.TURF_OWNER)

    assert flow.step == AuthStep.OWNER_DETAILS
    assert gateway.sign_up_calls == []

    outcome = await flow.complete_owner_registration(gateway)

    assert outcome.step == AuthStep.COMPLETE
    assert outcome.notices[0].title == "Registration Successful! 🎉"
    assert len(gateway.sign_up_calls) == 1
    assert gateway.sign_up_calls[0]["role"] == "turf_owner"
    assert flow.draft is None


async def test_customer_role_returns_to_form_and_signs_up_on_resubmit():
    flow = RegistrationFlow(id="f1", is_sign_up=True)
    gateway = FakeAuthGateway()

    await flow.submit(signup_credentials(), gateway)
    flow.select_role(SignupRole.CUSTOMER)
    assert flow.step == AuthStep.AUTH
    assert flow.draft is None

    outcome = await flow.submit(signup_credentials(), gateway)

    assert outcome.redirect_to == Route.EMAIL_VERIFICATION
    assert outcome.notices[0].title == "Account Created! 📧"
    assert outcome.account["id"] == "user-1"
    assert gateway.sign_up_calls[0]["role"] == "customer"


async def test_signup_failure_is_reported_as_notice():
    flow = RegistrationFlow(id="f1", is_sign_up=True, selected_role=SignupRole.CUSTOMER)
    gateway = FakeAuthGateway(sign_up_error="User already registered")

    outcome = await flow.submit(signup_credentials(), gateway)

    assert not outcome.succeeded
    assert outcome.notices[0].title == "Registration Failed"
    assert "already exists" in outcome.notices[0].description


async def test_owner_signup_failure_keeps_details_step():
    flow = RegistrationFlow(id="f1", is_sign_up=True, selected_role=SignupRole.TURF_OWNER)
    gateway = FakeAuthGateway(sign_up_error="Password should be at least 6 characters")

    await flow.submit(signup_credentials(), gateway)
    outcome = await flow.complete_owner_registration(gateway)

    assert outcome.step == AuthStep.OWNER_DETAILS
    assert outcome.notices[0].description == "Password should be at least 6 characters"
    assert flow.draft is not None


async def test_owner_signup_without_user_id_keeps_details_step():
    flow = RegistrationFlow(id="f1", is_sign_up=True, selected_role=SignupRole.TURF_OWNER)
    gateway = FakeAuthGateway(user_id=None)

    await flow.submit(signup_credentials(), gateway)
    outcome = await flow.complete_owner_registration(gateway)

    assert outcome.step == AuthStep.OWNER_DETAILS
    assert not outcome.succeeded
    assert outcome.account is None
    assert flow.draft is not None


async def test_sign_in_returns_session():
    flow = RegistrationFlow(id="f1")
    gateway = FakeAuthGateway()

    outcome = await flow.submit(Credentials(email="jane@example.com", password="pw"), gateway)

    assert outcome.session["access_token"] == "access-token"
    assert outcome.notices[0].title == "Welcome Back! 👋"


async def test_sign_in_error_uses_friendly_message():
    flow = RegistrationFlow(id="f1")
    gateway = FakeAuthGateway(sign_in_error="Invalid login credentials")

    outcome = await flow.submit(Credentials(email="jane@example.com", password="pw"), gateway)

    assert outcome.session is None
    assert outcome.notices[0].description == "Invalid email or password. Please check your credentials."


def test_toggle_mode_resets_transient_state():
    flow = RegistrationFlow(id="f1", is_sign_up=True, step=AuthStep.ROLE, selected_role=SignupRole.TURF_OWNER)

    outcome = flow.toggle_mode()

    assert flow.is_sign_up is False
    assert flow.step == AuthStep.AUTH
    assert flow.selected_role is None
    assert outcome.query == {}
    assert flow.toggle_mode().query == {"mode": "register"}


def test_change_role_and_back_clear_the_draft():
    flow = RegistrationFlow(id="f1", is_sign_up=True, selected_role=SignupRole.TURF_OWNER)
    flow._hold_draft(signup_credentials(), AuthStep.OWNER_DETAILS)

    flow.change_role()
    assert flow.step == AuthStep.ROLE
    assert flow.draft is None

    flow.back_to_auth()
    assert flow.step == AuthStep.AUTH


def test_transitions_outside_their_step_are_rejected():
    flow = RegistrationFlow(id="f1", is_sign_up=True)

    with pytest.raises(InvalidTransition):
        flow.select_role(SignupRole.CUSTOMER)
    with pytest.raises(InvalidTransition):
        flow.return_home()


async def test_return_home_after_completion():
    flow = RegistrationFlow(id="f1", is_sign_up=True, selected_role=SignupRole.TURF_OWNER)
    gateway = FakeAuthGateway()
    await flow.submit(signup_credentials(), gateway)
    await flow.complete_owner_registration(gateway)

    assert flow.return_home().redirect_to == Route.HOME


def test_flow_survives_dict_round_trip():
    flow = RegistrationFlow(id="f1", is_sign_up=True, selected_role=SignupRole.TURF_OWNER)
    flow._hold_draft(signup_credentials(), AuthStep.OWNER_DETAILS)

    restored = RegistrationFlow.from_dict(flow.to_dict())

    assert restored == flow
