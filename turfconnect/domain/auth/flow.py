"""
Sign-up / sign-in state machine

    auth --(valid sign-up, no role)--> role
    role --customer--> auth --(submit: account created)--> email verification
    role --turf_owner--> owner-details --(submit: account created)--> complete

Turf owner accounts are created only when the owner-details step is submitted;
until then the credentials live in the flow's SignupDraft.
"""

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional, Protocol

from ...navigation import Route
from ...services.auth_client import AuthAPIError, friendly_auth_message
from ...shared.validators import validate_signup_fields

logger = logging.getLogger(__name__)


class AuthStep(str, Enum):
    AUTH = "auth"
    ROLE = "role"
    OWNER_DETAILS = "owner-details"
    COMPLETE = "complete"


class SignupRole(str, Enum):
    CUSTOMER = "customer"
    TURF_OWNER = "turf_owner"


class InvalidTransition(Exception):
    """Action not allowed from the flow's current step"""


class AuthGateway(Protocol):
    async def sign_up(
        self, email: str, password: str, full_name: str, role: str = ..., phone_number: Optional[str] = ...
    ) -> dict: ...

    async def sign_in_with_password(self, email: str, password: str) -> dict: ...


@dataclass
class Credentials:
    email: str
    password: str
    full_name: str = ""
    phone_number: str = ""


@dataclass
class SignupDraft:
    """Account details held from the sign-up form until owner-details submission"""

    email: str
    password: str
    full_name: str
    phone_number: str


@dataclass
class Notice:
    title: str
    description: str
    variant: str = "default"  # default, destructive


@dataclass
class FlowOutcome:
    step: AuthStep
    notices: list[Notice] = field(default_factory=list)
    redirect_to: Optional[Route] = None
    session: Optional[dict] = None
    account: Optional[dict] = None
    query: Optional[dict] = None

    @property
    def succeeded(self) -> bool:
        return not any(n.variant == "destructive" for n in self.notices)


def _created_user(response: dict) -> dict:
    # Signup answers with the user object, wrapped in "user" when a session is issued
    return response.get("user") or response


@dataclass
class RegistrationFlow:
    id: str
    is_sign_up: bool = False
    step: AuthStep = AuthStep.AUTH
    selected_role: Optional[SignupRole] = None
    draft: Optional[SignupDraft] = None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def submit(self, credentials: Credentials, gateway: AuthGateway) -> FlowOutcome:
        """Submit the auth step form in the current mode"""
        if self.step != AuthStep.AUTH:
            raise InvalidTransition(f"Cannot submit credentials from step '{self.step.value}'")

        if not self.is_sign_up:
            return await self._sign_in(credentials, gateway)

        notices: list[Notice] = []

        def notify(title: str, description: str) -> None:
            notices.append(Notice(title, description, "destructive"))

        if not validate_signup_fields(credentials.full_name, credentials.phone_number, notify):
            return FlowOutcome(step=self.step, notices=notices)

        if self.selected_role is None:
            self._hold_draft(credentials, AuthStep.ROLE)
            return FlowOutcome(step=self.step)

        if self.selected_role == SignupRole.TURF_OWNER:
            self._hold_draft(credentials, AuthStep.OWNER_DETAILS)
            return FlowOutcome(step=self.step)

        try:
            response = await gateway.sign_up(
                credentials.email,
                credentials.password,
                credentials.full_name.strip(),
                role=SignupRole.CUSTOMER.value,
                phone_number=credentials.phone_number.strip(),
            )
        except AuthAPIError as e:
            return FlowOutcome(
                step=self.step,
                notices=[Notice("Registration Failed", friendly_auth_message(e.message), "destructive")],
            )

        logger.info(f"✅ Customer account created for {credentials.email}")
        return FlowOutcome(
            step=self.step,
            notices=[Notice("Account Created! 📧", "Please check your email to verify your account.")],
            redirect_to=Route.EMAIL_VERIFICATION,
            account=_created_user(response),
        )

    def select_role(self, role: SignupRole) -> FlowOutcome:
        """Pick customer (back to the form) or turf owner (on to owner details)"""
        if self.step != AuthStep.ROLE:
            raise InvalidTransition(f"Cannot select a role from step '{self.step.value}'")

        self.selected_role = role
        if role == SignupRole.TURF_OWNER and self.draft is not None:
            self.step = AuthStep.OWNER_DETAILS
        else:
            # Customers resubmit the form; nothing is kept for them
            self.draft = None
            self.step = AuthStep.AUTH
        return FlowOutcome(step=self.step)

    def change_role(self) -> FlowOutcome:
        if self.step not in (AuthStep.AUTH, AuthStep.OWNER_DETAILS) or not self.is_sign_up:
            raise InvalidTransition(f"Cannot change role from step '{self.step.value}'")
        self.selected_role = None
        self.draft = None
        self.step = AuthStep.ROLE
        return FlowOutcome(step=self.step)

    def back_to_auth(self) -> FlowOutcome:
        if self.step == AuthStep.COMPLETE:
            raise InvalidTransition("Registration is already complete")
        self.draft = None
        self.step = AuthStep.AUTH
        return FlowOutcome(step=self.step)

    async def complete_owner_registration(self, gateway: AuthGateway) -> FlowOutcome:
        """Create the held turf owner account; the only place owners are signed up"""
        if self.step != AuthStep.OWNER_DETAILS or self.draft is None:
            raise InvalidTransition(f"No owner registration pending at step '{self.step.value}'")

        draft = self.draft
        try:
            response = await gateway.sign_up(
                draft.email,
                draft.password,
                draft.full_name,
                role=SignupRole.TURF_OWNER.value,
                phone_number=draft.phone_number,
            )
        except AuthAPIError as e:
            return FlowOutcome(
                step=self.step,
                notices=[Notice("Registration Failed", friendly_auth_message(e.message), "destructive")],
            )

        account = _created_user(response)
        if not account.get("id"):
            # Business details need the user id; stay here so the owner can resubmit
            logger.error(f"❌ Owner sign-up for {draft.email} returned no user id")
            return FlowOutcome(
                step=self.step,
                notices=[
                    Notice(
                        "Registration Failed",
                        "We could not finish creating your account. Please try again.",
                        "destructive",
                    )
                ],
            )

        logger.info(f"✅ Turf owner account created for {draft.email}")
        self.draft = None
        self.step = AuthStep.COMPLETE
        return FlowOutcome(
            step=self.step,
            notices=[
                Notice(
                    "Registration Successful! 🎉",
                    "Your turf owner account has been created. Please verify your email to continue.",
                )
            ],
            account=account,
        )

    def toggle_mode(self) -> FlowOutcome:
        """Flip sign-up/sign-in and reset every transient field"""
        self.is_sign_up = not self.is_sign_up
        self.step = AuthStep.AUTH
        self.selected_role = None
        self.draft = None
        return FlowOutcome(step=self.step, query={"mode": "register"} if self.is_sign_up else {})

    def return_home(self) -> FlowOutcome:
        if self.step != AuthStep.COMPLETE:
            raise InvalidTransition("Registration is not complete yet")
        return FlowOutcome(step=self.step, redirect_to=Route.HOME)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _sign_in(self, credentials: Credentials, gateway: AuthGateway) -> FlowOutcome:
        try:
            session = await gateway.sign_in_with_password(credentials.email, credentials.password)
        except AuthAPIError as e:
            logger.warning(f"⚠️ Sign in failed for {credentials.email}: {e.message}")
            return FlowOutcome(
                step=self.step,
                notices=[Notice("Authentication Error", friendly_auth_message(e.message), "destructive")],
            )

        return FlowOutcome(
            step=self.step,
            notices=[Notice("Welcome Back! 👋", "Successfully logged in to your account")],
            session=session,
        )

    def _hold_draft(self, credentials: Credentials, next_step: AuthStep) -> None:
        self.draft = SignupDraft(
            email=credentials.email,
            password=credentials.password,
            full_name=credentials.full_name.strip(),
            phone_number=credentials.phone_number.strip(),
        )
        self.step = next_step

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "is_sign_up": self.is_sign_up,
            "step": self.step.value,
            "selected_role": self.selected_role.value if self.selected_role else None,
            "draft": asdict(self.draft) if self.draft else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RegistrationFlow":
        draft = data.get("draft")
        role = data.get("selected_role")
        return cls(
            id=data["id"],
            is_sign_up=bool(data.get("is_sign_up")),
            step=AuthStep(data.get("step", AuthStep.AUTH.value)),
            selected_role=SignupRole(role) if role else None,
            draft=SignupDraft(**draft) if draft else None,
        )
