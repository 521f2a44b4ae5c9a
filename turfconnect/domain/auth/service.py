"""Auth service - Drives registration flows, sign-in and email verification"""

import logging
from dataclasses import replace
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Profile, TurfOwner
from ...services.auth_client import AuthAPIError, SupabaseAuthClient, friendly_auth_message
from ...shared.validators import validate_phone_number
from .flow import (
    AuthStep,
    Credentials,
    FlowOutcome,
    InvalidTransition,
    Notice,
    RegistrationFlow,
    SignupRole,
)
from .flow_store import RegistrationFlowStore
from .repository import AuthRepository, DatabaseProfileReader
from .schemas import CredentialsRequest, OwnerDetailsRequest
from .session import INITIAL_SESSION, SIGNED_IN, SessionManager

logger = logging.getLogger(__name__)


def _owner_fields(data: OwnerDetailsRequest) -> dict:
    return {
        "business_name": data.businessName.strip(),
        "owner_name": data.ownerName.strip(),
        "business_type": data.businessType,
        "contact_phone": data.contactPhone.strip(),
        "contact_email": data.contactEmail,
        "address": data.address.strip(),
        "years_of_operation": data.yearsOfOperation,
    }


class AuthService:
    """Service layer for sign-up, sign-in and session routing"""

    def __init__(self, db: Session, gateway: SupabaseAuthClient, store: RegistrationFlowStore):
        self.db = db
        self.gateway = gateway
        self.store = store
        self.repo = AuthRepository()

    # ------------------------------------------------------------------
    # Registration flow
    # ------------------------------------------------------------------

    def start_flow(self, mode: Optional[str] = None) -> RegistrationFlow:
        return self.store.create(is_sign_up=mode == "register")

    def get_flow(self, flow_id: str) -> RegistrationFlow:
        flow = self.store.load(flow_id)
        if not flow:
            raise HTTPException(status_code=404, detail="Registration session expired. Please start again.")
        return flow

    def _apply(self, flow_id: str, action) -> tuple[RegistrationFlow, FlowOutcome]:
        flow = self.get_flow(flow_id)
        try:
            outcome = action(flow)
        except InvalidTransition as e:
            raise HTTPException(status_code=409, detail=str(e)) from e
        self.store.save(flow)
        return flow, outcome

    def select_role(self, flow_id: str, role: str) -> tuple[RegistrationFlow, FlowOutcome]:
        return self._apply(flow_id, lambda flow: flow.select_role(SignupRole(role)))

    def change_role(self, flow_id: str) -> tuple[RegistrationFlow, FlowOutcome]:
        return self._apply(flow_id, lambda flow: flow.change_role())

    def back_to_auth(self, flow_id: str) -> tuple[RegistrationFlow, FlowOutcome]:
        return self._apply(flow_id, lambda flow: flow.back_to_auth())

    def toggle_mode(self, flow_id: str) -> tuple[RegistrationFlow, FlowOutcome]:
        return self._apply(flow_id, lambda flow: flow.toggle_mode())

    def return_home(self, flow_id: str) -> tuple[RegistrationFlow, FlowOutcome]:
        flow, outcome = self._apply(flow_id, lambda flow: flow.return_home())
        self.store.delete(flow.id)
        return flow, outcome

    async def submit(self, flow_id: str, data: CredentialsRequest) -> tuple[RegistrationFlow, FlowOutcome]:
        """Submit the auth form: sign-up steps, email sign-in or phone sign-in"""
        flow = self.get_flow(flow_id)
        if flow.step != AuthStep.AUTH:
            raise HTTPException(status_code=409, detail=f"Cannot submit credentials from step '{flow.step.value}'")

        credentials = Credentials(
            email=data.email or "",
            password=data.password,
            full_name=data.fullName,
            phone_number=data.phoneNumber,
        )

        if not flow.is_sign_up and not credentials.email and credentials.phone_number:
            outcome = await self._phone_sign_in(flow, credentials)
        elif not credentials.email:
            outcome = FlowOutcome(
                step=flow.step,
                notices=[Notice("Missing Information", "Please enter your email address", "destructive")],
            )
        else:
            outcome = await flow.submit(credentials, self.gateway)

        if outcome.account:
            self._record_account(
                outcome.account,
                credentials.email,
                credentials.full_name,
                credentials.phone_number,
                SignupRole.CUSTOMER.value,
            )
        if outcome.session:
            outcome = self._route_session(outcome, SIGNED_IN)

        if outcome.redirect_to is not None:
            self.store.delete(flow.id)
        else:
            self.store.save(flow)
        return flow, outcome

    async def complete_owner_registration(
        self, flow_id: str, data: OwnerDetailsRequest
    ) -> tuple[RegistrationFlow, FlowOutcome]:
        """Create the held owner account, then store the business details"""
        flow = self.get_flow(flow_id)
        draft = flow.draft
        try:
            outcome = await flow.complete_owner_registration(self.gateway)
        except InvalidTransition as e:
            raise HTTPException(status_code=409, detail=str(e)) from e

        if outcome.account and draft is not None:
            profile = self._record_account(
                outcome.account, draft.email, draft.full_name, draft.phone_number, SignupRole.TURF_OWNER.value
            )
            if profile is not None:
                self.repo.create_turf_owner(self.db, profile.id, **_owner_fields(data))
                self.repo.grant_role(self.db, profile.id, SignupRole.TURF_OWNER.value)
                logger.info(f"✅ Owner details stored for {draft.email}")

        self.store.save(flow)
        return flow, outcome

    def _record_account(
        self, account: dict, email: str, full_name: str, phone_number: str, role: str
    ) -> Optional[Profile]:
        user_id = account.get("id")
        if not user_id:
            logger.warning(f"⚠️ Sign-up for {email} returned no user id; profile not stored")
            return None
        return self.repo.upsert_profile(
            self.db, user_id, email, full_name.strip() or None, phone_number.strip() or None, role
        )

    async def _phone_sign_in(self, flow: RegistrationFlow, credentials: Credentials) -> FlowOutcome:
        phone_number = credentials.phone_number.strip()
        if not validate_phone_number(phone_number):
            return FlowOutcome(
                step=flow.step,
                notices=[Notice("Invalid Phone Number", "Please enter a valid phone number", "destructive")],
            )

        account = self.repo.find_account_by_phone(self.db, phone_number)
        if not account or not account[0].email:
            return FlowOutcome(
                step=flow.step,
                notices=[
                    Notice("Account Not Found", "No verified account found with this phone number", "destructive")
                ],
            )

        profile, player_profile = account
        if not player_profile.phone_verified:
            return FlowOutcome(
                step=flow.step,
                notices=[
                    Notice(
                        "Phone Not Verified",
                        "Please complete phone verification first or sign in with email.",
                        "destructive",
                    )
                ],
            )

        outcome = await flow.submit(replace(credentials, email=profile.email), self.gateway)
        if outcome.session:
            outcome.notices = [Notice("Success! 📱", "Successfully signed in with phone number")]
        else:
            outcome.notices = [Notice("Sign In Failed", "Invalid phone number or password", "destructive")]
        return outcome

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def _route_session(self, outcome: FlowOutcome, event: str) -> FlowOutcome:
        manager = SessionManager(DatabaseProfileReader(self.db))
        outcome.redirect_to = manager.handle_auth_event(event, outcome.session)
        return outcome

    def current_state(self, profile: Profile, access_token: str) -> dict:
        """Resolve the landing route for an already signed-in user"""
        session = {"access_token": access_token, "user": {"id": profile.id, "email": profile.email}}
        manager = SessionManager(DatabaseProfileReader(self.db))
        redirect_to = manager.handle_auth_event(INITIAL_SESSION, session)
        return {
            "userId": profile.id,
            "email": profile.email,
            "role": manager.context.role,
            "redirectTo": redirect_to.value if redirect_to else None,
        }

    async def sign_out(self, access_token: str) -> dict:
        try:
            await self.gateway.sign_out(access_token)
        except AuthAPIError as e:
            # Token may already be revoked; the client drops its session either way
            logger.warning(f"⚠️ Sign out failed upstream: {e.message}")
        return {"message": "Signed out"}

    # ------------------------------------------------------------------
    # Email OTP
    # ------------------------------------------------------------------

    async def send_email_otp(self, email: str, resend: bool = False) -> Notice:
        try:
            if resend:
                await self.gateway.resend_signup_otp(email)
            else:
                await self.gateway.send_email_otp(email)
        except AuthAPIError as e:
            title = "Failed to Resend" if resend else "Failed to Send OTP"
            raise HTTPException(status_code=400, detail=f"{title}: {e.message}") from e

        if resend:
            return Notice("OTP Resent", "A new verification code has been sent to your email")
        return Notice("OTP Sent! 📧", "Check your email for the 6-digit verification code")

    async def verify_email_otp(self, email: str, token: str, otp_type: str) -> FlowOutcome:
        try:
            session = await self.gateway.verify_email_otp(email, token, otp_type)
        except AuthAPIError as e:
            raise HTTPException(
                status_code=400, detail=f"Verification Failed: {friendly_auth_message(e.message)}"
            ) from e

        outcome = FlowOutcome(
            step=AuthStep.COMPLETE,
            notices=[Notice("Email Verified! 🎉", "Your email has been successfully verified.")],
            session=session if session.get("access_token") else None,
        )
        if outcome.session:
            outcome = self._route_session(outcome, SIGNED_IN)
        return outcome

    # ------------------------------------------------------------------
    # Owner details for signed-in users
    # ------------------------------------------------------------------

    def register_owner_details(self, profile: Profile, data: OwnerDetailsRequest) -> TurfOwner:
        if self.repo.get_turf_owner(self.db, profile.id):
            raise HTTPException(status_code=409, detail="Owner details already submitted")

        owner = self.repo.create_turf_owner(self.db, profile.id, **_owner_fields(data))
        logger.info(f"📥 Owner application submitted for user {profile.id}")
        return owner
