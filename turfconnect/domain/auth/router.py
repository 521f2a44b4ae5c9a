"""Auth router - FastAPI endpoints for registration flows, sign-in and sessions"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_access_token, get_current_user
from ...database import get_db
from ...models import Profile
from ...rate_limiter import create_rate_limiter
from ...services.auth_client import SupabaseAuthClient, get_auth_client
from .flow import FlowOutcome, RegistrationFlow
from .flow_store import RegistrationFlowStore, get_flow_store
from .schemas import (
    AuthStateResponse,
    CredentialsRequest,
    EmailOTPRequest,
    EmailOTPVerifyRequest,
    FlowResponse,
    FlowStartRequest,
    NoticeResponse,
    OwnerDetailsRequest,
    OwnerProfileResponse,
    RoleSelectionRequest,
    SessionResponse,
)
from .service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

email_otp_rate_limit = create_rate_limiter(limit=5, window_seconds=600, key_prefix="email_otp")


def get_auth_service(
    db: Session = Depends(get_db),
    gateway: SupabaseAuthClient = Depends(get_auth_client),
    store: RegistrationFlowStore = Depends(get_flow_store),
) -> AuthService:
    """Dependency injection for AuthService"""
    return AuthService(db, gateway, store)


def _session_response(session: Optional[dict]) -> Optional[SessionResponse]:
    if not session:
        return None
    return SessionResponse(
        access_token=session.get("access_token"),
        refresh_token=session.get("refresh_token"),
        expires_in=session.get("expires_in"),
        token_type=session.get("token_type"),
        user=session.get("user"),
    )


def _flow_response(flow: RegistrationFlow, outcome: Optional[FlowOutcome] = None) -> FlowResponse:
    response = FlowResponse(
        flowId=flow.id,
        step=flow.step.value,
        isSignUp=flow.is_sign_up,
        selectedRole=flow.selected_role.value if flow.selected_role else None,
        hasDraft=flow.draft is not None,
    )
    if outcome is not None:
        response.notices = [NoticeResponse(**vars(n)) for n in outcome.notices]
        response.redirectTo = outcome.redirect_to.value if outcome.redirect_to else None
        response.query = outcome.query
        response.session = _session_response(outcome.session)
    return response


# ============================================================================
# REGISTRATION FLOW
# ============================================================================


@router.post("/flow", response_model=FlowResponse)
async def start_flow(data: FlowStartRequest, service: AuthService = Depends(get_auth_service)):
    """Start a sign-in (default) or sign-up flow (mode=register)"""
    return _flow_response(service.start_flow(data.mode))


@router.get("/flow/{flow_id}", response_model=FlowResponse)
async def get_flow(flow_id: str, service: AuthService = Depends(get_auth_service)):
    return _flow_response(service.get_flow(flow_id))


@router.post("/flow/{flow_id}/submit", response_model=FlowResponse)
async def submit_credentials(
    flow_id: str, data: CredentialsRequest, service: AuthService = Depends(get_auth_service)
):
    flow, outcome = await service.submit(flow_id, data)
    return _flow_response(flow, outcome)


@router.post("/flow/{flow_id}/role", response_model=FlowResponse)
async def select_role(
    flow_id: str, data: RoleSelectionRequest, service: AuthService = Depends(get_auth_service)
):
    flow, outcome = service.select_role(flow_id, data.role)
    return _flow_response(flow, outcome)


@router.post("/flow/{flow_id}/change-role", response_model=FlowResponse)
async def change_role(flow_id: str, service: AuthService = Depends(get_auth_service)):
    flow, outcome = service.change_role(flow_id)
    return _flow_response(flow, outcome)


@router.post("/flow/{flow_id}/back", response_model=FlowResponse)
async def back_to_auth(flow_id: str, service: AuthService = Depends(get_auth_service)):
    flow, outcome = service.back_to_auth(flow_id)
    return _flow_response(flow, outcome)


@router.post("/flow/{flow_id}/owner-details", response_model=FlowResponse)
async def submit_owner_details(
    flow_id: str, data: OwnerDetailsRequest, service: AuthService = Depends(get_auth_service)
):
    """Create the turf owner account held by this flow"""
    flow, outcome = await service.complete_owner_registration(flow_id, data)
    return _flow_response(flow, outcome)


@router.post("/flow/{flow_id}/toggle-mode", response_model=FlowResponse)
async def toggle_mode(flow_id: str, service: AuthService = Depends(get_auth_service)):
    flow, outcome = service.toggle_mode(flow_id)
    return _flow_response(flow, outcome)


@router.post("/flow/{flow_id}/home", response_model=FlowResponse)
async def return_home(flow_id: str, service: AuthService = Depends(get_auth_service)):
    flow, outcome = service.return_home(flow_id)
    return _flow_response(flow, outcome)


# ============================================================================
# EMAIL OTP
# ============================================================================


@router.post("/otp/send", response_model=NoticeResponse)
async def send_email_otp(
    data: EmailOTPRequest,
    _: None = Depends(email_otp_rate_limit),
    service: AuthService = Depends(get_auth_service),
):
    notice = await service.send_email_otp(data.email)
    return NoticeResponse(**vars(notice))


@router.post("/otp/resend", response_model=NoticeResponse)
async def resend_email_otp(
    data: EmailOTPRequest,
    _: None = Depends(email_otp_rate_limit),
    service: AuthService = Depends(get_auth_service),
):
    notice = await service.send_email_otp(data.email, resend=True)
    return NoticeResponse(**vars(notice))


@router.post("/otp/verify", response_model=AuthStateResponse)
async def verify_email_otp(data: EmailOTPVerifyRequest, service: AuthService = Depends(get_auth_service)):
    outcome = await service.verify_email_otp(data.email, data.token, data.type)
    user = (outcome.session or {}).get("user") or {}
    return AuthStateResponse(
        userId=user.get("id"),
        email=user.get("email") or data.email,
        redirectTo=outcome.redirect_to.value if outcome.redirect_to else None,
        notices=[NoticeResponse(**vars(n)) for n in outcome.notices],
        session=_session_response(outcome.session),
    )


# ============================================================================
# SESSION
# ============================================================================


@router.get("/session", response_model=AuthStateResponse)
async def get_session_state(
    current_user: Profile = Depends(get_current_user),
    access_token: str = Depends(get_access_token),
    service: AuthService = Depends(get_auth_service),
):
    """Current user, role and the route they should land on"""
    return AuthStateResponse(**service.current_state(current_user, access_token))


@router.post("/sign-out")
async def sign_out(
    access_token: str = Depends(get_access_token),
    service: AuthService = Depends(get_auth_service),
):
    return await service.sign_out(access_token)


@router.post("/owner-details", response_model=OwnerProfileResponse)
async def register_owner_details(
    data: OwnerDetailsRequest,
    current_user: Profile = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    """Submit business details for an existing account"""
    return service.register_owner_details(current_user, data)


__all__ = ["router"]
