"""Auth domain schemas - Pydantic models for the registration flow and sessions"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import validate_email


class FlowStartRequest(BaseModel):
    mode: Optional[Literal["register", "signin"]] = None


class CredentialsRequest(BaseModel):
    """Auth step form; full name and phone only matter when signing up"""

    email: Optional[str] = None
    password: str = Field(min_length=1)
    fullName: str = ""
    phoneNumber: str = ""

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return validate_email(v)


class RoleSelectionRequest(BaseModel):
    role: Literal["customer", "turf_owner"]


class OwnerDetailsRequest(BaseModel):
    businessName: str = Field(min_length=1)
    ownerName: str = Field(min_length=1)
    businessType: Literal["individual", "partnership", "company"]
    contactPhone: str = Field(min_length=1)
    contactEmail: str
    address: str = Field(min_length=1)
    yearsOfOperation: int = Field(default=1, ge=0, le=100)

    @field_validator("contactEmail")
    @classmethod
    def validate_contact_email(cls, v):
        return validate_email(v)


class NoticeResponse(BaseModel):
    title: str
    description: str
    variant: str = "default"


class SessionResponse(BaseModel):
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    token_type: Optional[str] = None
    user: Optional[dict] = None


class FlowResponse(BaseModel):
    flowId: str
    step: str
    isSignUp: bool
    selectedRole: Optional[str] = None
    hasDraft: bool = False
    notices: list[NoticeResponse] = []
    redirectTo: Optional[str] = None
    query: Optional[dict] = None
    session: Optional[SessionResponse] = None


class EmailOTPRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return validate_email(v)


class EmailOTPVerifyRequest(BaseModel):
    email: str
    token: str = Field(pattern=r"^\d{6}$")
    type: Literal["email", "signup"] = "signup"

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return validate_email(v)


class AuthStateResponse(BaseModel):
    userId: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    redirectTo: Optional[str] = None
    notices: list[NoticeResponse] = []
    session: Optional[SessionResponse] = None


class OwnerProfileResponse(BaseModel):
    id: str
    user_id: str
    business_name: str
    owner_name: str
    business_type: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    address: Optional[str] = None
    years_of_operation: Optional[int] = None
    verification_status: str
    rejection_reason: Optional[str] = None

    class Config:
        from_attributes = True
