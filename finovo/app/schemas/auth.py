"""
Authentication Schemas

Pydantic models for auth API requests/responses.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


# =============================================================================
# Request Schemas
# =============================================================================

class AuthLoginRequest(BaseModel):
    """Login request with email and password."""
    model_config = ConfigDict(extra="forbid")

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, description="Password")


class AuthRegisterRequest(BaseModel):
    """Registration request (sign-up creates the account and its profile row)."""
    model_config = ConfigDict(extra="forbid")

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=8, description="Password (min 8 chars)")
    name: str = Field("", max_length=100, description="Display name; defaults to the email local part")


# =============================================================================
# Response Schemas
# =============================================================================

class AuthUserResponse(BaseModel):
    """User info returned after login or from /me endpoint."""
    id: str
    email: str
    name: str = ""
    is_active: bool
    is_superuser: bool
    profile_complete: bool = False
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthLoginResponse(BaseModel):
    """Response after successful login."""
    user: AuthUserResponse
    message: str = "Login successful"


class AuthLogoutResponse(BaseModel):
    """Response after logout."""
    message: str = "Logged out successfully"


class AuthMeResponse(BaseModel):
    """Response from /me endpoint."""
    user: AuthUserResponse


class AuthRegisterResponse(BaseModel):
    """Response after successful registration."""
    user: AuthUserResponse
    message: str = "Registration successful"
