"""Pydantic DTOs for login and credential changes."""

from pydantic import BaseModel, Field

from patent_auth.application.schemas.user import UserResponse
from patent_auth.domain.entities import UserRole


class LoginRequest(BaseModel):
    """Credentials plus the entry point (role) the actor is logging in through."""

    username: str = Field(..., min_length=1, max_length=100, examples=["tech_corp"])
    password: str = Field(..., min_length=1, max_length=200)
    role: UserRole = Field(UserRole.USER, examples=["USER"])


class TokenResponse(BaseModel):
    """Bearer token returned after a successful login."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class PasswordChange(BaseModel):
    """Self-service credential change — both fields must match."""

    new_password: str = Field(..., max_length=200)
    confirm_password: str = Field(..., max_length=200)
