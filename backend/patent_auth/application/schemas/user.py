"""Pydantic DTOs for account administration."""

from pydantic import BaseModel, Field

from patent_auth.domain.entities import UserRole


class UserCreate(BaseModel):
    """Schema for creating an enterprise account — every field optional."""

    username: str | None = Field(None, min_length=1, max_length=100)
    password: str | None = Field(None, min_length=1, max_length=200)
    company_name: str | None = Field(None, min_length=1, max_length=200, examples=["新注册企业"])
    credits: int = Field(0, ge=0)


class UserUpdate(BaseModel):
    """Schema for editing an account — all fields optional."""

    username: str | None = Field(None, min_length=1, max_length=100)
    password: str | None = Field(None, min_length=1, max_length=200)
    company_name: str | None = Field(None, min_length=1, max_length=200)
    credits: int | None = Field(None, ge=0)


class UserResponse(BaseModel):
    """Account as returned to clients. The credential is never included."""

    id: str
    username: str
    company_name: str
    credits: int
    role: UserRole

    model_config = {"from_attributes": True}
