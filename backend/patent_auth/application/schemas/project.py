"""Pydantic DTOs for project types."""

from pydantic import BaseModel, Field


class ProjectCreate(BaseModel):
    """Schema for adding a project — defaults mirror the admin panel's 'new project'."""

    name: str = Field("新项目", min_length=1, max_length=200)
    cost: int = Field(100, ge=0)


class ProjectUpdate(BaseModel):
    """Schema for editing a project — all fields optional."""

    name: str | None = Field(None, min_length=1, max_length=200)
    cost: int | None = Field(None, ge=0)


class ProjectResponse(BaseModel):
    """Project as returned to clients."""

    id: str
    name: str
    cost: int
    affordable: bool | None = None

    model_config = {"from_attributes": True}
