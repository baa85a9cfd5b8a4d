"""Pydantic DTOs for the patent configuration."""

from pydantic import BaseModel, Field


class PatentConfigUpdate(BaseModel):
    """Partial update of the patent metadata. An empty background resets it."""

    patent_name: str | None = Field(None, min_length=1, max_length=200)
    patent_no: str | None = Field(None, min_length=1, max_length=100)
    background_url: str | None = None


class PatentConfigResponse(BaseModel):
    patent_name: str
    patent_no: str
    background_url: str

    model_config = {"from_attributes": True}
