"""Pydantic DTOs for certificates and settlement outcomes."""

from datetime import datetime

from pydantic import BaseModel, Field

from patent_auth.domain.entities import PaymentStatus


class CertificateApply(BaseModel):
    """Request to issue a certificate for one project."""

    project_id: str = Field(..., min_length=1, max_length=100, examples=["p2"])


class CertificateResponse(BaseModel):
    """Certificate as returned to clients."""

    id: str
    user_id: str
    project_id: str
    project_name: str
    patent_name: str
    patent_no: str
    applicant_name: str
    issue_date: datetime
    is_paid: bool
    cost: int | None = None
    charged_credits: int | None = None

    model_config = {"from_attributes": True}


class PaymentOutcomeResponse(BaseModel):
    """Result of confirming delivery of a certificate."""

    status: PaymentStatus
    succeeded: bool
    charged: int
    balance: int | None = None
    required: int | None = None
    certificate: CertificateResponse | None = None

    model_config = {"from_attributes": True}
