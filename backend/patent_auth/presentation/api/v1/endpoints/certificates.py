"""Certificate issuance, listing and delivery endpoints."""

from urllib.parse import quote

from fastapi import APIRouter, Depends, Response, status

from patent_auth.application.schemas import (
    CertificateApply,
    CertificateResponse,
    PaymentOutcomeResponse,
)
from patent_auth.application.services import (
    CertificateDeliveryService,
    DeliveredCertificate,
    LedgerService,
)
from patent_auth.domain.entities import User
from patent_auth.domain.exceptions import (
    AffordabilityError,
    DuplicateEntityError,
    EntityNotFoundError,
    ExportFailure,
    RoleMismatchError,
)
from patent_auth.infrastructure.dependencies import (
    get_current_user,
    get_delivery_service,
    get_ledger_service,
    require_user,
)
from patent_auth.presentation.api.v1.errors import to_http_exception

router = APIRouter(prefix="/certificates", tags=["Certificates"])


def _file_response(delivered: DeliveredCertificate, inline: bool) -> Response:
    disposition = "inline" if inline else "attachment"
    return Response(
        content=delivered.content,
        media_type=delivered.media_type,
        headers={
            "Content-Disposition": f"{disposition}; filename*=UTF-8''{quote(delivered.filename)}",
        },
    )


@router.post("", response_model=CertificateResponse, status_code=status.HTTP_201_CREATED)
async def apply_for_certificate(
    data: CertificateApply,
    user: User = Depends(require_user),
    service: LedgerService = Depends(get_ledger_service),
) -> CertificateResponse:
    """Issue an unpaid certificate. Credits are charged at first download."""
    try:
        certificate = await service.apply(user.id, data.project_id)
    except (EntityNotFoundError, AffordabilityError, RoleMismatchError, DuplicateEntityError) as e:
        raise to_http_exception(e)
    return CertificateResponse.model_validate(certificate, from_attributes=True)


@router.get("", response_model=list[CertificateResponse])
async def list_my_certificates(
    user: User = Depends(require_user),
    service: LedgerService = Depends(get_ledger_service),
) -> list[CertificateResponse]:
    """The caller's certificates, newest first."""
    certificates = await service.list_certificates(user.id)
    return [CertificateResponse.model_validate(c, from_attributes=True) for c in certificates]


@router.get("/{certificate_id}", response_model=CertificateResponse)
async def get_certificate(
    certificate_id: str,
    user: User = Depends(get_current_user),
    service: LedgerService = Depends(get_ledger_service),
) -> CertificateResponse:
    try:
        certificate = await service.get_certificate(certificate_id, user)
    except EntityNotFoundError as e:
        raise to_http_exception(e)
    return CertificateResponse.model_validate(certificate, from_attributes=True)


@router.get("/{certificate_id}/preview")
async def preview_certificate(
    certificate_id: str,
    user: User = Depends(get_current_user),
    service: CertificateDeliveryService = Depends(get_delivery_service),
) -> Response:
    """Watermarked PDF for viewing. No credits are charged."""
    try:
        delivered = await service.preview(certificate_id, user)
    except (EntityNotFoundError, ExportFailure) as e:
        raise to_http_exception(e)
    return _file_response(delivered, inline=True)


@router.get("/{certificate_id}/download")
async def download_certificate(
    certificate_id: str,
    user: User = Depends(require_user),
    service: CertificateDeliveryService = Depends(get_delivery_service),
) -> Response:
    """Official PDF. The first successful download charges the certificate's cost."""
    try:
        delivered = await service.download(certificate_id, user)
    except (EntityNotFoundError, AffordabilityError, ExportFailure) as e:
        raise to_http_exception(e)
    return _file_response(delivered, inline=False)


@router.post("/{certificate_id}/confirm-delivery", response_model=PaymentOutcomeResponse)
async def confirm_delivery(
    certificate_id: str,
    user: User = Depends(require_user),
    service: CertificateDeliveryService = Depends(get_delivery_service),
) -> PaymentOutcomeResponse:
    """Settle a certificate rendered client-side. Safe to retry."""
    try:
        outcome = await service.confirm_delivery(certificate_id, user)
    except (EntityNotFoundError, AffordabilityError) as e:
        raise to_http_exception(e)
    return PaymentOutcomeResponse.model_validate(outcome, from_attributes=True)
