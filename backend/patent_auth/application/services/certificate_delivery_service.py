"""Certificate delivery — render/export first, settle the ledger second.

Download is a two-step protocol: the document is rendered and exported
without any ledger effect, and only once the file exists is the
certificate settled through ``LedgerService.pay_on_download``. A failed
render or export therefore never charges anyone.
"""

import logging
from dataclasses import dataclass

from patent_auth.application.interfaces import DocumentExporter
from patent_auth.application.services.app_data_store import AppDataStore
from patent_auth.application.services.certificate_renderer import CertificateRenderer
from patent_auth.application.services.ledger_service import LedgerService
from patent_auth.domain.entities import (
    Certificate,
    CertificateDocument,
    PaymentOutcome,
    PaymentStatus,
    User,
)
from patent_auth.domain.exceptions import (
    AffordabilityError,
    EntityNotFoundError,
    ExportFailure,
)
from patent_auth.infrastructure.logging.colored_logger import LedgerLogger, LedgerStage

logger = logging.getLogger(__name__)
llog = LedgerLogger("CertificateDeliveryService")


@dataclass(frozen=True)
class DeliveredCertificate:
    """An exported certificate file plus the settlement it triggered."""

    filename: str
    content: bytes
    media_type: str
    outcome: PaymentOutcome | None = None


def raise_for_outcome(outcome: PaymentOutcome, certificate_id: str) -> None:
    """Translate a refused settlement into the matching domain error."""
    if outcome.status is PaymentStatus.INSUFFICIENT_FUNDS:
        raise AffordabilityError(required=outcome.required or 0, available=outcome.balance or 0)
    if outcome.status is PaymentStatus.NOT_FOUND:
        raise EntityNotFoundError("Certificate", certificate_id)


class CertificateDeliveryService:
    """Produces certificate files and confirms their delivery to the ledger."""

    def __init__(
        self,
        ledger: LedgerService,
        store: AppDataStore,
        renderer: CertificateRenderer,
        exporter: DocumentExporter,
    ):
        self._ledger = ledger
        self._store = store
        self._renderer = renderer
        self._exporter = exporter

    async def _export(self, certificate: Certificate, preview: bool) -> tuple[CertificateDocument, bytes]:
        config = (await self._store.read()).config
        with llog.timed_step(LedgerStage.EXPORT, f"Exporting certificate {certificate.id}",
                             preview=preview):
            document = await self._renderer.render(certificate, config, preview=preview)
            try:
                content = await self._exporter.export(document)
            except ExportFailure:
                raise
            except Exception as exc:
                raise ExportFailure(f"Export of certificate {certificate.id} failed: {exc}") from exc
        return document, content

    async def _require_owner(self, certificate_id: str, actor: User) -> Certificate:
        certificate = await self._ledger.get_certificate(certificate_id, actor)
        if certificate.user_id != actor.id:
            raise EntityNotFoundError("Certificate", certificate_id)
        return certificate

    async def preview(self, certificate_id: str, actor: User) -> DeliveredCertificate:
        """Watermarked copy for on-screen viewing. Never touches the ledger."""
        certificate = await self._ledger.get_certificate(certificate_id, actor)
        document, content = await self._export(certificate, preview=True)
        return DeliveredCertificate(
            filename=document.filename,
            content=content,
            media_type=self._exporter.media_type,
        )

    async def download(self, certificate_id: str, actor: User) -> DeliveredCertificate:
        """Export the official certificate and settle it.

        Raises:
            EntityNotFoundError: unknown certificate or not owned by ``actor``.
            AffordabilityError: unpaid and the owner's balance is too low.
            ExportFailure: rendering or export failed; the ledger is untouched.
        """
        await self._require_owner(certificate_id, actor)

        certificate, owner, cost = await self._ledger.quote(certificate_id)
        if not certificate.is_paid and not owner.can_afford(cost):
            llog.step_rejected(LedgerStage.PAYMENT, "Insufficient credits before export",
                               certificate=certificate_id, required=cost,
                               available=owner.credits)
            raise AffordabilityError(required=cost, available=owner.credits)

        document, content = await self._export(certificate, preview=False)

        outcome = await self._ledger.pay_on_download(certificate_id)
        raise_for_outcome(outcome, certificate_id)
        return DeliveredCertificate(
            filename=document.filename,
            content=content,
            media_type=self._exporter.media_type,
            outcome=outcome,
        )

    async def confirm_delivery(self, certificate_id: str, actor: User) -> PaymentOutcome:
        """Settle a certificate the client rendered itself.

        Idempotent: repeated confirmations report ALREADY_PAID.
        """
        await self._require_owner(certificate_id, actor)
        outcome = await self._ledger.pay_on_download(certificate_id)
        raise_for_outcome(outcome, certificate_id)
        return outcome
