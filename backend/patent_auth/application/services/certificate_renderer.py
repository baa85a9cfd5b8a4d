"""Certificate renderer — lays out a certificate for export.

Rendering has no ledger effect. The only I/O is fetching a remote
background image when the patent config points at an http(s) URL.
"""

import base64
import binascii
import logging
from datetime import timedelta, timezone

import httpx

from patent_auth.domain.entities import Certificate, CertificateDocument, PatentConfig
from patent_auth.domain.exceptions import ExportFailure

logger = logging.getLogger(__name__)

TITLE = "授权证明"
PREVIEW_WATERMARK = "非正式文件"
RESULT_GRANTED = "同意授权"


def decode_data_url(url: str) -> bytes:
    """Decode a ``data:<mime>;base64,<payload>`` URL into raw bytes."""
    header, sep, payload = url.partition(",")
    if not sep or not header.startswith("data:") or not header.endswith(";base64"):
        raise ExportFailure("Background image is not a base64 data URL")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ExportFailure(f"Background image is not valid base64: {exc}") from exc


class CertificateRenderer:
    """Builds CertificateDocument layouts."""

    def __init__(self, utc_offset_hours: int = 8, http_timeout: float = 10.0):
        self._tz = timezone(timedelta(hours=utc_offset_hours))
        self._http_timeout = http_timeout

    def format_issue_date(self, certificate: Certificate) -> str:
        """Format as ``YYYY年M月D日`` in the certificate timezone."""
        local = certificate.issue_date.astimezone(self._tz)
        return f"{local.year}年{local.month}月{local.day}日"

    async def _load_background(self, url: str) -> bytes | None:
        if not url:
            return None
        if url.startswith("data:"):
            return decode_data_url(url)
        if url.startswith(("http://", "https://")):
            try:
                async with httpx.AsyncClient(timeout=self._http_timeout) as client:
                    response = await client.get(url)
                    response.raise_for_status()
                    return response.content
            except httpx.HTTPError as exc:
                raise ExportFailure(f"Could not fetch background image: {exc}") from exc
        raise ExportFailure(f"Unsupported background image reference: {url[:40]}")

    async def render(
        self,
        certificate: Certificate,
        config: PatentConfig,
        preview: bool = False,
    ) -> CertificateDocument:
        """Lay out ``certificate``. Previews carry a non-official watermark."""
        background = await self._load_background(config.background_url)
        return CertificateDocument(
            certificate_id=certificate.id,
            title=TITLE,
            number_line=f"证书编号：{certificate.id}",
            fields=(
                ("专利名称", certificate.patent_name),
                ("专利号", certificate.patent_no),
                ("申请企业", certificate.applicant_name),
                ("应用项目", certificate.project_name),
                ("申请结果", RESULT_GRANTED),
                ("授权日期", self.format_issue_date(certificate)),
            ),
            background_image=background,
            watermark=PREVIEW_WATERMARK if preview else None,
        )
