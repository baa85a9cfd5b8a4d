"""Rendered certificate layout — input to document exporters."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CertificateDocument:
    """A certificate laid out as labelled lines, ready to be exported.

    Produced by the renderer from a Certificate and the PatentConfig;
    carries no ledger state.
    """

    certificate_id: str
    title: str
    number_line: str
    fields: tuple[tuple[str, str], ...]
    background_image: bytes | None = None
    watermark: str | None = None

    @property
    def filename(self) -> str:
        return f"授权证明_{self.certificate_id}.pdf"
