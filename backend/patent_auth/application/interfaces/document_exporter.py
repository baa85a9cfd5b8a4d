"""Abstract interface (port) for exporting rendered certificates."""

from abc import ABC, abstractmethod

from patent_auth.domain.entities import CertificateDocument


class DocumentExporter(ABC):
    """Port for turning a CertificateDocument into a portable file."""

    media_type: str = "application/pdf"

    @abstractmethod
    async def export(self, document: CertificateDocument) -> bytes:
        """Export the document.

        Raises:
            ExportFailure: if the file could not be produced.
        """
        ...
