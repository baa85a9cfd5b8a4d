from .reportlab_pdf_exporter import ReportLabPdfExporter

__all__ = [
    "ReportLabPdfExporter",
]
