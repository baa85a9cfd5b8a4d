"""A4 PDF export of rendered certificates with reportlab.

Layout (A4 portrait):
    top-left     certificate number
    centred      title
    body         one "label：value" line per field
    background   optional image, full page width, anchored to the bottom
    watermark    optional diagonal text for non-official previews
"""

import asyncio
import io
import logging

from PIL import Image, UnidentifiedImageError
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.pdfgen import canvas

from patent_auth.application.interfaces import DocumentExporter
from patent_auth.domain.entities import CertificateDocument
from patent_auth.domain.exceptions import ExportFailure

logger = logging.getLogger(__name__)

_BORDER_COLOR = colors.HexColor("#B8860B")
_TEXT_COLOR = colors.HexColor("#1F2937")


class ReportLabPdfExporter(DocumentExporter):
    """Infrastructure adapter producing certificate PDFs."""

    media_type = "application/pdf"

    def __init__(self, font_name: str = "STSong-Light"):
        self._font_name = font_name

    async def export(self, document: CertificateDocument) -> bytes:
        try:
            return await asyncio.to_thread(self._build_pdf, document)
        except ExportFailure:
            raise
        except Exception as exc:
            logger.exception("PDF generation failed for %s", document.certificate_id)
            raise ExportFailure(f"PDF generation failed: {exc}") from exc

    def _ensure_font(self) -> None:
        if self._font_name not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(UnicodeCIDFont(self._font_name))

    def _build_pdf(self, document: CertificateDocument) -> bytes:
        self._ensure_font()
        width, height = A4
        buffer = io.BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=A4)
        pdf.setTitle(f"{document.title} {document.certificate_id}")

        if document.background_image:
            self._draw_background(pdf, document.background_image, width)
        else:
            self._draw_default_frame(pdf, width, height)

        if document.watermark:
            self._draw_watermark(pdf, document.watermark, width, height)

        pdf.setFillColor(_TEXT_COLOR)
        pdf.setFont(self._font_name, 11)
        pdf.drawString(20 * mm, height - 20 * mm, document.number_line)

        pdf.setFont(self._font_name, 34)
        pdf.drawCentredString(width / 2, height - 62 * mm, document.title)

        y = height - 100 * mm
        for label, value in document.fields:
            pdf.setFont(self._font_name, 15)
            pdf.drawString(35 * mm, y, f"{label}：")
            pdf.drawString(72 * mm, y, value)
            y -= 15 * mm

        pdf.showPage()
        pdf.save()
        content = buffer.getvalue()
        logger.debug("Built PDF for %s (%d bytes)", document.certificate_id, len(content))
        return content

    def _draw_background(self, pdf: canvas.Canvas, image_bytes: bytes, page_width: float) -> None:
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                rgb = image.convert("RGB")
        except (UnidentifiedImageError, OSError) as exc:
            raise ExportFailure(f"Background image could not be decoded: {exc}") from exc

        img_width, img_height = rgb.size
        draw_height = page_width * img_height / img_width
        pdf.drawImage(ImageReader(rgb), 0, 0, width=page_width, height=draw_height)

    def _draw_default_frame(self, pdf: canvas.Canvas, width: float, height: float) -> None:
        pdf.saveState()
        pdf.setStrokeColor(_BORDER_COLOR)
        pdf.setLineWidth(3)
        pdf.rect(10 * mm, 10 * mm, width - 20 * mm, height - 20 * mm)
        pdf.setLineWidth(0.8)
        pdf.rect(14 * mm, 14 * mm, width - 28 * mm, height - 28 * mm)
        pdf.restoreState()

    def _draw_watermark(self, pdf: canvas.Canvas, text: str, width: float, height: float) -> None:
        pdf.saveState()
        pdf.setFillColor(colors.red)
        pdf.setFillAlpha(0.15)
        pdf.setFont(self._font_name, 72)
        pdf.translate(width / 2, height / 2)
        pdf.rotate(35)
        pdf.drawCentredString(0, 0, text)
        pdf.restoreState()
