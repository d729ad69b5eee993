"""
Text extraction adapters: table image OCR and PDF text with OCR fallback.
Uses pdfplumber for the PDF text layer; pytesseract (via pdf2image for PDFs,
Pillow for images) for OCR.

Table OCR failures are fatal for a run. PDF failures degrade to empty text so
the matcher can still try (and simply fail to match).
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import pdfplumber
import pytesseract
from pdf2image import convert_from_path
from PIL import Image

from .config import Settings, get_settings
from .errors import TableExtractionError
from .log_sink import LogSink, null_sink
from .models import Variant


def _configure_tesseract(settings: Settings) -> None:
    if settings.tesseract_cmd:
        pytesseract.pytesseract.tesseract_cmd = settings.tesseract_cmd


def extract_table_text(
    image_path: str | Path,
    settings: Optional[Settings] = None,
    log: LogSink = null_sink,
) -> str:
    """OCR the summary table image. Raises TableExtractionError on any failure."""
    settings = settings or get_settings()
    path = Path(image_path)
    log("Running OCR on the table image...", "info")
    try:
        _configure_tesseract(settings)
        with Image.open(path) as img:
            text = pytesseract.image_to_string(img, lang=settings.ocr_language)
    except Exception as e:
        log(f"Table OCR error: {e}", "error")
        raise TableExtractionError(path.name, str(e)) from e

    log("OCR finished.", "success")
    return text


def _extract_with_pdfplumber(path: Path) -> str:
    """Page text joined in page order."""
    with pdfplumber.open(path) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages)


def _extract_with_ocr(path: Path, settings: Settings, log: LogSink) -> str:
    """Fallback for image-only PDFs: rasterise then OCR every page."""
    try:
        _configure_tesseract(settings)
        images = convert_from_path(path, dpi=settings.ocr_dpi)
        texts = [pytesseract.image_to_string(img, lang=settings.ocr_language) for img in images]
    except Exception as e:
        log(f"PDF OCR error: {e}", "error")
        return ""
    return "\n\n".join(t.strip() for t in texts if t and t.strip())


def extract_pdf_text(
    pdf_path: str | Path,
    variant: Variant | str,
    settings: Optional[Settings] = None,
    log: LogSink = null_sink,
) -> str:
    """
    Extract text from a PDF. Magalu PDFs are often scans, so when the text
    layer is shorter than ``settings.min_pdf_text_chars`` they are OCRed.
    Returns "" when the file cannot be read.
    """
    settings = settings or get_settings()
    path = Path(pdf_path)
    try:
        text = _extract_with_pdfplumber(path)
    except Exception as e:
        log(f"Error reading PDF {path.name}: {e}", "error")
        return ""

    if Variant(variant) is Variant.MAGALU and len(text.strip()) < settings.min_pdf_text_chars:
        log(
            f"[Magalu] PDF looks like an image ({len(text.strip())} chars of text). Using OCR...",
            "info",
        )
        ocr_text = _extract_with_ocr(path, settings, log)
        if ocr_text:
            log(f"[Magalu] OCR finished. {len(ocr_text)} characters extracted.", "success")
            return ocr_text
        log("[Magalu] OCR returned no text. Using the original text.", "error")

    return text
