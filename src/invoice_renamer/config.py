"""
Settings for the OCR/PDF adapters and the CLI, read from the environment.
"""
from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

KNOWN_UNITS = ["Ninja PR", "Ninja SC", "Ninja SP"]


class Settings(BaseModel):
    """Application settings loaded from environment variables"""

    # OCR
    ocr_language: str = os.getenv("OCR_LANGUAGE", "por")
    ocr_dpi: int = int(os.getenv("OCR_DPI", "200"))
    tesseract_cmd: Optional[str] = os.getenv("TESSERACT_CMD") or None

    # Image-only PDFs (Magalu) fall back to OCR below this many characters
    min_pdf_text_chars: int = int(os.getenv("MIN_PDF_TEXT_CHARS", "50"))

    # Naming
    default_unit: str = os.getenv("DEFAULT_UNIT", KNOWN_UNITS[0])
    known_units: List[str] = KNOWN_UNITS

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


@lru_cache()
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
