"""
Pydantic models for parsed table records and per-file rename results.
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Variant(str, Enum):
    """Marketplace layout family. The value doubles as the filename label."""
    SHOPEE = "Shopee"
    MERCADO_LIVRE = "Mercado Livre"
    MAGALU = "Magalu"


class DocumentType(str, Enum):
    INVOICE = "NFS"
    DEBIT_NOTE = "ND"


class Record(BaseModel):
    """One row of the reference table."""
    identifier: Optional[str] = Field(
        default=None,
        description="Invoice number (digits). Unset for Magalu until a PDF is matched",
    )
    amount: Decimal = Field(description="Row value, 2 decimal places")
    amount_display: str = Field(
        description="Amount exactly as it appeared in the table text, e.g. '1.234,56'"
    )
    description: str
    document_type: Optional[DocumentType] = None


class InvoiceInfo(BaseModel):
    """Identifier and type read from a single PDF."""
    identifier: Optional[str] = None
    document_type: DocumentType = DocumentType.INVOICE


class ProcessingResult(BaseModel):
    """Outcome for a single PDF in a run."""
    model_config = ConfigDict(frozen=True)

    original_name: str
    new_name: str
    matched: bool
    record: Optional[Record] = None
    source_path: Optional[Path] = None


class LogMessage(BaseModel):
    """A single collected log entry."""
    time: datetime = Field(default_factory=datetime.now)
    message: str
    level: str = "info"
