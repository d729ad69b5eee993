"""
Read the invoice number and document type straight from a PDF's text.
"""
from __future__ import annotations

import re

from .log_sink import LogSink, null_sink
from .models import DocumentType, InvoiceInfo

DEBIT_NOTE_MARKERS = ("NOTA DE DÉBITO", "NOTA DE DEBITO")

# Label-anchored patterns, most specific first. The last one is a loose
# fallback: "Nota" followed by 4+ digits anywhere.
INVOICE_NUMBER_PATTERNS: list[re.Pattern] = [
    re.compile(r"Número da Nota[\s:]*([0-9]+)", re.I),
    re.compile(r"Número Nota Fiscal[\s:]*([0-9]+)", re.I),
    re.compile(r"Nº da Nota[\s:]*([0-9]+)", re.I),
    re.compile(r"N[ºo]\.?\s*da Nota[\s:]*([0-9]+)", re.I),
    re.compile(r"Not[ae][\s:]*([0-9]{4,})", re.I),
]


def detect_document_type(pdf_text: str) -> DocumentType:
    upper = (pdf_text or "").upper()
    if any(marker in upper for marker in DEBIT_NOTE_MARKERS):
        return DocumentType.DEBIT_NOTE
    return DocumentType.INVOICE


def extract_invoice_info(pdf_text: str, log: LogSink = null_sink) -> InvoiceInfo:
    """Return the first labelled invoice number found, plus the document type."""
    document_type = detect_document_type(pdf_text)

    for pattern in INVOICE_NUMBER_PATTERNS:
        m = pattern.search(pdf_text or "")
        if m and m.group(1):
            log(f"Invoice number found: {m.group(1)} (type: {document_type.value})", "info")
            return InvoiceInfo(identifier=m.group(1), document_type=document_type)

    log("Invoice number not found in PDF", "error")
    return InvoiceInfo(identifier=None, document_type=document_type)
