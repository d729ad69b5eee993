"""
Invoice PDF renaming: table image OCR -> records -> match each PDF -> new filename.
"""

from .pipeline import process_documents, load_records, rename_pdf, export_renamed
from .parsers import parse_table_text
from .matcher import find_matching_record
from .invoice_info import extract_invoice_info
from .models import Record, ProcessingResult, Variant, DocumentType

__all__ = [
    "process_documents",
    "load_records",
    "rename_pdf",
    "export_renamed",
    "parse_table_text",
    "find_matching_record",
    "extract_invoice_info",
    "Record",
    "ProcessingResult",
    "Variant",
    "DocumentType",
]
