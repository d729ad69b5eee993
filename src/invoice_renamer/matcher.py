"""
Pick the table record a PDF belongs to.

Magalu tables carry no invoice numbers, so Magalu PDFs are matched on amount
alone and the number is read from the PDF afterwards. The other marketplaces
run a cascade, first hit wins:

1. a 7-9 digit number in the filename equal to a record identifier
2. identifier and amount both present in the text
3. amount present
4. identifier present
"""
from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from .amounts import compact_renderings, text_renderings
from .invoice_info import extract_invoice_info
from .log_sink import LogSink, null_sink
from .models import Record, Variant

FILENAME_NUMBER = re.compile(r"[0-9]{7,9}")
UNKNOWN_IDENTIFIER = "XXXX"

_WHITESPACE = re.compile(r"\s+")


def _strip_spaces(text: str) -> str:
    return _WHITESPACE.sub("", text)


def _find_amount(record: Record, haystack: str) -> Optional[str]:
    """Return the first rendering of the record's amount found in haystack."""
    for rendering in text_renderings(record.amount, record.amount_display):
        if _strip_spaces(rendering) in haystack:
            return rendering
    return None


def _match_magalu(pdf_text: str, records: Sequence[Record], log: LogSink) -> Optional[Record]:
    log("[Magalu] Looking for table amounts inside the PDF...", "info")
    compact_text = _strip_spaces(pdf_text).upper()

    for record in records:
        found = next(
            (
                rendering
                for rendering in compact_renderings(record.amount, record.amount_display)
                if _strip_spaces(rendering).upper() in compact_text
            ),
            None,
        )
        if found is None:
            continue

        info = extract_invoice_info(pdf_text, log)
        matched = record.model_copy(
            update={
                "identifier": info.identifier or UNKNOWN_IDENTIFIER,
                "document_type": info.document_type,
            }
        )
        log(
            f"Magalu match by amount: R$ {found} - {matched.document_type.value} {matched.identifier}",
            "success",
        )
        return matched

    log("[Magalu] No table amount was found inside the PDF", "error")
    return None


def _match_by_filename(file_name: str, records: Sequence[Record], log: LogSink) -> Optional[Record]:
    for number in FILENAME_NUMBER.findall(file_name or ""):
        for record in records:
            if record.identifier == number:
                log(f"Match by filename: {number}", "success")
                return record
    return None


def _with_identifier(records: Iterable[Record], text: str) -> Iterable[Record]:
    return (r for r in records if r.identifier and r.identifier in text)


def _match_cascade(
    pdf_text: str, records: Sequence[Record], file_name: str, log: LogSink
) -> Optional[Record]:
    record = _match_by_filename(file_name, records, log)
    if record is not None:
        return record

    text = _WHITESPACE.sub(" ", pdf_text or "").upper()

    for record in _with_identifier(records, text):
        found = _find_amount(record, text)
        if found is not None:
            log(f"Match by number + amount: NF {record.identifier} + R$ {found}", "success")
            return record

    for record in records:
        found = _find_amount(record, text)
        if found is not None:
            log(f"Match by amount only: R$ {found} (NF: {record.identifier})", "info")
            return record

    for record in _with_identifier(records, text):
        log(f"Only the number was found (no amount): NF {record.identifier}", "info")
        return record

    return None


def find_matching_record(
    pdf_text: str,
    records: Sequence[Record],
    file_name: str,
    variant: Variant | str,
    log: LogSink = null_sink,
) -> Optional[Record]:
    """
    Return the record matching this PDF, or None.

    Records are never mutated. For Magalu the result is a copy carrying the
    identifier and document type read from the PDF.
    """
    if Variant(variant) is Variant.MAGALU:
        return _match_magalu(pdf_text or "", records, log)
    return _match_cascade(pdf_text or "", records, file_name, log)
