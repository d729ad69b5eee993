"""
New filename for a matched PDF:

    NFS 1234567 - Serviço de Limpeza - R$150,00 - Shopee - Ninja PR.pdf
"""
from __future__ import annotations

import re

from .amounts import format_fixed
from .models import DocumentType, Record

EXTENSION = ".pdf"

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def build_new_filename(record: Record, marketplace: str, unit: str) -> str:
    prefix = (record.document_type or DocumentType.INVOICE).value
    return (
        f"{prefix} {record.identifier} - {record.description} - "
        f"R${format_fixed(record.amount, ',')} - {marketplace} - {unit}{EXTENSION}"
    )


def safe_filename(name: str) -> str:
    """Replace characters that cannot appear in a file name on disk."""
    cleaned = _UNSAFE_CHARS.sub("-", name).strip()
    return re.sub(r"\s{2,}", " ", cleaned) or "unnamed" + EXTENSION
