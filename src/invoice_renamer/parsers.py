"""
Summary-table parsers. Turn OCR text of the marketplace summary image into
ordered records (identifier, amount, description).

Each marketplace lays its table out differently, so each gets its own line
classifier; all of them run over the same cursor-based line scanner. Numbers
and amounts are paired by position, not by content: if OCR drops or reorders
a line the pairing shifts silently.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Iterator, Optional

from .amounts import AMOUNT_ANYWHERE, AMOUNT_LINE, parse_amount
from .log_sink import LogSink, null_sink
from .models import Record, Variant

PLACEHOLDER_DESCRIPTION = "Serviço"

# --- Shopee ---
SHOPEE_HEADER = re.compile(
    r"^(NF-e|Número|Período de Serviço|Data de Emissão|Valor total)$", re.I
)
SHOPEE_NUMBER = re.compile(r"^[0-9]{7,9}$")
SHOPEE_TRAILING_NUMBER = re.compile(r"\s+[0-9]{7,9}\s*$")
# "12 de Janeiro - 15 de Fevereiro de 2024"
DATE_RANGE = re.compile(r"^[0-9]+\s+de\s+\w+\s*-?\s*[0-9]*\s+de\s+\w+\s+de\s+[0-9]{4}$", re.I)

# --- Mercado Livre ---
MELI_HEADER = re.compile(
    r"^(Conceito de faturamento|Município|Número da NF-e|Total da fatura)$", re.I
)
MELI_NUMBER = re.compile(r"^0+[0-9]+$")
MELI_CITIES = re.compile(
    r"^(Curitiba|Osasco|São Paulo|Rio de Janeiro|Belo Horizonte"
    r"|Governador Celso Ramos|Lauro de Freitas)$",
    re.I,
)

# --- Magalu ---
MAGALU_HEADER = re.compile(r"^(Serviço prestado|Valor)", re.I)
MAGALU_GLYPHS = re.compile(r"[●•◆○J®©]")

DIGITS_ONLY = re.compile(r"^[0-9]+$")


@dataclass
class _Token:
    """A classified table line."""
    kind: str  # header | identifier | amount | description
    text: str
    amount: Optional[Decimal] = None
    joined: bool = False


class _LineScanner:
    """Cursor over trimmed, non-empty lines. Classifiers may consume two lines."""

    def __init__(self, text: str):
        self.lines = [line.strip() for line in (text or "").split("\n") if line.strip()]
        self.pos = 0

    def peek(self) -> Optional[str]:
        if self.pos < len(self.lines):
            return self.lines[self.pos]
        return None

    def take(self) -> str:
        line = self.lines[self.pos]
        self.pos += 1
        return line

    def tokens(self, classify: Callable[["_LineScanner"], Optional[_Token]]) -> Iterator[_Token]:
        while self.pos < len(self.lines):
            start = self.pos
            token = classify(self)
            if self.pos == start:
                self.pos += 1
            if token is not None:
                yield token


def _amount_token(display: str) -> Optional[_Token]:
    value = parse_amount(display)
    if value is None:
        return None
    return _Token("amount", display, amount=value)


def _classify_shopee(scanner: _LineScanner) -> Optional[_Token]:
    line = scanner.take()
    if SHOPEE_HEADER.match(line):
        return _Token("header", line)
    if SHOPEE_NUMBER.match(line):
        return _Token("identifier", line)
    m = AMOUNT_LINE.match(line)
    if m:
        return _amount_token(m.group(1))
    if "-" not in line:
        return None

    full = line
    if line.endswith("-"):
        nxt = scanner.peek()
        if nxt is not None and not (
            SHOPEE_NUMBER.match(nxt) or AMOUNT_LINE.match(nxt) or SHOPEE_HEADER.match(nxt)
        ):
            full = f"{line} {scanner.take()}"

    description = SHOPEE_TRAILING_NUMBER.sub("", full.strip()).strip()
    if len(description) <= 5 or DATE_RANGE.match(description):
        return None
    return _Token("description", description, joined=full != line)


def _classify_mercado_livre(scanner: _LineScanner) -> Optional[_Token]:
    line = scanner.take()
    if MELI_HEADER.match(line):
        return _Token("header", line)
    if MELI_NUMBER.match(line):
        return _Token("identifier", line.lstrip("0") or "0")
    m = AMOUNT_LINE.match(line)
    if m:
        return _amount_token(m.group(1))
    if DIGITS_ONLY.match(line) or MELI_CITIES.match(line) or len(line) <= 3:
        return None
    return _Token("description", line)


def _classify_magalu(scanner: _LineScanner) -> Optional[_Token]:
    line = scanner.take()
    if MAGALU_HEADER.match(line):
        return _Token("header", line)
    m = AMOUNT_ANYWHERE.search(line)
    if m:
        token = _amount_token(m.group(1))
        if token is not None and token.amount > 0:
            return token
        return None
    if DIGITS_ONLY.match(line) or len(line) <= 2:
        return None
    cleaned = MAGALU_GLYPHS.sub("", line).strip()
    if len(cleaned) <= 2:
        return None
    return _Token("description", cleaned)


_CLASSIFIERS = {
    Variant.SHOPEE: _classify_shopee,
    Variant.MERCADO_LIVRE: _classify_mercado_livre,
    Variant.MAGALU: _classify_magalu,
}


def _collect(
    text: str, variant: Variant, log: LogSink
) -> tuple[list[str], list[_Token], list[str]]:
    identifiers: list[str] = []
    amounts: list[_Token] = []
    descriptions: list[str] = []

    for token in _LineScanner(text).tokens(_CLASSIFIERS[variant]):
        if token.kind == "identifier":
            identifiers.append(token.text)
            log(f"Number: {token.text}", "info")
        elif token.kind == "amount":
            amounts.append(token)
            log(f"Amount: R$ {token.text}", "info")
        elif token.kind == "description":
            if token.joined:
                log(f"Joined line: {token.text}", "info")
            descriptions.append(token.text)
            log(f"Description: {token.text}", "info")

    return identifiers, amounts, descriptions


def _description_at(descriptions: list[str], i: int) -> str:
    return descriptions[i] if i < len(descriptions) else PLACEHOLDER_DESCRIPTION


def _pair_by_position(
    identifiers: list[str], amounts: list[_Token], descriptions: list[str], log: LogSink
) -> list[Record]:
    if not identifiers or not amounts:
        log("Could not extract numbers or amounts from the table", "error")
        return []

    records: list[Record] = []
    for i in range(min(len(identifiers), len(amounts))):
        record = Record(
            identifier=identifiers[i],
            amount=amounts[i].amount,
            amount_display=amounts[i].text,
            description=_description_at(descriptions, i),
        )
        records.append(record)
        log(
            f"Row {i + 1}: NF {record.identifier} - {record.description} - R$ {record.amount_display}",
            "success",
        )
    return records


def _one_per_amount(amounts: list[_Token], descriptions: list[str], log: LogSink) -> list[Record]:
    if not amounts:
        log("Could not extract amounts from the table", "error")
        return []

    records: list[Record] = []
    for i, amount in enumerate(amounts):
        record = Record(
            identifier=None,
            amount=amount.amount,
            amount_display=amount.text,
            description=_description_at(descriptions, i),
        )
        records.append(record)
        log(
            f"Row {i + 1}: {record.description} - R$ {record.amount_display} (NF read from PDF)",
            "success",
        )
    return records


def parse_table_text(text: str, variant: Variant | str, log: LogSink = null_sink) -> list[Record]:
    """
    Parse summary-table OCR text into records for the given marketplace.
    Never raises; an empty list means the table could not be used.
    """
    try:
        variant = Variant(variant)
    except ValueError:
        log(f"Unknown marketplace: {variant}", "error")
        return []

    log(f"Parsing {variant.value} table...", "info")
    identifiers, amounts, descriptions = _collect(text, variant, log)

    if variant is Variant.MAGALU:
        return _one_per_amount(amounts, descriptions, log)
    return _pair_by_position(identifiers, amounts, descriptions, log)
