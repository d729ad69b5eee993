"""
Brazilian-format money helpers: comma decimal, period grouping.

Parsing is shared by every table layout; the rendering helpers produce the
textual forms a PDF may use for the same value so the matcher can look for
them verbatim.
"""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

CENTS = Decimal("0.01")

# "R$ 1.234,56" / "1234,56" as a whole line
AMOUNT_LINE = re.compile(r"^R?\$?\s*([0-9.]+,[0-9]{2})$")
# Same shape anywhere inside a line
AMOUNT_ANYWHERE = re.compile(r"R?\$?\s*([0-9.]+,[0-9]{2})", re.I)

CURRENCY_PREFIX = "R$"


def parse_amount(text: str | None) -> Optional[Decimal]:
    """Parse '1.234,56' -> Decimal('1234.56'). Returns None when unparseable."""
    if not text:
        return None
    s = text.strip().replace(".", "").replace(",", ".")
    try:
        return Decimal(s).quantize(CENTS)
    except InvalidOperation:
        return None


def format_fixed(amount: Decimal, sep: str = ",") -> str:
    """Two decimals, no grouping: 1234.5 -> '1234,50'."""
    return f"{amount:.2f}".replace(".", sep)


def format_grouped(amount: Decimal) -> str:
    """pt-BR locale form: 1234.5 -> '1.234,50'."""
    us = f"{amount:,.2f}"
    return us.replace(",", "\0").replace(".", ",").replace("\0", ".")


def format_plain(amount: Decimal, sep: str = ",") -> str:
    """Shortest decimal form: 150.00 -> '150', 150.50 -> '150,5'."""
    text = format(amount.normalize(), "f")
    return text.replace(".", sep)


def text_renderings(amount: Decimal, display: str) -> list[str]:
    """Forms searched for in space-normalized PDF text (Shopee / Mercado Livre)."""
    return [
        display,
        format_fixed(amount, ","),
        format_grouped(amount),
        format_plain(amount, ","),
        format_fixed(amount, "."),
    ]


def compact_renderings(amount: Decimal, display: str) -> list[str]:
    """
    Forms searched for in whitespace-free PDF text (Magalu).

    Currency prefix on/off, comma/period separator and two-digit vs.
    integer decimals ('05' -> '5'), then the display string.
    """
    integer, cents = f"{amount:.2f}".split(".")
    short_cents = str(int(cents))
    formats: list[str] = []
    for prefix in (CURRENCY_PREFIX, ""):
        for sep in (",", "."):
            for dec in (cents, short_cents):
                formats.append(f"{prefix}{integer}{sep}{dec}")
    formats.append(display)
    return formats
