from decimal import Decimal

from invoice_renamer.amounts import (
    compact_renderings,
    format_fixed,
    format_grouped,
    format_plain,
    parse_amount,
    text_renderings,
)


def test_grouped_and_ungrouped_parse_equal():
    assert parse_amount("1.234,56") == parse_amount("1234,56") == Decimal("1234.56")


def test_parse_amount_quantizes_to_cents():
    assert parse_amount("7,5") == Decimal("7.50")
    assert str(parse_amount("150,00")) == "150.00"


def test_parse_amount_rejects_garbage():
    assert parse_amount("") is None
    assert parse_amount(None) is None
    assert parse_amount("abc") is None


def test_formats():
    amount = Decimal("1234.50")
    assert format_fixed(amount) == "1234,50"
    assert format_fixed(amount, ".") == "1234.50"
    assert format_grouped(amount) == "1.234,50"
    assert format_grouped(Decimal("1234567.89")) == "1.234.567,89"
    assert format_plain(amount) == "1234,5"
    assert format_plain(Decimal("150.00")) == "150"
    assert format_plain(Decimal("1500.00")) == "1500"


def test_text_renderings_order():
    assert text_renderings(Decimal("2345.67"), "2.345,67") == [
        "2.345,67",
        "2345,67",
        "2.345,67",
        "2345,67",
        "2345.67",
    ]


def test_compact_renderings_cover_prefix_separator_and_short_cents():
    renderings = compact_renderings(Decimal("1234.05"), "1.234,05")
    assert renderings == [
        "R$1234,05",
        "R$1234,5",
        "R$1234.05",
        "R$1234.5",
        "1234,05",
        "1234,5",
        "1234.05",
        "1234.5",
        "1.234,05",
    ]
