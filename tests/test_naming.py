from decimal import Decimal

from invoice_renamer.models import DocumentType, Record
from invoice_renamer.naming import build_new_filename, safe_filename


def _record(**overrides):
    data = dict(
        identifier="1234567",
        amount=Decimal("150.00"),
        amount_display="150,00",
        description="Serviço - de Limpeza",
    )
    data.update(overrides)
    return Record(**data)


def test_default_prefix_is_invoice():
    name = build_new_filename(_record(), "Shopee", "Ninja PR")
    assert name == "NFS 1234567 - Serviço - de Limpeza - R$150,00 - Shopee - Ninja PR.pdf"


def test_debit_note_prefix_and_two_decimals():
    record = _record(document_type=DocumentType.DEBIT_NOTE, amount=Decimal("1234.5"), identifier="88")
    name = build_new_filename(record, "Magalu", "Ninja SP")
    assert name == "ND 88 - Serviço - de Limpeza - R$1234,50 - Magalu - Ninja SP.pdf"


def test_safe_filename_replaces_separators():
    assert safe_filename("NFS 1 - A/B - R$1,00 - X - Y.pdf") == "NFS 1 - A-B - R$1,00 - X - Y.pdf"
    assert safe_filename('a:b*c?"d<e>f|g\\h.pdf') == "a-b-c--d-e-f-g-h.pdf"
