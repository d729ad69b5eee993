from invoice_renamer.invoice_info import detect_document_type, extract_invoice_info
from invoice_renamer.models import DocumentType


def test_debit_note_with_accent():
    info = extract_invoice_info("NOTA DE DÉBITO\nNúmero da Nota: 98765")
    assert info.identifier == "98765"
    assert info.document_type is DocumentType.DEBIT_NOTE


def test_debit_note_without_accent_any_case():
    assert detect_document_type("nota de debito nº 1") is DocumentType.DEBIT_NOTE


def test_defaults_to_invoice():
    assert detect_document_type("Nota Fiscal de Serviço Eletrônica") is DocumentType.INVOICE


def test_label_patterns_in_priority_order():
    info = extract_invoice_info("Nota 55555 emitida. Número da Nota: 777")
    assert info.identifier == "777"


def test_numero_nota_fiscal_label():
    assert extract_invoice_info("Número Nota Fiscal 4455").identifier == "4455"


def test_abbreviated_label():
    assert extract_invoice_info("No. da Nota: 3030").identifier == "3030"


def test_fallback_needs_four_digits():
    assert extract_invoice_info("Nota 123456").identifier == "123456"
    assert extract_invoice_info("Nota 123").identifier is None


def test_not_found_still_reports_type(sink):
    info = extract_invoice_info("Recibo sem número", sink)
    assert info.identifier is None
    assert info.document_type is DocumentType.INVOICE
    assert sink.errors()
