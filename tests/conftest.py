from decimal import Decimal

import pytest

from invoice_renamer.log_sink import CollectingSink
from invoice_renamer.models import Record


@pytest.fixture
def sink():
    return CollectingSink()


@pytest.fixture
def shopee_records():
    return [
        Record(
            identifier="1234567",
            amount=Decimal("150.00"),
            amount_display="150,00",
            description="Serviço - de Limpeza",
        ),
        Record(
            identifier="7654321",
            amount=Decimal("2345.67"),
            amount_display="2.345,67",
            description="Comissão - Marketplace",
        ),
    ]


@pytest.fixture
def magalu_records():
    return [
        Record(amount=Decimal("350.75"), amount_display="350,75", description="Frete Magalu Entregas"),
        Record(amount=Decimal("120.10"), amount_display="120,10", description="Comissão"),
    ]
