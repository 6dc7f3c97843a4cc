from __future__ import annotations

import datetime as dt
from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from receipt_reader.extraction import FIELD_WEIGHTS, ExtractionResult, extract, score_confidence

SAMPLES = [
    "",
    "   \n\t ",
    "@@## ~~ ¬¬",
    "MERCADONA S.A. Fecha: 15/03/2024 Subtotal 10,00€ IVA 2,50€ Total 12,50€",
    "Total 12,50€",
    "15/03/2024",
    "FARMACIA",
    "Gracias por su compra en Carrefour",
    "TAXI LICENCIA 123 Importe 18,40 EUR 02-05-2023",
    "31/04/2024 31/04/2024",
]


def test_end_to_end_receipt() -> None:
    result = extract("MERCADONA S.A. Fecha: 15/03/2024 Subtotal 10,00€ IVA 2,50€ Total 12,50€")

    assert result.amount == Decimal("12.50")
    assert result.date == dt.date(2024, 3, 15)
    assert result.merchant == "Mercadona"
    assert result.category == "Alimentación"
    assert result.confidence == 100
    assert result.description == "Mercadona"
    assert result.missing_fields() == []


def test_multiline_input_is_normalised(receipt_text: str) -> None:
    result = extract(receipt_text)

    assert result.raw_text == "MERCADONA S.A. Fecha: 15/03/2024 Subtotal 10,00€ IVA 2,50€ Total 12,50€"
    assert result.confidence == 100


@pytest.mark.parametrize("text", ["", None])
def test_empty_input_yields_empty_result(text) -> None:
    result = extract(text)

    assert result.amount is None
    assert result.date is None
    assert result.merchant is None
    assert result.category is None
    assert result.confidence == 0
    assert result.raw_text == ""
    assert result.description == "Gasto escaneado"
    assert result.missing_fields() == ["amount", "date", "merchant", "category"]


@pytest.mark.parametrize("text", SAMPLES)
def test_confidence_matches_present_fields(text: str) -> None:
    result = extract(text)

    expected = sum(weight for name, weight in FIELD_WEIGHTS.items() if getattr(result, name) is not None)
    assert result.confidence == expected
    assert 0 <= result.confidence <= 100


@pytest.mark.parametrize("text", SAMPLES)
def test_extract_is_idempotent(text: str) -> None:
    assert extract(text) == extract(text)


def test_dot_leader_layout() -> None:
    result = extract("CARREFOUR\nSubtotal......10,00 €\nTOTAL.........12,50 €")

    assert result.amount == Decimal("12.50")
    assert result.merchant == "Carrefour"
    assert result.category == "Alimentación"
    assert result.confidence == 70


def test_header_with_company_suffix() -> None:
    result = extract("MERCADONA, S.A. A-46103834\nFecha: 15/03/2024\nTOTAL:12,50€")

    assert result.amount == Decimal("12.50")
    assert result.date == dt.date(2024, 3, 15)
    assert result.merchant == "Mercadona"
    assert result.confidence == 100


def test_partial_receipt() -> None:
    result = extract("ticket 0045 importe 18,40 eur 02-05-2023")

    assert result.amount == Decimal("18.40")
    assert result.date == dt.date(2023, 5, 2)
    assert result.merchant is None
    assert result.category is None
    assert result.confidence == 70
    assert result.missing_fields() == ["merchant", "category"]


def test_score_confidence_weights() -> None:
    assert score_confidence() == 0
    assert score_confidence(amount=Decimal("0.01")) == 40
    assert score_confidence(date=dt.date(2024, 1, 1), category="Ropa") == 40
    assert (
        score_confidence(amount=Decimal("1"), date=dt.date(2024, 1, 1), merchant="Zara", category="Ropa")
        == 100
    )


def test_result_is_immutable() -> None:
    result = extract("Total 12,50€")

    with pytest.raises(FrozenInstanceError):
        result.amount = Decimal("1")  # type: ignore[misc]


def test_to_dict_is_json_friendly() -> None:
    payload = extract("MERCADONA Fecha: 15/03/2024 Total 12,50€").to_dict()

    assert payload["amount"] == 12.5
    assert payload["date"] == "2024-03-15"
    assert payload["merchant"] == "Mercadona"
    assert payload["description"] == "Mercadona"


def test_zero_amount_is_not_confused_with_missing() -> None:
    result = ExtractionResult(
        amount=Decimal("0"), date=None, merchant=None, category=None, confidence=40, raw_text=""
    )

    assert result.missing_fields() == ["date", "merchant", "category"]
    assert result.to_dict()["amount"] == 0.0
