"""Structured field extraction from recognised receipt text.

``extract`` is the single entry point: it takes whatever text the OCR engine
produced and returns an :class:`ExtractionResult` with a best guess for the
amount, date, merchant and category.  Nothing here performs I/O and nothing
raises for odd input; missing fields are simply left as ``None`` and lower the
confidence score, since every result goes through a human review step before
it becomes an expense.
"""
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .field_extractors import extract_amount, extract_date, extract_merchant, infer_category, normalise_text

LOGGER = logging.getLogger(__name__)

FIELD_WEIGHTS = {
    "amount": 40,
    "date": 30,
    "merchant": 20,
    "category": 10,
}

DEFAULT_DESCRIPTION = "Gasto escaneado"


@dataclass(frozen=True)
class ExtractionResult:
    amount: Optional[Decimal]
    date: Optional[dt.date]
    merchant: Optional[str]
    category: Optional[str]
    confidence: int
    raw_text: str

    @property
    def description(self) -> str:
        """Label pre-filled in the expense form."""

        return self.merchant or DEFAULT_DESCRIPTION

    def missing_fields(self) -> List[str]:
        return [name for name in FIELD_WEIGHTS if getattr(self, name) is None]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "amount": float(self.amount) if self.amount is not None else None,
            "date": self.date.isoformat() if self.date else None,
            "merchant": self.merchant,
            "category": self.category,
            "confidence": self.confidence,
            "raw_text": self.raw_text,
            "description": self.description,
            "missing_fields": self.missing_fields(),
        }


def score_confidence(
    *,
    amount: Optional[Decimal] = None,
    date: Optional[dt.date] = None,
    merchant: Optional[str] = None,
    category: Optional[str] = None,
) -> int:
    present = {"amount": amount, "date": date, "merchant": merchant, "category": category}
    return sum(weight for name, weight in FIELD_WEIGHTS.items() if present[name] is not None)


def extract(raw_text: Optional[str]) -> ExtractionResult:
    """Infer receipt fields from raw OCR text."""

    text = normalise_text(raw_text)
    amount = extract_amount(text)
    date_value = extract_date(text)
    merchant = extract_merchant(text)
    category = infer_category(text)
    confidence = score_confidence(amount=amount, date=date_value, merchant=merchant, category=category)

    LOGGER.debug(
        "extracted amount=%s date=%s merchant=%s category=%s confidence=%s",
        amount,
        date_value,
        merchant,
        category,
        confidence,
    )
    return ExtractionResult(
        amount=amount,
        date=date_value,
        merchant=merchant,
        category=category,
        confidence=confidence,
        raw_text=text,
    )


__all__ = ["DEFAULT_DESCRIPTION", "ExtractionResult", "FIELD_WEIGHTS", "extract", "score_confidence"]
