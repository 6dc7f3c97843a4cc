"""Field extraction helpers for structured receipt data."""
from .amount import extract_amount
from .category import infer_category
from .date import extract_date
from .merchant import extract_merchant
from .text import normalise_text

__all__ = ["extract_amount", "extract_date", "extract_merchant", "infer_category", "normalise_text"]
