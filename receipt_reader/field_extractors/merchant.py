"""Merchant extraction heuristics."""
from __future__ import annotations

import re
from typing import List, Optional, Tuple

_UPPER = "A-ZÁÉÍÓÚÜÑ"
_LETTER = "A-Za-zÁÉÍÓÚÜÑáéíóúüñ"

MERCHANT_KEYWORDS = ["SUPERMERCADO", "FARMACIA", "RESTAURANTE", "CAFE", "BAR", "TIENDA", "SHOP", "STORE"]

MIN_MERCHANT_LENGTH = 3

# Each pattern captures the merchant in group 1.
MERCHANT_PATTERNS: List[Tuple[str, re.Pattern[str]]] = [
    # Receipts print the shop name in capitals at the very top.
    ("uppercase_header", re.compile(rf"^([{_UPPER}][{_UPPER} ]{{2,29}})(?![{_LETTER}])")),
    (
        "merchant_keyword",
        re.compile(rf"\b({'|'.join(MERCHANT_KEYWORDS)})\s+[{_UPPER}]+", re.IGNORECASE),
    ),
]

# Initials cut off by punctuation, e.g. the "S" of "S.A."
_TRAILING_INITIALS = re.compile(rf"(?:\s+[{_UPPER}])+\s*$")


def _capitalise(value: str) -> str:
    lowered = value.strip().lower()
    return lowered[:1].upper() + lowered[1:]


def extract_merchant(text: str) -> Optional[str]:
    for _, pattern in MERCHANT_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        name = _TRAILING_INITIALS.sub("", match.group(1)).strip()
        if len(name) >= MIN_MERCHANT_LENGTH:
            return _capitalise(name)
    return None


__all__ = ["MERCHANT_KEYWORDS", "MERCHANT_PATTERNS", "extract_merchant"]
