"""Rule-based amount extraction utilities."""
from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Tuple

# Either a number with thousands groups (1.234,56 / 1,234.56) or a plain one.
_NUMBER = r"(?<!\d)(?<!\d[.,])(\d{1,3}(?:[.,]\d{3})+[.,]\d{2}|\d+[.,]\d{2})(?!\d)"

AMOUNT_PATTERNS: List[Tuple[str, re.Pattern[str]]] = [
    ("total_label", re.compile(r"total[.:\s]*€?\s*" + _NUMBER, re.IGNORECASE)),
    ("importe_label", re.compile(r"importe[.:\s]*€?\s*" + _NUMBER, re.IGNORECASE)),
    ("euro_prefix", re.compile(r"€\s*" + _NUMBER)),
    ("euro_suffix", re.compile(_NUMBER + r"\s*€")),
    ("euro_word", re.compile(_NUMBER + r"(?=\s*(?:€|(?:eur|euros?)\b))", re.IGNORECASE)),
]


@dataclass(frozen=True)
class AmountCandidate:
    pattern: str
    raw_text: str
    value: Decimal


def parse_amount(raw: str) -> Optional[Decimal]:
    """Parse ``raw`` treating its last ``.`` or ``,`` as the decimal point."""

    cut = max(raw.rfind("."), raw.rfind(","))
    if cut < 0:
        whole, cents = raw, ""
    else:
        whole, cents = raw[:cut], raw[cut + 1 :]
    whole = whole.replace(".", "").replace(",", "")
    try:
        return Decimal(f"{whole or '0'}.{cents or '0'}")
    except InvalidOperation:
        return None


def find_amount_candidates(text: str) -> List[AmountCandidate]:
    """Return every amount matched by any pattern, in pattern order."""

    candidates: List[AmountCandidate] = []
    for name, pattern in AMOUNT_PATTERNS:
        for match in pattern.finditer(text):
            raw = match.group(1)
            value = parse_amount(raw)
            if value is None:
                continue
            candidates.append(AmountCandidate(pattern=name, raw_text=raw, value=value))
    return candidates


def extract_amount(text: str) -> Optional[Decimal]:
    """Return the largest positive amount on the receipt.

    The grand total is normally the biggest figure printed, so subtotals,
    tax lines and individual items lose against it.
    """

    best: Optional[Decimal] = None
    for candidate in find_amount_candidates(text):
        if candidate.value <= 0:
            continue
        if best is None or candidate.value > best:
            best = candidate.value
    return best


__all__ = [
    "AMOUNT_PATTERNS",
    "AmountCandidate",
    "extract_amount",
    "find_amount_candidates",
    "parse_amount",
]
