"""Date extraction helpers."""
from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

MIN_YEAR = 2020
MAX_YEAR = 2030

_MONTHS = {
    "ene": 1,
    "feb": 2,
    "mar": 3,
    "abr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "ago": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dic": 12,
}

_MONTH_NAMES = (
    "enero|febrero|marzo|abril|mayo|junio|julio|agosto|septiembre|octubre|noviembre|diciembre"
)
_MONTH_ABBREVIATIONS = "|".join(_MONTHS)


@dataclass(frozen=True)
class DateCandidate:
    pattern: str
    raw_text: str
    value: dt.date


def _normalise(year: int, month: int, day: int) -> Optional[dt.date]:
    if not MIN_YEAR <= year <= MAX_YEAR:
        return None
    # date() refuses impossible days instead of rolling them into the next month
    try:
        return dt.date(year, month, day)
    except ValueError:
        return None


def _expand_year(value: int) -> int:
    return value if value >= 100 else 2000 + value


def _numeric(match: re.Match[str]) -> Optional[dt.date]:
    first, second, third = (int(group) for group in match.groups())
    if first > 2000:
        return _normalise(first, second, third)
    return _normalise(_expand_year(third), second, first)


def _textual(match: re.Match[str]) -> Optional[dt.date]:
    day, month_name, year = match.groups()
    month = _MONTHS.get(month_name.lower()[:3])
    if month is None:
        return None
    return _normalise(_expand_year(int(year)), month, int(day))


DATE_PATTERNS: List[Tuple[str, re.Pattern[str], Callable[[re.Match[str]], Optional[dt.date]]]] = [
    (
        "day_first_long_year",
        re.compile(r"(?<!\d)(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{4})(?!\d)"),
        _numeric,
    ),
    (
        "day_first_short_year",
        re.compile(r"(?<!\d)(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{2})(?!\d)"),
        _numeric,
    ),
    (
        "year_first",
        re.compile(r"(?<!\d)(\d{4})[/\-.](\d{1,2})[/\-.](\d{1,2})(?!\d)"),
        _numeric,
    ),
    (
        "month_name",
        re.compile(rf"(?<!\d)(\d{{1,2}})\s+de\s+({_MONTH_NAMES})\s+de\s+(\d{{4}})(?!\d)", re.IGNORECASE),
        _textual,
    ),
    (
        "month_abbreviation",
        re.compile(
            rf"(?<!\d)(\d{{1,2}})[/\-\s]+({_MONTH_ABBREVIATIONS})[a-záéíóú]*\.?[/\-\s]+(\d{{2,4}})(?!\d)",
            re.IGNORECASE,
        ),
        _textual,
    ),
    (
        "loose_numeric",
        re.compile(r"(?<!\d)(\d{1,2})[\s\-/](\d{1,2})[\s\-/](\d{2,4})(?!\d)"),
        _numeric,
    ),
]


def find_date(text: str) -> Optional[DateCandidate]:
    """Return the first valid date, trying patterns in priority order."""

    for name, pattern, interpret in DATE_PATTERNS:
        for match in pattern.finditer(text):
            value = interpret(match)
            if value is not None:
                return DateCandidate(pattern=name, raw_text=match.group(0), value=value)
    return None


def extract_date(text: str) -> Optional[dt.date]:
    candidate = find_date(text)
    return candidate.value if candidate else None


__all__ = ["DATE_PATTERNS", "DateCandidate", "extract_date", "find_date"]
