"""Text normalisation shared by the field extractors."""
from __future__ import annotations

import re
from typing import Optional

_WHITESPACE = re.compile(r"\s+")


def normalise_text(text: Optional[str]) -> str:
    """Collapse all whitespace, newlines included, into single spaces."""

    return _WHITESPACE.sub(" ", text or "").strip()


__all__ = ["normalise_text"]
