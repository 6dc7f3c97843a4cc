"""Batch scanning of several receipts at once."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .extraction import ExtractionResult, extract
from .ocr import ImageFetchError, ImageInput, OCRDecodeError, OCRServiceError, recognize_text

LOGGER = logging.getLogger(__name__)

STATUS_COMPLETED = "completed"
STATUS_REVIEW = "review"
STATUS_ERROR = "error"
STATUSES = (STATUS_COMPLETED, STATUS_REVIEW, STATUS_ERROR)

Recognizer = Callable[..., str]


@dataclass(frozen=True)
class BatchItem:
    name: str
    status: str
    result: Optional[ExtractionResult] = None
    error: Optional[str] = None


def _classify(name: str, result: ExtractionResult, threshold: int) -> BatchItem:
    status = STATUS_REVIEW if result.confidence < threshold else STATUS_COMPLETED
    return BatchItem(name=name, status=status, result=result)


def extract_batch(texts: Iterable[Tuple[str, str]], *, threshold: int) -> List[BatchItem]:
    """Extract fields from already recognised ``(name, text)`` pairs."""

    return [_classify(name, extract(text), threshold) for name, text in texts]


def scan_batch(
    files: Iterable[Tuple[str, ImageInput]],
    *,
    threshold: int,
    recognizer: Recognizer = recognize_text,
    language: Optional[str] = None,
) -> List[BatchItem]:
    """Run OCR and extraction over ``(name, image)`` pairs.

    A file the OCR step cannot read becomes an ``error`` item; the rest of the
    batch is still processed.
    """

    items: List[BatchItem] = []
    for name, payload in files:
        try:
            text = recognizer(payload, language=language)
        except (ImageFetchError, OCRDecodeError) as exc:
            LOGGER.warning("Skipping %s: %s", name, exc)
            items.append(BatchItem(name=name, status=STATUS_ERROR, error=str(exc)))
            continue
        except OCRServiceError as exc:
            LOGGER.error("OCR service error for %s: %s", name, exc)
            items.append(BatchItem(name=name, status=STATUS_ERROR, error=str(exc)))
            continue
        items.append(_classify(name, extract(text), threshold))
    return items


def summarise(items: Iterable[BatchItem]) -> Dict[str, int]:
    summary = {status: 0 for status in STATUSES}
    total = 0
    for item in items:
        summary[item.status] += 1
        total += 1
    summary["total"] = total
    return summary


__all__ = [
    "BatchItem",
    "STATUS_COMPLETED",
    "STATUS_ERROR",
    "STATUS_REVIEW",
    "extract_batch",
    "scan_batch",
    "summarise",
]
