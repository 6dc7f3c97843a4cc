"""FastAPI router definitions for the receipt reader service."""
from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, File, HTTPException, UploadFile, status
from pydantic import BaseModel, Field

from .batch import STATUS_ERROR, BatchItem, scan_batch, summarise
from .extraction import ExtractionResult, extract
from .ocr import ImageFetchError, OCRDecodeError, OCRServiceError, recognize_text
from .settings import Settings, get_settings

LOGGER = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Receipt Reader Service")

ALLOWED_MIME_TYPES = {
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/webp",
    "image/tiff",
}


class ExtractRequest(BaseModel):
    raw_text: str = ""


class ExtractionPayload(BaseModel):
    amount: Optional[float] = None
    date: Optional[dt.date] = None
    merchant: Optional[str] = None
    category: Optional[str] = None
    confidence: int = Field(ge=0, le=100)
    raw_text: str
    description: str
    missing_fields: List[str]

    @classmethod
    def from_result(cls, result: ExtractionResult) -> "ExtractionPayload":
        return cls(**result.to_dict())


class BatchItemPayload(BaseModel):
    name: str
    status: str
    result: Optional[ExtractionPayload] = None
    error: Optional[str] = None


class BatchResponse(BaseModel):
    items: List[BatchItemPayload]
    summary: Dict[str, int]


async def _read_upload(file: UploadFile, settings: Settings) -> bytes:
    data = await file.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="empty_file")
    if len(data) > settings.max_upload_size:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="file_too_large")
    if file.content_type not in ALLOWED_MIME_TYPES:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="unsupported_mime")
    return data


def _format_batch_item(item: BatchItem) -> BatchItemPayload:
    return BatchItemPayload(
        name=item.name,
        status=item.status,
        result=ExtractionPayload.from_result(item.result) if item.result else None,
        error=item.error,
    )


@app.post("/extract", response_model=ExtractionPayload)
async def extract_text(payload: ExtractRequest) -> ExtractionPayload:
    return ExtractionPayload.from_result(extract(payload.raw_text))


@app.post("/scan", response_model=ExtractionPayload)
async def scan(
    settings: Settings = Depends(get_settings),
    file: UploadFile = File(...),
) -> ExtractionPayload:
    data = await _read_upload(file, settings)

    try:
        raw_text = recognize_text(data, language=settings.ocr_language, timeout=settings.ocr_timeout)
    except ImageFetchError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="image_fetch_failed") from exc
    except OCRDecodeError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="ocr_decode_failed") from exc
    except OCRServiceError as exc:
        LOGGER.exception("OCR service error: %s", exc)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="ocr_service_error") from exc

    result = extract(raw_text)
    LOGGER.info("Scanned %s with confidence %s", file.filename, result.confidence)
    return ExtractionPayload.from_result(result)


@app.post("/batch", response_model=BatchResponse)
async def batch(
    settings: Settings = Depends(get_settings),
    files: List[UploadFile] = File(...),
) -> BatchResponse:
    items: List[BatchItem] = []
    for index, upload in enumerate(files):
        name = upload.filename or f"file-{index + 1}"
        try:
            data = await _read_upload(upload, settings)
        except HTTPException as exc:
            items.append(BatchItem(name=name, status=STATUS_ERROR, error=str(exc.detail)))
            continue
        items.extend(
            scan_batch(
                [(name, data)],
                threshold=settings.review_threshold,
                recognizer=recognize_text,
                language=settings.ocr_language,
            )
        )

    summary = summarise(items)
    LOGGER.info("Batch processed: %s", summary)
    return BatchResponse(items=[_format_batch_item(item) for item in items], summary=summary)


__all__ = ["app"]
