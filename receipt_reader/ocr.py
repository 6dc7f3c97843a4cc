"""Receipt OCR helpers.

Turns a receipt image into raw text with a local Tesseract install.  The
output is handed untouched to :func:`receipt_reader.extraction.extract`; this
module knows nothing about amounts or dates.

Inputs may be raw bytes, a base64 encoded string, or an ``http(s)://`` URL.
PDF uploads are refused: rendering pages to images is left to the client.
"""
from __future__ import annotations

import base64
import binascii
import logging
from io import BytesIO
from typing import Optional, Tuple, Union

import pytesseract
import requests
from PIL import Image, UnidentifiedImageError

from .settings import get_settings

LOGGER = logging.getLogger(__name__)

ImageInput = Union[str, bytes, bytearray]


class ImageFetchError(RuntimeError):
    """Raised when the input image cannot be retrieved."""


class OCRServiceError(RuntimeError):
    """Raised when the OCR engine fails."""


class OCRDecodeError(RuntimeError):
    """Raised when the input cannot be turned into text."""


def recognize_text(
    image_input: ImageInput,
    *,
    language: Optional[str] = None,
    timeout: Optional[int] = None,
) -> str:
    """Return the text Tesseract recognises in ``image_input``."""

    if language is None or timeout is None:
        settings = get_settings()
        language = language or settings.ocr_language
        timeout = timeout or settings.ocr_timeout

    binary, source = _load_bytes(image_input, timeout=timeout)
    if _is_pdf(binary):
        raise OCRDecodeError("pdf_not_supported")

    text = _ocr_local(binary, language)
    if not text or not text.strip():
        raise OCRDecodeError("empty_ocr_text")
    LOGGER.info("Recognised %d characters from %s", len(text), source)
    return text


def _load_bytes(image_input: ImageInput, *, timeout: int) -> Tuple[bytes, str]:
    if isinstance(image_input, (bytes, bytearray)):
        return bytes(image_input), "bytes"

    if isinstance(image_input, str):
        trimmed = image_input.strip()
        if trimmed.startswith("http://") or trimmed.startswith("https://"):
            try:
                response = requests.get(trimmed, timeout=timeout)
                response.raise_for_status()
            except requests.RequestException as exc:
                raise ImageFetchError("fetch_failed") from exc
            return response.content, trimmed

        try:
            return base64.b64decode(trimmed, validate=True), "base64"
        except (binascii.Error, ValueError) as exc:
            raise OCRDecodeError("invalid_base64") from exc

    raise OCRDecodeError("unsupported_input_type")


def _is_pdf(binary: bytes) -> bool:
    return binary.startswith(b"%PDF")


def _ocr_local(binary: bytes, language: str) -> str:
    image = _image_from_bytes(binary)
    try:
        return pytesseract.image_to_string(image, lang=language)
    except pytesseract.TesseractNotFoundError as exc:
        raise OCRServiceError("tesseract_not_found") from exc
    except pytesseract.TesseractError as exc:
        raise OCRServiceError(f"tesseract_error:{exc}") from exc


def _image_from_bytes(binary: bytes) -> Image.Image:
    try:
        image = Image.open(BytesIO(binary))
        image.load()
    except UnidentifiedImageError as exc:
        raise OCRDecodeError("unsupported_image_format") from exc
    except OSError as exc:
        raise OCRDecodeError("image_open_failed") from exc
    return image.convert("RGB")


__all__ = [
    "ImageFetchError",
    "OCRDecodeError",
    "OCRServiceError",
    "recognize_text",
]
