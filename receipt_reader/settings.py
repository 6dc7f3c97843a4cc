"""Application settings management for the receipt reader service."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_OCR_LANGUAGE = "spa+eng"
DEFAULT_OCR_TIMEOUT = 30
DEFAULT_REVIEW_THRESHOLD = 70
DEFAULT_MAX_UPLOAD_SIZE = 10 * 1024 * 1024

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class Settings:
    ocr_language: str = DEFAULT_OCR_LANGUAGE
    ocr_timeout: int = DEFAULT_OCR_TIMEOUT
    review_threshold: int = DEFAULT_REVIEW_THRESHOLD
    max_upload_size: int = DEFAULT_MAX_UPLOAD_SIZE

    @staticmethod
    def _int_env(name: str, default: int) -> int:
        value = os.getenv(name)
        if value is None or not value.strip():
            return default
        try:
            return int(value.strip())
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {name} must be an integer") from exc

    @classmethod
    def load(cls) -> "Settings":
        _ensure_env_file_loaded()
        language = (os.getenv("OCR_LANGUAGE") or "").strip() or DEFAULT_OCR_LANGUAGE

        timeout = cls._int_env("OCR_TIMEOUT", DEFAULT_OCR_TIMEOUT)
        if timeout <= 0:
            raise RuntimeError("OCR_TIMEOUT must be positive")

        threshold = cls._int_env("REVIEW_CONFIDENCE_THRESHOLD", DEFAULT_REVIEW_THRESHOLD)
        if not 0 <= threshold <= 100:
            raise RuntimeError("REVIEW_CONFIDENCE_THRESHOLD must be between 0 and 100")

        max_upload_size = cls._int_env("MAX_UPLOAD_SIZE", DEFAULT_MAX_UPLOAD_SIZE)
        if max_upload_size <= 0:
            raise RuntimeError("MAX_UPLOAD_SIZE must be positive")

        return cls(
            ocr_language=language,
            ocr_timeout=timeout,
            review_threshold=threshold,
            max_upload_size=max_upload_size,
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings.load()


def reset_settings_state() -> None:
    """Reset cached settings and environment file state (for tests)."""
    global _ENV_FILE_LOADED
    _ENV_FILE_LOADED = False
    get_settings.cache_clear()


_ENV_FILE_LOADED = False


def _ensure_env_file_loaded() -> None:
    global _ENV_FILE_LOADED
    if _ENV_FILE_LOADED:
        return
    # Values already in the environment win over both files.
    for env_path in (Path.cwd() / ".env", PROJECT_ROOT / ".env"):
        if env_path.is_file():
            load_dotenv(dotenv_path=env_path, override=False)
    _ENV_FILE_LOADED = True


__all__ = ["Settings", "get_settings", "reset_settings_state"]
