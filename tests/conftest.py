from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from receipt_reader import settings as settings_module  # noqa: E402

SETTINGS_ENV = ["OCR_LANGUAGE", "OCR_TIMEOUT", "REVIEW_CONFIDENCE_THRESHOLD", "MAX_UPLOAD_SIZE"]


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    settings_module.reset_settings_state()
    yield
    settings_module.reset_settings_state()


@pytest.fixture
def receipt_text() -> str:
    return "\n".join(
        [
            "MERCADONA S.A.",
            "Fecha: 15/03/2024",
            "Subtotal 10,00€",
            "IVA 2,50€",
            "Total 12,50€",
        ]
    )
