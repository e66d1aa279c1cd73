"""End-to-end tests against a real tesseract installation.

Skipped when tesseract or its ``jpn`` language data is not installed.
"""

import cv2
import numpy as np
import pytest

from efscan.core.types import ExtractionResult, LanguageHint
from efscan.ocr.engine import RecognitionEngine
from efscan.ocr.pipeline import ExtractionOrchestrator
from efscan.utils.error_handler import RecognitionUnavailableError

from conftest import encode_png

pytestmark = pytest.mark.integration


@pytest.fixture
def real_engine():
    engine = RecognitionEngine(timeout=60)
    try:
        engine.open()
        engine.load(LanguageHint.MIXED)
    except RecognitionUnavailableError as e:
        pytest.skip(f"tesseract unavailable: {e}")
    yield engine
    engine.close()


def _text_image(text: str) -> bytes:
    image = np.full((120, 900, 3), 255, dtype=np.uint8)
    cv2.putText(image, text, (20, 80), cv2.FONT_HERSHEY_SIMPLEX, 2.0, (0, 0, 0), 4, cv2.LINE_AA)
    return encode_png(image)


@pytest.mark.slow
@pytest.mark.asyncio
async def test_recognize_latin_text(real_engine):
    text = await real_engine.recognize(_text_image("SPEED 88"), LanguageHint.LATIN, psm=7)

    assert isinstance(text, str)
    assert any(ch.isdigit() for ch in text)


@pytest.mark.slow
@pytest.mark.asyncio
async def test_analyze_card_end_to_end(real_engine):
    image = np.zeros((900, 1600, 3), dtype=np.uint8)
    cv2.putText(image, "Big Time 11 Jan 15", (80, 75), cv2.FONT_HERSHEY_SIMPLEX, 2.0, (255, 255, 255), 4)

    orchestrator = ExtractionOrchestrator(engine_factory=lambda: RecognitionEngine(timeout=60))
    result = await orchestrator.analyze_card(encode_png(image))

    assert isinstance(result, ExtractionResult)
    assert isinstance(result.full_text, str)
