"""Tesseract-backed recognition engine with scoped lifetime."""

import asyncio
from typing import Dict, Optional, Set

import cv2
import numpy as np
import pytesseract

from ..core.types import LanguageHint
from ..utils.config import resolve_tesseract_path, settings
from ..utils.error_handler import (
    RecognitionError,
    RecognitionTimeoutError,
    RecognitionUnavailableError,
)
from ..utils.log import LoggerMixin


class RecognitionEngine(LoggerMixin):
    """Wraps calls to the tesseract backend for one extraction batch.

    The engine is opened before the first recognition of a batch and closed
    once the batch is over, including on error paths::

        async with RecognitionEngine() as engine:
            text = await engine.recognize(png_bytes, LanguageHint.MIXED)

    Language data for a hint is verified the first time that hint is used and
    remembered until the engine is closed. Calls must not be issued
    concurrently against one instance.

    pytesseract only takes the binary path from the module-level
    ``pytesseract.pytesseract.tesseract_cmd``, so ``open`` sets that global.
    Engines in one process therefore share a single tesseract binary; the
    last ``open`` wins.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        tesseract_path: Optional[str] = None,
        languages: Optional[Dict[LanguageHint, str]] = None,
        default_psm: Optional[int] = None,
    ):
        self.timeout = timeout if timeout is not None else settings.OCR_TIMEOUT_SECONDS
        self.tesseract_path = tesseract_path
        self.languages = languages or {
            LanguageHint.LATIN: settings.OCR_LANG_LATIN,
            LanguageHint.MIXED: settings.OCR_LANG_MIXED,
        }
        self.default_psm = default_psm if default_psm is not None else settings.OCR_PAGE_SEG_MODE

        self._available: Optional[Set[str]] = None
        self._loaded: Set[LanguageHint] = set()

    @property
    def is_open(self) -> bool:
        return self._available is not None

    def open(self) -> "RecognitionEngine":
        """Locate the backend and read its installed language data."""
        if self.is_open:
            return self

        try:
            command = resolve_tesseract_path(self.tesseract_path)
            pytesseract.pytesseract.tesseract_cmd = command
            available = set(pytesseract.get_languages(config=""))
        except (FileNotFoundError, pytesseract.TesseractNotFoundError, pytesseract.TesseractError) as e:
            raise RecognitionUnavailableError(
                "Recognition backend could not be initialized",
                details={"error": str(e)},
            ) from e

        self._available = available
        self.logger.info(
            "Recognition engine opened",
            tesseract_path=command,
            languages=sorted(available),
            timeout=self.timeout,
        )
        return self

    def close(self):
        """Release the backend handle. Safe to call more than once."""
        if not self.is_open:
            return
        self._available = None
        self._loaded.clear()
        self.logger.info("Recognition engine closed")

    async def __aenter__(self) -> "RecognitionEngine":
        return self.open()

    async def __aexit__(self, exc_type, exc, tb):
        self.close()

    def load(self, language_hint: LanguageHint) -> str:
        """Ensure language data for ``language_hint`` is installed; return its backend code."""
        if not self.is_open:
            raise RecognitionUnavailableError("Recognition engine is not open")

        code = self.languages[LanguageHint(language_hint)]
        if language_hint not in self._loaded:
            missing = [lang for lang in code.split("+") if lang not in self._available]
            if missing:
                raise RecognitionUnavailableError(
                    f"Missing language data for hint '{LanguageHint(language_hint).value}'",
                    details={"language": code, "missing": missing},
                )
            self._loaded.add(language_hint)
            self.logger.debug("Language data loaded", hint=LanguageHint(language_hint).value, language=code)
        return code

    async def recognize(
        self,
        image_bytes: bytes,
        language_hint: LanguageHint,
        psm: Optional[int] = None,
    ) -> str:
        """Recognize text in encoded image bytes.

        Suspends until the backend returns. Raises RecognitionTimeoutError once
        the configured timeout elapses; the backend process is killed then.
        """
        language = self.load(language_hint)

        image = cv2.imdecode(np.frombuffer(image_bytes, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
        if image is None:
            raise RecognitionError("Region image could not be decoded for recognition")

        config = f"--psm {psm if psm is not None else self.default_psm}"
        try:
            text = await asyncio.to_thread(
                pytesseract.image_to_string,
                image,
                lang=language,
                config=config,
                timeout=self.timeout,
            )
        except pytesseract.TesseractError as e:
            raise RecognitionError(
                "Recognition failed",
                details={"status": e.status, "error": e.message, "language": language},
            ) from e
        except RuntimeError as e:
            # pytesseract signals a killed process with a bare RuntimeError
            if "timeout" in str(e).lower():
                raise RecognitionTimeoutError(
                    "Recognition timed out",
                    details={"timeout": self.timeout, "language": language},
                ) from e
            raise RecognitionError("Recognition failed", details={"error": str(e)}) from e

        self.logger.debug("Recognition completed", language=language, psm=config, chars=len(text))
        return text
