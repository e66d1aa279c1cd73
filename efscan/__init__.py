"""eFootball card scanner - structured data extraction from game-card screenshots."""

__version__ = "1.0.0"
__description__ = "Extract player fields and ability scores from eFootball card screenshots with OCR"

from .core.types import ExtractionResult, LanguageHint, Region, StatKey, stat_map_to_dict
from .ocr.engine import RecognitionEngine
from .ocr.pipeline import ExtractionOrchestrator, analyze_card, analyze_stats
from .utils.config import settings
from .utils.error_handler import (
    CardScanError,
    ConfigurationError,
    ImageDecodeError,
    InvalidRegionError,
    RecognitionError,
    RecognitionTimeoutError,
    RecognitionUnavailableError,
)
from .utils.log import configure_logging, get_logger

__all__ = [
    "__version__",
    "__description__",
    "configure_logging",
    "get_logger",
    "settings",
    "ExtractionOrchestrator",
    "ExtractionResult",
    "LanguageHint",
    "RecognitionEngine",
    "Region",
    "StatKey",
    "analyze_card",
    "analyze_stats",
    "stat_map_to_dict",
    "CardScanError",
    "ConfigurationError",
    "ImageDecodeError",
    "InvalidRegionError",
    "RecognitionError",
    "RecognitionTimeoutError",
    "RecognitionUnavailableError",
]
