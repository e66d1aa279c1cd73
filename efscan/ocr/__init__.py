"""OCR package: recognition, normalization and field extraction."""

from .annotations import extract_after_label, extract_by_keywords
from .edition import CARD_EDITION_PATTERN, extract_edition, is_valid_edition
from .engine import RecognitionEngine
from .normalizer import normalize
from .pipeline import ExtractionOrchestrator, analyze_card, analyze_stats
from .stats import StatAggregator, StatAliasTable, extract_stats, merge_stat_text

__all__ = [
    "CARD_EDITION_PATTERN",
    "ExtractionOrchestrator",
    "RecognitionEngine",
    "StatAggregator",
    "StatAliasTable",
    "analyze_card",
    "analyze_stats",
    "extract_after_label",
    "extract_by_keywords",
    "extract_edition",
    "extract_stats",
    "is_valid_edition",
    "merge_stat_text",
    "normalize",
]
