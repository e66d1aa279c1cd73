"""Core types, constants and layout tables."""

from .types import ExtractionResult, LanguageHint, Region, StatKey, StatMap, stat_map_to_dict

__all__ = [
    "ExtractionResult",
    "LanguageHint",
    "Region",
    "StatKey",
    "StatMap",
    "stat_map_to_dict",
]
