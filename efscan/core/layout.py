"""Externalized screen layouts and stat alias tables.

Region coordinates, thresholds, keyword characters and alias lists live in
JSON under ``efscan/data`` so that re-tuning for a changed screen layout or a
new recognition variant does not touch code. ``LAYOUT_PATH`` and
``STAT_ALIASES_PATH`` point at replacement files.
"""

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from ..utils.config import settings
from ..utils.error_handler import ConfigurationError, ErrorContext, validate_required_fields
from ..utils.validation import validate_file_path, validate_numeric_range
from .types import LanguageHint, Region, StatKey

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
DEFAULT_LAYOUT_PATH = DATA_DIR / "layout.json"
DEFAULT_ALIASES_PATH = DATA_DIR / "stat_aliases.json"

CARD_FIELDS: Tuple[str, ...] = ("name", "team", "nationality", "card_edition")


@dataclass(frozen=True)
class FieldLayout:
    """Where and how to recognize one field. ``region=None`` means the whole image."""
    region: Optional[Region]
    language: LanguageHint
    keywords: Optional[str] = None
    psm: Optional[int] = None
    labels: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ScreenLayout:
    full_text: FieldLayout
    card_fields: Mapping[str, FieldLayout]
    stats: FieldLayout


def _read_json(path: Path, operation: str) -> Any:
    path = validate_file_path(path, must_exist=True)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Could not read {operation} data",
            details={"path": str(path), "error": str(e)},
        )


def parse_region(data: Dict[str, Any], field_name: str) -> Region:
    context = ErrorContext(operation=f"parse region for {field_name}", module=__name__, function="parse_region")
    validate_required_fields(data, ["x", "y", "w", "h"], context)

    for key in ("x", "y", "w", "h"):
        validate_numeric_range(data[key], 0, 1, field_name=f"{field_name}.{key}")
    threshold = data.get("threshold", 128)
    validate_numeric_range(threshold, 0, 255, field_name=f"{field_name}.threshold")

    region = Region(
        x=float(data["x"]),
        y=float(data["y"]),
        w=float(data["w"]),
        h=float(data["h"]),
        binarize=bool(data.get("binarize", False)),
        threshold=int(threshold),
    )
    if not region.is_within_bounds() or region.w <= 0 or region.h <= 0:
        raise ConfigurationError(
            f"Region for {field_name} does not lie within the image",
            details={"region": data},
        )
    return region


def parse_field(data: Dict[str, Any], field_name: str, region_required: bool = True) -> FieldLayout:
    context = ErrorContext(operation=f"parse layout field {field_name}", module=__name__, function="parse_field")
    validate_required_fields(data, ["language"] + (["region"] if region_required else []), context)

    try:
        language = LanguageHint(data["language"])
    except ValueError:
        raise ConfigurationError(
            f"Unknown language hint for {field_name}: {data['language']!r}",
            details={"allowed": [hint.value for hint in LanguageHint]},
        )

    region = parse_region(data["region"], field_name) if data.get("region") is not None else None
    psm = data.get("psm")
    if psm is not None:
        validate_numeric_range(psm, 0, 13, field_name=f"{field_name}.psm")

    labels = data.get("labels") or []
    if not isinstance(labels, list) or not all(isinstance(label, str) and label for label in labels):
        raise ConfigurationError(
            f"Labels for {field_name} must be a list of non-empty strings",
            details={"labels": labels},
        )

    return FieldLayout(
        region=region,
        language=language,
        keywords=data.get("keywords") or None,
        psm=psm,
        labels=tuple(labels),
    )


@lru_cache(maxsize=None)
def load_layout(path: Optional[str] = None) -> ScreenLayout:
    """Load and validate the screen layout table (cached per path)."""
    source = Path(path or settings.LAYOUT_PATH or DEFAULT_LAYOUT_PATH)
    data = _read_json(source, "layout")

    context = ErrorContext(operation="load layout", module=__name__, function="load_layout",
                           input_data={"path": str(source)})
    validate_required_fields(data, ["full_text", "card_fields", "stats"], context)
    validate_required_fields(data["card_fields"], list(CARD_FIELDS), context)

    return ScreenLayout(
        full_text=parse_field(data["full_text"], "full_text", region_required=False),
        card_fields={name: parse_field(data["card_fields"][name], name) for name in CARD_FIELDS},
        stats=parse_field(data["stats"], "stats"),
    )


@lru_cache(maxsize=None)
def load_stat_aliases(path: Optional[str] = None) -> Dict[StatKey, Tuple[str, ...]]:
    """Load the StatKey -> alias list table (cached per path).

    Every StatKey must be present with a non-empty list of strings.
    """
    source = Path(path or settings.STAT_ALIASES_PATH or DEFAULT_ALIASES_PATH)
    data = _read_json(source, "stat alias")

    if not isinstance(data, dict):
        raise ConfigurationError("Alias table must be a JSON object", details={"path": str(source)})

    known = {key.value for key in StatKey}
    unknown = sorted(set(data) - known)
    missing = sorted(known - set(data))
    if unknown or missing:
        raise ConfigurationError(
            "Alias table keys do not match the stat keys",
            details={"unknown": unknown, "missing": missing, "path": str(source)},
        )

    table: Dict[StatKey, Tuple[str, ...]] = {}
    for key in StatKey:
        aliases = data[key.value]
        if (
            not isinstance(aliases, list)
            or not aliases
            or not all(isinstance(alias, str) and alias.strip() for alias in aliases)
        ):
            raise ConfigurationError(
                f"Alias list for {key.value} must be a non-empty list of strings",
                details={"aliases": aliases},
            )
        table[key] = tuple(aliases)
    return table
