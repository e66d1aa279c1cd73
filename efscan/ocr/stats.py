"""Ability score extraction and merging across stat-screen images."""

import re
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..capture.regions import crop, decode_image
from ..core.constants import STAT_MAX, STAT_MIN
from ..core.layout import FieldLayout, load_layout, load_stat_aliases
from ..core.types import StatKey, StatMap
from ..utils.error_handler import (
    ErrorContext,
    ImageDecodeError,
    InvalidRegionError,
    RecognitionError,
    RecognitionUnavailableError,
    handle_error,
)
from ..utils.log import LoggerMixin, get_logger
from .engine import RecognitionEngine
from .normalizer import normalize

# Booster bonus annotations such as "+2" in front of a base value
BOOSTER_PATTERN = re.compile(r"\+\d")
STAT_VALUE_PATTERN = re.compile(r"\d{2,3}")

logger = get_logger(__name__)


class StatAliasTable:
    """StatKey -> alias list, with aliases pre-normalized for matching."""

    def __init__(self, aliases: Mapping[StatKey, Sequence[str]]):
        self.aliases: Dict[StatKey, Tuple[str, ...]] = {
            StatKey(key): tuple(values) for key, values in aliases.items()
        }
        self.normalized: Dict[StatKey, Tuple[str, ...]] = {}
        for key, values in self.aliases.items():
            # dict.fromkeys keeps first-seen order while dropping duplicates
            folded = tuple(dict.fromkeys(normalize(value) for value in values if normalize(value)))
            if folded:
                self.normalized[key] = folded

    @classmethod
    def load(cls, path: Optional[str] = None) -> "StatAliasTable":
        return cls(load_stat_aliases(path))

    def keys(self) -> Iterable[StatKey]:
        return self.normalized.keys()

    def matches(self, key: StatKey, normalized_line: str) -> bool:
        return any(alias in normalized_line for alias in self.normalized.get(key, ()))


def parse_stat_value(normalized_line: str) -> Optional[int]:
    """First 2-3 digit number on the line, if it is a valid ability score."""
    match = STAT_VALUE_PATTERN.search(normalized_line)
    if not match:
        return None
    value = int(match.group(0))
    if STAT_MIN <= value <= STAT_MAX:
        return value
    return None


def parse_stat_line(
    line: str, table: StatAliasTable, stat_map: StatMap
) -> Optional[Tuple[StatKey, int]]:
    """Match one recognized line against the stats not yet in ``stat_map``."""
    normalized = BOOSTER_PATTERN.sub("", normalize(line))
    if not normalized:
        return None

    for key in table.keys():
        if key in stat_map or not table.matches(key, normalized):
            continue
        value = parse_stat_value(normalized)
        if value is not None:
            return key, value
    return None


def merge_stat_text(raw_text: str, table: StatAliasTable, stat_map: StatMap) -> List[StatKey]:
    """
    Commit every stat found in ``raw_text`` that ``stat_map`` does not hold yet.

    At most one stat is taken per line. Already populated keys are never
    overwritten. Returns the keys committed by this call.
    """
    committed: List[StatKey] = []
    for line in raw_text.splitlines():
        found = parse_stat_line(line, table, stat_map)
        if found is None:
            continue
        key, value = found
        stat_map[key] = value
        committed.append(key)
        logger.debug("Stat committed", stat=key.value, value=value)
    return committed


class StatAggregator(LoggerMixin):
    """Runs the stat-screen pipeline over an ordered list of images."""

    def __init__(self, layout: Optional[FieldLayout] = None, aliases: Optional[StatAliasTable] = None):
        self.layout = layout or load_layout().stats
        self.aliases = aliases or StatAliasTable.load()

    async def extract_stats(self, images: Sequence[bytes], engine: RecognitionEngine) -> StatMap:
        """
        Extract ability scores from one or more screenshots of the stat list.

        Earlier images take priority: a stat found in image 1 is kept even if
        a later image reads a different value. A failed image contributes
        nothing; a backend that cannot start aborts the whole call.

        Raises:
            ValueError: If ``images`` is empty
            RecognitionUnavailableError: If the backend cannot be initialized
        """
        if not images:
            raise ValueError("At least one stat image is required")

        stat_map: StatMap = {}
        total = len(self.aliases.normalized)

        for index, image_bytes in enumerate(images):
            if len(stat_map) >= total:
                self.logger.debug("All stats populated, skipping remaining images", skipped=len(images) - index)
                break

            context = ErrorContext(
                operation="stat image recognition",
                module=__name__,
                function="extract_stats",
                input_data={"image_index": index},
            )
            try:
                image = decode_image(image_bytes)
                region_bytes = crop(image, self.layout.region)
                raw_text = await engine.recognize(region_bytes, self.layout.language, psm=self.layout.psm)
            except RecognitionUnavailableError:
                raise
            except (ImageDecodeError, InvalidRegionError, RecognitionError) as e:
                handle_error(e, context, self.logger, reraise=False)
                continue

            committed = merge_stat_text(raw_text, self.aliases, stat_map)
            self.logger.info(
                "Stat image processed",
                image_index=index,
                committed=[key.value for key in committed],
                populated=len(stat_map),
            )

        return stat_map


async def extract_stats(
    images: Sequence[bytes],
    engine: RecognitionEngine,
    layout: Optional[FieldLayout] = None,
    aliases: Optional[StatAliasTable] = None,
) -> StatMap:
    """Functional shortcut for ``StatAggregator(layout, aliases).extract_stats``."""
    return await StatAggregator(layout, aliases).extract_stats(images, engine)
