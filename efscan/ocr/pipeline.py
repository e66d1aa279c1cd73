"""Full-card and stat-screen extraction entry points."""

from typing import Callable, Dict, Optional, Sequence

import numpy as np

from ..capture.regions import crop, decode_image
from ..core.layout import CARD_FIELDS, FieldLayout, ScreenLayout, load_layout
from ..core.types import ExtractionResult, Region, StatMap
from ..utils.error_handler import (
    ErrorContext,
    InvalidRegionError,
    RecognitionError,
    RecognitionUnavailableError,
    handle_error,
)
from ..utils.log import LoggerMixin
from .annotations import extract_after_label, extract_by_keywords
from .edition import extract_edition
from .engine import RecognitionEngine
from .stats import StatAggregator, StatAliasTable

EngineFactory = Callable[[], RecognitionEngine]

WHOLE_IMAGE = Region(0.0, 0.0, 1.0, 1.0)


def first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""


class ExtractionOrchestrator(LoggerMixin):
    """
    Composes cropping, recognition and parsing into the two analyses.

    Each analysis opens its own engine and closes it before returning, on
    success and on error alike. Regions are recognized one after another:
    the whole image first, then the card fields in layout order.
    """

    def __init__(
        self,
        layout: Optional[ScreenLayout] = None,
        aliases: Optional[StatAliasTable] = None,
        engine_factory: Optional[EngineFactory] = None,
        timeout: Optional[float] = None,
    ):
        self.layout = layout or load_layout()
        self.stat_aggregator = StatAggregator(self.layout.stats, aliases)
        self.engine_factory = engine_factory or (lambda: RecognitionEngine(timeout=timeout))

    async def _recognize(
        self,
        engine: RecognitionEngine,
        image: np.ndarray,
        field_name: str,
        field: FieldLayout,
    ) -> Optional[str]:
        """Recognize one field region; None when the region fails."""
        context = ErrorContext(
            operation=f"recognize {field_name}",
            module=__name__,
            function="_recognize",
            input_data={"region": field.region, "language": field.language.value},
        )
        try:
            region_bytes = crop(image, field.region or WHOLE_IMAGE)
            text = await engine.recognize(region_bytes, field.language, psm=field.psm)
        except RecognitionUnavailableError:
            raise
        except (InvalidRegionError, RecognitionError) as e:
            return handle_error(e, context, self.logger, reraise=False, default_return=None)

        self.logger.debug("Field recognized", field=field_name, text=text)
        return text

    @staticmethod
    def _labelled_value(text: str, field: FieldLayout) -> str:
        return extract_after_label(text, field.labels) or extract_by_keywords(text, field.keywords or "")

    def _resolve_field(
        self, field_name: str, field: FieldLayout, region_text: Optional[str], full_text: str
    ) -> Optional[str]:
        region_text = region_text or ""

        if field_name == "card_edition":
            value = extract_edition(region_text) or extract_edition(full_text)
            if not value:
                value = self._labelled_value(full_text, field)
            return value or None

        if not field.keywords and not field.labels:
            return first_line(region_text) or None

        value = self._labelled_value(region_text, field) or self._labelled_value(full_text, field)
        return value or None

    async def analyze_card(self, image_bytes: bytes) -> ExtractionResult:
        """
        Extract name, team, nationality and card edition from a card screenshot.

        Fields that cannot be read are None.

        Raises:
            ImageDecodeError: If ``image_bytes`` is not a decodable image
            RecognitionUnavailableError: If the backend cannot be initialized
        """
        image = decode_image(image_bytes)
        context = self.log_start("Card analysis", image_size=f"{image.shape[1]}x{image.shape[0]}")

        try:
            async with self.engine_factory() as engine:
                full_text = await self._recognize(engine, image, "full_text", self.layout.full_text) or ""
                region_texts: Dict[str, Optional[str]] = {}
                for field_name in CARD_FIELDS:
                    region_texts[field_name] = await self._recognize(
                        engine, image, field_name, self.layout.card_fields[field_name]
                    )
        except RecognitionUnavailableError as e:
            self.log_error(context, e)
            raise

        values = {
            field_name: self._resolve_field(
                field_name, self.layout.card_fields[field_name], region_texts[field_name], full_text
            )
            for field_name in CARD_FIELDS
        }
        result = ExtractionResult(
            full_text=full_text,
            name_text=values["name"],
            team_text=values["team"],
            nationality_text=values["nationality"],
            card_edition_text=values["card_edition"],
        )
        self.log_success(context, found=[name for name, value in values.items() if value])
        return result

    async def analyze_stats(self, images: Sequence[bytes]) -> StatMap:
        """
        Extract ability scores from an ordered list of stat-screen images.

        Raises:
            ValueError: If ``images`` is empty
            RecognitionUnavailableError: If the backend cannot be initialized
        """
        context = self.log_start("Stat analysis", image_count=len(images))
        try:
            async with self.engine_factory() as engine:
                stat_map = await self.stat_aggregator.extract_stats(images, engine)
        except (ValueError, RecognitionUnavailableError) as e:
            self.log_error(context, e)
            raise

        self.log_success(context, populated=len(stat_map))
        return stat_map


async def analyze_card(image_bytes: bytes, **kwargs) -> ExtractionResult:
    """Analyze a card screenshot with a default orchestrator."""
    return await ExtractionOrchestrator(**kwargs).analyze_card(image_bytes)


async def analyze_stats(images: Sequence[bytes], **kwargs) -> StatMap:
    """Analyze stat screenshots with a default orchestrator."""
    return await ExtractionOrchestrator(**kwargs).analyze_stats(images)
