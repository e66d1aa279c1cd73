from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Region:
    """Fractional sub-rectangle of a source image.

    Coordinates are relative to the image size and are not clamped; a region
    reaching past the image edge is rejected when cropped.
    """
    x: float
    y: float
    w: float
    h: float
    binarize: bool = False
    threshold: int = 128

    def is_within_bounds(self, tolerance: float = 1e-9) -> bool:
        return (
            self.x >= 0
            and self.y >= 0
            and self.x + self.w <= 1 + tolerance
            and self.y + self.h <= 1 + tolerance
        )


class LanguageHint(str, Enum):
    LATIN = "latin"
    MIXED = "mixed"


class StatKey(str, Enum):
    # Attacking
    OFFENSIVE_AWARENESS = "offensive_awareness"
    BALL_CONTROL = "ball_control"
    DRIBBLING = "dribbling"
    TIGHT_POSSESSION = "tight_possession"
    LOW_PASS = "low_pass"
    LOFT_PASS = "loft_pass"
    FINISHING = "finishing"
    HEADING = "heading"
    PLACE_KICKING = "place_kicking"
    CURL = "curl"
    # Defending
    DEFENSIVE_AWARENESS = "defensive_awareness"
    TACKLING = "tackling"
    AGGRESSION = "aggression"
    DEFENSIVE_ENGAGEMENT = "defensive_engagement"
    # Physical
    SPEED = "speed"
    ACCELERATION = "acceleration"
    KICKING_POWER = "kicking_power"
    JUMP = "jump"
    PHYSICAL_CONTACT = "physical_contact"
    BALANCE = "balance"
    STAMINA = "stamina"
    # Goalkeeping
    GK_AWARENESS = "gk_awareness"
    GK_CATCHING = "gk_catching"
    GK_CLEARING = "gk_clearing"
    GK_REFLEXES = "gk_reflexes"
    GK_REACH = "gk_reach"


StatMap = Dict[StatKey, int]


def stat_map_to_dict(stat_map: StatMap) -> Dict[str, int]:
    """Serialize a StatMap with string keys, in StatKey declaration order."""
    return {key.value: stat_map[key] for key in StatKey if key in stat_map}


@dataclass
class ExtractionResult:
    """Output of full-card analysis. ``None`` means not found."""
    full_text: str
    name_text: Optional[str] = None
    team_text: Optional[str] = None
    nationality_text: Optional[str] = None
    card_edition_text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        return {
            "full_text": data["full_text"],
            "name": data["name_text"],
            "team": data["team_text"],
            "nationality": data["nationality_text"],
            "card_edition": data["card_edition_text"],
        }
