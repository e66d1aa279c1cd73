from typing import Final, Tuple

# Valid ability score range (inclusive); candidates outside are discarded
STAT_MIN: Final[int] = 40
STAT_MAX: Final[int] = 103

# Keyword-anchored line parsing
PREFIX_WINDOW: Final[int] = 20
KEYWORD_MIN_HITS: Final[int] = 2

# Leading separators stripped from a keyword-anchored value
VALUE_SEPARATORS: Final[str] = (
    " 　"        # space, ideographic space
    "・·･"  # middle dots
    "-‐‑－"  # hyphens
    "…⋯"   # ellipsis
    ")]}）］」』】"  # closing brackets
)

# Known card edition labels, canonical spelling
EDITION_LABELS: Final[Tuple[str, ...]] = (
    "Big Time",
    "Show Time",
    "Club Selection",
    "Highlight",
    "Epic",
    "POTW",
)

# Luminance weights (ITU-R BT.709)
LUMA_R: Final[float] = 0.2126
LUMA_G: Final[float] = 0.7152
LUMA_B: Final[float] = 0.0722

# Encoding used for cropped regions handed to the recognizer
REGION_ENCODING: Final[str] = ".png"
