"""Card edition/date extraction, e.g. ``Big Time 11 Jan '15``."""

import re
from typing import Dict, Optional

from ..core.constants import EDITION_LABELS


def _label_key(label: str) -> str:
    return "".join(label.split()).lower()


# Two-word labels tolerate missing or repeated spaces between the words
_LABEL_ALTERNATIVES = "|".join(r"\s*".join(label.split()) for label in EDITION_LABELS)

# label, 1-2 digit day, 3-letter month, whitespace, optional apostrophe, 2-digit year
CARD_EDITION_PATTERN = re.compile(
    rf"({_LABEL_ALTERNATIVES})\s+(\d{{1,2}})\s+([A-Za-z]{{3}})\s+'?\s*(\d{{2}})(?!\d)",
    re.IGNORECASE,
)

_CANONICAL_LABELS: Dict[str, str] = {_label_key(label): label for label in EDITION_LABELS}


def extract_edition(raw_text: str) -> Optional[str]:
    """
    Find a card edition in recognized text and return it in canonical form.

    Returns None when nothing matches; callers fall back to another path.

    Examples:
        >>> extract_edition("Big Time 11 Jan '15")
        "Big Time 11 Jan '15"
        >>> extract_edition("BigTime 11 Jan 15")
        "Big Time 11 Jan '15"
        >>> extract_edition("epic  08 aug ' 09")
        "Epic 08 Aug '09"
    """
    if not raw_text:
        return None

    match = CARD_EDITION_PATTERN.search(raw_text)
    if not match:
        return None

    label, day, month, year = match.groups()
    label = _CANONICAL_LABELS[_label_key(label)]
    return f"{label} {day} {month.title()} '{year}"


def is_valid_edition(text: str) -> bool:
    """Check if text contains a recognizable card edition."""
    return extract_edition(text) is not None
