"""Script-aware text normalization for comparing recognized text to labels.

The recognizer regularly confuses voiced/semi-voiced marks and small kana
under low-resolution game fonts, so both recognized lines and known label
aliases are folded to a common form before comparison.
"""

from typing import Dict

# Voiced / semi-voiced katakana -> unvoiced base
_VOICED_TO_BASE: Dict[str, str] = {
    "ガ": "カ", "ギ": "キ", "グ": "ク", "ゲ": "ケ", "ゴ": "コ",
    "ザ": "サ", "ジ": "シ", "ズ": "ス", "ゼ": "セ", "ゾ": "ソ",
    "ダ": "タ", "ヂ": "チ", "ヅ": "ツ", "デ": "テ", "ド": "ト",
    "バ": "ハ", "ビ": "ヒ", "ブ": "フ", "ベ": "ヘ", "ボ": "ホ",
    "パ": "ハ", "ピ": "ヒ", "プ": "フ", "ペ": "ヘ", "ポ": "ホ",
}

# Small-form katakana -> full size
_SMALL_TO_FULL: Dict[str, str] = {
    "ァ": "ア", "ィ": "イ", "ゥ": "ウ", "ェ": "エ", "ォ": "オ",
    "ッ": "ツ", "ャ": "ヤ", "ュ": "ユ", "ョ": "ヨ",
}

# Long-vowel mark, hyphen variants, and the ideograph "one" (read as a long-vowel mark)
_REMOVED = "ー-\u2010\u2011\u2012\u2013\u2014\u2015\u2212\uff0d一"

# Full-width Latin letters / digits and the full-width plus sign
_FULL_WIDTH: Dict[str, str] = {
    chr(code): chr(code - 0xFEE0)
    for code in list(range(0xFF10, 0xFF1A)) + list(range(0xFF21, 0xFF3B)) + list(range(0xFF41, 0xFF5B))
}
_FULL_WIDTH["＋"] = "+"

_TRANSLATION = str.maketrans(
    {**_VOICED_TO_BASE, **_SMALL_TO_FULL, **_FULL_WIDTH, **{ch: None for ch in _REMOVED}}
)


def normalize(text: str) -> str:
    """Fold ``text`` to its comparison form.

    Removes all whitespace (including the ideographic space), folds voiced and
    small kana to their base forms, folds full-width alphanumerics to ASCII and
    drops long-vowel marks and hyphens. ``normalize(normalize(s)) == normalize(s)``.
    """
    if not text:
        return ""
    return "".join(text.split()).translate(_TRANSLATION)
