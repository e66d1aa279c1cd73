"""Keyword-anchored value extraction from line-oriented recognized text."""

from typing import Sequence

from ..core.constants import KEYWORD_MIN_HITS, PREFIX_WINDOW, VALUE_SEPARATORS


def extract_by_keywords(raw_text: str, keyword_chars: str) -> str:
    """
    Return the value following a keyword label, or "" if no line carries one.

    A line qualifies when at least two distinct characters of
    ``keyword_chars`` appear in its first 20 characters. The value is what
    follows the rightmost keyword character in that window, minus any leading
    separators. Only the first qualifying line is used.

    Examples:
        >>> extract_by_keywords("所属チーム FCバルセロナ", "所属ム")
        'FCバルセロナ'
        >>> extract_by_keywords("国籍/地域・日本", "国籍地域")
        '日本'
    """
    if not raw_text or not keyword_chars:
        return ""

    keywords = set(keyword_chars)
    for line in raw_text.splitlines():
        prefix = line[:PREFIX_WINDOW]
        hits = sum(1 for ch in keywords if ch in prefix)
        if hits < KEYWORD_MIN_HITS:
            continue

        anchor = max(prefix.rfind(ch) for ch in keywords)
        return line[anchor + 1:].lstrip(VALUE_SEPARATORS).rstrip()

    return ""


def extract_after_label(raw_text: str, labels: Sequence[str]) -> str:
    """
    Return the value following an exact label at the start of a line, or "".

    Used ahead of ``extract_by_keywords`` when the label was read cleanly, so
    keyword characters inside the value cannot move the anchor.

    Examples:
        >>> extract_after_label("所属チーム ウェストハム・ユナイテッド", ["所属チーム"])
        'ウェストハム・ユナイテッド'
    """
    if not raw_text or not labels:
        return ""

    for line in raw_text.splitlines():
        line = line.lstrip()
        for label in labels:
            if label and line.startswith(label):
                return line[len(label):].lstrip(VALUE_SEPARATORS).rstrip()

    return ""
