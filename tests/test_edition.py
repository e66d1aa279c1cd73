"""Tests for card edition extraction."""

import pytest

from efscan.ocr.edition import CARD_EDITION_PATTERN, extract_edition, is_valid_edition


class TestExtractEdition:
    """Test extract_edition()."""

    def test_canonical_input_unchanged(self):
        assert extract_edition("Big Time 11 Jan '15") == "Big Time 11 Jan '15"

    def test_missing_space_and_apostrophe_corrected(self):
        assert extract_edition("BigTime 11 Jan 15") == "Big Time 11 Jan '15"

    def test_space_before_digits_required(self):
        assert extract_edition("BigTime11 Jan 15") is None

    @pytest.mark.parametrize("text", ["Big Time 11 Jan15", "Big Time 11 Jan'15"])
    def test_space_before_year_required(self, text):
        assert extract_edition(text) is None

    @pytest.mark.parametrize("text, expected", [
        ("Big Time 11 Jan ' 15", "Big Time 11 Jan '15"),
        ("Big   Time  11   Jan   '15", "Big Time 11 Jan '15"),
        ("Show  Time 3 Mar '21", "Show Time 3 Mar '21"),
        ("Epic 08 Aug '09", "Epic 08 Aug '09"),
        ("epic 08 AUG '09", "Epic 08 Aug '09"),
        ("POTW 21 Sep '23", "POTW 21 Sep '23"),
        ("ClubSelection 1 Feb '24", "Club Selection 1 Feb '24"),
        ("Highlight 30 Nov '22", "Highlight 30 Nov '22"),
    ])
    def test_spacing_and_label_normalization(self, text, expected):
        assert extract_edition(text) == expected

    def test_line_break_between_label_and_digits(self):
        assert extract_edition("Big Time\n11 Jan '15") == "Big Time 11 Jan '15"

    def test_match_inside_noisy_text(self):
        text = "L. Messi\nカード種別 Epic 08 Aug '09 ※\nRWF"
        assert extract_edition(text) == "Epic 08 Aug '09"

    @pytest.mark.parametrize("text", [
        "",
        "Big Time",
        "Legend 11 Jan '15",
        "Big Time 111 Jan '15",
        "Big Time 11 January",
        "Big Time 11 Jan '2015",
    ])
    def test_no_match_returns_none(self, text):
        assert extract_edition(text) is None

    def test_is_valid_edition(self):
        assert is_valid_edition("Epic 08 Aug '09")
        assert not is_valid_edition("no edition here")

    def test_pattern_is_case_insensitive(self):
        assert CARD_EDITION_PATTERN.search("BIG TIME 11 JAN '15") is not None
