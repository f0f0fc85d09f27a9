"""
Unit Tests for Numbering & Symbols

Roman numerals, chapter/page number styles, ornaments and title case.
"""

import pytest

from core.formatting.numbering import (
    ChapterNumberStyle,
    PageNumberStyle,
    apply_title_case,
    format_chapter_number,
    format_page_number,
    from_roman,
    get_chapter_ornament_symbol,
    get_scene_break_symbol,
    to_roman,
)


class TestRoman:
    """Test roman numeral conversion."""

    @pytest.mark.parametrize("number,expected", [
        (1, "I"), (4, "IV"), (9, "IX"), (14, "XIV"), (40, "XL"),
        (90, "XC"), (400, "CD"), (1994, "MCMXCIV"), (3999, "MMMCMXCIX"),
    ])
    def test_to_roman(self, number, expected):
        assert to_roman(number) == expected

    def test_non_positive_is_empty(self):
        assert to_roman(0) == ""
        assert to_roman(-5) == ""

    def test_from_roman_round_trips(self):
        for n in (1, 4, 12, 49, 1994, 3999):
            assert from_roman(to_roman(n)) == n

    def test_from_roman_case_insensitive(self):
        assert from_roman("xiv") == 14

    @pytest.mark.parametrize("text", ["", "IIII", "VX", "ABC", None])
    def test_from_roman_rejects_invalid(self, text):
        with pytest.raises(ValueError):
            from_roman(text)


class TestChapterNumbers:
    """Test format_chapter_number()."""

    def test_styles(self):
        assert format_chapter_number(3, "numeric") == "3"
        assert format_chapter_number(3, "roman") == "III"
        assert format_chapter_number(3, "word") == "Three"
        assert format_chapter_number(3, "ordinal") == "Third"

    def test_enum_members_accepted(self):
        assert format_chapter_number(4, ChapterNumberStyle.ROMAN) == "IV"

    def test_word_fallback_beyond_table(self):
        assert format_chapter_number(31, "word") == "31"
        assert format_chapter_number(21, "ordinal") == "21"

    def test_unknown_style_is_numeric(self):
        assert format_chapter_number(7, "klingon") == "7"


class TestPageNumbers:
    """Test format_page_number()."""

    def test_styles(self):
        assert format_page_number(4, "arabic") == "4"
        assert format_page_number(4, "roman-lower") == "iv"
        assert format_page_number(4, "roman-upper") == "IV"
        assert format_page_number(4, PageNumberStyle.NONE) == ""


class TestSymbols:
    """Test scene-break and ornament lookup."""

    def test_scene_break_symbols(self):
        assert get_scene_break_symbol("asterisks") == "* * *"
        assert get_scene_break_symbol("ornament") == "❦"
        assert get_scene_break_symbol("number") == "•"
        assert get_scene_break_symbol("blank-line") == ""

    def test_custom_scene_break(self):
        assert get_scene_break_symbol("custom", "~ ~ ~") == "~ ~ ~"
        assert get_scene_break_symbol("custom", "   ") == "* * *"
        assert get_scene_break_symbol("unknown") == "* * *"

    def test_chapter_ornaments(self):
        assert get_chapter_ornament_symbol("line") == "━" * 9
        assert get_chapter_ornament_symbol("flourish") == "❧"
        assert get_chapter_ornament_symbol("stars") == "✦ ✦ ✦"
        assert get_chapter_ornament_symbol("dots") == "• • •"
        assert get_chapter_ornament_symbol("none") == ""
        assert get_chapter_ornament_symbol("unknown") == ""


class TestTitleCase:
    """Test apply_title_case()."""

    def test_title_case_small_words(self):
        assert apply_title_case("the lord of the rings") == "The Lord of the Rings"

    def test_last_word_capitalized(self):
        assert apply_title_case("what dreams are made of") == "What Dreams Are Made Of"

    def test_acronyms_kept(self):
        assert apply_title_case("life at NASA") == "Life at NASA"

    def test_hyphenated_words(self):
        assert apply_title_case("a well-known story") == "A Well-Known Story"

    def test_other_modes(self):
        assert apply_title_case("Storm Front", "uppercase") == "STORM FRONT"
        assert apply_title_case("Storm Front", "lowercase") == "storm front"
        assert apply_title_case("storm FRONT", "as-written") == "storm FRONT"

    def test_empty(self):
        assert apply_title_case("") == ""
        assert apply_title_case(None) == ""
