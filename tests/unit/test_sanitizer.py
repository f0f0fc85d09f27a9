"""
Unit Tests for the Content Sanitizer

Artifact removal, chapter-title echo removal, idempotence, scene-break
detection and the paragraph/metrics helpers.
"""

import pytest

from core.formatting.sanitizer import (
    count_words,
    estimate_reading_time,
    is_scene_break,
    join_paragraphs,
    normalize_dashes,
    remove_artifacts,
    sanitize,
    sanitize_title,
    smarten_quotes,
    split_into_paragraphs,
    validate_text,
)


class TestSanitize:
    """Test sanitize()."""

    def test_empty_input(self):
        assert sanitize(None) == ""
        assert sanitize("") == ""

    def test_removes_numbered_title_echo(self):
        text = "Chapter 3: The Storm\n\nRain fell all night."
        assert sanitize(text, "The Storm", 3) == "Rain fell all night."

    def test_removes_bare_chapter_line(self):
        text = "Chapter 3\n\nRain fell all night."
        assert sanitize(text, "The Storm", 3) == "Rain fell all night."

    def test_removes_title_line(self):
        text = "The Storm\n\nRain fell all night."
        assert sanitize(text, "The Storm", 3) == "Rain fell all night."

    def test_title_only_content_is_empty(self):
        assert sanitize("Chapter 3: The Storm", "The Storm", 3) == ""
        assert sanitize("The Storm.", "The Storm", 3) == ""

    def test_keeps_title_words_inside_prose(self):
        text = "They waited for the storm to pass."
        assert sanitize(text, "The Storm", 3) == text

    def test_removes_meta_markers(self):
        text = "She left.\n\n[END OF CHAPTER]"
        assert sanitize(text) == "She left."

    def test_removes_placeholder_lines(self):
        text = "First line.\n[Insert battle scene here]\n\nSecond paragraph."
        assert "Insert" not in sanitize(text)

    def test_removes_emphasis_markers(self):
        assert sanitize("It was **very** dark.") == "It was very dark."
        assert sanitize("It was __very__ dark.") == "It was very dark."

    def test_adjacent_bold_runs(self):
        assert remove_artifacts("**x**" * 5) == "xxxxx"
        assert sanitize("**one****two** and __three____four__") == "onetwo and threefour"

    def test_bold_italic_markers(self):
        assert sanitize("***a***") == "a"
        assert sanitize("A ***very*** dark night.") == "A very dark night."

    @pytest.mark.parametrize("token", ["***", "****", "*****", "* * *"])
    def test_star_scene_breaks_survive_emphasis_removal(self, token):
        text = f"Before.\n\n{token}\n\nAfter."
        paragraphs = split_into_paragraphs(sanitize(text))
        assert paragraphs == ["Before.", token, "After."]
        assert is_scene_break(paragraphs[1])

    def test_removes_markdown_headers(self):
        assert sanitize("## Part One\n\nText.") == "Part One\n\nText."

    def test_removes_html_emphasis(self):
        assert sanitize("A <em>quiet</em> night.") == "A quiet night."

    def test_collapses_dash_runs(self):
        assert sanitize("wait--what") == "wait—what"

    def test_preserves_scene_breaks(self):
        text = "Before.\n\n* * *\n\nAfter.\n\n***\n\nEnd."
        assert split_into_paragraphs(sanitize(text)) == ["Before.", "* * *", "After.", "***", "End."]

    def test_normalizes_blank_lines(self):
        assert sanitize("One.\n\n\n\n\nTwo.") == "One.\n\nTwo."

    def test_normalizes_line_endings(self):
        assert sanitize("One.\r\n\r\nTwo.") == "One.\n\nTwo."

    @pytest.mark.parametrize("text", [
        "Chapter 2: Rain\n\n**Bold** start.\n\n\n\n[END]",
        "## Chapter 2\n\nRain --- and more rain.",
        "Rain\n\nRain\n\nStill raining.",
    ])
    def test_idempotent(self, text):
        once = sanitize(text, "Rain", 2)
        assert sanitize(once, "Rain", 2) == once

    def test_long_title_echo_run_settles(self):
        text = "\n\n".join(["Rain"] * 80) + "\n\nStill raining."
        once = sanitize(text, "Rain", 2)
        assert once == "Still raining."
        assert sanitize(once, "Rain", 2) == once

    def test_non_numeric_chapter_number(self):
        assert sanitize("Plain text.", "Title", "abc") == "Plain text."


class TestSceneBreak:
    """Test is_scene_break()."""

    @pytest.mark.parametrize("token", ["***", "* * *", "---", "- - -", "❧", "• • •"])
    def test_sentinel_tokens(self, token):
        assert is_scene_break(token)

    def test_short_punctuation_fallback(self):
        assert is_scene_break("**")
        assert is_scene_break(" -- ")

    def test_not_a_break(self):
        assert not is_scene_break("")
        assert not is_scene_break(None)
        assert not is_scene_break("Hello")
        assert not is_scene_break("* * * * * *")


class TestHelpers:
    """Test paragraph, metrics and typography helpers."""

    def test_split_and_join(self):
        paragraphs = split_into_paragraphs("One.\n\n  \n\nTwo.\n \nThree.")
        assert paragraphs == ["One.", "Two.", "Three."]
        assert join_paragraphs(paragraphs) == "One.\n\nTwo.\n\nThree."

    def test_count_words(self):
        assert count_words("one two  three") == 3
        assert count_words(None) == 0

    def test_reading_time_rounds_up(self):
        assert estimate_reading_time(0) == 0
        assert estimate_reading_time(250) == 1
        assert estimate_reading_time(251) == 2

    def test_sanitize_title(self):
        assert sanitize_title('"**The  Storm**"') == "The Storm"
        assert sanitize_title(None) == ""

    def test_validate_text_reports_issues(self):
        issues = validate_text("**Bold** and [END]")
        assert "Contains markdown formatting" in issues
        assert "Contains meta text markers" in issues
        assert validate_text("Clean prose.") == []

    def test_smarten_quotes(self):
        assert smarten_quotes('"Hi," she said. It\'s late.') == "“Hi,” she said. It’s late."

    def test_normalize_dashes_keeps_scene_breaks(self):
        assert normalize_dashes("wait--what\n---\npages 10-12") == "wait—what\n---\npages 10–12"
