"""
Unit Tests for plain-text and Markdown export
"""

from core.contracts import Chapter, Manuscript
from core.export import export_markdown, export_plain_text


class TestPlainText:
    """Test export_plain_text()."""

    def test_title_block(self, sample_manuscript):
        text = export_plain_text(sample_manuscript)
        assert text.startswith("The Long Road\nby Jane Doe\n\n" + "=" * 50 + "\n\n")

    def test_chapter_block(self, single_chapter_manuscript):
        text = export_plain_text(single_chapter_manuscript)
        expected = (
            "\nChapter 1: Beginning\n\n"
            "The road out of the valley was longer than anyone remembered.\n\n"
            "* * *\n\n"
            "By nightfall the lanterns of the village had disappeared behind the hills.\n\n"
            + "-" * 50 + "\n"
        )
        assert text.endswith(expected)

    def test_echoed_heading_removed_once(self, single_chapter_manuscript):
        text = export_plain_text(single_chapter_manuscript)
        assert text.count("Chapter 1: Beginning") == 1

    def test_scene_breaks_normalized(self):
        manuscript = Manuscript(title="T", author="A", chapters=[
            Chapter(number=1, title="One", content="Before.\n\n---\n\nAfter.")])
        assert "Before.\n\n* * *\n\nAfter." in export_plain_text(manuscript)

    def test_every_chapter_exported(self, sample_manuscript):
        text = export_plain_text(sample_manuscript)
        assert "Chapter 2: The Storm" in text
        assert "Paragraph 39 of the storm." in text


class TestMarkdown:
    """Test export_markdown()."""

    def test_structure(self, single_chapter_manuscript):
        text = export_markdown(single_chapter_manuscript)
        assert text == (
            "# The Long Road\n*by Jane Doe*\n\n---\n\n"
            "## Chapter 1: Beginning\n\n"
            "The road out of the valley was longer than anyone remembered.\n\n"
            "---\n\n"
            "By nightfall the lanterns of the village had disappeared behind the hills.\n\n"
        )

    def test_bibliography_list(self, manuscript_with_bibliography):
        text = export_markdown(manuscript_with_bibliography)
        assert "## Bibliography\n\n" in text
        assert "- Brown, C. D. (2020). *Valley Stories*. Hill Press.\n" in text
        assert "- Smith, A. (2019). Roads and rivers. *Journal of Travel*, *12*(3), 45-67.\n" in text
        assert "<em>" not in text

    def test_no_bibliography_when_disabled(self, manuscript_with_bibliography):
        manuscript_with_bibliography.bibliography.config.enabled = False
        assert "## Bibliography" not in export_markdown(manuscript_with_bibliography)

    def test_empty_chapters(self):
        manuscript = Manuscript(title="T", author="A", chapters=[])
        assert export_markdown(manuscript) == "# T\n*by A*\n\n---\n\n"
