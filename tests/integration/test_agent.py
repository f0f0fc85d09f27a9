"""
Integration Tests for LayoutAgent

Full pipeline: validate -> resolve -> build -> render.
"""

import pytest

from core.contracts import ContractValidationError
from core.layout import LayoutAgent, UnsupportedFormatError


@pytest.fixture
def agent():
    return LayoutAgent(year=2024)


class TestProcess:
    """Test LayoutAgent.process()."""

    def test_format_from_suffix(self, agent, sample_manuscript, tmp_path):
        path = agent.process(sample_manuscript, tmp_path / "book.pdf")
        assert path.read_bytes().startswith(b"%PDF")

    def test_explicit_format_wins(self, agent, sample_manuscript, tmp_path):
        path = agent.process(sample_manuscript, tmp_path / "book.out", output_format="html")
        assert path.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")

    def test_plain_text(self, agent, sample_manuscript, tmp_path):
        path = agent.process(sample_manuscript, tmp_path / "book.txt")
        assert path.read_text(encoding="utf-8").startswith("The Long Road\nby Jane Doe")

    def test_markdown(self, agent, sample_manuscript, tmp_path):
        path = agent.process(sample_manuscript, tmp_path / "book.md")
        assert path.read_text(encoding="utf-8").startswith("# The Long Road\n")

    def test_dict_input(self, agent, sample_manuscript, tmp_path):
        path = agent.process(sample_manuscript.to_dict(), tmp_path / "book.epub")
        assert path.exists()

    def test_invalid_manuscript(self, agent, tmp_path):
        with pytest.raises(ContractValidationError):
            agent.process({"title": "T", "author": "", "chapters": []}, tmp_path / "book.pdf")

    def test_unsupported_format(self, agent, sample_manuscript, tmp_path):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            agent.process(sample_manuscript, tmp_path / "book.mobi")
        assert exc_info.value.output_format == "mobi"
        assert "pdf" in exc_info.value.supported

    def test_unsupported_format_is_value_error(self, agent):
        with pytest.raises(ValueError):
            agent.get_renderer("rtf")

    def test_overrides_replace_manuscript_settings(self, agent, sample_manuscript):
        sample_manuscript.publishing_settings = {"trimSize": "a4"}
        assert agent.resolve(sample_manuscript).trim_size == "a4"
        assert agent.resolve(sample_manuscript, overrides={"trimSize": "6x9"}).trim_size == "6x9"

    def test_genre_picks_style(self, agent, sample_manuscript):
        assert agent.resolve(sample_manuscript, genre="fantasy").style_preset == "elegant"


class TestAgentHelpers:
    """Test format resolution and statistics."""

    def test_supported_formats(self):
        formats = LayoutAgent.supported_formats()
        for fmt in ("pdf", "html", "docx", "epub", "txt", "md"):
            assert fmt in formats

    def test_output_format(self, agent):
        assert agent.output_format("book.DOCX") == "docx"
        assert agent.output_format("book.pdf", ".epub") == "epub"

    def test_renderer_cached(self, agent):
        assert agent.get_renderer("pdf") is agent.get_renderer("PDF")

    def test_get_stats(self, agent, sample_manuscript):
        stats = agent.get_stats(agent.build(sample_manuscript))
        assert stats["chapters"] == 2
        assert stats["sections"] == 6
        assert stats["blank_pages"] == 1
        assert stats["trim"] == "5.83x8.27in"

    def test_from_json(self, sample_manuscript, tmp_path):
        path = LayoutAgent.from_json(sample_manuscript.to_json(), str(tmp_path / "book.md"))
        assert path.exists()
