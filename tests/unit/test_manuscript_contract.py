"""
Unit Tests for the Manuscript input contract
"""

import json

import pytest

from core.bibliography.models import BookReference, CitationStyle
from core.contracts import Chapter, ContractValidationError, Manuscript


class TestManuscriptValidation:
    """Test Manuscript.validate()."""

    def test_valid(self, sample_manuscript):
        assert sample_manuscript.validate() == []
        assert sample_manuscript.is_valid()

    def test_missing_fields(self):
        manuscript = Manuscript(title="  ", author="", chapters=None)
        errors = manuscript.validate()
        assert "title is required" in errors
        assert "author is required" in errors
        assert "chapters are required" in errors

    def test_empty_chapter_list_is_valid(self):
        assert Manuscript(title="T", author="A", chapters=[]).is_valid()

    def test_bad_chapter_numbers(self):
        manuscript = Manuscript(title="T", author="A", chapters=[
            Chapter(number=0), Chapter(number="two"), Chapter(number=True)])
        errors = manuscript.validate()
        assert len(errors) == 3
        assert errors[0] == "chapters[0].number must be a positive integer"

    def test_assert_valid_raises(self):
        with pytest.raises(ContractValidationError) as exc_info:
            Manuscript(title="T", author="", chapters=[]).assert_valid()
        assert exc_info.value.errors == ["author is required"]


class TestManuscriptSerialization:
    """Test from_dict / to_dict."""

    def test_camel_case_document(self):
        data = {
            "title": "The Long Road",
            "author": "Jane Doe",
            "chapters": [{"number": "1", "title": "Beginning", "content": "Text."}],
            "coverImage": "cover.png",
            "backCoverUrl": "https://example.com/back.jpg",
            "publishingSettings": {"trimSize": "a4"},
            "matter": {"dedication": "For Sam.", "preface": ""},
            "bibliography": {
                "config": {"enabled": True, "citationStyle": "mla"},
                "references": [{"type": "book", "id": "r1", "title": "Valley Stories",
                                "authors": [{"lastName": "Brown", "firstName": "Carl"}],
                                "year": "2020"}],
            },
        }
        manuscript = Manuscript.from_dict(data)
        assert manuscript.chapters[0].number == 1
        assert manuscript.cover_source == "cover.png"
        assert manuscript.back_cover_source == "https://example.com/back.jpg"
        assert manuscript.publishing_settings == {"trimSize": "a4"}
        assert manuscript.matter == {"dedication": "For Sam."}
        assert manuscript.has_bibliography
        assert manuscript.bibliography.config.citation_style == CitationStyle.MLA
        reference = manuscript.bibliography.references[0]
        assert isinstance(reference, BookReference)
        assert reference.year == 2020
        assert reference.authors[0].last_name == "Brown"

    def test_cover_url_fallback(self):
        manuscript = Manuscript.from_dict({"title": "T", "author": "A", "chapters": [],
                                           "coverUrl": "https://example.com/c.jpg"})
        assert manuscript.cover_source == "https://example.com/c.jpg"

    def test_json_round_trip(self, manuscript_with_bibliography):
        restored = Manuscript.from_json(manuscript_with_bibliography.to_json())
        assert restored.to_dict() == manuscript_with_bibliography.to_dict()
        assert restored.checksum() == manuscript_with_bibliography.checksum()

    def test_to_json_keeps_unicode(self):
        manuscript = Manuscript(title="Café", author="Zoë", chapters=[])
        assert json.loads(manuscript.to_json())["title"] == "Café"
        assert "Café" in manuscript.to_json()

    def test_optional_fields_omitted(self, single_chapter_manuscript):
        data = single_chapter_manuscript.to_dict()
        assert set(data) == {"title", "author", "chapters"}

    def test_get_chapter(self, sample_manuscript):
        assert sample_manuscript.get_chapter(2).title == "The Storm"
        assert sample_manuscript.get_chapter(9) is None

    def test_matter_text(self, sample_manuscript):
        assert sample_manuscript.matter_text("preface") == ""
