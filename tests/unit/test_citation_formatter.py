"""
Unit Tests for the Citation Formatter

Author names, author lists, in-text markers and full entries.
"""

import pytest

from core.bibliography.formatter import (
    format_author,
    format_authors,
    format_bibliography_entries,
    format_in_text_citation,
    format_reference,
)
from core.bibliography.models import (
    Author,
    Bibliography,
    BibliographyConfig,
    BookReference,
    CitationStyle,
    InTextCitation,
    Reference,
    WebsiteReference,
    reference_from_dict,
)


def _authors(n):
    return [Author(last_name=f"Author{i}", first_name="Ann") for i in range(1, n + 1)]


class TestFormatAuthor:
    """Test format_author()."""

    def setup_method(self):
        self.author = Author(last_name="Brown", first_name="Carl", middle_name="David")

    def test_apa_initials(self):
        assert format_author(self.author, "APA") == "Brown, C. D."

    def test_ieee_initials_first(self):
        assert format_author(self.author, CitationStyle.IEEE) == "C. D. Brown"

    def test_mla_first_and_later_authors(self):
        assert format_author(self.author, "MLA") == "Brown, Carl David"
        assert format_author(self.author, "MLA", is_first=False) == "Carl David Brown"

    def test_chicago_full_name(self):
        assert format_author(self.author, "Chicago") == "Brown, Carl David"

    def test_suffix(self):
        author = Author(last_name="King", first_name="Martin", suffix="Jr.")
        assert format_author(author, "APA") == "King, M., Jr."

    def test_organization_verbatim(self):
        org = Author(organization="World Health Organization")
        for style in CitationStyle:
            assert format_author(org, style) == "World Health Organization"

    def test_last_name_only(self):
        assert format_author(Author(last_name="Plato"), "APA") == "Plato"


class TestFormatAuthors:
    """Test author-list joining and truncation."""

    def test_empty(self):
        assert format_authors([], "APA") == ""

    def test_apa_two_and_three(self):
        assert format_authors(_authors(2), "APA") == "Author1, A. & Author2, A."
        assert format_authors(_authors(3), "APA") == "Author1, A., Author2, A., & Author3, A."

    def test_apa_more_than_twenty(self):
        result = format_authors(_authors(25), "APA")
        assert "Author19, A., ... Author25, A." in result
        assert "Author20" not in result

    def test_mla(self):
        assert format_authors(_authors(2), "MLA") == "Author1, Ann, and Ann Author2"
        assert format_authors(_authors(4), "MLA") == "Author1, Ann, et al."

    def test_harvard(self):
        assert format_authors(_authors(3), "Harvard") == "Author1, A., Author2, A. and Author3, A."
        assert format_authors(_authors(4), "Harvard") == "Author1, A. et al."

    def test_chicago_truncation(self):
        result = format_authors(_authors(11), "Chicago")
        assert result.endswith("Author7, Ann, et al.")

    def test_ieee_and_vancouver_truncation(self):
        assert format_authors(_authors(7), "IEEE") == "A. Author1, et al."
        result = format_authors(_authors(7), "Vancouver")
        assert result.endswith("Author6, A., et al.")
        assert "Author7" not in result


class TestInTextCitation:
    """Test format_in_text_citation()."""

    def setup_method(self):
        self.ref = BookReference(id="r1", title="Valley Stories", year=2020,
                                 authors=[Author(last_name="Smith", first_name="Anna")])

    def test_apa(self):
        assert format_in_text_citation(self.ref, None, "APA") == "(Smith, 2020)"
        citation = InTextCitation(id="1", page_number="42")
        assert format_in_text_citation(self.ref, citation, "APA") == "(Smith, 2020, p. 42)"

    def test_apa_two_and_many_authors(self):
        self.ref.authors = _authors(2)
        assert format_in_text_citation(self.ref, None, "APA") == "(Author1 & Author2, 2020)"
        self.ref.authors = _authors(3)
        assert format_in_text_citation(self.ref, None, "APA") == "(Author1 et al., 2020)"

    def test_apa_undated(self):
        self.ref.year = None
        assert format_in_text_citation(self.ref, None, "APA") == "(Smith, n.d.)"

    def test_mla(self):
        citation = InTextCitation(id="1", page_number="7")
        assert format_in_text_citation(self.ref, citation, "MLA") == "(Smith 7)"

    def test_mla_without_authors(self):
        self.ref.authors = []
        self.ref.title = "Roads and rivers of the north"
        assert format_in_text_citation(self.ref, None, "MLA") == '("Roads and rivers")'

    def test_numeric_styles(self):
        citation = InTextCitation(id="3")
        assert format_in_text_citation(self.ref, citation, "IEEE") == "[3]"
        for style in ("Chicago", "Vancouver", "AMA"):
            assert format_in_text_citation(self.ref, citation, style) == "<sup>3</sup>"


class TestFormatReference:
    """Test full bibliography entries."""

    def test_apa_book(self, apa_bibliography):
        book = apa_bibliography.references[1]
        assert format_reference(book, "APA") == "Brown, C. D. (2020). <em>Valley Stories</em>. Hill Press."

    def test_apa_journal(self, apa_bibliography):
        journal = apa_bibliography.references[0]
        assert format_reference(journal, "APA") == (
            "Smith, A. (2019). Roads and rivers. <em>Journal of Travel</em>, <em>12</em>(3), 45-67."
        )

    def test_apa_book_with_doi(self):
        book = BookReference(title="T", year=2001, publisher="P", doi="10.1/x",
                             authors=[Author(last_name="Lee", first_name="Kim")])
        assert format_reference(book, "APA").endswith("P. https://doi.org/10.1/x")

    def test_ieee_prefixes_index(self, apa_bibliography):
        book = apa_bibliography.references[1]
        assert format_reference(book, "IEEE", 4).startswith("[4] C. D. Brown, <em>Valley Stories</em>")

    def test_missing_year_prints_nd(self):
        book = BookReference(title="Undated", publisher="P",
                             authors=[Author(last_name="Lee", first_name="Kim")])
        assert "(n.d.)" in format_reference(book, "APA")

    def test_missing_optional_fields_never_raise(self):
        website = WebsiteReference(title="Home")
        for style in CitationStyle:
            assert "Home" in format_reference(website, style)

    def test_unknown_type_fallback(self):
        ref = reference_from_dict({"type": "hologram", "title": "Ghost", "year": 2030})
        assert format_reference(ref, "APA") == "Ghost (2030)"
        assert format_reference(Reference(title="Ghost"), "APA") == "Ghost (n.d.)"

    @pytest.mark.parametrize("ref_type", [
        "book", "journal", "website", "newspaper", "magazine", "conference",
        "thesis", "report", "patent", "video", "podcast", "interview",
        "government", "legal", "software", "dataset", "presentation",
        "manuscript", "archive", "personal",
    ])
    def test_every_type_formats(self, ref_type):
        ref = reference_from_dict({"type": ref_type, "title": "Sample", "year": 2021,
                                   "authors": [{"lastName": "Doe", "firstName": "Jo"}]})
        for style in CitationStyle:
            assert format_reference(ref, style)


class TestBibliographyEntries:
    """Test format_bibliography_entries()."""

    def test_sorted_by_author(self, apa_bibliography):
        entries = format_bibliography_entries(apa_bibliography)
        assert entries[0].startswith("Brown")
        assert entries[1].startswith("Smith")

    def test_numeric_prefix(self, apa_bibliography):
        apa_bibliography.config.numbering_style = "numeric"
        entries = format_bibliography_entries(apa_bibliography)
        assert entries[0].startswith("1. Brown")
        assert entries[1].startswith("2. Smith")

    def test_alphabetic_prefix(self, apa_bibliography):
        apa_bibliography.config.numbering_style = "alphabetic"
        entries = format_bibliography_entries(apa_bibliography)
        assert entries[0].startswith("a. ")
        assert entries[1].startswith("b. ")

    def test_empty(self):
        bibliography = Bibliography(config=BibliographyConfig(enabled=True))
        assert format_bibliography_entries(bibliography) == []
