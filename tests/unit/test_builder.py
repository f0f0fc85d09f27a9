"""
Unit Tests for LayoutDocumentBuilder

Section order, front/back matter, chapter openings and body blocks.
"""

import pytest

from core.contracts import Chapter, ContractValidationError, Manuscript
from core.layout import (
    BlockType,
    LayoutDocumentBuilder,
    PageRole,
    SectionKind,
    build_layout_document,
)
from core.layout.builder import truncate_description
from core.publishing.resolver import resolve_settings


def _kinds(document):
    return [section.kind for section in document.sections]


class TestSectionOrder:
    """Test which sections are built and in what order."""

    def test_default_sections(self, single_chapter_manuscript):
        document = build_layout_document(single_chapter_manuscript)
        assert _kinds(document) == [
            SectionKind.COVER,
            SectionKind.TITLE_PAGE,
            SectionKind.COPYRIGHT,
            SectionKind.TABLE_OF_CONTENTS,
            SectionKind.CHAPTER,
        ]

    def test_roles_in_order(self, manuscript_with_bibliography):
        document = build_layout_document(manuscript_with_bibliography)
        order = ["cover", "front-matter", "body", "back-matter"]
        ranks = [order.index(section.role.value) for section in document.sections]
        assert ranks == sorted(ranks)
        assert document.sections[-1].kind == SectionKind.BIBLIOGRAPHY

    def test_front_matter_order_respected(self, single_chapter_manuscript):
        settings = resolve_settings({"frontMatter": {
            "order": ["table-of-contents", "dedication", "title-page"],
            "dedicationPage": True,
        }})
        document = build_layout_document(single_chapter_manuscript, settings)
        assert _kinds(document)[1:4] == [
            SectionKind.TABLE_OF_CONTENTS, SectionKind.DEDICATION, SectionKind.TITLE_PAGE,
        ]

    def test_disabled_sections_skipped(self, single_chapter_manuscript):
        settings = resolve_settings({"frontMatter": {"titlePage": False, "copyrightPage": False,
                                                     "tableOfContents": False}})
        document = build_layout_document(single_chapter_manuscript, settings)
        assert _kinds(document) == [SectionKind.COVER, SectionKind.CHAPTER]

    def test_half_title_skipped_with_cover_image(self, single_chapter_manuscript):
        settings = resolve_settings({"frontMatter": {"halfTitlePage": True}})
        assert SectionKind.HALF_TITLE in _kinds(build_layout_document(single_chapter_manuscript, settings))
        single_chapter_manuscript.cover_image = "cover.png"
        assert SectionKind.HALF_TITLE not in _kinds(build_layout_document(single_chapter_manuscript, settings))

    def test_matter_sections_use_manuscript_text(self, single_chapter_manuscript):
        single_chapter_manuscript.matter = {"preface": "Why I wrote this.", "epilogue": "Years later."}
        settings = resolve_settings({"frontMatter": {"preface": True}, "backMatter": {"epilogue": True}})
        document = build_layout_document(single_chapter_manuscript, settings)
        preface = document.get_section(SectionKind.PREFACE)
        epilogue = document.get_section(SectionKind.EPILOGUE)
        assert preface.role == PageRole.FRONT_MATTER
        assert [b.text for b in preface.blocks] == ["Preface", "Why I wrote this."]
        assert epilogue.role == PageRole.BACK_MATTER
        assert epilogue.running_strings.chapter == "Epilogue"

    def test_back_cover_last(self, single_chapter_manuscript):
        single_chapter_manuscript.back_cover_url = "https://example.com/back.jpg"
        document = build_layout_document(single_chapter_manuscript)
        assert document.sections[-1].kind == SectionKind.BACK_COVER
        assert document.sections[-1].role == PageRole.BACK_MATTER

    def test_chapter_per_manuscript_chapter(self, sample_manuscript):
        document = build_layout_document(sample_manuscript)
        assert [s.anchor for s in document.chapter_sections] == ["chapter-1", "chapter-2"]


class TestFrontMatter:
    """Test cover, title page, copyright and contents."""

    def test_text_cover(self, single_chapter_manuscript):
        cover = build_layout_document(single_chapter_manuscript).get_section(SectionKind.COVER)
        assert cover.anchor == "cover"
        assert [b.text for b in cover.blocks] == ["The Long Road", "Jane Doe"]

    def test_image_cover(self, single_chapter_manuscript):
        single_chapter_manuscript.cover_url = "https://example.com/cover.jpg"
        cover = build_layout_document(single_chapter_manuscript).get_section(SectionKind.COVER)
        assert cover.blocks[0].type == BlockType.IMAGE
        assert cover.blocks[0].attributes["src"] == "https://example.com/cover.jpg"

    def test_title_page_novel(self, single_chapter_manuscript):
        page = build_layout_document(single_chapter_manuscript).get_section(SectionKind.TITLE_PAGE)
        texts = [b.text for b in page.blocks]
        assert texts[:3] == ["The Long Road", "A Novel By", "Jane Doe"]

    def test_title_page_non_fiction(self, single_chapter_manuscript):
        single_chapter_manuscript.genre = "cookery"
        page = build_layout_document(single_chapter_manuscript).get_section(SectionKind.TITLE_PAGE)
        texts = [b.text for b in page.blocks]
        assert "by Jane Doe" in texts
        assert "A Novel By" not in texts
        assert "cookery" in texts

    def test_long_description_truncated(self):
        text = "word " * 100
        result = truncate_description(text)
        assert len(result) <= 300
        assert result.endswith("...")
        assert truncate_description("short") == "short"

    def test_copyright_page(self, single_chapter_manuscript):
        settings = resolve_settings({"isbn": "978-0-00-000000-0", "publisher": "Hill Press",
                                     "publisherLocation": "Leeds", "edition": "First",
                                     "printingNumber": 2})
        builder = LayoutDocumentBuilder(year=2024)
        page = builder.build(single_chapter_manuscript, settings).get_section(SectionKind.COPYRIGHT)
        texts = [b.text for b in page.blocks]
        assert "Copyright © 2024 Jane Doe" in texts
        assert "All rights reserved." in texts
        assert "ISBN: 978-0-00-000000-0" in texts
        assert "Published by Hill Press" in texts
        assert "Leeds" in texts
        assert "First Edition" in texts
        assert "Printing 2" in texts

    def test_contents_entry(self, single_chapter_manuscript):
        document = build_layout_document(single_chapter_manuscript)
        toc = document.get_section(SectionKind.TABLE_OF_CONTENTS)
        entries = toc.blocks_of(BlockType.TOC_ENTRY)
        assert toc.anchor == "contents"
        assert toc.blocks[0].text == "Contents"
        assert len(entries) == 1
        assert entries[0].text == "Chapter 1   Beginning ... 1"
        assert entries[0].attributes["anchor"] == "chapter-1"

    def test_contents_pages_cumulative(self, sample_manuscript):
        document = build_layout_document(sample_manuscript)
        assert [e.page for e in document.toc_entries] == document.estimated_page_numbers
        assert document.estimated_page_numbers[0] == 1
        assert document.estimated_page_numbers[1] > 1

    def test_contents_bibliography_entry(self, manuscript_with_bibliography):
        document = build_layout_document(manuscript_with_bibliography)
        last = document.toc_entries[-1]
        assert last.anchor == "bibliography"
        assert last.label == ""
        assert last.page > document.toc_entries[-2].page

    def test_duplicate_chapters_listed_once(self, single_chapter_manuscript):
        single_chapter_manuscript.chapters.append(
            Chapter(number=1, title="Beginning", content="Again."))
        document = build_layout_document(single_chapter_manuscript)
        assert len(document.toc_entries) == 1

    def test_hidden_numbers_no_label(self, single_chapter_manuscript):
        settings = resolve_settings({"chapters": {"showChapterNumber": False}})
        document = build_layout_document(single_chapter_manuscript, settings)
        assert document.toc_entries[0].text == "Beginning ... 1"

    def test_hidden_position_no_label(self, single_chapter_manuscript):
        settings = resolve_settings({"chapters": {"chapterNumberPosition": "hidden"}})
        document = build_layout_document(single_chapter_manuscript, settings)
        assert document.toc_entries[0].text == "Beginning ... 1"
        assert not document.chapter_sections[0].blocks_of(BlockType.CHAPTER_NUMBER)

    def test_front_matter_numbering(self, single_chapter_manuscript):
        document = build_layout_document(single_chapter_manuscript)
        front = document.sections_by_role(PageRole.FRONT_MATTER)
        assert {s.numbering for s in front} == {"roman-lower"}

    def test_front_matter_unnumbered_without_footer(self, single_chapter_manuscript):
        settings = resolve_settings({"headerFooter": {"footerEnabled": False}})
        front = build_layout_document(single_chapter_manuscript, settings).sections_by_role(PageRole.FRONT_MATTER)
        assert {s.numbering for s in front} == {"none"}


class TestChapterBlocks:
    """Test chapter openings and body text."""

    def _chapter(self, manuscript, overrides=None):
        document = build_layout_document(manuscript, resolve_settings(overrides))
        return document.chapter_sections[0]

    def test_body_paragraphs_and_scene_break(self, single_chapter_manuscript):
        chapter = self._chapter(single_chapter_manuscript)
        body = [b for b in chapter.blocks if b.type in (BlockType.PARAGRAPH, BlockType.SCENE_BREAK)]
        assert [b.type for b in body] == [BlockType.PARAGRAPH, BlockType.SCENE_BREAK, BlockType.PARAGRAPH]
        assert body[0].text == "The road out of the valley was longer than anyone remembered."
        assert body[1].text == "* * *"
        assert body[0].attributes.get("first") is True
        assert body[2].attributes.get("first") is True

    def test_echoed_title_not_in_body(self, single_chapter_manuscript):
        chapter = self._chapter(single_chapter_manuscript)
        assert not any("Chapter 1: Beginning" in b.text for b in chapter.blocks)

    def test_default_opening(self, single_chapter_manuscript):
        chapter = self._chapter(single_chapter_manuscript)
        head = [(b.type, b.text) for b in chapter.blocks[:4]]
        assert head == [
            (BlockType.CHAPTER_LABEL, "Chapter"),
            (BlockType.CHAPTER_NUMBER, "1"),
            (BlockType.CHAPTER_TITLE, "Beginning"),
            (BlockType.ORNAMENT, "━" * 9),
        ]

    def test_chapter_section_attributes(self, single_chapter_manuscript):
        chapter = self._chapter(single_chapter_manuscript)
        assert chapter.role == PageRole.BODY
        assert chapter.start_on_recto is True
        assert chapter.numbering == "arabic"
        assert chapter.running_strings.chapter == "Beginning"
        assert chapter.running_strings.title == "The Long Road"

    def test_before_title_roman(self, single_chapter_manuscript):
        chapter = self._chapter(single_chapter_manuscript, {"chapters": {
            "chapterNumberPosition": "before-title", "chapterNumberStyle": "roman",
            "chapterOrnament": "none"}})
        assert chapter.blocks[0].type == BlockType.CHAPTER_TITLE
        assert chapter.blocks[0].text == "I. Beginning"

    def test_below_title_word(self, single_chapter_manuscript):
        chapter = self._chapter(single_chapter_manuscript, {"chapters": {
            "chapterNumberPosition": "below-title", "chapterNumberStyle": "word",
            "chapterOrnament": "stars", "chapterOrnamentPosition": "above-number"}})
        head = [(b.type, b.text) for b in chapter.blocks[:3]]
        assert head == [
            (BlockType.ORNAMENT, "✦ ✦ ✦"),
            (BlockType.CHAPTER_TITLE, "Beginning"),
            (BlockType.CHAPTER_LABEL, "Chapter One"),
        ]

    def test_uppercase_title(self, single_chapter_manuscript):
        chapter = self._chapter(single_chapter_manuscript, {"chapters": {"chapterTitleCase": "uppercase"}})
        assert chapter.blocks_of(BlockType.CHAPTER_TITLE)[0].text == "BEGINNING"
        assert chapter.blocks_of(BlockType.CHAPTER_TITLE)[0].attributes["source_title"] == "Beginning"

    def test_drop_cap_on_first_paragraph(self, single_chapter_manuscript):
        chapter = self._chapter(single_chapter_manuscript, {"typography": {"dropCapEnabled": True}})
        paragraphs = chapter.blocks_of(BlockType.PARAGRAPH)
        assert paragraphs[0].style == "drop-cap"
        assert paragraphs[0].attributes["drop_cap_lines"] == 3
        assert paragraphs[1].style == ""

    def test_scene_break_symbol_style(self, single_chapter_manuscript):
        chapter = self._chapter(single_chapter_manuscript, {"chapters": {"sceneBreakStyle": "ornament"}})
        assert chapter.blocks_of(BlockType.SCENE_BREAK)[0].text == "❦"

    def test_blockquote(self):
        manuscript = Manuscript(title="T", author="A", chapters=[
            Chapter(number=1, title="One", content="Opening.\n\n> Quoted line.\n\nClosing.")])
        chapter = build_layout_document(manuscript).chapter_sections[0]
        quotes = chapter.blocks_of(BlockType.BLOCKQUOTE)
        assert [q.text for q in quotes] == ["Quoted line."]

    def test_opening_blockquote_takes_no_drop_cap(self):
        manuscript = Manuscript(title="T", author="A", chapters=[
            Chapter(number=1, title="One", content="> Quoted line.\n\nNext.")])
        settings = resolve_settings({"typography": {"dropCapEnabled": True}})
        chapter = build_layout_document(manuscript, settings).chapter_sections[0]
        assert [q.text for q in chapter.blocks_of(BlockType.BLOCKQUOTE)] == ["Quoted line."]
        assert all(b.style != "drop-cap" for b in chapter.blocks)
        assert not any(b.text.startswith(">") for b in chapter.blocks)

    def test_empty_chapter_keeps_header(self):
        manuscript = Manuscript(title="T", author="A", chapters=[
            Chapter(number=1, title="Empty", content="Chapter 1: Empty")])
        chapter = build_layout_document(manuscript).chapter_sections[0]
        assert chapter.blocks_of(BlockType.CHAPTER_TITLE)
        assert not chapter.blocks_of(BlockType.PARAGRAPH)


class TestBibliographySection:
    """Test the bibliography back-matter section."""

    def test_entries(self, manuscript_with_bibliography):
        document = build_layout_document(manuscript_with_bibliography)
        section = document.get_section(SectionKind.BIBLIOGRAPHY)
        entries = section.blocks_of(BlockType.BIBLIOGRAPHY_ENTRY)
        assert section.blocks[0].text == "Bibliography"
        assert entries[0].text.startswith("Brown, C. D. (2020)")
        assert entries[0].attributes["hanging_indent"] is True
        assert section.blocks[-1].text == "References formatted in APA style."

    def test_disabled_bibliography_omitted(self, manuscript_with_bibliography):
        manuscript_with_bibliography.bibliography.config.enabled = False
        document = build_layout_document(manuscript_with_bibliography)
        assert document.get_section(SectionKind.BIBLIOGRAPHY) is None
        assert all(e.anchor != "bibliography" for e in document.toc_entries)


class TestBuildInputs:
    """Test build() argument handling."""

    def test_invalid_manuscript_raises(self):
        with pytest.raises(ContractValidationError):
            build_layout_document(Manuscript(title="", author="A", chapters=[]))

    def test_dict_manuscript_and_settings(self, single_chapter_manuscript):
        document = build_layout_document(single_chapter_manuscript.to_dict(), {"trimSize": "a4"})
        assert document.settings.trim_size == "a4"
        assert document.geometry.width == 8.27

    def test_manuscript_settings_used(self, single_chapter_manuscript):
        single_chapter_manuscript.publishing_settings = {"trimSize": "us-letter"}
        assert build_layout_document(single_chapter_manuscript).geometry.width == 8.5

    def test_manuscript_genre_picks_style(self, single_chapter_manuscript):
        single_chapter_manuscript.genre = "fantasy"
        assert build_layout_document(single_chapter_manuscript).settings.style_preset == "elegant"

    def test_metadata(self, single_chapter_manuscript):
        document = LayoutDocumentBuilder(year=2021).build(single_chapter_manuscript)
        assert document.metadata["year"] == 2021
        assert document.metadata["language"] == "en-US"

    def test_to_dict(self, single_chapter_manuscript):
        data = build_layout_document(single_chapter_manuscript).to_dict()
        assert data["title"] == "The Long Road"
        assert data["sections"][0]["kind"] == "cover"
