"""
Unit Tests for the Paginator

Page plans for built documents: roles, recto openings and blank pads.
"""

from core.layout import (
    BlockType,
    PageRole,
    Paginator,
    SectionKind,
    build_layout_document,
    paginate,
)
from core.layout.document import Section
from core.publishing.resolver import resolve_settings


class TestPaginate:
    """Test Paginator.paginate()."""

    def test_cover_is_page_one(self, single_chapter_manuscript):
        pages = paginate(build_layout_document(single_chapter_manuscript))
        assert pages[0].role == PageRole.COVER
        assert pages[0].page_number == 1
        assert pages[0].display_number == ""

    def test_physical_numbers_consecutive(self, sample_manuscript):
        pages = paginate(build_layout_document(sample_manuscript))
        assert [p.page_number for p in pages] == list(range(1, len(pages) + 1))

    def test_front_matter_roman(self, single_chapter_manuscript):
        pages = paginate(build_layout_document(single_chapter_manuscript))
        front = [p for p in pages if p.role == PageRole.FRONT_MATTER]
        assert [p.display_number for p in front] == ["i", "ii", "iii"]

    def test_chapters_open_on_recto(self, sample_manuscript):
        pages = paginate(build_layout_document(sample_manuscript))
        openers = [p for p in pages if p.is_first_in_section and p.section_anchor.startswith("chapter-")]
        assert len(openers) == 2
        assert all(p.is_recto for p in openers)

    def test_blank_pad_before_recto_chapter(self, sample_manuscript):
        # cover, title, copyright, contents, chapter 1 (one page) -> chapter 2 needs a pad
        pages = paginate(build_layout_document(sample_manuscript))
        blanks = [p for p in pages if p.is_blank]
        assert len(blanks) == 1
        assert blanks[0].page_number == 6
        assert blanks[0].role == PageRole.BODY
        assert not blanks[0].has_header
        assert blanks[0].footer_center == ""

    def test_no_pad_when_recto_not_required(self, sample_manuscript):
        settings = resolve_settings({"chapters": {"startOnOddPage": False}})
        pages = paginate(build_layout_document(sample_manuscript, settings))
        assert not any(p.is_blank for p in pages)

    def test_body_restarts_at_one(self, sample_manuscript):
        pages = paginate(build_layout_document(sample_manuscript))
        body = [p for p in pages if p.role == PageRole.BODY]
        assert body[0].counter == 1
        assert body[0].display_number == "1"

    def test_section_start_pages(self, sample_manuscript):
        pages = paginate(build_layout_document(sample_manuscript))
        starts = Paginator.section_start_pages(pages)
        assert starts["chapter-1"] == 1
        # chapter 1 page, blank pad, then chapter 2
        assert starts["chapter-2"] == 3
        assert starts["contents"] == 3

    def test_back_matter_continues_body(self, manuscript_with_bibliography):
        pages = paginate(build_layout_document(manuscript_with_bibliography))
        body = [p for p in pages if p.role == PageRole.BODY]
        back = [p for p in pages if p.role == PageRole.BACK_MATTER]
        assert back[0].counter == body[-1].counter + 1

    def test_running_heads_in_plan(self, sample_manuscript, headers_on):
        document = build_layout_document(sample_manuscript, resolve_settings(headers_on))
        pages = paginate(document)
        chapter_two = [p for p in pages if p.section_anchor == "chapter-2"]
        assert len(chapter_two) > 1
        assert not chapter_two[0].has_header
        assert "The Storm" in chapter_two[1].header.values()


class TestSectionPages:
    """Test Paginator.section_pages()."""

    def test_cover_one_page(self, single_chapter_manuscript):
        document = build_layout_document(single_chapter_manuscript)
        cover = document.get_section(SectionKind.COVER)
        assert Paginator.section_pages(cover, 1500, 30) == 1

    def test_long_matter_spans_pages(self):
        section = Section(kind=SectionKind.PREFACE, role=PageRole.FRONT_MATTER)
        section.add(BlockType.PARAGRAPH, "x" * 3500)
        assert Paginator.section_pages(section, 1500, 30) == 3

    def test_contents_grows_with_entries(self):
        section = Section(kind=SectionKind.TABLE_OF_CONTENTS, role=PageRole.FRONT_MATTER)
        for i in range(40):
            section.add(BlockType.TOC_ENTRY, f"Chapter {i}")
        assert Paginator.section_pages(section, 1500, 30) == 2
