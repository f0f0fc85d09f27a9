"""
Unit Tests for SectionManager

Numbering runs per page role, running-head suppression and mirroring.
"""

import pytest

from core.layout import LayoutError, PageRole, RunningStrings, Section, SectionKind
from core.layout.sections import NumberingStyle, SectionManager
from core.publishing.resolver import resolve_settings


def _section(kind, role, numbering="arabic", running=None, anchor=""):
    return Section(kind=kind, role=role, numbering=numbering, running_strings=running, anchor=anchor)


def _chapter(title="Beginning", anchor="chapter-1"):
    return _section(
        SectionKind.CHAPTER, PageRole.BODY, anchor=anchor,
        running=RunningStrings(title="The Long Road", author="Jane Doe", chapter=title),
    )


class TestNumbering:
    """Test the numbering state machine."""

    def test_cover_is_unnumbered(self):
        manager = SectionManager(resolve_settings())
        manager.enter_section(_section(SectionKind.COVER, PageRole.COVER, numbering="none", anchor="cover"))
        page = manager.new_page()
        assert page.page_number == 1
        assert page.counter == 0
        assert page.display_number == ""
        assert page.footer_center == ""

    def test_front_matter_roman_then_body_restarts(self):
        manager = SectionManager(resolve_settings())
        manager.enter_section(_section(SectionKind.COVER, PageRole.COVER, numbering="none"))
        manager.new_page()
        manager.enter_section(_section(SectionKind.TITLE_PAGE, PageRole.FRONT_MATTER, numbering="roman-lower"))
        first = manager.new_page()
        second = manager.new_page()
        manager.enter_section(_chapter())
        body = manager.new_page()

        assert (first.counter, first.display_number) == (1, "i")
        assert (second.counter, second.display_number) == (2, "ii")
        assert (body.counter, body.display_number) == (1, "1")
        assert body.page_number == 4

    def test_back_matter_continues(self):
        manager = SectionManager(resolve_settings())
        manager.enter_section(_chapter())
        manager.new_page()
        manager.new_page()
        manager.enter_section(_section(SectionKind.BIBLIOGRAPHY, PageRole.BACK_MATTER, anchor="bibliography"))
        page = manager.new_page()
        assert page.counter == 3
        assert page.display_number == "3"

    def test_section_numbering_style(self):
        manager = SectionManager(resolve_settings())
        manager.enter_section(_section(SectionKind.CHAPTER, PageRole.BODY, numbering="roman-upper"))
        manager.new_page()
        assert manager.new_page().display_number == "II"

    def test_backwards_role_raises(self):
        manager = SectionManager(resolve_settings())
        manager.enter_section(_chapter())
        with pytest.raises(LayoutError):
            manager.enter_role(PageRole.FRONT_MATTER)

    def test_same_role_does_not_restart(self):
        manager = SectionManager(resolve_settings())
        manager.enter_section(_chapter())
        manager.new_page()
        manager.enter_section(_chapter("Second", "chapter-2"))
        assert manager.new_page().counter == 2

    def test_blank_page_counts(self):
        manager = SectionManager(resolve_settings())
        manager.enter_section(_chapter())
        manager.new_page()
        blank = manager.new_page(blank=True)
        assert blank.is_blank
        assert blank.counter == 2
        assert not blank.is_first_in_section
        assert blank.footer_center == ""

    def test_numbering_style_parse(self):
        assert NumberingStyle.parse("roman-lower") == NumberingStyle.ROMAN_LOWER
        assert NumberingStyle.parse("klingon") == NumberingStyle.ARABIC

    def test_reset(self):
        manager = SectionManager(resolve_settings())
        manager.enter_section(_chapter())
        manager.new_page()
        manager.reset()
        assert manager.pages == []
        assert manager.physical_page == 0
        assert manager.role is None


class TestRunningHeads:
    """Test header/footer resolution."""

    def _three_pages(self, overrides):
        manager = SectionManager(resolve_settings(overrides))
        manager.enter_section(_chapter())
        return [manager.new_page() for _ in range(3)]

    def test_header_suppressed_on_first_page(self, headers_on):
        first, second, third = self._three_pages(headers_on)
        assert first.is_first_in_section
        assert not first.has_header
        assert second.has_header
        assert third.has_header

    def test_mirrored_headers(self, headers_on):
        first, second, third = self._three_pages(headers_on)
        # physical page 2 is verso: selectors swap sides
        assert (second.header_left, second.header_right) == ("Beginning", "The Long Road")
        assert (third.header_left, third.header_right) == ("The Long Road", "Beginning")

    def test_unmirrored_headers(self):
        pages = self._three_pages({"headerFooter": {"headerEnabled": True, "mirrorHeaders": False}})
        assert (pages[1].header_left, pages[1].header_right) == ("The Long Road", "Beginning")

    def test_headers_off_by_default(self):
        pages = self._three_pages(None)
        assert not any(p.has_header for p in pages)

    def test_footer_page_number(self):
        first, second, third = self._three_pages(None)
        assert first.footer_center == ""
        assert second.footer_center == "2"
        assert third.footer_center == "3"

    def test_first_page_number_visible(self):
        first, _, _ = self._three_pages({"headerFooter": {"firstPageNumberVisible": True}})
        assert first.footer_center == "1"

    def test_custom_header_text(self):
        pages = self._three_pages({"headerFooter": {
            "headerEnabled": True, "headerCenterContent": "custom",
            "headerCustomText": {"center": "Advance Copy"}}})
        assert pages[1].header_center == "Advance Copy"

    def test_footer_disabled(self):
        pages = self._three_pages({"headerFooter": {"footerEnabled": False}})
        assert all(p.footer_center == "" for p in pages)

    def test_front_matter_has_no_header(self, headers_on):
        manager = SectionManager(resolve_settings(headers_on))
        manager.enter_section(_section(SectionKind.PREFACE, PageRole.FRONT_MATTER, numbering="roman-lower"))
        first = manager.new_page()
        second = manager.new_page()
        assert not first.has_header and not second.has_header
        assert first.footer_center == ""
        assert second.footer_center == "ii"

    def test_section_starts_recorded(self):
        manager = SectionManager(resolve_settings())
        manager.enter_section(_chapter())
        manager.new_page()
        manager.new_page()
        manager.enter_section(_chapter("Second", "chapter-2"))
        manager.new_page()
        assert manager.section_starts["chapter-1"].counter == 1
        assert manager.section_starts["chapter-2"].counter == 3


class TestMirrorMargins:
    """Page margins follow the gutter."""

    def test_recto_and_verso(self):
        manager = SectionManager(resolve_settings({"margins": {"inside": 1.0, "outside": 0.5}}))
        manager.enter_section(_chapter())
        recto = manager.new_page()
        verso = manager.new_page()
        assert recto.margins.left == 1.0
        assert recto.margins.right == 0.5
        assert verso.margins.left == 0.5
        assert verso.margins.right == 1.0

    def test_to_dict(self):
        manager = SectionManager(resolve_settings())
        manager.enter_section(_chapter())
        data = manager.new_page().to_dict()
        assert data["role"] == "body"
        assert data["section_anchor"] == "chapter-1"
        assert set(data["margins"]) == {"top", "bottom", "left", "right"}
