"""
Unit Tests for the page-count estimator
"""

from core.contracts.manuscript import Chapter
from core.formatting.page_layout import compute_page_geometry
from core.layout.estimator import (
    chars_per_line,
    chars_per_page,
    estimate_chapter_page_numbers,
    estimate_chapter_pages,
    estimate_pages_per_chapter,
    lines_per_page,
)
from core.publishing.resolver import resolve_settings


class TestEstimateChapterPages:
    """Test estimate_chapter_pages()."""

    def test_empty_chapter_is_one_page(self):
        assert estimate_chapter_pages("", 1500) == 1
        assert estimate_chapter_pages(None, 1500) == 1

    def test_opening_allowance(self):
        # 1500 chars fill one page, the opening pushes it onto a second
        assert estimate_chapter_pages("x" * 1500, 1500) == 2
        assert estimate_chapter_pages("x" * 1125, 1500) == 1
        assert estimate_chapter_pages("x" * 1126, 1500) == 2

    def test_zero_capacity_guarded(self):
        assert estimate_chapter_pages("abc", 0) == 4


class TestCapacity:
    """Test characters-per-page math."""

    def test_default_a5(self):
        settings = resolve_settings()
        geometry = compute_page_geometry(settings)
        assert chars_per_line(geometry, 11) == 55
        assert lines_per_page(geometry, 11, 1.45) == 29
        assert chars_per_page(settings) == 55 * 29

    def test_minimums(self):
        settings = resolve_settings({"trimSize": "custom", "customTrimSize": {"width": 2, "height": 2}})
        geometry = compute_page_geometry(settings)
        assert chars_per_line(geometry, 72) == 20
        assert lines_per_page(geometry, 72, 3.0) == 10

    def test_bigger_type_fits_less(self):
        small = resolve_settings({"typography": {"bodyFontSize": 10}})
        large = resolve_settings({"typography": {"bodyFontSize": 16}})
        assert chars_per_page(large) < chars_per_page(small)


class TestChapterPageNumbers:
    """Test estimate_chapter_page_numbers()."""

    def test_first_chapter_starts_at_one(self, single_chapter_manuscript):
        numbers = estimate_chapter_page_numbers(single_chapter_manuscript.chapters, resolve_settings())
        assert numbers == [1]

    def test_cumulative(self, sample_manuscript):
        settings = resolve_settings()
        pages = estimate_pages_per_chapter(sample_manuscript.chapters, settings)
        numbers = estimate_chapter_page_numbers(sample_manuscript.chapters, settings)
        assert numbers == [1, 1 + pages[0]]
        assert pages[1] > 1

    def test_non_decreasing_with_empty_chapters(self):
        chapters = [Chapter(number=i, title=f"C{i}", content="") for i in range(1, 5)]
        numbers = estimate_chapter_page_numbers(chapters, resolve_settings())
        assert numbers == [1, 2, 3, 4]

    def test_uses_sanitized_text(self):
        raw = Chapter(number=1, title="T", content="Chapter 1: T\n\n" + "**x**" * 2000)
        clean = Chapter(number=1, title="T", content="x" * 2000)
        settings = resolve_settings()
        assert estimate_pages_per_chapter([raw], settings) == estimate_pages_per_chapter([clean], settings)
