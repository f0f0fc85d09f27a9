"""
Unit Tests for Page Geometry

Trim sizes, orientation, header/footer bands and margin mirroring.
"""

import pytest

from core.formatting.page_layout import (
    PageGeometry,
    compute_page_geometry,
    resolve_trim_size,
)
from core.publishing.models import CustomTrimSize
from core.publishing.resolver import resolve_settings


class TestResolveTrimSize:
    """Test resolve_trim_size()."""

    def test_named_preset(self):
        assert resolve_trim_size("a5") == (5.83, 8.27)
        assert resolve_trim_size("trade-5.5x8.5") == (5.5, 8.5)

    def test_unknown_falls_back_to_6x9(self):
        assert resolve_trim_size("papyrus") == (6.0, 9.0)

    def test_landscape_swaps(self):
        assert resolve_trim_size("a5", orientation="landscape") == (8.27, 5.83)

    def test_custom(self):
        assert resolve_trim_size("custom", CustomTrimSize(width=7, height=10)) == (7.0, 10.0)
        assert resolve_trim_size("custom", {"width": 8, "height": 8}) == (8.0, 8.0)

    def test_custom_without_usable_size(self):
        assert resolve_trim_size("custom", {"width": "wide"}) == (6.0, 9.0)
        assert resolve_trim_size("custom", None) == (6.0, 9.0)


class TestPageGeometry:
    """Test compute_page_geometry() and PageGeometry."""

    def test_default_geometry(self, default_settings):
        geometry = compute_page_geometry(default_settings)
        assert (geometry.width, geometry.height) == (5.83, 8.27)
        assert geometry.mirror_margins is True
        assert geometry.header_enabled is False
        assert geometry.footer_enabled is True

    def test_header_band_added_only_when_enabled(self, headers_on):
        off = compute_page_geometry(resolve_settings())
        on = compute_page_geometry(resolve_settings(headers_on))
        assert off.margin_top == pytest.approx(0.75)
        assert on.margin_top == pytest.approx(0.75 + 0.3)

    def test_footer_band(self):
        geometry = compute_page_geometry(resolve_settings())
        assert geometry.margin_bottom == pytest.approx(0.75 + 0.3)
        no_footer = compute_page_geometry(resolve_settings({"headerFooter": {"footerEnabled": False}}))
        assert no_footer.margin_bottom == pytest.approx(0.75)

    def test_content_area(self):
        geometry = compute_page_geometry(resolve_settings())
        assert geometry.content_width == pytest.approx(5.83 - 0.875 - 0.75)
        assert geometry.content_height == pytest.approx(8.27 - 0.75 - 1.05)

    def test_content_area_floor(self):
        settings = resolve_settings({"trimSize": "custom", "customTrimSize": {"width": 2, "height": 2},
                                     "margins": {"inside": 3, "outside": 3}})
        geometry = compute_page_geometry(settings)
        assert geometry.content_width == 1.0

    def test_landscape_book_type(self):
        geometry = compute_page_geometry(resolve_settings(book_type="coffee-table-book"))
        assert (geometry.width, geometry.height) == (8.5, 11.0)

    def test_non_finite_margins_replaced(self, default_settings):
        default_settings.margins.top = float("nan")
        default_settings.margins.inside = -2
        geometry = compute_page_geometry(default_settings)
        assert geometry.top == 0.75
        assert geometry.inside == 0.875


class TestMirrorMargins:
    """Test margins_for_page()."""

    def _geometry(self, mirror=True):
        return PageGeometry(
            trim_id="us-trade-6x9", width=6.0, height=9.0, orientation="portrait",
            top=0.75, bottom=0.75, inside=1.0, outside=0.5, bleed=0.0,
            header_space=0.3, footer_space=0.3, mirror_margins=mirror,
        )

    def test_recto_inside_on_left(self):
        margins = self._geometry().margins_for_page(1)
        assert (margins.left, margins.right) == (1.0, 0.5)

    def test_verso_inside_on_right(self):
        margins = self._geometry().margins_for_page(2)
        assert (margins.left, margins.right) == (0.5, 1.0)

    def test_no_mirroring(self):
        geometry = self._geometry(mirror=False)
        assert geometry.margins_for_page(2).left == 1.0
        assert geometry.margins_for_page(3).left == 1.0

    def test_points(self):
        margins = self._geometry().margins_for_page(1).to_points()
        assert margins.left == 72.0
        assert margins.right == 36.0

    def test_is_recto(self):
        assert PageGeometry.is_recto(1)
        assert not PageGeometry.is_recto(2)
