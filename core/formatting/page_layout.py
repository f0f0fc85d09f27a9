#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Page Geometry - Trim size, orientation and mirrored margins.

Handles:
- Trim size lookup (named presets, custom size, unknown -> 6x9)
- Landscape orientation (width/height swap)
- Running header/footer space added to the top/bottom margins
- Recto/verso margin mirroring (inside margin always on the spine side)
- Content-area size

All values are inches unless a method says otherwise.

Version: 1.0.0
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from config.constants import FALLBACK_TRIM_SIZE, MIN_CONTENT_SIZE, POINTS_PER_INCH
from .utils.constants import TRIM_SIZES, CUSTOM_TRIM_ID

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class PageMargins:
    """Margins of one physical page, in inches."""
    top: float
    bottom: float
    left: float
    right: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "top": self.top,
            "bottom": self.bottom,
            "left": self.left,
            "right": self.right,
        }

    def to_points(self) -> "PageMargins":
        return PageMargins(
            top=self.top * POINTS_PER_INCH,
            bottom=self.bottom * POINTS_PER_INCH,
            left=self.left * POINTS_PER_INCH,
            right=self.right * POINTS_PER_INCH,
        )


@dataclass
class PageGeometry:
    """
    Physical page description shared by every renderer.

    Usage:
        geometry = compute_page_geometry(settings)
        geometry.content_width          # inches
        geometry.margins_for_page(2)    # verso: gutter on the right
    """
    trim_id: str
    width: float
    height: float
    orientation: str
    top: float
    bottom: float
    inside: float
    outside: float
    bleed: float
    header_space: float
    footer_space: float
    mirror_margins: bool = True
    header_enabled: bool = False
    footer_enabled: bool = True

    @property
    def margin_top(self) -> float:
        """Top margin including the running-header band when headers are on."""
        return self.top + (self.header_space if self.header_enabled else 0.0)

    @property
    def margin_bottom(self) -> float:
        return self.bottom + (self.footer_space if self.footer_enabled else 0.0)

    @property
    def content_width(self) -> float:
        return max(self.width - self.inside - self.outside, MIN_CONTENT_SIZE)

    @property
    def content_height(self) -> float:
        return max(self.height - self.margin_top - self.margin_bottom, MIN_CONTENT_SIZE)

    @staticmethod
    def is_recto(page_number: int) -> bool:
        """Odd pages are recto (right-hand)."""
        return page_number % 2 == 1

    def margins_for_page(self, page_number: int) -> PageMargins:
        """
        Margins of a physical page.

        With mirroring on, the inside (gutter) margin sits on the left of recto
        pages and on the right of verso pages. Without it every page uses
        inside on the left.
        """
        if self.mirror_margins and not self.is_recto(page_number):
            left, right = self.outside, self.inside
        else:
            left, right = self.inside, self.outside
        return PageMargins(
            top=self.margin_top,
            bottom=self.margin_bottom,
            left=left,
            right=right,
        )

    def page_size_points(self) -> Tuple[float, float]:
        return self.width * POINTS_PER_INCH, self.height * POINTS_PER_INCH

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trim_id": self.trim_id,
            "width": self.width,
            "height": self.height,
            "orientation": self.orientation,
            "margins": {
                "top": self.top,
                "bottom": self.bottom,
                "inside": self.inside,
                "outside": self.outside,
                "bleed": self.bleed,
                "header_space": self.header_space,
                "footer_space": self.footer_space,
                "mirror_margins": self.mirror_margins,
            },
            "margin_top": self.margin_top,
            "margin_bottom": self.margin_bottom,
            "content_width": self.content_width,
            "content_height": self.content_height,
        }


# =============================================================================
# RESOLUTION
# =============================================================================

def _finite(value, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) and number >= 0 else default


def resolve_trim_size(trim_id: str, custom_size=None, orientation: str = "portrait") -> Tuple[float, float]:
    """
    Width and height of a trim size in inches.

    Args:
        trim_id: Preset id from TRIM_SIZES, or "custom"
        custom_size: Object or dict with width/height, used for "custom"
        orientation: "landscape" swaps width and height

    Unknown ids (and a "custom" id without a usable size) fall back to 6x9.
    """
    fallback_w, fallback_h = FALLBACK_TRIM_SIZE
    if trim_id == CUSTOM_TRIM_ID and custom_size is not None:
        if isinstance(custom_size, dict):
            width, height = custom_size.get("width"), custom_size.get("height")
        else:
            width, height = getattr(custom_size, "width", None), getattr(custom_size, "height", None)
        width, height = _finite(width, 0.0), _finite(height, 0.0)
        if not (width and height):
            width, height = fallback_w, fallback_h
    elif trim_id in TRIM_SIZES:
        preset = TRIM_SIZES[trim_id]
        width, height = preset["width"], preset["height"]
    else:
        logger.debug(f"Unknown trim size {trim_id!r}, using {fallback_w}x{fallback_h}")
        width, height = fallback_w, fallback_h

    if orientation == "landscape":
        width, height = height, width
    return width, height


def compute_page_geometry(settings) -> PageGeometry:
    """
    Derive page geometry from resolved PublishingSettings.

    Every number is re-checked for finiteness so a hand-built settings
    object cannot push NaN into layout math.
    """
    width, height = resolve_trim_size(
        settings.trim_size, settings.custom_trim_size, settings.orientation
    )
    m = settings.margins
    hf = settings.header_footer
    return PageGeometry(
        trim_id=settings.trim_size,
        width=width,
        height=height,
        orientation=settings.orientation,
        top=_finite(m.top, 0.75),
        bottom=_finite(m.bottom, 0.75),
        inside=_finite(m.inside, 0.875),
        outside=_finite(m.outside, 0.75),
        bleed=_finite(m.bleed, 0.125),
        header_space=_finite(m.header_space, 0.3),
        footer_space=_finite(m.footer_space, 0.3),
        mirror_margins=bool(m.mirror_margins),
        header_enabled=bool(hf.header_enabled),
        footer_enabled=bool(hf.footer_enabled),
    )
