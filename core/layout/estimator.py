#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Page-Count Estimator - Chapter start pages before real pagination.

Handles:
- Characters per page from typography and the text block
- Pages per chapter (sanitized length + chapter-opening allowance)
- Cumulative chapter start pages for the table of contents

Estimates are hints. Renderers that can measure real pages (the two-pass
PDF build) replace them.

Version: 1.0.0
"""

import logging
import math
from typing import List, Optional, Sequence

from config.constants import (
    CHAPTER_HEADER_ALLOWANCE,
    CHAR_WIDTH_EM_RATIO,
    MIN_CHARS_PER_LINE,
    MIN_LINES_PER_PAGE,
    POINTS_PER_INCH,
)
from core.formatting.page_layout import PageGeometry, compute_page_geometry
from core.formatting.sanitizer import sanitize

logger = logging.getLogger(__name__)


def chars_per_line(geometry: PageGeometry, font_size: float) -> int:
    char_width = max(font_size, 1.0) * CHAR_WIDTH_EM_RATIO
    return max(MIN_CHARS_PER_LINE, int(geometry.content_width * POINTS_PER_INCH / char_width))


def lines_per_page(geometry: PageGeometry, font_size: float, line_height: float) -> int:
    leading = max(font_size, 1.0) * max(line_height, 1.0)
    return max(MIN_LINES_PER_PAGE, int(geometry.content_height * POINTS_PER_INCH / leading))


def chars_per_page(settings, geometry: Optional[PageGeometry] = None) -> int:
    """
    Approximate characters on one full body page.

    Args:
        settings: Resolved PublishingSettings
        geometry: Precomputed geometry (derived from settings when omitted)
    """
    geometry = geometry or compute_page_geometry(settings)
    typo = settings.typography
    return (
        chars_per_line(geometry, typo.body_font_size)
        * lines_per_page(geometry, typo.body_font_size, typo.body_line_height)
    )


def estimate_chapter_pages(content: Optional[str], chars_per_page: int) -> int:
    """
    Pages one chapter occupies: text pages plus a quarter page for the opening.

    Returns:
        Integer >= 1
    """
    capacity = max(int(chars_per_page or 0), 1)
    length = len(content or "")
    return max(1, math.ceil(length / capacity + CHAPTER_HEADER_ALLOWANCE))


def estimate_pages_per_chapter(chapters: Sequence, settings, geometry: Optional[PageGeometry] = None) -> List[int]:
    """Estimated page count of each chapter, from its sanitized text."""
    capacity = chars_per_page(settings, geometry)
    return [
        estimate_chapter_pages(sanitize(ch.content, ch.title, ch.number), capacity)
        for ch in chapters
    ]


def estimate_chapter_page_numbers(chapters: Sequence, settings, geometry: Optional[PageGeometry] = None) -> List[int]:
    """
    Starting page of each chapter, counted from the first body page.

    pageNumbers[i] = 1 + sum(pages[0..i-1]); non-decreasing, first entry 1.
    """
    pages = estimate_pages_per_chapter(chapters, settings, geometry)
    numbers: List[int] = []
    current = 1
    for count in pages:
        numbers.append(current)
        current += count
    logger.debug(f"Estimated chapter start pages: {numbers}")
    return numbers
