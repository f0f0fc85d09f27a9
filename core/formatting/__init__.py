#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Book Formatting v1.0

Text-level formatting used by the layout engine.

Stages:
1. Sanitize - strip generation artifacts and title echoes from chapter text
2. Number - chapter numerals, page numerals, ornaments, title case
3. Geometry - trim size, orientation, mirrored margins
4. TOC - table of contents entries
"""

__version__ = "1.0.0"

# Stage 1: Sanitize
from .sanitizer import (
    sanitize,
    is_scene_break,
    split_into_paragraphs,
    join_paragraphs,
    count_words,
    estimate_reading_time,
    sanitize_title,
    validate_text,
)

# Stage 2: Numbering
from .numbering import (
    ChapterNumberStyle,
    PageNumberStyle,
    to_roman,
    from_roman,
    format_chapter_number,
    format_page_number,
    get_scene_break_symbol,
    get_chapter_ornament_symbol,
    apply_title_case,
)

# Stage 3: Geometry
from .page_layout import (
    PageGeometry,
    PageMargins,
    compute_page_geometry,
    resolve_trim_size,
)

# Stage 4: TOC
from .toc_generator import TocEntry, build_toc_entries

__all__ = [
    # Sanitize
    "sanitize",
    "is_scene_break",
    "split_into_paragraphs",
    "join_paragraphs",
    "count_words",
    "estimate_reading_time",
    "sanitize_title",
    "validate_text",
    # Numbering
    "ChapterNumberStyle",
    "PageNumberStyle",
    "to_roman",
    "from_roman",
    "format_chapter_number",
    "format_page_number",
    "get_scene_break_symbol",
    "get_chapter_ornament_symbol",
    "apply_title_case",
    # Geometry
    "PageGeometry",
    "PageMargins",
    "compute_page_geometry",
    "resolve_trim_size",
    # TOC
    "TocEntry",
    "build_toc_entries",
]
