#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Paginator

Lays a LayoutDocument's sections onto physical pages using the same
characters-per-page model as the estimator, and returns the page plan
(one PageInfo per page) with numbering and running heads resolved.

Used by renderers that cannot compute running heads themselves and by
tests; the PDF renderer drives the SectionManager live instead.

Version: 1.0.0
"""

import logging
import math
from typing import Dict, List

from .document import BlockType, LayoutDocument, Section, SectionKind
from .estimator import chars_per_page, estimate_chapter_pages, lines_per_page
from .sections.manager import PageInfo, SectionManager

logger = logging.getLogger(__name__)

# Blocks that make up a chapter opening rather than running text
_HEADER_BLOCKS = {
    BlockType.ORNAMENT,
    BlockType.CHAPTER_LABEL,
    BlockType.CHAPTER_NUMBER,
    BlockType.CHAPTER_TITLE,
}


class Paginator:
    """
    Page plan builder.

    Usage:
        pages = Paginator().paginate(document)
        [p.display_number for p in pages]
    """

    def paginate(self, document: LayoutDocument) -> List[PageInfo]:
        """
        Lay every section out and return the physical pages in order.

        Sections that must open on a recto page get a blank verso in front
        of them when needed.
        """
        settings = document.settings
        geometry = document.geometry
        capacity = chars_per_page(settings, geometry)
        lines = lines_per_page(geometry, settings.typography.body_font_size,
                               settings.typography.body_line_height)

        manager = SectionManager(settings, geometry)
        for index, section in enumerate(document.sections):
            if index > 0 and section.start_on_recto and manager.physical_page % 2 == 1:
                # Next page would be verso: pad with a blank
                manager.new_page(blank=True)
            manager.enter_section(section)
            for _ in range(self.section_pages(section, capacity, lines)):
                manager.new_page()

        logger.debug(f"Paginated {len(document.sections)} sections into {len(manager.pages)} pages")
        return manager.pages

    @staticmethod
    def section_pages(section: Section, capacity: int, lines: int) -> int:
        """Estimated page count of one section"""
        if section.kind in (SectionKind.COVER, SectionKind.BACK_COVER):
            return 1
        if section.kind == SectionKind.CHAPTER:
            body = "\n\n".join(b.text for b in section.blocks if b.type not in _HEADER_BLOCKS)
            return estimate_chapter_pages(body, capacity)
        if section.kind == SectionKind.TABLE_OF_CONTENTS:
            # One line per entry plus the heading
            entries = len(section.blocks_of(BlockType.TOC_ENTRY))
            return max(1, math.ceil((entries + 3) / max(lines, 1)))
        return max(1, math.ceil(section.text_length / max(capacity, 1)))

    @staticmethod
    def section_start_pages(pages: List[PageInfo]) -> Dict[str, int]:
        """Section anchor -> logical page number of its first page"""
        return {p.section_anchor: p.counter for p in pages if p.is_first_in_section}


def paginate(document: LayoutDocument) -> List[PageInfo]:
    """Convenience wrapper around Paginator().paginate()"""
    return Paginator().paginate(document)
