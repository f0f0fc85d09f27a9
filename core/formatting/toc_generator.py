#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Table of Contents - Entries for the contents page.

Provides:
- One entry per unique (number, title) chapter, first occurrence kept
- Chapter labels in the configured numbering style
- Trailing bibliography entry
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Sequence

from .numbering import format_chapter_number


TOC_HEADING = "Contents"
TOC_GAP = "   "
TOC_LEADER = " ... "


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class TocEntry:
    """Single line of the table of contents."""
    label: str              # "Chapter 1", empty when numbers are hidden
    title: str
    page: int               # estimated until a renderer measures it
    anchor: str             # id of the target section
    level: int = 1

    @property
    def text(self) -> str:
        """Plain rendering: 'Chapter 1   Beginning ... 1'."""
        head = TOC_GAP.join(part for part in (self.label, self.title) if part)
        return f"{head}{TOC_LEADER}{self.page}"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["text"] = self.text
        return data

    def __repr__(self):
        indent = "  " * (self.level - 1)
        return f"{indent}[p{self.page}] {self.label} {self.title}".rstrip()


def chapter_anchor(number) -> str:
    return f"chapter-{number}"


# =============================================================================
# GENERATION
# =============================================================================

def chapter_label(number: int, chapter_settings) -> str:
    """'Chapter 1' / 'Chapter One' / '' when chapter numbers are hidden."""
    if (not chapter_settings.show_chapter_number
            or chapter_settings.chapter_number_position == "hidden"):
        return ""
    number_text = format_chapter_number(number, chapter_settings.chapter_number_style)
    return f"{chapter_settings.chapter_number_label} {number_text}".strip()


def build_toc_entries(
    chapters: Sequence,
    page_numbers: Sequence[int],
    chapter_settings,
    bibliography_page: Optional[int] = None,
    bibliography_title: str = "Bibliography",
) -> List[TocEntry]:
    """
    Build TOC entries.

    Args:
        chapters: Chapters in reading order
        page_numbers: Starting page of each chapter (same order)
        chapter_settings: ChapterSettings (label, number style)
        bibliography_page: Start page of the bibliography; None omits it

    Returns:
        List of TocEntry
    """
    entries: List[TocEntry] = []
    seen = set()
    for index, chapter in enumerate(chapters):
        key = (chapter.number, chapter.title)
        if key in seen:
            continue
        seen.add(key)
        page = page_numbers[index] if index < len(page_numbers) else (entries[-1].page if entries else 1)
        entries.append(TocEntry(
            label=chapter_label(chapter.number, chapter_settings),
            title=chapter.title or "",
            page=page,
            anchor=chapter_anchor(chapter.number),
        ))

    if bibliography_page is not None:
        entries.append(TocEntry(
            label="",
            title=bibliography_title,
            page=bibliography_page,
            anchor="bibliography",
        ))
    return entries
