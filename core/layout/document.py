#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Layout Document - Structural tree handed to renderer backends.

A LayoutDocument is an ordered list of Sections, each tagged with a page
role (cover, front-matter, body, back-matter). Every settings decision
(which sections exist, header assembly, numbering style, scene-break
symbols) is already made; renderers only lay blocks onto pages.

Running strings: each Section may bind RunningStrings. Headers show the
bound strings on every page of the section except its first page.

Version: 1.0.0
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from core.formatting.page_layout import PageGeometry
from core.formatting.toc_generator import TocEntry


# =============================================================================
# ENUMS
# =============================================================================

class PageRole(str, Enum):
    """Page roles, in the only order they may appear"""
    COVER = "cover"
    FRONT_MATTER = "front-matter"
    BODY = "body"
    BACK_MATTER = "back-matter"


ROLE_ORDER = [PageRole.COVER, PageRole.FRONT_MATTER, PageRole.BODY, PageRole.BACK_MATTER]


class BlockType(str, Enum):
    """Structural block types"""
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    SCENE_BREAK = "scene-break"
    ORNAMENT = "ornament"
    CHAPTER_NUMBER = "chapter-number"
    CHAPTER_LABEL = "chapter-label"
    CHAPTER_TITLE = "chapter-title"
    TOC_ENTRY = "toc-entry"
    BIBLIOGRAPHY_ENTRY = "bibliography-entry"
    IMAGE = "image"
    SPACER = "spacer"
    EPIGRAPH = "epigraph"
    BLOCKQUOTE = "blockquote"
    PAGE_BREAK = "page-break"


class SectionKind(str, Enum):
    """What a section is"""
    COVER = "cover"
    BACK_COVER = "back-cover"
    HALF_TITLE = "half-title"
    TITLE_PAGE = "title-page"
    COPYRIGHT = "copyright"
    DEDICATION = "dedication"
    EPIGRAPH = "epigraph"
    TABLE_OF_CONTENTS = "table-of-contents"
    FOREWORD = "foreword"
    PREFACE = "preface"
    ACKNOWLEDGMENTS = "acknowledgments"
    INTRODUCTION = "introduction"
    CHAPTER = "chapter"
    BIBLIOGRAPHY = "bibliography"
    ABOUT_AUTHOR = "about-author"
    ALSO_BY = "also-by"
    EPILOGUE = "epilogue"
    AFTERWORD = "afterword"
    APPENDICES = "appendices"
    GLOSSARY = "glossary"
    BOOK_CLUB_QUESTIONS = "book-club-questions"
    EXCERPT = "excerpt"


# =============================================================================
# NODES
# =============================================================================

@dataclass
class Block:
    """
    One structural element.

    ``style`` is a renderer-neutral style name (e.g. "book-title",
    "copyright-legal", "drop-cap"); ``attributes`` carries extra data such
    as an image source or TOC page numbers.
    """
    type: BlockType
    text: str = ""
    level: int = 0
    style: str = ""
    attributes: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = {"type": self.type.value, "text": self.text}
        if self.level:
            data["level"] = self.level
        if self.style:
            data["style"] = self.style
        if self.attributes:
            data["attributes"] = dict(self.attributes)
        return data


@dataclass
class RunningStrings:
    """Strings bound at a section start for running headers/footers"""
    title: str = ""
    author: str = ""
    chapter: str = ""

    def value(self, selector: str) -> str:
        """Header/footer content selector -> bound string ('' for others)"""
        return {
            "title": self.title,
            "author": self.author,
            "chapter": self.chapter,
        }.get(selector, "")

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "author": self.author, "chapter": self.chapter}


@dataclass
class Section:
    """
    A run of pages with one role.

    Attributes:
        kind: What the section is
        role: Page role (numbering regime)
        blocks: Content in order
        running_strings: Header strings bound at the start of this section
        start_on_recto: Must open on an odd page
        page_break_before: Opens on a new page
        numbering: Page-number style used on this section's pages
        anchor: Link target id
    """
    kind: SectionKind
    role: PageRole
    blocks: List[Block] = field(default_factory=list)
    running_strings: Optional[RunningStrings] = None
    start_on_recto: bool = False
    page_break_before: bool = True
    numbering: str = "none"
    anchor: str = ""
    title: str = ""

    def add(self, block_type: BlockType, text: str = "", **kwargs) -> Block:
        block = Block(type=block_type, text=text, **kwargs)
        self.blocks.append(block)
        return block

    def blocks_of(self, block_type: BlockType) -> List[Block]:
        return [b for b in self.blocks if b.type == block_type]

    @property
    def text_length(self) -> int:
        return sum(len(b.text) for b in self.blocks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "role": self.role.value,
            "title": self.title,
            "anchor": self.anchor,
            "numbering": self.numbering,
            "start_on_recto": self.start_on_recto,
            "page_break_before": self.page_break_before,
            "running_strings": self.running_strings.to_dict() if self.running_strings else None,
            "blocks": [b.to_dict() for b in self.blocks],
        }


@dataclass
class LayoutDocument:
    """The built book, ready for a renderer"""
    title: str
    author: str
    sections: List[Section]
    settings: Any                       # PublishingSettings
    geometry: PageGeometry
    toc_entries: List[TocEntry] = field(default_factory=list)
    estimated_page_numbers: List[int] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def sections_by_role(self, role: PageRole) -> List[Section]:
        role = PageRole(role)
        return [s for s in self.sections if s.role == role]

    def sections_of(self, kind: SectionKind) -> List[Section]:
        return [s for s in self.sections if s.kind == kind]

    def get_section(self, kind: SectionKind) -> Optional[Section]:
        found = self.sections_of(kind)
        return found[0] if found else None

    @property
    def chapter_sections(self) -> List[Section]:
        return self.sections_of(SectionKind.CHAPTER)

    def iter_blocks(self) -> Iterator[Block]:
        for section in self.sections:
            yield from section.blocks

    def update_toc_pages(self, pages: Dict[str, int]) -> bool:
        """
        Replace estimated TOC page numbers with measured ones.

        Args:
            pages: anchor -> body page number

        Returns:
            True when any number changed
        """
        changed = False
        for entry in self.toc_entries:
            page = pages.get(entry.anchor)
            if page is not None and page != entry.page:
                entry.page = page
                changed = True

        by_anchor = {e.anchor: e for e in self.toc_entries}
        toc = self.get_section(SectionKind.TABLE_OF_CONTENTS)
        if toc is not None:
            for block in toc.blocks_of(BlockType.TOC_ENTRY):
                entry = by_anchor.get(block.attributes.get("anchor"))
                if entry is not None:
                    block.attributes["page"] = entry.page
                    block.text = entry.text
        return changed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "author": self.author,
            "geometry": self.geometry.to_dict(),
            "toc_entries": [e.to_dict() for e in self.toc_entries],
            "estimated_page_numbers": list(self.estimated_page_numbers),
            "metadata": dict(self.metadata),
            "sections": [s.to_dict() for s in self.sections],
        }
