#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Layout Document Builder

Assembles a Manuscript into a LayoutDocument:
- Cover (image or text cover)
- Front matter in configured order (half-title, title page, copyright,
  dedication, epigraph, contents, foreword, preface, ...)
- One body section per chapter, with running strings bound at its start
- Back matter (bibliography, about the author, also by, ...)

Every block a renderer draws is decided here, so all backends agree on
what the book contains.

Version: 1.0.0
"""

import logging
import re
from datetime import date
from typing import Any, Dict, List, Optional, Union

from config.constants import DESCRIPTION_MAX_LENGTH
from core.bibliography.formatter import format_bibliography_entries
from core.contracts.manuscript import Chapter, Manuscript
from core.formatting.numbering import (
    apply_title_case,
    format_chapter_number,
    get_chapter_ornament_symbol,
    get_scene_break_symbol,
)
from core.formatting.page_layout import compute_page_geometry
from core.formatting.sanitizer import is_scene_break, sanitize, split_into_paragraphs
from core.formatting.toc_generator import TOC_HEADING, build_toc_entries, chapter_anchor
from core.publishing.models import PublishingSettings
from core.publishing.presets import is_novel
from core.publishing.resolver import resolve_settings

from .document import (
    Block,
    BlockType,
    LayoutDocument,
    PageRole,
    RunningStrings,
    Section,
    SectionKind,
)
from .estimator import estimate_pages_per_chapter

logger = logging.getLogger(__name__)


DEFAULT_DEDICATION = "For those who believe in the power of words."
COPYRIGHT_NOTICE = (
    "No part of this publication may be reproduced, stored in a retrieval system, "
    "or transmitted in any form or by any means without the prior written permission "
    "of the copyright holder."
)
BIBLIOGRAPHY_HEADING = "Bibliography"
ALSO_BY_PLACEHOLDER = "More titles coming soon..."

# Section id -> (kind, printed heading)
MATTER_HEADINGS = {
    "foreword": (SectionKind.FOREWORD, "Foreword"),
    "preface": (SectionKind.PREFACE, "Preface"),
    "acknowledgments": (SectionKind.ACKNOWLEDGMENTS, "Acknowledgments"),
    "introduction": (SectionKind.INTRODUCTION, "Introduction"),
    "epilogue": (SectionKind.EPILOGUE, "Epilogue"),
    "afterword": (SectionKind.AFTERWORD, "Afterword"),
    "appendices": (SectionKind.APPENDICES, "Appendices"),
    "glossary": (SectionKind.GLOSSARY, "Glossary"),
    "book-club-questions": (SectionKind.BOOK_CLUB_QUESTIONS, "Book Club Questions"),
    "excerpt": (SectionKind.EXCERPT, "Excerpt"),
}

_QUOTE_MARKER = re.compile(r"^>\s*", re.MULTILINE)


class LayoutDocumentBuilder:
    """
    Build a LayoutDocument from a Manuscript.

    Usage:
        builder = LayoutDocumentBuilder()
        document = builder.build(manuscript)                  # settings from the manuscript
        document = builder.build(manuscript, {"trimSize": "a4"})

    The builder is stateless between builds; one instance can serve many
    manuscripts, including concurrently.
    """

    def __init__(self, year: Optional[int] = None):
        """
        Args:
            year: Copyright year (defaults to the current year)
        """
        self.year = year

    # =========================================================================
    # Entry point
    # =========================================================================

    def build(
        self,
        manuscript: Union[Manuscript, Dict[str, Any]],
        settings: Union[PublishingSettings, Dict[str, Any], None] = None,
    ) -> LayoutDocument:
        """
        Build the layout document.

        Args:
            manuscript: Manuscript (or its dict form)
            settings: Resolved settings, a raw overrides document, or None to
                resolve the manuscript's own publishing settings

        Raises:
            ContractValidationError: title, author or chapters missing
        """
        if isinstance(manuscript, dict):
            manuscript = Manuscript.from_dict(manuscript)
        manuscript.assert_valid()

        settings = self.resolve(manuscript, settings)
        geometry = compute_page_geometry(settings)

        chapters = list(manuscript.chapters)
        pages = estimate_pages_per_chapter(chapters, settings, geometry)
        page_numbers = self._cumulative(pages)

        with_bibliography = settings.back_matter.bibliography and manuscript.has_bibliography
        bibliography_page = None
        if with_bibliography:
            bibliography_page = page_numbers[-1] + pages[-1] if chapters else 1
        toc_entries = build_toc_entries(
            chapters, page_numbers, settings.chapters, bibliography_page, BIBLIOGRAPHY_HEADING
        )

        sections: List[Section] = [self._cover(manuscript)]
        sections.extend(self._front_matter(manuscript, settings, toc_entries))
        sections.extend(self._chapter(manuscript, chapter, settings) for chapter in chapters)
        sections.extend(self._back_matter(manuscript, settings))
        back_cover = self._back_cover(manuscript)
        if back_cover is not None:
            sections.append(back_cover)

        document = LayoutDocument(
            title=manuscript.title,
            author=manuscript.author,
            sections=sections,
            settings=settings,
            geometry=geometry,
            toc_entries=toc_entries,
            estimated_page_numbers=page_numbers,
            metadata=self._metadata(manuscript, settings),
        )
        logger.info(
            f"Built layout document: {len(sections)} sections, "
            f"{len(chapters)} chapters, trim {geometry.width}x{geometry.height}in"
        )
        return document

    @staticmethod
    def resolve(manuscript: Manuscript, settings=None) -> PublishingSettings:
        """Settings used for a build: explicit settings win over the manuscript's own."""
        if isinstance(settings, PublishingSettings):
            return settings
        overrides = settings if settings is not None else manuscript.publishing_settings
        return resolve_settings(overrides, genre_preset=manuscript.genre)

    @staticmethod
    def _cumulative(pages: List[int]) -> List[int]:
        numbers, current = [], 1
        for count in pages:
            numbers.append(current)
            current += count
        return numbers

    def _metadata(self, manuscript: Manuscript, settings: PublishingSettings) -> Dict[str, Any]:
        return {
            "language": settings.language,
            "isbn": settings.isbn,
            "publisher": settings.publisher,
            "genre": manuscript.genre,
            "description": manuscript.description,
            "book_type": settings.book_type,
            "style_preset": settings.style_preset,
            "year": self._year(),
        }

    def _year(self) -> int:
        return self.year or date.today().year

    # =========================================================================
    # Cover
    # =========================================================================

    def _cover(self, manuscript: Manuscript) -> Section:
        section = Section(
            kind=SectionKind.COVER,
            role=PageRole.COVER,
            page_break_before=False,
            anchor="cover",
            title=manuscript.title,
        )
        source = manuscript.cover_source
        if source:
            section.add(BlockType.IMAGE, "Cover", style="cover-image",
                        attributes={"src": source, "full_bleed": True})
        else:
            section.add(BlockType.HEADING, manuscript.title, level=1, style="cover-title")
            section.add(BlockType.PARAGRAPH, manuscript.author, style="cover-author")
            if manuscript.genre:
                section.add(BlockType.PARAGRAPH, manuscript.genre, style="cover-genre")
        return section

    def _back_cover(self, manuscript: Manuscript) -> Optional[Section]:
        source = manuscript.back_cover_source
        if not source:
            return None
        section = Section(kind=SectionKind.BACK_COVER, role=PageRole.BACK_MATTER,
                          anchor="back-cover", title="Back Cover")
        section.add(BlockType.IMAGE, "Back Cover", style="cover-image",
                    attributes={"src": source, "full_bleed": True})
        return section

    # =========================================================================
    # Front matter
    # =========================================================================

    def _front_matter(self, manuscript: Manuscript, settings: PublishingSettings, toc_entries) -> List[Section]:
        fm = settings.front_matter
        hf = settings.header_footer
        numbering = hf.front_matter_numbering if hf.footer_enabled else "none"

        builders = {
            "half-title": lambda: self._half_title(manuscript),
            "title-page": lambda: self._title_page(manuscript, settings),
            "copyright": lambda: self._copyright(manuscript, settings),
            "dedication": lambda: self._dedication(manuscript),
            "epigraph": lambda: self._epigraph(manuscript, settings),
            "table-of-contents": lambda: self._table_of_contents(toc_entries),
        }

        sections = []
        for section_id in fm.order:
            if not fm.is_enabled(section_id):
                continue
            # A cover image already introduces the book
            if section_id == "half-title" and manuscript.cover_source:
                continue
            build = builders.get(section_id)
            if build is not None:
                section = build()
            elif section_id in MATTER_HEADINGS:
                section = self._matter_section(manuscript, section_id, PageRole.FRONT_MATTER)
            else:
                logger.debug(f"Unknown front matter section {section_id!r} skipped")
                continue
            section.numbering = numbering
            sections.append(section)
        return sections

    def _half_title(self, manuscript: Manuscript) -> Section:
        section = Section(kind=SectionKind.HALF_TITLE, role=PageRole.FRONT_MATTER, anchor="half-title")
        section.add(BlockType.HEADING, manuscript.title, level=1, style="half-title")
        return section

    def _title_page(self, manuscript: Manuscript, settings: PublishingSettings) -> Section:
        section = Section(kind=SectionKind.TITLE_PAGE, role=PageRole.FRONT_MATTER, anchor="title-page")
        section.add(BlockType.HEADING, manuscript.title, level=1, style="book-title")
        if is_novel(manuscript.genre, settings.book_type):
            section.add(BlockType.PARAGRAPH, "A Novel By", style="novel-label")
            section.add(BlockType.PARAGRAPH, manuscript.author, style="book-author")
        else:
            section.add(BlockType.PARAGRAPH, f"by {manuscript.author}", style="book-author")
        if manuscript.genre:
            section.add(BlockType.PARAGRAPH, manuscript.genre, style="book-genre")
        if manuscript.description:
            section.add(BlockType.PARAGRAPH, truncate_description(manuscript.description),
                        style="book-description")
        if settings.publisher:
            section.add(BlockType.PARAGRAPH, settings.publisher, style="book-publisher")
        return section

    def _copyright(self, manuscript: Manuscript, settings: PublishingSettings) -> Section:
        section = Section(kind=SectionKind.COPYRIGHT, role=PageRole.FRONT_MATTER, anchor="copyright")
        section.add(BlockType.PARAGRAPH, manuscript.title, style="copyright-title")
        section.add(BlockType.PARAGRAPH, f"by {manuscript.author}", style="copyright-author")
        section.add(BlockType.SPACER)
        section.add(BlockType.PARAGRAPH, f"Copyright © {self._year()} {manuscript.author}",
                    style="copyright")
        section.add(BlockType.PARAGRAPH, "All rights reserved.", style="copyright")
        section.add(BlockType.SPACER)
        section.add(BlockType.PARAGRAPH, COPYRIGHT_NOTICE, style="copyright-legal")
        if settings.edition:
            section.add(BlockType.PARAGRAPH, f"{settings.edition} Edition", style="copyright")
        if settings.printing_number:
            section.add(BlockType.PARAGRAPH, f"Printing {settings.printing_number}", style="copyright")
        if settings.isbn:
            section.add(BlockType.SPACER)
            section.add(BlockType.PARAGRAPH, f"ISBN: {settings.isbn}", style="copyright-isbn")
        if settings.publisher:
            section.add(BlockType.SPACER)
            section.add(BlockType.PARAGRAPH, f"Published by {settings.publisher}",
                        style="copyright-publisher")
            if settings.publisher_location:
                section.add(BlockType.PARAGRAPH, settings.publisher_location,
                            style="copyright-location")
        return section

    def _dedication(self, manuscript: Manuscript) -> Section:
        section = Section(kind=SectionKind.DEDICATION, role=PageRole.FRONT_MATTER, anchor="dedication")
        text = manuscript.matter_text("dedication") or DEFAULT_DEDICATION
        for paragraph in split_into_paragraphs(text):
            section.add(BlockType.PARAGRAPH, paragraph, style="dedication")
        return section

    def _epigraph(self, manuscript: Manuscript, settings: PublishingSettings) -> Section:
        section = Section(kind=SectionKind.EPIGRAPH, role=PageRole.FRONT_MATTER, anchor="epigraph")
        text = settings.front_matter.epigraph or manuscript.matter_text("epigraph")
        for paragraph in split_into_paragraphs(text):
            section.add(BlockType.EPIGRAPH, paragraph, style="epigraph")
        return section

    def _table_of_contents(self, toc_entries) -> Section:
        section = Section(kind=SectionKind.TABLE_OF_CONTENTS, role=PageRole.FRONT_MATTER,
                          anchor="contents", title=TOC_HEADING)
        section.add(BlockType.HEADING, TOC_HEADING, level=1, style="toc-heading")
        for entry in toc_entries:
            section.add(BlockType.TOC_ENTRY, entry.text, level=entry.level, style="toc-entry",
                        attributes={
                            "label": entry.label,
                            "title": entry.title,
                            "page": entry.page,
                            "anchor": entry.anchor,
                        })
        return section

    def _matter_section(self, manuscript: Manuscript, section_id: str, role: PageRole) -> Section:
        kind, heading = MATTER_HEADINGS[section_id]
        section = Section(kind=kind, role=role, anchor=section_id, title=heading)
        section.add(BlockType.HEADING, heading, level=1, style="matter-heading")
        for paragraph in split_into_paragraphs(manuscript.matter_text(section_id)):
            section.add(BlockType.PARAGRAPH, paragraph)
        return section

    # =========================================================================
    # Chapters
    # =========================================================================

    def _chapter(self, manuscript: Manuscript, chapter: Chapter, settings: PublishingSettings) -> Section:
        cs = settings.chapters
        display_title = apply_title_case(chapter.title, cs.chapter_title_case)
        section = Section(
            kind=SectionKind.CHAPTER,
            role=PageRole.BODY,
            start_on_recto=cs.start_on_odd_page,
            numbering=settings.header_footer.page_number_style,
            anchor=chapter_anchor(chapter.number),
            title=display_title,
            running_strings=RunningStrings(
                title=manuscript.title,
                author=manuscript.author,
                chapter=display_title,
            ),
        )
        section.blocks.extend(self.chapter_header_blocks(chapter, settings))
        section.blocks.extend(self.chapter_body_blocks(chapter, settings))
        return section

    def chapter_header_blocks(self, chapter: Chapter, settings: PublishingSettings) -> List[Block]:
        """
        Chapter opening, in order:
        ornament (above-number), label + number (above-title),
        ornament (between-number-title), title ("N. " prefix when before-title),
        "Label N" (below-title), ornament (below-title).
        """
        cs = settings.chapters
        show_number = cs.show_chapter_number and cs.chapter_number_position != "hidden"
        number = format_chapter_number(chapter.number, cs.chapter_number_style) if show_number else ""
        ornament = get_chapter_ornament_symbol(cs.chapter_ornament)
        title = apply_title_case(chapter.title, cs.chapter_title_case)

        def ornament_at(position: str) -> List[Block]:
            if ornament and cs.chapter_ornament_position == position:
                return [Block(BlockType.ORNAMENT, ornament, style="chapter-ornament")]
            return []

        blocks = ornament_at("above-number")
        if show_number and cs.chapter_number_position == "above-title":
            blocks.append(Block(BlockType.CHAPTER_LABEL, cs.chapter_number_label, style="chapter-number-label"))
            blocks.append(Block(BlockType.CHAPTER_NUMBER, number, style="chapter-number"))
        blocks.extend(ornament_at("between-number-title"))

        if show_number and cs.chapter_number_position == "before-title":
            heading = f"{number}. {title}".strip()
        else:
            heading = title
        blocks.append(Block(BlockType.CHAPTER_TITLE, heading, level=1, style="chapter-title",
                            attributes={"source_title": chapter.title, "number": chapter.number}))

        if show_number and cs.chapter_number_position == "below-title":
            label = f"{cs.chapter_number_label} {number}".strip()
            blocks.append(Block(BlockType.CHAPTER_LABEL, label, style="chapter-number-label"))
        blocks.extend(ornament_at("below-title"))
        return blocks

    def chapter_body_blocks(self, chapter: Chapter, settings: PublishingSettings) -> List[Block]:
        """
        Sanitized chapter paragraphs.

        Scene-break paragraphs become scene-break blocks; the first paragraph
        gets the drop cap when enabled, unless it is a '>' blockquote.
        An empty chapter yields no blocks but keeps its header.
        """
        cs = settings.chapters
        typo = settings.typography
        symbol = get_scene_break_symbol(cs.scene_break_style, cs.scene_break_symbol)
        cleaned = sanitize(chapter.content, chapter.title, chapter.number)

        blocks: List[Block] = []
        follows_break = True
        for i, paragraph in enumerate(split_into_paragraphs(cleaned)):
            if is_scene_break(paragraph):
                blocks.append(Block(BlockType.SCENE_BREAK, symbol, style="scene-break"))
                follows_break = True
                continue
            if paragraph.startswith(">"):
                blocks.append(Block(BlockType.BLOCKQUOTE, _QUOTE_MARKER.sub("", paragraph),
                                    style="blockquote"))
            elif i == 0 and typo.drop_cap_enabled:
                blocks.append(Block(BlockType.PARAGRAPH, paragraph, style="drop-cap",
                                    attributes={"drop_cap_lines": typo.drop_cap_lines, "first": True}))
            else:
                attributes = {"first": True} if follows_break else {}
                blocks.append(Block(BlockType.PARAGRAPH, paragraph, attributes=attributes))
            follows_break = False
        return blocks

    # =========================================================================
    # Back matter
    # =========================================================================

    def _back_matter(self, manuscript: Manuscript, settings: PublishingSettings) -> List[Section]:
        bm = settings.back_matter
        numbering = settings.header_footer.page_number_style

        sections = []
        for section_id in bm.order:
            if not bm.is_enabled(section_id):
                continue
            if section_id == "bibliography":
                if not manuscript.has_bibliography:
                    continue
                section = self._bibliography(manuscript)
            elif section_id == "about-author":
                section = self._about_author(manuscript)
            elif section_id == "also-by":
                section = self._also_by(manuscript)
            elif section_id in MATTER_HEADINGS:
                section = self._matter_section(manuscript, section_id, PageRole.BACK_MATTER)
            else:
                logger.debug(f"Back matter section {section_id!r} is not generated")
                continue
            section.numbering = numbering
            section.running_strings = RunningStrings(
                title=manuscript.title, author=manuscript.author, chapter=section.title
            )
            sections.append(section)
        return sections

    def _bibliography(self, manuscript: Manuscript) -> Section:
        bibliography = manuscript.bibliography
        config = bibliography.config
        section = Section(kind=SectionKind.BIBLIOGRAPHY, role=PageRole.BACK_MATTER,
                          anchor="bibliography", title=BIBLIOGRAPHY_HEADING)
        section.add(BlockType.HEADING, BIBLIOGRAPHY_HEADING, level=1, style="bibliography-heading")
        for entry in format_bibliography_entries(bibliography):
            section.add(BlockType.BIBLIOGRAPHY_ENTRY, entry, style="bibliography-entry",
                        attributes={"hanging_indent": config.hanging_indent})
        section.add(BlockType.PARAGRAPH, f"References formatted in {config.citation_style.value} style.",
                    style="bibliography-note")
        return section

    def _about_author(self, manuscript: Manuscript) -> Section:
        section = Section(kind=SectionKind.ABOUT_AUTHOR, role=PageRole.BACK_MATTER,
                          anchor="about-author", title="About the Author")
        section.add(BlockType.HEADING, "About the Author", level=1, style="matter-heading")
        text = manuscript.matter_text("about-author") or \
            f"{manuscript.author} is the author of {manuscript.title}."
        for paragraph in split_into_paragraphs(text):
            section.add(BlockType.PARAGRAPH, paragraph, style="about-author")
        return section

    def _also_by(self, manuscript: Manuscript) -> Section:
        heading = f"Also by {manuscript.author}"
        section = Section(kind=SectionKind.ALSO_BY, role=PageRole.BACK_MATTER,
                          anchor="also-by", title=heading)
        section.add(BlockType.HEADING, heading, level=1, style="matter-heading")
        section.add(BlockType.PARAGRAPH, ALSO_BY_PLACEHOLDER, style="also-by")
        return section


def truncate_description(text: str, limit: int = DESCRIPTION_MAX_LENGTH) -> str:
    """Title-page blurb: over the limit, cut to limit-3 characters and add '...'."""
    if len(text) <= limit:
        return text
    return text[:limit - 3].strip() + "..."


def build_layout_document(manuscript, settings=None, year: Optional[int] = None) -> LayoutDocument:
    """Convenience wrapper around LayoutDocumentBuilder.build()"""
    return LayoutDocumentBuilder(year=year).build(manuscript, settings)
