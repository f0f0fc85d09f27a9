#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Plain-text and Markdown Export

Unpaginated exports of a manuscript. Chapter text goes through the same
sanitizer as the paginated renderers; no publishing settings apply.

Handles:
- Title block and per-chapter headers
- Scene breaks normalized to one marker per format
- Bibliography list (Markdown)

Version: 1.0.0
"""

import re
from typing import Callable, List
import logging

from core.bibliography.formatter import format_bibliography_entries
from core.contracts.manuscript import Chapter, Manuscript
from core.formatting.sanitizer import is_scene_break, sanitize, split_into_paragraphs

logger = logging.getLogger(__name__)

RULE_WIDTH = 50
TEXT_SCENE_BREAK = "* * *"
MARKDOWN_SCENE_BREAK = "---"

_EMPHASIS = re.compile(r"</?em>")
_TAG = re.compile(r"<[^>]+>")


def _chapter_paragraphs(chapter: Chapter, scene_break: str) -> List[str]:
    text = sanitize(chapter.content, chapter.title, chapter.number)
    return [
        scene_break if is_scene_break(paragraph) else paragraph
        for paragraph in split_into_paragraphs(text)
    ]


def _chapters(manuscript: Manuscript, render: Callable[[Chapter], str]) -> str:
    return "".join(render(chapter) for chapter in (manuscript.chapters or []))


def export_plain_text(manuscript: Manuscript) -> str:
    """
    Export a manuscript as plain text.

    Args:
        manuscript: Manuscript to export

    Returns:
        Text with a title block and one "Chapter N: Title" block per chapter
    """
    def render(chapter: Chapter) -> str:
        body = "\n\n".join(_chapter_paragraphs(chapter, TEXT_SCENE_BREAK))
        return f"\nChapter {chapter.number}: {chapter.title}\n\n{body}\n\n{'-' * RULE_WIDTH}\n"

    content = f"{manuscript.title}\nby {manuscript.author}\n\n{'=' * RULE_WIDTH}\n\n"
    content += _chapters(manuscript, render)
    logger.debug(f"Plain-text export: {len(manuscript.chapters or [])} chapters, {len(content)} chars")
    return content


def export_markdown(manuscript: Manuscript) -> str:
    """
    Export a manuscript as Markdown.

    Args:
        manuscript: Manuscript to export

    Returns:
        Markdown with "## Chapter N: Title" sections and, when the manuscript
        carries an active bibliography, a "## Bibliography" list
    """
    def render(chapter: Chapter) -> str:
        body = "\n\n".join(_chapter_paragraphs(chapter, MARKDOWN_SCENE_BREAK))
        return f"## Chapter {chapter.number}: {chapter.title}\n\n{body}\n\n"

    content = f"# {manuscript.title}\n*by {manuscript.author}*\n\n{MARKDOWN_SCENE_BREAK}\n\n"
    content += _chapters(manuscript, render)

    if manuscript.has_bibliography:
        entries = [
            _TAG.sub("", _EMPHASIS.sub("*", entry))
            for entry in format_bibliography_entries(manuscript.bibliography)
        ]
        content += "## Bibliography\n\n" + "\n".join(f"- {entry}" for entry in entries) + "\n"

    logger.debug(f"Markdown export: {len(manuscript.chapters or [])} chapters, {len(content)} chars")
    return content
