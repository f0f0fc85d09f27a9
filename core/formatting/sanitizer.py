#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Content Sanitizer - Strip generation artifacts from chapter text.

Pipeline (order matters, later passes assume earlier ones ran):
1. Artifact removal: placeholders, emphasis markers, doubled dashes,
   markdown headers, HTML emphasis tags, meta-commentary lines
2. Chapter-title echo removal ("Chapter 3: Title", bare "Chapter 3", title line)
3. Title-only content collapses to an empty chapter
4. Blank-line normalization (at most one empty line between paragraphs)

The whole pipeline is re-applied until the text stops changing, so
sanitize(sanitize(x)) == sanitize(x). Every pass only ever shortens the
text, which bounds the loop.

Also provides paragraph helpers, word counts, scene-break detection and
opt-in typographic passes (smart quotes, dashes) that sanitize() never runs.

Version: 1.0.0
"""

import math
import re
from typing import List, Optional, Tuple

from config.constants import (
    READING_WORDS_PER_MINUTE,
    SCENE_BREAK_MAX_LENGTH,
)
from config.logging_config import get_logger
from .utils.constants import SCENE_BREAK_CHARS, SCENE_BREAK_TOKENS

logger = get_logger(__name__)


# =============================================================================
# PATTERNS
# =============================================================================

# Generation markers removed wherever they appear
META_MARKERS = [
    re.compile(r"\[\s*END\s+(?:OF\s+)?CHAPTER\s*\]", re.IGNORECASE),
    re.compile(r"\[\s*CHAPTER\s+END\s*\]", re.IGNORECASE),
    re.compile(r"\[\s*(?:TO\s+BE\s+)?CONTINUED?\s*\]", re.IGNORECASE),
    re.compile(r"\[\s*(?:END|START|BEGIN)\s*\]", re.IGNORECASE),
]

# Whole lines that are instructions or commentary
META_LINES = [
    re.compile(r"^[ \t]*\[[^\]\n]*\][ \t]*$", re.MULTILINE),               # [Insert scene here]
    re.compile(r"^[ \t]*\{[^}\n]*\}[ \t]*$", re.MULTILINE),                # {placeholder}
    re.compile(r"^[ \t]*(?:Author'?s\s+)?Note\s*:.*$", re.MULTILINE | re.IGNORECASE),
    re.compile(
        r"^[ \t]*[(\[]?(?:to\s+be\s+)?continued(?:\.{1,3}|…)?[)\]]?[ \t]*$",
        re.MULTILINE | re.IGNORECASE,
    ),
]

INLINE_PLACEHOLDER = re.compile(r"\{\{[^}\n]*\}\}")

# Bold and bold-italic markers, matched left to right with the opening run
# repeated as the closer. Content must start and end with a character that is
# not a marker, so "***", "*****" and "* * *" scene breaks never match.
EMPHASIS = re.compile(r"(\*{2,3}|_{2,3})(?=[^\s*_])([^\n]+?)(?<=[^\s*_])\1")
STRAY_EMPHASIS = re.compile(r"(?<=\w)\*{2,}|\*{2,}(?=\w)|(?<=\w)_{2,}(?=\W|$)|(?:^|(?<=\W))_{2,}(?=\w)")

HTML_EMPHASIS = re.compile(r"</?(?:em|i|b|strong|u|mark|span)(?:\s[^>]*)?>", re.IGNORECASE)
MARKDOWN_HEADER = re.compile(r"^[ \t]*#{1,6}[ \t]+", re.MULTILINE)

# Dash runs: "— —", "——", "word--word"
DASH_RUN = re.compile(r"[—–](?:[ \t]*[—–])+")
DOUBLE_HYPHEN = re.compile(r"(?<=\w)[ \t]*-{2,3}[ \t]*(?=\w)")

TRAILING_SPACE = re.compile(r"[ \t]+$", re.MULTILINE)
EXCESS_NEWLINES = re.compile(r"\n{3,}")


# =============================================================================
# SANITIZE
# =============================================================================

def sanitize(raw_text: Optional[str], chapter_title: str = "", chapter_number: Optional[int] = None) -> str:
    """
    Clean raw chapter text.

    Args:
        raw_text: Chapter content as generated/imported
        chapter_title: Title used to detect echoed headings
        chapter_number: Number used to detect echoed "Chapter N" lines

    Returns:
        Clean text; empty string when nothing but the heading was present.
        Never raises.
    """
    if not raw_text:
        return ""

    chapter_number = _as_int(chapter_number)
    text = raw_text.replace("\r\n", "\n").replace("\r", "\n")
    passes = 0
    while True:
        passes += 1
        cleaned = _sanitize_once(text, chapter_title or "", chapter_number)
        if cleaned == text:
            break
        text = cleaned
    if passes > 2:
        logger.debug(f"Sanitizer settled after {passes} passes")

    return text


def _sanitize_once(text: str, title: str, number: Optional[int]) -> str:
    text = remove_artifacts(text)
    text = remove_title_echoes(text, title, number)

    if _is_only_heading(text, title, number):
        return ""

    text = TRAILING_SPACE.sub("", text)
    text = EXCESS_NEWLINES.sub("\n\n", text)
    return text.strip()


def remove_artifacts(text: str) -> str:
    """Step 1: strip generation artifacts, keeping prose and scene breaks intact."""
    for pattern in META_MARKERS:
        text = pattern.sub("", text)
    for pattern in META_LINES:
        text = pattern.sub("", text)
    text = INLINE_PLACEHOLDER.sub("", text)

    text = EMPHASIS.sub(r"\2", text)
    text = STRAY_EMPHASIS.sub("", text)

    text = DASH_RUN.sub("—", text)
    text = DOUBLE_HYPHEN.sub("—", text)

    text = MARKDOWN_HEADER.sub("", text)
    text = HTML_EMPHASIS.sub("", text)
    return text


def _title_echo_patterns(title: str, number: Optional[int]) -> List[Tuple[re.Pattern, int]]:
    """Ordered (pattern, count) pairs; the first three need both number and title."""
    patterns = []
    esc = re.escape(title.strip()) if title and title.strip() else None
    num = rf"{int(number)}(?!\d)" if number is not None else None
    tail = r"[ \t.,:;!?]*"

    if num and esc:
        patterns.append((re.compile(rf"\A[ \t]*Chapter[ \t]+{num}[ \t]*[:.\-][ \t]*{esc}{tail}", re.IGNORECASE), 1))
        patterns.append((re.compile(rf"\A[ \t]*Chapter[ \t]+{num}[ \t]*[-–—][ \t]*{esc}{tail}", re.IGNORECASE), 1))
        patterns.append((re.compile(rf"\A[ \t]*Chapter[ \t]+{num}[ \t]+{esc}{tail}", re.IGNORECASE), 1))
    if num:
        # Bare "Chapter N:" only when it is the whole first line
        patterns.append((re.compile(rf"\A[ \t]*Chapter[ \t]+{num}[ \t]*[:.\-–—]?[ \t]*(?=\n|\Z)", re.IGNORECASE), 1))
    if esc:
        # Title as the whole first line
        patterns.append((re.compile(rf"\A[ \t]*{esc}{tail}(?=\n|\Z)", re.IGNORECASE), 1))
        # Title repeated on its own line after blank lines
        patterns.append((re.compile(rf"(?<=\n\n)[ \t]*{esc}[ \t.:]*(?=\n|\Z)", re.IGNORECASE), 0))
    return patterns


def remove_title_echoes(text: str, chapter_title: str, chapter_number: Optional[int]) -> str:
    """Step 2: delete the chapter heading the generator echoed into the body."""
    for pattern, count in _title_echo_patterns(chapter_title, chapter_number):
        text = pattern.sub("", text, count=count).lstrip()
    return text


def _as_int(value) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _is_only_heading(text: str, title: str, number: Optional[int]) -> bool:
    """Step 3: content that is nothing but the heading is treated as empty."""
    stripped = text.strip().rstrip(".:!?").strip().lower()
    if not stripped:
        return True
    if title and stripped == title.strip().lower():
        return True
    if number is not None and re.fullmatch(rf"chapter\s+{int(number)}", stripped):
        return True
    return False


# =============================================================================
# SCENE BREAKS & PARAGRAPHS
# =============================================================================

def is_scene_break(text: Optional[str]) -> bool:
    """
    True when a paragraph is a scene-break marker.

    Exact sentinel tokens always match. As a fallback, a paragraph of at most
    five characters made only of '*', '-' or bullets (ignoring whitespace)
    also matches; this is deliberately loose and may flag a short run of
    dashes that was meant as prose.
    """
    if not text:
        return False
    t = text.strip()
    if t in SCENE_BREAK_TOKENS:
        return True
    compact = re.sub(r"\s", "", t)
    return (
        len(t) <= SCENE_BREAK_MAX_LENGTH
        and bool(compact)
        and all(ch in SCENE_BREAK_CHARS for ch in compact)
    )


def split_into_paragraphs(text: Optional[str]) -> List[str]:
    """Split on blank lines, dropping empty paragraphs."""
    if not text:
        return []
    return [p.strip() for p in re.split(r"\n[ \t]*\n+", text) if p.strip()]


def join_paragraphs(paragraphs: List[str]) -> str:
    return "\n\n".join(paragraphs)


# =============================================================================
# METRICS & VALIDATION
# =============================================================================

def count_words(text: Optional[str]) -> int:
    if not text:
        return 0
    return len(text.split())


def estimate_reading_time(word_count: int) -> int:
    """Minutes at 250 words per minute, rounded up."""
    if word_count <= 0:
        return 0
    return math.ceil(word_count / READING_WORDS_PER_MINUTE)


def validate_text(text: str) -> List[str]:
    """
    Report leftover artifacts without changing anything.

    Returns:
        List of human-readable issues (empty when clean)
    """
    issues = []
    if re.search(r"```|#{2,}|\*\*", text):
        issues.append("Contains markdown formatting")
    if re.search(r"\[END|\[CONTINUE|CHAPTER\]", text, re.IGNORECASE):
        issues.append("Contains meta text markers")
    if re.search(r"^\d+\.\s+", text, re.MULTILINE):
        issues.append("Contains list numbering")
    if re.search(r"\n{4,}", text):
        issues.append("Contains excessive line breaks")
    if re.search(r'"[^"]*"', text):
        issues.append("Uses straight quotes instead of smart quotes")
    return issues


def sanitize_title(title: Optional[str]) -> str:
    """Clean a book or chapter title: outer quotes, markdown, extra spaces."""
    if not title:
        return ""
    clean = title.strip()
    clean = re.sub(r"^[\"']|[\"']$", "", clean)
    clean = MARKDOWN_HEADER.sub("", clean)
    clean = EMPHASIS.sub(r"\2", clean)
    clean = re.sub(r"\*(.+?)\*", r"\1", clean)
    clean = HTML_EMPHASIS.sub("", clean)
    return re.sub(r"\s+", " ", clean).strip()


# =============================================================================
# OPT-IN TYPOGRAPHY
# =============================================================================

def smarten_quotes(text: str) -> str:
    """Convert straight quotes to curly quotes."""
    fixed = re.sub(r'"([^"\n]*)"', "\u201c\\1\u201d", text)
    fixed = re.sub(r"(\w)'(\w)", "\\1\u2019\\2", fixed)
    fixed = re.sub(r"'([^'\n]*)'", "\u2018\\1\u2019", fixed)
    fixed = re.sub(r'^"', "\u201c", fixed, flags=re.MULTILINE)
    fixed = re.sub(r'"$', "\u201d", fixed, flags=re.MULTILINE)
    return fixed


def normalize_dashes(text: str) -> str:
    """
    Typographic dashes: '--'/'---' between words become an em dash,
    hyphenated number ranges become an en dash. Scene-break lines are kept.
    """
    lines = []
    for line in text.split("\n"):
        if is_scene_break(line):
            lines.append(line)
            continue
        line = re.sub(r"(?<=\S)-{2,3}(?=\S)", "\u2014", line)
        line = re.sub(r"(?<=\S) -{2,3} (?=\S)", "\u2014", line)
        line = re.sub(r"(\d+)-(\d+)", "\\1\u2013\\2", line)
        lines.append(line)
    return "\n".join(lines)
