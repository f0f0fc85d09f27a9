#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Numbering & Symbols - Chapter numerals, page numerals, ornaments.

Handles:
- Arabic / roman / word / ordinal chapter numbers
- Page number styles (arabic, roman-lower, roman-upper, none)
- Scene-break and chapter-ornament symbol lookup
- Display-only title case transforms

Version: 1.0.0
"""

import re
from enum import Enum
from typing import Optional

from .utils.constants import (
    ROMAN_NUMERALS,
    NUMBER_WORDS,
    ORDINAL_WORDS,
    TITLE_CASE_SMALL_WORDS,
    SCENE_BREAK_SYMBOLS,
    DEFAULT_SCENE_BREAK_SYMBOL,
    CHAPTER_ORNAMENT_SYMBOLS,
    DEFAULT_CHAPTER_ORNAMENT,
)


class ChapterNumberStyle(str, Enum):
    """How a chapter number is spelled"""
    NUMERIC = "numeric"    # 1, 2, 3
    ROMAN = "roman"        # I, II, III
    WORD = "word"          # One, Two, Three
    ORDINAL = "ordinal"    # First, Second, Third


class PageNumberStyle(str, Enum):
    """How a page number is printed"""
    ARABIC = "arabic"
    ROMAN_LOWER = "roman-lower"
    ROMAN_UPPER = "roman-upper"
    NONE = "none"


_ROMAN_RE = re.compile(r"^M{0,3}(CM|CD|D?C{0,3})(XC|XL|L?X{0,3})(IX|IV|V?I{0,3})$")
_ROMAN_VALUES = {"I": 1, "V": 5, "X": 10, "L": 50, "C": 100, "D": 500, "M": 1000}


# =============================================================================
# NUMERALS
# =============================================================================

def to_roman(number: int) -> str:
    """
    Convert an integer to upper-case roman numerals (greedy subtractive form).

    Non-positive numbers have no roman form and yield an empty string;
    numbers above 3999 keep stacking M's.
    """
    result = []
    remaining = int(number)
    for value, symbol in ROMAN_NUMERALS:
        while remaining >= value:
            result.append(symbol)
            remaining -= value
    return "".join(result)


def from_roman(text: str) -> int:
    """
    Parse a roman numeral (case-insensitive).

    Raises:
        ValueError: if the text is not a canonical roman numeral
    """
    numeral = (text or "").strip().upper()
    if not numeral or not _ROMAN_RE.match(numeral):
        raise ValueError(f"Not a roman numeral: {text!r}")

    total = 0
    previous = 0
    for char in reversed(numeral):
        value = _ROMAN_VALUES[char]
        if value < previous:
            total -= value
        else:
            total += value
            previous = value
    return total


def to_word(number: int) -> str:
    """Spell 1-30 as words; anything else falls back to the numeral string."""
    if 1 <= number < len(NUMBER_WORDS):
        return NUMBER_WORDS[number]
    return str(number)


def to_ordinal(number: int) -> str:
    """Spell 1-20 as ordinals; anything else falls back to the numeral string."""
    if 1 <= number < len(ORDINAL_WORDS):
        return ORDINAL_WORDS[number]
    return str(number)


def format_chapter_number(number: int, style: str = "numeric") -> str:
    """
    Format a chapter number.

    Args:
        number: Chapter number (positive)
        style: numeric | roman | word | ordinal (unknown -> numeric)
    """
    formatters = {
        ChapterNumberStyle.ROMAN.value: to_roman,
        ChapterNumberStyle.WORD.value: to_word,
        ChapterNumberStyle.ORDINAL.value: to_ordinal,
    }
    formatter = formatters.get(_enum_value(style))
    if formatter is None:
        return str(number)
    return formatter(number) or str(number)


def format_page_number(number: int, style: str = "arabic") -> str:
    """Format a page number; the 'none' style prints nothing."""
    style = _enum_value(style)
    if style == PageNumberStyle.NONE.value:
        return ""
    if style == PageNumberStyle.ROMAN_LOWER.value:
        return (to_roman(number) or str(number)).lower()
    if style == PageNumberStyle.ROMAN_UPPER.value:
        return to_roman(number) or str(number)
    return str(number)


# =============================================================================
# SYMBOLS
# =============================================================================

def get_scene_break_symbol(style: str, custom_symbol: Optional[str] = None) -> str:
    """
    Resolve the printed scene-break marker.

    'custom' uses the supplied symbol (or the default when blank);
    unknown styles get the default asterisks.
    """
    style = _enum_value(style)
    if style == "custom":
        return custom_symbol if custom_symbol and custom_symbol.strip() else DEFAULT_SCENE_BREAK_SYMBOL
    return SCENE_BREAK_SYMBOLS.get(style, DEFAULT_SCENE_BREAK_SYMBOL)


def get_chapter_ornament_symbol(style: str) -> str:
    """Resolve the chapter-opening ornament; unknown styles draw nothing."""
    return CHAPTER_ORNAMENT_SYMBOLS.get(_enum_value(style), DEFAULT_CHAPTER_ORNAMENT)


# =============================================================================
# TITLE CASE
# =============================================================================

def apply_title_case(title: str, mode: str = "title-case") -> str:
    """
    Transform a chapter title for display.

    Modes: title-case | uppercase | lowercase | as-written.
    The source title is never modified; callers store the result separately.
    """
    mode = _enum_value(mode)
    if not title:
        return title or ""
    if mode == "uppercase":
        return title.upper()
    if mode == "lowercase":
        return title.lower()
    if mode != "title-case":
        return title

    words = title.split(" ")
    last = len(words) - 1
    result = []
    for i, word in enumerate(words):
        if not word:
            result.append(word)
            continue
        if 0 < i < last and word.lower() in TITLE_CASE_SMALL_WORDS:
            result.append(word.lower())
        elif word.isupper() and len(word) > 1:
            # Acronyms stay as written
            result.append(word)
        else:
            result.append(_capitalize_word(word))
    return " ".join(result)


def _capitalize_word(word: str) -> str:
    """Capitalize each hyphen-separated part, skipping leading punctuation."""
    parts = []
    for part in word.split("-"):
        for idx, char in enumerate(part):
            if char.isalpha():
                part = part[:idx] + char.upper() + part[idx + 1:]
                break
        parts.append(part)
    return "-".join(parts)


def _enum_value(value) -> str:
    """Accept enum members or raw strings"""
    if isinstance(value, Enum):
        return value.value
    return str(value or "").strip().lower()
