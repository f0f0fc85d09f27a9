#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shared renderer helpers: font lookup, unit conversion and inline markup.

Version: 1.0.0
"""

import re
from typing import Tuple
from xml.sax.saxutils import escape

from config.constants import POINTS_PER_INCH
from core.formatting.utils.constants import FONT_FAMILIES, PARAGRAPH_SPACING_PT, PDF_BASE_FONTS

DEFAULT_FONT_ID = "georgia"
INHERIT = "inherit"

_EMPHASIS = re.compile(r"<em>(.*?)</em>", re.DOTALL)
_TAG = re.compile(r"</?(em|sup)>")


def font_family(font_id: str) -> Tuple[str, str]:
    """Font id -> (display family, generic family)"""
    return FONT_FAMILIES.get(font_id) or FONT_FAMILIES[DEFAULT_FONT_ID]


def resolve_font_id(font_id: str, fallback: str) -> str:
    """'inherit' (or empty) takes the fallback font id"""
    return fallback if not font_id or font_id == INHERIT else font_id


def pdf_fonts(font_id: str) -> Tuple[str, str, str, str]:
    """Standard PDF fonts (regular, bold, italic, bold-italic) for a font id"""
    _, generic = font_family(font_id)
    return PDF_BASE_FONTS.get(generic, PDF_BASE_FONTS["serif"])


def css_font_stack(font_id: str) -> str:
    display, generic = font_family(font_id)
    return f'"{display}", {generic}'


def indent_points(typography) -> float:
    """Paragraph indent in points"""
    value = typography.paragraph_indent
    unit = typography.paragraph_indent_unit
    if unit == "em":
        return value * typography.body_font_size
    if unit == "px":
        return value * 0.75
    return value * POINTS_PER_INCH


def paragraph_spacing_points(typography) -> float:
    return PARAGRAPH_SPACING_PT.get(typography.paragraph_spacing, 0)


def markup(text: str, italic_open: str = "<i>", italic_close: str = "</i>") -> str:
    """Escape text for XML, then re-open <em> spans with the given tags"""
    escaped = escape(text or "")
    escaped = escaped.replace("&lt;em&gt;", italic_open).replace("&lt;/em&gt;", italic_close)
    return escaped.replace("&lt;sup&gt;", "<sup>").replace("&lt;/sup&gt;", "</sup>")


def plain(text: str) -> str:
    """Drop inline tags"""
    return _TAG.sub("", text or "")


def emphasis_runs(text: str):
    """Yield (fragment, italic) pairs for text with <em> spans"""
    position = 0
    for match in _EMPHASIS.finditer(text or ""):
        if match.start() > position:
            yield plain(text[position:match.start()]), False
        yield plain(match.group(1)), True
        position = match.end()
    if position < len(text or ""):
        yield plain(text[position:]), False
