#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Formatting utilities - book production constants.
"""

from .constants import (
    TRIM_SIZES,
    CUSTOM_TRIM_ID,
    MARGIN_PRESETS,
    SCENE_BREAK_TOKENS,
    SCENE_BREAK_SYMBOLS,
    CHAPTER_ORNAMENT_SYMBOLS,
    FONT_FAMILIES,
    PDF_BASE_FONTS,
    PARAGRAPH_SPACING_PT,
)

__all__ = [
    "TRIM_SIZES",
    "CUSTOM_TRIM_ID",
    "MARGIN_PRESETS",
    "SCENE_BREAK_TOKENS",
    "SCENE_BREAK_SYMBOLS",
    "CHAPTER_ORNAMENT_SYMBOLS",
    "FONT_FAMILIES",
    "PDF_BASE_FONTS",
    "PARAGRAPH_SPACING_PT",
]
