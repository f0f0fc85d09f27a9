#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Formatting Constants - Book production standards.

Based on industry standards:
- KDP / IngramSpark / Lulu trim sizes
- Chicago Manual of Style page anatomy
- Traditional trade-book margins and ornaments
"""

# =============================================================================
# TRIM SIZES (inches)
# =============================================================================

TRIM_SIZES = {
    # Mass Market & Pocket
    "mass-market": {"name": "Mass Market Paperback", "width": 4.25, "height": 6.87, "category": "paperback"},
    "pocket": {"name": "Pocket Book", "width": 4.37, "height": 7.0, "category": "paperback"},

    # Trade Paperback
    "trade-5x8": {"name": "Trade Paperback (5x8)", "width": 5.0, "height": 8.0, "category": "paperback"},
    "trade-5.25x8": {"name": "Trade Paperback (5.25x8)", "width": 5.25, "height": 8.0, "category": "paperback"},
    "trade-5.5x8.5": {"name": "Trade Paperback (5.5x8.5)", "width": 5.5, "height": 8.5, "category": "paperback"},
    "digest": {"name": "Digest", "width": 5.5, "height": 8.25, "category": "paperback"},

    # Standard Non-Fiction
    "us-trade-6x9": {"name": "US Trade (6x9)", "width": 6.0, "height": 9.0, "category": "paperback"},
    "royal-6.14x9.21": {"name": "Royal", "width": 6.14, "height": 9.21, "category": "paperback"},

    # Young Adult & Children
    "ya-5.5x8.25": {"name": "Young Adult", "width": 5.5, "height": 8.25, "category": "paperback"},
    "children-square-8.5": {"name": "Children's Square (8.5x8.5)", "width": 8.5, "height": 8.5, "category": "children"},
    "children-landscape-11x8.5": {"name": "Children's Landscape", "width": 11.0, "height": 8.5, "category": "children"},
    "children-portrait-8.5x11": {"name": "Children's Portrait", "width": 8.5, "height": 11.0, "category": "children"},
    "middle-grade": {"name": "Middle Grade", "width": 5.25, "height": 7.5, "category": "paperback"},

    # Large Format
    "coffee-table-11x8.5": {"name": "Coffee Table Landscape", "width": 11.0, "height": 8.5, "category": "large-format"},
    "coffee-table-12x12": {"name": "Coffee Table Square", "width": 12.0, "height": 12.0, "category": "large-format"},
    "photo-10x8": {"name": "Photo Book (10x8)", "width": 10.0, "height": 8.0, "category": "large-format"},

    # Standard Paper Sizes
    "us-letter": {"name": "US Letter", "width": 8.5, "height": 11.0, "category": "standard"},
    "a4": {"name": "A4", "width": 8.27, "height": 11.69, "category": "standard"},
    "a5": {"name": "A5", "width": 5.83, "height": 8.27, "category": "standard"},

    # Hardcover
    "hardcover-6x9": {"name": "Hardcover (6x9)", "width": 6.0, "height": 9.0, "category": "hardcover"},
    "hardcover-6.5x9.5": {"name": "Hardcover (6.5x9.5)", "width": 6.5, "height": 9.5, "category": "hardcover"},
    "hardcover-7x10": {"name": "Hardcover (7x10)", "width": 7.0, "height": 10.0, "category": "hardcover"},
}

CUSTOM_TRIM_ID = "custom"


# =============================================================================
# MARGIN PRESETS (inches)
# =============================================================================

MARGIN_PRESETS = {
    "tight": {
        "top": 0.5, "bottom": 0.5, "inside": 0.625, "outside": 0.5,
        "mirror_margins": True, "bleed": 0.125, "header_space": 0.25, "footer_space": 0.25,
    },
    "normal": {
        "top": 0.75, "bottom": 0.75, "inside": 0.875, "outside": 0.75,
        "mirror_margins": True, "bleed": 0.125, "header_space": 0.3, "footer_space": 0.3,
    },
    "comfortable": {
        "top": 1.0, "bottom": 1.0, "inside": 1.0, "outside": 1.0,
        "mirror_margins": True, "bleed": 0.125, "header_space": 0.35, "footer_space": 0.35,
    },
    "wide": {
        "top": 1.25, "bottom": 1.25, "inside": 1.25, "outside": 1.25,
        "mirror_margins": True, "bleed": 0.125, "header_space": 0.4, "footer_space": 0.4,
    },
    "academic": {
        "top": 1.0, "bottom": 1.0, "inside": 1.5, "outside": 1.0,
        "mirror_margins": True, "bleed": 0.0, "header_space": 0.5, "footer_space": 0.5,
    },
    "picture-book": {
        "top": 0.5, "bottom": 0.5, "inside": 0.5, "outside": 0.5,
        "mirror_margins": False, "bleed": 0.25, "header_space": 0.0, "footer_space": 0.0,
    },
}


# =============================================================================
# NUMERALS
# =============================================================================

ROMAN_NUMERALS = [
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
    (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
]

NUMBER_WORDS = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine", "Ten",
    "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen", "Seventeen",
    "Eighteen", "Nineteen", "Twenty", "Twenty-One", "Twenty-Two", "Twenty-Three",
    "Twenty-Four", "Twenty-Five", "Twenty-Six", "Twenty-Seven", "Twenty-Eight",
    "Twenty-Nine", "Thirty",
]

ORDINAL_WORDS = [
    "", "First", "Second", "Third", "Fourth", "Fifth", "Sixth", "Seventh", "Eighth",
    "Ninth", "Tenth", "Eleventh", "Twelfth", "Thirteenth", "Fourteenth", "Fifteenth",
    "Sixteenth", "Seventeenth", "Eighteenth", "Nineteenth", "Twentieth",
]

# Words kept lowercase by title case unless first or last
TITLE_CASE_SMALL_WORDS = {
    "a", "an", "and", "as", "at", "but", "by", "for", "from", "in", "into",
    "nor", "of", "on", "or", "over", "the", "to", "upon", "with",
}


# =============================================================================
# SCENE BREAKS & ORNAMENTS
# =============================================================================

# Paragraphs that are exactly one of these are scene breaks
SCENE_BREAK_TOKENS = frozenset([
    "***",
    "* * *",
    "---",
    "- - -",
    "❧",              # rotated floral heart bullet
    "• • •",
])

# Characters allowed in the short-paragraph scene-break fallback
SCENE_BREAK_CHARS = "*-•"

SCENE_BREAK_SYMBOLS = {
    "blank-line": "",
    "asterisks": "* * *",
    "ornament": "❦",      # floral heart
    "number": "•",
}
DEFAULT_SCENE_BREAK_SYMBOL = "* * *"

CHAPTER_ORNAMENT_SYMBOLS = {
    "none": "",
    "line": "━" * 9,      # heavy horizontal rule
    "flourish": "❧",
    "stars": "✦ ✦ ✦",
    "dots": "• • •",
}
DEFAULT_CHAPTER_ORNAMENT = ""


# =============================================================================
# FONTS
# =============================================================================

# Font ids from settings -> (display family, generic family)
FONT_FAMILIES = {
    "garamond": ("EB Garamond", "serif"),
    "georgia": ("Georgia", "serif"),
    "times-new-roman": ("Times New Roman", "serif"),
    "palatino": ("Palatino", "serif"),
    "baskerville": ("Baskerville", "serif"),
    "caslon": ("Adobe Caslon Pro", "serif"),
    "minion": ("Minion Pro", "serif"),
    "sabon": ("Sabon", "serif"),
    "bembo": ("Bembo", "serif"),
    "libre-baskerville": ("Libre Baskerville", "serif"),
    "merriweather": ("Merriweather", "serif"),
    "source-serif": ("Source Serif Pro", "serif"),
    "lora": ("Lora", "serif"),
    "helvetica": ("Helvetica", "sans-serif"),
    "arial": ("Arial", "sans-serif"),
    "open-sans": ("Open Sans", "sans-serif"),
    "roboto": ("Roboto", "sans-serif"),
    "lato": ("Lato", "sans-serif"),
    "montserrat": ("Montserrat", "sans-serif"),
    "playfair": ("Playfair Display", "serif"),
    "cormorant": ("Cormorant Garamond", "serif"),
    "cinzel": ("Cinzel", "serif"),
    "philosopher": ("Philosopher", "sans-serif"),
    "spectral": ("Spectral", "serif"),
}

# Standard PDF fonts per generic family: (regular, bold, italic, bold-italic)
PDF_BASE_FONTS = {
    "serif": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
    "sans-serif": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
}


# =============================================================================
# PARAGRAPH SPACING (points between paragraphs)
# =============================================================================

PARAGRAPH_SPACING_PT = {
    "none": 0,
    "small": 4,
    "medium": 8,
    "large": 14,
}
