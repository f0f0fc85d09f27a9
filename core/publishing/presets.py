#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Publishing Presets - Partial settings documents layered over the defaults.

Handles:
- Style presets (classic, modern, minimal, elegant, bold, academic, childrens)
- Book-type presets (novel, picture-book, textbook, ...)
- Genre -> style preset mapping
- Named publishing presets offered as starting points

Every preset is a partial, snake_case settings document. Presets that need a
margin set name a ``margin_preset`` instead of repeating the numbers.

Version: 1.0.0
"""

# =============================================================================
# STYLE PRESETS
# =============================================================================

STYLE_PRESETS = {
    "classic": {
        "typography": {"body_font": "garamond", "heading_font": "inherit", "drop_cap_enabled": True},
        "chapters": {"chapter_ornament": "flourish"},
    },
    "modern": {
        "typography": {
            "body_font": "source-serif",
            "heading_font": "montserrat",
            "body_alignment": "left",
            "drop_cap_enabled": False,
        },
        "chapters": {"chapter_ornament": "none", "chapter_opening_style": "minimal"},
    },
    "minimal": {
        "typography": {
            "body_font": "helvetica",
            "heading_font": "inherit",
            "body_alignment": "left",
            "paragraph_spacing": "medium",
            "paragraph_indent": 0,
        },
        "chapters": {
            "show_chapter_number": False,
            "chapter_ornament": "none",
            "scene_break_style": "blank-line",
        },
        "header_footer": {"header_enabled": False},
    },
    "elegant": {
        "typography": {
            "body_font": "baskerville",
            "heading_font": "playfair",
            "drop_cap_enabled": True,
            "drop_cap_lines": 4,
        },
        "chapters": {"chapter_opening_style": "decorated", "chapter_ornament": "flourish"},
    },
    "bold": {
        "typography": {
            "body_font": "libre-baskerville",
            "heading_font": "montserrat",
            "chapter_title_size": 28,
            "drop_cap_enabled": True,
            "drop_cap_lines": 2,
        },
        "chapters": {
            "chapter_opening_style": "full-page",
            "chapter_number_style": "word",
            "chapter_title_case": "uppercase",
            "chapter_ornament": "line",
            "chapter_ornament_position": "between-number-title",
        },
    },
    "academic": {
        "trim_size": "us-letter",
        "margin_preset": "academic",
        "typography": {
            "body_font": "times-new-roman",
            "body_font_size": 12,
            "body_line_height": 2.0,
            "body_alignment": "left",
            "paragraph_indent": 0.5,
        },
        "chapters": {"start_on_odd_page": False, "chapter_ornament": "none"},
    },
    "childrens": {
        "trim_size": "children-square-8.5",
        "margin_preset": "picture-book",
        "typography": {
            "body_font": "open-sans",
            "body_font_size": 16,
            "body_line_height": 1.8,
            "body_alignment": "left",
            "paragraph_spacing": "large",
            "paragraph_indent": 0,
        },
        "chapters": {"chapter_opening_style": "illustrated", "start_on_odd_page": False},
        "header_footer": {"header_enabled": False, "footer_enabled": False},
    },
}


# =============================================================================
# BOOK TYPE PRESETS
# =============================================================================

BOOK_TYPE_PRESETS = {
    "novel": {"trim_size": "trade-5.5x8.5", "style_preset": "classic"},
    "novella": {"trim_size": "trade-5x8", "style_preset": "classic"},
    "short-story-collection": {
        "trim_size": "trade-5.5x8.5",
        "chapters": {"chapter_number_label": "Story"},
    },
    "picture-book": {"trim_size": "children-square-8.5", "style_preset": "childrens"},
    "storybook": {"trim_size": "middle-grade", "typography": {"body_font_size": 13}},
    "young-adult": {"trim_size": "ya-5.5x8.25", "style_preset": "modern"},
    "middle-grade": {
        "trim_size": "middle-grade",
        "typography": {"body_font_size": 12, "body_line_height": 1.6},
    },
    "textbook": {"trim_size": "us-letter", "style_preset": "academic"},
    "workbook": {"trim_size": "us-letter", "margin_preset": "wide"},
    "cookbook": {"trim_size": "us-trade-6x9", "typography": {"body_font": "open-sans"}},
    "coffee-table-book": {
        "trim_size": "coffee-table-11x8.5",
        "orientation": "landscape",
        "style_preset": "minimal",
    },
    "art-book": {"trim_size": "coffee-table-12x12", "margin_preset": "tight"},
    "memoir": {"trim_size": "trade-5.5x8.5", "style_preset": "elegant"},
    "biography": {"trim_size": "us-trade-6x9", "style_preset": "classic"},
    "self-help": {"trim_size": "us-trade-6x9", "style_preset": "modern"},
    "business": {"trim_size": "us-trade-6x9", "style_preset": "modern"},
    "technical": {"trim_size": "us-letter", "style_preset": "academic"},
    "poetry": {
        "trim_size": "trade-5x8",
        "typography": {"body_alignment": "left", "paragraph_indent": 0},
        "chapters": {"chapter_number_label": "Part"},
    },
    "graphic-novel": {"trim_size": "us-trade-6x9", "margin_preset": "tight"},
    "journal": {"trim_size": "a5", "margin_preset": "wide"},
    "devotional": {"trim_size": "trade-5x8", "style_preset": "elegant"},
    "travel-guide": {"trim_size": "trade-5x8", "style_preset": "modern"},
    "magazine": {"trim_size": "us-letter", "orientation": "portrait"},
    "academic": {"trim_size": "us-letter", "style_preset": "academic"},
    "custom": {},
}


# =============================================================================
# GENRES
# =============================================================================

GENRE_STYLE_PRESETS = {
    "fiction": "classic",
    "literary fiction": "classic",
    "literary": "classic",
    "historical fiction": "classic",
    "historical": "classic",
    "fantasy": "elegant",
    "romance": "elegant",
    "science fiction": "modern",
    "thriller": "modern",
    "mystery": "classic",
    "horror": "bold",
    "contemporary": "modern",
    "young adult": "modern",
    "children's": "childrens",
    "childrens": "childrens",
    "poetry": "minimal",
    "non-fiction": "modern",
    "biography": "classic",
    "memoir": "elegant",
    "self-help": "modern",
    "business": "modern",
    "technical": "academic",
    "academic": "academic",
}

# Genres printed as "A Novel By" on the title page
FICTION_GENRES = frozenset([
    "fiction", "literary fiction", "literary", "historical fiction", "historical",
    "fantasy", "romance", "science fiction", "thriller", "mystery", "horror",
    "contemporary", "young adult",
])
NOVEL_BOOK_TYPES = frozenset(["novel", "novella"])


def is_novel(genre, book_type) -> bool:
    """A known genre decides; without one the book type does."""
    key = str(genre or "").strip().lower()
    if key:
        return key in FICTION_GENRES
    return str(book_type or "").strip().lower() in NOVEL_BOOK_TYPES


# =============================================================================
# NAMED PUBLISHING PRESETS
# =============================================================================

PUBLISHING_PRESETS = {
    "a5-default": {
        "title": "Default (A5)",
        "description": "Compact A5 interior with clean chapter openings.",
        "settings": {
            "trim_size": "a5",
            "chapters": {"chapter_drop_from_top": 0},
            "export": {"pdf": {"quality": "ebook"}},
        },
    },
    "trade-5x8": {
        "title": "Trade Paperback (5x8)",
        "description": "Classic fiction trade size with generous chapter drops.",
        "settings": {
            "trim_size": "trade-5x8",
            "typography": {"body_line_height": 1.5, "chapter_title_size": 22, "paragraph_indent": 0.3},
            "chapters": {"chapter_drop_from_top": 1.25, "after_chapter_title_space": 0.5},
            "export": {"pdf": {"quality": "print"}},
        },
    },
    "trade-5.5x8.5": {
        "title": "Trade Paperback (5.5x8.5)",
        "description": "The most common trade paperback interior.",
        "settings": {
            "trim_size": "trade-5.5x8.5",
            "typography": {"body_line_height": 1.5, "chapter_title_size": 24, "paragraph_indent": 0.3},
            "chapters": {"chapter_drop_from_top": 1.5, "after_chapter_title_space": 0.5},
            "export": {"pdf": {"quality": "print"}},
        },
    },
    "us-trade-6x9": {
        "title": "US Trade (6x9)",
        "description": "Non-fiction standard with a slightly larger body size.",
        "settings": {
            "trim_size": "us-trade-6x9",
            "typography": {
                "body_font_size": 12,
                "body_line_height": 1.55,
                "chapter_title_size": 26,
                "paragraph_indent": 0.3,
            },
            "chapters": {"chapter_drop_from_top": 1.5, "after_chapter_title_space": 0.55},
            "export": {"pdf": {"quality": "print"}},
        },
    },
    "a4": {
        "title": "A4 Document",
        "description": "International document format for reports and manuscripts.",
        "settings": {
            "trim_size": "a4",
            "style_preset": "academic",
            "margin_preset": "academic",
            "typography": {
                "body_font": "times-new-roman",
                "body_font_size": 12,
                "body_line_height": 1.9,
                "body_alignment": "left",
                "paragraph_indent": 0.5,
            },
            "chapters": {
                "start_on_odd_page": False,
                "chapter_ornament": "none",
                "chapter_drop_from_top": 1.0,
            },
        },
    },
    "us-letter": {
        "title": "US Letter Document",
        "description": "Letter-size manuscript format.",
        "settings": {
            "trim_size": "us-letter",
            "style_preset": "academic",
            "margin_preset": "academic",
            "typography": {
                "body_font": "times-new-roman",
                "body_font_size": 12,
                "body_line_height": 2.0,
                "body_alignment": "left",
                "paragraph_indent": 0.5,
            },
            "chapters": {
                "start_on_odd_page": False,
                "chapter_ornament": "none",
                "chapter_drop_from_top": 1.0,
            },
        },
    },
    "ya-5.5x8.25": {
        "title": "Young Adult (5.5x8.25)",
        "description": "Modern YA interior with airy leading.",
        "settings": {
            "trim_size": "ya-5.5x8.25",
            "style_preset": "modern",
            "typography": {"body_font_size": 12, "body_line_height": 1.6, "paragraph_indent": 0.25},
            "chapters": {"chapter_drop_from_top": 1.0, "after_chapter_title_space": 0.45},
        },
    },
    "children-square-8.5x8.5": {
        "title": "Children's Square (8.5x8.5)",
        "description": "Picture-book layout without running heads.",
        "settings": {
            "trim_size": "children-square-8.5",
            "style_preset": "childrens",
            "margin_preset": "picture-book",
            "typography": {
                "body_font": "open-sans",
                "body_font_size": 16,
                "body_line_height": 1.8,
                "body_alignment": "left",
                "paragraph_indent": 0,
                "paragraph_spacing": "large",
            },
            "chapters": {
                "start_on_odd_page": False,
                "chapter_opening_style": "illustrated",
                "show_chapter_number": False,
                "chapter_ornament": "none",
                "chapter_drop_from_top": 0.5,
                "after_chapter_title_space": 0.35,
                "scene_break_style": "blank-line",
            },
            "header_footer": {"header_enabled": False, "footer_enabled": False},
        },
    },
    "academic": {
        "title": "Academic",
        "description": "Double-spaced letter format for papers and theses.",
        "settings": {
            "trim_size": "us-letter",
            "style_preset": "academic",
            "margin_preset": "academic",
            "typography": {
                "body_font": "times-new-roman",
                "body_font_size": 12,
                "body_line_height": 2.0,
                "body_alignment": "left",
                "paragraph_indent": 0.5,
            },
            "chapters": {
                "start_on_odd_page": False,
                "chapter_ornament": "none",
                "chapter_drop_from_top": 1.0,
            },
            "export": {"docx": {"compatibility": "word365"}},
        },
    },
    "custom": {
        "title": "Custom",
        "description": "Start from the defaults and tune everything yourself.",
        "settings": {},
    },
}
