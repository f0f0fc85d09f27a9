"""
Publishing Settings - model, presets and resolution.

Usage:
    from core.publishing import resolve_settings

    settings = resolve_settings({"bodyFontSize": 12}, book_type="novel")
"""

from .models import (
    PublishingSettings,
    MarginSettings,
    TypographySettings,
    ChapterSettings,
    HeaderFooterSettings,
    FrontMatterSettings,
    BackMatterSettings,
    ExportSettings,
    CustomTrimSize,
    FRONT_MATTER_SECTIONS,
    BACK_MATTER_SECTIONS,
)
from .presets import (
    STYLE_PRESETS,
    BOOK_TYPE_PRESETS,
    GENRE_STYLE_PRESETS,
    PUBLISHING_PRESETS,
    is_novel,
)
from .resolver import (
    resolve_settings,
    safe_number,
    safe_int,
    deep_merge,
    list_presets,
    NUMERIC_BOUNDS,
)

__all__ = [
    "PublishingSettings",
    "MarginSettings",
    "TypographySettings",
    "ChapterSettings",
    "HeaderFooterSettings",
    "FrontMatterSettings",
    "BackMatterSettings",
    "ExportSettings",
    "CustomTrimSize",
    "FRONT_MATTER_SECTIONS",
    "BACK_MATTER_SECTIONS",
    "STYLE_PRESETS",
    "BOOK_TYPE_PRESETS",
    "GENRE_STYLE_PRESETS",
    "PUBLISHING_PRESETS",
    "is_novel",
    "resolve_settings",
    "safe_number",
    "safe_int",
    "deep_merge",
    "list_presets",
    "NUMERIC_BOUNDS",
]
