#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Settings Resolution - One fully populated PublishingSettings per export.

Merge order, lowest to highest precedence:
    defaults <- style preset <- book-type preset <- publishing preset <- user overrides

Handles:
- camelCase / snake_case documents, nested or flat (``bodyFontSize`` is routed
  to ``typography``)
- Margin presets seeding the margins before explicit margin overrides
- Bounds and finiteness guard on every numeric field
- Enum validation with fallback to the documented default

Resolution is pure and never raises on bad values; recovered problems are
logged at DEBUG.

Version: 1.0.0
"""

import copy
import logging
import math
from dataclasses import fields
from typing import Any, Dict, Optional, Tuple

from core.shared.keys import to_snake
from core.formatting.utils.constants import MARGIN_PRESETS, TRIM_SIZES, CUSTOM_TRIM_ID
from .models import (
    BACK_MATTER_SECTIONS,
    FRONT_MATTER_SECTIONS,
    SECTION_FIELDS,
    PublishingSettings,
    SettingsSection,
)
from .presets import (
    BOOK_TYPE_PRESETS,
    GENRE_STYLE_PRESETS,
    PUBLISHING_PRESETS,
    STYLE_PRESETS,
)

logger = logging.getLogger(__name__)


# =============================================================================
# BOUNDS & CHOICES
# =============================================================================

# dotted path -> (default, minimum, maximum)
NUMERIC_BOUNDS: Dict[str, Tuple[float, float, float]] = {
    "typography.body_font_size": (11, 6, 72),
    "typography.body_line_height": (1.45, 1.0, 3.0),
    "typography.chapter_title_size": (20, 12, 72),
    "typography.chapter_subtitle_size": (14, 8, 48),
    "typography.section_heading_size": (16, 10, 48),
    "typography.drop_cap_lines": (3, 2, 6),
    "typography.paragraph_indent": (0.25, 0, 2),
    "header_footer.header_font_size": (9, 6, 14),
    "header_footer.footer_font_size": (10, 6, 14),
    "margins.top": (0.75, 0.25, 3),
    "margins.bottom": (0.75, 0.25, 3),
    "margins.inside": (0.875, 0.25, 3),
    "margins.outside": (0.75, 0.25, 3),
    "margins.bleed": (0.125, 0, 0.5),
    "margins.header_space": (0.3, 0, 1),
    "margins.footer_space": (0.3, 0, 1),
    "chapters.chapter_drop_from_top": (0, 0, 5),
    "chapters.after_chapter_title_space": (0.35, 0, 2),
    "front_matter.toc_depth": (1, 1, 3),
    "custom_trim_size.width": (6, 2, 24),
    "custom_trim_size.height": (9, 2, 24),
}

INTEGER_FIELDS = {"typography.drop_cap_lines", "front_matter.toc_depth"}

_CONTENT_CHOICES = ("none", "title", "author", "chapter", "page-number", "custom")

ENUM_CHOICES: Dict[str, Tuple[str, ...]] = {
    "orientation": ("portrait", "landscape"),
    "book_type": tuple(BOOK_TYPE_PRESETS),
    "style_preset": tuple(STYLE_PRESETS) + ("custom",),
    "typography.paragraph_indent_unit": ("inches", "em", "px"),
    "typography.paragraph_spacing": ("none", "small", "medium", "large"),
    "typography.body_alignment": ("left", "justify", "right", "center"),
    "typography.heading_alignment": ("left", "center", "right"),
    "chapters.chapter_opening_style": ("simple", "decorated", "illustrated", "full-page", "minimal"),
    "chapters.chapter_number_style": ("numeric", "roman", "word", "ordinal"),
    "chapters.chapter_number_position": ("above-title", "before-title", "below-title", "hidden"),
    "chapters.chapter_title_position": ("centered", "left", "right"),
    "chapters.chapter_title_case": ("title-case", "uppercase", "lowercase", "as-written"),
    "chapters.chapter_ornament": ("none", "line", "flourish", "stars", "dots", "custom"),
    "chapters.chapter_ornament_position": ("above-number", "between-number-title", "below-title"),
    "chapters.scene_break_style": ("blank-line", "asterisks", "ornament", "number", "custom"),
    "header_footer.header_left_content": _CONTENT_CHOICES,
    "header_footer.header_center_content": _CONTENT_CHOICES,
    "header_footer.header_right_content": _CONTENT_CHOICES,
    "header_footer.footer_left_content": _CONTENT_CHOICES,
    "header_footer.footer_center_content": _CONTENT_CHOICES,
    "header_footer.footer_right_content": _CONTENT_CHOICES,
    "header_footer.header_style": ("normal", "italic", "small-caps", "uppercase"),
    "header_footer.page_number_style": ("arabic", "roman-lower", "roman-upper", "none"),
    "header_footer.front_matter_numbering": ("roman-lower", "roman-upper", "arabic", "none"),
    "export.pdf.quality": ("screen", "ebook", "print", "press"),
    "export.pdf.color_profile": ("rgb", "cmyk", "grayscale"),
    "export.epub.version": ("epub2", "epub3"),
    "export.epub.layout": ("reflowable", "fixed"),
    "export.epub.toc_type": ("ncx", "nav", "both"),
}

_ORDER_CHOICES = {
    "front_matter.order": FRONT_MATTER_SECTIONS,
    "back_matter.order": BACK_MATTER_SECTIONS + ["index"],
}

_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0", ""}


# =============================================================================
# SCALAR GUARDS
# =============================================================================

def safe_number(value: Any, default: float, minimum: Optional[float] = None,
                maximum: Optional[float] = None) -> float:
    """
    Return a finite number within [minimum, maximum].

    None, booleans, non-numeric strings, NaN and infinities become the default;
    out-of-range numbers are clamped, not rejected.
    """
    number = None
    if isinstance(value, bool):
        number = None
    elif isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            number = None

    if number is None or not math.isfinite(number):
        number = float(default)
    if minimum is not None and number < minimum:
        number = float(minimum)
    if maximum is not None and number > maximum:
        number = float(maximum)
    return number


def safe_int(value: Any, default: int, minimum: Optional[int] = None,
             maximum: Optional[int] = None) -> int:
    """safe_number rounded to the nearest integer"""
    return int(round(safe_number(value, default, minimum, maximum)))


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and math.isfinite(value):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    return default


# =============================================================================
# DOCUMENT HELPERS
# =============================================================================

def _deep_snake(data: Any) -> Any:
    if isinstance(data, dict):
        return {to_snake(str(k)): _deep_snake(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_deep_snake(v) for v in data]
    return data


def deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Return base updated by overlay; nested dicts merge, None means 'not set'."""
    result = copy.deepcopy(base)
    for key, value in (overlay or {}).items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _route_flat_keys(document: Dict[str, Any]) -> Dict[str, Any]:
    """Move top-level keys that name exactly one sub-document field into it."""
    top_level = set(PublishingSettings.field_names())
    routed = {k: v for k, v in document.items() if k in top_level}
    for key, value in document.items():
        if key in top_level:
            continue
        owners = [name for name, cls in SECTION_FIELDS.items() if key in cls.field_names()]
        if len(owners) != 1:
            logger.debug(f"Ignoring unknown settings key {key!r}")
            continue
        section = routed.get(owners[0])
        if not isinstance(section, dict):
            section = {}
        # An explicit nested value wins over the flat spelling
        section.setdefault(key, value)
        routed[owners[0]] = section
    return routed


def normalize_overrides(user_overrides: Any) -> Dict[str, Any]:
    """Snake-case and route a user settings document"""
    if user_overrides is None:
        return {}
    if isinstance(user_overrides, SettingsSection):
        user_overrides = user_overrides.to_dict()
    if not isinstance(user_overrides, dict):
        logger.debug(f"Settings overrides of type {type(user_overrides).__name__} ignored")
        return {}
    return _route_flat_keys(_deep_snake(user_overrides))


def _lookup(table: Dict[str, Any], key: Any, kind: str) -> Dict[str, Any]:
    if not key:
        return {}
    name = str(key).strip().lower()
    if name not in table:
        logger.debug(f"Unknown {kind} {key!r}, skipped")
        return {}
    return table[name]


def _style_for_genre(genre: Any) -> Optional[str]:
    name = str(genre or "").strip().lower()
    if not name:
        return None
    if name in STYLE_PRESETS:
        return name
    style = GENRE_STYLE_PRESETS.get(name)
    if style is None:
        logger.debug(f"No style preset for genre {genre!r}")
    return style


# =============================================================================
# RESOLUTION
# =============================================================================

def resolve_settings(user_overrides: Any = None, book_type: Optional[str] = None,
                     genre_preset: Optional[str] = None) -> PublishingSettings:
    """
    Merge overrides with presets and defaults into one PublishingSettings.

    Args:
        user_overrides: Partial settings document (camelCase or snake_case),
            or a PublishingSettings instance
        book_type: Book-type preset id; falls back to the overrides' book_type
        genre_preset: Genre name (or style preset id) used when neither the
            overrides nor the book type name a style preset

    Returns:
        PublishingSettings with every numeric field finite and bounded
    """
    overrides = normalize_overrides(user_overrides)

    book_type_id = str(book_type or overrides.get("book_type") or "").strip().lower() or None
    book_preset = _lookup(BOOK_TYPE_PRESETS, book_type_id, "book type")
    publishing_preset = _lookup(PUBLISHING_PRESETS, overrides.get("publishing_preset_id"),
                                "publishing preset").get("settings", {})

    style_id = (
        overrides.get("style_preset")
        or publishing_preset.get("style_preset")
        or book_preset.get("style_preset")
        or _style_for_genre(genre_preset)
    )
    style_preset = _lookup(STYLE_PRESETS, style_id, "style preset")

    merged: Dict[str, Any] = {}
    for layer in (style_preset, book_preset, publishing_preset, overrides):
        merged = deep_merge(merged, layer)

    if style_id:
        merged["style_preset"] = str(style_id).strip().lower()
    if book_preset:
        merged["book_type"] = book_type_id

    margin_preset = MARGIN_PRESETS.get(str(merged.get("margin_preset") or "").strip().lower())
    if margin_preset is not None:
        explicit = merged.get("margins") if isinstance(merged.get("margins"), dict) else {}
        merged["margins"] = deep_merge(margin_preset, explicit)

    settings = PublishingSettings.from_dict(merged)
    _sanitize_section(settings, "")
    _check_trim_size(settings)

    logger.debug(
        f"Resolved settings: book_type={settings.book_type}, style={settings.style_preset}, "
        f"trim={settings.trim_size}, body={settings.typography.body_font_size}pt"
    )
    return settings


def _check_trim_size(settings: PublishingSettings) -> None:
    if settings.trim_size == CUSTOM_TRIM_ID:
        if settings.custom_trim_size is None:
            logger.debug("Custom trim size without dimensions, using 6x9")
        return
    if settings.trim_size not in TRIM_SIZES:
        logger.debug(f"Unknown trim size {settings.trim_size!r}, page geometry falls back to 6x9")


def _sanitize_section(section: SettingsSection, prefix: str) -> None:
    """Replace invalid values in place, field by field."""
    defaults = type(section)()
    for f in fields(section):
        path = f"{prefix}{f.name}"
        value = getattr(section, f.name)
        default = getattr(defaults, f.name)
        section_cls = f.metadata.get("section")

        if section_cls is not None:
            if isinstance(value, section_cls):
                _sanitize_section(value, f"{path}.")
            elif default is not None:
                setattr(section, f.name, section_cls())
            else:
                setattr(section, f.name, None)
            continue

        if path in NUMERIC_BOUNDS:
            fallback, minimum, maximum = NUMERIC_BOUNDS[path]
            if path in INTEGER_FIELDS:
                clean = safe_int(value, int(fallback), int(minimum), int(maximum))
            else:
                clean = safe_number(value, fallback, minimum, maximum)
        elif isinstance(default, bool):
            clean = _as_bool(value, default)
        elif isinstance(default, (int, float)):
            clean = safe_number(value, default)
        elif isinstance(default, str):
            clean = default if value is None or isinstance(value, (dict, list)) else str(value)
            choices = ENUM_CHOICES.get(path)
            if choices is not None:
                clean = clean.strip().lower()
                if clean not in choices:
                    logger.debug(f"Invalid value {value!r} for {path}, using {default!r}")
                    clean = default
        elif isinstance(default, list):
            allowed = _ORDER_CHOICES.get(path)
            clean = [str(v) for v in value] if isinstance(value, (list, tuple)) else list(default)
            if allowed is not None:
                clean = [v for v in dict.fromkeys(clean) if v in allowed]
        elif isinstance(default, dict):
            clean = {str(k): str(v) for k, v in value.items() if v is not None} \
                if isinstance(value, dict) else dict(default)
        elif f.name == "printing_number":
            clean = None if value is None else safe_int(value, 1, 1)
        else:
            # Optional free-text metadata
            clean = None if value is None else str(value)

        if clean != value:
            if path in NUMERIC_BOUNDS:
                logger.debug(f"Clamped {path}: {value!r} -> {clean!r}")
            setattr(section, f.name, clean)


def list_presets() -> Dict[str, Any]:
    """Available preset ids, for CLI help and settings editors"""
    return {
        "style_presets": sorted(STYLE_PRESETS),
        "book_types": sorted(BOOK_TYPE_PRESETS),
        "genres": sorted(GENRE_STYLE_PRESETS),
        "publishing_presets": sorted(PUBLISHING_PRESETS),
        "margin_presets": sorted(MARGIN_PRESETS),
        "trim_sizes": sorted(TRIM_SIZES),
    }
