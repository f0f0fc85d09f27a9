#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Publishing Settings Model - Every typesetting preference of a book.

Handles:
- Page size, orientation and margins
- Typography, chapter openings, running headers/footers
- Front/back matter inclusion and order
- Per-format export options (PDF, EPUB, DOCX, HTML, Kindle)

Settings are plain dataclasses. from_dict() accepts camelCase or snake_case
keys and fills anything missing with the documented default; value checking
(bounds, enums) happens in core.publishing.resolver.

Version: 1.0.0
"""

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional

from core.shared.keys import snake_keys


def _section(section_cls):
    """Nested settings sub-document with its own defaults"""
    return field(default_factory=section_cls, metadata={"section": section_cls})


@dataclass
class SettingsSection:
    """Base for settings sub-documents"""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]):
        if isinstance(data, cls):
            return data
        data = snake_keys(data) if isinstance(data, dict) else {}
        kwargs = {}
        for f in fields(cls):
            if f.name not in data or data[f.name] is None:
                continue
            value = data[f.name]
            section_cls = f.metadata.get("section")
            if section_cls is not None:
                value = section_cls.from_dict(value) if isinstance(value, (dict, section_cls)) else None
                if value is None:
                    continue
            kwargs[f.name] = value
        return cls(**kwargs)

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]


# =============================================================================
# PAGE
# =============================================================================

@dataclass
class CustomTrimSize(SettingsSection):
    """Custom page size in inches"""
    width: float = 6.0
    height: float = 9.0


@dataclass
class MarginSettings(SettingsSection):
    """Margins in inches; inside is the gutter (binding side)"""
    top: float = 0.75
    bottom: float = 0.75
    inside: float = 0.875
    outside: float = 0.75
    mirror_margins: bool = True
    bleed: float = 0.125
    header_space: float = 0.3
    footer_space: float = 0.3


# =============================================================================
# TYPOGRAPHY & CHAPTERS
# =============================================================================

@dataclass
class TypographySettings(SettingsSection):
    body_font: str = "georgia"
    body_font_size: float = 11           # pt
    body_line_height: float = 1.45       # multiplier
    heading_font: str = "inherit"
    chapter_title_size: float = 20
    chapter_subtitle_size: float = 14
    section_heading_size: float = 16
    drop_cap_enabled: bool = False
    drop_cap_lines: int = 3
    drop_cap_font: str = "inherit"
    paragraph_indent: float = 0.25
    paragraph_indent_unit: str = "inches"    # inches | em | px
    paragraph_spacing: str = "none"          # none | small | medium | large
    first_paragraph_indent: bool = False
    body_alignment: str = "justify"          # left | justify | right | center
    heading_alignment: str = "center"        # left | center | right
    hyphenation: bool = True
    widow_control: bool = True
    orphan_control: bool = True


@dataclass
class ChapterSettings(SettingsSection):
    start_on_odd_page: bool = True
    chapter_opening_style: str = "simple"    # simple | decorated | illustrated | full-page | minimal
    show_chapter_number: bool = True
    chapter_number_style: str = "numeric"    # numeric | roman | word | ordinal
    chapter_number_position: str = "above-title"   # above-title | before-title | below-title | hidden
    chapter_number_label: str = "Chapter"
    chapter_title_position: str = "centered"       # centered | left | right
    chapter_title_case: str = "title-case"         # title-case | uppercase | lowercase | as-written
    chapter_drop_from_top: float = 0.0       # inches
    after_chapter_title_space: float = 0.35  # inches
    chapter_ornament: str = "line"           # none | line | flourish | stars | dots | custom
    chapter_ornament_position: str = "below-title"  # above-number | between-number-title | below-title
    scene_break_style: str = "asterisks"     # blank-line | asterisks | ornament | number | custom
    scene_break_symbol: str = "* * *"


@dataclass
class HeaderFooterSettings(SettingsSection):
    """
    Running heads. Content selectors are one of:
    none | title | author | chapter | page-number | custom
    """
    header_enabled: bool = False
    header_left_content: str = "title"
    header_center_content: str = "none"
    header_right_content: str = "chapter"
    header_custom_text: Dict[str, str] = field(default_factory=dict)
    header_font_size: float = 9
    header_font: str = "inherit"
    header_style: str = "small-caps"         # normal | italic | small-caps | uppercase
    header_line: bool = False

    footer_enabled: bool = True
    footer_left_content: str = "none"
    footer_center_content: str = "page-number"
    footer_right_content: str = "none"
    footer_custom_text: Dict[str, str] = field(default_factory=dict)
    footer_font_size: float = 10
    footer_font: str = "inherit"
    footer_line: bool = False

    page_number_style: str = "arabic"        # arabic | roman-lower | roman-upper | none
    first_page_number_visible: bool = False
    front_matter_numbering: str = "roman-lower"    # roman-lower | none
    mirror_headers: bool = True


# =============================================================================
# FRONT / BACK MATTER
# =============================================================================

FRONT_MATTER_SECTIONS = [
    "half-title", "title-page", "copyright", "dedication", "epigraph",
    "table-of-contents", "foreword", "preface", "acknowledgments", "introduction",
]

BACK_MATTER_SECTIONS = [
    "bibliography", "about-author", "also-by", "epilogue", "afterword",
    "appendices", "glossary", "book-club-questions", "excerpt",
]


@dataclass
class FrontMatterSettings(SettingsSection):
    order: List[str] = field(default_factory=lambda: list(FRONT_MATTER_SECTIONS))
    half_title_page: bool = False
    title_page: bool = True
    copyright_page: bool = True
    dedication_page: bool = False
    epigraph: str = ""
    table_of_contents: bool = True
    toc_depth: int = 1
    foreword: bool = False
    preface: bool = False
    acknowledgments: bool = False
    introduction: bool = False

    def is_enabled(self, section: str) -> bool:
        """Whether a front-matter section id is switched on"""
        if section == "epigraph":
            return bool(self.epigraph and self.epigraph.strip())
        flag = {
            "half-title": "half_title_page",
            "title-page": "title_page",
            "copyright": "copyright_page",
            "dedication": "dedication_page",
            "table-of-contents": "table_of_contents",
        }.get(section, section)
        return bool(getattr(self, flag, False))


@dataclass
class BackMatterSettings(SettingsSection):
    order: List[str] = field(default_factory=lambda: list(BACK_MATTER_SECTIONS))
    epilogue: bool = False
    afterword: bool = False
    appendices: bool = False
    glossary: bool = False
    bibliography: bool = True
    index: bool = False
    about_author: bool = False
    also_by: bool = False
    book_club_questions: bool = False
    excerpt: bool = False

    def is_enabled(self, section: str) -> bool:
        return bool(getattr(self, section.replace("-", "_"), False))


# =============================================================================
# EXPORT
# =============================================================================

@dataclass
class PdfExportSettings(SettingsSection):
    quality: str = "ebook"                   # screen | ebook | print | press
    embed_fonts: bool = True
    color_profile: str = "rgb"               # rgb | cmyk | grayscale
    compression: str = "medium"
    pdf_version: str = "1.7"
    include_bleed: bool = False
    crop_marks: bool = False
    hyperlinks: bool = True


@dataclass
class EpubExportSettings(SettingsSection):
    version: str = "epub3"
    layout: str = "reflowable"               # reflowable | fixed
    toc_type: str = "nav"                    # ncx | nav | both
    cover_in_spine: bool = True
    embed_fonts: bool = True
    generate_css: bool = True


@dataclass
class DocxExportSettings(SettingsSection):
    compatibility: str = "word2016"
    embed_fonts: bool = True
    track_changes: bool = False
    mirror_margins: bool = True


@dataclass
class HtmlExportSettings(SettingsSection):
    single_file: bool = True
    include_css: str = "inline"
    responsive: bool = True
    dark_mode_support: bool = True


@dataclass
class KindleExportSettings(SettingsSection):
    enhanced_typesetting: bool = True
    xray_enabled: bool = True
    text_to_speech_enabled: bool = True
    lending_enabled: bool = False
    primary_marketplace: str = "amazon.com"


@dataclass
class ExportSettings(SettingsSection):
    pdf: PdfExportSettings = _section(PdfExportSettings)
    epub: EpubExportSettings = _section(EpubExportSettings)
    docx: DocxExportSettings = _section(DocxExportSettings)
    html: HtmlExportSettings = _section(HtmlExportSettings)
    kindle: KindleExportSettings = _section(KindleExportSettings)


# =============================================================================
# TOP LEVEL
# =============================================================================

@dataclass
class PublishingSettings(SettingsSection):
    """Fully resolved publishing settings for one export"""
    publishing_preset_id: Optional[str] = None
    book_type: str = "novel"
    trim_size: str = "a5"
    custom_trim_size: Optional[CustomTrimSize] = field(
        default=None, metadata={"section": CustomTrimSize})
    orientation: str = "portrait"            # portrait | landscape

    typography: TypographySettings = _section(TypographySettings)
    margins: MarginSettings = _section(MarginSettings)
    margin_preset: str = "normal"
    chapters: ChapterSettings = _section(ChapterSettings)
    header_footer: HeaderFooterSettings = _section(HeaderFooterSettings)
    front_matter: FrontMatterSettings = _section(FrontMatterSettings)
    back_matter: BackMatterSettings = _section(BackMatterSettings)
    export: ExportSettings = _section(ExportSettings)

    style_preset: str = "custom"
    custom_css: Optional[str] = None

    # Metadata
    language: str = "en-US"
    isbn: Optional[str] = None
    publisher: Optional[str] = None
    publisher_location: Optional[str] = None
    edition: Optional[str] = None
    printing_number: Optional[int] = None


# Sub-document field name -> section class, used to route flat keys
SECTION_FIELDS = {
    f.name: f.metadata["section"]
    for f in fields(PublishingSettings)
    if "section" in f.metadata and f.name != "custom_trim_size"
}
