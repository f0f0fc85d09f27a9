#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Section Manager

Page-numbering state machine over page roles:
- Cover (never numbered)
- Front matter (roman-lower by default, or suppressed)
- Body (restarts at 1, arabic by default)
- Back matter (continues the body count)

Roles only move forward. For each physical page the manager produces a
PageInfo with the printed page number and the resolved running
header/footer strings: headers are blank on the first page of the section
that bound them, left/right selectors swap on verso pages when mirroring
is on, and margins follow the recto/verso gutter.

Version: 1.0.0
"""

from typing import Dict, List, Optional
from dataclasses import dataclass
from enum import Enum
import logging

from core.formatting.numbering import format_page_number
from core.formatting.page_layout import PageGeometry, PageMargins, compute_page_geometry

from ..document import PageRole, ROLE_ORDER, RunningStrings, Section
from ..errors import LayoutError

logger = logging.getLogger(__name__)


class NumberingStyle(str, Enum):
    """Page numbering styles"""
    ARABIC = "arabic"            # 1, 2, 3...
    ROMAN_LOWER = "roman-lower"  # i, ii, iii...
    ROMAN_UPPER = "roman-upper"  # I, II, III...
    NONE = "none"                # No numbering

    @classmethod
    def parse(cls, value) -> "NumberingStyle":
        try:
            return cls(value)
        except ValueError:
            return cls.ARABIC


POSITIONS = ("left", "center", "right")


@dataclass
class PageInfo:
    """Information about one physical page"""
    page_number: int                 # physical, 1-based (cover is page 1)
    role: PageRole
    display_number: str              # printed number ('' when suppressed)
    counter: int = 0                 # logical number within the numbering run
    header_left: str = ""
    header_center: str = ""
    header_right: str = ""
    footer_left: str = ""
    footer_center: str = ""
    footer_right: str = ""
    is_first_in_section: bool = False
    is_recto: bool = True
    is_blank: bool = False
    section_anchor: str = ""
    margins: Optional[PageMargins] = None

    @property
    def header(self) -> Dict[str, str]:
        return {"left": self.header_left, "center": self.header_center, "right": self.header_right}

    @property
    def footer(self) -> Dict[str, str]:
        return {"left": self.footer_left, "center": self.footer_center, "right": self.footer_right}

    @property
    def has_header(self) -> bool:
        return any(self.header.values())

    def to_dict(self) -> Dict:
        return {
            "page_number": self.page_number,
            "role": self.role.value,
            "display_number": self.display_number,
            "counter": self.counter,
            "header": self.header,
            "footer": self.footer,
            "is_first_in_section": self.is_first_in_section,
            "is_recto": self.is_recto,
            "is_blank": self.is_blank,
            "section_anchor": self.section_anchor,
            "margins": self.margins.to_dict() if self.margins else None,
        }


class SectionManager:
    """
    Tracks the current section and numbering run while pages are produced.

    Usage:
        manager = SectionManager(settings)
        manager.enter_section(section)     # at each section start
        info = manager.new_page()          # once per physical page, in order
    """

    def __init__(self, settings, geometry: Optional[PageGeometry] = None):
        self.settings = settings
        self.geometry = geometry or compute_page_geometry(settings)
        self.reset()

    def reset(self):
        """Forget all pages; ready for a fresh pass"""
        self.role: Optional[PageRole] = None
        self.section: Optional[Section] = None
        self.running: Optional[RunningStrings] = None
        self.physical_page = 0
        self.counter = 0
        self.pages: List[PageInfo] = []
        self.section_starts: Dict[str, PageInfo] = {}
        self._first_pending = False

    # =========================================================================
    # State transitions
    # =========================================================================

    def enter_role(self, role: PageRole):
        """
        Move to a page role.

        Entering the front matter or the body restarts the counter at 1;
        back matter continues the body count.

        Raises:
            LayoutError: on a backwards transition
        """
        role = PageRole(role)
        if role == self.role:
            return
        if self.role is not None and ROLE_ORDER.index(role) < ROLE_ORDER.index(self.role):
            raise LayoutError(f"Page role cannot go back from {self.role.value} to {role.value}")

        logger.debug(f"Page role: {self.role.value if self.role else None} -> {role.value}")
        if role in (PageRole.FRONT_MATTER, PageRole.BODY):
            self.counter = 0
        self.role = role

    def enter_section(self, section: Section):
        """Start a section; its first page comes next (or is the current page)."""
        self.enter_role(section.role)
        self.section = section
        # Running strings stay bound until a later section rebinds them
        if section.running_strings is not None:
            self.running = section.running_strings
        elif section.role in (PageRole.COVER, PageRole.FRONT_MATTER):
            self.running = None
        self._first_pending = True

    # =========================================================================
    # Pages
    # =========================================================================

    def new_page(self, blank: bool = False) -> PageInfo:
        """
        Describe the next physical page.

        Args:
            blank: Padding page (before a recto opener); prints nothing but
                still counts toward the page number
        """
        self.physical_page += 1
        role = self.role or PageRole.COVER
        if role != PageRole.COVER:
            self.counter += 1

        is_first = self._first_pending and not blank
        if is_first:
            self._first_pending = False

        is_recto = PageGeometry.is_recto(self.physical_page)
        info = PageInfo(
            page_number=self.physical_page,
            role=role,
            display_number=self._display_number(role),
            counter=self.counter,
            is_first_in_section=is_first,
            is_recto=is_recto,
            is_blank=blank,
            section_anchor=self.section.anchor if self.section else "",
            margins=self.geometry.margins_for_page(self.physical_page),
        )
        if not blank:
            self._fill_header(info)
            self._fill_footer(info)
        if is_first and info.section_anchor:
            self.section_starts[info.section_anchor] = info

        self.pages.append(info)
        return info

    def _numbering(self, role: PageRole) -> NumberingStyle:
        if role == PageRole.COVER:
            return NumberingStyle.NONE
        if self.section is not None and self.section.numbering:
            return NumberingStyle.parse(self.section.numbering)
        hf = self.settings.header_footer
        if role == PageRole.FRONT_MATTER:
            return NumberingStyle.parse(hf.front_matter_numbering)
        return NumberingStyle.parse(hf.page_number_style)

    def _display_number(self, role: PageRole) -> str:
        return format_page_number(self.counter, self._numbering(role).value)

    # =========================================================================
    # Running heads
    # =========================================================================

    def _selectors(self, prefix: str, is_recto: bool) -> Dict[str, str]:
        hf = self.settings.header_footer
        selectors = {pos: getattr(hf, f"{prefix}_{pos}_content") for pos in POSITIONS}
        if hf.mirror_headers and not is_recto:
            selectors["left"], selectors["right"] = selectors["right"], selectors["left"]
        return selectors

    def _fill_header(self, info: PageInfo):
        hf = self.settings.header_footer
        if not hf.header_enabled or info.role in (PageRole.COVER, PageRole.FRONT_MATTER):
            return
        # Bound strings are suppressed on the page where they were bound
        if info.is_first_in_section or self.running is None:
            return
        for pos, selector in self._selectors("header", info.is_recto).items():
            setattr(info, f"header_{pos}", self._resolve(selector, info, pos, hf.header_custom_text))

    def _fill_footer(self, info: PageInfo):
        hf = self.settings.header_footer
        if not hf.footer_enabled or info.role == PageRole.COVER:
            return
        if info.role == PageRole.FRONT_MATTER:
            # Front matter only carries its own page number
            if not info.is_first_in_section or hf.first_page_number_visible:
                info.footer_center = info.display_number
            return
        for pos, selector in self._selectors("footer", info.is_recto).items():
            setattr(info, f"footer_{pos}", self._resolve(selector, info, pos, hf.footer_custom_text))

    def _resolve(self, selector: str, info: PageInfo, position: str, custom: Dict[str, str]) -> str:
        hf = self.settings.header_footer
        if selector == "page-number":
            if info.is_first_in_section and not hf.first_page_number_visible:
                return ""
            return info.display_number
        if selector == "custom":
            return (custom or {}).get(position, "")
        if selector in ("title", "author", "chapter"):
            return (self.running or RunningStrings()).value(selector)
        return ""


__all__ = ["NumberingStyle", "PageInfo", "SectionManager", "POSITIONS"]
