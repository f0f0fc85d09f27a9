#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Layout Core Module

Turns a Manuscript plus resolved PublishingSettings into publish-ready files.

Components:
- LayoutDocumentBuilder: Build the structural document (sections, blocks, TOC)
- SectionManager / Paginator: Page roles, numbering and running heads
- Renderers: PDF, HTML, DOCX, EPUB
- LayoutAgent: Validate -> resolve -> build -> render

Usage:
    from core.layout import LayoutAgent

    agent = LayoutAgent()
    output_path = agent.process(manuscript, "book.pdf")

Version: 1.0.0
"""

from .agent import LayoutAgent
from .builder import LayoutDocumentBuilder, build_layout_document
from .document import Block, BlockType, LayoutDocument, PageRole, RunningStrings, Section, SectionKind
from .errors import LayoutError, RendererError, UnsupportedFormatError
from .estimator import estimate_chapter_page_numbers, estimate_chapter_pages
from .paginator import Paginator, paginate
from .sections.manager import SectionManager, PageInfo, NumberingStyle
from .renderer import BaseRenderer, DocxRenderer, EPUBRenderer, HTMLRenderer, PDFRenderer

__all__ = [
    "LayoutAgent",
    "LayoutDocumentBuilder",
    "build_layout_document",
    "Block",
    "BlockType",
    "LayoutDocument",
    "PageRole",
    "RunningStrings",
    "Section",
    "SectionKind",
    "LayoutError",
    "RendererError",
    "UnsupportedFormatError",
    "estimate_chapter_page_numbers",
    "estimate_chapter_pages",
    "Paginator",
    "paginate",
    "SectionManager",
    "PageInfo",
    "NumberingStyle",
    "BaseRenderer",
    "DocxRenderer",
    "EPUBRenderer",
    "HTMLRenderer",
    "PDFRenderer",
]

__version__ = "1.0.0"
