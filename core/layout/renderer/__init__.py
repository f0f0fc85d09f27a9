#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Renderer Module

Provides document rendering for multiple output formats.
"""

from .assets import AssetLoader
from .base_renderer import BaseRenderer
from .docx_renderer import DocxRenderer
from .epub_renderer import EPUBRenderer
from .html_renderer import HTMLRenderer
from .pdf_renderer import PDFRenderer

RENDERERS = [PDFRenderer, HTMLRenderer, DocxRenderer, EPUBRenderer]


def get_renderer_class(format_name: str):
    """Renderer class for an output format, or None"""
    for renderer_class in RENDERERS:
        if renderer_class.supports_format(format_name):
            return renderer_class
    return None


__all__ = [
    "AssetLoader",
    "BaseRenderer",
    "DocxRenderer",
    "EPUBRenderer",
    "HTMLRenderer",
    "PDFRenderer",
    "RENDERERS",
    "get_renderer_class",
]
