#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Layout Agent

Main orchestrator for the publishing pipeline.
Takes a Manuscript and produces a publish-ready file.

Version: 1.0.0
"""

from typing import Optional, Dict, Any, Union
from pathlib import Path
import logging

from config.settings import Settings, settings as app_settings
from core.contracts.manuscript import Manuscript
from core.export.text_export import export_markdown, export_plain_text
from core.publishing.models import PublishingSettings
from core.publishing.resolver import resolve_settings

from .builder import LayoutDocumentBuilder
from .document import LayoutDocument
from .errors import UnsupportedFormatError
from .paginator import Paginator
from .renderer import RENDERERS, AssetLoader, BaseRenderer, get_renderer_class
from .renderer.pdf_renderer import PDFRenderer

logger = logging.getLogger(__name__)

TEXT_EXPORTS = {
    "txt": export_plain_text,
    "md": export_markdown,
}


class LayoutAgent:
    """
    Publishing pipeline.

    Responsibilities:
    1. Validate the manuscript
    2. Resolve publishing settings (presets + overrides)
    3. Build the layout document
    4. Render to the output format (PDF, HTML, DOCX, EPUB, TXT, MD)

    Usage:
        agent = LayoutAgent()
        output_path = agent.process(manuscript, "book.pdf")

        # Or step by step:
        settings = agent.resolve(manuscript, book_type="novel")
        document = agent.build(manuscript, settings)
        path = agent.render(document, "book.epub")
    """

    def __init__(self, config: Optional[Settings] = None, year: Optional[int] = None):
        """
        Initialize Layout Agent.

        Args:
            config: Application settings (module defaults when omitted)
            year: Copyright year (current year when omitted)
        """
        self.config = config or app_settings
        self.builder = LayoutDocumentBuilder(year=year)
        self.paginator = Paginator()
        self.assets = AssetLoader(
            timeout=self.config.asset_fetch_timeout,
            enabled=self.config.asset_fetch_enabled,
        )
        self._renderers: Dict[str, BaseRenderer] = {}

        logger.info(f"LayoutAgent initialized: default format {self.config.default_output_format}")

    def process(
        self,
        manuscript: Union[Manuscript, Dict[str, Any]],
        output_path: Union[str, Path],
        output_format: Optional[str] = None,
        book_type: Optional[str] = None,
        genre: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> Path:
        """
        Run the full pipeline.

        Args:
            manuscript: Manuscript (or its dict form)
            output_path: Output file path
            output_format: Format name; taken from the file extension when omitted
            book_type: Book-type preset id
            genre: Genre used to pick a style preset (defaults to the manuscript's)
            overrides: Settings document replacing the manuscript's own

        Returns:
            Path to created file
        """
        logger.info("=== Publishing pipeline ===")

        if isinstance(manuscript, dict):
            manuscript = Manuscript.from_dict(manuscript)

        fmt = self.output_format(output_path, output_format)

        logger.info("Step 1: Validating manuscript...")
        manuscript.assert_valid()

        if fmt in TEXT_EXPORTS:
            logger.info(f"Step 2: Exporting {fmt}...")
            return self._write_text(TEXT_EXPORTS[fmt](manuscript), output_path)

        logger.info("Step 2: Resolving settings...")
        settings = self.resolve(manuscript, book_type=book_type, genre=genre, overrides=overrides)

        logger.info("Step 3: Building layout document...")
        document = self.build(manuscript, settings)

        logger.info(f"Step 4: Rendering {fmt}...")
        output = self.render(document, output_path, fmt)

        logger.info("=== Publishing complete ===")
        logger.info(f"Output: {output}")
        return output

    def resolve(
        self,
        manuscript: Manuscript,
        book_type: Optional[str] = None,
        genre: Optional[str] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> PublishingSettings:
        """Resolve the settings for one export"""
        document = overrides if overrides is not None else manuscript.publishing_settings
        return resolve_settings(document, book_type=book_type, genre_preset=genre or manuscript.genre)

    def build(self, manuscript: Manuscript, settings: Optional[PublishingSettings] = None) -> LayoutDocument:
        return self.builder.build(manuscript, settings)

    def render(self, document: LayoutDocument, output_path: Union[str, Path],
               output_format: Optional[str] = None) -> Path:
        """
        Render a built document.

        Raises:
            UnsupportedFormatError: No renderer for the format
        """
        fmt = self.output_format(output_path, output_format)
        return self.get_renderer(fmt).render(document, output_path)

    def get_renderer(self, output_format: str) -> BaseRenderer:
        fmt = output_format.lower().lstrip(".")
        if fmt not in self._renderers:
            renderer_class = get_renderer_class(fmt)
            if renderer_class is None:
                raise UnsupportedFormatError(fmt, self.supported_formats())
            if renderer_class is PDFRenderer:
                renderer = PDFRenderer(
                    assets=self.assets,
                    exact_toc=self.config.pdf_exact_toc,
                    max_passes=self.config.pdf_max_passes,
                )
            else:
                renderer = renderer_class(assets=self.assets)
            self._renderers[fmt] = renderer
        return self._renderers[fmt]

    def output_format(self, output_path: Union[str, Path], output_format: Optional[str] = None) -> str:
        """Explicit format, else the file extension, else the configured default"""
        if output_format:
            fmt = output_format.lower().lstrip(".")
        else:
            fmt = Path(output_path).suffix.lower().lstrip(".") or self.config.default_output_format
        if fmt not in self.supported_formats():
            raise UnsupportedFormatError(fmt, self.supported_formats())
        return fmt

    @staticmethod
    def supported_formats():
        formats = [f for renderer_class in RENDERERS for f in renderer_class.get_supported_formats()]
        return formats + list(TEXT_EXPORTS)

    def get_stats(self, document: LayoutDocument) -> Dict[str, Any]:
        """Layout statistics from the estimated page plan"""
        pages = self.paginator.paginate(document)
        return {
            "sections": len(document.sections),
            "chapters": len(document.chapter_sections),
            "total_pages": len(pages),
            "blank_pages": sum(1 for p in pages if p.is_blank),
            "trim": f"{document.geometry.width}x{document.geometry.height}in",
        }

    @staticmethod
    def _write_text(text: str, output_path: Union[str, Path]) -> Path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        logger.info(f"Text export saved: {path}")
        return path

    @classmethod
    def from_json(cls, json_str: str, output_path: str, **kwargs) -> Path:
        """
        Process a manuscript from a JSON string.

        Args:
            json_str: Manuscript as JSON
            output_path: Output path
            **kwargs: process() arguments

        Returns:
            Path to created file
        """
        manuscript = Manuscript.from_json(json_str)
        return cls().process(manuscript, output_path, **kwargs)
