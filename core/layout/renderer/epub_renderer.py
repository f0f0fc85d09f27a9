#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
EPUB Renderer

Renders a LayoutDocument to a reflowable EPUB 3 e-book.
Uses ebooklib for EPUB generation.

Handles:
- One XHTML document per section, in reading order
- Cover image (or a text cover page)
- Navigation document + NCX for older readers
- Stylesheet derived from the typography settings

Version: 1.0.0
"""

from typing import Any, Dict, List, Optional, Union
from pathlib import Path
from html import escape
import logging
import uuid

from ebooklib import epub

from ..document import BlockType, LayoutDocument, PageRole, Section, SectionKind
from ..errors import RendererError
from .assets import guess_media_type
from .base_renderer import BaseRenderer
from .html_renderer import section_body_html
from .styles import css_font_stack, resolve_font_id

logger = logging.getLogger(__name__)

CSS_FILE = "style/main.css"


class EPUBRenderer(BaseRenderer):
    """
    Renders a LayoutDocument to EPUB3.

    Features:
    - EPUB3 standard compliance (nav document, NCX fallback)
    - Reflowable content (page numbers are left to the reader)
    - Metadata support (title, author, language, ISBN, publisher)
    - Chapter-based navigation

    Usage:
        renderer = EPUBRenderer()
        renderer.render(document, "book.epub")
    """

    def render(self, document: LayoutDocument, output_path: Union[str, Path]) -> Path:
        """
        Render to EPUB file.

        Args:
            document: LayoutDocument
            output_path: Output file path

        Returns:
            Path to created file
        """
        logger.info(f"Rendering EPUB: {len(document.sections)} sections")
        output_path = self._prepare_path(output_path)
        export = document.settings.export.epub

        book = epub.EpubBook()
        self._set_metadata(book, document)
        css_item = self._create_css(book, document) if export.generate_css else None

        files = self._file_names(document)
        spine: List[Any] = []
        toc: List[Any] = []

        for section in document.sections:
            if section.kind in (SectionKind.COVER, SectionKind.BACK_COVER):
                item = self._cover(book, section, document, css_item)
                if item is not None and (export.cover_in_spine or section.kind == SectionKind.BACK_COVER):
                    spine.append(item)
                continue
            if section.kind == SectionKind.TABLE_OF_CONTENTS:
                # Reading systems draw their own contents page
                spine.append("nav")
                continue

            item = self._section_item(book, section, document, files, css_item)
            spine.append(item)
            if section.role in (PageRole.BODY, PageRole.BACK_MATTER):
                toc.append(epub.Link(item.file_name, section.title or section.kind.value, section.anchor))

        if "nav" not in spine:
            spine.insert(1 if spine else 0, "nav")

        book.toc = toc
        book.add_item(epub.EpubNcx())
        book.add_item(epub.EpubNav())
        book.spine = spine

        try:
            epub.write_epub(str(output_path), book, {})
        except Exception as e:
            raise RendererError("epub", str(e)) from e

        logger.info(f"EPUB saved: {output_path}")
        return output_path

    # =========================================================================
    # Metadata
    # =========================================================================

    def _set_metadata(self, book, document: LayoutDocument):
        """Set EPUB metadata"""
        settings = document.settings
        meta = document.metadata

        if settings.isbn:
            book.set_identifier(f"urn:isbn:{settings.isbn}")
        else:
            book.set_identifier(f"urn:uuid:{uuid.uuid4()}")
        book.set_title(document.title)
        book.set_language(settings.language)
        book.add_author(document.author)

        if meta.get("year"):
            book.add_metadata("DC", "date", str(meta["year"]))
        if settings.publisher:
            book.add_metadata("DC", "publisher", settings.publisher)
        if meta.get("description"):
            book.add_metadata("DC", "description", meta["description"])
        if meta.get("genre"):
            book.add_metadata("DC", "subject", meta["genre"])
        book.add_metadata("DC", "rights", f"Copyright {meta.get('year', '')} {document.author}".strip())

    # =========================================================================
    # Items
    # =========================================================================

    @staticmethod
    def _file_names(document: LayoutDocument) -> Dict[str, str]:
        """Section anchor -> XHTML file name"""
        names = {}
        for index, section in enumerate(document.sections):
            stem = section.anchor or f"section-{index}"
            names[section.anchor] = f"{index:03d}_{stem}.xhtml"
        return names

    def _section_item(self, book, section: Section, document: LayoutDocument,
                      files: Dict[str, str], css_item) -> Any:
        body = section_body_html(section, links=False)
        classes = f"{section.kind.value} {section.role.value}"
        item = epub.EpubHtml(
            title=section.title or section.kind.value.replace("-", " ").title(),
            file_name=files[section.anchor],
            lang=document.settings.language,
            uid=f"sec-{Path(files[section.anchor]).stem}",
        )
        item.content = (
            f'<html><head><title>{escape(item.title)}</title></head>'
            f'<body><section class="{classes}" id="{section.anchor}">{body}</section></body></html>'
        )
        if css_item is not None:
            item.add_item(css_item)
        book.add_item(item)
        return item

    def _cover(self, book, section: Section, document: LayoutDocument, css_item) -> Optional[Any]:
        image = next(iter(section.blocks_of(BlockType.IMAGE)), None)
        data = self.assets.load(image.attributes.get("src")) if image is not None else None

        if data is not None and section.kind == SectionKind.COVER:
            extension = guess_media_type(data).split("/")[-1].replace("jpeg", "jpg")
            book.set_cover(f"images/cover.{extension}", data, create_page=True)
            return "cover"

        if data is not None:
            extension = guess_media_type(data).split("/")[-1].replace("jpeg", "jpg")
            file_name = f"images/back-cover.{extension}"
            book.add_item(epub.EpubImage(uid="back-cover-img", file_name=file_name,
                                         media_type=guess_media_type(data), content=data))
            body = f'<img src="{file_name}" alt="Back Cover"/>'
        elif section.kind == SectionKind.BACK_COVER:
            return None
        else:
            logger.debug("Cover image unavailable, using a text cover page")
            body = (f'<h1 class="cover-title">{escape(document.title)}</h1>'
                    f'<p class="cover-author">{escape(document.author)}</p>')

        item = epub.EpubHtml(
            title="Cover" if section.kind == SectionKind.COVER else "Back Cover",
            file_name=f"{section.anchor}.xhtml",
            lang=document.settings.language,
            uid=f"{section.anchor}-page",
        )
        item.content = (f'<html><head><title>{escape(item.title)}</title></head>'
                        f'<body><section class="cover-wrapper">{body}</section></body></html>')
        if css_item is not None:
            item.add_item(css_item)
        book.add_item(item)
        return item

    def _create_css(self, book, document: LayoutDocument) -> Any:
        """Create and add CSS stylesheet"""
        typo = document.settings.typography
        cs = document.settings.chapters
        body_id = resolve_font_id(typo.body_font, "georgia")
        heading_font = css_font_stack(resolve_font_id(typo.heading_font, body_id))
        unit = {"em": "em", "px": "px"}.get(typo.paragraph_indent_unit, "em")
        indent = typo.paragraph_indent if unit != "em" else 1.5
        title_align = "center" if cs.chapter_title_position == "centered" else cs.chapter_title_position

        css = f"""
body {{
    font-family: {css_font_stack(body_id)};
    line-height: {typo.body_line_height};
    text-align: {typo.body_alignment};
    margin: 1em;
}}
p {{ margin: 0; text-indent: {indent}{unit}; }}
p.first, .front-matter p, blockquote p {{ text-indent: {f"{indent}{unit}" if typo.first_paragraph_indent else "0"}; }}
h1, h2, h3 {{ font-family: {heading_font}; text-align: {typo.heading_alignment}; font-weight: normal; }}
.chapter-header {{ text-align: {title_align}; margin: 2em 0 1.5em; }}
.chapter-number-label {{ display: block; font-size: 0.75em; letter-spacing: 0.15em; text-transform: uppercase; }}
.chapter-number {{ display: block; font-size: 2em; }}
.chapter-title {{ font-size: 1.6em; text-align: {title_align}; }}
.chapter-ornament, .scene-break {{ text-align: center; margin: 1.2em 0; text-indent: 0; }}
p.drop-cap::first-letter {{ float: left; font-size: {typo.drop_cap_lines}em; line-height: 0.8; padding-right: 0.08em; }}
blockquote {{ margin: 1em 2em; font-style: italic; }}
.title-page, .half-title, .copyright, .dedication, .epigraph, .about-author {{ text-align: center; }}
.copyright {{ font-size: 0.8em; margin-top: 30%; }}
.dedication {{ font-style: italic; margin-top: 30%; }}
.bibliography-entry {{ text-align: left; text-indent: 0; margin-bottom: 0.4em; }}
.bibliography-entry.hanging {{ text-indent: -1.5em; padding-left: 1.5em; }}
.cover-wrapper {{ text-align: center; }}
.cover-wrapper img {{ max-width: 100%; }}
.cover-title {{ margin-top: 30%; font-size: 2.4em; }}
"""
        css_item = epub.EpubItem(
            uid="style",
            file_name=CSS_FILE,
            media_type="text/css",
            content=css.encode("utf-8"),
        )
        book.add_item(css_item)
        return css_item

    @classmethod
    def supports_format(cls, format_name: str) -> bool:
        return format_name.lower().lstrip(".") == "epub"

    @classmethod
    def get_supported_formats(cls) -> List[str]:
        return ["epub"]
