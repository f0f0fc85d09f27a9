#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
PDF Renderer

Renders a LayoutDocument to a print-ready PDF with ReportLab platypus.

Handles:
- Recto/verso page templates with mirrored frames
- Full-bleed cover image (text cover when the image is unavailable)
- Blank padding pages before recto-opening sections
- Running headers/footers drawn at page end from the SectionManager
- Two-pass build: TOC page numbers replaced with observed ones

Version: 1.0.0
"""

from copy import deepcopy
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

from reportlab.lib.colors import black
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import inch
from reportlab.lib.utils import ImageReader
from reportlab.platypus import (
    BaseDocTemplate,
    Flowable,
    Frame,
    PageTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
)
from reportlab.platypus.doctemplate import ActionFlowable

from config.settings import settings as app_settings

from ..document import Block, BlockType, LayoutDocument, PageRole, Section, SectionKind
from ..errors import RendererError
from ..sections.manager import PageInfo, SectionManager
from .base_renderer import BaseRenderer
from .styles import (
    indent_points,
    markup,
    paragraph_spacing_points,
    pdf_fonts,
    resolve_font_id,
)

logger = logging.getLogger(__name__)

ALIGNMENTS = {
    "left": TA_LEFT,
    "justify": TA_JUSTIFY,
    "right": TA_RIGHT,
    "center": TA_CENTER,
    "centered": TA_CENTER,
}

COVER_PADDING = 0.5 * inch
TOC_PAGE_COLUMN = 0.6 * inch


# =============================================================================
# FLOWABLES
# =============================================================================

class SectionStart(ActionFlowable):
    """Opens a section: page break, recto padding, section binding"""

    def __init__(self, section: Section):
        ActionFlowable.__init__(self, ("sectionStart", section))


class FullBleedImage(Flowable):
    """Image covering the whole page behind the frame padding"""

    def __init__(self, image: ImageReader, page_width: float, page_height: float, padding: float):
        Flowable.__init__(self)
        self.image = image
        self.page_width = page_width
        self.page_height = page_height
        self.padding = padding

    def wrap(self, availWidth, availHeight):
        self.width, self.height = availWidth, availHeight
        return availWidth, availHeight

    def draw(self):
        self.canv.drawImage(
            self.image, -self.padding, -self.padding,
            width=self.page_width, height=self.page_height,
            preserveAspectRatio=False, mask="auto",
        )


# =============================================================================
# DOCUMENT TEMPLATE
# =============================================================================

class BookDocTemplate(BaseDocTemplate):
    """
    Document template that picks the page template by page parity and
    drives a SectionManager as sections open and pages end.
    """

    def __init__(self, filename, manager: SectionManager, end_page, **kwargs):
        self.manager = manager
        self._end_page_callback = end_page
        self._blank_next = False
        BaseDocTemplate.__init__(self, filename, **kwargs)

    def handle_pageBegin(self):
        upcoming = self.page + 1
        if upcoming == 1:
            template_id = "cover"
        else:
            template_id = "recto" if upcoming % 2 == 1 else "verso"
        for template in self.pageTemplates:
            if template.id == template_id:
                self.pageTemplate = template
                break
        BaseDocTemplate.handle_pageBegin(self)

    def handle_sectionStart(self, section: Section):
        if section.page_break_before and self._curPageFlowableCount > 0:
            self.handle_pageEnd()
            self.clean_hanging()
        if section.start_on_recto and self.page % 2 == 0:
            self._blank_next = True
            self.handle_pageEnd()
            self.clean_hanging()
        self.manager.enter_section(section)
        if section.anchor:
            self.canv.bookmarkPage(section.anchor)
            if section.title and section.role in (PageRole.BODY, PageRole.BACK_MATTER):
                self.canv.addOutlineEntry(section.title, section.anchor, level=0)

    def end_page(self, canvas, doc):
        blank = self._blank_next
        self._blank_next = False
        info = self.manager.new_page(blank=blank)
        self._end_page_callback(canvas, info)


# =============================================================================
# RENDERER
# =============================================================================

class PDFRenderer(BaseRenderer):
    """
    Renders a LayoutDocument to PDF.

    Features:
    - Trim size and mirrored margins from the document geometry
    - Page numbering per role (cover, roman front matter, arabic body)
    - Chapter openers without running heads
    - Exact TOC page numbers (second pass)

    Usage:
        renderer = PDFRenderer()
        renderer.render(document, "book.pdf")
    """

    def __init__(self, assets=None, exact_toc: Optional[bool] = None, max_passes: Optional[int] = None):
        """
        Initialize PDF renderer.

        Args:
            assets: AssetLoader for cover images
            exact_toc: Rebuild with observed TOC page numbers
            max_passes: Upper bound on builds per render
        """
        super().__init__(assets)
        self.exact_toc = app_settings.pdf_exact_toc if exact_toc is None else exact_toc
        self.max_passes = max(1, max_passes or app_settings.pdf_max_passes)
        self.last_pages: List[PageInfo] = []

    # =========================================================================
    # Entry points
    # =========================================================================

    def render(self, document: LayoutDocument, output_path: Union[str, Path]) -> Path:
        """
        Render to PDF file.

        Args:
            document: LayoutDocument
            output_path: Output file path

        Returns:
            Path to created file
        """
        output_path = self._prepare_path(output_path)
        output_path.write_bytes(self.render_bytes(document))
        logger.info(f"PDF saved: {output_path} ({len(self.last_pages)} pages)")
        return output_path

    def render_bytes(self, document: LayoutDocument) -> bytes:
        document = deepcopy(document)
        logger.info(f"Rendering PDF: {len(document.sections)} sections")

        data = b""
        for attempt in range(1, self.max_passes + 1):
            data, manager = self._build(document)
            self.last_pages = manager.pages
            if not self.exact_toc or attempt == self.max_passes:
                break
            observed = {anchor: info.counter for anchor, info in manager.section_starts.items()}
            if not document.update_toc_pages(observed):
                break
            logger.debug(f"TOC page numbers changed, rebuilding (pass {attempt + 1})")
        return data

    def _build(self, document: LayoutDocument):
        geometry = document.geometry
        width, height = geometry.page_size_points()
        manager = SectionManager(document.settings, geometry)
        styles = self._create_styles(document)

        buffer = BytesIO()
        doc = BookDocTemplate(
            buffer,
            manager,
            lambda canvas, info: self._draw_running_heads(canvas, info, document, styles),
            pagesize=(width, height),
            title=document.title,
            author=document.author,
            subject=document.metadata.get("description") or "",
            creator="Manuscript Press",
            lang=document.settings.language,
        )
        doc.addPageTemplates(self._page_templates(doc, document))

        story = self._story(document, styles)
        try:
            doc.build(story)
        except Exception as e:
            raise RendererError("pdf", str(e)) from e
        return buffer.getvalue(), manager

    # =========================================================================
    # Page templates
    # =========================================================================

    def _page_templates(self, doc: BookDocTemplate, document: LayoutDocument) -> List[PageTemplate]:
        geometry = document.geometry
        width, height = geometry.page_size_points()

        cover = PageTemplate(
            id="cover",
            frames=[Frame(0, 0, width, height,
                          leftPadding=COVER_PADDING, rightPadding=COVER_PADDING,
                          topPadding=COVER_PADDING, bottomPadding=COVER_PADDING, id="cover")],
            onPageEnd=doc.end_page,
            pagesize=(width, height),
        )
        templates = [cover]
        for template_id, page_number in (("recto", 1), ("verso", 2)):
            margins = geometry.margins_for_page(page_number).to_points()
            frame = Frame(
                margins.left,
                margins.bottom,
                width - margins.left - margins.right,
                height - margins.top - margins.bottom,
                leftPadding=0, rightPadding=0, topPadding=0, bottomPadding=0,
                id=template_id,
            )
            templates.append(PageTemplate(id=template_id, frames=[frame],
                                          onPageEnd=doc.end_page, pagesize=(width, height)))
        return templates

    # =========================================================================
    # Styles
    # =========================================================================

    def _create_styles(self, document: LayoutDocument) -> Dict[str, Any]:
        """Create paragraph styles for the block styles the builder emits"""
        typo = document.settings.typography
        cs = document.settings.chapters
        hf = document.settings.header_footer

        body_font = resolve_font_id(typo.body_font, "georgia")
        regular, bold, italic, _ = pdf_fonts(body_font)
        heading_regular, heading_bold, heading_italic, _ = pdf_fonts(resolve_font_id(typo.heading_font, body_font))
        header_fonts = pdf_fonts(resolve_font_id(hf.header_font, body_font))
        footer_fonts = pdf_fonts(resolve_font_id(hf.footer_font, body_font))

        size = typo.body_font_size
        leading = size * typo.body_line_height
        heading_align = ALIGNMENTS.get(typo.heading_alignment, TA_CENTER)
        title_align = ALIGNMENTS.get(cs.chapter_title_position, heading_align)

        styles: Dict[str, Any] = {}

        styles["body"] = ParagraphStyle(
            "body",
            fontName=regular,
            fontSize=size,
            leading=leading,
            alignment=ALIGNMENTS.get(typo.body_alignment, TA_JUSTIFY),
            firstLineIndent=indent_points(typo),
            spaceAfter=paragraph_spacing_points(typo),
            allowWidows=0 if typo.widow_control else 1,
            allowOrphans=0 if typo.orphan_control else 1,
            textColor=black,
        )
        styles["first"] = ParagraphStyle(
            "first", parent=styles["body"],
            firstLineIndent=styles["body"].firstLineIndent if typo.first_paragraph_indent else 0,
        )
        styles["blockquote"] = ParagraphStyle(
            "blockquote", parent=styles["first"], fontName=italic,
            leftIndent=0.4 * inch, rightIndent=0.4 * inch, spaceBefore=leading / 2, spaceAfter=leading / 2,
        )
        styles["epigraph"] = ParagraphStyle(
            "epigraph", parent=styles["blockquote"], alignment=TA_CENTER, spaceBefore=2 * inch,
        )
        styles["dedication"] = ParagraphStyle(
            "dedication", parent=styles["epigraph"], fontName=italic,
        )
        styles["centered"] = ParagraphStyle(
            "centered", parent=styles["first"], alignment=TA_CENTER, spaceBefore=leading / 2, spaceAfter=leading / 2,
        )

        styles["chapter-title"] = ParagraphStyle(
            "chapter-title",
            fontName=heading_bold,
            fontSize=typo.chapter_title_size,
            leading=typo.chapter_title_size * 1.25,
            alignment=title_align,
            spaceAfter=cs.after_chapter_title_space * inch,
        )
        styles["chapter-number"] = ParagraphStyle(
            "chapter-number", parent=styles["chapter-title"],
            fontName=heading_regular, fontSize=typo.chapter_subtitle_size,
            leading=typo.chapter_subtitle_size * 1.3, spaceAfter=4,
        )
        styles["chapter-ornament"] = ParagraphStyle(
            "chapter-ornament", parent=styles["chapter-number"], spaceBefore=4, spaceAfter=12,
        )
        styles["heading"] = ParagraphStyle(
            "heading", parent=styles["chapter-title"],
            fontSize=typo.section_heading_size, leading=typo.section_heading_size * 1.3,
            alignment=heading_align, spaceAfter=0.3 * inch,
        )

        styles["cover-title"] = ParagraphStyle(
            "cover-title", fontName=heading_bold, fontSize=typo.chapter_title_size * 1.6,
            leading=typo.chapter_title_size * 2, alignment=TA_CENTER, spaceBefore=2 * inch, spaceAfter=0.5 * inch,
        )
        styles["cover-author"] = ParagraphStyle(
            "cover-author", fontName=heading_regular, fontSize=typo.chapter_subtitle_size,
            leading=typo.chapter_subtitle_size * 1.3, alignment=TA_CENTER, spaceAfter=0.3 * inch,
        )
        styles["cover-genre"] = ParagraphStyle(
            "cover-genre", parent=styles["cover-author"], fontName=heading_italic, fontSize=size,
        )
        styles["book-title"] = ParagraphStyle(
            "book-title", parent=styles["cover-title"], fontSize=typo.chapter_title_size * 1.3,
            spaceBefore=1.5 * inch,
        )
        styles["half-title"] = styles["book-title"]
        styles["book-author"] = styles["cover-author"]
        styles["novel-label"] = ParagraphStyle(
            "novel-label", parent=styles["cover-genre"], spaceAfter=4,
        )
        styles["small"] = ParagraphStyle(
            "small", parent=styles["first"], fontSize=size * 0.85, leading=size * 0.85 * 1.4,
            alignment=TA_LEFT, spaceAfter=2,
        )
        styles["copyright-legal"] = ParagraphStyle(
            "copyright-legal", parent=styles["small"], fontSize=size * 0.75, leading=size * 0.75 * 1.4,
            alignment=TA_JUSTIFY,
        )
        styles["bibliography-entry"] = ParagraphStyle(
            "bibliography-entry", parent=styles["first"], alignment=TA_LEFT, spaceAfter=leading / 3,
        )
        styles["bibliography-hanging"] = ParagraphStyle(
            "bibliography-hanging", parent=styles["bibliography-entry"],
            leftIndent=0.5 * inch, firstLineIndent=-0.5 * inch,
        )
        styles["toc-entry"] = ParagraphStyle(
            "toc-entry", parent=styles["first"], alignment=TA_LEFT, spaceAfter=0,
        )
        styles["toc-page"] = ParagraphStyle(
            "toc-page", parent=styles["toc-entry"], alignment=TA_RIGHT,
        )
        styles["header"] = ParagraphStyle(
            "header",
            fontName=header_fonts[2] if hf.header_style == "italic" else header_fonts[0],
            fontSize=hf.header_font_size,
        )
        styles["footer"] = ParagraphStyle(
            "footer", fontName=footer_fonts[0], fontSize=hf.footer_font_size,
        )
        return styles

    # =========================================================================
    # Story
    # =========================================================================

    def _story(self, document: LayoutDocument, styles: Dict[str, Any]) -> List[Any]:
        story: List[Any] = []
        for section in document.sections:
            story.append(SectionStart(section))
            if section.kind == SectionKind.CHAPTER and document.settings.chapters.chapter_drop_from_top:
                story.append(Spacer(1, document.settings.chapters.chapter_drop_from_top * inch))
            for block in section.blocks:
                story.extend(self._render_block(block, section, document, styles))
        return story

    def _render_block(self, block: Block, section: Section, document: LayoutDocument,
                      styles: Dict[str, Any]) -> List[Any]:
        """Render a single block to flowables"""
        typo = document.settings.typography
        links = document.settings.export.pdf.hyperlinks

        if block.type == BlockType.IMAGE:
            return self._image(block, document, styles)
        if block.type == BlockType.SPACER:
            return [Spacer(1, typo.body_font_size * typo.body_line_height)]
        if block.type == BlockType.PAGE_BREAK:
            return []
        if block.type == BlockType.TOC_ENTRY:
            return [self._toc_row(block, document, styles, links)]
        if block.type in (BlockType.SCENE_BREAK, BlockType.ORNAMENT):
            style = styles["chapter-ornament"] if block.type == BlockType.ORNAMENT else styles["centered"]
            return [Paragraph(markup(block.text) or "&nbsp;", style)]
        if block.type in (BlockType.CHAPTER_LABEL, BlockType.CHAPTER_NUMBER):
            return [Paragraph(markup(block.text), styles["chapter-number"])]
        if block.type == BlockType.CHAPTER_TITLE:
            return [Paragraph(markup(block.text), styles["chapter-title"])]
        if block.type == BlockType.HEADING:
            return [Paragraph(markup(block.text), styles.get(block.style, styles["heading"]))]
        if block.type == BlockType.EPIGRAPH:
            return [Paragraph(markup(block.text), styles["epigraph"])]
        if block.type == BlockType.BLOCKQUOTE:
            return [Paragraph(self._lines(block.text), styles["blockquote"])]
        if block.type == BlockType.BIBLIOGRAPHY_ENTRY:
            style = styles["bibliography-hanging"] if block.attributes.get("hanging_indent") else styles["bibliography-entry"]
            return [Paragraph(markup(block.text), style)]

        # Paragraphs
        if block.style == "drop-cap":
            return [Paragraph(self._drop_cap(block, typo), styles["first"])]
        if block.style in styles:
            style = styles[block.style]
        elif block.style.startswith("copyright") or block.style in ("book-genre", "book-description", "book-publisher",
                                                                      "bibliography-note", "also-by"):
            style = styles["small"] if block.style.startswith("copyright") else styles["centered"]
        elif block.attributes.get("first"):
            style = styles["first"]
        else:
            style = styles["body"]
        return [Paragraph(self._lines(block.text), style)]

    def _lines(self, text: str) -> str:
        return markup(text).replace("\n", "<br/>")

    def _drop_cap(self, block: Block, typo) -> str:
        text = block.text
        if not text:
            return ""
        lines = block.attributes.get("drop_cap_lines", typo.drop_cap_lines)
        size = typo.body_font_size * max(1, lines) * 0.8
        return f'<font size="{size:.1f}">{markup(text[0])}</font>{self._lines(text[1:])}'

    def _toc_row(self, block: Block, document: LayoutDocument, styles: Dict[str, Any], links: bool) -> Table:
        label = block.attributes.get("label", "")
        title = block.attributes.get("title", block.text)
        text = markup("   ".join(part for part in (label, title) if part))
        anchor = block.attributes.get("anchor")
        if links and anchor:
            text = f'<a href="#{anchor}">{text}</a>'
        page = str(block.attributes.get("page", ""))
        width = document.geometry.content_width * inch
        table = Table(
            [[Paragraph(text, styles["toc-entry"]), Paragraph(page, styles["toc-page"])]],
            colWidths=[width - TOC_PAGE_COLUMN, TOC_PAGE_COLUMN],
        )
        table.setStyle(TableStyle([
            ("LEFTPADDING", (0, 0), (-1, -1), 0),
            ("RIGHTPADDING", (0, 0), (-1, -1), 0),
            ("VALIGN", (0, 0), (-1, -1), "BOTTOM"),
        ]))
        return table

    def _image(self, block: Block, document: LayoutDocument, styles: Dict[str, Any]) -> List[Any]:
        data = self.assets.load(block.attributes.get("src"))
        if data is not None:
            try:
                image = ImageReader(BytesIO(data))
                width, height = document.geometry.page_size_points()
                return [FullBleedImage(image, width, height, COVER_PADDING)]
            except Exception as e:
                logger.warning(f"Unreadable cover image, using text cover: {e}")
        logger.debug("Cover image unavailable, drawing a text cover")
        return [
            Paragraph(markup(document.title), styles["cover-title"]),
            Paragraph(markup(document.author), styles["cover-author"]),
        ]

    # =========================================================================
    # Running heads
    # =========================================================================

    def _draw_running_heads(self, canvas, info: PageInfo, document: LayoutDocument, styles: Dict[str, Any]):
        if info.is_blank or info.role == PageRole.COVER:
            return
        geometry = document.geometry
        hf = document.settings.header_footer
        width, height = geometry.page_size_points()
        margins = info.margins.to_points()

        canvas.saveState()
        if info.has_header:
            style = styles["header"]
            y = height - geometry.top * inch - style.fontSize
            self._draw_row(canvas, info.header, style, margins, width, y, hf.header_style)
            if hf.header_line:
                canvas.setLineWidth(0.5)
                canvas.line(margins.left, y - 4, width - margins.right, y - 4)
        if any(info.footer.values()):
            style = styles["footer"]
            y = geometry.bottom * inch
            self._draw_row(canvas, info.footer, style, margins, width, y, "normal")
            if hf.footer_line:
                canvas.setLineWidth(0.5)
                canvas.line(margins.left, y + style.fontSize + 2, width - margins.right, y + style.fontSize + 2)
        canvas.restoreState()

    @staticmethod
    def _draw_row(canvas, row: Dict[str, str], style, margins, width: float, y: float, case: str):
        canvas.setFont(style.fontName, style.fontSize)
        for position, text in row.items():
            if not text:
                continue
            if case in ("uppercase", "small-caps"):
                text = text.upper()
            if position == "left":
                canvas.drawString(margins.left, y, text)
            elif position == "center":
                canvas.drawCentredString((margins.left + width - margins.right) / 2, y, text)
            else:
                canvas.drawRightString(width - margins.right, y, text)

    @classmethod
    def supports_format(cls, format_name: str) -> bool:
        return format_name.lower().lstrip(".") == "pdf"

    @classmethod
    def get_supported_formats(cls) -> List[str]:
        return ["pdf"]
