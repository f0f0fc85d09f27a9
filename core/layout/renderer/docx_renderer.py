#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DOCX Renderer

Renders a LayoutDocument to a Word document with python-docx.

Handles:
- One Word section per layout section (odd-page breaks for recto openers)
- Page number formats per role: none on the cover, roman front matter,
  arabic body restarting at 1 (w:pgNumType)
- Running heads per section, blank on the opening page (w:titlePg)
- Even/odd headers for mirrored running heads, mirrored margins
- PAGE fields for page numbers, PAGEREF fields for TOC numbers

Version: 1.0.0
"""

from io import BytesIO
from typing import Dict, List, Optional, Union
from pathlib import Path
import logging

from docx import Document
from docx.enum.section import WD_ORIENT, WD_SECTION
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_BREAK, WD_TAB_ALIGNMENT, WD_TAB_LEADER
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor

from ..document import Block, BlockType, LayoutDocument, PageRole, Section, SectionKind
from ..errors import RendererError
from .base_renderer import BaseRenderer
from .styles import emphasis_runs, font_family, indent_points, paragraph_spacing_points, plain, resolve_font_id

logger = logging.getLogger(__name__)

ALIGNMENTS = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "justify": WD_ALIGN_PARAGRAPH.JUSTIFY,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "centered": WD_ALIGN_PARAGRAPH.CENTER,
}

PAGE_NUMBER_FORMATS = {
    "arabic": "decimal",
    "roman-lower": "lowerRoman",
    "roman-upper": "upperRoman",
}

HEADER_COLOR = RGBColor(85, 85, 85)

# Paragraph styles that are centered on their page
CENTERED_STYLES = {
    "book-title", "half-title", "book-author", "novel-label", "book-genre", "book-description",
    "book-publisher", "cover-title", "cover-author", "cover-genre", "dedication", "about-author",
    "toc-heading", "matter-heading", "bibliography-heading",
}


class DocxRenderer(BaseRenderer):
    """
    Renders a LayoutDocument to DOCX.

    Usage:
        renderer = DocxRenderer()
        renderer.render(document, "book.docx")
    """

    def render(self, document: LayoutDocument, output_path: Union[str, Path]) -> Path:
        """
        Render to DOCX file.

        Args:
            document: LayoutDocument
            output_path: Output file path

        Returns:
            Path to created file
        """
        output_path = self._prepare_path(output_path)
        output_path.write_bytes(self.render_bytes(document))
        logger.info(f"DOCX saved: {output_path}")
        return output_path

    def render_bytes(self, document: LayoutDocument) -> bytes:
        logger.info(f"Rendering DOCX: {len(document.sections)} sections")
        doc = Document()
        try:
            self._set_properties(doc, document)
            self._set_styles(doc, document)
            self._set_document_settings(doc, document)
            self._render_sections(doc, document)
            buffer = BytesIO()
            doc.save(buffer)
        except Exception as e:
            raise RendererError("docx", str(e)) from e
        return buffer.getvalue()

    # =========================================================================
    # Document setup
    # =========================================================================

    @staticmethod
    def _set_properties(doc, document: LayoutDocument):
        props = doc.core_properties
        props.title = document.title
        props.author = document.author
        props.language = document.settings.language
        if document.metadata.get("description"):
            props.subject = document.metadata["description"][:255]
        if document.metadata.get("genre"):
            props.category = document.metadata["genre"]

    def _set_styles(self, doc, document: LayoutDocument):
        """Configure Normal and heading styles from the typography settings"""
        typo = document.settings.typography
        body_id = resolve_font_id(typo.body_font, "georgia")
        heading_name = font_family(resolve_font_id(typo.heading_font, body_id))[0]

        normal = doc.styles["Normal"]
        normal.font.name = font_family(body_id)[0]
        normal.font.size = Pt(typo.body_font_size)
        fmt = normal.paragraph_format
        fmt.line_spacing = typo.body_line_height
        fmt.space_before = Pt(0)
        fmt.space_after = Pt(paragraph_spacing_points(typo))
        fmt.first_line_indent = Pt(indent_points(typo))
        fmt.alignment = ALIGNMENTS.get(typo.body_alignment, WD_ALIGN_PARAGRAPH.JUSTIFY)
        fmt.widow_control = typo.widow_control or typo.orphan_control

        for name, size in (("Heading 1", typo.chapter_title_size), ("Heading 2", typo.section_heading_size)):
            style = doc.styles[name]
            style.font.name = heading_name
            style.font.size = Pt(size)
            style.font.bold = False
            style.font.color.rgb = RGBColor(0, 0, 0)
            style.paragraph_format.first_line_indent = Pt(0)
            style.paragraph_format.alignment = ALIGNMENTS.get(typo.heading_alignment, WD_ALIGN_PARAGRAPH.CENTER)
            style.paragraph_format.keep_with_next = True

    def _set_document_settings(self, doc, document: LayoutDocument):
        hf = document.settings.header_footer
        if hf.mirror_headers:
            doc.settings.odd_and_even_pages_header_footer = True
        if document.geometry.mirror_margins and document.settings.export.docx.mirror_margins:
            settings_element = doc.settings.element
            if settings_element.find(qn("w:mirrorMargins")) is None:
                mirror = OxmlElement("w:mirrorMargins")
                zoom = settings_element.find(qn("w:zoom"))
                if zoom is not None:
                    zoom.addnext(mirror)
                else:
                    settings_element.insert(0, mirror)

    # =========================================================================
    # Sections
    # =========================================================================

    def _render_sections(self, doc, document: LayoutDocument):
        previous_role: Optional[PageRole] = None
        for index, section in enumerate(document.sections):
            if index == 0:
                word_section = doc.sections[0]
            else:
                start = WD_SECTION.ODD_PAGE if section.start_on_recto else WD_SECTION.NEW_PAGE
                word_section = doc.add_section(start)

            self._set_geometry(word_section, document, section)
            restart = section.role != previous_role and section.role in (PageRole.FRONT_MATTER, PageRole.BODY)
            self._set_page_numbering(word_section, section, restart)
            self._set_running_heads(word_section, section, document)
            previous_role = section.role

            first_paragraph = len(doc.paragraphs)
            for block in section.blocks:
                self._render_block(doc, block, section, document)
            if section.anchor and len(doc.paragraphs) > first_paragraph:
                self._add_bookmark(doc.paragraphs[first_paragraph], section.anchor, index)

    def _set_geometry(self, word_section, document: LayoutDocument, section: Section):
        geometry = document.geometry
        word_section.orientation = WD_ORIENT.LANDSCAPE if geometry.orientation == "landscape" else WD_ORIENT.PORTRAIT
        word_section.page_width = Inches(geometry.width)
        word_section.page_height = Inches(geometry.height)
        if section.blocks_of(BlockType.IMAGE):
            # Full-page picture
            for side in ("top_margin", "bottom_margin", "left_margin", "right_margin"):
                setattr(word_section, side, Inches(0))
            word_section.header_distance = Inches(0)
            word_section.footer_distance = Inches(0)
            return
        word_section.top_margin = Inches(geometry.margin_top)
        word_section.bottom_margin = Inches(geometry.margin_bottom)
        word_section.left_margin = Inches(geometry.inside)
        word_section.right_margin = Inches(geometry.outside)
        word_section.header_distance = Inches(geometry.top)
        word_section.footer_distance = Inches(geometry.bottom)

    @staticmethod
    def _set_page_numbering(word_section, section: Section, restart: bool):
        fmt = PAGE_NUMBER_FORMATS.get(section.numbering)
        if fmt is None:
            return
        sectPr = word_section._sectPr
        pgNumType = sectPr.find(qn("w:pgNumType"))
        if pgNumType is None:
            pgNumType = OxmlElement("w:pgNumType")
            sectPr.append(pgNumType)
        pgNumType.set(qn("w:fmt"), fmt)
        # add_section clones the previous sectPr, start included
        if restart:
            pgNumType.set(qn("w:start"), "1")
        elif pgNumType.get(qn("w:start")) is not None:
            del pgNumType.attrib[qn("w:start")]

    def _set_running_heads(self, word_section, section: Section, document: LayoutDocument):
        """Headers/footers for one Word section; every story is unlinked from the previous section"""
        hf = document.settings.header_footer
        word_section.different_first_page_header_footer = True

        stories = {
            "header": word_section.header,
            "footer": word_section.footer,
            "first_header": word_section.first_page_header,
            "first_footer": word_section.first_page_footer,
            "even_header": word_section.even_page_header,
            "even_footer": word_section.even_page_footer,
        }
        for story in stories.values():
            story.is_linked_to_previous = False

        if section.role == PageRole.COVER or section.kind == SectionKind.BACK_COVER:
            return

        width = document.geometry.content_width
        if section.role == PageRole.FRONT_MATTER:
            if not hf.footer_enabled or section.numbering == "none":
                return
            row = {"left": "", "center": "page-number", "right": ""}
            self._fill_row(stories["footer"], row, section, document, width, "footer")
            self._fill_row(stories["even_footer"], row, section, document, width, "footer")
            if hf.first_page_number_visible:
                self._fill_row(stories["first_footer"], row, section, document, width, "footer")
            return

        for prefix, enabled in (("header", hf.header_enabled and section.running_strings is not None),
                                ("footer", hf.footer_enabled)):
            if not enabled:
                continue
            recto = {pos: getattr(hf, f"{prefix}_{pos}_content") for pos in ("left", "center", "right")}
            verso = dict(recto)
            if hf.mirror_headers:
                verso["left"], verso["right"] = recto["right"], recto["left"]
            self._fill_row(stories[prefix], recto, section, document, width, prefix)
            self._fill_row(stories[f"even_{prefix}"], verso, section, document, width, prefix)
            if prefix == "footer" and hf.first_page_number_visible:
                self._fill_row(stories["first_footer"], recto, section, document, width, prefix)

    def _fill_row(self, story, row: Dict[str, str], section: Section, document: LayoutDocument,
                  width: float, prefix: str):
        """Left/center/right content on one paragraph separated by tab stops"""
        hf = document.settings.header_footer
        custom = hf.header_custom_text if prefix == "header" else hf.footer_custom_text
        size = hf.header_font_size if prefix == "header" else hf.footer_font_size

        paragraph = story.paragraphs[0] if story.paragraphs else story.add_paragraph()
        fmt = paragraph.paragraph_format
        fmt.first_line_indent = Pt(0)
        fmt.alignment = WD_ALIGN_PARAGRAPH.LEFT
        fmt.tab_stops.add_tab_stop(Inches(width / 2), WD_TAB_ALIGNMENT.CENTER)
        fmt.tab_stops.add_tab_stop(Inches(width), WD_TAB_ALIGNMENT.RIGHT)

        for index, position in enumerate(("left", "center", "right")):
            if index:
                paragraph.add_run("\t")
            selector = row.get(position, "none")
            if selector == "page-number":
                run = paragraph.add_run()
                self._add_field(run, "PAGE", "1")
            else:
                text = self._selector_text(selector, position, section, custom)
                if not text:
                    continue
                run = paragraph.add_run(text)
                if prefix == "header":
                    run.font.italic = hf.header_style == "italic"
                    run.font.small_caps = hf.header_style == "small-caps"
                    run.font.all_caps = hf.header_style == "uppercase"
            run.font.size = Pt(size)
            run.font.color.rgb = HEADER_COLOR

        if (prefix == "header" and hf.header_line) or (prefix == "footer" and hf.footer_line):
            self._add_border(paragraph, "bottom" if prefix == "header" else "top")

    @staticmethod
    def _selector_text(selector: str, position: str, section: Section, custom: Dict[str, str]) -> str:
        if selector == "custom":
            return (custom or {}).get(position, "")
        if section.running_strings is None:
            return ""
        return section.running_strings.value(selector)

    # =========================================================================
    # Blocks
    # =========================================================================

    def _render_block(self, doc, block: Block, section: Section, document: LayoutDocument):
        """Render a single block"""
        typo = document.settings.typography
        cs = document.settings.chapters

        if block.type == BlockType.IMAGE:
            self._add_image(doc, block, document)
            return
        if block.type == BlockType.SPACER:
            doc.add_paragraph()
            return
        if block.type == BlockType.PAGE_BREAK:
            doc.add_paragraph().add_run().add_break(WD_BREAK.PAGE)
            return
        if block.type == BlockType.TOC_ENTRY:
            self._add_toc_entry(doc, block, document)
            return

        if block.type == BlockType.CHAPTER_TITLE:
            paragraph = doc.add_paragraph(style="Heading 1")
            paragraph.paragraph_format.alignment = ALIGNMENTS.get(cs.chapter_title_position, WD_ALIGN_PARAGRAPH.CENTER)
            paragraph.paragraph_format.space_after = Inches(cs.after_chapter_title_space)
            paragraph.add_run(block.text)
            return
        if block.type == BlockType.HEADING:
            style = "Title" if block.style in ("cover-title", "book-title", "half-title") else "Heading 2"
            paragraph = doc.add_paragraph(style=style)
            paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
            if block.style in ("book-title", "half-title"):
                paragraph.paragraph_format.space_before = Inches(1.5)
            paragraph.add_run(block.text)
            return
        if block.type in (BlockType.CHAPTER_LABEL, BlockType.CHAPTER_NUMBER, BlockType.ORNAMENT,
                          BlockType.SCENE_BREAK):
            paragraph = doc.add_paragraph()
            paragraph.alignment = ALIGNMENTS.get(cs.chapter_title_position, WD_ALIGN_PARAGRAPH.CENTER) \
                if block.type != BlockType.SCENE_BREAK else WD_ALIGN_PARAGRAPH.CENTER
            paragraph.paragraph_format.first_line_indent = Pt(0)
            paragraph.paragraph_format.space_before = Pt(typo.body_font_size)
            run = paragraph.add_run(block.text)
            if block.type == BlockType.CHAPTER_NUMBER:
                run.font.size = Pt(typo.chapter_subtitle_size)
            elif block.type == BlockType.CHAPTER_LABEL:
                run.font.all_caps = True
            return

        paragraph = doc.add_paragraph()
        fmt = paragraph.paragraph_format
        if block.style == "drop-cap" and block.text:
            self._add_drop_cap(doc, paragraph, block, typo)
            return

        if block.type in (BlockType.BLOCKQUOTE, BlockType.EPIGRAPH):
            fmt.left_indent = Inches(0.4)
            fmt.right_indent = Inches(0.4)
            fmt.first_line_indent = Pt(0)
            if block.type == BlockType.EPIGRAPH:
                fmt.alignment = WD_ALIGN_PARAGRAPH.CENTER
                fmt.space_before = Inches(1.5)
            self._add_runs(paragraph, block.text, italic=True)
            return
        if block.type == BlockType.BIBLIOGRAPHY_ENTRY:
            fmt.alignment = WD_ALIGN_PARAGRAPH.LEFT
            fmt.space_after = Pt(typo.body_font_size / 2)
            if block.attributes.get("hanging_indent"):
                fmt.left_indent = Inches(0.5)
                fmt.first_line_indent = Inches(-0.5)
            else:
                fmt.first_line_indent = Pt(0)
            self._add_runs(paragraph, block.text)
            return

        if block.style.startswith("copyright"):
            fmt.alignment = WD_ALIGN_PARAGRAPH.CENTER
            fmt.first_line_indent = Pt(0)
            fmt.space_after = Pt(2)
            run = paragraph.add_run(block.text)
            run.font.size = Pt(typo.body_font_size * (0.7 if block.style == "copyright-legal" else 0.85))
            run.font.italic = block.style == "copyright-author"
            return
        if block.style in CENTERED_STYLES:
            fmt.alignment = WD_ALIGN_PARAGRAPH.CENTER
            fmt.first_line_indent = Pt(0)
            run = paragraph.add_run(block.text)
            run.font.italic = block.style in ("book-author", "novel-label", "dedication", "cover-author")
            if block.style == "book-author":
                run.font.size = Pt(typo.chapter_subtitle_size)
            return

        if block.attributes.get("first") and not typo.first_paragraph_indent:
            fmt.first_line_indent = Pt(0)
        self._add_runs(paragraph, block.text)

    @staticmethod
    def _add_runs(paragraph, text: str, italic: bool = False):
        for fragment, emphasized in emphasis_runs(text):
            run = paragraph.add_run(fragment)
            if italic or emphasized:
                run.font.italic = True

    def _add_drop_cap(self, doc, paragraph, block: Block, typo):
        """Word drop cap: a framed paragraph holding the first letter"""
        lines = int(block.attributes.get("drop_cap_lines", typo.drop_cap_lines))
        pPr = paragraph._p.get_or_add_pPr()
        frame = OxmlElement("w:framePr")
        frame.set(qn("w:dropCap"), "drop")
        frame.set(qn("w:lines"), str(lines))
        frame.set(qn("w:wrap"), "around")
        frame.set(qn("w:vAnchor"), "text")
        frame.set(qn("w:hAnchor"), "text")
        pPr.insert(0, frame)
        paragraph.paragraph_format.first_line_indent = Pt(0)
        text = block.text if not block.text.startswith("<") else plain(block.text)
        letter = paragraph.add_run(text[0])
        letter.font.size = Pt(typo.body_font_size * typo.body_line_height * lines)

        rest = doc.add_paragraph()
        rest.paragraph_format.first_line_indent = Pt(0)
        self._add_runs(rest, text[1:])

    def _add_toc_entry(self, doc, block: Block, document: LayoutDocument):
        width = document.geometry.content_width
        paragraph = doc.add_paragraph()
        fmt = paragraph.paragraph_format
        fmt.first_line_indent = Pt(0)
        fmt.alignment = WD_ALIGN_PARAGRAPH.LEFT
        fmt.space_after = Pt(4)
        fmt.tab_stops.add_tab_stop(Inches(width), WD_TAB_ALIGNMENT.RIGHT, WD_TAB_LEADER.DOTS)

        label = block.attributes.get("label", "")
        title = block.attributes.get("title", block.text)
        if label:
            paragraph.add_run(f"{label}   ").font.small_caps = True
        paragraph.add_run(title).font.italic = True
        paragraph.add_run("\t")

        page = str(block.attributes.get("page", ""))
        anchor = block.attributes.get("anchor")
        run = paragraph.add_run()
        if anchor and document.settings.export.pdf.hyperlinks:
            self._add_field(run, f"PAGEREF {bookmark_name(anchor)} \\h", page)
        else:
            run.text = page

    def _add_image(self, doc, block: Block, document: LayoutDocument):
        data = self.assets.load(block.attributes.get("src"))
        if data is not None:
            try:
                doc.add_picture(BytesIO(data), width=Inches(document.geometry.width),
                                height=Inches(document.geometry.height))
                return
            except Exception as e:
                logger.warning(f"Unreadable cover image, using text cover: {e}")
        logger.debug("Cover image unavailable, writing a text cover")
        title = doc.add_paragraph(style="Title")
        title.alignment = WD_ALIGN_PARAGRAPH.CENTER
        title.paragraph_format.space_before = Inches(2)
        title.add_run(document.title)
        author = doc.add_paragraph()
        author.alignment = WD_ALIGN_PARAGRAPH.CENTER
        author.add_run(document.author).font.italic = True

    # =========================================================================
    # Fields, bookmarks, borders
    # =========================================================================

    @staticmethod
    def _add_field(run, instruction: str, cached: str = ""):
        """Complex field with a cached result shown until Word updates fields"""
        begin = OxmlElement("w:fldChar")
        begin.set(qn("w:fldCharType"), "begin")
        instr = OxmlElement("w:instrText")
        instr.set(qn("xml:space"), "preserve")
        instr.text = f" {instruction} "
        separate = OxmlElement("w:fldChar")
        separate.set(qn("w:fldCharType"), "separate")
        text = OxmlElement("w:t")
        text.text = cached
        end = OxmlElement("w:fldChar")
        end.set(qn("w:fldCharType"), "end")
        for element in (begin, instr, separate, text, end):
            run._r.append(element)

    @staticmethod
    def _add_bookmark(paragraph, anchor: str, ident: int):
        """Bookmark spanning the opening paragraph of a section (PAGEREF target)"""
        name = bookmark_name(anchor)
        ident = str(ident)
        start = OxmlElement("w:bookmarkStart")
        start.set(qn("w:id"), ident)
        start.set(qn("w:name"), name)
        end = OxmlElement("w:bookmarkEnd")
        end.set(qn("w:id"), ident)
        pPr = paragraph._p.pPr
        if pPr is not None:
            pPr.addnext(start)
        else:
            paragraph._p.insert(0, start)
        paragraph._p.append(end)

    @staticmethod
    def _add_border(paragraph, side: str):
        pPr = paragraph._p.get_or_add_pPr()
        borders = OxmlElement("w:pBdr")
        edge = OxmlElement(f"w:{side}")
        edge.set(qn("w:val"), "single")
        edge.set(qn("w:sz"), "4")
        edge.set(qn("w:space"), "1")
        edge.set(qn("w:color"), "CCCCCC")
        borders.append(edge)
        pPr.append(borders)

    @classmethod
    def supports_format(cls, format_name: str) -> bool:
        return format_name.lower().lstrip(".") == "docx"

    @classmethod
    def get_supported_formats(cls) -> List[str]:
        return ["docx"]


def bookmark_name(anchor: str) -> str:
    """Word bookmark names: letters, digits and underscores"""
    return "_".join(anchor.replace("-", " ").split()) or "bookmark"
