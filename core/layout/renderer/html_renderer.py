#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HTML Renderer

Renders a LayoutDocument to a standalone HTML file styled with CSS Paged
Media, ready for a paged-media engine (Paged.js, WeasyPrint, Prince) or
for reading in a browser.

Handles:
- @page :left/:right with mirrored margins and margin boxes
- Named pages for the cover and the front matter (roman numbering)
- Running heads via string-set with first-except (blank on openers)
- TOC page numbers via target-counter(), estimated numbers as fallback
- Cover image embedded as a data URI (text cover when unavailable)

Version: 1.0.0
"""

import base64
import logging
from html import escape
from pathlib import Path
from typing import List, Union

from ..document import Block, BlockType, LayoutDocument, PageRole, Section, SectionKind
from .base_renderer import BaseRenderer
from .assets import guess_media_type
from .styles import css_font_stack, markup, resolve_font_id

logger = logging.getLogger(__name__)

COUNTER_STYLES = {
    "arabic": "decimal",
    "roman-lower": "lower-roman",
    "roman-upper": "upper-roman",
}

PARAGRAPH_SPACING_CSS = {"none": "0", "small": "0.25em", "medium": "0.5em", "large": "1em"}

MARGIN_BOXES = ("top-left", "top-center", "top-right", "bottom-left", "bottom-center", "bottom-right")

# Front matter section kind -> wrapper class
FRONT_MATTER_CLASSES = {
    SectionKind.HALF_TITLE: "fm-half-title",
    SectionKind.TITLE_PAGE: "fm-title-page",
    SectionKind.COPYRIGHT: "fm-copyright",
    SectionKind.DEDICATION: "fm-dedication",
    SectionKind.EPIGRAPH: "fm-epigraph",
    SectionKind.TABLE_OF_CONTENTS: "fm-toc",
}


# =============================================================================
# BLOCK MARKUP (shared with the EPUB renderer)
# =============================================================================

def block_to_html(block: Block, links: bool = True) -> str:
    """Convert a block to an HTML fragment"""
    css = f' class="{block.style}"' if block.style else ""
    text = markup(block.text, "<em>", "</em>")

    if block.type == BlockType.IMAGE:
        return f'<img src="{escape(block.attributes.get("src", ""))}" alt="{escape(block.text)}"/>\n'
    if block.type == BlockType.SPACER:
        return '<div class="copyright-spacer"></div>\n'
    if block.type == BlockType.PAGE_BREAK:
        return '<div class="break-before"></div>\n'
    if block.type in (BlockType.HEADING, BlockType.CHAPTER_TITLE):
        level = min(max(block.level, 1), 6)
        anchor = block.attributes.get("anchor")
        ident = f' id="{anchor}"' if anchor else ""
        return f"<h{level}{ident}{css}>{text}</h{level}>\n"
    if block.type in (BlockType.CHAPTER_LABEL, BlockType.CHAPTER_NUMBER):
        return f"<span{css}>{text}</span>\n"
    if block.type == BlockType.ORNAMENT:
        return f'<div class="chapter-ornament" aria-hidden="true">{text}</div>\n'
    if block.type == BlockType.SCENE_BREAK:
        return f'<div class="scene-break" role="separator">{text or "&#160;"}</div>\n'
    if block.type == BlockType.BLOCKQUOTE:
        return f"<blockquote><p>{text.replace(chr(10), '<br/>')}</p></blockquote>\n"
    if block.type == BlockType.EPIGRAPH:
        return f'<blockquote class="epigraph"><p>{text}</p></blockquote>\n'
    if block.type == BlockType.TOC_ENTRY:
        return toc_entry_to_html(block, links)
    if block.type == BlockType.BIBLIOGRAPHY_ENTRY:
        hanging = " hanging" if block.attributes.get("hanging_indent") else ""
        return f'<p class="bibliography-entry{hanging}">{text}</p>\n'

    classes = [block.style] if block.style else []
    if block.attributes.get("first"):
        classes.append("first")
    css = f' class="{" ".join(classes)}"' if classes else ""
    return f"<p{css}>{text.replace(chr(10), '<br/>')}</p>\n"


def toc_entry_to_html(block: Block, links: bool = True) -> str:
    label = escape(block.attributes.get("label", ""))
    title = escape(block.attributes.get("title", block.text))
    page = block.attributes.get("page", "")
    inner = ""
    if label:
        inner += f'<span class="toc-label">{label}</span>'
    inner += f'<span class="toc-title">{title}</span><span class="toc-page">{page}</span>'
    anchor = block.attributes.get("anchor")
    if links and anchor:
        inner = f'<a href="#{anchor}">{inner}</a>'
    return f'<li class="toc-item">{inner}</li>\n'


def section_body_html(section: Section, links: bool = True) -> str:
    """Blocks of a section, with TOC entries grouped into a list"""
    parts: List[str] = []
    in_list = False
    header_open = False
    for block in section.blocks:
        if block.type == BlockType.TOC_ENTRY and not in_list:
            parts.append('<ol class="toc-list">\n')
            in_list = True
        elif block.type != BlockType.TOC_ENTRY and in_list:
            parts.append("</ol>\n")
            in_list = False

        opener = block.type in (BlockType.CHAPTER_LABEL, BlockType.CHAPTER_NUMBER,
                                BlockType.CHAPTER_TITLE, BlockType.ORNAMENT)
        if section.kind == SectionKind.CHAPTER and opener and not header_open:
            parts.append('<header class="chapter-header">\n')
            header_open = True
        elif header_open and not opener:
            parts.append('</header>\n<div class="chapter-text">\n')
            header_open = False
        parts.append(block_to_html(block, links))

    if in_list:
        parts.append("</ol>\n")
    if header_open:
        parts.append('</header>\n<div class="chapter-text">\n')
    if section.kind == SectionKind.CHAPTER:
        parts.append("</div>\n")
    return "".join(parts)


# =============================================================================
# RENDERER
# =============================================================================

class HTMLRenderer(BaseRenderer):
    """
    Renders a LayoutDocument to paged-media HTML.

    Usage:
        renderer = HTMLRenderer()
        renderer.render(document, "book.html")
        html = renderer.render_html(document)
    """

    def render(self, document: LayoutDocument, output_path: Union[str, Path]) -> Path:
        """
        Render to HTML file.

        With ``export.html.include_css == "external"`` the stylesheet is
        written next to the HTML file and linked.
        """
        output_path = self._prepare_path(output_path)
        if document.settings.export.html.include_css == "external":
            css_path = output_path.with_suffix(".css")
            css_path.write_text(self.build_css(document), encoding="utf-8")
            html = self.render_html(document, stylesheet=css_path.name)
        else:
            html = self.render_html(document)
        output_path.write_text(html, encoding="utf-8")
        logger.info(f"HTML saved: {output_path}")
        return output_path

    def render_bytes(self, document: LayoutDocument) -> bytes:
        return self.render_html(document).encode("utf-8")

    def render_html(self, document: LayoutDocument, stylesheet: str = "") -> str:
        """Full HTML document as a string"""
        logger.info(f"Rendering HTML: {len(document.sections)} sections")
        links = document.settings.export.pdf.hyperlinks
        if stylesheet:
            head_css = f'<link rel="stylesheet" href="{escape(stylesheet)}"/>'
        else:
            head_css = f"<style>\n{self.build_css(document)}\n</style>"

        body: List[str] = []
        for role, sections in self._groups(document):
            if role == PageRole.COVER:
                body.extend(self._cover_html(s, document) for s in sections)
            elif role == PageRole.FRONT_MATTER:
                body.append('<div class="front-matter">\n')
                body.extend(self._section_html(s, links) for s in sections)
                body.append("</div>\n")
            elif role == PageRole.BODY:
                body.append('<main class="book-content">\n')
                body.extend(self._section_html(s, links) for s in sections)
                body.append("</main>\n")
            else:
                body.append('<div class="back-matter">\n')
                body.extend(
                    self._cover_html(s, document) if s.kind == SectionKind.BACK_COVER
                    else self._section_html(s, links)
                    for s in sections
                )
                body.append("</div>\n")

        meta = document.metadata
        description = meta.get("description") or ""
        return (
            "<!DOCTYPE html>\n"
            f'<html lang="{escape(document.settings.language)}">\n'
            "<head>\n"
            '<meta charset="utf-8"/>\n'
            '<meta name="viewport" content="width=device-width, initial-scale=1"/>\n'
            f"<title>{escape(document.title)}</title>\n"
            f'<meta name="author" content="{escape(document.author)}"/>\n'
            + (f'<meta name="description" content="{escape(description)}"/>\n' if description else "")
            + f"{head_css}\n"
            "</head>\n"
            "<body>\n"
            + "".join(body)
            + "</body>\n</html>\n"
        )

    @staticmethod
    def _groups(document: LayoutDocument):
        groups = []
        for section in document.sections:
            if groups and groups[-1][0] == section.role:
                groups[-1][1].append(section)
            else:
                groups.append((section.role, [section]))
        return groups

    # =========================================================================
    # Sections
    # =========================================================================

    def _cover_html(self, section: Section, document: LayoutDocument) -> str:
        image = next(iter(section.blocks_of(BlockType.IMAGE)), None)
        if image is not None:
            src = self._image_src(image.attributes.get("src"), document)
            if src:
                return (f'<section class="cover-wrapper" id="{section.anchor}">'
                        f'<img src="{escape(src)}" alt="{escape(image.text)}"/></section>\n')
            logger.debug("Cover image unavailable, using text cover")
            if section.kind == SectionKind.BACK_COVER:
                return ""
            return (f'<section class="cover-wrapper text-cover" id="{section.anchor}">\n'
                    f'<h1 class="cover-title">{escape(document.title)}</h1>\n'
                    f'<p class="cover-author">{escape(document.author)}</p>\n</section>\n')
        return (f'<section class="cover-wrapper text-cover" id="{section.anchor}">\n'
                f"{section_body_html(section)}</section>\n")

    def _image_src(self, src: str, document: LayoutDocument) -> str:
        if not src:
            return ""
        if not document.settings.export.html.single_file and not src.startswith("data:"):
            return src
        data = self.assets.load(src)
        if data is None:
            return ""
        return f"data:{guess_media_type(data)};base64,{base64.b64encode(data).decode('ascii')}"

    def _section_html(self, section: Section, links: bool) -> str:
        classes = [section.kind.value]
        if section.role == PageRole.FRONT_MATTER:
            classes.append(FRONT_MATTER_CLASSES.get(section.kind, "fm-section"))
        if section.start_on_recto:
            classes.append("recto")
        running = ""
        if section.running_strings is not None:
            rs = section.running_strings
            running = (
                '<div class="running-header-data" aria-hidden="true">'
                f'<span class="running-title">{escape(rs.title)}</span>'
                f'<span class="running-author">{escape(rs.author)}</span>'
                f'<span class="running-chapter">{escape(rs.chapter)}</span>'
                "</div>\n"
            )
        return (f'<section class="{" ".join(classes)}" id="{section.anchor}">\n'
                f"{running}{section_body_html(section, links)}</section>\n")

    # =========================================================================
    # CSS
    # =========================================================================

    def build_css(self, document: LayoutDocument) -> str:
        """Paged-media stylesheet for the document's settings"""
        settings = document.settings
        geometry = document.geometry
        typo = settings.typography
        cs = settings.chapters
        hf = settings.header_footer
        html_export = settings.export.html
        pdf_export = settings.export.pdf

        body_id = resolve_font_id(typo.body_font, "georgia")
        body_font = css_font_stack(body_id)
        heading_font = css_font_stack(resolve_font_id(typo.heading_font, body_id))
        drop_cap_font = css_font_stack(resolve_font_id(typo.drop_cap_font, resolve_font_id(typo.heading_font, body_id)))
        header_font = css_font_stack(resolve_font_id(hf.header_font, body_id))
        footer_font = css_font_stack(resolve_font_id(hf.footer_font, body_id))

        unit = {"em": "em", "px": "px"}.get(typo.paragraph_indent_unit, "in")
        indent = f"{typo.paragraph_indent}{unit}"
        spacing = PARAGRAPH_SPACING_CSS.get(typo.paragraph_spacing, "0")
        header_style = {
            "italic": "font-style: italic;",
            "small-caps": "font-variant: small-caps;",
            "uppercase": "text-transform: uppercase; letter-spacing: 0.05em;",
        }.get(hf.header_style, "")
        page_counter = COUNTER_STYLES.get(hf.page_number_style)
        fm_counter = COUNTER_STYLES.get(hf.front_matter_numbering)
        title_align = "center" if cs.chapter_title_position == "centered" else cs.chapter_title_position
        show_bleed = pdf_export.include_bleed and geometry.bleed > 0
        show_marks = pdf_export.crop_marks and geometry.bleed > 0

        def resolve(selector: str, position: str, for_header: bool) -> str:
            if selector == "title":
                return "string(running-title, first-except)" if for_header else "string(running-title)"
            if selector == "author":
                return "string(running-author, first-except)" if for_header else "string(running-author)"
            if selector == "chapter":
                return "string(chapter-title, first-except)" if for_header else "string(chapter-title)"
            if selector == "page-number":
                return f"counter(page, {page_counter})" if page_counter else "none"
            if selector == "custom":
                custom = hf.header_custom_text if for_header else hf.footer_custom_text
                text = (custom or {}).get(position, "")
                return f'"{_css_string(text)}"' if text else "none"
            return "none"

        def boxes(side: str) -> str:
            out = []
            mirror = hf.mirror_headers and side == "left"
            for prefix, enabled in (("header", hf.header_enabled), ("footer", hf.footer_enabled)):
                if not enabled:
                    continue
                selectors = {pos: getattr(hf, f"{prefix}_{pos}_content") for pos in ("left", "center", "right")}
                if mirror:
                    selectors["left"], selectors["right"] = selectors["right"], selectors["left"]
                edge = "top" if prefix == "header" else "bottom"
                for pos, selector in selectors.items():
                    content = resolve(selector, pos, prefix == "header")
                    if content == "none":
                        continue
                    if prefix == "header":
                        line = "border-bottom: 0.5pt solid #ccc;" if hf.header_line else ""
                        out.append(f"  @top-{pos} {{ content: {content}; font-family: {header_font}; "
                                   f"font-size: {hf.header_font_size}pt; {header_style} color: #555; "
                                   f"vertical-align: bottom; padding-bottom: 0.2in; {line} }}")
                    else:
                        line = "border-top: 0.5pt solid #ccc;" if hf.footer_line else ""
                        out.append(f"  @{edge}-{pos} {{ content: {content}; font-family: {footer_font}; "
                                   f"font-size: {hf.footer_font_size}pt; color: #555; "
                                   f"vertical-align: top; padding-top: 0.12in; {line} }}")
            return "\n".join(out)

        none_boxes = "\n".join(f"  @{box} {{ content: none; }}" for box in MARGIN_BOXES)
        if fm_counter and hf.footer_enabled:
            fm_footer = (f"  @bottom-center {{ content: counter(page, {fm_counter}); "
                         f"font-family: {footer_font}; font-size: {hf.footer_font_size}pt; color: #555; }}")
        else:
            fm_footer = "  @bottom-center { content: none; }"

        # Opening pages of bound sections: no running heads, page number per setting
        opener_rules = []
        for section in document.sections:
            if section.role in (PageRole.BODY, PageRole.BACK_MATTER) and section.anchor:
                hidden = [f"  @top-{pos} {{ content: none; }}" for pos in ("left", "center", "right")]
                if not hf.first_page_number_visible:
                    hidden += [f"  @bottom-{pos} {{ content: none; }}" for pos in ("left", "center", "right")]
                opener_rules.append(f"@page {_page_name(section)}:first {{\n" + "\n".join(hidden) + "\n}")
        named_pages = "\n".join(
            f"#{s.anchor} {{ page: {_page_name(s)}; }}"
            for s in document.sections
            if s.role in (PageRole.BODY, PageRole.BACK_MATTER) and s.anchor and s.kind != SectionKind.BACK_COVER
        )

        css = f"""
/* ====================== PAGE RULES ====================== */

@page {{
  size: {geometry.width}in {geometry.height}in;
  margin: {geometry.margin_top}in {geometry.outside}in {geometry.margin_bottom}in {geometry.inside}in;
  {"marks: crop cross;" if show_marks else ""}
  {f"bleed: {geometry.bleed}in;" if show_bleed else ""}
}}

@page :right {{
  margin-left: {geometry.inside}in;
  margin-right: {geometry.outside}in;
{boxes("right")}
}}

@page :left {{
  margin-left: {geometry.outside if geometry.mirror_margins else geometry.inside}in;
  margin-right: {geometry.inside if geometry.mirror_margins else geometry.outside}in;
{boxes("left")}
}}

/* Blank pages (inserted by break-before: right) */
@page :blank {{
{none_boxes}
}}

@page coverPage {{
  margin: 0;
  marks: none;
{none_boxes}
}}

@page frontMatterPage {{
  margin: {geometry.margin_top}in {geometry.outside}in {geometry.margin_bottom}in {geometry.inside}in;
  marks: none;
  @top-left {{ content: none; }}
  @top-center {{ content: none; }}
  @top-right {{ content: none; }}
  @bottom-left {{ content: none; }}
{fm_footer}
  @bottom-right {{ content: none; }}
}}

@page frontMatterPage:left {{
  margin-left: {geometry.outside}in;
  margin-right: {geometry.inside}in;
}}

@page frontMatterPage:right {{
  margin-left: {geometry.inside}in;
  margin-right: {geometry.outside}in;
}}

@page frontMatterPage:blank {{
{none_boxes}
}}

{chr(10).join(opener_rules)}

{named_pages}

/* ====================== BASE TYPOGRAPHY ====================== */

*, *::before, *::after {{ box-sizing: border-box; }}

body {{
  margin: 0;
  padding: 0;
  font-family: {body_font};
  font-size: {typo.body_font_size}pt;
  line-height: {typo.body_line_height};
  color: #1a1a1a;
  text-align: {typo.body_alignment};
  {"text-align-last: left;" if typo.body_alignment == "justify" else ""}
  overflow-wrap: break-word;
  {"hyphens: auto; -webkit-hyphens: auto;" if typo.hyphenation else ""}
  {"orphans: 2;" if typo.orphan_control else ""}
  {"widows: 2;" if typo.widow_control else ""}
}}

p {{
  margin: 0 0 {spacing} 0;
  text-indent: {indent};
}}

{"" if typo.first_paragraph_indent else "p.first, h1 + p, h2 + p, .scene-break + p { text-indent: 0; }"}

{f'''p.drop-cap::first-letter {{
  float: left;
  font-family: {drop_cap_font};
  font-size: {typo.drop_cap_lines * 1.2}em;
  line-height: 0.8;
  padding-right: 0.08em;
}}''' if typo.drop_cap_enabled else ""}

h1, h2, h3 {{
  font-family: {heading_font};
  break-after: avoid;
}}
h1 {{ font-size: {typo.section_heading_size}pt; font-weight: normal; text-align: {typo.heading_alignment}; margin-bottom: 0.8em; }}

/* ====================== COVER ====================== */

.cover-wrapper {{
  page: coverPage;
  overflow: hidden;
}}
.cover-wrapper img {{
  width: {geometry.width}in;
  height: {geometry.height}in;
  object-fit: cover;
  display: block;
}}
.cover-wrapper.text-cover {{
  display: flex;
  flex-direction: column;
  justify-content: center;
  align-items: center;
  text-align: center;
  width: {geometry.width}in;
  height: {geometry.height}in;
  background: #2c3e50;
  color: white;
}}
.cover-title {{ font-family: {heading_font}; font-size: 2.8em; font-weight: normal; margin-bottom: 0.5em; }}
.cover-author {{ font-size: 1.4em; font-style: italic; text-indent: 0; }}
.cover-genre {{ font-size: 0.9em; text-transform: uppercase; letter-spacing: 0.2em; margin-top: 2em; text-indent: 0; }}

/* ====================== FRONT MATTER ====================== */

.front-matter {{ page: frontMatterPage; }}
.front-matter > section {{ break-before: page; }}
.front-matter > section:first-child {{ break-before: auto; }}
.front-matter p {{ text-indent: 0; }}

.fm-half-title, .fm-title-page, .fm-copyright, .fm-dedication, .fm-epigraph {{
  text-align: center;
  text-align-last: center;
}}
.fm-half-title {{ padding-top: 35%; }}
.fm-title-page {{ padding-top: 1.2in; }}
.book-title {{ font-size: 2.2em; margin-bottom: 0.3em; }}
.book-author {{ font-size: 1.2em; font-style: italic; margin-bottom: 1em; }}
.novel-label {{ font-size: 0.9em; font-style: italic; }}
.book-genre, .book-publisher {{ font-size: 0.85em; text-transform: uppercase; letter-spacing: 0.15em; color: #666; }}
.book-description {{ font-size: 0.78em; font-style: italic; max-width: 80%; margin: 1em auto 0; }}
.fm-copyright {{ font-size: 0.78em; line-height: 1.75; padding-top: 45%; }}
.copyright-title {{ font-weight: 600; font-size: 1.15em; }}
.copyright-author {{ font-style: italic; }}
.copyright-spacer {{ height: 0.9em; }}
.copyright-legal {{ color: #555; max-width: 88%; margin-left: auto; margin-right: auto; }}
.copyright-publisher {{ font-variant: small-caps; }}
.fm-dedication {{ padding-top: 30%; font-style: italic; }}
.fm-epigraph {{ padding-top: 30%; }}
.fm-toc h1 {{ text-align: center; font-size: 1.4em; letter-spacing: 0.15em; text-transform: uppercase; margin-bottom: 2.5em; }}

/* ====================== TABLE OF CONTENTS ====================== */

.toc-list {{ list-style: none; padding: 0; margin: 0; }}
.toc-item {{ margin-bottom: 0.75em; break-inside: avoid; overflow: hidden; }}
.toc-item a {{ color: inherit; text-decoration: none; display: block; }}
.toc-label {{ font-size: 0.82em; text-transform: uppercase; letter-spacing: 0.08em; color: #666; margin-right: 0.6em; }}
.toc-title {{ font-style: italic; }}
.toc-page {{ float: right; }}

@media print {{
  .toc-item a .toc-page {{ display: none; }}
  .toc-item a::after {{
    content: target-counter(attr(href), page);
    float: right;
    min-width: 1.5em;
    text-align: right;
  }}
}}

/* ====================== CHAPTERS ====================== */

.running-title {{ string-set: running-title content(text); }}
.running-author {{ string-set: running-author content(text); }}
.running-chapter {{ string-set: chapter-title content(text); }}
.running-header-data {{ display: block; height: 0; overflow: hidden; font-size: 0; line-height: 0; margin: 0; }}

.book-content {{ counter-reset: page 1; }}
.chapter {{ break-before: page; }}
.recto {{ break-before: right; }}

.chapter-header {{
  text-align: {title_align};
  padding-top: {cs.chapter_drop_from_top}in;
  margin-bottom: {cs.after_chapter_title_space}in;
}}
.chapter-number-label {{ display: block; font-size: 0.75em; letter-spacing: 0.15em; text-transform: uppercase; color: #666; margin-bottom: 0.3em; }}
.chapter-number {{ display: block; font-family: {heading_font}; font-size: 2.2em; margin-bottom: 0.2em; }}
.chapter-title {{ font-family: {heading_font}; font-size: {typo.chapter_title_size}pt; font-weight: normal; text-align: {title_align}; }}
.chapter-ornament {{ text-align: center; font-size: 1.4em; margin: 0.8em 0; }}

.scene-break {{ text-align: center; margin: 1.8em 0; letter-spacing: 0.4em; color: #666; break-inside: avoid; }}

/* ====================== BACK MATTER ====================== */

.back-matter > section {{ break-before: page; }}
.bibliography-entry {{ margin-bottom: 0.4em; text-align: left; text-indent: 0; }}
.bibliography-entry.hanging {{ text-indent: -1.5em; padding-left: 1.5em; }}
.about-author {{ text-align: center; padding-top: 25%; }}
.also-by {{ padding-top: 15%; }}

blockquote {{ font-style: italic; margin: 1.2em 1.5em; }}
blockquote p {{ text-indent: 0; }}
img {{ max-width: 100%; height: auto; }}
.break-before {{ break-before: page; }}
"""
        if html_export.responsive:
            css += """
@media screen {
  body { max-width: 40em; margin: 0 auto; padding: 1em; }
  .cover-wrapper, .cover-wrapper.text-cover { width: 100%; height: auto; min-height: 60vh; }
  .cover-wrapper img { width: 100%; height: auto; }
  .running-header-data { display: none; }
}
"""
        if html_export.dark_mode_support:
            css += """
@media screen and (prefers-color-scheme: dark) {
  body { background: #1a1a1a; color: #e6e6e6; }
  .toc-label, .chapter-number-label, .scene-break { color: #aaa; }
}
"""
        if settings.custom_css:
            css += f"\n/* Custom CSS */\n{settings.custom_css}\n"
        return css

    @classmethod
    def supports_format(cls, format_name: str) -> bool:
        return format_name.lower().lstrip(".") in ("html", "htm")

    @classmethod
    def get_supported_formats(cls) -> List[str]:
        return ["html"]


def _page_name(section: Section) -> str:
    return f"section-{section.anchor}"


def _css_string(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')
