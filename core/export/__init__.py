"""
Unpaginated exports (plain text, Markdown).

Paginated formats live in core.layout.renderer.
"""

from .text_export import export_markdown, export_plain_text

__all__ = [
    "export_markdown",
    "export_plain_text",
]
