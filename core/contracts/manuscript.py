#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Manuscript Input Contract

Defines the book handed to the publishing pipeline: metadata, ordered
chapters, optional bibliography and the raw publishing settings document.
The pipeline reads it and never mutates it.

Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .base import BaseContract
from core.shared.keys import snake_keys
from core.bibliography.models import Bibliography


# Front/back matter sections that can carry author-supplied text
MATTER_SECTIONS = (
    "dedication", "epigraph", "foreword", "preface", "acknowledgments", "introduction",
    "epilogue", "afterword", "appendices", "glossary", "about-author",
    "book-club-questions", "excerpt",
)


@dataclass
class Chapter:
    """One chapter of raw manuscript text"""
    number: int
    title: str = ""
    content: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "title": self.title,
            "content": self.content,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Chapter':
        number = data.get("number")
        try:
            number = int(number)
        except (TypeError, ValueError):
            pass
        return cls(
            number=number,
            title=data.get("title") or "",
            content=data.get("content") or "",
        )


@dataclass
class Manuscript(BaseContract):
    """
    Complete book input.

    ``publishing_settings`` stays a plain (camelCase or snake_case) document;
    it is resolved into PublishingSettings once per export.
    """

    title: str = ""
    author: str = ""
    chapters: Optional[List[Chapter]] = field(default_factory=list)
    description: Optional[str] = None
    genre: Optional[str] = None
    bibliography: Optional[Bibliography] = None
    publishing_settings: Optional[Dict[str, Any]] = None

    # Cover art: local path or remote URL
    cover_image: Optional[str] = None
    cover_url: Optional[str] = None
    back_cover_image: Optional[str] = None
    back_cover_url: Optional[str] = None

    # Optional text for front/back matter pages, keyed by section id
    matter: Dict[str, str] = field(default_factory=dict)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "title": self.title,
            "author": self.author,
            "chapters": [c.to_dict() for c in (self.chapters or [])],
        }
        optional = {
            "description": self.description,
            "genre": self.genre,
            "bibliography": self.bibliography.to_dict() if self.bibliography else None,
            "publishing_settings": self.publishing_settings,
            "cover_image": self.cover_image,
            "cover_url": self.cover_url,
            "back_cover_image": self.back_cover_image,
            "back_cover_url": self.back_cover_url,
            "matter": dict(self.matter) if self.matter else None,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Manuscript':
        data = snake_keys(data)

        chapters = data.get("chapters")
        if chapters is not None:
            chapters = [
                c if isinstance(c, Chapter) else Chapter.from_dict(c)
                for c in chapters
            ]

        bibliography = data.get("bibliography")
        if bibliography is not None:
            bibliography = Bibliography.from_dict(bibliography)

        return cls(
            title=data.get("title") or "",
            author=data.get("author") or "",
            chapters=chapters,
            description=data.get("description"),
            genre=data.get("genre"),
            bibliography=bibliography,
            publishing_settings=data.get("publishing_settings"),
            cover_image=data.get("cover_image"),
            cover_url=data.get("cover_url"),
            back_cover_image=data.get("back_cover_image"),
            back_cover_url=data.get("back_cover_url"),
            matter={str(k): str(v) for k, v in (data.get("matter") or {}).items() if v},
        )

    # =========================================================================
    # Validation
    # =========================================================================

    def validate(self) -> List[str]:
        """Fatal preconditions only; everything else degrades gracefully."""
        errors = []

        if not self.title or not str(self.title).strip():
            errors.append("title is required")
        if not self.author or not str(self.author).strip():
            errors.append("author is required")
        if self.chapters is None:
            errors.append("chapters are required")
            return errors

        for i, chapter in enumerate(self.chapters):
            if not isinstance(chapter, Chapter):
                errors.append(f"chapters[{i}] is not a chapter")
            elif isinstance(chapter.number, bool) or not isinstance(chapter.number, int) \
                    or chapter.number < 1:
                errors.append(f"chapters[{i}].number must be a positive integer")

        return errors

    # =========================================================================
    # Convenience
    # =========================================================================

    @property
    def has_bibliography(self) -> bool:
        return bool(self.bibliography and self.bibliography.is_active)

    @property
    def cover_source(self) -> Optional[str]:
        """Local cover path first, then URL"""
        return self.cover_image or self.cover_url

    @property
    def back_cover_source(self) -> Optional[str]:
        return self.back_cover_image or self.back_cover_url

    def matter_text(self, section: str) -> str:
        return (self.matter or {}).get(section, "")

    def get_chapter(self, number: int) -> Optional[Chapter]:
        for chapter in self.chapters or []:
            if chapter.number == number:
                return chapter
        return None
