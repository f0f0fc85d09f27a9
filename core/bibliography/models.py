#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Bibliography Models - References, authors and bibliography configuration.

Handles:
- Author names (personal or organization)
- 20 reference variants sharing a common base
- Citation style / reference type enums
- Bibliography configuration and in-text citation markers

Stored documents use camelCase keys; every from_dict() accepts both spellings.

Version: 1.0.0
"""

import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Type

from core.shared.keys import snake_keys

logger = logging.getLogger(__name__)


class CitationStyle(str, Enum):
    """Supported citation styles"""
    APA = "APA"
    MLA = "MLA"
    CHICAGO = "Chicago"
    HARVARD = "Harvard"
    IEEE = "IEEE"
    VANCOUVER = "Vancouver"
    AMA = "AMA"

    @classmethod
    def parse(cls, value: Any) -> "CitationStyle":
        """Case-insensitive lookup; unknown values fall back to APA."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        if text:
            logger.debug(f"Unknown citation style {value!r}, using APA")
        return cls.APA


class ReferenceType(str, Enum):
    """Reference variants"""
    BOOK = "book"
    JOURNAL = "journal"
    WEBSITE = "website"
    NEWSPAPER = "newspaper"
    MAGAZINE = "magazine"
    CONFERENCE = "conference"
    THESIS = "thesis"
    REPORT = "report"
    PATENT = "patent"
    VIDEO = "video"
    PODCAST = "podcast"
    INTERVIEW = "interview"
    GOVERNMENT = "government"
    LEGAL = "legal"
    SOFTWARE = "software"
    DATASET = "dataset"
    PRESENTATION = "presentation"
    MANUSCRIPT = "manuscript"
    ARCHIVE = "archive"
    PERSONAL = "personal"


REFERENCE_TYPE_LABELS = {
    ReferenceType.BOOK: "Book",
    ReferenceType.JOURNAL: "Journal Article",
    ReferenceType.WEBSITE: "Website",
    ReferenceType.NEWSPAPER: "Newspaper Article",
    ReferenceType.MAGAZINE: "Magazine Article",
    ReferenceType.CONFERENCE: "Conference Paper",
    ReferenceType.THESIS: "Thesis/Dissertation",
    ReferenceType.REPORT: "Report",
    ReferenceType.PATENT: "Patent",
    ReferenceType.VIDEO: "Video",
    ReferenceType.PODCAST: "Podcast",
    ReferenceType.INTERVIEW: "Interview",
    ReferenceType.GOVERNMENT: "Government Document",
    ReferenceType.LEGAL: "Legal Document",
    ReferenceType.SOFTWARE: "Software",
    ReferenceType.DATASET: "Dataset",
    ReferenceType.PRESENTATION: "Presentation",
    ReferenceType.MANUSCRIPT: "Manuscript",
    ReferenceType.ARCHIVE: "Archival Material",
    ReferenceType.PERSONAL: "Personal Communication",
}


# =============================================================================
# AUTHORS
# =============================================================================

@dataclass
class Author:
    """A personal author, or an organization used verbatim."""
    last_name: str = ""
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    suffix: Optional[str] = None
    organization: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in {
            "last_name": self.last_name,
            "first_name": self.first_name,
            "middle_name": self.middle_name,
            "suffix": self.suffix,
            "organization": self.organization,
        }.items() if v is not None}

    @classmethod
    def from_dict(cls, data: Any) -> "Author":
        if isinstance(data, Author):
            return data
        if isinstance(data, str):
            return cls(organization=data)
        data = snake_keys(data)
        return cls(
            last_name=str(data.get("last_name") or ""),
            first_name=data.get("first_name") or None,
            middle_name=data.get("middle_name") or None,
            suffix=data.get("suffix") or None,
            organization=data.get("organization") or None,
        )

    @property
    def sort_name(self) -> str:
        return self.last_name or self.organization or ""

    @property
    def citation_name(self) -> str:
        """Name used in in-text citations"""
        return self.organization or self.last_name


def _authors(value: Any) -> List[Author]:
    if not value:
        return []
    if not isinstance(value, (list, tuple)):
        value = [value]
    return [Author.from_dict(item) for item in value]


def _author(value: Any) -> Optional[Author]:
    if not value:
        return None
    return Author.from_dict(value)


def _year(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(str(value).strip()[:4])
    except (TypeError, ValueError):
        return None


# =============================================================================
# REFERENCES
# =============================================================================

# Fields holding a list of authors / a single author, per variant
_AUTHOR_LIST_FIELDS = {"authors", "editors", "translators", "producers", "hosts", "guests"}
_AUTHOR_FIELDS = {"advisor", "director", "interviewee", "interviewer", "recipient"}


@dataclass
class Reference:
    """Fields shared by every reference variant."""
    id: str = ""
    type: str = ""
    title: str = ""
    authors: List[Author] = field(default_factory=list)
    year: Optional[int] = None
    access_date: Optional[str] = None
    url: Optional[str] = None
    doi: Optional[str] = None
    notes: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    citation_key: Optional[str] = None

    TYPE: ClassVar[Optional[ReferenceType]] = None

    def __post_init__(self):
        if self.TYPE is not None and not self.type:
            self.type = self.TYPE.value

    @property
    def reference_type(self) -> Optional[ReferenceType]:
        try:
            return ReferenceType(self.type)
        except ValueError:
            return None

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name in _AUTHOR_LIST_FIELDS:
                value = [a.to_dict() for a in value]
            elif f.name in _AUTHOR_FIELDS:
                value = value.to_dict()
            result[f.name] = value
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Reference":
        data = snake_keys(data)
        kwargs = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if f.name in _AUTHOR_LIST_FIELDS:
                value = _authors(value)
            elif f.name in _AUTHOR_FIELDS:
                value = _author(value)
            elif f.name == "year":
                value = _year(value)
            elif f.name == "tags":
                value = list(value or [])
            elif f.name in ("id", "title", "type"):
                value = "" if value is None else str(value)
            kwargs[f.name] = value
        return cls(**kwargs)


@dataclass
class BookReference(Reference):
    TYPE = ReferenceType.BOOK
    edition: Optional[str] = None
    volume: Optional[str] = None
    publisher: Optional[str] = None
    publisher_location: Optional[str] = None
    isbn: Optional[str] = None
    pages: Optional[str] = None
    editors: List[Author] = field(default_factory=list)
    translators: List[Author] = field(default_factory=list)
    series: Optional[str] = None
    series_number: Optional[str] = None


@dataclass
class JournalReference(Reference):
    TYPE = ReferenceType.JOURNAL
    journal_title: Optional[str] = None
    volume: Optional[str] = None
    issue: Optional[str] = None
    pages: Optional[str] = None
    issn: Optional[str] = None
    publisher: Optional[str] = None
    article_number: Optional[str] = None


@dataclass
class WebsiteReference(Reference):
    TYPE = ReferenceType.WEBSITE
    website_name: Optional[str] = None
    publisher: Optional[str] = None
    publication_date: Optional[str] = None
    retrieved_date: Optional[str] = None


@dataclass
class NewspaperReference(Reference):
    TYPE = ReferenceType.NEWSPAPER
    newspaper_name: Optional[str] = None
    publication_date: Optional[str] = None
    pages: Optional[str] = None
    section: Optional[str] = None
    edition: Optional[str] = None
    city: Optional[str] = None


@dataclass
class MagazineReference(Reference):
    TYPE = ReferenceType.MAGAZINE
    magazine_name: Optional[str] = None
    volume: Optional[str] = None
    issue: Optional[str] = None
    publication_date: Optional[str] = None
    pages: Optional[str] = None


@dataclass
class ConferenceReference(Reference):
    TYPE = ReferenceType.CONFERENCE
    conference_name: Optional[str] = None
    conference_location: Optional[str] = None
    conference_date: Optional[str] = None
    proceedings: Optional[str] = None
    pages: Optional[str] = None
    publisher: Optional[str] = None
    editors: List[Author] = field(default_factory=list)


@dataclass
class ThesisReference(Reference):
    TYPE = ReferenceType.THESIS
    thesis_type: Optional[str] = None     # PhD | Masters | Bachelors | Other
    institution: Optional[str] = None
    department: Optional[str] = None
    location: Optional[str] = None
    advisor: Optional[Author] = None


@dataclass
class ReportReference(Reference):
    TYPE = ReferenceType.REPORT
    report_type: Optional[str] = None
    report_number: Optional[str] = None
    institution: Optional[str] = None
    location: Optional[str] = None
    sponsor: Optional[str] = None


@dataclass
class PatentReference(Reference):
    TYPE = ReferenceType.PATENT
    patent_number: Optional[str] = None
    country: Optional[str] = None
    filing_date: Optional[str] = None
    issue_date: Optional[str] = None
    assignee: Optional[str] = None


@dataclass
class VideoReference(Reference):
    TYPE = ReferenceType.VIDEO
    platform: Optional[str] = None
    duration: Optional[str] = None
    director: Optional[Author] = None
    producers: List[Author] = field(default_factory=list)
    studio: Optional[str] = None
    release_date: Optional[str] = None


@dataclass
class PodcastReference(Reference):
    TYPE = ReferenceType.PODCAST
    podcast_name: Optional[str] = None
    episode_number: Optional[str] = None
    hosts: List[Author] = field(default_factory=list)
    guests: List[Author] = field(default_factory=list)
    duration: Optional[str] = None
    network: Optional[str] = None
    release_date: Optional[str] = None


@dataclass
class InterviewReference(Reference):
    TYPE = ReferenceType.INTERVIEW
    interviewee: Optional[Author] = None
    interviewer: Optional[Author] = None
    interview_date: Optional[str] = None
    location: Optional[str] = None
    medium: Optional[str] = None
    transcript: Optional[bool] = None


@dataclass
class GovernmentReference(Reference):
    TYPE = ReferenceType.GOVERNMENT
    department: Optional[str] = None
    country: Optional[str] = None
    document_number: Optional[str] = None
    publication_type: Optional[str] = None
    congress: Optional[str] = None
    session: Optional[str] = None


@dataclass
class LegalReference(Reference):
    TYPE = ReferenceType.LEGAL
    case_title: Optional[str] = None
    court: Optional[str] = None
    reporter: Optional[str] = None
    volume: Optional[str] = None
    pages: Optional[str] = None
    decision_date: Optional[str] = None
    docket_number: Optional[str] = None


@dataclass
class SoftwareReference(Reference):
    TYPE = ReferenceType.SOFTWARE
    version: Optional[str] = None
    publisher: Optional[str] = None
    platform: Optional[str] = None
    programming_language: Optional[str] = None
    repository: Optional[str] = None
    license: Optional[str] = None


@dataclass
class DatasetReference(Reference):
    TYPE = ReferenceType.DATASET
    version: Optional[str] = None
    publisher: Optional[str] = None
    repository: Optional[str] = None
    data_type: Optional[str] = None
    file_format: Optional[str] = None
    size: Optional[str] = None


@dataclass
class PresentationReference(Reference):
    TYPE = ReferenceType.PRESENTATION
    presentation_type: Optional[str] = None
    venue: Optional[str] = None
    location: Optional[str] = None
    presentation_date: Optional[str] = None
    slides: Optional[str] = None


@dataclass
class ManuscriptReference(Reference):
    TYPE = ReferenceType.MANUSCRIPT
    manuscript_type: Optional[str] = None
    institution: Optional[str] = None
    location: Optional[str] = None


@dataclass
class ArchiveReference(Reference):
    TYPE = ReferenceType.ARCHIVE
    archive_name: Optional[str] = None
    archive_location: Optional[str] = None
    collection_name: Optional[str] = None
    collection_number: Optional[str] = None
    box_number: Optional[str] = None
    folder_number: Optional[str] = None
    item_number: Optional[str] = None


@dataclass
class PersonalReference(Reference):
    TYPE = ReferenceType.PERSONAL
    communication_type: Optional[str] = None
    recipient: Optional[Author] = None
    communication_date: Optional[str] = None


REFERENCE_CLASSES: Dict[ReferenceType, Type[Reference]] = {
    cls.TYPE: cls for cls in (
        BookReference, JournalReference, WebsiteReference, NewspaperReference,
        MagazineReference, ConferenceReference, ThesisReference, ReportReference,
        PatentReference, VideoReference, PodcastReference, InterviewReference,
        GovernmentReference, LegalReference, SoftwareReference, DatasetReference,
        PresentationReference, ManuscriptReference, ArchiveReference, PersonalReference,
    )
}


def reference_from_dict(data: Any) -> Reference:
    """
    Build the reference variant named by the ``type`` tag.

    Unknown tags produce a plain Reference, which formats with the generic
    "{title} ({year})" fallback.
    """
    if isinstance(data, Reference):
        return data
    data = snake_keys(data)
    tag = str(data.get("type") or "").strip().lower()
    try:
        cls = REFERENCE_CLASSES[ReferenceType(tag)]
        data["type"] = tag
    except ValueError:
        logger.debug(f"Unknown reference type {tag!r}, using generic reference")
        cls = Reference
    return cls.from_dict(data)


# =============================================================================
# CITATIONS & CONFIG
# =============================================================================

@dataclass
class InTextCitation:
    """A citation marker placed inside chapter text."""
    id: str = ""
    reference_id: str = ""
    chapter_id: Optional[int] = None
    position: Optional[int] = None
    page_number: Optional[str] = None
    paragraph: Optional[int] = None
    quotation: Optional[str] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    suppress_author: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)
                if getattr(self, f.name) is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InTextCitation":
        data = snake_keys(data)
        names = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in names}
        for key in ("id", "reference_id"):
            if key in kwargs:
                kwargs[key] = str(kwargs[key])
        if kwargs.get("page_number") is not None:
            kwargs["page_number"] = str(kwargs["page_number"])
        kwargs["suppress_author"] = bool(kwargs.get("suppress_author", False))
        return cls(**kwargs)


SORT_KEYS = ("author", "date", "title", "type", "appearance")
NUMBERING_STYLES = ("none", "numeric", "alphabetic")
REFERENCE_LOCATIONS = ("bibliography", "endnote", "footnote", "in-text")


@dataclass
class BibliographyConfig:
    """How the bibliography is styled and placed."""
    enabled: bool = False
    citation_style: CitationStyle = CitationStyle.APA
    location: List[str] = field(default_factory=lambda: ["bibliography"])
    sort_by: str = "author"
    sort_direction: str = "asc"
    include_annotations: bool = False
    include_abstracts: bool = False
    hanging_indent: bool = True
    line_spacing: str = "single"
    group_by_type: bool = False
    numbering_style: str = "none"
    show_doi: bool = True
    show_url: bool = True
    show_access_date: bool = True

    def to_dict(self) -> Dict[str, Any]:
        result = {f.name: getattr(self, f.name) for f in fields(self)}
        result["citation_style"] = self.citation_style.value
        result["location"] = list(self.location)
        return result

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "BibliographyConfig":
        data = snake_keys(data or {})
        config = cls()
        for f in fields(cls):
            if f.name in data and data[f.name] is not None:
                setattr(config, f.name, data[f.name])

        config.citation_style = CitationStyle.parse(config.citation_style)
        if config.sort_by not in SORT_KEYS:
            config.sort_by = "author"
        if config.sort_direction not in ("asc", "desc"):
            config.sort_direction = "asc"
        if config.numbering_style not in NUMBERING_STYLES:
            config.numbering_style = "none"
        if isinstance(config.location, str):
            config.location = [config.location]
        config.location = [loc for loc in config.location if loc in REFERENCE_LOCATIONS]
        for flag in ("enabled", "include_annotations", "include_abstracts", "hanging_indent",
                     "group_by_type", "show_doi", "show_url", "show_access_date"):
            setattr(config, flag, bool(getattr(config, flag)))
        return config


@dataclass
class Bibliography:
    """References and citations attached to a manuscript."""
    config: BibliographyConfig = field(default_factory=BibliographyConfig)
    references: List[Reference] = field(default_factory=list)
    citations: List[InTextCitation] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        """True when the bibliography should be printed"""
        return bool(self.config.enabled and self.references)

    def get_reference(self, reference_id: str) -> Optional[Reference]:
        for reference in self.references:
            if reference.id == reference_id:
                return reference
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "config": self.config.to_dict(),
            "references": [r.to_dict() for r in self.references],
            "citations": [c.to_dict() for c in self.citations],
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Bibliography":
        if isinstance(data, Bibliography):
            return data
        data = snake_keys(data or {})
        return cls(
            config=BibliographyConfig.from_dict(data.get("config")),
            references=[reference_from_dict(r) for r in data.get("references") or []],
            citations=[InTextCitation.from_dict(c) for c in data.get("citations") or []],
        )
