#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Citation Formatter - Reference strings for seven citation styles.

Handles:
- Author names per style (initials, inverted names, organizations)
- Author-list joining with per-style truncation ("et al.", APA ellipsis)
- Full bibliography entries for 20 reference types
- In-text citation markers (author-year, author-page, numeric)

Italic spans are emitted as <em>...</em>; renderers translate or strip them.
Formatters never raise on missing optional fields: absent values print as
empty strings and a missing year prints as "n.d.".

Version: 1.0.0
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence

from .models import (
    Author,
    Bibliography,
    CitationStyle,
    InTextCitation,
    REFERENCE_CLASSES,
    Reference,
    ReferenceType,
)
from .sorting import sort_references

logger = logging.getLogger(__name__)

NO_DATE = "n.d."

_INITIALS_STYLES = (CitationStyle.APA, CitationStyle.HARVARD,
                    CitationStyle.VANCOUVER, CitationStyle.AMA)


def _s(value) -> str:
    """None-safe string"""
    return "" if value is None else str(value)


def _initials(*names: Optional[str]) -> str:
    return " ".join(name.strip()[0].upper() + "." for name in names if name and name.strip())


def _with_suffix(name: str, suffix: Optional[str]) -> str:
    return f"{name}, {suffix}" if suffix else name


# =============================================================================
# AUTHORS
# =============================================================================

def format_author(author: Author, style, is_first: bool = True) -> str:
    """
    Format one author name.

    APA/Harvard/Vancouver/AMA: "Last, F. M."
    MLA: "Last, First Middle" for the first author, "First Middle Last" after
    Chicago: "Last, First Middle"
    IEEE: "F. M. Last"
    Organizations are returned verbatim in every style.
    """
    if author.organization:
        return author.organization

    style = CitationStyle.parse(style)
    last = _s(author.last_name).strip()
    given = " ".join(n for n in (author.first_name, author.middle_name) if n).strip()

    if style in _INITIALS_STYLES:
        initials = _initials(author.first_name, author.middle_name)
        name = f"{last}, {initials}" if initials else last
    elif style == CitationStyle.IEEE:
        initials = _initials(author.first_name, author.middle_name)
        name = f"{initials} {last}".strip()
    elif style == CitationStyle.MLA and not is_first:
        name = f"{given} {last}".strip()
    else:
        # MLA first author and Chicago
        name = f"{last}, {given}" if given else last

    return _with_suffix(name, author.suffix).strip()


def format_authors(authors: Sequence[Author], style, max_authors: int = 999) -> str:
    """
    Join a list of authors with the style's conjunction and truncation rules.

    APA: "A & B", "A, B, & C"; more than 20 -> first 19, "...", last
    MLA: "A, and B"; more than 3 -> "A, et al."
    Chicago: "A and B"; more than 10 -> first 7, "et al."
    Harvard: "A and B", "A, B and C"; more than 3 -> "A et al."
    IEEE: comma list; more than 6 -> "A, et al."
    Vancouver/AMA: comma list; more than 6 -> first 6, "et al."
    """
    authors = list(authors or [])
    if not authors:
        return ""

    style = CitationStyle.parse(style)
    if len(authors) == 1:
        return format_author(authors[0], style)

    formatted = [
        format_author(author, style, index == 0)
        for index, author in enumerate(authors[:max_authors])
    ]
    count = len(authors)

    if style == CitationStyle.APA:
        if count > 20:
            return f"{', '.join(formatted[:19])}, ... {format_author(authors[-1], style)}"
        if count == 2:
            return f"{formatted[0]} & {formatted[1]}"
        return f"{', '.join(formatted[:-1])}, & {formatted[-1]}"

    if style == CitationStyle.MLA:
        if count > 3:
            return f"{formatted[0]}, et al."
        if count == 2:
            return f"{formatted[0]}, and {formatted[1]}"
        return f"{', '.join(formatted[:-1])}, and {formatted[-1]}"

    if style == CitationStyle.CHICAGO:
        if count > 10:
            return f"{', '.join(formatted[:7])}, et al."
        if count == 2:
            return f"{formatted[0]} and {formatted[1]}"
        return f"{', '.join(formatted[:-1])}, and {formatted[-1]}"

    if style == CitationStyle.HARVARD:
        if count > 3:
            return f"{formatted[0]} et al."
        if count == 2:
            return f"{formatted[0]} and {formatted[1]}"
        return f"{', '.join(formatted[:-1])} and {formatted[-1]}"

    if style == CitationStyle.IEEE:
        if count > 6:
            return f"{formatted[0]}, et al."
        return ", ".join(formatted)

    # Vancouver / AMA
    if count > 6:
        return f"{', '.join(formatted[:6])}, et al."
    return ", ".join(formatted)


# =============================================================================
# IN-TEXT CITATIONS
# =============================================================================

def format_in_text_citation(reference: Reference, citation: Optional[InTextCitation], style) -> str:
    """
    Format the marker placed in running text.

    APA/Harvard: (Author, Year[, p. N])
    MLA: (Author[ N]); untitled works use the first three title words in quotes
    Chicago/Vancouver/AMA: superscript citation id
    IEEE: [id]
    """
    style = CitationStyle.parse(style)
    citation = citation or InTextCitation()
    authors = reference.authors or []
    year = reference.year or NO_DATE
    page = citation.page_number

    if style in (CitationStyle.APA, CitationStyle.HARVARD):
        if not authors:
            return f"({reference.title}, {year})"
        if len(authors) == 1:
            names = authors[0].citation_name
        elif len(authors) == 2:
            names = " & ".join(a.citation_name for a in authors)
        else:
            names = f"{authors[0].citation_name} et al."
        if page:
            return f"({names}, {year}, p. {page})"
        return f"({names}, {year})"

    if style == CitationStyle.MLA:
        if not authors:
            short_title = " ".join(_s(reference.title).split(" ")[:3])
            return f'("{short_title}" {page})' if page else f'("{short_title}")'
        if len(authors) == 1:
            names = authors[0].citation_name
        elif len(authors) == 2:
            names = " and ".join(a.citation_name for a in authors)
        else:
            names = f"{authors[0].citation_name} et al."
        return f"({names} {page})" if page else f"({names})"

    if style == CitationStyle.IEEE:
        return f"[{citation.id}]"

    # Chicago footnotes, Vancouver and AMA numbering
    return f"<sup>{citation.id}</sup>"


# =============================================================================
# FULL REFERENCES
# =============================================================================

def _book(ref, style, index):
    authors = format_authors(ref.authors, style)
    year = ref.year or NO_DATE
    title = _s(ref.title)
    edition = f" ({ref.edition})" if ref.edition else ""
    volume = f", Vol. {ref.volume}" if ref.volume else ""
    publisher = _s(ref.publisher)
    location = f"{ref.publisher_location}: " if ref.publisher_location else ""

    if style == CitationStyle.APA:
        doi = f" https://doi.org/{ref.doi}" if ref.doi else ""
        return f"{authors} ({year}). <em>{title}</em>{edition}{volume}. {publisher}.{doi}"
    if style == CitationStyle.MLA:
        editors = f", edited by {format_authors(ref.editors, style)}" if ref.editors else ""
        return f"{authors}. <em>{title}</em>{editors}{edition}{volume}. {publisher}, {year}."
    if style == CitationStyle.CHICAGO:
        return f"{authors}. <em>{title}</em>{edition}{volume}. {location}{publisher}, {year}."
    if style == CitationStyle.HARVARD:
        return f"{authors} {year}. <em>{title}</em>{edition}{volume}. {location}{publisher}."
    if style == CitationStyle.IEEE:
        return f"[{index}] {authors}, <em>{title}</em>{edition}{volume}. {location}{publisher}, {year}."
    return f"{index}. {authors}. {title}{edition}{volume}. {location}{publisher}; {year}."


def _journal(ref, style, index):
    authors = format_authors(ref.authors, style)
    year = ref.year or NO_DATE
    title = _s(ref.title)
    journal = _s(ref.journal_title)
    volume = _s(ref.volume)
    issue = f"({ref.issue})" if ref.issue else ""
    number = ref.issue or "?"
    pages = _s(ref.pages)

    if style == CitationStyle.APA:
        doi = f" https://doi.org/{ref.doi}" if ref.doi else ""
        return f"{authors} ({year}). {title}. <em>{journal}</em>, <em>{volume}</em>{issue}, {pages}.{doi}"
    if style == CitationStyle.MLA:
        return f'{authors}. "{title}." <em>{journal}</em>, vol. {volume}, no. {number}, {year}, pp. {pages}.'
    if style == CitationStyle.CHICAGO:
        return f'{authors}. "{title}." <em>{journal}</em> {volume}, no. {number} ({year}): {pages}.'
    if style == CitationStyle.HARVARD:
        return f"{authors} {year}. '{title}', <em>{journal}</em>, {volume}{issue}, pp. {pages}."
    if style == CitationStyle.IEEE:
        return (f'[{index}] {authors}, "{title}," <em>{journal}</em>, '
                f"vol. {volume}, no. {number}, pp. {pages}, {year}.")
    return f"{index}. {authors}. {title}. {journal}. {year};{volume}{issue}:{pages}."


def _website(ref, style, index):
    website = ref.website_name
    authors = format_authors(ref.authors, style) if ref.authors else (website or "Unknown")
    year = ref.year or ref.publication_date or NO_DATE
    title = _s(ref.title)
    url = _s(ref.url)
    retrieved = _s(ref.retrieved_date)

    if style == CitationStyle.APA:
        site = f"{website}. " if website else ""
        return f"{authors} ({year}). <em>{title}</em>. {site}Retrieved {retrieved} from {url}"
    if style == CitationStyle.MLA:
        return f'{authors}. "{title}." <em>{website or "Web"}</em>, {year}, {url}. Accessed {retrieved}.'
    if style == CitationStyle.CHICAGO:
        site = f"<em>{website}</em>. " if website else ""
        return f'{authors}. "{title}." {site}Accessed {retrieved}. {url}.'
    if style == CitationStyle.HARVARD:
        site = f"{website}. " if website else ""
        return f"{authors} {year}. {title}. [online] {site}Available at: {url} [Accessed {retrieved}]."
    if style == CitationStyle.IEEE:
        return (f'[{index}] {authors}, "{title}," {website or "Website"}, {year}. '
                f"[Online]. Available: {url}. [Accessed: {retrieved}].")
    site = f"{website}; " if website else ""
    return f"{index}. {authors}. {title} [Internet]. {site}{year} [cited {retrieved}]. Available from: {url}"


def _periodical(ref, style, index, name: str, harvard_pages: str, apa_url: bool):
    """Newspaper and magazine articles share one grammar."""
    authors = format_authors(ref.authors, style)
    title = _s(ref.title)
    date = _s(ref.publication_date)
    pages = ref.pages

    if style == CitationStyle.APA:
        url = f" {ref.url}" if apa_url and ref.url else ""
        return f"{authors} ({date}). {title}. <em>{name}</em>{f', {pages}' if pages else ''}.{url}"
    if style == CitationStyle.MLA:
        return f'{authors}. "{title}." <em>{name}</em>, {date}{f", pp. {pages}" if pages else ""}.'
    if style == CitationStyle.CHICAGO:
        return f'{authors}. "{title}." <em>{name}</em>, {date}{f", {pages}" if pages else ""}.'
    if style == CitationStyle.HARVARD:
        return f"{authors} {date}. '{title}', <em>{name}</em>{f', {harvard_pages} {pages}' if pages else ''}."
    if style == CitationStyle.IEEE:
        return f'[{index}] {authors}, "{title}," <em>{name}</em>, {date}{f", pp. {pages}" if pages else ""}.'
    return f"{index}. {authors}. {title}. {name}. {date}{f';{pages}' if pages else ''}."


def _newspaper(ref, style, index):
    return _periodical(ref, style, index, _s(ref.newspaper_name), "p.", apa_url=True)


def _magazine(ref, style, index):
    return _periodical(ref, style, index, _s(ref.magazine_name), "pp.", apa_url=False)


def _conference(ref, style, index):
    authors = format_authors(ref.authors, style)
    year = ref.year or _s(ref.conference_date).split("-")[0] or NO_DATE
    title = _s(ref.title)
    conference = _s(ref.conference_name)
    location = _s(ref.conference_location)
    pages = ref.pages

    if style in (CitationStyle.APA, CitationStyle.HARVARD):
        where = f" ({location})" if location else ""
        return f"{authors} ({year}). {title}. In <em>{conference}</em>{where}{f', pp. {pages}' if pages else ''}."
    if style == CitationStyle.MLA:
        return f'{authors}. "{title}." <em>{conference}</em>, {location}, {year}{f", pp. {pages}" if pages else ""}.'
    if style == CitationStyle.CHICAGO:
        return f'{authors}. "{title}." Paper presented at {conference}, {location}, {year}.'
    if style == CitationStyle.IEEE:
        return (f'[{index}] {authors}, "{title}," in <em>{conference}</em>, '
                f'{location}, {year}{f", pp. {pages}" if pages else ""}.')
    return f"{index}. {authors}. {title}. In: {conference}; {year}; {location}{f'. p. {pages}' if pages else ''}."


_THESIS_TYPES = {"PhD": "Doctoral dissertation", "Masters": "Master's thesis"}


def _thesis(ref, style, index):
    authors = format_authors(ref.authors, style)
    year = ref.year or NO_DATE
    title = _s(ref.title)
    kind = _THESIS_TYPES.get(_s(ref.thesis_type), "Thesis")
    institution = _s(ref.institution)

    if style == CitationStyle.APA:
        return f"{authors} ({year}). <em>{title}</em> [{kind}]. {institution}."
    if style == CitationStyle.MLA:
        return f"{authors}. <em>{title}</em>. {year}. {institution}, {kind}."
    if style == CitationStyle.CHICAGO:
        return f'{authors}. "{title}." {kind}, {institution}, {year}.'
    if style == CitationStyle.HARVARD:
        return f"{authors} {year}. <em>{title}</em>. {kind}, {institution}."
    if style == CitationStyle.IEEE:
        return f'[{index}] {authors}, "{title}," {kind}, {institution}, {year}.'
    return f"{index}. {authors}. {title} [{kind}]. {institution}; {year}."


def _report(ref, style, index):
    authors = format_authors(ref.authors, style)
    year = ref.year or NO_DATE
    title = _s(ref.title)
    number = f" (Report No. {ref.report_number})" if ref.report_number else ""
    institution = _s(ref.institution)

    if style == CitationStyle.APA:
        return f"{authors} ({year}). <em>{title}</em>{number}. {institution}."
    if style in (CitationStyle.MLA, CitationStyle.CHICAGO):
        return f"{authors}. <em>{title}</em>{number}. {institution}, {year}."
    if style == CitationStyle.HARVARD:
        return f"{authors} {year}. <em>{title}</em>{number}. {institution}."
    if style == CitationStyle.IEEE:
        return f'[{index}] {authors}, "{title},"{number} {institution}, {year}.'
    return f"{index}. {authors}. {title}{number}. {institution}; {year}."


# Single-grammar types: the same layout in every style

def _patent(ref, style, index):
    authors = format_authors(ref.authors, style)
    date = ref.issue_date or ref.year or NO_DATE
    return f"{authors} ({date}). {_s(ref.title)}. {_s(ref.country)} Patent No. {_s(ref.patent_number)}."


def _video(ref, style, index):
    authors = format_authors([ref.director] if ref.director else ref.authors, style)
    date = ref.release_date or ref.year or NO_DATE
    url = f" {ref.url}" if ref.url else ""
    return f"{authors} ({date}). <em>{_s(ref.title)}</em> [Video]. {_s(ref.platform or ref.studio)}.{url}"


def _podcast(ref, style, index):
    hosts = format_authors(ref.hosts or ref.authors, style)
    date = ref.release_date or ref.year or NO_DATE
    url = f" {ref.url}" if ref.url else ""
    return (f"{hosts} ({date}). {_s(ref.title)} [Audio podcast episode]. "
            f"In <em>{_s(ref.podcast_name)}</em>.{url}")


def _interview(ref, style, index):
    interviewee = format_authors([ref.interviewee] if ref.interviewee else ref.authors, style)
    interviewer = (f" Interview by {format_authors([ref.interviewer], style)}."
                   if ref.interviewer else "")
    date = ref.interview_date or ref.year or NO_DATE
    return f"{interviewee} ({date}). {_s(ref.title)} [{ref.medium or 'Interview'}].{interviewer}"


def _government(ref, style, index):
    number = f" ({ref.document_number})" if ref.document_number else ""
    return (f"{_s(ref.department)} ({ref.year or NO_DATE}). "
            f"<em>{_s(ref.title)}</em>{number}. {_s(ref.country)}.")


def _legal(ref, style, index):
    return (f"<em>{_s(ref.case_title or ref.title)}</em>, {_s(ref.volume)} {_s(ref.reporter)} "
            f"{_s(ref.pages)} ({_s(ref.court)} {ref.decision_date or ref.year or NO_DATE}).")


def _software(ref, style, index):
    authors = format_authors(ref.authors, style)
    url = f" {ref.url}" if ref.url else ""
    return (f"{authors} ({ref.year or NO_DATE}). <em>{_s(ref.title)}</em> "
            f"(Version {ref.version or '1.0'}) [Computer software]. {_s(ref.publisher)}.{url}")


def _dataset(ref, style, index):
    authors = format_authors(ref.authors, style)
    version = f" (Version {ref.version})" if ref.version else ""
    doi = f" https://doi.org/{ref.doi}" if ref.doi else ""
    return (f"{authors} ({ref.year or NO_DATE}). <em>{_s(ref.title)}</em> [Data set]{version}. "
            f"{_s(ref.publisher or ref.repository)}.{doi}")


def _presentation(ref, style, index):
    authors = format_authors(ref.authors, style)
    venue = f"{ref.venue}, " if ref.venue else ""
    date = ref.presentation_date or ref.year or NO_DATE
    return (f"{authors} ({date}). <em>{_s(ref.title)}</em> "
            f"[{_s(ref.presentation_type)}]. {venue}{_s(ref.location)}.")


def _manuscript(ref, style, index):
    authors = format_authors(ref.authors, style)
    return (f"{authors} ({ref.year or NO_DATE}). <em>{_s(ref.title)}</em> "
            f"[{_s(ref.manuscript_type)} manuscript]. {_s(ref.institution)}.")


def _archive(ref, style, index):
    authors = format_authors(ref.authors, style)
    collection = f", {ref.collection_name}" if ref.collection_name else ""
    return (f"{authors} ({ref.year or NO_DATE}). {_s(ref.title)}. "
            f"{_s(ref.archive_name)}, {_s(ref.archive_location)}{collection}.")


def _personal(ref, style, index):
    authors = format_authors(ref.authors, style)
    date = ref.communication_date or ref.year or NO_DATE
    return f"{authors} ({date}). {_s(ref.title)} [{_s(ref.communication_type)}]."


_FORMATTERS: Dict[ReferenceType, Callable[[Reference, CitationStyle, int], str]] = {
    ReferenceType.BOOK: _book,
    ReferenceType.JOURNAL: _journal,
    ReferenceType.WEBSITE: _website,
    ReferenceType.NEWSPAPER: _newspaper,
    ReferenceType.MAGAZINE: _magazine,
    ReferenceType.CONFERENCE: _conference,
    ReferenceType.THESIS: _thesis,
    ReferenceType.REPORT: _report,
    ReferenceType.PATENT: _patent,
    ReferenceType.VIDEO: _video,
    ReferenceType.PODCAST: _podcast,
    ReferenceType.INTERVIEW: _interview,
    ReferenceType.GOVERNMENT: _government,
    ReferenceType.LEGAL: _legal,
    ReferenceType.SOFTWARE: _software,
    ReferenceType.DATASET: _dataset,
    ReferenceType.PRESENTATION: _presentation,
    ReferenceType.MANUSCRIPT: _manuscript,
    ReferenceType.ARCHIVE: _archive,
    ReferenceType.PERSONAL: _personal,
}


def format_reference(reference: Reference, style, index: Optional[int] = None) -> str:
    """
    Format a full bibliography entry.

    Args:
        reference: Any reference variant
        style: Citation style (enum or name)
        index: 1-based position, printed by IEEE/Vancouver/AMA (default 1)

    Returns:
        Entry text, possibly containing <em> markers
    """
    style = CitationStyle.parse(style)
    ref_type = reference.reference_type
    formatter = _FORMATTERS.get(ref_type)
    # Variant-specific fields live on the subclasses
    if formatter is None or not isinstance(reference, REFERENCE_CLASSES[ref_type]):
        logger.debug(f"No formatter for reference type {reference.type!r}")
        return f"{reference.title or 'Untitled'} ({reference.year or NO_DATE})"
    return formatter(reference, style, index or 1)


# =============================================================================
# BIBLIOGRAPHY
# =============================================================================

def _alpha_label(position: int) -> str:
    """1 -> a, 26 -> z, 27 -> aa"""
    label = ""
    while position > 0:
        position, remainder = divmod(position - 1, 26)
        label = chr(ord("a") + remainder) + label
    return label


def format_bibliography_entries(bibliography: Bibliography) -> List[str]:
    """
    Sort and format every reference per the bibliography configuration.

    Entries carry a "1. " / "a. " prefix when the numbering style asks for it.
    """
    config = bibliography.config
    ordered = sort_references(bibliography.references, config.sort_by, config.sort_direction)

    entries = []
    for position, reference in enumerate(ordered, start=1):
        text = format_reference(reference, config.citation_style, position)
        if config.numbering_style == "numeric":
            text = f"{position}. {text}"
        elif config.numbering_style == "alphabetic":
            text = f"{_alpha_label(position)}. {text}"
        entries.append(text)
    return entries
