"""
Bibliography - reference models, citation formatting and ordering.
"""

from .models import (
    Author,
    Bibliography,
    BibliographyConfig,
    CitationStyle,
    InTextCitation,
    Reference,
    ReferenceType,
    REFERENCE_CLASSES,
    REFERENCE_TYPE_LABELS,
    reference_from_dict,
)
from .formatter import (
    format_author,
    format_authors,
    format_bibliography_entries,
    format_in_text_citation,
    format_reference,
)
from .sorting import sort_references

__all__ = [
    'Author',
    'Bibliography',
    'BibliographyConfig',
    'CitationStyle',
    'InTextCitation',
    'Reference',
    'ReferenceType',
    'REFERENCE_CLASSES',
    'REFERENCE_TYPE_LABELS',
    'reference_from_dict',
    'format_author',
    'format_authors',
    'format_bibliography_entries',
    'format_in_text_citation',
    'format_reference',
    'sort_references',
]
