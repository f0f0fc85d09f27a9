"""
Pytest configuration and shared fixtures for Manuscript Press tests.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.bibliography.models import (
    Author,
    Bibliography,
    BibliographyConfig,
    BookReference,
    CitationStyle,
    JournalReference,
)
from core.contracts.manuscript import Chapter, Manuscript
from core.publishing.resolver import resolve_settings


# ============================================================================
# Fixtures: Sample Data
# ============================================================================

CHAPTER_ONE = (
    "Chapter 1: Beginning\n\n"
    "The road out of the valley was longer than anyone remembered.\n\n"
    "* * *\n\n"
    "By nightfall the lanterns of the village had disappeared behind the hills."
)

CHAPTER_TWO = "\n\n".join(
    f"Paragraph {i} of the storm. Rain hammered the shutters while the wind "
    f"tore at the roof tiles and the river climbed its banks."
    for i in range(1, 40)
)


@pytest.fixture
def sample_manuscript() -> Manuscript:
    """Two chapters, no cover, no bibliography."""
    return Manuscript(
        title="The Long Road",
        author="Jane Doe",
        description="A journey out of the valley.",
        chapters=[
            Chapter(number=1, title="Beginning", content=CHAPTER_ONE),
            Chapter(number=2, title="The Storm", content=CHAPTER_TWO),
        ],
    )


@pytest.fixture
def single_chapter_manuscript() -> Manuscript:
    """One short chapter with two paragraphs and one scene break."""
    return Manuscript(
        title="The Long Road",
        author="Jane Doe",
        chapters=[Chapter(number=1, title="Beginning", content=CHAPTER_ONE)],
    )


@pytest.fixture
def default_settings():
    """Settings resolved from nothing: global defaults only."""
    return resolve_settings()


@pytest.fixture
def apa_bibliography() -> Bibliography:
    """Enabled APA bibliography with a book and a journal article."""
    return Bibliography(
        config=BibliographyConfig(enabled=True, citation_style=CitationStyle.APA),
        references=[
            JournalReference(
                id="ref-2",
                title="Roads and rivers",
                authors=[Author(last_name="Smith", first_name="Anna")],
                year=2019,
                journal_title="Journal of Travel",
                volume="12",
                issue="3",
                pages="45-67",
            ),
            BookReference(
                id="ref-1",
                title="Valley Stories",
                authors=[Author(last_name="Brown", first_name="Carl", middle_name="David")],
                year=2020,
                publisher="Hill Press",
            ),
        ],
    )


@pytest.fixture
def manuscript_with_bibliography(sample_manuscript, apa_bibliography) -> Manuscript:
    sample_manuscript.bibliography = apa_bibliography
    return sample_manuscript


@pytest.fixture
def headers_on() -> dict:
    """Overrides that switch running headers on."""
    return {"headerFooter": {"headerEnabled": True}}
