#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Input Contracts Module

Defines the formal input of the publishing pipeline:
- Manuscript: title, author, ordered chapters, bibliography, settings
- Chapter: one numbered chapter of raw text

Usage:
    from core.contracts import Manuscript, ContractValidationError

    manuscript = Manuscript.from_json(Path("book.json").read_text())
    manuscript.assert_valid()   # raises ContractValidationError

Version: 1.0.0
"""

from .base import (
    BaseContract,
    ContractError,
    ContractValidationError,
)

from .manuscript import (
    Chapter,
    Manuscript,
    MATTER_SECTIONS,
)

__all__ = [
    # Base
    "BaseContract",
    "ContractError",
    "ContractValidationError",

    # Input
    "Chapter",
    "Manuscript",
    "MATTER_SECTIONS",
]

__version__ = "1.0.0"
