#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Reference ordering for printed bibliographies.

Sort keys:
- author: first author's surname, then organization, then title
- date: publication year (undated references sort as 9999)
- title / type: alphabetical
- appearance: reference id as a proxy for insertion order
"""

import logging
from typing import Callable, Dict, List, Sequence

from .models import Reference

logger = logging.getLogger(__name__)

UNDATED_YEAR = 9999


def _author_key(ref: Reference) -> str:
    first = ref.authors[0] if ref.authors else None
    name = (first.last_name or first.organization) if first else None
    return (name or ref.title or "").casefold()


def _date_key(ref: Reference) -> int:
    return ref.year or UNDATED_YEAR


_SORT_KEYS: Dict[str, Callable[[Reference], object]] = {
    "author": _author_key,
    "date": _date_key,
    "title": lambda ref: (ref.title or "").casefold(),
    "type": lambda ref: ref.type or "",
    "appearance": lambda ref: ref.id or "",
}


def sort_references(references: Sequence[Reference], sort_by: str = "author",
                    direction: str = "asc") -> List[Reference]:
    """
    Return a new, stably sorted list; the input sequence is left untouched.

    Unknown sort keys keep the original order.
    """
    key = _SORT_KEYS.get(sort_by)
    if key is None:
        logger.debug(f"Unknown reference sort key {sort_by!r}, keeping input order")
        return list(references)
    return sorted(references, key=key, reverse=(direction == "desc"))
