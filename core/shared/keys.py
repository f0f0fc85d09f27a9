#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Key normalization for stored documents.

Stored manuscripts and settings use camelCase keys; the Python models use
snake_case. Both spellings are accepted on the way in.
"""

import re
from typing import Any, Dict

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def to_snake(name: str) -> str:
    """bodyFontSize -> body_font_size, customCSS -> custom_css"""
    name = name.replace("-", "_")
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return _CAMEL_BOUNDARY.sub(r"_\1", name).lower()


def snake_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow copy with snake_case keys (nested values untouched)."""
    if not isinstance(data, dict):
        return {}
    return {to_snake(str(k)): v for k, v in data.items()}
