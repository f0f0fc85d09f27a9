#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shared Helpers

Small utilities used across the contracts, bibliography and publishing
modules without importing any of them.

Usage:
    from core.shared import snake_keys

    snake_keys({"bodyFontSize": 12})   # {"body_font_size": 12}
"""

from .keys import to_snake, snake_keys

__all__ = [
    "to_snake",
    "snake_keys",
]
