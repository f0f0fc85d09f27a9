#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Sections Module

Page-role numbering and running heads.
"""

from .manager import SectionManager, PageInfo, NumberingStyle

__all__ = [
    "SectionManager",
    "PageInfo",
    "NumberingStyle",
]
