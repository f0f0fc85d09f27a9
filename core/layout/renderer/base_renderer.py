#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Base Renderer Interface

Defines common interface for all renderers.

Version: 1.0.0
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Union
from pathlib import Path
import logging
import tempfile

from ..document import LayoutDocument
from .assets import AssetLoader

logger = logging.getLogger(__name__)


class BaseRenderer(ABC):
    """
    Abstract base class for document renderers.

    All renderers must implement:
    - render(): Write the LayoutDocument to a file
    - supports_format(): Check if format is supported
    """

    def __init__(self, assets: Optional[AssetLoader] = None):
        """
        Initialize renderer.

        Args:
            assets: Loader for cover images (a default loader is created
                when omitted)
        """
        self.assets = assets or AssetLoader()

    @abstractmethod
    def render(self, document: LayoutDocument, output_path: Union[str, Path]) -> Path:
        """
        Render to output file.

        Args:
            document: Built LayoutDocument
            output_path: Output file path

        Returns:
            Path to created file
        """
        pass

    def render_bytes(self, document: LayoutDocument) -> bytes:
        """Render to an in-memory byte string"""
        suffix = f".{self.get_supported_formats()[0]}" if self.get_supported_formats() else ""
        with tempfile.TemporaryDirectory() as tmp:
            path = self.render(document, Path(tmp) / f"book{suffix}")
            return path.read_bytes()

    @staticmethod
    def _prepare_path(output_path: Union[str, Path]) -> Path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path

    @classmethod
    @abstractmethod
    def supports_format(cls, format_name: str) -> bool:
        """Check if renderer supports given format"""
        pass

    @classmethod
    def get_supported_formats(cls) -> List[str]:
        """Get list of supported formats"""
        return []
