#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Asset Loader

Fetches image bytes for covers referenced by a LayoutDocument:
- http(s) URLs (httpx, bounded by a timeout)
- data: URIs (base64)
- Local file paths

A failed fetch is logged and returns None; renderers then fall back to a
text cover instead of failing the export.

Version: 1.0.0
"""

import base64
import logging
from pathlib import Path
from typing import Dict, Optional

import httpx

from config.settings import settings as app_settings

logger = logging.getLogger(__name__)


class AssetLoader:
    """
    Image loader with a per-instance cache.

    Usage:
        loader = AssetLoader(timeout=5)
        data = loader.load("https://example.com/cover.jpg")   # bytes or None
    """

    def __init__(self, timeout: Optional[float] = None, enabled: Optional[bool] = None):
        self.timeout = timeout if timeout is not None else app_settings.asset_fetch_timeout
        self.enabled = enabled if enabled is not None else app_settings.asset_fetch_enabled
        self._cache: Dict[str, Optional[bytes]] = {}

    def load(self, source: Optional[str]) -> Optional[bytes]:
        """Return the bytes behind ``source``, or None when unavailable"""
        if not source:
            return None
        if source not in self._cache:
            self._cache[source] = self._fetch(source)
        return self._cache[source]

    def _fetch(self, source: str) -> Optional[bytes]:
        if source.startswith("data:"):
            return self._decode_data_uri(source)
        if source.startswith(("http://", "https://")):
            return self._download(source)
        return self._read_file(source)

    def _download(self, url: str) -> Optional[bytes]:
        if not self.enabled:
            logger.debug(f"Asset fetching disabled, skipping {url}")
            return None
        try:
            with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
                response = client.get(url)
                response.raise_for_status()
                logger.debug(f"Fetched asset {url} ({len(response.content)} bytes)")
                return response.content
        except httpx.HTTPError as e:
            logger.warning(f"Could not fetch asset {url}: {e}")
            return None

    @staticmethod
    def _decode_data_uri(uri: str) -> Optional[bytes]:
        header, _, payload = uri.partition(",")
        try:
            if header.endswith(";base64"):
                return base64.b64decode(payload)
            return payload.encode("utf-8")
        except ValueError as e:
            logger.warning(f"Malformed data URI: {e}")
            return None

    @staticmethod
    def _read_file(path: str) -> Optional[bytes]:
        try:
            return Path(path).read_bytes()
        except OSError as e:
            logger.warning(f"Could not read asset {path}: {e}")
            return None


def guess_media_type(data: bytes) -> str:
    """Image media type from magic bytes (JPEG when unknown)"""
    if data.startswith(b"\x89PNG"):
        return "image/png"
    if data.startswith(b"GIF8"):
        return "image/gif"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
