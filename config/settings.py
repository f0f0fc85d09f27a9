#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management

Environment-level knobs only. Per-book typesetting preferences live in
core.publishing (PublishingSettings), not here.
"""

from pathlib import Path
from pydantic_settings import BaseSettings

from .constants import (
    ASSET_FETCH_TIMEOUT_SECONDS,
    DEFAULT_OUTPUT_FORMAT,
    LOG_LEVEL,
    PDF_MAX_PASSES,
)


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings"""

    # ========== Output ==========
    default_output_format: str = DEFAULT_OUTPUT_FORMAT  # pdf | html | docx | epub | txt | md

    # ========== Rendering ==========
    # Cover images referenced by URL are fetched once per export
    asset_fetch_timeout: float = ASSET_FETCH_TIMEOUT_SECONDS
    asset_fetch_enabled: bool = True

    # PDF: re-run the build with page numbers observed in the first pass
    pdf_exact_toc: bool = True
    pdf_max_passes: int = PDF_MAX_PASSES

    # ========== Logging ==========
    log_level: str = LOG_LEVEL

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        env_prefix = "PRESS_"
        case_sensitive = False
        extra = "ignore"  # Allow extra fields from .env that aren't defined in model


# Global settings instance
settings = Settings()
