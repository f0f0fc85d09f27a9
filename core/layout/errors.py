#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Layout Errors

Failures of the layout and rendering stages. Bad settings values and
malformed chapter text are never errors; they are repaired upstream.

Version: 1.0.0
"""

from core.contracts.base import ContractError


class LayoutError(ContractError):
    """Base error for layout and rendering"""
    pass


class RendererError(LayoutError):
    """A renderer backend failed to produce output"""
    def __init__(self, renderer: str, message: str):
        self.renderer = renderer
        super().__init__(f"{renderer}: {message}")


class UnsupportedFormatError(LayoutError, ValueError):
    """No renderer is registered for the requested output format"""
    def __init__(self, output_format: str, supported=None):
        self.output_format = output_format
        self.supported = list(supported or [])
        message = f"Unsupported output format: {output_format!r}"
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        super().__init__(message)
