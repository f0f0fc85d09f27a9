"""Manuscript Press core packages."""
