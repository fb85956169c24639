"""Naming of screenshot evidence files."""

from __future__ import annotations

from .strings import random_string

EXTENSION = "png"
CONTENT_TYPE = "image"


def make_name() -> str:
    """Return a fresh random file name for a screenshot."""
    return f"ashirt_screenshot_{random_string()}.{EXTENSION}"