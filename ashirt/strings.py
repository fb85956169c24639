"""Random string generation for file names and boundaries."""

from __future__ import annotations

import secrets
import string

_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase


def random_string(length: int = 6) -> str:
    """Return ``length`` random characters drawn from digits and ASCII letters."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))