"""Small file-system helpers."""

from __future__ import annotations

import logging
import os

log = logging.getLogger(__name__)


def get_dirname(path: str | os.PathLike[str]) -> str:
    """Return the directory part of ``path``, ``"."`` when it has none."""
    return os.path.dirname(os.fspath(path)) or "."


def write_file(path: str | os.PathLike[str], content: bytes | str) -> None:
    """Write ``content`` to ``path``, creating parent directories as needed.

    Raises OSError when the file cannot be written.
    """
    os.makedirs(get_dirname(path), exist_ok=True)
    data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
    with open(path, "wb") as handle:
        handle.write(data)


def read_file(path: str | os.PathLike[str]) -> bytes:
    """Return the whole contents of ``path``, or ``b""`` if it cannot be read."""
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError as exc:
        log.warning("Unable to read from file: %s (%s)", path, exc)
        return b""