"""Building multipart/form-data request bodies."""

from __future__ import annotations

import os

from .strings import random_string

_CONTENT_HEADER = "\r\n--{boundary}\r\n"
_CONTENT_PARAM = 'Content-Disposition: form-data; name="{name}"\r\n\r\n'
_CONTENT_FILE = (
    'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'
    "Content-Type: {content_type}\r\n\r\n"
)


def _complete_suffix(filename: str) -> str:
    """Everything after the first dot of ``filename``, lower-cased."""
    _, dot, suffix = filename.partition(".")
    return suffix.lower() if dot else ""


def _content_type_for(filename: str) -> str:
    suffix = _complete_suffix(filename)
    if suffix.endswith(("jpg", "jpeg")):
        return "image/jpeg"
    if suffix.endswith(("txt", "log")):
        return "text/plain"
    return "application/octet-stream"


def _read_or_empty(path: str) -> bytes:
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError:
        return b""


class MultipartParser:
    """Collects form fields and files and renders them as one multipart body."""

    def __init__(self, boundary: str | None = None) -> None:
        self.boundary = boundary if boundary is not None else f"----ASHIRTTrayApp{random_string(16)}"
        self._parameters: list[tuple[str, str]] = []
        self._files: list[tuple[str, str]] = []

    def add_parameter(self, name: str = "", value: str = "") -> None:
        """Add a plain form field."""
        self._parameters.append((name, value))

    def add_file(self, name: str = "", path: str = "") -> None:
        """Add a file field; the file is read when the body is generated."""
        self._files.append((name, path))

    def generate_body(self) -> bytes:
        """Render all parameters, then all files, followed by the closing boundary.

        A file that cannot be read is sent with empty contents.
        """
        parts: list[bytes] = []
        header = _CONTENT_HEADER.format(boundary=self.boundary).encode("utf-8")
        for name, value in self._parameters:
            parts.append(header)
            parts.append(_CONTENT_PARAM.format(name=name).encode("utf-8"))
            parts.append(value.encode("utf-8"))
        for name, path in self._files:
            filename = os.path.basename(path)
            parts.append(header)
            parts.append(
                _CONTENT_FILE.format(
                    name=name, filename=filename, content_type=_content_type_for(filename)
                ).encode("utf-8")
            )
            parts.append(_read_or_empty(path))
        parts.append(f"\r\n--{self.boundary}--\r\n".encode("utf-8"))
        return b"".join(parts)