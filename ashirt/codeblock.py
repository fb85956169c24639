"""Codeblock evidence: text content stored as a small JSON file."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any

from .files import read_file, write_file
from .jsonhelpers import JsonObject, parse_json_item
from .strings import random_string

EXTENSION = "json"
CONTENT_TYPE = "codeblock"


def make_name() -> str:
    """Return a fresh random file name for a codeblock."""
    return f"ashirt_codeblock_{random_string()}.{EXTENSION}"


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return ""


@dataclass
class Codeblock:
    """Source code or other text, its language and where it came from."""

    content: str = ""
    subtype: str = ""
    source: str = ""
    file_path: str = ""

    @classmethod
    def new(cls, content: str, evidence_dir: str | os.PathLike[str]) -> Codeblock:
        """Create a codeblock with a new random file name inside ``evidence_dir``."""
        return cls(content=content, file_path=os.path.join(os.fspath(evidence_dir), make_name()))

    def encode(self) -> bytes:
        """Return the JSON encoding of this codeblock."""
        root: JsonObject = {"contentSubtype": self.subtype, "content": self.content}
        if self.source:
            root["metadata"] = {"source": self.source}
        text = json.dumps(root, indent=4, sort_keys=True, ensure_ascii=False)
        return (text + "\n").encode("utf-8")

    @classmethod
    def decode(cls, data: bytes | str, file_path: str = "") -> Codeblock:
        """Parse encoded codeblock data; malformed data gives an empty codeblock."""

        def from_json(obj: JsonObject) -> Codeblock:
            meta = obj.get("metadata")
            source = _text(meta.get("source")) if isinstance(meta, dict) and meta else ""
            return cls(
                content=_text(obj.get("content")),
                subtype=_text(obj.get("contentSubtype")) if isinstance(obj.get("contentSubtype"), str) else "",
                source=source,
            )

        block = parse_json_item(data, from_json, cls)
        block.file_path = file_path
        return block

    def save(self) -> None:
        """Write the encoded codeblock to its file; raises OSError on failure."""
        write_file(self.file_path, self.encode())

    @classmethod
    def read(cls, file_path: str) -> Codeblock:
        """Read a codeblock file; an unreadable file gives an empty codeblock."""
        return cls.decode(read_file(file_path), file_path)