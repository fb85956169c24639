"""The list of evidence files written by an export."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

from .files import read_file
from .jsonhelpers import JsonObject, parse_json_list


def _to_int(value: Any) -> int:
    """Integral JSON numbers within 32 bits; anything else is 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not value.is_integer():
        return 0
    number = int(value)
    return number if -(2**31) <= number < 2**31 else 0


def _to_string(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass
class EvidenceItem:
    """One exported evidence file and the record it belongs to."""

    evidence_id: int = 0
    export_path: str = ""

    def serialize(self) -> JsonObject:
        return {"evidenceID": self.evidence_id, "path": self.export_path}

    @classmethod
    def deserialize(cls, obj: JsonObject) -> EvidenceItem:
        return cls(_to_int(obj.get("evidenceID")), _to_string(obj.get("path")))


@dataclass
class EvidenceManifest:
    """All evidence files of an export."""

    entries: list[EvidenceItem] = field(default_factory=list)

    def serialize(self) -> list[JsonObject]:
        return [entry.serialize() for entry in self.entries]

    @classmethod
    def deserialize(cls, path: str | os.PathLike[str]) -> EvidenceManifest:
        """Read a manifest file; an unreadable or malformed file gives no entries."""
        return cls(parse_json_list(read_file(path), EvidenceItem.deserialize))