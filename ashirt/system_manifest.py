"""The top-level description of a system export, and copying evidence into it."""

from __future__ import annotations

import json
import os
import shutil
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from . import codeblock, screenshot
from .evidence_manifest import EvidenceItem, EvidenceManifest
from .files import get_dirname, read_file, write_file
from .jsonhelpers import JsonObject, parse_json_item
from .models import Evidence
from .strings import random_string

MANIFEST_NAME = "system.json"
EVIDENCE_DIR = "evidence"

ProgressCallback = Callable[[int, Optional["CopyError"]], None]


def content_sensitive_extension(content_type: str) -> str:
    """File extension for a content type; ``.bin`` when the type is unknown."""
    if content_type == codeblock.CONTENT_TYPE:
        return codeblock.EXTENSION
    if content_type == screenshot.CONTENT_TYPE:
        return screenshot.EXTENSION
    return ".bin"


def content_sensitive_filename(content_type: str) -> str:
    """A fresh random file name suited to the content type."""
    if content_type == codeblock.CONTENT_TYPE:
        return codeblock.make_name()
    if content_type == screenshot.CONTENT_TYPE:
        return screenshot.make_name()
    return f"ashirt_unknown_type_{random_string()}.bin"


class CopyError(Exception):
    """An evidence file could not be copied."""

    def __init__(self, src: str, dst: str, reason: str) -> None:
        super().__init__(f"unable to copy {src} to {dst}: {reason}")
        self.src = src
        self.dst = dst
        self.reason = reason


def _to_string(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass
class SystemManifest:
    """Relative paths of the pieces of an export, plus the exporting system."""

    operating_system: str = ""
    db_path: str = ""
    config_path: str = ""
    servers_path: str = ""
    evidence_manifest_path: str = ""
    path_to_manifest: str = field(default="", compare=False, repr=False)

    def serialize(self) -> JsonObject:
        return {
            "operatingSystem": self.operating_system,
            "databasePath": self.db_path,
            "configPath": self.config_path,
            "serversPath": self.servers_path,
            "evidenceManifestPath": self.evidence_manifest_path,
        }

    @classmethod
    def deserialize(cls, obj: JsonObject) -> SystemManifest:
        return cls(
            operating_system=_to_string(obj.get("operatingSystem")),
            db_path=_to_string(obj.get("databasePath")),
            config_path=_to_string(obj.get("configPath")),
            servers_path=_to_string(obj.get("serversPath")),
            evidence_manifest_path=_to_string(obj.get("evidenceManifestPath")),
        )

    @classmethod
    def read_manifest(cls, path: str | os.PathLike[str]) -> SystemManifest:
        """Read a ``system.json`` file; its directory becomes the manifest's base."""
        manifest = parse_json_item(read_file(path), cls.deserialize, cls)
        manifest.path_to_manifest = get_dirname(path)
        return manifest

    def path_to_file(self, filename: str) -> str:
        """Join the manifest's directory with a path relative to it."""
        return f"{self.path_to_manifest}/{filename}"

    def copy_evidence(
        self,
        base_export_path: str | os.PathLike[str],
        evidence: Iterable[Evidence],
        on_progress: ProgressCallback | None = None,
    ) -> EvidenceManifest:
        """Copy evidence files under ``base_export_path/evidence`` with fresh names.

        After each file ``on_progress(count, error)`` is called, where ``error``
        is a CopyError when that file could not be copied and None otherwise.
        Only successfully copied files are listed in the returned manifest.
        """
        base = os.fspath(base_export_path)
        os.makedirs(os.path.join(base, EVIDENCE_DIR), exist_ok=True)
        manifest = EvidenceManifest()
        for count, item in enumerate(evidence, start=1):
            new_name = (
                f"ashirt_evidence_{random_string(10)}."
                f"{content_sensitive_extension(item.content_type)}"
            )
            entry = EvidenceItem(item.id, f"{EVIDENCE_DIR}/{new_name}")
            dst = os.path.join(base, entry.export_path)
            error: CopyError | None = None
            if os.path.exists(dst):
                error = CopyError(item.path, dst, "destination already exists")
            else:
                try:
                    shutil.copyfile(item.path, dst)
                except OSError as exc:
                    error = CopyError(item.path, dst, str(exc))
            if error is None:
                manifest.entries.append(entry)
            if on_progress is not None:
                on_progress(count, error)
        return manifest

    def write(self, output_dir: str | os.PathLike[str]) -> str:
        """Write this manifest as ``system.json`` in ``output_dir``; returns its path.

        Raises OSError when the file cannot be written.
        """
        directory = os.fspath(output_dir)
        path = os.path.join(directory, MANIFEST_NAME)
        text = json.dumps(self.serialize(), indent=4, sort_keys=True, ensure_ascii=False)
        write_file(path, text + "\n")
        self.path_to_manifest = get_dirname(path)
        return path