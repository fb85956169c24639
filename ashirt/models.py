"""Local evidence and tag records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Tag:
    """A tag attached to a piece of evidence."""

    id: int = 0
    server_tag_id: int = 0
    tag_name: str = ""
    evidence_id: int = 0


@dataclass
class Evidence:
    """A captured piece of evidence and its metadata."""

    id: int = 0
    path: str = ""
    operation_slug: str = ""
    description: str = ""
    error_text: str = ""
    content_type: str = ""
    recorded_date: datetime | None = None
    upload_date: datetime | None = None
    tags: list[Tag] = field(default_factory=list)

    def tag_ids_field(self) -> str:
        """Return the server tag ids as a JSON-style list, e.g. ``[1,2]``."""
        return "[" + ",".join(str(tag.server_tag_id) for tag in self.tags) + "]"