"""Switches controlling what a system export or import covers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


@dataclass
class ExportOptions:
    """What to include when exporting the system."""

    export_config: bool = True
    export_db: bool = True

    def includes_anything(self) -> bool:
        """True when at least one kind of data is selected for export."""
        return self.export_config or self.export_db


class ImportAction(IntEnum):
    """How evidence should be handled on import."""

    NONE = 0
    MERGE = 1


@dataclass
class ImportOptions:
    """What to bring in when importing an exported system."""

    import_config: bool = True
    import_db: ImportAction = ImportAction.MERGE

    def includes_anything(self) -> bool:
        """True when there is any work to be done."""
        return self.import_config or self.import_db != ImportAction.NONE