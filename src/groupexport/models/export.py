"""Export result data model."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ExportResult:
    """Outcome of a completed group member export."""

    output_file: str
    row_count: int = 0
    page_count: int = 0
    columns: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when the group had no members."""
        return self.row_count == 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary format."""
        return {
            "output_file": self.output_file,
            "row_count": self.row_count,
            "page_count": self.page_count,
            "columns": list(self.columns),
        }
