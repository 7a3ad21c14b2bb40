"""Source location utilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SourcePosition:
    """Represents a token position in 0-based coordinates."""

    file: str
    row: int
    column: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize the position to a JSON-compatible mapping."""
        return {
            "file": self.file,
            "row": self.row,
            "column": self.column,
        }

    def __str__(self) -> str:
        return f"{self.file}:{self.row}:{self.column}"
