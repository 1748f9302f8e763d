"""Position and metrics objects for lexstream character streams."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class StreamPosition:
    """Snapshot of a stream cursor.

    Attributes:
        line: 1-based line number
        column: 1-based column number
        name: Name of the stream's source, or None for anonymous sources
    """

    line: int
    column: int
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate position."""
        if self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")
        if self.column < 1:
            raise ValueError(f"column must be >= 1, got {self.column}")

    def __str__(self) -> str:
        return f"{self.name or '<anonymous>'}:{self.line}:{self.column}"


@dataclass
class StreamMetrics:
    """Counters collected while a stream is consumed."""

    characters_consumed: int = 0
    lines_read: int = 0
    refills: int = 0
    processing_time_ms: float = 0.0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters consumed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_consumed * 1000.0) / self.processing_time_ms

    @property
    def average_line_length(self) -> float:
        """Average number of characters per line read, terminators included."""
        if self.lines_read == 0:
            return 0.0
        return self.characters_consumed / self.lines_read

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary representation."""
        return {
            "characters_consumed": self.characters_consumed,
            "lines_read": self.lines_read,
            "refills": self.refills,
            "processing_time_ms": self.processing_time_ms,
            "characters_per_second": self.characters_per_second,
            "average_line_length": self.average_line_length,
        }
