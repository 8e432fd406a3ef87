"""Source positions: line/column tracking and marked values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class LineColumn:
    """A position within an input string.

    The offset is 0-based; line and column are 1-based.
    """

    offset: int
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Mark:
    """A parsed value together with where it started and ended."""

    start: Any
    value: Any
    end: Any


def line_column(text: str, offset: int) -> LineColumn:
    """Compute the line and column of `offset` by counting newlines before it."""
    lines = text[:offset].split("\n")
    return LineColumn(offset, len(lines), len(lines[-1]) + 1)


class SourceText:
    """An input string with line access for diagnostics."""

    def __init__(self, text: str, name: str = "<input>") -> None:
        self.text = text
        self.name = name
        self.lines = text.split("\n")

    def line_at(self, n: int) -> str:
        """Return the 1-indexed line, or empty string if out of range."""
        if 1 <= n <= len(self.lines):
            return self.lines[n - 1]
        return ""

    def position(self, offset: int) -> LineColumn:
        return line_column(self.text, offset)
