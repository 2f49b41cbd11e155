"""Source points for token spans.

Thread Safety:
Point is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point:
    """A position in the source text.

    Line and column are 1-indexed. Columns are visual: a tab advances to
    the next multiple of the tab size, so the width of a whitespace span is
    ``end.column - start.column``.

    Attributes:
        line: Line number (1-indexed)
        column: Visual column (1-indexed)
        offset: Absolute offset into the source string

    Examples:
            >>> Point(2, 5, 12)
        Point(line=2, column=5, offset=12)
            >>> str(Point(2, 5, 12))
            '2:5'

    """

    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"

    @classmethod
    def start(cls) -> Point:
        """Point at the very beginning of a source."""
        return cls(line=1, column=1, offset=0)
