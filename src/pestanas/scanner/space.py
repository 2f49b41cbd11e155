"""Whitespace-width matching.

Two primitives shared by every construct that measures indentation:

- factory_space: consume spaces and tabs, up to an optional column limit,
  as one span.
- consume_width_exactly: succeed only if exactly ``width`` columns of
  whitespace were consumed; otherwise rewind.

Widths are visual columns. A tab is never split: if it would overshoot the
limit, scanning stops in front of it.
"""

from __future__ import annotations

from pestanas.scanner.cursor import SPACE_CHARS, Cursor
from pestanas.tokens import TokenType


def factory_space(cursor: Cursor, token_type: TokenType, max_width: int | None = None) -> int:
    """Consume leading whitespace as a single ``token_type`` span.

    Args:
        cursor: Scan cursor
        token_type: Kind of span to emit
        max_width: Maximum columns to consume; None means unbounded

    Returns:
        Number of columns consumed. No span is emitted for 0.
    """
    width = 0
    token = None
    while True:
        char = cursor.peek()
        if char not in SPACE_CHARS:
            break
        step = cursor.char_width(char)
        if max_width is not None and width + step > max_width:
            break
        if token is None:
            token = cursor.enter(token_type)
        cursor.consume()
        width += step

    if token is not None:
        cursor.exit(token_type)
    return width


def consume_width_exactly(cursor: Cursor, token_type: TokenType, width: int) -> bool:
    """Consume exactly ``width`` columns of whitespace, or nothing.

    Whitespace past ``width`` is left for the next consumer.

    Returns:
        True if exactly ``width`` columns were consumed.
    """

    def match() -> bool:
        return factory_space(cursor, token_type, width) == width

    return cursor.attempt(match)
