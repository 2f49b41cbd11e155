"""Scan cursor with transactional backtracking.

The cursor owns the scan position, the event stream and the stack of open
spans. Recognizers advance it one character at a time. A recognizer that
fails is undone by restoring a checkpoint taken before it ran, so the event
stream only ever holds spans from fully successful matches.

Thread Safety:
Cursor instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from pestanas.errors import SpanStackError
from pestanas.location import Point
from pestanas.tokens import Event, EventKind, Token, TokenType

T = TypeVar("T")

LINE_ENDINGS = frozenset("\r\n")
SPACE_CHARS = frozenset(" \t")


@dataclass(frozen=True, slots=True)
class Checkpoint:
    """Snapshot of everything a failed recognizer may have touched."""

    pos: int
    line: int
    column: int
    event_count: int
    stack: tuple[Token, ...]


class Cursor:
    """Character cursor over a source string.

    Usage:
            >>> cursor = Cursor("=== \\"A\\"")
            >>> cursor.peek()
            '='
            >>> token = cursor.enter(TokenType.TABBED)
            >>> cursor.consume()
            '='

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_line",
        "_column",
        "_tab_size",
        "_events",
        "_stack",
    )

    def __init__(self, source: str, tab_size: int = 4) -> None:
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tab_size = tab_size
        self._events: list[Event] = []
        self._stack: list[Token] = []

    # =========================================================================
    # Navigation
    # =========================================================================

    @property
    def source(self) -> str:
        return self._source

    @property
    def events(self) -> list[Event]:
        return self._events

    @property
    def depth(self) -> int:
        """Number of currently open spans."""
        return len(self._stack)

    def at_eof(self) -> bool:
        return self._pos >= self._source_len

    def now(self) -> Point:
        """Current position as a Point."""
        return Point(line=self._line, column=self._column, offset=self._pos)

    def peek(self) -> str:
        """Current character without advancing, or "" at end of input."""
        if self._pos >= self._source_len:
            return ""
        return self._source[self._pos]

    def consume(self) -> str:
        """Advance past exactly one character.

        The character is attributed to the innermost open span.

        Returns:
            The consumed character, or "" at end of input.
        """
        if self._pos >= self._source_len:
            return ""

        char = self._source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
        elif char == "\r":
            # \r\n counts as one line ending; the \n bumps the line
            if self.peek() != "\n":
                self._line += 1
                self._column = 1
        elif char == "\t":
            self._column += self._tab_size - (self._column - 1) % self._tab_size
        else:
            self._column += 1

        return char

    def char_width(self, char: str) -> int:
        """Visual width of ``char`` if consumed at the current column."""
        if char == "\t":
            return self._tab_size - (self._column - 1) % self._tab_size
        return 1

    def line_end_offset(self) -> int:
        """Offset of the next line ending, or of end of input."""
        pos = self._pos
        while pos < self._source_len and self._source[pos] not in LINE_ENDINGS:
            pos += 1
        return pos

    def is_blank_line(self) -> bool:
        """Non-committing check: is the rest of the line whitespace only?"""
        pos = self._pos
        while pos < self._source_len and self._source[pos] in SPACE_CHARS:
            pos += 1
        return pos >= self._source_len or self._source[pos] in LINE_ENDINGS

    # =========================================================================
    # Spans
    # =========================================================================

    def enter(self, token_type: TokenType) -> Token:
        """Open a span at the current position."""
        token = Token(type=token_type, start=self.now())
        self._stack.append(token)
        self._events.append(Event(EventKind.ENTER, token))
        return token

    def exit(self, token_type: TokenType) -> Token:
        """Close the innermost open span at the current position.

        Raises:
            SpanStackError: If the innermost open span is not ``token_type``.
        """
        token = self._pop(token_type)
        token.end = self.now()
        token.value = self._source[token.start.offset : self._pos]
        self._events.append(Event(EventKind.EXIT, token))
        return token

    def insert_exit(self, token_type: TokenType, index: int, point: Point) -> Token:
        """Close the innermost open span at an earlier point of the stream.

        Used to end a block where the current line began, after the
        continuation scanners of its parents already consumed their prefixes.

        Args:
            token_type: Kind of the innermost open span
            index: Event index to insert the exit event at
            point: End position of the span

        Raises:
            SpanStackError: If the innermost open span is not ``token_type``.
        """
        if not 0 <= index <= len(self._events):
            raise SpanStackError(f"exit index {index} out of range", self._pos)
        token = self._pop(token_type)
        token.end = point
        token.value = self._source[token.start.offset : point.offset]
        self._events.insert(index, Event(EventKind.EXIT, token))
        return token

    def tail(self) -> Token | None:
        """Token of the last event, if that event closed a span."""
        if not self._events:
            return None
        last = self._events[-1]
        return None if last.is_enter else last.token

    def current(self) -> Token | None:
        """Innermost open span, if any."""
        return self._stack[-1] if self._stack else None

    def finish(self) -> list[Event]:
        """Return the event stream, checking that every span was closed."""
        if self._stack:
            names = ", ".join(t.type.name for t in self._stack)
            raise SpanStackError(f"unclosed spans at end of input: {names}", self._pos)
        return self._events

    def _pop(self, token_type: TokenType) -> Token:
        if not self._stack:
            raise SpanStackError(f"cannot exit {token_type.name}: no open span", self._pos)
        token = self._stack[-1]
        if token.type is not token_type:
            raise SpanStackError(
                f"cannot exit {token_type.name}: innermost open span is {token.type.name}",
                self._pos,
            )
        self._stack.pop()
        return token

    # =========================================================================
    # Backtracking
    # =========================================================================

    def checkpoint(self) -> Checkpoint:
        return Checkpoint(
            pos=self._pos,
            line=self._line,
            column=self._column,
            event_count=len(self._events),
            stack=tuple(self._stack),
        )

    def restore(self, checkpoint: Checkpoint) -> None:
        """Rewind position, events and open spans to ``checkpoint``."""
        self._pos = checkpoint.pos
        self._line = checkpoint.line
        self._column = checkpoint.column
        del self._events[checkpoint.event_count :]
        self._stack[:] = checkpoint.stack
        # Spans closed during the attempt are open again
        for token in self._stack:
            if token.end is not None:
                token.end = None
                token.value = ""

    def attempt(self, recognizer: Callable[[], T]) -> T:
        """Run ``recognizer``; rewind everything it did if it fails.

        A recognizer fails by returning None or False. Any other value
        commits its effects and is returned as is.
        """
        checkpoint = self.checkpoint()
        result = recognizer()
        if result is None or result is False:
            self.restore(checkpoint)
        return result

    def check(self, recognizer: Callable[[], T]) -> T:
        """Run ``recognizer`` as pure lookahead: always rewind afterwards."""
        checkpoint = self.checkpoint()
        try:
            return recognizer()
        finally:
            self.restore(checkpoint)
