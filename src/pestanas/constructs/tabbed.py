"""Tabbed section construct.

Recognizes pymdown-style tabbed blocks:

```markdown
===! "C++"
    Content of the tab, indented one tab stop
    past the marker line.

=== "Python"
    A sibling tab.
```

The marker line is three ``=``, optional flags (``+``, ``!``, ``+!`` or
``!+``), at least one space, and a double-quoted title. Only whitespace may
follow the closing quote.

The first closing quote always ends the title. ``=== "C++"another"`` is
not a tabbed header: text after the title is rejected rather than folded
back into it.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum, auto
from typing import ClassVar

from pestanas.constructs.protocol import Construct, Continuation
from pestanas.location import Point
from pestanas.scanner.context import ContainerState, TokenizeContext
from pestanas.scanner.cursor import LINE_ENDINGS, SPACE_CHARS
from pestanas.scanner.space import consume_width_exactly, factory_space
from pestanas.tokens import TokenType

MARKER_CHAR = "="
MARKER_COUNT = 3
FLAG_CHARS = frozenset("+!")
QUOTE = '"'


class HeaderState(Enum):
    """States of the marker line scanner."""

    START = auto()
    EQUALS = auto()
    FLAGS = auto()
    SPACE = auto()
    TITLE_OPEN = auto()
    TITLE_INSIDE = auto()
    TITLE_AFTER = auto()
    ACCEPT = auto()
    REJECT = auto()


TERMINAL_STATES = frozenset({HeaderState.ACCEPT, HeaderState.REJECT})


class HeaderScanner:
    """Character-at-a-time state machine over a tabbed marker line.

    Each call to :meth:`step` looks at the current character, performs at
    most one unit of work on the cursor and returns the next state. Spans
    opened before a REJECT are left for the caller's checkpoint to discard.

    Usage:
            >>> scanner = HeaderScanner(ctx)
            >>> state = HeaderState.START
            >>> while state not in TERMINAL_STATES:
            ...     state = scanner.step(state)

    """

    __slots__ = ("_ctx", "_cursor", "_equals", "_data_open", "flags")

    _handlers: ClassVar[dict[HeaderState, Callable[[HeaderScanner, str], HeaderState]]]

    def __init__(self, ctx: TokenizeContext) -> None:
        self._ctx = ctx
        self._cursor = ctx.cursor
        self._equals = 0
        self._data_open = False
        self.flags = ""

    def step(self, state: HeaderState) -> HeaderState:
        """Advance the machine by one transition."""
        return self._handlers[state](self, self._cursor.peek())

    def run(self) -> ContainerState | None:
        """Scan a whole marker line.

        Returns:
            State for the new block on ACCEPT, None on REJECT.
        """
        prefix_width = self._line_prefix_width()
        state = HeaderState.START
        while state not in TERMINAL_STATES:
            state = self.step(state)
        if state is HeaderState.REJECT:
            return None
        return ContainerState(required_indent=prefix_width + self._ctx.config.tab_size)

    def _line_prefix_width(self) -> int:
        tail = self._cursor.tail()
        if tail is not None and tail.type is TokenType.LINE_PREFIX:
            return tail.width
        return 0

    # =========================================================================
    # Transitions
    # =========================================================================

    def _start(self, char: str) -> HeaderState:
        if char != MARKER_CHAR:
            return HeaderState.REJECT
        if self._ctx.interrupt and not self._ctx.config.interrupt_paragraph:
            return HeaderState.REJECT
        self._cursor.enter(TokenType.TABBED)
        return HeaderState.EQUALS

    def _equals_sign(self, char: str) -> HeaderState:
        if char == MARKER_CHAR:
            # ==== is not a tab marker
            if self._equals == MARKER_COUNT:
                return HeaderState.REJECT
            self._equals += 1
            self._cursor.consume()
            return HeaderState.EQUALS
        if self._equals != MARKER_COUNT:
            return HeaderState.REJECT
        return HeaderState.FLAGS

    def _flag(self, char: str) -> HeaderState:
        if char in FLAG_CHARS:
            if char in self.flags:
                return HeaderState.REJECT
            if not self.flags:
                self._cursor.enter(TokenType.TABBED_FLAG)
            self.flags += char
            self._cursor.consume()
            return HeaderState.FLAGS
        if self.flags:
            self._cursor.exit(TokenType.TABBED_FLAG)
        return HeaderState.SPACE

    def _space(self, char: str) -> HeaderState:
        if char not in SPACE_CHARS:
            return HeaderState.REJECT
        factory_space(self._cursor, TokenType.WHITESPACE)
        return HeaderState.TITLE_OPEN

    def _title_start(self, char: str) -> HeaderState:
        if char != QUOTE:
            return HeaderState.REJECT
        self._cursor.consume()
        self._cursor.enter(TokenType.TABBED_TITLE)
        return HeaderState.TITLE_INSIDE

    def _title_inside(self, char: str) -> HeaderState:
        if char == QUOTE:
            if self._data_open:
                self._cursor.exit(TokenType.DATA)
            self._cursor.exit(TokenType.TABBED_TITLE)
            self._cursor.consume()
            return HeaderState.TITLE_AFTER
        # The header is one line; an unclosed title never matches
        if not char or char in LINE_ENDINGS:
            return HeaderState.REJECT
        if not self._data_open:
            self._cursor.enter(TokenType.DATA)
            self._data_open = True
        self._cursor.consume()
        return HeaderState.TITLE_INSIDE

    def _title_after(self, char: str) -> HeaderState:
        # A header needs a body: the line must end, not the input
        if not char:
            return HeaderState.REJECT
        if char in LINE_ENDINGS:
            return HeaderState.ACCEPT
        if char in SPACE_CHARS:
            factory_space(self._cursor, TokenType.WHITESPACE)
            return HeaderState.TITLE_AFTER
        return HeaderState.REJECT


HeaderScanner._handlers = {
    HeaderState.START: HeaderScanner._start,
    HeaderState.EQUALS: HeaderScanner._equals_sign,
    HeaderState.FLAGS: HeaderScanner._flag,
    HeaderState.SPACE: HeaderScanner._space,
    HeaderState.TITLE_OPEN: HeaderScanner._title_start,
    HeaderState.TITLE_INSIDE: HeaderScanner._title_inside,
    HeaderState.TITLE_AFTER: HeaderScanner._title_after,
}


# =============================================================================
# Construct entry points
# =============================================================================


def tokenize_tabbed_start(ctx: TokenizeContext) -> ContainerState | None:
    """Try to open a tabbed block at the cursor.

    The block's TABBED span stays open on success. On failure nothing is
    consumed.
    """
    return ctx.cursor.attempt(HeaderScanner(ctx).run)


def tokenize_tabbed_continuation(ctx: TokenizeContext) -> Continuation:
    """Decide whether the current line still belongs to the open block.

    Blank lines always continue. Other lines must carry exactly the block's
    required indentation.

    Raises:
        ContainerStateError: If no block state is in the context.
    """
    state = ctx.require_state("tabbed", "continuation")
    state.close_flow_pending = False
    cursor = ctx.cursor

    if cursor.is_blank_line():
        factory_space(cursor, TokenType.TABBED_INDENT, state.required_indent + 1)
        return Continuation.CONTINUE

    if cursor.peek() in SPACE_CHARS and consume_width_exactly(
        cursor, TokenType.TABBED_INDENT, state.required_indent
    ):
        return Continuation.CONTINUE

    return _not_in_current_block(ctx, state)


def _not_in_current_block(ctx: TokenizeContext, state: ContainerState) -> Continuation:
    state.close_flow_pending = True
    # The closing block no longer interrupts anything
    ctx.interrupt = False

    def sibling_header() -> bool:
        factory_space(ctx.cursor, TokenType.LINE_PREFIX, ctx.prefix_limit)
        return tokenize_tabbed_start(ctx) is not None

    if ctx.cursor.check(sibling_header):
        return Continuation.SIBLING
    return Continuation.TERMINATE


def tokenize_tabbed_exit(ctx: TokenizeContext, index: int, point: Point) -> None:
    """Close the block's TABBED span.

    Raises:
        ContainerStateError: If no block state is in the context.
    """
    ctx.require_state("tabbed", "exit")
    ctx.cursor.insert_exit(TokenType.TABBED, index, point)


TABBED_CONSTRUCT = Construct(
    name="tabbed",
    trigger=MARKER_CHAR,
    tokenize=tokenize_tabbed_start,
    continuation=tokenize_tabbed_continuation,
    exit=tokenize_tabbed_exit,
)
