"""Token and event definitions for the Pestañas tokenizer.

The tokenizer produces a flat stream of enter/exit events. Each event
refers to a Token: a typed span of the source bounded by two Points.
Events nest in strict LIFO order, so the stream describes a tree.

Thread Safety:
Tokens are mutable only while their span is open inside a single
tokenize() call. Once the event stream is returned, treat it as read-only.

"""

from dataclasses import dataclass
from enum import Enum, auto

from pestanas.location import Point


class TokenType(Enum):
    """Span kinds produced by the tokenizer.

    Organized by category:
    - Tabbed container spans
    - Flow content spans
    - Whitespace and line structure

    """

    # Tabbed container
    TABBED = auto()  # Whole block, marker line through last body line
    TABBED_FLAG = auto()  # + ! +! or !+
    TABBED_TITLE = auto()  # Text strictly between the quotes
    TABBED_INDENT = auto()  # Body line indentation owned by the block

    # Flow content
    PARAGRAPH = auto()
    CODE_INDENTED = auto()
    DATA = auto()  # Literal text

    # Whitespace and line structure
    LINE_PREFIX = auto()  # Leading whitespace not owned by a container
    WHITESPACE = auto()  # Inner or trailing whitespace
    LINE_ENDING = auto()  # \n, \r or \r\n


class EventKind(Enum):
    """Whether an event opens or closes its token's span."""

    ENTER = auto()
    EXIT = auto()


@dataclass(slots=True)
class Token:
    """A typed span of source text.

    ``end`` and ``value`` are filled in when the span is closed.

    Attributes:
        type: The span kind
        start: Where the span begins
        end: Where the span ends (None while open)
        value: Source text covered by the span ("" while open)

    """

    type: TokenType
    start: Point
    end: Point | None = None
    value: str = ""

    @property
    def width(self) -> int:
        """Visual width in columns (single-line spans only)."""
        if self.end is None:
            return 0
        return self.end.column - self.start.column

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self.start})"


@dataclass(frozen=True, slots=True)
class Event:
    """One entry of the event stream."""

    kind: EventKind
    token: Token

    @property
    def is_enter(self) -> bool:
        return self.kind is EventKind.ENTER

    def __repr__(self) -> str:
        return f"Event({self.kind.name}, {self.token.type.name})"
