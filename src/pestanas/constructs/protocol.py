"""Construct record shared by the document driver and construct modules.

A construct is a named container recognizer with three entry points:

- tokenize: run at a potential marker; returns the new block's
  ContainerState on a match, None otherwise
- continuation: run once per following line with the block's state in the
  context; returns a Continuation outcome
- exit: close the block's span at a given event index and point
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto

from pestanas.location import Point
from pestanas.scanner.context import ContainerState, TokenizeContext


class Continuation(Enum):
    """Outcome of a continuation step."""

    CONTINUE = auto()  # Line belongs to the open block
    TERMINATE = auto()  # Block ends; line goes back to the host
    SIBLING = auto()  # Block ends and a sibling block starts on this line


@dataclass(frozen=True, slots=True)
class Construct:
    """A pluggable container construct.

    Attributes:
        name: Identifier, also used in ParseConfig.disabled_constructs
        trigger: First character of the marker (after any line prefix)
        tokenize: Marker recognizer
        continuation: Per-line continuation recognizer
        exit: Span closer
    """

    name: str
    trigger: str
    tokenize: Callable[[TokenizeContext], ContainerState | None]
    continuation: Callable[[TokenizeContext], Continuation]
    exit: Callable[[TokenizeContext, int, Point], None]
