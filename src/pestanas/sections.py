"""Typed summary of the tabbed blocks in an event stream.

Rebuilds a tree of TabbedSection values from tokenizer events, so callers
can inspect titles, flags and bodies without walking events themselves.

Example:
    >>> from pestanas import parse_sections
    >>> (section,) = parse_sections('===+ "A"\\n    one\\n    two\\n')
    >>> section.title, section.flags, section.body
    ('A', '+', ('one', 'two'))

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from pestanas.location import Point
from pestanas.tokens import Event, Token, TokenType


@dataclass(frozen=True, slots=True)
class TabbedSection:
    """A closed tabbed block.

    Attributes:
        title: Text between the header's quotes
        flags: "", "+", "!", "+!" or "!+"
        body: Body lines with the block's own indentation removed; blank
            lines are ""
        start: Position of the first ``=``
        end: Where the block ends (start of the line that closed it)
        children: Tabbed blocks nested in the body
    """

    title: str
    flags: str
    body: tuple[str, ...]
    start: Point
    end: Point
    children: tuple[TabbedSection, ...] = ()

    @property
    def body_text(self) -> str:
        return "\n".join(self.body)


@dataclass(slots=True)
class _SectionBuilder:
    token: Token
    title: str = ""
    flags: str = ""
    indents: dict[int, Token] = field(default_factory=dict)
    children: list[TabbedSection] = field(default_factory=list)


def collect_sections(events: Sequence[Event], source: str) -> tuple[TabbedSection, ...]:
    """Build the tree of top-level tabbed sections.

    Body indentation spans are matched to blocks by position on the line:
    the first TABBED_INDENT of a line belongs to the outermost block open
    on that line, the second to the next one in, and so on.

    Args:
        events: Balanced event stream from the tokenizer
        source: The source the events were produced from

    Returns:
        Top-level sections in document order
    """
    bounds = _line_bounds(source)
    roots: list[TabbedSection] = []
    stack: list[_SectionBuilder] = []
    indents_on_line: dict[int, int] = {}

    for event in events:
        token = event.token
        kind = token.type

        if kind is TokenType.TABBED:
            if event.is_enter:
                stack.append(_SectionBuilder(token))
                continue
            section = _build(stack.pop(), source, bounds)
            (stack[-1].children if stack else roots).append(section)
            continue

        if event.is_enter or not stack:
            continue

        if kind is TokenType.TABBED_TITLE:
            stack[-1].title = token.value
        elif kind is TokenType.TABBED_FLAG:
            stack[-1].flags = token.value
        elif kind is TokenType.TABBED_INDENT:
            line = token.start.line
            position = indents_on_line.get(line, 0)
            indents_on_line[line] = position + 1
            if position < len(stack):
                stack[position].indents[line] = token

    return tuple(roots)


def _build(builder: _SectionBuilder, source: str, bounds: list[tuple[int, int]]) -> TabbedSection:
    start = builder.token.start
    end = builder.token.end
    assert end is not None, "closed TABBED token must have an end"

    last_line = end.line if end.column > 1 else end.line - 1
    body: list[str] = []
    for line in range(start.line + 1, last_line + 1):
        line_start, line_end = bounds[line - 1]
        indent = builder.indents.get(line)
        text = source[indent.end.offset : line_end] if indent and indent.end else source[line_start:line_end]
        body.append(text if text.strip() else "")

    return TabbedSection(
        title=builder.title,
        flags=builder.flags,
        body=tuple(body),
        start=start,
        end=end,
        children=tuple(builder.children),
    )


def _line_bounds(source: str) -> list[tuple[int, int]]:
    """(start, end) offsets of every line, line endings excluded."""
    bounds: list[tuple[int, int]] = []
    start = 0
    pos = 0
    length = len(source)
    while pos < length:
        char = source[pos]
        if char == "\n" or char == "\r":
            bounds.append((start, pos))
            if char == "\r" and pos + 1 < length and source[pos + 1] == "\n":
                pos += 1
            start = pos + 1
        pos += 1
    bounds.append((start, length))
    return bounds
