"""
Pestañas — pymdown-style tabbed sections for a line-oriented markdown tokenizer

Recognizes tabbed blocks made of a ``===`` marker line, optional flags and a
quoted title, followed by a body indented one tab stop past the marker:

    === "C++"
        Content of the first tab.

    ===! "Python"
        Content of the second tab.

Quick Start:
    >>> from pestanas import to_html
    >>> print(to_html('=== "C++"\\n    Hello\\n'))
    <tabbed><tabbed-title>C++</tabbed-title>
    <p>Hello</p>
    </tabbed>

    >>> # Typed view of the blocks
    >>> from pestanas import parse_sections
    >>> parse_sections('===+ "A"\\n    one\\n')[0].flags
    '+'

Installation:
    pip install pestanas              # Zero runtime dependencies
    pip install pestanas[test]        # + pytest and hypothesis
"""

from collections.abc import Sequence

from pestanas.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from pestanas.constructs import (
    CONSTRUCTS,
    Construct,
    Continuation,
    get_construct,
    register_construct,
)
from pestanas.document import Document
from pestanas.errors import (
    ConfigError,
    ContainerStateError,
    PestanasError,
    RenderError,
    SpanStackError,
)
from pestanas.location import Point
from pestanas.renderers import EventRenderer, TagRenderer
from pestanas.scanner.context import ContainerState
from pestanas.sections import TabbedSection, collect_sections
from pestanas.tokens import Event, EventKind, Token, TokenType

__version__ = "0.1.0"


def tokenize(
    source: str,
    *,
    config: ParseConfig | None = None,
    source_file: str | None = None,
) -> list[Event]:
    """Tokenize source into a balanced enter/exit event stream.

    Args:
        source: Markdown source text
        config: Configuration; the ambient one (see parse_config_context) when None
        source_file: Optional source file path for log messages

    Returns:
        Events in document order
    """
    return Document(source, config=config, source_file=source_file).tokenize()


def render(events: Sequence[Event], renderer: EventRenderer | None = None) -> str:
    """Render an event stream.

    Args:
        events: Balanced event stream from tokenize()
        renderer: Any EventRenderer; TagRenderer when None
    """
    return (renderer or TagRenderer()).render(events)


def to_html(source: str, *, config: ParseConfig | None = None) -> str:
    """Tokenize and render in one step.

    Example:
        >>> to_html('=== "A"\\n    x\\n')
        '<tabbed><tabbed-title>A</tabbed-title>\\n<p>x</p>\\n</tabbed>'
    """
    return render(tokenize(source, config=config))


def parse_sections(
    source: str, *, config: ParseConfig | None = None
) -> tuple[TabbedSection, ...]:
    """Tokenize source and return its top-level tabbed sections."""
    return collect_sections(tokenize(source, config=config), source)


__all__ = [
    # Main API
    "tokenize",
    "render",
    "to_html",
    "parse_sections",
    "Document",
    "TagRenderer",
    "EventRenderer",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Constructs
    "CONSTRUCTS",
    "Construct",
    "ContainerState",
    "Continuation",
    "get_construct",
    "register_construct",
    # Tokens and results
    "Event",
    "EventKind",
    "Point",
    "TabbedSection",
    "Token",
    "TokenType",
    "collect_sections",
    # Errors
    "PestanasError",
    "ConfigError",
    "ContainerStateError",
    "RenderError",
    "SpanStackError",
    "__version__",
]
