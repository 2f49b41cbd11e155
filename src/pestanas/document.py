"""Line-oriented document tokenizer.

Drives container constructs and flow content one line at a time:

1. Every open container runs its continuation, outermost first. A container
   that does not continue is closed together with everything nested in it;
   its exit is placed where the line began.
2. New containers are looked for at the current position.
3. Whatever is left of the line is flow content.

At end of input, flow and all open containers are closed.

Thread Safety:
Document instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from dataclasses import dataclass

from pestanas.config import ParseConfig, get_parse_config
from pestanas.constructs import CONSTRUCTS, Construct, Continuation, constructs_for
from pestanas.constructs.flow import FlowTokenizer
from pestanas.errors import ConfigError
from pestanas.location import Point
from pestanas.scanner.context import ContainerState, TokenizeContext
from pestanas.scanner.cursor import Cursor
from pestanas.scanner.space import factory_space
from pestanas.tokens import Event, TokenType
from pestanas.utils.logger import get_logger

logger = get_logger(__name__)

# Disable-able constructs that are not containers
FLOW_CONSTRUCTS = frozenset({"code_indented"})


@dataclass(slots=True)
class OpenContainer:
    """A container block that is currently open."""

    construct: Construct
    state: ContainerState
    start: Point


class Document:
    """Tokenize a whole source into an enter/exit event stream.

    Usage:
            >>> events = Document('=== "A"\\n    body\\n').tokenize()
            >>> [e for e in events if e.token.type.name == "TABBED"]
        [Event(ENTER, TABBED), Event(EXIT, TABBED)]

    """

    __slots__ = (
        "_config",
        "_source_file",
        "_cursor",
        "_ctx",
        "_flow",
        "_stack",
        "_exit_index",
        "_exit_point",
    )

    def __init__(
        self,
        source: str,
        config: ParseConfig | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize document tokenizer.

        Args:
            source: Markdown source text
            config: Configuration; the ambient one when None
            source_file: Optional source file path for log messages

        Raises:
            ConfigError: If a disabled construct name is not known.
        """
        self._config = config if config is not None else get_parse_config()
        unknown = set(self._config.disabled_constructs) - FLOW_CONSTRUCTS - set(CONSTRUCTS)
        if unknown:
            available = ", ".join(sorted(FLOW_CONSTRUCTS | set(CONSTRUCTS)))
            raise ConfigError(
                f"Unknown construct(s): {', '.join(sorted(unknown))}. Available: {available}"
            )

        self._source_file = source_file
        self._cursor = Cursor(source, tab_size=self._config.tab_size)
        self._ctx = TokenizeContext(cursor=self._cursor, config=self._config)
        self._flow = FlowTokenizer(self._ctx)
        self._stack: list[OpenContainer] = []

        # Where exits of containers closed on the current line go
        self._exit_index = 0
        self._exit_point = Point.start()

    def tokenize(self) -> list[Event]:
        """Tokenize the source.

        Returns:
            Balanced list of enter/exit events in document order.

        Complexity: O(n * d) where d = container nesting depth
        """
        cursor = self._cursor
        while not cursor.at_eof():
            self._line()

        self._mark_exit_point()
        self._close_flow()
        self._exit_containers(0)
        return cursor.finish()

    # =========================================================================
    # Per-line driver
    # =========================================================================

    def _line(self) -> None:
        self._mark_exit_point()
        ctx = self._ctx

        continued = 0
        while continued < len(self._stack):
            container = self._stack[continued]
            ctx.container_state = container.state
            outcome = container.construct.continuation(ctx)

            if outcome is Continuation.CONTINUE:
                if container.state.close_flow_pending:
                    self._close_flow()
                continued += 1
                continue

            self._exit_containers(continued)
            if outcome is Continuation.SIBLING:
                self._open_container(container.construct)
            break

        ctx.container_state = None
        self._open_new_containers()
        self._flow.line()

    def _mark_exit_point(self) -> None:
        self._exit_index = len(self._cursor.events)
        self._exit_point = self._cursor.now()

    # =========================================================================
    # Containers
    # =========================================================================

    def _open_new_containers(self) -> None:
        cursor = self._cursor
        ctx = self._ctx
        while True:
            ctx.interrupt = self._flow.in_paragraph
            construct = cursor.check(self._match_container)
            if construct is None:
                break
            self._close_flow()
            ctx.interrupt = False
            if self._open_container(construct) is None:
                break
        ctx.interrupt = False

    def _match_container(self) -> Construct | None:
        factory_space(self._cursor, TokenType.LINE_PREFIX, self._ctx.prefix_limit)
        for construct in constructs_for(self._cursor.peek(), self._config):
            if construct.tokenize(self._ctx) is not None:
                return construct
        return None

    def _open_container(self, construct: Construct) -> ContainerState | None:
        cursor = self._cursor
        start = cursor.now()

        def open_block() -> ContainerState | None:
            factory_space(cursor, TokenType.LINE_PREFIX, self._ctx.prefix_limit)
            return construct.tokenize(self._ctx)

        state = cursor.attempt(open_block)
        if state is not None:
            self._stack.append(OpenContainer(construct, state, start))
            logger.debug(
                "%s:%s: opened %s block (indent %d, depth %d)",
                self._source_file or "<string>",
                start,
                construct.name,
                state.required_indent,
                len(self._stack),
            )
        return state

    def _exit_containers(self, start: int) -> None:
        """Close flow and every container from ``start`` inward."""
        if start >= len(self._stack):
            return
        self._close_flow()
        ctx = self._ctx
        for container in reversed(self._stack[start:]):
            ctx.container_state = container.state
            container.construct.exit(ctx, self._exit_index, self._exit_point)
            self._exit_index += 1
            logger.debug(
                "%s:%s: closed %s block opened at %s",
                self._source_file or "<string>",
                self._exit_point,
                container.construct.name,
                container.start,
            )
        del self._stack[start:]
        ctx.container_state = None

    def _close_flow(self) -> None:
        index = self._flow.close()
        if index is not None and index <= self._exit_index:
            self._exit_index += 1
