"""Tag renderer using StringBuilder pattern.

Maps the event stream to nested tags:

    === "C++"            <tabbed><tabbed-title>C++</tabbed-title>
        Some text    ->  <p>Some text</p>
                         </tabbed>

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single TagRenderer instance.
Rendering the same events twice gives byte-identical output.
"""

import html
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from pestanas.errors import RenderError
from pestanas.stringbuilder import StringBuilder
from pestanas.tokens import Event, Token, TokenType


def html_escape(s: str) -> str:
    """Escape HTML special characters.

    Escapes <, >, &, " but not single quotes.
    """
    return html.escape(s, quote=False).replace('"', "&quot;")


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Attributes:
        buffers: Stack of builders; the last one receives output
        open_spans: Span kinds entered and not yet exited
        flow_depth: Number of open paragraph/code spans
    """

    buffers: list[StringBuilder] = field(default_factory=lambda: [StringBuilder()])
    open_spans: list[TokenType] = field(default_factory=list)
    flow_depth: int = 0

    @property
    def out(self) -> StringBuilder:
        return self.buffers[-1]

    def buffer(self) -> None:
        """Start capturing output."""
        self.buffers.append(StringBuilder())

    def resume(self) -> str:
        """Stop capturing and return what was captured."""
        return self.buffers.pop().build()

    def line_ending_if_needed(self) -> None:
        out = self.out
        if out and not out.ends_with("\n"):
            out.append("\n")


Handler = Callable[["TagRenderer", RenderContext, Token], None]


class TagRenderer:
    """Render an event stream to tags.

    Usage:
        >>> from pestanas import tokenize
        >>> TagRenderer().render(tokenize('=== "A"\\n    x\\n'))
        '<tabbed><tabbed-title>A</tabbed-title>\\n<p>x</p>\\n</tabbed>'

    Flag and indentation spans produce no output.

    """

    def render(self, events: Sequence[Event]) -> str:
        """Render events to a string.

        Raises:
            RenderError: If the events are not balanced.
        """
        ctx = RenderContext()
        for event in events:
            token = event.token
            if event.is_enter:
                ctx.open_spans.append(token.type)
                handler = self._enter.get(token.type)
            else:
                if not ctx.open_spans or ctx.open_spans[-1] is not token.type:
                    expected = ctx.open_spans[-1].name if ctx.open_spans else "nothing"
                    raise RenderError(f"exit of {token.type.name} while {expected} is open")
                ctx.open_spans.pop()
                handler = self._exit.get(token.type)
            if handler is not None:
                handler(self, ctx, token)

        if ctx.open_spans:
            names = ", ".join(t.name for t in ctx.open_spans)
            raise RenderError(f"unclosed spans at end of events: {names}")
        return ctx.out.build()

    # =========================================================================
    # Tabbed blocks
    # =========================================================================

    def _enter_tabbed(self, ctx: RenderContext, token: Token) -> None:
        ctx.line_ending_if_needed()
        ctx.out.append("<tabbed>")

    def _exit_tabbed(self, ctx: RenderContext, token: Token) -> None:
        ctx.line_ending_if_needed()
        ctx.out.append("</tabbed>")

    def _enter_title(self, ctx: RenderContext, token: Token) -> None:
        ctx.buffer()

    def _exit_title(self, ctx: RenderContext, token: Token) -> None:
        data = ctx.resume()
        ctx.out.append("<tabbed-title>").append(data).append("</tabbed-title>")

    # =========================================================================
    # Flow
    # =========================================================================

    def _enter_paragraph(self, ctx: RenderContext, token: Token) -> None:
        ctx.line_ending_if_needed()
        ctx.out.append("<p>")
        ctx.flow_depth += 1

    def _exit_paragraph(self, ctx: RenderContext, token: Token) -> None:
        ctx.out.append("</p>")
        ctx.flow_depth -= 1

    def _enter_code(self, ctx: RenderContext, token: Token) -> None:
        ctx.line_ending_if_needed()
        ctx.out.append("<pre><code>")
        ctx.flow_depth += 1

    def _exit_code(self, ctx: RenderContext, token: Token) -> None:
        ctx.out.append("\n</code></pre>")
        ctx.flow_depth -= 1

    def _exit_data(self, ctx: RenderContext, token: Token) -> None:
        ctx.out.append(html_escape(token.value))

    def _exit_line_ending(self, ctx: RenderContext, token: Token) -> None:
        if ctx.flow_depth:
            ctx.out.append("\n")

    _enter: dict[TokenType, Handler] = {
        TokenType.TABBED: _enter_tabbed,
        TokenType.TABBED_TITLE: _enter_title,
        TokenType.PARAGRAPH: _enter_paragraph,
        TokenType.CODE_INDENTED: _enter_code,
    }

    _exit: dict[TokenType, Handler] = {
        TokenType.TABBED: _exit_tabbed,
        TokenType.TABBED_TITLE: _exit_title,
        TokenType.PARAGRAPH: _exit_paragraph,
        TokenType.CODE_INDENTED: _exit_code,
        TokenType.DATA: _exit_data,
        TokenType.LINE_ENDING: _exit_line_ending,
    }
