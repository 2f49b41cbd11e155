"""Flow content: what is left of a line once containers took their prefixes.

Only three kinds of flow are recognized:

- blank lines, which end any open paragraph or code block
- indented code, a tab stop of indentation with no paragraph open
- paragraphs, everything else; consecutive lines join one paragraph

An open PARAGRAPH or CODE_INDENTED span is closed in front of its last
line ending, so the line ending stays between blocks.
"""

from __future__ import annotations

from pestanas.location import Point
from pestanas.scanner.context import TokenizeContext
from pestanas.scanner.cursor import LINE_ENDINGS, SPACE_CHARS
from pestanas.scanner.space import factory_space
from pestanas.tokens import TokenType


class FlowTokenizer:
    """Tokenizes flow content one line at a time.

    Thread Safety:
        One instance per tokenize() call; holds per-document state.

    """

    __slots__ = ("_ctx", "_open", "_tail_index", "_tail_point")

    def __init__(self, ctx: TokenizeContext) -> None:
        self._ctx = ctx
        self._open: TokenType | None = None
        self._tail_index = 0
        self._tail_point = Point.start()

    @property
    def open_kind(self) -> TokenType | None:
        return self._open

    @property
    def in_paragraph(self) -> bool:
        return self._open is TokenType.PARAGRAPH

    def line(self) -> None:
        """Tokenize the rest of the current line, including its line ending."""
        cursor = self._ctx.cursor

        if cursor.is_blank_line():
            self.close()
            factory_space(cursor, TokenType.LINE_PREFIX)
            self._line_ending()
            return

        tab_size = self._ctx.config.tab_size
        indent = cursor.check(lambda: factory_space(cursor, TokenType.LINE_PREFIX))

        if self._ctx.code_indented_enabled and not self.in_paragraph and indent >= tab_size:
            if self._open is not TokenType.CODE_INDENTED:
                self.close()
                cursor.enter(TokenType.CODE_INDENTED)
                self._open = TokenType.CODE_INDENTED
            factory_space(cursor, TokenType.LINE_PREFIX, tab_size)
            self._data(trim=False)
        else:
            if self._open is TokenType.CODE_INDENTED:
                self.close()
            factory_space(cursor, TokenType.LINE_PREFIX)
            if self._open is None:
                cursor.enter(TokenType.PARAGRAPH)
                self._open = TokenType.PARAGRAPH
            self._data(trim=True)

        self._tail_index = len(cursor.events)
        self._tail_point = cursor.now()
        self._line_ending()

    def close(self) -> int | None:
        """Close the open flow block, if any.

        Returns:
            Event index the exit was inserted at, or None if nothing was open.
        """
        if self._open is None:
            return None
        self._ctx.cursor.insert_exit(self._open, self._tail_index, self._tail_point)
        self._open = None
        return self._tail_index

    def _data(self, *, trim: bool) -> None:
        cursor = self._ctx.cursor
        line_end = cursor.line_end_offset()
        content_end = line_end
        if trim:
            source = cursor.source
            while content_end > cursor.now().offset and source[content_end - 1] in SPACE_CHARS:
                content_end -= 1

        if cursor.now().offset < content_end:
            cursor.enter(TokenType.DATA)
            while cursor.now().offset < content_end:
                cursor.consume()
            cursor.exit(TokenType.DATA)

        if cursor.now().offset < line_end:
            cursor.enter(TokenType.WHITESPACE)
            while cursor.now().offset < line_end:
                cursor.consume()
            cursor.exit(TokenType.WHITESPACE)

    def _line_ending(self) -> None:
        cursor = self._ctx.cursor
        char = cursor.peek()
        if char not in LINE_ENDINGS:
            return
        cursor.enter(TokenType.LINE_ENDING)
        cursor.consume()
        if char == "\r" and cursor.peek() == "\n":
            cursor.consume()
        cursor.exit(TokenType.LINE_ENDING)
