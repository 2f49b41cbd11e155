"""Tests for the line-oriented document driver.

Covers how blocks open, continue, close and nest once the marker and
continuation scanners are wired into a whole document.
"""

from __future__ import annotations

import pytest

from pestanas import ParseConfig, parse_sections, to_html, tokenize
from pestanas.document import Document
from pestanas.errors import ConfigError
from pestanas.location import Point
from pestanas.tokens import TokenType


def types(source: str, **kwargs) -> list[tuple[str, TokenType]]:
    return [
        ("enter" if e.is_enter else "exit", e.token.type) for e in tokenize(source, **kwargs)
    ]


class TestBasicBlocks:
    """A single block and its body."""

    def test_body_lines(self) -> None:
        (section,) = parse_sections('=== "Title"\n    line one\n    line two\n')
        assert section.title == "Title"
        assert section.flags == ""
        assert section.body == ("line one", "line two")

    def test_header_only(self) -> None:
        (section,) = parse_sections('=== "A"\n')
        assert section.body == ()
        assert to_html('=== "A"\n') == "<tabbed><tabbed-title>A</tabbed-title>\n</tabbed>"

    def test_header_at_end_of_input_is_a_paragraph(self) -> None:
        assert parse_sections('=== "A"') == ()
        assert to_html('=== "A"') == "<p>=== &quot;A&quot;</p>"

    def test_body_without_final_line_ending(self) -> None:
        (section,) = parse_sections('=== "A"\n    x')
        assert section.body == ("x",)
        assert to_html('=== "A"\n    x') == (
            "<tabbed><tabbed-title>A</tabbed-title>\n<p>x</p>\n</tabbed>"
        )

    def test_extra_indentation_is_body_text(self) -> None:
        (section,) = parse_sections('=== "A"\n      x\n')
        assert section.body == ("  x",)

    def test_tab_indentation(self) -> None:
        (section,) = parse_sections('=== "A"\n\tx\n')
        assert section.body == ("x",)

    def test_crlf_line_endings(self) -> None:
        (section,) = parse_sections('=== "A"\r\n    x\r\n    y\r\n')
        assert section.title == "A"
        assert section.body == ("x", "y")

    def test_indented_code_in_body(self) -> None:
        assert to_html('=== "A"\n        code\n') == (
            "<tabbed><tabbed-title>A</tabbed-title>\n"
            "<pre><code>code\n</code></pre>\n"
            "</tabbed>"
        )

    def test_event_stream_shape(self) -> None:
        assert types('=== "A"\n    x\n') == [
            ("enter", TokenType.TABBED),
            ("enter", TokenType.WHITESPACE),
            ("exit", TokenType.WHITESPACE),
            ("enter", TokenType.TABBED_TITLE),
            ("enter", TokenType.DATA),
            ("exit", TokenType.DATA),
            ("exit", TokenType.TABBED_TITLE),
            ("enter", TokenType.LINE_ENDING),
            ("exit", TokenType.LINE_ENDING),
            ("enter", TokenType.TABBED_INDENT),
            ("exit", TokenType.TABBED_INDENT),
            ("enter", TokenType.PARAGRAPH),
            ("enter", TokenType.DATA),
            ("exit", TokenType.DATA),
            ("exit", TokenType.PARAGRAPH),
            ("enter", TokenType.LINE_ENDING),
            ("exit", TokenType.LINE_ENDING),
            ("exit", TokenType.TABBED),
        ]


class TestTermination:
    """Where a block ends."""

    def test_indent_boundary(self) -> None:
        source = '=== "A"\n    in\n   out\n'
        (section,) = parse_sections(source)
        assert section.body == ("in",)
        assert to_html(source) == (
            "<tabbed><tabbed-title>A</tabbed-title>\n<p>in</p>\n</tabbed>\n<p>out</p>"
        )

    def test_block_ends_where_closing_line_begins(self) -> None:
        (section,) = parse_sections('=== "A"\n    x\nafter\n')
        assert section.end == Point(3, 1, 14)

    def test_blank_lines_do_not_terminate(self) -> None:
        source = '=== "A"\n    one\n\n    two\n'
        (section,) = parse_sections(source)
        assert section.body == ("one", "", "two")
        assert to_html(source) == (
            "<tabbed><tabbed-title>A</tabbed-title>\n<p>one</p>\n<p>two</p>\n</tabbed>"
        )

    def test_whitespace_only_line_in_body(self) -> None:
        (section,) = parse_sections('=== "A"\n    one\n          \n    two\n')
        assert section.body == ("one", "", "two")

    def test_no_lazy_continuation(self) -> None:
        source = '=== "A"\n    one\ntwo\n'
        (section,) = parse_sections(source)
        assert section.body == ("one",)
        assert to_html(source).endswith("</tabbed>\n<p>two</p>")


class TestSiblings:
    """A header at the block's own level closes it and opens a new one."""

    def test_two_siblings(self) -> None:
        source = '=== "A"\n    a\n=== "B"\n    b\n'
        first, second = parse_sections(source)
        assert (first.title, first.body) == ("A", ("a",))
        assert (second.title, second.body) == ("B", ("b",))
        assert first.children == () and second.children == ()
        assert first.end == second.start == Point(3, 1, 14)
        assert to_html(source) == (
            "<tabbed><tabbed-title>A</tabbed-title>\n<p>a</p>\n</tabbed>\n"
            "<tabbed><tabbed-title>B</tabbed-title>\n<p>b</p>\n</tabbed>"
        )

    def test_siblings_separated_by_blank_line(self) -> None:
        sections = parse_sections('=== "A"\n    a\n\n=== "B"\n    b\n')
        assert [s.title for s in sections] == ["A", "B"]
        assert sections[0].body == ("a", "")

    def test_sibling_flags(self) -> None:
        sections = parse_sections('=== "A"\n    a\n===! "B"\n    b\n')
        assert [s.flags for s in sections] == ["", "!"]


class TestNesting:
    """Blocks inside blocks keep independent indentation."""

    SOURCE = '=== "Outer"\n    === "Inner"\n        deep\n    shallow\n'

    def test_tree(self) -> None:
        (outer,) = parse_sections(self.SOURCE)
        assert outer.title == "Outer"
        assert outer.body == ('=== "Inner"', "    deep", "shallow")
        (inner,) = outer.children
        assert inner.title == "Inner"
        assert inner.body == ("deep",)
        assert inner.end.line == 4

    def test_rendered(self) -> None:
        assert to_html(self.SOURCE) == (
            "<tabbed><tabbed-title>Outer</tabbed-title>\n"
            "<tabbed><tabbed-title>Inner</tabbed-title>\n"
            "<p>deep</p>\n"
            "</tabbed>\n"
            "<p>shallow</p>\n"
            "</tabbed>"
        )

    def test_nested_siblings(self) -> None:
        source = '=== "O"\n    === "A"\n        a\n    === "B"\n        b\n'
        (outer,) = parse_sections(source)
        assert [c.title for c in outer.children] == ["A", "B"]

    def test_closing_outer_closes_inner(self) -> None:
        source = '=== "O"\n    === "I"\n        x\ny\n'
        (outer,) = parse_sections(source)
        (inner,) = outer.children
        assert inner.end == outer.end


class TestConfiguration:
    """ParseConfig switches."""

    def test_indented_header_is_code_by_default(self) -> None:
        source = '    === "A"\n        x\n'
        assert parse_sections(source) == ()
        assert to_html(source) == '<pre><code>=== &quot;A&quot;\n    x\n</code></pre>'

    def test_indented_header_without_indented_code(self) -> None:
        config = ParseConfig(disabled_constructs=frozenset({"code_indented"}))
        (section,) = parse_sections('    === "A"\n        x\n', config=config)
        assert section.title == "A"
        assert section.body == ("x",)

    def test_header_behind_short_prefix(self) -> None:
        (section,) = parse_sections('  === "A"\n      x\n')
        assert section.body == ("x",)

    def test_header_interrupts_paragraph(self) -> None:
        html = to_html('para\n=== "A"\n    x\n')
        assert html.startswith("<p>para</p>\n<tabbed>")

    def test_interrupt_paragraph_disabled(self) -> None:
        config = ParseConfig(interrupt_paragraph=False)
        source = 'para\n=== "A"\n    x\n'
        assert parse_sections(source, config=config) == ()
        assert to_html(source, config=config) == "<p>para\n=== &quot;A&quot;\nx</p>"

    def test_header_after_blank_line_with_interrupt_disabled(self) -> None:
        config = ParseConfig(interrupt_paragraph=False)
        (section,) = parse_sections('para\n\n=== "A"\n    x\n', config=config)
        assert section.title == "A"

    def test_tabbed_disabled(self) -> None:
        config = ParseConfig(disabled_constructs=frozenset({"tabbed"}))
        assert to_html('=== "A"\n    x\n', config=config) == "<p>=== &quot;A&quot;\nx</p>"

    def test_tab_size(self) -> None:
        (section,) = parse_sections('=== "A"\n  x\n', config=ParseConfig(tab_size=2))
        assert section.body == ("x",)

    def test_unknown_disabled_construct(self) -> None:
        config = ParseConfig(disabled_constructs=frozenset({"tabs"}))
        with pytest.raises(ConfigError, match="tabs"):
            Document("x", config=config)


class TestFlow:
    """Flow content outside blocks."""

    def test_empty_source(self) -> None:
        assert tokenize("") == []

    def test_paragraph_lines_join(self) -> None:
        assert to_html("a\nb\n") == "<p>a\nb</p>"

    def test_blank_line_splits_paragraphs(self) -> None:
        assert to_html("a\n\nb\n") == "<p>a</p>\n<p>b</p>"

    def test_trailing_whitespace_trimmed(self) -> None:
        assert to_html("a   \n") == "<p>a</p>"

    def test_indented_line_continues_paragraph(self) -> None:
        assert to_html("a\n    b\n") == "<p>a\nb</p>"

    def test_indented_code(self) -> None:
        assert to_html("    a\n      b\n") == "<pre><code>a\n  b\n</code></pre>"

    def test_blank_line_closes_code(self) -> None:
        assert to_html("    a\n\n    b\n") == (
            "<pre><code>a\n</code></pre>\n<pre><code>b\n</code></pre>"
        )

    def test_source_file_in_debug_log(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("DEBUG", logger="pestanas"):
            tokenize('=== "A"\n    x\n', source_file="doc.md")
        messages = [r.getMessage() for r in caplog.records]
        assert any("doc.md" in m and "opened tabbed" in m for m in messages)
