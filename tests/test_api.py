"""Tests for the public API surface."""

from __future__ import annotations

import pytest

import pestanas
from pestanas import (
    CONSTRUCTS,
    Construct,
    ContainerState,
    Continuation,
    ParseConfig,
    get_construct,
    register_construct,
    to_html,
    tokenize,
)
from pestanas.constructs import constructs_for
from pestanas.scanner.context import TokenizeContext
from pestanas.tokens import TokenType


class TestExports:
    """Everything in __all__ is importable."""

    def test_version(self) -> None:
        assert pestanas.__version__ == "0.1.0"

    @pytest.mark.parametrize("name", pestanas.__all__)
    def test_all_names_exist(self, name: str) -> None:
        assert hasattr(pestanas, name)


class TestRegistry:
    """The construct registry."""

    def test_tabbed_registered(self) -> None:
        construct = get_construct("tabbed")
        assert construct.name == "tabbed"
        assert construct.trigger == "="

    def test_constructs_for_trigger(self) -> None:
        assert [c.name for c in constructs_for("=", ParseConfig())] == ["tabbed"]
        assert constructs_for("#", ParseConfig()) == []

    def test_constructs_for_respects_disabled(self) -> None:
        config = ParseConfig(disabled_constructs=frozenset({"tabbed"}))
        assert constructs_for("=", config) == []

    def test_register_custom_construct(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A registered construct takes part in tokenizing."""
        monkeypatch.setattr(pestanas.constructs, "CONSTRUCTS", dict(CONSTRUCTS))
        monkeypatch.setattr(pestanas.document, "CONSTRUCTS", pestanas.constructs.CONSTRUCTS)

        def start(ctx: TokenizeContext) -> ContainerState | None:
            ctx.cursor.enter(TokenType.TABBED)
            ctx.cursor.consume()
            return ContainerState(required_indent=1)

        def continuation(ctx: TokenizeContext) -> Continuation:
            return Continuation.TERMINATE

        def exit_block(ctx, index, point) -> None:
            ctx.cursor.insert_exit(TokenType.TABBED, index, point)

        custom = Construct(
            name="caret", trigger="^", tokenize=start, continuation=continuation, exit=exit_block
        )
        assert register_construct(custom) is custom
        assert get_construct("caret") is custom

        opened = [e for e in tokenize("^\nx\n") if e.is_enter and e.token.type is TokenType.TABBED]
        assert len(opened) == 1
        assert "caret" not in CONSTRUCTS


class TestToHtml:
    """One-step conversion."""

    def test_docstring_example(self) -> None:
        assert to_html('=== "C++"\n    Hello\n') == (
            "<tabbed><tabbed-title>C++</tabbed-title>\n<p>Hello</p>\n</tabbed>"
        )

    def test_config_keyword(self) -> None:
        config = ParseConfig(disabled_constructs=frozenset({"tabbed"}))
        assert "<tabbed>" not in to_html('=== "A"\n    x\n', config=config)
