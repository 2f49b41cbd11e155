"""Tests for the typed section view."""

from __future__ import annotations

from pestanas import TabbedSection, collect_sections, parse_sections, tokenize
from pestanas.location import Point


class TestCollectSections:
    """Rebuilding sections from events."""

    def test_fields(self) -> None:
        (section,) = parse_sections('===+ "A"\n    one\n    two\n')
        assert section == TabbedSection(
            title="A",
            flags="+",
            body=("one", "two"),
            start=Point(1, 1, 0),
            end=Point(4, 1, 25),
            children=(),
        )

    def test_body_text(self) -> None:
        (section,) = parse_sections('=== "A"\n    one\n\n    two\n')
        assert section.body_text == "one\n\ntwo"

    def test_start_after_line_prefix(self) -> None:
        (section,) = parse_sections('  === "A"\n      x\n')
        assert section.start == Point(1, 3, 2)

    def test_no_blocks(self) -> None:
        assert parse_sections("just text\n") == ()

    def test_collect_from_events(self) -> None:
        source = '=== "A"\n    x\n'
        assert collect_sections(tokenize(source), source) == parse_sections(source)

    def test_deep_nesting(self) -> None:
        source = '=== "1"\n    === "2"\n        === "3"\n            x\n'
        (first,) = parse_sections(source)
        (second,) = first.children
        (third,) = second.children
        assert third.title == "3"
        assert third.body == ("x",)
        assert second.body == ('=== "3"', "    x")

    def test_blank_line_in_nested_body(self) -> None:
        source = '=== "O"\n    === "I"\n        a\n\n        b\n'
        (outer,) = parse_sections(source)
        (inner,) = outer.children
        assert inner.body == ("a", "", "b")
        assert outer.body == ('=== "I"', "    a", "", "    b")

    def test_sections_are_hashable(self) -> None:
        sections = parse_sections('=== "A"\n    x\n=== "B"\n    y\n')
        assert len(set(sections)) == 2
