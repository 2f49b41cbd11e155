"""StringBuilder for O(n) output accumulation.

Appends to a list and joins once at the end. Renderers keep a stack of
builders so a span's output can be captured (buffered) and emitted later
as a whole, as the tabbed title is.

Thread Safety:
StringBuilder instances are local to each render() call.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("<tabbed>").append("</tabbed>").build()
            '<tabbed></tabbed>'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string; empty strings are skipped.

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
        return self

    def ends_with(self, suffix: str) -> bool:
        """True if the last appended part ends with ``suffix``.

        Parts are never empty, so the last part holds the last character.
        """
        return bool(self._parts) and self._parts[-1].endswith(suffix)

    def build(self) -> str:
        """Join all parts into the final string."""
        return "".join(self._parts)

    def __bool__(self) -> bool:
        """Return True if anything has been appended."""
        return bool(self._parts)
