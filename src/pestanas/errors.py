"""Exception classes for Pestañas.

A malformed tabbed header is never an error: it simply does not match and
the line is handled as ordinary content. The exceptions below signal
programming or wiring defects and invalid configuration.
"""

from __future__ import annotations


class PestanasError(Exception):
    """Base exception for all Pestañas errors."""

    pass


class ContainerStateError(PestanasError):
    """A container scanner ran without an established ContainerState.

    Raised when a continuation or exit step is invoked for a block that was
    never opened by a successful header match.
    """

    def __init__(self, construct: str, step: str) -> None:
        """Initialize container state error.

        Args:
            construct: Name of the construct (e.g., "tabbed")
            step: Scanner step that found no state (e.g., "continuation")
        """
        self.construct = construct
        self.step = step
        super().__init__(f"Construct '{construct}': {step} invoked without container state")


class SpanStackError(PestanasError):
    """Spans were closed out of LIFO order, or left open at end of input."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        """Initialize span stack error.

        Args:
            message: Description of the violation
            offset: Source offset where it was detected (optional)
        """
        self.offset = offset
        location = f" (offset {offset})" if offset is not None else ""
        super().__init__(f"{message}{location}")


class ConfigError(PestanasError):
    """Invalid ParseConfig value."""

    pass


class RenderError(PestanasError):
    """Error during tag rendering.

    Raised when the renderer receives an unbalanced event stream.
    """

    pass
