"""EventRenderer protocol: a stable interface for event stream renderers.

Any renderer that implements ``render(events) -> str`` conforms to this
protocol. The built-in ``TagRenderer`` is the reference implementation.

Example:
    from pestanas.renderers.protocol import EventRenderer

    def render_page(renderer: EventRenderer, events: list[Event]) -> str:
        return renderer.render(events)

"""

from collections.abc import Sequence
from typing import Protocol

from pestanas.tokens import Event


class EventRenderer(Protocol):
    """Protocol for event stream renderers."""

    def render(self, events: Sequence[Event]) -> str:
        """Render a balanced event stream to a string."""
        ...
