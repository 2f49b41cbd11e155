"""Container constructs for the Pestañas document tokenizer.

Constructs are registered by name and looked up by the first character of
their marker. The document tokenizer offers a line to every enabled
construct whose trigger matches, in registration order.

Usage:
    >>> from pestanas.constructs import get_construct
    >>> get_construct("tabbed").trigger
    '='

Built-in constructs:
- tabbed: pymdown-style ``=== "Title"`` tabbed sections

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pestanas.constructs.protocol import Construct, Continuation

if TYPE_CHECKING:
    from pestanas.config import ParseConfig

__all__ = [
    "CONSTRUCTS",
    "Construct",
    "Continuation",
    "constructs_for",
    "get_construct",
    "register_construct",
]

# Registry of container constructs, keyed by name
CONSTRUCTS: dict[str, Construct] = {}


def register_construct(construct: Construct) -> Construct:
    """Register a construct under its name.

    Registering a second construct with the same name replaces the first.

    Returns:
        The construct, unchanged
    """
    CONSTRUCTS[construct.name] = construct
    return construct


def get_construct(name: str) -> Construct:
    """Get a registered construct by name.

    Raises:
        KeyError: If the name is not registered

    """
    if name not in CONSTRUCTS:
        available = ", ".join(sorted(CONSTRUCTS.keys()))
        raise KeyError(f"Unknown construct: {name!r}. Available: {available}")
    return CONSTRUCTS[name]


def constructs_for(char: str, config: ParseConfig) -> list[Construct]:
    """Enabled constructs whose marker starts with ``char``."""
    return [
        construct
        for construct in CONSTRUCTS.values()
        if construct.trigger == char and not config.is_disabled(construct.name)
    ]


# Import built-in constructs to register them
from pestanas.constructs.tabbed import TABBED_CONSTRUCT  # noqa: E402

register_construct(TABBED_CONSTRUCT)

__all__ += ["TABBED_CONSTRUCT"]
