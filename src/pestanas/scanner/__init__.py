"""Scanning primitives used by construct tokenizers.

- cursor.py: position, spans and checkpoint/restore backtracking
- space.py: whitespace-width matching
- context.py: per-tokenize context and ContainerState
"""

from __future__ import annotations

from pestanas.scanner.context import ContainerState, TokenizeContext
from pestanas.scanner.cursor import Checkpoint, Cursor
from pestanas.scanner.space import consume_width_exactly, factory_space

__all__ = [
    "Checkpoint",
    "ContainerState",
    "Cursor",
    "TokenizeContext",
    "consume_width_exactly",
    "factory_space",
]
