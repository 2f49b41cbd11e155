"""Per-tokenize context shared by construct scanners.

The context is passed by reference to every scanner function. It bundles
the cursor, the active configuration, the host's interrupt flag and the
ContainerState slot of the container currently being continued.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pestanas.config import ParseConfig
from pestanas.errors import ContainerStateError
from pestanas.scanner.cursor import Cursor


@dataclass(slots=True)
class ContainerState:
    """State owned by one open container block.

    Attributes:
        required_indent: Columns of indentation a body line must carry.
            Fixed when the header matches.
        close_flow_pending: Set by a continuation step that ends the block;
            read by the host within that same step.
    """

    required_indent: int
    close_flow_pending: bool = False


@dataclass(slots=True)
class TokenizeContext:
    """Mutable context for a single tokenize() call.

    Attributes:
        cursor: Scan cursor over the source
        config: Active configuration
        interrupt: True while the host looks for a new container with a
            paragraph still open
    """

    cursor: Cursor
    config: ParseConfig
    interrupt: bool = False
    _container_state: ContainerState | None = field(default=None, repr=False)

    @property
    def container_state(self) -> ContainerState | None:
        return self._container_state

    @container_state.setter
    def container_state(self, state: ContainerState | None) -> None:
        self._container_state = state

    def require_state(self, construct: str, step: str) -> ContainerState:
        """Return the container state, failing loudly if there is none.

        Raises:
            ContainerStateError: If no container state is established.
        """
        if self._container_state is None:
            raise ContainerStateError(construct, step)
        return self._container_state

    @property
    def code_indented_enabled(self) -> bool:
        return not self.config.is_disabled("code_indented")

    @property
    def prefix_limit(self) -> int | None:
        """Widest line prefix allowed in front of a container marker.

        Indented code claims a tab stop's worth of whitespace, so markers may
        only sit behind less than that unless indented code is disabled.
        """
        if self.code_indented_enabled:
            return self.config.tab_size - 1
        return None
