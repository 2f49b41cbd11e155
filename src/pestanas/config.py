"""ContextVar-based tokenize configuration for Pestañas.

A ParseConfig is passed explicitly to the document tokenizer. When none is
given, the ambient configuration for the current context is used instead.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed.

Usage:
    from pestanas.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(disabled_constructs=frozenset({"code_indented"}))):
        events = tokenize(source)

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from pestanas.errors import ConfigError


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable tokenize configuration.

    Attributes:
        tab_size: Indentation unit added to the marker line's own prefix to
            get the body indentation. Also the tab stop used for columns.
        disabled_constructs: Names of constructs that do not take part in
            tokenizing. Disabling "code_indented" lets container markers sit
            behind any amount of leading whitespace.
        interrupt_paragraph: Whether a tabbed header may interrupt an open
            paragraph.

    """

    tab_size: int = 4
    disabled_constructs: frozenset[str] = frozenset()
    interrupt_paragraph: bool = True

    def __post_init__(self) -> None:
        if self.tab_size < 1:
            raise ConfigError(f"tab_size must be >= 1, got {self.tab_size}")

    def is_disabled(self, name: str) -> bool:
        """Return True if the named construct is switched off."""
        return name in self.disabled_constructs

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Unknown keys are silently ignored. ``disabled_constructs`` may be any
        iterable of names.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "tab_size": 2,
            ...     "disabled_constructs": ["code_indented"],
            ...     "unknown_key": "ignored",
            ... })
            >>> config.tab_size
            2

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "disabled_constructs" in filtered:
            filtered["disabled_constructs"] = frozenset(filtered["disabled_constructs"])
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "pestanas_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get the ambient configuration for the current context."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set the ambient configuration for the current context."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset the ambient configuration to the default instance."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(tab_size=2)):
        ...     get_parse_config().tab_size
        2

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
]
