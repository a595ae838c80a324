"""ContextVar-based highlight configuration for Pincel.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Highlighting reads the active config on every call; nothing is cached
between calls.

Thread Safety:
    ContextVars are thread-local. Each thread has independent storage,
    so no locks are needed and race conditions are impossible.

Usage:
    # Explicit config for a single call
    from pincel import HighlightConfig, highlight_code

    html = highlight_code("let x = 1", "js", config=HighlightConfig(class_prefix="hljs-"))

    # Or set it for everything in the current context
    from pincel.config import highlight_config_context

    with highlight_config_context(HighlightConfig(class_prefix="hljs-")):
        html = highlight_code("let x = 1", "js")

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

DEFAULT_MAX_SOURCE_LENGTH = 200_000


@dataclass(frozen=True, slots=True)
class HighlightConfig:
    """Immutable highlight configuration.

    Frozen dataclass ensures thread-safety (immutable after creation).

    Attributes:
        class_prefix: Prefix of the CSS class on every token span
            (``token-`` renders ``<span class="token-keyword">``)
        max_source_length: Longest source, in characters, that is run
            through a grammar's rules. Longer sources are escaped without
            colorization, which bounds worst-case regex backtracking.
        default_grammar: Grammar identifier the document driver falls back
            to when a code block carries no language and detection finds
            nothing

    """

    class_prefix: str = "token-"
    max_source_length: int = DEFAULT_MAX_SOURCE_LENGTH
    default_grammar: str = "js"

    @classmethod
    def from_dict(cls, config_dict: dict) -> "HighlightConfig":
        """Create HighlightConfig from dictionary.

        Useful for framework integration where config comes from external
        sources (site settings, YAML files, etc.). Unknown keys are
        silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                HighlightConfig attribute names.

        Returns:
            New HighlightConfig instance with values from dict.

        Example:
            >>> config = HighlightConfig.from_dict({
            ...     "class_prefix": "hljs-",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.class_prefix
            'hljs-'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: HighlightConfig = HighlightConfig()

_highlight_config: ContextVar[HighlightConfig] = ContextVar(
    "highlight_config",
    default=_DEFAULT_CONFIG,
)


def get_highlight_config() -> HighlightConfig:
    """Get current highlight configuration (thread-local).

    Returns:
        The active HighlightConfig for this thread/context.

    """
    return _highlight_config.get()


def set_highlight_config(config: HighlightConfig) -> None:
    """Set highlight configuration for current context.

    Args:
        config: HighlightConfig instance to use for this context.

    """
    _highlight_config.set(config)


def reset_highlight_config() -> None:
    """Reset to default configuration.

    Reuses the module-level _DEFAULT_CONFIG singleton, avoiding allocation.

    """
    _highlight_config.set(_DEFAULT_CONFIG)


@contextmanager
def highlight_config_context(config: HighlightConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: HighlightConfig to use within the context.

    Yields:
        None

    Example:
        >>> with highlight_config_context(HighlightConfig(class_prefix="hl-")):
        ...     html = highlight_code("42", "js")
        >>> # Automatically reset to previous config

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _highlight_config.get()
    _highlight_config.set(config)
    try:
        yield
    finally:
        _highlight_config.set(previous)


__all__ = [
    "DEFAULT_MAX_SOURCE_LENGTH",
    "HighlightConfig",
    "get_highlight_config",
    "set_highlight_config",
    "reset_highlight_config",
    "highlight_config_context",
]
