"""Pincel HighlightAccumulator — opt-in profiling for highlighting.

This module provides accumulated metrics during highlighting:
- Total profiling time
- Source length
- Tokens minted
- Calls per grammar
- Sources too long to colorize

Zero overhead when disabled (get_highlight_accumulator() returns None).

Example:
    from pincel import highlight_code
    from pincel.profiling import profiled_highlight

    # Normal call (no overhead)
    html = highlight_code("let x = 1", "js")

    # Profiled calls (opt-in)
    with profiled_highlight() as metrics:
        html = highlight_code("let x = 1", "js")

    print(metrics.summary())
    # {"total_ms": 0.1, "highlight_calls": 1, "source_length": 9, ...}

"""

from collections import Counter
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class HighlightAccumulator:
    """Accumulated metrics during highlighting.

    Attributes:
        start_time: Profiling start timestamp.
        highlight_calls: Number of highlight_code() calls recorded.
        source_length: Total length of highlighted sources.
        token_count: Total placeholders minted.
        fallback_count: Calls whose source exceeded max_source_length.
        grammar_calls: Calls per grammar name.

    """

    start_time: float = field(default_factory=perf_counter)
    highlight_calls: int = 0
    source_length: int = 0
    token_count: int = 0
    fallback_count: int = 0
    grammar_calls: Counter[str] = field(default_factory=Counter)

    def record_highlight(
        self,
        grammar: str,
        source_length: int,
        token_count: int,
        *,
        fallback: bool = False,
    ) -> None:
        """Record a highlight call.

        Args:
            grammar: Name of the grammar that ran.
            source_length: Length of the source string.
            token_count: Number of placeholders minted.
            fallback: True when the source was too long to colorize.

        """
        self.highlight_calls += 1
        self.source_length += source_length
        self.token_count += token_count
        self.grammar_calls[grammar] += 1
        if fallback:
            self.fallback_count += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of highlight metrics.

        Returns:
            Dict with total_ms, highlight_calls, source_length, token_count,
            fallback_count and grammar_calls.

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "highlight_calls": self.highlight_calls,
            "source_length": self.source_length,
            "token_count": self.token_count,
            "fallback_count": self.fallback_count,
            "grammar_calls": dict(self.grammar_calls),
        }


_accumulator: ContextVar[HighlightAccumulator | None] = ContextVar(
    "highlight_accumulator",
    default=None,
)


def get_highlight_accumulator() -> HighlightAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_highlight() -> Iterator[HighlightAccumulator]:
    """Context manager for profiled highlighting.

    Creates a HighlightAccumulator and makes it available via
    get_highlight_accumulator() for the duration of the with block.

    Yields:
        HighlightAccumulator populated by highlight_code() calls.

    """
    acc = HighlightAccumulator()
    token: Token[HighlightAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
