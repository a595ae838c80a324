"""Tests for pincel.profiling — highlight profiling API."""

from pincel import HighlightConfig, highlight_code
from pincel.profiling import (
    HighlightAccumulator,
    get_highlight_accumulator,
    profiled_highlight,
)


class TestGetHighlightAccumulator:
    def test_returns_none_when_disabled(self) -> None:
        assert get_highlight_accumulator() is None

    def test_returns_none_outside_context(self) -> None:
        with profiled_highlight():
            pass
        assert get_highlight_accumulator() is None


class TestProfiledHighlight:
    def test_yields_accumulator(self) -> None:
        with profiled_highlight() as acc:
            assert isinstance(acc, HighlightAccumulator)

    def test_accumulator_available_inside_context(self) -> None:
        with profiled_highlight() as acc:
            assert get_highlight_accumulator() is acc

    def test_records_highlight_call(self) -> None:
        with profiled_highlight() as acc:
            highlight_code("42 + 7", "js")
        assert acc.highlight_calls == 1
        assert acc.source_length == len("42 + 7")
        assert acc.token_count == 2
        assert acc.grammar_calls == {"javascript": 1}

    def test_records_grammar_per_call(self) -> None:
        with profiled_highlight() as acc:
            highlight_code("ls", "bash")
            highlight_code("x", "cobol")
            highlight_code("@click", "pulse")
            highlight_code("1", "js")
        assert acc.highlight_calls == 4
        assert acc.grammar_calls == {"shell": 1, "plain": 1, "pulse": 1, "javascript": 1}

    def test_marker_characters_count_as_tokens(self) -> None:
        with profiled_highlight() as acc:
            highlight_code("\ue000", "plain")
        assert acc.token_count == 1

    def test_fallback_counted(self) -> None:
        config = HighlightConfig(max_source_length=3)
        with profiled_highlight() as acc:
            highlight_code("1 + 2", "js", config=config)
            highlight_code("1", "js", config=config)
        assert acc.fallback_count == 1
        assert acc.grammar_calls == {"plain": 1, "javascript": 1}

    def test_total_duration_positive(self) -> None:
        with profiled_highlight() as acc:
            highlight_code("const x = 1", "js")
        assert acc.total_duration_ms > 0


class TestSummary:
    def test_empty_summary(self) -> None:
        summary = HighlightAccumulator().summary()
        assert summary["highlight_calls"] == 0
        assert summary["source_length"] == 0
        assert summary["token_count"] == 0
        assert summary["fallback_count"] == 0
        assert summary["grammar_calls"] == {}

    def test_summary_after_highlight(self) -> None:
        with profiled_highlight() as acc:
            highlight_code("if (x) { return 1 }", "js")
        summary = acc.summary()
        assert summary["highlight_calls"] == 1
        assert summary["token_count"] == 3
        assert summary["grammar_calls"] == {"javascript": 1}
        assert isinstance(summary["total_ms"], float)
