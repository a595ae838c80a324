"""Property-based tests for highlighter invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

import html
import re

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from pincel import Grammar, highlight_code
from pincel.placeholders import MARKER_CHARS
from pincel.utils.text import escape_entities

# Characters that exercise every rule: quotes, comment openers, digits,
# directives, shell flags and the placeholder markers themselves
CODE_ALPHABET = "abcfiorstuvwlenp0123456789 \t\n\"'`\\/*@#-(){}.<>&;=+" + "".join(MARKER_CHARS)

SPAN_TAG = re.compile(
    r'<span class="token-(?:string|comment|directive|keyword|number|function)">|</span>'
)
BARE_AMPERSAND = re.compile(r"&(?!(?:amp|lt|gt|#xe000|#xe001);)")

sources = st.one_of(st.text(max_size=300), st.text(alphabet=CODE_ALPHABET, max_size=300))
grammars = st.sampled_from(list(Grammar))


class TestOutputSafety:
    """Only token spans survive as markup; everything else is escaped text."""

    @given(sources, grammars)
    @settings(max_examples=300)
    def test_no_raw_markup_outside_spans(self, source: str, grammar: Grammar) -> None:
        stripped = SPAN_TAG.sub("", highlight_code(source, grammar))
        assert "<" not in stripped
        assert ">" not in stripped
        assert not BARE_AMPERSAND.search(stripped)

    @given(sources, grammars)
    @settings(max_examples=300)
    def test_no_marker_characters_in_output(self, source: str, grammar: Grammar) -> None:
        result = highlight_code(source, grammar)
        assert not any(ch in result for ch in MARKER_CHARS)

    @given(sources, grammars)
    @settings(max_examples=200)
    def test_spans_balanced(self, source: str, grammar: Grammar) -> None:
        result = highlight_code(source, grammar)
        opened = len(re.findall(r'<span class="token-', result))
        assert opened == result.count("</span>")


class TestTextPreservation:
    """Highlighting never adds, drops or reorders source characters."""

    @given(sources, grammars)
    @settings(max_examples=300)
    def test_unescaped_text_equals_source(self, source: str, grammar: Grammar) -> None:
        stripped = SPAN_TAG.sub("", highlight_code(source, grammar))
        assert html.unescape(stripped) == source

    @given(sources)
    @settings(max_examples=200)
    def test_plain_is_pure_escape(self, source: str) -> None:
        assume(not any(ch in source for ch in MARKER_CHARS))
        assert highlight_code(source, Grammar.PLAIN) == escape_entities(source)


class TestDeterminism:
    @given(sources, grammars)
    @settings(max_examples=100)
    def test_same_input_same_output(self, source: str, grammar: Grammar) -> None:
        assert highlight_code(source, grammar) == highlight_code(source, grammar)

    @given(st.text(alphabet=CODE_ALPHABET, max_size=100))
    @settings(max_examples=100)
    def test_grammar_alias_equivalent(self, source: str) -> None:
        assert highlight_code(source, "sh") == highlight_code(source, Grammar.SHELL)
        assert highlight_code(source, "javascript") == highlight_code(source, "js")


class TestSpecialCharacterHandling:
    @given(st.text(alphabet="\"'`\\\n", max_size=200))
    @settings(max_examples=100)
    def test_quote_soup(self, source: str) -> None:
        """Unbalanced and escaped quotes never crash."""
        for grammar in Grammar:
            highlight_code(source, grammar)

    @given(st.text(alphabet="/*\n x", max_size=200))
    @settings(max_examples=100)
    def test_comment_soup(self, source: str) -> None:
        result = highlight_code(source, Grammar.JAVASCRIPT)
        assert html.unescape(SPAN_TAG.sub("", result)) == source
