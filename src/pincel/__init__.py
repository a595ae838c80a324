"""
Pincel — Syntax highlighting for documentation pages

Colorizes code snippets with an ordered, rule-based scanner. Classified
spans are locked behind placeholders so later rules can never reclassify
them, and every piece of unclassified text is HTML-escaped.

Quick Start:
    >>> from pincel import highlight_code
    >>> highlight_code('"hello"', "js")
    '<span class="token-string">"hello"</span>'

    >>> # Unknown languages are escaped, never rejected
    >>> highlight_code("<script>", "unknown-lang")
    '&lt;script&gt;'

    >>> # Whole pages
    >>> from pincel import highlight_document
    >>> html = highlight_document(page_html)

Grammars:
    pulse, js/javascript, bash/shell, and plain text for everything else.
"""

from pincel.config import (
    HighlightConfig,
    get_highlight_config,
    highlight_config_context,
    reset_highlight_config,
    set_highlight_config,
)
from pincel.detect import detect_grammar
from pincel.document import highlight_document
from pincel.errors import GrammarError, PincelError, RuleError
from pincel.grammars import (
    GRAMMAR_ALIASES,
    Grammar,
    pipeline_for,
    resolve_grammar,
    select_grammar,
    validate_grammar_table,
    validate_pipeline,
)
from pincel.highlighter import CodeHighlighter, Highlighter, highlight_code, render_code_block
from pincel.placeholders import PlaceholderRegistry, Token
from pincel.profiling import HighlightAccumulator, get_highlight_accumulator, profiled_highlight
from pincel.rules import EMPTY_PIPELINE, Pipeline, Rule, apply_rules
from pincel.tokens import TokenClass
from pincel.utils.text import escape_entities

__version__ = "0.1.0"

__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "highlight_code",
    "highlight_document",
    "render_code_block",
    "escape_entities",
    # Highlighter protocol
    "Highlighter",
    "CodeHighlighter",
    # Grammars
    "Grammar",
    "GRAMMAR_ALIASES",
    "detect_grammar",
    "pipeline_for",
    "resolve_grammar",
    "select_grammar",
    "validate_grammar_table",
    "validate_pipeline",
    # Rules and placeholders
    "EMPTY_PIPELINE",
    "Pipeline",
    "Rule",
    "apply_rules",
    "PlaceholderRegistry",
    "Token",
    "TokenClass",
    # Configuration (ContextVar-based)
    "HighlightConfig",
    "get_highlight_config",
    "set_highlight_config",
    "reset_highlight_config",
    "highlight_config_context",
    # Profiling
    "HighlightAccumulator",
    "get_highlight_accumulator",
    "profiled_highlight",
    # Errors
    "PincelError",
    "GrammarError",
    "RuleError",
]
