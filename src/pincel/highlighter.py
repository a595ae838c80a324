"""Highlight orchestration and the Highlighter protocol.

highlight_code() is the whole engine in one call:

    raw text
      -> protect literal marker characters
      -> grammar pipeline (classified spans become placeholders)
      -> escape the remaining plain text
      -> restore placeholders to their rendered spans
      -> markup

Every call owns a fresh PlaceholderRegistry. No state survives between
calls, so the engine can be used from any number of threads at once.

Usage:
    >>> from pincel import highlight_code
    >>> highlight_code("42 + 7", "js")
    '<span class="token-number">42</span> + <span class="token-number">7</span>'

    # Plug into a Markdown renderer that accepts a highlighter
    >>> from pincel.highlighter import CodeHighlighter
    >>> CodeHighlighter().highlight("ls -la", "bash")
    '<pre><code class="language-bash">...</code></pre>'
"""

from __future__ import annotations

from html import escape
from typing import Protocol

from pincel.config import HighlightConfig, get_highlight_config
from pincel.grammars import GRAMMAR_ALIASES, Grammar, pipeline_for, resolve_grammar
from pincel.placeholders import PlaceholderRegistry
from pincel.profiling import get_highlight_accumulator
from pincel.rules import apply_rules
from pincel.utils.logger import get_logger
from pincel.utils.text import escape_entities

logger = get_logger(__name__)


class Highlighter(Protocol):
    """Protocol for syntax highlighters.

    A highlighter turns one code block and its language identifier into
    a complete ``<pre><code>`` element. Markdown renderers hold a single
    instance and call it from every render thread, so implementations
    keep no per-call state on the instance.
    """

    def highlight(self, code: str, language: str) -> str:
        """Highlight code with syntax colors.

        Args:
            code: Source code to highlight
            language: Language identifier (e.g., "pulse", "js", "bash")

        Returns:
            HTML markup with highlighting

        Any code text and any identifier are accepted. Code reaches the
        output entity-escaped, and tokens are styled through class names
        only. An unrecognised identifier yields the escaped code with no
        token spans.
        """
        ...

    def supports_language(self, language: str) -> bool:
        """Check if highlighter supports the given language.

        Answers False rather than raising for identifiers it cannot use,
        and accepts the same aliases as highlight() (``js``, ``sh``).
        """
        ...


def highlight_code(
    source: str,
    grammar: str | Grammar | None = "js",
    *,
    config: HighlightConfig | None = None,
) -> str:
    """Highlight source code as inline token spans.

    Total over any input text: unknown grammars, unterminated literals and
    empty sources all produce escaped output rather than an error.

    Args:
        source: Raw code text
        grammar: Language identifier or Grammar (unknown -> plain)
        config: Highlight config (defaults to the active context config)

    Returns:
        Escaped text with ``<span class="token-CLASS">`` elements; no
        ``<pre>``/``<code>`` wrapper

    Example:
        >>> highlight_code("<script>", "unknown-lang")
        '&lt;script&gt;'
    """
    cfg = config or get_highlight_config()
    resolved = resolve_grammar(grammar)

    fallback = False
    if resolved is not Grammar.PLAIN and len(source) > cfg.max_source_length:
        logger.warning(
            "Source of %d characters exceeds max_source_length=%d; "
            "rendering %s code without highlighting",
            len(source),
            cfg.max_source_length,
            resolved.value,
        )
        resolved = Grammar.PLAIN
        fallback = True

    pipeline = pipeline_for(resolved)
    registry = PlaceholderRegistry()

    buffer = registry.protect_markers(source)
    buffer = apply_rules(buffer, pipeline, registry, cfg.class_prefix)
    result = registry.restore(escape_entities(buffer))

    acc = get_highlight_accumulator()
    if acc is not None:
        acc.record_highlight(pipeline.name, len(source), len(registry), fallback=fallback)

    return result


def render_code_block(
    source: str,
    language: str = "",
    *,
    config: HighlightConfig | None = None,
) -> str:
    """Highlight source and wrap it in a ``<pre><code>`` block.

    Args:
        source: Raw code text
        language: Language identifier; becomes the ``language-*`` class
        config: Highlight config (defaults to the active context config)

    Returns:
        ``<pre><code class="language-…">…</code></pre>``
    """
    highlighted = highlight_code(source, language or None, config=config)
    lang_class = f' class="language-{escape(language)}"' if language else ""
    return f"<pre><code{lang_class}>{highlighted}</code></pre>"


class CodeHighlighter:
    """Pincel-backed highlighter implementing the Highlighter protocol.

    Usage:
        >>> highlighter = CodeHighlighter(HighlightConfig(class_prefix="hljs-"))
        >>> html = highlighter.highlight("const x = 1", "js")
    """

    __slots__ = ("_config",)

    def __init__(self, config: HighlightConfig | None = None) -> None:
        """Initialize highlighter.

        Args:
            config: Fixed config for every call (None = active context config)
        """
        self._config = config

    def highlight(self, code: str, language: str) -> str:
        """Highlight code as a complete ``<pre><code>`` block."""
        return render_code_block(code, language, config=self._config)

    def supports_language(self, language: str) -> bool:
        """True if ``language`` names a grammar with rules."""
        if not isinstance(language, str) or not language:
            return False
        grammar = GRAMMAR_ALIASES.get(language.strip().lower(), Grammar.PLAIN)
        return grammar is not Grammar.PLAIN
