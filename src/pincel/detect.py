"""Grammar detection for code blocks that do not name their language.

Documentation pages often label code blocks with a free-form header
("Terminal", "app.pulse", "vite.config.js") rather than a language class.
detect_grammar() guesses from that header first, then lets strong content
signals override it.

Example:
    >>> from pincel.detect import detect_grammar
    >>> detect_grammar("npm install pulse-js")
    <Grammar.SHELL: 'shell'>
    >>> detect_grammar("x = 1", header="Terminal")
    <Grammar.SHELL: 'shell'>
"""

from __future__ import annotations

from pincel.grammars import Grammar

SHELL_PREFIXES: tuple[str, ...] = ("npm ", "cd ", "npx ")
PULSE_MARKERS: tuple[str, ...] = ("@page", "state {", "view {")


def _grammar_from_header(header: str) -> Grammar | None:
    text = header.lower()
    if "pulse" in text:
        return Grammar.PULSE
    if "css" in text:
        # No CSS grammar; escape only
        return Grammar.PLAIN
    if "bash" in text or "terminal" in text:
        return Grammar.SHELL
    if "vite" in text:
        return Grammar.JAVASCRIPT
    return None


def detect_grammar(
    content: str,
    header: str | None = None,
    *,
    default: Grammar = Grammar.JAVASCRIPT,
) -> Grammar:
    """Guess the grammar of a code block.

    Content signals win over the header: Pulse markers anywhere in the
    code, or a shell command at the very start.

    Args:
        content: Code text of the block
        header: Label shown above the block (optional)
        default: Grammar when neither header nor content decide

    Returns:
        Detected Grammar
    """
    if any(marker in content for marker in PULSE_MARKERS):
        return Grammar.PULSE
    if content.startswith(SHELL_PREFIXES):
        return Grammar.SHELL

    if header:
        from_header = _grammar_from_header(header)
        if from_header is not None:
            return from_header

    return default
