"""Text processing utilities for Pincel.

Provides the entity escaper applied to every piece of source text that
reaches highlighted output.

Example:
    >>> from pincel.utils.text import escape_entities
    >>> escape_entities("a < b && c")
    'a &lt; b &amp;&amp; c'
"""

from __future__ import annotations


def escape_entities(text: str) -> str:
    """Escape the three HTML-sensitive characters in code text.

    Converts special characters to HTML entities:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;

    Quotes are left alone: the result is element content, never an
    attribute value. ``&`` is replaced first so the entities produced for
    ``<`` and ``>`` are not escaped a second time.

    Args:
        text: Text to escape

    Returns:
        Escaped text safe to place inside an HTML element

    Examples:
        >>> escape_entities("<script>")
        '&lt;script&gt;'
        >>> escape_entities("&lt;")
        '&amp;lt;'
    """
    if not text:
        return ""

    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
