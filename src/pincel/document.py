"""Highlight every code block of a rendered HTML page.

highlight_document() is the batch driver around highlight_code(): it parses
the page, finds each ``<code>`` element directly inside a ``<pre>``, takes
the element's text, decides the grammar and swaps the element content for
highlighted markup. The ``<pre>`` and ``<code>`` tags keep their attributes.
Code inside HTML comments, scripts or attribute values is not touched.

Grammar choice per block:
    1. a ``language-*`` class on the ``<code>`` tag
    2. detect_grammar() on the content, using a ``data-lang`` or
       ``data-header`` attribute (``<code>`` first, then ``<pre>``) as the
       header text
    3. HighlightConfig.default_grammar

Pages without code blocks are returned unchanged. Otherwise the page is
re-serialized by the parser: a fragment comes back as a fragment, a full
document (``<!DOCTYPE`` or ``<html``) as a full document.

Example:
    >>> from pincel.document import highlight_document
    >>> highlight_document('<pre><code class="language-js">let x = 1</code></pre>')
    '<pre><code class="language-js"><span class="token-keyword">let</span> x = <span class="token-number">1</span></code></pre>'
"""

from __future__ import annotations

import uuid
from typing import Any

from selectolax.lexbor import LexborHTMLParser

from pincel.config import HighlightConfig, get_highlight_config
from pincel.detect import detect_grammar
from pincel.grammars import Grammar, resolve_grammar
from pincel.highlighter import highlight_code
from pincel.utils.logger import get_logger

logger = get_logger(__name__)

CODE_BLOCK_SELECTOR = "pre > code"
HEADER_ATTRIBUTES: tuple[str, ...] = ("data-lang", "data-header")
LANGUAGE_CLASS_PREFIX = "language-"


def _language_class(node: Any) -> str | None:
    for name in (node.attributes.get("class") or "").split():
        if name.startswith(LANGUAGE_CLASS_PREFIX) and len(name) > len(LANGUAGE_CLASS_PREFIX):
            return name[len(LANGUAGE_CLASS_PREFIX):]
    return None


def _header_text(node: Any) -> str | None:
    for element in (node, node.parent):
        if element is None:
            continue
        for attr in HEADER_ATTRIBUTES:
            value = element.attributes.get(attr)
            if value:
                return value
    return None


def _block_grammar(node: Any, text: str, default: Grammar) -> Grammar:
    language = _language_class(node)
    if language is not None:
        return resolve_grammar(language)
    return detect_grammar(text, _header_text(node), default=default)


def _replace_content(node: Any, marker: str) -> None:
    """Replace every child of ``node`` with the text ``marker``."""
    child = node.child
    if child is None:
        return
    # Mutation invalidates sibling pointers; collect first
    children = []
    while child is not None:
        children.append(child)
        child = child.next
    for extra in children[1:]:
        extra.decompose()
    children[0].replace_with(marker)


def _inner_html(node: Any) -> str:
    if node is None:
        return ""
    return node.inner_html or ""


def _is_full_document(source: str) -> bool:
    return source.lstrip()[:9].lower().startswith(("<!doctype", "<html"))


def highlight_document(source: str, *, config: HighlightConfig | None = None) -> str:
    """Highlight every ``<pre><code>`` block in an HTML string.

    Block content is the text a browser would show: inner tags are
    dropped and entities decoded before highlighting.

    Args:
        source: HTML document or fragment
        config: Highlight config (defaults to the active context config)

    Returns:
        HTML with every code block highlighted
    """
    if not source:
        return source

    tree = LexborHTMLParser(source)
    blocks = tree.css(CODE_BLOCK_SELECTOR)
    if not blocks:
        logger.debug("No code blocks found")
        return source

    cfg = config or get_highlight_config()
    default = resolve_grammar(cfg.default_grammar)

    # Parser output escapes inserted text, so highlighted markup goes in by
    # string replacement of a per-call marker after serialization
    nonce = uuid.uuid4().hex
    replacements: dict[str, str] = {}
    for index, node in enumerate(blocks):
        text = node.text(deep=True) or ""
        grammar = _block_grammar(node, text, default)
        marker = f"pincel-{nonce}-{index}-block"
        replacements[marker] = highlight_code(text, grammar, config=cfg)
        _replace_content(node, marker)

    if _is_full_document(source):
        result = tree.html or ""
    else:
        # The parser moves fragment content into <head> and <body>
        result = _inner_html(tree.head) + _inner_html(tree.body)

    for marker, markup in replacements.items():
        result = result.replace(marker, markup, 1)

    logger.debug("Highlighted %d code block(s)", len(replacements))
    return result
