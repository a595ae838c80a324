"""Placeholder registry for committed token spans.

Every classified span is cut out of the working buffer and replaced by an
opaque placeholder id. Later rules scan the placeholder-bearing buffer, so
they cannot see into a span that an earlier rule already classified. After
the last rule, the remaining plain text is escaped and each placeholder is
swapped back for its rendered markup.

Placeholder ids have the form ``OPEN <n> CLOSE``: two Private Use Area
code points around the decimal value of a per-registry counter. The
closing marker ends the number, so no id is a prefix of another, and no
highlighting rule targets either marker character.

Literal marker characters in the source would be confounding, so they are
protected first: each one becomes a placeholder that renders as its
numeric character reference.

Thread Safety:
PlaceholderRegistry instances are single-use per highlight_code() call.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from pincel.tokens import TokenClass
from pincel.utils.text import escape_entities

PLACEHOLDER_OPEN = "\ue000"
PLACEHOLDER_CLOSE = "\ue001"
MARKER_CHARS = PLACEHOLDER_OPEN + PLACEHOLDER_CLOSE

PLACEHOLDER_PATTERN = re.compile(f"{PLACEHOLDER_OPEN}([0-9]+){PLACEHOLDER_CLOSE}")
_MARKER_PATTERN = re.compile(f"[{MARKER_CHARS}]")


def make_placeholder(n: int) -> str:
    """Return the placeholder id for counter value ``n``."""
    return f"{PLACEHOLDER_OPEN}{n}{PLACEHOLDER_CLOSE}"


@dataclass(frozen=True, slots=True)
class Token:
    """A committed classification.

    Attributes:
        id: Placeholder id standing in for the span in the buffer.
        text: Buffer text the token covers. May contain ids of earlier
            tokens, which are rendered nested inside this one.
        token_class: Classification, or None for protected marker characters.
        markup: Final rendered fragment.

    """

    id: str
    text: str
    token_class: TokenClass | None
    markup: str


@dataclass(slots=True)
class PlaceholderRegistry:
    """Per-call list of minted placeholders and their rendered markup.

    Usage:
        registry = PlaceholderRegistry()
        buffer = registry.mint('"hi"', TokenClass.STRING) + " + 1"
        html = registry.restore(escape_entities(buffer))

    Complexity:
        - mint(): O(len(text))
        - restore(): O(len(buffer)), one scan, rendered spans never rescanned

    """

    _tokens: list[Token] = field(default_factory=list)
    _markup: dict[str, str] = field(default_factory=dict)
    _counter: int = 0

    def mint(
        self,
        text: str,
        token_class: TokenClass,
        class_prefix: str = "token-",
    ) -> str:
        """Classify ``text`` and return the placeholder that replaces it.

        Placeholders of earlier tokens inside ``text`` are rendered in
        place, so a span swallowed by a later rule keeps its own class.

        Args:
            text: Buffer text covered by the token.
            token_class: Classification of the span.
            class_prefix: Prefix for the span's CSS class.

        Returns:
            The new placeholder id.
        """
        inner = self.restore(escape_entities(text))
        markup = f'<span class="{class_prefix}{token_class.value}">{inner}</span>'
        return self._register(text, token_class, markup)

    def mint_literal(self, text: str, markup: str) -> str:
        """Register pre-rendered markup for ``text`` without a class.

        Args:
            text: Buffer text covered by the placeholder.
            markup: Markup emitted in its place on restore.

        Returns:
            The new placeholder id.
        """
        return self._register(text, None, markup)

    def protect_markers(self, text: str) -> str:
        """Replace literal marker characters in source text with placeholders.

        Must run before any rule so the source cannot forge a placeholder id.
        Each marker restores as a numeric character reference.
        """
        if PLACEHOLDER_OPEN not in text and PLACEHOLDER_CLOSE not in text:
            return text
        return _MARKER_PATTERN.sub(
            lambda m: self.mint_literal(m.group(), f"&#x{ord(m.group()):x};"),
            text,
        )

    def restore(self, buffer: str) -> str:
        """Substitute every placeholder in ``buffer`` with its markup.

        Raises:
            KeyError: If the buffer holds an id this registry never minted.
        """
        if PLACEHOLDER_OPEN not in buffer:
            return buffer
        return PLACEHOLDER_PATTERN.sub(lambda m: self._markup[m.group(0)], buffer)

    @property
    def tokens(self) -> tuple[Token, ...]:
        """Tokens in creation order."""
        return tuple(self._tokens)

    def _register(self, text: str, token_class: TokenClass | None, markup: str) -> str:
        placeholder = make_placeholder(self._counter)
        self._counter += 1
        self._tokens.append(Token(placeholder, text, token_class, markup))
        self._markup[placeholder] = markup
        return placeholder

    def __len__(self) -> int:
        """Return number of minted placeholders."""
        return len(self._tokens)
