"""Rule pipelines: ordered (pattern, token class) pairs.

A pipeline is data. One generic loop, apply_rules(), runs every rule in
list order over the working buffer. Each rule scans the output of the rule
before it, so anything an earlier rule has turned into a placeholder is
invisible to the rules that follow. List order therefore encodes
precedence: strings before comments, comments before keywords, and so on.

A rule classifies either its whole match or one capture group of it. The
rest of the match is put back into the buffer unchanged, which lets a rule
demand context it does not colour (the ``(`` after a call site, the ``{``
after a block keyword).

Thread Safety:
Rule and Pipeline are frozen and safe to share across threads. All
per-call state lives in the PlaceholderRegistry passed to apply_rules().

"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from pincel.errors import RuleError
from pincel.placeholders import PlaceholderRegistry
from pincel.tokens import TokenClass


@dataclass(frozen=True, slots=True)
class Rule:
    """A single highlighting rule.

    Attributes:
        name: Short identifier used in logs and validation errors.
        pattern: Compiled pattern run against the placeholder-bearing buffer.
        token_class: Class given to the classified text.
        group: Capture group that is classified (0 = the whole match). Match
            text outside the group is re-emitted literally.

    """

    name: str
    pattern: re.Pattern[str]
    token_class: TokenClass
    group: int = 0

    def __post_init__(self) -> None:
        if self.group < 0 or self.group > self.pattern.groups:
            raise RuleError(
                self.name,
                f"group {self.group} not defined by pattern with "
                f"{self.pattern.groups} group(s)",
            )

    def apply(
        self,
        buffer: str,
        registry: PlaceholderRegistry,
        class_prefix: str = "token-",
    ) -> str:
        """Replace every match in ``buffer`` with a placeholder.

        Args:
            buffer: Current working buffer.
            registry: Registry receiving the minted tokens.
            class_prefix: Prefix for rendered CSS classes.

        Returns:
            The buffer with every match classified.
        """
        group = self.group

        def replace(match: re.Match[str]) -> str:
            start, end = match.span(group)
            if start < 0:
                # Optional group did not take part in this match
                return match.group(0)
            whole_start, whole_end = match.span()
            text = match.string
            return (
                text[whole_start:start]
                + registry.mint(text[start:end], self.token_class, class_prefix)
                + text[end:whole_end]
            )

        return self.pattern.sub(replace, buffer)


@dataclass(frozen=True, slots=True)
class Pipeline:
    """Ordered rules for one grammar.

    The escape remainder is not a rule: it is the terminal step the
    orchestrator applies after every pipeline, including the empty one.
    """

    name: str
    rules: tuple[Rule, ...] = ()

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)


EMPTY_PIPELINE = Pipeline("plain")


def apply_rules(
    buffer: str,
    pipeline: Pipeline,
    registry: PlaceholderRegistry,
    class_prefix: str = "token-",
) -> str:
    """Run every rule of ``pipeline`` over ``buffer`` in list order.

    Args:
        buffer: Source text, already marker-protected.
        pipeline: Rules to apply.
        registry: Per-call registry receiving the minted tokens.
        class_prefix: Prefix for rendered CSS classes.

    Returns:
        Buffer in which every classified span is a placeholder. Plain text
        is still unescaped.
    """
    for rule in pipeline:
        buffer = rule.apply(buffer, registry, class_prefix)
    return buffer
