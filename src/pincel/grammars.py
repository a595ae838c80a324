"""Grammar table: the closed set of supported grammars and their pipelines.

Grammars:
    PULSE       Pulse component files (JavaScript plus directives and blocks)
    JAVASCRIPT  Plain JavaScript
    SHELL       Shell commands and terminal sessions
    PLAIN       Anything else; no rules, the whole input is escaped

Rule order inside a pipeline is precedence. For the C-like grammars:

    1. string literals       a comment marker inside a string stays string
    2. line, block comments  keywords and numbers inside stay comment
    3. directives            before keywords so "@click" stays whole
    4. block introducers     keyword coloured, the "{" left alone
    5. keywords              whole words only
    6. numbers               never the digits of a placeholder id
    7. call sites            identifier coloured, the "(" left alone

Placeholder ids are drawn from the Private Use Area and no rule targets
those characters. validate_pipeline() checks this by probing every rule
against ids in hostile contexts; the built-in table is validated on import.

Example:
    >>> from pincel.grammars import Grammar, select_grammar
    >>> select_grammar("bash").name
    'shell'
    >>> select_grammar("cobol") is select_grammar(Grammar.PLAIN)
    True
"""

from __future__ import annotations

import re
from enum import Enum
from typing import assert_never

from pincel.errors import GrammarError
from pincel.placeholders import PLACEHOLDER_OPEN, PLACEHOLDER_PATTERN, make_placeholder
from pincel.rules import EMPTY_PIPELINE, Pipeline, Rule
from pincel.tokens import TokenClass
from pincel.utils.logger import get_logger

logger = get_logger(__name__)


class Grammar(Enum):
    """Supported grammars. Closed set; dispatch in pipeline_for() is exhaustive."""

    PULSE = "pulse"
    JAVASCRIPT = "javascript"
    SHELL = "shell"
    PLAIN = "plain"


GRAMMAR_ALIASES: dict[str, Grammar] = {
    "pulse": Grammar.PULSE,
    "js": Grammar.JAVASCRIPT,
    "javascript": Grammar.JAVASCRIPT,
    "mjs": Grammar.JAVASCRIPT,
    "bash": Grammar.SHELL,
    "sh": Grammar.SHELL,
    "shell": Grammar.SHELL,
    "console": Grammar.SHELL,
    "terminal": Grammar.SHELL,
    "plain": Grammar.PLAIN,
    "text": Grammar.PLAIN,
}

KEYWORDS: tuple[str, ...] = (
    "const", "let", "var", "function", "return", "if", "else", "for", "while",
    "import", "export", "from", "class", "extends", "new", "this", "async",
    "await", "try", "catch", "throw", "default", "switch", "case", "break",
    "continue", "typeof", "instanceof",
)

DIRECTIVES: tuple[str, ...] = (
    "page", "click", "submit", "change", "input", "focus", "blur",
    "keydown", "keyup", "route",
)

BLOCK_KEYWORDS: tuple[str, ...] = ("state", "view", "style", "actions")


# =============================================================================
# Rules
# =============================================================================

# A quote right after a backslash never opens a string
STRING_RULE = Rule(
    "string",
    re.compile(r"""(?<!\\)(['"`])(?:(?!\1)[^\\]|\\.)*?\1""", re.DOTALL),
    TokenClass.STRING,
)
LINE_COMMENT_RULE = Rule("line-comment", re.compile(r"//.*$", re.MULTILINE), TokenClass.COMMENT)
# The body never spans another "/*", so an unclosed opener fails at the next one
BLOCK_COMMENT_RULE = Rule(
    "block-comment",
    re.compile(r"/\*(?:(?!/\*).)*?\*/", re.DOTALL),
    TokenClass.COMMENT,
)
DIRECTIVE_RULE = Rule(
    "directive",
    re.compile(rf"@(?:{'|'.join(DIRECTIVES)})\b"),
    TokenClass.DIRECTIVE,
)
BLOCK_KEYWORD_RULE = Rule(
    "block-keyword",
    re.compile(rf"\b({'|'.join(BLOCK_KEYWORDS)})\s*\{{"),
    TokenClass.KEYWORD,
    group=1,
)
KEYWORD_RULE = Rule("keyword", re.compile(rf"\b(?:{'|'.join(KEYWORDS)})\b"), TokenClass.KEYWORD)
# Digits right after PLACEHOLDER_OPEN belong to a placeholder id
NUMBER_RULE = Rule(
    "number",
    re.compile(rf"(?<!{PLACEHOLDER_OPEN})\b\d+(?:\.\d*)?\b"),
    TokenClass.NUMBER,
)
CALL_RULE = Rule("call", re.compile(r"\b([a-zA-Z_]\w*)\s*\("), TokenClass.FUNCTION, group=1)

SHELL_COMMENT_RULE = Rule(
    "shell-comment",
    re.compile(r"(?<!\S)#.*$", re.MULTILINE),
    TokenClass.COMMENT,
)
SHELL_COMMAND_RULE = Rule("command", re.compile(r"^\w+", re.MULTILINE), TokenClass.FUNCTION)
SHELL_FLAG_RULE = Rule("flag", re.compile(r"\s(--?\w[\w-]*)"), TokenClass.KEYWORD, group=1)


# =============================================================================
# Pipelines
# =============================================================================

JAVASCRIPT_PIPELINE = Pipeline(
    "javascript",
    (
        STRING_RULE,
        LINE_COMMENT_RULE,
        BLOCK_COMMENT_RULE,
        KEYWORD_RULE,
        NUMBER_RULE,
        CALL_RULE,
    ),
)

PULSE_PIPELINE = Pipeline(
    "pulse",
    (
        STRING_RULE,
        LINE_COMMENT_RULE,
        BLOCK_COMMENT_RULE,
        DIRECTIVE_RULE,
        BLOCK_KEYWORD_RULE,
        KEYWORD_RULE,
        NUMBER_RULE,
        CALL_RULE,
    ),
)

SHELL_PIPELINE = Pipeline(
    "shell",
    (
        SHELL_COMMENT_RULE,
        SHELL_COMMAND_RULE,
        SHELL_FLAG_RULE,
    ),
)


def resolve_grammar(identifier: str | Grammar | None) -> Grammar:
    """Map a language identifier to a Grammar.

    Lookup is case-insensitive. Unknown, empty and None identifiers
    resolve to Grammar.PLAIN; that is not an error.

    Args:
        identifier: Language name or alias (e.g., "js", "bash"), or a Grammar

    Returns:
        The matching Grammar
    """
    if isinstance(identifier, Grammar):
        return identifier
    if not identifier:
        return Grammar.PLAIN

    grammar = GRAMMAR_ALIASES.get(identifier.strip().lower())
    if grammar is None:
        logger.debug("Unknown grammar %r, highlighting as plain text", identifier)
        return Grammar.PLAIN
    return grammar


def pipeline_for(grammar: Grammar) -> Pipeline:
    """Return the rule pipeline of a grammar."""
    match grammar:
        case Grammar.PULSE:
            return PULSE_PIPELINE
        case Grammar.JAVASCRIPT:
            return JAVASCRIPT_PIPELINE
        case Grammar.SHELL:
            return SHELL_PIPELINE
        case Grammar.PLAIN:
            return EMPTY_PIPELINE
        case _:
            assert_never(grammar)


def select_grammar(identifier: str | Grammar | None) -> Pipeline:
    """Return the pipeline for a language identifier (plain when unknown)."""
    return pipeline_for(resolve_grammar(identifier))


# =============================================================================
# Validation
# =============================================================================

# Contexts a placeholder id can end up in once earlier rules have run
_PROBE_CONTEXTS: tuple[str, ...] = (
    "{p}", "x{p}", "{p}x", "_{p}_", "1{p}", "{p}1", "{p}.5", "1.{p}",
    "-{p}", "--{p}", " -{p}", "@{p}", "{p}(", "{p} (", "{p}{{", "state {p}{{",
    "'{p}'", '"{p}"', "`{p}`", " {p} ", "\t{p}\t", "{p}{p}", "#{p}", " #{p}",
    "//{p}", "/*{p}*/", "{p}\n{p}", "\n{p}\n",
)


def _build_probe() -> str:
    parts = [
        context.format(p=make_placeholder(n))
        for n, context in enumerate(_PROBE_CONTEXTS, start=1000)
    ]
    return "\n".join(parts)


_PROBE = _build_probe()
_PROBE_ID_SPANS: tuple[tuple[int, int], ...] = tuple(
    m.span() for m in PLACEHOLDER_PATTERN.finditer(_PROBE)
)


def _inside_placeholder(pos: int) -> bool:
    return any(start < pos < end for start, end in _PROBE_ID_SPANS)


def validate_pipeline(pipeline: Pipeline) -> None:
    """Check that no rule of ``pipeline`` can cut into a placeholder id.

    Every rule is run against a probe buffer of placeholder ids in hostile
    contexts. A rule may swallow whole ids (they are rendered nested), but
    neither its match nor its classified group may start or end strictly
    inside one. Rules that can match the empty string are rejected too.

    Args:
        pipeline: Pipeline to check

    Raises:
        GrammarError: On the first violating rule
    """
    for rule in pipeline:
        if rule.pattern.fullmatch("") is not None:
            raise GrammarError(pipeline.name, "pattern matches the empty string", rule.name)

        for match in rule.pattern.finditer(_PROBE):
            start, end = match.span(rule.group)
            if start < 0:
                continue
            if start == end:
                raise GrammarError(
                    pipeline.name, "pattern produces an empty classified span", rule.name
                )
            for pos in (*match.span(), start, end):
                if _inside_placeholder(pos):
                    raise GrammarError(
                        pipeline.name,
                        f"match {match.group(0)!r} cuts into a placeholder id",
                        rule.name,
                    )


def validate_grammar_table() -> None:
    """Validate the pipeline of every built-in grammar."""
    for grammar in Grammar:
        validate_pipeline(pipeline_for(grammar))


validate_grammar_table()
