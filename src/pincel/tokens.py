"""Token classes assigned by highlighting rules.

Each value is the suffix of the CSS class on a rendered span: with the
default ``token-`` prefix, ``TokenClass.STRING`` renders as
``<span class="token-string">``.

Thread Safety:
TokenClass is an enum (inherently immutable).

"""

from enum import Enum


class TokenClass(Enum):
    """Classification labels produced by the rule pipelines."""

    STRING = "string"
    COMMENT = "comment"
    DIRECTIVE = "directive"
    KEYWORD = "keyword"
    NUMBER = "number"
    FUNCTION = "function"  # call sites and shell command names
