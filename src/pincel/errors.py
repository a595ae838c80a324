"""Exception classes for Pincel.

Highlighting itself never raises for any input text. These exceptions
report mistakes in rule and grammar definitions, and surface when a
pipeline is built or validated.
"""

from __future__ import annotations


class PincelError(Exception):
    """Base exception for all Pincel errors.

    Subclass this for specific error categories.
    """

    pass


class RuleError(PincelError):
    """Error in a single rule definition.

    Raised when a rule is constructed with an unusable pattern, for
    example a classified group the pattern does not define.
    """

    def __init__(self, rule_name: str, message: str) -> None:
        """Initialize rule error.

        Args:
            rule_name: Name of the offending rule (e.g., "number")
            message: Description of the problem
        """
        self.rule_name = rule_name
        super().__init__(f"Rule '{rule_name}': {message}")


class GrammarError(PincelError):
    """Error when a grammar pipeline breaks placeholder containment.

    Raised by the validation pass when a rule can match across the
    inside of a placeholder id, or can match the empty string.
    """

    def __init__(
        self,
        grammar_name: str,
        message: str,
        rule_name: str | None = None,
    ) -> None:
        """Initialize grammar error.

        Args:
            grammar_name: Name of the pipeline being validated
            message: Description of the violation
            rule_name: Name of the rule at fault (optional)
        """
        self.grammar_name = grammar_name
        self.rule_name = rule_name

        location = f" (rule '{rule_name}')" if rule_name else ""
        super().__init__(f"Grammar '{grammar_name}'{location}: {message}")
