"""
Spell Parsing Errors
====================

Error types raised by the spell grammar and the tree-to-AST converter.

Two kinds never overlap:
- SpellSyntaxError: the text does not match the grammar
- StructuralError: an accepted parse tree cannot be converted to the AST
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence


@dataclass
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        position: Character offset into the source (0-indexed)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source excerpt with a marker under the error
    """

    position: int
    line: Optional[int] = None
    column: Optional[int] = None
    snippet: Optional[str] = None

    def format(self) -> str:
        """Format as "line 1, column 6 (offset 5)" plus the snippet, if any."""
        if self.line is not None and self.column is not None:
            location = f"line {self.line}, column {self.column} (offset {self.position})"
        else:
            location = f"offset {self.position}"

        if self.snippet:
            return f"{location}\n{self.snippet}"
        return location


class SpellParseError(Exception):
    """Base exception for all spell parsing errors."""

    def __init__(self, message: str, context: Optional[ErrorContext] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.context:
            return f"{self.message} at {self.context.format()}"
        return self.message

    @property
    def position(self) -> Optional[int]:
        return self.context.position if self.context else None


class SpellSyntaxError(SpellParseError):
    """
    Raised when the input does not match the spell grammar.

    Examples:
    - Missing invoke word ("rune flaming ignite")
    - Modifiers not joined by "and"
    - Unknown spell type or malformed condition
    """

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        expected: Sequence[str] = (),
    ):
        self.expected: List[str] = sorted(expected)
        super().__init__(message, context)

    def _format_message(self) -> str:
        message = super()._format_message()
        if self.expected:
            message += f"\nExpected one of: {', '.join(self.expected)}"
        return message


class StructuralError(SpellParseError):
    """
    Raised when a syntactically accepted tree cannot be converted.

    Attributes:
        rule: Name of the grammar rule (clause) being converted
    """

    def __init__(self, message: str, rule: str, context: Optional[ErrorContext] = None):
        self.rule = rule
        super().__init__(message, context)


class MissingNodeError(StructuralError):
    """A required child (spell_type_params, executable) is absent."""

    pass


class UnexpectedRuleError(StructuralError):
    """A child carries a rule the converter does not accept in that place."""

    pass


class NoNumberError(StructuralError):
    """A repetition has no number child."""

    pass


class NumberCoercionError(StructuralError):
    """A repetition count is not an unsigned 32-bit integer."""

    pass
