"""
Spell Parser
============

End-to-end parsing pipeline: raw text -> grammar -> concrete parse tree ->
converter -> typed Spells AST.

Parsing is a pure, synchronous function of its input. Both error kinds abort
the whole document; no partial result is ever returned.
"""

import time
from typing import Any, Dict, List

from spellcasting_parser.config.logging import get_logger
from spellcasting_parser.core.dsl.converter import SpellTreeConverter
from spellcasting_parser.core.dsl.errors import SpellSyntaxError, StructuralError
from spellcasting_parser.core.dsl.grammar import (
    ACTION_VERBS,
    DURATION_UNITS,
    INVOKE_WORDS,
    KEYWORDS,
    RESERVED_WORDS,
    SPELL_TYPES,
    raw_parse_string,
)
from spellcasting_parser.models.schemas import ParseResult, Spells

logger = get_logger(__name__)


class SpellParser:
    """Spell DSL parser."""

    def __init__(self) -> None:
        self.logger: Any = logger.bind(parser="spells")  # structlog.BoundLoggerBase

    def parse_string(self, content: str) -> Spells:
        """
        Parse a spell document into the typed AST.

        Args:
            content: Raw DSL document

        Returns:
            Root Spells node (empty for empty input)

        Raises:
            SpellSyntaxError: If the text does not match the grammar
            StructuralError: If the parse tree cannot be converted
        """
        self.logger.debug("Parsing spell document", length=len(content))
        tree = raw_parse_string(content)
        spells = SpellTreeConverter(content).convert(tree)
        self.logger.debug("Parsed spell document", spell_count=len(spells.spells))
        return spells

    def parse(self, content: str) -> ParseResult:
        """
        Parse a spell document without raising.

        Args:
            content: Raw DSL document

        Returns:
            ParseResult containing the spells or the first error
        """
        start_time = time.time()

        try:
            spells = self.parse_string(content)
        except SpellSyntaxError as e:
            self.logger.warning("Spell syntax error", error=e.message, position=e.position)
            return ParseResult(
                success=False,
                errors=[f"Syntax error: {e}"],
                error_kind="syntax",
                position=e.position,
                processing_time=time.time() - start_time,
            )
        except StructuralError as e:
            self.logger.warning(
                "Spell structure error", error=e.message, rule=e.rule, position=e.position
            )
            return ParseResult(
                success=False,
                errors=[f"Structure conversion error: {e}"],
                error_kind="structural",
                position=e.position,
                processing_time=time.time() - start_time,
            )

        return ParseResult(
            success=True,
            spells=spells,
            processing_time=time.time() - start_time,
        )

    def validate_syntax(self, content: str) -> bool:
        """
        Check the grammar only, without building the AST.

        Args:
            content: Raw DSL document

        Returns:
            True if syntax is valid, False otherwise
        """
        try:
            raw_parse_string(content)
            return True
        except SpellSyntaxError:
            return False


_default_parser = SpellParser()


def parse_string(content: str) -> Spells:
    """Parse a spell document, raising SpellSyntaxError or StructuralError."""
    return _default_parser.parse_string(content)


def parse_spells(content: str) -> ParseResult:
    """Parse a spell document into a ParseResult."""
    return _default_parser.parse(content)


def validate_syntax(content: str) -> bool:
    """Check a spell document against the grammar."""
    return _default_parser.validate_syntax(content)


def get_validation_suggestions(error: SpellSyntaxError) -> List[str]:
    """
    Generate suggestions for fixing a syntax error.

    Args:
        error: Syntax error raised by the grammar

    Returns:
        List of suggestions, most relevant first
    """
    suggestions: List[str] = []
    expected = set(error.expected)

    if "INVOKE_WORD" in expected:
        suggestions.append(f"Start each spell with one of: {', '.join(INVOKE_WORDS)}")
    if "SPELL_TYPE" in expected:
        suggestions.append(f"Name a spell type after the invoke word: {', '.join(SPELL_TYPES)}")
    if "AND" in expected:
        suggestions.append("Join consecutive modifiers with 'and'")
    if "IS" in expected:
        suggestions.append("Write conditions as 'if is <state>'")
    if "TIMES" in expected:
        suggestions.append(
            f"Give durations a unit ({', '.join(DURATION_UNITS)}) or end repetitions with 'times'"
        )
    if "WORD" in expected and "ACTION" not in expected:
        suggestions.append("Follow 'apply' with an effect word, e.g. 'apply heal'")
    if "ACTION" in expected or "APPLY" in expected:
        suggestions.append(f"Add an action: {', '.join(ACTION_VERBS)} or 'apply <effect>'")

    # Remove duplicates while preserving order
    unique_suggestions: List[str] = []
    for suggestion in suggestions:
        if suggestion not in unique_suggestions:
            unique_suggestions.append(suggestion)

    return unique_suggestions[:5]


def get_grammar_info() -> Dict[str, Any]:
    """
    Get grammar vocabulary for documentation/tooling.

    Returns:
        Dictionary of the recognized words per category
    """
    return {
        "invoke_words": list(INVOKE_WORDS),
        "spell_types": list(SPELL_TYPES),
        "action_verbs": list(ACTION_VERBS),
        "keywords": list(KEYWORDS),
        "duration_units": list(DURATION_UNITS),
        "reserved_words": sorted(RESERVED_WORDS),
        "example": "cast rune flaming and swift ignite also apply heal for 5s",
    }
