"""
Spellcasting Parser
===================

Parser for the spellcasting DSL: a small command language where each
statement casts a spell of some type and runs one or more actions, each
optionally qualified by adjectives, conditions, durations and repetitions.

This package provides:
- Grammar definition compiled with Lark
- Tree-to-AST conversion into typed, immutable models
- Text, JSON and YAML rendering of the AST
- A command-line interface for parsing strings and files
"""

from spellcasting_parser.core.dsl.errors import (
    SpellParseError,
    SpellSyntaxError,
    StructuralError,
)
from spellcasting_parser.core.dsl.parser import parse_spells, parse_string, validate_syntax
from spellcasting_parser.models.schemas import Spells

__version__ = "0.1.0"
__author__ = "Spellcasting Parser Team"

__all__ = [
    "SpellParseError",
    "SpellSyntaxError",
    "StructuralError",
    "Spells",
    "parse_spells",
    "parse_string",
    "validate_syntax",
]
