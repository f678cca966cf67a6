"""
Tree-to-AST Converter
=====================

Walks the concrete Lark parse tree of a spell document and builds the typed
AST (Spells -> Spell -> SpellTypePart / ExecutablePart -> Modifiers).

Conversion is a single top-down pass. Any failure aborts the whole document
with a StructuralError naming the clause that could not be converted.
"""

import re
from typing import Any, Callable, Dict, List, Optional

from lark import Tree

from spellcasting_parser.config.logging import get_logger
from spellcasting_parser.core.dsl.errors import (
    ErrorContext,
    MissingNodeError,
    NoNumberError,
    NumberCoercionError,
    UnexpectedRuleError,
)
from spellcasting_parser.core.dsl.grammar import line_and_column
from spellcasting_parser.models.schemas import (
    U32_MAX,
    Adjective,
    Condition,
    Duration,
    Executable,
    ExecutablePart,
    Modifier,
    Modifiers,
    Repetition,
    Spell,
    Spells,
    SpellTypePart,
)

logger = get_logger(__name__)

_DIGITS = re.compile(r"[0-9]+")


def parse_u32(text: str) -> int:
    """
    Parse an unsigned 32-bit integer written in ASCII digits.

    Raises:
        ValueError: If the text has other characters or is out of range
    """
    if not text:
        raise ValueError("cannot parse integer from empty string")
    if not _DIGITS.fullmatch(text):
        raise ValueError(f"invalid digit found in {text!r}")
    value = int(text)
    if value > U32_MAX:
        raise ValueError(f"number {text} too large to fit in an unsigned 32-bit integer")
    return value


class SpellTreeConverter:
    """Converts concrete parse trees of one source text into Spells."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.logger: Any = logger.bind(component="converter")
        self._modifier_builders: Dict[str, Callable[[Tree], Modifier]] = {
            "adjective": lambda node: Adjective(value=self._text(node)),
            "condition": lambda node: Condition(condition_type=self._text(node)),
            "duration": lambda node: Duration(value=self._text(node)),
            "repetition": lambda node: Repetition(value=self.convert_repetition(node)),
        }

    def convert(self, tree: Tree) -> Spells:
        """
        Convert a tree rooted at ``spells``.

        Children other than ``spell`` nodes are ignored.
        """
        spells = [
            self.convert_spell(child) for child in _subtrees(tree) if child.data == "spell"
        ]
        self.logger.debug("Converted spell tree", spell_count=len(spells))
        return Spells(spells=tuple(spells))

    def convert_spell(self, node: Tree) -> Spell:
        invoke_word: Optional[str] = None
        spell_type_params: Optional[SpellTypePart] = None
        executable_params: List[ExecutablePart] = []

        for child in _subtrees(node):
            if child.data == "invoke_word":
                invoke_word = self._text(child)
            elif child.data == "spell_type_params":
                spell_type_params = self.convert_spell_type_part(child)
            elif child.data == "executable_params":
                executable_params.append(self.convert_executable_part(child))

        if not invoke_word:
            raise MissingNodeError("Missing invoke_word", "spell", self._context(node))
        if spell_type_params is None:
            raise MissingNodeError("Missing spell_type_params", "spell", self._context(node))
        if not executable_params:
            raise MissingNodeError("Missing executable_params", "spell", self._context(node))

        return Spell(
            invoke_word=invoke_word,
            spell_type_params=spell_type_params,
            executable_params=tuple(executable_params),
        )

    def convert_spell_type_part(self, node: Tree) -> SpellTypePart:
        spell_type: Optional[str] = None
        modifiers = Modifiers()

        for child in _subtrees(node):
            if child.data == "spell_type":
                spell_type = self._text(child)
            elif child.data == "modifiers":
                modifiers = self.convert_modifiers(child)

        if not spell_type:
            raise MissingNodeError("Missing spell_type", "spell_type_params", self._context(node))

        return SpellTypePart(spell_type=spell_type, modifiers=modifiers)

    def convert_executable_part(self, node: Tree) -> ExecutablePart:
        executable: Optional[str] = None
        modifiers = Modifiers()

        for child in _subtrees(node):
            if child.data == "executable":
                executable = self._text(child)
            elif child.data == "modifiers":
                modifiers = self.convert_modifiers(child)

        if not executable:
            raise MissingNodeError("Missing executable", "executable_params", self._context(node))

        return ExecutablePart(executable=Executable(value=executable), modifiers=modifiers)

    def convert_modifiers(self, node: Tree) -> Modifiers:
        modifiers: List[Modifier] = []

        for child in _subtrees(node):
            builder = self._modifier_builders.get(str(child.data))
            if builder is None:
                raise UnexpectedRuleError(
                    f"Unexpected rule inside modifiers: {child.data}",
                    "modifiers",
                    self._context(child),
                )
            modifiers.append(builder(child))

        return Modifiers(modifiers=tuple(modifiers))

    def convert_repetition(self, node: Tree) -> int:
        """Coerce the single ``number`` child of a repetition to an unsigned 32-bit int."""
        number = next(_subtrees(node), None)
        if number is None:
            raise NoNumberError("No number found in repetition", "repetition", self._context(node))
        if number.data != "number":
            raise UnexpectedRuleError(
                f"Unexpected rule inside repetition: {number.data}",
                "repetition",
                self._context(number),
            )

        text = self._text(number)
        try:
            return parse_u32(text)
        except ValueError as e:
            raise NumberCoercionError(
                f"Failed to parse number: {e}", "repetition", self._context(number)
            ) from e

    def _text(self, node: Tree) -> str:
        """Verbatim source text covered by a node."""
        if not node.meta.empty:
            return self.source[node.meta.start_pos : node.meta.end_pos]
        # Trees built without positions
        return " ".join(str(v) for v in node.scan_values(lambda v: not isinstance(v, Tree)))

    def _context(self, node: Tree) -> Optional[ErrorContext]:
        if node.meta.empty:
            return None
        position = node.meta.start_pos
        line, column = line_and_column(self.source, position)
        return ErrorContext(position=position, line=line, column=column)


def _subtrees(node: Tree):
    return (child for child in node.children if isinstance(child, Tree))


def convert_tree(tree: Tree, source: str) -> Spells:
    """Convert a concrete parse tree of ``source`` into Spells."""
    return SpellTreeConverter(source).convert(tree)
