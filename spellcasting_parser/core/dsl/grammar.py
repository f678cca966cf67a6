"""
Spell Grammar
=============

Declarative Lark grammar for the spell DSL and the entry points that turn
raw text into a concrete parse tree.

A statement names an invoke word, a spell type and one or more actions::

    cast rune flaming and swift ignite also apply heal for 5s
    invoke self if is burning apply damage 3 times

Modifiers follow the word they qualify and are joined by "and":

- a bare word is an adjective ("flaming")
- "if is <state>" is a condition
- "for <digits><unit>" is a duration ("for 5s")
- "[for] <digits> times" is a repetition ("3 times", "for 2 times")

The grammar is compiled once at import into an LALR(1) parser with
position propagation, so every tree node knows its source span.
"""

from typing import Optional, Tuple

from lark import Lark, Tree
from lark.exceptions import UnexpectedEOF, UnexpectedInput, UnexpectedToken

from spellcasting_parser.config.logging import get_logger
from spellcasting_parser.core.dsl.errors import ErrorContext, SpellSyntaxError

logger = get_logger(__name__)

INVOKE_WORDS: Tuple[str, ...] = ("cast", "invoke")
SPELL_TYPES: Tuple[str, ...] = ("rune", "self", "ward", "totem", "area")
ACTION_VERBS: Tuple[str, ...] = ("ignite", "explode", "freeze", "shatter", "summon", "teleport")
KEYWORDS: Tuple[str, ...] = ("apply", "also", "and", "if", "is", "for", "times")
DURATION_UNITS: Tuple[str, ...] = ("ms", "s", "m", "h")

RESERVED_WORDS = frozenset(INVOKE_WORDS + SPELL_TYPES + ACTION_VERBS + KEYWORDS)

START_RULES: Tuple[str, ...] = ("spells", "spell")


def _alternation(words) -> str:
    # Longest first so a word never loses to one of its prefixes
    return "|".join(sorted(words, key=lambda w: (-len(w), w)))


GRAMMAR_TEMPLATE = r"""
spells: spell*

spell: invoke_word spell_type_params executable_params ("also" executable_params)*

invoke_word: INVOKE_WORD

spell_type_params: spell_type modifiers?
spell_type: SPELL_TYPE

executable_params: executable modifiers?
executable: ACTION
          | "apply" WORD

modifiers: _modifier ("and" _modifier)*
_modifier: adjective
         | "if" condition
         | "for" duration
         | "for" repetition
         | repetition

adjective: WORD
condition: "is" WORD
duration: DURATION
repetition: number "times"
number: NUMBER

INVOKE_WORD: /(?:{invoke_words})\b/
SPELL_TYPE: /(?:{spell_types})\b/
ACTION: /(?:{action_verbs})\b/
WORD: /(?!(?:{reserved_words})\b)[a-z][a-z_]*/
DURATION.2: /\d+(?:{duration_units})\b/
NUMBER: /\d+/

%import common.WS
%ignore WS
"""

GRAMMAR = GRAMMAR_TEMPLATE.format(
    invoke_words=_alternation(INVOKE_WORDS),
    spell_types=_alternation(SPELL_TYPES),
    action_verbs=_alternation(ACTION_VERBS),
    reserved_words=_alternation(RESERVED_WORDS),
    duration_units=_alternation(DURATION_UNITS),
)


def build_parser() -> Lark:
    """Compile the spell grammar into an LALR parser."""
    return Lark(
        GRAMMAR,
        start=list(START_RULES),
        parser="lalr",
        lexer="contextual",
        propagate_positions=True,
        maybe_placeholders=False,
    )


_parser = build_parser()


def raw_parse_string(text: str) -> Tree:
    """
    Parse a whole document into a concrete parse tree rooted at ``spells``.

    Args:
        text: Raw DSL document

    Returns:
        Lark tree whose nodes carry ``meta.start_pos``/``meta.end_pos``

    Raises:
        SpellSyntaxError: If the text does not fully match the grammar
    """
    return parse_rule("spells", text)


def parse_rule(rule: str, text: str) -> Tree:
    """
    Parse text against one of the grammar start rules.

    Args:
        rule: Start rule name, one of START_RULES
        text: Raw DSL text

    Returns:
        Concrete parse tree for the rule

    Raises:
        ValueError: If the rule is not a start rule
        SpellSyntaxError: If the text does not fully match the rule
    """
    if rule not in START_RULES:
        raise ValueError(f"Unsupported start rule: {rule}")

    try:
        return _parser.parse(text, start=rule)
    except UnexpectedInput as e:
        error = syntax_error_from(e, text)
        logger.info(
            "Spell text rejected by grammar",
            rule=rule,
            position=error.position,
            expected=error.expected,
        )
        raise error from e


def syntax_error_from(exc: UnexpectedInput, text: str) -> SpellSyntaxError:
    """Translate a Lark exception into a SpellSyntaxError."""
    if isinstance(exc, UnexpectedEOF) or (
        isinstance(exc, UnexpectedToken) and exc.token.type == "$END"
    ):
        position = len(text)
        found = "end of input"
    else:
        position = max(exc.pos_in_stream or 0, 0)
        found = _describe_found(exc, text, position)

    expected = getattr(exc, "expected", None) or getattr(exc, "allowed", None) or ()
    line, column = line_and_column(text, position)
    context = ErrorContext(
        position=position,
        line=line,
        column=column,
        snippet=_snippet(text, position),
    )
    return SpellSyntaxError(f"Unexpected {found}", context, expected=expected)


def line_and_column(text: str, position: int) -> Tuple[int, int]:
    """1-based line and column of a character offset."""
    line = text.count("\n", 0, position) + 1
    line_start = text.rfind("\n", 0, position) + 1
    return line, position - line_start + 1


def _describe_found(exc: UnexpectedInput, text: str, position: int) -> str:
    token: Optional[object] = getattr(exc, "token", None)
    if token is not None:
        return f"token {str(token)!r}"
    if position < len(text):
        return f"character {text[position]!r}"
    return "end of input"


def _snippet(text: str, position: int) -> str:
    line_start = text.rfind("\n", 0, position) + 1
    line_end = text.find("\n", position)
    if line_end == -1:
        line_end = len(text)
    return f"{text[line_start:line_end]}\n{' ' * (position - line_start)}^"
