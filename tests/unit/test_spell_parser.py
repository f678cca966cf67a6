"""
Unit Tests for Spell Parser
===========================

Tests for the end-to-end parse pipeline, the non-raising ParseResult API
and syntax helpers.
"""

import pytest

from spellcasting_parser.core.dsl.errors import (
    NumberCoercionError,
    SpellParseError,
    SpellSyntaxError,
    StructuralError,
)
from spellcasting_parser.core.dsl.parser import (
    SpellParser,
    get_grammar_info,
    get_validation_suggestions,
    parse_spells,
    parse_string,
    validate_syntax,
)
from spellcasting_parser.models.schemas import Adjective, Repetition, Spells

from tests.data.sample_spell_documents import get_all_valid_documents, get_invalid_documents
from tests.utils.assertions import (
    assert_failed_parse_result,
    assert_successful_parse_result,
    assert_valid_spells,
)


class TestParseString:
    """Test the raising parse API."""

    def test_single_spell(self, single_spell_document):
        spells = parse_string(single_spell_document)

        assert_valid_spells(spells)
        spell = spells.spells[0]
        assert spell.invoke_word == "cast"
        assert spell.spell_type_params.spell_type == "rune"
        assert spell.spell_type_params.modifiers.modifiers == (Adjective(value="flaming"),)
        assert spell.executable_params[0].executable.value == "explode"
        assert spell.executable_params[0].modifiers.modifiers == ()

    def test_empty_input(self):
        assert parse_string("") == Spells(spells=())

    @pytest.mark.parametrize("document", get_all_valid_documents())
    def test_valid_documents(self, document):
        assert_valid_spells(parse_string(document))

    @pytest.mark.parametrize("document", get_invalid_documents())
    def test_invalid_documents(self, document):
        with pytest.raises(SpellSyntaxError):
            parse_string(document)

    def test_rejected_document_has_no_partial_result(self):
        """Test a bad spell after good ones fails the whole document."""
        with pytest.raises(SpellSyntaxError):
            parse_string("cast rune ignite\ninvoke self apply heal\ncast rune if burning ignite")

    def test_structural_error_aborts_document(self):
        with pytest.raises(NumberCoercionError):
            parse_string("cast rune ignite 2 times\ncast rune ignite 99999999999 times")

    def test_error_kinds_do_not_overlap(self):
        assert not issubclass(SpellSyntaxError, StructuralError)
        assert not issubclass(StructuralError, SpellSyntaxError)
        assert issubclass(SpellSyntaxError, SpellParseError)
        assert issubclass(StructuralError, SpellParseError)

    def test_repetition_coercion(self):
        spells = parse_string("invoke self apply heal 3 times")
        assert spells.spells[0].executable_params[0].modifiers.modifiers == (Repetition(value=3),)


class TestParseSpells:
    """Test the non-raising ParseResult API."""

    def test_success(self, multi_spell_document):
        result = parse_spells(multi_spell_document)

        assert_successful_parse_result(result)
        assert len(result.spells.spells) == 3
        assert result.processing_time is not None

    def test_syntax_failure(self):
        result = parse_spells("rune flaming ignite")

        assert_failed_parse_result(result, "syntax", ["Syntax error"])
        assert result.position == 0

    def test_structural_failure(self):
        result = parse_spells("cast rune ignite 4294967296 times")

        assert_failed_parse_result(result, "structural", ["Failed to parse number"])
        assert result.position == 17

    def test_parser_instance(self, spell_parser: SpellParser, single_spell_document):
        assert_successful_parse_result(spell_parser.parse(single_spell_document))


class TestValidateSyntax:
    def test_valid(self, multi_spell_document):
        assert validate_syntax(multi_spell_document) is True

    def test_invalid(self):
        assert validate_syntax("cast rune flaming swift ignite") is False

    def test_grammar_only(self):
        """Test overflowing counts pass the grammar check."""
        assert validate_syntax("cast rune ignite 4294967296 times") is True


class TestSuggestions:
    """Test hints derived from syntax errors."""

    def _error(self, text: str) -> SpellSyntaxError:
        with pytest.raises(SpellSyntaxError) as exc_info:
            parse_string(text)
        return exc_info.value

    def test_missing_invoke_word(self):
        suggestions = get_validation_suggestions(self._error("rune flaming ignite"))
        assert any("Start each spell" in s for s in suggestions)

    def test_missing_conjunction(self):
        suggestions = get_validation_suggestions(self._error("cast rune flaming swift ignite"))
        assert any("'and'" in s for s in suggestions)

    def test_missing_is(self):
        suggestions = get_validation_suggestions(self._error("cast rune if burning ignite"))
        assert any("if is <state>" in s for s in suggestions)

    def test_limit(self):
        suggestions = get_validation_suggestions(self._error("cast rune"))
        assert 0 < len(suggestions) <= 5
        assert len(suggestions) == len(set(suggestions))


class TestGrammarInfo:
    def test_vocabulary(self):
        info = get_grammar_info()

        assert info["invoke_words"] == ["cast", "invoke"]
        assert "rune" in info["spell_types"]
        assert "ignite" in info["action_verbs"]
        assert "and" in info["reserved_words"]
        assert validate_syntax(info["example"])
