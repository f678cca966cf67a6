"""
Test Configuration
==================

Pytest configuration with shared fixtures: test settings and sample spell documents.
"""

import pytest
from pathlib import Path
from typing import Generator
from unittest.mock import patch

from pydantic_settings import SettingsConfigDict

from spellcasting_parser.config.settings import Settings
from spellcasting_parser.core.dsl.parser import SpellParser
from tests.data.sample_spell_documents import MULTI_SPELL_DOCUMENT, SINGLE_SPELL_DOCUMENT


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    environment: str = "testing"
    debug: bool = True
    log_level: str = "DEBUG"
    output_format: str = "text"

    model_config = SettingsConfigDict(env_file=".env.test")


@pytest.fixture(scope="session")
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture(autouse=True)
def override_settings(test_settings: TestSettings) -> Generator[TestSettings, None, None]:
    """Override application settings for testing."""
    with patch("spellcasting_parser.config.settings.settings", test_settings):
        yield test_settings


@pytest.fixture
def spell_parser() -> SpellParser:
    """Spell parser instance."""
    return SpellParser()


@pytest.fixture
def single_spell_document() -> str:
    return SINGLE_SPELL_DOCUMENT


@pytest.fixture
def multi_spell_document() -> str:
    return MULTI_SPELL_DOCUMENT


@pytest.fixture
def spell_file(tmp_path: Path) -> Path:
    """Spell document written to a temporary file."""
    path = tmp_path / "spells.txt"
    path.write_text(MULTI_SPELL_DOCUMENT, encoding="utf-8")
    return path
