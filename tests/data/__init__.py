"""
Test Data Package
================

Sample spell documents for valid, invalid and edge-case inputs.
"""

from .sample_spell_documents import (
    ALL_TEST_DOCUMENTS,
    get_test_document,
    get_all_valid_documents,
    get_invalid_documents,
    SINGLE_SPELL_DOCUMENT,
    MULTI_SPELL_DOCUMENT,
    EMPTY_DOCUMENT,
)

__all__ = [
    'ALL_TEST_DOCUMENTS',
    'get_test_document',
    'get_all_valid_documents',
    'get_invalid_documents',
    'SINGLE_SPELL_DOCUMENT',
    'MULTI_SPELL_DOCUMENT',
    'EMPTY_DOCUMENT',
]
