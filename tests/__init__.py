"""
Test Suite
==========

Test suite matching the spellcasting_parser package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: Parse pipeline and CLI tests
"""
