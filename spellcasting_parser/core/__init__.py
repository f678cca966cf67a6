"""
Core Business Logic
==================

Core modules for spell parsing and rendering.

Modules:
- dsl: grammar definition, tree-to-AST conversion and the parse pipeline
- rendering: text, JSON and YAML rendering of parsed spells
"""
