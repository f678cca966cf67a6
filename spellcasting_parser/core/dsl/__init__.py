"""
DSL Processing Module
====================

Spell DSL parsing and transformation.

Components:
- grammar: Lark grammar and concrete parse tree generation
- converter: concrete parse tree to typed AST conversion
- parser: end-to-end parse pipeline
- errors: syntax and structural error types
"""
