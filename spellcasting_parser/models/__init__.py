"""
Data Models
===========

Pydantic models for the spell AST and parse results.
"""
