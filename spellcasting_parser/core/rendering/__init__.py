"""
Rendering Module
================

Conversion of parsed spells into display text, JSON and YAML.
"""
