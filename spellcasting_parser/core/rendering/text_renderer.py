"""
Spell Renderer
==============

Renders a parsed Spells tree for people (text) or tools (JSON, YAML).
Rendering is lossy: source spacing and keyword choice are not reconstructed.
"""

from typing import Callable, Dict, List

import yaml  # type: ignore[import-untyped]

from spellcasting_parser.models.schemas import Spells


def render_text(spells: Spells) -> str:
    """Render the "Spells:" header and one block per spell."""
    return str(spells)


def render_json(spells: Spells) -> str:
    return spells.model_dump_json(indent=2)


def render_yaml(spells: Spells) -> str:
    return yaml.safe_dump(spells.model_dump(mode="json"), sort_keys=False, allow_unicode=True)


_RENDERERS: Dict[str, Callable[[Spells], str]] = {
    "text": render_text,
    "json": render_json,
    "yaml": render_yaml,
}


def get_supported_formats() -> List[str]:
    """Get list of supported output formats."""
    return list(_RENDERERS)


def render_spells(spells: Spells, output_format: str = "text") -> str:
    """
    Render spells in the requested format.

    Args:
        spells: Parsed spells
        output_format: One of "text", "json", "yaml"

    Returns:
        Rendered output

    Raises:
        ValueError: If the format is not supported
    """
    try:
        renderer = _RENDERERS[output_format.lower()]
    except KeyError:
        raise ValueError(f"Unsupported output format: {output_format}") from None
    return renderer(spells)
