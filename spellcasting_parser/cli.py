"""
Command-Line Interface
======================

Parse a spell document from a file or a string and print or save the result.

    spellcasting-parser -s "cast rune flaming ignite" -p
    spellcasting-parser -f spells.txt -o spells.out --format yaml
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from spellcasting_parser.config.logging import get_logger, setup_logging
from spellcasting_parser.config.settings import get_settings
from spellcasting_parser.core.dsl.errors import SpellParseError, SpellSyntaxError
from spellcasting_parser.core.dsl.parser import get_validation_suggestions, parse_string
from spellcasting_parser.core.rendering.text_renderer import (
    get_supported_formats,
    render_json,
    render_spells,
)

logger = get_logger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spellcasting-parser",
        description="Parse spell descriptions into a structured tree",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("-f", "--file", help="path to the file to read, can't be used with -s")
    source.add_argument("-s", "--string", help="input string to parse, can't be used with -f")
    parser.add_argument("-o", "--output", help="path to the output file")
    parser.add_argument(
        "-p", "--print", dest="print_output", action="store_true", help="print the result"
    )
    parser.add_argument(
        "--format",
        choices=get_supported_formats(),
        default=None,
        help="output format (default: from settings, text)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit status."""
    args = build_arg_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings)
    output_format = args.format or settings.output_format

    if args.file:
        try:
            content = Path(args.file).read_text(encoding=settings.encoding)
        except (OSError, UnicodeDecodeError) as e:
            print(f"Failed to read file: {e}", file=sys.stderr)
            return 1
    else:
        content = args.string

    try:
        spells = parse_string(content)
    except SpellParseError as e:
        logger.error("Parsing failed", error=e.message)
        print(f"Parsing failed: {e}", file=sys.stderr)
        if isinstance(e, SpellSyntaxError):
            for suggestion in get_validation_suggestions(e):
                print(f"  hint: {suggestion}", file=sys.stderr)
        return 1

    output = render_spells(spells, output_format)

    if args.output:
        output_path = Path(args.output)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(output, encoding=settings.encoding)
        except OSError as e:
            print(f"Failed to write to file: {e}", file=sys.stderr)
            return 1
        print(f"Output written to {output_path}")

    if args.print_output:
        print(f"Spells Struct: {render_json(spells)}")
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
