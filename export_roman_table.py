#!/usr/bin/env python3
"""
Roman table exporter for chorded kana layouts.

Writes the keystroke -> kana table of a layout in a form an IME can import:
tab-separated `input output next_input` lines, or a JSON list of rows.

Usage:
    python export_roman_table.py
    python export_roman_table.py --layout layout.json --output roman.tsv
    python export_roman_table.py --layout layout.json --output-format json
"""

import json
import logging
import sys

from kana_layout.cli_utils import configure_logging, create_parser, handle_common_errors
from kana_layout.layout_fixtures import example_layout
from kana_layout.layout_utils import load_layout_json, validate_layout
from kana_layout.roman_table import export_roman_table, layout_to_roman_table_string

logger = logging.getLogger(__name__)


@handle_common_errors
def main() -> int:
    """Main entry point for roman table export."""
    parser = create_parser(
        "Export the roman table of a chorded kana layout",
        examples=[
            "python export_roman_table.py --layout layout.json --output roman.tsv",
            "python export_roman_table.py --output-format json",
        ],
        output_formats=['tsv', 'json'],
    )
    parser.add_argument('--layout', help="Layout JSON file (default: built-in example layout)")
    parser.add_argument('--output', help="Write to this path instead of stdout")

    args = parser.parse_args()
    configure_logging(args.verbose, args.quiet)

    layout = load_layout_json(args.layout) if args.layout else example_layout()
    validate_layout(layout)

    if args.output_format == 'json':
        rows = [row.to_dict() for row in export_roman_table(layout)]
        text = json.dumps(rows, ensure_ascii=False, indent=2)
    else:
        text = layout_to_roman_table_string(layout)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(text + '\n')
        logger.info(f"Wrote roman table to {args.output}")
    else:
        print(text)

    return 0


if __name__ == "__main__":
    sys.exit(main())
