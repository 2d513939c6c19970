#!/usr/bin/env python3
"""
Greedy chorded kana layout search.

Places kana one at a time in frequency order, choosing for each the legal
slot with the lowest trigram typing cost, then scores the finished layout
over the full trigram set.

Usage:
    python search_layout.py
    python search_layout.py --output layout.json --roman-table roman.tsv
    python search_layout.py --kana-file input/kana_frequencies.csv --trigram-limit 1000
    python search_layout.py --draft
"""

import sys

from kana_layout.cli_utils import configure_logging, create_parser, handle_common_errors
from kana_layout.config_loader import load_section_config
from kana_layout.data_utils import load_kana_by_frequency, load_trigram_dataset
from kana_layout.layout_fixtures import TOP26_KANAS
from kana_layout.layout_scoring import score_layout
from kana_layout.layout_search import search_layout
from kana_layout.layout_utils import create_random_draft_layout, save_layout_json
from kana_layout.output_utils import format_layout_grid, print_results
from kana_layout.roman_table import layout_to_roman_table_string
from kana_layout.stroke_time import DEFAULT_STROKE_TIME_MS, StrokeTimeModel


@handle_common_errors
def main() -> int:
    """Main entry point for layout search."""
    parser = create_parser(
        "Greedy frequency-driven search for a chorded kana layout",
        examples=[
            "python search_layout.py --output layout.json",
            "python search_layout.py --trigram-limit 1000 --output-format csv",
            "python search_layout.py --draft",
        ],
    )

    search_group = parser.add_argument_group('Search Options')
    search_group.add_argument('--kana-file', help="Kana frequency CSV (kana,count)")
    search_group.add_argument('--trigram-file', help="Trigram CSV (trigram,count)")
    search_group.add_argument('--stroke-time-file', help="Keystroke timing CSV (strokes,time_ms)")
    search_group.add_argument('--trigram-limit', type=int,
                              help="Number of leading trigrams used for costing (default from config)")
    search_group.add_argument('--output', help="Write the layout as JSON to this path")
    search_group.add_argument('--roman-table', help="Write the roman table as TSV to this path")
    search_group.add_argument('--draft', action='store_true',
                              help="Print a random draft with only the modifier keys placed, then exit")

    args = parser.parse_args()
    configure_logging(args.verbose, args.quiet)

    if args.draft:
        print(format_layout_grid(create_random_draft_layout(TOP26_KANAS)))
        return 0

    config = load_section_config('layout_search', args.config)
    data_files = config.get('data_files', {})

    kana_order = load_kana_by_frequency(args.kana_file or data_files['kana_frequencies'])
    all_trigrams = load_trigram_dataset(args.trigram_file or data_files['trigrams'])
    stroke_time = StrokeTimeModel.from_csv(
        args.stroke_time_file or data_files['stroke_times'],
        default_ms=config.get('default_stroke_time_ms', DEFAULT_STROKE_TIME_MS),
    )

    limit = args.trigram_limit if args.trigram_limit is not None else config.get('trigram_limit')
    search_trigrams = all_trigrams[:limit] if limit is not None else all_trigrams

    layout = search_layout(kana_order, search_trigrams, stroke_time, config)
    score = score_layout(layout, all_trigrams, stroke_time)

    if args.output:
        save_layout_json(layout, args.output)

    if args.roman_table:
        with open(args.roman_table, 'w', encoding='utf-8') as f:
            f.write(layout_to_roman_table_string(layout) + '\n')

    output_config = config.get('output_formats', {}).get(args.output_format, {})
    print_results(score, args.output_format, layout, output_config)

    return 0


if __name__ == "__main__":
    sys.exit(main())
