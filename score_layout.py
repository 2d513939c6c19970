#!/usr/bin/env python3
"""
Chorded kana layout scorer.

Scores a layout by the time needed to type the final unit of each corpus
trigram, weighted by trigram count. Optionally shows the keystrokes for a
piece of text.

Usage:
    python score_layout.py
    python score_layout.py --layout layout.json --output-format csv
    python score_layout.py --text "きょうはいいてんき"
"""

import sys

from kana_layout.cli_utils import configure_logging, create_parser, handle_common_errors
from kana_layout.config_loader import load_section_config
from kana_layout.data_utils import load_trigram_dataset
from kana_layout.layout_fixtures import example_layout
from kana_layout.layout_scoring import score_layout
from kana_layout.layout_utils import load_layout_json, validate_layout
from kana_layout.output_utils import print_results
from kana_layout.stroke_encoder import text_to_strokes
from kana_layout.stroke_time import DEFAULT_STROKE_TIME_MS, StrokeTimeModel


def format_strokes(layout, text: str) -> str:
    """Space-separated keystroke symbols for text, one group per output unit."""
    groups = {}
    for stroke in text_to_strokes(layout, text):
        groups.setdefault(stroke.unit_index, []).append(stroke.symbol)
    return ' '.join(''.join(symbols) for _, symbols in sorted(groups.items()))


@handle_common_errors
def main() -> int:
    """Main entry point for layout scoring."""
    parser = create_parser(
        "Score a chorded kana layout over corpus trigrams",
        examples=[
            "python score_layout.py --layout layout.json",
            "python score_layout.py --layout layout.json --output-format score_only",
            "python score_layout.py --text 'きょうはいいてんき'",
        ],
    )

    score_group = parser.add_argument_group('Scoring Options')
    score_group.add_argument('--layout', help="Layout JSON file (default: built-in example layout)")
    score_group.add_argument('--trigram-file', help="Trigram CSV (trigram,count)")
    score_group.add_argument('--stroke-time-file', help="Keystroke timing CSV (strokes,time_ms)")
    score_group.add_argument('--text', help="Print the keystrokes for this text instead of scoring")

    args = parser.parse_args()
    configure_logging(args.verbose, args.quiet)

    layout = load_layout_json(args.layout) if args.layout else example_layout()
    validate_layout(layout)

    if args.text:
        print(format_strokes(layout, args.text))
        return 0

    config = load_section_config('score_layout', args.config)
    data_files = config.get('data_files', {})

    trigrams = load_trigram_dataset(args.trigram_file or data_files['trigrams'])
    stroke_time = StrokeTimeModel.from_csv(
        args.stroke_time_file or data_files['stroke_times'],
        default_ms=config.get('default_stroke_time_ms', DEFAULT_STROKE_TIME_MS),
    )

    score = score_layout(layout, trigrams, stroke_time)

    output_config = config.get('output_formats', {}).get(args.output_format, {})
    print_results(score, args.output_format, layout, output_config)

    return 0


if __name__ == "__main__":
    sys.exit(main())
