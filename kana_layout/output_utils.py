#!/usr/bin/env python3
"""
Output utilities for kana layouts.

Common functions for rendering layouts and formatting scores in the
supported output formats.
"""

from typing import Any, Dict, Optional

from kana_layout.layout_scoring import LayoutScore
from kana_layout.layout_utils import KEY_POSITIONS, KEY_SLOTS, Layout, key_symbol

ROW_LENGTH = 10

# Full-width space keeps kana columns aligned
EMPTY_CELL = '　'


def format_layout_grid(layout: Layout, show_keys: bool = True) -> str:
    """
    Format a layout as one 3x10 grid per slot.

    Args:
        layout: Layout to render
        show_keys: Whether to print the QWERTY key row above each grid

    Returns:
        Multi-line string
    """
    lines = []
    for slot in KEY_SLOTS:
        lines.append(f"[{slot}]")
        for row_start in range(0, len(KEY_POSITIONS), ROW_LENGTH):
            row = KEY_POSITIONS[row_start:row_start + ROW_LENGTH]
            if show_keys:
                lines.append(' '.join(f"{key_symbol(p):<2}" for p in row).rstrip())
            cells = [layout[p].get(slot) if p in layout else None for p in row]
            lines.append(' '.join(cell or EMPTY_CELL for cell in cells))
        lines.append("")
    return '\n'.join(lines).rstrip('\n')


def format_csv_output(score: LayoutScore, config: Optional[Dict[str, Any]] = None) -> str:
    """
    Format a layout score as a CSV header and data row.

    Args:
        score: LayoutScore to format
        config: Output format configuration ('delimiter', 'include_headers')

    Returns:
        CSV formatted string
    """
    config = config or {}
    delimiter = config.get('delimiter', ',')
    include_headers = config.get('include_headers', True)

    row = score.to_dict()
    lines = []
    if include_headers:
        lines.append(delimiter.join(row.keys()))
    lines.append(delimiter.join(str(value) for value in row.values()))
    return '\n'.join(lines)


def format_score_only_output(score: LayoutScore) -> str:
    return str(score.score)


def format_detailed_output(score: LayoutScore, layout: Optional[Layout] = None,
                           config: Optional[Dict[str, Any]] = None) -> str:
    """
    Format a layout score as detailed human-readable output.

    Args:
        score: LayoutScore to format
        layout: Layout to render above the scores (optional)
        config: Output format configuration ('show_layout')

    Returns:
        Formatted detailed output string
    """
    config = config or {}
    lines = []

    if layout is not None and config.get('show_layout', True):
        lines.append(format_layout_grid(layout))
        lines.append("")

    lines.append("Scores:")
    lines.append(f"  {'Score':<16}: {score.score}")
    lines.append(f"  {'KPM':<16}: {score.kpm:.2f}")
    lines.append(f"  {'Total seconds':<16}: {score.total_seconds}")
    lines.append(f"  {'Total count':<16}: {score.total_count}")

    if score.metadata:
        lines.append("")
        lines.append(f"Typable trigrams: {score.metadata.get('typable_trigrams', 0)}"
                     f"/{score.metadata.get('trigrams', 0)}")

    return '\n'.join(lines)


def print_results(score: LayoutScore, output_format: str = 'detailed',
                  layout: Optional[Layout] = None,
                  config: Optional[Dict[str, Any]] = None) -> None:
    """
    Print a layout score in the requested format.

    Raises:
        ValueError: If output_format is unknown
    """
    if output_format == 'csv':
        print(format_csv_output(score, config))
    elif output_format == 'score_only':
        print(format_score_only_output(score))
    elif output_format == 'detailed':
        print(format_detailed_output(score, layout, config))
    else:
        raise ValueError(f"Unknown output format: {output_format}")
