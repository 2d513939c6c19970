#!/usr/bin/env python3
"""
Roman-table export: expand a layout into its keystroke -> kana table.

Rows follow the usual IME roman-table shape (input, output, next input).
A single keystroke leaves its kana pending as `next_input`, so the second
keystroke of a chord is written after that kana:

    i   -> next_input か
    かl -> output が      (か key, then ゛ key)
    かL -> output が      (same, shift still held)

Two-keystroke rows are produced by applying the encoding rules forward: for
every key, what does pressing a modifier key (゛, ゃ, ゅ, ょ) or a shifted
small-vowel key after it produce?
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set

from kana_layout.kana_registry import DAKUTEN, YOUON_MARKS, classify
from kana_layout.layout_utils import (
    SELECTOR_PLANES,
    KeyAssignment,
    Layout,
    key_symbol,
    modifier_position,
)
from kana_layout.stroke_encoder import Keystroke

logger = logging.getLogger(__name__)

COMPOSING_MODIFIERS = (DAKUTEN, 'ゃ', 'ゅ', 'ょ')


@dataclass
class RomanTableRow:
    """One roman-table entry."""

    input: str
    output: Optional[str] = None
    next_input: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        row = {'input': self.input}
        if self.output is not None:
            row['output'] = self.output
        if self.next_input is not None:
            row['nextInput'] = self.next_input
        return row


def _voiced(assignment: KeyAssignment) -> Optional[str]:
    found = assignment.find(lambda info: info.is_dakuon)
    if found is None:
        return None
    return classify(found[1]).dakuon_kana


def compose(assignment: KeyAssignment, modifier: str) -> Optional[str]:
    """
    What pressing a key and then a modifier key produces.

    Args:
        assignment: The first key's slots (all of them are considered)
        modifier: One of ゛, ゃ, ゅ, ょ

    Returns:
        The resulting kana unit, or None if the chord produces nothing
    """
    if modifier == DAKUTEN:
        return _voiced(assignment)

    youon = assignment.find(lambda info: info.is_youon)

    if modifier == 'ゃ':
        if youon is not None:
            return youon[1] + modifier
        # No contraction on this key: ゃ falls back to the dakuten operator
        return _voiced(assignment)

    if youon is not None:
        info = classify(youon[1])
        if info.handakuon_modifier_key == modifier:
            return info.handakuon_kana
        return youon[1] + modifier

    source = assignment.find(lambda info: info.handakuon_modifier_key == modifier)
    if source is not None:
        return classify(source[1]).handakuon_kana

    return assignment.get(SELECTOR_PLANES[modifier])


def _single_row(symbol: str, kana: str) -> RomanTableRow:
    if kana in YOUON_MARKS:
        return RomanTableRow(symbol, output=kana)
    return RomanTableRow(symbol, next_input=kana)


def _pending_prefixes(assignment: KeyAssignment) -> List[str]:
    """Pending kana left by the first keystroke, unshifted then shifted."""
    prefixes = []
    if assignment.base and assignment.base not in YOUON_MARKS:
        prefixes.append(assignment.base)
    if assignment.direct_shift:
        prefixes.append(assignment.direct_shift)
    return prefixes


def export_roman_table(layout: Layout) -> List[RomanTableRow]:
    """
    Expand a layout into its full roman table.

    Args:
        layout: Layout to export (read only)

    Returns:
        Rows, single keystrokes first; the first row for an input wins
    """
    rows: List[RomanTableRow] = []
    seen: Set[str] = set()

    def add(row: RomanTableRow) -> None:
        if row.input in seen:
            return
        seen.add(row.input)
        rows.append(row)

    positions = sorted(layout)

    for position in positions:
        assignment = layout[position]
        if assignment.base:
            add(_single_row(key_symbol(position), assignment.base))
        if assignment.direct_shift:
            add(_single_row(key_symbol(position, shift=True), assignment.direct_shift))

    modifier_symbols: Dict[str, List[str]] = {}
    for modifier in COMPOSING_MODIFIERS:
        modifier_at = modifier_position(layout, modifier)
        if modifier_at is None:
            continue
        symbols = [key_symbol(modifier_at)]
        # Shift held through the modifier only when that does not shadow a direct-shift kana
        if not layout[modifier_at].direct_shift:
            symbols.append(key_symbol(modifier_at, shift=True))
        modifier_symbols[modifier] = symbols

    for position in positions:
        assignment = layout[position]
        prefixes = _pending_prefixes(assignment)
        for modifier, symbols in modifier_symbols.items():
            result = compose(assignment, modifier)
            if not result:
                continue
            for prefix in prefixes:
                for symbol in symbols:
                    add(RomanTableRow(prefix + symbol, output=result))

    vowel_keys = []
    for position in positions:
        found = layout[position].find(lambda info: info.is_small_vowel)
        if found is not None:
            vowel_keys.append((position, found[1]))

    for position in positions:
        assignment = layout[position]
        found = assignment.find(lambda info: info.is_gairaion)
        if found is None:
            continue
        slot, consonant = found
        if slot == 'base':
            prefix = consonant
        elif assignment.direct_shift:
            prefix = assignment.direct_shift
        else:
            prefix = key_symbol(position, shift=True)
        for vowel_position, vowel in vowel_keys:
            add(RomanTableRow(prefix + key_symbol(vowel_position, shift=True), output=consonant + vowel))

    logger.debug(f"Exported roman table with {len(rows)} rows")
    return rows


def layout_to_roman_table_string(layout: Layout) -> str:
    """Tab-separated `input output next_input` lines, one per row."""
    lines = []
    for row in export_roman_table(layout):
        lines.append(f"{row.input}\t{row.output or ''}\t{row.next_input or ''}")
    return '\n'.join(lines)


def decode_strokes(table: Iterable[RomanTableRow], strokes: Iterable[Keystroke]) -> str:
    """
    Replay keystrokes through a roman table.

    Pending kana are committed when the next symbol cannot extend them;
    a raw symbol that only starts a longer input is buffered.

    Args:
        table: Rows from export_roman_table()
        strokes: Keystrokes to replay

    Returns:
        The text the keystrokes produce
    """
    rows = {row.input: row for row in table}
    prefixes = {name[:i] for name in rows for i in range(1, len(name))}

    output = []
    buffer = ''
    pending = False

    for stroke in strokes:
        candidate = buffer + stroke.symbol
        if candidate not in rows and candidate not in prefixes:
            if pending:
                output.append(buffer)
            buffer, pending = '', False
            candidate = stroke.symbol

        row = rows.get(candidate)
        if row is None:
            buffer, pending = candidate, False
            continue

        if row.output is not None:
            output.append(row.output)
            buffer, pending = '', False
        if row.next_input is not None:
            buffer, pending = row.next_input, True

    if pending:
        output.append(buffer)
    return ''.join(output)
