#!/usr/bin/env python3
"""
Stroke encoding engine: kana to keystroke chains for a given layout.

Resolution order for a single output unit:

  1. the kana sits in a slot            -> key (+ shift, or + plane selector)
  2. semi-voiced form (ぱ, ぴ, ...)      -> source key + its modifier key
  3. voiced form (が, ぶ, ...)           -> source key + ゛ key
  4. contraction (きゃ, ...)             -> base key + ゃ/ゅ/ょ key
  5. foreign sound (てぃ, ...)           -> consonant key + shifted small-vowel key

Compositions press the source key unshifted even when the source lives in a
shift plane ("shift omission"); only foreign-sound consonants outside the base
slot are pressed with shift held.
"""

import logging
from dataclasses import dataclass
from typing import List

from kana_layout.kana_registry import (
    DAKUTEN,
    classify,
    dakuon_sources,
    handakuon_source,
    is_encodable_unit,
    split_gairaion,
    split_youon,
)
from kana_layout.layout_utils import (
    KEY_SYMBOLS,
    PLANE_SELECTORS,
    Layout,
    key_symbol,
    locate_kana,
    modifier_position,
)

logger = logging.getLogger(__name__)


class StrokeConversionError(ValueError):
    """A kana cannot be produced under the given layout."""


@dataclass(frozen=True)
class Keystroke:
    """One key press, optionally with shift held."""

    key: str
    shift: bool = False

    @property
    def symbol(self) -> str:
        """Roman-table symbol: the key, upper-cased (or shifted) when shift is held."""
        return key_symbol(_POSITION_BY_KEY[self.key], self.shift)


@dataclass(frozen=True)
class UnitKeystroke(Keystroke):
    """Keystroke tagged with the index of the output unit it belongs to."""

    unit_index: int = 0


_POSITION_BY_KEY = {symbol: position for position, symbol in enumerate(KEY_SYMBOLS)}


def _press(position: int, shift: bool = False) -> Keystroke:
    return Keystroke(key=key_symbol(position), shift=shift)


def _modifier_stroke(layout: Layout, modifier: str, kana: str) -> Keystroke:
    position = modifier_position(layout, modifier)
    if position is None:
        raise StrokeConversionError(f"Cannot type '{kana}': no key holds '{modifier}' in its base slot")
    return _press(position)


def _source_stroke(layout: Layout, source: str) -> Keystroke:
    found = locate_kana(layout, source)
    if found is None:
        raise StrokeConversionError(f"'{source}' is not assigned in the layout")
    position, _ = found
    return _press(position)


def strokes_for_kana(layout: Layout, kana: str) -> List[Keystroke]:
    """
    Convert one output unit into the keystrokes that type it.

    Args:
        layout: Layout to type on (read only)
        kana: A single output unit (one kana, or a two-character contraction
              or foreign-sound unit)

    Returns:
        Ordered keystrokes

    Raises:
        StrokeConversionError: If the unit cannot be produced with this layout.
            ひゅ always raises: ひ followed by the ゅ key is the chord for ぴ,
            so no layout can type it.
    """
    if not is_encodable_unit(kana):
        raise StrokeConversionError(f"'{kana}' is not a known kana unit")

    found = locate_kana(layout, kana)
    if found is not None:
        position, slot = found
        if slot == 'base':
            return [_press(position)]
        if slot == 'direct_shift':
            return [_press(position, shift=True)]
        return [_press(position), _modifier_stroke(layout, PLANE_SELECTORS[slot], kana)]

    semi_voiced_source = handakuon_source(kana)
    if semi_voiced_source is not None and locate_kana(layout, semi_voiced_source) is not None:
        modifier = classify(semi_voiced_source).handakuon_modifier_key
        return [_source_stroke(layout, semi_voiced_source), _modifier_stroke(layout, modifier, kana)]

    voiced_sources = dakuon_sources(kana)
    for source in voiced_sources:
        if locate_kana(layout, source) is not None:
            return [_source_stroke(layout, source), _modifier_stroke(layout, DAKUTEN, kana)]

    youon = split_youon(kana)
    if youon is not None:
        base, mark = youon
        if classify(base).handakuon_modifier_key == mark:
            raise StrokeConversionError(
                f"Cannot type '{kana}': '{base}' + '{mark}' key produces '{classify(base).handakuon_kana}'")
        return [_source_stroke(layout, base), _modifier_stroke(layout, mark, kana)]

    gairaion = split_gairaion(kana)
    if gairaion is not None:
        consonant, vowel = gairaion
        consonant_at = locate_kana(layout, consonant)
        if consonant_at is None:
            raise StrokeConversionError(f"'{consonant}' is not assigned in the layout")
        vowel_at = locate_kana(layout, vowel)
        if vowel_at is None:
            raise StrokeConversionError(f"'{vowel}' is not assigned in the layout")

        consonant_position, consonant_slot = consonant_at
        return [
            _press(consonant_position, shift=consonant_slot != 'base'),
            _press(vowel_at[0], shift=True),
        ]

    if voiced_sources or semi_voiced_source is not None:
        raise StrokeConversionError(f"No source kana for '{kana}' is assigned in the layout")
    raise StrokeConversionError(f"'{kana}' is not assigned in the layout")


def segment_text(text: str) -> List[str]:
    """
    Split text into output units, longest match first.

    A two-character contraction or foreign-sound unit wins over its first
    character; everything else is taken one character at a time.
    """
    units = []
    i = 0
    while i < len(text):
        pair = text[i:i + 2]
        if len(pair) == 2 and (split_youon(pair) or split_gairaion(pair)):
            units.append(pair)
            i += 2
        else:
            units.append(text[i])
            i += 1
    return units


def text_to_strokes(layout: Layout, text: str) -> List[UnitKeystroke]:
    """
    Convert text into keystrokes, tagging each with its output unit index.

    Raises:
        StrokeConversionError: If any unit cannot be produced
    """
    strokes = []
    for unit_index, unit in enumerate(segment_text(text)):
        for stroke in strokes_for_kana(layout, unit):
            strokes.append(UnitKeystroke(key=stroke.key, shift=stroke.shift, unit_index=unit_index))
    return strokes
