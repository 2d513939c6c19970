#!/usr/bin/env python3
"""
Layout utilities for chorded kana layouts.

Key positions, key assignments and layouts, the per-key legality predicate,
whole-layout validation and the JSON interchange format.

A layout maps each of the 30 key positions (QWERTY order, three rows of ten)
to a KeyAssignment with four optional slots:

    base          pressed alone
    shift_a       key, then the key whose base is ゅ
    shift_b       key, then the key whose base is ょ
    direct_shift  key pressed with shift held
"""

import json
import logging
import random
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from kana_layout.kana_registry import (
    DAKUTEN,
    MODIFIER_KANAS,
    YOUON_MARKS,
    KanaInfo,
    classify,
)

logger = logging.getLogger(__name__)

# Position i is typed on the i-th QWERTY key
KEY_SYMBOLS = "qwertyuiopasdfghjkl;zxcvbnm,./"
KEY_POSITIONS: Tuple[int, ...] = tuple(range(len(KEY_SYMBOLS)))

# US-layout shifted symbols for the non-letter keys
SHIFTED_SYMBOLS: Mapping[str, str] = {';': ':', ',': '<', '.': '>', '/': '?'}

KEY_SLOTS: Tuple[str, ...] = ('base', 'shift_a', 'shift_b', 'direct_shift')
SHIFT_PLANE_SLOTS: Tuple[str, ...] = ('shift_a', 'shift_b')

# Plane-selector modifier for each shift plane
PLANE_SELECTORS: Mapping[str, str] = {'shift_a': 'ゅ', 'shift_b': 'ょ'}
SELECTOR_PLANES: Mapping[str, str] = {kana: slot for slot, kana in PLANE_SELECTORS.items()}


class LayoutValidationError(ValueError):
    """A key assignment or layout violates a structural invariant."""

    def __init__(self, message: str, invariant: Optional[str] = None,
                 position: Optional[int] = None):
        super().__init__(message)
        self.invariant = invariant
        self.position = position


@dataclass
class KeyAssignment:
    """The four kana slots of a single key (None means unset)."""

    base: Optional[str] = None
    shift_a: Optional[str] = None
    shift_b: Optional[str] = None
    direct_shift: Optional[str] = None

    def get(self, slot: str) -> Optional[str]:
        return getattr(self, slot)

    def slots(self) -> Iterator[Tuple[str, str]]:
        """Yield (slot, kana) for every populated slot in KEY_SLOTS order."""
        for slot in KEY_SLOTS:
            kana = getattr(self, slot)
            if kana:
                yield slot, kana

    def kanas(self) -> List[str]:
        return [kana for _, kana in self.slots()]

    def find(self, predicate: Callable[[KanaInfo], bool]) -> Optional[Tuple[str, str]]:
        """
        Find the first populated slot whose kana satisfies a relation.

        Args:
            predicate: Test applied to the KanaInfo of each slot's kana

        Returns:
            (slot, kana) of the first match, or None
        """
        for slot, kana in self.slots():
            info = classify(kana)
            if info is not None and predicate(info):
                return slot, kana
        return None

    def slot_of(self, kana: str) -> Optional[str]:
        for slot, value in self.slots():
            if value == kana:
                return slot
        return None

    def with_kana(self, slot: str, kana: str) -> 'KeyAssignment':
        """Copy of this assignment with one slot set."""
        return replace(self, **{slot: kana})

    def to_dict(self) -> Dict[str, str]:
        return {slot: kana for slot, kana in self.slots()}


Layout = Dict[int, KeyAssignment]


def key_symbol(position: int, shift: bool = False) -> str:
    """Symbol typed by a key position, upper-cased (or shifted) when shift is held."""
    symbol = KEY_SYMBOLS[position]
    if not shift:
        return symbol
    return SHIFTED_SYMBOLS.get(symbol, symbol.upper())


def create_empty_layout() -> Layout:
    return {position: KeyAssignment() for position in KEY_POSITIONS}


def create_layout_with_modifiers(modifier_positions: Mapping[str, int]) -> Layout:
    """
    Create an empty layout with the modifier kana pinned to base slots.

    Args:
        modifier_positions: Dict mapping each of ゃ, ゅ, ょ, ゛ to a key position

    Returns:
        New layout with only the four modifier base slots populated

    Raises:
        LayoutValidationError: If a modifier is missing or two share a position
    """
    missing = [kana for kana in MODIFIER_KANAS if kana not in modifier_positions]
    if missing:
        raise LayoutValidationError(f"Modifier positions missing for: {missing}",
                                    invariant='modifier-placement')

    positions = [modifier_positions[kana] for kana in MODIFIER_KANAS]
    if len(set(positions)) != len(positions):
        raise LayoutValidationError(f"Modifier kana must use distinct positions: {dict(modifier_positions)}",
                                    invariant='modifier-placement')

    layout = create_empty_layout()
    for kana in MODIFIER_KANAS:
        position = modifier_positions[kana]
        if position not in layout:
            raise LayoutValidationError(f"Invalid key position {position} for '{kana}'",
                                        invariant='positions', position=position)
        layout[position].base = kana
    return layout


def create_random_draft_layout(top_kanas: List[str]) -> Layout:
    """
    Quick draft: pin the modifier kana to random positions.

    Uses an unseeded shuffle, so every call may differ.

    Args:
        top_kanas: The kana intended for base slots

    Returns:
        Layout with the four modifier kana placed

    Raises:
        ValueError: If top_kanas cannot fit next to the modifier keys
    """
    if len(top_kanas) > len(KEY_POSITIONS) - len(MODIFIER_KANAS):
        raise ValueError(f"Too many base-slot kana: {len(top_kanas)} "
                         f"(at most {len(KEY_POSITIONS) - len(MODIFIER_KANAS)})")

    positions = random.sample(list(KEY_POSITIONS), len(MODIFIER_KANAS))
    return create_layout_with_modifiers(dict(zip(MODIFIER_KANAS, positions)))


def clone_layout(layout: Layout) -> Layout:
    return {position: replace(assignment) for position, assignment in layout.items()}


def locate_kana(layout: Layout, kana: str) -> Optional[Tuple[int, str]]:
    """
    Find where a kana is assigned, base slots first.

    Args:
        layout: Layout to search
        kana: Kana to find

    Returns:
        (position, slot), or None if the kana is not in the layout
    """
    for position in sorted(layout):
        if layout[position].base == kana:
            return position, 'base'
    for position in sorted(layout):
        slot = layout[position].slot_of(kana)
        if slot is not None:
            return position, slot
    return None


def modifier_position(layout: Layout, modifier: str) -> Optional[int]:
    """Position of the key whose base slot holds a modifier kana."""
    for position in sorted(layout):
        if layout[position].base == modifier:
            return position
    return None


def key_assignment_issues(assignment: KeyAssignment) -> List[str]:
    """
    Check one key's four slots against the legality predicate.

    Every rule keeps the two-keystroke chains that start on this key
    unambiguous (key + ゛, key + ゃ/ゅ/ょ, key + shifted small-vowel key).

    Args:
        assignment: Key assignment to check

    Returns:
        List of rule violations (empty if legal)
    """
    issues = []
    entries = list(assignment.slots())

    infos: List[Tuple[str, KanaInfo]] = []
    for slot, kana in entries:
        info = classify(kana)
        if info is None:
            issues.append(f"Unknown kana '{kana}' in {slot}")
        else:
            infos.append((slot, info))

    kanas = [kana for _, kana in entries]
    duplicates = sorted(set(k for k in kanas if kanas.count(k) > 1))
    if duplicates:
        issues.append(f"Kana assigned twice on one key: {duplicates}")

    for slot, info in infos:
        if info.is_modifier and slot != 'base':
            issues.append(f"Modifier kana '{info.kana}' must be in the base slot, found in {slot}")

    dakuon = [info.kana for _, info in infos if info.is_dakuon]
    if len(dakuon) > 1:
        issues.append(f"More than one dakuon kana on a key: {dakuon}")

    youon = [info.kana for _, info in infos if info.is_youon]
    if len(youon) > 1:
        issues.append(f"More than one youon kana on a key: {youon}")
    if youon and (assignment.shift_a or assignment.shift_b):
        issues.append(f"Youon kana '{youon[0]}' requires empty shift planes")

    for _, info in infos:
        if info.is_handakuon:
            plane = SELECTOR_PLANES[info.handakuon_modifier_key]
            if assignment.get(plane):
                issues.append(f"Handakuon source '{info.kana}' requires an empty {plane} slot")
            # Key + modifier would mean both the semi-voiced kana and a contraction
            others = [kana for kana in youon if kana != info.kana]
            if others:
                issues.append(f"Handakuon source '{info.kana}' cannot share a key with youon kana '{others[0]}'")

    gairaion = [info.kana for _, info in infos if info.is_gairaion]
    if len(gairaion) > 1:
        issues.append(f"More than one gairaion kana on a key: {gairaion}")

    vowels = [(slot, info.kana) for slot, info in infos if info.is_small_vowel]
    if len(vowels) > 1:
        issues.append(f"More than one small vowel on a key: {[kana for _, kana in vowels]}")
    for slot, kana in vowels:
        if slot == 'base':
            issues.append(f"Small vowel '{kana}' cannot be in the base slot")
        elif slot in SHIFT_PLANE_SLOTS and assignment.direct_shift:
            issues.append(f"Small vowel '{kana}' in {slot} requires an empty direct_shift slot")

    if assignment.base in YOUON_MARKS:
        if assignment.shift_a or assignment.shift_b:
            issues.append(f"Key with base '{assignment.base}' cannot hold shift planes")
        for slot, info in infos:
            if slot != 'base' and info.is_composable:
                issues.append(f"Key with base '{assignment.base}' cannot hold composable kana '{info.kana}'")
    elif assignment.base == DAKUTEN and vowels:
        issues.append(f"Key with base '{DAKUTEN}' cannot hold small vowels")

    return issues


def validate_key_assignment(assignment: KeyAssignment, position: Optional[int] = None) -> KeyAssignment:
    """
    Validate a single key assignment.

    Raises:
        LayoutValidationError: If any slot combination is illegal
    """
    issues = key_assignment_issues(assignment)
    if issues:
        where = f"key {position}: " if position is not None else ""
        raise LayoutValidationError(where + "; ".join(issues),
                                    invariant='key-assignment', position=position)
    return assignment


def validate_layout(layout: Layout) -> Layout:
    """
    Re-check every structural invariant of a finished layout.

    Args:
        layout: Layout to validate

    Returns:
        The same layout object, unchanged

    Raises:
        LayoutValidationError: Naming the violated invariant
    """
    missing_positions = [p for p in KEY_POSITIONS if p not in layout]
    extra_positions = [p for p in layout if p not in KEY_POSITIONS]
    if missing_positions or extra_positions:
        raise LayoutValidationError(
            f"Layout must cover positions 0-{len(KEY_POSITIONS) - 1} "
            f"(missing: {missing_positions}, unexpected: {extra_positions})",
            invariant='positions')

    for position in KEY_POSITIONS:
        validate_key_assignment(layout[position], position)

    seen: Dict[str, Tuple[int, str]] = {}
    for position in KEY_POSITIONS:
        for slot, kana in layout[position].slots():
            if kana in seen:
                first_position, first_slot = seen[kana]
                raise LayoutValidationError(
                    f"Kana '{kana}' assigned twice: key {first_position} {first_slot} "
                    f"and key {position} {slot}",
                    invariant='unique-kana', position=position)
            seen[kana] = (position, slot)

    for modifier in MODIFIER_KANAS:
        if modifier not in seen:
            raise LayoutValidationError(f"Modifier kana '{modifier}' is not placed",
                                        invariant='modifier-placement')

    empty_bases = [p for p in KEY_POSITIONS if not layout[p].base]
    if empty_bases:
        raise LayoutValidationError(f"Base slot empty for positions: {empty_bases}",
                                    invariant='base-populated', position=empty_bases[0])

    return layout


def layout_from_dict(data: Mapping) -> Layout:
    """
    Build a layout from the interchange mapping.

    Args:
        data: Mapping of position (int or numeric string) to a dict with
              optional 'base', 'shift_a', 'shift_b', 'direct_shift' strings

    Returns:
        Layout covering all 30 positions (missing positions are empty)

    Raises:
        ValueError: If a position or slot name is invalid
    """
    layout = create_empty_layout()
    slot_names = {f.name for f in fields(KeyAssignment)}

    for raw_position, slots in data.items():
        try:
            position = int(raw_position)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid key position: {raw_position!r}")
        if position not in layout:
            raise ValueError(f"Key position out of range: {position}")

        unknown = [name for name in slots if name not in slot_names]
        if unknown:
            raise ValueError(f"Unknown slot names for key {position}: {unknown}")

        layout[position] = KeyAssignment(**{name: value for name, value in slots.items() if value})

    return layout


def layout_to_dict(layout: Layout) -> Dict[str, Dict[str, str]]:
    """Interchange form: position strings to populated slots, in position order."""
    return {str(position): layout[position].to_dict() for position in sorted(layout)}


def load_layout_json(filepath: str) -> Layout:
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Layout file not found: {filepath}")

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    logger.debug(f"Loaded layout with {len(data)} keys from {filepath}")
    return layout_from_dict(data)


def save_layout_json(layout: Layout, filepath: str) -> None:
    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(layout_to_dict(layout), f, ensure_ascii=False, indent=2)
        f.write('\n')
    logger.info(f"Saved layout to {filepath}")
