#!/usr/bin/env python3
"""
Greedy layout search.

Kana are placed one at a time in frequency order. Each legal slot for the
current kana is tried on a copy of the layout and costed by the time needed
to type the trigrams that placement makes typable; the cheapest slot is kept.
There is no backtracking, so a kana with no legal slot left ends the search.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from kana_layout.kana_registry import MODIFIER_KANAS, classify
from kana_layout.layout_scoring import StrokeTimeFn, TrigramEntry, trigram_tail_info
from kana_layout.layout_utils import (
    KEY_POSITIONS,
    KEY_SLOTS,
    Layout,
    LayoutValidationError,
    clone_layout,
    create_layout_with_modifiers,
    locate_kana,
    validate_key_assignment,
    validate_layout,
)

logger = logging.getLogger(__name__)

DEFAULT_MODIFIER_POSITIONS: Mapping[str, int] = {'ゃ': 11, 'ゅ': 12, 'ょ': 17, '゛': 18}

# Contraction sources placed late can run out of legal keys, so they are pulled forward
DEFAULT_EARLY_PLACEMENT: Mapping[str, int] = {'ひ': 41}

BASE_SLOT_KANA_COUNT = 26


class PlacementError(RuntimeError):
    """The search cannot place a kana anywhere."""


@dataclass(frozen=True)
class PlacementCandidate:
    position: int
    slot: str


def can_assign_kana(layout: Layout, position: int, slot: str, kana: str) -> bool:
    """True if the slot is empty and the key stays legal with `kana` in it."""
    assignment = layout[position]
    if assignment.get(slot):
        return False
    try:
        validate_key_assignment(assignment.with_kana(slot, kana), position)
    except LayoutValidationError:
        return False
    return True


def placement_candidates(layout: Layout, kana: str) -> List[PlacementCandidate]:
    """
    Every empty slot where a kana could legally go.

    Args:
        layout: Current (partial) layout
        kana: Kana to place

    Returns:
        Candidates in position then slot order; empty for modifier kana and
        anything the registry does not know
    """
    info = classify(kana)
    if info is None or info.is_modifier:
        return []

    return [
        PlacementCandidate(position, slot)
        for position in KEY_POSITIONS
        for slot in KEY_SLOTS
        if can_assign_kana(layout, position, slot, kana)
    ]


def apply_early_placement(kana_order: Sequence[str], early_placement: Mapping[str, int]) -> List[str]:
    """Move each listed kana up to its target index when it currently sits later."""
    order = list(kana_order)
    for kana, target in early_placement.items():
        if kana in order and order.index(kana) > target:
            order.remove(kana)
            order.insert(target, kana)
    return order


def base_slot_kanas(kana_order: Sequence[str], count: int) -> List[str]:
    """The `count` most frequent kana eligible for base slots (no punctuation or modifiers)."""
    eligible = []
    for kana in kana_order:
        info = classify(kana)
        if info is not None and (info.is_punctuation or info.is_modifier):
            continue
        if kana not in eligible:
            eligible.append(kana)
    return eligible[:count]


def placement_cost(layout: Layout, trigrams: Iterable[TrigramEntry], stroke_time: StrokeTimeFn) -> float:
    """Count-weighted final-unit time of the trigrams typable on `layout`."""
    cost = 0.0
    for entry in trigrams:
        info = trigram_tail_info(layout, entry.trigram, stroke_time)
        if info is not None:
            cost += info.time_ms * entry.count
    return cost


def search_layout(kana_order: Sequence[str], trigrams: Iterable[TrigramEntry],
                  stroke_time: StrokeTimeFn, config: Optional[Dict[str, Any]] = None) -> Layout:
    """
    Build a layout greedily.

    Args:
        kana_order: Kana to place, most frequent first
        trigrams: Corpus trigrams used for costing
        stroke_time: Keystroke timing oracle
        config: Optional settings: 'modifier_positions', 'early_placement',
                'base_slot_kana_count'

    Returns:
        A validated layout

    Raises:
        PlacementError: If the base-slot kana cannot fit next to the modifiers,
                        or a kana has no legal slot left
        LayoutValidationError: If the finished layout is not valid (for example,
                               too few kana to fill every base slot)
    """
    config = config or {}
    modifier_positions = config.get('modifier_positions') or DEFAULT_MODIFIER_POSITIONS
    early_placement = config.get('early_placement')
    if early_placement is None:
        early_placement = DEFAULT_EARLY_PLACEMENT
    base_count = config.get('base_slot_kana_count', BASE_SLOT_KANA_COUNT)

    if base_count + len(MODIFIER_KANAS) > len(KEY_POSITIONS):
        raise PlacementError(
            f"{base_count} base-slot kana plus {len(MODIFIER_KANAS)} modifier keys "
            f"exceed {len(KEY_POSITIONS)} key positions")

    layout = create_layout_with_modifiers(modifier_positions)
    pending = list(trigrams)
    base_kanas = set(base_slot_kanas(kana_order, base_count))
    order = apply_early_placement(kana_order, early_placement)

    logger.info(f"Searching layout for {len(order)} kana over {len(pending)} trigrams")

    for kana in order:
        if locate_kana(layout, kana) is not None:
            logger.debug(f"Skipping '{kana}': already placed")
            continue

        wants_base = kana in base_kanas
        candidates = [c for c in placement_candidates(layout, kana)
                      if (c.slot == 'base') == wants_base]
        if not candidates:
            raise PlacementError(f"No legal slot left for '{kana}'")

        related = [entry for entry in pending if kana in entry.trigram]

        best = candidates[0]
        best_cost = None
        for candidate in candidates:
            trial = clone_layout(layout)
            trial[candidate.position] = trial[candidate.position].with_kana(candidate.slot, kana)
            cost = placement_cost(trial, related, stroke_time)
            if best_cost is None or cost < best_cost:
                best, best_cost = candidate, cost

        layout[best.position] = layout[best.position].with_kana(best.slot, kana)
        logger.debug(f"Placed '{kana}' at key {best.position} {best.slot} (cost {best_cost:.1f})")

        pending = [entry for entry in pending
                   if not (kana in entry.trigram
                           and trigram_tail_info(layout, entry.trigram, stroke_time) is not None)]

    logger.info(f"Search finished with {len(pending)} trigrams still untypable")
    return validate_layout(layout)
