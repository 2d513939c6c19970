#!/usr/bin/env python3
"""
Trigram timing and layout scoring.

A trigram is a run of three output units taken from a corpus, with its
occurrence count. Only the keystrokes of the final unit are timed, each one
against its two predecessors, so the time reflects typing that unit in context.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Sequence

import numpy as np

from kana_layout.layout_utils import Layout
from kana_layout.stroke_encoder import Keystroke, StrokeConversionError, text_to_strokes

logger = logging.getLogger(__name__)

# Milliseconds to type the last of three consecutive keystrokes
StrokeTimeFn = Callable[[Sequence[Keystroke]], float]


@dataclass(frozen=True)
class TrigramEntry:
    """A corpus trigram and how often it occurs."""

    trigram: str
    count: int


@dataclass(frozen=True)
class TailInfo:
    """Timing of a trigram's final unit."""

    time_ms: float
    stroke_count: int


@dataclass
class LayoutScore:
    """
    Result container for layout scoring.

    Mirrors the shape of a scorer result: headline score, supporting
    figures, and free-form metadata for reports.
    """

    score: int
    """Typable trigram occurrences per minute of final-unit typing (higher = better)"""

    kpm: float
    """Keystrokes per minute over the timed final units"""

    total_seconds: int
    total_count: int

    metadata: Dict[str, Any] = field(default_factory=dict)
    """Coverage figures (typable vs. total trigrams)"""

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert result to dictionary format.

        Returns:
            Dictionary representation suitable for JSON/CSV export
        """
        result = {
            'score': self.score,
            'kpm': self.kpm,
            'total_seconds': self.total_seconds,
            'total_count': self.total_count,
        }
        for key, value in self.metadata.items():
            if isinstance(value, (str, int, float, bool)):
                result[f'meta_{key}'] = value
        return result

    def summary(self) -> str:
        summary_lines = [
            f"Score: {self.score}",
            f"KPM: {self.kpm:.2f}",
            f"Total seconds: {self.total_seconds}",
            f"Total count: {self.total_count}",
        ]
        if 'typable_trigrams' in self.metadata:
            summary_lines.append(
                f"Typable trigrams: {self.metadata['typable_trigrams']}/{self.metadata.get('trigrams', 0)}")
        return "\n".join(summary_lines)


def trigram_tail_info(layout: Layout, trigram: str, stroke_time: StrokeTimeFn) -> Optional[TailInfo]:
    """
    Time the final output unit of a trigram.

    Args:
        layout: Layout to type on (read only)
        trigram: Three output units of text
        stroke_time: Oracle giving the time of a keystroke after its two predecessors

    Returns:
        TailInfo, or None if the trigram cannot be typed yet or its final
        unit has no keystroke with two predecessors
    """
    try:
        strokes = text_to_strokes(layout, trigram)
    except StrokeConversionError:
        return None

    if not strokes:
        return None

    final_unit = strokes[-1].unit_index
    tail = [i for i in range(2, len(strokes)) if strokes[i].unit_index == final_unit]
    if not tail:
        return None

    time_ms = sum(stroke_time(tuple(strokes[i - 2:i + 1])) for i in tail)
    return TailInfo(time_ms=float(time_ms), stroke_count=len(tail))


def trigram_tail_time(layout: Layout, trigram: str, stroke_time: StrokeTimeFn) -> Optional[float]:
    """Final-unit time in milliseconds, or None if the trigram is not typable."""
    info = trigram_tail_info(layout, trigram, stroke_time)
    return None if info is None else info.time_ms


def score_layout(layout: Layout, trigrams: Iterable[TrigramEntry],
                 stroke_time: StrokeTimeFn) -> LayoutScore:
    """
    Score a layout over a trigram set.

    Args:
        layout: Layout to evaluate (read only)
        trigrams: Corpus trigrams with counts
        stroke_time: Keystroke timing oracle

    Returns:
        LayoutScore; every figure is 0 when no trigram is typable
    """
    counts = []
    times = []
    strokes = []
    total_trigrams = 0

    for entry in trigrams:
        total_trigrams += 1
        info = trigram_tail_info(layout, entry.trigram, stroke_time)
        if info is None:
            continue
        counts.append(entry.count)
        times.append(info.time_ms)
        strokes.append(info.stroke_count)

    counts_arr = np.asarray(counts, dtype=float)
    total_count = int(counts_arr.sum())
    total_time_ms = float(np.dot(np.asarray(times, dtype=float), counts_arr)) if counts else 0.0
    total_strokes = float(np.dot(np.asarray(strokes, dtype=float), counts_arr)) if counts else 0.0

    total_seconds = total_time_ms / 1000
    if total_seconds > 0:
        score = int(round(total_count / total_seconds * 60000))
        kpm = round(total_strokes * 60 / total_seconds, 2)
    else:
        score = 0
        kpm = 0.0

    logger.debug(f"Scored layout: {len(counts)}/{total_trigrams} trigrams typable")

    return LayoutScore(
        score=score,
        kpm=kpm,
        total_seconds=int(round(total_seconds)),
        total_count=total_count,
        metadata={'trigrams': total_trigrams, 'typable_trigrams': len(counts)},
    )
