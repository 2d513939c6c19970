#!/usr/bin/env python3
"""
Table-backed keystroke timing model.

The search and scorer only need a callable taking three consecutive
keystrokes and returning the milliseconds spent on the last one. This module
provides one backed by a measured table.
"""

import logging
from typing import Dict, Mapping, Sequence

from kana_layout.data_utils import load_csv_with_validation
from kana_layout.stroke_encoder import Keystroke

logger = logging.getLogger(__name__)

DEFAULT_STROKE_TIME_MS = 200.0


class StrokeTimeModel:
    """
    Keystroke-trigram timing lookup.

    Keys are the three keystroke symbols concatenated (shift shown as
    upper case, e.g. 'kaL'); unseen trigrams cost `default_ms`.
    """

    def __init__(self, times: Mapping[str, float], default_ms: float = DEFAULT_STROKE_TIME_MS):
        self.times: Dict[str, float] = dict(times)
        self.default_ms = float(default_ms)

    @classmethod
    def from_csv(cls, filepath: str, default_ms: float = DEFAULT_STROKE_TIME_MS) -> 'StrokeTimeModel':
        """
        Load a model from a CSV with 'strokes' and 'time_ms' columns.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If columns are missing or a key is not three keystrokes
        """
        df = load_csv_with_validation(filepath, ['strokes', 'time_ms'], dtype_map={'strokes': str})

        times = {}
        for strokes, time_ms in zip(df['strokes'], df['time_ms']):
            if len(strokes) != 3:
                raise ValueError(f"Stroke key must be three keystroke symbols, got '{strokes}' in {filepath}")
            try:
                times[strokes] = float(time_ms)
            except (TypeError, ValueError):
                raise ValueError(f"Invalid time '{time_ms}' for '{strokes}' in {filepath}")

        logger.info(f"Loaded {len(times)} keystroke timings from {filepath}")
        return cls(times, default_ms)

    @staticmethod
    def key_for(strokes: Sequence[Keystroke]) -> str:
        return ''.join(stroke.symbol for stroke in strokes)

    def __call__(self, strokes: Sequence[Keystroke]) -> float:
        if len(strokes) != 3:
            raise ValueError(f"Expected three keystrokes, got {len(strokes)}")
        return self.times.get(self.key_for(strokes), self.default_ms)

    def __len__(self) -> int:
        return len(self.times)
