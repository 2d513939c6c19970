#!/usr/bin/env python3
"""
Reference layouts and kana lists.

EXAMPLE_LAYOUT is a complete, valid layout used as the default input of the
scripts and as a known-good layout in tests.
"""

from typing import List

from kana_layout.layout_utils import Layout, layout_from_dict

EXAMPLE_LAYOUT_DATA = {
    0: {'base': 'ま'},
    1: {'base': 'す'},
    2: {'base': 'て', 'shift_b': 'ゆ'},
    3: {'base': 'と'},
    4: {'base': 'つ'},
    5: {'base': 'さ'},
    6: {'base': 'し'},
    7: {'base': 'か', 'shift_a': 'よ'},
    8: {'base': 'こ'},
    9: {'base': 'き'},
    10: {'base': 'も', 'shift_a': 'や', 'shift_b': 'あ', 'direct_shift': 'ぁ'},
    11: {'base': 'ゃ'},
    12: {'base': 'ゅ', 'direct_shift': '、'},
    13: {'base': 'う', 'shift_a': 'ら', 'shift_b': 'ろ', 'direct_shift': 'ぅ'},
    14: {'base': 'ん', 'shift_a': 'へ'},
    15: {'base': 'く', 'shift_a': 'れ', 'shift_b': 'え', 'direct_shift': 'ぇ'},
    16: {'base': 'い', 'shift_a': 'め', 'shift_b': 'ね', 'direct_shift': 'ぃ'},
    17: {'base': 'ょ', 'direct_shift': '。'},
    18: {'base': '゛'},
    19: {'base': 'お', 'shift_a': 'そ', 'shift_b': 'ぬ', 'direct_shift': 'ぉ'},
    20: {'base': 'を', 'shift_a': 'ふ'},
    21: {'base': 'っ', 'direct_shift': 'み'},
    22: {'base': 'に', 'direct_shift': 'せ'},
    23: {'base': 'る', 'direct_shift': 'ち'},
    24: {'base': 'た', 'shift_a': 'わ'},
    25: {'base': 'の', 'shift_a': 'け'},
    26: {'base': 'な', 'direct_shift': 'ひ'},
    27: {'base': 'は'},
    28: {'base': 'り', 'direct_shift': 'む'},
    29: {'base': 'ー', 'shift_a': 'ほ'},
}

# Most frequent kana in a general corpus, excluding punctuation and modifiers
TOP26_KANAS: List[str] = [
    'い', 'う', 'ん', 'か', 'の', 'と', 'し', 'た', 'て', 'く',
    'な', 'に', 'は', 'こ', 'る', 'っ', 'す', 'き', 'ま', 'も',
    'つ', 'お', 'ら', 'を', 'さ', 'あ',
]


def example_layout() -> Layout:
    """Fresh copy of the example layout."""
    return layout_from_dict(EXAMPLE_LAYOUT_DATA)
