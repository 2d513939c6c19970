# kana_layout/__init__.py
"""
Chorded Kana Layout Toolkit

Kana registry, layout validation, stroke encoding and greedy layout search
for a 30-key chorded Japanese kana keyboard.
"""

__version__ = "1.0.0"

# Import main entry points for easy access
from .layout_utils import Layout, KeyAssignment, LayoutValidationError, validate_layout
from .stroke_encoder import Keystroke, StrokeConversionError, strokes_for_kana, text_to_strokes
from .roman_table import RomanTableRow, decode_strokes, export_roman_table
from .layout_scoring import LayoutScore, TrigramEntry, score_layout
from .layout_search import PlacementError, search_layout

__all__ = [
    'Layout',
    'KeyAssignment',
    'LayoutValidationError',
    'validate_layout',
    'Keystroke',
    'StrokeConversionError',
    'strokes_for_kana',
    'text_to_strokes',
    'RomanTableRow',
    'decode_strokes',
    'export_roman_table',
    'LayoutScore',
    'TrigramEntry',
    'score_layout',
    'PlacementError',
    'search_layout',
]
