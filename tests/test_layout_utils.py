#!/usr/bin/env python3
# tests/test_layout_utils.py - Unit tests for layout_utils.py

import json

import pytest

from kana_layout.kana_registry import MODIFIER_KANAS
from kana_layout.layout_utils import (
    KeyAssignment,
    LayoutValidationError,
    clone_layout,
    create_layout_with_modifiers,
    create_random_draft_layout,
    key_symbol,
    layout_from_dict,
    layout_to_dict,
    load_layout_json,
    locate_kana,
    modifier_position,
    save_layout_json,
    validate_key_assignment,
    validate_layout,
)
from kana_layout.layout_fixtures import TOP26_KANAS

DEFAULT_MODIFIERS = {'ゃ': 11, 'ゅ': 12, 'ょ': 17, '゛': 18}


class TestKeySymbol:
    """Test suite for key_symbol()"""

    def test_unshifted(self):
        assert key_symbol(0) == 'q'
        assert key_symbol(19) == ';'
        assert key_symbol(29) == '/'

    def test_shifted_letters_are_upper_case(self):
        assert key_symbol(0, shift=True) == 'Q'
        assert key_symbol(18, shift=True) == 'L'

    def test_shifted_punctuation_keys(self):
        assert key_symbol(19, shift=True) == ':'
        assert key_symbol(27, shift=True) == '<'
        assert key_symbol(28, shift=True) == '>'
        assert key_symbol(29, shift=True) == '?'


class TestValidateKeyAssignment:
    """Test suite for the per-key legality predicate"""

    @pytest.mark.parametrize('assignment', [
        KeyAssignment(base='か'),
        KeyAssignment(base='な', direct_shift='ひ'),
        KeyAssignment(base='ゃ', direct_shift='ー'),
        KeyAssignment(base='゛', direct_shift='か'),
        KeyAssignment(base='も', shift_a='や', shift_b='あ', direct_shift='ぁ'),
        KeyAssignment(base='ん', shift_a='へ'),
        KeyAssignment(base='ら', shift_a='ぁ'),
    ])
    def test_legal(self, assignment):
        assert validate_key_assignment(assignment) is assignment

    @pytest.mark.parametrize('assignment', [
        KeyAssignment(base='X'),
        KeyAssignment(base='か', shift_a='ゃ'),
        KeyAssignment(base='ら', shift_a='ら'),
        KeyAssignment(base='か', shift_a='き'),
        KeyAssignment(base='き', direct_shift='ち'),
        KeyAssignment(base='き', shift_a='ら'),
        KeyAssignment(base='は', shift_b='ら'),
        KeyAssignment(base='な', direct_shift='ひ', shift_a='ら'),
        KeyAssignment(base='に', direct_shift='ふ'),
        KeyAssignment(base='い', shift_a='え'),
        KeyAssignment(base='ぁ'),
        KeyAssignment(base='ら', shift_a='ぁ', shift_b='ぃ'),
        KeyAssignment(base='ら', shift_a='ぁ', direct_shift='れ'),
        KeyAssignment(base='ゃ', direct_shift='か'),
        KeyAssignment(base='ゅ', shift_a='ら'),
        KeyAssignment(base='゛', direct_shift='ぁ'),
    ])
    def test_illegal(self, assignment):
        with pytest.raises(LayoutValidationError) as excinfo:
            validate_key_assignment(assignment, position=3)
        assert excinfo.value.invariant == 'key-assignment'
        assert excinfo.value.position == 3


class TestValidateLayout:
    """Test suite for validate_layout()"""

    def test_example_layout_is_valid(self, layout):
        assert validate_layout(layout) is layout

    def test_missing_position(self, layout):
        del layout[29]
        with pytest.raises(LayoutValidationError) as excinfo:
            validate_layout(layout)
        assert excinfo.value.invariant == 'positions'

    def test_kana_in_two_slots(self, layout):
        layout[1].direct_shift = 'ー'
        with pytest.raises(LayoutValidationError) as excinfo:
            validate_layout(layout)
        assert excinfo.value.invariant == 'unique-kana'

    def test_missing_modifier(self, layout):
        layout[18].base = None
        with pytest.raises(LayoutValidationError) as excinfo:
            validate_layout(layout)
        assert excinfo.value.invariant == 'modifier-placement'

    def test_empty_base_slot(self, layout):
        layout[29].base = None
        with pytest.raises(LayoutValidationError) as excinfo:
            validate_layout(layout)
        assert excinfo.value.invariant == 'base-populated'
        assert excinfo.value.position == 29

    def test_illegal_key(self, layout):
        layout[0].shift_a = 'ゃ'
        with pytest.raises(LayoutValidationError) as excinfo:
            validate_layout(layout)
        assert excinfo.value.invariant == 'key-assignment'
        assert excinfo.value.position == 0


class TestLayoutConstruction:
    """Test suite for layout builders and lookups"""

    def test_create_layout_with_modifiers(self):
        layout = create_layout_with_modifiers(DEFAULT_MODIFIERS)
        assert len(layout) == 30
        for kana, position in DEFAULT_MODIFIERS.items():
            assert layout[position].base == kana
            assert modifier_position(layout, kana) == position
        assert sum(len(a.kanas()) for a in layout.values()) == 4

    def test_create_layout_with_modifiers_rejects_shared_position(self):
        with pytest.raises(LayoutValidationError):
            create_layout_with_modifiers({'ゃ': 1, 'ゅ': 1, 'ょ': 2, '゛': 3})

    def test_create_layout_with_modifiers_rejects_missing(self):
        with pytest.raises(LayoutValidationError):
            create_layout_with_modifiers({'ゃ': 1, 'ゅ': 2, 'ょ': 3})

    def test_random_draft_places_each_modifier_once(self):
        layout = create_random_draft_layout(TOP26_KANAS)
        placed = [a.base for a in layout.values() if a.base]
        assert sorted(placed) == sorted(MODIFIER_KANAS)

    def test_random_draft_rejects_too_many_kana(self):
        with pytest.raises(ValueError):
            create_random_draft_layout(TOP26_KANAS + ['ー'])

    def test_clone_is_independent(self, layout):
        copy = clone_layout(layout)
        copy[0].base = 'ー'
        assert layout[0].base == 'ま'

    def test_locate_kana(self, layout):
        assert locate_kana(layout, 'か') == (7, 'base')
        assert locate_kana(layout, 'よ') == (7, 'shift_a')
        assert locate_kana(layout, 'ぁ') == (10, 'direct_shift')
        assert locate_kana(layout, 'が') is None


class TestInterchange:
    """Test suite for the JSON interchange format"""

    def test_dict_round_trip(self, layout):
        data = layout_to_dict(layout)
        assert data['7'] == {'base': 'か', 'shift_a': 'よ'}
        assert layout_to_dict(layout_from_dict(data)) == data

    def test_json_file_round_trip(self, layout, tmp_path):
        path = tmp_path / 'layout.json'
        save_layout_json(layout, str(path))

        with open(path, encoding='utf-8') as f:
            raw = json.load(f)
        assert raw['10']['direct_shift'] == 'ぁ'

        assert layout_to_dict(load_layout_json(str(path))) == layout_to_dict(layout)

    def test_missing_positions_are_empty(self):
        layout = layout_from_dict({'3': {'base': 'か'}})
        assert len(layout) == 30
        assert layout[3].base == 'か'
        assert layout[4].base is None

    def test_unknown_slot_name(self):
        with pytest.raises(ValueError):
            layout_from_dict({'0': {'oneStroke': 'か'}})

    def test_position_out_of_range(self):
        with pytest.raises(ValueError):
            layout_from_dict({'30': {'base': 'か'}})

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_layout_json(str(tmp_path / 'missing.json'))
