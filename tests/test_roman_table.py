#!/usr/bin/env python3
# tests/test_roman_table.py - Unit tests for roman_table.py

import pytest

from kana_layout.kana_registry import encodable_units
from kana_layout.roman_table import (
    RomanTableRow,
    compose,
    decode_strokes,
    export_roman_table,
    layout_to_roman_table_string,
)
from kana_layout.stroke_encoder import (
    Keystroke,
    StrokeConversionError,
    strokes_for_kana,
    text_to_strokes,
)


@pytest.fixture
def table(layout):
    return export_roman_table(layout)


@pytest.fixture
def rows(table):
    return {row.input: row for row in table}


class TestRomanTableRow:
    """Test suite for RomanTableRow.to_dict()"""

    def test_output_row(self):
        assert RomanTableRow('かl', output='が').to_dict() == {'input': 'かl', 'output': 'が'}

    def test_pending_row(self):
        assert RomanTableRow('i', next_input='か').to_dict() == {'input': 'i', 'nextInput': 'か'}


class TestCompose:
    """Test suite for compose()"""

    def test_dakuten(self, layout):
        assert compose(layout[7], '゛') == 'が'
        assert compose(layout[0], '゛') == 'ぱ'

    def test_ya_without_youon_degrades_to_voicing(self, layout):
        assert compose(layout[7], 'ゃ') == 'が'

    def test_youon(self, layout):
        assert compose(layout[9], 'ゃ') == 'きゃ'
        assert compose(layout[23], 'ょ') == 'ちょ'

    def test_semi_voicing_takes_the_modifier(self, layout):
        assert compose(layout[26], 'ゅ') == 'ぴ'
        assert compose(layout[26], 'ょ') == 'ひょ'
        assert compose(layout[27], 'ょ') == 'ぱ'

    def test_shift_planes(self, layout):
        assert compose(layout[10], 'ゅ') == 'や'
        assert compose(layout[10], 'ょ') == 'あ'

    def test_nothing(self, layout):
        assert compose(layout[0], 'ゅ') is None
        assert compose(layout[29], '゛') == 'ぼ'
        assert compose(layout[3], 'ゃ') == 'ど'
        assert compose(layout[14], 'ゃ') == 'べ'
        assert compose(layout[24], 'ょ') is None


class TestExportRomanTable:
    """Test suite for export_roman_table()"""

    def test_single_keystrokes(self, rows):
        assert rows['i'].next_input == 'か'
        assert rows['A'].next_input == 'ぁ'
        assert rows['D'].next_input == '、'
        assert rows['l'].next_input == '゛'
        for symbol, kana in (('s', 'ゃ'), ('d', 'ゅ'), ('k', 'ょ')):
            assert rows[symbol].output == kana
            assert rows[symbol].next_input is None

    @pytest.mark.parametrize('name,output', [
        ('かl', 'が'),
        ('かL', 'が'),
        ('きs', 'きゃ'),
        ('きS', 'きゃ'),
        ('かs', 'が'),
        ('るs', 'ちゃ'),
        ('ちs', 'ちゃ'),
        ('んl', 'べ'),
        ('まl', 'ぱ'),
        ('もd', 'や'),
        ('もk', 'あ'),
        ('なd', 'ぴ'),
        ('はk', 'ぱ'),
        ('てJ', 'てぃ'),
        ('ZA', 'ふぁ'),
        ('ぁJ', 'あぃ'),
        ('ちH', 'ちぇ'),
    ])
    def test_two_keystroke_rows(self, rows, name, output):
        assert rows[name].output == output

    def test_shift_not_held_through_modifier_with_direct_kana(self, rows):
        """ゅ and ょ keys carry 、 and 。, so their shifted symbol never completes a chord"""
        assert 'もD' not in rows
        assert 'はK' not in rows

    def test_inputs_are_unique(self, table):
        names = [row.input for row in table]
        assert len(names) == len(set(names))

    def test_string_projection(self, layout, table):
        lines = layout_to_roman_table_string(layout).split('\n')
        assert len(lines) == len(table)
        assert 'かl\tが\t' in lines
        assert 'i\t\tか' in lines
        assert all(len(line.split('\t')) == 3 for line in lines)


class TestDecodeStrokes:
    """Test suite for decode_strokes()"""

    def test_every_encodable_unit_round_trips(self, layout, table):
        encoded = 0
        for unit in encodable_units():
            try:
                strokes = strokes_for_kana(layout, unit)
            except StrokeConversionError:
                continue
            encoded += 1
            assert decode_strokes(table, strokes) == unit, f"{unit}: {[s.symbol for s in strokes]}"
        assert encoded > 100

    def test_text(self, layout, table):
        text = 'きょうはいいてんきですね。ふぁいとー'
        assert decode_strokes(table, text_to_strokes(layout, text)) == text

    def test_ya_key_after_plain_kana_voices(self, table):
        assert decode_strokes(table, [Keystroke('i'), Keystroke('s')]) == 'が'

    def test_pending_kana_committed(self, table):
        assert decode_strokes(table, [Keystroke('i'), Keystroke('p')]) == 'かき'

    def test_empty(self, table):
        assert decode_strokes(table, []) == ''
