#!/usr/bin/env python3
# tests/test_output_utils.py - Unit tests for output_utils.py and cli_utils.py

import logging

import pytest

from kana_layout.cli_utils import configure_logging, create_parser, handle_common_errors
from kana_layout.layout_scoring import LayoutScore
from kana_layout.layout_search import PlacementError
from kana_layout.output_utils import (
    EMPTY_CELL,
    format_csv_output,
    format_detailed_output,
    format_layout_grid,
    print_results,
)


@pytest.fixture
def score():
    return LayoutScore(score=1500, kpm=320.5, total_seconds=40, total_count=1000,
                       metadata={'trigrams': 20, 'typable_trigrams': 18})


class TestFormatLayoutGrid:
    """Test suite for format_layout_grid()"""

    def test_base_rows(self, layout):
        lines = format_layout_grid(layout, show_keys=False).split('\n')
        assert lines[0] == '[base]'
        assert lines[1] == ' '.join('ますてとつさしかこき')
        assert lines[2].startswith('も ゃ ゅ う')

    def test_empty_cells_are_full_width(self, layout):
        lines = format_layout_grid(layout, show_keys=False).split('\n')
        shift_a_top = lines[lines.index('[shift_a]') + 1]
        assert shift_a_top.split(' ')[:3] == [EMPTY_CELL, EMPTY_CELL, EMPTY_CELL]
        assert shift_a_top.split(' ')[7] == 'よ'

    def test_key_rows(self, layout):
        grid = format_layout_grid(layout)
        assert 'q  w  e  r  t  y  u  i  o  p' in grid


class TestScoreFormats:
    """Test suite for score formatting"""

    def test_csv(self, score):
        header, row = format_csv_output(score).split('\n')
        assert header == 'score,kpm,total_seconds,total_count,meta_trigrams,meta_typable_trigrams'
        assert row == '1500,320.5,40,1000,20,18'

    def test_csv_without_headers(self, score):
        assert format_csv_output(score, {'include_headers': False}) == '1500,320.5,40,1000,20,18'

    def test_detailed(self, score, layout):
        text = format_detailed_output(score, layout)
        assert '[direct_shift]' in text
        assert 'KPM' in text
        assert 'Typable trigrams: 18/20' in text

    def test_detailed_without_layout(self, score, layout):
        text = format_detailed_output(score, layout, {'show_layout': False})
        assert '[base]' not in text

    def test_print_score_only(self, score, capsys):
        print_results(score, 'score_only')
        assert capsys.readouterr().out == '1500\n'

    def test_print_unknown_format(self, score):
        with pytest.raises(ValueError):
            print_results(score, 'xml')


class TestCliUtils:
    """Test suite for cli_utils helpers"""

    def test_parser_defaults(self):
        args = create_parser("test").parse_args([])
        assert args.config == 'config.yaml'
        assert args.output_format == 'detailed'
        assert not args.quiet
        assert not args.verbose

    def test_parser_custom_formats(self):
        parser = create_parser("test", output_formats=['tsv', 'json'])
        assert parser.parse_args([]).output_format == 'tsv'
        assert parser.parse_args(['--output-format', 'json']).output_format == 'json'

    def test_handle_common_errors_passes_result(self):
        assert handle_common_errors(lambda: 0)() == 0

    @pytest.mark.parametrize('error,status', [
        (ValueError("bad"), 1),
        (FileNotFoundError("missing"), 1),
        (PlacementError("stuck"), 1),
        (KeyboardInterrupt(), 130),
    ])
    def test_handle_common_errors_status(self, error, status, capsys):
        def failing():
            raise error

        assert handle_common_errors(failing)() == status
        assert capsys.readouterr().err

    def test_configure_logging_levels(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: calls.append(kwargs['level']))
        configure_logging(verbose=True)
        configure_logging(quiet=True)
        configure_logging()
        assert calls == [logging.DEBUG, logging.WARNING, logging.INFO]
