import pytest

from kana_layout.layout_fixtures import example_layout


@pytest.fixture
def layout():
    """Fresh copy of the example layout"""
    return example_layout()


@pytest.fixture
def constant_stroke_time():
    """Timing oracle charging 100 ms for every keystroke"""
    return lambda strokes: 100.0
