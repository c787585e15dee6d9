"""Unit tests for handicap stroke allocation."""

import pytest

from conftest import make_holes
from golfleague.strokes import allocate_strokes, round_half_up


class TestRoundHalfUp:
    """Tests for the half-up rounding used on stroke counts."""

    @pytest.mark.parametrize('value,expected', [(2.5, 3), (2.49, 2), (0.5, 1), (0.0, 0), (11.4, 11)])
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


class TestAllocateStrokes:
    """Tests for allocate_strokes."""

    @pytest.mark.parametrize('differential', [0, 1, 3.4, 4.5, 9, 10, 17.6, 20])
    def test_total_equals_rounded_differential(self, holes, differential):
        """Stroke total always equals the differential rounded half-up."""
        assert sum(allocate_strokes(differential, holes)) == round_half_up(differential)

    def test_hardest_holes_first(self, holes):
        """Three strokes land on stroke indexes 1-3."""
        assert allocate_strokes(3, holes) == [1, 1, 1, 0, 0, 0, 0, 0, 0]

    def test_follows_stroke_index_not_hole_order(self):
        """Output is aligned with the input holes, not with stroke index order."""
        holes = make_holes(stroke_indexes=[5, 1, 9, 3, 7, 2, 8, 4, 6])
        strokes = allocate_strokes(2, holes)
        assert strokes == [0, 1, 0, 0, 0, 1, 0, 0, 0]

    def test_wraps_after_nine(self, holes):
        """Eleven strokes: one on every hole, a second on the two hardest."""
        assert allocate_strokes(11, holes) == [2, 2, 1, 1, 1, 1, 1, 1, 1]

    def test_half_stroke_rounds_up(self, holes):
        assert sum(allocate_strokes(0.5, holes)) == 1

    def test_negative_gives_nothing(self, holes):
        assert allocate_strokes(-4, holes) == [0] * 9

    def test_no_holes(self):
        assert allocate_strokes(5, []) == []
