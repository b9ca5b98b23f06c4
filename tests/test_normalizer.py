"""
Tests for the coordinate normalizer (normalizer.py)
"""

import pytest

from graphomotor_eval.domain.value_objects import Point
from graphomotor_eval.normalizer import normalize


def _pts(*coords):
    return [Point(x=x, y=y) for x, y in coords]


class TestNormalize:

    def test_empty_trace_unchanged(self):
        assert normalize([]) == []

    def test_degenerate_trace_unchanged(self):
        trace = _pts((5, 5), (5, 5))
        assert normalize(trace) == _pts((5, 5), (5, 5))

    def test_single_point_unchanged(self):
        trace = _pts((12.5, 7))
        assert normalize(trace) is trace

    def test_square_maps_to_unit_frame(self):
        trace = _pts((50, 50), (150, 50), (150, 150), (50, 150), (50, 50))
        assert normalize(trace) == _pts((0, 0), (100, 0), (100, 100), (0, 100), (0, 0))

    def test_preserves_length_and_order(self):
        trace = _pts((300, 10), (10, 10), (150, 200), (10, 400))
        result = normalize(trace)
        assert len(result) == len(trace)
        assert result[0].x > result[1].x
        assert result[2].y < result[3].y

    def test_dominant_axis_spans_exactly_100(self):
        trace = _pts((10, 20), (210, 60), (110, 40))
        result = normalize(trace)
        xs = [p.x for p in result]
        ys = [p.y for p in result]
        assert min(xs) == 0
        assert max(xs) == 100
        assert min(ys) == 0
        assert max(ys) == 20

    def test_vertical_dominant_axis(self):
        trace = _pts((0, 0), (3, 600), (1, 300))
        result = normalize(trace)
        assert [p.y for p in result] == [0, 100, 50]
        assert [p.x for p in result] == [0, 1, 0]

    def test_negative_coordinates_translated(self):
        trace = _pts((-50, -50), (50, 50))
        result = normalize(trace)
        assert result == _pts((0, 0), (100, 100))
        assert all(p.x >= 0 and p.y >= 0 for p in result)

    def test_rounds_half_up(self):
        # scale = 200 / 100 = 2 -> 1 / 2 = 0.5 rounds to 1
        trace = _pts((0, 0), (1, 0), (200, 0))
        assert [p.x for p in normalize(trace)] == [0, 1, 100]

    def test_outputs_integers(self):
        trace = _pts((0.3, 0.1), (33.3, 12.2), (66.6, 20.0))
        for p in normalize(trace):
            assert isinstance(p.x, int)
            assert isinstance(p.y, int)

    def test_does_not_mutate_input(self):
        trace = _pts((0, 0), (10, 10))
        normalize(trace)
        assert trace == _pts((0, 0), (10, 10))

    @pytest.mark.parametrize("width,height", [(1, 1), (7, 3), (1000, 999)])
    def test_extent_within_frame(self, width, height):
        trace = _pts((0, 0), (width, height))
        result = normalize(trace)
        assert max(max(p.x, p.y) for p in result) == 100
        assert all(0 <= p.x <= 100 and 0 <= p.y <= 100 for p in result)
