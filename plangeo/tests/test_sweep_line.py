"""Tests for sweep-line triangulation of monotone polygons."""
import numpy as np
import pytest

from plangeo.core.geometry import as_triangles, polygon_signed_area, triangles_signed_areas
from plangeo.core.sweep_line import SweepLine


def regular_polygon(n, radius=2.0, phase=0.1):
    angles = phase + 2.0 * np.pi * np.arange(n) / n
    return np.column_stack([radius * np.cos(angles), radius * np.sin(angles)])


@pytest.mark.parametrize('n', [3, 4, 5, 8, 13])
@pytest.mark.parametrize('reverse', [False, True])
def test_convex_polygon(n, reverse):
    poly = regular_polygon(n)
    if reverse:
        poly = poly[::-1]
    tris = as_triangles(SweepLine()(poly))
    areas = triangles_signed_areas(tris)
    assert len(tris) == n - 2
    assert np.all(areas > 0.0)
    assert areas.sum() == pytest.approx(abs(polygon_signed_area(poly)))


def test_unit_square():
    tris = as_triangles(SweepLine()([(0, 0), (1, 0), (1, 1), (0, 1)]))
    assert len(tris) == 2
    assert triangles_signed_areas(tris).sum() == pytest.approx(1.0)


def test_reflex_vertex_on_lower_chain():
    poly = [(0.0, 0.0), (2.0, -2.0), (4.0, -0.5), (6.0, -2.0), (8.0, 0.0), (4.0, 3.0)]
    tris = as_triangles(SweepLine()(poly))
    areas = triangles_signed_areas(tris)
    assert len(tris) == 4
    assert np.all(areas > 0.0)
    assert areas.sum() == pytest.approx(21.0)


def test_vertices_come_from_the_boundary():
    poly = regular_polygon(7)
    tris = SweepLine()(poly)
    boundary = {tuple(p) for p in poly.tolist()}
    assert {tuple(p) for p in tris.tolist()} <= boundary


@pytest.mark.parametrize('poly', [[], [(0.0, 0.0)], [(0.0, 0.0), (1.0, 0.0)]])
def test_too_few_points(poly):
    assert SweepLine()(poly).shape == (0, 2)


def test_reusable_with_output_list():
    algo = SweepLine()
    out = []
    algo(regular_polygon(6), out)
    algo(regular_polygon(6), out)
    assert len(out) == 2 * 4 * 3


PENTAGON = [(0.0, 0.0), (2.0, -1.0), (4.0, 0.0), (3.0, 2.0), (1.0, 2.0)]
PENTAGON_TRIANGLES = [
    [0.0, 0.0], [2.0, -1.0], [1.0, 2.0],
    [3.0, 2.0], [1.0, 2.0], [2.0, -1.0],
    [3.0, 2.0], [2.0, -1.0], [4.0, 0.0],
]


class TestEmittedStream:
    """Exact triangle streams; the chain split decides which diagonals appear."""

    def test_clockwise_square(self):
        tris = SweepLine()([(0, 0), (0, 1), (1, 1), (1, 0)])
        assert tris.tolist() == [
            [0.0, 0.0], [1.0, 0.0], [0.0, 1.0],
            [1.0, 1.0], [0.0, 1.0], [1.0, 0.0],
        ]

    def test_counter_clockwise_pentagon(self):
        assert SweepLine()(PENTAGON).tolist() == PENTAGON_TRIANGLES

    def test_rightmost_index_below_leftmost(self):
        rotated = PENTAGON[2:] + PENTAGON[:2]
        assert SweepLine()(rotated).tolist() == PENTAGON_TRIANGLES

    def test_triangle_with_empty_forward_chain(self):
        tris = SweepLine()([(0.0, 0.0), (2.0, 0.0), (1.0, 1.0)])
        assert tris.tolist() == [[1.0, 1.0], [0.0, 0.0], [2.0, 0.0]]

    def test_clockwise_triangle_with_empty_forward_chain(self):
        tris = SweepLine()([(2.0, 0.0), (1.0, -1.0), (0.0, 0.0)])
        assert tris.tolist() == [[2.0, 0.0], [0.0, 0.0], [1.0, -1.0]]


def test_reflex_vertex_on_upper_chain():
    poly = [(0.0, 0.0), (4.0, -3.0), (8.0, 0.0), (6.0, 2.0), (4.0, 0.5), (2.0, 2.0)]
    tris = as_triangles(SweepLine()(poly))
    areas = triangles_signed_areas(tris)
    assert len(tris) == 4
    assert np.all(areas > 0.0)
    assert areas.sum() == pytest.approx(21.0)
