"""Tests for the gift wrapping and Graham scan convex hulls.

scipy.spatial.ConvexHull serves as an independent reference for random
point clouds.
"""
import numpy as np
import pytest
from scipy.spatial import ConvexHull

from plangeo.core.convex_hull import GiftWrappingConvexHull, GrahamScanConvexHull
from plangeo.core.diagnostics import check_convex_hull
from plangeo.core.geometry import polygon_signed_area

HULLS = [GiftWrappingConvexHull, GrahamScanConvexHull]

SQUARE = [(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0), (2.0, 2.0)]


def random_cloud(n=80, seed=0):
    rng = np.random.default_rng(seed)
    return rng.uniform(-5.0, 5.0, size=(n, 2))


def vertex_set(arr):
    return {tuple(map(float, p)) for p in arr}


def test_gift_wrapping_square_example():
    hull = GiftWrappingConvexHull()(SQUARE)
    assert hull.tolist() == [[4.0, 4.0], [0.0, 4.0], [0.0, 0.0], [4.0, 0.0]]


def test_graham_scan_square_example():
    hull = GrahamScanConvexHull()(SQUARE)
    assert hull.tolist() == [[0.0, 0.0], [4.0, 0.0], [4.0, 4.0], [0.0, 4.0]]


@pytest.mark.parametrize('algo', HULLS)
class TestHullProperties:
    """Properties every hull algorithm must satisfy."""

    def test_matches_scipy_vertices(self, algo):
        pts = random_cloud()
        hull = algo()(pts)
        ref = ConvexHull(pts)
        assert vertex_set(hull) == vertex_set(pts[ref.vertices])
        assert len(hull) == len(ref.vertices)

    def test_counter_clockwise_and_contains_input(self, algo):
        pts = random_cloud(seed=3)
        hull = algo()(pts)
        assert polygon_signed_area(hull) > 0.0
        report = check_convex_hull(pts, hull)
        assert report['foreign_vertices'] == []
        assert report['outside_points'] == []

    def test_idempotent(self, algo):
        pts = random_cloud(seed=7)
        first = algo()(pts)
        second = algo()(first)
        assert vertex_set(first) == vertex_set(second)

    def test_empty_input(self, algo):
        hull = algo()([])
        assert hull.shape == (0, 2)

    def test_coincident_cluster_gives_single_vertex(self, algo):
        pts = np.tile([[1.5, -2.0]], (6, 1))
        hull = algo()(pts)
        assert hull.tolist() == [[1.5, -2.0]]

    def test_appends_to_output_list(self, algo):
        out = [('sentinel', 0)]
        result = algo()(SQUARE, out)
        assert result is out
        assert out[0] == ('sentinel', 0)
        assert len(out) == 5
        assert all(isinstance(p, tuple) for p in out[1:])

    def test_reusable_between_calls(self, algo):
        hull = algo()
        a = hull(random_cloud(seed=1))
        hull(random_cloud(seed=2))
        b = hull(random_cloud(seed=1))
        assert np.array_equal(a, b)


def test_both_algorithms_agree():
    pts = random_cloud(n=200, seed=11)
    gw = GiftWrappingConvexHull()(pts)
    gs = GrahamScanConvexHull()(pts)
    assert vertex_set(gw) == vertex_set(gs)


def test_rejects_bad_shape():
    with pytest.raises(ValueError):
        GrahamScanConvexHull()(np.zeros((4, 3)))
