"""Incremental Delaunay triangulation grown from an active boundary.

The triangulation starts from one triangle and repeatedly closes the open
side of a boundary edge with the point that minimizes the signed
circumradius (``delaunay_distance``). Boundary edges are stored directed as
they appear in their CCW triangle; the open side is to their right.
"""
from __future__ import annotations

import math
from typing import Dict, List, Optional, Tuple

import numpy as np

from .config import ToleranceConfig
from .constants import EPS_DETERMINANT
from .geometry import Point, as_points, circumcircle_centers, to_stream
from .logging_utils import get_logger

logger = get_logger('plangeo.delaunay')

Edge = Tuple[Point, Point]

__all__ = ['delaunay_distance', 'delaunay_distances', 'Delaunay']


def delaunay_distances(p1, p2, candidates, eps: float = EPS_DETERMINANT) -> np.ndarray:
    """Signed circumradius of (p, p1, p2) for every candidate p.

    The radius is negated when the angle at p is obtuse
    (``dot(p1 - p, p2 - p) < 0``), i.e. when the circle center lies on the
    other side of edge (p1, p2). Collinear triples rank as +inf.
    """
    cand = np.asarray(candidates, dtype=np.float64).reshape(-1, 2)
    centers, valid = circumcircle_centers(cand, p1, p2, eps)
    out = np.full(len(cand), np.inf)
    if np.any(valid):
        c = cand[valid]
        r = np.hypot(c[:, 0] - centers[valid, 0], c[:, 1] - centers[valid, 1])
        dot = (p1[0] - c[:, 0]) * (p2[0] - c[:, 0]) + (p1[1] - c[:, 1]) * (p2[1] - c[:, 1])
        out[valid] = np.copysign(r, dot)
    return out


def delaunay_distance(p1, p2, p, eps: float = EPS_DETERMINANT) -> float:
    return float(delaunay_distances(p1, p2, [p], eps)[0])


class Delaunay:
    """Delaunay triangulation of a planar point set.

    Returns a flat stream of CCW triangles. Fewer than three points, or points
    that are all collinear, give an empty stream.
    """

    def __init__(self, tolerances: Optional[ToleranceConfig] = None):
        self.tolerances = tolerances or ToleranceConfig()
        self.reset()

    def reset(self) -> None:
        self._points = np.empty((0, 2), dtype=np.float64)
        # insertion-ordered so popitem() processes the newest edge first
        self._frontier: Dict[Edge, None] = {}

    def __call__(self, points, out: Optional[list] = None):
        self.reset()
        self._points = as_points(points)
        n = len(self._points)
        triangles: List[Point] = []

        if n >= 3:
            seed = self._seed_triangle()
            if seed is not None:
                p1, p2, p3 = seed
                self._frontier[(p1, p2)] = None
                self._frontier[(p2, p3)] = None
                self._frontier[(p3, p1)] = None
                triangles.extend(seed)

        # A planar triangulation of n points has at most 2n - 5 triangles
        max_triangles = max(2 * n - 5, 1)
        while self._frontier:
            (p2, p1), _ = self._frontier.popitem()
            p3 = self._complete_triangle(p1, p2)
            if p3 is None:
                # (p1, p2) is a hull edge
                continue
            self._expand_frontier(p2, p3)
            self._expand_frontier(p3, p1)
            triangles.extend((p1, p2, p3))
            if len(triangles) // 3 > max_triangles:
                logger.warning("delaunay: more than %d triangles for %d points; "
                               "stopping on degenerate input", max_triangles, n)
                break

        logger.debug("delaunay: %d points -> %d triangles", n, len(triangles) // 3)
        return to_stream(triangles, out)

    def _point(self, idx: int) -> Point:
        return (float(self._points[idx, 0]), float(self._points[idx, 1]))

    def _seed_triangle(self) -> Optional[Tuple[Point, Point, Point]]:
        pts = self._points
        d2 = np.sum((pts[1:] - pts[0]) ** 2, axis=1)
        # a coincident neighbour would give a zero-length seed edge
        eps = self.tolerances.eps_distance
        d2[d2 < eps * eps] = np.inf
        if not np.isfinite(d2).any():
            return None
        p1 = self._point(0)
        p2 = self._point(1 + int(np.argmin(d2)))

        p3 = self._complete_triangle(p1, p2)
        if p3 is None:
            # nothing to the left of (p1, p2): it lies on the hull, take the other side
            p1, p2 = p2, p1
            p3 = self._complete_triangle(p1, p2)
        if p3 is None:
            return None
        return p1, p2, p3

    def _complete_triangle(self, p1: Point, p2: Point) -> Optional[Point]:
        """Point left of p1->p2 minimizing ``delaunay_distance``, or None."""
        pts = self._points
        ex, ey = p2[0] - p1[0], p2[1] - p1[1]
        det = ex * (pts[:, 1] - p1[1]) - ey * (pts[:, 0] - p1[0])
        left = np.flatnonzero(det > self.tolerances.eps_determinant)
        if left.size == 0:
            return None

        dist = delaunay_distances(p1, p2, pts[left], self.tolerances.eps_determinant)
        best = int(np.argmin(dist))
        lowest = dist[best]
        if math.isfinite(lowest):
            tol = self.tolerances.eps_distance * max(1.0, abs(lowest))
            tied = np.flatnonzero(dist <= lowest + tol)
            if tied.size > 1:
                # co-circular candidates: reuse one already joined to the edge
                for k in tied:
                    cand = self._point(left[k])
                    if (p1, cand) in self._frontier or (cand, p2) in self._frontier:
                        best = int(k)
                        break
        return self._point(left[best])

    def _expand_frontier(self, a: Point, b: Point) -> None:
        if (b, a) in self._frontier:
            # both sides of the edge are now closed
            del self._frontier[(b, a)]
        else:
            self._frontier[(a, b)] = None
