"""Geometric primitives shared by the planar algorithms.

Points travel through the package as ``(N, 2)`` float64 arrays. Algorithms
produce flat point streams: a hull is a run of vertices, a triangulation a run
of CCW triples, a graph a run of segment endpoint pairs. The helpers at the
bottom of this module convert between those streams and structured views.
"""
from __future__ import annotations

import math
from typing import List, Optional, Tuple

import numpy as np

from .constants import EPS_DETERMINANT

Point = Tuple[float, float]

__all__ = [
    'Point', 'as_points', 'orient2d', 'circumcircle_center', 'circumcircle_centers',
    'triangle_signed_area', 'triangles_signed_areas', 'polygon_signed_area',
    'normalized', 'to_stream', 'as_triangles', 'as_segments',
]


def as_points(points) -> np.ndarray:
    """Coerce ``points`` to a contiguous ``(N, 2)`` float64 array.

    Accepts any sequence of pairs or an array; an empty sequence gives a
    ``(0, 2)`` array.
    """
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"points must have shape (N, 2), got {arr.shape}")
    return np.ascontiguousarray(arr)


def orient2d(a, b, c) -> float:
    """Twice the signed area of triangle (a, b, c); positive when CCW."""
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def circumcircle_center(a, b, c, eps: float = EPS_DETERMINANT) -> Optional[Point]:
    """Center of the circle through a, b and c.

    Returns None when the determinant of the edge vectors (b - a, c - a) is
    below ``eps`` in absolute value, i.e. the points are collinear and the
    center lies at infinity.
    """
    ux, uy = b[0] - a[0], b[1] - a[1]
    vx, vy = c[0] - a[0], c[1] - a[1]
    det = ux * vy - uy * vx
    if abs(det) < eps:
        return None
    u2 = ux * ux + uy * uy
    v2 = vx * vx + vy * vy
    d = 2.0 * det
    return (float(a[0] + (vy * u2 - uy * v2) / d),
            float(a[1] + (ux * v2 - vx * u2) / d))


def circumcircle_centers(a: np.ndarray, b, c, eps: float = EPS_DETERMINANT):
    """Vectorized circumcircle_center for an array of first vertices.

    a : (M, 2) array; b, c : single points shared by every triple.
    Returns (centers, valid) where ``centers`` is (M, 2) and ``valid`` marks the
    non-collinear triples. Centers of invalid triples are NaN.
    """
    a = np.asarray(a, dtype=np.float64)
    u = np.asarray(b, dtype=np.float64) - a
    v = np.asarray(c, dtype=np.float64) - a
    det = u[:, 0] * v[:, 1] - u[:, 1] * v[:, 0]
    valid = np.abs(det) >= eps
    u2 = np.einsum('ij,ij->i', u, u)
    v2 = np.einsum('ij,ij->i', v, v)
    centers = np.full_like(a, np.nan)
    if np.any(valid):
        d = 2.0 * det[valid]
        centers[valid, 0] = a[valid, 0] + (v[valid, 1] * u2[valid] - u[valid, 1] * v2[valid]) / d
        centers[valid, 1] = a[valid, 1] + (u[valid, 0] * v2[valid] - v[valid, 0] * u2[valid]) / d
    return centers, valid


def triangle_signed_area(a, b, c) -> float:
    return 0.5 * orient2d(a, b, c)


def triangles_signed_areas(triangles: np.ndarray) -> np.ndarray:
    """Signed areas of a (T, 3, 2) triangle array."""
    t = np.asarray(triangles, dtype=np.float64).reshape(-1, 3, 2)
    ab = t[:, 1] - t[:, 0]
    ac = t[:, 2] - t[:, 0]
    return 0.5 * (ab[:, 0] * ac[:, 1] - ab[:, 1] * ac[:, 0])


def polygon_signed_area(polygon) -> float:
    """Shoelace area; positive for a CCW boundary."""
    pts = as_points(polygon)
    if len(pts) < 3:
        return 0.0
    x, y = pts[:, 0], pts[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))


def normalized(v) -> Point:
    """Unit vector along v, or (0, 0) for a zero vector."""
    length = math.hypot(v[0], v[1])
    if length == 0.0:
        return (0.0, 0.0)
    return (v[0] / length, v[1] / length)


def to_stream(points: List[Point], out: Optional[list] = None):
    """Finish an algorithm call: turn collected points into its output.

    With ``out`` given, the points are appended to it as ``(x, y)`` tuples and
    ``out`` is returned; otherwise a fresh (M, 2) float64 array is returned.
    """
    if out is not None:
        out.extend((float(x), float(y)) for x, y in points)
        return out
    if not points:
        return np.empty((0, 2), dtype=np.float64)
    return np.asarray(points, dtype=np.float64)


def as_triangles(stream) -> np.ndarray:
    """View a flat triangle stream as a (T, 3, 2) array (incomplete tail dropped)."""
    pts = as_points(stream)
    n = (len(pts) // 3) * 3
    return pts[:n].reshape(-1, 3, 2)


def as_segments(stream) -> np.ndarray:
    """View a flat segment stream as an (E, 2, 2) array (incomplete tail dropped)."""
    pts = as_points(stream)
    n = (len(pts) // 2) * 2
    return pts[:n].reshape(-1, 2, 2)
