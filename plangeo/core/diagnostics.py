"""Structural checks for hull, triangulation and dual-graph outputs.

Each check returns a dictionary of counts plus offender lists; empty lists
mean the output is consistent. They operate on raw point streams so they can
validate results coming from any implementation.
"""
from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Optional

import numpy as np

from .config import ToleranceConfig
from .geometry import as_points, as_triangles, triangles_signed_areas
from .logging_utils import get_logger

logger = get_logger('plangeo.diagnostics')

__all__ = ['check_convex_hull', 'check_delaunay', 'triangle_edge_classification']


def check_convex_hull(points, hull, tolerances: Optional[ToleranceConfig] = None) -> Dict[str, Any]:
    """Validate a CCW hull polygon against its input points.

    Reports hull vertices that are not input points (``foreign_vertices``,
    hull indices) and input points strictly right of some hull edge by more
    than ``eps_determinant`` (``outside_points``, input indices). Degenerate
    hulls with fewer than three vertices are only checked for membership.
    """
    tol = tolerances or ToleranceConfig()
    pts = as_points(points)
    poly = as_points(hull)

    foreign = []
    for i, v in enumerate(poly):
        d = np.hypot(pts[:, 0] - v[0], pts[:, 1] - v[1]) if len(pts) else np.empty(0)
        if d.size == 0 or d.min() > tol.eps_distance:
            foreign.append(i)

    outside = []
    if len(poly) >= 3 and len(pts):
        a = poly
        b = np.roll(poly, -1, axis=0)
        e = b - a
        # (E, N) orientation of every point against every hull edge
        cross = (e[:, 0, None] * (pts[None, :, 1] - a[:, 1, None])
                 - e[:, 1, None] * (pts[None, :, 0] - a[:, 0, None]))
        scale = np.maximum(1.0, np.hypot(e[:, 0], e[:, 1]))[:, None]
        bad = np.any(cross < -tol.eps_determinant * scale, axis=0)
        outside = np.flatnonzero(bad).tolist()

    report = {
        'hull_vertices': int(len(poly)),
        'foreign_vertices': foreign,
        'outside_points': outside,
    }
    if foreign or outside:
        logger.debug("hull check failed: %s", report)
    return report


def check_delaunay(points, triangles, tolerances: Optional[ToleranceConfig] = None) -> Dict[str, Any]:
    """Validate orientation and the empty-circumcircle property.

    ``non_ccw`` lists triangles whose signed area is not positive;
    ``circle_violations`` lists ``(triangle, point)`` index pairs where an
    input point lies strictly inside a circumcircle, beyond a relative
    tolerance of ``eps_distance``.
    """
    tol = tolerances or ToleranceConfig()
    pts = as_points(points)
    tris = as_triangles(triangles)

    areas = triangles_signed_areas(tris)
    non_ccw = np.flatnonzero(areas <= 0.0).tolist()

    violations = []
    for t, (a, b, c) in enumerate(tris):
        ux, uy = b - a
        vx, vy = c - a
        det = ux * vy - uy * vx
        if abs(det) < tol.eps_determinant:
            continue
        u2, v2 = ux * ux + uy * uy, vx * vx + vy * vy
        cx = a[0] + (vy * u2 - uy * v2) / (2.0 * det)
        cy = a[1] + (ux * v2 - vx * u2) / (2.0 * det)
        r = np.hypot(a[0] - cx, a[1] - cy)
        d = np.hypot(pts[:, 0] - cx, pts[:, 1] - cy)
        inside = np.flatnonzero(d < r - tol.eps_distance * max(1.0, r))
        violations.extend((t, int(p)) for p in inside)

    report = {
        'triangles': int(len(tris)),
        'non_ccw': non_ccw,
        'circle_violations': violations,
    }
    if non_ccw or violations:
        logger.debug("delaunay check failed: %d non-ccw, %d circle violations",
                     len(non_ccw), len(violations))
    return report


def triangle_edge_classification(triangles) -> Dict[str, int]:
    """Count directed triangle edges matched by a reversed twin.

    Returns ``edges`` (3 per triangle), ``internal_pairs`` (adjacent triangle
    pairs) and ``hull_edges`` (edges without a twin). In a consistent CCW
    triangulation ``edges == 2 * internal_pairs + hull_edges``.
    """
    tris = as_triangles(triangles)
    directed = Counter()
    for tri in tris:
        t = [tuple(map(float, p)) for p in tri]
        for i in range(3):
            directed[(t[i], t[(i + 1) % 3])] += 1

    internal = 0
    hull = 0
    for (a, b), count in directed.items():
        twin = directed.get((b, a), 0)
        if twin:
            internal += min(count, twin)
        else:
            hull += count
    # every internal pair was counted from both sides
    return {
        'edges': int(3 * len(tris)),
        'internal_pairs': internal // 2,
        'hull_edges': hull,
    }
