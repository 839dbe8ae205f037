"""Planar convex hulls: Jarvis march (gift wrapping) and Graham scan.

Both algorithms return the hull as a CCW run of input vertices. The gift
wrapping walk starts at the point of maximum y, the Graham scan at the point
of minimum y; ties go to the first occurrence in the input.
"""
from __future__ import annotations

from typing import List, Optional

import numpy as np

from .config import ToleranceConfig
from .geometry import Point, as_points, orient2d, to_stream
from .logging_utils import get_logger

logger = get_logger('plangeo.convex_hull')

__all__ = ['GiftWrappingConvexHull', 'GrahamScanConvexHull']


class GiftWrappingConvexHull:
    """Jarvis march, O(n*h) for h hull vertices.

    From the current vertex the next one is the candidate whose direction
    makes the smallest unsigned angle with the previous edge. Candidates
    closer than ``eps_distance`` to the current vertex cannot be chosen.

    Like every algorithm in the package it is a callable with a ``reset()``
    method; this one keeps no scratch state, so ``reset()`` does nothing.

    Example:
        >>> hull = GiftWrappingConvexHull()
        >>> hull([(0, 0), (4, 0), (4, 4), (0, 4), (2, 2)]).tolist()
        [[4.0, 4.0], [0.0, 4.0], [0.0, 0.0], [4.0, 0.0]]
    """

    def __init__(self, tolerances: Optional[ToleranceConfig] = None):
        self.tolerances = tolerances or ToleranceConfig()

    def __call__(self, points, out: Optional[list] = None):
        pts = as_points(points)
        n = len(pts)
        hull: List[Point] = []
        if n == 0:
            return to_stream(hull, out)

        eps = self.tolerances.eps_distance
        start = int(np.argmax(pts[:, 1]))
        curr = start
        # Walking left from the top vertex keeps the turn counter-clockwise
        last_dir = np.array([-1.0, 0.0])

        for _ in range(n):
            hull.append((float(pts[curr, 0]), float(pts[curr, 1])))

            dirs = pts - pts[curr]
            lengths = np.hypot(dirs[:, 0], dirs[:, 1])
            usable = lengths >= eps
            if not np.any(usable):
                # every point is packed within eps of the current one
                break

            angles = np.full(n, np.inf)
            d = dirs[usable]
            cross = last_dir[0] * d[:, 1] - last_dir[1] * d[:, 0]
            dot = last_dir[0] * d[:, 0] + last_dir[1] * d[:, 1]
            angles[usable] = np.abs(np.arctan2(cross, dot))

            nxt = int(np.argmin(angles))
            last_dir = dirs[nxt] / lengths[nxt]
            curr = nxt
            if curr == start:
                break
        else:
            logger.warning("gift wrapping did not return to its start after %d steps; "
                           "hull truncated", n)

        logger.debug("gift wrapping: %d points -> %d hull vertices", n, len(hull))
        return to_stream(hull, out)

    def reset(self) -> None:
        """No scratch state is kept between calls."""


class GrahamScanConvexHull:
    """Graham scan, O(n log n).

    The points are sorted by polar angle around the lowest point. Since that
    angle lies in [0, pi], sorting by the descending x-component of the unit
    direction is equivalent and avoids trigonometry.
    """

    def __init__(self, tolerances: Optional[ToleranceConfig] = None):
        self.tolerances = tolerances or ToleranceConfig()
        self._stack: List[Point] = []

    def reset(self) -> None:
        self._stack = []

    def __call__(self, points, out: Optional[list] = None):
        self.reset()
        pts = as_points(points)
        n = len(pts)
        if n == 0:
            return to_stream([], out)

        pivot_idx = int(np.argmin(pts[:, 1]))
        pivot = (float(pts[pivot_idx, 0]), float(pts[pivot_idx, 1]))

        rest = np.delete(pts, pivot_idx, axis=0)
        dirs = rest - np.asarray(pivot)
        lengths = np.hypot(dirs[:, 0], dirs[:, 1])
        # The angle around the pivot is undefined for coincident points
        keep = lengths >= self.tolerances.eps_distance
        rest, dirs, lengths = rest[keep], dirs[keep], lengths[keep]

        order = np.argsort(-(dirs[:, 0] / lengths), kind='stable')
        sequence = [pivot]
        sequence.extend((float(x), float(y)) for x, y in rest[order])
        # The repeated pivot flushes right turns left at the end of the sweep
        sequence.append(pivot)

        stack = self._stack
        for point in sequence:
            stack.append(point)
            while len(stack) >= 3 and orient2d(stack[-3], stack[-2], stack[-1]) < 0:
                del stack[-2]
        stack.pop()

        logger.debug("graham scan: %d points -> %d hull vertices", n, len(stack))
        return to_stream(stack, out)
