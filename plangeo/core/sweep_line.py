"""Sweep-line triangulation of an x-monotone simple polygon.

The boundary is split at its leftmost and rightmost vertices into a top and a
bottom chain, both ordered left to right. Merging the chains by x gives the
sweep order; a stack holds the vertices that still miss a diagonal.
"""
from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Deque, List, Optional, Tuple

import numpy as np

from .geometry import Point, as_points, normalized, to_stream
from .logging_utils import get_logger

logger = get_logger('plangeo.sweep_line')

__all__ = ['Chain', 'SweepLine']


class Chain(Enum):
    TOP = 'top'
    BOTTOM = 'bottom'


class SweepLine:
    """Triangulate a polygon given as an ordered boundary (either winding).

    Returns a flat stream of CCW triangles; fewer than three points give an
    empty stream. A convex n-gon yields n - 2 triangles.

    Tie conventions: the leftmost vertex is the first minimum of x, the
    rightmost the last maximum; while merging, the bottom chain goes first
    unless the top chain's next x is strictly smaller.

    The rightmost vertex belongs to the chain walked backward from the
    leftmost one. When the leftmost index is lower, the forward chain starts
    out as top; the labels are swapped if the bottom chain heads more upward.
    An empty forward chain is replaced by the edge to the rightmost vertex
    for that comparison.
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self._top: Deque[Point] = deque()
        self._bottom: Deque[Point] = deque()
        self._stack: List[Tuple[Point, Chain]] = []
        self._leftmost: Point = (0.0, 0.0)

    def __call__(self, points, out: Optional[list] = None):
        self.reset()
        pts = as_points(points)
        triangles: List[Point] = []
        if len(pts) < 3:
            return to_stream(triangles, out)

        self._split_chains(pts)

        stack = self._stack
        stack.append((self._leftmost, Chain.TOP))
        stack.append(self._next_point())

        while self._top or self._bottom:
            current, chain = self._next_point()

            if chain is stack[-1][1]:
                # clip ears against the stack until a reflex turn is met
                while len(stack) >= 2:
                    a = current
                    b = stack[-1][0]
                    c = stack[-2][0]
                    det = (b[0] - a[0]) * (c[1] - a[1]) - (c[0] - a[0]) * (b[1] - a[1])
                    if chain is Chain.BOTTOM:
                        if not det < 0.0:
                            break
                        triangles.extend((a, c, b))
                    else:
                        if not det > 0.0:
                            break
                        triangles.extend((b, c, a))
                    stack.pop()
            else:
                # the new vertex sees every stacked vertex
                for (s0, _), (s1, _) in zip(stack, stack[1:]):
                    if chain is Chain.BOTTOM:
                        triangles.extend((s0, current, s1))
                    else:
                        triangles.extend((current, s0, s1))
                del stack[:-1]

            stack.append((current, chain))

        logger.debug("sweep line: %d vertices -> %d triangles", len(pts), len(triangles) // 3)
        return to_stream(triangles, out)

    def _split_chains(self, pts: np.ndarray) -> None:
        n = len(pts)
        boundary = [(float(x), float(y)) for x, y in pts]
        xs = pts[:, 0]
        left = int(np.argmin(xs))
        right = n - 1 - int(np.argmax(xs[::-1]))
        lp = self._leftmost = boundary[left]

        def heading(p: Point) -> float:
            return normalized((p[0] - lp[0], p[1] - lp[1]))[1]

        # forward walk stops before the rightmost vertex, backward walk ends on it
        steps = (right - left) % n
        forward = deque(boundary[(left + k) % n] for k in range(1, steps))
        backward = deque(boundary[(left - k) % n] for k in range(1, n - steps + 1))
        if left < right:
            top, bottom = forward, backward
        else:
            top, bottom = backward, forward

        if top and bottom:
            if heading(top[0]) < heading(bottom[0]):
                top, bottom = bottom, top
        elif heading(backward[0]) < heading(boundary[right]):
            # the edge to the rightmost vertex closes the empty forward side
            top, bottom = deque(), backward
        else:
            top, bottom = backward, deque()
        self._top, self._bottom = top, bottom

    def _next_point(self) -> Tuple[Point, Chain]:
        if not self._bottom or (self._top and self._top[0][0] < self._bottom[0][0]):
            return self._top.popleft(), Chain.TOP
        return self._bottom.popleft(), Chain.BOTTOM
