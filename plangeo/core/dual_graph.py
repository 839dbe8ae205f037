"""Circumcenter graph of a triangulation (Voronoi skeleton approximation).

Every triangle contributes its circumcenter as a graph vertex. Triangles that
share an edge are joined by a dual edge; triangle edges without a neighbour
get an unbounded ray, cut at ``ray_length`` and pointing away from the
triangle.
"""
from __future__ import annotations

import math
from typing import Dict, List, Optional, Tuple

from .config import DualGraphConfig, ToleranceConfig
from .geometry import Point, as_points, circumcircle_center, to_stream
from .logging_utils import get_logger

logger = get_logger('plangeo.dual_graph')

Triangle = Tuple[Point, Point, Point]

__all__ = ['DualGraph', 'find_adjacency']


def find_adjacency(t1: Triangle, t2: Triangle) -> Optional[Tuple[int, int]]:
    """Local edge indices (k, l) such that edge k of t1 is edge l of t2 reversed.

    Edge ``i`` of a triangle runs from vertex ``i`` to vertex ``(i + 1) % 3``.
    Both triangles must share the same orientation for this to match.
    """
    for k in range(3):
        e1 = (t1[k], t1[(k + 1) % 3])
        for l in range(3):
            if e1 == (t2[(l + 1) % 3], t2[l]):
                return k, l
    return None


class DualGraph:
    """Extract the dual graph of a flat CCW triangle stream.

    The output is a flat segment stream: first the internal dual edges
    (one per adjacent triangle pair), then one ray per hull edge.

    Parameters
    ----------
    ray_length : float, optional
        Length of the rays emitted for unmatched triangle edges. Defaults to
        ``config.ray_length``.
    config : DualGraphConfig, optional
    tolerances : ToleranceConfig, optional
    """

    def __init__(self, ray_length: Optional[float] = None,
                 config: Optional[DualGraphConfig] = None,
                 tolerances: Optional[ToleranceConfig] = None):
        cfg = config or DualGraphConfig()
        self.ray_length = float(cfg.ray_length if ray_length is None else ray_length)
        if not self.ray_length > 0.0:
            raise ValueError(f"ray_length must be positive, got {self.ray_length}")
        self.tolerances = tolerances or ToleranceConfig()
        self.reset()

    def reset(self) -> None:
        self._triangles: List[Triangle] = []
        self._centers: List[Point] = []
        self._hull_edges: List[bool] = []
        self.last_stats: Dict[str, int] = {}

    def __call__(self, triangles, out: Optional[list] = None):
        self.reset()
        pts = as_points(triangles)
        # a trailing partial triple is ignored
        for i in range(0, len(pts) - len(pts) % 3, 3):
            a, b, c = (tuple(float(v) for v in pts[i + j]) for j in range(3))
            self._triangles.append((a, b, c))

        degenerate = 0
        for a, b, c in self._triangles:
            center = circumcircle_center(a, b, c, self.tolerances.eps_determinant)
            if center is None:
                # collinear triangle: fall back to its centroid
                degenerate += 1
                center = ((a[0] + b[0] + c[0]) / 3.0, (a[1] + b[1] + c[1]) / 3.0)
            self._centers.append(center)
        if degenerate:
            logger.debug("dual graph: %d degenerate triangles use centroids", degenerate)

        segments: List[Point] = []
        internal = self._link_adjacent(segments)
        rays = self._emit_rays(segments)

        self.last_stats = {
            'triangles': len(self._triangles),
            'internal_edges': internal,
            'rays': rays,
            'degenerate_triangles': degenerate,
        }
        logger.debug("dual graph: %d triangles -> %d edges, %d rays",
                     len(self._triangles), internal, rays)
        return to_stream(segments, out)

    def _link_adjacent(self, segments: List[Point]) -> int:
        tris = self._triangles
        self._hull_edges = [True] * (3 * len(tris))
        count = 0
        for i, t1 in enumerate(tris):
            for j in range(i + 1, len(tris)):
                adj = find_adjacency(t1, tris[j])
                if adj is None:
                    continue
                k, l = adj
                segments.append(self._centers[i])
                segments.append(self._centers[j])
                self._hull_edges[3 * i + k] = False
                self._hull_edges[3 * j + l] = False
                count += 1
        return count

    def _emit_rays(self, segments: List[Point]) -> int:
        eps = self.tolerances.eps_distance
        count = 0
        for i, tri in enumerate(self._triangles):
            for j in range(3):
                if not self._hull_edges[3 * i + j]:
                    continue
                p1, p2 = tri[j], tri[(j + 1) % 3]
                vx, vy = p2[0] - p1[0], p2[1] - p1[1]
                length = math.hypot(vx, vy)
                if length <= eps:
                    continue
                # rotating the CCW edge by -pi/2 points out of the triangle
                nx, ny = vy / length, -vx / length
                sx, sy = self._centers[i]
                segments.append((sx, sy))
                segments.append((sx + self.ray_length * nx, sy + self.ray_length * ny))
                count += 1
        return count
