"""Public package API for the plangeo planar geometry library.

This facade provides a flat import surface on top of the implementation
package ``plangeo.core``.

Example
-------
    from plangeo import Delaunay, DualGraph, as_segments

    triangles = Delaunay()(points)
    edges = as_segments(DualGraph(ray_length=2.0)(triangles))

Every algorithm is a callable object taking an ``(N, 2)`` point array (or any
sequence of pairs) and returning a flat ``(M, 2)`` float64 point stream. The
function shortcuts below build a fresh instance per call.
"""
from importlib import import_module as _imp
import logging as _logging

try:
    from importlib.metadata import version as _pkg_version, PackageNotFoundError as _NotFound
    __version__ = _pkg_version("plangeo")
except _NotFound:  # pragma: no cover - source checkout without install
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

_const = _imp('plangeo.core.constants')
_config = _imp('plangeo.core.config')
_geom = _imp('plangeo.core.geometry')
_hull = _imp('plangeo.core.convex_hull')
_kd = _imp('plangeo.core.kd_tree')
_delaunay = _imp('plangeo.core.delaunay')
_dual = _imp('plangeo.core.dual_graph')
_sweep = _imp('plangeo.core.sweep_line')
_diag = _imp('plangeo.core.diagnostics')
_log = _imp('plangeo.core.logging_utils')

# Tolerances
EPS_DISTANCE = _const.EPS_DISTANCE
EPS_DETERMINANT = _const.EPS_DETERMINANT

# Configuration
ToleranceConfig = _config.ToleranceConfig
DualGraphConfig = _config.DualGraphConfig
GeometryConfig = _config.GeometryConfig

# Geometry primitives and stream helpers
circumcircle_center = _geom.circumcircle_center
orient2d = _geom.orient2d
polygon_signed_area = _geom.polygon_signed_area
as_points = _geom.as_points
as_triangles = _geom.as_triangles
as_segments = _geom.as_segments

# Algorithms
GiftWrappingConvexHull = _hull.GiftWrappingConvexHull
GrahamScanConvexHull = _hull.GrahamScanConvexHull
KDTree = _kd.KDTree
NodeRef = _kd.NodeRef
NodeKind = _kd.NodeKind
BuildKDTree = _kd.BuildKDTree
partition_segments = _kd.partition_segments
Delaunay = _delaunay.Delaunay
delaunay_distance = _delaunay.delaunay_distance
DualGraph = _dual.DualGraph
SweepLine = _sweep.SweepLine

configure_logging = _log.configure_logging


def gift_wrapping_hull(points, out=None, **kwargs):
    return GiftWrappingConvexHull(**kwargs)(points, out)


def graham_scan_hull(points, out=None, **kwargs):
    return GrahamScanConvexHull(**kwargs)(points, out)


def delaunay_triangulation(points, out=None, **kwargs):
    return Delaunay(**kwargs)(points, out)


def dual_graph(triangles, ray_length=None, out=None, **kwargs):
    return DualGraph(ray_length, **kwargs)(triangles, out)


def sweep_line_triangulation(polygon, out=None):
    return SweepLine()(polygon, out)


def build_kd_tree(points, dim=2):
    """Build and return a fresh ``KDTree`` over ``points``."""
    return BuildKDTree()(points, KDTree(dim))


# Namespace submodules
# dual_graph names the function shortcut; the module is dual_graph_module
constants = _const
config = _config
geometry = _geom
convex_hull = _hull
kd_tree = _kd
delaunay = _delaunay
sweep_line = _sweep
dual_graph_module = _dual
diagnostics = _diag

__all__ = [
    '__version__',
    # tolerances / configuration
    'EPS_DISTANCE', 'EPS_DETERMINANT', 'ToleranceConfig', 'DualGraphConfig', 'GeometryConfig',
    # primitives
    'circumcircle_center', 'orient2d', 'polygon_signed_area',
    'as_points', 'as_triangles', 'as_segments',
    # algorithms
    'GiftWrappingConvexHull', 'GrahamScanConvexHull',
    'KDTree', 'NodeRef', 'NodeKind', 'BuildKDTree', 'partition_segments',
    'Delaunay', 'delaunay_distance', 'DualGraph', 'SweepLine',
    # function shortcuts
    'gift_wrapping_hull', 'graham_scan_hull', 'delaunay_triangulation', 'dual_graph',
    'sweep_line_triangulation', 'build_kd_tree',
    # logging
    'configure_logging',
    # submodules
    'constants', 'config', 'geometry', 'convex_hull', 'kd_tree', 'delaunay',
    'sweep_line', 'dual_graph_module', 'diagnostics',
]
