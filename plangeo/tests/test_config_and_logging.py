"""Tests for configuration defaults and the package logger setup."""
import logging

import plangeo
from plangeo.core.config import DualGraphConfig, GeometryConfig, ToleranceConfig
from plangeo.core.constants import DEFAULT_RAY_LENGTH, EPS_DETERMINANT, EPS_DISTANCE
from plangeo.core.convex_hull import GrahamScanConvexHull
from plangeo.core.logging_utils import configure_logging, get_logger


def test_config_defaults_follow_constants():
    cfg = GeometryConfig()
    assert cfg.tolerances == ToleranceConfig(EPS_DISTANCE, EPS_DETERMINANT)
    assert cfg.dual_graph == DualGraphConfig(DEFAULT_RAY_LENGTH)


def test_coarse_tolerance_merges_near_points():
    """A larger eps_distance treats near points as the pivot itself."""
    pts = [(0.0, 0.0), (0.01, 0.0), (1.0, 1.0), (-1.0, 1.0)]
    fine = GrahamScanConvexHull()(pts)
    coarse = GrahamScanConvexHull(ToleranceConfig(eps_distance=0.1))(pts)
    assert len(fine) == 4
    assert len(coarse) == 3


def test_package_logger_is_isolated():
    log = get_logger('plangeo.test')
    assert log.name == 'plangeo.test'
    pkg = logging.getLogger('plangeo')
    assert pkg.propagate is False
    streams = [h for h in pkg.handlers if isinstance(h, logging.StreamHandler)]
    assert len(streams) == 1


def test_configure_logging_sets_package_level():
    pkg = logging.getLogger('plangeo')
    previous = pkg.level
    try:
        configure_logging('DEBUG')
        assert pkg.level == logging.DEBUG
        configure_logging('not-a-level')
        assert pkg.level == logging.INFO
    finally:
        pkg.setLevel(previous)


def test_debug_summary_is_logged(caplog):
    pkg = logging.getLogger('plangeo')
    pkg.addHandler(caplog.handler)
    previous = pkg.level
    try:
        pkg.setLevel(logging.DEBUG)
        plangeo.graham_scan_hull([(0, 0), (1, 0), (0, 1)])
    finally:
        pkg.setLevel(previous)
        pkg.removeHandler(caplog.handler)
    assert any('graham scan' in r.getMessage() for r in caplog.records)
