"""Central numerical tolerances for the planar algorithms.

Every coincidence or collinearity test in the package goes through one of
these thresholds so they can be tuned in one place.
"""
from __future__ import annotations

# Distance at which two points are considered equal
EPS_DISTANCE: float = 1e-8
# 2x2 matrices with an absolute determinant below this are singular
EPS_DETERMINANT: float = 1e-8

# Default length of the unbounded dual-graph rays
DEFAULT_RAY_LENGTH: float = 3.0

__all__ = [
    'EPS_DISTANCE',
    'EPS_DETERMINANT',
    'DEFAULT_RAY_LENGTH',
]
